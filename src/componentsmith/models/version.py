"""Component version ORM model, one row per XML conversion."""

import uuid
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel
from sqlalchemy import JSON, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from componentsmith.models.base import Base


class VersionSummary(BaseModel):
    """Listing entry for the version history."""

    id: str
    created_at: datetime
    metadata: dict[str, Any]


class ComponentVersion(Base):
    __tablename__ = "component_versions"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: uuid.uuid4().hex
    )
    xml: Mapped[str] = mapped_column(Text)
    react_code: Mapped[str] = mapped_column(Text, default="")
    # "metadata" is reserved on declarative classes
    meta: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    def to_summary(self) -> VersionSummary:
        return VersionSummary(
            id=self.id,
            created_at=self.created_at,
            metadata=dict(self.meta or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "xml": self.xml,
            "react_code": self.react_code,
            "metadata": dict(self.meta or {}),
            "created_at": self.created_at.isoformat(),
        }
