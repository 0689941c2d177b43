"""Generated component ORM model, one row per successful prompt answer."""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from componentsmith.models.base import Base


class GeneratedComponent(Base):
    __tablename__ = "generated_components"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: uuid.uuid4().hex
    )
    prompt: Mapped[str] = mapped_column(Text)
    code: Mapped[str] = mapped_column(Text)
    language: Mapped[str] = mapped_column(String(50))
    provider: Mapped[str] = mapped_column(String(50))
    explanation: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "prompt": self.prompt,
            "code": self.code,
            "language": self.language,
            "provider": self.provider,
            "explanation": self.explanation,
            "created_at": self.created_at.isoformat(),
        }
