"""In-memory stores: no SQLAlchemy session, no I/O.

Used by the CLI and as the default service store. Writers publish a
fresh read-only snapshot; readers iterate whichever snapshot was
current when they started, so an insert never disturbs a listing in
progress.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from types import MappingProxyType

from componentsmith.constants import ID_HEX_LENGTH, RECENT_COMPONENTS_LIMIT
from componentsmith.models.component import GeneratedComponent
from componentsmith.models.version import ComponentVersion, VersionSummary


class InMemoryVersionStore:
    """Copy-on-write dict of versions keyed by generated id."""

    def __init__(self) -> None:
        self._snapshot: Mapping[str, ComponentVersion] = MappingProxyType({})
        self._write_lock = threading.Lock()

    async def put(self, version: ComponentVersion) -> str:
        if not version.id:
            version.id = uuid.uuid4().hex[:ID_HEX_LENGTH]
        if version.created_at is None:  # pyright: ignore[reportUnnecessaryComparison]
            version.created_at = datetime.now(UTC)
        if version.meta is None:  # pyright: ignore[reportUnnecessaryComparison]
            version.meta = {}
        with self._write_lock:
            updated = dict(self._snapshot)
            updated[version.id] = version
            self._snapshot = MappingProxyType(updated)
        return version.id

    async def get(self, version_id: str) -> ComponentVersion | None:
        return self._snapshot.get(version_id)

    async def list(self) -> list[VersionSummary]:
        snapshot = self._snapshot
        return [v.to_summary() for v in snapshot.values()]


class InMemoryComponentRepository:
    """List-backed ComponentRepository."""

    def __init__(self) -> None:
        self._store: list[GeneratedComponent] = []

    async def save(
        self, component: GeneratedComponent
    ) -> GeneratedComponent:
        if not component.id:
            component.id = uuid.uuid4().hex[:ID_HEX_LENGTH]
        if component.created_at is None:  # pyright: ignore[reportUnnecessaryComparison]
            component.created_at = datetime.now(UTC)
        self._store.append(component)
        return component

    async def recent(
        self, limit: int = RECENT_COMPONENTS_LIMIT
    ) -> list[GeneratedComponent]:
        return list(reversed(self._store))[:limit]
