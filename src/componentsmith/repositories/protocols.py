"""Protocol-based storage interfaces.

SQL implementations satisfy these protocols structurally (no
inheritance). The in-memory stores match the same signatures.
"""

from typing import Protocol

from componentsmith.models.component import GeneratedComponent
from componentsmith.models.version import ComponentVersion, VersionSummary


class VersionStore(Protocol):
    async def put(self, version: ComponentVersion) -> str: ...
    async def get(self, version_id: str) -> ComponentVersion | None: ...
    async def list(self) -> list[VersionSummary]: ...


class ComponentRepository(Protocol):
    async def save(
        self, component: GeneratedComponent
    ) -> GeneratedComponent: ...
    async def recent(self, limit: int = 10) -> list[GeneratedComponent]: ...
