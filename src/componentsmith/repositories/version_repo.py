"""SQL implementation of VersionStore."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from componentsmith.models.version import ComponentVersion, VersionSummary


class SqlVersionRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def put(self, version: ComponentVersion) -> str:
        self._session.add(version)
        await self._session.flush()
        return version.id

    async def get(self, version_id: str) -> ComponentVersion | None:
        return await self._session.get(ComponentVersion, version_id)

    async def list(self) -> list[VersionSummary]:
        result = await self._session.execute(
            select(ComponentVersion).order_by(ComponentVersion.created_at)
        )
        return [v.to_summary() for v in result.scalars().all()]
