"""SQL implementation of ComponentRepository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from componentsmith.constants import RECENT_COMPONENTS_LIMIT
from componentsmith.models.component import GeneratedComponent


class SqlComponentRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(
        self, component: GeneratedComponent
    ) -> GeneratedComponent:
        self._session.add(component)
        await self._session.flush()
        return component

    async def recent(
        self, limit: int = RECENT_COMPONENTS_LIMIT
    ) -> list[GeneratedComponent]:
        result = await self._session.execute(
            select(GeneratedComponent)
            .order_by(GeneratedComponent.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
