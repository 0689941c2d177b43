"""FastAPI dependency injection for the component service."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from componentsmith.api.app_state import AppState
from componentsmith.repositories.component_repo import SqlComponentRepository
from componentsmith.repositories.version_repo import SqlVersionRepository
from componentsmith.services.component_service import ComponentService


def get_app_state(request: Request) -> AppState:
    return request.app.state.typed


async def get_component_service(
    request: Request,
) -> AsyncIterator[ComponentService]:
    """Generator dependency; session lives for the entire request.

    Writes are committed after the route returns; an exception in the
    route skips the commit and the session rolls back on close.
    """
    state = get_app_state(request)
    async with state.session_factory() as session:
        yield ComponentService(
            state.generators,
            SqlVersionRepository(session),
            state.settings,
            components=SqlComponentRepository(session),
            system_prompt=state.system_prompt,
        )
        await session.commit()
