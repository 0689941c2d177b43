"""Typed application state: replaces untyped getattr() access."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from componentsmith.config import Settings
from componentsmith.generation.protocols import CodeGenerator


@dataclass
class AppState:
    """Process-wide context built once in the lifespan."""

    settings: Settings
    session_factory: async_sessionmaker[AsyncSession]
    generators: dict[str, CodeGenerator]
    system_prompt: str
