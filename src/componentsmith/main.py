"""FastAPI application with lifespan startup."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Phase 1: Singleton logging, MUST be before any componentsmith imports
# (they transitively import litellm which reads LITELLM_LOG at import time)
from componentsmith.logging_config import setup_logging

setup_logging()

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

from componentsmith import __version__  # noqa: E402
from componentsmith.api.app_state import AppState  # noqa: E402
from componentsmith.api.middleware.auth import ApiKeyMiddleware  # noqa: E402
from componentsmith.api.routes import (  # noqa: E402
    extraction,
    generation,
    health,
    versions,
    xml,
)
from componentsmith.config import Settings, create_app_engine  # noqa: E402
from componentsmith.generation.llm import build_generators  # noqa: E402
from componentsmith.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
)
from componentsmith.models.base import Base  # noqa: E402
from componentsmith.prompts import load_system_prompt  # noqa: E402

# Phase 2: Now that all imports (including litellm) are done,
# clear litellm's duplicate handlers.
cleanup_third_party_handlers()

_logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = _settings

    if settings.database_url.startswith("sqlite:///"):
        settings.data_dir.mkdir(parents=True, exist_ok=True)
    engine = create_app_engine(
        settings.database_url, echo=settings.debug_mode
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    generators = build_generators(settings)

    app.state.settings = settings
    app.state.engine = engine
    app.state.typed = AppState(
        settings=settings,
        session_factory=session_factory,
        generators=dict(generators),
        system_prompt=load_system_prompt(settings.system_prompt_path),
    )
    _logger.info(
        "event=startup providers=%s", ",".join(generators) or "none"
    )

    if not settings.api_key:
        _logger.warning(
            "event=no_api_key action=generation_and_storage_public"
        )

    yield

    await engine.dispose()


app = FastAPI(
    title="componentsmith",
    description=(
        "Prompt and XML to React component generation --"
        " with typed extraction of AI-generated code"
    ),
    version=__version__,
    openapi_url="/api/openapi.json",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan,
)

# Starlette LIFO: CORS is added last so it runs first and answers
# preflight before ApiKeyMiddleware can reject it.
_settings = Settings()
_cors_origins = [
    o.strip()
    for o in _settings.cors_origins.split(",")
    if o.strip()
]

app.add_middleware(ApiKeyMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-API-Key"],
    allow_credentials=False,
)

app.include_router(health.router)
app.include_router(extraction.router)
app.include_router(xml.router)
app.include_router(generation.router)
app.include_router(versions.router)
