"""API key gate for the generation and storage routes."""

from __future__ import annotations

import hmac
import logging

from fastapi import Request, Response
from starlette.middleware.base import (
    BaseHTTPMiddleware,
    RequestResponseEndpoint,
)
from starlette.responses import JSONResponse

from componentsmith.api.schemas import APIResponse
from componentsmith.constants import KEYED_PATHS, KEYED_PREFIXES

logger = logging.getLogger(__name__)


def requires_api_key(path: str) -> bool:
    """True for routes that spend provider calls or read stored work."""
    return path in KEYED_PATHS or path.startswith(KEYED_PREFIXES)


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """Check X-API-Key on keyed routes when ``Settings.api_key`` is set.

    The pure routes (extract, classify, screen, markdown and XML
    rendering) never call a provider, so they stay open.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if not requires_api_key(path):
            return await call_next(request)

        settings = getattr(request.app.state, "settings", None)
        if settings is None or not settings.api_key:
            return await call_next(request)

        provided = request.headers.get("X-API-Key", "")
        if hmac.compare_digest(provided, settings.api_key):
            return await call_next(request)

        logger.warning("event=api_key_rejected path=%s", path)
        body = APIResponse(
            success=False,
            error="Invalid or missing API key",
            metadata={"error_type": "unauthorized", "path": path},
        )
        return JSONResponse(status_code=401, content=body.model_dump())
