"""Prompt-to-component generation routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from componentsmith.api.dependencies import get_component_service
from componentsmith.api.schemas import APIResponse, GenerateRequest
from componentsmith.errors import GenerationError, ProviderNotFoundError
from componentsmith.services.component_service import ComponentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generation"])


@router.get("/providers")
async def providers(
    service: ComponentService = Depends(get_component_service),
) -> APIResponse:
    """Registered providers and the default one."""
    return APIResponse(
        success=True,
        data={
            "providers": service.providers(),
            "current": service.current_provider,
        },
    )


@router.post("/generate")
async def generate(
    body: GenerateRequest,
    service: ComponentService = Depends(get_component_service),
) -> APIResponse:
    """Generate a component from a natural-language prompt."""
    try:
        result = await service.generate_code(body.prompt, body.options)
    except ValueError as exc:
        return APIResponse(
            success=False,
            error=str(exc),
            metadata={"error_type": "invalid_prompt"},
        )
    except ProviderNotFoundError as exc:
        return APIResponse(
            success=False,
            error=str(exc),
            metadata={"error_type": "provider_not_found"},
        )
    except GenerationError as exc:
        logger.error("event=generate_failed error=%s", exc)
        return APIResponse(
            success=False,
            error=str(exc),
            metadata={
                "error_type": "generation_error",
                "error_class": exc.error_class.value,
            },
        )
    return APIResponse(success=True, data=result.model_dump())


@router.get("/components/recent")
async def recent_components(
    service: ComponentService = Depends(get_component_service),
    limit: int = Query(default=10, ge=1, le=100),
) -> APIResponse:
    """Most recently generated components, newest first."""
    components = await service.recent_components(limit)
    return APIResponse(
        success=True, data=[c.to_dict() for c in components]
    )
