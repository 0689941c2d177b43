"""Version history routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from componentsmith.api.dependencies import get_component_service
from componentsmith.api.schemas import APIResponse
from componentsmith.services.component_service import ComponentService

router = APIRouter(prefix="/api/versions", tags=["versions"])


@router.get("")
async def list_versions(
    service: ComponentService = Depends(get_component_service),
) -> APIResponse:
    versions = await service.list_versions()
    return APIResponse(
        success=True,
        data=[v.model_dump(mode="json") for v in versions],
    )


@router.get("/{version_id}")
async def get_version(
    version_id: str,
    service: ComponentService = Depends(get_component_service),
) -> APIResponse:
    version = await service.get_version(version_id)
    if version is None:
        return APIResponse(success=False, error="Version not found")
    return APIResponse(success=True, data=version.to_dict())
