"""XML ↔ component conversion routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from componentsmith.api.dependencies import get_component_service
from componentsmith.api.schemas import (
    APIResponse,
    ConvertRequest,
    MarkupRequest,
    XMLRequest,
)
from componentsmith.errors import (
    GenerationError,
    ParseError,
    ProviderNotFoundError,
)
from componentsmith.markup.approximate import render_component_as_xml
from componentsmith.markup.parser import parse_xml
from componentsmith.markup.renderer import render_element_as_component
from componentsmith.services.component_service import ComponentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/xml", tags=["xml"])


def _parse_error(exc: ParseError) -> APIResponse:
    return APIResponse(
        success=False,
        error=str(exc),
        metadata={
            "error_type": "parse_error",
            "line": exc.line,
            "column": exc.column,
        },
    )


@router.post("/parse")
async def parse(body: XMLRequest) -> APIResponse:
    """Element tree for an XML document."""
    try:
        element = parse_xml(body.xml)
    except ParseError as exc:
        return _parse_error(exc)
    return APIResponse(
        success=True,
        data=element.to_dict(),
        metadata={"depth": element.depth()},
    )


@router.post("/render")
async def render(body: XMLRequest) -> APIResponse:
    """Component markup for an XML document, without any provider."""
    try:
        element = parse_xml(body.xml)
    except ParseError as exc:
        return _parse_error(exc)
    return APIResponse(
        success=True,
        data={"component": render_element_as_component(element)},
    )


@router.post("/from-component")
async def from_component(body: MarkupRequest) -> APIResponse:
    """Approximate XML for component markup (lossy)."""
    return APIResponse(
        success=True,
        data={"xml": render_component_as_xml(body.markup)},
        metadata={"approximate": True},
    )


@router.post("/convert")
async def convert(
    body: ConvertRequest,
    service: ComponentService = Depends(get_component_service),
) -> APIResponse:
    """Render XML, enhance it with a provider, store a version."""
    try:
        result = await service.process_xml(body.xml, body.options)
    except ParseError as exc:
        return _parse_error(exc)
    except ProviderNotFoundError as exc:
        return APIResponse(
            success=False,
            error=str(exc),
            metadata={"error_type": "provider_not_found"},
        )
    except GenerationError as exc:
        logger.error("event=convert_failed error=%s", exc)
        return APIResponse(
            success=False,
            error=f"Error processing XML: {exc}",
            metadata={
                "error_type": "generation_error",
                "error_class": exc.error_class.value,
            },
        )
    return APIResponse(success=True, data=result.model_dump())
