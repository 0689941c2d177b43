"""Extraction, classification and screening routes (no provider calls)."""

from __future__ import annotations

from fastapi import APIRouter

from componentsmith.api.schemas import (
    APIResponse,
    ClassifyRequest,
    TextRequest,
)
from componentsmith.extraction.content_type import (
    CONTENT_RULES,
    SVG_FIRST_RULES,
    classify_content_type,
)
from componentsmith.extraction.language import classify_language
from componentsmith.extraction.pipeline import (
    extract_file_structure,
    parse_response,
)
from componentsmith.rendering.html import markdown_to_html
from componentsmith.safety.screener import find_unsafe_patterns

router = APIRouter(prefix="/api", tags=["extraction"])


@router.post("/extract")
async def extract(body: TextRequest) -> APIResponse:
    """Split AI output into narrative and classified code blocks."""
    parsed = parse_response(body.text, highlight=body.highlight)
    return APIResponse(
        success=True,
        data={
            **parsed.model_dump(exclude={"content"}),
            "files": [
                n.model_dump()
                for n in extract_file_structure(parsed.code_blocks)
            ],
        },
        metadata={"block_count": len(parsed.code_blocks)},
    )


@router.post("/classify")
async def classify(body: ClassifyRequest) -> APIResponse:
    """Canonical language and content type for a single snippet."""
    rules = SVG_FIRST_RULES if body.svg_first else CONTENT_RULES
    return APIResponse(
        success=True,
        data={
            "language": classify_language(
                body.language, body.code, body.filename
            ),
            "type": classify_content_type(
                body.code,
                language_hint=body.language,
                filename_hint=body.filename,
                rules=rules,
            ),
        },
    )


@router.post("/screen")
async def screen(body: TextRequest) -> APIResponse:
    """Unsafe-pattern verdict plus the individual findings."""
    parsed = parse_response(body.text)
    findings = find_unsafe_patterns(parsed.narrative, parsed.code_blocks)
    return APIResponse(
        success=True,
        data={
            "unsafe": bool(findings),
            "findings": [f.model_dump() for f in findings],
        },
    )


@router.post("/render/markdown")
async def render_markdown(body: TextRequest) -> APIResponse:
    """Markdown (with fenced code) rendered to HTML."""
    return APIResponse(success=True, data={"html": markdown_to_html(body.text)})
