"""Content extraction: fences, languages, content types, blocks."""

from __future__ import annotations

from componentsmith.constants import ContentType
from componentsmith.extraction.content_type import (
    CONTENT_RULES,
    SVG_FIRST_RULES,
    classify_content,
    classify_content_type,
    classify_from_hint,
)
from componentsmith.extraction.fences import (
    extract_code_snippets,
    find_fenced_blocks,
    strip_fences,
)
from componentsmith.extraction.language import (
    classify_language,
    infer_language,
    language_from_filename,
    normalize_language,
)
from componentsmith.extraction.schemas import (
    CodeBlock,
    FencedBlock,
    FileNode,
    ParsedResponse,
)

__all__ = [
    "CONTENT_RULES",
    "SVG_FIRST_RULES",
    "CodeBlock",
    "ContentType",
    "FencedBlock",
    "FileNode",
    "ParsedResponse",
    "classify_content",
    "classify_content_type",
    "classify_from_hint",
    "classify_language",
    "extract_blocks",
    "extract_code_snippets",
    "find_fenced_blocks",
    "infer_language",
    "language_from_filename",
    "normalize_language",
    "parse_response",
    "strip_fences",
]


def extract_blocks(
    text: str, *, highlight: bool = False
) -> list[CodeBlock]:
    """Extract and classify every fenced block in ``text``."""
    from componentsmith.extraction.pipeline import extract_blocks as _impl

    return _impl(text, highlight=highlight)


def parse_response(
    text: str, *, highlight: bool = False
) -> ParsedResponse:
    """Split an AI answer into narrative, typed blocks and verdict."""
    from componentsmith.extraction.pipeline import parse_response as _impl

    return _impl(text, highlight=highlight)
