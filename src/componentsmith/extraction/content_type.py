"""Classify a code block body into a semantic content type.

Classification is an explicit ordered cascade of rules; the first
rule whose predicate holds decides the result. Two orderings ship:

* ``CONTENT_RULES``: the default. The generic "any HTML tag" rule
  runs before the SVG rule, so standalone SVG documents classify as
  ``html``.
* ``SVG_FIRST_RULES``: same rules with SVG promoted above HTML, for
  callers that want ``vector-graphic`` for standalone SVG.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import PurePosixPath

from componentsmith.constants import LEGACY_CONTENT_TYPES, ContentType


@dataclass(frozen=True)
class ContentRule:
    """One step of the classification cascade."""

    name: str
    matches: Callable[[str], bool]
    result: ContentType


_ANY_TAG_RE = re.compile(r"<[a-z][\s\S]*>", re.IGNORECASE)
_SVG_NAMESPACE = 'xmlns="http://www.w3.org/2000/svg"'

_DIAGRAM_RE = re.compile(
    r"(?:graph|flowchart)\s+[A-Za-z]"
    r"|(?:sequenceDiagram|classDiagram|stateDiagram(?:-v2)?"
    r"|erDiagram|gantt|pie|journey)\b",
    re.IGNORECASE,
)

_MARKDOWN_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^#\s+", re.M),  # headers
    re.compile(r"^\s*[*-]\s+", re.M),  # bullet lists
    re.compile(r"^\d+\.\s+", re.M),  # numbered lists
    re.compile(r"^\s*>\s+", re.M),  # blockquotes
    re.compile(r"\[.+\]\(.+\)"),  # links
    re.compile(r"!\[.+\]\(.+\)"),  # images
    re.compile(r"\*\*.+\*\*"),  # bold
    re.compile(r"__.+__"),  # bold (alt)
    re.compile(r"\*.+\*"),  # italic
    re.compile(r"_.+_"),  # italic (alt)
    re.compile(r"^```[\s\S]*?```", re.M),  # fenced code
    re.compile(r"^\|.+\|.+\|", re.M),  # pipe tables
)


def _is_blank(code: str) -> bool:
    return not code


def _is_html(code: str) -> bool:
    return (
        code.lower().startswith("<!doctype html")
        or code.startswith("<html")
        or _ANY_TAG_RE.search(code) is not None
    )


def _is_svg(code: str) -> bool:
    return (
        code.startswith("<svg")
        and "</svg>" in code
        and _SVG_NAMESPACE in code
    )


def _is_diagram(code: str) -> bool:
    return _DIAGRAM_RE.match(code) is not None


def _is_markdown(code: str) -> bool:
    return any(p.search(code) for p in _MARKDOWN_PATTERNS)


_BLANK = ContentRule("blank", _is_blank, ContentType.CODE)
_HTML = ContentRule("html", _is_html, ContentType.HTML)
_SVG = ContentRule("svg", _is_svg, ContentType.VECTOR_GRAPHIC)
_DIAGRAM = ContentRule("diagram", _is_diagram, ContentType.DIAGRAM)
_MARKDOWN = ContentRule("markdown", _is_markdown, ContentType.MARKDOWN)

CONTENT_RULES: tuple[ContentRule, ...] = (
    _BLANK,
    _HTML,
    _SVG,
    _DIAGRAM,
    _MARKDOWN,
)

SVG_FIRST_RULES: tuple[ContentRule, ...] = (
    _BLANK,
    _SVG,
    _HTML,
    _DIAGRAM,
    _MARKDOWN,
)


def classify_content(
    code: object,
    rules: tuple[ContentRule, ...] = CONTENT_RULES,
) -> ContentType:
    """Run the cascade over ``code``; non-strings classify as code."""
    if not isinstance(code, str):
        return ContentType.CODE
    trimmed = code.strip()
    for rule in rules:
        if rule.matches(trimmed):
            return rule.result
    return ContentType.CODE


# Explicit tag / extension → content type, checked in this order
_HINT_TABLE: tuple[tuple[frozenset[str], frozenset[str], ContentType], ...] = (
    (
        frozenset({"jsx", "tsx", "react"}),
        frozenset({".jsx", ".tsx"}),
        ContentType.REACT,
    ),
    (frozenset({"html"}), frozenset({".html"}), ContentType.HTML),
    (
        frozenset({"md", "markdown"}),
        frozenset({".md"}),
        ContentType.MARKDOWN,
    ),
    (frozenset({"mermaid"}), frozenset(), ContentType.DIAGRAM),
    (
        frozenset({"js", "javascript", "cjs", "mjs"}),
        frozenset({".js", ".cjs", ".mjs"}),
        ContentType.SCRIPT,
    ),
)


def classify_from_hint(
    language: str | None,
    filename: str | None = None,
) -> ContentType | None:
    """Content type implied by a fence tag or filename, if recognised."""
    tag = language.strip().lower() if language else ""
    suffix = (
        PurePosixPath(filename.replace("\\", "/")).suffix.lower()
        if filename
        else ""
    )
    for tags, suffixes, result in _HINT_TABLE:
        if tag in tags or suffix in suffixes:
            return result
    return None


def coerce_declared_type(value: str | None) -> ContentType | None:
    """Parse a ``type="..."`` fence attribute, accepting legacy names."""
    if not value:
        return None
    lowered = value.strip().lower()
    if lowered in LEGACY_CONTENT_TYPES:
        return LEGACY_CONTENT_TYPES[lowered]
    try:
        return ContentType(lowered)
    except ValueError:
        return None


def classify_content_type(
    code: object,
    language_hint: str | None = None,
    filename_hint: str | None = None,
    declared_type: str | None = None,
    *,
    rules: tuple[ContentRule, ...] = CONTENT_RULES,
) -> ContentType:
    """Total classifier: declared type, then hints, then content."""
    declared = coerce_declared_type(declared_type)
    if declared is not None:
        return declared
    hinted = classify_from_hint(language_hint, filename_hint)
    if hinted is not None:
        return hinted
    return classify_content(code, rules)
