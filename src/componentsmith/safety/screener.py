"""Lexical screening for dangerous browser APIs in generated content.

This is a coarse gate, not a security boundary: it only looks for a
fixed set of call shapes in lowercased text. Obfuscated code
(string concatenation, bracket access, aliases) passes unnoticed.
Callers that execute generated code still need a real sandbox.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Patterns are matched against lowercased text.
UNSAFE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("eval", re.compile(r"eval\s*\(", re.I)),
    ("cookie_access", re.compile(r"document\.cookie", re.I)),
    ("local_storage", re.compile(r"localstorage\.", re.I)),
    ("session_storage", re.compile(r"sessionstorage\.", re.I)),
    (
        "external_window",
        re.compile(r"""window\.open\s*\(\s*['"]https?://[^'"]+['"]""", re.I),
    ),
    ("window_open", re.compile(r"window\.open", re.I)),
    (
        "function_constructor",
        # Every call shape except an anonymous ``function (...) {`` body.
        re.compile(
            r"new\s+function\s*\(|(?<![\w.$])function\s*\((?![^)]*\)\s*\{)",
            re.I,
        ),
    ),
    ("deferred_execution", re.compile(r"settimeout\s*\(", re.I)),
)


class UnsafeFinding(BaseModel):
    """One denylisted pattern found in narrative or a block."""

    pattern: str
    location: str  # "narrative" or "block[<index>]"


def _block_code(block: Any) -> str:
    if isinstance(block, str):
        return block
    if isinstance(block, Mapping):
        return str(block.get("code") or "")  # pyright: ignore[reportUnknownMemberType, reportUnknownArgumentType]
    return str(getattr(block, "code", "") or "")


def _scan(text: str) -> list[str]:
    lowered = text.lower()
    return [
        name for name, pattern in UNSAFE_PATTERNS
        if pattern.search(lowered)
    ]


def find_unsafe_patterns(
    text: str | None,
    blocks: Iterable[Any] = (),
) -> list[UnsafeFinding]:
    """Every denylisted pattern hit, per location."""
    findings = [
        UnsafeFinding(pattern=name, location="narrative")
        for name in _scan(text or "")
    ]
    for index, block in enumerate(blocks):
        findings.extend(
            UnsafeFinding(pattern=name, location=f"block[{index}]")
            for name in _scan(_block_code(block))
        )
    if findings:
        logger.info(
            "event=unsafe_content patterns=%s",
            ",".join(sorted({f.pattern for f in findings})),
        )
    return findings


def screen_for_unsafe_content(
    text: str | None,
    blocks: Iterable[Any] = (),
) -> bool:
    """True when narrative or any block body hits the denylist."""
    if _scan(text or ""):
        return True
    return any(_scan(_block_code(block)) for block in blocks)
