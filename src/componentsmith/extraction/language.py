"""Normalize fence language tags and infer a language from content."""

from __future__ import annotations

import re
from pathlib import PurePosixPath

from componentsmith.config import LANGUAGE_ALIASES
from componentsmith.constants import DEFAULT_LANGUAGE

# Ordered content signatures; first match wins. Markup detection runs
# before the braced-import rule.
LANGUAGE_SIGNATURES: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(r"""^import\s+.*\s+from\s+['"].*['"];?$""", re.M),
        "typescript",
    ),
    (
        re.compile(
            r"""^const\s+.*\s+=\s+require\(['"].*['"]\);?$""", re.M
        ),
        "javascript",
    ),
    (re.compile(r"</?[a-z][\s\S]*>", re.I), "html"),
    (
        re.compile(
            r"""^import\s+.*\s+\{.*\}\s+from\s+['"].*['"];?$""", re.M
        ),
        "typescript",
    ),
    (re.compile(r"^def\s+\w+\s*\([^)]*\):$", re.M), "python"),
    (re.compile(r"^package\s+\w+(\.\w+)*;$", re.M), "java"),
    (re.compile(r"^using\s+\w+(\.\w+)*;$", re.M), "csharp"),
    (re.compile(r"^\$\w+\s*=\s*.+;$", re.M), "php"),
    (re.compile(r"^fn\s+\w+\s*\([^)]*\)\s*->.*\{$", re.M), "rust"),
)


def normalize_language(tag: str | None) -> str:
    """Map a free-form tag to its canonical lowercase identifier.

    Unknown tags pass through lowercased; empty input yields
    ``plaintext``.
    """
    if not tag or not tag.strip():
        return DEFAULT_LANGUAGE
    lowered = tag.strip().lower()
    return LANGUAGE_ALIASES.get(lowered, lowered)


def infer_language(code: str | None) -> str | None:
    """Guess a language from content signatures, or None."""
    if not code:
        return None
    for pattern, language in LANGUAGE_SIGNATURES:
        if pattern.search(code):
            return language
    return None


def language_from_filename(filename: str | None) -> str:
    """Language for a filename based on its extension."""
    if not filename:
        return DEFAULT_LANGUAGE
    name = PurePosixPath(filename.replace("\\", "/")).name
    if name.lower() == "dockerfile":
        return "dockerfile"
    extension = name.rsplit(".", 1)[1].lower() if "." in name else ""
    if not extension:
        return DEFAULT_LANGUAGE
    return LANGUAGE_ALIASES.get(extension, extension)


def classify_language(
    tag: str | None,
    code: str | None,
    filename: str | None = None,
) -> str:
    """Canonical language for a block; never empty.

    Precedence: explicit tag, filename extension, content
    signatures, then ``plaintext``.
    """
    if tag and tag.strip():
        return normalize_language(tag)
    if filename:
        by_name = language_from_filename(filename)
        if by_name != DEFAULT_LANGUAGE:
            return by_name
    return infer_language(code) or DEFAULT_LANGUAGE
