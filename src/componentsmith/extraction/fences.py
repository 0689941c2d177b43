"""Locate triple-backtick fenced regions in free-form text."""

from __future__ import annotations

import logging
import re

from componentsmith.extraction.schemas import FencedBlock

logger = logging.getLogger(__name__)

# Opening line: ``` + optional info string. Closing line: bare ```.
_OPENING_RE = re.compile(r"^[ \t]*```(?P<info>[^`\r\n]*)$")
_CLOSING_RE = re.compile(r"^[ \t]*```[ \t]*$")

# key="value" pairs in the info string (project=, file=, type=)
_ATTR_RE = re.compile(r'([A-Za-z_][\w-]*)="([^"]*)"')
_LANGUAGE_TOKEN_RE = re.compile(r"[\w#+-]+")
_FILENAME_TOKEN_RE = re.compile(r"[\w@~./\\-]*\.\w+")


def find_fenced_blocks(text: str) -> list[FencedBlock]:
    """Return every terminated fenced block in document order.

    An opening fence without a matching closing line is skipped and
    scanning resumes on the line after it, so one malformed fence
    never hides the well-formed blocks that follow.
    """
    if not text:
        return []

    lines = text.splitlines(keepends=True)
    offsets: list[int] = []
    pos = 0
    for line in lines:
        offsets.append(pos)
        pos += len(line)

    blocks: list[FencedBlock] = []
    i = 0
    while i < len(lines):
        opening = _OPENING_RE.match(lines[i].rstrip("\r\n"))
        if opening is None or not lines[i].endswith(("\n", "\r")):
            i += 1
            continue

        close = _find_closing(lines, i + 1)
        if close is None:
            logger.debug(
                "event=unterminated_fence offset=%d", offsets[i]
            )
            i += 1
            continue

        info = _parse_info(opening.group("info"))
        body = "".join(lines[i + 1 : close]).strip()
        blocks.append(
            FencedBlock(
                code=body,
                language=info.get("language"),
                filename=info.get("filename"),
                project_path=info.get("project"),
                declared_type=info.get("type"),
                start=offsets[i],
                end=offsets[close] + len(lines[close]),
            )
        )
        i = close + 1

    return blocks


def _find_closing(lines: list[str], start: int) -> int | None:
    for j in range(start, len(lines)):
        if _CLOSING_RE.match(lines[j].rstrip("\r\n")):
            return j
    return None


def _parse_info(info: str) -> dict[str, str]:
    """Split a fence info string into language/filename/metadata.

    Accepted shapes::

        tsx
        tsx src/App.tsx
        src/App.tsx
        tsx project="shop" file="src/Cart.tsx" type="react"
    """
    result: dict[str, str] = {}
    for key, value in _ATTR_RE.findall(info):
        key = key.lower()
        if key in ("file", "filename"):
            result["filename"] = value
        elif key in ("project", "type"):
            result[key] = value

    tokens = _ATTR_RE.sub(" ", info).split()
    if tokens and not _is_filename(tokens[0]):
        if _LANGUAGE_TOKEN_RE.fullmatch(tokens[0]):
            result["language"] = tokens[0]
        tokens = tokens[1:]
    if tokens and "filename" not in result and _is_filename(tokens[0]):
        result["filename"] = tokens[0]
    return result


def _is_filename(token: str) -> bool:
    return _FILENAME_TOKEN_RE.fullmatch(token) is not None


def strip_fences(text: str) -> str:
    """Return the narrative text with every fenced block removed."""
    pieces: list[str] = []
    cursor = 0
    for block in find_fenced_blocks(text):
        pieces.append(text[cursor : block.start])
        cursor = block.end
    pieces.append(text[cursor:])
    return "".join(pieces).strip()


def extract_code_snippets(text: str) -> list[str]:
    """Return only the trimmed bodies of every fenced block."""
    return [block.code for block in find_fenced_blocks(text)]
