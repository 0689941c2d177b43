"""Turn free-form AI output into typed, classified code blocks."""

from __future__ import annotations

import logging

from componentsmith.constants import (
    PRIMARY_CODE_LANGUAGES,
    ContentType,
    FileNodeType,
)
from componentsmith.extraction.content_type import classify_content_type
from componentsmith.extraction.fences import find_fenced_blocks
from componentsmith.extraction.language import classify_language
from componentsmith.extraction.schemas import (
    CodeBlock,
    FencedBlock,
    FileNode,
    ParsedResponse,
)
from componentsmith.markup.approximate import extract_components
from componentsmith.rendering.html import render_code_html
from componentsmith.safety.screener import screen_for_unsafe_content

logger = logging.getLogger(__name__)


def to_code_block(
    fenced: FencedBlock, *, highlight: bool = False
) -> CodeBlock:
    """Classify one located fence."""
    language = classify_language(
        fenced.language, fenced.code, fenced.filename
    )
    content_type = classify_content_type(
        fenced.code,
        language_hint=fenced.language,
        filename_hint=fenced.filename,
        declared_type=fenced.declared_type,
    )
    return CodeBlock(
        code=fenced.code,
        language=language,
        filename=fenced.filename,
        project_path=fenced.project_path,
        type=content_type,
        highlighted=(
            render_code_html(fenced.code, language) if highlight else None
        ),
    )


def extract_blocks(
    text: str, *, highlight: bool = False
) -> list[CodeBlock]:
    """Every fenced block in ``text`` as a classified ``CodeBlock``."""
    return [
        to_code_block(fenced, highlight=highlight)
        for fenced in find_fenced_blocks(text)
    ]


def parse_response(
    text: str, *, highlight: bool = False
) -> ParsedResponse:
    """Split an AI answer into narrative, blocks and screening verdict.

    ``explanation`` is the narrative before the first fence (the whole
    narrative when there are no fences).
    """
    fenced = find_fenced_blocks(text)
    blocks = [to_code_block(f, highlight=highlight) for f in fenced]

    pieces: list[str] = []
    cursor = 0
    for f in fenced:
        pieces.append(text[cursor : f.start])
        cursor = f.end
    pieces.append(text[cursor:])
    narrative = "".join(pieces).strip()
    explanation = (
        text[: fenced[0].start].strip() if fenced else narrative
    )

    unsafe = screen_for_unsafe_content(narrative, blocks)
    logger.debug(
        "event=response_parsed blocks=%d unsafe=%s",
        len(blocks),
        unsafe,
    )
    return ParsedResponse(
        content=text,
        narrative=narrative,
        explanation=explanation,
        code_blocks=blocks,
        components=extract_components(text),
        unsafe=unsafe,
    )


def primary_code(blocks: list[CodeBlock], text: str) -> str:
    """Headline code of an answer.

    First React/TypeScript block, else the first block, else the raw
    text trimmed.
    """
    for block in blocks:
        if (
            block.type == ContentType.REACT
            or block.language in PRIMARY_CODE_LANGUAGES
        ):
            return block.code
    if blocks:
        return blocks[0].code
    return text.strip()


def extract_file_structure(blocks: list[CodeBlock]) -> list[FileNode]:
    """Directory tree of every block that names a file.

    Directories are created in first-seen order; files follow in
    block order inside their directory.
    """
    tree: list[FileNode] = []
    directories: dict[str, FileNode] = {}

    for block in blocks:
        if not block.filename:
            continue
        parts = [p for p in block.filename.replace("\\", "/").split("/") if p]
        if not parts:
            continue

        siblings = tree
        current = ""
        for name in parts[:-1]:
            current = f"{current}/{name}" if current else name
            node = directories.get(current)
            if node is None:
                node = FileNode(
                    type=FileNodeType.DIRECTORY, name=name, path=current
                )
                directories[current] = node
                siblings.append(node)
            siblings = node.children

        siblings.append(
            FileNode(
                type=FileNodeType.FILE,
                name=parts[-1],
                path=block.filename,
                language=block.language,
            )
        )

    return tree
