"""Pydantic models for the extraction data flow."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from componentsmith.constants import (
    DEFAULT_LANGUAGE,
    ContentType,
    FileNodeType,
)


class FencedBlock(BaseModel):
    """A fenced region located in a text, before classification.

    ``start``/``end`` are character offsets of the whole fence
    (opening line through closing line) in the source text.
    """

    model_config = ConfigDict(frozen=True)

    code: str
    language: str | None = None
    filename: str | None = None
    project_path: str | None = None
    declared_type: str | None = None
    start: int = 0
    end: int = 0


class CodeBlock(BaseModel):
    """A classified code block, ready for presentation."""

    model_config = ConfigDict(frozen=True)

    code: str
    language: str = DEFAULT_LANGUAGE
    filename: str | None = None
    project_path: str | None = None
    type: ContentType = ContentType.CODE
    highlighted: str | None = None


class FileNode(BaseModel):
    """Directory or file in a tree derived from block filenames."""

    type: FileNodeType
    name: str
    path: str
    language: str | None = None
    children: list[FileNode] = Field(
        default_factory=lambda: list[FileNode]()
    )


class ParsedResponse(BaseModel):
    """A whole AI answer split into narrative and typed blocks."""

    content: str
    narrative: str = ""
    explanation: str = ""
    code_blocks: list[CodeBlock] = Field(
        default_factory=lambda: list[CodeBlock]()
    )
    components: list[str] = Field(
        default_factory=lambda: list[str]()
    )
    unsafe: bool = False
