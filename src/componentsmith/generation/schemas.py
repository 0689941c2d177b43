"""Data shapes exchanged with code generation providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

from componentsmith.extraction.schemas import CodeBlock


@dataclass(frozen=True)
class GeneratedText:
    """Raw provider answer with token metadata."""

    text: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class GenerationOptions(BaseModel):
    """Per-request knobs for the component service."""

    provider: str | None = None
    include_thinking: bool = False
    language: str | None = None
    system_prompt: str | None = None


class GenerationResult(BaseModel):
    """Parsed, screened answer returned to callers."""

    code: str
    language: str
    explanation: str = ""
    thinking: list[str] = Field(default_factory=lambda: list[str]())
    code_blocks: list[CodeBlock] = Field(
        default_factory=lambda: list[CodeBlock]()
    )
    unsafe: bool = False
    prompt: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
