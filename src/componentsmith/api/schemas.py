"""Request/response schemas for the HTTP API."""

from typing import Any

from pydantic import BaseModel, Field

from componentsmith.generation.schemas import GenerationOptions


class APIResponse(BaseModel):
    """Standard response envelope for all API endpoints."""

    success: bool
    data: Any | None = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class TextRequest(BaseModel):
    """Body for endpoints that take a block of AI output."""

    text: str = Field(max_length=200_000)
    highlight: bool = False


class ClassifyRequest(BaseModel):
    """Body for POST /api/classify."""

    code: str = Field(max_length=200_000)
    language: str | None = None
    filename: str | None = None
    svg_first: bool = False


class XMLRequest(BaseModel):
    """Body for the XML endpoints."""

    xml: str = Field(min_length=1, max_length=200_000)


class MarkupRequest(BaseModel):
    """Body for POST /api/xml/from-component."""

    markup: str = Field(max_length=200_000)


class GenerateRequest(BaseModel):
    """Body for POST /api/generate."""

    prompt: str = Field(min_length=1, max_length=10_000)
    options: GenerationOptions = Field(default_factory=GenerationOptions)


class ConvertRequest(BaseModel):
    """Body for POST /api/xml/convert."""

    xml: str = Field(min_length=1, max_length=200_000)
    options: GenerationOptions = Field(default_factory=GenerationOptions)
