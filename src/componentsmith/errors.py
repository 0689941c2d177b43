"""Error taxonomy and provider-error classification.

XML failures are split in two so callers can tell syntax from
semantics: ``ParseError`` (not well-formed) and ``ValidationError``
(well-formed but rejected by a caller-supplied schema).

Provider failures are classified by category to enable:
- Structured logging (which errors are transient vs permanent)
- Informative user messages (timeout vs auth vs server)
- Retry decisions in the generation layer
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from componentsmith.markup.schemas import XMLElement


class ComponentSmithError(Exception):
    """Base class for all domain errors."""


class ParseError(ComponentSmithError):
    """Input is not well-formed XML."""

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class ValidationError(ComponentSmithError):
    """Well-formed XML that does not satisfy the supplied schema.

    The parse itself succeeded, so the tree is kept on the error.
    """

    def __init__(
        self,
        message: str,
        *,
        element: XMLElement,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.element = element
        self.details = details or []


class ProviderNotFoundError(ComponentSmithError):
    """Requested code generation provider is not registered."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"Provider {provider} not found")
        self.provider = provider


class ErrorClass(Enum):
    TRANSIENT = "transient"  # 429, network errors: retryable
    SERVER = "server"  # 500, 502, 503: retryable
    TIMEOUT = "timeout"  # deadline exceeded: retryable with backoff
    CLIENT = "client"  # 400, 401, 403: do NOT retry
    UNKNOWN = "unknown"  # unclassified: do NOT retry


class GenerationError(ComponentSmithError):
    """A code generation provider failed to produce an answer."""

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        error_class: ErrorClass = ErrorClass.UNKNOWN,
    ) -> None:
        super().__init__(message)
        self.provider = provider
        self.error_class = error_class


def classify_error(error: BaseException) -> ErrorClass:
    """Classify a provider error to determine handling strategy.

    Checks structured attributes first (status_code), falls back
    to string matching for untyped exceptions.
    """
    if isinstance(error, GenerationError):
        return error.error_class

    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int):
        if status_code == 429:
            return ErrorClass.TRANSIENT
        if 400 <= status_code < 500:
            return ErrorClass.CLIENT
        if 500 <= status_code < 600:
            return ErrorClass.SERVER

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorClass.TIMEOUT

    msg = str(error).lower()

    if "timeout" in msg or "timed out" in msg:
        return ErrorClass.TIMEOUT
    if "429" in msg or "rate limit" in msg or "rate_limit" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("500", "502", "503", "504")):
        return ErrorClass.SERVER
    if "econnrefused" in msg or "connection" in msg:
        return ErrorClass.TRANSIENT
    if any(code in msg for code in ("400", "401", "403", "404")):
        return ErrorClass.CLIENT

    return ErrorClass.UNKNOWN


_RETRYABLE = frozenset({
    ErrorClass.TRANSIENT,
    ErrorClass.SERVER,
    ErrorClass.TIMEOUT,
})


def is_retryable(error: BaseException) -> bool:
    """Return True if the error category supports retry."""
    return classify_error(error) in _RETRYABLE
