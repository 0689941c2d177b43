"""Unsafe-pattern screening for generated content."""

from componentsmith.safety.screener import (
    UNSAFE_PATTERNS,
    UnsafeFinding,
    find_unsafe_patterns,
    screen_for_unsafe_content,
)

__all__ = [
    "UNSAFE_PATTERNS",
    "UnsafeFinding",
    "find_unsafe_patterns",
    "screen_for_unsafe_content",
]
