"""LLM prompts for component generation.

All prompt text lives here so generation code only assembles
messages.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = (
    "You are an AI assistant that helps with code and UI components."
)

THINKING_PROMPT = (
    'Think step by step about how to create a UI component for: "{prompt}". '
    "List 3-5 key considerations, potential approaches, and design "
    "decisions. Format each point as a separate line starting with a "
    "number."
)

XML_ENHANCE_PROMPT = (
    "Optimize and enhance this React component with TypeScript and "
    "Chakra UI:\n\n{component}"
)


def load_system_prompt(path: Path | None) -> str:
    """Read the system prompt from ``path``; fall back to the default."""
    if path is None:
        return DEFAULT_SYSTEM_PROMPT
    try:
        text = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        logger.warning(
            "event=system_prompt_unreadable path=%s error=%s", path, exc
        )
        return DEFAULT_SYSTEM_PROMPT
    if not text:
        return DEFAULT_SYSTEM_PROMPT
    logger.info("event=system_prompt_loaded path=%s", path)
    return text
