"""Short "thinking process" steps shown before generated code."""

from __future__ import annotations

import logging

from componentsmith.constants import (
    FALLBACK_THINKING_STEPS,
    THINKING_MAX_TOKENS,
)
from componentsmith.generation.protocols import CodeGenerator
from componentsmith.prompts import THINKING_PROMPT

logger = logging.getLogger(__name__)


async def generate_thinking(
    generator: CodeGenerator, prompt: str
) -> list[str]:
    """Non-empty lines of the provider's plan; fallback steps on error."""
    try:
        answer = await generator.generate(
            THINKING_PROMPT.format(prompt=prompt),
            max_tokens=THINKING_MAX_TOKENS,
        )
    except Exception as exc:
        logger.warning("event=thinking_fallback error=%s", exc)
        return list(FALLBACK_THINKING_STEPS)

    steps = [
        line.strip() for line in answer.text.splitlines() if line.strip()
    ]
    return steps or list(FALLBACK_THINKING_STEPS)
