"""Code generation backends."""

from componentsmith.generation.protocols import CodeGenerator
from componentsmith.generation.schemas import (
    GeneratedText,
    GenerationOptions,
    GenerationResult,
)

__all__ = [
    "CodeGenerator",
    "GeneratedText",
    "GenerationOptions",
    "GenerationResult",
]
