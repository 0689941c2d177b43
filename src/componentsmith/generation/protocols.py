"""Protocol for code generation backends.

The litellm implementation satisfies this structurally; test doubles
can be plain classes with the same signature.
"""

from typing import Protocol

from componentsmith.generation.schemas import GeneratedText


class CodeGenerator(Protocol):
    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> GeneratedText: ...
