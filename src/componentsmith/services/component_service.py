"""Component generation, XML conversion and version history."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from componentsmith.config import Settings
from componentsmith.constants import (
    DEFAULT_GENERATED_LANGUAGE,
    DEFAULT_PROMPT_LANGUAGE,
)
from componentsmith.errors import (
    GenerationError,
    ProviderNotFoundError,
    classify_error,
)
from componentsmith.extraction.pipeline import (
    extract_blocks,
    parse_response,
    primary_code,
)
from componentsmith.extraction.schemas import CodeBlock
from componentsmith.generation.protocols import CodeGenerator
from componentsmith.generation.schemas import (
    GenerationOptions,
    GenerationResult,
)
from componentsmith.generation.thinking import generate_thinking
from componentsmith.markup.parser import parse_xml
from componentsmith.markup.renderer import render_element_as_component
from componentsmith.models.component import GeneratedComponent
from componentsmith.models.version import ComponentVersion, VersionSummary
from componentsmith.prompts import XML_ENHANCE_PROMPT, load_system_prompt
from componentsmith.repositories.protocols import (
    ComponentRepository,
    VersionStore,
)

logger = logging.getLogger(__name__)


def validate_prompt(prompt: str, max_chars: int) -> str:
    """Strip and length-cap a prompt; empty prompts are rejected.

    Raises ValueError if the prompt is empty after stripping.
    """
    cleaned = prompt.strip()
    if not cleaned:
        msg = "Prompt is empty"
        raise ValueError(msg)
    return cleaned[:max_chars]


class ComponentService:
    """Explicit context object for everything that talks to providers.

    Built once per process (or per request when the stores are bound
    to a database session) and handed to callers; nothing here is
    looked up globally.
    """

    def __init__(
        self,
        generators: dict[str, CodeGenerator],
        store: VersionStore,
        settings: Settings,
        *,
        components: ComponentRepository | None = None,
        default_provider: str | None = None,
        system_prompt: str | None = None,
    ) -> None:
        self._generators = dict(generators)
        self._store = store
        self._components = components
        self._settings = settings
        self._system_prompt = system_prompt or load_system_prompt(
            settings.system_prompt_path
        )
        provider = default_provider or settings.default_provider
        if provider not in self._generators and self._generators:
            provider = next(iter(self._generators))
        self._current_provider = provider

    # ── Providers ────────────────────────────────────────────

    def providers(self) -> list[str]:
        return list(self._generators)

    @property
    def current_provider(self) -> str:
        return self._current_provider

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    def set_provider(self, provider: str) -> None:
        if provider not in self._generators:
            raise ProviderNotFoundError(provider)
        self._current_provider = provider

    def _resolve(self, provider: str | None) -> tuple[str, CodeGenerator]:
        name = provider or self._current_provider
        generator = self._generators.get(name)
        if generator is None:
            raise ProviderNotFoundError(name)
        return name, generator

    # ── Generation ───────────────────────────────────────────

    async def generate_code(
        self,
        prompt: str,
        options: GenerationOptions | None = None,
    ) -> GenerationResult:
        """Ask a provider for a component and parse its answer.

        The user prompt is stripped and capped at ``max_prompt_chars``.
        """
        cleaned = validate_prompt(prompt, self._settings.max_prompt_chars)
        return await self._generate(cleaned, options or GenerationOptions())

    async def _generate(
        self,
        cleaned: str,
        opts: GenerationOptions,
    ) -> GenerationResult:
        provider, generator = self._resolve(opts.provider)

        thinking: list[str] = []
        if opts.include_thinking:
            thinking = await generate_thinking(generator, cleaned)

        try:
            answer = await generator.generate(
                cleaned,
                system_prompt=opts.system_prompt or self._system_prompt,
            )
        except GenerationError:
            raise
        except Exception as exc:
            error_class = classify_error(exc)
            logger.error(
                "event=generation_failed provider=%s error_class=%s "
                "error=%s",
                provider,
                error_class.value,
                exc,
            )
            raise GenerationError(
                f"Error generating code: {exc}",
                provider=provider,
                error_class=error_class,
            ) from exc

        parsed = parse_response(answer.text)
        code = primary_code(parsed.code_blocks, answer.text)
        language = _headline_language(parsed.code_blocks, code)
        result = GenerationResult(
            code=code,
            language=language,
            explanation=(
                parsed.explanation or f"Generated with {provider}"
            ),
            thinking=thinking,
            code_blocks=parsed.code_blocks,
            unsafe=parsed.unsafe,
            prompt=cleaned,
            metadata={
                "provider": provider,
                "model": answer.model,
                "prompt_language": opts.language
                or DEFAULT_PROMPT_LANGUAGE,
                "timestamp": datetime.now(UTC).isoformat(),
            },
        )
        logger.info(
            "event=generation_complete provider=%s model=%s blocks=%d "
            "unsafe=%s",
            provider,
            answer.model,
            len(parsed.code_blocks),
            parsed.unsafe,
        )

        if self._components is not None:
            await self._components.save(
                GeneratedComponent(
                    prompt=cleaned,
                    code=result.code,
                    language=result.language,
                    provider=provider,
                    explanation=result.explanation,
                )
            )
        return result

    async def process_xml(
        self,
        xml: str,
        options: GenerationOptions | None = None,
    ) -> GenerationResult:
        """Convert XML to a component, enhance it, record a version.

        ParseError from malformed XML propagates before any provider
        call is made.
        """
        element = parse_xml(xml)
        component = render_element_as_component(element)
        logger.info(
            "event=xml_rendered root=%s depth=%d",
            element.tag_name,
            element.depth(),
        )

        # Built internally, so never truncated
        response = await self._generate(
            XML_ENHANCE_PROMPT.format(component=component),
            options or GenerationOptions(),
        )

        metadata: dict[str, Any] = {
            **response.metadata,
            "original_structure": element.to_dict(),
        }
        version_id = await self._store.put(
            ComponentVersion(
                xml=xml,
                react_code=response.code,
                meta=metadata,
            )
        )
        logger.info("event=version_created version_id=%s", version_id)

        return response.model_copy(
            update={
                "metadata": {**response.metadata, "version_id": version_id}
            }
        )

    # ── Versions ─────────────────────────────────────────────

    async def list_versions(self) -> list[VersionSummary]:
        return await self._store.list()

    async def get_version(self, version_id: str) -> ComponentVersion | None:
        return await self._store.get(version_id)

    async def recent_components(
        self, limit: int = 10
    ) -> list[GeneratedComponent]:
        if self._components is None:
            return []
        return await self._components.recent(limit)

    def extract_blocks(self, text: str) -> list[CodeBlock]:
        return extract_blocks(text)


def _headline_language(blocks: list[CodeBlock], code: str) -> str:
    for block in blocks:
        if block.code == code:
            return block.language
    return DEFAULT_GENERATED_LANGUAGE
