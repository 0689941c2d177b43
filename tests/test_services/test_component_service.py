"""Tests for ComponentService: generation, XML conversion, versions."""

from __future__ import annotations

from pathlib import Path

import pytest

from componentsmith.config import Settings
from componentsmith.constants import FALLBACK_THINKING_STEPS
from componentsmith.errors import (
    ErrorClass,
    GenerationError,
    ParseError,
    ProviderNotFoundError,
)
from componentsmith.generation.schemas import GenerationOptions
from componentsmith.prompts import DEFAULT_SYSTEM_PROMPT
from componentsmith.repositories.memory import InMemoryVersionStore
from componentsmith.services.component_service import (
    ComponentService,
    validate_prompt,
)
from tests.conftest import FakeCodeGenerator


class TestValidatePrompt:
    def test_strips(self) -> None:
        assert validate_prompt("  make a card \n", 100) == "make a card"

    def test_truncates(self) -> None:
        assert validate_prompt("abcdef", 3) == "abc"

    def test_empty_rejected(self) -> None:
        with pytest.raises(ValueError, match="Prompt is empty"):
            validate_prompt("   ", 100)


class TestProviders:
    def test_lists_registered(self, service: ComponentService) -> None:
        assert service.providers() == ["groq"]
        assert service.current_provider == "groq"

    def test_set_provider(self, settings: Settings) -> None:
        svc = ComponentService(
            {"groq": FakeCodeGenerator(), "gemini": FakeCodeGenerator()},
            InMemoryVersionStore(),
            settings,
        )
        svc.set_provider("gemini")
        assert svc.current_provider == "gemini"

    def test_set_unknown_provider(self, service: ComponentService) -> None:
        with pytest.raises(ProviderNotFoundError, match="Provider x not found"):
            service.set_provider("x")
        assert service.current_provider == "groq"

    def test_default_falls_back_to_first_registered(
        self, settings: Settings
    ) -> None:
        svc = ComponentService(
            {"cohere": FakeCodeGenerator()},
            InMemoryVersionStore(),
            settings,
        )
        assert svc.current_provider == "cohere"

    def test_system_prompt_from_file(
        self, tmp_path: Path, settings: Settings
    ) -> None:
        prompt_file = tmp_path / "system.txt"
        prompt_file.write_text("Be terse.\n")
        svc = ComponentService(
            {"groq": FakeCodeGenerator()},
            InMemoryVersionStore(),
            settings.model_copy(update={"system_prompt_path": prompt_file}),
        )
        assert svc.system_prompt == "Be terse."

    def test_missing_system_prompt_file(
        self, tmp_path: Path, settings: Settings
    ) -> None:
        svc = ComponentService(
            {"groq": FakeCodeGenerator()},
            InMemoryVersionStore(),
            settings.model_copy(
                update={"system_prompt_path": tmp_path / "missing.txt"}
            ),
        )
        assert svc.system_prompt == DEFAULT_SYSTEM_PROMPT


class TestGenerateCode:
    async def test_parses_answer(self, service: ComponentService) -> None:
        result = await service.generate_code("a button")
        assert result.code == (
            "export const Button = () => <button>Click</button>;"
        )
        assert result.language == "tsx"
        assert result.explanation == "Here is a button component."
        assert result.unsafe is False
        assert result.thinking == []
        assert result.prompt == "a button"
        assert result.metadata["provider"] == "groq"
        assert result.metadata["model"] == "fake/model"
        assert result.metadata["prompt_language"] == "english"
        assert "timestamp" in result.metadata

    async def test_sends_system_prompt(
        self,
        service: ComponentService,
        fake_generator: FakeCodeGenerator,
    ) -> None:
        await service.generate_code("a button")
        assert fake_generator.calls[0]["system_prompt"] == (
            DEFAULT_SYSTEM_PROMPT
        )

    async def test_option_system_prompt_wins(
        self,
        service: ComponentService,
        fake_generator: FakeCodeGenerator,
    ) -> None:
        await service.generate_code(
            "a button", GenerationOptions(system_prompt="custom")
        )
        assert fake_generator.calls[0]["system_prompt"] == "custom"

    async def test_plain_answer_without_fences(
        self, settings: Settings
    ) -> None:
        svc = ComponentService(
            {"groq": FakeCodeGenerator(["just some words"])},
            InMemoryVersionStore(),
            settings,
        )
        result = await svc.generate_code("anything")
        assert result.code == "just some words"
        assert result.language == "typescript"
        assert result.code_blocks == []

    async def test_thinking_included(self, settings: Settings) -> None:
        generator = FakeCodeGenerator(
            ["1. Plan\n2. Build", "```tsx\n<A />\n```"]
        )
        svc = ComponentService(
            {"groq": generator}, InMemoryVersionStore(), settings
        )
        result = await svc.generate_code(
            "x", GenerationOptions(include_thinking=True)
        )
        assert result.thinking == ["1. Plan", "2. Build"]
        assert result.code == "<A />"
        assert len(generator.calls) == 2

    async def test_thinking_fallback(self, settings: Settings) -> None:
        generator = FakeCodeGenerator(
            [RuntimeError("no plan"), "```tsx\n<A />\n```"]
        )
        svc = ComponentService(
            {"groq": generator}, InMemoryVersionStore(), settings
        )
        result = await svc.generate_code(
            "x", GenerationOptions(include_thinking=True)
        )
        assert result.thinking == list(FALLBACK_THINKING_STEPS)

    async def test_unsafe_answer_flagged(self, settings: Settings) -> None:
        svc = ComponentService(
            {"groq": FakeCodeGenerator(["```js\neval(input)\n```"])},
            InMemoryVersionStore(),
            settings,
        )
        result = await svc.generate_code("x")
        assert result.unsafe is True

    async def test_unknown_provider(self, service: ComponentService) -> None:
        with pytest.raises(ProviderNotFoundError):
            await service.generate_code(
                "x", GenerationOptions(provider="nope")
            )

    async def test_empty_prompt(self, service: ComponentService) -> None:
        with pytest.raises(ValueError):
            await service.generate_code("  ")

    async def test_provider_failure_wrapped(
        self, settings: Settings
    ) -> None:
        svc = ComponentService(
            {"groq": FakeCodeGenerator([TimeoutError("slow")])},
            InMemoryVersionStore(),
            settings,
        )
        with pytest.raises(GenerationError) as exc_info:
            await svc.generate_code("x")
        assert exc_info.value.provider == "groq"
        assert exc_info.value.error_class == ErrorClass.TIMEOUT

    async def test_generation_error_passes_through(
        self, settings: Settings
    ) -> None:
        original = GenerationError(
            "groq provider error: down",
            provider="groq",
            error_class=ErrorClass.SERVER,
        )
        svc = ComponentService(
            {"groq": FakeCodeGenerator([original])},
            InMemoryVersionStore(),
            settings,
        )
        with pytest.raises(GenerationError) as exc_info:
            await svc.generate_code("x")
        assert exc_info.value is original

    async def test_components_recorded(
        self, service: ComponentService
    ) -> None:
        await service.generate_code("first")
        await service.generate_code("second")
        recent = await service.recent_components()
        assert [c.prompt for c in recent] == ["second", "first"]
        assert recent[0].provider == "groq"


class TestProcessXml:
    async def test_creates_version(
        self,
        service: ComponentService,
        fake_generator: FakeCodeGenerator,
    ) -> None:
        xml = '<user-card name="Ada"><avatar/></user-card>'
        result = await service.process_xml(xml)

        sent = str(fake_generator.calls[0]["prompt"])
        assert '<UserCard name="Ada">\n<Avatar></Avatar>\n</UserCard>' in sent

        version_id = result.metadata["version_id"]
        version = await service.get_version(version_id)
        assert version is not None
        assert version.xml == xml
        assert version.react_code == result.code
        structure = version.meta["original_structure"]
        assert structure["tagName"] == "user-card"
        assert structure["children"][0]["tagName"] == "avatar"

    async def test_versions_listed(self, service: ComponentService) -> None:
        first = await service.process_xml("<a/>")
        second = await service.process_xml("<b/>")
        listed = await service.list_versions()
        ids = {v.id for v in listed}
        assert ids == {
            first.metadata["version_id"],
            second.metadata["version_id"],
        }

    async def test_malformed_xml_makes_no_provider_call(
        self,
        service: ComponentService,
        fake_generator: FakeCodeGenerator,
    ) -> None:
        with pytest.raises(ParseError):
            await service.process_xml("<a><b></a>")
        assert fake_generator.calls == []
        assert await service.list_versions() == []

    async def test_generation_failure_stores_nothing(
        self, settings: Settings
    ) -> None:
        store = InMemoryVersionStore()
        svc = ComponentService(
            {"groq": FakeCodeGenerator([ConnectionError("down")])},
            store,
            settings,
        )
        with pytest.raises(GenerationError):
            await svc.process_xml("<a/>")
        assert await store.list() == []

    async def test_large_xml_sent_whole(
        self,
        service: ComponentService,
        fake_generator: FakeCodeGenerator,
        settings: Settings,
    ) -> None:
        xml = "<root>" + "<item>hello</item>" * 800 + "</root>"
        await service.process_xml(xml)

        sent = str(fake_generator.calls[0]["prompt"])
        assert len(sent) > settings.max_prompt_chars
        assert sent.endswith("</Root>")
        assert sent.count("<Item>") == 800

    async def test_unknown_version(self, service: ComponentService) -> None:
        assert await service.get_version("missing") is None


def test_extract_blocks_delegates(service: ComponentService) -> None:
    blocks = service.extract_blocks("```py\nx = 1\n```")
    assert blocks[0].language == "python"
