"""Tests for Settings model chain validators and the engine factory."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from componentsmith.config import LANGUAGE_ALIASES, Settings


class TestModelChainParsing:
    def test_comma_separated_string_parsed_to_list(self) -> None:
        """_parse_chain splits comma-separated strings."""
        s = Settings(litellm_model_chain="groq/a,gemini/b")  # type: ignore[arg-type]
        assert s.litellm_model_chain == ["groq/a", "gemini/b"]

    def test_comma_separated_with_spaces(self) -> None:
        s = Settings(litellm_model_chain="groq/a , gemini/b")  # type: ignore[arg-type]
        assert s.litellm_model_chain == ["groq/a", "gemini/b"]

    def test_list_passthrough(self) -> None:
        s = Settings(litellm_model_chain=["groq/a"])
        assert s.litellm_model_chain == ["groq/a"]

    def test_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LITELLM_MODEL_CHAIN", "cohere/x,groq/y")
        assert Settings().litellm_model_chain == ["cohere/x", "groq/y"]


class TestModelChainValidation:
    def test_empty_chain_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one model"):
            Settings(litellm_model_chain=[])

    def test_empty_string_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one model"):
            Settings(litellm_model_chain="")  # type: ignore[arg-type]

    def test_duplicate_models_warns(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(
            logging.WARNING, logger="componentsmith.config"
        ):
            s = Settings(litellm_model_chain=["groq/a", "groq/a"])
        assert "Duplicate models in LITELLM_MODEL_CHAIN" in caplog.text
        assert s.litellm_model_chain == ["groq/a", "groq/a"]

    def test_no_warning_without_duplicates(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(
            logging.WARNING, logger="componentsmith.config"
        ):
            Settings(litellm_model_chain=["groq/a", "groq/b"])
        assert "Duplicate" not in caplog.text


class TestProviderModels:
    def test_grouped_by_prefix_in_order(self) -> None:
        s = Settings(
            litellm_model_chain=[
                "gemini/gemini-1.5-flash",
                "groq/llama",
                "gemini/gemini-pro",
            ]
        )
        assert s.provider_models == {
            "gemini": ["gemini/gemini-1.5-flash", "gemini/gemini-pro"],
            "groq": ["groq/llama"],
        }

    def test_unprefixed_model_is_own_provider(self) -> None:
        s = Settings(litellm_model_chain=["gpt-4o-mini"])
        assert s.provider_models == {"gpt-4o-mini": ["gpt-4o-mini"]}


def test_language_aliases_are_lowercase() -> None:
    for key, value in LANGUAGE_ALIASES.items():
        assert key == key.lower()
        assert value == value.lower()


class TestCreateAppEngine:
    async def test_wal_mode_set_on_connect(
        self, tmp_path: Path,
    ) -> None:
        """WAL journal mode is set automatically on connection."""
        from sqlalchemy import text

        from componentsmith.config import create_app_engine

        db_file = tmp_path / "test.db"
        engine = create_app_engine(f"sqlite:///{db_file}")

        async with engine.connect() as conn:
            row = await conn.execute(text("PRAGMA journal_mode"))
            mode = row.scalar()

        await engine.dispose()
        assert mode == "wal"

    async def test_url_conversion(self) -> None:
        """sqlite:/// is converted to sqlite+aiosqlite:///."""
        from componentsmith.config import create_app_engine

        engine = create_app_engine("sqlite:///data/test.db")
        assert "aiosqlite" in str(engine.url)
        await engine.dispose()

    async def test_already_converted_url_passthrough(self) -> None:
        from componentsmith.config import create_app_engine

        engine = create_app_engine("sqlite+aiosqlite:///:memory:")
        assert str(engine.url) == "sqlite+aiosqlite:///:memory:"
        await engine.dispose()
