"""Environment-based configuration and language tables."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from componentsmith.constants import DEFAULT_PROVIDER

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and environment variables."""

    # Provider credentials are read by litellm from the environment
    # (GROQ_API_KEY, GEMINI_API_KEY, COHERE_API_KEY, TOGETHERAI_API_KEY).

    # Model chain (first = primary, rest = fallbacks tried in order)
    litellm_model_chain: Annotated[list[str], NoDecode] = [
        "groq/llama-3.3-70b-versatile",
        "gemini/gemini-1.5-flash",
    ]
    default_provider: str = DEFAULT_PROVIDER
    llm_timeout_seconds: int = 60
    llm_max_output_tokens: int = 2000

    # Prompting
    system_prompt_path: Path | None = None
    max_prompt_chars: int = 10_000

    # Database
    database_url: str = "sqlite:///data/componentsmith.db"
    data_dir: Path = Path("data")

    # Logging
    log_level: str = "INFO"
    debug_mode: bool = False

    # API
    api_key: str = ""
    cors_origins: str = "http://localhost:5173"
    host: str = "127.0.0.1"
    port: int = 8000

    @field_validator("litellm_model_chain", mode="before")
    @classmethod
    def _parse_chain(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("litellm_model_chain")
    @classmethod
    def _validate_chain(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError(
                "litellm_model_chain must contain at least one model"
            )
        seen: set[str] = set()
        dupes: list[str] = []
        for m in v:
            if m in seen:
                dupes.append(m)
            seen.add(m)
        if dupes:
            logger.warning(
                "Duplicate models in LITELLM_MODEL_CHAIN: %s",
                ", ".join(dupes),
            )
        return v

    @property
    def provider_models(self) -> dict[str, list[str]]:
        """Model chain grouped by litellm provider prefix, in order."""
        grouped: dict[str, list[str]] = {}
        for model in self.litellm_model_chain:
            provider = model.split("/", 1)[0] if "/" in model else model
            grouped.setdefault(provider, []).append(model)
        return grouped

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "",
        "extra": "ignore",
    }


# Fence tag / file extension → canonical language identifier.
# Identifiers not listed here pass through lowercased.
LANGUAGE_ALIASES: dict[str, str] = {
    # JavaScript family
    "js": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "node": "javascript",
    "jsx": "jsx",
    # TypeScript
    "ts": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "tsx": "tsx",
    # Python
    "py": "python",
    "py3": "python",
    "pyw": "python",
    # Others
    "rb": "ruby",
    "golang": "go",
    "cs": "csharp",
    "c#": "csharp",
    "rs": "rust",
    "kt": "kotlin",
    "kts": "kotlin",
    "c++": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "hpp": "cpp",
    "h": "c",
    "htm": "html",
    "xhtml": "html",
    "scss": "scss",
    "yml": "yaml",
    "md": "markdown",
    "mdx": "markdown",
    "sh": "shell",
    "zsh": "shell",
    "ps1": "powershell",
    "gql": "graphql",
    "svg": "xml",
    "docker": "dockerfile",
    "txt": "plaintext",
    "text": "plaintext",
    "plain": "plaintext",
}


def create_app_engine(
    url: str, *, echo: bool = False
) -> AsyncEngine:
    """Create async SQLite engine with WAL journal mode.

    Handles URL conversion (sqlite:/// → sqlite+aiosqlite:///)
    and sets WAL mode via a pool-connect event listener so it
    fires once per raw DBAPI connection, not per ORM session.
    """
    if url.startswith("sqlite:///"):
        db_url = "sqlite+aiosqlite:///" + url[len("sqlite:///"):]
    else:
        db_url = url
    engine = create_async_engine(db_url, echo=echo)

    @event.listens_for(engine.sync_engine, "connect")
    def _set_wal_mode(
        dbapi_conn: object,
        _connection_record: object,
    ) -> None:
        cursor = dbapi_conn.cursor()  # type: ignore[union-attr]
        cursor.execute("PRAGMA journal_mode=WAL")  # pyright: ignore[reportUnknownMemberType]
        cursor.close()  # pyright: ignore[reportUnknownMemberType]

    return engine
