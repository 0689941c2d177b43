"""Shared test fixtures: fake generator, in-memory SQLite, async session."""

import os

# Force demo API keys for all tests, so no real provider calls.
os.environ["GROQ_API_KEY"] = "for-demo-purposes-only"
os.environ["GEMINI_API_KEY"] = "for-demo-purposes-only"

from collections.abc import Sequence

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
)

from componentsmith.config import Settings
from componentsmith.generation.schemas import GeneratedText
from componentsmith.models.base import Base
from componentsmith.repositories.memory import (
    InMemoryComponentRepository,
    InMemoryVersionStore,
)
from componentsmith.services.component_service import ComponentService

TSX_ANSWER = (
    "Here is a button component.\n"
    "```tsx\n"
    "export const Button = () => <button>Click</button>;\n"
    "```\n"
    "Use it anywhere."
)


class FakeCodeGenerator:
    """Scripted CodeGenerator that returns canned answers in order.

    The last answer repeats once the script is exhausted. An
    Exception instance in the script is raised instead of returned.
    """

    def __init__(
        self,
        answers: Sequence[str | Exception] = (TSX_ANSWER,),
        model: str = "fake/model",
    ) -> None:
        self._answers = list(answers)
        self.model = model
        self.calls: list[dict[str, object]] = []

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> GeneratedText:
        self.calls.append(
            {
                "prompt": prompt,
                "system_prompt": system_prompt,
                "max_tokens": max_tokens,
            }
        )
        index = min(len(self.calls) - 1, len(self._answers) - 1)
        answer = self._answers[index]
        if isinstance(answer, Exception):
            raise answer
        return GeneratedText(text=answer, model=self.model)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite:///:memory:",
        litellm_model_chain=["groq/test-model"],
        default_provider="groq",
    )


@pytest.fixture
def fake_generator() -> FakeCodeGenerator:
    return FakeCodeGenerator()


@pytest.fixture
def service(
    settings: Settings, fake_generator: FakeCodeGenerator
) -> ComponentService:
    """Service wired to in-memory stores and one fake provider."""
    return ComponentService(
        {"groq": fake_generator},
        InMemoryVersionStore(),
        settings,
        components=InMemoryComponentRepository(),
    )


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    """Function-scoped session with connection-level rollback.

    Wraps each test in a connection-level transaction so that
    even ``session.commit()`` calls inside tests are rolled
    back at teardown, keeping the shared engine clean.
    """
    async with engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(
            bind=connection, expire_on_commit=False
        )
        yield session
        await session.close()
        await transaction.rollback()
