"""litellm-backed code generation with per-model circuit breakers."""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from typing import TYPE_CHECKING, Any

import litellm
from circuitbreaker import (  # pyright: ignore[reportUnknownVariableType]
    CircuitBreaker,
    CircuitBreakerError,
)
from litellm.exceptions import RateLimitError as LitellmRateLimitError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from componentsmith.config import Settings
from componentsmith.constants import (
    CB_LLM_FAILURE_THRESHOLD,
    CB_LLM_RECOVERY_TIMEOUT,
    ERROR_TRUNCATION_CHARS,
    RETRY_INITIAL_WAIT,
    RETRY_MAX_ATTEMPTS,
    RETRY_MAX_WAIT,
)
from componentsmith.errors import GenerationError, classify_error
from componentsmith.generation.schemas import GeneratedText

logger = logging.getLogger(__name__)

# litellm stubs have partially unknown types, so use a typed alias
if TYPE_CHECKING:
    _acompletion: Callable[..., Coroutine[Any, Any, Any]]
else:
    _acompletion = litellm.acompletion


def _is_non_rate_limit_error(
    thrown_type: type, thrown_value: BaseException
) -> bool:
    """Return True if NOT a rate limit error (counts as a CB failure).

    Rate limit errors are backpressure, not outages, so they are
    excluded from circuit breaker failure tracking.
    """
    return not issubclass(thrown_type, LitellmRateLimitError)


# Each model gets independent failure tracking so one provider's
# outage does not block fallback to the next model in the chain.
_breaker_registry: dict[str, CircuitBreaker] = {}  # pyright: ignore[reportUnknownVariableType]


def _get_breaker(model: str) -> CircuitBreaker:  # pyright: ignore[reportUnknownParameterType]
    """Get or create a circuit breaker for the given model."""
    if model not in _breaker_registry:
        _breaker_registry[model] = CircuitBreaker(  # pyright: ignore[reportUnknownMemberType]
            failure_threshold=CB_LLM_FAILURE_THRESHOLD,
            recovery_timeout=CB_LLM_RECOVERY_TIMEOUT,
            expected_exception=_is_non_rate_limit_error,
            name=f"llm_{model}",
        )
    return _breaker_registry[model]


@retry(
    stop=stop_after_attempt(RETRY_MAX_ATTEMPTS),
    wait=wait_exponential_jitter(
        initial=RETRY_INITIAL_WAIT, max=RETRY_MAX_WAIT
    ),
    retry=retry_if_exception_type(LitellmRateLimitError),
    reraise=True,
)
async def guarded_completion(
    model: str,
    messages: list[dict[str, str]],
    timeout: int,
    max_tokens: int,
) -> GeneratedText:
    """Circuit-breaker-protected completion with rate-limit retry."""
    breaker = _get_breaker(model)
    if breaker.opened:  # pyright: ignore[reportUnknownMemberType]
        raise CircuitBreakerError(breaker)  # pyright: ignore[reportUnknownArgumentType]
    with breaker:  # pyright: ignore[reportUnknownMemberType]
        response: Any = await _acompletion(
            model=model,
            messages=messages,
            timeout=timeout,
            max_tokens=max_tokens,
            temperature=0.7,
        )

    usage: Any = getattr(response, "usage", None)
    return GeneratedText(
        text=str(response.choices[0].message.content or ""),
        model=model,
        input_tokens=int(getattr(usage, "prompt_tokens", 0) or 0),
        output_tokens=int(getattr(usage, "completion_tokens", 0) or 0),
    )


class LiteLLMCodeGenerator:
    """Tries each model of a chain in order until one answers."""

    def __init__(
        self,
        provider: str,
        models: list[str],
        *,
        timeout: int = 60,
        max_tokens: int = 2000,
    ) -> None:
        if not models:
            raise ValueError(f"Provider {provider} has no models")
        self.provider = provider
        self._models = list(models)
        self._timeout = timeout
        self._max_tokens = max_tokens

    @property
    def models(self) -> list[str]:
        return list(self._models)

    async def generate(
        self,
        prompt: str,
        *,
        system_prompt: str | None = None,
        max_tokens: int | None = None,
    ) -> GeneratedText:
        messages: list[dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        # Every model but the last falls through to the next one
        *fallbacks, last = self._models
        for model in fallbacks:
            try:
                return await self._complete(model, messages, max_tokens)
            except Exception as exc:
                self._log_model_failure(model, exc)

        try:
            return await self._complete(last, messages, max_tokens)
        except Exception as exc:
            self._log_model_failure(last, exc)
            raise GenerationError(
                f"{self.provider} provider error: {exc}",
                provider=self.provider,
                error_class=classify_error(exc),
            ) from exc

    async def _complete(
        self,
        model: str,
        messages: list[dict[str, str]],
        max_tokens: int | None,
    ) -> GeneratedText:
        return await guarded_completion(
            model,
            messages,
            self._timeout,
            max_tokens or self._max_tokens,
        )

    def _log_model_failure(self, model: str, exc: Exception) -> None:
        logger.warning(
            "event=model_failed provider=%s model=%s "
            "error_class=%s error=%s",
            self.provider,
            model,
            classify_error(exc).value,
            str(exc)[:ERROR_TRUNCATION_CHARS],
        )


def build_generators(
    settings: Settings,
) -> dict[str, LiteLLMCodeGenerator]:
    """One generator per provider prefix in the configured chain."""
    return {
        provider: LiteLLMCodeGenerator(
            provider,
            models,
            timeout=settings.llm_timeout_seconds,
            max_tokens=settings.llm_max_output_tokens,
        )
        for provider, models in settings.provider_models.items()
    }
