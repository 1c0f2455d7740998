"""Thin litellm wrapper used for synopses.

litellm is an optional dependency (``pip install gutenreader[llm]``); it is
imported on first use so the reader works without it.
"""

import logging
import os
import types
from dataclasses import dataclass
from typing import Any

from gutenreader.config.settings import get_settings
from gutenreader.exceptions import LLMError, LLMNotAvailableError

logger = logging.getLogger(__name__)

# Checked in order; the first one set wins over the config file
API_KEY_ENV_VARS = ("GUTENREADER_API_KEY", "GEMINI_API_KEY", "ANTHROPIC_API_KEY", "OPENAI_API_KEY")
MODEL_ENV_VAR = "GUTENREADER_MODEL"


@dataclass
class LLMResponse:
    """One model reply with token usage."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


def resolve_api_key() -> str | None:
    """Find an API key in the environment, then in the config file."""
    for var in API_KEY_ENV_VARS:
        if value := os.environ.get(var):
            return value

    settings = get_settings()
    for value in (
        settings.api_key,
        settings.gemini_api_key,
        settings.anthropic_api_key,
        settings.openai_api_key,
    ):
        if value:
            return value
    return None


def resolve_model() -> str:
    """Model name from GUTENREADER_MODEL, falling back to ``llm.default_model``."""
    return os.environ.get(MODEL_ENV_VAR) or get_settings().llm.default_model


def _is_rate_limit(error: Exception) -> bool:
    return getattr(error, "status_code", None) == 429 or type(error).__name__ == "RateLimitError"


def _token_counts(response: Any) -> tuple[int, int]:
    usage = getattr(response, "usage", None)
    if usage is None:
        return 0, 0
    return getattr(usage, "prompt_tokens", 0) or 0, getattr(usage, "completion_tokens", 0) or 0


class LLMClient:
    """Chat-completion client for any provider litellm supports.

    The model string picks the provider: ``gemini/gemini-2.5-flash``,
    ``anthropic/claude-3-5-haiku-latest``, ``gpt-4o-mini`` and so on.
    """

    def __init__(self, api_key: str | None = None, model: str | None = None):
        self.api_key = api_key or resolve_api_key()
        self.model = model or resolve_model()
        self._litellm: types.ModuleType | None = None

    def _load_litellm(self) -> types.ModuleType:
        if self._litellm is None:
            try:
                import litellm
            except ImportError as e:
                raise LLMNotAvailableError(
                    "Synopsis generation requires litellm",
                    details=str(e),
                ) from e
            if not self.api_key:
                raise LLMNotAvailableError(
                    "No API key configured for synopsis generation",
                    hint=f"Set one of {', '.join(API_KEY_ENV_VARS)}",
                )
            self._litellm = litellm
        return self._litellm

    def is_available(self) -> bool:
        """Whether litellm is installed and a key is configured."""
        try:
            self._load_litellm()
        except LLMNotAvailableError:
            return False
        return True

    def complete(
        self,
        prompt: str,
        system: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> LLMResponse:
        """Ask the model for a completion.

        Args:
            prompt: User message.
            system: Optional system message.
            max_tokens: Reply length cap (defaults to ``llm.max_tokens``).
            temperature: Sampling temperature (defaults to ``llm.temperature``).

        Raises:
            LLMNotAvailableError: If litellm or an API key is missing.
            LLMError: If the provider call fails or is rate limited.
        """
        litellm = self._load_litellm()
        defaults = get_settings().llm

        messages = [{"role": "user", "content": prompt}]
        if system:
            messages.insert(0, {"role": "system", "content": system})

        logger.debug(f"Requesting completion from {self.model} ({len(prompt)} prompt chars)")
        try:
            response = litellm.completion(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens or defaults.max_tokens,
                temperature=defaults.temperature if temperature is None else temperature,
                api_key=self.api_key,
            )
        except Exception as e:
            if _is_rate_limit(e):
                raise LLMError(
                    "Rate limits exceeded",
                    details=str(e),
                    hint="Please try again later",
                ) from e
            raise LLMError(f"Model request failed: {type(e).__name__}", details=str(e)) from e

        input_tokens, output_tokens = _token_counts(response)
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=getattr(response, "model", None) or self.model,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )


_client: LLMClient | None = None


def get_client(api_key: str | None = None, model: str | None = None) -> LLMClient:
    """Shared client; passing a key or model replaces it."""
    global _client

    if _client is None or api_key or model:
        _client = LLMClient(api_key=api_key, model=model)
    return _client
