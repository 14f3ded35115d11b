"""
LLM provider abstraction for chat-completion calls.

Provides a provider-agnostic completion interface with automatic retries on
rate limiting. The intake context depends only on the CompletionClient
protocol, so extraction can be tested with a fake client and no network.
"""

import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, Protocol, TypeVar

from dotenv import load_dotenv
from loguru import logger

from careersie.exceptions import ConfigurationError, ModelCallError

load_dotenv()

# Retry configuration
MAX_RETRIES = 5
BASE_DELAY = 1.0

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 2048

T = TypeVar("T")


def _retry_with_backoff(
    operation: Callable[[], T],
    retryable_exception: type[Exception],
    error_message: str,
) -> T:
    """
    Execute operation with exponential backoff retry on specific exception.

    Args:
        operation: Callable that performs the API request and returns result
        retryable_exception: Exception type that triggers retry
        error_message: Message prefix for retry logging (e.g., "Rate limit hit")
    """
    for attempt in range(MAX_RETRIES):
        try:
            return operation()
        except retryable_exception:
            if attempt == MAX_RETRIES - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"{error_message}, retrying in {delay:.1f}s... "
                f"(attempt {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(delay)


class CompletionClient(Protocol):
    """Anything that turns a system/user prompt pair into response text."""

    def complete(self, system_prompt: str, user_prompt: str) -> str: ...


# --- LLM Provider Classes ---


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Set self._retryable_exception to the exception type that triggers retry
    - Set self._retry_message for logging during retries
    - Set self._api_error to the SDK base error, reported as ModelCallError
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str
    _retryable_exception: type[Exception]
    _api_error: type[Exception]
    _retry_message: str

    name: str
    model: str
    temperature: float = DEFAULT_TEMPERATURE

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Generate a response from the LLM with automatic retry on transient errors."""
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt),
            self._retryable_exception,
            self._retry_message,
        )

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Return only the response text, satisfying CompletionClient.

        Raises:
            ModelCallError: The SDK reported a failure (after any retries)
        """
        try:
            response = self.generate(system_prompt, user_prompt)
        except self._api_error as e:
            raise ModelCallError(f"{self.name} call failed: {e}") from e
        logger.debug(
            f"{self.name}: {response.input_tokens} input / {response.output_tokens} output tokens"
        )
        return response.content


def _require_env(var_name: str) -> str:
    value = os.getenv(var_name, "").strip()
    if not value:
        raise ConfigurationError(f"{var_name} environment variable not set")
    return value


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider with exponential backoff retry."""

    _provider_prefix = "anthropic"
    _retry_message = "Rate limit hit"

    def __init__(
        self, model: str = "claude-sonnet-4-20250514", temperature: float = DEFAULT_TEMPERATURE
    ):
        # Credential is checked before the SDK import
        api_key = _require_env("ANTHROPIC_API_KEY")

        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        try:
            import anthropic
        except ImportError:
            raise ConfigurationError(
                "anthropic package required. Install with: pip install careersie[anthropic]"
            )

        self.client = anthropic.Anthropic(api_key=api_key)
        self._retryable_exception = anthropic.RateLimitError
        self._api_error = anthropic.APIError
        self.temperature = temperature
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=DEFAULT_MAX_TOKENS,
            temperature=self.temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider with exponential backoff retry."""

    _provider_prefix = "openai"
    _retry_message = "Rate limit hit"

    def __init__(self, model: str = "gpt-4o", temperature: float = DEFAULT_TEMPERATURE):
        api_key = _require_env("OPENAI_API_KEY")

        # Lazy import - openai SDK is heavy, only load if this provider is used
        try:
            import openai
        except ImportError:
            raise ConfigurationError("openai package required. Install with: pip install openai")

        self.client = openai.OpenAI(api_key=api_key)
        self._retryable_exception = openai.RateLimitError
        self._api_error = openai.APIError
        self.temperature = temperature
        self.update_model(model)

    def _call_api(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=DEFAULT_MAX_TOKENS,
            temperature=self.temperature,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


# --- Provider Factory ---


def get_provider(provider_name: Optional[str] = None, model: Optional[str] = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: LLM_MODEL env var, then provider-specific default)

    Returns:
        LLMProvider instance

    Raises:
        ConfigurationError: Unknown provider, missing API key, or missing SDK
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai")
    provider_name = provider_name.lower()

    if model is None:
        model = os.getenv("LLM_MODEL") or None

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise ConfigurationError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")
