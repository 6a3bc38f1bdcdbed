"""
LLM provider abstraction and response parsing utilities.

Provides a provider-agnostic interface for LLM API calls with automatic retries
and utilities for parsing structured JSON responses.
"""

import json
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional, TypeVar

from dotenv import load_dotenv
from loguru import logger

from hireme.utils.errors import HireMeError

load_dotenv()

# Retry configuration
MAX_RETRIES = int(os.getenv("LLM_MAX_RETRIES", "3"))
BASE_DELAY = 1.0

DEFAULT_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").lower()

T = TypeVar("T")


class LLMResponseError(HireMeError):
    """Raised when a provider response is empty or cannot be parsed."""

    pass


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
        error_message: Message prefix for retry logging (e.g., "API overloaded")
    """
    for attempt in range(MAX_RETRIES):
        try:
            return operation()
        except retryable_exception:
            if attempt == MAX_RETRIES - 1:
                raise
            delay = BASE_DELAY * (2**attempt)
            logger.warning(
                f"[llm] {error_message}, retrying in {delay:.1f}s... "
                f"(attempt {attempt + 1}/{MAX_RETRIES})"
            )
            time.sleep(delay)


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
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name

    When response_schema is given the provider is asked for a JSON document.
    The schema is a JSON-schema style dict (lowercase type names); providers
    translate it to whatever their API expects.
    """

    _provider_prefix: str
    _retryable_exception: type[Exception]
    _retry_message: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(
        self, system_prompt: str, user_prompt: str, response_schema: Optional[Dict[str, Any]]
    ) -> LLMResponse:
        """Make a single API call (no retries). Implemented by subclasses."""
        pass

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> LLMResponse:
        """Generate a response from the LLM with automatic retry on transient errors."""
        return _retry_with_backoff(
            partial(self._call_api, system_prompt, user_prompt, response_schema),
            self._retryable_exception,
            self._retry_message,
        )


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider with exponential backoff retry."""

    _provider_prefix = "anthropic"
    _retry_message = "API overloaded"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        try:
            import anthropic
        except ImportError:
            raise ImportError("anthropic package required. Install with: pip install anthropic")

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self._retryable_exception = anthropic.OverloadedError
        self.update_model(model)

    def _call_api(self, system_prompt, user_prompt, response_schema) -> LLMResponse:
        # No native JSON mode; the prompt itself spells out the expected shape
        response = self.client.messages.create(
            model=self.model,
            max_tokens=2048,
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

    def __init__(self, model: str = "gpt-4o"):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        try:
            import openai
        except ImportError:
            raise ImportError("openai package required. Install with: pip install openai")

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self._retryable_exception = openai.RateLimitError
        self.update_model(model)

    def _call_api(self, system_prompt, user_prompt, response_schema) -> LLMResponse:
        kwargs = {}
        if response_schema is not None:
            kwargs["response_format"] = {"type": "json_object"}

        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=2048,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            **kwargs,
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


class GeminiProvider(LLMProvider):
    """Google Gemini provider with exponential backoff retry."""

    _provider_prefix = "gemini"
    _retry_message = "Quota exhausted"

    def __init__(self, model: str = "gemini-2.5-flash"):
        # Lazy import - only load the Google SDK if this provider is used
        try:
            import google.generativeai as genai
            from google.api_core import exceptions as google_exceptions
        except ImportError:
            raise ImportError(
                "google-generativeai package required. Install with: pip install google-generativeai"
            )

        api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise ValueError("GEMINI_API_KEY/GOOGLE_API_KEY environment variable not set")

        genai.configure(api_key=api_key)
        self.genai = genai
        self._retryable_exception = google_exceptions.ResourceExhausted
        self.update_model(model)

    def _call_api(self, system_prompt, user_prompt, response_schema) -> LLMResponse:
        model = self.genai.GenerativeModel(self.model, system_instruction=system_prompt)

        generation_config = None
        if response_schema is not None:
            generation_config = self.genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=_to_gemini_schema(response_schema),
            )

        response = model.generate_content(user_prompt, generation_config=generation_config)
        usage = getattr(response, "usage_metadata", None)
        return LLMResponse(
            content=response.text,
            model=self.model,
            input_tokens=getattr(usage, "prompt_token_count", 0),
            output_tokens=getattr(usage, "candidates_token_count", 0),
        )


def _to_gemini_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """Translate a JSON-schema style dict to Gemini's uppercase type names."""
    converted = {}
    for key, value in schema.items():
        if key == "type":
            converted[key] = value.upper()
        elif key == "properties":
            converted[key] = {name: _to_gemini_schema(prop) for name, prop in value.items()}
        elif key == "items":
            converted[key] = _to_gemini_schema(value)
        else:
            converted[key] = value
    return converted


# --- Provider Factory ---

_PROVIDERS = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
    "gemini": GeminiProvider,
}


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "gemini", "openai" or "anthropic" (default: from LLM_PROVIDER env var)
        model: Model name (default: provider-specific default)

    Returns:
        LLMProvider instance
    """
    if provider_name is None:
        provider_name = DEFAULT_PROVIDER

    provider_cls = _PROVIDERS.get(provider_name.lower())
    if provider_cls is None:
        raise ValueError(
            f"Unknown provider: {provider_name}. Use one of: {', '.join(sorted(_PROVIDERS))}"
        )

    return provider_cls(model=model) if model else provider_cls()


# --- Response Parsing Utilities ---


def parse_json_response(text: str) -> dict:
    """
    Parse a JSON object from an LLM response.

    Tries a direct parse, then strips markdown code fences, then looks for the
    outermost {...} span in the text.

    Args:
        text: LLM response text

    Returns:
        Parsed JSON object

    Raises:
        LLMResponseError: If the text is empty or holds no JSON object
    """
    if not text or not text.strip():
        raise LLMResponseError("Empty response from model")

    text = text.strip()

    try:
        result = json.loads(text)
        if isinstance(result, dict):
            return result
    except json.JSONDecodeError:
        pass

    # Strip markdown code blocks
    stripped = re.sub(r"^```(?:json)?\s*", "", text)
    stripped = re.sub(r"\s*```$", "", stripped)
    try:
        result = json.loads(stripped)
        if isinstance(result, dict):
            return result
    except json.JSONDecodeError:
        pass

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        try:
            result = json.loads(text[start : end + 1])
            if isinstance(result, dict):
                return result
        except json.JSONDecodeError:
            pass

    raise LLMResponseError(f"Response is not a JSON object: {text[:200]}")
