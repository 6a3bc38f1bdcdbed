"""Unit tests for LLM provider plumbing and response parsing."""

import pytest

from hireme.utils import llm
from hireme.utils.llm import (
    LLMProvider,
    LLMResponse,
    LLMResponseError,
    _to_gemini_schema,
    get_provider,
    parse_json_response,
)


class Overloaded(Exception):
    pass


class FlakyProvider(LLMProvider):
    """Fails with the retryable exception a set number of times, then succeeds."""

    _provider_prefix = "flaky"
    _retry_message = "Overloaded"

    def __init__(self, failures: int):
        self.failures = failures
        self.attempts = 0
        self._retryable_exception = Overloaded
        self.update_model("test-model")

    def _call_api(self, system_prompt, user_prompt, response_schema):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise Overloaded()
        return LLMResponse(content="ok", model=self.model, input_tokens=1, output_tokens=1)


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr(llm.time, "sleep", lambda seconds: None)


# =============================================================================
# RETRIES
# =============================================================================


@pytest.mark.unit
def test_retry_then_succeed(no_sleep):
    provider = FlakyProvider(failures=llm.MAX_RETRIES - 1)

    response = provider.generate("system", "user")

    assert response.content == "ok"
    assert provider.attempts == llm.MAX_RETRIES
    assert provider.name == "flaky/test-model"


@pytest.mark.unit
def test_retry_gives_up(no_sleep):
    provider = FlakyProvider(failures=llm.MAX_RETRIES)

    with pytest.raises(Overloaded):
        provider.generate("system", "user")


@pytest.mark.unit
def test_get_provider_unknown():
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("mystery")


# =============================================================================
# SCHEMA TRANSLATION
# =============================================================================


@pytest.mark.unit
def test_to_gemini_schema_uppercases_types():
    schema = {
        "type": "object",
        "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
        "required": ["tags"],
    }

    assert _to_gemini_schema(schema) == {
        "type": "OBJECT",
        "properties": {"tags": {"type": "ARRAY", "items": {"type": "STRING"}}},
        "required": ["tags"],
    }


# =============================================================================
# JSON PARSING
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        '{"score": 1}',
        '```json\n{"score": 1}\n```',
        '```\n{"score": 1}\n```',
        'Here is the result: {"score": 1} Hope this helps.',
    ],
)
def test_parse_json_response(text):
    assert parse_json_response(text) == {"score": 1}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["", "   ", "no json here", "[1, 2, 3]", "{broken"])
def test_parse_json_response_errors(text):
    with pytest.raises(LLMResponseError):
        parse_json_response(text)
