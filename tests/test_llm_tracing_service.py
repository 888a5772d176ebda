import pytest

from src.app.services.llm_tracing_service import (
    calculate_gemini_price,
    get_trace,
    llm_tracing,
    parse_gemini_tokens,
    summarize_messages,
)
from src.app.utils.tracing_context_utils import request_context

REPLY = {
    "candidates": [{"content": {"parts": [{"text": "Hi"}]}}],
    "usageMetadata": {"promptTokenCount": 1000000, "candidatesTokenCount": 1000000},
}


class EchoClient:
    @llm_tracing(provider="gemini")
    async def call(self, model_name, messages, **params):
        return REPLY


def test_price_uses_per_million_rates():
    assert calculate_gemini_price("gemini-2.5-flash", 1000000, 1000000) == {
        "input": 0.3,
        "output": 2.5,
        "total": 2.8,
    }
    assert calculate_gemini_price("unknown-model", 10, 10)["total"] == 0.0


def test_token_total_defaults_to_sum():
    assert parse_gemini_tokens(REPLY) == {"input": 1000000, "output": 1000000, "total": 2000000}
    assert parse_gemini_tokens({}) == {"input": 0, "output": 0, "total": 0}


def test_summarize_messages_elides_files():
    messages = [
        {"role": "system", "content": "Be brief."},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": "Read this"},
                {"type": "file", "data": b"x", "mediaType": "application/pdf"},
            ],
        },
    ]
    assert summarize_messages(messages, "system") == "Be brief."
    assert summarize_messages(messages, "user") == "Read this\n<application/pdf>"


@pytest.mark.asyncio
async def test_call_is_recorded_under_the_request_id():
    token = request_context.set("trace-123")
    try:
        result = await EchoClient().call(
            "gemini-2.5-flash", [{"role": "user", "content": "Hello"}]
        )
    finally:
        request_context.reset(token)

    assert result == REPLY
    call = get_trace("trace-123")["llm_calls"][-1]
    assert call["llm_response"] == "Hi"
    assert call["user_prompt"] == "Hello"
    assert call["price"]["total"] == 2.8


@pytest.mark.asyncio
async def test_call_without_request_id_is_not_recorded():
    result = await EchoClient().call("gemini-2.5-flash", [{"role": "user", "content": "x"}])

    assert result == REPLY
    assert get_trace("None") is None


@pytest.mark.asyncio
async def test_provider_without_parsers_is_not_recorded():
    class OtherClient:
        @llm_tracing(provider="other")
        async def call(self, model_name, messages, **params):
            return {"text": "ok"}

    token = request_context.set("trace-other")
    try:
        result = await OtherClient().call("some-model", [{"role": "user", "content": "x"}])
    finally:
        request_context.reset(token)

    assert result == {"text": "ok"}
    assert get_trace("trace-other") is None
