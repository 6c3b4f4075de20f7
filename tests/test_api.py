"""Tests for the generative-text clients."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import aiohttp
import anthropic
import httpx
import pytest

from sleeper_insights.analyzer.api import (
    GOOGLE_AI_URL_TEMPLATE,
    AnthropicClient,
    GeminiClient,
    build_text_generator,
    extract_candidate_text,
)
from sleeper_insights.config import Settings
from sleeper_insights.errors import RemoteError
from tests.fakes import FakeResponse, FakeSession


def _gemini(session: FakeSession, api_key: str | None = "test-key") -> GeminiClient:
    return GeminiClient(api_key, model="gemma-3-4b-it", session=session)  # type: ignore[arg-type]


def _candidates(*texts: str) -> dict[str, Any]:
    return {
        "candidates": [{"content": {"parts": [{"text": text} for text in texts]}}]
    }


@pytest.mark.asyncio
async def test_gemini_posts_prompt_and_returns_text() -> None:
    session = FakeSession(FakeResponse(200, _candidates("{\"summary\":", " \"x\"}")))
    client = _gemini(session)

    reply = await client.generate("hello")

    assert reply == '{"summary": "x"}'
    method, url, kwargs = session.requests[0]
    assert method == "POST"
    assert url == GOOGLE_AI_URL_TEMPLATE.format(model="gemma-3-4b-it")
    assert kwargs["params"] == {"key": "test-key"}
    assert kwargs["json"] == {"contents": [{"parts": [{"text": "hello"}]}]}


@pytest.mark.asyncio
async def test_gemini_error_body_maps_to_rate_limit() -> None:
    body = {"error": {"code": 429, "message": "Resource has been exhausted"}}
    client = _gemini(FakeSession(FakeResponse(429, body)))

    with pytest.raises(RemoteError) as excinfo:
        await client.generate("hello")

    assert excinfo.value.status == 429
    assert excinfo.value.message == "Resource has been exhausted"
    assert excinfo.value.is_rate_limited


@pytest.mark.asyncio
async def test_gemini_quota_message_counts_as_rate_limit() -> None:
    body = {"error": {"code": 403, "message": "Quota exceeded for project"}}
    client = _gemini(FakeSession(FakeResponse(403, body)))

    with pytest.raises(RemoteError) as excinfo:
        await client.generate("hello")

    assert excinfo.value.status == 403
    assert excinfo.value.is_rate_limited


@pytest.mark.asyncio
async def test_gemini_server_error_is_not_rate_limit() -> None:
    client = _gemini(FakeSession(FakeResponse(500, "upstream exploded")))

    with pytest.raises(RemoteError) as excinfo:
        await client.generate("hello")

    assert excinfo.value.status == 500
    assert not excinfo.value.is_rate_limited


@pytest.mark.asyncio
async def test_gemini_without_candidates_raises() -> None:
    client = _gemini(FakeSession(FakeResponse(200, {"candidates": []})))

    with pytest.raises(RemoteError, match="No candidates"):
        await client.generate("hello")


@pytest.mark.asyncio
async def test_gemini_invalid_json_body_raises() -> None:
    client = _gemini(FakeSession(FakeResponse(200, "<html>")))

    with pytest.raises(RemoteError, match="invalid JSON"):
        await client.generate("hello")


@pytest.mark.asyncio
async def test_gemini_transport_failure_has_no_status() -> None:
    client = _gemini(FakeSession(aiohttp.ClientConnectionError("reset")))

    with pytest.raises(RemoteError) as excinfo:
        await client.generate("hello")

    assert excinfo.value.status is None


@pytest.mark.asyncio
async def test_gemini_missing_key_fails_without_request() -> None:
    session = FakeSession(FakeResponse(200, _candidates("x")))
    client = _gemini(session, api_key=None)

    with pytest.raises(RemoteError, match="not configured"):
        await client.generate("hello")

    assert session.requests == []


@pytest.mark.asyncio
async def test_borrowed_session_is_not_closed() -> None:
    session = FakeSession(FakeResponse(200, _candidates("x")))

    async with _gemini(session) as client:
        await client.generate("hello")

    assert session.closed is False


def test_extract_candidate_text_rejects_parts_without_text() -> None:
    with pytest.raises(RemoteError):
        extract_candidate_text({"candidates": [{"content": {"parts": [{}]}}]})
    with pytest.raises(RemoteError):
        extract_candidate_text({"candidates": [{"finishReason": "SAFETY"}]})
    with pytest.raises(RemoteError):
        extract_candidate_text(["not", "an", "object"])


def _fake_anthropic(create: Any) -> Any:
    async def close() -> None:
        return None

    return SimpleNamespace(messages=SimpleNamespace(create=create), close=close)


@pytest.mark.asyncio
async def test_anthropic_joins_text_blocks() -> None:
    captured: dict[str, Any] = {}

    async def create(**kwargs: Any) -> Any:
        captured.update(kwargs)
        return SimpleNamespace(
            content=[
                SimpleNamespace(type="text", text='{"summary": '),
                SimpleNamespace(type="text", text='"x"}'),
            ],
            stop_reason="end_turn",
        )

    client = AnthropicClient("key", model="claude-test", client=_fake_anthropic(create))

    reply = await client.generate("hello")

    assert reply == '{"summary": "x"}'
    assert captured["model"] == "claude-test"
    assert captured["messages"] == [{"role": "user", "content": "hello"}]


@pytest.mark.asyncio
async def test_anthropic_status_error_maps_to_remote_error() -> None:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(429, request=request)

    async def create(**_kwargs: Any) -> Any:
        raise anthropic.RateLimitError("rate limited", response=response, body=None)

    client = AnthropicClient("key", client=_fake_anthropic(create))

    with pytest.raises(RemoteError) as excinfo:
        await client.generate("hello")

    assert excinfo.value.status == 429
    assert excinfo.value.is_rate_limited


@pytest.mark.asyncio
async def test_anthropic_connection_error_has_no_status() -> None:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")

    async def create(**_kwargs: Any) -> Any:
        raise anthropic.APIConnectionError(request=request)

    client = AnthropicClient("key", client=_fake_anthropic(create))

    with pytest.raises(RemoteError) as excinfo:
        await client.generate("hello")

    assert excinfo.value.status is None


@pytest.mark.asyncio
async def test_anthropic_empty_reply_raises() -> None:
    async def create(**_kwargs: Any) -> Any:
        return SimpleNamespace(content=[], stop_reason="max_tokens")

    client = AnthropicClient("key", client=_fake_anthropic(create))

    with pytest.raises(RemoteError, match="no text"):
        await client.generate("hello")


@pytest.mark.asyncio
async def test_anthropic_missing_key_fails_fast() -> None:
    with pytest.raises(RemoteError, match="not configured"):
        await AnthropicClient(None).generate("hello")


def test_build_text_generator_selects_provider() -> None:
    google = build_text_generator(Settings(google_api_key="g"))
    claude = build_text_generator(
        Settings(ai_provider="anthropic", anthropic_api_key="a", model="claude-x")
    )

    assert isinstance(google, GeminiClient)
    assert google.model == "gemma-3-4b-it"
    assert isinstance(claude, AnthropicClient)
    assert claude.model == "claude-x"
