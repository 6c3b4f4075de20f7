"""Generative text endpoints: Google AI (Gemini/Gemma) and Anthropic.

Both clients send a single prompt and return the reply text. Nothing is
retried here; the orchestrator turns any :class:`RemoteError` into fallback
content.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Protocol, Self

import aiohttp
import anthropic

from ..config import Settings
from ..errors import RemoteError
from ..transport import AsyncJSONClient
from .constants import DEFAULT_ANTHROPIC_MODEL, DEFAULT_GEMINI_MODEL

logger = logging.getLogger(__name__)

GOOGLE_AI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
)


class TextGenerator(Protocol):
    """A single-operation text endpoint: prompt in, free-form reply out."""

    async def generate(self, prompt: str) -> str:
        """Return the model reply for ``prompt`` or raise :class:`RemoteError`."""

    async def close(self) -> None:
        """Release any network resources."""


def extract_candidate_text(response: Any) -> str:
    """Join the text parts of the first candidate in a ``generateContent`` reply."""

    candidates = response.get("candidates") if isinstance(response, dict) else None
    if not isinstance(candidates, list) or not candidates:
        raise RemoteError(None, "No candidates in AI response", body=str(response))

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise RemoteError(None, "AI response candidate has no content parts")

    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    ]
    if not texts:
        raise RemoteError(None, "AI response candidate contained no text")
    return "".join(texts)


class GeminiClient(AsyncJSONClient):
    """``generateContent`` client for the Google generative-language API."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_GEMINI_MODEL,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(session=session, timeout=timeout)
        self._api_key = api_key
        self.model = model

    async def generate(self, prompt: str) -> str:
        if not self._api_key:
            raise RemoteError(None, "Google AI API key is not configured")

        url = GOOGLE_AI_URL_TEMPLATE.format(model=self.model)
        body = {"contents": [{"parts": [{"text": prompt}]}]}
        logger.debug("Sending prompt to %s (%s chars)", self.model, len(prompt))
        response = await self._request_json(
            "POST", url, params={"key": self._api_key}, json=body
        )
        return extract_candidate_text(response)


class AnthropicClient:
    """Messages API client built on :class:`anthropic.AsyncAnthropic`."""

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str = DEFAULT_ANTHROPIC_MODEL,
        max_tokens: int = 1024,
        timeout: float = 30.0,
        client: anthropic.AsyncAnthropic | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout
        self._client = client
        self.model = model
        self.max_tokens = max_tokens

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._api_key, max_retries=0, timeout=self._timeout
            )
        return self._client

    async def generate(self, prompt: str) -> str:
        if not self._api_key and self._client is None:
            raise RemoteError(None, "Anthropic API key is not configured")

        client = self._get_client()
        logger.debug("Sending prompt to %s (%s chars)", self.model, len(prompt))
        try:
            message = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIStatusError as exc:
            raise RemoteError(exc.status_code, exc.message, body=str(exc.body)) from exc
        except anthropic.APIConnectionError as exc:
            raise RemoteError(None, str(exc)) from exc

        parts: list[str] = []
        for block in message.content:
            text = getattr(block, "text", None)
            if text:
                parts.append(text)
        response_text = "".join(parts).strip()
        if not response_text:
            raise RemoteError(None, "Anthropic response contained no text")

        stop_reason = getattr(message, "stop_reason", "") or ""
        if stop_reason and stop_reason not in {"end_turn", "stop_sequence"}:
            logger.warning(
                "Anthropic message returned stop_reason='%s' (response chars=%s)",
                stop_reason,
                len(response_text),
            )
        return response_text

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()


def build_text_generator(settings: Settings) -> GeminiClient | AnthropicClient:
    """Create the client for ``settings.ai_provider``.

    A missing credential still yields a client; its calls fail fast.
    """

    if settings.ai_provider == "anthropic":
        return AnthropicClient(
            settings.anthropic_api_key,
            model=settings.model or DEFAULT_ANTHROPIC_MODEL,
            timeout=settings.request_timeout,
        )
    return GeminiClient(
        settings.google_api_key,
        model=settings.model or DEFAULT_GEMINI_MODEL,
        timeout=settings.request_timeout,
    )


__all__ = [
    "GOOGLE_AI_URL_TEMPLATE",
    "AnthropicClient",
    "GeminiClient",
    "TextGenerator",
    "build_text_generator",
    "extract_candidate_text",
]
