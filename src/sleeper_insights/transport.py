"""Shared aiohttp plumbing for the upstream JSON APIs."""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any, Self

import aiohttp

from .errors import RemoteError

logger = logging.getLogger(__name__)


class AsyncJSONClient:
    """Base class owning an optional :class:`aiohttp.ClientSession`.

    A session passed in by the caller is borrowed and never closed here; a
    session created lazily by the client is closed by :meth:`close`.
    """

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """Issue a single request and decode the JSON body.

        Raises:
            RemoteError: on transport failure, non-2xx status or a body that
                is not valid JSON. Nothing is retried.
        """

        session = self._get_session()
        try:
            async with session.request(method, url, **kwargs) as response:
                status = response.status
                body = await response.text()
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RemoteError(None, f"{method} {url} failed: {exc}") from exc

        logger.debug("%s %s -> %s (%s bytes)", method, url, status, len(body))
        if not 200 <= status < 300:
            raise RemoteError.from_response(status, body)

        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise RemoteError(
                status, f"{method} {url} returned invalid JSON", body=body
            ) from exc

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()


__all__ = ["AsyncJSONClient"]
