"""Entry point for AI analysis: cache, prompt, model call, normalize, fallback."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Literal

from ..errors import ParseError, RemoteError
from .api import TextGenerator
from .cache import AnalysisCache, current_millis, derive_cache_key
from .constants import CACHE_TTL_MS, AnalysisKind, infer_kind
from .fallback import fallback
from .models import AnalysisResult
from .normalization import normalize_reply
from .prompts import build_prompt

logger = logging.getLogger(__name__)

AnalysisSource = Literal["cache", "model", "fallback"]


class AnalysisOrchestrator:
    """Produce an :class:`AnalysisResult` for a context label and payload.

    :meth:`get_analysis` never raises for model or parsing failures; callers
    always get a usable result. Concurrent calls for the same label are not
    de-duplicated and the last cache write wins.
    """

    def __init__(
        self,
        generator: TextGenerator,
        cache: AnalysisCache,
        *,
        ttl_ms: int = CACHE_TTL_MS,
        league_notes: Sequence[str] = (),
        clock: Callable[[], int] = current_millis,
    ) -> None:
        self.generator = generator
        self.cache = cache
        self.ttl_ms = ttl_ms
        self.league_notes = tuple(league_notes)
        self._clock = clock
        self.last_source: AnalysisSource | None = None

    async def get_analysis(
        self, label: str, payload: Any, force_refresh: bool = False
    ) -> AnalysisResult:
        key = derive_cache_key(label)

        if not force_refresh:
            cached = self.cache.get(key, now_ms=self._clock())
            if cached is not None:
                result, age_ms = cached
                if age_ms < self.ttl_ms:
                    logger.info("Using cached AI analysis for %r", label)
                    self.last_source = "cache"
                    return result
                logger.debug("Cached analysis for %r is stale (%sms)", label, age_ms)

        kind = infer_kind(label)
        result = await self._generate(kind, label, payload)

        try:
            self.cache.set(key, result, now_ms=self._clock())
        except OSError as exc:
            logger.warning("Could not write analysis cache for %r: %s", label, exc)
        return result

    async def _generate(
        self, kind: AnalysisKind, label: str, payload: Any
    ) -> AnalysisResult:
        try:
            prompt = build_prompt(kind, label, payload, self.league_notes)
            reply = await self.generator.generate(prompt)
            result = normalize_reply(reply)
        except RemoteError as exc:
            if exc.is_rate_limited:
                logger.warning("API quota exceeded, using fallback analysis: %s", exc)
            else:
                logger.warning("Using fallback analysis due to API error: %s", exc)
        except ParseError as exc:
            logger.warning("Could not parse AI reply, using fallback analysis: %s", exc)
        except Exception:
            logger.exception("AI analysis failed unexpectedly, using fallback analysis")
        else:
            self.last_source = "model"
            return result

        self.last_source = "fallback"
        return fallback(kind, payload)


__all__ = ["AnalysisOrchestrator", "AnalysisSource"]
