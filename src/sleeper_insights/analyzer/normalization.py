"""Recover a four-field analysis from free-form model text."""

from __future__ import annotations

import json
import math
import re
from typing import Any

from ..errors import ParseError
from .constants import (
    DEFAULT_CONFIDENCE,
    INSIGHTS_UNAVAILABLE,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    RECOMMENDATIONS_UNAVAILABLE,
    SUMMARY_UNAVAILABLE,
)
from .models import AnalysisResult

_FENCE = "```"
_JSON_FENCE = re.compile(r"```json", re.IGNORECASE)
# A bare info string on the first line of a fence, e.g. "javascript".
_INFO_STRING = re.compile(r"^[A-Za-z][\w+-]*[ \t]*\r?\n")


def extract_json_text(reply: str) -> str:
    """Return the candidate JSON substring of ``reply``.

    Prefers the body of a ```` ```json ```` fence, then the body of the first
    plain fence, then the raw text.
    """

    match = _JSON_FENCE.search(reply)
    if match:
        return reply[match.end() :].split(_FENCE, 1)[0]
    if _FENCE in reply:
        inner = reply.split(_FENCE)[1]
        return _INFO_STRING.sub("", inner, count=1)
    return reply


def coerce_summary(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return SUMMARY_UNAVAILABLE


def coerce_text_list(value: Any, unavailable: str) -> list[str]:
    """Stringify list items, dropping empties; non-lists become ``[unavailable]``."""

    if not isinstance(value, list):
        return [unavailable]
    items = [
        item
        if isinstance(item, str)
        else json.dumps(item, separators=(",", ":"), ensure_ascii=False)
        for item in value
    ]
    return [item for item in items if item] or [unavailable]


def coerce_confidence(value: Any) -> int:
    """Clamp numeric confidence into 1..10; anything else becomes the default.

    Fractional values round half up, so 6.5 becomes 7.
    """

    if isinstance(value, bool) or not isinstance(value, int | float):
        return DEFAULT_CONFIDENCE
    if not math.isfinite(value):
        return DEFAULT_CONFIDENCE
    clamped = min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, value))
    return math.floor(clamped + 0.5)


def normalize_reply(reply: str) -> AnalysisResult:
    """Parse ``reply`` into an :class:`AnalysisResult`.

    Each field is coerced on its own, so one malformed field never discards
    the others.

    Raises:
        ParseError: if no JSON object can be decoded from the reply.
    """

    text = extract_json_text(reply).strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Reply is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ParseError(f"Expected a JSON object, got {type(parsed).__name__}")

    return AnalysisResult(
        summary=coerce_summary(parsed.get("summary")),
        key_insights=coerce_text_list(parsed.get("keyInsights"), INSIGHTS_UNAVAILABLE),
        recommendations=coerce_text_list(
            parsed.get("recommendations"), RECOMMENDATIONS_UNAVAILABLE
        ),
        confidence=coerce_confidence(parsed.get("confidence")),
    )


__all__ = [
    "coerce_confidence",
    "coerce_summary",
    "coerce_text_list",
    "extract_json_text",
    "normalize_reply",
]
