"""Constants for the AI-analysis client."""

from __future__ import annotations

from enum import Enum


class AnalysisKind(str, Enum):
    """Category inferred from a context label; selects prompt and fallback."""

    LEAGUE_OVERVIEW = "league_overview"
    MATCHUP = "matchup"
    TEAM = "team"
    GENERIC = "generic"


# Ordered (substring, kind) rules, first match wins. "Matchup" is checked first
# so a label such as "League Overview Matchup" is treated as a matchup.
KIND_RULES: tuple[tuple[str, AnalysisKind], ...] = (
    ("Matchup", AnalysisKind.MATCHUP),
    ("League Overview", AnalysisKind.LEAGUE_OVERVIEW),
    ("Team Analysis", AnalysisKind.TEAM),
)


def infer_kind(label: str) -> AnalysisKind:
    """Return the analysis kind for ``label`` (case-sensitive substring match)."""
    for needle, kind in KIND_RULES:
        if needle in label:
            return kind
    return AnalysisKind.GENERIC


CACHE_KEY_PREFIX = "ai_analysis_"
CACHE_TTL_MS = 60 * 60 * 1000

MIN_CONFIDENCE = 1
MAX_CONFIDENCE = 10
DEFAULT_CONFIDENCE = 5

SUMMARY_UNAVAILABLE = "Analysis summary unavailable"
INSIGHTS_UNAVAILABLE = "Key insights unavailable"
RECOMMENDATIONS_UNAVAILABLE = "Recommendations unavailable"

DEFAULT_GEMINI_MODEL = "gemma-3-4b-it"
DEFAULT_ANTHROPIC_MODEL = "claude-3-5-haiku-20241022"

__all__ = [
    "CACHE_KEY_PREFIX",
    "CACHE_TTL_MS",
    "DEFAULT_ANTHROPIC_MODEL",
    "DEFAULT_CONFIDENCE",
    "DEFAULT_GEMINI_MODEL",
    "INSIGHTS_UNAVAILABLE",
    "KIND_RULES",
    "MAX_CONFIDENCE",
    "MIN_CONFIDENCE",
    "RECOMMENDATIONS_UNAVAILABLE",
    "SUMMARY_UNAVAILABLE",
    "AnalysisKind",
    "infer_kind",
]
