"""Canned analysis served when the model call or reply parsing fails."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .constants import AnalysisKind
from .models import AnalysisResult

TEAM_A = "Team A"
TEAM_B = "Team B"
THIS_TEAM = "This team"

MATCHUP_CONFIDENCE = 6
TEAM_CONFIDENCE = 7
GENERIC_CONFIDENCE = 8

# Ordered lookups tried for a single team's display name.
TEAM_NAME_PATHS: tuple[tuple[str, ...], ...] = (
    ("team", "name"),
    ("name",),
    ("user", "display_name"),
    ("user", "username"),
)


def lookup_path(payload: Any, path: tuple[str, ...]) -> Any | None:
    """Follow ``path`` through nested mappings or models; ``None`` when absent."""

    current = payload
    for part in path:
        if isinstance(current, BaseModel):
            current = current.model_dump()
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def lookup_text(payload: Any, path: tuple[str, ...]) -> str | None:
    value = lookup_path(payload, path)
    if isinstance(value, str) and value.strip():
        return value
    return None


def matchup_team_names(payload: Any) -> tuple[str, str]:
    """Names at ``team1.name`` and ``team2.name``.

    Each side resolves on its own, so a payload naming only ``team1`` yields
    that name against ``Team B`` rather than two placeholders.
    """
    first = lookup_text(payload, ("team1", "name")) or TEAM_A
    second = lookup_text(payload, ("team2", "name")) or TEAM_B
    return first, second


def team_name(payload: Any) -> str:
    for path in TEAM_NAME_PATHS:
        name = lookup_text(payload, path)
        if name:
            return name
    return THIS_TEAM


def _matchup_fallback(payload: Any) -> AnalysisResult:
    first, second = matchup_team_names(payload)
    return AnalysisResult(
        summary=(
            f"This is a classic fantasy football showdown between {first} and "
            f"{second}. Both teams have their strengths, but this matchup could "
            "go either way depending on player performance."
        ),
        key_insights=[
            f"{first} has a solid roster with good depth at key positions.",
            f"{second} shows strong potential with their starting lineup.",
            "The outcome will likely hinge on which team's players have better matchups this week.",
            "Both teams should focus on optimizing their lineups for maximum points.",
        ],
        recommendations=[
            "Check player injury reports and weather conditions before finalizing lineups.",
            "Consider streaming options for positions with favorable matchups.",
            "Monitor late-breaking news for any last-minute roster changes.",
        ],
        confidence=MATCHUP_CONFIDENCE,
    )


def _team_fallback(payload: Any) -> AnalysisResult:
    name = team_name(payload)
    return AnalysisResult(
        summary=(
            f"{name} has a well-rounded roster with potential for success this "
            "season. The team's performance will depend on key players staying "
            "healthy and performing consistently."
        ),
        key_insights=[
            "The roster shows good balance across different positions.",
            "There are some high-upside players who could carry the team to victory.",
            "Depth at key positions provides flexibility for lineup decisions.",
            "The team should focus on consistent performers rather than boom-or-bust players.",
        ],
        recommendations=[
            "Consider trading for players with more consistent weekly production.",
            "Monitor the waiver wire for emerging talent to improve depth.",
            "Stay active in trade discussions to address any roster weaknesses.",
        ],
        confidence=TEAM_CONFIDENCE,
    )


def _generic_fallback() -> AnalysisResult:
    return AnalysisResult(
        summary=(
            "Fantasy football analysis shows an exciting season ahead with "
            "competitive matchups and strategic opportunities for all teams."
        ),
        key_insights=[
            "Teams with strong quarterback play have a significant advantage.",
            "Running back depth is crucial for consistent weekly performance.",
            "Wide receiver depth provides flexibility for different scoring formats.",
            "Active roster management is key to fantasy success.",
        ],
        recommendations=[
            "Stay active on the waiver wire to improve roster depth.",
            "Monitor player trends and adjust strategies accordingly.",
            "Don't be afraid to make bold trades to improve your team.",
        ],
        confidence=GENERIC_CONFIDENCE,
    )


def fallback(kind: AnalysisKind, payload: Any) -> AnalysisResult:
    """Deterministic analysis for ``kind``; never raises.

    League overviews share the generic body.
    """

    if kind is AnalysisKind.MATCHUP:
        return _matchup_fallback(payload)
    if kind is AnalysisKind.TEAM:
        return _team_fallback(payload)
    return _generic_fallback()


__all__ = [
    "GENERIC_CONFIDENCE",
    "MATCHUP_CONFIDENCE",
    "TEAM_A",
    "TEAM_B",
    "TEAM_CONFIDENCE",
    "TEAM_NAME_PATHS",
    "THIS_TEAM",
    "fallback",
    "lookup_path",
    "lookup_text",
    "matchup_team_names",
    "team_name",
]
