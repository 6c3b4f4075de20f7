"""Prompt templates for league, matchup, team and generic analysis requests."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from .constants import AnalysisKind

ROLE_INSTRUCTION = "You are a fantasy football expert analyst."

OUTPUT_FORMAT_INSTRUCTION = (
    "Format your response as JSON with exactly these keys: summary (string), "
    "keyInsights (array of strings), recommendations (array of strings), "
    "confidence (integer from 1 to 10)"
)

STRING_ARRAY_INSTRUCTION = (
    "IMPORTANT: keyInsights and recommendations must be arrays of strings, not "
    "objects. Each item should be a complete sentence."
)


@dataclass(frozen=True, slots=True)
class PromptTemplate:
    """Static text for one analysis kind."""

    intro: str
    focus: tuple[str, ...]
    deliverables: tuple[str, ...]
    closing: str = ""


PROMPT_TEMPLATES: dict[AnalysisKind, PromptTemplate] = {
    AnalysisKind.LEAGUE_OVERVIEW: PromptTemplate(
        intro="Based on the league data provided, give insights about the league.",
        focus=(
            "Who might be the early favorites to win the league based on team names and any available data",
            "Interesting observations about team strategies or compositions",
            "Potential dark horse teams that could surprise everyone",
            "General fantasy football wisdom for the current season",
        ),
        deliverables=(
            "A concise summary about the league's competitive landscape (2-3 sentences)",
            "3-4 key insights about potential winners and interesting team dynamics",
            "2-3 strategic recommendations for fantasy success this season",
            "Confidence level (1-10)",
        ),
        closing="Make it engaging and fun - this is for a fantasy football league!",
    ),
    AnalysisKind.MATCHUP: PromptTemplate(
        intro="Analyze this matchup.",
        focus=(
            "Head-to-head comparison of the two teams",
            "Key player matchups and their impact",
            "Team strengths and weaknesses",
            "Prediction for who will win and why",
            "Strategic advice for both teams",
        ),
        deliverables=(
            "A concise summary of the matchup and prediction (2-3 sentences)",
            "3-4 key insights about the teams and key factors",
            "2-3 strategic recommendations for the matchup",
            "Confidence level (1-10)",
        ),
        closing="Make it exciting and competitive!",
    ),
    AnalysisKind.TEAM: PromptTemplate(
        intro="Analyze this specific team.",
        focus=(
            "The team's strengths and potential weaknesses",
            "Key players who could carry the team to victory",
            "Strategic moves they should consider",
            "Their championship potential",
        ),
        deliverables=(
            "A concise summary of the team's outlook (2-3 sentences)",
            "3-4 key insights about the team's potential and strategy",
            "2-3 recommendations for improving their roster",
            "Confidence level (1-10)",
        ),
        closing="Be specific and actionable!",
    ),
    AnalysisKind.GENERIC: PromptTemplate(
        intro="Analyze the following data and provide insights.",
        focus=(
            "The most important patterns in the data",
            "Anything unusual that a league member should know about",
            "Practical next steps for a fantasy manager",
        ),
        deliverables=(
            "A concise summary (2-3 sentences)",
            "3-4 key insights",
            "2-3 actionable recommendations",
            "Confidence level (1-10)",
        ),
    ),
}


def to_plain(obj: Any) -> Any:
    """Convert pydantic models and nested containers into JSON-ready values."""

    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, Mapping):
        return {str(key): to_plain(value) for key, value in obj.items()}
    if isinstance(obj, list | tuple):
        return [to_plain(item) for item in obj]
    return obj


def serialize_payload(payload: Any) -> str:
    return json.dumps(to_plain(payload), indent=2, default=str, ensure_ascii=False)


def build_prompt(
    kind: AnalysisKind,
    label: str,
    payload: Any,
    league_notes: Sequence[str] = (),
) -> str:
    """Render the instruction text sent to the generative endpoint."""

    template = PROMPT_TEMPLATES[kind]
    lines = [
        f"{ROLE_INSTRUCTION} {template.intro}",
        "",
        f"Context: {label}",
        f"Data: {serialize_payload(payload)}",
        "",
        "Focus on:",
        *(f"- {item}" for item in template.focus),
        "",
    ]

    notes = [note for note in league_notes if note.strip()]
    if notes and kind is not AnalysisKind.GENERIC:
        lines.append("Additional league context to include:")
        lines.extend(f"- {note.strip()}" for note in notes)
        lines.append("")

    lines.append("Please provide:")
    lines.extend(
        f"{index}. {item}" for index, item in enumerate(template.deliverables, 1)
    )
    lines.extend(["", OUTPUT_FORMAT_INSTRUCTION, "", STRING_ARRAY_INSTRUCTION])
    if template.closing:
        lines.extend(["", template.closing])
    return "\n".join(lines)


__all__ = [
    "OUTPUT_FORMAT_INSTRUCTION",
    "PROMPT_TEMPLATES",
    "ROLE_INSTRUCTION",
    "STRING_ARRAY_INSTRUCTION",
    "PromptTemplate",
    "build_prompt",
    "serialize_payload",
    "to_plain",
]
