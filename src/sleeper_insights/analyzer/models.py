"""Value types produced by the AI-analysis client."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AnalysisResult(BaseModel):
    """Normalized model output, always in the same four-field shape.

    Serialized with the wire names ``summary``, ``keyInsights``,
    ``recommendations`` and ``confidence``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    summary: str = Field(min_length=1)
    key_insights: list[str] = Field(alias="keyInsights", min_length=1)
    recommendations: list[str] = Field(min_length=1)
    confidence: int = Field(ge=1, le=10)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class CacheEntry(BaseModel):
    """Persisted ``{data, timestamp}`` blob; ``timestamp`` is epoch millis."""

    data: AnalysisResult
    timestamp: int

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp


__all__ = ["AnalysisResult", "CacheEntry"]
