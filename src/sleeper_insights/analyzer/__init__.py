"""AI analysis client: prompt building, reply normalization, caching and fallback."""

from .cache import AnalysisCache, derive_cache_key
from .constants import AnalysisKind, infer_kind
from .fallback import fallback
from .models import AnalysisResult
from .normalization import normalize_reply
from .orchestrator import AnalysisOrchestrator
from .prompts import build_prompt

__all__ = [
    "AnalysisCache",
    "AnalysisKind",
    "AnalysisOrchestrator",
    "AnalysisResult",
    "build_prompt",
    "derive_cache_key",
    "fallback",
    "infer_kind",
    "normalize_reply",
]
