"""File-backed store for analysis results, one JSON blob per context label."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path

from pydantic import ValidationError

from .constants import CACHE_KEY_PREFIX
from .models import AnalysisResult, CacheEntry

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def current_millis() -> int:
    return int(time.time() * 1000)


def derive_cache_key(label: str) -> str:
    """Lower-case ``label`` and collapse whitespace runs to ``_``.

    Distinct labels may collapse to the same key and share an entry.
    """
    return CACHE_KEY_PREFIX + re.sub(r"\s+", "_", label).lower()


class AnalysisCache:
    """Key -> ``{"data": AnalysisResult, "timestamp": ms}`` files under ``directory``.

    Entries are never evicted; staleness is decided by the reader.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE_FILENAME_CHARS.sub('-', key)}.json"

    def get(
        self, key: str, *, now_ms: int | None = None
    ) -> tuple[AnalysisResult, int] | None:
        """Return ``(result, age_ms)`` or ``None``; unreadable entries are misses."""

        path = self.path_for(key)
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.debug("Cache entry %s unreadable: %s", path, exc)
            return None

        try:
            entry = CacheEntry.model_validate_json(raw)
        except ValidationError:
            logger.debug("Cache entry %s corrupted, ignoring", path)
            return None

        now = current_millis() if now_ms is None else now_ms
        return entry.data, entry.age_ms(now)

    def set(
        self, key: str, result: AnalysisResult, *, now_ms: int | None = None
    ) -> None:
        """Write ``result`` for ``key``, replacing any previous entry."""

        entry = CacheEntry(
            data=result, timestamp=current_millis() if now_ms is None else now_ms
        )
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp_path = path.with_name(f"{path.name}.tmp")
        tmp_path.write_text(entry.model_dump_json(by_alias=True), encoding="utf-8")
        tmp_path.replace(path)

    def clear(self) -> int:
        """Delete every stored entry and return how many were removed."""

        if not self.directory.is_dir():
            return 0
        removed = 0
        for path in self.directory.glob(f"{CACHE_KEY_PREFIX}*.json"):
            path.unlink(missing_ok=True)
            removed += 1
        return removed


__all__ = [
    "AnalysisCache",
    "current_millis",
    "derive_cache_key",
]
