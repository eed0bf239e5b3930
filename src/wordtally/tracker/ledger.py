"""Per-day, per-document word count ledger."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from loguru import logger

from .models import WordCount


class DocumentLedger:
    """day key -> document path -> WordCount.

    Entries are created on the first observation of a (day, path) pair and
    only their ``current`` count changes afterwards. Nothing is ever removed.

    A document opened for the first time today can't be told apart from one
    created today, so its count at that moment becomes the baseline and text
    it already contained is never counted as added.

    Args:
        entries: Backing mapping, shared with the owning TrackerState.
    """

    def __init__(self, entries: dict[str, dict[str, WordCount]] | None = None):
        self._entries = entries if entries is not None else {}

    def record_observation(self, day_key: str, path: str, word_count: int) -> None:
        """Record the latest word count for ``path`` on ``day_key``."""
        day_slice = self._entries.setdefault(day_key, {})
        entry = day_slice.get(path)
        if entry is None:
            day_slice[path] = WordCount(initial=word_count, current=word_count)
            logger.debug(f"Baseline for {path} on {day_key}: {word_count} words")
        else:
            entry.current = word_count

    def slice_for(self, day_key: str) -> Mapping[str, WordCount]:
        """Read-only view of one day's entries (empty if the day is unknown)."""
        return MappingProxyType(self._entries.get(day_key, {}))

    def get(self, day_key: str, path: str) -> WordCount | None:
        return self._entries.get(day_key, {}).get(path)

    def __contains__(self, day_key: object) -> bool:
        return day_key in self._entries
