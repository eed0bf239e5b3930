"""Data models for daily word tracking.

``TrackerState`` is the durable shape written to storage::

    {
      "dayCounts":      {"<dayKey>": <int>, ...},
      "dayToWordCount": {"<dayKey>": {"<path>": {"initial": <int>, "current": <int>}}}
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from loguru import logger

DAY_COUNTS_KEY = "dayCounts"
LEDGER_KEY = "dayToWordCount"


@dataclass
class WordCount:
    """A document's word count at first sight today (``initial``) and now (``current``)."""

    initial: int
    current: int

    def to_dict(self) -> dict[str, int]:
        return {"initial": self.initial, "current": self.current}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WordCount:
        """Build from a stored mapping, clamping negatives to 0.

        Raises ValueError/TypeError/KeyError/OverflowError on bad data.
        """
        initial = max(0, int(data["initial"]))
        current = max(0, int(data.get("current", initial)))
        return cls(initial=initial, current=current)


@dataclass
class TrackerState:
    """Day history plus the per-document ledger, as persisted.

    Attributes:
        day_counts: day key -> net words added that day.
        day_to_word_count: day key -> document path -> WordCount.
    """

    day_counts: dict[str, int] = field(default_factory=dict)
    day_to_word_count: dict[str, dict[str, WordCount]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            DAY_COUNTS_KEY: dict(self.day_counts),
            LEDGER_KEY: {
                day: {path: wc.to_dict() for path, wc in entries.items()}
                for day, entries in self.day_to_word_count.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> TrackerState:
        """Merge stored data over empty defaults.

        Missing top-level keys become empty mappings. Entries that can't be
        coerced to integers are dropped with a warning instead of failing the load.
        """
        state = cls()
        if not data:
            return state

        raw_counts = data.get(DAY_COUNTS_KEY) or {}
        if isinstance(raw_counts, dict):
            for day, total in raw_counts.items():
                try:
                    state.day_counts[str(day)] = max(0, int(total))
                except (OverflowError, TypeError, ValueError):
                    logger.warning(f"Dropping malformed day total for {day!r}: {total!r}")
        else:
            logger.warning(f"Ignoring {DAY_COUNTS_KEY}: expected a mapping, got {type(raw_counts).__name__}")

        raw_ledger = data.get(LEDGER_KEY) or {}
        if not isinstance(raw_ledger, dict):
            logger.warning(f"Ignoring {LEDGER_KEY}: expected a mapping, got {type(raw_ledger).__name__}")
            return state

        for day, entries in raw_ledger.items():
            if not isinstance(entries, dict):
                logger.warning(f"Dropping malformed ledger slice for {day!r}")
                continue
            day_slice: dict[str, WordCount] = {}
            for path, raw in entries.items():
                try:
                    day_slice[str(path)] = WordCount.from_dict(raw)
                except (AttributeError, KeyError, OverflowError, TypeError, ValueError):
                    logger.warning(f"Dropping malformed word count for {path!r} on {day!r}")
            state.day_to_word_count[str(day)] = day_slice
        return state
