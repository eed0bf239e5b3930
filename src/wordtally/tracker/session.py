"""Tracking session: the per-edit pipeline and today's running total."""

from __future__ import annotations

from loguru import logger

from .aggregator import Aggregator
from .clock import DayClock
from .history import DayHistory
from .ledger import DocumentLedger
from .models import TrackerState
from .tokenizer import count_words


class TrackingSession:
    """Owns the ledger and day history for one running tracker.

    Each observation tokenizes the text, updates the ledger entry for
    (day, path), recomputes that day's total from its full ledger slice and
    caches it as :attr:`current_total`. Callers are expected to coalesce
    keystroke bursts before calling in; the session does no rate limiting.

    Args:
        state: Loaded persistent state. A fresh empty state if omitted.
        clock: Source of the current day key.
    """

    def __init__(self, state: TrackerState | None = None, clock: DayClock | None = None):
        self._state = state or TrackerState()
        self.clock = clock or DayClock()
        self.ledger = DocumentLedger(self._state.day_to_word_count)
        self.history = DayHistory(self._state.day_counts)
        self.aggregator = Aggregator(self.history)

        self.clock.poll()
        self._today = self.clock.last_key
        self._current_total = self._resume_total(self._today)

    def _resume_total(self, day_key: str) -> int:
        if day_key in self.history:
            return self.aggregator.recompute(day_key, self.ledger.slice_for(day_key))
        return 0

    @property
    def state(self) -> TrackerState:
        return self._state

    @property
    def today(self) -> str:
        """Day key the session is currently counting into."""
        return self._today

    @property
    def current_total(self) -> int:
        """Net words added on :attr:`today`, as of the last observation."""
        return self._current_total

    def on_edit_observation(self, day_key: str, path: str, text: str) -> int:
        """Record the full current ``text`` of ``path`` under ``day_key``.

        Returns:
            The recomputed total for ``day_key``.
        """
        words = count_words(text)
        self.ledger.record_observation(day_key, path, words)
        total = self.aggregator.recompute(day_key, self.ledger.slice_for(day_key))
        self._current_total = total
        logger.debug(f"{path}: {words} words, {day_key} total {total}")
        return total

    def observe(self, path: str, text: str) -> int:
        """:meth:`on_edit_observation` for the session's current day."""
        return self.on_edit_observation(self._today, path, text)

    def refresh_day(self) -> bool:
        """Re-read the clock and switch days if it rolled over.

        Earlier days keep whatever total they had; only the new day is counted
        from here on. Returns True on rollover.
        """
        if not self.clock.poll():
            return False
        self._today = self.clock.last_key
        self._current_total = self.history.get(self._today)
        return True
