"""Turns a day's ledger slice into that day's net total."""

from __future__ import annotations

from collections.abc import Mapping

from .history import DayHistory
from .models import WordCount


def net_delta(word_count: WordCount) -> int:
    """Words added to one document, floored at zero."""
    return max(0, word_count.current - word_count.initial)


def day_total(ledger_slice: Mapping[str, WordCount]) -> int:
    """Sum of net deltas across every document in a day's slice."""
    return sum(net_delta(wc) for wc in ledger_slice.values())


class Aggregator:
    """Writes recomputed day totals into a DayHistory."""

    def __init__(self, history: DayHistory):
        self.history = history

    def recompute(self, day_key: str, ledger_slice: Mapping[str, WordCount]) -> int:
        """Recompute and store the total for ``day_key``. Idempotent."""
        total = day_total(ledger_slice)
        self.history.record(day_key, total)
        return total
