"""Day history: one net total per day, plus the series a heat-map view reads."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from loguru import logger

from .clock import parse_day_key


class DayHistory:
    """day key -> net words added that day.

    Args:
        counts: Backing mapping, shared with the owning TrackerState.
    """

    def __init__(self, counts: dict[str, int] | None = None):
        self._counts = counts if counts is not None else {}

    def record(self, day_key: str, total: int) -> None:
        """Set the total for ``day_key``, replacing any earlier value."""
        self._counts[day_key] = total

    def get(self, day_key: str, default: int = 0) -> int:
        return self._counts.get(day_key, default)

    def is_empty(self) -> bool:
        return not self._counts

    def __contains__(self, day_key: object) -> bool:
        return day_key in self._counts

    def __len__(self) -> int:
        return len(self._counts)

    def to_dict(self) -> dict[str, int]:
        return dict(self._counts)


@dataclass(frozen=True)
class DayCount:
    """One point of the history series."""

    date: date
    day_key: str
    count: int


@dataclass(frozen=True)
class HistorySummary:
    total_words: int
    active_days: int
    best_day: DayCount | None
    current_streak: int


def history_series(
    day_counts: Mapping[str, int],
    start: date | None = None,
    end: date | None = None,
) -> list[DayCount]:
    """Chronological date -> count list built from stored day totals.

    Keys that don't parse as day keys are skipped.

    Args:
        day_counts: The persisted ``dayCounts`` mapping.
        start: Earliest date to include (inclusive). None = no lower bound.
        end: Latest date to include (inclusive). None = no upper bound.
    """
    series = []
    for key, count in day_counts.items():
        try:
            day = parse_day_key(key)
        except ValueError:
            logger.warning(f"Skipping unparseable day key {key!r}")
            continue
        if start and day < start:
            continue
        if end and day > end:
            continue
        series.append(DayCount(date=day, day_key=key, count=count))
    series.sort(key=lambda point: point.date)
    return series


def summarize(series: list[DayCount]) -> HistorySummary:
    """Totals over a series from :func:`history_series`.

    The streak counts consecutive days with words added, ending at the most
    recent day that had any.
    """
    active = [point for point in series if point.count > 0]
    best = max(active, key=lambda point: point.count) if active else None

    streak = 0
    if active:
        expected = active[-1].date
        for point in reversed(active):
            if point.date != expected:
                break
            streak += 1
            expected -= timedelta(days=1)

    return HistorySummary(
        total_words=sum(point.count for point in series),
        active_days=len(active),
        best_day=best,
        current_streak=streak,
    )
