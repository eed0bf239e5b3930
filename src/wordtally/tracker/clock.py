"""Day buckets derived from local wall-clock time."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime

from loguru import logger

NowFn = Callable[[], datetime]


def day_key(moment: datetime | date) -> str:
    """Bucket key for the local calendar date of ``moment``.

    Format is ``year/month/day`` with a zero-based month (``2024/0/1`` is
    1 January 2024), matching state files written by earlier releases.
    Keys identify days; they do not sort. Use :func:`parse_day_key` to order them.
    """
    return f"{moment.year}/{moment.month - 1}/{moment.day}"


def parse_day_key(key: str) -> date:
    """Inverse of :func:`day_key`. Raises ValueError for malformed keys."""
    parts = key.split("/")
    if len(parts) != 3:
        raise ValueError(f"Malformed day key: {key!r}")
    year, month0, day = (int(p) for p in parts)
    return date(year, month0 + 1, day)


class DayClock:
    """Current day key with rollover detection.

    Args:
        now_fn: Returns the current local time. Injectable for tests.
    """

    def __init__(self, now_fn: NowFn | None = None):
        self._now_fn = now_fn or datetime.now
        self._last_key: str | None = None

    def today_key(self) -> str:
        """Day key for the current moment."""
        return day_key(self._now_fn())

    def today(self) -> date:
        return self._now_fn().date()

    def poll(self) -> bool:
        """Re-read the clock. True when the day changed since the previous poll.

        The first poll only records the key and reports no change.
        """
        key = self.today_key()
        previous, self._last_key = self._last_key, key
        if previous is not None and previous != key:
            logger.info(f"Day rolled over: {previous} -> {key}")
            return True
        return False

    @property
    def last_key(self) -> str | None:
        """Key seen by the most recent :meth:`poll`."""
        return self._last_key
