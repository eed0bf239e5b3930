"""Trailing-edge debouncing for edit notifications.

Editors report a change on every keystroke. The debouncer holds the latest
arguments of a burst and forwards only those, once the burst has been quiet
for ``delay`` seconds.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from loguru import logger


class TrailingDebouncer:
    """Coalesce rapid calls into one trailing call on the running event loop.

    Args:
        callback: Receives the arguments of the last call in each burst.
        delay: Quiet period in seconds before the callback fires.
        loop: Event loop to schedule on. Defaults to the running loop at first use.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay: float = 0.4,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self._callback = callback
        self.delay = delay
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._args: tuple[Any, ...] = ()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending(self) -> bool:
        """Whether a call is waiting for its burst to end."""
        return self._handle is not None

    def __call__(self, *args: Any) -> None:
        """Restart the quiet period with ``args`` as the latest state."""
        if self._handle is not None:
            self._handle.cancel()
        self._args = args
        self._handle = self._get_loop().call_later(self.delay, self._fire)

    def call_threadsafe(self, *args: Any) -> None:
        """Submit from a thread other than the loop's (e.g. a file watcher)."""
        self._get_loop().call_soon_threadsafe(self, *args)

    def flush(self) -> None:
        """Fire a pending call now instead of waiting."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._fire()

    def cancel(self) -> None:
        """Drop a pending call without firing it."""
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._args = ()

    def _fire(self) -> None:
        args, self._args = self._args, ()
        self._handle = None
        try:
            self._callback(*args)
        except Exception as exc:
            logger.error(f"Debounced callback failed: {exc}")
