"""TrackerService: a tracking session wired to storage, timers and events.

The session itself is a pure in-memory pipeline. The service adds what a
running tracker needs around it:

- state loaded from storage at start and saved on a timer and at stop,
- day rollover checks on a timer,
- trailing-edge debouncing of edit notifications,
- events on an :class:`~wordtally.core.events.EventBus` for display surfaces.

Usage::

    service = TrackerService(config)
    await service.start()
    service.submit_edit("/notes/today.md", text)
    ...
    await service.stop()
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from loguru import logger

from wordtally.core.config import Config
from wordtally.core.events import (
    DAY_ROLLOVER,
    SHUTDOWN,
    STARTUP,
    STATE_SAVED,
    TOTAL_UPDATED,
    Event,
    EventBus,
)
from wordtally.core.storage import LocalStorage, StorageBackend, StorageError

from .clock import DayClock
from .debounce import TrailingDebouncer
from .persistence import StateStore
from .scheduler import TrackerScheduler
from .session import TrackingSession


class TrackerService:
    """Runs a TrackingSession for the lifetime of an asyncio program.

    Args:
        config: Settings (``tracking.*``, ``storage.*``, ``paths.storage_dir``).
        storage: Backend for state. Defaults to LocalStorage at ``paths.storage_dir``.
        clock: Day clock shared with the session.
        bus: Event bus for notifications. A private one is created if omitted.
    """

    def __init__(
        self,
        config: Config,
        storage: StorageBackend | None = None,
        clock: DayClock | None = None,
        bus: EventBus | None = None,
    ):
        self.config = config
        self.storage = storage or LocalStorage(base_path=config.get("paths.storage_dir"))
        self.store = StateStore(
            self.storage,
            key=config.get("storage.state_key", "state.json"),
            compress=config.get_bool("storage.compress"),
        )
        self.clock = clock or DayClock()
        self.bus = bus or EventBus()
        self.session: TrackingSession | None = None
        self.scheduler = TrackerScheduler()
        self._debouncer: TrailingDebouncer | None = None
        self._last_status: str | None = None

    # ── Lifecycle ──────────────────────────────────────────────────

    async def start(self, schedule: bool = True, on_status: Callable[[str], None] | None = None) -> None:
        """Load state, build the session and (optionally) start the timers.

        Args:
            schedule: Start day-check and persistence jobs. Disable for one-shot use.
            on_status: Called with the status text whenever it changes, checked
                every ``tracking.status_interval_seconds``.
        """
        state = await self.store.load()
        self.session = TrackingSession(state=state, clock=self.clock)
        self._debouncer = TrailingDebouncer(
            self._apply_edit,
            delay=self.config.get_float("tracking.debounce_seconds", 0.4),
            loop=asyncio.get_running_loop(),
        )

        if schedule:
            self.scheduler.add_interval(
                "day_check",
                self.check_day,
                self.config.get_float("tracking.day_check_interval_seconds", 1.0),
            )
            self.scheduler.add_interval(
                "persist",
                self.persist,
                self.config.get_float("tracking.save_interval_seconds", 1.0),
            )
            if on_status is not None:
                self.scheduler.add_interval(
                    "status",
                    lambda: self._emit_status(on_status),
                    self.config.get_float("tracking.status_interval_seconds", 0.2),
                )
            self.scheduler.start()

        logger.info(f"Tracking {self.session.today}: {self.session.current_total} words so far")
        await self.bus.emit(Event(name=STARTUP, payload=self._payload(), source="tracker"))

    async def stop(self) -> None:
        """Apply any pending edit, stop timers and write state one last time."""
        if self.session is None:
            return
        # Let edits queued from watcher threads reach the debouncer first
        await asyncio.sleep(0)
        if self._debouncer is not None:
            self._debouncer.flush()
        self.scheduler.shutdown()
        await self.persist()
        await self.bus.emit(Event(name=SHUTDOWN, payload=self._payload(), source="tracker"))
        logger.info("Tracker stopped")

    # ── Edits ──────────────────────────────────────────────────────

    def submit_edit(self, path: str, text: str) -> None:
        """Queue an edit notification; only the last one in a burst is applied."""
        self._require_session()
        self._debouncer(path, text)

    def submit_edit_threadsafe(self, path: str, text: str) -> None:
        """:meth:`submit_edit` from a non-loop thread (file watcher callbacks)."""
        self._require_session()
        self._debouncer.call_threadsafe(path, text)

    def observe_now(self, path: str, text: str) -> int:
        """Apply an edit immediately, bypassing the debouncer."""
        self._require_session()
        return self._apply_edit(path, text)

    def _apply_edit(self, path: str, text: str) -> int:
        total = self.session.observe(path, text)
        self.bus.emit_sync(Event(name=TOTAL_UPDATED, payload=self._payload(path=path), source="tracker"))
        return total

    # ── Timer jobs ─────────────────────────────────────────────────

    def check_day(self) -> bool:
        """Switch the session to a new day if the date changed."""
        self._require_session()
        previous = self.session.today
        if not self.session.refresh_day():
            return False
        self.bus.emit_sync(
            Event(name=DAY_ROLLOVER, payload=self._payload(previous=previous), source="tracker")
        )
        return True

    async def persist(self) -> bool:
        """Save current state. Storage failures are logged, not raised."""
        if self.session is None:
            return False
        try:
            saved = await self.store.save(self.session.state)
        except (StorageError, OSError) as e:
            logger.error(f"Failed to save tracking state: {e}")
            return False
        if saved:
            await self.bus.emit(Event(name=STATE_SAVED, payload=self._payload(), source="tracker"))
        return saved

    # ── Display ────────────────────────────────────────────────────

    @property
    def current_total(self) -> int:
        return self.session.current_total if self.session else 0

    def status_text(self) -> str:
        return f"{self.current_total} words today"

    def poll_status(self) -> str | None:
        """Status text if it changed since the last poll, else None."""
        status = self.status_text()
        if status == self._last_status:
            return None
        self._last_status = status
        return status

    def _emit_status(self, on_status: Callable[[str], None]) -> None:
        status = self.poll_status()
        if status is not None:
            on_status(status)

    def _payload(self, **extra) -> dict:
        payload = {"day": self.session.today, "total": self.session.current_total}
        payload.update(extra)
        return payload

    def _require_session(self) -> None:
        if self.session is None:
            raise RuntimeError("TrackerService.start() must be awaited first")
