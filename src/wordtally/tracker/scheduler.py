"""Interval jobs for a running tracker via APScheduler.

Wraps APScheduler's ``AsyncIOScheduler`` so the tracker can register its
periodic work (day rollover checks, persistence, status refresh) as
independent jobs. The tracking core has no timers of its own.

APScheduler is imported lazily (only in :meth:`start`) so the module
can be imported without pulling it in.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

JobFn = Callable[[], Any] | Callable[[], Awaitable[Any]]
"""Sync or async zero-argument callable run on each tick."""


def _on_loop(fn: JobFn) -> Callable[[], Awaitable[Any]]:
    """Wrap sync jobs as coroutines so APScheduler runs them on the loop, not a worker thread."""
    if inspect.iscoroutinefunction(fn):
        return fn

    async def runner() -> Any:
        return fn()

    return runner


@dataclass
class IntervalJob:
    """A named job fired every ``seconds``."""

    id: str
    fn: JobFn
    seconds: float
    enabled: bool = True


class TrackerScheduler:
    """Runs registered interval jobs on the current asyncio loop."""

    def __init__(self) -> None:
        self._scheduler: Any = None  # AsyncIOScheduler, lazily created
        self._jobs: list[IntervalJob] = []

    def add_interval(self, job_id: str, fn: JobFn, seconds: float) -> None:
        """Register ``fn`` to run every ``seconds``. Must be called before :meth:`start`."""
        if seconds <= 0:
            raise ValueError(f"Interval for {job_id!r} must be positive, got {seconds}")
        if any(job.id == job_id for job in self._jobs):
            raise ValueError(f"Duplicate job id: {job_id}")
        self._jobs.append(IntervalJob(id=job_id, fn=fn, seconds=seconds))

    @property
    def jobs(self) -> list[IntervalJob]:
        return list(self._jobs)

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        """Create the APScheduler instance, add all jobs, and start.

        Must be called from a running asyncio event loop.
        """
        from apscheduler.schedulers.asyncio import AsyncIOScheduler
        from apscheduler.triggers.interval import IntervalTrigger

        self._scheduler = AsyncIOScheduler()
        for job in self._jobs:
            if not job.enabled:
                continue
            self._scheduler.add_job(
                _on_loop(job.fn),
                trigger=IntervalTrigger(seconds=job.seconds),
                id=job.id,
                replace_existing=True,
                max_instances=1,
                coalesce=True,
            )
            logger.debug(f"Registered job {job.id}: every {job.seconds}s")

        self._scheduler.start()
        logger.info(f"TrackerScheduler started with {len(self._jobs)} job(s)")

    def shutdown(self) -> None:
        """Stop the APScheduler instance without waiting for running jobs."""
        if self._scheduler and self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("TrackerScheduler shut down")
        self._scheduler = None
