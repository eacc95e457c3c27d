"""Periodic jobs owned by a single game session."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

LOGGER = logging.getLogger("distort.scheduler")


@dataclass(eq=False)
class ScheduledJob:
    name: str
    interval: float
    callback: Callable[[float], None]
    started_at: float
    next_due: float
    expires_at: float | None = None
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class Scheduler:
    """Fires periodic callbacks from the tick loop.

    Callbacks receive the time elapsed since the job started, measured at the
    scheduled fire time. Missed intervals are caught up on the next
    ``advance``.
    """

    def __init__(self) -> None:
        self.jobs: list[ScheduledJob] = []

    def __len__(self) -> int:
        return len(self.jobs)

    def every(
        self,
        interval: float,
        callback: Callable[[float], None],
        *,
        now: float,
        duration: float | None = None,
        name: str = "job",
    ) -> ScheduledJob:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        job = ScheduledJob(
            name=name,
            interval=float(interval),
            callback=callback,
            started_at=now,
            next_due=now + interval,
            expires_at=None if duration is None else now + duration,
        )
        self.jobs.append(job)
        return job

    def advance(self, now: float) -> int:
        fired = 0
        for job in list(self.jobs):
            while not job.cancelled and job.next_due <= now and not job.is_expired(job.next_due):
                due = job.next_due
                job.next_due += job.interval
                job.callback(due - job.started_at)
                fired += 1
        self.jobs = [job for job in self.jobs if not job.cancelled and not job.is_expired(job.next_due)]
        return fired

    def shift(self, offset: float) -> None:
        """Delay every job by ``offset`` seconds, e.g. after a pause."""
        for job in self.jobs:
            job.started_at += offset
            job.next_due += offset
            if job.expires_at is not None:
                job.expires_at += offset

    def cancel_all(self) -> None:
        if self.jobs:
            LOGGER.debug("Cancelling %d scheduled jobs", len(self.jobs))
        for job in self.jobs:
            job.cancel()
        self.jobs = []
