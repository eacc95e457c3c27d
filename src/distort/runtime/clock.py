"""Time sources for the simulation."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        """Monotonic time in seconds."""


class MonotonicClock:
    """Wall clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()
