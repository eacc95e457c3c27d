"""Screen-shake accumulator."""

from __future__ import annotations

from dataclasses import dataclass
import math
import random

from distort.config import SHAKE_INTERVAL_SECONDS, TAU
from distort.runtime import ScheduledJob, Scheduler


@dataclass(frozen=True)
class ShakeOffset:
    x: float = 0.0
    y: float = 0.0
    magnitude: float = 0.0


NO_SHAKE = ShakeOffset()


class ScreenShake:
    """Collects decaying camera offsets from every active shake.

    Each shake is a scheduler job sampling a random offset at 60 Hz whose
    magnitude falls linearly to zero over its duration. ``take`` returns the
    strongest sample gathered since the previous call and clears the rest.
    """

    def __init__(self, scheduler: Scheduler, rng: random.Random) -> None:
        self.scheduler = scheduler
        self.rng = rng
        self.samples: list[ShakeOffset] = []

    def trigger(self, max_magnitude: float, duration: float, now: float) -> ScheduledJob:
        def sample(elapsed: float) -> None:
            direction = self.rng.random() * TAU
            magnitude = max_magnitude * (1 - elapsed / duration)
            self.samples.append(
                ShakeOffset(math.cos(direction) * magnitude, math.sin(direction) * magnitude, magnitude)
            )

        return self.scheduler.every(
            SHAKE_INTERVAL_SECONDS,
            sample,
            now=now,
            duration=duration,
            name=f"shake-{max_magnitude:g}",
        )

    def take(self) -> ShakeOffset:
        strongest = max(self.samples, key=lambda offset: offset.magnitude, default=NO_SHAKE)
        self.samples = []
        return strongest
