"""Runtime helpers for Distort."""

from .clock import Clock, MonotonicClock
from .geometry import Rect, Vec2, heading_between, heading_to_vector, offset_along
from .input import KEY_DOWN, KEY_LEFT, KEY_PAUSE, KEY_RIGHT, KEY_UP, InputState
from .scheduler import ScheduledJob, Scheduler

__all__ = [
    "Clock",
    "MonotonicClock",
    "Rect",
    "Vec2",
    "heading_between",
    "heading_to_vector",
    "offset_along",
    "InputState",
    "KEY_UP",
    "KEY_DOWN",
    "KEY_LEFT",
    "KEY_RIGHT",
    "KEY_PAUSE",
    "ScheduledJob",
    "Scheduler",
]
