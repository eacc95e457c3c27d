import random

import pytest

from distort.core import GameSession
from distort.runtime import InputState, Vec2


class ManualClock:
    def __init__(self, start: float = 100.0):
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


class FixedRandom(random.Random):
    """``random()`` always returns ``value``."""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def controls():
    return InputState(pointer=Vec2(384.0, 304.0))


@pytest.fixture
def session(clock, controls):
    return GameSession(clock=clock, controls=controls, rng=random.Random(7), automatic_firing=False)


def click(session: GameSession) -> None:
    session.controls.press_pointer()
    session.tick()
    session.controls.release_pointer()


def press_key(session: GameSession, key: str) -> None:
    session.controls.press(key)
    session.tick()
    session.controls.release(key)
