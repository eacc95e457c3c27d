import random

import pytest

from distort.core.shake import ScreenShake
from distort.runtime import KEY_UP, InputState, Rect, Scheduler, Vec2


def test_scheduler_fires_and_catches_up():
    scheduler = Scheduler()
    calls = []
    scheduler.every(1.0, calls.append, now=10.0)

    assert scheduler.advance(10.5) == 0
    assert scheduler.advance(12.5) == 2
    assert calls == [1.0, 2.0]


def test_scheduler_drops_expired_jobs():
    scheduler = Scheduler()
    calls = []
    scheduler.every(1 / 60, calls.append, now=0.0, duration=0.2)

    scheduler.advance(1.0)

    assert len(calls) in (11, 12)
    assert len(scheduler) == 0


def test_scheduler_shift_delays_jobs():
    scheduler = Scheduler()
    calls = []
    scheduler.every(1.0, calls.append, now=0.0)

    scheduler.shift(5.0)
    scheduler.advance(5.5)
    assert calls == []

    scheduler.advance(6.0)
    assert calls == [1.0]


def test_scheduler_cancel_all():
    scheduler = Scheduler()
    calls = []
    job = scheduler.every(1.0, calls.append, now=0.0)

    scheduler.cancel_all()
    scheduler.advance(10.0)

    assert job.cancelled
    assert calls == []
    assert len(scheduler) == 0


def test_scheduler_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        Scheduler().every(0.0, lambda elapsed: None, now=0.0)


def test_input_edges_and_hold_counters():
    controls = InputState()
    controls.press(KEY_UP)

    assert controls.is_held(KEY_UP)
    assert controls.was_just_pressed(KEY_UP)

    controls.advance()
    controls.press(KEY_UP)
    assert controls.is_held(KEY_UP)
    assert not controls.was_just_pressed(KEY_UP)

    controls.release(KEY_UP)
    assert not controls.is_held(KEY_UP)


def test_pointer_press_is_an_edge():
    controls = InputState()
    controls.move_pointer(12, 34)
    controls.press_pointer()

    assert controls.pointer_just_pressed()
    controls.advance()
    assert controls.pointer_held == 2
    assert not controls.pointer_just_pressed()
    assert (controls.pointer.x, controls.pointer.y) == (12.0, 34.0)


def test_rect_clamps_and_detects_outside_circles():
    bounds = Rect(0.0, 0.0, 100.0, 50.0)

    clamped = bounds.clamp_point(Vec2(150.0, -5.0))
    assert (clamped.x, clamped.y) == (100.0, 0.0)
    assert bounds.is_circle_outside(Vec2(-11.0, 20.0), 10.0)
    assert not bounds.is_circle_outside(Vec2(-9.0, 20.0), 10.0)
    assert bounds.is_circle_outside(Vec2(50.0, 60.0), 5.0)


def test_screen_shake_takes_strongest_sample_and_clears():
    scheduler = Scheduler()
    shake = ScreenShake(scheduler, random.Random(0))
    shake.trigger(10.0, 0.2, now=0.0)
    shake.trigger(50.0, 1.5, now=0.0)

    scheduler.advance(1 / 60)
    strongest = shake.take()

    assert strongest.magnitude == pytest.approx(50.0 * (1 - (1 / 60) / 1.5))
    assert (strongest.x ** 2 + strongest.y ** 2) ** 0.5 == pytest.approx(strongest.magnitude)
    assert shake.take().magnitude == 0.0


def test_screen_shake_expires():
    scheduler = Scheduler()
    shake = ScreenShake(scheduler, random.Random(0))
    shake.trigger(100.0, 0.4, now=0.0)

    scheduler.advance(5.0)
    shake.take()
    scheduler.advance(10.0)

    assert len(scheduler) == 0
    assert shake.take().magnitude == 0.0
