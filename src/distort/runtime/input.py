"""Logical input state shared by the window loop and the session."""

from __future__ import annotations

from pyglet.math import Vec2

KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_PAUSE = "pause"


class InputState:
    """Held keys and pointer with per-tick hold counters.

    A key or the pointer counts as "just pressed" on the first tick after the
    press, i.e. while its hold counter is exactly 1. ``advance`` is called once
    at the end of every tick, paused or not.
    """

    def __init__(self, pointer: Vec2 | None = None) -> None:
        self.held: dict[str, int] = {}
        self.pointer = pointer if pointer is not None else Vec2(0.0, 0.0)
        self.pointer_held = 0

    def press(self, key: str) -> None:
        if key not in self.held:
            self.held[key] = 1

    def release(self, key: str) -> None:
        self.held.pop(key, None)

    def is_held(self, key: str) -> bool:
        return key in self.held

    def was_just_pressed(self, key: str) -> bool:
        return self.held.get(key) == 1

    def move_pointer(self, x: float, y: float) -> None:
        self.pointer = Vec2(float(x), float(y))

    def press_pointer(self) -> None:
        self.pointer_held = 1

    def release_pointer(self) -> None:
        self.pointer_held = 0

    def pointer_just_pressed(self) -> bool:
        return self.pointer_held == 1

    def release_all(self) -> None:
        self.held.clear()
        self.pointer_held = 0

    def advance(self) -> None:
        for key in self.held:
            self.held[key] += 1
        if self.pointer_held:
            self.pointer_held += 1
