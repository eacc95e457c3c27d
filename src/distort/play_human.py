"""Human-play loop: an Arcade window feeding input into a game session."""

from __future__ import annotations

if __package__ is None or __package__ == "":
    import sys
    from pathlib import Path

    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import random

import arcade

from distort.config import AUTOMATIC_FIRING, FLAGS, FPS, SCREEN_HEIGHT, SCREEN_WIDTH, WINDOW_TITLE
from distort.core import GameSession
from distort.logging_utils import configure_logging, log_run_context
from distort.runtime import KEY_DOWN, KEY_LEFT, KEY_PAUSE, KEY_RIGHT, KEY_UP, InputState, MonotonicClock, Vec2
from distort.ui.renderer import Renderer

KEY_BINDINGS = {
    arcade.key.W: KEY_UP,
    arcade.key.S: KEY_DOWN,
    arcade.key.A: KEY_LEFT,
    arcade.key.D: KEY_RIGHT,
    arcade.key.P: KEY_PAUSE,
}


class DistortWindow(arcade.Window):
    """Runs one session tick per fixed update and draws the latest snapshot."""

    def __init__(self, session: GameSession, controls: InputState, renderer: Renderer) -> None:
        super().__init__(SCREEN_WIDTH, SCREEN_HEIGHT, WINDOW_TITLE, update_rate=1 / FPS)
        self.session = session
        self.controls = controls
        self.renderer = renderer
        self.background_color = arcade.color.BLACK

    def _move_pointer(self, x: float, y: float) -> None:
        self.controls.move_pointer(x, self.height - y)

    def on_update(self, delta_time: float) -> None:
        self.session.tick()

    def on_draw(self) -> None:
        self.clear()
        self.renderer.draw_frame(self.session)

    def on_key_press(self, symbol: int, modifiers: int) -> None:
        key = KEY_BINDINGS.get(symbol)
        if key is not None:
            self.controls.press(key)

    def on_key_release(self, symbol: int, modifiers: int) -> None:
        key = KEY_BINDINGS.get(symbol)
        if key is not None:
            self.controls.release(key)

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int) -> None:
        self._move_pointer(x, y)

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int) -> None:
        self._move_pointer(x, y)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> None:
        if button != arcade.MOUSE_BUTTON_LEFT:
            return
        self._move_pointer(x, y)
        self.controls.press_pointer()

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int) -> None:
        if button != arcade.MOUSE_BUTTON_LEFT:
            return
        self._move_pointer(x, y)
        self.controls.release_pointer()

    def on_deactivate(self) -> None:
        self.controls.release_all()
        self.session.pause(self.session.clock.now())


def run_human() -> None:
    configure_logging(FLAGS.log_level)
    controls = InputState(pointer=Vec2(SCREEN_WIDTH / 2, SCREEN_HEIGHT / 2))
    session = GameSession(
        clock=MonotonicClock(),
        controls=controls,
        rng=random.Random(FLAGS.seed),
        automatic_firing=AUTOMATIC_FIRING,
    )
    DistortWindow(session, controls, Renderer(SCREEN_WIDTH, SCREEN_HEIGHT))
    log_run_context(
        "play-human",
        {
            "fps": FPS,
            "automatic_firing": AUTOMATIC_FIRING,
            "seed": FLAGS.seed,
        },
    )
    arcade.run()


if __name__ == "__main__":
    run_human()
