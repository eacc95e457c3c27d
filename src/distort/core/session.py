"""Game session: owned state and the title/play/pause/game-over machine."""

from __future__ import annotations

from enum import Enum
import logging
import random

from distort.config import (
    ARENA,
    AUTOMATIC_FIRING,
    BULLET_DISTORTION,
    BULLET_SPEED,
    BULLET_SPREAD,
    BULLETS_BY_POWERUP,
    DIFFICULTY_INTERVAL_SECONDS,
    FIRING_RATE_SECONDS,
    GAME_OVER_RAMP,
    GAME_OVER_STEP,
    HUD_SCORE_STEP,
    PLAYER_START_OFFSET_Y,
    ArenaConfig,
)
from distort.core.entities import Entity, make_bullet, make_player, make_score_delta
from distort.core.grid import DistortionGrid
from distort.core.lifecycle import cleanup, update_entity
from distort.core.shake import NO_SHAKE, ScreenShake, ShakeOffset
from distort.core.spawner import maybe_spawn
from distort.logging_utils import log_key_values
from distort.runtime import KEY_PAUSE, Clock, InputState, Rect, Scheduler, Vec2, heading_between

LOGGER = logging.getLogger("distort.session")


class SessionPhase(str, Enum):
    TITLE_SCREEN = "title_screen"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameSession:
    """Everything one run of the game owns.

    The session is the only place that creates or discards the entity
    collections, score, difficulty and powerup set. ``restart`` cancels every
    scheduled job before rebuilding them, so no timer from an old run can
    touch the new one.
    """

    def __init__(
        self,
        clock: Clock,
        controls: InputState,
        rng: random.Random | None = None,
        arena: ArenaConfig = ARENA,
        automatic_firing: bool = AUTOMATIC_FIRING,
    ) -> None:
        self.clock = clock
        self.controls = controls
        self.rng = rng if rng is not None else random.Random()
        self.arena = arena
        self.bounds = Rect(0.0, 0.0, float(arena.width), float(arena.height))
        self.automatic_firing = bool(automatic_firing)
        self.scheduler = Scheduler()
        self.grid = DistortionGrid(arena)
        self.reset()

    def reset(self) -> None:
        """Discard all run state and return to the title screen."""
        self.scheduler.cancel_all()
        self.entities: list[Entity] = []
        self.hostiles: list[Entity] = []
        self.powerups: set[str] = set()
        self.score = 0
        self.displayed_score = 0
        self.difficulty = 0
        self.at_title_screen = True
        self.is_paused = False
        self.game_over_progress = 0.0
        self.start_time = 0.0
        self.next_spawn_time = 0.0
        self.paused_at: float | None = None
        self.last_fire_time: float | None = None
        self.frame_count = 0
        self.shake = ScreenShake(self.scheduler, self.rng)
        self.shake_offset: ShakeOffset = NO_SHAKE

        start = Vec2(self.arena.width / 2, self.arena.height / 2 + PLAYER_START_OFFSET_Y)
        self.player = self.spawn(make_player(start))
        self.grid.recompute(self.entities)

    @property
    def is_over(self) -> bool:
        return self.game_over_progress > 0

    @property
    def phase(self) -> SessionPhase:
        if self.at_title_screen:
            return SessionPhase.TITLE_SCREEN
        if self.is_paused:
            return SessionPhase.PAUSED
        if self.is_over:
            return SessionPhase.GAME_OVER
        return SessionPhase.PLAYING

    def elapsed(self, now: float | None = None) -> float:
        if self.at_title_screen:
            return 0.0
        current = self.clock.now() if now is None else now
        return current - self.start_time

    # Entity collections

    def spawn(self, entity: Entity) -> Entity:
        self.entities.append(entity)
        if entity.is_hostile:
            self.hostiles.append(entity)
        return entity

    def retire(self, entity: Entity) -> None:
        """Mark ``entity`` for removal; hostiles stop being targets at once."""
        if entity.retired:
            return
        entity.retired = True
        if entity.is_hostile and entity in self.hostiles:
            self.hostiles.remove(entity)

    # Scoring and effects

    def award(self, points: int, position: Vec2) -> None:
        self.score += points
        self.spawn(make_score_delta(position, points))

    def acquire_powerup(self, powerup: str) -> None:
        if powerup not in self.powerups:
            self.powerups.add(powerup)
            LOGGER.info("Powerup acquired: %s", powerup)

    def shake_screen(self, max_magnitude: float, duration: float) -> None:
        self.shake.trigger(max_magnitude, duration, self.clock.now())

    def advance_game_over(self) -> None:
        was_over = self.is_over
        self.game_over_progress = min(1.0, self.game_over_progress + GAME_OVER_STEP)
        if not was_over:
            self._log_game_over()

    def _log_game_over(self) -> None:
        log_key_values(
            "distort.session",
            {
                "score": self.score,
                "difficulty": self.difficulty,
                "elapsed": self.elapsed(),
                "powerups": frozenset(self.powerups),
            },
            prefix="Game over",
        )

    # Transitions

    def begin(self, now: float) -> None:
        self.at_title_screen = False
        self.start_time = now
        self.next_spawn_time = now
        self.scheduler.every(DIFFICULTY_INTERVAL_SECONDS, self._raise_difficulty, now=now, name="difficulty")
        if self.automatic_firing:
            self.scheduler.every(FIRING_RATE_SECONDS, lambda _elapsed: self.fire(), now=now, name="auto-fire")
        LOGGER.info("Session started (automatic firing %s)", "on" if self.automatic_firing else "off")

    def _raise_difficulty(self, _elapsed: float) -> None:
        self.difficulty += 1
        LOGGER.debug("Difficulty raised to %d", self.difficulty)

    def pause(self, now: float) -> bool:
        if self.at_title_screen or self.is_over or self.is_paused:
            return False
        self.is_paused = True
        self.paused_at = now
        LOGGER.info("Paused")
        return True

    def resume(self, now: float) -> None:
        if not self.is_paused:
            return
        # Paused time does not count toward spawning, difficulty or shakes.
        paused_for = now - self.paused_at if self.paused_at is not None else 0.0
        self.start_time += paused_for
        self.next_spawn_time += paused_for
        self.scheduler.shift(paused_for)
        self.is_paused = False
        self.paused_at = None
        LOGGER.info("Resumed after %.1fs", paused_for)

    def restart(self) -> None:
        log_key_values(
            "distort.session",
            {"score": self.score, "difficulty": self.difficulty, "frames": self.frame_count},
            prefix="Restart",
        )
        self.reset()

    def fire(self) -> list[Entity]:
        if self.at_title_screen or self.is_over:
            return []
        count = 1
        for powerup, bullets in BULLETS_BY_POWERUP.items():
            if powerup in self.powerups:
                count = max(count, bullets)
        bullets = []
        for index in range(count):
            heading = self.player.heading
            if count > 1:
                heading += index / (count - 1) * BULLET_SPREAD - BULLET_SPREAD / 2
            bullet = make_bullet(self.player.position, heading, BULLET_SPEED, BULLET_DISTORTION)
            bullets.append(self.spawn(bullet))
        return bullets

    def _fire_if_ready(self, now: float) -> None:
        if self.automatic_firing:
            return
        if self.last_fire_time is None or now - self.last_fire_time > FIRING_RATE_SECONDS:
            self.fire()
            self.last_fire_time = now

    # Tick

    def tick(self) -> None:
        """Advance the session by one fixed step."""
        now = self.clock.now()
        controls = self.controls
        pressed = controls.pointer_just_pressed()

        if not self.is_paused:
            self._aim_player()
            if pressed:
                if self.at_title_screen:
                    self.begin(now)
                if not self.is_over:
                    self._fire_if_ready(now)
                elif self.game_over_progress >= 1:
                    self.restart()
                    controls.advance()
                    return

        if self.is_paused:
            if pressed or controls.was_just_pressed(KEY_PAUSE):
                self.resume(now)
        elif controls.was_just_pressed(KEY_PAUSE):
            self.pause(now)

        if not self.is_paused:
            self._simulate(now)
        controls.advance()

    def _aim_player(self) -> None:
        pointer = self.controls.pointer
        position = self.player.position
        if pointer.x != position.x or pointer.y != position.y:
            self.player.heading = heading_between(position, pointer)

    def _simulate(self, now: float) -> None:
        self.scheduler.advance(now)
        if not self.at_title_screen and not self.is_over:
            maybe_spawn(self, now)

        # Entities spawned during the scan are appended and updated this tick.
        index = 0
        while index < len(self.entities):
            entity = self.entities[index]
            index += 1
            if entity.retired:
                continue
            update_entity(self, entity)
            cleanup(entity)
        self.entities = [entity for entity in self.entities if not entity.retired]

        self.grid.recompute(self.entities)
        if self.is_over:
            self.game_over_progress = min(1.0, self.game_over_progress + GAME_OVER_RAMP)
        if self.displayed_score < self.score:
            self.displayed_score = min(self.score, self.displayed_score + HUD_SCORE_STEP)
        self.shake_offset = self.shake.take()
        self.frame_count += 1
