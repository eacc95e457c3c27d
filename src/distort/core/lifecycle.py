"""Per-tick entity updates.

Each kind's updater composes the shared steps below. Updaters return how many
entities were retired while they ran; retired entities stay in the session's
collection until the end-of-scan filter pass.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from distort.config import (
    BULLET_DISTORTION_RAMP,
    ENEMY_DISTORTION_PER_SIDE,
    ENEMY_DISTORTION_RAMP,
    ENEMY_RECOIL_DECAY,
    ENEMY_SPIN_PER_TICK,
    OFFSCREEN_DECAY_FACTOR,
    PLAYER_DISTORTION_GROWTH,
    PLAYER_MAX_DISTORTION,
    PLAYER_SPEED,
    POWERUP_FADE_IN,
    SCORE_DELTA_FADE,
)
from distort.core.combat import resolve_collisions
from distort.core.entities import Entity, EntityKind
from distort.runtime import KEY_DOWN, KEY_LEFT, KEY_RIGHT, KEY_UP, Vec2, heading_between, heading_to_vector

if TYPE_CHECKING:
    from distort.core.session import GameSession


def advance_entity(session: GameSession, entity: Entity) -> int:
    """Move the entity, decay its distortion and retire it once spent."""
    if entity.speed:
        entity.position = entity.position + heading_to_vector(entity.heading) * entity.speed

    offscreen = session.bounds.is_circle_outside(entity.position, max(0.0, entity.distortion))
    if entity.fade or (offscreen and entity.kind is EntityKind.POWERUP):
        entity.distortion -= entity.decay * (OFFSCREEN_DECAY_FACTOR if offscreen else 1.0)

    if (entity.fade and entity.distortion <= 0) or entity.opacity <= 0:
        session.retire(entity)
        return 1
    return 0


def collide(session: GameSession, entity: Entity) -> int:
    if entity.retired or not entity.is_collidable:
        return 0
    return resolve_collisions(session, entity)


def cleanup(entity: Entity) -> None:
    entity.distortion = max(0.0, entity.distortion)


def _steer_player(session: GameSession, player: Entity) -> None:
    controls = session.controls
    step_x = 0.0
    step_y = 0.0
    if controls.is_held(KEY_UP):
        step_y -= PLAYER_SPEED
    if controls.is_held(KEY_DOWN):
        step_y += PLAYER_SPEED
    if controls.is_held(KEY_LEFT):
        step_x -= PLAYER_SPEED
    if controls.is_held(KEY_RIGHT):
        step_x += PLAYER_SPEED

    previous = player.position
    player.position = session.bounds.clamp_point(previous + Vec2(step_x, step_y))
    # Moving leaves a ripple in the grid.
    if player.position.x != previous.x or player.position.y != previous.y:
        player.distortion = min(player.distortion + PLAYER_DISTORTION_GROWTH, PLAYER_MAX_DISTORTION)


def _update_player(session: GameSession, entity: Entity) -> int:
    retired = advance_entity(session, entity)
    retired += collide(session, entity)
    _steer_player(session, entity)
    return retired


def _update_bullet(session: GameSession, entity: Entity) -> int:
    retired = advance_entity(session, entity)
    retired += collide(session, entity)
    if entity.distortion < entity.distortion_target:
        entity.distortion = min(entity.distortion_target, entity.distortion + BULLET_DISTORTION_RAMP)
        if entity.distortion == entity.distortion_target:
            entity.distortion_target = 0.0
    return retired


def _update_enemy(session: GameSession, entity: Entity) -> int:
    retired = advance_entity(session, entity)
    entity.recoil = max(entity.recoil - ENEMY_RECOIL_DECAY, 0.0)
    target = entity.sides * ENEMY_DISTORTION_PER_SIDE
    if entity.distortion < target:
        entity.distortion = min(target, entity.distortion + ENEMY_DISTORTION_RAMP)
    entity.spin += ENEMY_SPIN_PER_TICK * (1 if entity.spin >= 0 else -1)
    if session.is_over:
        entity.speed = 0.0
    entity.heading = heading_between(entity.position, session.player.position)
    return retired


def _update_powerup(session: GameSession, entity: Entity) -> int:
    retired = advance_entity(session, entity)
    entity.opacity = min(1.0, entity.opacity + POWERUP_FADE_IN)
    return retired


def _update_score_delta(session: GameSession, entity: Entity) -> int:
    retired = advance_entity(session, entity)
    entity.opacity -= SCORE_DELTA_FADE
    return retired


_UPDATERS: dict[EntityKind, Callable[["GameSession", Entity], int]] = {
    EntityKind.PLAYER: _update_player,
    EntityKind.BULLET: _update_bullet,
    EntityKind.ENEMY: _update_enemy,
    EntityKind.POWERUP: _update_powerup,
    EntityKind.PARTICLE: advance_entity,
    EntityKind.SCORE_DELTA: _update_score_delta,
    EntityKind.DISPLACEMENT: advance_entity,
}


def update_entity(session: GameSession, entity: Entity) -> int:
    return _UPDATERS[entity.kind](session, entity)
