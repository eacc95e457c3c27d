"""Collision and combat resolution between collidables and hostiles."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from distort.config import (
    BULLET_HIT_PARTICLE_COUNT,
    BULLET_HIT_PARTICLE_SIZE,
    COLLISION_RADIUS,
    DEATH_PARTICLE_COUNT,
    DEATH_PARTICLE_SIZE,
    DISPLACEMENT_DECAY,
    DISPLACEMENT_PER_DIFFICULTY,
    HIT_SPREAD,
    KNOCKBACK_DISTANCE,
    PARTICLE_COUNT_VARIANCE,
    PARTICLE_MIN_SPEED,
    PARTICLE_SIZE_VARIANCE,
    PARTICLE_SPEED_VARIANCE,
    PLAYER_HIT_PARTICLE_COUNT,
    PLAYER_HIT_PARTICLE_SIZE,
    RECOIL_FLASH,
    SHAKE_COLLISION,
    SHAKE_DESTROYED,
    SHAKE_PLAYER_HIT,
    TAU,
)
from distort.core.entities import Entity, EntityKind, make_displacement, make_particle
from distort.runtime import Vec2, heading_between, offset_along

if TYPE_CHECKING:
    from distort.core.session import GameSession

LOGGER = logging.getLogger("distort.combat")


def find_collision(session: GameSession, entity: Entity) -> Entity | None:
    """Return the first live hostile within collision range, if any."""
    for hostile in session.hostiles:
        if entity.position.distance(hostile.position) < COLLISION_RADIUS:
            return hostile
    return None


def emit_particles(
    session: GameSession,
    origin: Vec2,
    heading: float,
    size: float,
    spread: float,
    count: int,
) -> list[Entity]:
    """Spawn ``count`` particles flying back from ``heading`` within ``spread``."""
    rng = session.rng
    particles = []
    for _ in range(count):
        size_with_variance = size + rng.random() * PARTICLE_SIZE_VARIANCE
        particle = make_particle(
            position=origin,
            heading=heading + TAU / 2 - spread / 2 + spread * rng.random(),
            speed=PARTICLE_MIN_SPEED + rng.random() * PARTICLE_SPEED_VARIANCE,
            size=size_with_variance,
        )
        particles.append(session.spawn(particle))
    return particles


def _particle_count(session: GameSession, base_count: int) -> int:
    return base_count + int(session.rng.random() * PARTICLE_COUNT_VARIANCE)


def resolve_collisions(session: GameSession, entity: Entity) -> int:
    """Resolve ``entity`` against the first hostile it touches.

    Returns the number of entities retired, counting ``entity`` itself when a
    bullet is spent on a hit.
    """
    hostile = find_collision(session, entity)
    if hostile is None:
        return 0

    retired = 0
    is_player = entity.kind is EntityKind.PLAYER
    is_powerup = hostile.kind is EntityKind.POWERUP

    if not is_powerup:
        if not is_player:
            session.retire(entity)
            retired += 1
    elif is_player and hostile.powerup is not None:
        session.acquire_powerup(hostile.powerup)

    if is_player:
        if not is_powerup:
            session.shake_screen(*SHAKE_PLAYER_HIT)
            session.advance_game_over()
    else:
        session.shake_screen(*SHAKE_COLLISION)

    if not is_powerup:
        if is_player:
            size, count = PLAYER_HIT_PARTICLE_SIZE, _particle_count(session, PLAYER_HIT_PARTICLE_COUNT)
        else:
            size, count = BULLET_HIT_PARTICLE_SIZE, _particle_count(session, BULLET_HIT_PARTICLE_COUNT)
        emit_particles(session, entity.position, entity.heading, size, HIT_SPREAD, count)

    hostile.recoil = RECOIL_FLASH
    hostile.hit_points -= 1
    away_from_player = heading_between(session.player.position, hostile.position)
    hostile.position = offset_along(hostile.position, away_from_player, KNOCKBACK_DISTANCE)

    if hostile.hit_points <= 0:
        retired += _destroy_hostile(session, hostile, awarded=is_player or not is_powerup)
    return retired


def _destroy_hostile(session: GameSession, hostile: Entity, awarded: bool) -> int:
    is_powerup = hostile.kind is EntityKind.POWERUP
    if awarded:
        session.award(hostile.points, hostile.position)

    session.retire(hostile)
    LOGGER.debug("Destroyed %s at (%.1f, %.1f)", hostile.kind.value, hostile.position.x, hostile.position.y)
    if not is_powerup:
        session.shake_screen(*SHAKE_DESTROYED)

    # Enemies explode; powerups implode.
    session.spawn(
        make_displacement(
            position=hostile.position,
            distortion=(hostile.difficulty + 1) * DISPLACEMENT_PER_DIFFICULTY,
            invert=is_powerup,
            decay=DISPLACEMENT_DECAY,
        )
    )
    emit_particles(
        session,
        hostile.position,
        hostile.heading,
        DEATH_PARTICLE_SIZE,
        TAU,
        _particle_count(session, DEATH_PARTICLE_COUNT),
    )
    return 1
