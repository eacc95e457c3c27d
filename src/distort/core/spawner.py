"""Time-driven enemy and powerup spawning."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, AbstractSet

from distort.config import (
    MAX_ENEMIES,
    POWERUP_CHANCE_BONUS_PER_TIER,
    POWERUP_CHANCE_DIVISOR,
    POWERUP_MIN_DIFFICULTY,
    POWERUP_TIERS,
    SPAWN_INTERVAL_DECAY_BASE,
    SPAWN_INTERVAL_MIN_SECONDS,
    SPAWN_INTERVAL_START_SECONDS,
)
from distort.core.entities import Entity, make_enemy, make_powerup
from distort.runtime import Vec2

if TYPE_CHECKING:
    from distort.core.session import GameSession

LOGGER = logging.getLogger("distort.spawner")


def spawn_interval(elapsed_seconds: float) -> float:
    """Delay before the next spawn, shrinking as the session goes on."""
    interval = SPAWN_INTERVAL_START_SECONDS * SPAWN_INTERVAL_DECAY_BASE ** -elapsed_seconds
    return max(SPAWN_INTERVAL_MIN_SECONDS, interval)


def next_powerup_tier(owned: AbstractSet[str]) -> str | None:
    """The tier directly above the highest one owned, or None once maxed."""
    for tier in POWERUP_TIERS:
        if tier not in owned:
            return tier
    return None


def powerup_spawn_chance(owned: AbstractSet[str]) -> float:
    divisor = POWERUP_CHANCE_DIVISOR
    for tier in POWERUP_TIERS[:-1]:
        if tier in owned:
            divisor -= POWERUP_CHANCE_BONUS_PER_TIER
    return 1.0 / divisor


def _edge_position(session: GameSession) -> Vec2:
    rng = session.rng
    cell = session.arena.cell_size
    width = session.arena.width
    height = session.arena.height
    side = int(rng.random() * 4)
    if side == 0:
        return Vec2(-cell, rng.random() * (height + cell * 2) - cell)
    if side == 1:
        return Vec2(width + cell, rng.random() * (height + cell * 2) - cell)
    if side == 2:
        return Vec2(rng.random() * (width + cell * 2) - cell, -cell)
    return Vec2(rng.random() * (width + cell * 2) - cell, height + cell)


def spawn_enemy(session: GameSession) -> Entity | None:
    if len(session.hostiles) > MAX_ENEMIES:
        LOGGER.debug("Enemy spawn dropped: %d hostiles alive", len(session.hostiles))
        return None
    enemy = make_enemy(
        position=_edge_position(session),
        difficulty=session.difficulty,
        target=session.player.position,
        rng=session.rng,
    )
    return session.spawn(enemy)


def spawn_powerup(session: GameSession) -> Entity | None:
    tier = next_powerup_tier(session.powerups)
    if tier is None or session.difficulty < POWERUP_MIN_DIFFICULTY:
        return None
    if session.rng.random() >= powerup_spawn_chance(session.powerups):
        return None

    rng = session.rng
    width = session.arena.width
    height = session.arena.height
    position = Vec2(width / 4 + rng.random() * width / 2, height / 4 + rng.random() * height / 2)
    LOGGER.debug("Spawning %s powerup", tier)
    return session.spawn(make_powerup(position, tier, rng))


def maybe_spawn(session: GameSession, now: float) -> list[Entity]:
    """Spawn the next wave member once its scheduled time has come."""
    if now < session.next_spawn_time:
        return []
    spawned = [entity for entity in (spawn_enemy(session), spawn_powerup(session)) if entity is not None]
    session.next_spawn_time = now + spawn_interval(now - session.start_time)
    return spawned
