import random

import pytest

from conftest import FixedRandom
from distort.config import MAX_ENEMIES
from distort.core.entities import EntityKind, make_enemy
from distort.core.spawner import (
    maybe_spawn,
    next_powerup_tier,
    powerup_spawn_chance,
    spawn_enemy,
    spawn_interval,
    spawn_powerup,
)
from distort.runtime import Vec2


def _fill_enemies(session, count):
    for _ in range(count):
        session.spawn(make_enemy(Vec2(-32.0, 10.0), 0, session.player.position, session.rng))


def test_enemy_spawn_is_dropped_above_ceiling(session):
    _fill_enemies(session, MAX_ENEMIES + 1)
    entity_count = len(session.entities)

    assert spawn_enemy(session) is None
    assert len(session.entities) == entity_count
    assert len(session.hostiles) == MAX_ENEMIES + 1


def test_enemy_spawn_allowed_at_ceiling(session):
    _fill_enemies(session, MAX_ENEMIES)

    assert spawn_enemy(session) is not None
    assert len(session.hostiles) == MAX_ENEMIES + 1


def test_enemies_spawn_one_cell_outside_an_edge(session):
    session.rng = random.Random(3)
    session.difficulty = 2

    for _ in range(25):
        enemy = spawn_enemy(session)
        x, y = enemy.position.x, enemy.position.y
        assert x in (-32, 800) or y in (-32, 640)
        assert -32 <= x <= 800
        assert -32 <= y <= 640
        assert enemy.difficulty == 2
        assert enemy.hit_points == 12


def test_powerup_requires_minimum_difficulty(session):
    session.rng = FixedRandom(0.0)
    session.difficulty = 1

    assert spawn_powerup(session) is None


def test_powerup_chance_rises_with_owned_tiers():
    assert powerup_spawn_chance(set()) == pytest.approx(1 / 6)
    assert powerup_spawn_chance({"double"}) == pytest.approx(1 / 4)
    assert powerup_spawn_chance({"double", "triple"}) == pytest.approx(1 / 2)


def test_powerup_spawn_respects_chance(session):
    session.difficulty = 2
    session.rng = FixedRandom(0.2)

    assert spawn_powerup(session) is None

    session.powerups.add("double")
    powerup = spawn_powerup(session)

    assert powerup is not None
    assert powerup.powerup == "triple"


def test_powerup_tiers_are_granted_in_order(session):
    session.difficulty = 2
    session.rng = FixedRandom(0.0)

    granted = []
    for tier in ("double", "triple"):
        powerup = spawn_powerup(session)
        granted.append(powerup.powerup)
        session.acquire_powerup(tier)

    assert granted == ["double", "triple"]
    assert next_powerup_tier(session.powerups) == "quad"
    assert spawn_powerup(session).powerup == "quad"

    session.acquire_powerup("quad")
    assert next_powerup_tier(session.powerups) is None
    assert spawn_powerup(session) is None


def test_powerups_spawn_in_central_half(session):
    session.difficulty = 5
    session.rng = FixedRandom(0.0)

    powerup = spawn_powerup(session)

    assert powerup.kind is EntityKind.POWERUP
    assert powerup.position.x == 192.0
    assert powerup.position.y == 152.0
    assert powerup in session.hostiles


def test_spawn_interval_decays_to_floor():
    assert spawn_interval(0.0) == 5.0
    assert spawn_interval(60.0) < spawn_interval(30.0) < 5.0
    assert spawn_interval(10_000.0) == 0.2


def test_maybe_spawn_waits_for_schedule(session, clock):
    session.start_time = clock.now()
    session.next_spawn_time = clock.now() + 1.0

    assert maybe_spawn(session, clock.now()) == []

    clock.advance(1.0)
    spawned = maybe_spawn(session, clock.now())

    assert [entity.kind for entity in spawned] == [EntityKind.ENEMY]
    assert session.next_spawn_time == pytest.approx(clock.now() + spawn_interval(1.0))
