import pytest

from distort.core.entities import (
    Entity,
    EntityKind,
    enemy_hit_points,
    enemy_speed,
    make_bullet,
    make_displacement,
    make_enemy,
    make_particle,
    make_powerup,
    make_score_delta,
)
from distort.core.lifecycle import cleanup, update_entity
from distort.runtime import KEY_RIGHT, KEY_UP, Vec2


@pytest.mark.parametrize(
    "overrides",
    [
        {"position": Vec2(float("nan"), 0.0)},
        {"heading": float("inf")},
        {"speed": "fast"},
        {"distortion": None},
        {"position": (1.0, 2.0, 3.0)},
    ],
)
def test_invalid_motion_fields_fail_construction(overrides):
    fields = {"kind": EntityKind.PARTICLE, "position": Vec2(0.0, 0.0)}
    fields.update(overrides)
    with pytest.raises(ValueError):
        Entity(**fields)


def test_cleanup_clamps_negative_distortion():
    particle = make_particle(Vec2(10.0, 10.0), heading=0.0, speed=1.0, size=2.0)
    particle.distortion = -3.5

    cleanup(particle)

    assert particle.distortion == 0.0


def test_spent_fading_entity_is_removed_after_tick(session):
    pulse = session.spawn(make_displacement(Vec2(300.0, 300.0), distortion=0.1, invert=False, decay=1.0))

    session.tick()

    assert pulse.retired
    assert pulse not in session.entities
    assert all(entity.distortion >= 0 for entity in session.entities)


def test_transparent_entity_is_removed_after_tick(session):
    label = session.spawn(make_score_delta(Vec2(300.0, 300.0), points=1000))
    label.opacity = 0.0

    session.tick()

    assert label not in session.entities


def test_score_delta_fades_out_and_keeps_its_distortion(session):
    label = session.spawn(make_score_delta(Vec2(300.0, 300.0), points=1000))
    label.distortion = 5.0

    update_entity(session, label)

    assert label.opacity == pytest.approx(0.975)
    assert label.distortion == 5.0
    assert label.position.y == pytest.approx(296.0)


def test_bullet_distortion_ramps_once_then_decays(session):
    bullet = session.spawn(make_bullet(Vec2(300.0, 300.0), heading=0.0, speed=0.0, distortion=16.0))
    assert bullet.distortion == 2.0

    for _ in range(20):
        update_entity(session, bullet)
        if bullet.distortion_target == 0:
            break
    assert bullet.distortion == 16.0

    update_entity(session, bullet)

    assert bullet.distortion == pytest.approx(16.0 - 1 / 8)


def test_enemy_stats_scale_with_difficulty():
    assert enemy_hit_points(0) == 6
    assert enemy_hit_points(1) == 8
    assert enemy_speed(0) == 1.0
    assert enemy_speed(3) == 2.0


def test_enemy_turns_toward_player_and_ramps_distortion(session):
    enemy = session.spawn(make_enemy(Vec2(0.0, 244.0), 0, Vec2(0.0, 0.0), session.rng))
    enemy.speed = 0.0
    enemy.recoil = 1.0

    update_entity(session, enemy)

    assert enemy.heading == pytest.approx(0.0)
    assert enemy.distortion == 0.5
    assert enemy.recoil == pytest.approx(0.95)


def test_enemy_freezes_once_session_is_over(session):
    enemy = session.spawn(make_enemy(Vec2(100.0, 100.0), 0, session.player.position, session.rng))
    session.game_over_progress = 0.5

    update_entity(session, enemy)

    assert enemy.speed == 0.0


def test_player_moves_and_grows_capped_distortion(session):
    player = session.player
    start_y = player.position.y
    session.controls.press(KEY_UP)

    for _ in range(40):
        update_entity(session, player)

    assert player.position.y == pytest.approx(start_y - 160.0)
    assert player.distortion == 8.0


def test_player_is_clamped_to_visible_area(session):
    player = session.player
    player.position = Vec2(768.0, 100.0)
    session.controls.press(KEY_RIGHT)

    update_entity(session, player)

    assert player.position.x == 768.0
    assert player.distortion == 0.0


def test_offscreen_powerup_loses_distortion_without_being_removed(session):
    powerup = session.spawn(make_powerup(Vec2(-200.0, -200.0), "double", session.rng))
    powerup.speed = 0.0
    powerup.distortion = 1.0

    update_entity(session, powerup)

    assert powerup.distortion == pytest.approx(0.5)
    assert not powerup.retired
    assert powerup.opacity == pytest.approx(0.15)
