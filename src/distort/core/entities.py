"""Entity model: one shared record tagged with its kind."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math
import random

from distort.config import (
    BULLET_DISTORTION_SEED_DIVISOR,
    DEFAULT_DECAY,
    ENEMY_BASE_SIDES,
    ENEMY_HIT_POINT_EXPONENT,
    ENEMY_POINTS,
    PLAYER_START_HEADING,
    POWERUP_DIFFICULTY,
    POWERUP_HIT_POINTS,
    POWERUP_POINTS,
    POWERUP_SPEED,
    POWERUP_START_OPACITY,
    SCORE_DELTA_SPEED,
    TAU,
)
from distort.runtime import Vec2, heading_between
from distort.utils import is_finite_number


class EntityKind(str, Enum):
    PLAYER = "player"
    BULLET = "bullet"
    ENEMY = "enemy"
    POWERUP = "powerup"
    PARTICLE = "particle"
    SCORE_DELTA = "score_delta"
    DISPLACEMENT = "displacement"


COLLIDABLE_KINDS = frozenset({EntityKind.PLAYER, EntityKind.BULLET})
HOSTILE_KINDS = frozenset({EntityKind.ENEMY, EntityKind.POWERUP})


@dataclass(eq=False)
class Entity:
    """A simulation object.

    The shared fields drive motion, fading and grid distortion. The trailing
    fields only carry meaning for some kinds: hostiles (enemies and powerups)
    use ``difficulty``, ``hit_points``, ``points`` and ``recoil``; bullets use
    ``distortion_target``; particles use ``size``; displacements use
    ``invert``.
    """

    kind: EntityKind
    position: Vec2
    heading: float = 0.0
    speed: float = 0.0
    distortion: float = 0.0
    fade: bool = False
    opacity: float = 1.0
    decay: float = DEFAULT_DECAY
    retired: bool = False

    difficulty: int = 0
    hit_points: int = 0
    points: int = 0
    recoil: float = 0.0
    spin: float = 0.0
    powerup: str | None = None
    distortion_target: float = 0.0
    size: float = 0.0
    invert: bool = False

    def __post_init__(self) -> None:
        fields = {
            "position.x": getattr(self.position, "x", None),
            "position.y": getattr(self.position, "y", None),
            "heading": self.heading,
            "speed": self.speed,
            "distortion": self.distortion,
        }
        invalid = {name: value for name, value in fields.items() if not is_finite_number(value)}
        if invalid:
            raise ValueError(f"{self.kind.value} entity created with invalid properties: {invalid}")

    @property
    def is_hostile(self) -> bool:
        return self.kind in HOSTILE_KINDS

    @property
    def is_collidable(self) -> bool:
        return self.kind in COLLIDABLE_KINDS

    @property
    def sides(self) -> int:
        return self.difficulty + ENEMY_BASE_SIDES


def enemy_hit_points(difficulty: int) -> int:
    return math.ceil((difficulty + ENEMY_BASE_SIDES) ** ENEMY_HIT_POINT_EXPONENT)


def enemy_speed(difficulty: int) -> float:
    return (difficulty + ENEMY_BASE_SIDES) / 3


def make_player(position: Vec2) -> Entity:
    return Entity(kind=EntityKind.PLAYER, position=position, heading=PLAYER_START_HEADING)


def make_bullet(position: Vec2, heading: float, speed: float, distortion: float) -> Entity:
    # Distortion starts small and ramps up so the grid does not jump.
    return Entity(
        kind=EntityKind.BULLET,
        position=position,
        heading=heading,
        speed=speed,
        distortion=distortion / BULLET_DISTORTION_SEED_DIVISOR,
        distortion_target=distortion,
        fade=True,
    )


def make_enemy(position: Vec2, difficulty: int, target: Vec2, rng: random.Random) -> Entity:
    spin_direction = 1 if rng.random() > 0.5 else -1
    return Entity(
        kind=EntityKind.ENEMY,
        position=position,
        heading=heading_between(position, target),
        speed=enemy_speed(difficulty),
        difficulty=difficulty,
        hit_points=enemy_hit_points(difficulty),
        points=ENEMY_POINTS,
        spin=rng.random() * TAU * spin_direction,
    )


def make_powerup(position: Vec2, powerup: str, rng: random.Random) -> Entity:
    return Entity(
        kind=EntityKind.POWERUP,
        position=position,
        heading=rng.random() * TAU,
        speed=POWERUP_SPEED,
        opacity=POWERUP_START_OPACITY,
        difficulty=POWERUP_DIFFICULTY,
        hit_points=POWERUP_HIT_POINTS,
        points=POWERUP_POINTS,
        powerup=powerup,
    )


def make_particle(position: Vec2, heading: float, speed: float, size: float) -> Entity:
    return Entity(
        kind=EntityKind.PARTICLE,
        position=position,
        heading=heading,
        speed=speed,
        distortion=size,
        size=size,
        fade=True,
    )


def make_score_delta(position: Vec2, points: int) -> Entity:
    return Entity(
        kind=EntityKind.SCORE_DELTA,
        position=position,
        heading=-TAU / 4,
        speed=SCORE_DELTA_SPEED,
        points=points,
    )


def make_displacement(position: Vec2, distortion: float, invert: bool, decay: float) -> Entity:
    return Entity(
        kind=EntityKind.DISPLACEMENT,
        position=position,
        distortion=distortion,
        invert=invert,
        decay=decay,
        fade=True,
    )
