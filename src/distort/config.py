"""Central configuration for Distort."""

from __future__ import annotations

from dataclasses import dataclass
import math

from distort.utils import env_flag, env_int, env_str


@dataclass(frozen=True)
class RuntimeFlags:
    automatic_firing: bool
    seed: int | None
    log_level: str


@dataclass(frozen=True)
class ArenaConfig:
    width: int
    height: int
    cell_size: int
    boundary_cells: int

    @property
    def grid_columns(self) -> int:
        return self.width // self.cell_size + 2 * self.boundary_cells + 1

    @property
    def grid_rows(self) -> int:
        return self.height // self.cell_size + 2 * self.boundary_cells + 1

    @property
    def max_grid_displacement(self) -> float:
        return float(self.cell_size * self.boundary_cells * 4)


FLAGS = RuntimeFlags(
    automatic_firing=env_flag("DISTORT_AUTOMATIC_FIRING", False),
    seed=env_int("DISTORT_SEED", None),
    log_level=env_str("DISTORT_LOG_LEVEL", "INFO"),
)

ARENA = ArenaConfig(
    width=768,
    height=608,
    cell_size=32,
    boundary_cells=1,
)

TAU = 2 * math.pi

# Runtime
FPS = 60
WINDOW_TITLE = "Distort"
AUTOMATIC_FIRING = FLAGS.automatic_firing

# Arena dimensions
SCREEN_WIDTH = ARENA.width
SCREEN_HEIGHT = ARENA.height

# Distortion grid
GRID_FALLOFF_BASE = 1.5

# Player
PLAYER_SPEED = 4.0
PLAYER_START_OFFSET_Y = -60.0
PLAYER_START_HEADING = TAU / 4
PLAYER_DISTORTION_GROWTH = 0.5
PLAYER_MAX_DISTORTION = PLAYER_SPEED * 2

# Firing
FIRING_RATE_SECONDS = 0.1
BULLET_SPEED = 10.0
BULLET_DISTORTION = 16.0
BULLET_DISTORTION_SEED_DIVISOR = 8.0
BULLET_DISTORTION_RAMP = 2.0
BULLET_SPREAD = TAU / 16
BULLETS_BY_POWERUP = {"quad": 4, "triple": 3, "double": 2}

# Entity defaults
DEFAULT_DECAY = 1 / 8
OFFSCREEN_DECAY_FACTOR = 4.0

# Enemies
MAX_ENEMIES = 30
ENEMY_BASE_SIDES = 3
ENEMY_HIT_POINT_EXPONENT = 1.5
ENEMY_POINTS = 1000
ENEMY_RECOIL_DECAY = 0.05
ENEMY_DISTORTION_PER_SIDE = 4.0
ENEMY_DISTORTION_RAMP = 0.5
ENEMY_SPIN_PER_TICK = TAU / 60 / 8

# Powerups
POWERUP_TIERS = ("double", "triple", "quad")
POWERUP_MIN_DIFFICULTY = 2
POWERUP_CHANCE_DIVISOR = 6
POWERUP_CHANCE_BONUS_PER_TIER = 2
POWERUP_SPEED = 0.5
POWERUP_HIT_POINTS = 1
POWERUP_POINTS = 2500
POWERUP_DIFFICULTY = 3
POWERUP_START_OPACITY = 0.1
POWERUP_FADE_IN = 0.05

# Collisions and combat
COLLISION_RADIUS = 32.0
KNOCKBACK_DISTANCE = 20.0
RECOIL_FLASH = 1.0
HIT_SPREAD = TAU / 8
PLAYER_HIT_PARTICLE_SIZE = 4.0
PLAYER_HIT_PARTICLE_COUNT = 16
BULLET_HIT_PARTICLE_SIZE = 2.0
BULLET_HIT_PARTICLE_COUNT = 8
DEATH_PARTICLE_SIZE = 4.0
DEATH_PARTICLE_COUNT = 8
PARTICLE_COUNT_VARIANCE = 16
PARTICLE_MIN_SPEED = 0.5
PARTICLE_SPEED_VARIANCE = 2.0
PARTICLE_SIZE_VARIANCE = 1.0
DISPLACEMENT_PER_DIFFICULTY = 25.0
DISPLACEMENT_DECAY = 4.0

# Score labels
SCORE_DELTA_SPEED = 4.0
SCORE_DELTA_FADE = 0.025
HUD_SCORE_STEP = 100

# Screen shake (magnitude px, duration s)
SHAKE_INTERVAL_SECONDS = 1 / 60
SHAKE_PLAYER_HIT = (50.0, 1.5)
SHAKE_COLLISION = (10.0, 0.2)
SHAKE_DESTROYED = (100.0, 0.4)

# Session pacing
DIFFICULTY_INTERVAL_SECONDS = 30.0
SPAWN_INTERVAL_START_SECONDS = 5.0
SPAWN_INTERVAL_MIN_SECONDS = 0.2
SPAWN_INTERVAL_DECAY_BASE = 1.02
GAME_OVER_STEP = 0.01
GAME_OVER_RAMP = 0.01

# Rendering
FONT_NAME = ("CamingoCode", "Helvetica", "Arial")
FONT_SIZE_HUD = 24
FONT_SIZE_TITLE = 80
FONT_SIZE_GAME_OVER = 64
FONT_SIZE_HINT = 20
FONT_SIZE_SCORE_DELTA = 18
HUD_MARGIN = 12

# Colors
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
COLOR_GRID_NEAR = (255, 0, 0)
COLOR_GRID_FAR = (0, 0, 255)
