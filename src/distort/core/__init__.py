"""Core simulation modules."""

from .entities import COLLIDABLE_KINDS, HOSTILE_KINDS, Entity, EntityKind
from .grid import DistortionGrid
from .session import GameSession, SessionPhase
from .shake import ScreenShake, ShakeOffset

__all__ = [
    "COLLIDABLE_KINDS",
    "HOSTILE_KINDS",
    "Entity",
    "EntityKind",
    "DistortionGrid",
    "GameSession",
    "SessionPhase",
    "ScreenShake",
    "ShakeOffset",
]
