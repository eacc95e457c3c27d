"""Generic 2D geometry helpers for top-left game spaces."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pyglet.math import Vec2


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in top-left coordinate space."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def clamp_point(self, position: Vec2) -> Vec2:
        return Vec2(
            min(self.right, max(self.left, position.x)),
            min(self.bottom, max(self.top, position.y)),
        )

    def is_circle_outside(self, position: Vec2, radius: float) -> bool:
        """True when a circle of ``radius`` lies entirely beyond one of the edges."""
        return (
            position.x + radius < self.left
            or position.x - radius >= self.right
            or position.y + radius < self.top
            or position.y - radius >= self.bottom
        )


def heading_to_vector(angle_radians: float) -> Vec2:
    return Vec2(math.cos(angle_radians), math.sin(angle_radians))


def heading_between(origin: Vec2, target: Vec2) -> float:
    return math.atan2(target.y - origin.y, target.x - origin.x)


def offset_along(position: Vec2, angle_radians: float, distance: float) -> Vec2:
    return position + heading_to_vector(angle_radians) * distance
