"""Background lattice warped by nearby entities."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from distort.config import ARENA, GRID_FALLOFF_BASE, ArenaConfig
from distort.core.entities import Entity


class DistortionGrid:
    """Sample points on a square lattice plus their displaced positions.

    The lattice extends ``boundary_cells`` past every edge of the visible
    area so the displaced edge is never on screen. Arrays are indexed
    ``[row, column]``.
    """

    def __init__(self, arena: ArenaConfig = ARENA) -> None:
        self.arena = arena
        self.cell_size = float(arena.cell_size)
        self.max_displacement = arena.max_grid_displacement

        margin = arena.boundary_cells * arena.cell_size
        xs = np.arange(arena.grid_columns, dtype=np.float64) * self.cell_size - margin
        ys = np.arange(arena.grid_rows, dtype=np.float64) * self.cell_size - margin
        self.origin_x, self.origin_y = np.meshgrid(xs, ys)
        self.points_x = self.origin_x.copy()
        self.points_y = self.origin_y.copy()

    @property
    def shape(self) -> tuple[int, int]:
        return self.origin_x.shape

    def recompute(self, entities: Iterable[Entity]) -> None:
        sources = [entity for entity in entities if entity.distortion]
        if not sources:
            self.points_x = self.origin_x.copy()
            self.points_y = self.origin_y.copy()
            return

        # Per-source values broadcast over (sources, rows, columns).
        source_x = np.array([entity.position.x for entity in sources])[:, None, None]
        source_y = np.array([entity.position.y for entity in sources])[:, None, None]
        strength = np.array([entity.distortion for entity in sources])[:, None, None]
        sign = np.array([-1.0 if entity.invert else 1.0 for entity in sources])[:, None, None]

        offset_x = self.origin_x - source_x
        offset_y = self.origin_y - source_y
        direction = np.arctan2(offset_y, offset_x)
        distance = np.hypot(offset_x, offset_y)
        magnitude = np.minimum(strength / np.power(GRID_FALLOFF_BASE, distance / self.cell_size), self.max_displacement)
        magnitude *= sign
        self.points_x = self.origin_x + (np.cos(direction) * magnitude).sum(axis=0)
        self.points_y = self.origin_y + (np.sin(direction) * magnitude).sum(axis=0)
