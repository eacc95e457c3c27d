"""Arcade renderer for the distortion arena."""

from __future__ import annotations

from collections import OrderedDict
import colorsys
import math

import arcade

from distort.config import (
    COLOR_BLACK,
    COLOR_GRID_FAR,
    COLOR_GRID_NEAR,
    COLOR_WHITE,
    FONT_NAME,
    FONT_SIZE_GAME_OVER,
    FONT_SIZE_HINT,
    FONT_SIZE_HUD,
    FONT_SIZE_SCORE_DELTA,
    FONT_SIZE_TITLE,
    HUD_MARGIN,
    TAU,
)
from distort.core import Entity, EntityKind, GameSession

GRID_COLOR_BANDS = 12
GRID_POINT_SIZE = 4
ENTITY_LINE_WIDTH = 4


def _with_alpha(color: tuple[int, int, int], alpha: float) -> tuple[int, int, int, int]:
    return (color[0], color[1], color[2], max(0, min(255, int(round(alpha * 255)))))


def _blend(near: tuple[int, int, int], far: tuple[int, int, int], t: float) -> tuple[int, int, int]:
    return tuple(int(round(a + (b - a) * t)) for a, b in zip(near, far))


class TextCache:
    """Reuse ``arcade.Text`` objects across frames."""

    def __init__(self, max_entries: int = 256) -> None:
        self.max_entries = int(max_entries)
        self._entries: OrderedDict[tuple, arcade.Text] = OrderedDict()

    def get_text(self, text: str, font_size: int, anchor_x: str, anchor_y: str) -> arcade.Text:
        key = (text, font_size, anchor_x, anchor_y)
        cached = self._entries.get(key)
        if cached is not None:
            self._entries.move_to_end(key)
            return cached
        text_obj = arcade.Text(
            text,
            0,
            0,
            color=COLOR_WHITE,
            font_size=font_size,
            font_name=FONT_NAME,
            anchor_x=anchor_x,
            anchor_y=anchor_y,
        )
        self._entries[key] = text_obj
        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return text_obj


class Renderer:
    """Draw one session snapshot with Arcade primitives.

    Session coordinates have a top-left origin; Arcade's is bottom-left. The
    shake offset moves the grid and entities but not the HUD.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.text_cache = TextCache(max_entries=256)
        self.offset_x = 0.0
        self.offset_y = 0.0

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        return x + self.offset_x, self.height - (y + self.offset_y)

    def draw_frame(self, session: GameSession) -> None:
        self.offset_x = session.shake_offset.x
        self.offset_y = session.shake_offset.y
        self._draw_grid(session)
        for entity in session.entities:
            self._draw_entity(entity, session)

        self.offset_x = 0.0
        self.offset_y = 0.0
        self._draw_hud(session)

    def _draw_grid(self, session: GameSession) -> None:
        grid = session.grid
        player = session.player.position
        reach = math.hypot(self.width, self.height)
        rows, columns = grid.shape

        def band(x: float, y: float) -> int:
            t = min(1.0, math.hypot(x - player.x, y - player.y) / reach)
            return min(GRID_COLOR_BANDS - 1, int(t * GRID_COLOR_BANDS))

        segments: dict[int, list[tuple[float, float]]] = {}
        points: dict[int, list[tuple[float, float]]] = {}
        for row in range(rows):
            for column in range(columns):
                x = float(grid.points_x[row, column])
                y = float(grid.points_y[row, column])
                level = band(x, y)
                points.setdefault(level, []).append(self.to_screen(x, y))
                for next_row, next_column in ((row, column + 1), (row + 1, column)):
                    if next_row >= rows or next_column >= columns:
                        continue
                    nx = float(grid.points_x[next_row, next_column])
                    ny = float(grid.points_y[next_row, next_column])
                    segments.setdefault(level, []).extend((self.to_screen(x, y), self.to_screen(nx, ny)))

        for level in sorted(segments):
            color = _blend(COLOR_GRID_NEAR, COLOR_GRID_FAR, level / (GRID_COLOR_BANDS - 1))
            arcade.draw_lines(segments[level], color, 1)
            arcade.draw_points(points.get(level, []), color, GRID_POINT_SIZE)

    def _triangle(self, entity: Entity, radius: float, side_scale: float) -> list[tuple[float, float]]:
        x, y, heading = entity.position.x, entity.position.y, entity.heading
        return [
            self.to_screen(x + math.cos(heading) * radius, y + math.sin(heading) * radius),
            self.to_screen(
                x + math.cos(heading + TAU / 3) * radius / side_scale,
                y + math.sin(heading + TAU / 3) * radius / side_scale,
            ),
            self.to_screen(
                x + math.cos(heading - TAU / 3) * radius / side_scale,
                y + math.sin(heading - TAU / 3) * radius / side_scale,
            ),
        ]

    def _draw_entity(self, entity: Entity, session: GameSession) -> None:
        kind = entity.kind
        if kind is EntityKind.PLAYER:
            arcade.draw_polygon_outline(self._triangle(entity, 16, 1.5), COLOR_WHITE, ENTITY_LINE_WIDTH)
        elif kind is EntityKind.BULLET:
            arcade.draw_polygon_outline(self._triangle(entity, 8, 1.5), COLOR_WHITE, ENTITY_LINE_WIDTH)
        elif kind is EntityKind.ENEMY:
            self._draw_enemy(entity)
        elif kind is EntityKind.POWERUP:
            x, y = self.to_screen(entity.position.x, entity.position.y)
            color = _with_alpha(COLOR_WHITE, entity.opacity)
            arcade.draw_circle_outline(x, y, 12, color, 3)
            arcade.draw_circle_outline(x, y, 8, color, 3)
        elif kind is EntityKind.PARTICLE:
            size = entity.distortion * entity.size
            left, top = self.to_screen(entity.position.x - size, entity.position.y - size)
            arcade.draw_lbwh_rectangle_filled(left, top - size, size, size, COLOR_WHITE)
        elif kind is EntityKind.SCORE_DELTA:
            text = self.text_cache.get_text(f"+{entity.points}", FONT_SIZE_SCORE_DELTA, "center", "center")
            text.position = self.to_screen(entity.position.x, entity.position.y)
            text.color = _with_alpha(COLOR_WHITE, max(0.0, entity.opacity))
            text.draw()
            text.color = COLOR_WHITE

    def _draw_enemy(self, enemy: Entity) -> None:
        radius = 32 - enemy.recoil * 8
        sides = enemy.sides
        # Flash from red toward white when hit.
        red, green, blue = colorsys.hls_to_rgb(0.0, 1 - enemy.recoil / 2, 1.0)
        color = (int(red * 255), int(green * 255), int(blue * 255))
        vertices = [
            self.to_screen(
                enemy.position.x + math.cos(index / sides * TAU + enemy.spin) * radius,
                enemy.position.y + math.sin(index / sides * TAU + enemy.spin) * radius,
            )
            for index in range(sides)
        ]
        arcade.draw_polygon_outline(vertices, color, ENTITY_LINE_WIDTH)

    def _draw_text(self, text: str, x: float, y: float, font_size: int, anchor_x: str, anchor_y: str, alpha=1.0):
        text_obj = self.text_cache.get_text(text, font_size, anchor_x, anchor_y)
        text_obj.position = self.to_screen(x, y)
        text_obj.color = _with_alpha(COLOR_WHITE, alpha)
        text_obj.draw()

    def _draw_hud(self, session: GameSession) -> None:
        center_x = self.width / 2
        center_y = self.height / 2
        if not session.at_title_screen:
            self._draw_text(f"SCORE: {session.displayed_score}", HUD_MARGIN, HUD_MARGIN, FONT_SIZE_HUD, "left", "top")

        if session.at_title_screen:
            self._draw_text("DISTORT", center_x, center_y, FONT_SIZE_TITLE, "center", "center")
            self._draw_text("WASD + MOUSE", center_x, center_y + 80, FONT_SIZE_HINT, "center", "center")
        elif session.is_over:
            progress = session.game_over_progress
            self._draw_text(
                "GAME OVER",
                center_x,
                center_y - 60 * (1 - progress),
                FONT_SIZE_GAME_OVER,
                "center",
                "center",
                alpha=progress,
            )

        if session.is_paused:
            arcade.draw_lbwh_rectangle_filled(0, 0, self.width, self.height, _with_alpha(COLOR_BLACK, 0.5))
            self._draw_text("PAUSED", center_x, center_y, FONT_SIZE_TITLE, "center", "center")
            self._draw_text(
                "CLICK / PRESS P TO RESUME", center_x, center_y + 80, FONT_SIZE_HINT, "center", "center"
            )
