"""Scene renderer: draws a run snapshot into an RGB buffer.

The renderer only reads snapshots and scenery. Text (score, game over
message) is left to the window so this module stays free of font handling.
"""

import math
from typing import Optional

import numpy as np

from steeplechase.core.obstacles import ObstacleKind
from steeplechase.core.snapshot import HorseView, ObstacleView, RunSnapshot
from steeplechase.graphics.primitives import (
    Buffer,
    blend_rect,
    draw_circle,
    draw_line,
    draw_rect,
    fill,
    fill_triangle,
    new_buffer,
)
from steeplechase.graphics.scenery import Manor, Scenery

SKY = (135, 206, 235)
CLOUD = (255, 255, 255)
GRASS = (34, 139, 34)
WOOD = (139, 69, 19)
TAN = (210, 180, 140)
WINDOW = (135, 206, 235)
DITCH_EARTH = (92, 64, 40)
DITCH_WATER = (70, 110, 160)
RIDER = (147, 112, 219)
RIDER_HEAD = (255, 215, 0)
OVERLAY = (0, 0, 0)


class SceneRenderer:
    """Draws sky, scenery, ground, obstacles and the horse."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def render(
        self,
        snapshot: RunSnapshot,
        scenery: Optional[Scenery] = None,
        buffer: Optional[Buffer] = None,
    ) -> Buffer:
        """Render one frame.

        Args:
            snapshot: Simulation state to draw
            scenery: Optional decorative background
            buffer: Target (height, width, 3) buffer; allocated if None

        Returns:
            The buffer that was drawn into
        """
        if buffer is None:
            buffer = new_buffer(self.width, self.height)

        fill(buffer, SKY)

        if scenery is not None:
            for cloud in scenery.clouds:
                blend_rect(buffer, int(cloud.x), int(cloud.y), cloud.width, cloud.height, CLOUD, 0.8)
            if scenery.manor.active:
                self._render_manor(buffer, scenery.manor)

        ground_y = int(snapshot.ground_y)
        draw_rect(buffer, 0, ground_y, self.width, self.height - ground_y, GRASS)

        for obstacle in snapshot.obstacles:
            if obstacle.kind is ObstacleKind.DITCH:
                self._render_ditch(buffer, obstacle, ground_y)
            else:
                self._render_fence(buffer, obstacle, ground_y)

        self._render_horse(buffer, snapshot.horse)

        if snapshot.is_ended:
            blend_rect(buffer, 0, 0, self.width, self.height, OVERLAY, 0.5)

        return buffer

    def _render_fence(self, buffer: Buffer, obstacle: ObstacleView, ground_y: int) -> None:
        """Two posts and two rails."""
        x = int(obstacle.x)
        w = int(obstacle.width)
        h = int(obstacle.height)
        top = ground_y - h

        draw_rect(buffer, x, top, 5, h, WOOD)
        draw_rect(buffer, x + w - 5, top, 5, h, WOOD)
        draw_rect(buffer, x, top + h // 3, w, 5, WOOD)
        draw_rect(buffer, x, top + h * 2 // 3, w, 5, WOOD)

    def _render_ditch(self, buffer: Buffer, obstacle: ObstacleView, ground_y: int) -> None:
        x = int(obstacle.x)
        w = int(obstacle.width)
        depth = int(obstacle.height)

        draw_rect(buffer, x, ground_y, w, depth, DITCH_EARTH)
        draw_rect(buffer, x + 2, ground_y + depth // 2, w - 4, depth - depth // 2, DITCH_WATER)

    def _render_horse(self, buffer: Buffer, horse: HorseView) -> None:
        x = int(horse.x)
        w = int(horse.width)
        h = int(horse.height)
        top = int(horse.y) - h
        bottom = top + h

        # Body
        draw_rect(buffer, x, top, w, h, WOOD)

        # Legs: folded while jumping, straight while running
        if horse.is_airborne:
            reach = int(15 * math.cos(math.pi / 4))
            for leg_x in (x + 10, x + 25):
                draw_line(buffer, leg_x, bottom, leg_x - reach, bottom + reach, WOOD, thickness=5)
            for leg_x in (x + 35, x + 50):
                draw_line(buffer, leg_x, bottom, leg_x + reach, bottom + reach, WOOD, thickness=5)
        else:
            for leg_x in (x + 10, x + 25, x + 35, x + 50):
                draw_rect(buffer, leg_x, bottom, 6, 20, WOOD)

        # Head and neck
        draw_rect(buffer, x + w - 8, top - 10, 20, 10, WOOD)
        fill_triangle(buffer, (x + w - 8, top), (x + w - 8, top - 10), (x + w - 20, top - 10), WOOD)

        # Rider
        draw_rect(buffer, x + 15, top - 25, 20, 25, RIDER)
        draw_circle(buffer, x + 25, top - 35, 6, RIDER_HEAD)

    def _render_manor(self, buffer: Buffer, manor: Manor) -> None:
        x = int(manor.x)
        y = int(manor.y)
        w = manor.width
        h = manor.height

        # Wings, then the main building over them
        draw_rect(buffer, x - 60, y + 50, 60, 100, TAN)
        draw_rect(buffer, x + w, y + 50, 60, 100, TAN)
        draw_rect(buffer, x, y, w, h, TAN)

        # Roofs
        fill_triangle(buffer, (x - 10, y), (x + w // 2, y - 40), (x + w + 10, y), WOOD)
        fill_triangle(buffer, (x - 70, y + 50), (x - 30, y + 20), (x + 10, y + 50), WOOD)
        fill_triangle(buffer, (x + w - 10, y + 50), (x + w + 30, y + 20), (x + w + 70, y + 50), WOOD)

        # Windows
        for wx in (30, 80, 130):
            for wy in (40, 90):
                draw_rect(buffer, x + wx, y + wy, 20, 30, WINDOW)
        for wy in (70, 110):
            draw_rect(buffer, x - 40, y + wy, 20, 30, WINDOW)
            draw_rect(buffer, x + w + 20, y + wy, 20, 30, WINDOW)

        # Door
        draw_rect(buffer, x + 80, y + 100, 40, 50, WOOD)


def to_surface_array(buffer: Buffer) -> np.ndarray:
    """(height, width, 3) buffer to the (width, height, 3) layout pygame expects."""
    return buffer.swapaxes(0, 1)
