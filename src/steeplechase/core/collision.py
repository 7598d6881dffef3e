"""Collision rules between the horse and obstacles."""

from typing import Tuple

from steeplechase.core.agent import Horse
from steeplechase.core.obstacles import Obstacle, ObstacleKind

# (left, top, right, bottom)
Box = Tuple[float, float, float, float]


def hitbox(horse: Horse) -> Box:
    """The horse's collision box.

    While airborne the box is shorter and shifted down from the top of the
    body, so grazing a fence top with the rider's head does not count.
    """
    top = horse.y - horse.height
    bottom = horse.y
    if horse.is_airborne:
        top += horse.config.airborne_hitbox_offset
        bottom = top + horse.config.airborne_hitbox_height
    return horse.x, top, horse.x + horse.width, bottom


def overlaps_horizontally(horse: Horse, obstacle: Obstacle) -> bool:
    return horse.x < obstacle.right and horse.x + horse.width > obstacle.x


def hits(horse: Horse, obstacle: Obstacle) -> bool:
    """Check whether the obstacle ends the run.

    Fences use an AABB test against the hitbox. A ditch only catches a
    grounded horse whose span overlaps it; jumping over one is always safe.
    """
    if obstacle.kind is ObstacleKind.DITCH:
        return not horse.is_airborne and overlaps_horizontally(horse, obstacle)

    left, top, right, bottom = hitbox(horse)
    obs_top, obs_bottom = obstacle.vertical_span(horse.ground_y)
    return (
        left < obstacle.right
        and right > obstacle.x
        and top < obs_bottom
        and bottom > obs_top
    )
