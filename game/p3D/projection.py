"""
Perspective projection shared by spawning, motion, collision and rendering.

Depth ``z`` is 0 at the horizon and reaches the player near 1.0. Screen-space
scale is ``z**2``; every consumer goes through these functions so that the
position an enemy is drawn at is the position it is hit at.
"""

from __future__ import annotations

from typing import Tuple


def scale(z: float) -> float:
    """Foreshortening factor for a depth"""
    return z * z


def screen_y(z: float, horizon_y: float, floor_y: float) -> float:
    return horizon_y + scale(z) * (floor_y - horizon_y)


def screen_x(z: float, depth_offset: float, center_x: float) -> float:
    return center_x + depth_offset * scale(z)


def project(z: float, x_offset: float, width: float, height: float) -> Tuple[float, float]:
    """Screen point of a depth entity on a ``width`` x ``height`` canvas"""
    return screen_x(z, x_offset, width / 2), screen_y(z, height / 2, height)


def enemy_box(z: float, x_offset: float, width: float, height: float,
              box_w: float = 80.0, box_h: float = 30.0) -> Tuple[float, float, float, float]:
    """
    Enemy hit box as (left, right, top, bottom) in screen space.

    The box is anchored at the projected point, which sits on its bottom edge.
    """
    ex, ey = project(z, x_offset, width, height)
    w = box_w * z
    h = box_h * z
    return ex - w / 2, ex + w / 2, ey - h, ey
