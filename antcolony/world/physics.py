"""
antcolony module: world/physics.py

Top-down 2D kinematics for point agents:
- heading math (wrap, shortest signed difference, biased blend)
- straight-line projection along a heading
- bounded advance that steers back inward instead of leaving the world
"""

from __future__ import annotations
import math
import random
from typing import Tuple

from antcolony import config
from antcolony.world.world import Vec2, World

TWO_PI = 2 * math.pi


def wrap_angle(a: float) -> float:
    """Normalize to [0, 2pi)."""
    a = a % TWO_PI
    # float modulo can land exactly on 2pi for tiny negative inputs
    if a >= TWO_PI:
        a -= TWO_PI
    return a


def normalize_angle(a: float) -> float:
    """Signed equivalent in [-pi, pi]."""
    a = math.fmod(a, TWO_PI)
    if a > math.pi:
        a -= TWO_PI
    elif a < -math.pi:
        a += TWO_PI
    return a


def clamp01(v: float) -> float:
    if v != v:  # NaN
        return 0.0
    return max(0.0, min(1.0, v))


def interpolate_angle(frm: float, to: float, bias: float) -> float:
    """
    Turn from `frm` toward `to` along the shorter arc by fraction `bias`.
    Bias is clamped to [0, 1]; the result is not wrapped.
    """
    return frm + normalize_angle(to - frm) * clamp01(bias)


def angle_to(x0: float, y0: float, x1: float, y1: float) -> float:
    return math.atan2(y1 - y0, x1 - x0)


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def project(x: float, y: float, heading: float, dist: float) -> Vec2:
    return (x + math.cos(heading) * dist, y + math.sin(heading) * dist)


def advance_within_world(
    x: float,
    y: float,
    heading: float,
    dist: float,
    world: World,
    anchor: Vec2,
    rng: random.Random,
) -> Tuple[float, float, float]:
    """
    Move `dist` along `heading`. When the step would leave the world, re-aim
    toward `anchor` with a random blend (plus jitter) and retry a few times;
    if nothing fits, clamp to the bounds.

    Returns (new_x, new_y, new_heading).
    """
    if dist <= 0:
        return x, y, heading

    nx, ny = project(x, y, heading, dist)
    attempt = 0
    while not world.is_inside(nx, ny, config.MOVE_MARGIN) and attempt < config.MOVE_ATTEMPTS:
        attempt += 1
        inward = angle_to(x, y, anchor[0], anchor[1])
        bias = 0.55 + rng.random() * 0.35
        jitter = (rng.random() - 0.5) * math.pi * 0.25
        heading = wrap_angle(interpolate_angle(heading, inward, bias) + jitter)
        nx, ny = project(x, y, heading, dist)

    if not world.is_inside(nx, ny, config.MOVE_MARGIN):
        nx, ny = world.clamp(nx, ny)

    return nx, ny, heading


def clamp_length(vx: float, vy: float, max_len: float) -> Vec2:
    length = math.hypot(vx, vy)
    if length > max_len and length > 0:
        s = max_len / length
        return vx * s, vy * s
    return vx, vy
