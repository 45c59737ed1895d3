"""
antcolony module: world/world.py

World bounds and the nest. Both are fixed for the length of a run.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Tuple

from antcolony import config


Vec2 = Tuple[float, float]


@dataclass(frozen=True)
class Nest:
    x: float
    y: float
    radius: float = config.NEST_RADIUS

    @property
    def pos(self) -> Vec2:
        return (self.x, self.y)

    def contains(self, x: float, y: float) -> bool:
        return math.hypot(x - self.x, y - self.y) <= self.radius


@dataclass(frozen=True)
class World:
    w: float
    h: float

    @property
    def center(self) -> Vec2:
        return (self.w / 2, self.h / 2)

    @property
    def max_dim(self) -> float:
        return max(self.w, self.h)

    def clamp(self, x: float, y: float) -> Vec2:
        return (max(0.0, min(self.w, x)), max(0.0, min(self.h, y)))

    def is_inside(self, x: float, y: float, margin: float = 0.0) -> bool:
        return margin <= x <= self.w - margin and margin <= y <= self.h - margin

    def is_at_edge(self, x: float, y: float, margin: float = config.EDGE_MARGIN) -> bool:
        return x <= margin or y <= margin or x >= self.w - margin or y >= self.h - margin

    def make_nest(self, radius: float = config.NEST_RADIUS) -> Nest:
        cx, cy = self.center
        return Nest(x=cx, y=cy, radius=radius)
