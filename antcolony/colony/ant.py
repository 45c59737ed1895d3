"""
antcolony module: colony/ant.py

Per-ant state. The behavioural mode is derived from the carry flags through
`Ant.mode`, so the decision code matches on one enum instead of flag pairs.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import math
from typing import Tuple

from antcolony import config


class AntMode(Enum):
    FORAGING = 0
    RETURNING = 1
    FORCED_RETURNING = 2


@dataclass
class Ant:
    id: int
    x: float
    y: float
    direction: float = 0.0  # radians, [0, 2pi)

    carrying_food: bool = False
    force_return: bool = False
    carrying_time: float = 0.0
    stalled_time: float = 0.0

    deposit_accumulator: float = 0.0
    nest_signal_timer: float = config.NEST_SIGNAL_DURATION
    nest_signal_accumulator: float = 0.0

    # dead-reckoned displacement since the last nest visit
    path_x: float = 0.0
    path_y: float = 0.0

    @property
    def pos(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def path_integration(self) -> Tuple[float, float]:
        return (self.path_x, self.path_y)

    @property
    def path_length(self) -> float:
        return math.hypot(self.path_x, self.path_y)

    @property
    def mode(self) -> AntMode:
        if not self.carrying_food:
            return AntMode.FORAGING
        if self.force_return:
            return AntMode.FORCED_RETURNING
        return AntMode.RETURNING

    def pick_up(self) -> None:
        self.carrying_food = True
        self.carrying_time = 0.0
        self.force_return = False

    def drop_off(self) -> None:
        self.carrying_food = False
        self.carrying_time = 0.0
        self.force_return = False
        self.nest_signal_timer = config.NEST_SIGNAL_DURATION
        self.nest_signal_accumulator = 0.0

    def reset_path(self, nest_x: float, nest_y: float) -> None:
        self.path_x = self.x - nest_x
        self.path_y = self.y - nest_y
