"""
antcolony module: sim/clock.py

Fixed-step integrator. Variable frame time goes in, whole simulation steps come
out; the leftover fraction carries over to the next tick.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from antcolony import config


@dataclass
class SimulationClock:
    step: float = config.SIM_STEP
    max_frame_delta: float = config.MAX_FRAME_DELTA
    accumulator: float = 0.0
    steps_taken: int = 0

    def __post_init__(self) -> None:
        if not self.step > 0:
            raise ValueError(f"step must be positive, got {self.step}")

    def reset(self) -> None:
        self.accumulator = 0.0
        self.steps_taken = 0

    def advance(self, raw_dt: float, time_scale: float, update: Callable[[float], object]) -> int:
        """
        Feed `raw_dt` wall seconds scaled by `time_scale` and run `update(step)`
        once per whole step now available. Returns the number of steps run.
        """
        scaled = max(0.0, raw_dt) * max(0.0, time_scale)
        self.accumulator += min(scaled, self.max_frame_delta)

        n = 0
        # small epsilon keeps 0.1 / 0.05 from losing a step to rounding
        while self.accumulator + 1e-9 >= self.step:
            update(self.step)
            self.accumulator = max(0.0, self.accumulator - self.step)
            n += 1

        self.steps_taken += n
        return n
