"""
antcolony module: world/pheromones.py

Scent grids:
- one dense numpy array per scent type, row-major (rows, columns)
- deposits clamp to 1, evaporation is scaled by dt
- anything outside the grid reads as 0 and ignores deposits
"""

from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Optional, Tuple

import numpy as np

from antcolony import config


@dataclass
class PheromoneGrid:
    columns: int
    rows: int
    cell_size: float = config.PHEROMONE_CELL_SIZE
    values: np.ndarray = field(default=None, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.values is None:
            self.values = np.zeros((self.rows, self.columns), dtype=np.float32)

    @staticmethod
    def for_world(w: float, h: float, cell_size: float = config.PHEROMONE_CELL_SIZE) -> "PheromoneGrid":
        columns = int(math.ceil(w / cell_size))
        rows = int(math.ceil(h / cell_size))
        return PheromoneGrid(columns=columns, rows=rows, cell_size=cell_size)

    def cell_of(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """
        (row, col) of the cell holding world point (x, y), or None off-grid.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        col = math.floor(x / self.cell_size)
        row = math.floor(y / self.cell_size)
        if col < 0 or row < 0 or col >= self.columns or row >= self.rows:
            return None
        return row, col

    def deposit(self, x: float, y: float, amount: float) -> None:
        cell = self.cell_of(x, y)
        if cell is None:
            return
        v = self.values[cell] + amount
        self.values[cell] = min(config.PHEROMONE_MAX, max(0.0, v))

    def sample(self, x: float, y: float) -> float:
        cell = self.cell_of(x, y)
        if cell is None:
            return 0.0
        return float(self.values[cell])

    def evaporate(self, rate: float, dt: float) -> None:
        factor = min(1.0, max(0.0, 1.0 - rate * dt))
        self.values *= factor
        self.values[self.values <= config.PHEROMONE_FLOOR] = 0.0

    def total(self) -> float:
        return float(self.values.sum())
