"""
antcolony module: world/food.py

Food system:
- sources are placed by the user or respawned on a randomized countdown
- each successful pickup removes exactly one unit
- optional passive depletion drains capacity over time
- every active source keeps a standing scent gradient around itself
- a source is dropped once its capacity falls to the 0.1 floor
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import math
import random
import uuid
from typing import List, Optional

from antcolony import config
from antcolony.settings import ConfigError, Settings
from antcolony.world.pheromones import PheromoneGrid
from antcolony.world.world import Nest, Vec2, World

logger = logging.getLogger(__name__)


@dataclass
class FoodSource:
    id: str
    x: float
    y: float
    radius: float
    capacity: float
    max_capacity: float
    depletion_rate: float

    @property
    def pos(self) -> Vec2:
        return (self.x, self.y)

    @property
    def exhausted(self) -> bool:
        return self.capacity <= config.FOOD_MIN_CAPACITY

    @property
    def fill_ratio(self) -> float:
        if self.max_capacity <= 0:
            return 0.0
        return self.capacity / self.max_capacity

    def contains(self, x: float, y: float) -> bool:
        return math.hypot(x - self.x, y - self.y) <= self.radius

    def take_one(self) -> None:
        self.capacity = max(0.0, self.capacity - 1.0)

    def drain(self, amount: float) -> None:
        self.capacity = max(0.0, min(self.max_capacity, self.capacity - amount))


def make_food_source(
    x: float,
    y: float,
    rng: random.Random,
    capacity: Optional[float] = None,
    radius: Optional[float] = None,
    depletion_rate: Optional[float] = None,
) -> FoodSource:
    capacity = config.FOOD_CAPACITY_DEFAULT if capacity is None else float(capacity)
    radius = config.FOOD_RADIUS_DEFAULT if radius is None else float(radius)
    depletion_rate = config.FOOD_DEPLETION_DEFAULT if depletion_rate is None else float(depletion_rate)

    if not capacity > 0:
        raise ConfigError(f"food capacity must be positive, got {capacity}")
    if not radius > 0:
        raise ConfigError(f"food radius must be positive, got {radius}")
    if not depletion_rate >= 0:
        raise ConfigError(f"food depletion rate must be >= 0, got {depletion_rate}")

    # ids come from the injected rng so seeded runs stay reproducible
    food_id = str(uuid.UUID(int=rng.getrandbits(128), version=4))
    return FoodSource(
        id=food_id,
        x=x,
        y=y,
        radius=radius,
        capacity=capacity,
        max_capacity=capacity,
        depletion_rate=depletion_rate,
    )


class FoodSourceManager:
    def __init__(self, world: World, nest: Nest, rng: random.Random, auto_spawn: bool = True):
        self.world = world
        self.nest = nest
        self.rng = rng
        self.sources: List[FoodSource] = []

        self.max_sources = config.MAX_FOOD_SOURCES
        self.respawn_delay_range = config.FOOD_RESPAWN_DELAY_RANGE
        self.respawn_count_range = config.FOOD_RESPAWN_COUNT_RANGE
        self.nest_clearance = nest.radius + config.FOOD_NEST_CLEARANCE

        self.auto_spawn = auto_spawn
        self.respawn_timer = self.next_respawn_delay()

    def __len__(self) -> int:
        return len(self.sources)

    # --- placement -------------------------------------------------------

    def place(
        self,
        x: float,
        y: float,
        capacity: Optional[float] = None,
        radius: Optional[float] = None,
        depletion_rate: Optional[float] = None,
    ) -> FoodSource:
        x, y = self.world.clamp(x, y)
        source = make_food_source(
            x, y, self.rng, capacity=capacity, radius=radius, depletion_rate=depletion_rate
        )
        self.sources.append(source)
        logger.debug("food placed %s at (%.1f, %.1f) cap=%.0f", source.id, x, y, source.capacity)
        return source

    def add(self, source: FoodSource) -> None:
        self.sources.append(source)

    # --- agent interaction ----------------------------------------------

    def find_at(self, x: float, y: float) -> Optional[FoodSource]:
        """
        First source (in placement order) covering (x, y) that still has food.
        """
        for s in self.sources:
            if s.capacity > 0 and s.contains(x, y):
                return s
        return None

    def pickup_at(self, x: float, y: float) -> Optional[FoodSource]:
        source = self.find_at(x, y)
        if source is not None:
            source.take_one()
        return source

    # --- per-step lifecycle ---------------------------------------------

    def update(self, dt: float, settings: Settings, grid: PheromoneGrid) -> None:
        self.apply_depletion(dt, settings)
        self.reinforce(grid, dt)
        self.update_respawn(dt)

    def apply_depletion(self, dt: float, settings: Settings) -> None:
        passive = settings.allow_food_depletion
        multiplier = max(0.0, settings.depletion_multiplier)

        survivors: List[FoodSource] = []
        for s in self.sources:
            if passive and s.capacity > 0:
                s.drain(s.depletion_rate * multiplier * dt)
            if s.exhausted:
                logger.debug("food source %s exhausted", s.id)
            else:
                survivors.append(s)
        self.sources = survivors

    def reinforce(self, grid: PheromoneGrid, dt: float) -> None:
        """
        Centre deposit plus two rings (inner 0.45r heavy, outer 0.9r light)
        so foragers always find a gradient pointing at live food.
        """
        if not self.sources:
            return

        base = max(0.08, 4 * dt)
        for s in self.sources:
            if s.capacity <= 0:
                continue
            grid.deposit(s.x, s.y, base)

            ring_samples = max(8, math.ceil(s.radius * 6))
            inner_r = max(0.4, s.radius * 0.45)
            outer_r = max(inner_r, s.radius * 0.9)
            for i in range(ring_samples):
                a = 2 * math.pi * i / ring_samples
                ca, sa = math.cos(a), math.sin(a)
                grid.deposit(s.x + ca * inner_r, s.y + sa * inner_r, base * 0.6)
                grid.deposit(s.x + ca * outer_r, s.y + sa * outer_r, base * 0.4)

    # --- respawn ---------------------------------------------------------

    def next_respawn_delay(self) -> float:
        lo, hi = self.respawn_delay_range
        if hi <= lo:
            return lo
        return self.rng.uniform(lo, hi)

    def set_auto_spawn(self, enabled: bool) -> None:
        if enabled and not self.auto_spawn:
            self.respawn_timer = self.next_respawn_delay()
        self.auto_spawn = enabled

    def update_respawn(self, dt: float) -> None:
        if not self.auto_spawn:
            return

        if len(self.sources) >= self.max_sources:
            # hold the countdown while full
            self.respawn_timer = max(self.respawn_timer, self.next_respawn_delay())
            return

        self.respawn_timer -= dt
        if self.respawn_timer > 0:
            return

        slots = max(0, self.max_sources - len(self.sources))
        count = min(slots, self.rng.randint(*self.respawn_count_range))
        if count > 0:
            self.spawn_random(count)
        self.respawn_timer = self.next_respawn_delay()

    def spawn_random(self, n: int) -> List[FoodSource]:
        spawned: List[FoodSource] = []
        for _ in range(n):
            pos = self._find_spawn_point(config.FOOD_RADIUS_DEFAULT)
            if pos is None:
                logger.debug("food respawn: no free spot after %d attempts", config.FOOD_SPAWN_ATTEMPTS)
                continue
            spawned.append(self.place(*pos))
        if spawned:
            logger.debug("food respawn: %d new source(s), %d active", len(spawned), len(self.sources))
        return spawned

    def _find_spawn_point(self, radius: float) -> Optional[Vec2]:
        for _ in range(config.FOOD_SPAWN_ATTEMPTS):
            x = self.rng.random() * self.world.w
            y = self.rng.random() * self.world.h
            if math.hypot(x - self.nest.x, y - self.nest.y) < self.nest_clearance:
                continue
            if self._too_close(x, y, radius):
                continue
            return x, y
        return None

    def _too_close(self, x: float, y: float, radius: float) -> bool:
        for s in self.sources:
            gap = max(s.radius, radius) + config.FOOD_SPACING
            if math.hypot(x - s.x, y - s.y) < gap:
                return True
        return False
