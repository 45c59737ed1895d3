"""
antcolony module: sim/state.py

World state container: nest, ants, food, the three scent grids and running
stats, plus the one-step update pass that ties them together.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
import random
from typing import Iterable, List, Tuple

import numpy as np

from antcolony import config
from antcolony.colony.ant import Ant, AntMode
from antcolony.colony.behavior import step_ant
from antcolony.colony.population import Population
from antcolony.settings import Settings
from antcolony.world.food import FoodSource, FoodSourceManager
from antcolony.world.pheromones import PheromoneGrid
from antcolony.world.world import Nest, World


class Status(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass
class SimulationStats:
    delivered_food: int = 0
    elapsed_seconds: float = 0.0

    def copy(self) -> "SimulationStats":
        return replace(self)


@dataclass(frozen=True)
class AntView:
    id: int
    x: float
    y: float
    direction: float
    mode: AntMode

    @property
    def carrying_food(self) -> bool:
        return self.mode is not AntMode.FORAGING


@dataclass(frozen=True)
class FoodView:
    id: str
    x: float
    y: float
    radius: float
    capacity: float
    max_capacity: float
    fill_ratio: float


@dataclass(frozen=True)
class WorldSnapshot:
    world: World
    nest: Nest
    ants: Tuple[AntView, ...]
    food: Tuple[FoodView, ...]
    home_trail: np.ndarray = field(repr=False)
    food_trail: np.ndarray = field(repr=False)
    nest_signal: np.ndarray = field(repr=False)
    stats: SimulationStats = field(default_factory=SimulationStats)
    status: Status = Status.RUNNING


def _frozen_copy(values: np.ndarray) -> np.ndarray:
    out = values.copy()
    out.flags.writeable = False
    return out


@dataclass
class WorldState:
    world: World
    nest: Nest
    population: Population
    food: FoodSourceManager
    home_trail: PheromoneGrid
    food_trail: PheromoneGrid
    nest_signal: PheromoneGrid
    rng: random.Random
    stats: SimulationStats = field(default_factory=SimulationStats)

    @staticmethod
    def create(
        settings: Settings,
        rng: random.Random,
        food_sources: Iterable[FoodSource] = (),
    ) -> "WorldState":
        world = World(w=settings.world_width, h=settings.world_height)
        nest = world.make_nest()

        population = Population(nest, rng)
        population.spawn(
            settings.ant_count,
            spread=config.INITIAL_SPAWN_SPREAD,
            jitter=config.INITIAL_SPAWN_JITTER,
        )

        food = FoodSourceManager(world, nest, rng, auto_spawn=settings.auto_food)
        for s in food_sources:
            food.add(replace(s))

        return WorldState(
            world=world,
            nest=nest,
            population=population,
            food=food,
            home_trail=PheromoneGrid.for_world(world.w, world.h),
            food_trail=PheromoneGrid.for_world(world.w, world.h),
            nest_signal=PheromoneGrid.for_world(world.w, world.h),
            rng=rng,
        )

    @property
    def ants(self) -> List[Ant]:
        return self.population.ants

    @property
    def grids(self) -> Tuple[PheromoneGrid, PheromoneGrid, PheromoneGrid]:
        return (self.home_trail, self.food_trail, self.nest_signal)

    def update(self, dt: float, settings: Settings) -> int:
        """
        One full fixed step. Returns the number of deliveries made.
        """
        self.home_trail.evaporate(settings.evaporation_rate, dt)
        self.food_trail.evaporate(settings.evaporation_rate, dt)
        self.nest_signal.evaporate(config.NEST_SIGNAL_DECAY_RATE, dt)

        self.population.resize_to(settings.ant_count)

        delivered = 0
        for ant in self.population.ants:
            if step_ant(ant, self, settings, dt, self.rng):
                delivered += 1

        self.food.set_auto_spawn(settings.auto_food)
        self.food.update(dt, settings, self.food_trail)
        self.stats.elapsed_seconds += dt
        return delivered

    def snapshot(self, status: Status = Status.RUNNING) -> WorldSnapshot:
        return WorldSnapshot(
            world=self.world,
            nest=self.nest,
            ants=tuple(
                AntView(id=a.id, x=a.x, y=a.y, direction=a.direction, mode=a.mode)
                for a in self.population.ants
            ),
            food=tuple(
                FoodView(
                    id=s.id,
                    x=s.x,
                    y=s.y,
                    radius=s.radius,
                    capacity=s.capacity,
                    max_capacity=s.max_capacity,
                    fill_ratio=s.fill_ratio,
                )
                for s in self.food.sources
            ),
            home_trail=_frozen_copy(self.home_trail.values),
            food_trail=_frozen_copy(self.food_trail.values),
            nest_signal=_frozen_copy(self.nest_signal.values),
            stats=self.stats.copy(),
            status=status,
        )
