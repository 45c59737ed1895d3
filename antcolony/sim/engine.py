"""
antcolony module: sim/engine.py

The engine owns the WorldState exclusively. Callers drive it with tick(dt)
(real-time loop) or step() (tests, batch runs) and read it back through
snapshot() / stats; they never touch the state directly.
"""

from __future__ import annotations
import logging
import random
from typing import List, Optional

from antcolony import config
from antcolony.settings import Settings
from antcolony.sim.clock import SimulationClock
from antcolony.sim.state import SimulationStats, Status, WorldSnapshot, WorldState
from antcolony.world.food import FoodSource, make_food_source
from antcolony.world.world import World

logger = logging.getLogger(__name__)


class SimulationEngine:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ):
        self.settings = settings if settings is not None else Settings()
        if rng is None:
            if seed is None:
                seed = self.settings.seed
            # seed=None pulls from system entropy
            rng = random.Random(seed)
        self.rng = rng

        self.clock = SimulationClock()
        self.status = Status.IDLE
        self.state: Optional[WorldState] = None
        self.staged_food: List[FoodSource] = []

    # --- configuration ---------------------------------------------------

    @property
    def world(self) -> World:
        if self.state is not None:
            return self.state.world
        return World(w=self.settings.world_width, h=self.settings.world_height)

    def update_settings(self, settings: Settings) -> None:
        """Picked up by the next step, auto food included."""
        self.settings = settings

    def set_auto_food(self, enabled: bool) -> None:
        self.settings = self.settings.replace(auto_food=enabled)
        if self.state is not None:
            self.state.food.set_auto_spawn(enabled)
        logger.debug("auto food %s", "on" if enabled else "off")

    # --- food placement --------------------------------------------------

    def place_food(
        self,
        x: float,
        y: float,
        capacity: Optional[float] = None,
        radius: Optional[float] = None,
        depletion_rate: Optional[float] = None,
    ) -> FoodSource:
        if self.state is not None:
            return self.state.food.place(
                x, y, capacity=capacity, radius=radius, depletion_rate=depletion_rate
            )

        x, y = self.world.clamp(x, y)
        source = make_food_source(
            x, y, self.rng, capacity=capacity, radius=radius, depletion_rate=depletion_rate
        )
        self.staged_food.append(source)
        logger.debug("food staged %s at (%.1f, %.1f)", source.id, x, y)
        return source

    # --- lifecycle -------------------------------------------------------

    def start(self) -> None:
        settings = self.settings
        self.state = WorldState.create(settings, self.rng, food_sources=self.staged_food)
        self.clock.reset()
        self.status = Status.RUNNING
        logger.info(
            "simulation started: %dx%d world, %d ants, %d food source(s)",
            settings.world_width,
            settings.world_height,
            len(self.state.ants),
            len(self.state.food),
        )

    def pause(self) -> None:
        if self.status is not Status.RUNNING:
            logger.debug("pause ignored while %s", self.status.value)
            return
        self.status = Status.PAUSED
        logger.info("simulation paused at %.2fs", self.state.stats.elapsed_seconds)

    def resume(self) -> None:
        if self.status is not Status.PAUSED:
            logger.debug("resume ignored while %s", self.status.value)
            return
        self.status = Status.RUNNING
        logger.info("simulation resumed")

    def reset(self) -> None:
        self.state = None
        self.staged_food = []
        self.clock.reset()
        self.status = Status.IDLE
        logger.info("simulation reset")

    # --- stepping --------------------------------------------------------

    def step(self, dt: float = config.SIM_STEP) -> int:
        """
        Run exactly one update pass with the current settings snapshot.
        Returns deliveries made during the step.
        """
        if self.state is None:
            raise RuntimeError("no simulation running; call start() first")
        return self.state.update(dt, self.settings)

    def tick(self, raw_dt: float) -> int:
        """
        Feed wall-clock time from a frame callback. Returns steps run.
        """
        if self.status is not Status.RUNNING or self.state is None:
            return 0
        return self.clock.advance(raw_dt, self.settings.time_scale, self.step)

    # --- read side -------------------------------------------------------

    @property
    def stats(self) -> SimulationStats:
        if self.state is None:
            return SimulationStats()
        return self.state.stats.copy()

    def snapshot(self) -> Optional[WorldSnapshot]:
        if self.state is None:
            return None
        return self.state.snapshot(self.status)
