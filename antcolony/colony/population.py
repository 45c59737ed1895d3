"""
antcolony module: colony/population.py

Live ant set. Resizing is immediate: new ants hatch at the nest, surplus
ants are dropped from the tail.
"""

from __future__ import annotations
import logging
import random
from typing import Iterator, List

from antcolony import config
from antcolony.colony.ant import Ant
from antcolony.world.physics import TWO_PI, wrap_angle
from antcolony.world.world import Nest

logger = logging.getLogger(__name__)


def spawn_ant(ant_id: int, nest: Nest, rng: random.Random, spread: float, jitter: float) -> Ant:
    base = rng.random() * TWO_PI
    offset = (rng.random() - 0.5) * spread + (rng.random() - 0.5) * jitter
    return Ant(id=ant_id, x=nest.x, y=nest.y, direction=wrap_angle(base + offset))


class Population:
    def __init__(self, nest: Nest, rng: random.Random):
        self.nest = nest
        self.rng = rng
        self.ants: List[Ant] = []
        self.next_id = 0

    def __len__(self) -> int:
        return len(self.ants)

    def __iter__(self) -> Iterator[Ant]:
        return iter(self.ants)

    def add(self, ant: Ant) -> Ant:
        self.ants.append(ant)
        self.next_id = max(self.next_id, ant.id + 1)
        return ant

    def spawn(
        self,
        n: int,
        spread: float = config.GROWTH_SPAWN_SPREAD,
        jitter: float = config.GROWTH_SPAWN_JITTER,
    ) -> None:
        for _ in range(n):
            self.ants.append(spawn_ant(self.next_id, self.nest, self.rng, spread, jitter))
            self.next_id += 1

    def resize_to(
        self,
        target: int,
        spread: float = config.GROWTH_SPAWN_SPREAD,
        jitter: float = config.GROWTH_SPAWN_JITTER,
    ) -> None:
        target = max(0, int(target))
        current = len(self.ants)
        if target == current:
            return

        if target > current:
            self.spawn(target - current, spread=spread, jitter=jitter)
        else:
            del self.ants[target:]
        logger.debug("population resized %d -> %d", current, target)
