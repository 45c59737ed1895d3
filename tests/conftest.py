import random

import pytest

from antcolony.settings import Settings
from antcolony.sim.state import WorldState


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_state(rng):
    def _make(settings=None, **changes):
        settings = settings or Settings(ant_count=0, auto_food=False)
        if changes:
            settings = settings.replace(**changes)
        return WorldState.create(settings, rng)

    return _make
