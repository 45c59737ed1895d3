import random

import pytest

from antcolony.colony.ant import AntMode
from antcolony.colony.population import Population
from antcolony.world.physics import TWO_PI
from antcolony.world.world import Nest


@pytest.fixture
def population():
    return Population(Nest(60, 40, 4), random.Random(3))


@pytest.mark.parametrize("start,target", [(0, 25), (25, 3), (10, 10), (7, 0), (0, 0)])
def test_resize_yields_exact_count(population, start, target):
    population.spawn(start)
    population.resize_to(target)
    assert len(population) == target


def test_new_ants_hatch_at_nest_foraging(population):
    population.resize_to(40)
    for ant in population:
        assert ant.pos == (60, 40)
        assert 0.0 <= ant.direction < TWO_PI
        assert ant.mode is AntMode.FORAGING
        assert ant.path_integration == (0.0, 0.0)


def test_shrink_drops_the_tail(population):
    population.resize_to(5)
    keep = [a.id for a in population.ants[:2]]
    population.resize_to(2)
    assert [a.id for a in population] == keep


def test_ids_stay_unique_across_regrowth(population):
    population.resize_to(5)
    population.resize_to(2)
    population.resize_to(6)
    ids = [a.id for a in population]
    assert len(set(ids)) == len(ids)


def test_negative_target_means_empty(population):
    population.resize_to(4)
    population.resize_to(-3)
    assert len(population) == 0
