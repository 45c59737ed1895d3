import math
import random

import numpy as np
import pytest

from antcolony import config
from antcolony.settings import Settings
from antcolony.sim.engine import SimulationEngine, Status


def _engine(**kw):
    base = dict(ant_count=0, auto_food=False, seed=21)
    base.update(kw)
    return SimulationEngine(Settings(**base))


def test_single_ant_fetches_food_and_brings_it_home():
    engine = _engine(ant_count=1, randomness=0.0, deposition_rate=0.55, evaporation_rate=0.15)
    engine.place_food(100, 40, capacity=250, radius=3)
    engine.start()

    state = engine.state
    assert state.nest.pos == (60, 40)
    assert state.nest.radius == 4
    ant = state.ants[0]
    ant.direction = 0.0
    source = state.food.sources[0]

    for _ in range(400):
        engine.step()
        if ant.carrying_food:
            break
    assert ant.carrying_food
    assert source.capacity == 249

    for _ in range(2000):
        engine.step()
        if engine.stats.delivered_food:
            break
    assert engine.stats.delivered_food == 1
    assert not ant.carrying_food
    assert source.capacity == 249


def test_passive_depletion_removes_source():
    engine = _engine(allow_food_depletion=True, depletion_multiplier=1.0)
    engine.place_food(30, 30, capacity=5, depletion_rate=0.5)
    engine.start()

    for _ in range(190):
        engine.step()
    assert len(engine.snapshot().food) == 1

    # capacity / depletion_rate = 10s = 200 steps
    for _ in range(10):
        engine.step()
    assert engine.snapshot().food == ()


def test_auto_food_respawns_when_countdown_elapses():
    engine = _engine(auto_food=True)
    engine.start()
    engine.state.food.respawn_timer = 0.0
    engine.step()

    snap = engine.snapshot()
    assert 2 <= len(snap.food) <= min(3, config.MAX_FOOD_SOURCES)
    for f in snap.food:
        assert math.hypot(f.x - snap.nest.x, f.y - snap.nest.y) >= snap.nest.radius + config.FOOD_NEST_CLEARANCE


def test_food_staged_before_start_is_copied_in():
    engine = _engine()
    staged = engine.place_food(200, 10)
    assert (staged.x, staged.y) == (120, 10)
    assert engine.snapshot() is None

    engine.start()
    live = engine.state.food.sources[0]
    assert live.id == staged.id
    assert live is not staged


def test_food_placed_while_running_joins_world():
    engine = _engine()
    engine.start()
    engine.place_food(20, 20)
    assert len(engine.snapshot().food) == 1
    assert engine.staged_food == []


def test_pause_resume_reset_lifecycle():
    engine = _engine(ant_count=5, time_scale=1.0)
    assert engine.status is Status.IDLE
    assert engine.tick(1.0) == 0
    engine.pause()
    assert engine.status is Status.IDLE

    engine.start()
    assert engine.tick(0.1) == 2

    engine.pause()
    assert engine.status is Status.PAUSED
    before = engine.stats
    assert engine.tick(0.3) == 0
    assert engine.stats == before

    engine.resume()
    assert engine.status is Status.RUNNING
    assert engine.tick(0.1) == 2

    engine.place_food(10, 10)
    engine.reset()
    assert engine.status is Status.IDLE
    assert engine.snapshot() is None
    assert engine.staged_food == []
    assert engine.stats.delivered_food == 0
    assert engine.stats.elapsed_seconds == 0.0


def test_step_before_start_is_an_error():
    with pytest.raises(RuntimeError):
        _engine().step()


def test_elapsed_time_counts_simulated_steps():
    engine = _engine(time_scale=2.0)
    engine.start()
    engine.tick(0.25)
    assert engine.stats.elapsed_seconds == pytest.approx(0.5)


def test_settings_swap_takes_effect_next_step():
    engine = _engine(ant_count=10)
    engine.start()
    assert len(engine.snapshot().ants) == 10

    engine.update_settings(engine.settings.replace(ant_count=3))
    assert len(engine.snapshot().ants) == 10
    engine.step()
    assert len(engine.snapshot().ants) == 3

    engine.update_settings(engine.settings.replace(ant_count=12))
    engine.step()
    assert len(engine.snapshot().ants) == 12


def test_toggle_auto_food_rearms_timer():
    engine = _engine()
    engine.start()
    engine.state.food.respawn_timer = -1.0
    engine.set_auto_food(True)
    lo, hi = config.FOOD_RESPAWN_DELAY_RANGE
    assert lo <= engine.state.food.respawn_timer <= hi


def test_snapshot_is_read_only_copy():
    engine = _engine(ant_count=3)
    engine.start()
    engine.step()
    snap = engine.snapshot()

    assert snap.home_trail.shape == (80, 120)
    with pytest.raises(ValueError):
        snap.home_trail[0, 0] = 1.0
    before = float(snap.home_trail[1, 1])
    engine.state.home_trail.deposit(1, 1, 1.0)
    assert snap.home_trail[1, 1] == before
    assert engine.state.home_trail.values[1, 1] == 1.0


def test_seeded_runs_are_reproducible():
    def run():
        engine = SimulationEngine(Settings(ant_count=15, auto_food=True), rng=random.Random(5))
        engine.place_food(95, 20)
        engine.start()
        for _ in range(300):
            engine.step()
        snap = engine.snapshot()
        return [(a.x, a.y, a.direction) for a in snap.ants], snap.food_trail.copy()

    ants_a, trail_a = run()
    ants_b, trail_b = run()
    assert ants_a == ants_b
    assert np.array_equal(trail_a, trail_b)


def test_auto_food_swap_while_running_stops_respawn():
    engine = _engine(auto_food=True)
    engine.start()
    engine.update_settings(engine.settings.replace(auto_food=False))
    engine.state.food.respawn_timer = 0.0
    engine.step()
    assert engine.snapshot().food == ()


def test_auto_food_swap_before_start_is_honoured():
    engine = _engine(auto_food=True)
    engine.update_settings(engine.settings.replace(auto_food=False))
    engine.start()
    assert engine.state.food.auto_spawn is False


def test_auto_food_swap_on_rearms_countdown():
    engine = _engine(auto_food=False)
    engine.start()
    engine.state.food.respawn_timer = -1.0
    engine.update_settings(engine.settings.replace(auto_food=True))
    engine.step()

    lo, hi = config.FOOD_RESPAWN_DELAY_RANGE
    assert engine.state.food.auto_spawn is True
    assert lo - config.SIM_STEP <= engine.state.food.respawn_timer <= hi
    assert engine.snapshot().food == ()


def test_set_auto_food_updates_settings():
    engine = _engine(auto_food=True)
    engine.set_auto_food(False)
    assert engine.settings.auto_food is False
    engine.start()
    engine.state.food.respawn_timer = 0.0
    engine.step()
    assert engine.snapshot().food == ()

    engine.set_auto_food(True)
    assert engine.settings.auto_food is True
    assert engine.state.food.auto_spawn is True


def test_snapshot_reports_status():
    engine = _engine(ant_count=2)
    engine.start()
    assert engine.snapshot().status is Status.RUNNING

    engine.pause()
    assert engine.snapshot().status is Status.PAUSED

    engine.resume()
    assert engine.snapshot().status is Status.RUNNING


def test_snapshot_food_carries_fill_ratio():
    engine = _engine()
    engine.place_food(30, 30, capacity=4)
    engine.start()
    source = engine.state.food.sources[0]
    source.take_one()

    (view,) = engine.snapshot().food
    assert view.fill_ratio == pytest.approx(0.75)
    assert view.fill_ratio == source.fill_ratio
