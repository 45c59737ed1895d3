"""
antcolony module: colony/behavior.py

Per-step ant update: sense -> decide -> move -> deposit -> pickup/delivery.

Field wiring:
- foragers follow the food trail and lay the home trail behind them
- carriers follow the home trail (plus the nest beacon) and lay the food trail
Ants are updated one after another, so a later ant in the same step already
sees what earlier ants deposited.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import random
from typing import Optional, Sequence, TYPE_CHECKING

from antcolony import config
from antcolony.colony.ant import Ant, AntMode
from antcolony.settings import Settings
from antcolony.world.pheromones import PheromoneGrid
from antcolony.world.physics import (
    advance_within_world,
    angle_to,
    clamp_length,
    interpolate_angle,
    project,
    wrap_angle,
)

if TYPE_CHECKING:
    from antcolony.sim.state import WorldState


@dataclass(frozen=True)
class ProbeProfile:
    offsets: Sequence[float]
    distance: float
    nest_signal_weight: float = 0.0
    influence_multiplier: float = 1.0


_SPREAD = math.pi / 3

FORAGING_PROBE = ProbeProfile(offsets=(-_SPREAD, 0.0, _SPREAD), distance=4.0)
RETURNING_PROBE = ProbeProfile(
    offsets=(-_SPREAD, 0.0, _SPREAD),
    distance=5.0,
    nest_signal_weight=0.55,
    influence_multiplier=1.25,
)
FORCED_PROBE = ProbeProfile(
    offsets=(-math.pi / 2.8, -math.pi / 5, 0.0, math.pi / 5, math.pi / 2.8),
    distance=6.0,
    nest_signal_weight=0.9,
    influence_multiplier=1.65,
)

# local food-trail level under which carriers fall back to dead reckoning
HOMING_SIGNAL_THRESHOLD = 0.02


def probe_profile(mode: AntMode) -> ProbeProfile:
    if mode is AntMode.FORAGING:
        return FORAGING_PROBE
    elif mode is AntMode.RETURNING:
        return RETURNING_PROBE
    elif mode is AntMode.FORCED_RETURNING:
        return FORCED_PROBE
    raise ValueError(f"unknown ant mode {mode!r}")


def homing_bias(mode: AntMode) -> float:
    return 0.55 if mode is AntMode.FORCED_RETURNING else 0.2


def sample_direction(
    ant: Ant,
    grid: PheromoneGrid,
    settings: Settings,
    profile: ProbeProfile,
    secondary: Optional[PheromoneGrid] = None,
) -> Optional[float]:
    """
    Probe a fan of headings around the ant and return a heading nudged
    toward the strongest one, or None when every probe reads zero.
    """
    best_angle = None
    best_intensity = 0.0
    for offset in profile.offsets:
        angle = ant.direction + offset
        px, py = project(ant.x, ant.y, angle, profile.distance)
        intensity = grid.sample(px, py)
        if secondary is not None and profile.nest_signal_weight > 0:
            intensity += secondary.sample(px, py) * profile.nest_signal_weight
        # strictly greater: ties keep the earlier probe
        if intensity > best_intensity:
            best_intensity = intensity
            best_angle = angle

    if best_angle is None:
        return None

    alpha = max(0.0, settings.pheromone_influence) * profile.influence_multiplier
    bias = alpha / (alpha + 1.0)
    return interpolate_angle(ant.direction, best_angle, bias)


def home_angle(ant: Ant) -> Optional[float]:
    hx, hy = -ant.path_x, -ant.path_y
    if math.hypot(hx, hy) <= 0.001:
        return None
    return math.atan2(hy, hx)


def update_carry_timer(ant: Ant, dt: float) -> AntMode:
    if ant.carrying_food:
        if not ant.force_return:
            ant.carrying_time += dt
            if ant.carrying_time >= config.FOOD_RETURN_TIMEOUT:
                ant.force_return = True
                ant.carrying_time = 0.0
    else:
        ant.carrying_time = 0.0
        ant.force_return = False
    return ant.mode


def decide_heading(ant: Ant, mode: AntMode, state: "WorldState", settings: Settings, rng: random.Random) -> float:
    forced = mode is AntMode.FORCED_RETURNING
    profile = probe_profile(mode)

    if mode is AntMode.FORAGING:
        probe = sample_direction(ant, state.food_trail, settings, profile)
    else:
        probe = sample_direction(ant, state.home_trail, settings, profile, secondary=state.nest_signal)

    jitter = (rng.random() - 0.5) * settings.randomness * (0.35 if forced else 1.0)
    homeward = home_angle(ant)
    desired = ant.direction

    if mode is AntMode.FORAGING:
        if probe is not None:
            desired = interpolate_angle(ant.direction, probe, settings.pheromone_influence)
        else:
            desired = ant.direction + jitter
        desired += jitter * 0.25

    elif mode is AntMode.RETURNING or mode is AntMode.FORCED_RETURNING:
        if probe is not None:
            influence = settings.pheromone_influence
            if forced:
                influence = min(1.0, influence * 1.35)
            desired = interpolate_angle(ant.direction, probe, influence)
        else:
            if state.food_trail.sample(ant.x, ant.y) <= HOMING_SIGNAL_THRESHOLD:
                target = homeward if homeward is not None else ant.direction
                desired = interpolate_angle(ant.direction, target, homing_bias(mode))
            desired += jitter * (0.4 if forced else 1.0)

        desired += jitter * (0.1 if forced else 0.25)
        if homeward is not None:
            desired = interpolate_angle(desired, homeward, homing_bias(mode))

    else:
        raise ValueError(f"unknown ant mode {mode!r}")

    return wrap_angle(desired)


def move(ant: Ant, state: "WorldState", settings: Settings, dt: float, rng: random.Random) -> float:
    """
    Advance the ant and update its path integration. Returns distance moved.
    """
    world = state.world
    anchor = state.nest.pos if ant.carrying_food else world.center
    ox, oy = ant.x, ant.y

    ant.x, ant.y, ant.direction = advance_within_world(
        ox, oy, ant.direction, settings.ant_speed * dt, world, anchor, rng
    )

    dx, dy = ant.x - ox, ant.y - oy
    limit = world.max_dim * config.PATH_INTEGRATION_LIMIT
    ant.path_x, ant.path_y = clamp_length(ant.path_x + dx, ant.path_y + dy, limit)
    return math.hypot(dx, dy)


def update_stall(ant: Ant, moved: float, state: "WorldState", dt: float, rng: random.Random) -> None:
    if moved >= config.STALL_DISTANCE:
        ant.stalled_time = 0.0
        return

    ant.stalled_time += dt
    if ant.stalled_time > config.STALL_ESCAPE_TIME and state.world.is_at_edge(ant.x, ant.y):
        # corner/edge trap: aim back at the nest with some spread
        escape = angle_to(ant.x, ant.y, state.nest.x, state.nest.y)
        deflect = (rng.random() - 0.5) * math.pi * 0.4
        ant.direction = wrap_angle(escape + deflect)


def deposit_trail(ant: Ant, state: "WorldState", settings: Settings, dt: float) -> None:
    grid = state.food_trail if ant.carrying_food else state.home_trail
    interval = config.DEPOSIT_INTERVAL

    if ant.stalled_time < config.STALL_DEPOSIT_CUTOFF:
        ant.deposit_accumulator += dt
        if ant.deposit_accumulator >= interval:
            count = math.floor(ant.deposit_accumulator / interval)
            ant.deposit_accumulator -= interval * count
            grid.deposit(ant.x, ant.y, settings.deposition_rate * count)
    else:
        ant.deposit_accumulator = min(ant.deposit_accumulator, interval)


def emit_nest_signal(ant: Ant, state: "WorldState", dt: float) -> None:
    if ant.nest_signal_timer <= 0:
        ant.nest_signal_accumulator = 0.0
        return

    ant.nest_signal_timer = max(0.0, ant.nest_signal_timer - dt)
    if ant.stalled_time >= config.STALL_DEPOSIT_CUTOFF:
        return

    interval = config.NEST_SIGNAL_INTERVAL
    ant.nest_signal_accumulator += dt
    if ant.nest_signal_accumulator >= interval:
        count = math.floor(ant.nest_signal_accumulator / interval)
        ant.nest_signal_accumulator -= interval * count
        state.nest_signal.deposit(ant.x, ant.y, config.NEST_SIGNAL_STRENGTH * count)


def deliver(ant: Ant, state: "WorldState", settings: Settings, rng: random.Random) -> None:
    nest = state.nest
    ant.drop_off()
    state.stats.delivered_food += 1

    outbound = sample_direction(ant, state.food_trail, settings, FORAGING_PROBE)
    if outbound is not None:
        ant.direction = wrap_angle(outbound)
    else:
        to_nest = angle_to(ant.x, ant.y, nest.x, nest.y)
        ant.direction = wrap_angle(to_nest + math.pi + (rng.random() - 0.5) * math.pi * 0.3)

    ant.x, ant.y = state.world.clamp(*project(nest.x, nest.y, ant.direction, nest.radius + 0.5))
    ant.reset_path(nest.x, nest.y)


def check_transitions(ant: Ant, state: "WorldState", settings: Settings, rng: random.Random) -> bool:
    """
    Pickup / delivery. Returns True when the ant delivered food this step.
    """
    nest = state.nest
    if ant.carrying_food:
        if nest.contains(ant.x, ant.y):
            deliver(ant, state, settings, rng)
            return True
        return False

    if nest.contains(ant.x, ant.y):
        ant.reset_path(nest.x, nest.y)
    if state.food.pickup_at(ant.x, ant.y) is not None:
        ant.pick_up()
    return False


def step_ant(ant: Ant, state: "WorldState", settings: Settings, dt: float, rng: random.Random) -> bool:
    mode = update_carry_timer(ant, dt)

    ant.direction = decide_heading(ant, mode, state, settings, rng)

    moved = move(ant, state, settings, dt, rng)
    update_stall(ant, moved, state, dt, rng)

    deposit_trail(ant, state, settings, dt)
    emit_nest_signal(ant, state, dt)

    return check_transitions(ant, state, settings, rng)
