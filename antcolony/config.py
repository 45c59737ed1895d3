"""
Simulation tuning knobs.
"""

import math

# World
WORLD_W, WORLD_H = 120.0, 80.0
NEST_RADIUS = 4.0

# Runtime pacing
SIM_STEP = 0.05  # seconds of simulated time per fixed step
MAX_FRAME_DELTA = 0.5  # upper bound on scaled time fed in by one tick

# Pheromone grids
PHEROMONE_CELL_SIZE = 1.0
PHEROMONE_MAX = 1.0
PHEROMONE_FLOOR = 0.001  # anything at or below is snapped to zero

# Food
FOOD_RADIUS_DEFAULT = 3.0
FOOD_CAPACITY_DEFAULT = 250.0
FOOD_DEPLETION_DEFAULT = 0.05
FOOD_MIN_CAPACITY = 0.1
MAX_FOOD_SOURCES = 5
FOOD_RESPAWN_DELAY_RANGE = (18.0, 32.0)
FOOD_RESPAWN_COUNT_RANGE = (2, 3)
FOOD_SPAWN_ATTEMPTS = 50
FOOD_NEST_CLEARANCE = 6.0  # added to the nest radius
FOOD_SPACING = 2.0  # added to the neighbour's radius

# Ant carry / homing
FOOD_RETURN_TIMEOUT = 35.0
PATH_INTEGRATION_LIMIT = 1.5  # x the larger world dimension

# Trail deposits
DEPOSIT_INTERVAL = 0.1
STALL_DEPOSIT_CUTOFF = 0.3

# Nest beacon
NEST_SIGNAL_DURATION = 6.0
NEST_SIGNAL_INTERVAL = 0.15
NEST_SIGNAL_STRENGTH = 0.45
NEST_SIGNAL_DECAY_RATE = 0.28

# Stall detection
STALL_DISTANCE = 0.025
STALL_ESCAPE_TIME = 0.4
EDGE_MARGIN = 0.6
MOVE_MARGIN = 0.05
MOVE_ATTEMPTS = 6

# Spawning
INITIAL_SPAWN_SPREAD = math.pi / 6
INITIAL_SPAWN_JITTER = 0.35
GROWTH_SPAWN_SPREAD = math.pi / 12
GROWTH_SPAWN_JITTER = 0.4
