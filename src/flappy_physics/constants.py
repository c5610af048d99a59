"""
constants.py: Centralized configuration for game world, hazards and tunable ranges.
"""

# -------- Game World Config --------
SCREEN_WIDTH = 480
SCREEN_HEIGHT = 640
GROUND_HEIGHT = 80
GROUND_Y = SCREEN_HEIGHT - GROUND_HEIGHT

# Logical tick rate of the host loop (the engine itself is tick-based)
TICK_RATE = 60

# -------- Bird Config --------
BIRD_X = 80                     # Fixed bird X position
BIRD_START_Y = 300
BIRD_WIDTH = 34
BIRD_HEIGHT = 28

# -------- Physics Config (units / tick) --------
# Frames of the "special" jump behaviour per curve
LINEAR_ASCENT_TICKS = 20
SINE_ASCENT_TICKS = 25
LINEAR_FALL_FACTOR = 1.2
EXPONENTIAL_DECAY_RATE = 0.12

# -------- Pipe Config --------
PIPE_WIDTH = 60
MIN_PIPE_HEIGHT = 80
PIPE_SPAWN_X = SCREEN_WIDTH + 50
PIPE_CULL_MARGIN = 50           # Pipes are dropped once fully this far off-screen

# -------- Chaos Config --------
CHAOS_SPAWN_INTERVAL = 400      # Ticks between possible spawns
CHAOS_SPAWN_CHANCE = 0.3
PARTICLES_PER_SPAWN = 2
MAX_GAMMA_RAYS = 1

GAMMA_RAY_HEIGHT = 15
GAMMA_RAY_WARNING_TICKS = 240
GAMMA_RAY_ACTIVE_TICKS = 30

VORTEX_RADIUS = 60
VORTEX_STRENGTH = 0.15
VORTEX_DEAD_ZONE = 10
VORTEX_SPEED_FACTOR = 0.5
VORTEX_SPIN = 0.1
VORTEX_BIRD_MIN_X = 20          # Vortex pull may not drag the bird outside [20, 150]
VORTEX_BIRD_MAX_X = 150

PARTICLE_MARGIN = 50
PARTICLE_COLORS = ("#00FFFF", "#FF00FF", "#FFFF00", "#00FF00", "#FF6600")

GRAVITY_FLIP_WIDTH = 100
GRAVITY_FLIP_DURATION = 180

ELECTRIC_CHANCE = 0.4
ELECTRIC_ON_TICKS = 50
ELECTRIC_OFF_TICKS = 120

GHOST_CHANCE = 0.5
GHOST_REVEAL_DISTANCE = 50

# -------- Black Hole Config --------
BLACK_HOLE_DURATION = 150       # ~2.5 seconds at 60 ticks/s
BLACK_HOLE_PULL_PHASE = 0.4     # 0-40%: bird pulled toward the hole
BLACK_HOLE_STRETCH_PHASE = 1.0  # 40-100%: spaghettification

# Summing 1/N per tick can land just under 1.0 after N ticks
PROGRESS_EPSILON = 1e-9

# -------- Tunable Ranges (min, max, default) --------
CONFIG_RANGES = {
    "speed": (1, 10, 4),
    "jump_height": (3, 11, 7),
    "gravity": (0.05, 1.0, 0.4),
    "pipe_gap": (100, 250, 160),
    "pipe_spacing": (150, 400, 280),
}

# -------- Persistence --------
DB_FILE = "flappy_physics.db"
BEST_SCORE_KEY = "flappy-physics-best-score"
