import math

# ============================================================================
# VERSION INFO
# ============================================================================
VERSION = "0.1.0"

# ============================================================================
# DISPLAY SETTINGS
# ============================================================================
ARENA_WIDTH = 800
ARENA_HEIGHT = 600
SIDEBAR_WIDTH = 300
SCREEN_WIDTH = ARENA_WIDTH + SIDEBAR_WIDTH
SCREEN_HEIGHT = ARENA_HEIGHT
FPS = 60

FINISH_Y = ARENA_HEIGHT - 40

# ============================================================================
# RACE
# ============================================================================
RACER_COUNT = 5
FINISH_LABEL = "finish"
BALL_LABEL_PREFIX = "ball_"

PODIUM_DELAY_MS = 1300
PODIUM_FADE_MS = 300

# None = fresh randomness every race, any int makes runs repeatable
SEED = None

# ============================================================================
# PHYSICS & TUNING
# ============================================================================
PHYSICS_DT = 1 / 60.0
PHYSICS_STEP_MS = 1000.0 / 60.0
MAX_STEPS_PER_FRAME = 5
GRAVITY_Y = 1100.0  # px/s^2, y grows downwards

WALL_THICKNESS = 50
FINISH_SENSOR_HEIGHT = 6
FINISH_MARGIN = 20

PEG_ROWS = 5
PEG_COLS = 9
PEG_RADIUS = 7
PEG_OFFSET_Y = 140
PEG_SPACING_Y = 70
PEG_MARGIN_X = 60
PEG_ELASTICITY = 0.9
PEG_FRICTION = 0.0

BUMPER_RADIUS = 24
BUMPER_ELASTICITY = 1.2
# (x fraction, y fraction, color)
BUMPERS = [
    (0.25, 0.55, (14, 165, 233)),
    (0.75, 0.50, (239, 68, 68)),
]

PADDLE_SIZE = (160, 12)
# (x fraction, y fraction, angle, color)
PADDLES = [
    (0.2, 0.75, -0.4, (22, 163, 74)),
    (0.8, 0.78, 0.45, (249, 115, 22)),
]

BALL_RADIUS = 12
BALL_MASS = 1.0
BALL_START_X = 120
BALL_SPACING_X = 120
BALL_START_Y = 60
BALL_ELASTICITY = 0.85
BALL_FRICTION = 0.01
BALL_AIR_FRICTION = 0.002
# Initial velocity ranges in px/frame, half-open
BALL_VX_RANGE = (-2.0, 2.0)
BALL_VY_RANGE = (1.0, 3.0)

# ============================================================================
# FIREWORKS
# ============================================================================
PARTICLE_COUNT = 120
PARTICLE_SPEED_RANGE = (2.0, 5.0)
PARTICLE_LIFE_RANGE = (35, 70)
PARTICLE_MAX_LIFE = 70
PARTICLE_GRAVITY = 0.05
PARTICLE_SATURATION = 80
PARTICLE_LIGHTNESS = 60
PARTICLE_RADIUS = 2

CELEBRATION_MARGIN_X = 120
CELEBRATION_OFFSET_Y = 60

FULL_CIRCLE = math.pi * 2

# ============================================================================
# COLORS
# ============================================================================
RACER_COLORS = [
    (239, 68, 68),
    (59, 130, 246),
    (34, 197, 94),
    (234, 179, 8),
    (168, 85, 247),
]

COLOR_BG = (15, 23, 42)
COLOR_SIDEBAR_BG = (30, 41, 59)
COLOR_WALL = (30, 41, 59)
COLOR_FINISH = (248, 250, 252)
COLOR_PEG = (51, 65, 85)
COLOR_FINISH_BAND = (148, 163, 184)
FINISH_BAND_ALPHA = 102  # 40%
COLOR_LABEL = (226, 232, 240)
COLOR_TEXT = (226, 232, 240)
COLOR_TEXT_DIM = (148, 163, 184)
COLOR_START_BUTTON = (16, 185, 129)
COLOR_RESET_BUTTON = (71, 85, 105)
COLOR_PODIUM_BUTTON = (99, 102, 241)
COLOR_PODIUM_EMPTY = (71, 85, 105)
PODIUM_BACKDROP_ALPHA = 242  # 95%

# ============================================================================
# PODIUM
# ============================================================================
# (place, height)
PODIUM_STEPS = [(1, 220), (2, 170), (3, 140)]
PODIUM_STEP_DELAY_MS = 100
PODIUM_STEP_GROW_MS = 400
