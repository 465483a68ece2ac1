"""Tunable defaults for the runner game.

All distances are stage pixels, all times milliseconds unless noted.
"""

# --- Difficulty (obstacle traversal period) ---
SPEED_INITIAL = 3200.0
SPEED_MIN = 1600.0
SPEED_STEP = 16.0           # ms of period removed per second played

# --- Obstacle variant odds ---
AERIAL_BASE_CHANCE = 0.2
AERIAL_MAX_CHANCE = 0.7
AERIAL_RAMP_SCORE = 500     # score at which the aerial odds stop growing

# --- Jump physics ---
JUMP_VELOCITY = 1120.0      # px/s upward impulse
GRAVITY = 4200.0            # px/s^2
MAX_PHYSICS_DELTA = 120.0   # clamp for the physics step after a stall

# --- Scoring ---
SCORE_DIVISOR = 100.0       # delta_ms / 100 -> 10 points per second

# --- Collision tolerances ---
RUNNER_RIGHT_INSET = 18
RUNNER_LEFT_INSET = 16
GROUND_TOP_PADDING = 12
GROUND_BOTTOM_PADDING = 6
AERIAL_PADDING = 4
DUCK_CLEARANCE = 12

# --- Presentation ---
HIT_FLASH_MS = 400.0
HIGH_SCORE_KEY = "dino-high-score"

# --- Stage geometry ---
STAGE_WIDTH = 800
STAGE_HEIGHT = 240
GROUND_OFFSET = 40          # runner's feet, measured up from the stage bottom
RUNNER_X = 48
RUNNER_WIDTH = 60
RUNNER_HEIGHT = 88
RUNNER_CROUCH_HEIGHT = 48
