# flappybot/game/config.py
from __future__ import annotations
from dataclasses import dataclass

# --- Display ---
WIDTH = 1200
HEIGHT = 800
FPS = 60
MIN_VIEWPORT_WIDTH = 320
MIN_VIEWPORT_HEIGHT = 400    # must leave room for gap + both margins

# --- Frame timing / refresh compensation ---
REFERENCE_REFRESH_HZ = 60.0      # rate the per-tick constants are tuned for
HIGH_REFRESH_THRESHOLD_HZ = 75.0 # compensation only kicks in above this
JUMP_REFRESH_EXPONENT = 0.25     # flap impulse grows as (rate/ref) ** exp
REFRESH_SAMPLE_WINDOW_MS = 1000  # startup measurement window

# --- Physics (px / tick at the reference rate) ---
GRAVITY = 0.5
JUMP_FORCE = -8.0
PIPE_SPEED = 3.0

# --- Actor ---
ACTOR_SIZE = 80              # square sprite (px)
ACTOR_X_FRACTION = 0.1       # actor's left edge sits at 10% of the viewport width
HITBOX_PADDING = 15          # hit-box inset on top and bottom
TILT_PER_VELOCITY = 3.0      # degrees of tilt per px/tick of vy
MAX_TILT_DEG = 30.0

# --- Obstacles ---
PIPE_GAP = 200               # configured gap, capped by GAP_HEIGHT_FRACTION
GAP_HEIGHT_FRACTION = 0.3
MIN_TOP_HEIGHT = 50
MIN_BOTTOM_MARGIN = 100
SPAWN_INTERVAL_MS = 2000
# size class -> (width, vertical extent)
PIPE_SIZES = {
    "small": (60, 120),
    "medium": (60, 160),
    "large": (60, 200),
}

# --- Difficulty ---
DIFFICULTY_STEP = 0.05       # +5% gravity and scroll speed per point
DIFFICULTY_CAP = 2.5
JUMP_DIFFICULTY_STEP = 0.025
JUMP_DIFFICULTY_CAP = 1.6    # ~sqrt(DIFFICULTY_CAP)

SEED_DEFAULT = None          # None -> fresh random spawns each launch

# --- Colors (RGB) ---
COLOR_BG = (198, 201, 210)
COLOR_FG = (34, 36, 43)
COLOR_PIPE = (80, 158, 227)
COLOR_PIPE_EDGE = (70, 130, 180)
COLOR_ACTOR = (34, 36, 43)
COLOR_ACTOR_DEAD = (255, 86, 110)
COLOR_PANEL = (255, 255, 255)
COLOR_BUTTON = (80, 158, 227)
COLOR_HUD = (255, 255, 255)


@dataclass(frozen=True)
class Tuning:
    """Per-tick physics constants. Defaults are the canonical game tuning."""
    gravity: float = GRAVITY
    jump_force: float = JUMP_FORCE
    pipe_speed: float = PIPE_SPEED
    actor_size: float = ACTOR_SIZE
    actor_x_fraction: float = ACTOR_X_FRACTION
    hitbox_padding: float = HITBOX_PADDING
    pipe_gap: float = PIPE_GAP
    spawn_interval_ms: float = SPAWN_INTERVAL_MS
    difficulty_step: float = DIFFICULTY_STEP
    difficulty_cap: float = DIFFICULTY_CAP
    jump_difficulty_step: float = JUMP_DIFFICULTY_STEP
    jump_difficulty_cap: float = JUMP_DIFFICULTY_CAP
    reference_refresh_hz: float = REFERENCE_REFRESH_HZ
    high_refresh_threshold_hz: float = HIGH_REFRESH_THRESHOLD_HZ


DEFAULT_TUNING = Tuning()
