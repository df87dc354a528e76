"""rario/constants.py — Default tuning values for the simulation.

All values are in world units (pixels) and frame ticks. The simulation is
tuned for a fixed 60 updates per second; velocities are per tick, not per
second. GameConfig (config.py) is built from these defaults.
"""

# ---------------------------------------------------------------------------
# Window
# ---------------------------------------------------------------------------

TITLE = "Super Rario Bros"
SCREEN_WIDTH = 254
SCREEN_HEIGHT = 224
FPS = 60

# ---------------------------------------------------------------------------
# World
# ---------------------------------------------------------------------------

TILE_SIZE = 16
GROUND_OFFSET = 24          # distance from screen bottom to the ground surface
WORLD_WIDTH = 3392          # width of the world1-1 background in pixels
CAMERA_DEAD_ZONE_X = 80     # player screen x the camera holds while scrolling

# ---------------------------------------------------------------------------
# Movement
# ---------------------------------------------------------------------------

GRAVITY = 9.80665 / 2.0     # pixels per second
GRAVITY_PER_TICK = GRAVITY / FPS
MOVE_ACCELERATION = 0.02
MAX_X_SPEED = 1.0
JUMP_VELOCITY = -3.4
FRICTION = 0.2

# ---------------------------------------------------------------------------
# Enemies
# ---------------------------------------------------------------------------

ENEMY_PATROL_SPEED = 0.5

# ---------------------------------------------------------------------------
# Game flow
# ---------------------------------------------------------------------------

GAMEOVER_DELAY = 120        # frames the GAME OVER screen stays up
DEFAULT_STAGE = "world1-1"
