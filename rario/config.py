"""rario/config.py — Immutable game configuration.

GameConfig is built once at startup and passed to the actors, the collision
resolver, the camera and the simulation. Defaults come from constants.py;
a YAML file may override individual fields.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from rario.constants import (
    CAMERA_DEAD_ZONE_X,
    ENEMY_PATROL_SPEED,
    FPS,
    FRICTION,
    GRAVITY,
    GROUND_OFFSET,
    JUMP_VELOCITY,
    MAX_X_SPEED,
    MOVE_ACCELERATION,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_SIZE,
    WORLD_WIDTH,
)

log = logging.getLogger(__name__)

CONFIG_ENV_VAR = "RARIO_CONFIG"


# ---------------------------------------------------------------------------
# Data class
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GameConfig:
    """Window size, tile size and movement tuning for one session."""

    screen_width: int = SCREEN_WIDTH
    screen_height: int = SCREEN_HEIGHT
    fps: int = FPS
    tile_size: int = TILE_SIZE
    ground_offset: int = GROUND_OFFSET
    world_width: int = WORLD_WIDTH
    dead_zone_x: float = CAMERA_DEAD_ZONE_X
    gravity: float = GRAVITY
    move_acceleration: float = MOVE_ACCELERATION
    max_x_speed: float = MAX_X_SPEED
    jump_velocity: float = JUMP_VELOCITY
    friction: float = FRICTION
    enemy_patrol_speed: float = ENEMY_PATROL_SPEED

    @property
    def gravity_per_tick(self) -> float:
        return self.gravity / self.fps

    @property
    def max_scroll(self) -> int:
        """Largest horizontal scroll offset before the world edge shows."""
        return max(0, self.world_width - self.screen_width)

    @property
    def player_max_x(self) -> int:
        return self.screen_width - self.tile_size

    @property
    def ground_y(self) -> int:
        """Top-left y of an actor standing on the ground row."""
        return self.screen_height - self.ground_offset - self.tile_size


DEFAULT_CONFIG = GameConfig()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_config(path: Path | str | None = None) -> GameConfig:
    """Build a GameConfig, applying overrides from a YAML mapping.

    Args:
        path: YAML file of field overrides. Falls back to the file named by
            ``RARIO_CONFIG``; with neither, the defaults are returned.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If the file holds unknown keys or is not a mapping.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return DEFAULT_CONFIG

    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    known = {f.name for f in fields(GameConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys in {path}: {unknown}")

    log.debug("Loaded %d config override(s) from %s", len(data), path)
    return replace(DEFAULT_CONFIG, **data)
