"""rario/actors.py — Player and Enemy sharing one move/collide/update protocol.

Actor holds the behavior both variants agree on (movement, jumping, gravity
and the default collision response). Player and Enemy override the parts
where they diverge: Enemy bounces off walls instead of stopping, and only
Player has friction, screen clamping and the fell-off-the-world check.

Positions are screen-space top-left corners; the camera shifts actors
rather than moving a viewport over them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from rario.config import DEFAULT_CONFIG, GameConfig
from rario.geometry import Rect
from rario.physics import Axis, InputState, accelerate, apply_friction, integrate_fall


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class UpdateOutcome(Enum):
    CONTINUE = "continue"
    LOST = "lost"


_DIRECTIONS = (-1, 0, 1)


# ---------------------------------------------------------------------------
# Base actor
# ---------------------------------------------------------------------------

@dataclass
class Actor:
    """Kinematic state plus an opaque drawable handle."""
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    falling: bool = False
    texture: Optional[Any] = None
    config: GameConfig = DEFAULT_CONFIG

    @property
    def rect(self) -> Rect:
        """Collision box; position truncated to whole pixels like rendering."""
        size = self.config.tile_size
        return Rect(int(self.x), int(self.y), size, size)

    def move_dir(self, direction: int) -> None:
        """Accelerate horizontally. direction is -1, 0 or +1."""
        if direction not in _DIRECTIONS:
            raise ValueError(f"direction must be -1, 0 or 1, got {direction!r}")
        cfg = self.config
        self.vx = accelerate(self.vx, direction, cfg.move_acceleration, cfg.max_x_speed)

    def jump(self) -> None:
        if not self.falling:
            self.vy = self.config.jump_velocity
            self.falling = True

    def move_mutate(self, axis: Axis) -> None:
        if axis is Axis.X:
            self.x += self.vx
        elif self.falling:
            self.y, self.vy = integrate_fall(self.y, self.vy, self.config.gravity_per_tick)

    def handle_coll(self, axis: Axis, overlap: Rect) -> None:
        """Push the actor out of one tile it overlaps on the given axis."""
        size = self.config.tile_size
        if axis is Axis.X:
            if self.vx > 0:
                self.x = float(overlap.x - size)
            elif self.vx < 0:
                self.x = float(overlap.right)
            self.vx = 0.0
        else:
            self._handle_vertical(overlap)

    def _handle_vertical(self, overlap: Rect) -> None:
        if not self.falling:
            return
        if self.vy > 0:
            # Landed on top of the tile
            self.y = float(overlap.y - self.config.tile_size)
            self.falling = False
        else:
            # Hit a ceiling
            self.y = float(overlap.bottom)
        self.vy = 0.0

    def update(self, inp: InputState) -> UpdateOutcome:
        """Per-frame bookkeeping after movement and collision."""
        self.falling = True
        return UpdateOutcome.CONTINUE


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------

@dataclass
class Player(Actor):
    """The keyboard-controlled actor the camera follows."""

    def update(self, inp: InputState) -> UpdateOutcome:
        cfg = self.config

        if not (inp.left or inp.right or self.falling):
            self.vx = apply_friction(self.vx, cfg.friction)

        if int(self.x) < 0:
            self.x = 0.0
            self.vx = 0.0
        elif int(self.x) > cfg.player_max_x:
            self.x = float(cfg.player_max_x)

        # Re-armed every frame; the next ground contact clears it again
        self.falling = True

        if int(self.y) > cfg.screen_height:
            return UpdateOutcome.LOST
        return UpdateOutcome.CONTINUE


@dataclass
class Enemy(Actor):
    """A patroller that reverses direction whenever it runs into a wall."""

    def handle_coll(self, axis: Axis, overlap: Rect) -> None:
        if axis is not Axis.X:
            self._handle_vertical(overlap)
            return
        # copysign catches -0.0 as well
        if math.copysign(1.0, self.vx) < 0:
            self.x = float(overlap.right)
        else:
            self.x = float(overlap.x - self.config.tile_size)
        self.vx = -self.vx

    # TODO: decide whether enemies should share Player's screen clamp and
    # fall-off check; until then they may wander out of the world.
    def update(self, inp: InputState) -> UpdateOutcome:
        self.falling = True
        return UpdateOutcome.CONTINUE


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def create_player(
    config: GameConfig = DEFAULT_CONFIG,
    x: float = 0.0,
    y: Optional[float] = None,
    texture: Optional[Any] = None,
) -> Player:
    """Create a player, standing on the ground row unless y is given."""
    if y is None:
        y = float(config.ground_y)
    return Player(x=float(x), y=float(y), texture=texture, config=config)


def create_enemy(
    config: GameConfig = DEFAULT_CONFIG,
    x: float = 0.0,
    y: Optional[float] = None,
    vx: Optional[float] = None,
    texture: Optional[Any] = None,
) -> Enemy:
    """Create an enemy walking left at the configured patrol speed by default."""
    if y is None:
        y = float(config.ground_y)
    if vx is None:
        vx = -config.enemy_patrol_speed
    return Enemy(x=float(x), y=float(y), vx=float(vx), texture=texture, config=config)
