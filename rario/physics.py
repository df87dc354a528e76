"""rario/physics.py — Input snapshot, axis tags and velocity helpers.

Pure functions over velocities; actors.py applies them to actor state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class InputState:
    """Keyboard snapshot for one frame, decoupled from Pyxel for testability."""
    left: bool = False
    right: bool = False
    up: bool = False


class Axis(Enum):
    X = "x"
    Y = "y"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def sign(x: float) -> float:
    """Return -1.0, 0.0, or 1.0."""
    if x > 0:
        return 1.0
    elif x < 0:
        return -1.0
    return 0.0


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# ---------------------------------------------------------------------------
# Horizontal
# ---------------------------------------------------------------------------

def accelerate(vx: float, direction: int, acceleration: float, max_speed: float) -> float:
    """Push vx toward direction, then clamp the updated value to max_speed."""
    vx += direction * acceleration
    return clamp(vx, -max_speed, max_speed)


def apply_friction(vx: float, friction: float) -> float:
    """Decelerate vx toward zero, snapping to exactly 0.0 once within friction."""
    if abs(vx) <= friction:
        return 0.0
    return vx - sign(vx) * friction


# ---------------------------------------------------------------------------
# Vertical
# ---------------------------------------------------------------------------

def integrate_fall(y: float, vy: float, gravity_per_tick: float) -> tuple[float, float]:
    """One Euler step: move by the current velocity, then accumulate gravity."""
    return y + vy, vy + gravity_per_tick
