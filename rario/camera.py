"""rario/camera.py — Horizontal dead-zone scrolling.

The camera never moves the primary actor past the dead-zone line. Once the
player crosses it, the world scrolls by the overshoot instead: the player is
put back on the line and every other actor is shifted left by however far
the view actually scrolled, which keeps their world positions unchanged
even once the scroll is clamped at the end of the world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from rario.actors import Actor
from rario.config import DEFAULT_CONFIG, GameConfig
from rario.geometry import Rect


# ---------------------------------------------------------------------------
# Data class
# ---------------------------------------------------------------------------

@dataclass
class Camera:
    """Scroll state: how far the view has moved right into the world."""
    x_back: float = 0.0
    world_width: int = 0
    screen_width: int = 0
    dead_zone_x: float = 0.0

    @property
    def max_scroll(self) -> float:
        return float(max(0, self.world_width - self.screen_width))


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_camera(
    config: GameConfig = DEFAULT_CONFIG,
    x_back: float = 0.0,
    world_width: Optional[int] = None,
) -> Camera:
    """Create a camera clamped to the world bounds.

    world_width defaults to the configured width; stages pass their own.
    """
    cam = Camera(
        x_back=x_back,
        world_width=config.world_width if world_width is None else world_width,
        screen_width=config.screen_width,
        dead_zone_x=config.dead_zone_x,
    )
    _clamp_to_bounds(cam)
    return cam


# ---------------------------------------------------------------------------
# Main update
# ---------------------------------------------------------------------------

def camera_update(camera: Camera, primary: Actor, others: Iterable[Actor] = ()) -> float:
    """Scroll so the primary actor stays at or left of the dead-zone line.

    Returns the distance the primary actor was pulled back (0.0 if none).
    """
    excess = 0.0
    if primary.x > camera.dead_zone_x:
        excess = primary.x - camera.dead_zone_x
        primary.x = float(camera.dead_zone_x)

    old = camera.x_back
    camera.x_back += excess
    _clamp_to_bounds(camera)

    # Only the scroll that survived the clamp moves the world
    scrolled = camera.x_back - old
    if scrolled:
        for actor in others:
            actor.x -= scrolled
    return excess


def visible_window(camera: Camera, screen_height: int) -> Rect:
    """The slice of the world the screen currently shows."""
    return Rect(int(camera.x_back), 0, camera.screen_width, screen_height)


# ---------------------------------------------------------------------------
# Boundary clamping
# ---------------------------------------------------------------------------

def _clamp_to_bounds(camera: Camera) -> None:
    camera.x_back = max(0.0, min(camera.x_back, camera.max_scroll))
