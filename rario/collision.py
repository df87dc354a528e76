"""rario/collision.py — Axis-separated collision against the static tile map.

Each frame every actor moves along X and is pushed out of at most one tile,
then the same happens along Y. Tiles are stored in world coordinates and
shifted by the camera scroll offset while testing, since actors live in
screen space. A linear scan over all tiles is plenty for one screen of
actors and a map of a few hundred tiles.
"""

from __future__ import annotations

from typing import Optional, Sequence

from rario.actors import Actor
from rario.geometry import Rect
from rario.physics import Axis
from rario.tilemap import Tile

AXIS_ORDER = (Axis.X, Axis.Y)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def find_collision(
    bounds: Rect,
    tiles: Sequence[Tile],
    x_offset: float = 0.0,
) -> Optional[Rect]:
    """Return the overlap with the first tile (in storage order) that bounds hits."""
    for tile in tiles:
        overlap = bounds.intersection(tile.rect.move(-x_offset, 0))
        if overlap is not None:
            return overlap
    return None


def _ground_below(bounds: Rect, tiles: Sequence[Tile], x_offset: float) -> Optional[Rect]:
    """Return the first tile whose top face the bounds are resting on."""
    for tile in tiles:
        r = tile.rect.move(-x_offset, 0)
        if r.y == bounds.bottom and bounds.x < r.right and r.x < bounds.right:
            return r
    return None


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------

def resolve_axis(
    actor: Actor,
    axis: Axis,
    tiles: Sequence[Tile],
    x_offset: float = 0.0,
) -> Optional[Rect]:
    """Move the actor along one axis and resolve the first overlap found.

    Returns the overlap that was handed to the actor, or None.
    """
    actor.move_mutate(axis)
    overlap = find_collision(actor.rect, tiles, x_offset)
    if overlap is not None:
        actor.handle_coll(axis, overlap)
    return overlap


def settle_on_ground(
    actor: Actor,
    tiles: Sequence[Tile],
    x_offset: float = 0.0,
) -> bool:
    """Ground a falling actor whose feet rest exactly on a tile top.

    An actor standing still only sinks into the floor once gravity has built
    up a whole pixel, so without this it would read as airborne on most
    frames. Rising actors are left alone.
    """
    if not actor.falling or actor.vy < 0:
        return False
    floor = _ground_below(actor.rect, tiles, x_offset)
    if floor is None:
        return False
    actor.y = float(floor.y - actor.config.tile_size)
    actor.vy = 0.0
    actor.falling = False
    return True


def collision_pass(
    actors: Sequence[Actor],
    tiles: Sequence[Tile],
    x_offset: float = 0.0,
) -> dict[Axis, list[Optional[Rect]]]:
    """Run the X sweep, then the Y sweep, for every actor in order.

    Returns the overlap resolved for each actor, per axis.
    """
    resolved: dict[Axis, list[Optional[Rect]]] = {}
    for axis in AXIS_ORDER:
        hits: list[Optional[Rect]] = []
        for actor in actors:
            overlap = resolve_axis(actor, axis, tiles, x_offset)
            if axis is Axis.Y and overlap is None:
                settle_on_ground(actor, tiles, x_offset)
            hits.append(overlap)
        resolved[axis] = hits
    return resolved
