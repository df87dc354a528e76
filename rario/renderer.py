"""rario/renderer.py — Pyxel drawing for the world, tiles, actors and HUD.

Stages may name bitmap images for the background and sprites; those are
loaded with magenta (255, 0, 255) as the transparent key. Without images
everything is drawn with Pyxel primitives.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import pyxel

from rario.actors import Actor, Enemy, Player
from rario.camera import Camera
from rario.tilemap import Tile

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

MAGENTA = 0xFF00FF
COLKEY = 15  # palette slot reserved for the transparent key colour

_BASE_PALETTE = {
    0: 0x5C94FC,   # Sky
    1: 0xC84C0C,   # Ground / brick
    2: 0x000000,   # Outline, tile overlay
    3: 0xFCA044,   # Question block
    4: 0x00A800,   # Pipe
    5: 0x80D010,   # Pipe highlight
    6: 0xB82810,   # Player cap and shirt
    7: 0xFCBCB0,   # Player skin
    8: 0x883800,   # Enemy body
    9: 0xF0D0B0,   # Enemy feet
    10: 0xFCFCFC,  # Cloud
    11: 0xFFFFFF,  # UI white
    12: 0x202020,  # UI dark
    13: 0x00A844,  # Hill
    14: 0x005800,  # Hill shade
    COLKEY: MAGENTA,
}


def init_palette() -> None:
    """Set the palette colours. Call after pyxel.init()."""
    for slot, color in _BASE_PALETTE.items():
        pyxel.colors[slot] = color


# ---------------------------------------------------------------------------
# Textures
# ---------------------------------------------------------------------------

def load_texture(path: Path | str) -> "pyxel.Image":
    """Load a bitmap as a Pyxel image.

    Colours are matched to the palette, so magenta pixels land on COLKEY and
    become transparent when drawn.

    Raises:
        FileNotFoundError: If the image does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")
    return pyxel.Image.from_image(str(path))


def load_textures(images: dict[str, Optional[Path]]) -> dict[str, "pyxel.Image"]:
    """Load every configured stage image, skipping unset entries."""
    return {key: load_texture(p) for key, p in images.items() if p is not None}


# ---------------------------------------------------------------------------
# Background
# ---------------------------------------------------------------------------

def draw_background(camera: Camera, screen_height: int, texture=None) -> None:
    """Clear the screen and draw the visible slice of the world backdrop."""
    pyxel.cls(0)
    x_back = int(camera.x_back)
    if texture is not None:
        pyxel.blt(0, 0, texture, x_back, 0, camera.screen_width, screen_height)
        return

    # Hills and clouds repeat every 768 px of world
    period = 768
    first = (x_back // period) * period
    for base in range(first, x_back + camera.screen_width + period, period):
        _draw_hill(base + 16 - x_back, screen_height - 24, 40)
        _draw_hill(base + 256 - x_back, screen_height - 24, 24)
        _draw_cloud(base + 136 - x_back, 40)
        _draw_cloud(base + 440 - x_back, 24)


def _draw_hill(x: int, ground_y: int, height: int) -> None:
    pyxel.tri(x, ground_y, x + height * 2, ground_y, x + height, ground_y - height, 13)
    pyxel.pset(x + height - 3, ground_y - height + 10, 14)
    pyxel.pset(x + height + 3, ground_y - height + 10, 14)


def _draw_cloud(x: int, y: int) -> None:
    pyxel.circ(x, y, 7, 10)
    pyxel.circ(x + 9, y - 3, 8, 10)
    pyxel.circ(x + 18, y, 7, 10)


# ---------------------------------------------------------------------------
# Tiles
# ---------------------------------------------------------------------------

def draw_tiles(tiles: Sequence[Tile], x_back: float, screen_width: int) -> int:
    """Draw the solid-tile overlay shifted by the scroll offset.

    Returns the number of tiles drawn after viewport culling.
    """
    drawn = 0
    for tile in tiles:
        sx = int(tile.x - x_back)
        if sx + tile.size <= 0 or sx >= screen_width:
            continue
        pyxel.rect(sx, tile.y, tile.size, tile.size, 1)
        pyxel.rectb(sx, tile.y, tile.size, tile.size, 2)
        drawn += 1
    return drawn


# ---------------------------------------------------------------------------
# Actors
# ---------------------------------------------------------------------------

def draw_actor(actor: Actor, frame_count: int) -> None:
    """Draw one actor at its truncated screen position."""
    r = actor.rect
    x, y, size = int(r.x), int(r.y), int(r.w)
    if actor.texture is not None:
        pyxel.blt(x, y, actor.texture, 0, 0, size, size, COLKEY)
    elif isinstance(actor, Enemy):
        _draw_enemy(x, y, size, frame_count)
    elif isinstance(actor, Player):
        _draw_player(x, y, size, actor.vx, actor.falling)


def _draw_player(x: int, y: int, size: int, vx: float, airborne: bool) -> None:
    """Cap, face, shirt and legs; legs spread while airborne."""
    d = -1 if vx < 0 else 1
    cx = x + size // 2
    # Cap
    pyxel.rect(x + 3, y, size - 6, 3, 6)
    pyxel.rect(cx + d * 2, y + 2, 5, 1, 6)
    # Face
    pyxel.rect(x + 4, y + 3, size - 8, 4, 7)
    pyxel.pset(cx + d * 2, y + 4, 2)
    # Shirt
    pyxel.rect(x + 3, y + 7, size - 6, 5, 6)
    # Legs
    spread = 2 if airborne else 0
    pyxel.rect(x + 3 - spread, y + 12, 4, 4, 8)
    pyxel.rect(x + size - 7 + spread, y + 12, 4, 4, 8)


def _draw_enemy(x: int, y: int, size: int, frame_count: int) -> None:
    """Mushroom body with alternating feet."""
    pyxel.elli(x, y + 1, size, size - 5, 8)
    pyxel.pset(x + 5, y + 6, 11)
    pyxel.pset(x + size - 6, y + 6, 11)
    step = frame_count % 16 < 8
    if step:
        pyxel.rect(x + 1, y + size - 4, 5, 4, 9)
        pyxel.rect(x + size - 6, y + size - 3, 5, 3, 9)
    else:
        pyxel.rect(x + 1, y + size - 3, 5, 3, 9)
        pyxel.rect(x + size - 6, y + size - 4, 5, 4, 9)


# ---------------------------------------------------------------------------
# HUD
# ---------------------------------------------------------------------------

def draw_hud(stage_name: str, world_x: float, frame: int, fps: int) -> None:
    """Stage name, distance travelled and elapsed time."""
    pyxel.text(4, 4, stage_name.upper(), 11)
    pyxel.text(80, 4, f"DIST {int(world_x):>4d}", 11)
    total_seconds = frame // fps
    pyxel.text(170, 4, f"TIME {total_seconds // 60}:{total_seconds % 60:02d}", 11)


def draw_debug_hud(player: Actor, x_back: float) -> None:
    """Raw kinematic values, shown when RARIO_DEBUG=1."""
    lines = [
        f"X {player.x:7.2f}  VX {player.vx:+.3f}",
        f"Y {player.y:7.2f}  VY {player.vy:+.3f}",
        f"FALL {int(player.falling)}  BACK {x_back:7.2f}",
    ]
    for i, line in enumerate(lines):
        pyxel.text(4, 14 + i * 8, line, 12)


def draw_game_over(screen_width: int, screen_height: int) -> None:
    pyxel.cls(2)
    pyxel.text(screen_width // 2 - 20, screen_height // 2 - 4, "GAME OVER", 11)
