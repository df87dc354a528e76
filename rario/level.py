"""rario/level.py — Stage loading: tile map, spawn points, image paths.

Each stage lives in ``rario/stages/<name>/`` as a ``tile_map.txt`` grid plus a
``meta.json`` with the player start, enemy spawns, world size and optional
image files for the background and sprites.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rario.constants import TILE_SIZE
from rario.tilemap import Tile, load_tile_map

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass
class EnemySpawn:
    x: float
    y: float
    vx: float


@dataclass
class StageData:
    """All runtime data for a loaded stage."""

    name: str
    tiles: list[Tile]
    player_start: tuple[float, float]
    enemy_spawns: list[EnemySpawn]
    level_width: int
    level_height: int
    images: dict[str, Optional[Path]] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Stage directory lookup
# ---------------------------------------------------------------------------

STAGES_DIR = Path(__file__).parent / "stages"


def available_stages(base: Path = STAGES_DIR) -> list[str]:
    """Names of every stage directory that carries a meta.json."""
    return sorted(p.parent.name for p in base.glob("*/meta.json"))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_stage(
    stage_name: str,
    tile_size: int = TILE_SIZE,
    base: Path = STAGES_DIR,
) -> StageData:
    """Load a stage's tiles and metadata.

    Raises:
        ValueError: If stage_name is not a known stage.
        FileNotFoundError: If the stage's tile map is missing.
        MapParseError: If the tile map is malformed.
    """
    data_dir = base / stage_name
    meta_path = data_dir / "meta.json"
    if not meta_path.is_file():
        raise ValueError(
            f"Unknown stage: {stage_name!r}. Available: {available_stages(base)}"
        )

    meta = _read_json(meta_path)
    tiles = load_tile_map(data_dir / "tile_map.txt", tile_size)

    ps = meta["player_start"]
    spawns = [
        EnemySpawn(x=float(e["x"]), y=float(e["y"]), vx=float(e["vx"]))
        for e in meta.get("enemies", [])
    ]
    images = {
        key: (data_dir / value) if value else None
        for key, value in meta.get("images", {}).items()
    }

    stage = StageData(
        name=stage_name,
        tiles=tiles,
        player_start=(float(ps["x"]), float(ps["y"])),
        enemy_spawns=spawns,
        level_width=int(meta["width_px"]),
        level_height=int(meta["height_px"]),
        images=images,
    )
    log.info(
        "Loaded stage %s: %d tiles, %d enemies, %dx%d px",
        stage_name, len(tiles), len(spawns), stage.level_width, stage.level_height,
    )
    return stage


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _read_json(path: Path):
    """Read and parse a JSON file."""
    with open(path) as f:
        return json.load(f)
