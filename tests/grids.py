"""Synthetic tile-map builders for physics and collision tests.

Each builder writes a small map as text and parses it, so tiles come back in
the same row-major storage order a stage file would give. No Pyxel imports.
No stage files on disk.
"""

from __future__ import annotations

from rario.tilemap import Tile, parse_tile_map

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

GROUND_ROW = 12  # tile top at y = 200, where a player at y = 184 stands
ROWS = 14
COLUMNS = 40


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _blank(columns: int, rows: int = ROWS) -> list[list[str]]:
    return [["."] * columns for _ in range(rows)]


def _fill_ground(grid: list[list[str]], ground_row: int = GROUND_ROW) -> None:
    for row in range(ground_row, len(grid)):
        for col in range(len(grid[row])):
            grid[row][col] = "#"


def _to_text(grid: list[list[str]]) -> str:
    return "\n".join("".join(row) for row in grid)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_flat(columns: int = COLUMNS, ground_row: int = GROUND_ROW) -> list[Tile]:
    """Solid ground from ground_row to the bottom of the map."""
    grid = _blank(columns)
    _fill_ground(grid, ground_row)
    return parse_tile_map(_to_text(grid))


def build_wall(
    wall_col: int,
    height: int = 2,
    columns: int = COLUMNS,
    ground_row: int = GROUND_ROW,
) -> list[Tile]:
    """Flat ground with a column of `height` tiles standing on it at wall_col."""
    grid = _blank(columns)
    _fill_ground(grid, ground_row)
    for row in range(ground_row - height, ground_row):
        grid[row][wall_col] = "P"
    return parse_tile_map(_to_text(grid))


def build_gap(
    gap_start: int,
    gap_width: int = 2,
    columns: int = COLUMNS,
    ground_row: int = GROUND_ROW,
) -> list[Tile]:
    """Flat ground with a bottomless gap of gap_width columns."""
    grid = _blank(columns)
    _fill_ground(grid, ground_row)
    for row in range(ground_row, len(grid)):
        for col in range(gap_start, gap_start + gap_width):
            grid[row][col] = "."
    return parse_tile_map(_to_text(grid))


def build_ceiling(
    ceiling_row: int,
    columns: int = COLUMNS,
    ground_row: int = GROUND_ROW,
) -> list[Tile]:
    """Flat ground with a full-width row of blocks overhead."""
    grid = _blank(columns)
    _fill_ground(grid, ground_row)
    for col in range(columns):
        grid[ceiling_row][col] = "B"
    return parse_tile_map(_to_text(grid))
