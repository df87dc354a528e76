"""rario/tilemap.py — Plain-text tile maps.

Each line of a map is one row and each character one column. ``.`` is empty
space; any other character is a solid 16x16 tile. Tiles sit half a tile lower
than their grid row so the ground lines up with the background art.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from rario.constants import TILE_SIZE
from rario.geometry import Rect

EMPTY = "."


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class MapParseError(ValueError):
    """Raised for map text that cannot be turned into tiles."""

    def __init__(self, message: str, row: int, column: int) -> None:
        super().__init__(f"{message} (row {row}, column {column})")
        self.row = row
        self.column = column


# ---------------------------------------------------------------------------
# Data class
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Tile:
    """A static solid square in world coordinates."""

    x: int
    y: int
    size: int = TILE_SIZE

    @property
    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.size, self.size)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def iter_tiles(text: str, tile_size: int = TILE_SIZE) -> Iterator[Tile]:
    """Yield tiles lazily in row-major, then column-major order.

    Raises:
        MapParseError: On the first non-ASCII character.
    """
    for row, line in enumerate(text.splitlines()):
        for column, ch in enumerate(line):
            if not ch.isascii():
                raise MapParseError(f"Non-ASCII map character {ch!r}", row, column)
            if ch == EMPTY:
                continue
            yield Tile(
                x=column * tile_size,
                y=row * tile_size + tile_size // 2,
                size=tile_size,
            )


def parse_tile_map(text: str, tile_size: int = TILE_SIZE) -> list[Tile]:
    """Parse map text into the full ordered tile sequence."""
    return list(iter_tiles(text, tile_size))


def load_tile_map(path: Path | str, tile_size: int = TILE_SIZE) -> list[Tile]:
    """Read and parse a map file.

    Raises:
        FileNotFoundError: If the file does not exist.
        MapParseError: If the file holds non-ASCII characters.
    """
    text = Path(path).read_text(encoding="utf-8")
    return parse_tile_map(text, tile_size)


def map_extent(text: str, tile_size: int = TILE_SIZE) -> tuple[int, int]:
    """Return the (width, height) in pixels implied by the map text."""
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    width = max((len(line) for line in lines), default=0)
    return width * tile_size, len(lines) * tile_size
