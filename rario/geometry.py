"""rario/geometry.py — Axis-aligned rectangles for collision and drawing."""

from __future__ import annotations

from typing import NamedTuple, Optional


class Rect(NamedTuple):
    """Rectangle with top-left (x, y) and size (w, h) in world units."""

    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def move(self, dx: float, dy: float) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.w, self.h)

    def intersects(self, other: Rect) -> bool:
        """True when the rectangles share area. Touching edges do not count."""
        return (
            self.x < other.right
            and other.x < self.right
            and self.y < other.bottom
            and other.y < self.bottom
        )

    def intersection(self, other: Rect) -> Optional[Rect]:
        """Return the overlapping region, or None if there is none."""
        if not self.intersects(other):
            return None
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        return Rect(x1, y1, x2 - x1, y2 - y1)
