"""
Geometry
========

Axis-aligned rectangles in play-area pixel coordinates (origin top-left,
y grows downward).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle."""
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)

    def overlaps(self, other: "Rect") -> bool:
        """
        True if the two rectangles share any point.

        Edges are inclusive: rectangles that merely touch count as overlapping.
        """
        return not (
            self.right < other.left
            or self.left > other.right
            or self.bottom < other.top
            or self.top > other.bottom
        )

    def moved_to(self, left: float, top: float) -> "Rect":
        return Rect(left, top, self.width, self.height)

    def clamped_within(self, bounds: "Rect") -> "Rect":
        """Return a copy shifted so it lies inside bounds."""
        return self.moved_to(
            clamp(self.left, bounds.left, bounds.right - self.width),
            clamp(self.top, bounds.top, bounds.bottom - self.height)
        )
