"""Integer grid coordinates used throughout the engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """A cell position on the playfield.

    ``x`` grows to the right and ``y`` grows downwards, so ``(0, 0)`` is the
    top-left cell.  Instances are hashable and compare by value which lets
    shapes store them in sets.
    """

    x: int
    y: int

    def __add__(self, other: Coordinate) -> Coordinate:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return Coordinate(self.x + other.x, self.y + other.y)
