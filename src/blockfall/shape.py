"""Tetromino definitions and the geometry operations on them.

A :class:`Shape` is a plain value: a kind tag, the set of occupied cells and a
pivot used as the fixed point for rotation.  Every operation returns a new
shape so the engine can freely replace its pieces without worrying about
aliasing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple
import random

from .coordinate import Coordinate


class ShapeKind(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


Layout = Tuple[List[Tuple[int, int]], Tuple[int, int]]

# Spawn layouts as ``(cells, pivot)`` in the piece's own frame.  Rotation
# behaviour depends on these exact values, including the pivots that sit off
# the visual centre.
_BASE_LAYOUTS: Dict[ShapeKind, Layout] = {
    ShapeKind.I: ([(0, 0), (1, 0), (2, 0), (3, 0)], (1, 0)),
    ShapeKind.O: ([(0, 0), (1, 0), (0, 1), (1, 1)], (0, 0)),
    ShapeKind.T: ([(0, 0), (1, 0), (2, 0), (1, 1)], (0, 0)),
    ShapeKind.J: ([(0, 0), (0, 1), (0, 2), (-1, 2)], (0, 1)),
    ShapeKind.L: ([(0, 0), (0, 1), (0, 2), (1, 2)], (0, 1)),
    ShapeKind.S: ([(0, 0), (1, 0), (0, 1), (-1, 1)], (0, 0)),
    ShapeKind.Z: ([(0, 0), (-1, 0), (0, 1), (-1, 1)], (0, 0)),
}


@dataclass(frozen=True)
class Shape:
    """A tetromino, either the falling piece or a settled fragment."""

    kind: ShapeKind
    cells: FrozenSet[Coordinate]
    pivot: Coordinate

    @classmethod
    def spawn(cls, kind: ShapeKind) -> Shape:
        """Return the canonical layout for ``kind`` anchored at the origin."""

        cells, (px, py) = _BASE_LAYOUTS[kind]
        return cls(
            kind=kind,
            cells=frozenset(Coordinate(x, y) for x, y in cells),
            pivot=Coordinate(px, py),
        )

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> Shape:
        """Return a shape of a uniformly chosen kind.

        Parameters
        ----------
        rng:
            Source of randomness.  Pass a seeded :class:`random.Random` for
            reproducible sequences; the module-level generator is used when
            omitted.
        """

        chooser = rng if rng is not None else random
        return cls.spawn(chooser.choice(list(ShapeKind)))

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, coordinate: object) -> bool:
        return coordinate in self.cells

    def contains(self, coordinate: Coordinate) -> bool:
        """Return ``True`` if ``coordinate`` is one of the shape's cells."""

        return coordinate in self.cells

    def translated(self, delta: Coordinate) -> Shape:
        """Return a copy moved by ``delta``; the pivot moves along."""

        return Shape(
            kind=self.kind,
            cells=frozenset(cell + delta for cell in self.cells),
            pivot=self.pivot + delta,
        )

    def rotated(self) -> Shape:
        """Return a copy rotated 90 degrees clockwise about the pivot.

        Each cell ``(x, y)`` maps to ``(-y + py + px, x - px + py)`` where
        ``(px, py)`` is the pivot, which stays where it is.  Because the pivot
        is a grid cell rather than the true centre of the piece, some kinds
        appear to wobble as they turn.
        """

        px, py = self.pivot.x, self.pivot.y
        return Shape(
            kind=self.kind,
            cells=frozenset(
                Coordinate(-cell.y + py + px, cell.x - px + py) for cell in self.cells
            ),
            pivot=self.pivot,
        )

    def collides_with(self, other: Shape) -> bool:
        """Return ``True`` when the two shapes share at least one cell."""

        return not self.cells.isdisjoint(other.cells)

    def remove_row(self, y: int) -> Shape:
        """Return a copy with row ``y`` removed and the rows above it lowered.

        Cells on row ``y`` disappear, cells above it (smaller ``y``) drop by
        one and cells below it stay put.  Settled pieces apply this
        individually, so a piece split by an earlier clear compacts correctly.
        """

        remaining = set()
        for cell in self.cells:
            if cell.y == y:
                continue
            if cell.y < y:
                cell = Coordinate(cell.x, cell.y + 1)
            remaining.add(cell)
        return Shape(kind=self.kind, cells=frozenset(remaining), pivot=self.pivot)
