from __future__ import annotations

from typing import Iterable, Tuple

from blockfall.coordinate import Coordinate
from blockfall.shape import Shape, ShapeKind


def fragment(kind: ShapeKind, cells: Iterable[Tuple[int, int]]) -> Shape:
    """Build a settled fragment of arbitrary size for setting up a field."""

    return Shape(
        kind=kind,
        cells=frozenset(Coordinate(x, y) for x, y in cells),
        pivot=Coordinate(0, 0),
    )


def row(kind: ShapeKind, y: int, xs: Iterable[int]) -> Shape:
    return fragment(kind, [(x, y) for x in xs])


def vertical_i(x: int, top: int) -> Shape:
    """Return an upright I piece occupying column ``x`` from row ``top`` down."""

    upright = Shape.spawn(ShapeKind.I).rotated()
    return upright.translated(Coordinate(x - 1, top + 1))


def settled_cells(shapes: Iterable[Shape]) -> set:
    return {cell for shape in shapes for cell in shape}
