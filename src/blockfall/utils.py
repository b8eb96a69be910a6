"""Read-only helpers that turn engine state into something easy to draw."""

from __future__ import annotations

from typing import Dict, Mapping, Optional

import numpy as np
from numpy.typing import NDArray

from .coordinate import Coordinate
from .engine import Engine
from .shape import ShapeKind


Grid = NDArray[np.uint8]

# Mapping from ``ShapeKind`` to the integer stored in a grid snapshot.  The
# specific numeric values are not important as long as ``0`` represents an
# empty cell.
KIND_VALUES: Dict[ShapeKind, int] = {kind: i + 1 for i, kind in enumerate(ShapeKind)}

ASCII_GLYPHS: Dict[Optional[ShapeKind], str] = {
    **{kind: kind.value for kind in ShapeKind},
    None: ".",
}


def render_grid(engine: Engine) -> Grid:
    """Return a ``(height, width)`` array of the field including the active piece.

    Cells occupied by a piece receive the value from :data:`KIND_VALUES` for
    its kind.  The engine is only queried through :meth:`Engine.cell_at`, so
    the snapshot never mutates game state.
    """

    grid = np.zeros((engine.height, engine.width), dtype=np.uint8)
    for coordinate in engine.coordinates():
        kind = engine.cell_at(coordinate)
        if kind is not None:
            grid[coordinate.y, coordinate.x] = KIND_VALUES[kind]
    return grid


def render_text(
    engine: Engine, glyphs: Mapping[Optional[ShapeKind], str] = ASCII_GLYPHS
) -> str:
    """Return the field as newline separated rows of ``glyphs``."""

    rows = []
    for y in range(engine.height):
        rows.append(
            "".join(glyphs[engine.cell_at(Coordinate(x, y))] for x in range(engine.width))
        )
    return "\n".join(rows)
