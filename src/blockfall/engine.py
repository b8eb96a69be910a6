"""Game state engine: the falling piece, settled pieces, score and game over."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple
import logging
import random

from .coordinate import Coordinate
from .shape import Shape, ShapeKind


LOGGER = logging.getLogger(__name__)

# Points awarded for the number of rows cleared by a single settle.
LINE_SCORES: Dict[int, int] = {1: 100, 2: 300, 3: 500, 4: 800}

DOWN = Coordinate(0, 1)


class Direction(Enum):
    """Horizontal shift directions."""

    LEFT = Coordinate(-1, 0)
    RIGHT = Coordinate(1, 0)

    @property
    def delta(self) -> Coordinate:
        return self.value


class Engine:
    """Mutable state for a single game session.

    The engine is the only owner of its shapes.  Commands that would move the
    active piece out of the field or into a settled piece leave the state
    untouched, and once the game is over every command except :meth:`reset` is
    ignored.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Field dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._rng = rng if rng is not None else random.Random(seed)
        self._settled: List[Shape] = []
        self._score = 0
        self._game_over = False
        self._active = self._spawn()

    # Queries ----------------------------------------------------------
    @property
    def active(self) -> Shape:
        """The piece currently under player and gravity control."""

        return self._active

    @property
    def settled(self) -> Tuple[Shape, ...]:
        """Settled pieces in the order they landed."""

        return tuple(self._settled)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def score(self) -> int:
        return self._score

    @property
    def game_over(self) -> bool:
        return self._game_over

    def is_game_over(self) -> bool:
        return self._game_over

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every cell of the field row by row, left to right."""

        for y in range(self._height):
            for x in range(self._width):
                yield Coordinate(x, y)

    def cell_at(self, coordinate: Coordinate) -> Optional[ShapeKind]:
        """Return the kind occupying ``coordinate`` or ``None`` if empty.

        The active piece takes precedence over settled pieces, which are
        searched in the order they settled.
        """

        if coordinate in self._active:
            return self._active.kind
        for shape in self._settled:
            if coordinate in shape:
                return shape.kind
        return None

    def is_out_of_bounds(self, shape: Shape) -> bool:
        """Return ``True`` if any cell of ``shape`` lies outside the field."""

        return not all(
            0 <= cell.x < self._width and 0 <= cell.y < self._height for cell in shape
        )

    def is_colliding(self, shape: Shape) -> bool:
        """Return ``True`` if ``shape`` overlaps any settled piece."""

        return any(settled.collides_with(shape) for settled in self._settled)

    def fits(self, shape: Shape) -> bool:
        return not self.is_out_of_bounds(shape) and not self.is_colliding(shape)

    def is_line_full(self, y: int) -> bool:
        """Return ``True`` if settled cells cover every column of row ``y``."""

        columns = {cell.x for shape in self._settled for cell in shape if cell.y == y}
        return len(columns) == self._width

    # Commands ---------------------------------------------------------
    def reset(self) -> None:
        """Start a new game on a field of the same size."""

        self._settled = []
        self._score = 0
        self._game_over = False
        self._active = self._spawn()
        LOGGER.info("Game reset on %dx%d field", self._width, self._height)

    def step(self) -> None:
        """Advance gravity by one row, settling the piece when it lands."""

        if self._game_over:
            return
        lowered = self._active.translated(DOWN)
        if self.fits(lowered):
            self._active = lowered
            return

        self._settled.append(self._active)
        LOGGER.debug("Settled %s piece", self._active.kind.value)
        self._remove_full_lines()
        self._active = self._spawn()

    def shift(self, direction: Direction) -> None:
        """Move the active piece one column left or right if there is room."""

        if self._game_over:
            return
        shifted = self._active.translated(direction.delta)
        if self.fits(shifted):
            self._active = shifted

    def rotate(self) -> None:
        """Rotate the active piece clockwise if the result fits."""

        if self._game_over:
            return
        rotated = self._active.rotated()
        if self.fits(rotated):
            self._active = rotated

    def hard_drop(self) -> None:
        """Drop the active piece as far as it goes and settle it."""

        if self._game_over:
            return
        lowered = self._active.translated(DOWN)
        while self.fits(lowered):
            self._active = lowered
            lowered = self._active.translated(DOWN)
        self.step()

    # Internal helpers -------------------------------------------------
    def _spawn(self) -> Shape:
        """Create a random piece at the top centre and check for game over."""

        shape = Shape.random(self._rng).translated(Coordinate(self._width // 2, 0))
        if not self.fits(shape):
            self._game_over = True
            LOGGER.debug("Game over with score %d", self._score)
        return shape

    def _remove_full_lines(self) -> None:
        # Rows are visited once, top to bottom, by their original index while
        # the settled pieces are compacted in place.
        cleared = 0
        for y in range(self._height):
            if self.is_line_full(y):
                self._settled = [shape.remove_row(y) for shape in self._settled]
                cleared += 1
        if cleared:
            self._score += LINE_SCORES.get(cleared, 0)
            LOGGER.debug("Cleared %d line(s). Score: %d", cleared, self._score)
