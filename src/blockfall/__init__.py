"""Falling-block puzzle engine with text, pygame and gymnasium front-ends."""

from .coordinate import Coordinate
from .shape import Shape, ShapeKind
from .engine import Direction, Engine, LINE_SCORES
from .utils import KIND_VALUES, render_grid, render_text

__all__ = [
    "Coordinate",
    "Shape",
    "ShapeKind",
    "Direction",
    "Engine",
    "LINE_SCORES",
    "KIND_VALUES",
    "render_grid",
    "render_text",
]
