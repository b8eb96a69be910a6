from __future__ import annotations

import pygame
import pytest

from blockfall.coordinate import Coordinate
from blockfall.engine import Engine
from blockfall.run_pygame import (
    CELL_SIZE,
    GRID_PADDING,
    INFO_PANEL_WIDTH,
    SHAPE_COLORS,
    GameRunner,
    handle_key,
    window_size,
)
from blockfall.shape import Shape, ShapeKind


def _key(key: int) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=key)


@pytest.fixture
def engine() -> Engine:
    engine = Engine(10, 20, seed=0)
    engine._active = Shape.spawn(ShapeKind.L).translated(Coordinate(4, 4))
    return engine


def test_every_kind_has_a_colour() -> None:
    assert set(SHAPE_COLORS) == set(ShapeKind)


def test_window_size_fits_field_and_panel(engine: Engine) -> None:
    assert window_size(engine) == (
        10 * CELL_SIZE + 2 * GRID_PADDING + INFO_PANEL_WIDTH,
        20 * CELL_SIZE + 2 * GRID_PADDING,
    )


def test_arrow_keys_move_and_rotate(engine: Engine) -> None:
    start = engine.active
    assert handle_key(_key(pygame.K_LEFT), engine)
    assert engine.active == start.translated(Coordinate(-1, 0))
    handle_key(_key(pygame.K_RIGHT), engine)
    assert engine.active == start
    handle_key(_key(pygame.K_UP), engine)
    assert engine.active == start.rotated()
    handle_key(_key(pygame.K_w), engine)
    assert engine.active == start.rotated().rotated()
    handle_key(_key(pygame.K_DOWN), engine)
    assert engine.active == start.rotated().rotated().translated(Coordinate(0, 1))


def test_space_hard_drops_and_r_resets(engine: Engine) -> None:
    handle_key(_key(pygame.K_SPACE), engine)
    assert len(engine.settled) == 1
    handle_key(_key(pygame.K_r), engine)
    assert engine.settled == ()


def test_escape_requests_quit(engine: Engine) -> None:
    assert not handle_key(_key(pygame.K_ESCAPE), engine)


def test_runner_steps_every_n_frames(engine: Engine) -> None:
    runner = GameRunner(engine, frames_per_step=3)
    start = engine.active
    runner.advance_frame()
    runner.advance_frame()
    assert engine.active == start
    runner.advance_frame()
    assert engine.active == start.translated(Coordinate(0, 1))
    assert runner.frame_count == 0
