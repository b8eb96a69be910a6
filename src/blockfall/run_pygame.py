"""Simple pygame front-end for the engine.

The window shows the playfield on the left and an info panel with the score,
the game status and the key bindings on the right.  All game state lives in
the :class:`~blockfall.engine.Engine`; this module only reads it to draw and
forwards key presses as engine commands.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple
import logging

import pygame

from .engine import Direction, Engine
from .shape import ShapeKind

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Gap around the playfield in pixels
GRID_PADDING = 10
INFO_PANEL_WIDTH = 250
# Frames per second to run the game loop at
FPS = 60
# Automatic gravity step every N frames (~500ms at 60 FPS)
FRAMES_PER_STEP = 30

Color = Tuple[int, int, int]

# Colours for each tetromino kind
SHAPE_COLORS: Dict[ShapeKind, Color] = {
    ShapeKind.I: (0, 212, 255),
    ShapeKind.O: (255, 215, 0),
    ShapeKind.T: (168, 85, 247),
    ShapeKind.S: (16, 185, 129),
    ShapeKind.Z: (239, 68, 68),
    ShapeKind.J: (59, 130, 246),
    ShapeKind.L: (249, 115, 22),
}
EMPTY_COLOR: Color = (15, 52, 96)
BACKGROUND_COLOR: Color = (17, 17, 30)
FIELD_COLOR: Color = (26, 26, 46)
TEXT_COLOR: Color = (255, 255, 255)
PLAYING_COLOR: Color = (16, 185, 129)
GAME_OVER_COLOR: Color = (239, 68, 68)

CONTROLS = (
    "Controls:",
    "< > : Move",
    "^ / W : Rotate",
    "v : Soft Drop",
    "Space : Hard Drop",
    "R : Restart",
    "ESC : Quit",
)


def window_size(engine: Engine) -> Tuple[int, int]:
    """Return the ``(width, height)`` in pixels needed to show ``engine``."""

    width = engine.width * CELL_SIZE + 2 * GRID_PADDING + INFO_PANEL_WIDTH
    height = engine.height * CELL_SIZE + 2 * GRID_PADDING
    return width, height


def _lighter(color: Color, amount: int = 40) -> Color:
    r, g, b = color
    return (min(r + amount, 255), min(g + amount, 255), min(b + amount, 255))


def draw_field(screen: pygame.Surface, engine: Engine) -> None:
    """Render every cell of the field including the active piece."""

    pygame.draw.rect(
        screen,
        FIELD_COLOR,
        pygame.Rect(
            GRID_PADDING - 5,
            GRID_PADDING - 5,
            engine.width * CELL_SIZE + 10,
            engine.height * CELL_SIZE + 10,
        ),
    )
    for coordinate in engine.coordinates():
        kind = engine.cell_at(coordinate)
        color = SHAPE_COLORS[kind] if kind is not None else EMPTY_COLOR
        rect = pygame.Rect(
            GRID_PADDING + coordinate.x * CELL_SIZE + 1,
            GRID_PADDING + coordinate.y * CELL_SIZE + 1,
            CELL_SIZE - 2,
            CELL_SIZE - 2,
        )
        pygame.draw.rect(screen, color, rect)
        if kind is not None:
            pygame.draw.rect(screen, _lighter(color), rect, 1)


def draw_info(screen: pygame.Surface, engine: Engine, font: pygame.font.Font) -> None:
    """Render the title, score, status and key bindings."""

    x = engine.width * CELL_SIZE + GRID_PADDING + 30
    y = GRID_PADDING

    screen.blit(font.render("TETRIS", True, TEXT_COLOR), (x, y))

    pygame.draw.rect(screen, (100, 200, 255), pygame.Rect(x, y + 60, 200, 60))
    screen.blit(font.render(f"Score: {engine.score}", True, TEXT_COLOR), (x + 10, y + 80))

    if engine.is_game_over():
        status, status_color = "GAME OVER!", GAME_OVER_COLOR
    else:
        status, status_color = "Playing...", PLAYING_COLOR
    pygame.draw.rect(screen, status_color, pygame.Rect(x, y + 140, 200, 40))
    screen.blit(font.render(status, True, TEXT_COLOR), (x + 10, y + 150))

    for i, line in enumerate(CONTROLS):
        screen.blit(font.render(line, True, (200, 200, 200)), (x, y + 220 + i * 24))


def handle_key(event: pygame.event.Event, engine: Engine) -> bool:
    """Process a key press.  Returns ``False`` when the player asked to quit."""

    key = event.key
    if key == pygame.K_ESCAPE:
        return False
    if key == pygame.K_LEFT:
        engine.shift(Direction.LEFT)
    elif key == pygame.K_RIGHT:
        engine.shift(Direction.RIGHT)
    elif key == pygame.K_DOWN:
        engine.step()
    elif key in (pygame.K_UP, pygame.K_w):
        engine.rotate()
    elif key == pygame.K_SPACE:
        engine.hard_drop()
    elif key == pygame.K_r:
        engine.reset()
    return True


class GameRunner:
    """Own the window and run the frame loop for one engine."""

    def __init__(self, engine: Engine, *, frames_per_step: int = FRAMES_PER_STEP) -> None:
        self.engine = engine
        self.frames_per_step = frames_per_step
        self.frame_count = 0
        self._running = False
        self._screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None

    @property
    def running(self) -> bool:
        return self._running

    def advance_frame(self) -> None:
        """Count one frame and step gravity every ``frames_per_step`` frames."""

        self.frame_count += 1
        if self.frame_count >= self.frames_per_step:
            self.frame_count = 0
            self.engine.step()

    def process_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                if not handle_key(event, self.engine):
                    self._running = False
                elif event.key == pygame.K_r:
                    self.frame_count = 0

    def draw(self) -> None:
        if self._screen is None or self._font is None:
            return
        self._screen.fill(BACKGROUND_COLOR)
        draw_field(self._screen, self.engine)
        draw_info(self._screen, self.engine, self._font)
        pygame.display.flip()

    def run(self) -> int:
        """Run until the window is closed and return the final score."""

        pygame.init()
        self._screen = pygame.display.set_mode(window_size(self.engine))
        pygame.display.set_caption("Tetris")
        self._font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()
        LOGGER.info("Game started")

        self._running = True
        try:
            while self._running:
                self.process_events()
                self.advance_frame()
                self.draw()
                clock.tick(FPS)
        finally:
            pygame.quit()
        LOGGER.info("Game stopped with score %d", self.engine.score)
        return self.engine.score


def main(width: int = 10, height: int = 20, seed: Optional[int] = None) -> int:
    """Open a window and play a game on a ``width`` x ``height`` field."""

    return GameRunner(Engine(width, height, seed=seed)).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
