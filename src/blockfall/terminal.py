"""Line-based text front-end for the engine.

Each loop iteration advances gravity if enough time has passed, redraws the
whole field and then blocks on a single line of input.  It needs nothing more
than a terminal that understands ANSI clear-screen codes.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional
import logging
import time

from .engine import Direction, Engine
from .shape import ShapeKind
from .utils import render_text


LOGGER = logging.getLogger(__name__)

# Milliseconds between automatic gravity steps
STEP_INTERVAL_MS = 500

CLEAR_SCREEN = "\x1b[2J\x1b[1;1H"

GLYPHS: Dict[Optional[ShapeKind], str] = {
    ShapeKind.I: "🟦",
    ShapeKind.O: "🟨",
    ShapeKind.T: "🟪",
    ShapeKind.S: "🟩",
    ShapeKind.Z: "🟥",
    ShapeKind.J: "🔵",
    ShapeKind.L: "🟧",
    None: "⬛",
}

CONTROLS = (
    "  a/d - Move Left/Right",
    "  w   - Rotate",
    "  s   - Soft Drop",
    "  x   - Hard Drop",
    "  r   - Restart",
    "  q   - Quit",
)

BANNER_WIDTH = 40


def _banner(*lines: str) -> str:
    rule = "═" * BANNER_WIDTH
    body = [f"║{line:^{BANNER_WIDTH}}║" for line in lines]
    return "\n".join([f"╔{rule}╗", *body, f"╚{rule}╝"])


class TextShell:
    """Drive an :class:`Engine` from line-oriented input.

    ``read_line``, ``write`` and ``clock`` default to the console and
    :func:`time.monotonic` but may be replaced, e.g. in tests.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        read_line: Callable[[], str] = input,
        write: Callable[[str], None] = print,
        clock: Callable[[], float] = time.monotonic,
        step_interval_ms: int = STEP_INTERVAL_MS,
    ) -> None:
        self.engine = engine
        self._read_line = read_line
        self._write = write
        self._clock = clock
        self._interval = step_interval_ms / 1000.0
        self._last_step = clock()

    def frame(self) -> str:
        """Return the text for one full redraw of the game."""

        engine = self.engine
        border = "─" * (engine.width * 2)
        parts = [
            CLEAR_SCREEN + _banner("TETRIS", f"Score: {engine.score}"),
            "",
            f"┌{border}┐",
            *(f"│{row}│" for row in render_text(engine, GLYPHS).splitlines()),
            f"└{border}┘",
            "",
        ]
        if engine.is_game_over():
            parts.append(_banner("GAME OVER!", f"Final Score: {engine.score}"))
        else:
            parts.append("Controls:")
            parts.extend(CONTROLS)
        return "\n".join(parts)

    def tick(self) -> bool:
        """Advance gravity if the step interval has elapsed since the last step."""

        now = self._clock()
        if now - self._last_step >= self._interval:
            self.engine.step()
            self._last_step = now
            return True
        return False

    def handle_command(self, command: str) -> bool:
        """Apply one command line.  Returns ``False`` when the player quits."""

        cmd = command.strip().lower()
        engine = self.engine
        if cmd == "a":
            engine.shift(Direction.LEFT)
        elif cmd == "d":
            engine.shift(Direction.RIGHT)
        elif cmd == "w":
            engine.rotate()
        elif cmd == "s":
            engine.step()
        elif cmd == "x":
            engine.hard_drop()
        elif cmd == "r":
            engine.reset()
            self._last_step = self._clock()
        elif cmd == "q":
            return False
        elif cmd:
            LOGGER.debug("Rejected command %r", command)
            self._write("Invalid command!")
        return True

    def run(self) -> int:
        """Play until the player quits or input ends and return the final score."""

        self._play()
        self._write(f"Thanks for playing! Final score: {self.engine.score}")
        self._write(CLEAR_SCREEN + "Goodbye!")
        return self.engine.score

    def _play(self) -> None:
        self._write("Press Enter to start...")
        try:
            self._read_line()
        except EOFError:
            return
        self._last_step = self._clock()
        while True:
            self.tick()
            self._write(self.frame())
            self._write("Enter command (a/d/w/s/x/r/q): ")
            try:
                line = self._read_line()
            except EOFError:
                return
            if not self.handle_command(line):
                return
            if self.engine.is_game_over():
                self._write(self.frame())
                self._write("Press 'r' to restart or 'q' to quit: ")
                try:
                    answer = self._read_line()
                except EOFError:
                    return
                if answer.strip().lower() != "r":
                    return
                self.handle_command("r")
