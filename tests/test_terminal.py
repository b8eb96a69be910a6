from __future__ import annotations

from typing import Iterable, List, Optional

from blockfall.coordinate import Coordinate
from blockfall.engine import Engine
from blockfall.shape import Shape, ShapeKind
from blockfall.terminal import CLEAR_SCREEN, GLYPHS, TextShell

from helpers import fragment


class FakeClock:
    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


class ScriptedInput:
    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)

    def __call__(self) -> str:
        if not self._lines:
            raise EOFError
        return self._lines.pop(0)


def _shell(lines: Iterable[str] = (), clock: Optional[FakeClock] = None):
    output: List[str] = []
    engine = Engine(10, 20, seed=0)
    engine._active = Shape.spawn(ShapeKind.T).translated(Coordinate(4, 5))
    shell = TextShell(
        engine,
        read_line=ScriptedInput(lines),
        write=output.append,
        clock=clock or FakeClock(),
    )
    return shell, output


def test_commands_drive_engine() -> None:
    shell, _ = _shell()
    start = shell.engine.active
    assert shell.handle_command("a")
    assert shell.engine.active == start.translated(Coordinate(-1, 0))
    assert shell.handle_command(" D \n")
    assert shell.engine.active == start
    shell.handle_command("w")
    assert shell.engine.active == start.rotated()
    shell.handle_command("s")
    assert shell.engine.active == start.rotated().translated(Coordinate(0, 1))
    shell.handle_command("x")
    assert len(shell.engine.settled) == 1


def test_quit_and_invalid_commands() -> None:
    shell, output = _shell()
    assert not shell.handle_command("q")
    assert shell.handle_command("")
    assert output == []
    assert shell.handle_command("jump")
    assert output == ["Invalid command!"]


def test_reset_command_restarts_game() -> None:
    shell, _ = _shell()
    shell.handle_command("x")
    shell.handle_command("r")
    assert shell.engine.settled == ()
    assert shell.engine.score == 0


def test_tick_waits_for_interval() -> None:
    clock = FakeClock()
    shell, _ = _shell(clock=clock)
    start = shell.engine.active
    clock.advance(0.2)
    assert not shell.tick()
    assert shell.engine.active == start
    clock.advance(0.4)
    assert shell.tick()
    assert shell.engine.active == start.translated(Coordinate(0, 1))
    assert not shell.tick()


def test_frame_shows_score_and_pieces() -> None:
    shell, _ = _shell()
    frame = shell.frame()
    assert "Score: 0" in frame
    assert GLYPHS[ShapeKind.T] in frame
    assert "Controls:" in frame


def test_run_until_quit_reports_final_score() -> None:
    shell, output = _shell(["", "a", "q"])
    assert shell.run() == 0
    assert output[-2] == "Thanks for playing! Final score: 0"
    assert output[-1].endswith("Goodbye!")


def test_run_stops_on_end_of_input() -> None:
    shell, output = _shell(["", "d"])
    shell.run()
    assert output[-2].startswith("Thanks for playing!")


def test_run_offers_restart_after_game_over() -> None:
    shell, output = _shell(["", "x", "q"])
    engine = shell.engine
    engine._settled = [
        fragment(ShapeKind.Z, [(x, y) for y in range(7, 20) for x in range(0, 9)]),
        fragment(ShapeKind.Z, [(x, y) for y in range(0, 2) for x in range(4, 7)]),
    ]
    engine._active = Shape.spawn(ShapeKind.O).translated(Coordinate(5, 3))
    shell.run()
    assert engine.is_game_over()
    assert any("GAME OVER!" in line for line in output)
    assert "Press 'r' to restart or 'q' to quit: " in output


def test_run_exits_cleanly_when_input_ends_at_start_prompt() -> None:
    shell, output = _shell([])
    assert shell.run() == 0
    assert output == [
        "Press Enter to start...",
        "Thanks for playing! Final score: 0",
        CLEAR_SCREEN + "Goodbye!",
    ]
