"""Command-line entry point.

Run with: `python -m blockfall`

By default this starts the line-based text shell.  Pass ``--gui`` to open the
pygame window instead.
"""

from __future__ import annotations

from typing import Optional, Sequence
import argparse
import logging

from .engine import Engine


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument("--width", type=int, default=10, help="Field width in cells.")
    parser.add_argument("--height", type=int, default=20, help="Field height in cells.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece generator.")
    parser.add_argument(
        "--gui",
        action="store_true",
        help="Play in a pygame window instead of the terminal.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    args = parser.parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        parser.error("--width and --height must be positive")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.gui:
        from .run_pygame import main as run_gui

        run_gui(args.width, args.height, seed=args.seed)
        return

    from .terminal import TextShell

    TextShell(Engine(args.width, args.height, seed=args.seed)).run()


if __name__ == "__main__":
    main()
