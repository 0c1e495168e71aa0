#!/usr/bin/env python3
"""
Command-line entry point: analyze a pipe maze file and print both answers.
"""

from __future__ import annotations

import argparse
import logging

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ascii_render import render
from grid_parser import load_grid
from grid_types import PipeMazeError
from pipemaze import analyze


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Pipe maze loop analysis")
    parser.add_argument(
        "path", nargs="?", default="inputs/day10.txt", help="Grid file (default: inputs/day10.txt)"
    )
    parser.add_argument("--render", action="store_true", help="Print the analyzed map")
    parser.add_argument("--verbose", action="store_true", help="Log pipeline steps")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    if console is None:
        console = Console()

    try:
        analysis = analyze(load_grid(args.path))
    except (OSError, PipeMazeError) as e:
        status = Text()
        status.append(f"ERROR: {type(e).__name__}\n", style="bold red")
        status.append(str(e))
        console.print(Panel(status, title="pipemaze - Error", border_style="red"))
        return 1

    if args.render:
        console.print(Text.from_ansi(render(analysis)))
        console.print()

    result = Text()
    result.append("Part 1: ", style="bold")
    result.append(f"{analysis.furthest_distance}\n")
    result.append("Part 2: ", style="bold")
    result.append(f"{analysis.enclosed_count}")
    console.print(Panel(result, title=f"pipemaze - {args.path}", border_style="green"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
