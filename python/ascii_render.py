"""
ASCII rendering for pipemaze analyses.

Loop tiles are drawn with box-drawing characters, the origin as S,
enclosed tiles as I and exterior tiles as O.
"""

from __future__ import annotations

import logging
from typing import Callable

import simple_chalk as chalk  # type: ignore[import-untyped]

from grid_types import Direction, Location, Symbol
from pipemaze import LoopAnalysis

logger = logging.getLogger(__name__)

BOX_CHARS = {
    Symbol.VERTICAL: "│",
    Symbol.HORIZONTAL: "─",
    Symbol.NORTH_EAST: "└",
    Symbol.NORTH_WEST: "┘",
    Symbol.SOUTH_WEST: "┐",
    Symbol.SOUTH_EAST: "┌",
}

INTERIOR_CHAR = "I"
EXTERIOR_CHAR = "O"


def origin_shape(analysis: LoopAnalysis) -> Symbol:
    """The pipe symbol the origin stands in for, from its two loop neighbors."""
    loop = analysis.loop
    origin = loop[0]
    openings: set[Direction] = set()
    for neighbor in (loop[1], loop[-1]):
        delta = (neighbor.col - origin.col, neighbor.row - origin.row)
        openings.update(d for d in Direction if d.delta == delta)
    return next(s for s in BOX_CHARS if s.connections == openings)


def render(analysis: LoopAnalysis, color: bool = True, show_origin: bool = True) -> str:
    """
    Render an analyzed grid to a string.

    Args:
        analysis: Result of pipemaze.analyze
        color: Wrap characters in ANSI colors
        show_origin: Draw the origin as S rather than its inferred pipe

    Returns:
        One line per grid row
    """
    identity: Callable[[str], str] = lambda s: s
    loop_color = chalk.yellow if color else identity
    origin_color = chalk.redBright if color else identity
    interior_color = chalk.green if color else identity
    exterior_color = chalk.blue if color else identity

    grid = analysis.grid
    origin = analysis.loop[0]
    origin_char = Symbol.ORIGIN.value if show_origin else BOX_CHARS[origin_shape(analysis)]
    loop_tiles = set(analysis.loop)

    lines: list[str] = []
    for row, symbols in enumerate(grid.cells):
        chars: list[str] = []
        for col, symbol in enumerate(symbols):
            location = Location(col, row)
            if location == origin:
                chars.append(origin_color(origin_char))
            elif location in loop_tiles:
                chars.append(loop_color(BOX_CHARS[symbol]))
            elif analysis.enclosure[location]:
                chars.append(interior_color(INTERIOR_CHAR))
            else:
                chars.append(exterior_color(EXTERIOR_CHAR))
        lines.append("".join(chars))

    logger.debug("render: %d rows, color=%s", len(lines), color)
    return "\n".join(lines)
