"""
Shared type definitions for the pipemaze system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing row)
    S = "S"  # Down (increasing row)
    W = "W"  # Left (decreasing col)
    E = "E"  # Right (increasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """Step as (dx, dy)."""
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


_DELTAS = {
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.W: (-1, 0),
    Direction.E: (1, 0),
}

_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.W: Direction.E,
    Direction.E: Direction.W,
}


class Symbol(Enum):
    """A tile symbol from the fixed alphabet."""

    VERTICAL = "|"
    HORIZONTAL = "-"
    NORTH_EAST = "L"
    NORTH_WEST = "J"
    SOUTH_WEST = "7"
    SOUTH_EAST = "F"
    GROUND = "."
    ORIGIN = "S"

    @property
    def connections(self) -> frozenset[Direction]:
        """Directions this symbol opens towards.

        The origin marker reports all four; its real shape is never stored.
        """
        return _CONNECTIONS[self]

    @property
    def is_bend(self) -> bool:
        return self in (Symbol.NORTH_EAST, Symbol.NORTH_WEST, Symbol.SOUTH_WEST, Symbol.SOUTH_EAST)


_CONNECTIONS = {
    Symbol.VERTICAL: frozenset({Direction.N, Direction.S}),
    Symbol.HORIZONTAL: frozenset({Direction.W, Direction.E}),
    Symbol.NORTH_EAST: frozenset({Direction.N, Direction.E}),
    Symbol.NORTH_WEST: frozenset({Direction.N, Direction.W}),
    Symbol.SOUTH_WEST: frozenset({Direction.S, Direction.W}),
    Symbol.SOUTH_EAST: frozenset({Direction.S, Direction.E}),
    Symbol.GROUND: frozenset(),
    Symbol.ORIGIN: frozenset(Direction),
}

VALID_SYMBOLS = "".join(symbol.value for symbol in Symbol)


# =============================================================================
# Grid Definition Types
# =============================================================================


@dataclass(frozen=True, order=True)
class Location:
    """A tile coordinate. Orders by column, then row."""

    col: int
    row: int

    def step(self, direction: Direction) -> Location:
        dx, dy = direction.delta
        return Location(self.col + dx, self.row + dy)


@dataclass(frozen=True)
class Tile:
    """A symbol at a location."""

    location: Location
    symbol: Symbol


@dataclass(frozen=True)
class Grid:
    """A rectangular 2D grid of symbols, indexed [row][col]."""

    cells: tuple[tuple[Symbol, ...], ...]

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def __contains__(self, location: object) -> bool:
        return (
            isinstance(location, Location)
            and 0 <= location.row < self.height
            and 0 <= location.col < self.width
        )

    def tile(self, location: Location) -> Tile | None:
        """The tile at location, or None when it lies off the grid."""
        if location not in self:
            return None
        return Tile(location, self.cells[location.row][location.col])

    def tiles(self) -> Iterator[Tile]:
        """All tiles in row-major order."""
        for row, symbols in enumerate(self.cells):
            for col, symbol in enumerate(symbols):
                yield Tile(Location(col, row), symbol)

    def __str__(self) -> str:
        return "\n".join("".join(symbol.value for symbol in row) for row in self.cells)


@dataclass(frozen=True)
class TraceRules:
    """Rules governing loop traversal."""

    reverse: bool = False  # Start on the origin's second connecting neighbor


class Orientation(Enum):
    """Winding sense of a traced loop, in screen coordinates (row grows downward)."""

    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


# =============================================================================
# Errors
# =============================================================================


class PipeMazeError(ValueError):
    """Base class for input that cannot be analyzed."""


class MalformedGridError(PipeMazeError):
    """Empty input, ragged rows, unknown symbols or several origin markers."""


class NoOriginError(PipeMazeError):
    """The grid has no origin marker."""


class DegenerateOriginError(PipeMazeError):
    """The origin does not have exactly two connecting neighbors."""


class BrokenLoopError(PipeMazeError):
    """The pipes leaving the origin do not close into a single simple cycle."""
