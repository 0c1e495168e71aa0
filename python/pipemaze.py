"""
Loop analysis for pipe maze grids.
Pipeline: trace (ordered loop) -> tangents, distances -> orientation -> enclosure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from grid_parser import parse_grid
from grid_types import (
    BrokenLoopError,
    DegenerateOriginError,
    Direction,
    Grid,
    Location,
    NoOriginError,
    Orientation,
    Symbol,
    TraceRules,
)

logger = logging.getLogger(__name__)

DirectionVector = tuple[int, int]

Loop = tuple[Location, ...]
"""Loop tiles in traversal order, starting at the origin (not repeated at the end)."""


# =============================================================================
# Connectivity
# =============================================================================


def connects(source: Symbol, target: Symbol, direction: Direction) -> bool:
    """
    Check whether a `source` tile connects into the `target` tile next to it.

    Args:
        source: Symbol of the initiating tile
        target: Symbol of the neighbor
        direction: Where the neighbor lies, seen from the source

    The origin marker accepts a connection from any side, and extends one
    only toward a neighbor that accepts it back. Its real shape is never
    resolved.
    """
    accepts = target is Symbol.ORIGIN or direction.opposite in target.connections
    if source is Symbol.ORIGIN:
        return target is not Symbol.ORIGIN and accepts
    return direction in source.connections and accepts


def connecting_neighbors(grid: Grid, location: Location) -> list[tuple[Direction, Location]]:
    """Orthogonal neighbors the tile at location connects into, in N, S, W, E order."""
    tile = grid.tile(location)
    if tile is None:
        return []

    result: list[tuple[Direction, Location]] = []
    for direction in Direction:
        neighbor = grid.tile(location.step(direction))
        if neighbor is not None and connects(tile.symbol, neighbor.symbol, direction):
            result.append((direction, neighbor.location))
    return result


# =============================================================================
# Loop Tracing
# =============================================================================


def find_origin(grid: Grid) -> Location:
    """Location of the origin marker."""
    for tile in grid.tiles():
        if tile.symbol is Symbol.ORIGIN:
            return tile.location
    raise NoOriginError(
        f"No origin marker in {grid.width}x{grid.height} grid\n"
        f"  Expected exactly one '{Symbol.ORIGIN.value}' tile"
    )


def trace_loop(grid: Grid, rules: TraceRules | None = None) -> Loop:
    """
    Walk the cycle of mutually connected pipes through the origin.

    Every non-origin tile is left through its other opening, so the walk
    never needs to pick between neighbors once it has left the origin.

    Args:
        grid: The grid to trace
        rules: TraceRules; `reverse` starts on the origin's second connecting neighbor

    Returns:
        The loop in traversal order, starting at the origin

    Raises:
        NoOriginError: If the grid has no origin marker
        DegenerateOriginError: If the origin does not have exactly two connecting neighbors
        BrokenLoopError: If the walk leaves the pipes or revisits a tile before closing
    """
    if rules is None:
        rules = TraceRules()

    origin = find_origin(grid)
    exits = connecting_neighbors(grid, origin)
    if len(exits) != 2:
        found = ", ".join(d.value for d, _ in exits) or "none"
        raise DegenerateOriginError(
            f"Origin at column {origin.col}, row {origin.row} has {len(exits)} connecting neighbors\n"
            f"  Connecting directions: {found}\n"
            f"  Exactly two are needed to infer its shape"
        )

    direction, current = exits[1] if rules.reverse else exits[0]
    loop: list[Location] = [origin]
    visited: set[Location] = {origin}

    while current != origin:
        # Unreachable while every pipe has exactly two openings and connects() is symmetric
        if current in visited:
            raise BrokenLoopError(
                f"Loop revisits column {current.col}, row {current.row} before returning to the origin"
            )
        visited.add(current)
        loop.append(current)

        symbol = grid.cells[current.row][current.col]
        # connects() guaranteed the entry side is open, so one opening remains
        (direction,) = symbol.connections - {direction.opposite}
        neighbor = grid.tile(current.step(direction))
        if neighbor is None or not connects(symbol, neighbor.symbol, direction):
            raise BrokenLoopError(
                f"Loop is open at column {current.col}, row {current.row}\n"
                f"  '{symbol.value}' leads {direction.value} "
                + ("off the grid" if neighbor is None else f"into '{neighbor.symbol.value}'")
            )
        logger.debug("trace_loop: %s -> %s", current, neighbor.location)
        current = neighbor.location

    logger.info(
        "trace_loop: origin=(%d, %d), length=%d, reverse=%s",
        origin.col,
        origin.row,
        len(loop),
        rules.reverse,
    )
    return tuple(loop)


def tangent_map(loop: Loop) -> dict[Location, DirectionVector]:
    """
    Tangent vector for every loop tile, from its predecessor and successor.

    Straight tiles carry their step vector. Bends (the origin included,
    when it turns) carry incoming + outgoing, so both components are
    non-zero and the vertical one gives the sense of the vertical leg.
    """
    tangents: dict[Location, DirectionVector] = {}
    length = len(loop)
    for i, location in enumerate(loop):
        prev = loop[i - 1]
        nxt = loop[(i + 1) % length]
        incoming = (location.col - prev.col, location.row - prev.row)
        outgoing = (nxt.col - location.col, nxt.row - location.row)
        if incoming == outgoing:
            tangents[location] = incoming
        else:
            tangents[location] = (incoming[0] + outgoing[0], incoming[1] + outgoing[1])
    return tangents


# =============================================================================
# Distances
# =============================================================================


def distance_map(loop: Loop) -> dict[Location, int]:
    """Fewest loop steps from the origin to each loop tile, going either way round."""
    length = len(loop)
    return {location: min(i, length - i) for i, location in enumerate(loop)}


def furthest_distance(distances: dict[Location, int]) -> int:
    return max(distances.values())


# =============================================================================
# Orientation
# =============================================================================


def signed_area(loop: Loop) -> float:
    """
    Shoelace area of the polygon through the loop's tile centers.

    Positive when the traversal is clockwise on screen (rows grow downward).
    """
    total = 0
    for i, a in enumerate(loop):
        b = loop[(i + 1) % len(loop)]
        total += a.col * b.row - b.col * a.row
    return total / 2


def detect_orientation(loop: Loop) -> Orientation:
    area = signed_area(loop)
    if area == 0:
        raise BrokenLoopError(f"Loop of length {len(loop)} encloses no area")
    return Orientation.CLOCKWISE if area > 0 else Orientation.COUNTERCLOCKWISE


# =============================================================================
# Enclosure
# =============================================================================


def find_right_boundary(
    grid: Grid, location: Location, tangents: dict[Location, DirectionVector]
) -> Location | None:
    """
    First loop tile to the right of location that crosses the row.

    Loop tiles with no vertical component run along the row and are skipped.
    """
    for col in range(location.col + 1, grid.width):
        candidate = Location(col, location.row)
        tangent = tangents.get(candidate)
        if tangent is not None and tangent[1] != 0:
            return candidate
    return None


def classify_tile(
    grid: Grid,
    location: Location,
    tangents: dict[Location, DirectionVector],
    orientation: Orientation,
) -> bool:
    """
    Check whether a non-loop tile is enclosed by the loop.

    The interior of a clockwise loop lies to the right of its travel, so a
    boundary heading down (clockwise) or up (counterclockwise) has the
    interior on its left, where the tile is.
    """
    boundary = find_right_boundary(grid, location, tangents)
    if boundary is None:
        return False

    dy = tangents[boundary][1]
    if orientation is Orientation.CLOCKWISE:
        return dy > 0
    return dy < 0


def enclosure_map(
    grid: Grid, tangents: dict[Location, DirectionVector], orientation: Orientation
) -> dict[Location, bool]:
    """Enclosed (True) or exterior (False) for every tile off the loop."""
    return {
        tile.location: classify_tile(grid, tile.location, tangents, orientation)
        for tile in grid.tiles()
        if tile.location not in tangents
    }


# =============================================================================
# Pipeline
# =============================================================================


@dataclass(frozen=True)
class LoopAnalysis:
    """Everything derived from one grid's loop."""

    grid: Grid
    loop: Loop
    tangents: dict[Location, DirectionVector]
    distances: dict[Location, int]
    orientation: Orientation
    enclosure: dict[Location, bool]

    @property
    def furthest_distance(self) -> int:
        """Steps from the origin to the furthest point on the loop."""
        return furthest_distance(self.distances)

    @property
    def enclosed_count(self) -> int:
        return sum(1 for enclosed in self.enclosure.values() if enclosed)

    @property
    def interior(self) -> frozenset[Location]:
        return frozenset(location for location, enclosed in self.enclosure.items() if enclosed)


def analyze(grid: Grid, rules: TraceRules | None = None) -> LoopAnalysis:
    """
    Trace the loop and derive distances, orientation and enclosure.

    Raises:
        PipeMazeError: If the grid has no usable loop (see trace_loop)
    """
    loop = trace_loop(grid, rules)
    tangents = tangent_map(loop)
    orientation = detect_orientation(loop)
    analysis = LoopAnalysis(
        grid=grid,
        loop=loop,
        tangents=tangents,
        distances=distance_map(loop),
        orientation=orientation,
        enclosure=enclosure_map(grid, tangents, orientation),
    )

    logger.info(
        "analyze: %dx%d grid, loop=%d (%s), furthest=%d, enclosed=%d",
        grid.width,
        grid.height,
        len(loop),
        orientation.value,
        analysis.furthest_distance,
        analysis.enclosed_count,
    )
    return analysis


def solve(text: str) -> tuple[int, int]:
    """Furthest loop distance and enclosed tile count for grid text."""
    analysis = analyze(parse_grid(text))
    return analysis.furthest_distance, analysis.enclosed_count
