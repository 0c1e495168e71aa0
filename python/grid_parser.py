"""
Grid parsing utilities for pipemaze.

One line of text per grid row, one character per tile:
  | - L J 7 F  pipe segments
  .            ground
  S            origin marker (shape unknown)
"""

from __future__ import annotations

import logging
from pathlib import Path

from grid_types import VALID_SYMBOLS, Grid, MalformedGridError, Symbol

__all__ = ["parse_grid", "load_grid"]

logger = logging.getLogger(__name__)


def parse_grid(text: str) -> Grid:
    """
    Parse a grid from its text form.

    Accepts \\n or \\r\\n line endings. Trailing blank lines are ignored;
    a blank line anywhere else is a ragged row.

    Example:
        .....
        .S-7.
        .|.|.
        .L-J.
        .....

    Args:
        text: Grid text, one line per row

    Returns:
        The parsed Grid

    Raises:
        MalformedGridError: If the input is empty, rows differ in length,
            a character is outside the alphabet, or more than one origin
            marker is present
    """
    # Only \n and \r\n end a row; other line separators are invalid characters
    row_strings = [line.removesuffix("\r") for line in text.split("\n")]
    while row_strings and not row_strings[-1]:
        row_strings.pop()

    if not row_strings:
        raise MalformedGridError("Empty grid: no rows to parse")

    rows: list[tuple[Symbol, ...]] = []
    origins: list[tuple[int, int]] = []

    for row_idx, row_str in enumerate(row_strings):
        cells: list[Symbol] = []
        for col_idx, char in enumerate(row_str):
            if char not in VALID_SYMBOLS:
                raise MalformedGridError(
                    f"Invalid character '{char}'\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: {' '.join(VALID_SYMBOLS)}"
                )
            symbol = Symbol(char)
            if symbol is Symbol.ORIGIN:
                origins.append((row_idx, col_idx))
            cells.append(symbol)
        rows.append(tuple(cells))

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if cols == 0 or mismatched:
        error_msg = (
            f"Inconsistent row lengths\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same, non-zero number of tiles"
        raise MalformedGridError(error_msg)

    if len(origins) > 1:
        positions = ", ".join(f"row {r} column {c}" for r, c in origins)
        raise MalformedGridError(
            f"Multiple origin markers\n"
            f"  Found {len(origins)} 'S' tiles at: {positions}\n"
            f"  A grid must contain exactly one origin"
        )

    logger.debug("parse_grid: %dx%d", cols, len(rows))
    return Grid(tuple(rows))


def load_grid(path: str | Path) -> Grid:
    """
    Read and parse a UTF-8 grid file.

    Raises:
        OSError: If the file cannot be read
        MalformedGridError: If the file is not valid UTF-8 or not a valid grid
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedGridError(
            f"Grid file is not valid UTF-8: {path}\n"
            f"  Byte {e.start}: {e.reason}"
        ) from e
    return parse_grid(text)
