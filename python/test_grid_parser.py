"""Tests for grid_parser module."""

import pytest

from grid_parser import load_grid, parse_grid
from grid_types import Grid, Location, MalformedGridError, Symbol, Tile


class TestParseGrid:
    """Tests for the text grid parser."""

    def test_simple_grid(self) -> None:
        """Parse a small grid and check its shape and symbols."""
        grid = parse_grid("S-7\n|.|\nL-J\n")

        assert grid.width == 3
        assert grid.height == 3
        assert grid.cells[0] == (Symbol.ORIGIN, Symbol.HORIZONTAL, Symbol.SOUTH_WEST)
        assert grid.cells[1] == (Symbol.VERTICAL, Symbol.GROUND, Symbol.VERTICAL)
        assert grid.cells[2] == (Symbol.NORTH_EAST, Symbol.HORIZONTAL, Symbol.NORTH_WEST)

    def test_every_symbol(self) -> None:
        """Each character of the alphabet maps to its symbol."""
        grid = parse_grid("|-LJ7F.S")

        assert grid.cells[0] == (
            Symbol.VERTICAL,
            Symbol.HORIZONTAL,
            Symbol.NORTH_EAST,
            Symbol.NORTH_WEST,
            Symbol.SOUTH_WEST,
            Symbol.SOUTH_EAST,
            Symbol.GROUND,
            Symbol.ORIGIN,
        )

    def test_width_from_first_line(self) -> None:
        grid = parse_grid(".....\n.....")
        assert grid.width == 5
        assert grid.height == 2

    def test_crlf_line_endings(self) -> None:
        """Windows line endings parse the same as Unix ones."""
        assert parse_grid("S7\r\nLJ\r\n") == parse_grid("S7\nLJ\n")

    def test_trailing_blank_lines_ignored(self) -> None:
        grid = parse_grid("S7\nLJ\n\n\n")
        assert grid.height == 2

    def test_grid_is_immutable(self) -> None:
        grid = parse_grid("S7\nLJ")
        with pytest.raises(AttributeError):
            grid.cells = ()  # type: ignore[misc]

    def test_tile_lookup(self) -> None:
        grid = parse_grid("S7\nLJ")

        assert grid.tile(Location(1, 0)) == Tile(Location(1, 0), Symbol.SOUTH_WEST)
        assert grid.tile(Location(0, 1)) == Tile(Location(0, 1), Symbol.NORTH_EAST)
        assert grid.tile(Location(2, 0)) is None
        assert grid.tile(Location(0, -1)) is None

    def test_tiles_row_major(self) -> None:
        grid = parse_grid("S7\nLJ")
        locations = [tile.location for tile in grid.tiles()]
        assert locations == [Location(0, 0), Location(1, 0), Location(0, 1), Location(1, 1)]

    def test_str_round_trips_text(self) -> None:
        text = "..F7.\n.FJ|.\nSJ.L7\n|F--J\nLJ..."
        assert str(parse_grid(text)) == text

    def test_error_empty(self) -> None:
        """Error on input with no rows."""
        with pytest.raises(MalformedGridError, match="Empty grid"):
            parse_grid("")

    def test_error_only_blank_lines(self) -> None:
        with pytest.raises(MalformedGridError, match="Empty grid"):
            parse_grid("\n\n")

    def test_error_invalid_character(self) -> None:
        """Error on a character outside the alphabet."""
        with pytest.raises(MalformedGridError, match="Invalid character 'X'"):
            parse_grid("S-7\n|X|\nL-J")

    def test_error_reports_position(self) -> None:
        with pytest.raises(MalformedGridError, match="column 1"):
            parse_grid("S-7\n|X|\nL-J")

    def test_error_ragged_rows(self) -> None:
        """Error when rows differ in length."""
        with pytest.raises(MalformedGridError, match="Inconsistent row lengths"):
            parse_grid("S-7\n|.|.\nL-J")

    def test_error_blank_line_inside(self) -> None:
        """A blank line between rows is a ragged row."""
        with pytest.raises(MalformedGridError, match="Inconsistent row lengths"):
            parse_grid("S7\n\nLJ")

    @pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028"])
    def test_error_other_line_separators(self, separator: str) -> None:
        """Only \\n and \\r\\n end a row; other separators are invalid characters."""
        with pytest.raises(MalformedGridError, match="Invalid character"):
            parse_grid(f".S-7.{separator}.|.|.\n.L-J.")

    def test_error_lone_carriage_return(self) -> None:
        with pytest.raises(MalformedGridError, match="Invalid character"):
            parse_grid("S7\rLJ")

    def test_error_multiple_origins(self) -> None:
        with pytest.raises(MalformedGridError, match="Multiple origin markers"):
            parse_grid("S-S\n|.|\nL-J")

    def test_errors_are_value_errors(self) -> None:
        """Callers can catch parse failures as ValueError."""
        with pytest.raises(ValueError):
            parse_grid("?")


class TestLoadGrid:
    """Tests for reading grids from files."""

    def test_load_grid(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        path = tmp_path / "grid.txt"
        path.write_text(".....\n.S-7.\n.|.|.\n.L-J.\n.....\n", encoding="utf-8")

        grid = load_grid(path)

        assert isinstance(grid, Grid)
        assert grid.width == 5
        assert grid.height == 5
        assert grid.tile(Location(1, 1)) == Tile(Location(1, 1), Symbol.ORIGIN)

    def test_load_invalid_utf8(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        """Undecodable bytes are reported as a malformed grid."""
        path = tmp_path / "grid.txt"
        path.write_bytes(b"S-7\n|\xff|\nL-J\n")

        with pytest.raises(MalformedGridError, match="not valid UTF-8") as excinfo:
            load_grid(path)
        assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)

    def test_load_missing_file(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(FileNotFoundError):
            load_grid(tmp_path / "missing.txt")
