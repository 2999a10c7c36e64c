"""Tests for digit-grid parsing and result formatting."""

import pytest
from flashgrid.core.errors import InvalidGridError
from flashgrid.textgrid import parse_grid, read_grid, format_report


class TestParseGrid:
    """Text grids become rows of integers."""

    def test_basic_parse(self):
        assert parse_grid("123\n456\n") == [[1, 2, 3], [4, 5, 6]]

    def test_ignores_blank_lines_and_whitespace(self):
        assert parse_grid("\n  12\n34  \n\n") == [[1, 2], [3, 4]]

    def test_windows_line_endings(self):
        assert parse_grid("12\r\n34\r\n") == [[1, 2], [3, 4]]

    def test_empty_text(self):
        with pytest.raises(InvalidGridError, match="empty"):
            parse_grid("  \n\n")

    def test_unequal_lines(self):
        with pytest.raises(InvalidGridError, match="Line 2 has 2 cells, expected 3"):
            parse_grid("123\n45\n")

    @pytest.mark.parametrize("text", ["12a\n456", "1-2\n456", "1 2\n456"])
    def test_non_digit(self, text):
        with pytest.raises(InvalidGridError, match="not a digit"):
            parse_grid(text)

    def test_read_grid(self, tmp_path):
        grid_file = tmp_path / "grid.txt"
        grid_file.write_text("90\n09\n")
        assert read_grid(grid_file) == [[9, 0], [0, 9]]
        assert read_grid(str(grid_file)) == [[9, 0], [0, 9]]


class TestFormatReport:
    """Results are reported as one line of text."""

    def test_part_one(self):
        assert format_report(1, 1656) == "1656 discharges after 100 steps."
        assert format_report(1, 204, steps=10) == "204 discharges after 10 steps."

    def test_part_two(self):
        assert format_report(2, 195) == "First step all cells discharge is 195"

    def test_unknown_part(self):
        with pytest.raises(ValueError, match="Unknown part 3"):
            format_report(3, 0)
