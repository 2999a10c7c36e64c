"""Tests for the command-line runner."""

import io
import pytest
from flashgrid.cli import build_parser, main, run
from flashgrid.textgrid import parse_grid

CANONICAL_TEXT = """5483143223
2745854711
5264556173
6141336146
6357385478
4167524645
2176841721
6882881134
4846848554
5283751526
"""


@pytest.fixture
def grid_file(tmp_path):
    path = tmp_path / "grid.txt"
    path.write_text(CANONICAL_TEXT)
    return path


class TestCLI:
    """End-to-end runs through main()."""

    def test_part_one(self, grid_file, capsys):
        assert main(["1", str(grid_file)]) == 0
        assert capsys.readouterr().out.strip() == "1656 discharges after 100 steps."

    def test_part_one_custom_steps(self, grid_file, capsys):
        assert main(["1", str(grid_file), "--steps", "10"]) == 0
        assert capsys.readouterr().out.strip() == "204 discharges after 10 steps."

    def test_part_two(self, grid_file, capsys):
        assert main(["2", str(grid_file)]) == 0
        assert capsys.readouterr().out.strip() == "First step all cells discharge is 195"

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(CANONICAL_TEXT))
        assert main(["1"]) == 0
        assert "1656" in capsys.readouterr().out

    def test_max_steps_exceeded(self, grid_file, capsys):
        assert main(["2", str(grid_file), "--max-steps", "50"]) == 1
        assert capsys.readouterr().out == ""

    def test_invalid_grid(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("123\n45\n")
        assert main(["1", str(path)]) == 1

    def test_missing_file(self, tmp_path):
        assert main(["1", str(tmp_path / "missing.txt")]) == 1

    def test_invalid_part(self, grid_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["3", str(grid_file)])
        assert exc_info.value.code == 2

    def test_negative_steps(self, grid_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["1", str(grid_file), "--steps", "-5"])
        assert exc_info.value.code == 2


class TestRun:
    """The run() helper used by main()."""

    def test_run_parts(self):
        rows = parse_grid(CANONICAL_TEXT)
        assert run(1, rows) == 1656
        assert run(2, rows) == 195

    def test_parser_defaults(self):
        args = build_parser().parse_args(["2"])
        assert args.input == "-"
        assert args.steps == 100
        assert args.max_steps is None
        assert not args.verbose
