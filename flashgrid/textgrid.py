"""Text input and result reporting for the cascade simulator.

Grids are written one digit per cell and one row per line::

    5483143223
    2745854711
"""

from pathlib import Path
from typing import List, Union
import logging

from .core.errors import InvalidGridError

logger = logging.getLogger(__name__)

PART_DISCHARGE_COUNT = 1
PART_FULL_DISCHARGE = 2


def parse_grid(text: str) -> List[List[int]]:
    """Parse a digit grid.

    Args:
        text: One row per line, one digit 0-9 per character. Blank lines and
            surrounding whitespace are ignored.

    Returns:
        Rows of integer energy levels

    Raises:
        InvalidGridError: If the text is empty, has non-digit characters, or
            lines of unequal length
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]

    if not lines:
        raise InvalidGridError("Grid text is empty")

    width = len(lines[0])
    rows = []
    for line_num, line in enumerate(lines, start=1):
        if len(line) != width:
            raise InvalidGridError(f"Line {line_num} has {len(line)} cells, expected {width}")
        for col, char in enumerate(line):
            if char not in "0123456789":
                raise InvalidGridError(f"Line {line_num}, column {col + 1}: {char!r} is not a digit")
        rows.append([int(char) for char in line])

    logger.debug(f"Parsed {len(rows)}x{width} grid")
    return rows


def read_grid(path: Union[str, Path]) -> List[List[int]]:
    """Read and parse a digit grid file."""
    return parse_grid(Path(path).read_text())


def format_report(part: int, value: int, steps: int = 100) -> str:
    """Format a simulation result for display.

    Args:
        part: 1 for the discharge count, 2 for the first full-discharge step
        value: The computed result
        steps: Step count the discharge total was taken over (part 1 only)
    """
    if part == PART_DISCHARGE_COUNT:
        return f"{value} discharges after {steps} steps."
    elif part == PART_FULL_DISCHARGE:
        return f"First step all cells discharge is {value}"
    else:
        raise ValueError(f"Unknown part {part}, expected 1 or 2")
