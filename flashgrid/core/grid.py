"""Cell storage for the cascade simulator.

The grid keeps two flat numpy arrays indexed by ``row * cols + col``: the
energy level of every cell and a per-step discharge flag. Neighbour access is
done by computing indices, never by holding handles to individual cells.
"""

import numpy as np
from typing import List, Sequence, Tuple
import logging

from .cascade_rules import DISCHARGE_THRESHOLD
from .errors import InvalidGridError

logger = logging.getLogger(__name__)


def _is_energy_value(value: object) -> bool:
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, np.integer))


def validate_rows(rows: Sequence[Sequence[int]], threshold: int = DISCHARGE_THRESHOLD) -> Tuple[int, int]:
    """Check that rows form a non-empty rectangle of energies in 0..threshold.

    Args:
        rows: Row-major sequence of rows of initial energy levels
        threshold: Highest legal energy level

    Returns:
        (row_count, col_count)

    Raises:
        InvalidGridError: If the grid is empty, ragged, or out of range
    """
    if rows is None:
        raise InvalidGridError("Grid must have at least one row")
    try:
        row_count = len(rows)
    except TypeError:
        raise InvalidGridError("Grid must be a sequence of rows") from None
    if row_count == 0:
        raise InvalidGridError("Grid must have at least one row")

    col_count = None
    for r, row in enumerate(rows):
        if isinstance(row, (str, bytes)):
            raise InvalidGridError(f"Row {r} is text, expected a sequence of integers")
        try:
            width = len(row)
        except TypeError:
            raise InvalidGridError(f"Row {r} is not a sequence") from None

        if col_count is None:
            if width == 0:
                raise InvalidGridError("Grid must have at least one column")
            col_count = width
        elif width != col_count:
            raise InvalidGridError(f"Row {r} has {width} cells, expected {col_count} (grid must be rectangular)")

        for c, value in enumerate(row):
            if not _is_energy_value(value):
                raise InvalidGridError(f"Cell ({r}, {c}) holds non-integer value {value!r}")
            if not (0 <= value <= threshold):
                raise InvalidGridError(f"Cell ({r}, {c}) energy {value} outside 0..{threshold}")

    return row_count, col_count


class EnergyGrid:
    """Rectangular grid of energy levels with per-step discharge flags.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        energy: Flat int64 array of energy levels
        discharged: Flat boolean array, True for cells discharged this step
    """

    def __init__(self, rows: Sequence[Sequence[int]], threshold: int = DISCHARGE_THRESHOLD):
        """Initialize grid from initial energy levels.

        Args:
            rows: Non-empty rectangular sequence of rows, each value in 0..threshold
            threshold: Highest legal initial energy (9 for the standard rules)

        Raises:
            InvalidGridError: If rows are empty, ragged, or hold illegal energies
        """
        self.rows, self.cols = validate_rows(rows, threshold)
        self.threshold = threshold

        # Copy so callers' arrays are never aliased
        self.energy = np.array([int(v) for row in rows for v in row], dtype=np.int64)
        self.discharged = np.zeros(self.size, dtype=bool)

        logger.debug(f"Created energy grid {self.rows}x{self.cols}")

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.rows * self.cols

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def index(self, row: int, col: int) -> int:
        """Flat index of a cell.

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Coordinates ({row}, {col}) out of bounds for {self.rows}x{self.cols} grid")
        return row * self.cols + col

    def get(self, row: int, col: int) -> int:
        """Get energy level at coordinates."""
        return int(self.energy[self.index(row, col)])

    def clear_discharged(self) -> None:
        """Reset every discharge flag."""
        self.discharged.fill(False)

    def discharged_count(self) -> int:
        """Count cells flagged as discharged."""
        return int(np.count_nonzero(self.discharged))

    def snapshot(self) -> np.ndarray:
        """Read-only (rows, cols) copy of the current energy levels."""
        view = self.energy.reshape(self.rows, self.cols).copy()
        view.flags.writeable = False
        return view

    def discharged_mask(self) -> np.ndarray:
        """(rows, cols) copy of the discharge flags."""
        return self.discharged.reshape(self.rows, self.cols).copy()

    def to_rows(self) -> List[List[int]]:
        """Energy levels as nested Python lists."""
        return self.energy.reshape(self.rows, self.cols).tolist()

    def render(self) -> str:
        """Render energies one row per line, each line newline-terminated."""
        return "".join("".join(str(v) for v in row) + "\n" for row in self.to_rows())

    def copy(self) -> 'EnergyGrid':
        """Create a deep copy of the grid, discharge flags included."""
        new_grid = EnergyGrid(self.to_rows(), self.threshold)
        new_grid.discharged[:] = self.discharged
        return new_grid

    def __eq__(self, other: object) -> bool:
        """Check equality of shape and energy levels."""
        if not isinstance(other, EnergyGrid):
            return False
        return (self.rows == other.rows and
                self.cols == other.cols and
                np.array_equal(self.energy, other.energy))

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"EnergyGrid({self.rows}x{self.cols}, total_energy={int(self.energy.sum())})"
