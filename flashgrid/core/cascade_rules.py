"""
Cascade Rules and Bounded Neighborhood

Threshold parameters for the discharge cascade and the 8-direction
neighbour enumeration it propagates along. Grid edges are hard walls:
there is no wraparound.
"""

from typing import List, NamedTuple, Optional, Tuple


DISCHARGE_THRESHOLD: int = 9  # Cells discharge when energy exceeds this
RESET_ENERGY: int = 0         # Energy a discharged cell is pinned to

FRONTIER_STACK = "stack"
FRONTIER_QUEUE = "queue"
SEED_ROW_MAJOR = "row_major"
SEED_REVERSED = "reversed"

# Clockwise from north: N, NE, E, SE, S, SW, W, NW
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 0), (-1, 1), (0, 1), (1, 1),
    (1, 0), (1, -1), (0, -1), (-1, -1),
)


class Position(NamedTuple):
    """Grid coordinate (row, col)."""

    row: int
    col: int

    def index(self, cols: int) -> int:
        """Flat index of this position in a row-major grid."""
        return self.row * cols + self.col


def _check_bounds(row: int, col: int, rows: int, cols: int) -> None:
    if not (0 <= row < rows and 0 <= col < cols):
        raise IndexError(f"Position ({row}, {col}) out of bounds for {rows}x{cols} grid")


def neighbor_positions(position: Tuple[int, int], rows: int, cols: int) -> List[Position]:
    """Enumerate in-bounds neighbours of a cell using the Moore neighborhood.

    Args:
        position: (row, col) of the cell
        rows: Number of grid rows
        cols: Number of grid columns

    Returns:
        Neighbours in N, NE, E, SE, S, SW, W, NW order, skipping any that
        fall outside the grid (3 at a corner, 5 on an edge, 8 inside)

    Raises:
        IndexError: If position itself is outside the grid
    """
    row, col = position
    _check_bounds(row, col, rows, cols)

    neighbors = []
    for dr, dc in NEIGHBOR_OFFSETS:
        nr, nc = row + dr, col + dc

        # Cells outside the grid do not exist
        if 0 <= nr < rows and 0 <= nc < cols:
            neighbors.append(Position(nr, nc))

    return neighbors


def neighbor_indices(index: int, rows: int, cols: int) -> List[int]:
    """Flat-index form of neighbor_positions for a row-major grid."""
    if not (0 <= index < rows * cols):
        raise IndexError(f"Index {index} out of bounds for {rows}x{cols} grid")
    row, col = divmod(index, cols)
    return [p.index(cols) for p in neighbor_positions((row, col), rows, cols)]


def build_adjacency(rows: int, cols: int) -> List[Tuple[int, ...]]:
    """Precompute neighbour indices for every cell of a rows x cols grid."""
    return [tuple(neighbor_indices(i, rows, cols)) for i in range(rows * cols)]


class CascadeRuleParams:
    """Parameters for the discharge cascade.

    Defaults to the standard rules: discharge above 9, reset to 0,
    stack-ordered worklist seeded in row-major order. Frontier discipline and
    seed order never change the outcome of a step, only the traversal.
    """

    FRONTIERS = (FRONTIER_STACK, FRONTIER_QUEUE)
    SEED_ORDERS = (SEED_ROW_MAJOR, SEED_REVERSED)

    def __init__(self,
                 threshold: Optional[int] = None,
                 reset_energy: Optional[int] = None,
                 frontier: str = FRONTIER_STACK,
                 seed_order: str = SEED_ROW_MAJOR):
        """Initialize rule parameters.

        Args:
            threshold: Energy above which a cell discharges (default 9)
            reset_energy: Energy a discharged cell is pinned to (default 0)
            frontier: 'stack' (LIFO) or 'queue' (FIFO) worklist
            seed_order: 'row_major' or 'reversed' initial worklist order

        Raises:
            ValueError: If any parameter is out of range
        """
        self.threshold: int = DISCHARGE_THRESHOLD if threshold is None else threshold
        self.reset_energy: int = RESET_ENERGY if reset_energy is None else reset_energy
        self.frontier = frontier
        self.seed_order = seed_order

        if self.threshold < 1:
            raise ValueError("Discharge threshold must be at least 1")
        if not (0 <= self.reset_energy <= self.threshold):
            raise ValueError("Reset energy must be between 0 and the threshold")
        if frontier not in self.FRONTIERS:
            raise ValueError(f"Unknown frontier {frontier!r}, expected one of {self.FRONTIERS}")
        if seed_order not in self.SEED_ORDERS:
            raise ValueError(f"Unknown seed order {seed_order!r}, expected one of {self.SEED_ORDERS}")

    @classmethod
    def standard(cls) -> 'CascadeRuleParams':
        """Create the standard cascade rules."""
        return cls(DISCHARGE_THRESHOLD, RESET_ENERGY)

    def should_discharge(self, energy):
        """Check whether cells at these energy levels discharge.

        Accepts a scalar or a numpy array; arrays give an elementwise mask.
        """
        return energy > self.threshold

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CascadeRuleParams):
            return False
        return (self.threshold == other.threshold and
                self.reset_energy == other.reset_energy and
                self.frontier == other.frontier and
                self.seed_order == other.seed_order)

    def __repr__(self) -> str:
        return (f"CascadeRuleParams(threshold={self.threshold}, reset={self.reset_energy}, "
                f"frontier={self.frontier!r}, seed_order={self.seed_order!r})")
