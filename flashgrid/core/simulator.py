"""
Cascading Discharge Simulator

Owns an EnergyGrid and advances it one synchronized step at a time:
every cell gains one unit of energy, then any cell above threshold
discharges, resets, and feeds its neighbours, transitively, within the
same step. A cell discharges at most once per step.
"""

from collections import deque
import numpy as np
from typing import List, Optional, Sequence
import logging

from .cascade_rules import (
    CascadeRuleParams, build_adjacency, FRONTIER_STACK, SEED_REVERSED
)
from .errors import NonConvergenceError
from .grid import EnergyGrid

logger = logging.getLogger(__name__)


class GridSimulator:
    """Cascade simulator over a fixed, bounded 2D grid.

    Not thread-safe: give each thread its own simulator.
    """

    def __init__(self, rows: Sequence[Sequence[int]], params: Optional[CascadeRuleParams] = None):
        """Initialize simulator from initial energy levels.

        Args:
            rows: Non-empty rectangular sequence of rows with energies in 0..9
            params: Cascade rule parameters (standard rules if None)

        Raises:
            InvalidGridError: If rows are empty, ragged, or hold illegal energies
        """
        self.params = params or CascadeRuleParams.standard()
        self.grid = EnergyGrid(rows, self.params.threshold)

        # Neighbour indices per cell; the grid never changes shape
        self._adjacency = build_adjacency(self.grid.rows, self.grid.cols)

        self.step_count = 0
        self.total_discharges = 0
        self.history: List[int] = []

        logger.debug(f"Created simulator {self.grid.rows}x{self.grid.cols} with {self.params}")

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def size(self) -> int:
        return self.grid.size

    def _seed_frontier(self) -> deque:
        seeds = np.flatnonzero(self.params.should_discharge(self.grid.energy)).tolist()
        if self.params.seed_order == SEED_REVERSED:
            seeds.reverse()
        return deque(seeds)

    def step(self) -> int:
        """Advance the grid one step: increment, cascade, settle.

        Returns:
            Number of cells that discharged during this step
        """
        energy = self.grid.energy
        discharged = self.grid.discharged
        threshold = self.params.threshold
        reset_energy = self.params.reset_energy

        self.grid.clear_discharged()
        energy += 1

        frontier = self._seed_frontier()
        pop = frontier.pop if self.params.frontier == FRONTIER_STACK else frontier.popleft

        count = 0
        while frontier:
            index = pop()

            # A cell can be pushed by several neighbours before it is processed
            if discharged[index]:
                continue

            energy[index] = reset_energy
            discharged[index] = True
            count += 1

            for neighbor in self._adjacency[index]:
                if discharged[neighbor]:
                    continue
                energy[neighbor] += 1
                if energy[neighbor] > threshold:
                    frontier.append(neighbor)

        self.step_count += 1
        self.total_discharges += count
        self.history.append(count)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"After step {self.step_count}: {count} discharges\n{self.grid.render()}")

        return count

    def step_multiple(self, steps: int) -> List[int]:
        """Advance several steps.

        Args:
            steps: Number of steps (non-negative)

        Returns:
            Per-step discharge counts
        """
        if steps < 0:
            raise ValueError("Number of steps must be non-negative")
        return [self.step() for _ in range(steps)]

    def discharge_count_after(self, num_steps: int) -> int:
        """Total discharges over the next num_steps steps.

        Args:
            num_steps: Number of steps to run; 0 returns 0 without touching the grid

        Returns:
            Sum of per-step discharge counts

        Raises:
            ValueError: If num_steps is negative
        """
        return sum(self.step_multiple(num_steps))

    def first_step_with_full_discharge(self, max_steps: Optional[int] = None) -> int:
        """Step until every cell discharges in the same step.

        The step counter is 1-indexed and relative to this call. Without
        max_steps the search is unbounded.

        Args:
            max_steps: Optional cap on the number of steps to try

        Returns:
            Index of the first step in which all cells discharged

        Raises:
            NonConvergenceError: If max_steps steps pass without a full discharge
            ValueError: If max_steps is less than 1
        """
        if max_steps is not None and max_steps < 1:
            raise ValueError("max_steps must be at least 1")

        step_num = 0
        while max_steps is None or step_num < max_steps:
            step_num += 1
            if self.step() == self.size:
                logger.info(f"All {self.size} cells discharged at step {step_num}")
                return step_num

        logger.warning(f"No full discharge within {max_steps} steps")
        raise NonConvergenceError(max_steps)

    def snapshot(self) -> np.ndarray:
        """Read-only (rows, cols) copy of current energy levels."""
        return self.grid.snapshot()

    def last_discharged(self) -> np.ndarray:
        """(rows, cols) boolean mask of cells discharged in the last step."""
        return self.grid.discharged_mask()

    def render(self) -> str:
        """Digit rendering of the grid, one row per line."""
        return self.grid.render()

    def copy(self) -> 'GridSimulator':
        """Create an independent simulator with the same state and parameters."""
        params = CascadeRuleParams(self.params.threshold, self.params.reset_energy,
                                   self.params.frontier, self.params.seed_order)
        new_sim = GridSimulator(self.grid.to_rows(), params)
        new_sim.grid.discharged[:] = self.grid.discharged
        new_sim.step_count = self.step_count
        new_sim.total_discharges = self.total_discharges
        new_sim.history = list(self.history)
        return new_sim

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"GridSimulator({self.rows}x{self.cols}, steps={self.step_count}, "
                f"discharges={self.total_discharges})")
