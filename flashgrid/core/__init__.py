"""Grid model, cascade rules and simulator."""

from .cascade_rules import CascadeRuleParams, Position, neighbor_positions, neighbor_indices
from .errors import InvalidGridError, NonConvergenceError
from .grid import EnergyGrid
from .simulator import GridSimulator

__all__ = [
    'CascadeRuleParams',
    'Position',
    'neighbor_positions',
    'neighbor_indices',
    'InvalidGridError',
    'NonConvergenceError',
    'EnergyGrid',
    'GridSimulator',
]
