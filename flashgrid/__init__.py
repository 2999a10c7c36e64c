"""
flashgrid: cascading energy-propagation simulator

Every step each cell on a bounded grid gains one unit of energy; cells
above threshold discharge, reset, and push energy into their neighbours,
which can set off further discharges within the same step.
"""

from .core import (
    CascadeRuleParams,
    EnergyGrid,
    GridSimulator,
    InvalidGridError,
    NonConvergenceError,
    Position,
    neighbor_positions,
)

__version__ = "0.1.0"

__all__ = [
    'CascadeRuleParams',
    'EnergyGrid',
    'GridSimulator',
    'InvalidGridError',
    'NonConvergenceError',
    'Position',
    'neighbor_positions',
]
