"""Error types raised by the cascade simulator."""

from typing import Optional


class InvalidGridError(ValueError):
    """Raised when an initial grid is empty, ragged, or holds illegal energy levels."""


class NonConvergenceError(RuntimeError):
    """Raised when a bounded full-discharge search runs out of steps."""

    def __init__(self, max_steps: int, message: Optional[str] = None):
        self.max_steps = max_steps
        super().__init__(message or f"No full discharge within {max_steps} steps")
