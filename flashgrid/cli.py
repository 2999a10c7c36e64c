#!/usr/bin/env python3
"""
Command-line runner for the cascade simulator.

Reads a digit grid from a file or stdin and prints either the number of
discharges after N steps (part 1) or the first step in which every cell
discharges (part 2).
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from .core.errors import InvalidGridError, NonConvergenceError
from .core.simulator import GridSimulator
from .textgrid import PART_DISCHARGE_COUNT, PART_FULL_DISCHARGE, format_report, parse_grid, read_grid

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 100


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flashgrid", description="Cascading discharge grid simulator")
    parser.add_argument("part", type=int, choices=[PART_DISCHARGE_COUNT, PART_FULL_DISCHARGE],
                        help="1: discharges after --steps steps, 2: first step where every cell discharges")
    parser.add_argument("input", nargs='?', default="-", help="Grid file (default: stdin)")
    parser.add_argument("--steps", type=int, default=DEFAULT_STEPS, help="Steps to run for part 1")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Give up on part 2 after this many steps")
    parser.add_argument("--verbose", action="store_true", help="Log the grid after every step")
    return parser


def run(part: int, rows, steps: int = DEFAULT_STEPS, max_steps: Optional[int] = None) -> int:
    """Run the selected computation on a fresh simulator and return its result."""
    simulator = GridSimulator(rows)
    logger.debug(f"Initial grid\n{simulator.render()}")

    if part == PART_DISCHARGE_COUNT:
        return simulator.discharge_count_after(steps)
    return simulator.first_step_with_full_discharge(max_steps)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.steps < 0:
        parser.error("--steps must be non-negative")
    if args.max_steps is not None and args.max_steps < 1:
        parser.error("--max-steps must be at least 1")

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        if args.input == "-":
            rows = parse_grid(sys.stdin.read())
        else:
            rows = read_grid(args.input)

        result = run(args.part, rows, steps=args.steps, max_steps=args.max_steps)
    except (InvalidGridError, NonConvergenceError) as e:
        logger.error(f"Simulation failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read grid: {e}")
        return 1

    print(format_report(args.part, result, args.steps))
    return 0


if __name__ == "__main__":
    sys.exit(main())
