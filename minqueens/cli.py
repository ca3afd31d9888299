"""Command-line entry point for solving a single N-Queens instance.

Usage: ``minqueens [N] [--seed S] [--output solution.txt] ...``

Parses N (falling back to 8 when it is missing or unusable), rejects the
unsolvable sizes 2 and 3 without searching, runs the min-conflicts search,
then prints the grid (small boards only), writes the solution file, and
prints the summary line.
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Tuple

from .output import display_grid, format_summary, write_solution
from .search import DEFAULT_MAX_ATTEMPTS, UnsolvableBoardError, mc_nqueens

DEFAULT_SIZE = 8

# Restart progress is printed every this many restarts in verbose mode.
RESTART_REPORT_INTERVAL = 1000


def parse_size(raw: Optional[str], default: int = DEFAULT_SIZE) -> Tuple[int, Optional[str]]:
    """Parse the board size argument.

    Returns ``(size, warning)`` where ``warning`` is ``None`` when ``raw`` was
    usable, or a message explaining the fallback to ``default``.
    """
    if raw is None:
        return default, None
    try:
        size = int(raw.strip())
    except ValueError:
        return default, f"ERROR: Cannot parse N={raw}; using N={default} instead."
    if size < 1:
        return default, f"ERROR: N must be a positive integer, got N={raw}; using N={default} instead."
    return size, None


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the solver CLI."""
    parser = argparse.ArgumentParser(description="Solve N-Queens with min-conflicts local search.")
    parser.add_argument("n", nargs="?", help=f"Board size N (default: {DEFAULT_SIZE}).")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs (default: random).")
    parser.add_argument(
        "--output",
        "-o",
        default="solution.txt",
        help="Path of the solution file (default: solution.txt).",
    )
    parser.add_argument("--no-file", action="store_true", help="Do not write the solution file.")
    parser.add_argument("--no-grid", action="store_true", help="Do not print the board grid.")
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=DEFAULT_MAX_ATTEMPTS,
        help=f"Repair budget per restart (default: {DEFAULT_MAX_ATTEMPTS}).",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Run conflict recounts on the main thread instead of three workers.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Report restart progress.")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point: parse arguments, solve, and report."""
    args = build_arg_parser().parse_args(argv)
    size, warning = parse_size(args.n)
    if warning:
        print(warning, file=sys.stderr)

    def report_restart(restarts: int) -> None:
        if restarts % RESTART_REPORT_INTERVAL == 0:
            print(f"Restarts: {restarts}")

    try:
        result = mc_nqueens(
            size,
            max_attempts=args.max_attempts,
            seed=args.seed,
            parallel=not args.sequential,
            on_restart=report_restart if args.verbose else None,
        )
    except UnsolvableBoardError as exc:
        print(exc)
        return
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        print("\nSearch interrupted by user.")
        raise SystemExit(130) from None

    if not args.no_grid:
        display_grid(result.solution)
    if not args.no_file:
        write_solution(result.solution, args.output)
    print(format_summary(result.violations, size, result.restarts))


if __name__ == "__main__":
    main()
