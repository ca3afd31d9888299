"""Console rendering, solution files, and run summaries.

These helpers sit outside the search engine: they only consume an assignment
(``queens[row] = col``) and the numbers reported by ``mc_nqueens``.
"""

from __future__ import annotations

import csv
import os
import sys
from typing import List, Optional, Sequence, TextIO

# Largest board rendered as a grid; wider grids do not fit a console line.
MAX_GRID_SIZE = 44

BLANK = "."
QUEEN = "*"


def render_grid(queens: Sequence[int]) -> str:
    """Return the board as text, one line per row, framed top and bottom.

    Boards larger than ``MAX_GRID_SIZE`` render as a one-line notice.
    """
    n = len(queens)
    if n > MAX_GRID_SIZE:
        return f"Cannot display {n}x{n} grid."
    lines = [" " + "_" * n]
    for col in queens:
        lines.append("|" + BLANK * col + QUEEN + BLANK * (n - col - 1) + "|")
    lines.append(" " + "-" * n)
    return "\n".join(lines)


def display_grid(queens: Sequence[int], stream: Optional[TextIO] = None) -> None:
    """Print ``render_grid(queens)`` to ``stream`` (stdout by default)."""
    print(render_grid(queens), file=stream or sys.stdout)


def write_solution(queens: Sequence[int], path: str = "solution.txt") -> str:
    """Write the columns as one comma-separated line, overwriting ``path``.

    Returns the path written.
    """
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(queens)
    return path


def read_solution(path: str) -> List[int]:
    """Read back a file produced by ``write_solution``."""
    with open(path, "r", newline="") as f:
        row = next(csv.reader(f), [])
    return [int(value) for value in row]


def format_summary(violations: int, size: int, restarts: int) -> str:
    """Return the key-value summary line reported after a solve."""
    return f"Conflicts: {violations}\tN={size}\tRestarts:{restarts}"
