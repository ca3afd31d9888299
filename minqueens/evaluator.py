"""Conflict evaluation for the min-conflicts search.

Two kinds of measurement live here:

- Analytic, O(1) queries against a board's current counters:
  ``total_conflicts`` (cost of a candidate swap without performing it) and
  ``partial_conflicts`` (diagonal conflicts of a single row).
- A full recount (``ConflictEvaluator.tally`` / ``total_violations``) that
  rebuilds all occupancy counters from the assignment. The three tallies
  (columns, anti-diagonals, main diagonals) are independent and run as a
  fork-join on a small thread pool; each worker builds a private counter
  array and returns it together with its violation count.

Violations
----------
A line (column or diagonal) holding ``k >= 1`` queens contributes ``k - 1``
violations, so a dimension with ``occupied`` non-empty lines over N queens
contributes ``N - occupied``. The three dimensions are summed independently.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

if TYPE_CHECKING:
    from .board import BoardState


LineTally = Tuple[List[int], int]


class Tally(NamedTuple):
    """Rebuilt counters and the summed violations of a full recount."""

    col_counts: List[int]
    d1_counts: List[int]
    d2_counts: List[int]
    violations: int


# Tally workers (pure functions over a read-only assignment) ------------------

def _line_tally(indices: np.ndarray, lines: int) -> LineTally:
    counts = np.bincount(indices, minlength=lines)
    return counts.tolist(), int(indices.size - np.count_nonzero(counts))


def count_column_violations(queens: Sequence[int], size: int) -> LineTally:
    """Tally queens per column; return ``(counts, violations)``."""
    return _line_tally(np.asarray(queens, dtype=np.int64), size)


def count_anti_diagonal_violations(queens: Sequence[int], size: int) -> LineTally:
    """Tally queens per anti-diagonal ``row + col``."""
    rows = np.arange(size, dtype=np.int64)
    return _line_tally(rows + np.asarray(queens, dtype=np.int64), 2 * size - 1)


def count_main_diagonal_violations(queens: Sequence[int], size: int) -> LineTally:
    """Tally queens per main diagonal ``(N-1) + row - col``."""
    rows = np.arange(size, dtype=np.int64)
    return _line_tally(size - 1 + rows - np.asarray(queens, dtype=np.int64), 2 * size - 1)


_TALLY_WORKERS: Tuple[Callable[[Sequence[int], int], LineTally], ...] = (
    count_column_violations,
    count_anti_diagonal_violations,
    count_main_diagonal_violations,
)


class ConflictEvaluator:
    """Full-recount evaluator with an optional three-worker fork-join.

    Parameters
    ----------
    parallel : bool, default True
        When True, the three tallies run concurrently on a private
        ``ThreadPoolExecutor``; otherwise they run inline, one after another.

    Notes
    -----
    The executor is created lazily and released by ``close()``; use the
    evaluator as a context manager to scope it to one search run.
    """

    def __init__(self, parallel: bool = True):
        self.parallel = parallel
        self._executor: Optional[ThreadPoolExecutor] = None

    def __enter__(self) -> "ConflictEvaluator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the worker pool, if one was started."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def tally(self, queens: Sequence[int], size: int) -> Tally:
        """Recount all three dimensions for ``queens`` from scratch."""
        snapshot = tuple(queens)
        if self.parallel:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=len(_TALLY_WORKERS), thread_name_prefix="minqueens-tally"
                )
            futures = [self._executor.submit(worker, snapshot, size) for worker in _TALLY_WORKERS]
            # Join: block until all three tallies are in.
            results = [future.result() for future in futures]
        else:
            results = [worker(snapshot, size) for worker in _TALLY_WORKERS]

        (col_counts, col_v), (d1_counts, d1_v), (d2_counts, d2_v) = results
        return Tally(col_counts, d1_counts, d2_counts, col_v + d1_v + d2_v)

    def total_violations(self, board: "BoardState") -> int:
        """Rebuild ``board``'s counters and return its total violations."""
        return board.recount(self)


# Analytic queries ------------------------------------------------------------

def _line_delta(counts: List[int], removed: Tuple[int, int], added: Tuple[int, int]) -> int:
    """Change in violations on one diagonal family when queens move lines."""
    changes: Dict[int, int] = {}
    for index in removed:
        changes[index] = changes.get(index, 0) - 1
    for index in added:
        changes[index] = changes.get(index, 0) + 1

    delta = 0
    for index, change in changes.items():
        if change:
            before = counts[index]
            after = before + change
            delta += max(after - 1, 0) - max(before - 1, 0)
    return delta


def total_conflicts(board: "BoardState", row1: int, row2: int) -> int:
    """Return the total violations the board would have after swapping two rows.

    Computed from the current counters without performing the swap. Each row
    leaves its own two diagonals and joins the two diagonals of the other
    row's column; changes on a shared line (both rows leaving, or landing on,
    the same diagonal) are merged before scoring. Column violations are
    unchanged by a swap and are carried in ``board.violations``.

    Requires every row to be counted (true after placement or a recount).
    """
    if row1 == row2:
        return board.violations
    col1 = board.queens[row1]
    col2 = board.queens[row2]
    offset = board.size - 1

    delta = _line_delta(
        board.d1_counts,
        (row1 + col1, row2 + col2),
        (row1 + col2, row2 + col1),
    )
    delta += _line_delta(
        board.d2_counts,
        (offset + row1 - col1, offset + row2 - col2),
        (offset + row1 - col2, offset + row2 - col1),
    )
    return board.violations + delta


def partial_conflicts(board: "BoardState", row: int) -> int:
    """Return the number of other counted queens sharing a diagonal with ``row``."""
    col = board.queens[row]
    return board.d1_counts[row + col] + board.d2_counts[board.size - 1 + row - col] - 2
