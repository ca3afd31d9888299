"""Board state for the min-conflicts N-Queens search.

This module owns the mutable state of one search attempt: the queen
assignment and the three occupancy counters that make conflict evaluation
incremental. Every other component (placement, evaluation, move selection)
reads or mutates a ``BoardState`` passed to it explicitly; there is no
module-level state.

Representation
--------------
Boards are encoded as a 1D list where ``queens[row] = col``. Occupancy is
tracked per line:

- ``col_counts[c]``: queens in column ``c`` (size N).
- ``d1_counts[r + c]``: queens on the anti-diagonal (size 2N-1).
- ``d2_counts[(N-1) + r - c]``: queens on the main diagonal (size 2N-1).

A line holding ``k >= 2`` queens contributes ``k - 1`` violations. The
running ``violations`` tally is updated on every counter change, so once all
rows are counted it equals the total number of violations on the board.

Counting discipline
-------------------
A freshly built board has every column counted once but no diagonals
counted. The placement generator counts rows one at a time via
``partial_swap``; full ``swap`` calls assume both rows are already counted.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .evaluator import ConflictEvaluator


class BoardState:
    """Queen assignment plus incrementally maintained occupancy counters.

    Parameters
    ----------
    size : int
        Board dimension N (N >= 1). The board starts from the identity
        assignment ``queens[r] = r`` with diagonal counters at zero.
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Board size must be >= 1, got {size}")
        self.size = size
        self.queens: List[int] = list(range(size))
        self.col_counts: List[int] = [1] * size
        self.d1_counts: List[int] = [0] * (2 * size - 1)
        self.d2_counts: List[int] = [0] * (2 * size - 1)
        self.violations = 0

    @classmethod
    def from_assignment(
        cls,
        queens: Sequence[int],
        evaluator: Optional[ConflictEvaluator] = None,
    ) -> "BoardState":
        """Build a fully counted board from an explicit assignment.

        Columns need not be distinct; they only have to lie in ``[0, N)``.
        """
        board = cls(len(queens))
        for row, col in enumerate(queens):
            if not 0 <= col < board.size:
                raise ValueError(f"Column {col} of row {row} is outside [0, {board.size})")
        board.queens = list(queens)
        board.recount(evaluator)
        return board

    def __repr__(self) -> str:
        return f"BoardState(size={self.size}, violations={self.violations}, queens={self.queens!r})"

    # Counter bookkeeping ---------------------------------------------------

    def _increment(self, counts: List[int], index: int) -> None:
        if counts[index] >= 1:
            self.violations += 1
        counts[index] += 1

    def _decrement(self, counts: List[int], index: int) -> None:
        assert counts[index] > 0, f"occupancy counter {index} would drop below zero"
        if counts[index] == 0:
            return
        counts[index] -= 1
        if counts[index] >= 1:
            self.violations -= 1

    def place(self, row: int) -> None:
        """Count the diagonals occupied by ``row`` at its current column."""
        col = self.queens[row]
        self._increment(self.d1_counts, row + col)
        self._increment(self.d2_counts, self.size - 1 + row - col)

    def lift(self, row: int) -> None:
        """Uncount the diagonals occupied by ``row`` at its current column."""
        col = self.queens[row]
        self._decrement(self.d1_counts, row + col)
        self._decrement(self.d2_counts, self.size - 1 + row - col)

    # Swaps -----------------------------------------------------------------

    def swap(self, row1: int, row2: int) -> None:
        """Exchange the columns of two counted rows and update all counters.

        Column counters are untouched: a swap never changes which columns
        are occupied, only which rows occupy them.
        """
        if row1 == row2:
            return
        self.lift(row1)
        self.lift(row2)
        self.queens[row1], self.queens[row2] = self.queens[row2], self.queens[row1]
        self.place(row1)
        self.place(row2)

    def partial_swap(self, row1: int, row2: int) -> None:
        """Exchange two columns and count only ``row1``'s new diagonals.

        Used while rows ``row1..N-1`` are still uncounted, so ``row2`` (taken
        from that range) carries nothing to uncount.
        """
        self.queens[row1], self.queens[row2] = self.queens[row2], self.queens[row1]
        self.place(row1)

    def undo_partial_swap(self, row1: int, row2: int) -> None:
        """Revert a ``partial_swap(row1, row2)``."""
        self.lift(row1)
        self.queens[row1], self.queens[row2] = self.queens[row2], self.queens[row1]

    # Recount ---------------------------------------------------------------

    def recount(self, evaluator: Optional[ConflictEvaluator] = None) -> int:
        """Rebuild every counter from the assignment and return total violations.

        Parameters
        ----------
        evaluator : ConflictEvaluator | None
            Evaluator performing the tallies. A sequential evaluator is used
            when omitted.
        """
        if evaluator is None:
            evaluator = ConflictEvaluator(parallel=False)
        tally = evaluator.tally(self.queens, self.size)
        self.col_counts = tally.col_counts
        self.d1_counts = tally.d1_counts
        self.d2_counts = tally.d2_counts
        self.violations = tally.violations
        return tally.violations

    def solution(self) -> List[int]:
        """Return a copy of the current assignment (``queens[row] = col``)."""
        return list(self.queens)
