"""Min-conflicts move selection.

For a conflicted row, every swap with another row is scored with the
analytic ``total_conflicts`` and the best one is committed. Ties keep the
lowest-index partner; a swap that clears the board ends the scan early.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from .board import BoardState
from .evaluator import total_conflicts


class Move(NamedTuple):
    """A committed (or proposed) swap and the violations it leaves."""

    row: int
    other: int
    conflicts: int


def best_swap(board: BoardState, row: int) -> Optional[Move]:
    """Return the swap partner for ``row`` that minimizes total violations.

    Scores are whole-board totals, so the early exit fires only on a swap
    that solves the board; otherwise all N-1 partners are scored.

    Returns ``None`` when the board has no other row to swap with.
    """
    best: Optional[Move] = None
    for other in range(board.size):
        if other == row:
            continue
        conflicts = total_conflicts(board, row, other)
        if best is None or conflicts < best.conflicts:
            best = Move(row, other, conflicts)
            if conflicts == 0:
                break
    return best


def min_conflicts_move(board: BoardState, row: int) -> Optional[Move]:
    """Select the best swap for ``row`` and apply it to ``board``."""
    move = best_swap(board, row)
    if move is not None:
        board.swap(move.row, move.other)
    return move
