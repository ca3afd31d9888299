"""Min-conflicts local search with random restarts for N-Queens.

Each restart attempt runs GENERATE -> REPAIR -> {SOLVED | EXHAUSTED}:

- GENERATE: build a low-conflict permutation with ``initial_placement`` and
  recount its violations.
- REPAIR: repeatedly pick the next conflicted row (scanning cyclically from
  the placement frontier) and apply the min-conflicts swap, recounting after
  each move. The attempt has a budget of ``max_attempts`` moves; a move that
  leaves the board no better than the attempt's starting count is charged
  ``1 + 2 * (increase)`` extra, which allows a few sideways moves but cuts
  wandering short.
- EXHAUSTED: the board is discarded and a fresh placement is generated.

Contract (public API)
---------------------
- Input: board size ``size`` (``size >= 1`` and not 2 or 3), the per-attempt
  budget, and an optional ``random.Random`` or integer ``seed``.
- Output: a ``SearchResult`` named tuple
    (solution, violations, restarts, moves, elapsed_seconds)

Where:
- solution: list of N columns, ``solution[row] = col``.
- violations: total violations of the returned board (always 0).
- restarts: number of attempts beyond the first.
- moves: swaps committed across all attempts.
- elapsed_seconds: wall time measured via ``perf_counter()``.

There is no time limit: the search returns only once a solution is found.

Determinism
-----------
The search is stochastic. Pass ``seed`` or a seeded ``rng`` to reproduce a
run exactly; one generator is shared across all restarts.
"""

from __future__ import annotations

import random
from time import perf_counter
from typing import Callable, List, NamedTuple, Optional, Tuple

from .board import BoardState
from .evaluator import ConflictEvaluator, partial_conflicts
from .moves import min_conflicts_move
from .placement import initial_placement

DEFAULT_MAX_ATTEMPTS = 2000

# Board sizes with no solution at all.
UNSOLVABLE_SIZES = frozenset({2, 3})


class UnsolvableBoardError(ValueError):
    """Raised for board sizes that admit no N-Queens solution."""

    def __init__(self, size: int):
        super().__init__(f"No solutions for N={size}")
        self.size = size


class SearchResult(NamedTuple):
    """Outcome of ``mc_nqueens``: the solved board and the search effort."""

    solution: List[int]
    violations: int
    restarts: int
    moves: int
    elapsed: float


def check_size(size: int) -> None:
    """Reject board sizes the search must not be started for."""
    if size < 1:
        raise ValueError(f"Board size must be >= 1, got {size}")
    if size in UNSOLVABLE_SIZES:
        raise UnsolvableBoardError(size)


def _next_conflicted_row(board: BoardState, row: int) -> Optional[int]:
    # Row N-1 is never picked; any diagonal conflict it has is shared with a lower row.
    # None after one full cycle: only column conflicts remain, which swaps cannot clear.
    modulus = board.size - 1
    for _ in range(modulus):
        row = (row + 1) % modulus
        if partial_conflicts(board, row) != 0:
            return row
    return None


def repair(
    board: BoardState,
    frontier: int,
    evaluator: ConflictEvaluator,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Tuple[int, int]:
    """Run one bounded repair phase on ``board``.

    The phase also ends early when no row has a diagonal conflict left,
    which happens only on non-permutation boards with column conflicts.

    Returns
    -------
    (violations, moves)
        Violations left when the phase ended (0 when solved) and the number
        of swaps committed.
    """
    violations = evaluator.total_violations(board)
    baseline = violations
    row = frontier - 1
    attempt = 0
    moves = 0

    while attempt < max_attempts and violations != 0:
        attempt += 1
        next_row = _next_conflicted_row(board, row)
        if next_row is None:
            break
        row = next_row
        if min_conflicts_move(board, row) is not None:
            moves += 1

        violations = evaluator.total_violations(board)
        if violations == 0:
            break
        if violations >= baseline:
            # Sideways or worse: charge the budget.
            attempt += 1 + 2 * (violations - baseline)

    return violations, moves


def mc_nqueens(
    size: int,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    parallel: bool = True,
    on_restart: Optional[Callable[[int], None]] = None,
) -> SearchResult:
    """Solve N-Queens by min-conflicts local search with random restarts.

    Parameters
    ----------
    size : int
        Board dimension N.
    max_attempts : int, default 2000
        Repair budget per restart attempt.
    rng : random.Random | None
        Random source shared by placement across restarts. Takes precedence
        over ``seed``.
    seed : int | None
        Seed for a private ``random.Random`` when ``rng`` is not given.
    parallel : bool, default True
        Run the three recount tallies on worker threads.
    on_restart : Callable[[int], None] | None
        Called with the restart count each time a new attempt begins after
        the first.

    Returns
    -------
    SearchResult
        Tuple (solution, violations, restarts, moves, elapsed).

    Raises
    ------
    UnsolvableBoardError
        For N = 2 or N = 3; no search is performed.
    ValueError
        For N < 1 or a non-positive ``max_attempts``.
    """
    check_size(size)
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
    if rng is None:
        rng = random.Random(seed)

    start = perf_counter()
    restarts = -1
    total_moves = 0

    with ConflictEvaluator(parallel=parallel) as evaluator:
        while True:
            restarts += 1
            if restarts and on_restart is not None:
                on_restart(restarts)

            board, frontier = initial_placement(size, rng)
            violations, moves = repair(board, frontier, evaluator, max_attempts)
            total_moves += moves
            if violations == 0:
                break

        final_violations = evaluator.total_violations(board)

    return SearchResult(board.solution(), final_violations, restarts, total_moves, perf_counter() - start)
