"""Min-conflicts local search for the N-Queens problem."""

from .board import BoardState
from .evaluator import ConflictEvaluator, partial_conflicts, total_conflicts
from .moves import Move, min_conflicts_move
from .placement import initial_placement
from .search import SearchResult, UnsolvableBoardError, mc_nqueens
from .utils import conflicts, conflicts_on2, is_valid_solution, naive_violations

__all__ = [
    "BoardState",
    "ConflictEvaluator",
    "total_conflicts",
    "partial_conflicts",
    "Move",
    "min_conflicts_move",
    "initial_placement",
    "mc_nqueens",
    "SearchResult",
    "UnsolvableBoardError",
    "conflicts",
    "conflicts_on2",
    "naive_violations",
    "is_valid_solution",
]
