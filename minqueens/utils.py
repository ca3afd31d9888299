"""Utility helpers for the minqueens project.

Reference counters that work directly on an assignment, independent of the
incremental ``BoardState`` bookkeeping. They are slow on purpose (no shared
state, quadratic scans) and serve as ground truth for validation and tests.

Representation
--------------
Assignments are encoded as a 1D sequence where ``queens[row] = col``.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence


def conflicts(queens: Sequence[int]) -> int:
    """Compute the number of attacking queen pairs in O(N).

    Counts occurrences per column and diagonal with hash maps; a line with
    ``k`` queens contributes ``k*(k-1)/2`` pairs.
    """
    col_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for row, col in enumerate(queens):
        col_count[col] += 1
        diag1[row + col] += 1
        diag2[row - col] += 1

    def _pairs(counter: Counter[int]) -> int:
        total = 0
        for count in counter.values():
            if count > 1:
                total += count * (count - 1) // 2
        return total

    return _pairs(col_count) + _pairs(diag1) + _pairs(diag2)


def conflicts_on2(queens: Sequence[int]) -> int:
    """Compute the number of attacking queen pairs in O(N^2).

    Reference implementation for validation. Prefer ``conflicts`` in
    performance-sensitive contexts.
    """
    n = len(queens)
    conflicts_count = 0
    for i in range(n):
        for j in range(i + 1, n):
            if queens[i] == queens[j] or abs(queens[i] - queens[j]) == abs(i - j):
                conflicts_count += 1
    return conflicts_count


def naive_violations(queens: Sequence[int]) -> int:
    """Count violations by pairwise scanning in O(N^2).

    A queen is a violation on a line (column, anti-diagonal, main diagonal)
    when some earlier row already occupies that line, so a line holding ``k``
    queens yields ``k - 1``. The three dimensions are counted independently.
    """
    n = len(queens)
    violations = 0
    for j in range(n):
        same_col = same_d1 = same_d2 = False
        for i in range(j):
            same_col = same_col or queens[i] == queens[j]
            same_d1 = same_d1 or i + queens[i] == j + queens[j]
            same_d2 = same_d2 or i - queens[i] == j - queens[j]
        violations += same_col + same_d1 + same_d2
    return violations


def is_valid_solution(queens: Sequence[int]) -> bool:
    """Return True if the assignment is a valid N-Queens solution.

    Contract
    - Input: sequence of length N where queens[row] = col (0-based indices)
    - Valid if: all 0 <= col < N and no pairs of queens attack each other
    """
    n = len(queens)
    if n == 0:
        return False
    for col in queens:
        if not isinstance(col, int):
            return False
        if col < 0 or col >= n:
            return False
    # Rows are unique by representation; zero pairs covers columns and diagonals
    return conflicts(queens) == 0
