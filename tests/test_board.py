"""Tests for BoardState counter bookkeeping."""

from pathlib import Path
import random
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from minqueens.board import BoardState


def fresh_counts(queens):
    """Return (cols, d1, d2, violations) rebuilt from scratch."""
    board = BoardState.from_assignment(queens)
    return board.col_counts, board.d1_counts, board.d2_counts, board.violations


class BoardStateTests(unittest.TestCase):

    def test_new_board_is_identity_with_uncounted_diagonals(self):
        board = BoardState(5)
        self.assertEqual(board.queens, [0, 1, 2, 3, 4])
        self.assertEqual(board.col_counts, [1] * 5)
        self.assertEqual(board.d1_counts, [0] * 9)
        self.assertEqual(board.d2_counts, [0] * 9)
        self.assertEqual(board.violations, 0)

    def test_rejects_empty_board(self):
        with self.assertRaises(ValueError):
            BoardState(0)

    def test_from_assignment_rejects_out_of_range_columns(self):
        with self.assertRaises(ValueError):
            BoardState.from_assignment([0, 4, 1, 2])

    def test_from_assignment_counts_every_line(self):
        board = BoardState.from_assignment([0, 0, 0, 3])
        self.assertEqual(board.col_counts, [3, 0, 0, 1])
        self.assertEqual(sum(board.d1_counts), 4)
        self.assertEqual(sum(board.d2_counts), 4)
        # Column 0 holds three queens; (0,0) and (3,3) share the main diagonal.
        self.assertEqual(board.violations, 2 + 1)

    def test_swap_keeps_counters_consistent(self):
        rng = random.Random(7)
        for size in (4, 7, 12):
            queens = [rng.randrange(size) for _ in range(size)]
            board = BoardState.from_assignment(queens)
            for _ in range(50):
                row1, row2 = rng.randrange(size), rng.randrange(size)
                board.swap(row1, row2)
                cols, d1, d2, violations = fresh_counts(board.queens)
                self.assertEqual(board.col_counts, cols)
                self.assertEqual(board.d1_counts, d1)
                self.assertEqual(board.d2_counts, d2)
                self.assertEqual(board.violations, violations)

    def test_swap_with_itself_is_a_no_op(self):
        board = BoardState.from_assignment([1, 3, 0, 2])
        before = (list(board.queens), list(board.d1_counts), list(board.d2_counts))
        board.swap(2, 2)
        self.assertEqual((board.queens, board.d1_counts, board.d2_counts), before)

    def test_partial_swap_and_undo_restore_state(self):
        board = BoardState(6)
        board.partial_swap(0, 4)
        self.assertEqual(board.queens[0], 4)
        self.assertEqual(board.queens[4], 0)
        self.assertEqual(sum(board.d1_counts), 1)
        self.assertEqual(board.d1_counts[0 + 4], 1)
        self.assertEqual(board.d2_counts[5 + 0 - 4], 1)

        board.undo_partial_swap(0, 4)
        self.assertEqual(board.queens, list(range(6)))
        self.assertEqual(board.d1_counts, [0] * 11)
        self.assertEqual(board.d2_counts, [0] * 11)
        self.assertEqual(board.violations, 0)

    @unittest.skipUnless(__debug__, "assertions are disabled under -O")
    def test_lifting_an_uncounted_row_trips_the_underflow_assertion(self):
        board = BoardState(4)
        with self.assertRaises(AssertionError):
            board.lift(2)

    def test_solution_is_a_copy(self):
        board = BoardState.from_assignment([1, 3, 0, 2])
        solution = board.solution()
        solution[0] = 99
        self.assertEqual(board.queens, [1, 3, 0, 2])


if __name__ == "__main__":
    unittest.main()
