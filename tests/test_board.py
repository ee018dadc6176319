"""
Tests for the board transforms, tile spawning and terminal checks.
"""

from unittest import TestCase, main

import numpy as np
from numpy.random import default_rng

from game2048.config import TILE_PROBS, TILE_VALUES
from game2048.core.gameboard import (
    fill_cells,
    has_won,
    is_done,
    merge_row,
    move,
    move_down,
    move_left,
    move_right,
    move_up,
    slide_and_merge,
    spawn_tile,
)
from game2048.core.gamemove import Direction
from game2048.errors import NoEmptyCellError


def board_with_row(row):
    """4x4 board whose first row is `row`, the rest empty."""
    board = np.zeros((4, 4), dtype=np.int64)
    board[0] = row
    return board


class TestMergeRow(TestCase):
    """Test the single-row merge."""

    def test_merge_pairs_once(self):
        """[2, 2, 2, 2] merges into two 4s, not one 8."""
        score, result = merge_row(np.array([2, 2, 2, 2]))
        self.assertEqual(score, 8)
        np.testing.assert_array_equal(result, np.array([4, 4]))

    def test_merge_skips_gaps(self):
        """Empty cells do not block a merge."""
        score, result = merge_row(np.array([2, 0, 2, 0]))
        self.assertEqual(score, 4)
        np.testing.assert_array_equal(result, np.array([4]))

    def test_merge_leftmost_pair_first(self):
        """[2, 2, 2] keeps the trailing tile."""
        score, result = merge_row(np.array([0, 2, 2, 2]))
        self.assertEqual(score, 4)
        np.testing.assert_array_equal(result, np.array([4, 2]))

    def test_merge_empty_row(self):
        score, result = merge_row(np.array([0, 0, 0, 0]))
        self.assertEqual(score, 0)
        self.assertEqual(len(result), 0)

    def test_merge_distinct_values(self):
        score, result = merge_row(np.array([2, 4, 8, 16]))
        self.assertEqual(score, 0)
        np.testing.assert_array_equal(result, np.array([2, 4, 8, 16]))


class TestMoveLeft(TestCase):
    """Test the canonical left move."""

    def test_four_equal_tiles(self):
        board, score, moved = move_left(board_with_row([2, 2, 2, 2]))
        np.testing.assert_array_equal(board[0], [4, 4, 0, 0])
        self.assertEqual(score, 8)
        self.assertTrue(moved)

    def test_separated_pair(self):
        board, score, moved = move_left(board_with_row([2, 0, 2, 0]))
        np.testing.assert_array_equal(board[0], [4, 0, 0, 0])
        self.assertEqual(score, 4)
        self.assertTrue(moved)

    def test_no_op(self):
        """A tile already against the edge does not move."""
        original = board_with_row([2, 0, 0, 0])
        board, score, moved = move_left(original)
        np.testing.assert_array_equal(board, original)
        self.assertEqual(score, 0)
        self.assertFalse(moved)

    def test_slide_only(self):
        """Sliding without merging still counts as a move."""
        board, score, moved = move_left(board_with_row([0, 0, 4, 2]))
        np.testing.assert_array_equal(board[0], [4, 2, 0, 0])
        self.assertEqual(score, 0)
        self.assertTrue(moved)

    def test_whole_board(self):
        original = np.array([[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]])
        board, score, moved = move_left(original)
        expected = np.array([[4, 8, 0, 0], [4, 4, 0, 0], [4, 0, 0, 0], [4, 4, 0, 0]])
        np.testing.assert_array_equal(board, expected)
        self.assertEqual(score, 28)
        self.assertTrue(moved)

    def test_input_not_modified(self):
        original = board_with_row([2, 2, 0, 0])
        snapshot = original.copy()
        move_left(original)
        np.testing.assert_array_equal(original, snapshot)

    def test_second_application_is_noop_without_new_pairs(self):
        """Once no equal neighbours remain, repeating the move changes nothing."""
        rng = default_rng(0)
        for _ in range(200):
            original = rng.choice([0, 2, 4, 8, 16, 32], size=(4, 4))
            board, _, _ = move_left(original)

            # ##>: Merging can create a new pair ([2, 2, 4] -> [4, 4]); skip those boards.
            if np.any((board[:, :-1] != 0) & (board[:, :-1] == board[:, 1:])):
                continue
            _, score, moved = move_left(board)
            self.assertFalse(moved)
            self.assertEqual(score, 0)

    def test_repeated_moves_reach_a_fixed_point(self):
        """Repeating the move converges to a board the move leaves unchanged."""
        rng = default_rng(1)
        for _ in range(100):
            board = rng.choice([0, 2, 2, 4, 8], size=(4, 4))
            for _ in range(16):
                board, _, moved = move_left(board)
                if not moved:
                    break
            self.assertFalse(move_left(board).moved)


class TestDerivedMoves(TestCase):
    """Test the moves derived by reversal and transposition."""

    def test_move_right(self):
        board, score, moved = move_right(board_with_row([2, 2, 2, 2]))
        np.testing.assert_array_equal(board[0], [0, 0, 4, 4])
        self.assertEqual(score, 8)
        self.assertTrue(moved)

    def test_move_right_merges_from_the_right(self):
        board, score, _ = move_right(board_with_row([0, 2, 2, 2]))
        np.testing.assert_array_equal(board[0], [0, 0, 2, 4])
        self.assertEqual(score, 4)

    def test_move_up(self):
        original = np.array([[0, 0, 0, 0], [2, 0, 0, 0], [2, 0, 0, 4], [4, 0, 0, 4]])
        board, score, moved = move_up(original)
        expected = np.array([[4, 0, 0, 8], [4, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        np.testing.assert_array_equal(board, expected)
        self.assertEqual(score, 12)
        self.assertTrue(moved)

    def test_move_down(self):
        original = np.array([[2, 0, 0, 4], [2, 0, 0, 4], [4, 0, 0, 0], [0, 0, 0, 0]])
        board, score, moved = move_down(original)
        expected = np.array([[0, 0, 0, 0], [0, 0, 0, 0], [4, 0, 0, 0], [4, 0, 0, 8]])
        np.testing.assert_array_equal(board, expected)
        self.assertEqual(score, 12)
        self.assertTrue(moved)

    def test_right_is_mirrored_left(self):
        """Reversing a row twice restores it, so right equals mirrored left."""
        rng = default_rng(2)
        for _ in range(50):
            original = rng.choice([0, 2, 4, 8], size=(4, 4))
            np.testing.assert_array_equal(np.fliplr(np.fliplr(original)), original)

            right, right_score, right_moved = move_right(original)
            left, left_score, left_moved = move_left(np.fliplr(original))
            np.testing.assert_array_equal(right, np.fliplr(left))
            self.assertEqual(right_score, left_score)
            self.assertEqual(right_moved, left_moved)

    def test_dispatch_by_direction(self):
        original = board_with_row([0, 2, 0, 2])
        for direction, transform in [
            (Direction.LEFT, move_left),
            (Direction.UP, move_up),
            (Direction.RIGHT, move_right),
            (Direction.DOWN, move_down),
        ]:
            expected = transform(original)
            result = move(original, int(direction))
            np.testing.assert_array_equal(result.board, expected.board)
            self.assertEqual(result.score, expected.score)
            self.assertEqual(result.moved, expected.moved)

    def test_slide_and_merge_score_accumulates(self):
        board = np.array([[2, 2, 0, 0], [4, 4, 0, 0], [8, 8, 0, 0], [16, 16, 0, 0]])
        score, _ = slide_and_merge(board)
        self.assertEqual(score, 60)


class TestSpawnTile(TestCase):
    """Test the tile spawner."""

    def test_spawn_fills_the_only_empty_cell(self):
        board = np.full((4, 4), 8)
        board[2, 1] = 0
        result = spawn_tile(board, rng=default_rng(3))

        self.assertIn(result[2, 1], (2, 4))
        self.assertEqual(np.count_nonzero(result), 16)

        # ##>: The input board is left untouched.
        self.assertEqual(board[2, 1], 0)

    def test_spawn_on_full_board(self):
        with self.assertRaises(NoEmptyCellError):
            spawn_tile(np.full((4, 4), 2))

    def test_spawn_value_distribution(self):
        """One empty cell: about 90% twos and 10% fours."""
        rng = default_rng(4)
        board = np.full((4, 4), 8)
        board[0, 0] = 0

        trials = 5000
        twos = sum(spawn_tile(board, rng=rng)[0, 0] == 2 for _ in range(trials))

        spawn_probs = dict(zip(TILE_VALUES, TILE_PROBS))
        self.assertAlmostEqual(twos / trials, spawn_probs[2], delta=0.03)
        self.assertAlmostEqual(1 - twos / trials, spawn_probs[4], delta=0.03)

    def test_spawn_cell_distribution(self):
        """Every empty cell is picked about equally often."""
        rng = default_rng(5)
        board = np.zeros((4, 4), dtype=np.int64)

        counts = np.zeros((4, 4), dtype=np.int64)
        for _ in range(16000):
            counts += spawn_tile(board, rng=rng) != 0

        self.assertTrue(np.all(counts > 800))
        self.assertTrue(np.all(counts < 1200))

    def test_spawn_custom_values(self):
        result = spawn_tile(np.zeros((4, 4), dtype=np.int64), rng=default_rng(6), values=(8,), probs=(1.0,))
        self.assertEqual(sorted(result[result != 0].tolist()), [8])

    def test_seeded_spawn_is_reproducible(self):
        board = np.zeros((4, 4), dtype=np.int64)
        np.testing.assert_array_equal(spawn_tile(board, rng=default_rng(7)), spawn_tile(board, rng=default_rng(7)))


class TestFillCells(TestCase):
    """Test multi-tile filling."""

    def test_fill_empty_board(self):
        board = np.zeros((4, 4), dtype=np.int64)
        result = fill_cells(board, 2, rng=default_rng(7))

        self.assertEqual(np.count_nonzero(result), 2)
        self.assertTrue(np.all(np.isin(result[result != 0], [2, 4])))
        self.assertEqual(np.count_nonzero(board), 0)

    def test_fill_more_than_available(self):
        board = np.full((4, 4), 8)
        board[1, 1] = 0
        board[3, 0] = 0

        result = fill_cells(board, 5, rng=default_rng(8))
        self.assertTrue(result.all())

    def test_fill_full_board_returns_a_copy(self):
        board = np.full((4, 4), 2)
        result = fill_cells(board, 1)

        np.testing.assert_array_equal(result, board)
        self.assertIsNot(result, board)

    def test_fill_is_reproducible(self):
        board = np.zeros((4, 4), dtype=np.int64)
        first = fill_cells(board, 3, rng=default_rng(9), values=(8,), probs=(1.0,))
        second = fill_cells(board, 3, rng=default_rng(9), values=(8,), probs=(1.0,))

        np.testing.assert_array_equal(first, second)
        self.assertEqual(int(first.sum()), 24)


class TestTerminalChecks(TestCase):
    """Test game over and win detection."""

    def test_full_board_without_pairs_is_done(self):
        board = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])
        self.assertTrue(is_done(board))

    def test_full_board_with_horizontal_pair_is_not_done(self):
        board = np.array([[2, 2, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])
        self.assertFalse(is_done(board))

    def test_full_board_with_vertical_pair_is_not_done(self):
        board = np.array([[2, 4, 8, 16], [32, 64, 128, 16], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])
        self.assertFalse(is_done(board))

    def test_empty_cell_is_not_done(self):
        board = np.array([[2, 4, 8, 0], [16, 32, 64, 128], [256, 512, 1024, 2048], [4096, 8192, 16384, 32768]])
        self.assertFalse(is_done(board))

    def test_empty_board_is_not_done(self):
        self.assertFalse(is_done(np.zeros((4, 4), dtype=np.int64)))

    def test_has_won(self):
        self.assertTrue(has_won(board_with_row([2048, 0, 0, 0])))
        self.assertFalse(has_won(board_with_row([1024, 1024, 0, 0])))
        self.assertTrue(has_won(board_with_row([512, 0, 0, 0]), win_tile=512))


if __name__ == '__main__':
    main()
