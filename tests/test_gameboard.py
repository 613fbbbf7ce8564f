"""
Tests for the transition engine, terminal checks and tile spawning.

Tests cover the concrete merge scenarios, traversal order, the properties every transition
must hold on random boards, and the spawning distribution.
"""

from collections import Counter
from unittest import TestCase, main

import numpy as np

from tileslide.core import (
    TILE_SPAWN_PROBS,
    Board,
    Direction,
    InvalidDirection,
    Move,
    compute_transition,
    fill_cells,
    is_terminal,
    is_win,
    make_rng,
    new_board,
    spawn_tile,
    traversal_order,
)

generator = np.random.default_rng(42)


def generate_random_board(size: int = 4, fill: float = 0.6) -> Board:
    """Generate a random board with small tiles so that merges are frequent."""
    cells = generator.choice([2, 4, 8, 16], size=size * size)
    cells[generator.random(size * size) > fill] = 0
    return Board.from_cells(cells.tolist(), size=size)


def single_row(row: list[int]) -> Board:
    """4x4 board whose first row is ``row`` and the rest empty."""
    return Board.from_rows([row, [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])


def replay(board: Board, moves: tuple[Move, ...]) -> Board:
    """Apply moves one by one on a copy of the board."""
    result = board.clone()
    for move in moves:
        result.set(*result.position(move.target), move.value)
        result.set(*result.position(move.source), 0)
    return result


class TestScenarios(TestCase):
    """Concrete transitions with known outcomes."""

    def test_pair_merges(self):
        """[2,2,0,0] left becomes [4,0,0,0] with one merge worth 4."""
        transition = compute_transition(single_row([2, 2, 0, 0]), 'left')

        self.assertEqual(transition.board, single_row([4, 0, 0, 0]))
        self.assertEqual(transition.moves, (Move(1, 0, 4, True),))
        self.assertEqual(transition.score, 4)
        self.assertTrue(transition.changed)

    def test_leading_pair_merges_first(self):
        """[2,0,2,2] left becomes [4,2,0,0]: the trailing 2 slides but does not merge."""
        transition = compute_transition(single_row([2, 0, 2, 2]), Direction.LEFT)

        self.assertEqual(transition.board, single_row([4, 2, 0, 0]))
        self.assertEqual(transition.score, 4)

        # ##>: Slides are recorded one cell at a time, in processing order.
        self.assertEqual(
            transition.moves,
            (
                Move(2, 1, 2, False),
                Move(1, 0, 4, True),
                Move(3, 2, 2, False),
                Move(2, 1, 2, False),
            ),
        )

    def test_four_equal_tiles_right(self):
        """[2,2,2,2] right becomes [0,0,4,4]."""
        transition = compute_transition(single_row([2, 2, 2, 2]), 'right')

        self.assertEqual(transition.board, single_row([0, 0, 4, 4]))
        self.assertEqual(transition.score, 8)
        self.assertEqual(sum(move.merge for move in transition.moves), 2)

    def test_merged_tile_does_not_merge_again(self):
        """[4,2,2,0] left becomes [4,4,0,0], not [8,0,0,0]."""
        transition = compute_transition(single_row([4, 2, 2, 0]), 'left')

        self.assertEqual(transition.board, single_row([4, 4, 0, 0]))
        self.assertEqual(transition.score, 4)

    def test_column_down(self):
        """Three equal tiles collapse into two when pushed down."""
        board = Board.from_rows([[2, 0, 0, 0], [2, 0, 0, 0], [2, 0, 0, 0], [0, 0, 0, 0]])
        transition = compute_transition(board, 'down')

        expected = Board.from_rows([[0, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0]])
        self.assertEqual(transition.board, expected)
        self.assertEqual(transition.score, 4)

    def test_column_up(self):
        """[2,2,4,4] pushed up becomes [4,8,0,0]."""
        board = Board.from_rows([[2, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0], [4, 0, 0, 0]])
        transition = compute_transition(board, 'up')

        expected = Board.from_rows([[4, 0, 0, 0], [8, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        self.assertEqual(transition.board, expected)
        self.assertEqual(transition.score, 12)

    def test_no_op(self):
        """A blocked move records nothing and returns an equal board."""
        board = Board.from_rows([[2, 0, 0, 0], [4, 0, 0, 0], [8, 0, 0, 0], [16, 0, 0, 0]])
        transition = compute_transition(board, 'left')

        self.assertEqual(transition.board, board)
        self.assertIsNot(transition.board, board)
        self.assertEqual(transition.moves, ())
        self.assertEqual(transition.score, 0)
        self.assertFalse(transition.changed)

    def test_input_not_mutated(self):
        """The engine works on a copy of the input."""
        board = single_row([2, 2, 0, 0])
        before = board.cells.tolist()
        compute_transition(board, 'right')
        self.assertEqual(board.cells.tolist(), before)

    def test_invalid_direction(self):
        """Unknown directions are rejected."""
        with self.assertRaises(InvalidDirection):
            compute_transition(new_board(), 'diagonal')

    def test_other_sizes(self):
        """The engine follows the board size."""
        board = Board.from_rows([[2, 2, 2, 2, 2], [0] * 5, [0] * 5, [0] * 5, [0] * 5])
        transition = compute_transition(board, 'left')
        self.assertEqual(transition.board.cells[:5].tolist(), [4, 4, 2, 0, 0])
        self.assertEqual(transition.score, 8)


class TestTraversalOrder(TestCase):
    """Order in which cells are processed."""

    def test_left_and_up_are_row_major(self):
        """Left and up use the natural order."""
        expected = [(0, 0), (0, 1), (1, 0), (1, 1)]
        self.assertEqual(traversal_order(2, 'left'), expected)
        self.assertEqual(traversal_order(2, 'up'), expected)

    def test_down_is_reversed(self):
        """Down visits the bottom row first."""
        self.assertEqual(traversal_order(2, 'down'), [(1, 1), (1, 0), (0, 1), (0, 0)])

    def test_right_sorted_by_column(self):
        """Right visits the last column first, rows kept in order."""
        self.assertEqual(traversal_order(2, 'right'), [(0, 1), (1, 1), (0, 0), (1, 0)])

    def test_covers_every_cell(self):
        """Every coordinate appears exactly once."""
        for direction in Direction:
            order = traversal_order(4, direction)
            self.assertEqual(len(set(order)), 16)


class TestTransitionProperties(TestCase):
    """Properties every transition holds, checked on random boards."""

    def setUp(self):
        self.boards = [generate_random_board() for _ in range(200)]

    def test_conservation(self):
        """Tiles are only created by doubling two equal tiles into one."""
        for board in self.boards:
            for direction in Direction:
                transition = compute_transition(board, direction)
                expected = Counter(value for value in board.cells.tolist() if value)
                for move in transition.moves:
                    if move.merge:
                        expected[move.value // 2] -= 2
                        expected[move.value] += 1
                after = Counter(value for value in transition.board.cells.tolist() if value)
                self.assertEqual(+expected, after)

    def test_score_is_sum_of_merges(self):
        """The score delta adds up the merged values."""
        for board in self.boards:
            for direction in Direction:
                transition = compute_transition(board, direction)
                self.assertEqual(transition.score, sum(move.value for move in transition.moves if move.merge))

    def test_idempotent_no_op(self):
        """Zero moves means the board is unchanged."""
        for board in self.boards:
            for direction in Direction:
                transition = compute_transition(board, direction)
                if not transition.moves:
                    self.assertEqual(transition.board, board)
                    self.assertEqual(transition.score, 0)

    def test_single_merge_per_cell(self):
        """A merged tile neither receives a second merge nor moves again in the same transition."""
        for board in self.boards:
            for direction in Direction:
                merged = set()
                for move in compute_transition(board, direction).moves:
                    self.assertNotIn(move.source, merged)
                    if move.merge:
                        self.assertNotIn(move.target, merged)
                        merged.add(move.target)

    def test_moves_replay_to_board(self):
        """Applying the moves in order rebuilds the resulting board."""
        for board in self.boards:
            for direction in Direction:
                transition = compute_transition(board, direction)
                self.assertEqual(replay(board, transition.moves), transition.board)

    def test_horizontal_symmetry(self):
        """Left on a board mirrors right on its column-reversed copy."""
        for board in self.boards:
            mirror = Board.from_cells(board.as_grid()[:, ::-1].ravel().tolist())
            left = compute_transition(board, 'left')
            right = compute_transition(mirror, 'right')

            np.testing.assert_array_equal(left.board.as_grid(), right.board.as_grid()[:, ::-1])
            self.assertEqual(left.score, right.score)

    def test_vertical_symmetry(self):
        """Up on a board mirrors down on its row-reversed copy."""
        for board in self.boards:
            mirror = Board.from_cells(board.as_grid()[::-1].ravel().tolist())
            up = compute_transition(board, 'up')
            down = compute_transition(mirror, 'down')

            np.testing.assert_array_equal(up.board.as_grid(), down.board.as_grid()[::-1])
            self.assertEqual(up.score, down.score)


class TestTerminal(TestCase):
    """Test game over and win detection."""

    def test_checkerboard_is_terminal(self):
        """A full board without equal neighbours is terminal."""
        board = Board.from_rows([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 2]])
        self.assertTrue(is_terminal(board))

    def test_single_empty_cell_is_not_terminal(self):
        """Any empty cell keeps the game going, wherever it is."""
        checkerboard = [2, 4, 2, 4, 4, 2, 4, 2, 2, 4, 2, 4, 4, 2, 4, 2]
        for index in range(16):
            cells = list(checkerboard)
            cells[index] = 0
            self.assertFalse(is_terminal(Board.from_cells(cells)))

    def test_horizontal_pair_is_not_terminal(self):
        """A full board with two equal row neighbours is not terminal."""
        board = Board.from_rows([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 2, 8]])
        self.assertFalse(is_terminal(board))

    def test_vertical_pair_is_not_terminal(self):
        """A full board with two equal column neighbours is not terminal."""
        board = Board.from_rows([[2, 4, 2, 4], [4, 2, 4, 2], [2, 4, 2, 4], [4, 2, 4, 4]])
        self.assertFalse(is_terminal(board))

    def test_terminal_means_no_transition(self):
        """No direction changes a terminal board."""
        board = Board.from_rows([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [2, 4, 8, 16]])
        self.assertTrue(is_terminal(board))
        for direction in Direction:
            self.assertFalse(compute_transition(board, direction).changed)

    def test_win(self):
        """The win value is configurable."""
        board = single_row([1024, 0, 0, 2048])
        self.assertTrue(is_win(board))
        self.assertTrue(is_win(board, 1024))
        self.assertFalse(is_win(board, 4096))
        self.assertFalse(is_win(new_board()))


class TestSpawning(TestCase):
    """Test tile spawning."""

    def test_spawn_on_empty_cell(self):
        """A tile of 2 or 4 appears on a cell that was empty."""
        board = single_row([2, 4, 0, 8])
        index = spawn_tile(board, rng=make_rng(0))

        self.assertIn(index, range(2, 16))
        self.assertNotEqual(index, 3)
        self.assertIn(board.cells[index], (2, 4))
        self.assertEqual(len(board.empty_cells()), 12)

    def test_spawn_on_full_board(self):
        """A full board is left untouched."""
        board = Board.from_rows([[2, 4], [8, 16]])
        self.assertIsNone(spawn_tile(board, rng=make_rng(0)))
        self.assertEqual(board, Board.from_rows([[2, 4], [8, 16]]))

    def test_spawn_reproducible(self):
        """Same seed, same tiles."""
        first, second = new_board(), new_board()
        fill_cells(first, 5, rng=make_rng(7))
        fill_cells(second, 5, rng=make_rng(7))
        self.assertEqual(first, second)

    def test_fill_stops_when_full(self):
        """Asking for more tiles than empty cells fills the board."""
        board = new_board(2)
        filled = fill_cells(board, 10, rng=make_rng(1))

        self.assertEqual(sorted(filled), [0, 1, 2, 3])
        self.assertEqual(board.empty_cells(), [])

    def test_spawn_distribution(self):
        """Tile values follow the 90/10 distribution for 2 vs 4."""
        rng = make_rng(123)
        counts = Counter()
        for _ in range(2000):
            board = new_board()
            index = spawn_tile(board, rng=rng)
            counts[int(board.cells[index])] += 1

        self.assertEqual(set(counts), {2, 4})
        self.assertAlmostEqual(counts[2] / 2000, TILE_SPAWN_PROBS[2], delta=0.03)

    def test_spawn_custom_probabilities(self):
        """Spawn probabilities can be overridden."""
        board = new_board()
        fill_cells(board, 8, rng=make_rng(3), probs={4: 1.0})
        self.assertEqual(sorted(set(board.cells.tolist())), [0, 4])

    def test_spawn_position_uniform(self):
        """Every empty cell can receive the tile."""
        rng = make_rng(5)
        positions = set()
        for _ in range(500):
            positions.add(spawn_tile(single_row([2, 0, 0, 0]), rng=rng))
        self.assertEqual(positions, set(range(1, 16)))


if __name__ == '__main__':
    main()
