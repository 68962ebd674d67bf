import random

import numpy as np
import pytest

from gridtic.game.board import Board, is_winning_line
from gridtic.models import GameState, InvalidMoveError, LineType, Position, Symbol

from conftest import fill


X, O, E = Symbol.X, Symbol.O, Symbol.EMPTY


class TestWinningLine:
    def test_uniform_line_wins(self):
        assert is_winning_line([X, X, X])
        assert is_winning_line([O])

    def test_empty_or_mixed_line_does_not_win(self):
        assert not is_winning_line([])
        assert not is_winning_line([E, E, E])
        assert not is_winning_line([X, X, O])
        assert not is_winning_line([X, E, X])


class TestValidation:
    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (3, 0), (0, 3), (10, 10)])
    def test_out_of_bounds_is_invalid_regardless_of_contents(self, board, row, col):
        assert not board.is_valid_move(Position(row, col))
        fill(board, ["XOX", "OXO", "_O_"])
        assert not board.is_valid_move(Position(row, col))

    def test_empty_cell_is_valid_occupied_is_not(self, board):
        assert board.is_valid_move(Position(1, 1))
        board.apply_move(Position(1, 1), X)
        assert not board.is_valid_move(Position(1, 1))

    def test_is_valid_move_does_not_mutate(self, board):
        before = board.state_hash()
        board.is_valid_move(Position(0, 0))
        board.is_valid_move(Position(5, 5))
        assert board.state_hash() == before

    def test_board_needs_positive_dimensions(self):
        with pytest.raises(ValueError):
            Board(0, 3)

    def test_position_accepts_numpy_integers(self, board):
        position = Position(np.int64(1), np.int32(2))
        assert position == Position(1, 2)
        assert type(position.row) is int
        assert board.is_valid_move(position)

    @pytest.mark.parametrize("row, col", [(1.0, 0), ("1", 0), (True, 0)])
    def test_position_rejects_non_integers(self, row, col):
        with pytest.raises(ValueError):
            Position(row, col)


class TestApplyMove:
    def test_apply_sets_cell_and_records_history(self, board):
        move = board.apply_move(Position(2, 1), O)
        assert board.get(Position(2, 1)) is O
        assert move.position == Position(2, 1)
        assert move.symbol is O
        assert board.move_history == [move]

    def test_occupied_cell_raises_and_leaves_board_unchanged(self, board):
        board.apply_move(Position(0, 0), X)
        before = board.state_hash()
        with pytest.raises(InvalidMoveError) as excinfo:
            board.apply_move(Position(0, 0), O)
        assert excinfo.value.position == Position(0, 0)
        assert board.state_hash() == before
        assert len(board.move_history) == 1

    def test_out_of_bounds_raises(self, board):
        with pytest.raises(InvalidMoveError):
            board.apply_move(Position(3, 3), X)

    def test_empty_symbol_is_rejected(self, board):
        with pytest.raises(ValueError):
            board.apply_move(Position(0, 0), E)


class TestEvaluate:
    def test_empty_board_in_progress(self, board):
        assert board.evaluate() == GameState.in_progress()

    @pytest.mark.parametrize("layout,winner", [
        (["XXX", "OO_", "___"], X),
        (["X__", "XOO", "X__"], X),
        (["O_X", "XO_", "X_O"], O),
        (["XXO", "_O_", "O__"], O),
    ])
    def test_detects_rows_columns_and_diagonals(self, board, layout, winner):
        fill(board, layout)
        assert board.evaluate() == GameState.won(winner)

    def test_full_board_without_line_is_draw(self, board):
        fill(board, ["XOX", "XOO", "OXX"])
        assert board.evaluate() == GameState.draw()

    def test_rows_are_scanned_before_columns(self, board):
        fill(board, ["XXX", "X_O", "XOO"])
        line = board.winning_line()
        assert line.type == LineType.ROW
        assert line.positions[0] == Position(0, 0)
        assert board.evaluate() == GameState.won(X)

    def test_columns_are_scanned_before_diagonals(self, board):
        fill(board, ["XO_", "XX_", "X_X"])
        assert board.winning_line().type == LineType.COLUMN
        assert board.evaluate() == GameState.won(X)

    def test_evaluate_is_idempotent(self, board):
        fill(board, ["XO_", "_X_", "__O"])
        assert board.evaluate() == board.evaluate()

    def test_rectangular_board_ignores_diagonals(self):
        board = fill(Board(2, 3), ["X__", "_X_"])
        assert len(board.lines()) == 5
        assert board.evaluate() == GameState.in_progress()

    def test_won_only_when_some_line_is_uniform(self):
        rng = random.Random(1234)
        for _ in range(300):
            board = Board(3, 3)
            for row in range(3):
                for col in range(3):
                    board.grid[row][col] = rng.choice([X, O, E])
            result = board.evaluate()
            uniform = [
                board.cells(line.positions)[0]
                for line in board.lines()
                if is_winning_line(board.cells(line.positions))
            ]
            if result.symbol is not None:
                assert result.symbol in uniform
                assert result.symbol is uniform[0]
            else:
                assert uniform == []


class TestHelpers:
    def test_copy_is_independent(self, board):
        board.apply_move(Position(0, 0), X)
        clone = board.copy()
        clone.apply_move(Position(1, 1), O)
        assert board.get(Position(1, 1)) is E
        assert len(board.move_history) == 1

    def test_empty_positions_row_major(self, board):
        fill(board, ["X_O", "___", "OXX"])
        assert board.empty_positions() == [
            Position(0, 1), Position(1, 0), Position(1, 1), Position(1, 2)
        ]

    def test_state_hash(self, board):
        fill(board, ["X__", "_O_", "___"])
        assert board.state_hash() == "X___O____"

    def test_to_array(self, board):
        fill(board, ["X__", "_O_", "___"])
        expected = np.array([[1, 0, 0], [0, -1, 0], [0, 0, 0]], dtype=np.int8)
        np.testing.assert_array_equal(board.to_array(perspective=X), expected)
        assert board.to_array()[1, 1] == 2

    def test_render_shows_marks(self, board):
        fill(board, ["X__", "_O_", "___"])
        text = board.render()
        assert " 0  X |   |  " in text
        assert " 1    | O |  " in text
