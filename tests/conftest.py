import logging

import pytest

from gridtic.game.board import Board
from gridtic.models import Position, Symbol


def fill(board, layout):
    """Place marks from rows of 'X', 'O', 'Y', 'Z' or '_' characters."""
    for row, line in enumerate(layout):
        for col, char in enumerate(line):
            if char != '_':
                board.apply_move(Position(row, col), Symbol(char))
    return board


@pytest.fixture
def board():
    return Board(3, 3)


@pytest.fixture(autouse=True)
def restore_gridtic_logger():
    """The CLI reconfigures the package logger; undo it after each test."""
    logger = logging.getLogger('gridtic')
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
