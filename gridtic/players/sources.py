"""
Move sources: callables that choose a position for a board snapshot.
"""
import logging
import random
from typing import Callable, Iterable, Optional

from ..game.board import Board
from ..models.errors import MalformedInputError, MoveSourceError
from ..models.position import Position


logger = logging.getLogger(__name__)


def parse_position(raw: str) -> Position:
    """
    Parse "row col" (spaces or a comma between them) into a Position.

    Raises:
        MalformedInputError: If the text is not exactly two integers
    """
    if raw is None:
        raise MalformedInputError(raw, "no input")

    parts = raw.replace(',', ' ').split()
    if len(parts) != 2:
        raise MalformedInputError(raw, f"expected 2 numbers, got {len(parts)}")

    try:
        row, col = int(parts[0]), int(parts[1])
    except ValueError:
        raise MalformedInputError(raw, "row and column must be integers")

    return Position(row, col)


class HumanMoveSource:
    """
    Prompts a person on the console until they enter a valid move.

    Malformed input and invalid moves are reported and re-prompted; the
    board is never touched here. EOFError and KeyboardInterrupt propagate.
    """

    INVALID_MOVE_MESSAGE = "Invalid move. Try again!"
    INVALID_INPUT_MESSAGE = "Invalid input. Please enter row and column as numbers."

    def __init__(self, name: str,
                 input_fn: Optional[Callable[[str], str]] = None,
                 output_fn: Optional[Callable[[str], None]] = None):
        self.name = name
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print

    def prompt(self, board: Board) -> str:
        return (f"{self.name}, enter your move "
                f"(row [0-{board.rows - 1}] and column [0-{board.columns - 1}]): ")

    def __call__(self, board: Board) -> Position:
        while True:
            raw = self.input_fn(self.prompt(board))
            try:
                position = parse_position(raw)
            except MalformedInputError as e:
                logger.debug("Rejected input from %s: %s", self.name, e)
                self.output_fn(self.INVALID_INPUT_MESSAGE)
                continue

            if board.is_valid_move(position):
                return position

            logger.debug("Rejected move %s from %s", position, self.name)
            self.output_fn(self.INVALID_MOVE_MESSAGE)


class ScriptedMoveSource:
    """Plays a fixed sequence of positions."""

    def __init__(self, positions: Iterable):
        self._positions = iter(positions)

    def __call__(self, board: Board) -> Position:
        try:
            position = next(self._positions)
        except StopIteration:
            raise MoveSourceError("Scripted move source ran out of moves")
        if not isinstance(position, Position):
            row, col = position
            position = Position(row, col)
        return position


class RandomMoveSource:
    """Picks uniformly among the empty cells."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def __call__(self, board: Board) -> Position:
        empty_positions = board.empty_positions()
        if not empty_positions:
            raise MoveSourceError("No empty cells left to choose from")
        return self.rng.choice(empty_positions)
