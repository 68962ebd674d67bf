"""
Core enums for the grid tic-tac-toe game.
"""
from enum import Enum
from typing import List


class Symbol(Enum):
    """Mark held by a board cell."""
    EMPTY = '_'
    X = 'X'
    O = 'O'
    Y = 'Y'
    Z = 'Z'

    @classmethod
    def playable(cls) -> List["Symbol"]:
        """Player marks in assignment order."""
        return [symbol for symbol in cls if symbol is not cls.EMPTY]


class GameStatus(Enum):
    """Tag of a GameState."""
    TURN = 'turn'
    WON = 'won'
    DRAW = 'draw'
    IN_PROGRESS = 'in_progress'


class LineType(Enum):
    """Kinds of lines scanned for a win."""
    ROW = "row"
    COLUMN = "column"
    DIAGONAL = "diagonal"
    ANTI_DIAGONAL = "anti_diagonal"
