# Board, controller and listeners
from .board import Board, is_winning_line
from .events import GameEventListener, LoggingEventListener
from .game import TicTacToeGame, outcome_message

__all__ = [
    'Board', 'is_winning_line', 'GameEventListener', 'LoggingEventListener',
    'TicTacToeGame', 'outcome_message',
]
