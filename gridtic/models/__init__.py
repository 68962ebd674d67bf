# Data models and enums
from .enums import Symbol, GameStatus, LineType
from .position import Position
from .move import Move
from .game_state import GameState, advance
from .win_pattern import WinLine, Threat, WinResult
from .errors import (
    GameError,
    InvalidMoveError,
    MalformedInputError,
    MoveSourceError,
    ConfigurationError,
)

__all__ = [
    'Symbol', 'GameStatus', 'LineType', 'Position', 'Move', 'GameState', 'advance',
    'WinLine', 'Threat', 'WinResult',
    'GameError', 'InvalidMoveError', 'MalformedInputError', 'MoveSourceError',
    'ConfigurationError',
]
