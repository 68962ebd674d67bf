"""
Exceptions raised by the game.
"""


class GameError(Exception):
    """Base class for all game errors."""


class InvalidMoveError(GameError):
    """A move references an out-of-bounds or occupied cell, or the game is over."""

    def __init__(self, position, reason: str):
        super().__init__(f"Invalid move at {position}: {reason}")
        self.position = position
        self.reason = reason


class MalformedInputError(GameError):
    """Raw input could not be parsed into a position."""

    def __init__(self, raw: str, reason: str = "expected two integers"):
        super().__init__(f"Malformed input {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason


class MoveSourceError(GameError):
    """A move source broke its contract."""


class ConfigurationError(GameError):
    """Game or player configuration is not playable."""
