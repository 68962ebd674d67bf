"""
Listeners notified of board and state changes.
"""
import logging
from typing import Optional

from ..models.enums import Symbol
from ..models.game_state import GameState
from ..models.position import Position


logger = logging.getLogger(__name__)


class GameEventListener:
    """
    Receives game events. Subclasses override the events they care about.

    Listeners are called synchronously after each mutation. An exception
    raised by a listener is logged and does not stop the game.
    """

    def on_move_applied(self, position: Position, symbol: Symbol):
        pass

    def on_state_changed(self, state: GameState):
        pass


class LoggingEventListener(GameEventListener):
    """Writes every event to the gridtic logger."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.log = log or logger
        self.level = level

    def on_move_applied(self, position: Position, symbol: Symbol):
        self.log.log(self.level, "Move made at position %s by %s", position, symbol.value)

    def on_state_changed(self, state: GameState):
        self.log.log(self.level, "Game state changed to: %s", state)
