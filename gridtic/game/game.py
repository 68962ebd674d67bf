"""
Game controller: drives turns until the game ends.
"""
import logging
from typing import Iterable, List, Optional, Sequence

from ..models.enums import GameStatus, Symbol
from ..models.errors import ConfigurationError, InvalidMoveError, MoveSourceError
from ..models.game_state import GameState, advance
from ..models.position import Position
from ..players.player import Player
from .board import Board
from .events import GameEventListener


logger = logging.getLogger(__name__)


def outcome_message(state: GameState) -> str:
    """Console line announcing a terminal state."""
    if state.status == GameStatus.WON:
        return f"Player {state.symbol.value} wins!"
    if state.status == GameStatus.DRAW:
        return "It's a draw."
    raise ValueError(f"Game is not over: {state}")


class TicTacToeGame:
    """
    Runs a game between two or more players on a single board.

    Turn protocol:
    1. Take the current player from the Turn state
    2. Ask its move source for a position on a board snapshot
    3. Apply the move to the board
    4. Evaluate the board and advance the state
    5. Stop on Won/Draw, otherwise continue with the next player
    """

    # Consecutive rejected positions tolerated from one move source
    MAX_INVALID_ATTEMPTS = 10

    def __init__(self, players: Sequence[Player], rows: int = 3, columns: int = 3,
                 listeners: Iterable[GameEventListener] = (),
                 max_invalid_attempts: int = MAX_INVALID_ATTEMPTS):
        """
        Initialize the game.

        Args:
            players: Players in turn order; the first one moves first
            rows: Board rows
            columns: Board columns
            listeners: Listeners registered on the board
            max_invalid_attempts: Rejections before a move source is
                considered broken
        """
        if len(players) < 2:
            raise ConfigurationError(f"At least 2 players are required, got {len(players)}")

        symbols = [player.symbol for player in players]
        if len(set(symbols)) != len(symbols):
            raise ConfigurationError(f"Players must have distinct symbols: {symbols}")

        if max_invalid_attempts < 1:
            raise ValueError("max_invalid_attempts must be at least 1")

        self.players: List[Player] = list(players)
        self.symbols: List[Symbol] = symbols
        self.board = Board(rows, columns)
        self.max_invalid_attempts = max_invalid_attempts
        self.state = GameState.turn(self.symbols[0])

        for listener in listeners:
            self.board.add_listener(listener)

    @property
    def is_game_over(self) -> bool:
        return self.state.is_game_over

    @property
    def current_player(self) -> Optional[Player]:
        """Player whose turn it is, or None once the game is over."""
        if self.state.status != GameStatus.TURN:
            return None
        return self.players[self.symbols.index(self.state.symbol)]

    @property
    def winner(self) -> Optional[Player]:
        if self.state.status != GameStatus.WON:
            return None
        return self.players[self.symbols.index(self.state.symbol)]

    def make_move(self, position: Position) -> GameState:
        """
        Apply a position for the current player and advance the state.

        Raises:
            InvalidMoveError: If the game is over or the move is invalid.
                Board and state are left unchanged.
            TypeError: If position is not a Position.
        """
        if not isinstance(position, Position):
            raise TypeError(f"Expected a Position, got {position!r}")
        if self.is_game_over:
            raise InvalidMoveError(position, f"game is already over ({self.state})")

        player = self.current_player
        self.board.apply_move(position, player.symbol)

        result = self.board.evaluate()
        self.state = advance(self.state, result, self.symbols)
        self.board.notify_state_changed(self.state)
        return self.state

    def play_turn(self) -> GameState:
        """
        Play one turn for the current player.

        Returns:
            The state after the turn

        Raises:
            InvalidMoveError: If the game is already over
            MoveSourceError: If the move source keeps returning invalid
                positions
        """
        if self.is_game_over:
            raise InvalidMoveError(None, f"game is already over ({self.state})")

        player = self.current_player
        for attempt in range(1, self.max_invalid_attempts + 1):
            position = player.make_move(self.board.copy())
            try:
                return self.make_move(position)
            except InvalidMoveError as e:
                logger.warning("%s returned an invalid move (attempt %d/%d): %s",
                               player.name, attempt, self.max_invalid_attempts, e)

        raise MoveSourceError(
            f"{player.name} produced {self.max_invalid_attempts} invalid moves in a row"
        )

    def play(self) -> GameState:
        """Play turns until the game is won or drawn and return the final state."""
        logger.info("Starting %dx%d game with %s", self.board.rows, self.board.columns,
                    ", ".join(player.name for player in self.players))
        while not self.is_game_over:
            self.play_turn()
        logger.info("Game over: %s after %d moves", self.state, len(self.board.move_history))
        return self.state
