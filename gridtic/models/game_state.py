"""
Game state variant and its transition function.
"""
from dataclasses import dataclass
from typing import Optional, Sequence
from .enums import GameStatus, Symbol


@dataclass(frozen=True)
class GameState:
    """
    Whose turn it is, or how the game ended.

    Attributes:
        status: Which case of the variant this is
        symbol: Player for TURN and WON, None otherwise
    """
    status: GameStatus
    symbol: Optional[Symbol] = None

    def __post_init__(self):
        """Check that the symbol matches the status."""
        carries_symbol = self.status in (GameStatus.TURN, GameStatus.WON)
        if carries_symbol and (self.symbol is None or self.symbol is Symbol.EMPTY):
            raise ValueError(f"{self.status.value} state requires a player symbol")
        if not carries_symbol and self.symbol is not None:
            raise ValueError(f"{self.status.value} state does not carry a symbol")

    @classmethod
    def turn(cls, symbol: Symbol) -> "GameState":
        return cls(GameStatus.TURN, symbol)

    @classmethod
    def won(cls, symbol: Symbol) -> "GameState":
        return cls(GameStatus.WON, symbol)

    @classmethod
    def draw(cls) -> "GameState":
        return cls(GameStatus.DRAW)

    @classmethod
    def in_progress(cls) -> "GameState":
        return cls(GameStatus.IN_PROGRESS)

    @property
    def is_game_over(self) -> bool:
        """True for WON and DRAW."""
        return self.status in (GameStatus.WON, GameStatus.DRAW)

    def __str__(self) -> str:
        if self.status == GameStatus.TURN:
            return f"Turn({self.symbol.value})"
        if self.status == GameStatus.WON:
            return f"Won({self.symbol.value})"
        if self.status == GameStatus.DRAW:
            return "Draw"
        return "InProgress"


def advance(state: GameState, result: GameState, symbols: Sequence[Symbol]) -> GameState:
    """
    Compute the state that follows a move.

    Args:
        state: State before the move
        result: What Board.evaluate() returned after the move
        symbols: Player symbols in turn order

    Returns:
        The next state. Terminal states are returned unchanged.

    Raises:
        ValueError: If the current turn's symbol is not one of ``symbols``
    """
    if state.is_game_over:
        return state

    if result.is_game_over:
        return result

    if state.symbol not in symbols:
        raise ValueError(f"Symbol {state.symbol} is not registered: {list(symbols)}")

    index = list(symbols).index(state.symbol)
    return GameState.turn(symbols[(index + 1) % len(symbols)])
