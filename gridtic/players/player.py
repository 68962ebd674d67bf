"""
Players and their construction.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..models.enums import Symbol
from ..models.errors import ConfigurationError
from ..models.position import Position


# A move source takes a board snapshot and returns the chosen position.
MoveSource = Callable[..., Position]


@dataclass(frozen=True)
class Player:
    """
    A participant bound to a symbol and a move source.

    Attributes:
        name: Display name used in prompts and results
        symbol: Mark this player places
        move_source: Callable producing the player's next position
    """
    name: str
    symbol: Symbol
    move_source: MoveSource

    def __post_init__(self):
        if self.symbol is Symbol.EMPTY:
            raise ValueError("A player cannot be bound to the empty symbol")
        if not callable(self.move_source):
            raise ValueError(f"Move source for {self.name} is not callable")

    def make_move(self, board) -> Position:
        """Ask the move source for a position on the given board snapshot."""
        return self.move_source(board)


def create_players(
    move_sources: Sequence[MoveSource],
    names: Optional[Sequence[str]] = None
) -> List[Player]:
    """
    Create players, assigning playable symbols in order (X, O, Y, Z).

    Args:
        move_sources: One move source per player, in turn order
        names: Optional display names, defaulting to "Player <symbol>"

    Returns:
        List of players in turn order

    Raises:
        ConfigurationError: With fewer than two players, more players than
            playable symbols, or a name count that does not match
    """
    symbols = Symbol.playable()

    if len(move_sources) < 2:
        raise ConfigurationError(f"At least 2 players are required, got {len(move_sources)}")

    if len(move_sources) > len(symbols):
        raise ConfigurationError(
            f"{len(move_sources)} players configured but only {len(symbols)} symbols are available"
        )

    if names is not None and len(names) != len(move_sources):
        raise ConfigurationError(
            f"Got {len(names)} names for {len(move_sources)} players"
        )

    players = []
    for index, source in enumerate(move_sources):
        symbol = symbols[index]
        name = names[index] if names is not None else f"Player {symbol.value}"
        players.append(Player(name=name, symbol=symbol, move_source=source))
    return players
