"""
Game configuration.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .models.enums import Symbol
from .models.errors import ConfigurationError


PLAYER_KINDS = ('human', 'random', 'ai')


@dataclass
class GameConfig:
    """
    Settings for one game.

    Attributes:
        rows: Board rows
        columns: Board columns
        players: Kind of each player in turn order ('human', 'random', 'ai')
        time_limit: AI thinking time per move in seconds
        max_depth: AI search depth
        seed: Seed for random players and the AI's random fallback
        verbose: Log game events and AI decisions
    """
    rows: int = 3
    columns: int = 3
    players: List[str] = field(default_factory=lambda: ['human', 'human'])
    time_limit: float = 5.0
    max_depth: int = 9
    seed: Optional[int] = None
    verbose: bool = False

    def __post_init__(self):
        if self.rows < 1 or self.columns < 1:
            raise ConfigurationError(f"Board must be at least 1x1, got {self.rows}x{self.columns}")

        if len(self.players) < 2:
            raise ConfigurationError(f"At least 2 players are required, got {len(self.players)}")

        available = len(Symbol.playable())
        if len(self.players) > available:
            raise ConfigurationError(
                f"{len(self.players)} players configured but only {available} symbols are available"
            )

        for kind in self.players:
            if kind not in PLAYER_KINDS:
                raise ConfigurationError(f"Unknown player kind {kind!r}, expected one of {PLAYER_KINDS}")

        if self.time_limit <= 0:
            raise ConfigurationError("Time limit must be positive")

        if self.max_depth < 1:
            raise ConfigurationError("Max depth must be at least 1")
