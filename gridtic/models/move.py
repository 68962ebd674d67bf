"""
Move model for the grid board.
"""
from dataclasses import dataclass
from typing import Optional
import time
from .enums import Symbol
from .position import Position


@dataclass
class Move:
    """
    A mark placed on the board.

    Attributes:
        position: Cell where the mark was placed
        symbol: Mark that was placed
        timestamp: Time when the move was made
        evaluation_score: AI's evaluation of this move (optional)
    """
    position: Position
    symbol: Symbol
    timestamp: float = None
    evaluation_score: Optional[float] = None

    def __post_init__(self):
        """Set timestamp if not provided and validate parameters."""
        if self.timestamp is None:
            self.timestamp = time.time()

        if not isinstance(self.position, Position):
            raise ValueError(f"Position must be a Position, got {type(self.position)}")

        if not isinstance(self.symbol, Symbol) or self.symbol is Symbol.EMPTY:
            raise ValueError(f"Symbol must be a playable Symbol, got {self.symbol!r}")

    def __str__(self) -> str:
        score_str = f" (score: {self.evaluation_score:.2f})" if self.evaluation_score is not None else ""
        return f"{self.symbol.value} -> {self.position}{score_str}"
