"""
Line and threat models used by win detection and the AI.
"""
from dataclasses import dataclass
from typing import List
from .enums import LineType, Symbol
from .position import Position


@dataclass
class WinLine:
    """
    A row, column or diagonal of the board.

    Attributes:
        type: Which kind of line this is
        positions: Cells of the line, in order
    """
    type: LineType
    positions: List[Position]

    def __post_init__(self):
        if not self.positions:
            raise ValueError("A line must contain at least one position")

    def __str__(self) -> str:
        cells = ", ".join(str(p) for p in self.positions)
        return f"{self.type.value} [{cells}]"


@dataclass
class Threat:
    """
    A line one player can still complete.

    Attributes:
        line: The line
        symbol: Player who owns the marks on it
        completing_moves: Empty cells still needed
        severity: Marks already placed on the line
    """
    line: WinLine
    symbol: Symbol
    completing_moves: List[Position]
    severity: int

    def __post_init__(self):
        if self.severity < 1:
            raise ValueError(f"Severity must be at least 1, got {self.severity}")

    def is_immediate_win(self) -> bool:
        """One move completes the line."""
        return len(self.completing_moves) == 1

    def __str__(self) -> str:
        return f"{self.symbol.value} threat on {self.line} (needs {len(self.completing_moves)})"


@dataclass
class WinResult:
    """
    A completed line.

    Attributes:
        winner: Player who completed it
        line: The winning line
    """
    winner: Symbol
    line: WinLine

    def __post_init__(self):
        if self.winner is Symbol.EMPTY:
            raise ValueError("Winner cannot be the empty symbol")

    def __str__(self) -> str:
        return f"{self.winner.value} wins with {self.line}"
