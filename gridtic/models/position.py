"""
Position model for the grid board.
"""
import numbers
from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """
    A (row, col) coordinate on the board, 0-indexed.

    Bounds are checked by the board, not here: an out-of-range position
    is a legal value that the board rejects.
    """
    row: int
    col: int

    def __post_init__(self):
        """Validate coordinate types, normalizing integral values to int."""
        for name in ('row', 'col'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"
