"""
Grid board representation for tic-tac-toe.
"""
import logging
from typing import Iterator, List, Optional, Sequence

import numpy as np

from ..models.enums import LineType, Symbol
from ..models.errors import InvalidMoveError
from ..models.game_state import GameState
from ..models.move import Move
from ..models.position import Position
from ..models.win_pattern import WinLine
from .events import GameEventListener


logger = logging.getLogger(__name__)


def is_winning_line(cells: Sequence[Symbol]) -> bool:
    """
    Check whether a line of cells is a win.

    A line wins when it has at least one cell, the first cell is not
    empty and every other cell holds the same symbol.
    """
    if not cells:
        return False
    first = cells[0]
    if first is Symbol.EMPTY:
        return False
    return all(cell is first for cell in cells)


class Board:
    """
    A rows x columns grid of symbols.

    Dimensions are fixed at construction. A cell goes from EMPTY to a
    player symbol exactly once. Diagonals are only scanned on square
    boards.
    """

    def __init__(self, rows: int = 3, columns: int = 3):
        """
        Initialize an empty board.

        Args:
            rows: Number of rows (at least 1)
            columns: Number of columns (at least 1)
        """
        if rows < 1 or columns < 1:
            raise ValueError(f"Board must be at least 1x1, got {rows}x{columns}")

        self.rows = rows
        self.columns = columns
        self.grid: List[List[Symbol]] = [
            [Symbol.EMPTY for _ in range(columns)] for _ in range(rows)
        ]
        self.move_history: List[Move] = []
        self._listeners: List[GameEventListener] = []
        self._lines: Optional[List[WinLine]] = None

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.row < self.rows and 0 <= position.col < self.columns

    def get(self, position: Position) -> Symbol:
        """Get the symbol at a position."""
        if not self.in_bounds(position):
            raise IndexError(f"Position {position} is outside a {self.rows}x{self.columns} board")
        return self.grid[position.row][position.col]

    def is_valid_move(self, position: Position) -> bool:
        """True iff the position is on the board and its cell is empty."""
        return self.in_bounds(position) and self.grid[position.row][position.col] is Symbol.EMPTY

    def apply_move(self, position: Position, symbol: Symbol) -> Move:
        """
        Place a symbol on the board.

        Args:
            position: Target cell
            symbol: Mark to place

        Returns:
            The recorded Move

        Raises:
            InvalidMoveError: If the position is off the board or occupied
            ValueError: If the symbol is EMPTY
        """
        if symbol is Symbol.EMPTY:
            raise ValueError("Cannot place an empty symbol")

        if not self.in_bounds(position):
            raise InvalidMoveError(position, f"outside a {self.rows}x{self.columns} board")

        if not self.is_valid_move(position):
            raise InvalidMoveError(position, f"cell is occupied by {self.get(position).value}")

        self.grid[position.row][position.col] = symbol
        move = Move(position=position, symbol=symbol)
        self.move_history.append(move)
        self.notify_move_applied(position, symbol)
        return move

    def lines(self) -> List[WinLine]:
        """Every scannable line: rows, columns, then both diagonals."""
        if self._lines is None:
            self._lines = list(self._generate_lines())
        return self._lines

    def _generate_lines(self) -> Iterator[WinLine]:
        for row in range(self.rows):
            yield WinLine(LineType.ROW, [Position(row, col) for col in range(self.columns)])

        for col in range(self.columns):
            yield WinLine(LineType.COLUMN, [Position(row, col) for row in range(self.rows)])

        if self.is_square:
            size = self.rows
            yield WinLine(LineType.DIAGONAL, [Position(i, i) for i in range(size)])
            yield WinLine(LineType.ANTI_DIAGONAL, [Position(i, size - 1 - i) for i in range(size)])

    def cells(self, positions: Sequence[Position]) -> List[Symbol]:
        return [self.grid[p.row][p.col] for p in positions]

    def winning_line(self) -> Optional[WinLine]:
        """Get the first winning line in scan order, if there is one."""
        for line in self.lines():
            if is_winning_line(self.cells(line.positions)):
                return line
        return None

    def evaluate(self) -> GameState:
        """
        Determine the game result for the current grid.

        Returns:
            Won(symbol) for the first complete line found, scanning rows,
            columns, then diagonals; Draw if the board is full; InProgress
            otherwise.
        """
        line = self.winning_line()
        if line is not None:
            return GameState.won(self.get(line.positions[0]))

        if self.is_full():
            return GameState.draw()

        return GameState.in_progress()

    def empty_positions(self) -> List[Position]:
        """Get all empty cells in row-major order."""
        return [
            Position(row, col)
            for row in range(self.rows)
            for col in range(self.columns)
            if self.grid[row][col] is Symbol.EMPTY
        ]

    def is_full(self) -> bool:
        return all(cell is not Symbol.EMPTY for row in self.grid for cell in row)

    def add_listener(self, listener: GameEventListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: GameEventListener):
        self._listeners.remove(listener)

    def notify_move_applied(self, position: Position, symbol: Symbol):
        for listener in list(self._listeners):
            try:
                listener.on_move_applied(position, symbol)
            except Exception:
                logger.exception("Listener %r failed on move %s", listener, position)

    def notify_state_changed(self, state: GameState):
        for listener in list(self._listeners):
            try:
                listener.on_state_changed(state)
            except Exception:
                logger.exception("Listener %r failed on state %s", listener, state)

    def copy(self) -> 'Board':
        """Copy the grid and move history. Listeners are not copied."""
        new_board = Board(self.rows, self.columns)
        new_board.grid = [list(row) for row in self.grid]
        new_board.move_history = list(self.move_history)
        new_board._lines = self._lines
        return new_board

    def state_hash(self) -> str:
        """One character per cell, row-major, '_' for empty."""
        return ''.join(cell.value for row in self.grid for cell in row)

    def to_array(self, perspective: Optional[Symbol] = None) -> np.ndarray:
        """
        Encode the grid as an int8 array.

        Args:
            perspective: If given, its cells are 1, other players' cells -1.
                Otherwise cells hold the 1-based index of their symbol in
                Symbol.playable().

        Returns:
            Array of shape (rows, columns), 0 for empty cells
        """
        playable = Symbol.playable()
        array = np.zeros((self.rows, self.columns), dtype=np.int8)
        for row in range(self.rows):
            for col in range(self.columns):
                cell = self.grid[row][col]
                if cell is Symbol.EMPTY:
                    continue
                if perspective is None:
                    array[row, col] = playable.index(cell) + 1
                else:
                    array[row, col] = 1 if cell is perspective else -1
        return array

    def render(self) -> str:
        """Render the grid for the console."""
        header = "    " + "   ".join(str(col) for col in range(self.columns))
        separator = "   " + "+".join("---" for _ in range(self.columns))
        lines = [header]
        for row in range(self.rows):
            cells = " | ".join(
                ' ' if cell is Symbol.EMPTY else cell.value for cell in self.grid[row]
            )
            lines.append(f"{row:>2}  {cells}")
            if row < self.rows - 1:
                lines.append(separator)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()
