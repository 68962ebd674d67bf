"""
Win and threat detection for grid tic-tac-toe.
"""
from typing import List, Optional
from ...models.enums import Symbol
from ...models.position import Position
from ...models.win_pattern import Threat, WinLine, WinResult
from ...game.board import Board


class WinDetector:
    """
    Detects completed lines and open threats on a board.

    Lines are taken from the board itself, so rectangular boards only
    produce row and column lines.
    """

    def check_win(self, board: Board) -> Optional[WinResult]:
        """
        Check if any line on the board is complete.

        Args:
            board: Board to check

        Returns:
            WinResult for the first complete line in scan order, or None
        """
        line = board.winning_line()
        if line is None:
            return None
        return WinResult(winner=board.get(line.positions[0]), line=line)

    def find_threats(self, board: Board, symbol: Symbol) -> List[Threat]:
        """
        Find lines holding only ``symbol`` and empty cells, with at least one mark.

        Args:
            board: Board to inspect
            symbol: Player to find threats for

        Returns:
            Threats sorted with the closest-to-complete first
        """
        threats = []
        for line in board.lines():
            cells = board.cells(line.positions)
            if any(cell is not Symbol.EMPTY and cell is not symbol for cell in cells):
                continue

            severity = sum(1 for cell in cells if cell is symbol)
            if severity == 0 or severity == len(cells):
                continue

            completing = [p for p, cell in zip(line.positions, cells) if cell is Symbol.EMPTY]
            threats.append(Threat(
                line=line,
                symbol=symbol,
                completing_moves=completing,
                severity=severity
            ))

        threats.sort(key=lambda t: len(t.completing_moves))
        return threats

    def find_immediate_wins(self, board: Board, symbol: Symbol) -> List[Position]:
        """
        Find empty cells that would complete a line for ``symbol``.

        Args:
            board: Board to inspect
            symbol: Player to move

        Returns:
            Winning positions in row-major order, without duplicates
        """
        if board.winning_line() is not None:
            return []

        wins = set()
        for threat in self.find_threats(board, symbol):
            if threat.is_immediate_win():
                wins.add(threat.completing_moves[0])

        # A one-cell line has no marks yet but is still won in one move
        for line in board.lines():
            if len(line.positions) == 1 and board.is_valid_move(line.positions[0]):
                wins.add(line.positions[0])

        return sorted(wins, key=lambda p: (p.row, p.col))
