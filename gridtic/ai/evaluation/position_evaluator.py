"""
Position evaluation heuristics for the grid tic-tac-toe AI.

Scores a board for one player from open lines (lines the opponent has
not touched), center control and immediate threats.
"""
from typing import List, Sequence, Tuple
from dataclasses import dataclass
from ...models.enums import Symbol
from ...models.position import Position
from ...game.board import Board
from .win_detector import WinDetector


@dataclass
class EvaluationMetrics:
    """
    Detailed metrics for position evaluation.

    Attributes:
        center_control: Own marks near the center minus opponents'
        line_potential: Weighted open lines for the player minus opponents'
        threat_level: Immediate wins available minus those against
        total_score: Final weighted evaluation score
    """
    center_control: float
    line_potential: float
    threat_level: float
    total_score: float


class PositionEvaluator:
    """
    Evaluates board positions with simple line-based heuristics.

    Scores stay well below the search's mate score so a real win always
    outranks a good-looking position.
    """

    # Evaluation weights
    CENTER_CONTROL_WEIGHT = 0.2
    LINE_POTENTIAL_WEIGHT = 0.3
    THREAT_ASSESSMENT_WEIGHT = 0.5

    # Value of one immediate win, before weighting
    THREAT_VALUE = 100.0

    def __init__(self):
        self.win_detector = WinDetector()

    def evaluate_position(self, board: Board, symbol: Symbol) -> float:
        """
        Evaluate the board for one player.

        Args:
            board: Board to evaluate
            symbol: Player to evaluate for

        Returns:
            Score, positive when the position favours ``symbol``
        """
        return self.get_detailed_evaluation(board, symbol).total_score

    def get_detailed_evaluation(self, board: Board, symbol: Symbol) -> EvaluationMetrics:
        opponents = self._opponents_on_board(board, symbol)

        center_control = self._evaluate_center_control(board, symbol)
        line_potential = self._evaluate_line_potential(board, symbol)
        threat_level = self.THREAT_VALUE * len(self.win_detector.find_immediate_wins(board, symbol))

        for opponent in opponents:
            center_control -= self._evaluate_center_control(board, opponent)
            line_potential -= self._evaluate_line_potential(board, opponent)
            threat_level -= self.THREAT_VALUE * len(
                self.win_detector.find_immediate_wins(board, opponent)
            )

        total_score = (
            center_control * self.CENTER_CONTROL_WEIGHT +
            line_potential * self.LINE_POTENTIAL_WEIGHT +
            threat_level * self.THREAT_ASSESSMENT_WEIGHT
        )

        return EvaluationMetrics(
            center_control=center_control,
            line_potential=line_potential,
            threat_level=threat_level,
            total_score=total_score
        )

    def _opponents_on_board(self, board: Board, symbol: Symbol) -> List[Symbol]:
        seen = {cell for row in board.grid for cell in row}
        return [s for s in Symbol.playable() if s in seen and s is not symbol]

    def _evaluate_center_control(self, board: Board, symbol: Symbol) -> float:
        """Sum of closeness-to-center over the player's marks."""
        score = 0.0
        for row in range(board.rows):
            for col in range(board.columns):
                if board.grid[row][col] is symbol:
                    score += self.center_value(board, Position(row, col))
        return score

    def _evaluate_line_potential(self, board: Board, symbol: Symbol) -> float:
        """Open lines weighted by the square of the marks already on them."""
        score = 0.0
        for threat in self.win_detector.find_threats(board, symbol):
            score += threat.severity ** 2
        return score

    @staticmethod
    def center_value(board: Board, position: Position) -> float:
        """1.0 at the center, falling off with distance."""
        center_row = (board.rows - 1) / 2
        center_col = (board.columns - 1) / 2
        distance = abs(position.row - center_row) + abs(position.col - center_col)
        return 1.0 / (1.0 + distance)

    def get_best_moves(self, board: Board, symbol: Symbol,
                       count: int = 3) -> List[Tuple[Position, float]]:
        """
        Rank empty cells by the evaluation after playing there.

        Args:
            board: Current board
            symbol: Player to move
            count: Number of moves to return

        Returns:
            (position, score) pairs, best first; ties keep row-major order
        """
        scored = []
        for position in board.empty_positions():
            test_board = board.copy()
            test_board.apply_move(position, symbol)
            scored.append((position, self.evaluate_position(test_board, symbol)))

        scored.sort(key=lambda item: item[1], reverse=True)
        return scored[:count]

    def order_by_center(self, board: Board, positions: Sequence[Position]) -> List[Position]:
        """Sort positions closest to the center first."""
        return sorted(positions, key=lambda p: -self.center_value(board, p))
