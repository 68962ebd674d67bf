"""
Minimax algorithm with alpha-beta pruning for the grid tic-tac-toe AI.

The searching player maximizes and every other player minimizes, which
reduces to plain minimax for two players and stays sound for more.
Iterative deepening keeps a usable move when the time limit runs out.
"""
import time
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from ...models.enums import GameStatus, Symbol
from ...models.move import Move
from ...models.position import Position
from ...game.board import Board
from ..evaluation.position_evaluator import PositionEvaluator
from ..evaluation.win_detector import WinDetector


@dataclass
class SearchResult:
    """
    Result of a minimax search.

    Attributes:
        best_move: The best move found by the search
        score: Evaluation score of the best move
        depth: Depth reached in the search
        nodes_evaluated: Number of nodes evaluated during search
        time_elapsed: Time taken for the search in seconds
    """
    best_move: Optional[Move]
    score: float
    depth: int
    nodes_evaluated: int
    time_elapsed: float


@dataclass
class TranspositionEntry:
    """
    Cached search result for one position.

    Attributes:
        score: Evaluation score for this position
        depth: Remaining depth the score was computed with
        flag: Type of bound (EXACT, LOWER_BOUND, UPPER_BOUND)
    """
    score: float
    depth: int
    flag: str


class SearchAlgorithm:
    """
    Minimax with alpha-beta pruning, a transposition table, iterative
    deepening and move ordering (wins, then blocks, then center first).
    """

    # Search constants
    MAX_DEPTH = 9
    TIME_LIMIT = 5.0

    # Evaluation bounds
    MATE_SCORE = 10000
    DRAW_SCORE = 0

    # Transposition table flags
    EXACT = 'EXACT'
    LOWER_BOUND = 'LOWER_BOUND'
    UPPER_BOUND = 'UPPER_BOUND'

    def __init__(self):
        self.position_evaluator = PositionEvaluator()
        self.win_detector = WinDetector()

        # Search statistics
        self.nodes_evaluated = 0
        self.transposition_hits = 0
        self.cutoffs = 0

        # Keyed by (board hash, index of player to move)
        self.transposition_table: Dict[Tuple[str, int], TranspositionEntry] = {}

        # Time management
        self.start_time = 0.0
        self.time_limit = self.TIME_LIMIT

        self.root_symbol: Optional[Symbol] = None
        self.turn_order: List[Symbol] = []

    def set_time_limit(self, time_limit: float):
        self.time_limit = time_limit

    def search(self, board: Board, turn_order: Sequence[Symbol], max_depth: int = None,
               time_limit: float = None) -> SearchResult:
        """
        Perform iterative deepening search to find the best move.

        Args:
            board: Current board state
            turn_order: Symbols in playing order, starting with the player to move
            max_depth: Maximum search depth (default: MAX_DEPTH)
            time_limit: Time limit in seconds (default: current time limit)

        Returns:
            SearchResult with the best move and search statistics. best_move
            is None if not even depth 1 finished in time.
        """
        if max_depth is None:
            max_depth = self.MAX_DEPTH
        if time_limit is not None:
            self.time_limit = time_limit

        self.start_time = time.time()
        self.nodes_evaluated = 0
        self.transposition_hits = 0
        self.cutoffs = 0

        # Scores depend on the root player and on the ply they were found at
        self.transposition_table.clear()
        self.root_symbol = turn_order[0]
        self.turn_order = list(turn_order)

        best_move = None
        best_score = float('-inf')
        completed_depth = 0

        max_depth = min(max_depth, len(board.empty_positions()))

        for depth in range(1, max_depth + 1):
            if self._is_time_up():
                break

            try:
                result = self._minimax_root(board, depth)
            except TimeoutError:
                break

            if result.best_move is not None:
                best_move = result.best_move
                best_score = result.score
                completed_depth = depth

            # A forced result will not change with more depth
            if abs(best_score) >= self.MATE_SCORE - 100:
                break

        return SearchResult(
            best_move=best_move,
            score=best_score if best_move is not None else self.DRAW_SCORE,
            depth=completed_depth,
            nodes_evaluated=self.nodes_evaluated,
            time_elapsed=time.time() - self.start_time
        )

    def _minimax_root(self, board: Board, depth: int) -> SearchResult:
        player = self.root_symbol
        best_move = None
        best_score = float('-inf')
        alpha = float('-inf')
        beta = float('+inf')

        for position in self._get_ordered_moves(board, 0):
            if self._is_time_up():
                raise TimeoutError("Search time limit exceeded")

            board_copy = board.copy()
            board_copy.apply_move(position, player)

            score = self._minimax(board_copy, 1 % len(self.turn_order), depth - 1,
                                  alpha, beta, 1)

            if score > best_score:
                best_score = score
                best_move = Move(position=position, symbol=player, evaluation_score=score)
                alpha = max(alpha, score)

        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth=depth,
            nodes_evaluated=self.nodes_evaluated,
            time_elapsed=time.time() - self.start_time
        )

    def _minimax(self, board: Board, turn_index: int, depth: int,
                 alpha: float, beta: float, ply: int) -> float:
        """
        Score a position for the root player.

        Args:
            board: Position after ``ply`` moves from the root
            turn_index: Index in the turn order of the player to move
            depth: Remaining search depth
            alpha: Best score the maximizer can already force
            beta: Best score the minimizers can already force
            ply: Moves played since the root

        Returns:
            Evaluation score; wins found sooner score higher
        """
        self.nodes_evaluated += 1

        if self._is_time_up():
            raise TimeoutError("Search time limit exceeded")

        result = board.evaluate()
        if result.status == GameStatus.WON:
            if result.symbol is self.root_symbol:
                return self.MATE_SCORE - ply
            return -self.MATE_SCORE + ply
        if result.status == GameStatus.DRAW:
            return self.DRAW_SCORE

        if depth == 0:
            return self.position_evaluator.evaluate_position(board, self.root_symbol)

        key = (board.state_hash(), turn_index)
        tt_entry = self.transposition_table.get(key)
        if tt_entry and tt_entry.depth >= depth:
            self.transposition_hits += 1
            if tt_entry.flag == self.EXACT:
                return tt_entry.score
            elif tt_entry.flag == self.LOWER_BOUND and tt_entry.score >= beta:
                return tt_entry.score
            elif tt_entry.flag == self.UPPER_BOUND and tt_entry.score <= alpha:
                return tt_entry.score

        symbol = self.turn_order[turn_index]
        maximizing = symbol is self.root_symbol
        next_index = (turn_index + 1) % len(self.turn_order)
        alpha_orig, beta_orig = alpha, beta

        best_score = float('-inf') if maximizing else float('inf')
        for position in self._get_ordered_moves(board, turn_index):
            child = board.copy()
            child.apply_move(position, symbol)
            score = self._minimax(child, next_index, depth - 1, alpha, beta, ply + 1)

            if maximizing:
                best_score = max(best_score, score)
                alpha = max(alpha, best_score)
            else:
                best_score = min(best_score, score)
                beta = min(beta, best_score)

            if alpha >= beta:
                self.cutoffs += 1
                break

        if best_score <= alpha_orig:
            flag = self.UPPER_BOUND
        elif best_score >= beta_orig:
            flag = self.LOWER_BOUND
        else:
            flag = self.EXACT
        self.transposition_table[key] = TranspositionEntry(best_score, depth, flag)

        return best_score

    def _get_ordered_moves(self, board: Board, turn_index: int) -> List[Position]:
        """Immediate wins first, then blocks of the next player's wins, then center-out."""
        symbol = self.turn_order[turn_index]
        next_symbol = self.turn_order[(turn_index + 1) % len(self.turn_order)]

        wins = self.win_detector.find_immediate_wins(board, symbol)
        blocks = [p for p in self.win_detector.find_immediate_wins(board, next_symbol)
                  if p not in wins]
        rest = [p for p in self.position_evaluator.order_by_center(board, board.empty_positions())
                if p not in wins and p not in blocks]
        return wins + blocks + rest

    def _is_time_up(self) -> bool:
        return time.time() - self.start_time >= self.time_limit
