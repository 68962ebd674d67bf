"""
AI Engine controller for grid tic-tac-toe.

This module implements the main AI controller that runs the minimax search
under a time limit, falls back to cheaper strategies when the search fails,
and keeps performance metrics and logs.
"""
import random
import time
import logging
from typing import Any, Dict, List, Optional, Sequence
from dataclasses import dataclass
from enum import Enum

from ..models.enums import Symbol
from ..models.errors import GameError
from ..models.move import Move
from ..models.position import Position
from ..game.board import Board
from .search.minimax import SearchAlgorithm, SearchResult
from .evaluation.position_evaluator import PositionEvaluator
from .evaluation.win_detector import WinDetector


class AIDecisionError(GameError):
    """Exception raised when AI fails to make a decision."""

    def __init__(self, message: str, board: Board, search_depth: int):
        super().__init__(message)
        self.board = board
        self.search_depth = search_depth


class FallbackStrategy(Enum):
    """Available fallback strategies when AI encounters errors."""
    REDUCE_DEPTH = "reduce_depth"
    SIMPLE_EVALUATION = "simple_evaluation"
    RANDOM_MOVE = "random_move"


@dataclass
class AIPerformanceMetrics:
    """
    Performance metrics for AI decision making.

    Attributes:
        move_time: Time taken to select the move (seconds)
        search_depth: Depth reached in the search
        nodes_evaluated: Number of nodes evaluated
        transposition_hits: Number of transposition table hits
        cutoffs: Number of alpha-beta cutoffs
        fallback_used: Whether fallback strategy was used
        fallback_strategy: Which fallback strategy was used (if any)
        evaluation_score: Final evaluation score of the selected move
    """
    move_time: float
    search_depth: int
    nodes_evaluated: int
    transposition_hits: int
    cutoffs: int
    fallback_used: bool
    fallback_strategy: Optional[FallbackStrategy]
    evaluation_score: float


@dataclass
class AIDecision:
    """
    Complete AI decision with move and performance data.

    Attributes:
        move: The selected move
        metrics: Performance metrics for this decision
        confidence: Confidence level in the decision (0.0 to 1.0)
        reasoning: Human-readable explanation of the decision
    """
    move: Move
    metrics: AIPerformanceMetrics
    confidence: float
    reasoning: str


class AIEngine:
    """
    Main AI controller that orchestrates the decision-making process.

    Features:
    - Minimax search with alpha-beta pruning
    - Time limit per move
    - Fallback strategies: reduced depth, one-ply evaluation, random move
    - Performance monitoring and logging
    """

    # Time limits
    DEFAULT_TIME_LIMIT = 5.0
    FALLBACK_TIME_LIMIT = 1.0

    # Search depth limits
    MAX_SEARCH_DEPTH = 9
    MIN_SEARCH_DEPTH = 1
    FALLBACK_SEARCH_DEPTH = 3

    def __init__(self, time_limit: float = DEFAULT_TIME_LIMIT,
                 max_depth: int = MAX_SEARCH_DEPTH,
                 enable_logging: bool = True,
                 seed: Optional[int] = None):
        """
        Initialize the AI engine.

        Args:
            time_limit: Maximum time per move in seconds
            max_depth: Maximum search depth
            enable_logging: Whether to log decisions
            seed: Seed for the random fallback
        """
        if time_limit <= 0:
            raise ValueError("Time limit must be positive")
        if max_depth < 1:
            raise ValueError("Max depth must be at least 1")

        self.time_limit = time_limit
        self.max_depth = max_depth
        self.enable_logging = enable_logging
        self.rng = random.Random(seed)

        self.search_algorithm = SearchAlgorithm()
        self.position_evaluator = PositionEvaluator()
        self.win_detector = WinDetector()

        # Performance tracking
        self.decision_history: List[AIDecision] = []
        self.total_decisions = 0
        self.total_time = 0.0
        self.fallback_count = 0

        self.logger = logging.getLogger('gridtic.ai')
        if self.enable_logging:
            self._setup_logging()

    def _setup_logging(self):
        """Attach a console handler to the AI logger if it has none."""
        self.logger.setLevel(logging.INFO)

        if not self.logger.hasHandlers():
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def select_move(self, board: Board, turn_order: Sequence[Symbol]) -> AIDecision:
        """
        Select the best move for the first player in ``turn_order``.

        Args:
            board: Current board state
            turn_order: Symbols in playing order, starting with the player to move

        Returns:
            AIDecision with the selected move and performance metrics

        Raises:
            AIDecisionError: If the game is over or all fallback strategies fail
        """
        start_time = time.time()

        if board is None:
            raise AIDecisionError("Board cannot be None", board, 0)

        if len(turn_order) < 2 or any(s is Symbol.EMPTY for s in turn_order):
            raise AIDecisionError(f"Invalid turn order: {list(turn_order)}", board, 0)

        player = turn_order[0]

        win_result = self.win_detector.check_win(board)
        if win_result:
            raise AIDecisionError(f"Game is already over, winner: {win_result.winner.value}", board, 0)

        if not board.empty_positions():
            raise AIDecisionError("No legal moves available", board, 0)

        try:
            decision = self._select_move_primary(board, turn_order, start_time)
        except Exception as e:
            if self.enable_logging:
                self.logger.warning(f"Primary strategy failed: {str(e)}")
        else:
            self._record(decision)
            self._log_decision(decision, "PRIMARY")
            return decision

        for strategy in [FallbackStrategy.REDUCE_DEPTH,
                         FallbackStrategy.SIMPLE_EVALUATION,
                         FallbackStrategy.RANDOM_MOVE]:
            try:
                decision = self._select_move_fallback(board, turn_order, strategy, start_time)
            except Exception as fallback_error:
                if self.enable_logging:
                    self.logger.warning(f"Fallback {strategy.value} failed: {str(fallback_error)}")
                continue

            self.fallback_count += 1
            self._record(decision)
            self._log_decision(decision, f"FALLBACK_{strategy.value.upper()}")
            return decision

        raise AIDecisionError(f"All strategies failed for {player.value}", board, self.max_depth)

    def _select_move_primary(self, board: Board, turn_order: Sequence[Symbol],
                             start_time: float) -> AIDecision:
        """Full-depth minimax search."""
        search_result = self.search_algorithm.search(
            board,
            turn_order,
            max_depth=self.max_depth,
            time_limit=self.time_limit
        )

        if search_result.best_move is None:
            raise AIDecisionError("Search returned no move", board, search_result.depth)

        return self._decision_from_search(board, search_result, start_time,
                                          fallback=None)

    def _select_move_fallback(self, board: Board, turn_order: Sequence[Symbol],
                              strategy: FallbackStrategy, start_time: float) -> AIDecision:
        if strategy == FallbackStrategy.REDUCE_DEPTH:
            return self._fallback_reduce_depth(board, turn_order, start_time)

        elif strategy == FallbackStrategy.SIMPLE_EVALUATION:
            return self._fallback_simple_evaluation(board, turn_order[0], turn_order[1], start_time)

        elif strategy == FallbackStrategy.RANDOM_MOVE:
            return self._fallback_random_move(board, turn_order[0], start_time)

        else:
            raise AIDecisionError(f"Unknown fallback strategy: {strategy}", board, 0)

    def _fallback_reduce_depth(self, board: Board, turn_order: Sequence[Symbol],
                               start_time: float) -> AIDecision:
        """Fallback strategy: shallow search with a short time limit."""
        reduced_depth = max(self.MIN_SEARCH_DEPTH, min(self.max_depth, self.FALLBACK_SEARCH_DEPTH))

        search_result = self.search_algorithm.search(
            board,
            turn_order,
            max_depth=reduced_depth,
            time_limit=self.FALLBACK_TIME_LIMIT
        )
        # The primary time limit is restored for the next decision
        self.search_algorithm.set_time_limit(self.time_limit)

        if search_result.best_move is None:
            raise AIDecisionError("Reduced depth search failed", board, reduced_depth)

        return self._decision_from_search(board, search_result, start_time,
                                          fallback=FallbackStrategy.REDUCE_DEPTH)

    def _fallback_simple_evaluation(self, board: Board, player: Symbol, next_player: Symbol,
                                    start_time: float) -> AIDecision:
        """Fallback strategy: win, else block, else best one-ply evaluation."""
        empty_positions = board.empty_positions()

        immediate_wins = self.win_detector.find_immediate_wins(board, player)
        blocking_moves = self.win_detector.find_immediate_wins(board, next_player)
        if immediate_wins:
            best_position = immediate_wins[0]
            evaluation_score = 1000.0
            reasoning = "Immediate winning move found"
        elif blocking_moves:
            best_position = blocking_moves[0]
            evaluation_score = 500.0
            reasoning = "Blocking opponent's winning move"
        else:
            best_moves = self.position_evaluator.get_best_moves(board, player, count=1)
            if not best_moves:
                raise AIDecisionError("Position evaluator found no moves", board, 0)
            best_position, evaluation_score = best_moves[0]
            reasoning = "Best move by position evaluation"

        metrics = AIPerformanceMetrics(
            move_time=time.time() - start_time,
            search_depth=1,
            nodes_evaluated=len(empty_positions),
            transposition_hits=0,
            cutoffs=0,
            fallback_used=True,
            fallback_strategy=FallbackStrategy.SIMPLE_EVALUATION,
            evaluation_score=evaluation_score
        )

        return AIDecision(
            move=Move(position=best_position, symbol=player, evaluation_score=evaluation_score),
            metrics=metrics,
            confidence=0.5 if evaluation_score > 100 else 0.3,
            reasoning=reasoning
        )

    def _fallback_random_move(self, board: Board, player: Symbol, start_time: float) -> AIDecision:
        """Fallback strategy: random legal move, center first if free."""
        empty_positions = board.empty_positions()

        if not empty_positions:
            raise AIDecisionError("No empty positions for random move", board, 0)

        center = Position(board.rows // 2, board.columns // 2)
        if center in empty_positions:
            selected_position = center
            reasoning = "Center position selected"
        else:
            selected_position = self.rng.choice(empty_positions)
            reasoning = "Random position selected as last resort"

        metrics = AIPerformanceMetrics(
            move_time=time.time() - start_time,
            search_depth=0,
            nodes_evaluated=1,
            transposition_hits=0,
            cutoffs=0,
            fallback_used=True,
            fallback_strategy=FallbackStrategy.RANDOM_MOVE,
            evaluation_score=0.0
        )

        return AIDecision(
            move=Move(position=selected_position, symbol=player, evaluation_score=0.0),
            metrics=metrics,
            confidence=0.1,
            reasoning=reasoning
        )

    def _decision_from_search(self, board: Board, search_result: SearchResult, start_time: float,
                              fallback: Optional[FallbackStrategy]) -> AIDecision:
        metrics = AIPerformanceMetrics(
            move_time=time.time() - start_time,
            search_depth=search_result.depth,
            nodes_evaluated=search_result.nodes_evaluated,
            transposition_hits=self.search_algorithm.transposition_hits,
            cutoffs=self.search_algorithm.cutoffs,
            fallback_used=fallback is not None,
            fallback_strategy=fallback,
            evaluation_score=search_result.score
        )

        confidence = self._calculate_confidence(search_result, board)
        if fallback is not None:
            confidence = max(0.3, confidence * 0.7)

        return AIDecision(
            move=search_result.best_move,
            metrics=metrics,
            confidence=confidence,
            reasoning=self._generate_reasoning(search_result)
        )

    def _calculate_confidence(self, search_result: SearchResult, board: Board) -> float:
        """
        Share of the remaining game the search looked through.

        A proven win or loss, or a search that reached every remaining
        empty cell, is fully confident.
        """
        if abs(search_result.score) >= SearchAlgorithm.MATE_SCORE - 100:
            return 1.0
        remaining = len(board.empty_positions())
        return min(1.0, search_result.depth / remaining)

    def _generate_reasoning(self, search_result: SearchResult) -> str:
        if search_result.score >= SearchAlgorithm.MATE_SCORE - 100:
            outcome = "forced win"
        elif search_result.score <= -SearchAlgorithm.MATE_SCORE + 100:
            outcome = "loss cannot be avoided"
        else:
            outcome = "no forced result"
        return f"Search to depth {search_result.depth}: {outcome}"

    def _record(self, decision: AIDecision):
        self.total_decisions += 1
        self.total_time += decision.metrics.move_time
        self.decision_history.append(decision)

    def _log_decision(self, decision: AIDecision, strategy_type: str):
        """Log AI decision for performance monitoring."""
        if not self.enable_logging:
            return

        self.logger.info(
            f"{strategy_type} - Move: {decision.move.position}, "
            f"Time: {decision.metrics.move_time:.3f}s, "
            f"Depth: {decision.metrics.search_depth}, "
            f"Nodes: {decision.metrics.nodes_evaluated}, "
            f"Score: {decision.metrics.evaluation_score:.2f}, "
            f"Confidence: {decision.confidence:.2f}"
        )

        if decision.metrics.fallback_used:
            self.logger.warning(f"Fallback strategy used: {decision.metrics.fallback_strategy.value}")

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of AI performance statistics.

        Returns:
            Dictionary with performance metrics
        """
        if self.total_decisions == 0:
            return {
                'total_decisions': 0,
                'average_time': 0.0,
                'fallback_rate': 0.0,
                'average_confidence': 0.0,
                'average_depth': 0.0,
                'total_nodes': 0,
                'fallback_count': 0
            }

        confidences = [d.confidence for d in self.decision_history]
        depths = [d.metrics.search_depth for d in self.decision_history]

        return {
            'total_decisions': self.total_decisions,
            'average_time': self.total_time / self.total_decisions,
            'fallback_rate': self.fallback_count / self.total_decisions,
            'average_confidence': sum(confidences) / len(confidences),
            'average_depth': sum(depths) / len(depths),
            'total_nodes': sum(d.metrics.nodes_evaluated for d in self.decision_history),
            'fallback_count': self.fallback_count
        }

    def reset_performance_tracking(self):
        """Reset all performance tracking data."""
        self.decision_history.clear()
        self.total_decisions = 0
        self.total_time = 0.0
        self.fallback_count = 0


class AIMoveSource:
    """
    Move source backed by an AIEngine.

    Args:
        symbol: Symbol the AI plays
        turn_order: Every player's symbol in playing order
        engine: Engine to use; a default one is created if omitted
    """

    def __init__(self, symbol: Symbol, turn_order: Sequence[Symbol],
                 engine: Optional[AIEngine] = None):
        if symbol not in turn_order:
            raise ValueError(f"{symbol} is not in the turn order {list(turn_order)}")

        index = list(turn_order).index(symbol)
        self.symbol = symbol
        self.turn_order = list(turn_order[index:]) + list(turn_order[:index])
        self.engine = engine or AIEngine(enable_logging=False)
        self.last_decision: Optional[AIDecision] = None

    def __call__(self, board: Board) -> Position:
        self.last_decision = self.engine.select_move(board, self.turn_order)
        return self.last_decision.move.position
