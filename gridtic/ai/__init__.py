# Computer players
from .engine import AIEngine, AIDecision, AIDecisionError, AIMoveSource, FallbackStrategy
from .evaluation.win_detector import WinDetector
from .evaluation.position_evaluator import PositionEvaluator
from .search.minimax import SearchAlgorithm, SearchResult

__all__ = [
    'AIEngine', 'AIDecision', 'AIDecisionError', 'AIMoveSource', 'FallbackStrategy',
    'WinDetector', 'PositionEvaluator', 'SearchAlgorithm', 'SearchResult',
]
