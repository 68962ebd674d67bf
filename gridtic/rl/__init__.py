from .environment import TicTacToeEnv

__all__ = ['TicTacToeEnv']
