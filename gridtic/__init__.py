"""
Grid tic-tac-toe
================
Two or more players on a rows x columns board, with console, random,
AI and reinforcement-learning players.
"""

__version__ = "1.0.0"
