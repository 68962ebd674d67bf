"""
Console tic-tac-toe.

Usage:
    gridtic [--rows N] [--columns N] [--players KIND [KIND ...]] [options]

Player kinds:
    human  - prompts for "row col" on the console
    random - picks a random empty cell
    ai     - minimax search

Example:
    gridtic
    gridtic --players human ai --time-limit 2.0
    gridtic --rows 4 --columns 4 --players random random random
"""

import sys
import argparse
import logging
from typing import Callable, List, Optional

from .ai.engine import AIEngine, AIMoveSource
from .config import GameConfig, PLAYER_KINDS
from .game.events import GameEventListener, LoggingEventListener
from .game.board import Board
from .game.game import TicTacToeGame, outcome_message
from .models.enums import Symbol
from .models.errors import ConfigurationError
from .players.player import Player, create_players
from .players.sources import HumanMoveSource, RandomMoveSource


logger = logging.getLogger('gridtic')


class BoardPrinter(GameEventListener):
    """Prints the board after every state change."""

    def __init__(self, board: Board, output_fn: Optional[Callable[[str], None]] = None):
        self.board = board
        self.output_fn = output_fn or print

    def on_state_changed(self, state):
        self.output_fn("")
        self.output_fn(self.board.render())


def setup_logging(verbose: bool):
    """Configure the gridtic logger for console output."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.INFO if verbose else logging.WARNING)
    logger.propagate = False


def build_players(config: GameConfig,
                  input_fn: Optional[Callable[[str], str]] = None,
                  output_fn: Optional[Callable[[str], None]] = None) -> List[Player]:
    """
    Create one player per configured kind.

    Raises:
        ConfigurationError: If the player setup is not playable
    """
    symbols = Symbol.playable()[:len(config.players)]
    sources = []
    for index, kind in enumerate(config.players):
        name = f"Player {symbols[index].value}"
        seed = None if config.seed is None else config.seed + index
        if kind == 'human':
            sources.append(HumanMoveSource(name, input_fn=input_fn, output_fn=output_fn))
        elif kind == 'random':
            sources.append(RandomMoveSource(seed=seed))
        else:
            engine = AIEngine(
                time_limit=config.time_limit,
                max_depth=config.max_depth,
                enable_logging=config.verbose,
                seed=seed
            )
            sources.append(AIMoveSource(symbols[index], symbols, engine=engine))
    return create_players(sources)


def run_game(config: GameConfig,
             input_fn: Optional[Callable[[str], str]] = None,
             output_fn: Optional[Callable[[str], None]] = None) -> TicTacToeGame:
    """Play one game to the end and print the outcome."""
    output_fn = output_fn or print
    players = build_players(config, input_fn=input_fn, output_fn=output_fn)
    game = TicTacToeGame(players, rows=config.rows, columns=config.columns)

    game.board.add_listener(BoardPrinter(game.board, output_fn=output_fn))
    if config.verbose:
        game.board.add_listener(LoggingEventListener())

    output_fn(game.board.render())
    final_state = game.play()
    output_fn("")
    output_fn(outcome_message(final_state))
    return game


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play tic-tac-toe on the console",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two people on a 3x3 board
  gridtic

  # Play against the AI, which moves second
  gridtic --players human ai

  # Three random players on a 4x4 board
  gridtic --rows 4 --columns 4 --players random random random --seed 7
        """
    )

    parser.add_argument('--rows', type=int, default=3, help='Board rows (default: 3)')
    parser.add_argument('--columns', type=int, default=3, help='Board columns (default: 3)')

    parser.add_argument(
        '--players',
        nargs='+',
        choices=PLAYER_KINDS,
        default=['human', 'human'],
        help='Player kinds in turn order (default: human human)'
    )

    parser.add_argument(
        '--time-limit',
        type=float,
        default=AIEngine.DEFAULT_TIME_LIMIT,
        help='Time limit for AI thinking in seconds (default: 5.0)'
    )

    parser.add_argument(
        '--max-depth',
        type=int,
        default=AIEngine.MAX_SEARCH_DEPTH,
        help='Maximum AI search depth (default: 9)'
    )

    parser.add_argument('--seed', type=int, default=None, help='Seed for random players')

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the console game."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = GameConfig(
            rows=args.rows,
            columns=args.columns,
            players=args.players,
            time_limit=args.time_limit,
            max_depth=args.max_depth,
            seed=args.seed,
            verbose=args.verbose
        )
        run_game(config)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nGame aborted.", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
