from typing import Optional
import numpy as np
import gymnasium as gym

from ..game.game import TicTacToeGame
from ..models.enums import GameStatus, Symbol
from ..models.position import Position
from ..players.player import create_players
from ..players.sources import RandomMoveSource


REWARD_WIN = 1.0
REWARD_DRAW = 0.0
REWARD_LOSE = -1.0


def _unused_source(board):
    raise RuntimeError("The agent's moves come from step(), not from a move source")


class TicTacToeEnv(gym.Env):
    """
    Single-agent environment: the agent plays X, an opponent move source plays O.

    Observations are the grid from the agent's perspective (1 own, -1
    opponent, 0 empty). Actions index cells row-major.
    """

    metadata = {"render_modes": ["human", "ansi"]}

    def __init__(self, rows: int = 3, columns: int = 3, opponent=None,
                 seed: Optional[int] = None, render_mode: Optional[str] = None):
        super().__init__()
        self.rows = rows
        self.columns = columns
        self.seed = seed
        self.render_mode = render_mode
        self._opponent = opponent
        self._seeded = False

        self.action_space = gym.spaces.Discrete(rows * columns)
        self.observation_space = gym.spaces.Box(low=-1, high=1, shape=(rows, columns), dtype=np.int8)
        self.game: Optional[TicTacToeGame] = None

    def reset(self, seed=None, options=None):
        if seed is None and not self._seeded:
            seed = self.seed
        self._seeded = True
        super().reset(seed=seed, options=options)
        opponent = self._opponent
        if opponent is None:
            opponent = RandomMoveSource(seed=int(self.np_random.integers(0, 2**31 - 1)))

        players = create_players([_unused_source, opponent], names=["Agent", "Opponent"])
        self.game = TicTacToeGame(players, self.rows, self.columns)
        info = {"action_mask": self.action_mask()}
        return self._get_obs(), info

    def action_mask(self) -> np.ndarray:
        mask = np.zeros(self.rows * self.columns, dtype=np.int8)
        for position in self.game.board.empty_positions():
            mask[position.row * self.columns + position.col] = 1
        return mask

    def _get_obs(self) -> np.ndarray:
        return self.game.board.to_array(perspective=Symbol.X)

    def _is_valid_action(self, action) -> bool:
        return 0 <= action < self.rows * self.columns and self.action_mask()[action] == 1

    def step(self, action):
        if self.game is None:
            raise RuntimeError("Call reset() before step()")
        if self.game.is_game_over:
            raise RuntimeError("Episode is over; call reset()")

        action = int(action)
        if not self._is_valid_action(action):
            raise ValueError(f"Invalid action: {action}")

        state = self.game.make_move(Position(action // self.columns, action % self.columns))
        if not state.is_game_over:
            state = self.game.play_turn()

        info = {"action_mask": self.action_mask(), "state": str(state)}
        if state.status == GameStatus.WON:
            reward = REWARD_WIN if state.symbol is Symbol.X else REWARD_LOSE
            return self._get_obs(), reward, True, False, info
        if state.status == GameStatus.DRAW:
            return self._get_obs(), REWARD_DRAW, True, False, info
        return self._get_obs(), 0.0, False, False, info

    def render(self):
        text = self.game.board.render()
        if self.render_mode == "ansi":
            return text
        print(text)
