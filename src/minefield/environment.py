"""
Gymnasium environment wrapper for the minefield board.

Provides a standard RL interface for agents that play by opening cells.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig
from .render import render_board


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for the minefield board.

    Observation:
        Dict with
        - "cells": 2D array, -1 hidden, -2 flagged, 0-8 opened count,
          9 visible mine
        - "mine_percentages": 2D array of 0-100 mine likelihoods

    Actions:
        Discrete action space of size width * height.
        Action i opens the cell at (x, y) = (i % width, i // width).

    Rewards:
        - +1 for opening a safe cell
        - +10 for winning the game
        - -10 for opening a mine
        - -0.1 for invalid action (already opened/flagged, game over)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: beginner, 8x8 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self.render_mode = render_mode

        shape = (self.config.height, self.config.width)
        self.observation_space = spaces.Dict({
            "cells": spaces.Box(low=-2, high=9, shape=shape, dtype=np.int8),
            "mine_percentages": spaces.Box(
                low=0, high=100, shape=shape, dtype=np.int8
            ),
        })

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.board.reset(rng=self.np_random)
        self._steps = 0
        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[Dict[str, np.ndarray], SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Open one cell.

        Args:
            action: Cell index to open (y * width + x).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(x, y)
        terminated = not self.board.is_playing

        return self._get_observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        action = int(action)
        return action % self.config.width, action // self.config.width

    def _calculate_reward(self, x: int, y: int) -> float:
        """Open (x, y) and score the result."""
        if not self.board.open(x, y):
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_observation(self) -> Dict[str, np.ndarray]:
        return {
            "cells": self.board.get_observation(),
            "mine_percentages": self.board.get_mine_percentages(),
        }

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        revealed = sum(1 for cell in self.board.grid if cell.is_opened)
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self.config.total_cells - self.config.num_mines,
            "game_state": self.board.game_state.name,
            "remaining_mines": self.board.remaining_mine_count,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.board)
        if self.render_mode == "human":
            print(render_board(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for x, y in self.board.get_valid_actions():
            mask[y * self.config.width + x] = True
        return mask
