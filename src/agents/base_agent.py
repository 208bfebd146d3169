"""
Base agent interface for minefield players.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import numpy as np

Observation = Dict[str, np.ndarray]


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for minefield agents.

    All agents must implement the select_action method to choose
    which cell to open based on the current observation.
    """

    def __init__(self, board_height: int, board_width: int) -> None:
        """
        Initialize the agent.

        Args:
            board_height: Number of rows in the board.
            board_width: Number of columns in the board.
        """
        self.board_height = board_height
        self.board_width = board_width
        self.total_cells = board_height * board_width

    @abstractmethod
    def select_action(
        self,
        observation: Observation,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: Dict with "cells" and "mine_percentages" arrays.
            valid_actions: Optional mask of valid actions.

        Returns:
            Action index (y * width + x).
        """
        pass

    def action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (x, y) position."""
        return action % self.board_width, action // self.board_width

    def position_to_action(self, x: int, y: int) -> int:
        """Convert (x, y) position to flat action index."""
        return y * self.board_width + x

    def get_valid_actions_from_obs(self, observation: Observation) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Returns:
            Boolean mask where True = valid action.
        """
        # Hidden cells (value -1) are valid actions
        return observation["cells"].flatten() == -1

    def reset(self) -> None:
        """Reset agent state for new episode."""
        pass
