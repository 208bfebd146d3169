"""
Hint-driven agent for the minefield board.

Plays by following the board's own mine percentages: deduced safe
cells carry 0 and are opened first, otherwise the least likely mine.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent, Observation


class HintAgent(BaseAgent):
    """
    Agent that opens the valid cell with the lowest mine percentage.

    Ties go to the lowest action index, so play is deterministic for a
    given board.

    certain_moves counts picks whose rounded percentage is 0. A global
    density below half a percent also rounds to 0, so late in a large
    game some of those picks are guesses.
    """

    def __init__(self, board_height: int = 8, board_width: int = 8) -> None:
        super().__init__(board_height, board_width)
        self.certain_moves = 0
        self.guesses_made = 0

    def select_action(
        self,
        observation: Observation,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.where(valid_actions)[0]
        if len(valid_indices) == 0:
            return 0

        percentages = observation["mine_percentages"].flatten()
        best = valid_indices[np.argmin(percentages[valid_indices])]

        if percentages[best] == 0:
            self.certain_moves += 1
        else:
            self.guesses_made += 1
        return int(best)
