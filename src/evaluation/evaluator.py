"""
Evaluation module for minefield agents.

Plays agents through the Gymnasium environment and reports win rates.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Optional

from minefield import BoardConfig, MinesweeperEnv

from agents.base_agent import BaseAgent

logger = logging.getLogger(__name__)


# ============================================================================
# Episode Statistics
# ============================================================================

@dataclass
class EpisodeStats:
    """Statistics for a single episode."""

    total_reward: float = 0.0
    steps: int = 0
    won: bool = False
    revealed_cells: int = 0


# ============================================================================
# Agent Evaluator
# ============================================================================

class Evaluator:
    """
    Evaluate and compare multiple agents.

    With a seed, every evaluate() call plays the same sequence of
    boards, so agents are compared on identical layouts.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode (default: cell count).
            seed: Seed for the first episode's mine layout.
        """
        if num_episodes < 1:
            raise ValueError("Number of episodes must be positive")
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps or self.board_config.total_cells
        self.seed = seed

    def run_episode(
        self, env: MinesweeperEnv, agent: BaseAgent, seed: Optional[int] = None
    ) -> EpisodeStats:
        """Play one game to completion or the step limit."""
        stats = EpisodeStats()

        observation, _ = env.reset(seed=seed)
        agent.reset()

        for _ in range(self.max_steps):
            valid_actions = env.get_action_mask()
            action = agent.select_action(observation, valid_actions)

            observation, reward, terminated, truncated, info = env.step(action)

            stats.total_reward += float(reward)
            stats.steps += 1
            stats.revealed_cells = info.get("revealed", 0)

            if terminated or truncated:
                stats.won = info.get("game_state") == "WON"
                break

        return stats

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Args:
            agent: Agent to evaluate.

        Returns:
            Dictionary with evaluation metrics.
        """
        env = MinesweeperEnv(config=self.board_config)

        wins = 0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            seed = self.seed if episode == 0 else None
            stats = self.run_episode(env, agent, seed=seed)
            wins += int(stats.won)
            total_steps += stats.steps
            total_revealed += stats.revealed_cells

        return {
            "win_rate": wins / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(
        self, agents: Dict[str, BaseAgent]
    ) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s over %d games", name, self.num_episodes)
            results[name] = self.evaluate(agent)
        return results
