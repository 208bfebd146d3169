"""
Minefield agents module.

Provides agents that play through the Gymnasium environment:
- RandomAgent: Baseline random selection
- HintAgent: Follows deduced safe cells and mine percentages
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .hint_agent import HintAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "HintAgent",
]
