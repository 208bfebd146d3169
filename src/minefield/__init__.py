"""
Minefield deduction puzzle engine.

Provides mine placement, cascading reveal, constraint-based deduction,
mine probability hints and win/loss detection.
"""
from .cell import Cell, CellState, CellView
from .grid import Grid
from .board import (
    Board,
    BoardConfig,
    new_game,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
)
from .constraints import Constraint, Resolution, build_constraints, resolve, solve
from .outcome import GameState
from .exceptions import MinefieldError, BoardConfigError, OutOfBoundsError
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "CellView",
    "Grid",
    "Board",
    "BoardConfig",
    "new_game",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "Constraint",
    "Resolution",
    "build_constraints",
    "resolve",
    "solve",
    "GameState",
    "MinefieldError",
    "BoardConfigError",
    "OutOfBoundsError",
    "MinesweeperEnv",
]
