"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import Board, BoardConfig, Cell, Grid
from minefield.placement import place_mines_at


# ============================================================================
# Random Sources
# ============================================================================

class ScriptedRandom:
    """Random source replaying a fixed sequence of integers."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values: List[int] = list(values)
        self.calls = 0

    def integers(self, low: int, high: int) -> int:
        value = self._values[self.calls]
        self.calls += 1
        assert low <= value < high, f"{value} not in [{low}, {high})"
        return value


@pytest.fixture
def scripted_random():
    """Factory for random sources with a fixed draw sequence."""
    return ScriptedRandom


# ============================================================================
# Grid Helpers
# ============================================================================

def _make_grid(width: int, height: int, mines) -> Grid:
    grid = Grid(width, height)
    place_mines_at(grid, mines)
    return grid


def _open_cells(grid: Grid, positions) -> None:
    for x, y in positions:
        grid.cell(x, y).open()


@pytest.fixture
def make_grid():
    """Factory for grids with mines at given positions and counts computed."""
    return _make_grid


@pytest.fixture
def open_cells():
    """Open cells one by one without cascading."""
    return _open_cells


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 8x8 board with 10 mines."""
    return Board(rng=np.random.default_rng(7))


@pytest.fixture
def tiny_board() -> Board:
    """2x2 board with a single mine at (1, 1)."""
    return Board.from_layout(2, 2, [(1, 1)])


@pytest.fixture
def corner_mine_board() -> Board:
    """3x3 board with a single mine at (2, 2)."""
    return Board.from_layout(3, 3, [(2, 2)])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(0, 0, is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(8, 8, 10)
