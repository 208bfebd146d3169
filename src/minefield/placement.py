"""
Mine placement for the minefield engine.

Mines are seeded by rejection sampling: draw a uniformly random
coordinate, keep it if it is not a mine yet, repeat until the
requested count is reached. The random source is injected so that
layouts are reproducible under test.
"""
import logging
from typing import Any, Iterable, List

from .exceptions import BoardConfigError, MinefieldError
from .grid import Grid, Position

logger = logging.getLogger(__name__)


def validate_mine_count(total_cells: int, mine_count: int) -> None:
    """
    Ensure ``0 < mine_count < total_cells``.

    Raises:
        BoardConfigError: If the count is out of range.
    """
    if mine_count <= 0:
        raise BoardConfigError("Number of mines must be positive")
    if mine_count >= total_cells:
        raise BoardConfigError(f"Too many mines (max {total_cells - 1})")


def _ensure_blank(grid: Grid) -> None:
    if any(cell.is_mine for cell in grid):
        raise MinefieldError("Mines have already been placed on this grid")


def place_mines(grid: Grid, mine_count: int, rng: Any) -> List[Position]:
    """
    Place ``mine_count`` mines uniformly at random, then derive counts.

    Args:
        grid: A grid without mines.
        mine_count: Number of distinct cells to mine.
        rng: Random source with an ``integers(low, high)`` method, such
            as ``numpy.random.Generator``.

    Returns:
        Mine positions in the order they were placed.
    """
    validate_mine_count(grid.total_cells, mine_count)
    _ensure_blank(grid)

    placed: List[Position] = []
    draws = 0
    while len(placed) < mine_count:
        x = int(rng.integers(0, grid.width))
        y = int(rng.integers(0, grid.height))
        draws += 1
        cell = grid.cell(x, y)
        if not cell.is_mine:
            cell.is_mine = True
            placed.append((x, y))

    compute_adjacent_mines(grid)
    logger.debug(
        "Placed %d mines on %dx%d grid in %d draws",
        mine_count, grid.width, grid.height, draws,
    )
    return placed


def place_mines_at(grid: Grid, positions: Iterable[Position]) -> List[Position]:
    """
    Mine an explicit set of positions, then derive counts.

    Raises:
        BoardConfigError: On duplicates or an invalid mine count.
        OutOfBoundsError: If a position is off the grid.
    """
    placed = [(int(x), int(y)) for x, y in positions]
    if len(set(placed)) != len(placed):
        raise BoardConfigError("Mine positions must be distinct")
    validate_mine_count(grid.total_cells, len(placed))
    _ensure_blank(grid)

    for x, y in placed:
        grid.cell(x, y).is_mine = True

    compute_adjacent_mines(grid)
    return placed


def compute_adjacent_mines(grid: Grid) -> None:
    """Set every cell's adjacent mine count from the current layout."""
    for cell in grid:
        cell.adjacent_mines = sum(
            1 for neighbor in grid.neighbors_of(cell.x, cell.y)
            if neighbor.is_mine
        )
