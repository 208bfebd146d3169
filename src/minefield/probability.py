"""
Mine probability estimation.

Turns a resolved constraint set into a 0-100 mine likelihood for every
cell. Arithmetic is exact (fractions) and the final percentage is
rounded half-up to an integer, so results are deterministic.

Rules, per cell:
    opened                      -> 0
    flagged or deduced mine     -> 100
    deduced safe                -> 0
    in residual constraints     -> mean of k / |S| over those constraints
    otherwise                   -> remaining mines / remaining unknown cells
"""
import math
from collections import defaultdict
from fractions import Fraction
from typing import DefaultDict, Dict, List

from .constraints import Resolution
from .grid import Grid, Position

_HALF = Fraction(1, 2)


def to_percentage(value: Fraction) -> int:
    """
    Convert a probability to an integer percentage.

    Rounds half up and clamps to [0, 100].
    """
    percentage = math.floor(value * 100 + _HALF)
    return max(0, min(100, percentage))


def global_mine_density(
    grid: Grid, resolution: Resolution, total_mines: int
) -> Fraction:
    """
    Fallback probability for cells touched by no constraint.

    Remaining mines are the total minus deduced mines and flagged cells;
    they are spread over the hidden, unflagged cells not yet deduced.
    """
    known_mines = set(resolution.mines)
    unknown_cells = 0
    for cell in grid:
        if cell.is_flagged:
            known_mines.add(cell.position)
        elif cell.is_hidden and not resolution.is_deduced(cell.position):
            unknown_cells += 1

    if unknown_cells == 0:
        return Fraction(0)
    return Fraction(total_mines - len(known_mines), unknown_cells)


def local_mine_ratios(resolution: Resolution) -> Dict[Position, Fraction]:
    """Arithmetic mean of k / |S| over the constraints containing each cell."""
    ratios: DefaultDict[Position, List[Fraction]] = defaultdict(list)
    for constraint in resolution.constraints:
        ratio = Fraction(constraint.mine_count, len(constraint.cells))
        for position in constraint.cells:
            ratios[position].append(ratio)

    return {
        position: sum(values, Fraction(0)) / len(values)
        for position, values in ratios.items()
    }


def estimate_mine_percentages(
    grid: Grid, resolution: Resolution, total_mines: int
) -> Dict[Position, int]:
    """
    Estimate the mine percentage of every cell on the grid.

    Args:
        grid: Current board grid.
        resolution: Resolved constraints for the same grid state.
        total_mines: Number of mines placed on the board.

    Returns:
        Mapping from (x, y) to an integer percentage in [0, 100].
    """
    local = local_mine_ratios(resolution)
    fallback = to_percentage(global_mine_density(grid, resolution, total_mines))

    percentages: Dict[Position, int] = {}
    for cell in grid:
        position = cell.position
        if cell.is_opened or position in resolution.safe:
            percentages[position] = 0
        elif cell.is_flagged or position in resolution.mines:
            percentages[position] = 100
        elif position in local:
            percentages[position] = to_percentage(local[position])
        else:
            percentages[position] = fallback
    return percentages
