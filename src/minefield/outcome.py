"""
Win/loss evaluation for the minefield board.
"""
from dataclasses import dataclass
from enum import Enum, auto

from .grid import Grid


class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


@dataclass(frozen=True)
class FlagTally:
    """Counts the winning conditions are checked against."""

    correct_flags: int
    misplaced_flags: int
    closed_cells: int


def tally(grid: Grid) -> FlagTally:
    correct = misplaced = closed = 0
    for cell in grid:
        if cell.is_flagged:
            if cell.is_mine:
                correct += 1
            else:
                misplaced += 1
        if cell.is_closed:
            closed += 1
    return FlagTally(correct, misplaced, closed)


def is_won(grid: Grid, total_mines: int) -> bool:
    """
    Check the two winning conditions.

    Either every mine is flagged and no safe cell is, or the only
    closed cells left are the mines (flagged or not).
    """
    counts = tally(grid)
    flagged_all_mines = (
        counts.correct_flags == total_mines and counts.misplaced_flags == 0
    )
    only_mines_left = counts.closed_cells == total_mines
    return flagged_all_mines or only_mines_left


def evaluate(grid: Grid, total_mines: int, detonated: bool = False) -> GameState:
    """Game state after an action; a detonated mine always loses."""
    if detonated:
        return GameState.LOST
    if is_won(grid, total_mines):
        return GameState.WON
    return GameState.PLAYING
