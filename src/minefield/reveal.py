"""
Reveal engine: opening cells, cascades and flags.

A cell moves Closed -> Opened once and never back. Flagged is a
sub-state of Closed that blocks both manual and automatic opening.
"""
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Set

from .cell import Cell
from .grid import Grid, Position

logger = logging.getLogger(__name__)


@dataclass
class RevealResult:
    """
    Outcome of a single open action.

    Attributes:
        opened: Cells opened by the action, in opening order.
        detonated: The mine that was opened, if any.
    """

    opened: List[Cell] = field(default_factory=list)
    detonated: Optional[Cell] = None

    @property
    def changed(self) -> bool:
        return bool(self.opened)


def flood_open(grid: Grid, x: int, y: int) -> List[Cell]:
    """
    Open (x, y) and cascade through connected zero-count cells.

    Uses an explicit FIFO worklist, so stack depth does not depend on
    the board size. Only unflagged closed cells are ever opened, and
    only zero-count non-mine cells expand to their neighbours.

    Args:
        grid: Grid to open cells on.
        x: Column of the starting cell.
        y: Row of the starting cell.

    Returns:
        Newly opened cells.
    """
    start = grid.cell(x, y)
    if not start.is_hidden:
        return []

    frontier: Deque[Cell] = deque([start])
    queued: Set[Position] = {start.position}
    opened: List[Cell] = []

    while frontier:
        cell = frontier.popleft()
        if not cell.open():
            continue
        opened.append(cell)

        if cell.is_mine or cell.adjacent_mines != 0:
            continue
        for neighbor in grid.neighbors_of(cell.x, cell.y):
            if neighbor.is_hidden and neighbor.position not in queued:
                queued.add(neighbor.position)
                frontier.append(neighbor)

    if len(opened) > 1:
        logger.debug("Cascade from (%d, %d) opened %d cells", x, y, len(opened))
    return opened


def open_cell(grid: Grid, x: int, y: int) -> RevealResult:
    """
    Open a single cell as a player action.

    No-op on opened or flagged cells. Opening a mine marks it opened
    and reports it as detonated without cascading.
    """
    cell = grid.cell(x, y)
    if not cell.is_hidden:
        return RevealResult()

    if cell.is_mine:
        cell.open()
        return RevealResult(opened=[cell], detonated=cell)

    return RevealResult(opened=flood_open(grid, x, y))


def toggle_flag(grid: Grid, x: int, y: int) -> int:
    """
    Toggle the flag on a closed cell.

    Returns:
        Change in the number of placed flags: +1, -1, or 0 when the
        cell is already opened.
    """
    cell = grid.cell(x, y)
    if not cell.toggle_flag():
        return 0
    return 1 if cell.is_flagged else -1
