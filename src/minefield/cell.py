"""
Cell module for the minefield engine.

Represents individual cells on the game board with their state
(hidden/revealed/flagged), content (mine/number) and the mine
likelihood hint recomputed after every turn.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional, Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the minefield grid.

    Cells know only their own coordinates; neighbour context always
    comes from the Grid that owns them.

    Attributes:
        x: Column index.
        y: Row index.
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
        mine_percentage: Estimated chance (0-100) that the cell is a mine.
    """

    x: int
    y: int
    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN
    mine_percentage: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        """(x, y) coordinates of this cell."""
        return (self.x, self.y)

    def open(self) -> bool:
        """
        Open this cell.

        Returns:
            True if cell was opened, False if already opened or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is opened.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Closed and not flagged."""
        return self.state == CellState.HIDDEN

    @property
    def is_closed(self) -> bool:
        """Not yet opened (flagged cells are closed)."""
        return self.state != CellState.REVEALED

    @property
    def is_opened(self) -> bool:
        """Check if cell is opened."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self, show_mine: bool = False) -> int:
        """
        Convert cell to an observation value.

        Args:
            show_mine: Expose an unflagged closed mine (game over).

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Opened cell with adjacent mine count
            9: Visible mine
        """
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine and (self.is_opened or show_mine):
            return 9
        if self.state == CellState.HIDDEN:
            return -1
        return self.adjacent_mines


@dataclass(frozen=True)
class CellView:
    """
    Read-only snapshot of a cell for renderers.

    ``is_mine`` is None unless the cell is opened or the game is over;
    ``adjacent_mines`` is None while the cell is closed.
    """

    x: int
    y: int
    is_opened: bool
    is_flagged: bool
    is_mine: Optional[bool]
    adjacent_mines: Optional[int]
    mine_percentage: int

    @classmethod
    def of(cls, cell: Cell, game_over: bool = False) -> "CellView":
        """Build the view of ``cell``."""
        mine_visible = cell.is_opened or game_over
        return cls(
            x=cell.x,
            y=cell.y,
            is_opened=cell.is_opened,
            is_flagged=cell.is_flagged,
            is_mine=cell.is_mine if mine_visible else None,
            adjacent_mines=cell.adjacent_mines if cell.is_opened else None,
            mine_percentage=cell.mine_percentage,
        )
