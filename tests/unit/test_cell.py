"""
Unit tests for Cell class.

Tests cell state management, open/flag behavior, and observation conversion.
"""
import pytest
from minefield import Cell, CellState, CellView


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell(3, 4)
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden and closed by default."""
        cell = Cell(3, 4)
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.is_closed is True

    def test_cell_keeps_its_coordinates(self) -> None:
        """Cell identity is its (x, y) position."""
        cell = Cell(3, 4)
        assert (cell.x, cell.y) == (3, 4)
        assert cell.position == (3, 4)


# ============================================================================
# Cell Open Tests
# ============================================================================

class TestCellOpen:
    """Test cell opening behavior."""

    def test_open_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Opening a hidden cell should succeed."""
        assert hidden_cell.open() is True
        assert hidden_cell.is_opened is True
        assert hidden_cell.is_closed is False

    def test_open_already_opened_returns_false(self, hidden_cell: Cell) -> None:
        """Opening an already opened cell should fail."""
        hidden_cell.open()
        assert hidden_cell.open() is False

    def test_open_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot open a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.open() is False
        assert hidden_cell.is_flagged is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_changes_state_to_flagged(self, hidden_cell: Cell) -> None:
        """Flagging a cell should change its state but keep it closed."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED
        assert hidden_cell.is_closed is True
        assert hidden_cell.is_hidden is False

    def test_unflag_returns_to_hidden(self, hidden_cell: Cell) -> None:
        """Unflagging a cell should return it to hidden."""
        hidden_cell.toggle_flag()
        hidden_cell.toggle_flag()
        assert hidden_cell.is_hidden is True

    def test_flag_opened_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag an opened cell."""
        hidden_cell.open()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_opened is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation values."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, mine_cell: Cell
    ) -> None:
        """Flags stay visible even when mines are shown."""
        mine_cell.toggle_flag()
        assert mine_cell.to_observation(show_mine=True) == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_opened_cell_observation_matches_adjacent_count(
        self, count: int
    ) -> None:
        cell = Cell(0, 0, adjacent_mines=count)
        cell.open()
        assert cell.to_observation() == count

    def test_hidden_mine_is_hidden_until_shown(self, mine_cell: Cell) -> None:
        assert mine_cell.to_observation() == -1
        assert mine_cell.to_observation(show_mine=True) == 9

    def test_opened_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        mine_cell.open()
        assert mine_cell.to_observation() == 9


# ============================================================================
# Cell View Tests
# ============================================================================

class TestCellView:
    """Test read-only snapshots."""

    def test_closed_cell_hides_content(self, mine_cell: Cell) -> None:
        view = CellView.of(mine_cell)
        assert view.is_mine is None
        assert view.adjacent_mines is None
        assert view.is_opened is False

    def test_game_over_exposes_mines(self, mine_cell: Cell) -> None:
        view = CellView.of(mine_cell, game_over=True)
        assert view.is_mine is True
        assert view.adjacent_mines is None

    def test_opened_cell_exposes_count(self) -> None:
        cell = Cell(1, 2, adjacent_mines=3)
        cell.open()
        view = CellView.of(cell)
        assert view.is_mine is False
        assert view.adjacent_mines == 3
        assert (view.x, view.y) == (1, 2)

    def test_view_is_immutable(self, hidden_cell: Cell) -> None:
        view = CellView.of(hidden_cell)
        with pytest.raises(AttributeError):
            view.is_opened = True
