"""
Unit tests for constraint building and fixed-point resolution.
"""
import numpy as np
import pytest
from minefield import Board, BoardConfig, Constraint, build_constraints, resolve, solve


def _constraint(cells, count) -> Constraint:
    return Constraint(cells=frozenset(cells), mine_count=count)


@pytest.fixture
def one_two_one(make_grid, open_cells):
    """Top row opened over a 1-2-1 pattern; mines at (0, 1) and (2, 1)."""
    grid = make_grid(3, 2, [(0, 1), (2, 1)])
    open_cells(grid, [(0, 0), (1, 0), (2, 0)])
    return grid


@pytest.fixture
def subset_row(make_grid, open_cells):
    """Top row of a 4x2 board opened; single mine at (1, 1)."""
    grid = make_grid(4, 2, [(1, 1)])
    open_cells(grid, [(0, 0), (1, 0), (2, 0), (3, 0)])
    return grid


# ============================================================================
# Constraint Construction Tests
# ============================================================================

class TestBuildConstraints:
    """Test per-cell constraint emission."""

    def test_one_constraint_per_numbered_cell(self, one_two_one) -> None:
        constraints = build_constraints(one_two_one)
        assert set(constraints) == {
            _constraint({(0, 1), (1, 1)}, 1),
            _constraint({(0, 1), (1, 1), (2, 1)}, 2),
            _constraint({(1, 1), (2, 1)}, 1),
        }

    def test_zero_count_cells_emit_nothing(self, subset_row) -> None:
        assert set(build_constraints(subset_row)) == {
            _constraint({(0, 1), (1, 1)}, 1),
            _constraint({(0, 1), (1, 1), (2, 1)}, 1),
            _constraint({(1, 1), (2, 1), (3, 1)}, 1),
        }

    def test_flags_reduce_remaining_count(self, make_grid, open_cells) -> None:
        grid = make_grid(2, 2, [(1, 1)])
        open_cells(grid, [(0, 0)])
        grid.cell(1, 1).toggle_flag()
        assert build_constraints(grid) == [_constraint({(1, 0), (0, 1)}, 0)]

    def test_fully_accounted_cell_emits_nothing(self, make_grid, open_cells) -> None:
        grid = make_grid(2, 1, [(1, 0)])
        open_cells(grid, [(0, 0)])
        grid.cell(1, 0).toggle_flag()
        assert build_constraints(grid) == []

    def test_overflagged_constraint_is_dropped(self, make_grid, open_cells) -> None:
        grid = make_grid(2, 2, [(1, 1)])
        open_cells(grid, [(0, 0)])
        grid.cell(1, 0).toggle_flag()
        grid.cell(0, 1).toggle_flag()
        assert build_constraints(grid) == []

    def test_closed_grid_has_no_constraints(self, make_grid) -> None:
        assert build_constraints(make_grid(3, 3, [(1, 1)])) == []


# ============================================================================
# Resolution Tests
# ============================================================================

class TestResolve:
    """Test subset elimination to a fixed point."""

    def test_one_two_one_is_fully_deduced(self, one_two_one) -> None:
        resolution = solve(one_two_one)
        assert resolution.mines == {(0, 1), (2, 1)}
        assert resolution.safe == {(1, 1)}
        assert resolution.constraints == []

    def test_subset_difference_is_safe(self, subset_row) -> None:
        resolution = solve(subset_row)
        assert resolution.safe == {(2, 1)}
        assert resolution.mines == set()
        assert set(resolution.constraints) == {
            _constraint({(0, 1), (1, 1)}, 1),
            _constraint({(1, 1), (3, 1)}, 1),
        }

    def test_subset_difference_with_mines(self) -> None:
        resolution = resolve([
            _constraint({"a", "b"}, 1),
            _constraint({"a", "b", "c", "d"}, 3),
        ])
        assert resolution.mines == {"c", "d"}

    def test_all_safe_constraint(self) -> None:
        resolution = resolve([_constraint({(0, 0), (1, 0)}, 0)])
        assert resolution.safe == {(0, 0), (1, 0)}

    def test_all_mine_constraint(self) -> None:
        resolution = resolve([_constraint({(0, 0), (1, 0)}, 2)])
        assert resolution.mines == {(0, 0), (1, 0)}

    def test_inconsistent_input_is_ignored(self) -> None:
        resolution = resolve([_constraint({(0, 0)}, 2)])
        assert resolution.safe == set()
        assert resolution.mines == set()

    def test_chained_deductions_need_several_passes(self) -> None:
        """Deductions from one pass unlock deductions in the next."""
        resolution = resolve([
            _constraint({"a", "b"}, 1),
            _constraint({"a", "b", "c"}, 1),
            _constraint({"c", "d"}, 1),
        ])
        assert resolution.safe == {"c"}
        assert resolution.mines == {"d"}
        assert resolution.passes > 2

    def test_empty_input(self) -> None:
        resolution = resolve([])
        assert resolution.safe == set()
        assert resolution.constraints == []
        assert resolution.passes == 1


class TestIdempotence:
    """Resolving a fixed point changes nothing."""

    def test_residual_set_is_a_fixed_point(self, subset_row) -> None:
        first = solve(subset_row)
        again = resolve(first.constraints)
        assert again.safe == set()
        assert again.mines == set()
        assert set(again.constraints) == set(first.constraints)
        assert again.passes == 1

    def test_board_refresh_is_stable(self, subset_row) -> None:
        first = solve(subset_row)
        second = solve(subset_row)
        assert first.safe == second.safe
        assert first.mines == second.mines
        assert set(first.constraints) == set(second.constraints)


# ============================================================================
# Soundness Tests
# ============================================================================

class TestSoundness:
    """Deductions agree with the true layout when flags are correct."""

    @pytest.mark.parametrize("seed", range(12))
    def test_deductions_match_layout(self, seed: int) -> None:
        board = Board(BoardConfig(9, 9, 12), rng=np.random.default_rng(seed))
        zeros = [
            cell.position for cell in board.grid
            if cell.adjacent_mines == 0 and not cell.is_mine
        ]
        if not zeros:
            pytest.skip("layout has no zero cell")
        board.open(*zeros[0])

        for _ in range(100):
            for x, y in board.safe_cells:
                assert not board.get_cell(x, y).is_mine
                assert board.get_cell(x, y).mine_percentage == 0
            for x, y in board.mine_cells:
                assert board.get_cell(x, y).is_mine
                assert board.get_cell(x, y).mine_percentage == 100

            progressed = False
            for x, y in sorted(board.mine_cells):
                if board.toggle_flag(x, y):
                    progressed = True
            if board.open_safe_cells():
                progressed = True
            if not progressed or not board.is_playing:
                break

        assert not board.is_lost
