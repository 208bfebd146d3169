"""
Constraint engine for the minefield board.

Every opened numbered cell yields one constraint over its hidden,
unflagged neighbours. The constraint set is resolved by subset
elimination, iterated to a fixed point, to find cells that are
certainly safe or certainly mines.
"""
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Set

from .grid import Grid, Position

logger = logging.getLogger(__name__)


# ============================================================================
# Constraint Types
# ============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    A constraint representing: sum of mines over ``cells`` == mine_count.

    For example, if an opened "2" has 3 hidden neighbors and 1 flagged,
    the constraint is: cells={A, B, C}, mine_count=1
    """

    cells: FrozenSet[Position]
    mine_count: int

    @property
    def is_consistent(self) -> bool:
        """Whether some assignment of mines can satisfy the constraint."""
        return 0 <= self.mine_count <= len(self.cells)

    @property
    def all_safe(self) -> bool:
        return self.mine_count == 0

    @property
    def all_mines(self) -> bool:
        return self.mine_count == len(self.cells)

    def reduce(self, safe: Set[Position], mines: Set[Position]) -> "Constraint":
        """Drop already-deduced cells, discounting deduced mines."""
        known_mines = self.cells & mines
        remaining = self.cells - safe - mines
        if len(remaining) == len(self.cells):
            return self
        return Constraint(
            cells=frozenset(remaining),
            mine_count=self.mine_count - len(known_mines),
        )


@dataclass
class Resolution:
    """
    Result of resolving a constraint set.

    Attributes:
        safe: Cells that certainly hold no mine.
        mines: Cells that certainly hold a mine.
        constraints: Residual constraints over the undeduced cells,
            closed under subset elimination.
        passes: Number of resolution passes until the fixed point.
    """

    safe: Set[Position] = field(default_factory=set)
    mines: Set[Position] = field(default_factory=set)
    constraints: List[Constraint] = field(default_factory=list)
    passes: int = 0

    def is_deduced(self, position: Position) -> bool:
        return position in self.safe or position in self.mines


# ============================================================================
# Constraint Construction
# ============================================================================

def build_constraints(grid: Grid) -> List[Constraint]:
    """
    Build constraints from opened numbered cells.

    Each opened number N with hidden neighbors creates a constraint:
    "exactly (N - flagged_count) of these hidden cells are mines".
    Cells whose neighbours are all opened or flagged emit nothing.
    """
    constraints = []

    for cell in grid:
        if not cell.is_opened or cell.is_mine or cell.adjacent_mines == 0:
            continue

        hidden: Set[Position] = set()
        flagged = 0
        for neighbor in grid.neighbors_of(cell.x, cell.y):
            if neighbor.is_flagged:
                flagged += 1
            elif neighbor.is_hidden:
                hidden.add(neighbor.position)

        if not hidden:
            continue

        constraint = Constraint(
            cells=frozenset(hidden),
            mine_count=cell.adjacent_mines - flagged,
        )
        # Only misplaced flags can push the count out of range
        if not constraint.is_consistent:
            logger.debug(
                "Dropping inconsistent constraint at (%d, %d): %d mines over %d cells",
                cell.x, cell.y, constraint.mine_count, len(hidden),
            )
            continue
        constraints.append(constraint)

    return constraints


# ============================================================================
# Resolution
# ============================================================================

def _unique(constraints: Iterable[Constraint]) -> List[Constraint]:
    return list(dict.fromkeys(constraints))


def _subset_eliminate(constraints: List[Constraint]) -> List[Constraint]:
    """
    Derive constraints from every subset pair.

    If A's cells are a proper subset of B's cells, the difference
    (B - A) holds exactly (B.mines - A.mines) mines.

    Example:
        A: {X, Y} has 1 mine
        B: {X, Y, Z} has 1 mine
        -> {Z} has 0 mines
    """
    derived = []
    for smaller in constraints:
        for larger in constraints:
            if not smaller.cells < larger.cells:
                continue
            difference = Constraint(
                cells=larger.cells - smaller.cells,
                mine_count=larger.mine_count - smaller.mine_count,
            )
            if difference.is_consistent:
                derived.append(difference)
    return derived


def resolve(constraints: Iterable[Constraint]) -> Resolution:
    """
    Resolve constraints to a fixed point.

    Each pass reduces every constraint by the cells deduced so far,
    harvests trivially determined constraints ((S, 0) are all safe,
    (S, |S|) are all mines) and adds every subset-elimination
    difference. Passes repeat until neither the deductions nor the
    constraint set change.

    Args:
        constraints: Constraints built from the current board.

    Returns:
        Deduced safe and mine cells plus the residual constraint set.
    """
    resolution = Resolution()
    safe, mines = resolution.safe, resolution.mines
    current = _unique(c for c in constraints if c.is_consistent)

    while True:
        resolution.passes += 1
        known_before = len(safe) + len(mines)

        reduced = []
        for constraint in current:
            constraint = constraint.reduce(safe, mines)
            if not constraint.cells or not constraint.is_consistent:
                continue
            if constraint.all_safe:
                safe.update(constraint.cells)
            elif constraint.all_mines:
                mines.update(constraint.cells)
            else:
                reduced.append(constraint)

        reduced = _unique(reduced)
        updated = _unique(reduced + _subset_eliminate(reduced))

        deduced = len(safe) + len(mines) != known_before
        if not deduced and set(updated) == set(current):
            break
        current = updated

    resolution.constraints = current
    logger.debug(
        "Resolved to %d safe, %d mines, %d residual constraints in %d passes",
        len(safe), len(mines), len(current), resolution.passes,
    )
    return resolution


def solve(grid: Grid) -> Resolution:
    """Build and resolve the constraints of ``grid``."""
    return resolve(build_constraints(grid))
