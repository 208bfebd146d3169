"""
Grid module for the minefield engine.

Owns the 2-D array of cells and answers bounds-checked neighbour
queries. Neighbour coordinates are precomputed once per grid so that
every lookup during a cascade or a constraint rebuild is O(1).
"""
from typing import Dict, Iterator, List, Tuple

from .cell import Cell
from .exceptions import BoardConfigError, OutOfBoundsError

Position = Tuple[int, int]


# ============================================================================
# Neighbor Utilities (Low-level)
# ============================================================================

def get_neighborhoods(
    width: int, height: int
) -> Dict[Position, Tuple[Position, ...]]:
    """
    Precompute the Moore neighbourhood of every cell.

    Args:
        width: Number of columns.
        height: Number of rows.

    Returns:
        Mapping from (x, y) to the in-bounds neighbour coordinates.
    """
    neighborhoods: Dict[Position, Tuple[Position, ...]] = {}
    for y in range(height):
        for x in range(width):
            neighbors = []
            for delta_y in (-1, 0, 1):
                for delta_x in (-1, 0, 1):
                    if delta_x == 0 and delta_y == 0:
                        continue
                    new_x = x + delta_x
                    new_y = y + delta_y
                    if 0 <= new_x < width and 0 <= new_y < height:
                        neighbors.append((new_x, new_y))
            neighborhoods[(x, y)] = tuple(neighbors)
    return neighborhoods


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Rectangular grid of cells addressed by (x, y).

    x runs along the columns ``[0, width)`` and y along the rows
    ``[0, height)``. Out-of-range coordinates raise OutOfBoundsError;
    they are never clamped.
    """

    def __init__(self, width: int, height: int) -> None:
        if width < 1 or height < 1:
            raise BoardConfigError("Board dimensions must be positive")
        self.width = width
        self.height = height
        self._cells: List[List[Cell]] = [
            [Cell(x, y) for x in range(width)]
            for y in range(height)
        ]
        self._neighborhoods = get_neighborhoods(width, height)

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def __len__(self) -> int:
        return self.total_cells

    def __iter__(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for row in self._cells:
            yield from row

    def rows(self) -> List[List[Cell]]:
        """Rows of cells, top to bottom."""
        return self._cells

    def contains(self, x: int, y: int) -> bool:
        """Check if position is within grid bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def check_bounds(self, x: int, y: int) -> None:
        """Raise OutOfBoundsError unless (x, y) is on the grid."""
        if not self.contains(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def cell(self, x: int, y: int) -> Cell:
        """Get the cell at (x, y)."""
        self.check_bounds(x, y)
        return self._cells[y][x]

    def neighbor_positions(self, x: int, y: int) -> Tuple[Position, ...]:
        """In-bounds coordinates adjacent to (x, y)."""
        self.check_bounds(x, y)
        return self._neighborhoods[(x, y)]

    def neighbors_of(self, x: int, y: int) -> List[Cell]:
        """
        Get the (at most 8) cells adjacent to (x, y).

        Args:
            x: Column of the centre cell.
            y: Row of the centre cell.

        Returns:
            Neighbouring cells; fewer than 8 at edges and corners.
        """
        return [
            self._cells[neighbor_y][neighbor_x]
            for neighbor_x, neighbor_y in self.neighbor_positions(x, y)
        ]
