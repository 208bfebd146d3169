"""
Plain-text rendering of a board.

Glyphs:
    .      hidden
    F      flag
    (sp)   opened, no adjacent mines
    1-8    opened, adjacent mine count
    *      visible mine
    s / m  hidden cell deduced safe / mine (hints only)
"""
from typing import List

from .board import Board


def _header(width: int) -> str:
    return "   " + " ".join(f"{x % 10}" for x in range(width))


def render_board(
    board: Board, show_hints: bool = False, show_mines: bool = False
) -> str:
    """
    Render the board as text, one line per row with coordinates.

    Args:
        board: Board to render.
        show_hints: Mark deduced safe/mine hidden cells.
        show_mines: Show every mine regardless of game state.
    """
    safe = board.safe_cells if show_hints else frozenset()
    mines = board.mine_cells if show_hints else frozenset()
    reveal = show_mines or board.is_over

    lines: List[str] = [_header(board.width)]
    for y, row in enumerate(board.grid.rows()):
        glyphs = []
        for cell in row:
            if cell.is_flagged:
                glyphs.append("F")
            elif cell.is_mine and (cell.is_opened or reveal):
                glyphs.append("*")
            elif cell.is_opened:
                glyphs.append(str(cell.adjacent_mines) if cell.adjacent_mines else " ")
            elif cell.position in safe:
                glyphs.append("s")
            elif cell.position in mines:
                glyphs.append("m")
            else:
                glyphs.append(".")
        lines.append(f"{y:2d} " + " ".join(glyphs))
    return "\n".join(lines)


def render_percentages(board: Board) -> str:
    """Render the mine percentage of every closed cell."""
    lines = ["    " + " ".join(f"{x:3d}" for x in range(board.width))]
    for y, row in enumerate(board.grid.rows()):
        values = [
            "  -" if cell.is_opened else f"{cell.mine_percentage:3d}"
            for cell in row
        ]
        lines.append(f"{y:2d}  " + " ".join(values))
    return "\n".join(lines)
