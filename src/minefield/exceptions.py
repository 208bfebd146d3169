"""
Exception hierarchy for the minefield engine.

Construction and coordinate errors fail fast. Invalid transitions
(re-opening, flagging an opened cell, acting after the game ended)
are no-ops and never raise.
"""


class MinefieldError(Exception):
    """Base class for all engine errors."""


class BoardConfigError(MinefieldError, ValueError):
    """Invalid board dimensions or mine count."""


class OutOfBoundsError(MinefieldError, IndexError):
    """Coordinates fall outside the board."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Cell ({x}, {y}) is outside the {width}x{height} board"
        )
        self.x = x
        self.y = y
