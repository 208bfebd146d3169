"""
Board module for the minefield engine.

Implements the game board: mine placement, opening and flagging cells,
per-turn deduction and probability updates, and game state management.

A Board is not thread-safe; one mutator at a time. Every action runs
to completion (cascade, constraint rebuild, probability recompute, win
check) before it returns.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, CellView
from .constraints import Constraint, Resolution, solve
from .exceptions import BoardConfigError
from .grid import Grid, Position
from .outcome import GameState, evaluate
from .placement import place_mines, place_mines_at, validate_mine_count
from .probability import estimate_mine_percentages
from .reveal import open_cell, toggle_flag

logger = logging.getLogger(__name__)

GameOverCallback = Callable[[bool], None]


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a minefield board.

    Frozen, so the module-level presets can be shared safely.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 8
    height: int = 8
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise BoardConfigError("Board dimensions must be positive")
        validate_mine_count(self.width * self.height, self.num_mines)

    @property
    def total_cells(self) -> int:
        return self.width * self.height


# Preset difficulty levels
BEGINNER = BoardConfig(8, 8, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(30, 16, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minefield game board.

    Owns the grid of cells and runs every player action through the
    reveal engine, the constraint engine, the probability estimator and
    the win/loss check. The same Board is reused across games: reset()
    replaces the grid and places new mines.

    Attributes:
        config: Board dimensions and mine count.
        rng: Random source for mine placement (numpy Generator).
        on_game_over: Called once per game with ``won`` when it ends.
        layout: Fixed mine positions; when set, every game uses them.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: Optional[Any] = field(default=None, repr=False)
    on_game_over: Optional[GameOverCallback] = field(default=None, repr=False)
    layout: Optional[Tuple[Position, ...]] = field(default=None, repr=False)
    _grid: Grid = field(init=False, repr=False)
    _resolution: Resolution = field(init=False, repr=False)
    _game_state: GameState = field(default=GameState.PLAYING, init=False)
    _flags_placed: int = field(default=0, init=False)
    _detonated: Optional[Position] = field(default=None, init=False)

    def __post_init__(self) -> None:
        """Create the grid and place mines after dataclass creation."""
        if self.rng is None:
            self.rng = np.random.default_rng()
        if self.layout is not None:
            self.layout = tuple(self.layout)
            if len(self.layout) != self.config.num_mines:
                raise BoardConfigError(
                    "Mine layout does not match the configured mine count"
                )
        self._setup()

    @classmethod
    def from_layout(
        cls,
        width: int,
        height: int,
        mines: Sequence[Position],
        on_game_over: Optional[GameOverCallback] = None,
    ) -> "Board":
        """Create a board with mines at exactly the given positions."""
        config = BoardConfig(width, height, len(mines))
        return cls(config, on_game_over=on_game_over, layout=tuple(mines))

    # ========================================================================
    # Setup (Low-level)
    # ========================================================================

    def _setup(self) -> None:
        """Build a fresh grid, place mines and compute the first hints."""
        self._grid = Grid(self.config.width, self.config.height)
        if self.layout is not None:
            place_mines_at(self._grid, self.layout)
        else:
            place_mines(self._grid, self.config.num_mines, self.rng)

        self._game_state = GameState.PLAYING
        self._flags_placed = 0
        self._detonated = None
        self._refresh()
        logger.debug(
            "New %dx%d game with %d mines",
            self.config.width, self.config.height, self.config.num_mines,
        )

    def _refresh(self) -> None:
        """Rebuild constraints from scratch and recompute percentages."""
        self._resolution = solve(self._grid)
        percentages = estimate_mine_percentages(
            self._grid, self._resolution, self.config.num_mines
        )
        for cell in self._grid:
            cell.mine_percentage = percentages[cell.position]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open(self, x: int, y: int) -> bool:
        """
        Open the cell at (x, y).

        Zero-count cells cascade to their neighbours. Opening a mine
        loses the game.

        Args:
            x: Column index.
            y: Row index.

        Returns:
            True if any cell was opened, False for a no-op.

        Raises:
            OutOfBoundsError: If (x, y) is not on the board.
        """
        self._grid.check_bounds(x, y)
        if not self.is_playing:
            return False

        result = open_cell(self._grid, x, y)
        if not result.changed:
            return False

        if result.detonated is not None:
            self._detonated = result.detonated.position
            self._finish(GameState.LOST)
        else:
            self._after_action()
        return True

    def toggle_flag(self, x: int, y: int) -> bool:
        """
        Toggle flag on the cell at (x, y).

        Returns:
            True if flag was toggled, False otherwise.

        Raises:
            OutOfBoundsError: If (x, y) is not on the board.
        """
        self._grid.check_bounds(x, y)
        if not self.is_playing:
            return False

        delta = toggle_flag(self._grid, x, y)
        if delta == 0:
            return False

        self._flags_placed += delta
        self._after_action()
        return True

    def open_safe_cells(self) -> int:
        """
        Open every cell deduced safe, repeating while new ones appear.

        Returns:
            Number of cells opened (cascades included).
        """
        opened = 0
        while self.is_playing:
            targets = sorted(
                position for position in self._resolution.safe
                if self._grid.cell(*position).is_hidden
            )
            if not targets:
                break
            for x, y in targets:
                before = self._count_opened()
                self.open(x, y)
                opened += self._count_opened() - before
        return opened

    def hint(self) -> Optional[Position]:
        """
        Suggest the next cell to open.

        A deduced safe cell if one exists, otherwise the hidden cell with
        the lowest mine percentage. None once the game is over.
        """
        if not self.is_playing:
            return None
        safe = sorted(
            position for position in self._resolution.safe
            if self._grid.cell(*position).is_hidden
        )
        if safe:
            return safe[0]
        hidden = [cell for cell in self._grid if cell.is_hidden]
        if not hidden:
            return None
        best = min(hidden, key=lambda cell: (cell.mine_percentage, cell.y, cell.x))
        return best.position

    def _after_action(self) -> None:
        self._refresh()
        state = evaluate(self._grid, self.config.num_mines)
        if state != GameState.PLAYING:
            self._finish(state)

    def _finish(self, state: GameState) -> None:
        self._game_state = state
        if state == GameState.WON:
            logger.info("Game won with %d flags placed", self._flags_placed)
        else:
            logger.info("Mine opened at %s; game lost", self._detonated)
        if self.on_game_over is not None:
            self.on_game_over(state == GameState.WON)

    def _count_opened(self) -> int:
        return sum(1 for cell in self._grid if cell.is_opened)

    def reset(self, rng: Optional[Any] = None) -> None:
        """
        Start a new game on this board.

        Args:
            rng: Optional replacement random source.
        """
        if rng is not None:
            self.rng = rng
        self._setup()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def total_mines(self) -> int:
        return self.config.num_mines

    @property
    def flags_placed(self) -> int:
        return self._flags_placed

    @property
    def remaining_mine_count(self) -> int:
        """Mines minus flags; negative when the player over-flags."""
        return self.config.num_mines - self._flags_placed

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def is_over(self) -> bool:
        return self._game_state != GameState.PLAYING

    @property
    def detonated(self) -> Optional[Position]:
        """Position of the opened mine that lost the game."""
        return self._detonated

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def safe_cells(self) -> FrozenSet[Position]:
        """Hidden cells currently deduced safe."""
        return frozenset(self._resolution.safe)

    @property
    def mine_cells(self) -> FrozenSet[Position]:
        """Hidden cells currently deduced to be mines."""
        return frozenset(self._resolution.mines)

    @property
    def constraints(self) -> List[Constraint]:
        """Residual constraints after resolution."""
        return list(self._resolution.constraints)

    def get_cell(self, x: int, y: int) -> Cell:
        """Get cell at position; raises OutOfBoundsError if invalid."""
        return self._grid.cell(x, y)

    def snapshot(self) -> Tuple[Tuple[CellView, ...], ...]:
        """Read-only view of every cell, one tuple per row."""
        return tuple(
            tuple(CellView.of(cell, self.is_over) for cell in row)
            for row in self._grid.rows()
        )

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D (height, width) int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = opened with adjacent count
                9 = visible mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for cell in self._grid:
            obs[cell.y, cell.x] = cell.to_observation(show_mine=self.is_over)
        return obs

    def get_mine_percentages(self) -> np.ndarray:
        """Mine percentage of every cell as a (height, width) int8 array."""
        percentages = np.zeros(
            (self.config.height, self.config.width), dtype=np.int8
        )
        for cell in self._grid:
            percentages[cell.y, cell.x] = cell.mine_percentage
        return percentages

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells that can be opened.

        Returns:
            List of (x, y) positions of hidden, unflagged cells.
        """
        return [cell.position for cell in self._grid if cell.is_hidden]


def new_game(
    width: int,
    height: int,
    mine_count: int,
    rng: Optional[Any] = None,
    on_game_over: Optional[GameOverCallback] = None,
) -> Board:
    """
    Create a board and place its mines.

    Raises:
        BoardConfigError: Unless 0 < mine_count < width * height.
    """
    config = BoardConfig(width, height, mine_count)
    return Board(config, rng=rng, on_game_over=on_game_over)
