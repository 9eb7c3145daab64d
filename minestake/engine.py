"""MineStake board engine: tiles, mine placement dispatch and reveal surface."""

import logging
import random
from typing import List, Optional, Tuple

from .errors import PlacementInfeasibleError, TileOutOfRangeError
from .placement import (
    PlacementResult,
    PlacementStrategy,
    choose_strategy,
    clear_mines,
    place_random,
)
from .utils import Coordinate, get_cells

logger = logging.getLogger("minestake.engine")


class Tile:
    """A single grid cell: whether it holds a mine and whether it has been revealed."""

    MASKED = "?"
    MINE = "X"
    SAFE = "D"

    __slots__ = ("_is_mine", "_is_revealed")

    def __init__(self, is_mine: bool = False) -> None:
        self._is_mine = is_mine
        self._is_revealed = False

    @property
    def is_mine(self) -> bool:
        return self._is_mine

    @property
    def is_revealed(self) -> bool:
        return self._is_revealed

    def set_mine(self, mine: bool) -> None:
        """
        Set or clear the mine flag.

        Raises:
            RuntimeError: If the tile has already been revealed.
        """
        if self._is_revealed:
            raise RuntimeError("Cannot change the mine flag of a revealed tile.")
        self._is_mine = mine

    def reveal(self) -> None:
        self._is_revealed = True

    @property
    def display_char(self) -> str:
        if not self._is_revealed:
            return self.MASKED
        return self.MINE if self._is_mine else self.SAFE

    def __repr__(self) -> str:
        return f"Tile(is_mine={self._is_mine}, is_revealed={self._is_revealed})"


def check_board_dimensions(size: int, mine_count: int) -> None:
    """
    Validate a board size and mine count.

    Raises:
        ValueError: If size is not positive or mine_count is outside 0..size * size.
    """
    if size <= 0:
        raise ValueError("size must be positive.")
    if mine_count < 0:
        raise ValueError("mine_count must be non-negative.")
    if mine_count > size * size:
        raise ValueError(
            f"Cannot place {mine_count} mines on a {size}x{size} board."
        )


class Board:
    """Square MineStake board with one-time mine placement."""

    def __init__(
        self,
        size: int,
        mine_count: int,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize an empty board.

        Args:
            size: Side length of the square grid, must be > 0.
            mine_count: Number of mines to place, 0 <= mine_count <= size * size.
            rng: Random source for strategy selection and placement. A fresh
                ``random.Random()`` is used if omitted.

        Raises:
            ValueError: If size or mine_count is out of range.
        """
        check_board_dimensions(size, mine_count)

        self._size: int = size
        self._mine_count: int = mine_count
        self.rng: random.Random = rng if rng is not None else random.Random()

        self.grid: List[List[Tile]] = [
            [Tile() for _ in range(size)] for _ in range(size)
        ]
        self.placement: Optional[PlacementResult] = None

    @property
    def size(self) -> int:
        return self._size

    @property
    def mine_count(self) -> int:
        return self._mine_count

    @property
    def mines_placed(self) -> bool:
        return self.placement is not None

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def place_mines(
        self,
        strategy: Optional[PlacementStrategy] = None,
        strict: bool = False,
    ) -> PlacementResult:
        """
        Place mines on the board (one-time).

        Args:
            strategy: Placement algorithm to use. Drawn uniformly at random
                among the three strategies when omitted.
            strict: If True, a constraint-backtracking failure is raised
                instead of falling back to random placement.

        Returns:
            The placement outcome, also stored on ``self.placement``.

        Raises:
            ValueError: If mines have already been placed.
            PlacementInfeasibleError: Only when strict is True.
        """
        if self.placement is not None:
            raise ValueError("Mines have already been placed on this board.")

        if strategy is None:
            strategy = choose_strategy(self.rng)
        logger.info(
            "Placing %d mines on %dx%d board with %s.",
            self._mine_count,
            self._size,
            self._size,
            strategy.label,
        )

        try:
            result = strategy.place(self.grid, self._mine_count, self.rng)
        except PlacementInfeasibleError as exc:
            if strict:
                raise
            logger.warning("%s failed: %s Using random placement.", strategy.label, exc)
            clear_mines(self.grid)
            fallback = place_random(self.grid, self._mine_count, self.rng)
            result = PlacementResult(
                strategy,
                PlacementStrategy.RANDOM,
                fallback.mines,
                fell_back=True,
                reason=str(exc),
                steps=exc.steps + fallback.steps,
            )

        self.placement = result
        return result

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._size and 0 <= col < self._size

    def _tile(self, row: int, col: int) -> Tile:
        if not self.in_bounds(row, col):
            raise TileOutOfRangeError(
                f"Tile ({row}, {col}) is outside the {self._size}x{self._size} board."
            )
        return self.grid[row][col]

    def reveal_tile(self, row: int, col: int) -> bool:
        """
        Reveal a tile.

        Revealing an already revealed tile changes nothing; callers should
        check ``is_tile_revealed`` first and reject the move.

        Args:
            row: 0-based row index.
            col: 0-based column index.

        Returns:
            True if the tile is safe, False if it is a mine.

        Raises:
            TileOutOfRangeError: If coordinates are outside the board.
        """
        tile = self._tile(row, col)
        tile.reveal()
        return not tile.is_mine

    def is_tile_revealed(self, row: int, col: int) -> bool:
        return self._tile(row, col).is_revealed

    def is_mine(self, row: int, col: int) -> bool:
        return self._tile(row, col).is_mine

    def mine_positions(self) -> List[Coordinate]:
        """Coordinates of every mine, in row-major order."""
        return [
            (row, col)
            for row, col in get_cells(self._size)
            if self.grid[row][col].is_mine
        ]

    def count_mines(self) -> int:
        return sum(1 for row in self.grid for tile in row if tile.is_mine)

    def safe_tiles_remaining(self) -> int:
        """Number of safe tiles not yet revealed."""
        return sum(
            1
            for row in self.grid
            for tile in row
            if not tile.is_mine and not tile.is_revealed
        )

    def display_chars(self) -> List[List[str]]:
        return [[tile.display_char for tile in row] for row in self.grid]

    # -------------------------------------------------------------------------
    # Display methods
    # -------------------------------------------------------------------------

    _ANSI_RESET = "\033[0m"
    _ANSI_COORD = "\033[96m"
    _ANSI_MINE = "\033[91m"
    _ANSI_SAFE = "\033[92m"

    def _c(self, s: str) -> str:
        """Wrap string in coordinate color."""
        return f"{self._ANSI_COORD}{s}{self._ANSI_RESET}"

    def _paint(self, ch: str) -> str:
        if ch == Tile.MINE:
            return f"{self._ANSI_MINE}{ch}{self._ANSI_RESET}"
        if ch == Tile.SAFE:
            return f"{self._ANSI_SAFE}{ch}{self._ANSI_RESET}"
        return ch

    def format_board(self, reveal_all: bool = False, color: bool = True) -> str:
        """
        Render the board as a multi-line string for terminal display.

        Args:
            reveal_all: If True, show every tile as if it were revealed.
            color: If False, emit plain text without ANSI escapes.

        Returns:
            A formatted grid with 1-based row and column labels.
        """

        def cell_str(tile: Tile) -> str:
            if reveal_all and not tile.is_revealed:
                ch = Tile.MINE if tile.is_mine else Tile.SAFE
            else:
                ch = tile.display_char
            return self._paint(ch) if color else ch

        def coord(s: str) -> str:
            return self._c(s) if color else s

        header = "".join(f"{i:4d}  " for i in range(1, self._size + 1))
        out: List[str] = [coord("   " + header)]

        for i, row in enumerate(self.grid, start=1):
            cells = "".join(f"[ {cell_str(tile)} ]" for tile in row)
            out.append(coord(f"{i:2d} ") + cells)

        return "\n".join(out)

    def display_board(self) -> None:
        """Print the current visible board state to stdout."""
        print()
        print(self.format_board(reveal_all=False))
        print()

    def print_full_board(self) -> None:
        """Print the board with every mine visible."""
        print(self.format_board(reveal_all=True))


def board_from_mines(size: int, mines: List[Tuple[int, int]]) -> Board:
    """Build a board with mines at fixed coordinates (for replays and tests)."""
    board = Board(size, len(set(mines)))
    for row, col in set(mines):
        board._tile(row, col).set_mine(True)
    board.placement = PlacementResult(
        PlacementStrategy.RANDOM, PlacementStrategy.RANDOM, tuple(sorted(set(mines)))
    )
    return board
