"""Mine placement strategies: constraint backtracking, minimum distance and uniform random."""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from .config import PLACEMENT_CONFIG
from .errors import PlacementInfeasibleError
from .utils import Coordinate, get_cells, has_minimum_distance, is_non_attacking

if TYPE_CHECKING:
    from .engine import Tile

Grid = Sequence[Sequence["Tile"]]

logger = logging.getLogger("minestake.placement")


class PlacementStrategy(Enum):
    """The three mine placement algorithms a board can be generated with."""

    CONSTRAINT_BACKTRACKING = "n_queens"
    MIN_DISTANCE = "min_distance"
    RANDOM = "random"

    @property
    def label(self) -> str:
        return _LABELS[self]

    def place(
        self, grid: Grid, mine_count: int, rng: random.Random
    ) -> "PlacementResult":
        """
        Run this strategy on a blank grid.

        Args:
            grid: Square grid of tiles with no mines set.
            mine_count: Number of mines to place.
            rng: Random source used for every draw.

        Returns:
            The placement outcome.

        Raises:
            PlacementInfeasibleError: Constraint backtracking only, when the
                queen-attack rule cannot hold mine_count mines.
        """
        if self is PlacementStrategy.CONSTRAINT_BACKTRACKING:
            return place_constraint_backtracking(grid, mine_count, rng)
        if self is PlacementStrategy.MIN_DISTANCE:
            return place_min_distance(grid, mine_count, rng)
        return place_random(grid, mine_count, rng)


_LABELS = {
    PlacementStrategy.CONSTRAINT_BACKTRACKING: "N-Queens Algorithm",
    PlacementStrategy.MIN_DISTANCE: "Minimum Distance Algorithm",
    PlacementStrategy.RANDOM: "Random Placement",
}


@dataclass(frozen=True)
class PlacementResult:
    """
    Outcome of a placement run.

    Attributes:
        strategy: Strategy that was asked for.
        used: Strategy whose output is on the grid (differs after a fallback).
        mines: Coordinates of every placed mine, in placement order.
        fell_back: True if the requested strategy gave up and random placement was used.
        reason: Why the fallback happened, if it did.
        min_distance: Distance threshold of the minimum distance strategy.
        steps: Search steps (backtracking nodes or samples) spent.
    """

    strategy: PlacementStrategy
    used: PlacementStrategy
    mines: Tuple[Coordinate, ...]
    fell_back: bool = False
    reason: Optional[str] = None
    min_distance: Optional[int] = None
    steps: int = 0


def choose_strategy(rng: random.Random) -> PlacementStrategy:
    """Draw one of the three strategies with equal probability."""
    return rng.choice(list(PlacementStrategy))


def min_distance_for(size: int) -> int:
    """Minimum Manhattan distance required between mines on a board of this size."""
    return max(1, size // 3)


def clear_mines(grid: Grid) -> None:
    """Remove every mine from the grid."""
    for row in grid:
        for tile in row:
            if tile.is_mine:
                tile.set_mine(False)


# -------------------------------------------------------------------------
# Strategy A: constraint backtracking (queen-attack rule)
# -------------------------------------------------------------------------


class _BudgetExhausted(Exception):
    pass


class _StepCounter:
    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.steps = 0

    def spend(self) -> None:
        self.steps += 1
        if self.steps > self.limit:
            raise _BudgetExhausted()


def place_constraint_backtracking(
    grid: Grid,
    mine_count: int,
    rng: random.Random,
    max_steps: Optional[int] = None,
) -> PlacementResult:
    """
    Place mines so that no two share a row, a column or a diagonal.

    The first mine goes on a uniformly random cell. The rest are placed by a
    depth-first search over rows: each row tries its columns in ascending
    order, and may also be skipped. If the search from that first cell is
    exhausted, the next untried cell (in random order) becomes the first
    mine. Every mine lives on its own row, so mine_count > size is rejected
    before searching.

    Args:
        grid: Square grid of tiles with no mines set.
        mine_count: Number of mines to place.
        rng: Random source.
        max_steps: Cap on search nodes across all first cells.

    Returns:
        The placement outcome.

    Raises:
        PlacementInfeasibleError: If no arrangement was found. The grid is
            left without mines.
    """
    size = len(grid)
    if max_steps is None:
        max_steps = PLACEMENT_CONFIG["max_backtrack_steps"]

    if mine_count == 0:
        return PlacementResult(
            PlacementStrategy.CONSTRAINT_BACKTRACKING,
            PlacementStrategy.CONSTRAINT_BACKTRACKING,
            (),
        )

    if mine_count > size:
        raise PlacementInfeasibleError(
            f"Cannot place {mine_count} non-attacking mines on a {size}x{size} board.",
            placed=0,
            requested=mine_count,
            steps=0,
        )

    counter = _StepCounter(max_steps)
    first_cells: List[Coordinate] = list(get_cells(size))
    rng.shuffle(first_cells)

    try:
        for first in first_cells:
            first_row, first_col = first
            grid[first_row][first_col].set_mine(True)
            placed: List[Coordinate] = [first]

            if _backtrack(grid, mine_count - 1, 0, placed, counter):
                logger.debug(
                    "Constraint placement found after %d steps (first mine %s).",
                    counter.steps,
                    first,
                )
                return PlacementResult(
                    PlacementStrategy.CONSTRAINT_BACKTRACKING,
                    PlacementStrategy.CONSTRAINT_BACKTRACKING,
                    tuple(placed),
                    steps=counter.steps,
                )

            grid[first_row][first_col].set_mine(False)
    except _BudgetExhausted:
        clear_mines(grid)
        raise PlacementInfeasibleError(
            f"Backtracking budget of {max_steps} steps spent before placing "
            f"{mine_count} mines.",
            placed=0,
            requested=mine_count,
            steps=counter.steps,
        ) from None

    raise PlacementInfeasibleError(
        f"No non-attacking arrangement of {mine_count} mines exists on a "
        f"{size}x{size} board.",
        placed=0,
        requested=mine_count,
        steps=counter.steps,
    )


def _backtrack(
    grid: Grid,
    mines_to_place: int,
    row: int,
    placed: List[Coordinate],
    counter: _StepCounter,
) -> bool:
    if mines_to_place == 0:
        return True

    size = len(grid)
    # One mine per row at most.
    if mines_to_place > size - row:
        return False

    counter.spend()

    for col in range(size):
        cell = (row, col)
        if grid[row][col].is_mine or not is_non_attacking(cell, placed):
            continue

        grid[row][col].set_mine(True)
        placed.append(cell)

        if _backtrack(grid, mines_to_place - 1, row + 1, placed, counter):
            return True

        grid[row][col].set_mine(False)
        placed.pop()

    # Not every row needs a mine.
    return _backtrack(grid, mines_to_place, row + 1, placed, counter)


# -------------------------------------------------------------------------
# Strategy B: minimum pairwise Manhattan distance
# -------------------------------------------------------------------------


def place_min_distance(
    grid: Grid,
    mine_count: int,
    rng: random.Random,
    attempts_per_cell: Optional[int] = None,
) -> PlacementResult:
    """
    Place mines at least max(1, size // 3) apart, falling back to random placement.

    Each recursion level samples up to size*size*attempts_per_cell random
    cells. A free cell far enough from every placed mine is taken and the
    search recurses; if the deeper levels fail, the mine is removed and
    sampling continues. Total samples are also capped so an infeasible
    request ends in bounded time.

    Args:
        grid: Square grid of tiles with no mines set.
        mine_count: Number of mines to place.
        rng: Random source.
        attempts_per_cell: Samples per level, per cell of the board.

    Returns:
        The placement outcome; fell_back is True when random placement was used.
    """
    size = len(grid)
    if attempts_per_cell is None:
        attempts_per_cell = PLACEMENT_CONFIG["attempts_per_cell"]

    min_distance = min_distance_for(size)
    attempts_per_level = size * size * attempts_per_cell
    counter = _StepCounter(attempts_per_level * max(1, mine_count) * 2)
    placed: List[Coordinate] = []

    try:
        found = _sample_with_distance(
            grid, mine_count, min_distance, attempts_per_level, placed, rng, counter
        )
    except _BudgetExhausted:
        found = False

    if found:
        logger.debug(
            "Minimum distance placement (distance %d) took %d samples.",
            min_distance,
            counter.steps,
        )
        return PlacementResult(
            PlacementStrategy.MIN_DISTANCE,
            PlacementStrategy.MIN_DISTANCE,
            tuple(placed),
            min_distance=min_distance,
            steps=counter.steps,
        )

    logger.warning(
        "Minimum distance placement failed after %d samples, using random placement.",
        counter.steps,
    )
    clear_mines(grid)
    fallback = place_random(grid, mine_count, rng)
    return PlacementResult(
        PlacementStrategy.MIN_DISTANCE,
        PlacementStrategy.RANDOM,
        fallback.mines,
        fell_back=True,
        reason=f"could not keep {mine_count} mines {min_distance} tiles apart",
        min_distance=min_distance,
        steps=counter.steps + fallback.steps,
    )


def _sample_with_distance(
    grid: Grid,
    mines_to_place: int,
    min_distance: int,
    attempts: int,
    placed: List[Coordinate],
    rng: random.Random,
    counter: _StepCounter,
) -> bool:
    if mines_to_place == 0:
        return True

    size = len(grid)
    for _ in range(attempts):
        counter.spend()
        row = rng.randrange(size)
        col = rng.randrange(size)

        if grid[row][col].is_mine or not has_minimum_distance(
            (row, col), placed, min_distance
        ):
            continue

        grid[row][col].set_mine(True)
        placed.append((row, col))

        if _sample_with_distance(
            grid, mines_to_place - 1, min_distance, attempts, placed, rng, counter
        ):
            return True

        grid[row][col].set_mine(False)
        placed.pop()

    return False


# -------------------------------------------------------------------------
# Strategy C: uniform random
# -------------------------------------------------------------------------


def place_random(grid: Grid, mine_count: int, rng: random.Random) -> PlacementResult:
    """
    Place mines on uniformly random free cells until mine_count are down.

    Raises:
        ValueError: If mine_count exceeds the number of cells.
    """
    size = len(grid)
    if mine_count > size * size:
        raise ValueError(
            f"Cannot place {mine_count} mines on a {size}x{size} board."
        )

    mines: List[Coordinate] = []
    samples = 0
    while len(mines) < mine_count:
        samples += 1
        row = rng.randrange(size)
        col = rng.randrange(size)

        if not grid[row][col].is_mine:
            grid[row][col].set_mine(True)
            mines.append((row, col))

    return PlacementResult(
        PlacementStrategy.RANDOM,
        PlacementStrategy.RANDOM,
        tuple(mines),
        steps=samples,
    )
