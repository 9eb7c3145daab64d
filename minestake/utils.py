"""Coordinate helpers shared by the board and the placement strategies."""

import itertools
from typing import Dict, Iterable, List, Optional, Tuple

Coordinate = Tuple[int, int]

# Module-level cache: size -> ((row, col), ...) in row-major order
_CELLS_CACHE: Dict[int, Tuple[Coordinate, ...]] = {}


def get_cells(size: int) -> Tuple[Coordinate, ...]:
    """
    Precompute and cache every (row, col) coordinate of a square grid.

    Args:
        size: Side length of the grid. Must be positive.

    Returns:
        All coordinates of the grid in row-major order.

    Raises:
        ValueError: If size is non-positive.
    """
    if size <= 0:
        raise ValueError("size must be positive.")

    cached = _CELLS_CACHE.get(size)
    if cached is not None:
        return cached

    cells = tuple((row, col) for row in range(size) for col in range(size))
    _CELLS_CACHE[size] = cells
    return cells


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    """Return |Δrow| + |Δcol| between two coordinates."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def attacks(a: Coordinate, b: Coordinate) -> bool:
    """Return True if two mines share a row, a column or a diagonal."""
    d_row = abs(a[0] - b[0])
    d_col = abs(a[1] - b[1])
    return d_row == 0 or d_col == 0 or d_row == d_col


def is_non_attacking(cell: Coordinate, placed: Iterable[Coordinate]) -> bool:
    """Return True if cell attacks none of the already placed mines."""
    return not any(attacks(cell, other) for other in placed)


def has_minimum_distance(
    cell: Coordinate, placed: Iterable[Coordinate], min_distance: int
) -> bool:
    """Return True if cell is at least min_distance away from every placed mine."""
    return all(manhattan_distance(cell, other) >= min_distance for other in placed)


def min_pairwise_distance(cells: List[Coordinate]) -> Optional[int]:
    """
    Smallest Manhattan distance between any two cells.

    Returns:
        The minimum distance, or None when fewer than two cells are given.
    """
    if len(cells) < 2:
        return None
    return min(manhattan_distance(a, b) for a, b in itertools.combinations(cells, 2))


def all_non_attacking(cells: List[Coordinate]) -> bool:
    """Return True if no pair of cells shares a row, column or diagonal."""
    return not any(attacks(a, b) for a, b in itertools.combinations(cells, 2))
