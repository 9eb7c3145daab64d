import itertools
import random

import pytest

from minestake.engine import Board, Tile
from minestake.errors import PlacementInfeasibleError
from minestake.placement import (
    PlacementStrategy,
    choose_strategy,
    min_distance_for,
    place_constraint_backtracking,
    place_min_distance,
    place_random,
)
from minestake.utils import all_non_attacking, manhattan_distance


def blank_grid(size):
    return [[Tile() for _ in range(size)] for _ in range(size)]


def mines_in(grid):
    return [(r, c) for r, row in enumerate(grid) for c, tile in enumerate(row) if tile.is_mine]


# -------------------------------------------------------------------------
# Constraint backtracking
# -------------------------------------------------------------------------


@pytest.mark.parametrize("seed", range(20))
def test_constraint_four_by_four_always_solved(seed):
    board = Board(4, 4, rng=random.Random(seed))
    result = board.place_mines(PlacementStrategy.CONSTRAINT_BACKTRACKING)

    assert not result.fell_back
    assert result.used is PlacementStrategy.CONSTRAINT_BACKTRACKING
    mines = board.mine_positions()
    assert len(mines) == 4
    assert sorted(result.mines) == mines
    for (r1, c1), (r2, c2) in itertools.combinations(mines, 2):
        assert r1 != r2
        assert c1 != c2
        assert abs(r1 - r2) != abs(c1 - c2)


@pytest.mark.parametrize("size", [1, 4, 5, 6, 7, 8, 10])
def test_constraint_fills_one_mine_per_row(size):
    grid = blank_grid(size)
    result = place_constraint_backtracking(grid, size, random.Random(size))
    mines = mines_in(grid)
    assert len(mines) == size
    assert all_non_attacking(mines)
    assert result.steps > 0 or size == 1


def test_constraint_fewer_mines_than_rows():
    grid = blank_grid(8)
    place_constraint_backtracking(grid, 3, random.Random(5))
    mines = mines_in(grid)
    assert len(mines) == 3
    assert all_non_attacking(mines)


def test_constraint_zero_mines_places_nothing():
    grid = blank_grid(4)
    result = place_constraint_backtracking(grid, 0, random.Random(0))
    assert result.mines == ()
    assert mines_in(grid) == []


def test_constraint_more_mines_than_rows_is_infeasible():
    grid = blank_grid(4)
    with pytest.raises(PlacementInfeasibleError) as excinfo:
        place_constraint_backtracking(grid, 5, random.Random(0))
    assert excinfo.value.requested == 5
    assert mines_in(grid) == []


@pytest.mark.parametrize("size", [2, 3])
def test_constraint_small_boards_exhaust_search(size):
    # Two non-attacking mines never fit on 2x2, three never on 3x3.
    grid = blank_grid(size)
    with pytest.raises(PlacementInfeasibleError):
        place_constraint_backtracking(grid, size, random.Random(0))
    assert mines_in(grid) == []


def test_constraint_step_budget_clears_grid():
    grid = blank_grid(8)
    with pytest.raises(PlacementInfeasibleError) as excinfo:
        place_constraint_backtracking(grid, 8, random.Random(0), max_steps=1)
    assert excinfo.value.steps == 2
    assert mines_in(grid) == []


def test_board_falls_back_when_constraint_infeasible():
    board = Board(3, 3, rng=random.Random(0))
    result = board.place_mines(PlacementStrategy.CONSTRAINT_BACKTRACKING)
    assert result.fell_back
    assert result.strategy is PlacementStrategy.CONSTRAINT_BACKTRACKING
    assert result.used is PlacementStrategy.RANDOM
    assert result.reason
    assert board.count_mines() == 3


def test_board_strict_raises_on_infeasible_constraint():
    board = Board(3, 3, rng=random.Random(0))
    with pytest.raises(PlacementInfeasibleError):
        board.place_mines(PlacementStrategy.CONSTRAINT_BACKTRACKING, strict=True)
    assert board.count_mines() == 0
    assert not board.mines_placed


# -------------------------------------------------------------------------
# Minimum distance
# -------------------------------------------------------------------------


@pytest.mark.parametrize("size,expected", [(1, 1), (2, 1), (3, 1), (5, 1), (6, 2), (9, 3), (10, 3)])
def test_min_distance_for(size, expected):
    assert min_distance_for(size) == expected


@pytest.mark.parametrize("seed", range(10))
def test_min_distance_respected_or_reported(seed):
    grid = blank_grid(9)
    result = place_min_distance(grid, 9, random.Random(seed))
    mines = mines_in(grid)

    assert len(mines) == 9
    assert result.min_distance == 3
    if not result.fell_back:
        assert result.used is PlacementStrategy.MIN_DISTANCE
        for a, b in itertools.combinations(mines, 2):
            assert manhattan_distance(a, b) >= 3


def test_min_distance_falls_back_to_random_when_impossible():
    # 36 mines on 6x6 cannot be kept 2 apart.
    grid = blank_grid(6)
    result = place_min_distance(grid, 36, random.Random(0), attempts_per_cell=1)
    assert result.fell_back
    assert result.used is PlacementStrategy.RANDOM
    assert result.strategy is PlacementStrategy.MIN_DISTANCE
    assert len(mines_in(grid)) == 36


def test_min_distance_zero_mines():
    grid = blank_grid(5)
    result = place_min_distance(grid, 0, random.Random(0))
    assert not result.fell_back
    assert mines_in(grid) == []


# -------------------------------------------------------------------------
# Uniform random
# -------------------------------------------------------------------------


def test_random_places_exact_count():
    board = Board(5, 20, rng=random.Random(3))
    result = board.place_mines(PlacementStrategy.RANDOM)
    assert board.count_mines() == 20
    assert len(set(result.mines)) == 20


def test_random_full_board_every_reveal_hits_a_mine():
    board = Board(5, 25, rng=random.Random(3))
    board.place_mines(PlacementStrategy.RANDOM)
    assert board.count_mines() == 25
    assert all(not board.reveal_tile(r, c) for r in range(5) for c in range(5))
    assert board.count_mines() == 25


def test_random_rejects_more_mines_than_cells():
    with pytest.raises(ValueError):
        place_random(blank_grid(2), 5, random.Random(0))


# -------------------------------------------------------------------------
# Strategy selection
# -------------------------------------------------------------------------


def test_choose_strategy_draws_all_three():
    rng = random.Random(0)
    drawn = {choose_strategy(rng) for _ in range(300)}
    assert drawn == set(PlacementStrategy)


def test_labels():
    assert PlacementStrategy.CONSTRAINT_BACKTRACKING.label == "N-Queens Algorithm"
    assert PlacementStrategy.MIN_DISTANCE.label == "Minimum Distance Algorithm"
    assert PlacementStrategy.RANDOM.label == "Random Placement"


@pytest.mark.parametrize("seed", range(15))
def test_random_draw_always_places_exact_count(seed):
    board = Board(6, 6, rng=random.Random(seed))
    result = board.place_mines()
    assert board.count_mines() == 6
    assert result.strategy in set(PlacementStrategy)
