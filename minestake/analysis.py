"""Benchmarking tools for the mine placement strategies and cash-out policies."""

import random
import time
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .engine import Board
from .placement import PlacementStrategy, min_distance_for
from .utils import all_non_attacking, min_pairwise_distance


def run_placement_single_test(
    size: int,
    mine_count: int,
    strategy: PlacementStrategy,
    *,
    seed: Optional[int] = None,
    show_board: bool = False,
) -> Dict[str, object]:
    """
    Place mines once on a fresh board and describe the outcome.

    Args:
        size: Board side length.
        mine_count: Number of mines to place.
        strategy: Placement strategy to run.
        seed: Seed for a dedicated random source, for reproducible runs.
        show_board: If True, print the board with every mine visible.

    Returns:
        Dict with keys:
        - strategy, used: strategy values requested and applied
        - fell_back: whether random placement replaced the strategy
        - mines_placed: number of mine tiles on the board
        - constraint_ok: whether the requested strategy's constraint holds
        - min_pairwise_distance: smallest Manhattan distance between mines (None if < 2 mines)
        - steps: search steps reported by the strategy
        - elapsed_ms: wall time of the placement
    """
    rng = random.Random(seed) if seed is not None else random.Random()
    board = Board(size, mine_count, rng=rng)

    start = time.perf_counter()
    result = board.place_mines(strategy)
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    mines = board.mine_positions()
    if strategy is PlacementStrategy.CONSTRAINT_BACKTRACKING:
        constraint_ok = all_non_attacking(mines)
    elif strategy is PlacementStrategy.MIN_DISTANCE:
        min_dist = min_pairwise_distance(mines)
        constraint_ok = min_dist is None or min_dist >= min_distance_for(size)
    else:
        constraint_ok = True

    if show_board:
        print(f"Strategy: {strategy.label} (used: {result.used.label})")
        print(board.format_board(reveal_all=True))
        print()

    return {
        "strategy": strategy.value,
        "used": result.used.value,
        "fell_back": result.fell_back,
        "mines_placed": len(mines),
        "constraint_ok": constraint_ok,
        "min_pairwise_distance": min_pairwise_distance(mines),
        "steps": result.steps,
        "elapsed_ms": elapsed_ms,
    }


def run_placement_many_tests(
    size: int,
    mine_count: int,
    runs: int,
    strategy: PlacementStrategy,
    *,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Run many independent placements and return averaged metrics.

    Args:
        size: Board side length.
        mine_count: Number of mines to place.
        runs: Number of independent boards, must be > 0.
        strategy: Placement strategy to run.
        seed: Base seed; run i uses seed + i.

    Returns:
        Dict with keys:
        - fallback_rate
        - constraint_rate: fraction of boards satisfying the strategy's constraint
        - avg_min_pairwise_distance: over boards with at least two mines
        - avg_steps
        - avg_elapsed_ms
        - exact_count_rate: fraction of boards with exactly mine_count mines
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    sums: Dict[str, float] = defaultdict(float)
    distances: List[int] = []

    for i in range(runs):
        run_seed = None if seed is None else seed + i
        out = run_placement_single_test(size, mine_count, strategy, seed=run_seed)

        sums["fallback_rate"] += 1.0 if out["fell_back"] else 0.0
        sums["constraint_rate"] += 1.0 if out["constraint_ok"] else 0.0
        sums["exact_count_rate"] += 1.0 if out["mines_placed"] == mine_count else 0.0
        sums["avg_steps"] += float(out["steps"])  # type: ignore[arg-type]
        sums["avg_elapsed_ms"] += float(out["elapsed_ms"])  # type: ignore[arg-type]

        if out["min_pairwise_distance"] is not None:
            distances.append(int(out["min_pairwise_distance"]))  # type: ignore[arg-type]

    result: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    result["avg_min_pairwise_distance"] = (
        float(np.mean(distances)) if distances else 0.0
    )
    return result


def simulate_cash_out_policy(
    size: int,
    mine_count: int,
    reveals: int,
    runs: int,
    *,
    strategy: Optional[PlacementStrategy] = None,
    bet: float = 1.0,
    multiplier_step: float = 0.25,
    seed: Optional[int] = None,
) -> Dict[str, float]:
    """
    Estimate the payout of "reveal ``reveals`` random tiles, then cash out".

    Args:
        size: Board side length.
        mine_count: Number of mines on the board.
        reveals: Safe reveals to collect before cashing out.
        runs: Number of simulated rounds, must be > 0.
        strategy: Placement strategy; drawn at random per round when None.
        bet: Stake per round.
        multiplier_step: Multiplier gain per safe reveal.
        seed: Seed for the shared random source.

    Returns:
        Dict with keys win_rate, mean_return (net, per unit bet), std_return
        and cash_out_multiplier.

    Raises:
        ValueError: If reveals exceeds the number of safe tiles or runs <= 0.
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")
    if reveals > size * size - mine_count:
        raise ValueError("reveals exceeds the number of safe tiles.")

    rng = random.Random(seed) if seed is not None else random.Random()
    cash_out_multiplier = 1.0 + reveals * multiplier_step
    returns = np.zeros(runs, dtype=float)

    for i in range(runs):
        board = Board(size, mine_count, rng=rng)
        board.place_mines(strategy)

        order = list(range(size * size))
        rng.shuffle(order)

        survived = True
        for idx in order[:reveals]:
            if not board.reveal_tile(idx // size, idx % size):
                survived = False
                break

        payout = bet * cash_out_multiplier if survived else 0.0
        returns[i] = (payout - bet) / bet

    return {
        "win_rate": float(np.mean(returns > -1.0)),
        "mean_return": float(np.mean(returns)),
        "std_return": float(np.std(returns)),
        "cash_out_multiplier": cash_out_multiplier,
    }


def run_placement_size_analysis(
    runs: int,
    sizes: Sequence[int] = (4, 6, 8, 10),
    *,
    show: bool = True,
    seed: Optional[int] = None,
) -> Dict[int, Dict[str, Dict[str, float]]]:
    """
    Benchmark every strategy on square boards where mine_count equals size, and plot summaries.

    Args:
        runs: Number of boards per (size, strategy).
        sizes: Board sizes to test.
        show: If True, draw the charts with matplotlib.
        seed: Base seed forwarded to run_placement_many_tests.

    Returns:
        Mapping size -> strategy value -> statistics from run_placement_many_tests().
    """
    results: Dict[int, Dict[str, Dict[str, float]]] = {}
    for size in sizes:
        results[size] = {
            strategy.value: run_placement_many_tests(size, size, runs, strategy, seed=seed)
            for strategy in PlacementStrategy
        }

    if not show:
        return results

    x = np.arange(len(sizes))
    bar_w = 0.25
    strategies = list(PlacementStrategy)

    # 1) Fallback rate by strategy
    plt.figure()  # type: ignore[misc]
    for offset, strategy in zip((-bar_w, 0.0, bar_w), strategies):
        rates = [results[s][strategy.value]["fallback_rate"] for s in sizes]
        plt.bar(x + offset, rates, width=bar_w, label=strategy.value)  # type: ignore[misc]
    plt.xticks(x, [f"{s}x{s}" for s in sizes])  # type: ignore[misc]
    plt.ylabel("Fallback rate")  # type: ignore[misc]
    plt.ylim(0.0, 1.0)  # type: ignore[misc]
    plt.title("Random fallback rate by board size")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 2) Average smallest distance between mines
    plt.figure()  # type: ignore[misc]
    for offset, strategy in zip((-bar_w, 0.0, bar_w), strategies):
        dists = [results[s][strategy.value]["avg_min_pairwise_distance"] for s in sizes]
        plt.bar(x + offset, dists, width=bar_w, label=strategy.value)  # type: ignore[misc]
    plt.xticks(x, [f"{s}x{s}" for s in sizes])  # type: ignore[misc]
    plt.ylabel("Average min pairwise distance")  # type: ignore[misc]
    plt.title("Mine spread by strategy")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    # 3) Placement time
    plt.figure()  # type: ignore[misc]
    for offset, strategy in zip((-bar_w, 0.0, bar_w), strategies):
        times = [results[s][strategy.value]["avg_elapsed_ms"] for s in sizes]
        plt.bar(x + offset, times, width=bar_w, label=strategy.value)  # type: ignore[misc]
    plt.xticks(x, [f"{s}x{s}" for s in sizes])  # type: ignore[misc]
    plt.ylabel("Average placement time (ms)")  # type: ignore[misc]
    plt.title("Placement cost by strategy")  # type: ignore[misc]
    plt.legend()  # type: ignore[misc]
    plt.tight_layout()
    plt.show()  # type: ignore[misc]

    return results
