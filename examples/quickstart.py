"""
Quickstart example for MineStake.

This script demonstrates the board, the placement strategies and a scripted round.
"""

import random

from minestake import (
    Board,
    MineStakeRound,
    PlacementStrategy,
    Player,
    run_placement_many_tests,
    simulate_cash_out_policy,
)


def main():
    print("=" * 60)
    print("MineStake - Quickstart Example")
    print("=" * 60)

    # Example 1: One board per strategy
    print("\n1. Placing 6 mines on a 6x6 board with each strategy...")
    print("-" * 60)

    for strategy in PlacementStrategy:
        board = Board(6, 6, rng=random.Random(7))
        result = board.place_mines(strategy)
        note = " (fell back to random)" if result.fell_back else ""
        print(f"{strategy.label}{note}")
        print(board.format_board(reveal_all=True))
        print()

    # Example 2: A scripted round
    print("\n2. Playing a round: bet 100 on 4 mines, reveal until a mine or two safe tiles...")
    print("-" * 60)

    player = Player(balance=1000.0)
    game_round = MineStakeRound(player, 100.0, 4, rng=random.Random(3))
    game_round.setup(PlacementStrategy.CONSTRAINT_BACKTRACKING)

    assert game_round.board is not None
    safe_cells = [
        (r, c)
        for r in range(game_round.board.size)
        for c in range(game_round.board.size)
        if not game_round.board.is_mine(r, c)
    ]
    for row, col in safe_cells[:2]:
        outcome = game_round.reveal(row, col)
        print(f"Revealed ({row + 1}, {col + 1}): multiplier {outcome.multiplier:.2f}x")

    winnings = game_round.cash_out()
    print(f"Cashed out Rs.{winnings:.2f}, balance now Rs.{player.balance:.2f}")

    # Example 3: Strategy statistics
    print("\n3. Running 50 placements per strategy on 8x8 with 8 mines...")
    print("-" * 60)

    for strategy in PlacementStrategy:
        stats = run_placement_many_tests(8, 8, 50, strategy)
        print(
            f"{strategy.value:15s} fallback {stats['fallback_rate']*100:5.1f}%  "
            f"min distance {stats['avg_min_pairwise_distance']:.2f}  "
            f"{stats['avg_elapsed_ms']:.2f} ms"
        )

    # Example 4: Cash-out policies
    print("\n4. Expected return of 'reveal k tiles then cash out' on 5x5 with 5 mines...")
    print("-" * 60)

    for k in (1, 2, 4, 8):
        sim = simulate_cash_out_policy(5, 5, k, 500)
        print(
            f"k={k}: win rate {sim['win_rate']*100:5.1f}%  "
            f"mean return {sim['mean_return']:+.3f}"
        )

    print("\n" + "=" * 60)
    print("Done! Run `minestake` to play in the terminal.")
    print("=" * 60)


if __name__ == "__main__":
    main()
