"""Command-line entry point for MineStake."""

import argparse
import logging
import random
from typing import List, Optional

from .config import ANIMATION_CONFIG, GAME_CONFIG, HISTORY_CONFIG
from .game import MineStakeGame, Player, play_cli
from .history import GameHistory
from .placement import PlacementStrategy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="minestake", description="Terminal mine wagering game.")
    parser.add_argument("--name", type=str, default=GAME_CONFIG["player_name"])
    parser.add_argument("--balance", type=float, default=GAME_CONFIG["starting_balance"])
    parser.add_argument("--log-file", type=str, default=HISTORY_CONFIG["log_file"])
    parser.add_argument("--seed", type=int, default=-1, help="RNG seed; <0 uses OS entropy (random every run)")
    parser.add_argument("--strategy", type=str, default="",
                        choices=[""] + [s.value for s in PlacementStrategy],
                        help="Force one placement algorithm instead of drawing one per round")
    parser.add_argument("--no-animation", action="store_true", default=not ANIMATION_CONFIG["enabled"])
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    game = MineStakeGame(
        player=Player(args.name, args.balance),
        history=GameHistory(args.log_file),
        rng=(None if args.seed < 0 else random.Random(args.seed)),
        strategy=(PlacementStrategy(args.strategy) if args.strategy else None),
        animations=not args.no_animation,
    )
    try:
        play_cli(game)
    except (KeyboardInterrupt, EOFError):
        print("\nQuit.")


if __name__ == "__main__":
    main()
