"""
MineStake

A terminal mine wagering game. Mines are placed by one of three strategies
drawn at random for each round:
- Constraint backtracking: no two mines share a row, column or diagonal
- Minimum distance: mines kept at least max(1, size // 3) apart (Manhattan)
- Uniform random: the fallback for the other two
"""

from .engine import Board, Tile
from .errors import (
    InsufficientBalanceError,
    InvalidBetError,
    MineStakeError,
    PlacementInfeasibleError,
    RoundOverError,
    TileAlreadyRevealedError,
    TileOutOfRangeError,
)
from .game import MineStakeGame, MineStakeRound, Player, play_cli, validate_bet
from .history import GameHistory
from .placement import PlacementResult, PlacementStrategy
from .analysis import (
    run_placement_single_test,
    run_placement_many_tests,
    run_placement_size_analysis,
    simulate_cash_out_policy,
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Board",
    "Tile",
    "PlacementStrategy",
    "PlacementResult",
    "Player",
    "MineStakeRound",
    "MineStakeGame",
    "GameHistory",
    "validate_bet",
    # Errors
    "MineStakeError",
    "InvalidBetError",
    "InsufficientBalanceError",
    "PlacementInfeasibleError",
    "TileOutOfRangeError",
    "TileAlreadyRevealedError",
    "RoundOverError",
    # CLI
    "play_cli",
    # Analysis functions
    "run_placement_single_test",
    "run_placement_many_tests",
    "run_placement_size_analysis",
    "simulate_cash_out_policy",
]
