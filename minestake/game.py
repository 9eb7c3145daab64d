"""Round controller and session loop for MineStake."""

import logging
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from .animation import LoadingAnimation, run_and_wait, status_update
from .config import ANIMATION_CONFIG, CURRENCY, GAME_CONFIG
from .engine import Board, check_board_dimensions
from .errors import (
    InsufficientBalanceError,
    InvalidBetError,
    RoundOverError,
    TileAlreadyRevealedError,
)
from .history import GameHistory
from .placement import PlacementResult, PlacementStrategy

logger = logging.getLogger("minestake.game")

InputFunc = Callable[[str], str]


class Player:
    """Player name and balance."""

    def __init__(self, name: Optional[str] = None, balance: Optional[float] = None) -> None:
        self.name: str = name if name is not None else GAME_CONFIG["player_name"]
        self.balance: float = (
            float(balance) if balance is not None else GAME_CONFIG["starting_balance"]
        )

    def add_balance(self, amount: float) -> None:
        self.balance += amount

    def deduct_balance(self, amount: float) -> None:
        self.balance -= amount

    def __repr__(self) -> str:
        return f"Player(name={self.name!r}, balance={self.balance:.2f})"


def validate_bet(bet: float, balance: float) -> None:
    """
    Check a bet against the player's balance.

    Raises:
        InvalidBetError: If the bet is not greater than zero.
        InsufficientBalanceError: If the bet exceeds the balance.
    """
    if bet <= 0:
        raise InvalidBetError("Bet amount must be greater than zero!")
    if bet > balance:
        raise InsufficientBalanceError(
            f"Insufficient balance! You only have {CURRENCY}{balance:.2f}"
        )


class RoundStatus(Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class RevealOutcome:
    """Result of one reveal: whether it was safe and the payout state afterwards."""

    safe: bool
    multiplier: float
    potential_winnings: float
    board_cleared: bool = False


class MineStakeRound:
    """
    One wager: bet deduction, board ownership, multiplier and payout.

    The bet is validated and deducted on construction. The board is created
    by ``setup`` and belongs to this round only.
    """

    def __init__(
        self,
        player: Player,
        bet: float,
        mine_count: int,
        board_size: Optional[int] = None,
        rng: Optional[random.Random] = None,
        multiplier_step: Optional[float] = None,
    ) -> None:
        validate_bet(bet, player.balance)
        # Board side equals the mine count unless told otherwise.
        if board_size is None:
            board_size = mine_count
        check_board_dimensions(board_size, mine_count)

        self.player = player
        self.bet = bet
        self.mine_count = mine_count
        self.board_size = board_size
        self.rng = rng
        self.multiplier_step: float = (
            multiplier_step if multiplier_step is not None else GAME_CONFIG["multiplier_step"]
        )

        self.board: Optional[Board] = None
        self.multiplier: float = GAME_CONFIG["base_multiplier"]
        self.safe_tiles_revealed: int = 0
        self.status: RoundStatus = RoundStatus.ACTIVE
        self.winnings: float = 0.0

        player.deduct_balance(bet)
        logger.info("Round started: bet %.2f, %d mines.", bet, mine_count)

    def setup(self, strategy: Optional[PlacementStrategy] = None) -> PlacementResult:
        """
        Create the board and place its mines (one-time).

        Raises:
            RuntimeError: If the round already has a board.
        """
        if self.board is not None:
            raise RuntimeError("This round already has a board.")
        self.board = Board(self.board_size, self.mine_count, rng=self.rng)
        return self.board.place_mines(strategy)

    @property
    def potential_winnings(self) -> float:
        return self.bet * self.multiplier

    def _require_active(self) -> Board:
        if self.status is not RoundStatus.ACTIVE:
            raise RoundOverError("This round is already over.")
        if self.board is None:
            raise RuntimeError("Round has no board; call setup() first.")
        return self.board

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal a tile (0-based) and update the multiplier or end the round.

        Raises:
            TileAlreadyRevealedError: If the tile was revealed earlier; no state changes.
            TileOutOfRangeError: If coordinates are outside the board.
            RoundOverError: If the round has ended.
        """
        board = self._require_active()
        if board.is_tile_revealed(row, col):
            raise TileAlreadyRevealedError(f"Tile ({row}, {col}) is already revealed.")

        if not board.reveal_tile(row, col):
            self.status = RoundStatus.LOST
            self.winnings = 0.0
            logger.info("Mine hit at (%d, %d) after %d safe reveals.", row, col, self.safe_tiles_revealed)
            return RevealOutcome(False, self.multiplier, 0.0)

        self.safe_tiles_revealed += 1
        self.multiplier += self.multiplier_step
        cleared = board.safe_tiles_remaining() == 0
        return RevealOutcome(True, self.multiplier, self.potential_winnings, cleared)

    def cash_out(self) -> float:
        """Lock in bet * multiplier, credit it to the player and end the round."""
        self._require_active()
        self.winnings = self.potential_winnings
        self.player.add_balance(self.winnings)
        self.status = RoundStatus.WON
        logger.info("Cashed out %.2f at %.2fx.", self.winnings, self.multiplier)
        return self.winnings


# -------------------------------------------------------------------------
# Console session
# -------------------------------------------------------------------------


class MineStakeGame:
    """Interactive session: repeated rounds until the player stops or goes broke."""

    def __init__(
        self,
        player: Optional[Player] = None,
        history: Optional[GameHistory] = None,
        input_func: InputFunc = input,
        rng: Optional[random.Random] = None,
        strategy: Optional[PlacementStrategy] = None,
        animations: Optional[bool] = None,
        min_mines: Optional[int] = None,
        max_mines: Optional[int] = None,
    ) -> None:
        self.player = player if player is not None else Player()
        self.history = history if history is not None else GameHistory()
        self.input = input_func
        self.rng = rng
        self.strategy = strategy
        self.animations = animations if animations is not None else ANIMATION_CONFIG["enabled"]
        self.min_mines = min_mines if min_mines is not None else GAME_CONFIG["min_mines"]
        self.max_mines = max_mines if max_mines is not None else GAME_CONFIG["max_mines"]
        self.current_round: Optional[MineStakeRound] = None

    def display_balance(self) -> None:
        print(f"Current Balance: {CURRENCY}{self.player.balance:.2f}")

    def start_game(self) -> None:
        """Run rounds until the player declines to replay or the balance hits zero."""
        print("\n" + "=" * 50)
        print("         WELCOME TO MINESTAKE GAME")
        print("=" * 50)

        play_again = True
        while play_again and self.player.balance > 0:
            try:
                self.play_round()
            except (InvalidBetError, InsufficientBalanceError) as e:
                print(f"Error: {e}")
                continue

            if self.player.balance <= 0:
                print("\nGame Over! You're out of balance.")
                break

            play_again = self.ask_yes_no("\nDo you want to play again? (y/n): ")

        self.end_game()

    def play_round(self) -> MineStakeRound:
        """
        Play one round from bet prompt to cash-out or mine.

        Raises:
            InvalidBetError: If the entered bet is not positive.
            InsufficientBalanceError: If the entered bet exceeds the balance.
        """
        print("\n" + "-" * 50)
        self.display_balance()

        bet = self.prompt_bet()
        validate_bet(bet, self.player.balance)
        mine_count = self.prompt_mine_count()

        game_round = MineStakeRound(self.player, bet, mine_count, rng=self.rng)
        self.current_round = game_round

        if self.animations:
            run_and_wait(LoadingAnimation())

        result = game_round.setup(self.strategy)
        self.announce_placement(result)

        if self.animations:
            run_and_wait(status_update())

        board = game_round._require_active()

        while game_round.status is RoundStatus.ACTIVE:
            board.display_board()
            row, col = self.prompt_coordinates(board.size)

            try:
                outcome = game_round.reveal(row - 1, col - 1)
            except TileAlreadyRevealedError:
                print("WARNING: This tile is already revealed. Try another one.")
                continue

            if not outcome.safe:
                print(f"\nBOOM! Mine hit! You lost {CURRENCY}{bet:.2f}")
                board.display_board()
                self.history.append(False, bet, 0.0, self.player.balance)
                break

            print(f"\nDIAMOND Safe! Multiplier: {outcome.multiplier:.2f}x")
            print(f"Potential Winnings: {CURRENCY}{outcome.potential_winnings:.2f}")

            if outcome.board_cleared:
                print("\nEvery safe tile is revealed!")
                self.finish_with_cash_out(game_round)
            elif self.ask_yes_no("\nCash out? (y/n): "):
                self.finish_with_cash_out(game_round)

        return game_round

    def finish_with_cash_out(self, game_round: MineStakeRound) -> None:
        winnings = game_round.cash_out()
        print(f"\nCongratulations! You won {CURRENCY}{winnings:.2f}")
        self.history.append(True, game_round.bet, winnings, self.player.balance)

    def announce_placement(self, result: PlacementResult) -> None:
        if self.strategy is None:
            print("\nRandomly selecting mine placement algorithm...")
        print(f"Selected: {result.strategy.label}")

        if result.fell_back:
            if result.strategy is PlacementStrategy.MIN_DISTANCE:
                print("Min distance placement failed, using random...")
            else:
                print(f"{result.strategy.label} could not place every mine, using random...")
        elif result.min_distance is not None:
            print(f"(Minimum distance between mines: {result.min_distance} tiles)")

    def end_game(self) -> None:
        print("\n" + "=" * 50)
        print("              GAME SUMMARY")
        print("=" * 50)
        print(f"Final Balance: {CURRENCY}{self.player.balance:.2f}")
        print("\nLast 5 Game Records:")
        self.history.display_last(5)
        print("\n" + "=" * 50)
        print("      Thanks for playing MineStake!")
        print("=" * 50)

    # -------------------------------------------------------------------------
    # Input helpers
    # -------------------------------------------------------------------------

    def prompt_bet(self) -> float:
        while True:
            raw = self.input(f"Enter bet amount: {CURRENCY}").strip()
            try:
                bet = float(raw)
            except ValueError:
                print("Invalid input. Please enter a valid number.")
                continue

            if math.isfinite(bet):
                return bet
            print("Invalid input. Please enter a valid number.")

    def prompt_mine_count(self) -> int:
        while True:
            raw = self.input(
                f"Enter number of mines ({self.min_mines}-{self.max_mines}): "
            ).strip()
            try:
                mines = int(raw)
            except ValueError:
                print("Invalid input. Please enter a valid number.")
                continue

            if self.min_mines <= mines <= self.max_mines:
                return mines
            print(f"Please enter a number between {self.min_mines} and {self.max_mines}.")

    def prompt_coordinates(self, size: int) -> Tuple[int, int]:
        """Ask for a 1-based ``row col`` pair within the board."""
        while True:
            parts = self.input(f"Enter row and column (1-{size}): ").split()
            if len(parts) != 2:
                print("Please enter two numbers separated by space.")
                continue

            try:
                row = int(parts[0])
                col = int(parts[1])
            except ValueError:
                print("Invalid input. Please enter valid numbers.")
                continue

            if 1 <= row <= size and 1 <= col <= size:
                return row, col
            print(f"Please enter numbers between 1 and {size}.")

    def ask_yes_no(self, prompt: str) -> bool:
        return self.input(prompt).strip().lower() == "y"


def play_cli(game: Optional[MineStakeGame] = None) -> None:
    """
    Run a MineStake session in the terminal.

    Args:
        game: A configured session; a default one is created if omitted.
    """
    if game is None:
        game = MineStakeGame()
    game.start_game()
