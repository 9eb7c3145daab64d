"""Exception types raised by the MineStake engine and round controller."""


class MineStakeError(Exception):
    """Base class for all MineStake errors."""


class InvalidBetError(MineStakeError):
    """Raised when a bet amount is zero or negative."""


class InsufficientBalanceError(MineStakeError):
    """Raised when a bet exceeds the player's current balance."""


class PlacementInfeasibleError(MineStakeError):
    """
    Raised when the constraint-backtracking strategy cannot place every mine.

    Attributes:
        placed: Number of mines the search managed to hold when it gave up.
        requested: Number of mines that were asked for.
        steps: Search steps spent before giving up.
    """

    def __init__(self, message: str, placed: int, requested: int, steps: int) -> None:
        super().__init__(message)
        self.placed = placed
        self.requested = requested
        self.steps = steps


class TileOutOfRangeError(MineStakeError, ValueError):
    """Raised when tile coordinates fall outside the board."""


class TileAlreadyRevealedError(MineStakeError):
    """Raised when a round is asked to reveal a tile a second time."""


class RoundOverError(MineStakeError):
    """Raised when a finished round is asked to reveal or cash out."""
