"""Append-only round history kept as a plain text log."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from .config import CURRENCY, HISTORY_CONFIG

logger = logging.getLogger("minestake.history")

TIMESTAMP_FORMAT = "%a %b %d %H:%M:%S %Z %Y"


def format_entry(
    won: bool,
    bet: float,
    winnings: float,
    balance: float,
    timestamp: Optional[datetime] = None,
    currency: str = CURRENCY,
) -> str:
    """
    Build one log line.

    Format: ``<timestamp> | WIN|LOSS | Bet: <amt> | Winnings: <amt> | Balance: <amt>``
    with every amount fixed to two decimals.
    """
    if timestamp is None:
        timestamp = datetime.now().astimezone()
    result = "WIN" if won else "LOSS"
    return (
        f"{timestamp.strftime(TIMESTAMP_FORMAT)} | {result} | "
        f"Bet: {currency}{bet:.2f} | "
        f"Winnings: {currency}{winnings:.2f} | "
        f"Balance: {currency}{balance:.2f}"
    )


class GameHistory:
    """Append-only game log backed by a text file."""

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        if path is None:
            path = HISTORY_CONFIG["log_file"]
        self.path = Path(path)

    def append(
        self,
        won: bool,
        bet: float,
        winnings: float,
        balance: float,
        timestamp: Optional[datetime] = None,
    ) -> bool:
        """
        Append one completed round to the log.

        Write failures are reported and swallowed so a round never aborts
        because of the log.

        Returns:
            True if the line was written.
        """
        entry = format_entry(won, bet, winnings, balance, timestamp)
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(entry + "\n")
        except OSError as e:
            logger.warning("Could not append to %s: %s", self.path, e)
            print(f"Error writing to log file: {e}")
            return False
        return True

    def last(self, count: Optional[int] = None) -> List[str]:
        """
        Return up to the last ``count`` lines of the log, oldest first.

        A missing log file is an empty history.
        """
        if count is None:
            count = HISTORY_CONFIG["display_count"]
        if count <= 0 or not self.path.exists():
            return []

        try:
            with self.path.open("r", encoding="utf-8") as f:
                lines = [line.rstrip("\n") for line in f if line.strip()]
        except OSError as e:
            logger.warning("Could not read %s: %s", self.path, e)
            print(f"Error reading log file: {e}")
            return []

        return lines[-count:]

    def display_last(self, count: Optional[int] = None) -> None:
        """Print the most recent rounds, numbered from 1."""
        if not self.path.exists():
            print("No game history found.")
            return
        for i, line in enumerate(self.last(count), start=1):
            print(f"{i}. {line}")
