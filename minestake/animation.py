"""Cosmetic terminal tasks run on background threads and joined by the round controller."""

import sys
import threading
import time
from typing import Optional, TextIO

from .config import ANIMATION_CONFIG


class LoadingAnimation(threading.Thread):
    """Prints a message followed by a few paced dots and " Done!"."""

    def __init__(
        self,
        message: Optional[str] = None,
        dots: Optional[int] = None,
        dot_delay: Optional[float] = None,
        done_delay: Optional[float] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        super().__init__(name="minestake-loading", daemon=True)
        self.message = message if message is not None else ANIMATION_CONFIG["loading_message"]
        self.dots = dots if dots is not None else ANIMATION_CONFIG["loading_dots"]
        self.dot_delay = dot_delay if dot_delay is not None else ANIMATION_CONFIG["dot_delay"]
        self.done_delay = done_delay if done_delay is not None else ANIMATION_CONFIG["done_delay"]
        self.stream = stream

    def run(self) -> None:
        out = self.stream if self.stream is not None else sys.stdout
        out.write(self.message)
        out.flush()
        for _ in range(self.dots):
            time.sleep(self.dot_delay)
            out.write(".")
            out.flush()
        out.write(" Done!\n")
        out.flush()
        time.sleep(self.done_delay)


def _print_status(status: str, delay: float, stream: Optional[TextIO]) -> None:
    time.sleep(delay)
    out = stream if stream is not None else sys.stdout
    out.write(f">> {status}\n")
    out.flush()


def status_update(
    status: Optional[str] = None,
    delay: Optional[float] = None,
    stream: Optional[TextIO] = None,
) -> threading.Thread:
    """Start a thread that prints ``>> status`` after a short delay and return it."""
    if status is None:
        status = ANIMATION_CONFIG["status_message"]
    if delay is None:
        delay = ANIMATION_CONFIG["status_delay"]
    thread = threading.Thread(
        target=_print_status,
        args=(status, delay, stream),
        name="minestake-status",
        daemon=True,
    )
    thread.start()
    return thread


def run_and_wait(thread: threading.Thread) -> None:
    """Start the thread if needed and block until it finishes."""
    if thread.ident is None:
        thread.start()
    thread.join()
