import os
import random
from typing import Callable, List, Union

os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from minestake.game import MineStakeGame

Answer = Union[str, Callable[[MineStakeGame], str]]


class ScriptedInput:
    """Feeds canned answers to MineStakeGame prompts; callables see the live game."""

    def __init__(self, answers: List[Answer]) -> None:
        self.answers = list(answers)
        self.prompts: List[str] = []
        self.game: MineStakeGame = None  # type: ignore[assignment]

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError("script exhausted")
        answer = self.answers.pop(0)
        if callable(answer):
            return answer(self.game)
        return answer


def _find_tile(game: MineStakeGame, want_mine: bool) -> str:
    board = game.current_round.board
    for row in range(board.size):
        for col in range(board.size):
            if board.is_mine(row, col) == want_mine and not board.is_tile_revealed(row, col):
                return f"{row + 1} {col + 1}"
    raise AssertionError("no matching tile")


def safe_tile(game: MineStakeGame) -> str:
    return _find_tile(game, want_mine=False)


def mine_tile(game: MineStakeGame) -> str:
    return _find_tile(game, want_mine=True)


@pytest.fixture
def rng():
    return random.Random(1234)
