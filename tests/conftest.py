from __future__ import annotations

import random
from typing import Any, Callable

import pytest

from game_logic import SnakeConfig, SnakeGame


class FakeScheduler:
    """Records after() calls instead of waiting on a real Tk event loop."""

    def __init__(self) -> None:
        self.pending: dict[int, tuple[int, Callable[[], Any]]] = {}
        self.cancelled: list[int] = []
        self._next_id = 0

    def after(self, ms: int, func: Callable[[], Any]) -> int:
        self._next_id += 1
        self.pending[self._next_id] = (ms, func)
        return self._next_id

    def after_cancel(self, id: int) -> None:
        self.cancelled.append(id)
        self.pending.pop(id, None)

    def fire(self) -> None:
        """Run the oldest pending callback, like one timer expiry."""
        timer_id = min(self.pending)
        _, func = self.pending.pop(timer_id)
        func()


def small_config(size: int = 5, origin: tuple[int, int] = (2, 2), **kwargs: Any) -> SnakeConfig:
    return SnakeConfig(board_width=size, board_height=size, cell_size=1, origin=origin, **kwargs)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def make_game() -> Callable[..., SnakeGame]:
    def factory(size: int = 5, origin: tuple[int, int] = (2, 2), seed: int = 7, **kwargs: Any) -> SnakeGame:
        return SnakeGame(small_config(size, origin, **kwargs), rng=random.Random(seed))

    return factory
