# Shared headless helpers: board encoding, ASCII rendering, autopilot episodes and score stats.
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

try:
    from .driver import TickDriver
    from .game_logic import GameSnapshot, SnakeConfig, SnakeGame
except ImportError:
    from driver import TickDriver
    from game_logic import GameSnapshot, SnakeConfig, SnakeGame


BOARD_EMPTY = 0.0
BOARD_FOOD = 0.5
BOARD_BODY = -0.5
BOARD_HEAD = 1.0

ASCII_GLYPHS = {
    BOARD_EMPTY: ".",
    BOARD_FOOD: "*",
    BOARD_BODY: "o",
    BOARD_HEAD: "@",
}


@dataclass
class EpisodeResult:
    score: int
    length: int
    steps: int
    died: bool


class NullScheduler:
    """Scheduler that never fires; headless runs call TickDriver.advance directly."""

    def after(self, ms: int, func: Callable[[], Any]) -> None:
        return None

    def after_cancel(self, id: Any) -> None:
        return None


def encode_board_state(snapshot: GameSnapshot) -> np.ndarray:
    """
    Board encoding indexed [y, x]:
    - 0.0: empty
    - 0.5: food
    - -0.5: snake body
    - 1.0: snake head
    """
    board = np.full((snapshot.rows, snapshot.columns), BOARD_EMPTY, dtype=np.float32)

    fx, fy = snapshot.food
    board[fy, fx] = BOARD_FOOD

    for idx, (x, y) in enumerate(snapshot.body):
        board[y, x] = BOARD_HEAD if idx == 0 else BOARD_BODY

    return board


def render_ascii(snapshot: GameSnapshot) -> str:
    board = encode_board_state(snapshot)
    lines = ["".join(ASCII_GLYPHS[float(value)] for value in row) for row in board]
    status = "GAME OVER" if snapshot.game_over else "running"
    lines.append(f"score={snapshot.score} length={snapshot.length} {status}")
    return "\n".join(lines)


def run_episode(
    config: SnakeConfig,
    max_steps: int = 2000,
    render_step: Callable[[GameSnapshot, int], None] | None = None,
    game: SnakeGame | None = None,
) -> EpisodeResult:
    """Play one autopilot game tick by tick until it ends or max_steps is hit.

    A passed-in game is reused (and reset) only when it was built from an equal
    config; otherwise a fresh game is made from ``config``.
    """
    if max_steps <= 0:
        raise ValueError("max_steps must be > 0")
    if game is None or game.config != config:
        game = SnakeGame(config)
    else:
        game.reset()

    driver = TickDriver(game, NullScheduler(), autopilot=True)
    steps_taken = 0
    snapshot = game.snapshot()

    for step in range(max_steps):
        snapshot = driver.advance()
        steps_taken = step + 1

        if render_step is not None:
            render_step(snapshot, step)

        if snapshot.game_over:
            break

    return EpisodeResult(
        score=snapshot.score,
        length=snapshot.length,
        steps=steps_taken,
        died=snapshot.game_over,
    )


def score_summary(scores: list[float]) -> dict[str, float]:
    """Mean/median/spread of a batch of scores."""
    if not scores:
        raise ValueError("scores cannot be empty")
    arr = np.asarray(scores, dtype=np.float32)
    return {
        "mean": float(arr.mean()),
        "median": float(np.median(arr)),
        "max": float(arr.max()),
        "min": float(arr.min()),
        "std": float(arr.std()),
        "q1": float(np.percentile(arr, 25)),
        "q3": float(np.percentile(arr, 75)),
    }


def chunked_mean(values: list[float], chunk_size: int) -> tuple[np.ndarray, np.ndarray]:
    """Mean score per block of chunk_size games; x is the game index at each block end."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    arr = np.asarray(values, dtype=np.float32)
    if arr.size == 0:
        empty = np.array([], dtype=np.float32)
        return empty, empty

    starts = np.arange(0, arr.size, chunk_size)
    ends = np.minimum(starts + chunk_size, arr.size)
    means = np.add.reduceat(arr, starts) / (ends - starts)
    return ends.astype(np.float32), means.astype(np.float32)
