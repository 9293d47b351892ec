# A* pathfinding autopilot and the safe-move fallback used when no path exists.
from __future__ import annotations

from typing import Collection, Optional, Sequence

import numpy as np

try:
    from .game_logic import (
        DIRECTION_DELTAS,
        REVERSE_DIRECTION,
        Cell,
        GridWorld,
        SnakeGame,
        is_collision,
        next_cell,
    )
except ImportError:
    from game_logic import (
        DIRECTION_DELTAS,
        REVERSE_DIRECTION,
        Cell,
        GridWorld,
        SnakeGame,
        is_collision,
        next_cell,
    )


# Fixed priority for the fallback; do not reorder.
FALLBACK_ORDER = ("up", "down", "left", "right")
NEIGHBOR_STEPS = ((0, -1), (0, 1), (-1, 0), (1, 0))
DELTA_TO_DIRECTION = {delta: direction for direction, delta in DIRECTION_DELTAS.items()}


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


class SearchArena:
    """Per-search node storage, one slot per grid cell.

    Nodes are addressed by flat index ``y * columns + x``; ``parent`` holds the
    flat index of the predecessor or -1. Nothing here outlives one search.
    """

    def __init__(self, grid: GridWorld, obstacles: Collection[Cell]) -> None:
        self.columns = grid.columns
        size = grid.cell_count
        self.g = np.zeros(size, dtype=np.int32)
        self.h = np.zeros(size, dtype=np.int32)
        self.f = np.zeros(size, dtype=np.int32)
        self.parent = np.full(size, -1, dtype=np.int32)
        self.obstacle = np.zeros(size, dtype=bool)
        self.closed = np.zeros(size, dtype=bool)
        self.in_open = np.zeros(size, dtype=bool)
        for cell in obstacles:
            if grid.contains(cell):
                self.obstacle[self.index(cell)] = True

    def index(self, cell: Cell) -> int:
        return cell[1] * self.columns + cell[0]

    def cell(self, index: int) -> Cell:
        return index % self.columns, index // self.columns

    def set_scores(self, index: int, g: int, h: int, parent: int) -> None:
        self.g[index] = g
        self.h[index] = h
        self.f[index] = g + h
        self.parent[index] = parent

    def trace(self, index: int) -> list[Cell]:
        """Follow parent links back to the start, which is left out of the result."""
        path: list[Cell] = []
        while self.parent[index] != -1:
            path.append(self.cell(index))
            index = int(self.parent[index])
        path.reverse()
        return path


def find_path(start: Cell, goal: Cell, body: Collection[Cell], grid: GridWorld) -> Optional[list[Cell]]:
    """
    A* over the 4-connected grid with every body cell as an obstacle.
    Returns the cells after ``start`` up to and including ``goal``,
    or None when the goal cannot be reached.
    """
    if start == goal:
        return []

    arena = SearchArena(grid, body)
    start_idx = arena.index(start)
    arena.set_scores(start_idx, 0, manhattan(start, goal), -1)
    open_nodes = [start_idx]
    arena.in_open[start_idx] = True

    while open_nodes:
        # argmin returns the first minimum, so ties go to the earliest-added node.
        pos = int(np.argmin(arena.f[open_nodes]))
        current_idx = open_nodes[pos]
        current = arena.cell(current_idx)
        if current == goal:
            return arena.trace(current_idx)

        del open_nodes[pos]
        arena.in_open[current_idx] = False
        arena.closed[current_idx] = True

        tentative_g = int(arena.g[current_idx]) + 1
        for dx, dy in NEIGHBOR_STEPS:
            neighbor = (current[0] + dx, current[1] + dy)
            if not grid.contains(neighbor):
                continue
            n_idx = arena.index(neighbor)
            if arena.obstacle[n_idx] or arena.closed[n_idx]:
                continue
            if not arena.in_open[n_idx]:
                open_nodes.append(n_idx)
                arena.in_open[n_idx] = True
            elif tentative_g >= arena.g[n_idx]:
                continue
            arena.set_scores(n_idx, tentative_g, manhattan(neighbor, goal), current_idx)

    return None


def direction_towards(head: Cell, cell: Cell) -> str:
    """Direction of a 4-adjacent step from head to cell."""
    delta = (cell[0] - head[0], cell[1] - head[1])
    try:
        return DELTA_TO_DIRECTION[delta]
    except KeyError:
        raise ValueError(f"{cell} is not adjacent to {head}") from None


def safe_move(current_direction: str, body: Sequence[Cell], grid: GridWorld) -> str:
    """First non-reversing direction whose next head does not collide; else keep going."""
    head = body[0]
    reverse = REVERSE_DIRECTION[current_direction]
    for direction in FALLBACK_ORDER:
        if direction == reverse:
            continue
        if not is_collision(next_cell(head, direction), body, grid):
            return direction
    return current_direction


def choose_direction(game: SnakeGame) -> str:
    """Autopilot decision for the next tick: follow A* to the food, or fall back."""
    path = find_path(game.head, game.food, game.snake_set, game.grid)
    if path:
        return direction_towards(game.head, path[0])
    return safe_move(game.direction, game.snake, game.grid)
