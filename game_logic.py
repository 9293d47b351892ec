# Core Snake game state and rules, independent from GUI/autopilot code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace
from enum import Enum
import random
from typing import Collection, Iterable, Iterator, Optional


Cell = tuple[int, int]

# Bounds used by the GUI and CLI when validating user input.
MIN_BOARD_PIXELS = 100
MAX_BOARD_PIXELS = 1200
MIN_CELL_SIZE = 10
MAX_CELL_SIZE = 60
MIN_SPEED_MS = 20
MAX_SPEED_MS = 1000

# Random draws allowed per board cell before the spawner scans for free tiles.
FOOD_ATTEMPTS_PER_CELL = 4

ACTIONS = ("up", "down", "left", "right")
REVERSE_DIRECTION = {"up": "down", "down": "up", "left": "right", "right": "left"}
DIRECTION_DELTAS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


class Phase(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class BoardFullError(ValueError):
    """Raised when no free cell is left for food."""


@dataclass(frozen=True)
class GridWorld:
    """Fixed board geometry measured in cells."""
    columns: int
    rows: int

    def __post_init__(self) -> None:
        if self.columns <= 0 or self.rows <= 0:
            raise ValueError(f"Grid must have at least one column and row, got {self.columns}x{self.rows}.")

    @classmethod
    def from_board(cls, width: int, height: int, cell_size: int) -> GridWorld:
        """Derive the cell grid from pixel dimensions (partial cells are dropped)."""
        if cell_size <= 0:
            raise ValueError("cell_size must be > 0")
        return cls(width // cell_size, height // cell_size)

    @property
    def cell_count(self) -> int:
        return self.columns * self.rows

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.columns and 0 <= y < self.rows

    def cells(self) -> Iterator[Cell]:
        for y in range(self.rows):
            for x in range(self.columns):
                yield x, y


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer, GUI and CLI."""
    board_width: int = 400
    board_height: int = 400
    cell_size: int = 20
    speed_ms: int = 100
    origin: Cell = (5, 5)
    autopilot: bool = False
    seed: Optional[int] = None
    show_grid: bool = True

    @property
    def columns(self) -> int:
        return self.board_width // self.cell_size

    @property
    def rows(self) -> int:
        return self.board_height // self.cell_size

    def grid(self) -> GridWorld:
        return GridWorld.from_board(self.board_width, self.board_height, self.cell_size)

    def resized(self, board_width: int, board_height: int, cell_size: int) -> SnakeConfig:
        """Copy with new board geometry; the origin is clamped into the new grid."""
        columns = max(1, board_width // cell_size) if cell_size > 0 else 1
        rows = max(1, board_height // cell_size) if cell_size > 0 else 1
        origin = (min(self.origin[0], columns - 1), min(self.origin[1], rows - 1))
        return replace(
            self,
            board_width=board_width,
            board_height=board_height,
            cell_size=cell_size,
            origin=origin,
        )

    def validate(self) -> None:
        """Raise ValueError naming the first setting that is out of range."""
        for label, value in (("Board width", self.board_width), ("Board height", self.board_height)):
            if not (MIN_BOARD_PIXELS <= value <= MAX_BOARD_PIXELS):
                raise ValueError(f"{label} must be between {MIN_BOARD_PIXELS} and {MAX_BOARD_PIXELS}.")
        if not (MIN_CELL_SIZE <= self.cell_size <= MAX_CELL_SIZE):
            raise ValueError(f"Cell size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}.")
        if not (MIN_SPEED_MS <= self.speed_ms <= MAX_SPEED_MS):
            raise ValueError(f"Speed must be between {MIN_SPEED_MS} and {MAX_SPEED_MS}.")
        grid = self.grid()
        if grid.cell_count < 2:
            raise ValueError("Board must hold at least two cells.")
        if not grid.contains(self.origin):
            raise ValueError(f"Origin {self.origin} lies outside the {grid.columns}x{grid.rows} grid.")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of one tick, handed to renderers."""
    body: tuple[Cell, ...]
    food: Cell
    direction: str
    score: int
    phase: Phase
    columns: int
    rows: int

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER


def next_cell(cell: Cell, direction: str) -> Cell:
    """Translate a cell by one tile in the given direction."""
    dx, dy = DIRECTION_DELTAS[direction]
    return cell[0] + dx, cell[1] + dy


def is_collision(candidate: Cell, body: Collection[Cell], grid: GridWorld) -> bool:
    """True if the candidate head leaves the grid or hits any pre-move segment.

    The tail counts as occupied: it has not been popped yet when this runs,
    so moving into the cell the tail is about to vacate is fatal.
    """
    if not grid.contains(candidate):
        return True
    return candidate in body


def spawn_food(
    body: Collection[Cell],
    grid: GridWorld,
    rng: random.Random,
    max_attempts: Optional[int] = None,
) -> Cell:
    """Pick a uniformly random cell outside the body.

    Rejection sampling is capped; once the cap is hit the remaining free cells
    are enumerated instead, and a completely covered board raises BoardFullError.
    """
    if max_attempts is None:
        max_attempts = grid.cell_count * FOOD_ATTEMPTS_PER_CELL

    for _ in range(max_attempts):
        cell = (rng.randrange(grid.columns), rng.randrange(grid.rows))
        if cell not in body:
            return cell

    free_cells = [cell for cell in grid.cells() if cell not in body]
    if not free_cells:
        raise BoardFullError(f"No free cell left for food on a {grid.columns}x{grid.rows} grid.")
    return rng.choice(free_cells)


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code)."""
    def __init__(self, config: SnakeConfig, rng: Optional[random.Random] = None) -> None:
        self.config = config
        self.grid = config.grid()
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.reset()

    def reset(self) -> None:
        """Initialize a fresh board: one-cell snake at the origin heading right."""
        if not self.grid.contains(self.config.origin):
            raise ValueError(f"Origin {self.config.origin} lies outside the grid.")
        self.snake: deque[Cell] = deque([self.config.origin])   # ordered body, head at index 0
        self.snake_set: set[Cell] = {self.config.origin}        # O(1) body collision lookup
        self.direction = "right"
        self.pending_direction = "right"                        # last accepted input; read next tick
        self.score = 0
        self.phase = Phase.RUNNING
        self.food = spawn_food(self.snake_set, self.grid, self.rng)

    @property
    def head(self) -> Cell:
        return self.snake[0]

    @property
    def alive(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def game_over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def set_state(self, body: Iterable[Cell], food: Cell, direction: str = "right") -> None:
        """Load an arbitrary running position (score is reset to 0)."""
        cells = [tuple(cell) for cell in body]
        if not cells:
            raise ValueError("Snake body cannot be empty.")
        if len(set(cells)) != len(cells):
            raise ValueError("Snake body cannot overlap itself.")
        for cell in cells:
            if not self.grid.contains(cell):
                raise ValueError(f"Snake segment {cell} lies outside the grid.")
        if not self.grid.contains(food) or food in cells:
            raise ValueError(f"Food {food} must be an in-bounds cell outside the snake.")
        if direction not in DIRECTION_DELTAS:
            raise ValueError(f"Unknown direction: {direction}")

        self.snake = deque(cells)
        self.snake_set = set(cells)
        self.food = tuple(food)
        self.direction = direction
        self.pending_direction = direction
        self.score = 0
        self.phase = Phase.RUNNING

    def queue_direction(self, new_direction: str) -> None:
        """Accept an input direction; reject unknown values and instant 180-degree turns."""
        if new_direction not in REVERSE_DIRECTION:
            return
        if REVERSE_DIRECTION[new_direction] == self.direction:
            return
        self.pending_direction = new_direction

    def _apply_direction(self, requested: Optional[str]) -> None:
        if requested is None:
            requested = self.pending_direction
        if requested in DIRECTION_DELTAS:
            # A reversal on a longer snake would run straight into the neck.
            reversing = REVERSE_DIRECTION[requested] == self.direction
            if not (reversing and len(self.snake) > 1):
                self.direction = requested
        self.pending_direction = self.direction

    def step(self, direction: Optional[str] = None) -> bool:
        """Advance one tick. Returns False once the game is over."""
        if self.phase is Phase.GAME_OVER:
            return False

        self._apply_direction(direction)
        new_head = next_cell(self.snake[0], self.direction)

        if is_collision(new_head, self.snake_set, self.grid):
            # Body and score stay at their last valid values for reporting.
            self.phase = Phase.GAME_OVER
            return False

        if new_head == self.food:
            # Place the next food before committing the move; a full board ends the game.
            try:
                new_food = spawn_food(self.snake_set | {new_head}, self.grid, self.rng)
            except BoardFullError:
                self.phase = Phase.GAME_OVER
                return False
            self.snake.appendleft(new_head)
            self.snake_set.add(new_head)
            self.score += 1
            self.food = new_food
        else:
            self.snake.appendleft(new_head)
            self.snake_set.add(new_head)
            old_tail = self.snake.pop()
            self.snake_set.discard(old_tail)
        return True

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            body=tuple(self.snake),
            food=self.food,
            direction=self.direction,
            score=self.score,
            phase=self.phase,
            columns=self.grid.columns,
            rows=self.grid.rows,
        )
