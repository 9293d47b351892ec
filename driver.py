# Timer-driven game loop shared by the Tkinter GUI and the headless runner.
from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

try:
    from .game_logic import GameSnapshot, SnakeGame
    from .pathfinding import choose_direction
except ImportError:
    from game_logic import GameSnapshot, SnakeGame
    from pathfinding import choose_direction


class Scheduler(Protocol):
    """The slice of the Tkinter timer API the driver needs (tk.Tk satisfies it)."""

    def after(self, ms: int, func: Callable[[], Any]) -> Any: ...

    def after_cancel(self, id: Any) -> None: ...


class TickDriver:
    """
    Runs one decide -> step -> snapshot cycle per tick and reschedules itself.

    Input handlers only touch the pending direction (through
    SnakeGame.queue_direction) and the autopilot flag; ``step`` is called from
    ``advance`` and nowhere else.
    """

    def __init__(
        self,
        game: SnakeGame,
        scheduler: Scheduler,
        on_snapshot: Optional[Callable[[GameSnapshot], None]] = None,
        on_game_over: Optional[Callable[[int], None]] = None,
        interval_ms: Optional[int] = None,
        autopilot: Optional[bool] = None,
    ) -> None:
        self.game = game
        self.scheduler = scheduler
        self.on_snapshot = on_snapshot
        self.on_game_over = on_game_over
        self.interval_ms = interval_ms if interval_ms is not None else game.config.speed_ms
        self.autopilot = game.config.autopilot if autopilot is None else autopilot
        self.after_id: Any = None      # scheduler timer id for the next tick
        self.running = False
        self.paused = False
        self._game_over_reported = False

    def _cancel_loop(self) -> None:
        if self.after_id is not None:
            self.scheduler.after_cancel(self.after_id)
            self.after_id = None

    def _schedule(self) -> None:
        self.after_id = self.scheduler.after(self.interval_ms, self.tick)

    def decide(self) -> Optional[str]:
        """Direction for the coming step; None means the pending manual input."""
        if self.autopilot:
            return choose_direction(self.game)
        return None

    def advance(self) -> GameSnapshot:
        """Run a single tick synchronously and emit its snapshot."""
        self.game.step(self.decide())
        snapshot = self.game.snapshot()
        if self.on_snapshot is not None:
            self.on_snapshot(snapshot)
        if snapshot.game_over and not self._game_over_reported:
            self._game_over_reported = True
            self.running = False
            if self.on_game_over is not None:
                self.on_game_over(snapshot.score)
        return snapshot

    def tick(self) -> None:
        """Timer callback; reschedules itself while the game runs and is not paused."""
        self._cancel_loop()
        if not self.running or self.paused:
            return
        snapshot = self.advance()
        if not snapshot.game_over and self.running and not self.paused:
            self._schedule()

    def start(self) -> None:
        """Reset the board and begin ticking."""
        self._cancel_loop()
        self.game.reset()
        self._game_over_reported = False
        self.running = True
        self.paused = False
        self.tick()

    def reset(self) -> GameSnapshot:
        """Stop ticking and reinitialize the game; the loop waits for start()."""
        self.stop()
        self.game.reset()
        self._game_over_reported = False
        self.paused = False
        snapshot = self.game.snapshot()
        if self.on_snapshot is not None:
            self.on_snapshot(snapshot)
        return snapshot

    def stop(self) -> None:
        self._cancel_loop()
        self.running = False

    def toggle_pause(self) -> None:
        """Pause/resume without losing the current board state."""
        if not self.running:
            return
        self.paused = not self.paused
        if self.paused:
            self._cancel_loop()
        else:
            self.tick()

    def press_direction(self, direction: str) -> None:
        """Manual input; ignored while the autopilot is steering."""
        if self.autopilot:
            return
        self.game.queue_direction(direction)

    def set_autopilot(self, enabled: bool) -> None:
        self.autopilot = bool(enabled)

    def toggle_autopilot(self) -> bool:
        self.autopilot = not self.autopilot
        return self.autopilot
