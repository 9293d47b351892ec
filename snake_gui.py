# Tkinter Snake front end: renders driver snapshots and forwards keyboard/button input.
from __future__ import annotations

from dataclasses import replace
import tkinter as tk
from tkinter import messagebox

# Support both package imports and running this file directly.
try:
    from .driver import TickDriver
    from .game_logic import (
        MAX_CELL_SIZE,
        MAX_SPEED_MS,
        MIN_CELL_SIZE,
        MIN_SPEED_MS,
        GameSnapshot,
        SnakeConfig,
        SnakeGame,
    )
except ImportError:
    from driver import TickDriver
    from game_logic import (
        MAX_CELL_SIZE,
        MAX_SPEED_MS,
        MIN_CELL_SIZE,
        MIN_SPEED_MS,
        GameSnapshot,
        SnakeConfig,
        SnakeGame,
    )


class SnakeApp:
    """Tkinter presentation layer; all game rules live in SnakeGame/TickDriver."""
    UI_SCALE = 1.2
    BG = "#101418"
    BOARD_BG = "#1c2229"
    SIDEBAR_BG = "#0f1720"
    GRID_COLOR = "#293340"
    SNAKE_HEAD = "#45d483"
    SNAKE_BODY = "#1fb86b"
    AUTOPILOT_HEAD = "#ffd166"
    FOOD_COLOR = "#ff5c74"
    TEXT_PRIMARY = "#e6eef7"
    TEXT_MUTED = "#95a4b8"
    ACCENT = "#42c4ff"
    BORDER_COLOR = "#7f8b99"

    BOARD_PRESETS = {
        "Small (200x200)": 200,
        "Medium (400x400)": 400,
        "Large (600x600)": 600,
    }

    def __init__(self, root: tk.Tk, config: SnakeConfig | None = None) -> None:
        self.root = root
        self.root.title("Snake Autopilot")
        self.root.configure(bg=self.BG)
        self.root.tk.call("tk", "scaling", self.UI_SCALE)
        self.root.minsize(self._s(900), self._s(640))

        self.config = config if config is not None else SnakeConfig()
        self.config.validate()
        self.driver = self._make_driver(self.config)

        self._build_layout()
        self._bind_keys()
        self._apply_canvas_size()
        self.draw(self.driver.game.snapshot())

    def _s(self, value: int) -> int:
        """Scale pixel/font values for better readability."""
        return int(round(value * self.UI_SCALE))

    def _make_driver(self, config: SnakeConfig) -> TickDriver:
        return TickDriver(
            SnakeGame(config),
            self.root,
            on_snapshot=self.draw,
            on_game_over=self.show_game_over,
        )

    def _build_layout(self) -> None:
        """Create game canvas + right sidebar panels."""
        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

        container = tk.Frame(self.root, bg=self.BG)
        container.grid(row=0, column=0, sticky="nsew", padx=self._s(16), pady=self._s(16))
        container.columnconfigure(0, weight=1)
        container.rowconfigure(0, weight=1)

        self.canvas = tk.Canvas(container, bg=self.BOARD_BG, highlightthickness=0, bd=0)
        self.canvas.grid(row=0, column=0, sticky="n", padx=(0, self._s(16)))

        self.sidebar = tk.Frame(container, bg=self.SIDEBAR_BG, width=self._s(320))
        self.sidebar.grid(row=0, column=1, sticky="ns")
        self.sidebar.grid_propagate(False)

        tk.Label(
            self.sidebar,
            text="Snake Controls",
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            font=("Helvetica", self._s(16), "bold"),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(16), self._s(12)))

        self._build_status()
        self._build_controls()
        self._build_buttons()

    def _section(self, text: str) -> tk.LabelFrame:
        frame = tk.LabelFrame(
            self.sidebar,
            text=text,
            fg=self.TEXT_PRIMARY,
            bg=self.SIDEBAR_BG,
            bd=1,
            font=("Helvetica", self._s(10), "bold"),
            labelanchor="n",
        )
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(14)))
        return frame

    def _build_status(self) -> None:
        """Live score/length/run-state/mode labels."""
        frame = self._section("Status")
        self.score_var = tk.StringVar(value="Score: 0")
        self.length_var = tk.StringVar(value="Length: 1")
        self.state_var = tk.StringVar(value="State: Ready")
        self.mode_var = tk.StringVar(value=self._mode_text())

        for var in (self.score_var, self.length_var, self.state_var, self.mode_var):
            tk.Label(
                frame,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.SIDEBAR_BG,
                font=("Helvetica", self._s(11)),
                anchor="w",
            ).pack(fill="x", padx=self._s(10), pady=self._s(4))

    def _build_controls(self) -> None:
        """Settings that rebuild the game when applied."""
        frame = self._section("Settings")
        preset = next(
            (name for name, px in self.BOARD_PRESETS.items() if px == self.config.board_width),
            "Medium (400x400)",
        )
        self.board_var = tk.StringVar(value=preset)
        self.cell_size_var = tk.StringVar(value=str(self.config.cell_size))
        self.speed_var = tk.StringVar(value=str(self.config.speed_ms))

        self._add_labeled_dropdown(frame, "Board", self.board_var, list(self.BOARD_PRESETS.keys()))
        self._add_labeled_spinbox(frame, "Cell Size", self.cell_size_var)
        self._add_labeled_spinbox(frame, "Speed (ms)", self.speed_var)

    def _add_labeled_spinbox(self, parent: tk.Widget, label: str, var: tk.StringVar) -> None:
        row = tk.Frame(parent, bg=self.SIDEBAR_BG)
        row.pack(fill="x", padx=self._s(10), pady=self._s(4))
        tk.Label(row, text=label, fg=self.TEXT_PRIMARY, bg=self.SIDEBAR_BG, font=("Helvetica", self._s(10))).pack(
            side="left"
        )
        tk.Spinbox(
            row,
            from_=0,
            to=999,
            textvariable=var,
            width=8,
            justify="center",
            bd=0,
            relief="flat",
            bg="#e8eef5",
            fg="#1a2734",
            font=("Helvetica", self._s(10)),
        ).pack(side="right")

    def _add_labeled_dropdown(self, parent: tk.Widget, label: str, var: tk.StringVar, options: list[str]) -> None:
        row = tk.Frame(parent, bg=self.SIDEBAR_BG)
        row.pack(fill="x", padx=self._s(10), pady=self._s(4))
        tk.Label(row, text=label, fg=self.TEXT_PRIMARY, bg=self.SIDEBAR_BG, font=("Helvetica", self._s(10))).pack(
            side="left"
        )
        dropdown = tk.OptionMenu(row, var, *options)
        dropdown.config(
            width=14,
            bg="#e8eef5",
            fg="#1a2734",
            activebackground="#dce7f1",
            bd=0,
            highlightthickness=0,
            font=("Helvetica", self._s(10)),
        )
        dropdown.pack(side="right")

    def _build_buttons(self) -> None:
        frame = tk.Frame(self.sidebar, bg=self.SIDEBAR_BG)
        frame.pack(fill="x", padx=self._s(16), pady=(0, self._s(10)))

        for text, command in (
            ("Start", self.start_game),
            ("Pause", self.toggle_pause),
            ("Reset", self.reset_game),
            ("Toggle Autopilot", self.toggle_autopilot),
            ("Apply Settings", self.apply_settings),
        ):
            self._button(frame, text, command).pack(fill="x", pady=self._s(4))

        tk.Label(
            self.sidebar,
            text="Move: Arrow keys / WASD\nPause: Space   Autopilot: P",
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            justify="left",
            font=("Helvetica", self._s(10)),
        ).pack(anchor="w", padx=self._s(16), pady=(self._s(4), self._s(10)))

    def _button(self, parent: tk.Widget, text: str, command) -> tk.Button:
        return tk.Button(
            parent,
            text=text,
            command=command,
            fg="#09141f",
            bg=self.ACCENT,
            activebackground="#74d8ff",
            activeforeground="#09141f",
            bd=0,
            relief="flat",
            font=("Helvetica", self._s(11), "bold"),
            padx=self._s(12),
            pady=self._s(8),
            cursor="hand2",
        )

    def _bind_keys(self) -> None:
        keymap = {
            "<Up>": "up",
            "<Down>": "down",
            "<Left>": "left",
            "<Right>": "right",
            "w": "up",
            "s": "down",
            "a": "left",
            "d": "right",
        }
        for key, direction in keymap.items():
            self.root.bind(key, lambda _e, d=direction: self.driver.press_direction(d))
        self.root.bind("<space>", lambda _e: self.toggle_pause())
        self.root.bind("p", lambda _e: self.toggle_autopilot())

    def _mode_text(self) -> str:
        return "Mode: Autopilot" if self.driver.autopilot else "Mode: Manual"

    def _parse_int(self, raw: str, low: int, high: int, label: str) -> int:
        """Parse and range-check integer settings with a clear error message."""
        try:
            value = int(raw)
        except ValueError:
            raise ValueError(f"{label} must be an integer.")
        if not (low <= value <= high):
            raise ValueError(f"{label} must be between {low} and {high}.")
        return value

    def apply_settings(self) -> None:
        """Validate sidebar values, then rebuild the game with the new config."""
        try:
            board_px = self.BOARD_PRESETS[self.board_var.get()]
            cell_size = self._parse_int(self.cell_size_var.get(), MIN_CELL_SIZE, MAX_CELL_SIZE, "Cell size")
            speed_ms = self._parse_int(self.speed_var.get(), MIN_SPEED_MS, MAX_SPEED_MS, "Speed")
            config = replace(
                self.config.resized(board_px, board_px, cell_size),
                speed_ms=speed_ms,
                autopilot=self.driver.autopilot,
            )
            config.validate()
        except (ValueError, KeyError) as exc:
            messagebox.showerror("Invalid Setting", str(exc))
            return

        self.driver.stop()
        self.config = config
        self.driver = self._make_driver(config)
        self._apply_canvas_size()
        self.state_var.set("State: Ready")
        self.draw(self.driver.game.snapshot())

    def _apply_canvas_size(self) -> None:
        grid = self.config.grid()
        cell = self.config.cell_size
        self.canvas.configure(width=grid.columns * cell, height=grid.rows * cell)

    def start_game(self) -> None:
        self.state_var.set("State: Running")
        self.driver.start()

    def toggle_pause(self) -> None:
        if not self.driver.running:
            return
        self.driver.toggle_pause()
        self.state_var.set("State: Paused" if self.driver.paused else "State: Running")

    def reset_game(self) -> None:
        self.state_var.set("State: Ready")
        self.driver.reset()

    def toggle_autopilot(self) -> None:
        self.driver.toggle_autopilot()
        self.mode_var.set(self._mode_text())

    def show_game_over(self, score: int) -> None:
        """End-of-session notification; the loop has already stopped."""
        self.state_var.set("State: Game Over")
        self.root.after_idle(lambda: messagebox.showinfo("Game Over", f"Game over! Your score: {score}"))

    def draw(self, snapshot: GameSnapshot) -> None:
        """Render board, food, snake and status labels for one snapshot."""
        self.canvas.delete("all")
        cell = self.config.cell_size
        width = snapshot.columns * cell
        height = snapshot.rows * cell

        if self.config.show_grid:
            for col in range(snapshot.columns + 1):
                self.canvas.create_line(col * cell, 0, col * cell, height, fill=self.GRID_COLOR)
            for row in range(snapshot.rows + 1):
                self.canvas.create_line(0, row * cell, width, row * cell, fill=self.GRID_COLOR)

        self.canvas.create_rectangle(1, 1, width - 1, height - 1, outline=self.BORDER_COLOR, width=2)

        fx, fy = snapshot.food
        self.canvas.create_oval(
            fx * cell + 3, fy * cell + 3, (fx + 1) * cell - 3, (fy + 1) * cell - 3, fill=self.FOOD_COLOR, outline=""
        )

        head_color = self.AUTOPILOT_HEAD if self.driver.autopilot else self.SNAKE_HEAD
        for idx, (x, y) in enumerate(snapshot.body):
            color = head_color if idx == 0 else self.SNAKE_BODY
            self.canvas.create_rectangle(
                x * cell + 1, y * cell + 1, (x + 1) * cell - 1, (y + 1) * cell - 1, fill=color, outline=""
            )

        self.score_var.set(f"Score: {snapshot.score}")
        self.length_var.set(f"Length: {snapshot.length}")

        if snapshot.game_over:
            self.canvas.create_rectangle(0, 0, width, height, fill="#000000", stipple="gray50", outline="")
            self.canvas.create_text(
                width // 2,
                height // 2 - 12,
                text="Game Over",
                fill=self.TEXT_PRIMARY,
                font=("Helvetica", 22, "bold"),
            )
            self.canvas.create_text(
                width // 2,
                height // 2 + 20,
                text="Press Start to play again",
                fill=self.TEXT_MUTED,
                font=("Helvetica", 12),
            )


def run_player_gui(config: SnakeConfig | None = None) -> None:
    """Launch the Snake window."""
    root = tk.Tk()
    SnakeApp(root, config)
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
