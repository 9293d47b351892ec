"""Run the A* autopilot headlessly and report how it scores."""
from __future__ import annotations

import argparse
import os

# Keep matplotlib cache local for environments without writable home config.
LOCAL_MPLCONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".mplconfig")
os.makedirs(LOCAL_MPLCONFIG, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", LOCAL_MPLCONFIG)

import matplotlib.pyplot as plt
import numpy as np

try:
    from .game_logic import SnakeConfig, SnakeGame
    from .utils import EpisodeResult, chunked_mean, render_ascii, run_episode, score_summary
except ImportError:
    from game_logic import SnakeConfig, SnakeGame
    from utils import EpisodeResult, chunked_mean, render_ascii, run_episode, score_summary


def _print_metric(name: str, value: float) -> None:
    print(f"{name:<20} {value:>10.2f}")


def plot_scores(scores: list[float], save_path: str | None = None, show: bool = True) -> plt.Figure:
    """Trend (mean per 10 games) and distribution of autopilot scores."""
    fig, (ax_trend, ax_hist) = plt.subplots(1, 2, figsize=(11, 4))

    ax_trend.set_title("Score Trend (Average per 10 Games)")
    ax_trend.set_xlabel("Game")
    ax_trend.set_ylabel("Score")
    ax_trend.grid(alpha=0.25)
    x10, mean10 = chunked_mean(scores, chunk_size=10)
    if x10.size > 0:
        ax_trend.plot(x10, mean10, color="#1f77b4", linewidth=2.2, marker="o", markersize=3)

    ax_hist.set_title("Score Distribution")
    ax_hist.set_xlabel("Score")
    ax_hist.set_ylabel("Count")
    ax_hist.grid(alpha=0.2)
    if scores:
        max_score = int(max(scores))
        bins = np.arange(-0.5, max_score + 1.5, 1.0)
        ax_hist.hist(scores, bins=bins, color="#44b5a4", alpha=0.85, edgecolor="#17323a")
        mean_all = float(np.mean(scores))
        median_all = float(np.median(scores))
        ax_hist.axvline(mean_all, color="#1f77b4", linestyle="--", linewidth=1.6, label=f"Mean: {mean_all:.2f}")
        ax_hist.axvline(median_all, color="#ff7f0e", linestyle="-", linewidth=1.6, label=f"Median: {median_all:.2f}")
        ax_hist.legend(loc="upper right")

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path)
        print(f"Saved plot: {save_path}")
    if show:
        plt.show()
    return fig


def autoplay(
    config: SnakeConfig,
    num_games: int = 20,
    max_steps: int = 2000,
    show_board: bool = False,
) -> list[EpisodeResult]:
    """Play num_games autopilot games and print a summary table."""
    if num_games <= 0:
        raise ValueError("num_games must be > 0")
    config.validate()

    game = SnakeGame(config)
    render_step = None
    if show_board:
        def render_step(snapshot, step):
            print(f"--- tick {step + 1}")
            print(render_ascii(snapshot))

    print(f"Board: {config.columns}x{config.rows} cells, {num_games} games, max {max_steps} ticks each")
    results: list[EpisodeResult] = []
    for index in range(1, num_games + 1):
        results.append(run_episode(config, max_steps=max_steps, render_step=render_step, game=game))
        if not show_board and (index % 10 == 0 or index == num_games):
            print(f"Game {index}/{num_games}", end="\r", flush=True)
    print()

    scores = [float(result.score) for result in results]
    summary = score_summary(scores)
    deaths = sum(1 for result in results if result.died)

    print("=" * 32)
    print("AUTOPILOT RESULTS")
    print("=" * 32)
    _print_metric("Mean score", summary["mean"])
    _print_metric("Median score", summary["median"])
    _print_metric("Max score", summary["max"])
    _print_metric("Min score", summary["min"])
    _print_metric("Std dev", summary["std"])
    _print_metric("25th percentile", summary["q1"])
    _print_metric("75th percentile", summary["q3"])
    print("=" * 32)
    print(f"Games ended by collision: {deaths}/{num_games}; hit tick limit: {num_games - deaths}")
    return results


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Watch the A* autopilot play Snake headlessly")
    parser.add_argument("--games", type=int, default=20, help="Number of games to play")
    parser.add_argument("--max-steps", type=int, default=2000, help="Tick limit per game")
    parser.add_argument("--width", type=int, default=400, help="Board width in pixels")
    parser.add_argument("--height", type=int, default=400, help="Board height in pixels")
    parser.add_argument("--cell-size", type=int, default=20, help="Cell size in pixels")
    parser.add_argument("--seed", type=int, default=None, help="Seed for food placement")
    parser.add_argument("--show", action="store_true", help="Print the board after every tick")
    parser.add_argument("--plot", action="store_true", help="Show a score chart when done")
    parser.add_argument("--save-plot", default=None, help="Write the score chart to this path")
    args = parser.parse_args(argv)

    config = SnakeConfig(
        board_width=args.width,
        board_height=args.height,
        cell_size=args.cell_size,
        autopilot=True,
        seed=args.seed,
    )
    try:
        results = autoplay(config, num_games=args.games, max_steps=args.max_steps, show_board=args.show)
    except ValueError as exc:
        parser.error(str(exc))

    if args.plot or args.save_plot:
        plot_scores([float(result.score) for result in results], save_path=args.save_plot, show=args.plot)


if __name__ == "__main__":
    main()
