# Command-line launcher for the Snake player GUI.
from __future__ import annotations

import argparse
import logging

from storage import HighScoreStore, JsonHighScoreStore, MemoryHighScoreStore
from utils import default_high_score_path


MIN_CELL_SIZE = 12
MAX_CELL_SIZE = 48


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Snake with strawberries and invincibility stars.")
    parser.add_argument(
        "--high-score-file",
        default=None,
        help="JSON file holding the high score (default: high_score.json beside the game, "
        "or $SNAKE_HIGH_SCORE_FILE).",
    )
    parser.add_argument("--no-save", action="store_true", help="Keep the high score in memory only.")
    parser.add_argument("--cell-size", type=int, default=26, help="Tile size in pixels.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def make_store(args: argparse.Namespace) -> HighScoreStore:
    if args.no_save:
        return MemoryHighScoreStore()
    return JsonHighScoreStore(args.high_score_file or default_high_score_path())


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if not (MIN_CELL_SIZE <= args.cell_size <= MAX_CELL_SIZE):
        raise SystemExit(f"--cell-size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}.")

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Tkinter is only needed once we actually open a window.
    from snake_gui import SnakeConfig, run_player_gui

    run_player_gui(SnakeConfig(cell_size=args.cell_size), store=make_store(args))


if __name__ == "__main__":
    main()
