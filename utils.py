# Shared read-only helpers: file paths, render/HUD snapshots, board encoding.
from __future__ import annotations

from dataclasses import dataclass
import os

import numpy as np

from game_logic import GRID, Cell, SnakeGame


BASE_DIR = os.path.dirname(os.path.abspath(__file__))
HIGH_SCORE_ENV = "SNAKE_HIGH_SCORE_FILE"

# Board matrix codes.
EMPTY = 0.0
FOOD = 0.5
POWER_UP = 0.75
BODY = -0.5
HEAD = 1.0

BOARD_CHARS = {EMPTY: ".", FOOD: "F", POWER_UP: "*", BODY: "o", HEAD: "@"}


def default_high_score_path() -> str:
    return os.environ.get(HIGH_SCORE_ENV) or os.path.join(BASE_DIR, "high_score.json")


@dataclass(frozen=True)
class GameSnapshot:
    """Everything the renderer and HUD need for one frame."""
    snake: tuple[Cell, ...]
    food: Cell | None
    power_up: Cell | None
    power_up_active: bool
    alive: bool
    score: int
    high_score: int
    invincible: bool
    remaining_ms: float
    remaining_seconds: int
    bar_fraction: float
    near_expiry: bool


def snapshot(game: SnakeGame, now: float) -> GameSnapshot:
    timer = game.invincibility
    return GameSnapshot(
        snake=tuple(game.snake),
        food=game.food,
        power_up=game.power_up if game.power_up_active else None,
        power_up_active=game.power_up_active,
        alive=game.alive,
        score=game.score,
        high_score=game.high_score,
        invincible=timer.is_active(now),
        remaining_ms=timer.remaining_ms(now),
        remaining_seconds=timer.remaining_seconds(now),
        bar_fraction=timer.fraction(now),
        near_expiry=timer.near_expiry(now),
    )


def encode_board(snap: GameSnapshot) -> np.ndarray:
    """
    GRID x GRID board indexed [y, x]:
    - 0.0: empty
    - 0.5: food
    - 0.75: power-up
    - -0.5: snake body
    - 1.0: snake head
    """
    board = np.full((GRID, GRID), EMPTY, dtype=np.float32)

    if snap.food is not None:
        fx, fy = snap.food
        board[fy, fx] = FOOD
    if snap.power_up_active and snap.power_up is not None:
        px, py = snap.power_up
        board[py, px] = POWER_UP

    # Body first so the head wins if an invincible snake overlaps itself.
    for x, y in snap.snake[1:]:
        board[y, x] = BODY
    if snap.snake:
        hx, hy = snap.snake[0]
        board[hy, hx] = HEAD
    return board


def cells_with(board: np.ndarray, code: float) -> list[Cell]:
    """All (x, y) cells of the board holding ``code``."""
    return [(int(x), int(y)) for y, x in np.argwhere(board == code)]


def format_board(board: np.ndarray) -> str:
    rows = []
    for row in board:
        rows.append("".join(BOARD_CHARS.get(float(v), "?") for v in row))
    return "\n".join(rows)


def status_text(snap: GameSnapshot) -> str:
    if not snap.alive:
        return "Game over (press Restart)"
    if snap.invincible:
        return f"Invincible ({snap.remaining_seconds}s)"
    return "Normal"
