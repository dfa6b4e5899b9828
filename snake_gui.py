# Tkinter player GUI: draws snapshots and forwards key presses, no rules here.
from __future__ import annotations

from dataclasses import dataclass
import time
import tkinter as tk

from game_logic import GRID, SnakeGame
from game_loop import GameLoop
from storage import HighScoreStore, JsonHighScoreStore
from utils import (
    FOOD,
    POWER_UP,
    BODY,
    HEAD,
    GameSnapshot,
    cells_with,
    default_high_score_path,
    encode_board,
    snapshot,
    status_text,
)


def now_ms() -> float:
    return time.monotonic() * 1000.0


@dataclass
class SnakeConfig:
    """Presentation settings; the board and speed themselves are fixed."""
    cell_size: int = 26
    frame_ms: int = 16
    show_grid: bool = True


class SnakeApp:
    """Tkinter presentation layer for SnakeGame."""
    BG = "#101418"
    BOARD_BG = "#1c2229"
    SIDEBAR_BG = "#0f1720"
    GRID_COLOR = "#293340"
    SNAKE_HEAD = "#a0c4ff"
    SNAKE_BODY = "#7aa2ff"
    SNAKE_HEAD_INVINCIBLE = "#ffcd54"
    SNAKE_BODY_INVINCIBLE = "#ffea78"
    FOOD_COLOR = "#ff5c74"
    STAR_COLOR = "#ffd23f"
    BAR_COLOR = "#ffcd54"
    BAR_BG = "#293340"
    TEXT_PRIMARY = "#e6eef7"
    TEXT_MUTED = "#95a4b8"
    ACCENT = "#42c4ff"

    BAR_WIDTH = 220
    BAR_HEIGHT = 12

    def __init__(
        self,
        root: tk.Tk,
        config: SnakeConfig | None = None,
        store: HighScoreStore | None = None,
    ) -> None:
        self.root = root
        self.root.title("Star Snake")
        self.root.configure(bg=self.BG)

        self.config = config or SnakeConfig()
        store = store if store is not None else JsonHighScoreStore(default_high_score_path())
        self.game = SnakeGame(store)
        self.loop = GameLoop(self.game, on_frame=self._refresh_hud, start=now_ms())
        self.after_id: str | None = None  # Tkinter timer id for the frame callback

        self._build_layout()
        self._bind_keys()
        self.draw(snapshot(self.game, now_ms()))
        self._schedule()

    def _build_layout(self) -> None:
        """Create game canvas + right sidebar with the HUD."""
        side = GRID * self.config.cell_size

        container = tk.Frame(self.root, bg=self.BG)
        container.pack(padx=16, pady=16)

        self.canvas = tk.Canvas(
            container,
            width=side,
            height=side,
            bg=self.BOARD_BG,
            highlightthickness=0,
            bd=0,
        )
        self.canvas.grid(row=0, column=0, padx=(0, 16))

        sidebar = tk.Frame(container, bg=self.SIDEBAR_BG)
        sidebar.grid(row=0, column=1, sticky="ns")

        self.score_var = tk.StringVar(value="Score: 0")
        self.high_var = tk.StringVar(value=f"High score: {self.game.high_score}")
        self.status_var = tk.StringVar(value="Normal")

        for var in (self.score_var, self.high_var, self.status_var):
            tk.Label(
                sidebar,
                textvariable=var,
                fg=self.TEXT_PRIMARY,
                bg=self.SIDEBAR_BG,
                font=("Helvetica", 13),
                anchor="w",
            ).pack(fill="x", padx=16, pady=(12, 0))

        self.bar = tk.Canvas(
            sidebar,
            width=self.BAR_WIDTH,
            height=self.BAR_HEIGHT,
            bg=self.BAR_BG,
            highlightthickness=0,
            bd=0,
        )
        self.bar.pack(padx=16, pady=12)

        tk.Button(
            sidebar,
            text="Restart",
            command=self.restart,
            fg="#09141f",
            bg=self.ACCENT,
            activebackground="#74d8ff",
            bd=0,
            relief="flat",
            font=("Helvetica", 12, "bold"),
            padx=12,
            pady=8,
            cursor="hand2",
        ).pack(fill="x", padx=16, pady=8)

        tk.Label(
            sidebar,
            text="Move: Arrow keys / WASD\nRestart: R",
            fg=self.TEXT_MUTED,
            bg=self.SIDEBAR_BG,
            justify="left",
            font=("Helvetica", 10),
        ).pack(anchor="w", padx=16, pady=(4, 12))

    def _bind_keys(self) -> None:
        """Bind movement controls and restart."""
        for keys, direction in (
            (("<Up>", "w"), "up"),
            (("<Down>", "s"), "down"),
            (("<Left>", "a"), "left"),
            (("<Right>", "d"), "right"),
        ):
            for key in keys:
                self.root.bind(key, lambda _e, d=direction: self.game.queue_direction(d))
        self.root.bind("r", lambda _e: self.restart())
        self.root.bind("<Return>", lambda _e: self.restart())

    def _schedule(self) -> None:
        self.after_id = self.root.after(self.config.frame_ms, self._frame)

    def _frame(self) -> None:
        """One rendering callback; the loop decides whether the game ticks."""
        now = now_ms()
        if self.loop.frame(now):
            self.draw(snapshot(self.game, now))
        elif self.game.invincibility.near_expiry(now):
            # Redraw between ticks so the blink stays smooth.
            self.draw(snapshot(self.game, now))
        self._schedule()

    def restart(self) -> None:
        """Throw the session away and start a new one, alive or dead."""
        now = now_ms()
        self.game.reset()
        self.loop.reset(now)
        self.draw(snapshot(self.game, now))

    def _refresh_hud(self, game: SnakeGame, now: float) -> None:
        snap = snapshot(game, now)
        self.score_var.set(f"Score: {snap.score}")
        self.high_var.set(f"High score: {snap.high_score}")
        self.status_var.set(status_text(snap))

        self.bar.delete("all")
        if snap.invincible:
            width = int(self.BAR_WIDTH * snap.bar_fraction)
            self.bar.create_rectangle(0, 0, width, self.BAR_HEIGHT, fill=self.BAR_COLOR, outline="")

    def _cell_box(self, x: int, y: int, pad: int) -> tuple[int, int, int, int]:
        cell = self.config.cell_size
        return x * cell + pad, y * cell + pad, (x + 1) * cell - pad, (y + 1) * cell - pad

    def draw(self, snap: GameSnapshot) -> None:
        """Render board, food, star, snake and the game-over overlay."""
        self.canvas.delete("all")
        cell = self.config.cell_size
        side = GRID * cell

        if self.config.show_grid:
            for i in range(GRID + 1):
                pos = i * cell
                self.canvas.create_line(0, pos, side, pos, fill=self.GRID_COLOR)
                self.canvas.create_line(pos, 0, pos, side, fill=self.GRID_COLOR)

        board = encode_board(snap)

        for x, y in cells_with(board, FOOD):
            self.canvas.create_oval(*self._cell_box(x, y, 4), fill=self.FOOD_COLOR, outline="")

        for x, y in cells_with(board, POWER_UP):
            x1, y1, x2, y2 = self._cell_box(x, y, 3)
            cx, cy = (x1 + x2) / 2, (y1 + y2) / 2
            r = (x2 - x1) / 2
            self.canvas.create_polygon(
                cx, y1, cx + r * 0.3, cy - r * 0.3, x2, cy, cx + r * 0.3, cy + r * 0.3,
                cx, y2, cx - r * 0.3, cy + r * 0.3, x1, cy, cx - r * 0.3, cy - r * 0.3,
                fill=self.STAR_COLOR, outline="",
            )

        # Blink off every other 150 ms slice in the last stretch of invincibility.
        glowing = snap.invincible and not (snap.near_expiry and int(snap.remaining_ms // 150) % 2 == 0)
        body_color = self.SNAKE_BODY_INVINCIBLE if glowing else self.SNAKE_BODY
        head_color = self.SNAKE_HEAD_INVINCIBLE if glowing else self.SNAKE_HEAD

        for x, y in cells_with(board, BODY):
            self.canvas.create_rectangle(*self._cell_box(x, y, 2), fill=body_color, outline="")
        for x, y in cells_with(board, HEAD):
            self.canvas.create_rectangle(*self._cell_box(x, y, 2), fill=head_color, outline="")

        if not snap.alive:
            self.canvas.create_rectangle(0, 0, side, side, fill="#000000", stipple="gray50", outline="")
            self.canvas.create_text(
                side // 2,
                side // 2 - 12,
                text="Game Over",
                fill=self.TEXT_PRIMARY,
                font=("Helvetica", 22, "bold"),
            )
            self.canvas.create_text(
                side // 2,
                side // 2 + 20,
                text="Press Restart to play again",
                fill=self.TEXT_MUTED,
                font=("Helvetica", 12),
            )


def run_player_gui(config: SnakeConfig | None = None, store: HighScoreStore | None = None) -> None:
    """Launch the Snake player interface."""
    root = tk.Tk()
    SnakeApp(root, config=config, store=store)
    root.mainloop()


if __name__ == "__main__":
    run_player_gui()
