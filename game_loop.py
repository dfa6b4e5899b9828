# Fixed-cadence tick scheduler, decoupled from how often frames are drawn.
from __future__ import annotations

from typing import Callable

from game_logic import TICK_MS, SnakeGame


class GameLoop:
    """Runs at most one game tick per frame callback.

    ``frame(now)`` is meant to be called from a rendering timer that fires
    much faster than the tick interval. When the elapsed time since the last
    tick reaches ``tick_ms`` one tick runs and the anchor jumps to ``now``;
    missed ticks are never replayed.
    """
    def __init__(
        self,
        game: SnakeGame,
        tick_ms: float = TICK_MS,
        on_tick: Callable[[SnakeGame], None] | None = None,
        on_frame: Callable[[SnakeGame, float], None] | None = None,
        start: float = 0.0,
    ) -> None:
        self.game = game
        self.tick_ms = tick_ms
        self.on_tick = on_tick
        self.on_frame = on_frame
        self.last_tick = start
        self.ticks = 0

    def reset(self, now: float) -> None:
        """Re-anchor the cadence, e.g. after a restart."""
        self.last_tick = now

    def frame(self, now: float) -> bool:
        """Handle one rendering callback. Returns True if a tick ran."""
        self.game.update_timers(now)

        ticked = False
        if now - self.last_tick >= self.tick_ms:
            self.game.move(now)
            self.last_tick = now
            self.ticks += 1
            ticked = True
            if self.on_tick is not None:
                self.on_tick(self.game)

        # HUD countdown refresh; must stay read-only.
        if self.on_frame is not None:
            self.on_frame(self.game, now)
        return ticked
