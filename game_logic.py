# Core Snake game state and rules, independent from GUI code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from itertools import islice
import logging
import math
import random

from storage import HighScoreStore, MemoryHighScoreStore


logger = logging.getLogger(__name__)

Cell = tuple[int, int]

# Fixed board and timing rules.
GRID = 24
TICK_MS = 110
FOOD_POINTS = 10
INVINCIBLE_MS = 3000
POWER_UP_RESPAWN_MS = 1800
NEAR_EXPIRY_MS = 900
MAX_SAMPLE_ATTEMPTS = 1000

START_SNAKE: tuple[Cell, ...] = ((8, 12), (7, 12), (6, 12))
START_DIRECTION = "right"

DIRECTIONS: dict[str, Cell] = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}


def in_bounds(x: int, y: int) -> bool:
    return 0 <= x < GRID and 0 <= y < GRID


def random_free_cell(
    excluded: set[Cell],
    rng: random.Random | None = None,
    max_attempts: int = MAX_SAMPLE_ATTEMPTS,
) -> Cell | None:
    """Pick a uniformly random board cell that is not in ``excluded``.

    Rejection sampling first; if the board is crowded enough that the
    attempts run out, choose directly from the remaining free cells.
    Returns None only when every cell is excluded.
    """
    rng = rng or random
    for _ in range(max_attempts):
        cell = (rng.randrange(GRID), rng.randrange(GRID))
        if cell not in excluded:
            return cell

    free = [(x, y) for x in range(GRID) for y in range(GRID) if (x, y) not in excluded]
    if not free:
        return None
    return rng.choice(free)


@dataclass
class InvincibilityTimer:
    """Wall-clock expiry for the star effect. All times are in milliseconds."""
    expires_at: float = 0.0
    duration_ms: float = INVINCIBLE_MS

    def activate(self, now: float, duration_ms: float = INVINCIBLE_MS) -> None:
        self.duration_ms = duration_ms
        self.expires_at = now + duration_ms

    def reset(self) -> None:
        self.expires_at = 0.0
        self.duration_ms = INVINCIBLE_MS

    def is_active(self, now: float) -> bool:
        return now < self.expires_at

    def remaining_ms(self, now: float) -> float:
        return max(self.expires_at - now, 0.0)

    def remaining_seconds(self, now: float) -> int:
        """Countdown shown in the HUD, rounded up to whole seconds."""
        return math.ceil(self.remaining_ms(now) / 1000)

    def fraction(self, now: float) -> float:
        """Depletion bar fill in [0, 1]."""
        if self.duration_ms <= 0:
            return 0.0
        return min(max(self.remaining_ms(now) / self.duration_ms, 0.0), 1.0)

    def near_expiry(self, now: float) -> bool:
        # Blink cue only; has no gameplay effect.
        return self.is_active(now) and self.remaining_ms(now) <= NEAR_EXPIRY_MS


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code)."""
    def __init__(
        self,
        store: HighScoreStore | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = rng or random.Random()
        self.invincibility = InvincibilityTimer()
        self.high_score = 0
        self.reset()

    def reset(self) -> None:
        """Start a fresh session; only the high score carries over."""
        self.snake: deque[Cell] = deque(START_SNAKE)   # ordered body, head at index 0
        self.direction = START_DIRECTION
        self.pending_direction = START_DIRECTION       # queued from input; applied next tick
        self.alive = True
        self.score = 0
        # Keep the best seen in memory too, in case a save failed.
        self.high_score = max(self.store.load(), self.high_score, 0)
        self.invincibility.reset()
        self.food: Cell | None = None
        self.power_up: Cell | None = None
        self.power_up_active = False
        self.power_up_respawn_at: float | None = None

        self.place_food()
        self.place_power_up()
        logger.debug("New session, high score %d", self.high_score)

    @property
    def head(self) -> Cell:
        return self.snake[0]

    def place_food(self) -> None:
        """Put the strawberry on a cell free of the snake and the star."""
        excluded = set(self.snake)
        if self.power_up is not None:
            excluded.add(self.power_up)
        self.food = random_free_cell(excluded, self.rng)

    def place_power_up(self) -> None:
        """Put the star on a cell free of the snake and the strawberry."""
        excluded = set(self.snake)
        if self.food is not None:
            excluded.add(self.food)
        self.power_up = random_free_cell(excluded, self.rng)
        self.power_up_active = self.power_up is not None

    def queue_direction(self, new_direction: str) -> None:
        """Queue an input direction; reject instant 180-degree turns."""
        if new_direction not in DIRECTIONS:
            return
        if OPPOSITES[new_direction] == self.direction:
            return
        self.pending_direction = new_direction

    def is_invincible(self, now: float) -> bool:
        return self.invincibility.is_active(now)

    def update_timers(self, now: float) -> None:
        """Fire the star respawn once its deadline has passed.

        Safe to call every frame. A session that died while the star was
        pending just drops the deadline.
        """
        if self.power_up_respawn_at is None or now < self.power_up_respawn_at:
            return
        self.power_up_respawn_at = None
        if self.alive:
            self.place_power_up()

    def _next_head(self) -> Cell:
        """Translate current head by one tile in the committed direction."""
        dx, dy = DIRECTIONS[self.direction]
        head_x, head_y = self.snake[0]
        return head_x + dx, head_y + dy

    def _die(self, cause: str) -> None:
        self.alive = False
        logger.debug("Snake died (%s) with score %d", cause, self.score)

    def _record_score(self) -> None:
        """Raise and persist the high score when the current score beats it."""
        if self.score <= self.high_score:
            return
        self.high_score = self.score
        self.store.save(self.high_score)
        logger.info("New high score %d", self.high_score)

    def move(self, now: float) -> bool:
        """Advance one tick. Returns False if the snake is dead afterwards."""
        if not self.alive:
            return False

        # Apply the latest valid input once per tick.
        self.direction = self.pending_direction
        new_x, new_y = self._next_head()

        # Captured before any star pickup this tick.
        invincible = self.is_invincible(now)

        if not in_bounds(new_x, new_y):
            if not invincible:
                self._die("wall")
                return False
            # Invincible snakes pass through the wall to the opposite edge.
            new_x %= GRID
            new_y %= GRID

        new_head = (new_x, new_y)
        eats_food = new_head == self.food
        eats_power_up = self.power_up_active and new_head == self.power_up

        self.snake.appendleft(new_head)

        if eats_food:
            self.score += FOOD_POINTS
            self.place_food()
            logger.debug("Ate food at %s, score %d", new_head, self.score)
        else:
            self.snake.pop()

        if eats_power_up:
            self.invincibility.activate(now, INVINCIBLE_MS)
            self.power_up_active = False
            self.power_up = None
            self.power_up_respawn_at = now + POWER_UP_RESPAWN_MS
            logger.debug("Ate star at %s, invincible until %.0f", new_head, self.invincibility.expires_at)

        # The tail is still in place on a growth tick, so it counts as body here.
        if not invincible and new_head in islice(self.snake, 1, None):
            self._die("self")

        self._record_score()
        return self.alive
