import random

from game_logic import POWER_UP_RESPAWN_MS, SnakeGame
from game_loop import GameLoop
from storage import MemoryHighScoreStore
from utils import snapshot, status_text


def make_loop(**kwargs):
    game = SnakeGame(MemoryHighScoreStore(), random.Random(3))
    game.food = (0, 0)
    game.power_up = (23, 23)
    game.power_up_active = True
    return game, GameLoop(game, **kwargs)


def test_ticks_on_fixed_cadence():
    game, loop = make_loop(tick_ms=110)

    assert not loop.frame(50)
    assert game.snake[0] == (8, 12)
    assert loop.frame(110)
    assert game.snake[0] == (9, 12)
    assert not loop.frame(150)
    assert not loop.frame(219)
    assert loop.frame(220)
    assert game.snake[0] == (10, 12)
    assert loop.ticks == 2


def test_missed_ticks_are_not_replayed():
    game, loop = make_loop()

    assert loop.frame(1000)

    assert loop.ticks == 1
    assert loop.last_tick == 1000
    assert game.snake[0] == (9, 12)
    assert not loop.frame(1050)


def test_callbacks():
    ticks = []
    frames = []
    game, loop = make_loop(
        on_tick=lambda g: ticks.append(g.snake[0]),
        on_frame=lambda g, now: frames.append(now),
    )

    for now in (16, 32, 110, 126):
        loop.frame(now)

    assert ticks == [(9, 12)]
    assert frames == [16, 32, 110, 126]


def test_hud_refresh_between_ticks_is_read_only():
    texts = []
    game, loop = make_loop(on_frame=lambda g, now: texts.append(status_text(snapshot(g, now))))
    loop.frame(110)
    state = (list(game.snake), game.score, game.food, game.power_up, game.power_up_active)

    for now in range(120, 220, 10):
        loop.frame(now)

    assert (list(game.snake), game.score, game.food, game.power_up, game.power_up_active) == state
    assert texts and all(text == "Normal" for text in texts)


def test_loop_respawns_power_up():
    game, loop = make_loop()
    game.power_up = (9, 12)

    loop.frame(110)
    assert not game.power_up_active

    loop.frame(110 + POWER_UP_RESPAWN_MS - 10)
    assert not game.power_up_active

    loop.frame(110 + POWER_UP_RESPAWN_MS + 40)
    assert game.power_up_active
    assert game.power_up not in game.snake
    assert game.power_up != game.food


def test_reset_reanchors_cadence():
    game, loop = make_loop()
    loop.frame(110)
    game.reset()
    loop.reset(500)

    assert not loop.frame(600)
    assert loop.frame(610)
