from game_logic import INVINCIBLE_MS, NEAR_EXPIRY_MS, InvincibilityTimer


def test_inactive_by_default():
    timer = InvincibilityTimer()
    assert not timer.is_active(0)
    assert timer.remaining_ms(0) == 0
    assert timer.fraction(0) == 0.0


def test_expiry_boundary():
    timer = InvincibilityTimer()
    timer.activate(1000)

    assert timer.is_active(1000 + INVINCIBLE_MS - 1)
    assert not timer.is_active(1000 + INVINCIBLE_MS)


def test_countdown_rounds_up_to_seconds():
    timer = InvincibilityTimer()
    timer.activate(0, 3000)

    assert timer.remaining_seconds(0) == 3
    assert timer.remaining_seconds(1) == 3
    assert timer.remaining_seconds(2500) == 1
    assert timer.remaining_seconds(3000) == 0


def test_bar_fraction_is_clamped():
    timer = InvincibilityTimer()
    timer.activate(0, 3000)

    assert timer.fraction(0) == 1.0
    assert timer.fraction(1500) == 0.5
    assert timer.fraction(9000) == 0.0
    assert timer.fraction(-500) == 1.0


def test_near_expiry_window():
    timer = InvincibilityTimer()
    timer.activate(0, 3000)

    assert not timer.near_expiry(3000 - NEAR_EXPIRY_MS - 1)
    assert timer.near_expiry(3000 - NEAR_EXPIRY_MS)
    assert timer.near_expiry(2999)
    assert not timer.near_expiry(3000)


def test_reactivation_restarts_the_clock():
    timer = InvincibilityTimer()
    timer.activate(0)
    timer.activate(2000)

    assert timer.remaining_ms(2000) == INVINCIBLE_MS
    assert timer.is_active(4999)


def test_reset():
    timer = InvincibilityTimer()
    timer.activate(0)
    timer.reset()
    assert not timer.is_active(1)
