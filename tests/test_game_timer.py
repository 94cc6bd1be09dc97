import pytest

from colorlines.utils.game_timer import GameTimer


def test_inactive_timer_does_not_count():
    timer = GameTimer()
    assert timer.advance(5.0) == 0
    assert timer.seconds == 0


def test_timer_counts_whole_intervals():
    timer = GameTimer(interval=1.0, inactivity_timeout=None)
    timer.start()
    assert timer.advance(0.6) == 0
    assert timer.advance(0.6) == 1
    assert timer.advance(2.0) == 2
    assert timer.seconds == 3


def test_timer_pauses_after_inactivity():
    timer = GameTimer(interval=1.0, inactivity_timeout=10.0)
    timer.start()
    timer.advance(8.0)
    timer.advance(5.0)
    assert timer.seconds == 10
    assert not timer.active
    timer.advance(30.0)
    assert timer.seconds == 10


def test_activity_resumes_and_resets_idle_window():
    timer = GameTimer(interval=1.0, inactivity_timeout=10.0)
    timer.start()
    timer.advance(9.0)
    timer.record_activity()
    timer.advance(9.0)
    assert timer.active
    assert timer.seconds == 18


def test_reset_clears_everything():
    timer = GameTimer(inactivity_timeout=None)
    timer.start()
    timer.advance(3.5)
    timer.reset()
    assert timer.seconds == 0
    assert not timer.active
    timer.start()
    assert timer.advance(0.6) == 0


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        GameTimer(interval=0.0)
