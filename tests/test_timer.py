import threading

import pytest

from commonitor.timer import ClockTimer


def test_tick_advances_seconds():
    seen = []
    timer = ClockTimer(on_time=lambda h, m, s: seen.append((h, m, s)))
    timer.tick()
    timer.tick()
    assert seen == [(0, 0, 1), (0, 0, 2)]
    assert timer.elapsed == (0, 0, 2)


def test_minute_rollover():
    timer = ClockTimer(on_time=lambda h, m, s: None)
    for _ in range(60):
        timer.tick()
    assert timer.elapsed == (0, 1, 0)


def test_full_day_wraps_to_zero():
    timer = ClockTimer(on_time=lambda h, m, s: None)
    for _ in range(24 * 60 * 60):
        timer.tick()
    assert timer.elapsed == (0, 0, 0)


def test_clock_not_advanced_without_time_callback():
    calls = []
    timer = ClockTimer(on_period=lambda: calls.append(1))
    timer.tick()
    assert calls == [1]
    assert timer.elapsed == (0, 0, 0)


def test_invalid_period_rejected():
    with pytest.raises(ValueError):
        ClockTimer(period=0)
    timer = ClockTimer()
    with pytest.raises(ValueError):
        timer.period = -5
    assert timer.period == 1000


def test_start_reports_zero_and_resets():
    seen = []
    timer = ClockTimer(period=100000, on_time=lambda h, m, s: seen.append((h, m, s)))
    timer.tick()
    timer.start()
    try:
        assert seen[-1] == (0, 0, 0)
        assert timer.elapsed == (0, 0, 0)
        assert timer.running
    finally:
        timer.stop()
    assert not timer.running


def test_start_twice_raises():
    timer = ClockTimer(period=100000)
    timer.start()
    try:
        with pytest.raises(RuntimeError):
            timer.start()
    finally:
        timer.stop()


def test_stop_with_set_zero_reports_zero():
    seen = []
    timer = ClockTimer(period=100000, on_time=lambda h, m, s: seen.append((h, m, s)))
    timer.start()
    seen.clear()
    timer.stop(set_zero=True)
    assert seen == [(0, 0, 0)]


def test_stop_without_set_zero_reports_nothing():
    seen = []
    timer = ClockTimer(period=100000, on_time=lambda h, m, s: seen.append((h, m, s)))
    timer.start()
    seen.clear()
    timer.stop()
    assert seen == []


def test_running_timer_fires_period_callback():
    fired = threading.Event()
    timer = ClockTimer(period=10, on_period=fired.set)
    with timer:
        assert fired.wait(2.0)
    assert not timer.running