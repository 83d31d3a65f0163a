"""
Unit tests for the countdown timer state machine
"""

import pytest

from pidesk.apps.timer.engine import CountdownTimer, RunState, TIMER_UP_MESSAGE, format_hms, to_seconds
from pidesk.core.notifier import MockBackend

from .fakes import ManualTickerFactory


@pytest.fixture()
def backend():
    return MockBackend()


@pytest.fixture()
def ticks():
    return ManualTickerFactory()


@pytest.fixture()
def timer(backend, ticks):
    return CountdownTimer(notifier=backend, ticker_factory=ticks)


def test_initial_state(timer):
    assert timer.remaining_seconds == 0
    assert timer.run_state == RunState.IDLE
    assert timer.format_display() == "00:00:00"


@pytest.mark.parametrize("hours,minutes,seconds,expected", [
    (0, 0, 0, 0),
    (0, 15, 0, 900),
    (1, 1, 1, 3661),
    (23, 59, 59, 86399),
])
def test_start_from_idle_sets_duration(timer, ticks, hours, minutes, seconds, expected):
    timer.start(hours, minutes, seconds)

    assert timer.remaining_seconds == expected
    assert timer.run_state == RunState.RUNNING
    assert len(ticks.active()) == 1, "Exactly one tick subscription while running"


@pytest.mark.parametrize("remaining,expected", [
    (0, "00:00:00"),
    (59, "00:00:59"),
    (3661, "01:01:01"),
    (86399, "23:59:59"),
])
def test_format_display(timer, remaining, expected):
    timer.remaining_seconds = remaining
    assert timer.format_display() == expected
    assert format_hms(remaining) == expected


def test_to_seconds():
    assert to_seconds(2, 3, 4) == 2 * 3600 + 3 * 60 + 4
    assert to_seconds() == 0


def test_tick_decrements_by_one(timer, ticks):
    timer.start(0, 1, 0)
    ticks.tick()

    assert timer.remaining_seconds == 59
    assert timer.run_state == RunState.RUNNING


def test_last_tick_completes_once(timer, ticks, backend):
    completions = []
    timer.add_completion_listener(completions.append)

    timer.start(0, 0, 1)
    ticker = ticks.current
    ticks.tick()

    assert timer.remaining_seconds == 0
    assert timer.run_state == RunState.IDLE
    assert len(completions) == 1
    assert backend.alerts == 1
    assert backend.announcements == [TIMER_UP_MESSAGE]
    assert ticker.cancelled, "Tick subscription must be cancelled on completion"

    # A late tick from the old handle must not fire completion again
    ticker.fire()
    assert len(completions) == 1
    assert backend.alerts == 1
    assert timer.remaining_seconds == 0


def test_full_countdown(timer, ticks, backend):
    timer.start(0, 0, 3)
    ticks.tick(10)

    assert timer.remaining_seconds == 0
    assert timer.run_state == RunState.IDLE
    assert backend.announcements == ["Timer is up."]


def test_zero_length_countdown_completes_on_first_tick(timer, ticks, backend):
    timer.start(0, 0, 0)
    assert timer.run_state == RunState.RUNNING

    ticks.tick()

    assert timer.run_state == RunState.IDLE
    assert backend.alerts == 1


def test_pause_then_resume_keeps_remaining(timer, ticks):
    timer.start(0, 0, 5)
    first = ticks.current

    timer.pause()
    assert timer.run_state == RunState.PAUSED
    assert timer.remaining_seconds == 5
    assert first.cancelled

    timer.start()
    assert timer.run_state == RunState.RUNNING
    assert timer.remaining_seconds == 5
    assert ticks.current is not first

    # Stale ticks from the paused subscription are dropped
    first.fire()
    assert timer.remaining_seconds == 5


def test_duration_ignored_while_counting(timer, ticks):
    timer.start(0, 0, 10)
    ticks.tick()

    timer.start(1, 0, 0)
    assert timer.remaining_seconds == 9
    assert timer.run_state == RunState.RUNNING
    assert len(ticks.active()) == 1, "Restarting must cancel the previous subscription"


def test_duration_ignored_while_paused(timer, ticks):
    timer.start(0, 0, 10)
    ticks.tick(2)
    timer.pause()

    timer.start(0, 30, 0)
    assert timer.remaining_seconds == 8
    assert timer.run_state == RunState.RUNNING


def test_no_ticks_while_paused(timer, ticks):
    timer.start(0, 0, 10)
    timer.pause()
    ticks.tick(3)

    assert timer.remaining_seconds == 10
    assert ticks.active() == []


def test_pause_is_noop_when_not_running(timer):
    timer.pause()
    assert timer.run_state == RunState.IDLE


def test_stop_keeps_remaining_without_completion(timer, ticks, backend):
    timer.start(0, 0, 10)
    ticks.tick()
    timer.stop()

    assert timer.run_state == RunState.IDLE
    assert timer.remaining_seconds == 9
    assert ticks.active() == []
    assert backend.alerts == 0


@pytest.mark.parametrize("prepare", ["idle", "running", "paused"])
def test_reset_from_any_state(timer, ticks, backend, prepare):
    if prepare != "idle":
        timer.start(0, 2, 0)
        ticks.tick()
    if prepare == "paused":
        timer.pause()

    timer.reset()

    assert timer.remaining_seconds == 0
    assert timer.run_state == RunState.IDLE
    assert ticks.active() == []
    assert backend.alerts == 0, "Reset must not signal completion"


def test_start_after_completion_uses_new_duration(timer, ticks, backend):
    timer.start(0, 0, 1)
    ticks.tick()
    timer.start(0, 0, 2)

    assert timer.remaining_seconds == 2
    ticks.tick(2)
    assert backend.alerts == 2


def test_listeners_see_every_change(timer, ticks):
    seen = []
    timer.add_listener(lambda t: seen.append((t.run_state, t.remaining_seconds)))

    timer.start(0, 0, 2)
    ticks.tick()
    timer.pause()
    timer.reset()

    assert seen == [
        (RunState.RUNNING, 2),
        (RunState.RUNNING, 1),
        (RunState.PAUSED, 1),
        (RunState.IDLE, 0),
    ]


def test_failing_listener_does_not_break_timer(timer, ticks):
    def broken(_):
        raise RuntimeError("boom")

    timer.add_listener(broken)
    timer.add_completion_listener(broken)

    timer.start(0, 0, 1)
    ticks.tick()

    assert timer.run_state == RunState.IDLE


def test_snapshot(timer):
    timer.start(0, 1, 5)
    assert timer.snapshot() == {
        'remaining_seconds': 65,
        'run_state': 'running',
        'display': '00:01:05'
    }


def test_timer_without_notifier(ticks):
    timer = CountdownTimer(ticker_factory=ticks)
    timer.start(0, 0, 1)
    ticks.tick()
    assert timer.is_idle
