"""
Tests for the threaded tick source, alone and driving a real countdown
"""

import threading
import time

from pidesk.apps.timer.engine import CountdownTimer, RunState
from pidesk.apps.timer.ticker import PeriodicTicker


def test_ticker_ticks_until_cancelled():
    """Ticker calls back repeatedly and stops after cancel()"""
    calls = []
    enough = threading.Event()

    def on_tick(ticker):
        calls.append(ticker)
        if len(calls) >= 3:
            enough.set()

    ticker = PeriodicTicker(0.01, on_tick)
    ticker.start()
    assert enough.wait(2.0), "Ticker should tick at least 3 times"

    ticker.cancel()
    assert ticker.cancelled
    time.sleep(0.05)
    count = len(calls)
    time.sleep(0.05)

    assert len(calls) == count, "No ticks after cancel"
    assert all(t is ticker for t in calls), "Callback receives its own handle"


def test_ticker_survives_callback_error():
    calls = []
    enough = threading.Event()

    def on_tick(ticker):
        calls.append(1)
        if len(calls) >= 2:
            enough.set()
        raise ValueError("tick failed")

    ticker = PeriodicTicker(0.01, on_tick)
    ticker.start()
    try:
        assert enough.wait(2.0)
    finally:
        ticker.cancel()


def test_real_countdown_completes():
    """A 3 second countdown at 10ms per tick finishes and reports once"""
    done = threading.Event()
    completions = []

    def on_complete(timer):
        completions.append(timer.remaining_seconds)
        done.set()

    timer = CountdownTimer(tick_interval=0.01)
    timer.add_completion_listener(on_complete)
    timer.start(0, 0, 3)

    assert done.wait(2.0), "Countdown should finish"
    time.sleep(0.05)

    assert completions == [0]
    assert timer.run_state == RunState.IDLE


def test_reset_stops_real_countdown():
    timer = CountdownTimer(tick_interval=0.01)
    timer.start(0, 10, 0)
    time.sleep(0.05)
    timer.reset()
    time.sleep(0.05)

    assert timer.remaining_seconds == 0
    assert timer.run_state == RunState.IDLE
