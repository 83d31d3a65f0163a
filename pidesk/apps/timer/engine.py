"""
Countdown timer engine.

Owns the remaining time and the Idle/Running/Paused state machine. Ticks
come from a PeriodicTicker; completion is reported to a notifier (alert
sound + "Timer is up." announcement) and to completion listeners.
"""

import logging
import threading
from enum import Enum
from typing import Callable, List, Optional

from .ticker import PeriodicTicker

TIMER_UP_MESSAGE = "Timer is up."


class RunState(Enum):
    """Timer run states"""
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


def to_seconds(hours: int = 0, minutes: int = 0, seconds: int = 0) -> int:
    """Convert an h/m/s picker selection to total seconds"""
    return hours * 3600 + minutes * 60 + seconds


def format_hms(total_seconds: int) -> str:
    """Format seconds as zero-padded HH:MM:SS"""
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class CountdownTimer:
    """
    Single countdown with pause/resume/reset.

    The duration passed to start() is only used when leaving IDLE, so a
    stale start event can't reset a countdown that is already in flight.
    """

    def __init__(self, notifier=None, tick_interval: float = 1.0,
                 ticker_factory: Callable[..., PeriodicTicker] = PeriodicTicker):
        """
        Initialize timer

        Args:
            notifier: Object with announce(message) and play_alert() (optional)
            tick_interval: Seconds between ticks
            ticker_factory: Callable(interval, callback) returning a ticker handle
        """
        self.logger = logging.getLogger(__name__)
        self.notifier = notifier
        self.tick_interval = tick_interval
        self.ticker_factory = ticker_factory

        self.remaining_seconds = 0
        self.run_state = RunState.IDLE

        self._ticker: Optional[PeriodicTicker] = None
        self._lock = threading.RLock()
        self._listeners: List[Callable[['CountdownTimer'], None]] = []
        self._completion_listeners: List[Callable[['CountdownTimer'], None]] = []

    # -------------------- listeners --------------------
    def add_listener(self, callback: Callable[['CountdownTimer'], None]):
        """Register a callback for every state change (including ticks)"""
        self._listeners.append(callback)

    def add_completion_listener(self, callback: Callable[['CountdownTimer'], None]):
        """Register a callback for countdown completion"""
        self._completion_listeners.append(callback)

    # -------------------- state queries --------------------
    @property
    def is_running(self) -> bool:
        return self.run_state == RunState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.run_state == RunState.PAUSED

    @property
    def is_idle(self) -> bool:
        return self.run_state == RunState.IDLE

    def format_display(self) -> str:
        """Remaining time as HH:MM:SS"""
        return format_hms(self.remaining_seconds)

    def snapshot(self) -> dict:
        """Current state as a plain dict (used by the web API)"""
        with self._lock:
            return {
                'remaining_seconds': self.remaining_seconds,
                'run_state': self.run_state.value,
                'display': self.format_display()
            }

    # -------------------- transitions --------------------
    def start(self, hours: int = 0, minutes: int = 0, seconds: int = 0):
        """
        Start from IDLE with the given duration, or resume.

        Args:
            hours: 0-23
            minutes: 0-59
            seconds: 0-59
        """
        with self._lock:
            if self.run_state == RunState.IDLE:
                self.remaining_seconds = to_seconds(hours, minutes, seconds)
                self.logger.info(f"Timer started: {self.format_display()}")
            else:
                self.logger.info(f"Timer resumed at {self.format_display()}")
            self.run_state = RunState.RUNNING
            self._cancel_ticker()
            self._ticker = self.ticker_factory(self.tick_interval, self._on_tick)
            self._ticker.start()
        self._notify_listeners()

    def pause(self):
        """Suspend ticking, keeping the remaining time"""
        with self._lock:
            if self.run_state != RunState.RUNNING:
                self.logger.debug(f"Pause ignored in state {self.run_state.value}")
                return
            self._cancel_ticker()
            self.run_state = RunState.PAUSED
            self.logger.info(f"Timer paused at {self.format_display()}")
        self._notify_listeners()

    def stop(self):
        """Stop ticking and go IDLE; remaining time is left as is"""
        with self._lock:
            self._cancel_ticker()
            self.run_state = RunState.IDLE
            self.logger.info("Timer stopped")
        self._notify_listeners()

    def reset(self):
        """Stop ticking and clear the remaining time"""
        with self._lock:
            self._cancel_ticker()
            self.run_state = RunState.IDLE
            self.remaining_seconds = 0
            self.logger.info("Timer reset")
        self._notify_listeners()

    # -------------------- internals --------------------
    def _cancel_ticker(self):
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _on_tick(self, ticker: PeriodicTicker):
        """Advance the countdown by one step"""
        completed = False
        with self._lock:
            # Ticks from a cancelled handle are dropped
            if ticker is not self._ticker or self.run_state != RunState.RUNNING:
                return

            if self.remaining_seconds > 0:
                self.remaining_seconds -= 1

            if self.remaining_seconds == 0:
                self._cancel_ticker()
                self.run_state = RunState.IDLE
                completed = True

        self._notify_listeners()
        if completed:
            self._complete()

    def _complete(self):
        self.logger.info("Timer finished")

        if self.notifier:
            self.notifier.play_alert()
            self.notifier.announce(TIMER_UP_MESSAGE)

        for callback in list(self._completion_listeners):
            try:
                callback(self)
            except Exception as e:
                self.logger.error(f"Completion listener failed: {e}", exc_info=True)

    def _notify_listeners(self):
        for callback in list(self._listeners):
            try:
                callback(self)
            except Exception as e:
                self.logger.error(f"Timer listener failed: {e}", exc_info=True)
