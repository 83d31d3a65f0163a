"""
Cancellable periodic tick source for the countdown timer.
One background thread per handle; cancel() stops it.
"""

import logging
import threading
from typing import Callable, Optional


class PeriodicTicker:
    """
    Calls a function every `interval` seconds until cancelled.

    The callback receives the ticker itself so the owner can tell a
    stale tick (from a handle it already cancelled) from a live one.
    """

    def __init__(self, interval: float, callback: Callable[['PeriodicTicker'], None]):
        """
        Initialize ticker

        Args:
            interval: Seconds between ticks
            callback: Function called with this ticker on every tick
        """
        self.interval = interval
        self.callback = callback
        self.logger = logging.getLogger(__name__)
        self._cancelled = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self):
        """Start ticking in a daemon thread"""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        self.logger.debug(f"Ticker started ({self.interval}s)")

    def cancel(self):
        """Stop ticking. Safe to call more than once."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def _run(self):
        # wait() returns True as soon as cancel() is called
        while not self._cancelled.wait(self.interval):
            try:
                self.callback(self)
            except Exception as e:
                self.logger.error(f"Tick callback failed: {e}", exc_info=True)
        self.logger.debug("Ticker stopped")
