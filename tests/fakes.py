"""
Test doubles shared by the test modules
"""


class ManualTicker:
    """Ticker handle that only ticks when fire() is called"""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.callback(self)


class ManualTickerFactory:
    """
    Drop-in replacement for PeriodicTicker as a CountdownTimer ticker_factory.

    Keeps every handle it created so tests can fire stale ones too.
    """

    def __init__(self):
        self.tickers = []

    def __call__(self, interval, callback):
        ticker = ManualTicker(interval, callback)
        self.tickers.append(ticker)
        return ticker

    @property
    def current(self):
        return self.tickers[-1] if self.tickers else None

    def active(self):
        return [t for t in self.tickers if t.started and not t.cancelled]

    def tick(self, count: int = 1):
        """Fire the live ticker `count` times (stops early once nothing is live)"""
        for _ in range(count):
            live = self.active()
            if not live:
                return
            for ticker in live:
                ticker.fire()
