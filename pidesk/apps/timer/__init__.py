"""
Countdown Timer App Module

Provides the countdown timer for PiDesk including:
- CountdownTimer: Idle/Running/Paused state machine
- PeriodicTicker: Cancellable one-second tick source
- TimerScreen: E-ink display screen
- Flask Blueprint: REST API routes
"""

from .engine import CountdownTimer, RunState, TIMER_UP_MESSAGE, format_hms, to_seconds
from .ticker import PeriodicTicker
from .screen import TimerScreen
from .routes import timer_bp, init_routes

__all__ = [
    'CountdownTimer', 'RunState', 'TIMER_UP_MESSAGE', 'format_hms', 'to_seconds',
    'PeriodicTicker', 'TimerScreen', 'timer_bp', 'init_routes'
]
