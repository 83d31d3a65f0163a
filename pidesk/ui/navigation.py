"""
Tab navigation between the Timer and To Do screens.
Every selection is announced as "Selected screen: <name>".
"""

from enum import Enum
from typing import Callable, List, Optional
import logging


class Screen(Enum):
    """Available screens in the application"""
    TIMER = "timer"
    TODO = "todo"

    @property
    def label(self) -> str:
        return SCREEN_LABELS[self]


SCREEN_LABELS = {
    Screen.TIMER: "Timer",
    Screen.TODO: "To Do",
}

TAB_ORDER = [Screen.TIMER, Screen.TODO]


class NavigationManager:
    """
    Track the selected tab
    """

    def __init__(self, initial_screen: Screen = Screen.TIMER, notifier=None):
        """
        Initialize navigation manager

        Args:
            initial_screen: Starting screen
            notifier: Object with announce(message) (optional)
        """
        self.logger = logging.getLogger(__name__)
        self.current_screen = initial_screen
        self.notifier = notifier
        self._listeners: List[Callable[[Screen], None]] = []

        self.logger.info(f"Navigation initialized at {self.current_screen.value}")

    def add_listener(self, callback: Callable[[Screen], None]):
        """Register a callback run with the newly selected screen"""
        self._listeners.append(callback)

    def select(self, screen: Screen):
        """
        Switch to a screen and announce it

        Args:
            screen: Target screen
        """
        previous = self.current_screen
        self.current_screen = screen
        self.logger.info(f"Navigated from {previous.value} to {screen.value}")

        self.announce_current()
        for callback in list(self._listeners):
            try:
                callback(screen)
            except Exception as e:
                self.logger.error(f"Navigation listener failed: {e}", exc_info=True)

    def next_screen(self) -> Screen:
        """Select the next tab (wraps around)"""
        index = TAB_ORDER.index(self.current_screen)
        self.select(TAB_ORDER[(index + 1) % len(TAB_ORDER)])
        return self.current_screen

    def select_by_name(self, name: str) -> Optional[Screen]:
        """
        Select a screen by value ("timer") or label ("To Do")

        Returns:
            The selected screen, or None if the name is unknown
        """
        wanted = name.strip().lower()
        for screen in Screen:
            if wanted in (screen.value, screen.label.lower()):
                self.select(screen)
                return screen
        self.logger.warning(f"Unknown screen: {name}")
        return None

    def announce_current(self):
        """Announce the selected screen"""
        if self.notifier:
            self.notifier.announce(f"Selected screen: {self.current_screen.label}")

    def is_on_screen(self, screen: Screen) -> bool:
        """
        Check if currently on a specific screen

        Args:
            screen: Screen to check

        Returns:
            True if on specified screen
        """
        return self.current_screen == screen
