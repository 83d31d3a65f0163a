"""
PiDesk - Main Application
Countdown timer and to-do list for a Raspberry Pi with an e-ink display
"""

import sys
import os
import logging
import signal
import threading
import functools

from pidesk.config import Config
from pidesk.apps.timer.engine import CountdownTimer
from pidesk.apps.timer.screen import TimerScreen
from pidesk.apps.timer.ticker import PeriodicTicker
from pidesk.apps.todo.screen import ToDoScreen
from pidesk.apps.todo.store import TaskStore
from pidesk.core.notifier import Notifier
from pidesk.display.display_driver import DisplayDriver
from pidesk.hardware.gpio_handler import BUTTON_ACTIONS, GPIOHandler
from pidesk.ui.navigation import NavigationManager, Screen
from pidesk.web.webserver import PiDeskWebServer

DEFAULT_CONFIG = os.path.join(os.path.dirname(__file__), '../config/config.yaml')


class PiDeskApp:
    """
    Main application: owns the timer, the task list and the screens
    """

    def __init__(self, config_path: str, ticker_factory=PeriodicTicker, notifier=None):
        """
        Initialize application

        Args:
            config_path: Path to config.yaml
            ticker_factory: Tick source for the countdown timer
            notifier: Notification sink (default: auto-detected Notifier)
        """
        self.config = Config(config_path)

        self._setup_logging()
        self.logger = logging.getLogger(__name__)
        self.logger.info("=" * 50)
        self.logger.info("PiDesk starting...")
        self.logger.info("=" * 50)

        self.notifier = notifier or Notifier(
            enabled=self.config.get('notifier.enabled', True),
            voice=self.config.get('notifier.voice', 'en'),
            alert_sound=self.config.get('notifier.alert_sound')
        )

        # Core state
        self.timer = CountdownTimer(
            notifier=self.notifier,
            tick_interval=self.config.get('timer.tick_interval', 1.0),
            ticker_factory=ticker_factory
        )
        self.task_store = TaskStore()
        self.navigation = NavigationManager(Screen.TIMER, notifier=self.notifier)

        # Screens
        display_width = self.config.get('display.width', 800)
        display_height = self.config.get('display.height', 480)

        self.timer_screen = TimerScreen(
            self.timer,
            width=display_width,
            height=display_height,
            default_hours=self.config.get('timer.default_hours', 0),
            default_minutes=self.config.get('timer.default_minutes', 15),
            default_seconds=self.config.get('timer.default_seconds', 0)
        )
        self.todo_screen = ToDoScreen(
            self.task_store,
            width=display_width,
            height=display_height,
            items_per_page=self.config.get('todo.items_per_page', 8)
        )

        # Hardware
        self.display = DisplayDriver(
            display_width,
            display_height,
            self.config.get('display.rotation', 0),
            output_path=self.config.get('display.output_path', 'output/display_output.png')
        )
        self.display.set_full_refresh_interval(self.config.get('display.full_refresh_interval', 30))

        gpio_config = self.config.get('gpio_config')
        self.gpio = GPIOHandler(self.config.resolve_path(gpio_config)) if gpio_config else None

        self.web_server = None
        self.running = False
        self._render_lock = threading.Lock()
        self._last_frame = None

        # Redraw whenever something visible changes
        self.timer.add_listener(self._on_timer_change)
        self.task_store.add_listener(self._on_tasks_change)
        self.todo_screen.add_listener(self._on_tasks_change)
        self.navigation.add_listener(self._on_screen_change)

    def _setup_logging(self):
        """Configure logging"""
        log_level = getattr(logging, str(self.config.get('logging.level', 'INFO')).upper(), logging.INFO)
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        handlers = []

        # Console handler
        if self.config.get('logging.console', True):
            handlers.append(logging.StreamHandler())

        # File handler
        log_file = self.config.get('logging.file')
        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(log_file))

        logging.basicConfig(
            level=log_level,
            format=log_format,
            handlers=handlers or None
        )

    def setup(self):
        """Initialize hardware, callbacks and the web server, then draw the first screen"""
        self.logger.info("Initializing hardware...")
        self.display.initialize()
        self._register_gpio_callbacks()

        if self.config.get('web.enabled', True):
            web_port = self.config.get('web.port', 5000)
            self.web_server = PiDeskWebServer(self, web_port)
            self.web_server.run()
            self.logger.info(f"Web interface available at http://<pi-ip>:{web_port}")

        self.running = True
        self.navigation.announce_current()
        self._render_current_screen()

    def start(self):
        """Start the application"""
        try:
            self.setup()

            self.logger.info("PiDesk started successfully!")
            self.logger.info("Press Ctrl+C to exit")

            signal.signal(signal.SIGINT, self._signal_handler)
            signal.signal(signal.SIGTERM, self._signal_handler)

            # Pause indefinitely - buttons, web requests and ticks run on their own threads
            signal.pause()

        except KeyboardInterrupt:
            self.logger.info("Received interrupt signal")
            self.stop()
        except Exception as e:
            self.logger.error(f"Fatal error: {e}", exc_info=True)
            self.stop()

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals"""
        self.logger.info(f"Received signal {signum}")
        self.stop()
        sys.exit(0)

    def stop(self):
        """Clean shutdown"""
        self.logger.info("Shutting down...")
        self.running = False

        self.timer.stop()

        if self.display:
            self.display.cleanup()

        if self.gpio:
            self.gpio.cleanup()

        self.logger.info("PiDesk stopped")

    # -------------------- input --------------------
    def _register_gpio_callbacks(self):
        """Register button callbacks"""
        if not self.gpio:
            return

        for action in BUTTON_ACTIONS:
            if action in self.gpio.buttons:
                self.gpio.register_callback(action, functools.partial(self.handle_action, action))

        self.logger.info("GPIO callbacks registered")

    def handle_action(self, action: str):
        """
        Handle a button press (physical or from the web remote)

        Args:
            action: One of next, prev, select, back, menu
        """
        if not self.running:
            return

        self.logger.info(f"Button: {action}")

        if action == 'menu':
            self.navigation.next_screen()
            return

        if self.navigation.is_on_screen(Screen.TIMER):
            self._handle_timer_action(action)
        elif self.navigation.is_on_screen(Screen.TODO):
            self._handle_todo_action(action)

        self._render_current_screen()

    def _handle_timer_action(self, action: str):
        screen = self.timer_screen
        if action == 'next':
            screen.adjust_field(1)
        elif action == 'prev':
            screen.adjust_field(-1)
        elif action == 'select':
            screen.press_primary()
        elif action == 'back':
            if self.timer.is_idle:
                screen.cycle_field()
            else:
                screen.press_reset()

    def _handle_todo_action(self, action: str):
        screen = self.todo_screen
        if action == 'next':
            screen.next_item()
        elif action == 'prev':
            screen.prev_item()
        elif action == 'select':
            screen.toggle_selected()
        elif action == 'back':
            screen.delete_selected()

    # -------------------- rendering --------------------
    def _on_timer_change(self, timer):
        if self.navigation.is_on_screen(Screen.TIMER):
            self._render_current_screen()

    def _on_tasks_change(self, source):
        if self.navigation.is_on_screen(Screen.TODO):
            self._render_current_screen()

    def _on_screen_change(self, screen):
        self._render_current_screen()

    def _render_current_screen(self):
        """Render the current screen to display"""
        if not self.running:
            return

        with self._render_lock:
            try:
                if self.navigation.is_on_screen(Screen.TIMER):
                    image = self.timer_screen.render()
                else:
                    image = self.todo_screen.render()

                # Skip refreshes that would not change anything
                frame = image.tobytes()
                if frame == self._last_frame:
                    return
                self._last_frame = frame

                self.display.display_image(image, use_partial=True)

            except Exception as e:
                self.logger.error(f"Render error: {e}", exc_info=True)


def main():
    """Main entry point"""
    if len(sys.argv) > 1:
        config_path = sys.argv[1]
    else:
        config_path = os.environ.get('PIDESK_CONFIG', DEFAULT_CONFIG)

    if not os.path.exists(config_path):
        print(f"ERROR: Configuration file not found: {config_path}")
        print("Usage: pidesk [config_path]")
        sys.exit(1)

    app = PiDeskApp(config_path)
    app.start()


if __name__ == '__main__':
    main()
