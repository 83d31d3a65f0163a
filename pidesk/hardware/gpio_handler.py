"""
GPIO button handling with gpiozero.
Runs in mock mode (trigger_button only) when gpiozero is missing.
"""

import yaml
import logging
from typing import Callable, Dict, List, Optional

# Every PiDesk action has a button; menu switches screens, the rest depend on the screen
BUTTON_ACTIONS = ('next', 'prev', 'select', 'back', 'menu')


class GPIOHandler:
    """
    PiDesk buttons on GPIO pins, read from gpio_mapping.yaml
    """

    def __init__(self, config_path: str):
        """
        Load the button mapping and set up the pins

        Args:
            config_path: Path to GPIO configuration YAML
        """
        self.logger = logging.getLogger(__name__)
        self.callbacks: Dict[str, Callable] = {}
        self.buttons: Dict[str, Optional[object]] = {}

        with open(config_path, 'r') as f:
            self.config = yaml.safe_load(f) or {}

        self.mapping = self._validate_mapping(self.config.get('buttons') or {})
        self.missing_actions: List[str] = [a for a in BUTTON_ACTIONS if a not in self.mapping]
        if self.missing_actions:
            self.logger.warning(f"No button mapped for: {', '.join(self.missing_actions)}")

        try:
            from gpiozero import Button
            self.Button = Button
            self.hardware_available = True
        except ImportError:
            self.logger.warning("gpiozero not available. Running in mock mode.")
            self.hardware_available = False
            self.Button = None

        self._setup_buttons()

    def _validate_mapping(self, buttons: dict) -> Dict[str, dict]:
        """
        Keep only known actions with a pin, one action per pin

        Returns:
            action name -> button config
        """
        mapping: Dict[str, dict] = {}
        used_pins: Dict[int, str] = {}

        for action, button_config in buttons.items():
            if action not in BUTTON_ACTIONS:
                self.logger.warning(f"Ignoring unknown button '{action}'")
                continue

            pin = (button_config or {}).get('pin')
            if pin is None:
                self.logger.error(f"Button '{action}' has no pin")
                continue

            if pin in used_pins:
                self.logger.error(f"GPIO {pin} already used by '{used_pins[pin]}', skipping '{action}'")
                continue

            used_pins[pin] = action
            mapping[action] = button_config

        return mapping

    def _setup_buttons(self):
        """Create a gpiozero Button per mapped action (None in mock mode)"""
        for action, button_config in self.mapping.items():
            if not self.hardware_available:
                self.buttons[action] = None
                continue

            pin = button_config['pin']
            try:
                self.buttons[action] = self.Button(
                    pin,
                    pull_up=button_config.get('pull', 'up') == 'up',
                    bounce_time=button_config.get('bounce_time', 0.2)
                )
                self.logger.info(f"Button '{action}' on GPIO {pin}")
            except Exception as e:
                self.logger.error(f"Failed to setup button '{action}': {e}")
                self.buttons[action] = None

        mode = "GPIO" if self.hardware_available else "mock"
        self.logger.info(f"{mode} buttons configured: {', '.join(self.buttons) or 'none'}")

    def register_callback(self, button_name: str, callback: Callable):
        """
        Register a callback function for a button

        Args:
            button_name: Action name (from BUTTON_ACTIONS)
            callback: Function to call when button is pressed
        """
        if button_name not in self.buttons:
            raise ValueError(f"Unknown button: {button_name}")

        self.callbacks[button_name] = callback

        button = self.buttons[button_name]
        if button:
            button.when_pressed = callback

    def trigger_button(self, button_name: str):
        """
        Run a button's callback as if it was pressed (web remote, mock mode, tests)

        Args:
            button_name: Name of button to trigger
        """
        callback = self.callbacks.get(button_name)
        if callback is None:
            self.logger.warning(f"No callback registered for '{button_name}'")
            return
        self.logger.debug(f"Triggering button '{button_name}'")
        callback()

    def cleanup(self):
        """Release the GPIO pins"""
        for button_name, button in self.buttons.items():
            if button:
                try:
                    button.close()
                except Exception as e:
                    self.logger.error(f"Error cleaning up button '{button_name}': {e}")

        self.logger.info("GPIO cleaned up")
