"""
Timer screen: h/m/s picker, Start/Pause/Resume and Reset buttons.
"""

import logging

from PIL import Image, ImageDraw

from pidesk.ui.drawing import draw_centered, load_font, text_size
from .engine import CountdownTimer

PICKER_FIELDS = ('hours', 'minutes', 'seconds')
PICKER_LIMITS = {'hours': 23, 'minutes': 59, 'seconds': 59}
PICKER_UNITS = {'hours': 'hours', 'minutes': 'min', 'seconds': 'sec'}


class TimerScreen:
    """
    Countdown timer screen
    """

    def __init__(self, timer: CountdownTimer, width: int = 800, height: int = 480,
                 default_hours: int = 0, default_minutes: int = 15, default_seconds: int = 0):
        """
        Initialize timer screen

        Args:
            timer: CountdownTimer driven by this screen
            width: Screen width
            height: Screen height
            default_hours: Initial picker hours
            default_minutes: Initial picker minutes
            default_seconds: Initial picker seconds
        """
        self.logger = logging.getLogger(__name__)
        self.timer = timer
        self.width = width
        self.height = height

        self.hours = 0
        self.minutes = 0
        self.seconds = 0
        self.set_duration(default_hours, default_minutes, default_seconds)

        # Picker field adjusted by next/prev buttons
        self.focused_field = 'minutes'

        self.title_font = load_font(36, bold=True)
        self.time_font = load_font(96, bold=True)
        self.font = load_font(24)

    # -------------------- picker --------------------
    def set_duration(self, hours: int, minutes: int, seconds: int):
        """Set picker values, clamped to the picker ranges"""
        self.hours = max(0, min(int(hours), PICKER_LIMITS['hours']))
        self.minutes = max(0, min(int(minutes), PICKER_LIMITS['minutes']))
        self.seconds = max(0, min(int(seconds), PICKER_LIMITS['seconds']))

    @property
    def picker_visible(self) -> bool:
        return self.timer.is_idle

    def cycle_field(self):
        """Move picker focus hours -> minutes -> seconds -> hours"""
        index = PICKER_FIELDS.index(self.focused_field)
        self.focused_field = PICKER_FIELDS[(index + 1) % len(PICKER_FIELDS)]
        self.logger.debug(f"Picker focus: {self.focused_field}")

    def adjust_field(self, step: int):
        """Change the focused picker value, wrapping at the range ends"""
        if not self.picker_visible:
            return
        limit = PICKER_LIMITS[self.focused_field]
        value = (getattr(self, self.focused_field) + step) % (limit + 1)
        setattr(self, self.focused_field, value)
        self.logger.debug(f"Picker {self.focused_field} = {value}")

    # -------------------- buttons --------------------
    @property
    def primary_label(self) -> str:
        if self.timer.is_running:
            return "Pause"
        if self.timer.is_paused:
            return "Resume"
        return "Start"

    @property
    def primary_accessibility_label(self) -> str:
        return f"{self.primary_label} timer"

    @property
    def primary_hint(self) -> str:
        if self.timer.is_running:
            return "Pause temporarily the timer."
        return "Start or resume the selected timer"

    def press_primary(self):
        """Start, pause or resume depending on the timer state"""
        if self.timer.is_running:
            self.timer.pause()
        elif self.timer.is_paused:
            self.timer.start()
        else:
            self.timer.start(self.hours, self.minutes, self.seconds)

    def press_reset(self):
        self.timer.reset()

    # -------------------- rendering --------------------
    def render(self) -> Image.Image:
        """
        Render the timer screen

        Returns:
            PIL Image of the screen
        """
        image = Image.new('L', (self.width, self.height), 255)
        draw = ImageDraw.Draw(image)

        y_offset = 20
        y_offset += draw_centered(draw, self.width, y_offset, "Timer", self.title_font) + 40

        y_offset += draw_centered(draw, self.width, y_offset, self.timer.format_display(), self.time_font) + 50

        if self.picker_visible:
            parts = []
            for name in PICKER_FIELDS:
                text = f"{getattr(self, name)} {PICKER_UNITS[name]}"
                parts.append(f"[{text}]" if name == self.focused_field else text)
            y_offset += draw_centered(draw, self.width, y_offset, "   ".join(parts), self.font) + 40

        # Buttons
        labels = [self.primary_label, "Reset"]
        button_width = 160
        button_height = 50
        gap = 40
        total = len(labels) * button_width + (len(labels) - 1) * gap
        x = (self.width - total) // 2
        y = max(y_offset, self.height - button_height - 40)
        for index, label in enumerate(labels):
            fill = 0 if index == 0 and self.timer.is_running else 255
            text_fill = 255 if fill == 0 else 0
            draw.rectangle([(x, y), (x + button_width, y + button_height)], outline=0, width=2, fill=fill)
            label_width, label_height = text_size(draw, label, self.font)
            draw.text(
                (x + (button_width - label_width) // 2, y + (button_height - label_height) // 2),
                label,
                fill=text_fill,
                font=self.font
            )
            x += button_width + gap

        return image
