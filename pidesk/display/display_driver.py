"""
E-ink display driver abstraction for Waveshare 7.5" e-Paper HAT.
Falls back to writing PNG frames when the Waveshare library is missing.
"""

import os
import sys
from PIL import Image
import logging

# Add Waveshare library to path
LIB_PATH = os.path.join(os.path.dirname(__file__), '../../lib')
if os.path.exists(LIB_PATH):
    sys.path.insert(0, LIB_PATH)


class DisplayDriver:
    """
    Hardware abstraction for Waveshare 7.5" e-Paper HAT (800x480)
    """

    def __init__(self, width: int = 800, height: int = 480, rotation: int = 0,
                 output_path: str = "output/display_output.png"):
        """
        Initialize display driver

        Args:
            width: Display width in pixels (logical, after rotation)
            height: Display height in pixels (logical, after rotation)
            rotation: Rotation angle (0, 90, 180, 270)
            output_path: PNG file written in mock mode
        """
        self.width = width
        self.height = height
        self.rotation = rotation
        self.output_path = output_path
        self.epd = None
        self.logger = logging.getLogger(__name__)
        self.partial_refresh_count = 0
        self.full_refresh_interval = 30  # Full refresh every N partial refreshes
        self.partial_mode_initialized = False
        self.frames_shown = 0

        # Physical hardware dimensions (always 800x480 for this display)
        self.hw_width = 800
        self.hw_height = 480

        # Try to import Waveshare library
        try:
            from waveshare_epd import epd7in5_V2
            self.epd_module = epd7in5_V2
            self.hardware_available = True
            self.logger.info("Using Waveshare 7.5inch V2 driver (800x480)")
        except ImportError:
            self.logger.warning("Waveshare V2 library not found. Running in mock mode.")
            self.hardware_available = False

    def initialize(self):
        """Initialize the display hardware"""
        if not self.hardware_available:
            self.logger.info("Mock display initialized (no hardware)")
            return

        try:
            self.epd = self.epd_module.EPD()
            self.epd.init()
            self.epd.Clear()
            self.logger.info("E-ink display initialized successfully")
        except Exception as e:
            self.logger.error(f"Display initialization failed: {e}")
            raise

    def set_full_refresh_interval(self, interval: int):
        """
        Set how many partial refreshes before a full refresh

        Args:
            interval: Number of partial refreshes between full refreshes
        """
        self.full_refresh_interval = max(1, interval)
        self.logger.info(f"Full refresh interval set to {self.full_refresh_interval}")

    def _prepare(self, image: Image.Image) -> Image.Image:
        if image.size != (self.width, self.height):
            self.logger.warning(f"UNEXPECTED RESIZE from {image.size} to ({self.width}, {self.height}) - check renderer!")
            image = image.resize((self.width, self.height), Image.Resampling.NEAREST)

        if image.mode != '1':
            image = image.convert('1', dither=Image.Dither.NONE)

        if self.rotation != 0:
            image = image.rotate(-self.rotation, expand=True, resample=Image.Resampling.NEAREST)
        return image

    def display_image(self, image: Image.Image, use_partial: bool = True):
        """
        Display a PIL Image on the screen with partial or full refresh

        Args:
            image: PIL Image object (converted to 1-bit and rotated as needed)
            use_partial: Use partial refresh if True, full refresh if False
        """
        image = self._prepare(image)
        self.frames_shown += 1

        if not self.hardware_available or not self.epd:
            # Mock mode - save image to file
            directory = os.path.dirname(self.output_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            image.save(self.output_path)
            self.logger.debug(f"Mock display: Image saved to {self.output_path}")
            return

        try:
            should_full_refresh = not use_partial or self.partial_refresh_count >= self.full_refresh_interval

            if should_full_refresh or not hasattr(self.epd, 'display_Partial'):
                if self.partial_mode_initialized:
                    self.epd.init()
                    self.partial_mode_initialized = False
                self.epd.display(self.epd.getbuffer(image))
                self.partial_refresh_count = 0
                self.logger.debug("FULL refresh")
            else:
                if not self.partial_mode_initialized and hasattr(self.epd, 'init_part'):
                    self.epd.init_part()
                    self.partial_mode_initialized = True
                # Partial refresh takes HARDWARE coordinates (always 800x480)
                self.epd.display_Partial(self.epd.getbuffer(image), 0, 0, self.hw_width, self.hw_height)
                self.partial_refresh_count += 1
                self.logger.debug(f"PARTIAL refresh {self.partial_refresh_count}/{self.full_refresh_interval}")

        except Exception as e:
            self.logger.error(f"Display image failed: {e}")
            raise

    def cleanup(self):
        """Clean up resources and put display to sleep"""
        if not self.hardware_available or not self.epd:
            self.logger.debug("Mock cleanup")
            return

        try:
            self.epd.sleep()
            self.logger.info("Display cleaned up")
        except Exception as e:
            self.logger.error(f"Display cleanup failed: {e}")
