"""
Small Pillow helpers shared by the screens.
"""

import logging
from typing import Tuple

from PIL import ImageDraw, ImageFont

FONT_REGULAR = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
FONT_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"

logger = logging.getLogger(__name__)


def load_font(size: int, bold: bool = False):
    """Load a DejaVu font, falling back to Pillow's default font"""
    path = FONT_BOLD if bold else FONT_REGULAR
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logger.warning(f"TrueType font not found ({path}), using default")
        return ImageFont.load_default()


def text_size(draw: ImageDraw.ImageDraw, text: str, font) -> Tuple[int, int]:
    """Width and height of rendered text"""
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0], bbox[3] - bbox[1]


def draw_centered(draw: ImageDraw.ImageDraw, width: int, y: int, text: str, font, fill='black') -> int:
    """Draw text horizontally centered; returns the text height"""
    text_width, text_height = text_size(draw, text, font)
    draw.text(((width - text_width) // 2, y), text, fill=fill, font=font)
    return text_height
