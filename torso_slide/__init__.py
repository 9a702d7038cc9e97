"""
Synthetic Test Slide Generator

Produces placeholder video "slides" in the style of scrambled test
broadcast frames:
- A white 768x512 canvas with 2 (rarely 3) random red/blue rectangles
- A serif caption "aqua.flv - synthetic frame #N" in the bottom-left corner
- PNG output via Pillow

Fonts are discovered through the host font catalog (matplotlib's font
manager) and rasterised with FreeType.
"""

__version__ = "0.1.0"
__author__ = "torso_slide"

from .canvas import Canvas
from .errors import FontResolutionError, IOWriteError, SlideError
from .fonts import FontHandle, LoadedFont, load_font, resolve_serif_font
from .generator import SlideConfig, SlideGenerator, generate_slide, make_caption
from .rectangles import PALETTE, RectRequest
from .result import SlideResult
from .text import Scale, draw_text

__all__ = [
    "Canvas",
    "FontHandle",
    "FontResolutionError",
    "IOWriteError",
    "LoadedFont",
    "PALETTE",
    "RectRequest",
    "Scale",
    "SlideConfig",
    "SlideError",
    "SlideGenerator",
    "SlideResult",
    "draw_text",
    "generate_slide",
    "load_font",
    "make_caption",
    "resolve_serif_font",
]
