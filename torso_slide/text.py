"""
Text Rasterizer

Renders a caption onto a Canvas with anti-aliased glyph coverage.

Horizontal and vertical scale are independent: the vertical scale is the
line height (ascent + descent) in pixels, the horizontal scale squeezes or
stretches glyphs relative to it. Glyph shapes, advances and kerning come
from FreeType through Pillow; this module only places each glyph's
coverage mask and blends it into the canvas.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .canvas import Canvas, Color
from .fonts import LoadedFont


@dataclass(frozen=True)
class Scale:
    """Glyph scale in pixels: x = horizontal, y = line height."""
    x: float = 22.0
    y: float = 30.0

    @property
    def stretch(self) -> float:
        return self.x / self.y


@dataclass
class Glyph:
    """
    One positioned glyph.

    Attributes:
        char: Source character
        left: Canvas x of the coverage mask's first column
        top: Canvas y of the coverage mask's first row
        coverage: float32 array (rows, cols) of intensities in [0, 1]
    """
    char: str
    left: int
    top: int
    coverage: np.ndarray

    @property
    def bbox(self) -> Tuple[int, int, int, int]:
        h, w = self.coverage.shape
        return self.left, self.top, self.left + w, self.top + h


def face_for_scale(font: LoadedFont, scale: Scale) -> ImageFont.FreeTypeFont:
    return font.sized(font.em_size_for_height(scale.y))


def _rasterize_char(face: ImageFont.FreeTypeFont, char: str, stretch: float):
    """Coverage mask and baseline-relative (left, top) offset, or None if blank."""
    left, top, right, bottom = face.getbbox(char, anchor="ls")
    if right <= left or bottom <= top:
        return None

    mask = Image.new("L", (right - left, bottom - top), 0)
    ImageDraw.Draw(mask).text((-left, -top), char, font=face, fill=255, anchor="ls")

    out_width = max(1, round(mask.width * stretch))
    if out_width != mask.width:
        mask = mask.resize((out_width, mask.height), Image.Resampling.BILINEAR)

    coverage = np.asarray(mask, dtype=np.float32) / 255.0
    if not coverage.any():
        return None
    return coverage, left * stretch, top


def layout_glyphs(
    font: LoadedFont,
    text: str,
    scale: Scale,
    origin: Tuple[float, float],
    face: Optional[ImageFont.FreeTypeFont] = None,
) -> List[Glyph]:
    """
    Lay out `text` left to right starting at a baseline origin.

    Glyphs without any coverage (whitespace) are dropped.

    Args:
        font: Parsed font
        text: Single line of text
        scale: Horizontal and vertical scale
        origin: (x, baseline y) of the pen's starting point
        face: Face already sized for `scale` (built from `font` if omitted)

    Returns:
        Positioned glyphs in text order
    """
    if face is None:
        face = face_for_scale(font, scale)
    stretch = scale.stretch
    pen_x, baseline = origin

    glyphs = []
    for i, char in enumerate(text):
        rendered = _rasterize_char(face, char, stretch)
        if rendered is None:
            continue
        coverage, dx, dy = rendered
        # Advance through the prefix so kerning is applied by the font engine
        advance = face.getlength(text[:i]) * stretch
        glyphs.append(Glyph(
            char=char,
            left=int(math.floor(pen_x + advance + dx)),
            top=int(math.floor(baseline + dy)),
            coverage=coverage,
        ))
    return glyphs


def draw_text(
    canvas: Canvas,
    color: Color,
    x: int,
    y: int,
    scale: Scale,
    font: LoadedFont,
    text: str,
) -> List[Glyph]:
    """
    Draw a line of text whose top edge is at (x, y).

    The baseline sits one ascent below `y`. Pixels falling outside the
    canvas are skipped.

    Returns:
        The glyphs that were blended in
    """
    face = face_for_scale(font, scale)
    ascent, _ = face.getmetrics()
    glyphs = layout_glyphs(font, text, scale, (x, y + ascent), face=face)
    for glyph in glyphs:
        canvas.blend(glyph.left, glyph.top, glyph.coverage, color)
    return glyphs
