"""
Rectangle Painter

Overlays a small number of random opaque rectangles on a canvas.

The color for each rectangle is drawn from a prefix of a fixed palette
(red, blue, yellow, green). The prefix is normally two entries long and is
widened by two independent low-probability Bernoulli draws, so yellow and
green appear only very rarely.
"""

import random
from dataclasses import dataclass
from typing import List, Optional

from .canvas import Canvas, Color


# =============================================================================
# PALETTE
# =============================================================================

RED: Color = (0xFF, 0x00, 0x00)
BLUE: Color = (0x00, 0x00, 0xFF)
YELLOW: Color = (0xFF, 0xFF, 0x00)
GREEN: Color = (0x00, 0xFF, 0x00)

# Declared order matters: palette slices are always prefixes
PALETTE: List[Color] = [RED, BLUE, YELLOW, GREEN]

COLOR_NAMES = {
    RED: "red",
    BLUE: "blue",
    YELLOW: "yellow",
    GREEN: "green",
}

BASE_RECT_COUNT = 2
BASE_PALETTE_SIZE = 2
THIRD_RECT_PROBABILITY = 0.05
WIDEN_PROBABILITY = 0.001
MIN_RECT_SIZE = 50


@dataclass(frozen=True)
class RectRequest:
    """A filled rectangle covering x in [x0, x1) and y in [y0, y1)."""
    x0: int
    y0: int
    x1: int
    y1: int
    color: Color

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def color_name(self) -> str:
        return COLOR_NAMES.get(self.color, "custom")


def bernoulli(rng: random.Random, p: float) -> bool:
    return rng.random() < p


def choose_rect_count(rng: random.Random, p_third: float = THIRD_RECT_PROBABILITY) -> int:
    """2 rectangles, or 3 with probability `p_third`."""
    return BASE_RECT_COUNT + int(bernoulli(rng, p_third))


def choose_palette_size(rng: random.Random, p_widen: float = WIDEN_PROBABILITY) -> int:
    """
    Size of the palette prefix for one rectangle.

    Two separate draws, each adding one entry. The second is not gated on
    the first, so the result is 2 + Binomial(2, p_widen).
    """
    first = bernoulli(rng, p_widen)
    second = bernoulli(rng, p_widen)
    return BASE_PALETTE_SIZE + int(first) + int(second)


def random_rect(
    rng: random.Random,
    width: int,
    height: int,
    palette_size: Optional[int] = None,
    p_widen: float = WIDEN_PROBABILITY,
    min_size: int = MIN_RECT_SIZE,
) -> RectRequest:
    """
    Draw one rectangle request that lies fully inside a width x height canvas.

    Args:
        rng: Random source
        width: Canvas width
        height: Canvas height
        palette_size: Force the palette prefix length (None = random widening)
        p_widen: Probability of each palette widening
        min_size: Minimum side length

    Returns:
        RectRequest with x1 in [x0+min_size, width] and y1 in [y0+min_size, height]
    """
    if width <= min_size or height <= min_size:
        raise ValueError(f"Canvas {width}x{height} too small for {min_size}px rectangles")

    endex = palette_size if palette_size is not None else choose_palette_size(rng, p_widen)
    if not 1 <= endex <= len(PALETTE):
        raise ValueError(f"Palette size must be in [1, {len(PALETTE)}], got {endex}")
    color = rng.choice(PALETTE[:endex])

    x0 = rng.randrange(0, width - min_size)
    y0 = rng.randrange(0, height - min_size)
    x1 = x0 + rng.randint(min_size, width - x0)
    y1 = y0 + rng.randint(min_size, height - y0)

    return RectRequest(x0, y0, x1, y1, color)


def paint_rectangles(
    canvas: Canvas,
    rng: random.Random,
    count: int,
    palette_size: Optional[int] = None,
    p_widen: float = WIDEN_PROBABILITY,
    min_size: int = MIN_RECT_SIZE,
) -> List[RectRequest]:
    """
    Draw `count` random rectangles onto the canvas in order.

    Later rectangles overwrite earlier ones; there is no blending.

    Returns:
        The drawn rectangles, in paint order
    """
    rects = []
    for _ in range(count):
        rect = random_rect(rng, canvas.width, canvas.height, palette_size, p_widen, min_size)
        canvas.fill_rect(rect.x0, rect.y0, rect.x1, rect.y1, rect.color)
        rects.append(rect)
    return rects
