"""
Canvas

A fixed-size RGB pixel grid backed by a numpy array (row-major, origin
top-left). Single-pixel access is bounds-checked; area operations clip.
"""

from typing import Tuple
import numpy as np
from PIL import Image

Color = Tuple[int, int, int]

WHITE: Color = (0xFF, 0xFF, 0xFF)
BLACK: Color = (0x00, 0x00, 0x00)


class Canvas:
    """
    Mutable RGB image being composed before encoding.

    Attributes:
        pixels: uint8 array of shape (height, width, 3)
    """

    def __init__(self, width: int, height: int, color: Color = WHITE):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas dimensions must be positive, got {width}x{height}")
        self.pixels = np.empty((height, width, 3), dtype=np.uint8)
        self.pixels[:, :] = color

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> Color:
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def put_pixel(self, x: int, y: int, color: Color):
        if not self.contains(x, y):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas")
        self.pixels[y, x] = color

    def _clip(self, x0: int, y0: int, x1: int, y1: int) -> Tuple[int, int, int, int]:
        return (
            max(0, min(x0, self.width)),
            max(0, min(y0, self.height)),
            max(0, min(x1, self.width)),
            max(0, min(y1, self.height)),
        )

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color):
        """Overwrite every pixel with x in [x0, x1) and y in [y0, y1)."""
        x0, y0, x1, y1 = self._clip(x0, y0, x1, y1)
        if x1 > x0 and y1 > y0:
            self.pixels[y0:y1, x0:x1] = color

    def blend(self, left: int, top: int, coverage: np.ndarray, color: Color):
        """
        Blend `color` into the canvas weighted by a coverage mask.

        Each channel becomes (1 - c) * existing + c * color, truncated to
        8 bits. Parts of the mask that fall outside the canvas are skipped.

        Args:
            left: Canvas x of the mask's first column
            top: Canvas y of the mask's first row
            coverage: 2D float array of intensities in [0, 1]
            color: Target RGB color
        """
        h, w = coverage.shape
        x0, y0, x1, y1 = self._clip(left, top, left + w, top + h)
        if x1 <= x0 or y1 <= y0:
            return

        weights = coverage[y0 - top:y1 - top, x0 - left:x1 - left, np.newaxis].astype(np.float64)
        weights = np.clip(weights, 0.0, 1.0)
        region = self.pixels[y0:y1, x0:x1].astype(np.float64)
        target = np.asarray(color, dtype=np.float64)

        blended = (1.0 - weights) * region + weights * target
        self.pixels[y0:y1, x0:x1] = np.clip(blended, 0, 255).astype(np.uint8)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels.copy())
