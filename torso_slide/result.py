"""
Slide Result Container

Provides the SlideResult dataclass holding a generated slide together with
the random parameters that produced it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from PIL import Image

from .errors import IOWriteError
from .rectangles import RectRequest


@dataclass
class SlideResult:
    """
    Container for one generated slide.

    Attributes:
        image: The composed RGB image
        caption: Caption text drawn on the slide
        frame_number: Frame number embedded in the caption
        rectangles: Rectangles in paint order
        metadata: Generation parameters (seed, font, scale, ...)
    """
    image: Image.Image
    caption: str
    frame_number: int
    rectangles: List[RectRequest] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def save(self, path: str) -> str:
        """
        Write the slide as PNG, replacing any existing file.

        Raises:
            IOWriteError: on any encoding or filesystem failure
        """
        try:
            self.image.save(path, format="PNG")
        except (OSError, ValueError) as e:
            raise IOWriteError(f"Failed to save image to {path}: {e}") from e
        return path

    def get_stats(self) -> Dict[str, Any]:
        """Summary of what was drawn."""
        return {
            'width': self.width,
            'height': self.height,
            'frame_number': self.frame_number,
            'rectangles': len(self.rectangles),
            'colors': [rect.color_name for rect in self.rectangles],
        }

    def __repr__(self) -> str:
        return (
            f"SlideResult(frame={self.frame_number}, "
            f"size={self.width}x{self.height}, rectangles={len(self.rectangles)})"
        )
