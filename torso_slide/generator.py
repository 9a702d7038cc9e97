"""
Synthetic Slide Generator

Composes a single placeholder video frame:
1. Seed a random source
2. Allocate a white canvas
3. Paint 2 (rarely 3) random rectangles
4. Blank a caption strip at the bottom-left
5. Resolve a serif font from the host
6. Rasterize "aqua.flv - synthetic frame #N" onto the strip
7. Write the result as PNG
"""

import random
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .canvas import BLACK, WHITE, Canvas, Color
from .fonts import LoadedFont, resolve_serif_font
from .rectangles import (
    MIN_RECT_SIZE,
    THIRD_RECT_PROBABILITY,
    WIDEN_PROBABILITY,
    choose_rect_count,
    paint_rectangles,
)
from .result import SlideResult
from .text import Scale, draw_text

WIDTH = 768
HEIGHT = 512
CAPTION_TEMPLATE = "aqua.flv - synthetic frame #{}"
MAX_FRAME = 10000
OUTPUT_PATH = "webdriver_torso_slide.png"


@dataclass
class SlideConfig:
    """Configuration for slide generation."""
    width: int = WIDTH
    height: int = HEIGHT
    background: Color = WHITE
    text_color: Color = BLACK
    third_rect_probability: float = THIRD_RECT_PROBABILITY
    widen_probability: float = WIDEN_PROBABILITY   # Applied twice, independently
    min_rect_size: int = MIN_RECT_SIZE
    x_scale: float = 22.0              # Horizontal glyph scale
    y_scale: float = 30.0              # Line height
    margin_x: int = 5                  # Caption left margin
    strip_width: int = 256             # Width of the blanked caption strip
    caption_template: str = CAPTION_TEMPLATE
    max_frame: int = MAX_FRAME         # Frame numbers are drawn from [1, max_frame]
    output_path: str = OUTPUT_PATH
    seed: Optional[int] = None         # None = fresh entropy every run
    rect_count: Optional[int] = None   # Force rectangle count
    palette_size: Optional[int] = None # Force palette prefix length
    frame_number: Optional[int] = None # Force caption frame number
    verbose: bool = False

    @property
    def scale(self) -> Scale:
        return Scale(x=self.x_scale, y=self.y_scale)

    @property
    def line_height(self) -> int:
        return int(self.y_scale)


def make_caption(frame_number: int, template: str = CAPTION_TEMPLATE) -> str:
    return template.format(frame_number)


def blank_caption_strip(canvas: Canvas, line_height: int, strip_width: int = 256, color: Color = WHITE):
    """
    Fill x in [0, strip_width), y in [height - line_height + 1, height) so the
    caption sits on a clean background whatever the rectangles covered.
    """
    canvas.fill_rect(0, canvas.height - line_height + 1, strip_width, canvas.height, color)


class SlideGenerator:
    """
    Generates synthetic test slides.

    Example:
        >>> generator = SlideGenerator()
        >>> result = generator.generate()
        >>> result.save("slide.png")

    The font is resolved lazily on first use and then reused.
    """

    def __init__(
        self,
        config: Optional[SlideConfig] = None,
        font_resolver: Optional[Callable[[], LoadedFont]] = None,
    ):
        self.config = config or SlideConfig()
        self.font_resolver = font_resolver or resolve_serif_font
        self._font: Optional[LoadedFont] = None
        self.rng = random.Random(self.config.seed)

    def _log(self, message: str):
        if self.config.verbose:
            print(message)

    @property
    def font(self) -> LoadedFont:
        if self._font is None:
            self._font = self.font_resolver()
            self._log(f"   Font: {self._font.family} {self._font.style}".rstrip())
        return self._font

    def draw_frame_number(self) -> int:
        if self.config.frame_number is not None:
            return self.config.frame_number
        return self.rng.randint(1, self.config.max_frame)

    def draw_rect_count(self) -> int:
        if self.config.rect_count is not None:
            return self.config.rect_count
        return choose_rect_count(self.rng, self.config.third_rect_probability)

    def generate(self) -> SlideResult:
        """
        Compose one slide in memory.

        Raises:
            FontResolutionError: if no serif font can be loaded
        """
        cfg = self.config
        frame_number = self.draw_frame_number()
        canvas = Canvas(cfg.width, cfg.height, cfg.background)

        count = self.draw_rect_count()
        self._log(f"🎨 Painting {count} rectangles...")
        rects = paint_rectangles(
            canvas,
            self.rng,
            count,
            palette_size=cfg.palette_size,
            p_widen=cfg.widen_probability,
            min_size=cfg.min_rect_size,
        )

        blank_caption_strip(canvas, cfg.line_height, cfg.strip_width, cfg.background)

        self._log("🔤 Resolving serif font...")
        font = self.font

        caption = make_caption(frame_number, cfg.caption_template)
        self._log(f"✍️  Drawing caption: {caption}")
        draw_text(
            canvas,
            cfg.text_color,
            cfg.margin_x,
            cfg.height - cfg.line_height,
            cfg.scale,
            font,
            caption,
        )

        return SlideResult(
            image=canvas.to_image(),
            caption=caption,
            frame_number=frame_number,
            rectangles=rects,
            metadata={
                'seed': cfg.seed,
                'font': font.family,
                'font_source': font.source,
                'scale': (cfg.x_scale, cfg.y_scale),
            },
        )

    def run(self, output_path: Optional[str] = None) -> str:
        """
        Generate a slide and write it to disk.

        Returns:
            Path of the written PNG

        Raises:
            FontResolutionError: if no serif font can be loaded (nothing is written)
            IOWriteError: if the PNG can't be written
        """
        path = output_path or self.config.output_path
        result = self.generate()
        self._log(f"💾 Saving {path}...")
        return result.save(path)


def generate_slide(config: Optional[SlideConfig] = None, **kwargs) -> SlideResult:
    """
    Quick function to build a slide in memory.

    Args:
        config: Base configuration
        **kwargs: Field overrides applied on top of `config`

    Returns:
        SlideResult
    """
    cfg = replace(config or SlideConfig(), **kwargs)
    return SlideGenerator(cfg).generate()
