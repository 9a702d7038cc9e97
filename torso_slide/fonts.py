"""
Font Resolver

Finds a serif font in the host's font catalog and loads it into a parsed
font object. The catalog lookup goes through matplotlib's font manager,
which scans the system font directories. Installed host fonts win over
the fonts matplotlib ships, which only serve as a fallback. Parsing and
rasterisation are left to Pillow's FreeType binding.
"""

import io
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from PIL import ImageFont
from matplotlib import font_manager

from .errors import FontResolutionError

GENERIC_FAMILY = "serif"

# Size used to measure font metrics before picking a real pixel size
PROBE_SIZE = 1000


@dataclass(frozen=True)
class FontHandle:
    """
    What the catalog hands back: either a file path or an in-memory blob,
    plus the face index inside a collection.
    """
    path: Optional[str] = None
    data: Optional[bytes] = None
    index: int = 0

    def __post_init__(self):
        if (self.path is None) == (self.data is None):
            raise ValueError("FontHandle needs exactly one of path or data")


@dataclass(frozen=True)
class LoadedFont:
    """
    A parsed font, read-only once loaded.

    Attributes:
        data: Raw font bytes
        index: Face index within the font file
        family: Family name reported by the font
        style: Style name reported by the font
        source: Path the bytes came from (None for in-memory fonts)
    """
    data: bytes
    index: int = 0
    family: str = ""
    style: str = ""
    source: Optional[str] = None

    def sized(self, size: float) -> ImageFont.FreeTypeFont:
        """FreeType face at `size` pixels per em."""
        return ImageFont.truetype(io.BytesIO(self.data), size, index=self.index)

    def em_size_for_height(self, line_height: float) -> float:
        """
        Pixels-per-em that makes ascent + descent equal `line_height`.
        """
        ascent, descent = self.sized(PROBE_SIZE).getmetrics()
        if ascent + descent <= 0:
            raise FontResolutionError(f"Font '{self.family}' reports no vertical metrics")
        return line_height * PROBE_SIZE / (ascent + descent)

    def __repr__(self) -> str:
        return f"LoadedFont(family={self.family!r}, style={self.style!r}, source={self.source!r})"


# Same cutoff findfont uses: a family mismatch alone scores 10
MATCH_THRESHOLD = 10.0


def _score(props: font_manager.FontProperties, entry) -> float:
    fm = font_manager.fontManager
    return (
        fm.score_family(props.get_family(), entry.name) * 10
        + fm.score_style(props.get_style(), entry.style)
        + fm.score_variant(props.get_variant(), entry.variant)
        + fm.score_weight(props.get_weight(), entry.weight)
        + fm.score_stretch(props.get_stretch(), entry.stretch)
        + fm.score_size(props.get_size(), entry.size)
    )


def find_host_font(props: font_manager.FontProperties) -> Optional[FontHandle]:
    """Best match among fonts installed on the host, skipping matplotlib's bundled ones."""
    host_paths = {os.path.realpath(p) for p in font_manager.findSystemFonts()}
    candidates = [
        entry for entry in font_manager.fontManager.ttflist
        if os.path.realpath(entry.fname) in host_paths
    ]
    if not candidates:
        return None

    best = min(candidates, key=lambda entry: _score(props, entry))
    if _score(props, best) >= MATCH_THRESHOLD:
        return None
    return FontHandle(path=os.fspath(best.fname), index=getattr(best, "index", 0))


def find_font(family: str = GENERIC_FAMILY) -> FontHandle:
    """
    Ask the font catalog for the best match to a generic family with
    default style properties.

    Host fonts are ranked first. Only when none of them belongs to the
    family does the lookup fall back to the fonts bundled with matplotlib
    (DejaVu Serif for "serif").

    Raises:
        FontResolutionError: if nothing in the catalog matches
    """
    props = font_manager.FontProperties(family=family)
    handle = find_host_font(props)
    if handle is not None:
        return handle

    try:
        path = font_manager.findfont(props, fallback_to_default=False)
    except ValueError as e:
        raise FontResolutionError(f"No {family} font found: {e}") from e
    if not path:
        raise FontResolutionError(f"No {family} font found")
    # Newer matplotlib returns a FontPath carrying the face index
    return FontHandle(path=os.fspath(path), index=getattr(path, "face_index", 0))


def read_font_bytes(handle: FontHandle) -> Tuple[bytes, Optional[str]]:
    if handle.data is not None:
        return bytes(handle.data), None
    try:
        with open(handle.path, "rb") as f:
            return f.read(), handle.path
    except OSError as e:
        raise FontResolutionError(f"Failed to read font file {handle.path}: {e}") from e


def load_font(handle: FontHandle) -> LoadedFont:
    """
    Load and parse the font a handle points at.

    Raises:
        FontResolutionError: if the bytes can't be read or aren't a font
    """
    data, source = read_font_bytes(handle)
    if not data:
        raise FontResolutionError("Failed to parse font data: empty font")
    try:
        face = ImageFont.truetype(io.BytesIO(data), PROBE_SIZE, index=handle.index)
    except (OSError, ValueError) as e:
        raise FontResolutionError(f"Failed to parse font data: {e}") from e

    family, style = face.getname()
    return LoadedFont(
        data=data,
        index=handle.index,
        family=family or "",
        style=style or "",
        source=source,
    )


def resolve_serif_font() -> LoadedFont:
    """Catalog lookup plus load for the default serif font."""
    return load_font(find_font(GENERIC_FAMILY))
