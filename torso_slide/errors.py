"""
Exceptions raised by the slide generator.
"""


class SlideError(RuntimeError):
    """Base class for all slide generation failures."""


class FontResolutionError(SlideError):
    """No usable serif font could be found, read, or parsed."""


class IOWriteError(SlideError):
    """The slide could not be encoded or written to disk."""
