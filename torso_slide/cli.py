"""
Command-line entry point.

Writes webdriver_torso_slide.png into the current directory. Takes no
arguments and reads no environment.
"""

import sys
from typing import Optional

from .errors import FontResolutionError, IOWriteError
from .generator import SlideConfig, SlideGenerator


def main(config: Optional[SlideConfig] = None):
    generator = SlideGenerator(config)
    try:
        path = generator.run()
    except FontResolutionError as e:
        print(f"❌ Failed to load font: {e}", file=sys.stderr)
        return
    except IOWriteError as e:
        print(f"❌ Failed to save image: {e}", file=sys.stderr)
        return
    print(f"✅ Image saved successfully! ({path})")
