"""
Generate one synthetic test slide in the current directory.
Equivalent to `python -m torso_slide`, with progress output.
"""

import os
import sys

# Add project to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from torso_slide import SlideConfig
from torso_slide.cli import main

if __name__ == "__main__":
    main(SlideConfig(verbose=True))
