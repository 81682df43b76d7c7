"""
Entry point for running storyfit as a module.

Usage:
    python -m storyfit render story.json --width 300 --height 120
    python -m storyfit metrics story.json --width 300 --height 120
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
