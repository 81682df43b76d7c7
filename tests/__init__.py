"""
Test suite for the storyfit project.

This module contains all unit tests for the storyfit package.
"""

import sys
from pathlib import Path

# Make the package importable without installing it
package_root = Path(__file__).parent.parent / "packages" / "storyfit_core"
sys.path.insert(0, str(package_root))
