"""
Pytest configuration for storyfit
"""

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

package_root = Path(__file__).parent.parent / "packages" / "storyfit_core"
if str(package_root) not in sys.path:
    sys.path.insert(0, str(package_root))

from storyfit.engine.measurement import TextMeasurement  # noqa: E402
from storyfit.models.story import ContainerBox, FontDescriptor, Story  # noqa: E402


@dataclass
class FixedWidthProvider:
    """Measurement provider where every character (space included) is ``char_width`` wide."""

    char_width: float = 10.0
    calls: int = 0

    def measure(self, text, font):
        self.calls += 1
        return TextMeasurement(advance_width=len(text) * self.char_width)


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid leaking handlers between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()
    logging.getLogger("storyfit").handlers.clear()


@pytest.fixture
def make_provider():
    """Factory for providers with a custom character width."""
    return FixedWidthProvider


@pytest.fixture
def provider():
    """Fixed-width provider: 10px per character."""
    return FixedWidthProvider()


@pytest.fixture
def font():
    """12px font with an explicit 12px line height."""
    return FontDescriptor.with_line_height("Arial", 12, "12px")


@pytest.fixture
def container():
    return ContainerBox(width=100, height=50)


@pytest.fixture
def story_dict():
    """Story mapping in the source document's camelCase shape."""
    return {
        "text": "Hello World",
        "styling": {
            "fontFamily": "Arial",
            "fontSize": 12,
            "fontStyle": "Regular",
            "alignment": "LeftAlign",
        },
        "formattedContent": [
            {"text": "Hello", "formatting": {"fontStyle": "Bold"}},
            {"text": "World", "formatting": {"fontStyle": "Regular"}},
        ],
    }


@pytest.fixture
def story(story_dict):
    return Story.from_dict(story_dict)


@pytest.fixture
def story_file(tmp_path, story_dict):
    path = tmp_path / "story.json"
    path.write_text(json.dumps(story_dict), encoding="utf-8")
    return path


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
