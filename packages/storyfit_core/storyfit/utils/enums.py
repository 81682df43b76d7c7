"""Common enumerations used across the storyfit engine."""

from __future__ import annotations

from enum import Enum


class OverflowSeverity(str, Enum):
    """How far estimated text height exceeds the available height."""

    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"


class OverflowPolicy(str, Enum):
    """What the presentation layer does with text past the container bounds."""

    VISIBLE = "visible"
    HIDDEN = "hidden"


class BreakType(str, Enum):
    """Forced break kinds carried by break runs."""

    LINE = "line"
    PARAGRAPH = "paragraph"


class LineHeightMode(str, Enum):
    """How ``FontDescriptor.line_height_value`` is interpreted."""

    RATIO = "ratio"
    ABSOLUTE = "absolute"
    AUTO = "auto"


class TextAlign(str, Enum):
    """Semantic text alignment of a resolved style."""

    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"
    JUSTIFY = "justify"
