"""Style resolution for runs and stories."""

from .font_tokens import font_style, font_weight, letter_spacing, text_align, text_decorations
from .run_style import ResolvedStyle, primary_formatting, resolve_run_style, resolve_story_style
from .spacing import needs_space_between

__all__ = [
    "font_style",
    "font_weight",
    "letter_spacing",
    "text_align",
    "text_decorations",
    "ResolvedStyle",
    "primary_formatting",
    "resolve_run_style",
    "resolve_story_style",
    "needs_space_between",
]
