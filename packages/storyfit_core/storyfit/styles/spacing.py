"""
Inter-run spacing heuristics.

Source documents split text into runs wherever character formatting
changes, and the split points do not say whether a word boundary fell
between two runs. :func:`needs_space_between` guesses, from the two texts and
their formatting, whether the renderer must put a space back. It is a
pattern-based heuristic, not a dictionary lookup, and looks at one pair of
runs at a time.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Optional, Union

from ..models.story import RunFormatting

FormattingLike = Union[RunFormatting, Mapping[str, Any], None]

CLOSING_PUNCTUATION = ".,;:!?)"
OPENING_PUNCTUATION = ".,;:!?("

# Joined fragments that read as one word split across runs.
_UPPERCASE_WORD_RE = re.compile(r"^[A-Z]+$")
_WORD_CONTINUATION_PATTERNS = (
    re.compile(r"^[a-zA-Z]+[0-9]+$"),
    re.compile(r"^[0-9]+[a-zA-Z]+$"),
    re.compile(r"^[a-zA-Z]+['-][a-zA-Z]+$"),
)
_ALPHABETIC_RE = re.compile(r"^[a-zA-Z]+$")

# Longest joined fragment still treated as one word within a paragraph style.
MAX_FRAGMENT_WORD_LENGTH = 12

_CAMEL_KEYS = {
    "is_break": "isBreak",
    "font_style": "fontStyle",
    "font_size": "fontSize",
    "font_family": "fontFamily",
    "paragraph_style": "paragraphStyle",
}


def _get(formatting: FormattingLike, name: str) -> Any:
    if formatting is None:
        return None
    if isinstance(formatting, Mapping):
        value = formatting.get(name)
        if value is None:
            value = formatting.get(_CAMEL_KEYS.get(name, name))
        return value
    return getattr(formatting, name, None)


def looks_like_split_word(combined: str) -> bool:
    """True if ``combined`` reads as a single word that was split in two."""
    if _UPPERCASE_WORD_RE.match(combined):
        return True
    return any(pattern.match(combined) for pattern in _WORD_CONTINUATION_PATTERNS)


def needs_space_between(
    current_text: Optional[str],
    current_formatting: FormattingLike,
    next_text: Optional[str],
    next_formatting: FormattingLike,
) -> bool:
    """
    Decide whether a space must be synthesized between two adjacent runs.

    Args:
        current_text: Text of the earlier run
        current_formatting: Its formatting (RunFormatting or camelCase mapping)
        next_text: Text of the following run
        next_formatting: Its formatting

    Returns:
        True if the renderer should insert a single space
    """
    if not current_text or not next_text:
        return False

    if _get(next_formatting, "is_break"):
        return False

    if current_text[-1].isspace() or next_text[0].isspace():
        return False

    current_stripped = current_text.strip()
    next_stripped = next_text.strip()

    if current_stripped and current_stripped[-1] in CLOSING_PUNCTUATION:
        return False
    if next_stripped and next_stripped[0] in OPENING_PUNCTUATION:
        return False

    current_style = _get(current_formatting, "font_style")
    next_style = _get(next_formatting, "font_style")
    if current_style and next_style and current_style == next_style:
        return False

    combined = current_stripped + next_stripped
    if looks_like_split_word(combined):
        return False

    paragraph_style = _get(current_formatting, "paragraph_style")
    if (
        paragraph_style
        and paragraph_style == _get(next_formatting, "paragraph_style")
        and _get(current_formatting, "font_size") == _get(next_formatting, "font_size")
        and _get(current_formatting, "font_family") == _get(next_formatting, "font_family")
        and (_ALPHABETIC_RE.match(combined) or len(combined) <= MAX_FRAGMENT_WORD_LENGTH)
    ):
        return False

    return True
