"""
Font style tokens.

Page-description formats name a typeface variant with a single token such as
``"Bold Italic"`` or ``"Semibold Condensed"``. These helpers split that
token into a numeric weight and an upright/italic style, and translate
alignment and decoration settings into semantic values.
"""

from __future__ import annotations

from typing import Any, Optional, Tuple

from ..utils.enums import TextAlign

DEFAULT_FONT_WEIGHT = "400"

# Ordered: more specific names must be tested before their substrings.
_WEIGHT_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("thin", "hairline"), "100"),
    (("extralight", "ultralight", "ultra light", "extra light"), "200"),
    (("light",), "300"),
    (("medium",), "500"),
    (("demibold", "semibold"), "600"),
    (("extrabold", "ultrabold", "ultra bold", "extra bold"), "800"),
    (("bold",), "700"),
    (("black", "heavy"), "900"),
)

_ALIGNMENTS = {
    "LeftAlign": TextAlign.LEFT,
    "RightAlign": TextAlign.RIGHT,
    "CenterAlign": TextAlign.CENTER,
    "LeftJustified": TextAlign.JUSTIFY,
    "RightJustified": TextAlign.JUSTIFY,
    "CenterJustified": TextAlign.CENTER,
    "FullyJustified": TextAlign.JUSTIFY,
}


def font_weight(font_style: Optional[str]) -> str:
    """Numeric CSS-style weight for a font style token ("400" when unknown)."""
    if not font_style:
        return DEFAULT_FONT_WEIGHT

    token = font_style.lower()
    for keywords, weight in _WEIGHT_KEYWORDS:
        if any(keyword in token for keyword in keywords):
            return weight
    return DEFAULT_FONT_WEIGHT


def font_style(font_style_token: Optional[str]) -> str:
    """
    ``"italic"`` or ``"normal"`` for a font style token.

    Matching is strict: only whole-word italic/oblique markers count, so
    names like "Regular" or "Medium" stay upright.
    """
    if not font_style_token or font_style_token in ("Regular", "normal"):
        return "normal"

    token = font_style_token.lower().strip()
    is_italic = (
        token in ("italic", "oblique", "it")
        or token.endswith(" italic")
        or token.startswith("italic ")
        or " italic " in token
        or token.endswith("-italic")
        or token.startswith("italic-")
        or token.endswith(" oblique")
    )
    return "italic" if is_italic else "normal"


def text_align(alignment: Optional[str]) -> str:
    """Semantic alignment for a source alignment name; left by default."""
    if isinstance(alignment, TextAlign):
        return alignment.value
    if not alignment:
        return TextAlign.LEFT.value
    mapped = _ALIGNMENTS.get(alignment)
    if mapped is not None:
        return mapped.value
    try:
        return TextAlign(alignment.lower()).value
    except ValueError:
        return TextAlign.LEFT.value


def text_decorations(formatting: Any) -> str:
    """Space-separated decorations from explicit flags or the character style name."""
    character_style = (getattr(formatting, "character_style", None) or "").lower()
    decorations = []

    if getattr(formatting, "underline", False) or "underline" in character_style:
        decorations.append("underline")
    if getattr(formatting, "strikethrough", False) or "strikethrough" in character_style:
        decorations.append("line-through")
    if getattr(formatting, "overline", False) or "overline" in character_style:
        decorations.append("overline")

    return " ".join(decorations) if decorations else "none"


def letter_spacing(tracking: Optional[float]) -> Optional[float]:
    """Tracking (1/1000 em) as em; None when there is none."""
    if not tracking:
        return None
    return tracking / 1000
