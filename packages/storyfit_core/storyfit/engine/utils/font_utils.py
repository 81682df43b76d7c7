"""Map CSS-like font descriptions onto ReportLab's built-in font names."""

from __future__ import annotations

from typing import Optional

STANDARD_FONT_VARIANTS = {
    "Helvetica",
    "Helvetica-Bold",
    "Helvetica-Oblique",
    "Helvetica-BoldOblique",
    "Times-Roman",
    "Times-Bold",
    "Times-Italic",
    "Times-BoldItalic",
    "Courier",
    "Courier-Bold",
    "Courier-Oblique",
    "Courier-BoldOblique",
}

FONT_FALLBACKS = {
    "arial": "Helvetica",
    "arial mt": "Helvetica",
    "arialmt": "Helvetica",
    "calibri": "Helvetica",
    "helvetica": "Helvetica",
    "helvetica neue": "Helvetica",
    "minion pro": "Times-Roman",
    "myriad pro": "Helvetica",
    "open sans": "Helvetica",
    "roboto": "Helvetica",
    "sans-serif": "Helvetica",
    "segoe ui": "Helvetica",
    "tahoma": "Helvetica",
    "verdana": "Helvetica",
    "cambria": "Times-Roman",
    "garamond": "Times-Roman",
    "georgia": "Times-Roman",
    "serif": "Times-Roman",
    "times": "Times-Roman",
    "times new roman": "Times-Roman",
    "consolas": "Courier",
    "courier": "Courier",
    "courier new": "Courier",
    "monospace": "Courier",
}

_VARIANT_SUFFIXES = {
    "Helvetica": ("Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "Times-Roman": ("Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "Courier": ("Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
}


def normalize_base_font(font_family: Optional[str]) -> str:
    """
    Pick the built-in base font for a CSS font-family list.

    Each comma-separated family is tried in order; unknown families fall
    back to Helvetica.
    """
    if not font_family:
        return "Helvetica"

    for candidate in font_family.split(","):
        cleaned = candidate.strip().strip("'\"")
        if not cleaned:
            continue
        if cleaned in STANDARD_FONT_VARIANTS:
            return cleaned
        base = FONT_FALLBACKS.get(cleaned.lower())
        if base:
            return base

    return "Helvetica"


def is_bold_weight(weight: Optional[str]) -> bool:
    if not weight:
        return False
    token = str(weight).strip().lower()
    if token.isdigit():
        return int(token) >= 600
    return "bold" in token or token in {"black", "heavy"}


def resolve_font_variant(font_family: Optional[str], bold: bool, italic: bool) -> str:
    base = normalize_base_font(font_family)
    if base not in _VARIANT_SUFFIXES:
        # Already a concrete variant such as Helvetica-Bold.
        return base

    bold_name, italic_name, bold_italic_name = _VARIANT_SUFFIXES[base]
    if bold and italic:
        return bold_italic_name
    if bold:
        return bold_name
    if italic:
        return italic_name
    return base
