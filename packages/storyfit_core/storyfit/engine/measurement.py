"""
Measurement providers.

The text metrics calculator only needs advance widths. Any object with a
``measure(text, font)`` method returning something with an
``advance_width`` attribute can serve as provider; the default one uses
ReportLab's font metrics.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Protocol, Tuple, runtime_checkable

from reportlab.pdfbase import pdfmetrics

from ..models.story import FontDescriptor
from .utils.font_utils import is_bold_weight, resolve_font_variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextMeasurement:
    """Result of measuring one string."""

    advance_width: float


@runtime_checkable
class MeasurementProvider(Protocol):
    """Contract for the host's text measurement surface."""

    def measure(self, text: str, font: FontDescriptor) -> TextMeasurement:
        ...


class ReportLabMeasurementProvider:
    """
    Measures text with ReportLab's standard font metrics.

    Font families are mapped onto the built-in Helvetica / Times / Courier
    families, so widths are estimates for anything else. The provider keeps
    no per-call state and is safe to share between threads.
    """

    def __init__(self) -> None:
        self._font_names: Dict[Tuple[str, bool, bool], str] = {}

    def font_name_for(self, font: FontDescriptor) -> str:
        bold = is_bold_weight(font.weight)
        italic = font.style in ("italic", "oblique")
        key = (font.family, bold, italic)
        name = self._font_names.get(key)
        if name is None:
            name = resolve_font_variant(font.family, bold, italic)
            self._font_names[key] = name
            logger.debug(f"Font {font.family!r} (bold={bold}, italic={italic}) measured as {name}")
        return name

    def measure(self, text: str, font: FontDescriptor) -> TextMeasurement:
        """
        Measure the advance width of ``text``.

        Args:
            text: Text to measure
            font: Font to measure with; ``font.size`` is in px

        Returns:
            TextMeasurement with the advance width in px
        """
        font_name = self.font_name_for(font)
        width = pdfmetrics.stringWidth(text, font_name, font.size)
        return TextMeasurement(advance_width=float(width))
