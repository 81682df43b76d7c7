"""
TextMetricsCalculator - estimating how much space a block of text needs.

Wraps words greedily against the container width using a measurement
provider and derives:
- number of lines and the wrapped lines themselves
- estimated text height
- whether the text overflows the container, by how much and how badly
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import MeasurementError
from ..models.story import ContainerBox, FontDescriptor
from ..utils.enums import OverflowSeverity
from .measurement import MeasurementProvider

logger = logging.getLogger(__name__)

# Internal padding allowance subtracted from both container dimensions.
PADDING_ALLOWANCE = 4.0

MODERATE_OVERFLOW_FACTOR = 1.2
SEVERE_OVERFLOW_FACTOR = 1.5


@dataclass(slots=True)
class TextMetrics:
    """Estimated space requirements of a text block inside a container."""

    estimated_lines: int
    estimated_text_height: float
    line_height_px: float
    available_height: float
    will_overflow: bool
    overfill_ratio: float
    overflow_severity: OverflowSeverity
    actual_lines: List[str] = field(default_factory=list)

    @classmethod
    def empty(cls, line_height_px: float = 0.0, available_height: float = 0.0) -> "TextMetrics":
        """Metrics for text that occupies no space (empty text or degenerate box)."""
        return cls(
            estimated_lines=0,
            estimated_text_height=0.0,
            line_height_px=line_height_px,
            available_height=available_height,
            will_overflow=False,
            overfill_ratio=0.0,
            overflow_severity=OverflowSeverity.MINOR,
            actual_lines=[],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["overflow_severity"] = self.overflow_severity.value
        return data


def classify_overflow(estimated_text_height: float, available_height: float) -> OverflowSeverity:
    """Severity bucket; heights exactly at 1.5x or 1.2x fall into the lower bucket."""
    if estimated_text_height > available_height * SEVERE_OVERFLOW_FACTOR:
        return OverflowSeverity.SEVERE
    if estimated_text_height > available_height * MODERATE_OVERFLOW_FACTOR:
        return OverflowSeverity.MODERATE
    return OverflowSeverity.MINOR


class TextMetricsCalculator:
    """
    Calculator for text block metrics.

    Every call measures afresh; nothing is cached between distinct
    (text, font, container) inputs.
    """

    def __init__(self, provider: Optional[MeasurementProvider] = None,
                 padding_allowance: float = PADDING_ALLOWANCE):
        self.provider = provider
        self.padding_allowance = padding_allowance

    def calculate(self, text: Optional[str], font: FontDescriptor, container: ContainerBox) -> TextMetrics:
        """
        Estimate lines and height of ``text`` inside ``container``.

        Args:
            text: Text to lay out (None and "" are empty)
            font: Font used for measurement
            container: Box the text must fit into

        Returns:
            TextMetrics for the text

        Raises:
            MeasurementError: If no measurement provider is available
        """
        line_height_px = font.line_height_px

        if not text:
            return TextMetrics.empty(line_height_px=line_height_px)

        if not container.is_valid:
            logger.debug(f"Degenerate container {container!r}; returning zero metrics")
            return TextMetrics.empty(line_height_px=line_height_px)

        if self.provider is None:
            raise MeasurementError("A measurement provider is required to calculate text metrics")

        effective_width = container.width - self.padding_allowance
        lines = self.wrap_words(text, font, effective_width)

        estimated_lines = max(1, len(lines))
        estimated_text_height = estimated_lines * line_height_px
        available_height = container.height - self.padding_allowance

        if available_height > 0:
            overfill_ratio = estimated_text_height / available_height
        else:
            overfill_ratio = float("inf")

        metrics = TextMetrics(
            estimated_lines=estimated_lines,
            estimated_text_height=estimated_text_height,
            line_height_px=line_height_px,
            available_height=available_height,
            will_overflow=estimated_text_height > available_height,
            overfill_ratio=overfill_ratio,
            overflow_severity=classify_overflow(estimated_text_height, available_height),
            actual_lines=lines,
        )
        if metrics.will_overflow:
            logger.debug(
                f"Text overflows: {estimated_lines} lines, {estimated_text_height:.1f}px "
                f"> {available_height:.1f}px ({metrics.overflow_severity.value})"
            )
        return metrics

    def wrap_words(self, text: str, font: FontDescriptor, max_width: float) -> List[str]:
        """
        Greedy word wrap.

        Words never split: a word wider than ``max_width`` sits alone on its
        line. A flushed line is never revisited.
        """
        words = text.split()
        if not words:
            return []

        measure = self.provider.measure  # type: ignore[union-attr]
        space_width = measure(" ", font).advance_width

        lines: List[str] = []
        current_words: List[str] = []
        current_width = 0.0

        for word in words:
            word_width = measure(word, font).advance_width
            added_width = word_width + space_width if current_words else word_width

            if current_words and current_width + added_width > max_width:
                lines.append(" ".join(current_words))
                current_words = [word]
                current_width = word_width
            else:
                current_words.append(word)
                current_width += added_width

        if current_words:
            lines.append(" ".join(current_words))

        return lines


def calculate_text_metrics(text: Optional[str], font: FontDescriptor, container: ContainerBox,
                           provider: MeasurementProvider) -> TextMetrics:
    """Functional shortcut for ``TextMetricsCalculator(provider).calculate(...)``."""
    return TextMetricsCalculator(provider).calculate(text, font, container)
