"""
Fit strategies: reconciling overflowing text with a fixed container.

``fit`` maps a base style and the text metrics of its content to an adjusted
style. Every strategy shares the same fast path: text that does not overflow
is returned untouched. Unknown strategy tokens behave like
``ALLOW_OVERFLOW``.

Base and adjusted styles are plain dictionaries with semantic keys:
``font_size`` (px), ``line_height`` (ratio of font size), ``overflow``,
``text_overflow``, ``line_clamp`` and ``max_height`` (px).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from ..models.story import ContainerBox
from ..utils.enums import OverflowPolicy, OverflowSeverity
from .text_metrics import TextMetrics

logger = logging.getLogger(__name__)

StyleDict = Dict[str, Any]

MIN_FONT_SIZE_PX = 8.0
DEFAULT_FONT_SIZE_PX = 12.0
DEFAULT_LINE_HEIGHT = 1.2

AUTO_SCALE_CAPS = {
    OverflowSeverity.SEVERE: 0.7,
    OverflowSeverity.MODERATE: 0.8,
    OverflowSeverity.MINOR: 0.9,
}
AUTO_SCALE_MIN_LINE_HEIGHT = 0.9

COMPRESS_LINE_HEIGHT_THRESHOLD = 0.8
COMPRESS_MIN_SCALE = 0.8

PRECISE_FIT_NO_CHANGE = 0.95
PRECISE_FIT_LINE_HEIGHT_ONLY = 0.85
PRECISE_FIT_DUAL = 0.7


class FitStrategy(str, Enum):
    """Named policies for fitting overflowing text."""

    AUTO_SCALE = "auto_scale"
    TRUNCATE = "truncate"
    ALLOW_OVERFLOW = "allow_overflow"
    PRECISE_FIT = "precise_fit"
    COMPRESS_LINES = "compress_lines"

    @classmethod
    def parse(cls, token: Union["FitStrategy", str, None]) -> Optional["FitStrategy"]:
        """Strategy for a value or name token; None when unrecognized."""
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            return None
        normalized = token.strip().lower().replace("-", "_")
        for strategy in cls:
            if strategy.value == normalized:
                return strategy
        return None


@dataclass(slots=True)
class AdjustmentDescriptor:
    """What a strategy changed, for diagnostics and tests."""

    type: str
    values: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, **self.values}


@dataclass(slots=True)
class FitResult:
    """Adjusted style plus an explanation of the adjustment."""

    style: StyleDict
    was_adjusted: bool
    adjustment: Optional[AdjustmentDescriptor] = None

    @property
    def font_size(self) -> float:
        return _parse_px(self.style.get("font_size"), DEFAULT_FONT_SIZE_PX)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "style": dict(self.style),
            "was_adjusted": self.was_adjusted,
            "adjustment": self.adjustment.to_dict() if self.adjustment else None,
        }


def _parse_px(value: Any, default: float) -> float:
    """Numeric value of ``12``, ``"12"`` or ``"12px"``."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().removesuffix("px"))
        except ValueError:
            pass
    return default


def _floored_font_size(font_size: float) -> float:
    return max(MIN_FONT_SIZE_PX, font_size)


def _available_share(metrics: TextMetrics) -> float:
    """Available height as a fraction of the estimated text height."""
    if metrics.estimated_text_height <= 0:
        return 0.0
    return metrics.available_height / metrics.estimated_text_height


def _auto_scale(style: StyleDict, metrics: TextMetrics, font_size: float, line_height: float) -> FitResult:
    cap = AUTO_SCALE_CAPS.get(metrics.overflow_severity, AUTO_SCALE_CAPS[OverflowSeverity.MINOR])
    scale_factor = max(cap, 1 / metrics.overfill_ratio)
    new_size = _floored_font_size(font_size * scale_factor)

    style.update(
        font_size=new_size,
        line_height=max(AUTO_SCALE_MIN_LINE_HEIGHT, line_height * scale_factor),
        overflow=OverflowPolicy.HIDDEN.value,
    )
    return FitResult(style, True, AdjustmentDescriptor("font_scaled", {
        "scale_factor": scale_factor,
        "original_size": font_size,
        "new_size": new_size,
    }))


def _truncate(style: StyleDict, metrics: TextMetrics, font_size: float, line_height: float) -> FitResult:
    if metrics.line_height_px > 0:
        fitting_lines = math.floor(metrics.available_height / metrics.line_height_px)
    else:
        fitting_lines = 1
    visible_lines = max(1, fitting_lines)

    style.update(
        overflow=OverflowPolicy.HIDDEN.value,
        text_overflow="ellipsis",
        line_clamp=visible_lines,
    )
    return FitResult(style, True, AdjustmentDescriptor("text_truncated", {
        "visible_lines": visible_lines,
        "total_lines": metrics.estimated_lines,
    }))


def _compress_lines(style: StyleDict, metrics: TextMetrics, font_size: float, line_height: float) -> FitResult:
    compression_ratio = _available_share(metrics)
    new_line_height = max(COMPRESS_MIN_SCALE, line_height * compression_ratio)

    if compression_ratio > COMPRESS_LINE_HEIGHT_THRESHOLD:
        style.update(line_height=new_line_height, overflow=OverflowPolicy.HIDDEN.value)
        return FitResult(style, True, AdjustmentDescriptor("line_height_compressed", {
            "original_line_height": line_height,
            "new_line_height": new_line_height,
        }))

    font_reduction = max(COMPRESS_MIN_SCALE, compression_ratio)
    style.update(
        font_size=_floored_font_size(font_size * font_reduction),
        line_height=new_line_height,
        overflow=OverflowPolicy.HIDDEN.value,
    )
    return FitResult(style, True, AdjustmentDescriptor("full_compression", {
        "font_reduction": font_reduction,
        "line_height_reduction": compression_ratio,
    }))


def _precise_fit(style: StyleDict, metrics: TextMetrics, font_size: float, line_height: float) -> FitResult:
    compression_needed = _available_share(metrics)

    if compression_needed >= PRECISE_FIT_NO_CHANGE:
        style["overflow"] = OverflowPolicy.HIDDEN.value
        return FitResult(style, False, AdjustmentDescriptor("no_adjustment_needed", {
            "compression_needed": compression_needed,
        }))

    if compression_needed > PRECISE_FIT_LINE_HEIGHT_ONLY:
        reduction = max(0.9, compression_needed * 1.05)
        style.update(
            line_height=max(0.9, line_height * reduction),
            overflow=OverflowPolicy.HIDDEN.value,
        )
        return FitResult(style, True, AdjustmentDescriptor("minor_line_height_adjustment", {
            "line_height_reduction": reduction,
            "original_line_height": line_height,
        }))

    if compression_needed > PRECISE_FIT_DUAL:
        font_scale = max(0.9, math.sqrt(compression_needed))
        line_scale = max(0.85, compression_needed / font_scale)
        style.update(
            font_size=_floored_font_size(font_size * font_scale),
            line_height=max(0.85, line_height * line_scale),
            overflow=OverflowPolicy.HIDDEN.value,
        )
        return FitResult(style, True, AdjustmentDescriptor("moderate_dual_adjustment", {
            "font_scale": font_scale,
            "line_scale": line_scale,
            "compression_needed": compression_needed,
        }))

    # Last resort: fixed compression, clipped at the available height.
    font_scale = 0.85
    line_scale = 0.8
    style.update(
        font_size=_floored_font_size(font_size * font_scale),
        line_height=max(0.8, line_height * line_scale),
        overflow=OverflowPolicy.HIDDEN.value,
        max_height=metrics.available_height,
    )
    return FitResult(style, True, AdjustmentDescriptor("major_adjustment_with_overflow", {
        "font_scale": font_scale,
        "line_scale": line_scale,
        "compression_needed": compression_needed,
        "allowed_overflow": True,
    }))


def _allow_overflow(style: StyleDict, metrics: TextMetrics, font_size: float, line_height: float) -> FitResult:
    style["overflow"] = OverflowPolicy.VISIBLE.value
    return FitResult(style, False, AdjustmentDescriptor("overflow_allowed"))


_STRATEGY_HANDLERS: Dict[FitStrategy, Callable[[StyleDict, TextMetrics, float, float], FitResult]] = {
    FitStrategy.AUTO_SCALE: _auto_scale,
    FitStrategy.TRUNCATE: _truncate,
    FitStrategy.COMPRESS_LINES: _compress_lines,
    FitStrategy.PRECISE_FIT: _precise_fit,
    FitStrategy.ALLOW_OVERFLOW: _allow_overflow,
}


def fit(
    base_style: StyleDict,
    metrics: TextMetrics,
    container: Optional[ContainerBox] = None,
    strategy: Union[FitStrategy, str, None] = FitStrategy.PRECISE_FIT,
) -> FitResult:
    """
    Adjust ``base_style`` so its text fits the container.

    Args:
        base_style: Style of the text block (``font_size`` px, ``line_height`` ratio)
        metrics: Metrics of the text inside the container
        container: The container box (informational; metrics already reflect it)
        strategy: Fit strategy or its token; unknown tokens allow overflow

    Returns:
        FitResult with a new style dict; ``base_style`` itself is never mutated
    """
    if not metrics.will_overflow:
        return FitResult(dict(base_style), False, None)

    resolved = FitStrategy.parse(strategy)
    if resolved is None:
        logger.debug(f"Unknown fit strategy {strategy!r}; allowing overflow")
        resolved = FitStrategy.ALLOW_OVERFLOW

    font_size = _parse_px(base_style.get("font_size"), DEFAULT_FONT_SIZE_PX)
    line_height = _parse_px(base_style.get("line_height"), DEFAULT_LINE_HEIGHT)

    result = _STRATEGY_HANDLERS[resolved](dict(base_style), metrics, font_size, line_height)
    logger.debug(
        f"Fit {resolved.value}: overfill {metrics.overfill_ratio:.3f} -> "
        f"{result.adjustment.type if result.adjustment else 'none'}"
    )
    return result
