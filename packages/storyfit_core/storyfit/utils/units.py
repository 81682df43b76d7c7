"""
Units converter for page-description measurements.

Converts design units (points, picas, millimeters, ...) into CSS pixels.
A converter is an ordinary object constructed by the caller; nothing here is
shared process-wide. Values already in pixels pass through unchanged, and it
is up to the caller to record that a value has been converted so it is never
converted twice.
"""

from typing import Any, Dict, Optional, Union
import logging

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Inches per unit. None marks units that are already pixels.
INCHES_PER_UNIT: Dict[str, Optional[float]] = {
    'pixels': None,
    'px': None,
    'points': 1 / 72,
    'pt': 1 / 72,
    'picas': 1 / 6,
    'pc': 1 / 6,
    'millimeters': 0.0393701,
    'mm': 0.0393701,
    'centimeters': 0.393701,
    'cm': 0.393701,
    'inches': 1.0,
    'in': 1.0,
    'cicero': 0.178,
    'agate': 5.5 / 72,
    'ag': 5.5 / 72,
}


class UnitsConverter:
    """
    Converts measurement units to pixels at a fixed DPI.
    """

    def __init__(self, dpi: Number = 96):
        """
        Initialize units converter.

        Args:
            dpi: Dots per inch for pixel conversions
        """
        if not isinstance(dpi, (int, float)) or dpi <= 0:
            raise ValueError("DPI must be a positive number")
        self.dpi = dpi
        logger.debug(f"Units converter initialized with DPI: {dpi}")

    @staticmethod
    def _normalize_unit(unit: str) -> str:
        return unit.strip().lower()

    def is_supported_unit(self, unit: Optional[str]) -> bool:
        """Check if a unit name is known."""
        if not unit or not isinstance(unit, str):
            return False
        return self._normalize_unit(unit) in INCHES_PER_UNIT

    def is_pixel_unit(self, unit: Optional[str]) -> bool:
        """True when values in ``unit`` need no conversion (no unit counts as pixels)."""
        if not unit:
            return True
        return INCHES_PER_UNIT.get(self._normalize_unit(unit), 0.0) is None

    def to_pixels(self, value: Number, unit: Optional[str]) -> float:
        """
        Convert a value to pixels.

        Args:
            value: Numeric value to convert
            unit: Source unit name (e.g. ``"Points"``, ``"mm"``); None means pixels

        Returns:
            Value in pixels
        """
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            raise ValueError(f"Value must be a number, got {value!r}")

        if self.is_pixel_unit(unit):
            return float(value)

        if not self.is_supported_unit(unit):
            raise ValueError(f"Unsupported unit: {unit}")

        inches = value * INCHES_PER_UNIT[self._normalize_unit(unit)]  # type: ignore[operator]
        pixels = inches * self.dpi
        logger.debug(f"{value} {unit} -> {pixels:.3f}px (DPI: {self.dpi})")
        return pixels

    def get_unit_info(self) -> Dict[str, Any]:
        return {
            'dpi': self.dpi,
            'supported_units': sorted(INCHES_PER_UNIT),
        }
