"""Render configuration.

A :class:`RenderConfig` is built by the caller and passed explicitly to the
pipeline; there is no global configuration state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .engine.fit_strategy import FitStrategy
from .engine.text_metrics import PADDING_ALLOWANCE
from .utils.units import UnitsConverter

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Configuration for fitting and rendering one or more stories."""

    strategy: FitStrategy = FitStrategy.PRECISE_FIT
    background_color: str = "white"
    min_contrast_ratio: float = 4.5
    padding_allowance: float = PADDING_ALLOWANCE
    dpi: float = 96
    source_unit: Optional[str] = None
    document_context: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        parsed = FitStrategy.parse(self.strategy)
        if parsed is None:
            logger.warning(f"Unknown fit strategy {self.strategy!r}; overflow will be allowed")
            parsed = FitStrategy.ALLOW_OVERFLOW
        self.strategy = parsed

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RenderConfig":
        """Build a config from a mapping; unknown keys are ignored."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        ignored = sorted(set(data) - known)
        if ignored:
            logger.debug(f"Ignoring unknown config keys: {ignored}")
        return cls(**{key: value for key, value in data.items() if key in known})

    def units_converter(self) -> UnitsConverter:
        return UnitsConverter(self.dpi)
