"""Measurement, text metrics and fit strategies."""

from .measurement import MeasurementProvider, ReportLabMeasurementProvider, TextMeasurement
from .text_metrics import TextMetrics, TextMetricsCalculator, calculate_text_metrics
from .fit_strategy import AdjustmentDescriptor, FitResult, FitStrategy, fit

__all__ = [
    "MeasurementProvider",
    "ReportLabMeasurementProvider",
    "TextMeasurement",
    "TextMetrics",
    "TextMetricsCalculator",
    "calculate_text_metrics",
    "AdjustmentDescriptor",
    "FitResult",
    "FitStrategy",
    "fit",
]
