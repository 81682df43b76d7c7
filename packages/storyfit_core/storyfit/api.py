"""
High-level API for storyfit.

Runs the whole pipeline for one text frame: story style, text metrics,
fit adjustment and formatted-run rendering.

Usage example:
>>> from storyfit import ContainerBox, ReportLabMeasurementProvider, RenderConfig, Story, fit_story
>>>
>>> story = Story.from_dict({"text": "Hello World", "styling": {"fontSize": 14}})
>>> result = fit_story(story, ContainerBox(200, 40), ReportLabMeasurementProvider())
>>> [segment.to_dict() for segment in result.plan]
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import RenderConfig
from .engine.fit_strategy import FitResult, fit
from .engine.measurement import MeasurementProvider
from .engine.text_metrics import TextMetrics, TextMetricsCalculator
from .exceptions import StoryLoadError, StyleError
from .models.story import ContainerBox, FontDescriptor, Story
from .renderers.formatted_runs import FormattedRunRenderer, RenderPlan
from .styles.run_style import primary_formatting, resolve_story_style
from .utils.color_utils import ColorResolver
from .utils.units import UnitsConverter

logger = logging.getLogger(__name__)

__all__ = [
    "StoryRenderResult",
    "fit_story",
    "load_story",
    "story_to_pixels",
]

# Story fields holding lengths that need unit conversion.
_LENGTH_FIELDS = (
    "font_size",
    "leading",
    "left_indent",
    "right_indent",
    "first_line_indent",
    "space_before",
    "space_after",
    "baseline_shift",
)


@dataclass
class StoryRenderResult:
    """Everything the pipeline derived for one story."""

    story_style: Dict[str, Any]
    metrics: TextMetrics
    fit: FitResult
    plan: RenderPlan

    def to_dict(self) -> Dict[str, Any]:
        return {
            "story_style": dict(self.story_style),
            "metrics": self.metrics.to_dict(),
            "fit": self.fit.to_dict(),
            "segments": self.plan.to_dicts(),
        }


def load_story(path: Union[str, Path]) -> Story:
    """
    Load a story from a JSON file.

    Raises:
        StoryLoadError: If the file is missing, invalid JSON, or not a story object
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise StoryLoadError(f"Story file not found: {path}", source=str(path), cause=e) from e
    except json.JSONDecodeError as e:
        raise StoryLoadError(f"Invalid JSON in {path}: {e}", source=str(path), cause=e) from e

    if isinstance(data, dict) and "story" in data and isinstance(data["story"], dict):
        data = data["story"]
    try:
        return Story.from_dict(data)
    except TypeError as e:
        raise StoryLoadError(f"Not a story object: {path}", source=str(path), cause=e) from e


def _convert_lengths(record: Any, converter: UnitsConverter, unit: str) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    for name in _LENGTH_FIELDS:
        value = getattr(record, name, None)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            changes[name] = converter.to_pixels(value, unit)
    return changes


def story_to_pixels(story: Story, converter: UnitsConverter) -> Story:
    """
    Return a copy of ``story`` with every length converted to pixels.

    Stories whose ``units`` is already a pixel unit (or None) come back
    unchanged. The copy is marked ``units="px"`` so it is never converted twice.
    """
    unit = story.units
    if converter.is_pixel_unit(unit):
        return story
    if not converter.is_supported_unit(unit):
        raise StyleError(f"Unsupported story unit: {unit}", field_name="units", value=unit)

    defaults = dataclasses.replace(story.defaults, **_convert_lengths(story.defaults, converter, unit))

    content = story.formatted_content
    try:
        runs = story.runs()
    except TypeError:
        runs = None
    if runs is not None:
        content = [
            dataclasses.replace(
                run,
                formatting=dataclasses.replace(
                    run.formatting, **_convert_lengths(run.formatting, converter, unit)
                ),
            )
            for run in runs
        ]

    logger.debug(f"Converted story lengths from {unit} to px")
    return Story(text=story.text, formatted_content=content, defaults=defaults, units="px")


def _measurement_font(story_style: Dict[str, Any]) -> FontDescriptor:
    return FontDescriptor.with_line_height(
        family=story_style["font_family"],
        size=story_style["font_size"],
        line_height=story_style["line_height"],
        weight=story_style["font_weight"],
        style=story_style["font_style"],
    )


def fit_story(
    story: Story,
    container: ContainerBox,
    provider: MeasurementProvider,
    config: Optional[RenderConfig] = None,
    color_resolver: Optional[ColorResolver] = None,
) -> StoryRenderResult:
    """
    Fit a story into its container and plan its rendering.

    Args:
        story: Story to render
        container: Text frame box in px
        provider: Measurement provider for the metrics pass
        config: Render configuration (defaults to RenderConfig())
        color_resolver: Host service resolving fill color references

    Returns:
        StoryRenderResult with style, metrics, fit adjustment and render plan
    """
    config = config or RenderConfig()

    if story.units is None and config.source_unit:
        story = dataclasses.replace(story, units=config.source_unit)
    story = story_to_pixels(story, config.units_converter())

    formatting = primary_formatting(story)
    story_style = resolve_story_style(
        formatting,
        background_color=config.background_color,
        color_resolver=color_resolver,
        document_context=config.document_context,
        min_contrast_ratio=config.min_contrast_ratio,
    )

    calculator = TextMetricsCalculator(provider, padding_allowance=config.padding_allowance)
    metrics = calculator.calculate(story.plain_text(), _measurement_font(story_style), container)

    fit_result = fit(story_style, metrics, container, config.strategy)
    font_size_override = None
    if fit_result.style.get("font_size") != story_style["font_size"]:
        font_size_override = fit_result.font_size

    renderer = FormattedRunRenderer(
        background_color=config.background_color,
        color_resolver=color_resolver,
        document_context=config.document_context,
        min_contrast_ratio=config.min_contrast_ratio,
    )
    plan = renderer.render_story(story, font_size_override=font_size_override)

    logger.debug(
        f"Story fitted: {metrics.estimated_lines} lines, overflow={metrics.will_overflow}, "
        f"adjusted={fit_result.was_adjusted}"
    )
    return StoryRenderResult(story_style=story_style, metrics=metrics, fit=fit_result, plan=plan)
