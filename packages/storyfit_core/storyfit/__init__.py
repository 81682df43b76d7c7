"""
storyfit - fitting styled text stories into fixed page boxes.

A story is the text of one text frame, split into runs of uniform
formatting. storyfit estimates how much room the text needs, adjusts the
style when it does not fit, and turns the runs into render segments with
resolved styles and synthesized inter-run spaces.

Quick Start:
    from storyfit import ContainerBox, ReportLabMeasurementProvider, Story, fit_story

    story = Story.from_dict({"text": "Hello World", "styling": {"fontSize": 14}})
    result = fit_story(story, ContainerBox(200, 40), ReportLabMeasurementProvider())
    for segment in result.plan:
        print(segment.to_dict())
"""

from .version import __version__, __version_info__

from .exceptions import (
    StoryFitError,
    MeasurementError,
    StyleError,
    StoryLoadError,
)

from .models import (
    ContainerBox,
    FontDescriptor,
    Run,
    RunFormatting,
    Story,
    StoryDefaults,
)

from .engine import (
    FitResult,
    FitStrategy,
    MeasurementProvider,
    ReportLabMeasurementProvider,
    TextMeasurement,
    TextMetrics,
    TextMetricsCalculator,
    calculate_text_metrics,
    fit,
)

from .styles import needs_space_between, resolve_run_style
from .renderers import FormattedRunRenderer, RenderPlan, render_runs
from .config import RenderConfig
from .api import StoryRenderResult, fit_story, load_story, story_to_pixels

__all__ = [
    "__version__",
    "__version_info__",
    # Exceptions
    "StoryFitError",
    "MeasurementError",
    "StyleError",
    "StoryLoadError",
    # Model
    "ContainerBox",
    "FontDescriptor",
    "Run",
    "RunFormatting",
    "Story",
    "StoryDefaults",
    # Engine
    "FitResult",
    "FitStrategy",
    "MeasurementProvider",
    "ReportLabMeasurementProvider",
    "TextMeasurement",
    "TextMetrics",
    "TextMetricsCalculator",
    "calculate_text_metrics",
    "fit",
    # Styles and rendering
    "needs_space_between",
    "resolve_run_style",
    "FormattedRunRenderer",
    "RenderPlan",
    "render_runs",
    # Pipeline
    "RenderConfig",
    "StoryRenderResult",
    "fit_story",
    "load_story",
    "story_to_pixels",
]
