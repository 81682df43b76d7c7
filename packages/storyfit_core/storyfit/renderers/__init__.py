from .formatted_runs import (
    BreakSegment,
    FormattedRunRenderer,
    RenderPlan,
    RenderSegment,
    SpaceSegment,
    TextSegment,
    render_runs,
)

__all__ = [
    "BreakSegment",
    "FormattedRunRenderer",
    "RenderPlan",
    "RenderSegment",
    "SpaceSegment",
    "TextSegment",
    "render_runs",
]
