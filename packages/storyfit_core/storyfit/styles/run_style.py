"""
Run style resolution.

Each style field is resolved independently along an explicit chain:
the run's own formatting, then the story defaults, then a fixed constant.
There is no record-level inheritance; a run that sets only ``font_size``
still takes every other field from the story (or the constants).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from ..models.story import Run, RunFormatting, Story, StoryDefaults
from ..utils.color_utils import ColorResolver, ensure_contrast, resolve_text_color
from .font_tokens import font_style, font_weight, letter_spacing, text_align, text_decorations

logger = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "sans-serif"
DEFAULT_FONT_SIZE = 12.0
DEFAULT_COLOR = "black"
DEFAULT_STORY_LINE_HEIGHT = 1.3
INHERIT_LINE_HEIGHT = "inherit"

MIN_LEADING_RATIO = 1.1
MAX_LEADING_RATIO = 2.5
NEUTRAL_HORIZONTAL_SCALE = 100

LineHeight = Union[float, str]


def first_present(*values: Any) -> Any:
    """First value that is not None (``0`` and ``""`` count as present)."""
    for value in values:
        if value is not None:
            return value
    return None


def _font_size_px(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) if value > 0 else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip().removesuffix("px"))
        except ValueError:
            return None
        return parsed if parsed > 0 else None
    return None


def resolve_line_height(effective_line_height: Any, leading: Any, font_size: float) -> Optional[LineHeight]:
    """
    Line height from one formatting record, or None when it sets neither field.

    ``effective_line_height`` wins verbatim; ``leading == "auto"`` inherits;
    numeric leading becomes a ratio of the font size clamped to [1.1, 2.5].
    """
    if effective_line_height:
        return effective_line_height
    if leading is None:
        return None
    if leading == "auto":
        return INHERIT_LINE_HEIGHT
    if isinstance(leading, (int, float)) and not isinstance(leading, bool):
        return max(MIN_LEADING_RATIO, min(MAX_LEADING_RATIO, leading / font_size))
    return None


@dataclass(slots=True)
class ResolvedStyle:
    """
    Concrete style of one rendered run.

    The optional box-model fields stay None unless the source sets them to a
    non-neutral value, and ``to_dict`` leaves them out.
    """

    font_size: float
    font_family: str
    font_weight: str
    font_style: str
    color: str
    text_align: str
    line_height: LineHeight
    text_decoration: str = "none"
    letter_spacing: Optional[float] = None
    left_indent: Optional[float] = None
    right_indent: Optional[float] = None
    first_line_indent: Optional[float] = None
    space_before: Optional[float] = None
    space_after: Optional[float] = None
    baseline_shift: Optional[float] = None
    horizontal_scale: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


def resolve_run_style(
    run: Run,
    story_defaults: Optional[StoryDefaults] = None,
    font_size_override: Optional[float] = None,
    background_color: str = "white",
    color_resolver: Optional[ColorResolver] = None,
    document_context: Any = None,
    min_contrast_ratio: float = 4.5,
) -> ResolvedStyle:
    """
    Resolve the concrete style of a run.

    Args:
        run: Run to resolve
        story_defaults: Story-level fallbacks (None means constants only)
        font_size_override: Font size forced by a fit adjustment, in px
        background_color: Background the run is drawn on, for the contrast pass
        color_resolver: Host color-resolution service for fill color references
        document_context: Passed through to ``color_resolver``
        min_contrast_ratio: Forwarded to :func:`ensure_contrast`

    Returns:
        ResolvedStyle for the run
    """
    fmt: RunFormatting = run.formatting
    defaults = story_defaults or StoryDefaults()

    font_size = first_present(
        _font_size_px(font_size_override),
        _font_size_px(fmt.font_size),
        _font_size_px(defaults.font_size),
        DEFAULT_FONT_SIZE,
    )
    style_token = first_present(fmt.font_style, defaults.font_style)

    line_height = first_present(
        resolve_line_height(fmt.effective_line_height, fmt.leading, font_size),
        resolve_line_height(defaults.effective_line_height, defaults.leading, font_size),
        INHERIT_LINE_HEIGHT,
    )

    fill_ref = first_present(fmt.fill_color, defaults.fill_color)
    color = resolve_text_color(fill_ref, color_resolver, document_context) if fill_ref else DEFAULT_COLOR
    color = ensure_contrast(color, background_color, min_contrast_ratio)

    baseline_shift = first_present(fmt.baseline_shift, defaults.baseline_shift)
    horizontal_scale = first_present(fmt.horizontal_scale, defaults.horizontal_scale)

    style = ResolvedStyle(
        font_size=font_size,
        font_family=first_present(fmt.font_family, defaults.font_family, DEFAULT_FONT_FAMILY),
        font_weight=font_weight(style_token),
        font_style=font_style(style_token),
        color=color,
        text_align=text_align(first_present(fmt.alignment, defaults.alignment)),
        line_height=line_height,
        text_decoration=text_decorations(fmt),
        letter_spacing=letter_spacing(first_present(fmt.tracking, defaults.tracking)),
        left_indent=fmt.left_indent or None,
        right_indent=fmt.right_indent or None,
        first_line_indent=fmt.first_line_indent or None,
        space_before=fmt.space_before or None,
        space_after=fmt.space_after or None,
        baseline_shift=baseline_shift or None,
        horizontal_scale=(
            horizontal_scale / 100
            if horizontal_scale and horizontal_scale != NEUTRAL_HORIZONTAL_SCALE
            else None
        ),
    )

    logger.debug(f"Resolved style for {run.text[:20]!r}: {style.to_dict()}")
    return style


def primary_formatting(story: Story) -> StoryDefaults:
    """
    Effective formatting of a story as a whole.

    Takes each field from the first non-break run, falling back to the story
    defaults. Used for measuring the story and for its container style.
    """
    first_run: Optional[Run] = None
    if isinstance(story.formatted_content, (list, tuple)):
        for item in story.formatted_content:
            try:
                run = Run.coerce(item)
            except TypeError:
                continue
            if not run.is_break:
                first_run = run
                break

    if first_run is None:
        return story.defaults

    merged = {
        f.name: first_present(getattr(first_run.formatting, f.name), getattr(story.defaults, f.name))
        for f in fields(StoryDefaults)
    }
    return StoryDefaults(**merged)


def resolve_story_style(
    formatting: StoryDefaults,
    background_color: str = "white",
    color_resolver: Optional[ColorResolver] = None,
    document_context: Any = None,
    min_contrast_ratio: float = 4.5,
) -> Dict[str, Any]:
    """
    Container-level style of a story: the base style handed to fitting.

    Line height is always a ratio (default 1.3), absolute ``"Npx"`` heights
    being divided by the font size; ``font_size`` is in px.
    """
    font_size = first_present(_font_size_px(formatting.font_size), DEFAULT_FONT_SIZE)

    line_height = resolve_line_height(formatting.effective_line_height, formatting.leading, font_size)
    if line_height is None or line_height == INHERIT_LINE_HEIGHT:
        line_height = DEFAULT_STORY_LINE_HEIGHT
    elif isinstance(line_height, str) and line_height.strip().endswith("px"):
        absolute = _font_size_px(line_height)
        line_height = absolute / font_size if absolute else DEFAULT_STORY_LINE_HEIGHT

    fill_ref = formatting.fill_color
    color = resolve_text_color(fill_ref, color_resolver, document_context) if fill_ref else DEFAULT_COLOR

    style: Dict[str, Any] = {
        "font_size": font_size,
        "font_family": formatting.font_family or DEFAULT_FONT_FAMILY,
        "font_weight": font_weight(formatting.font_style),
        "font_style": font_style(formatting.font_style),
        "color": ensure_contrast(color, background_color, min_contrast_ratio),
        "text_align": text_align(formatting.alignment),
        "line_height": line_height,
        "min_height": font_size * 1.4,
        "overflow": "visible",
        "white_space": "pre-wrap",
    }
    spacing = letter_spacing(formatting.tracking)
    if spacing is not None:
        style["letter_spacing"] = spacing
    if formatting.baseline_shift:
        style["baseline_shift"] = formatting.baseline_shift
    return style
