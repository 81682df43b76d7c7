"""
Formatted run rendering.

Turns an ordered run sequence into render segments for a presentation
layer: one styled text segment per text run, a break marker per break run
and a single-space segment wherever the spacing heuristic says two adjacent
runs belong to different words. Text is passed through verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from ..models.story import Run, Story, StoryDefaults
from ..styles.run_style import ResolvedStyle, resolve_run_style
from ..styles.spacing import needs_space_between
from ..utils.color_utils import ColorResolver
from ..utils.enums import BreakType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextSegment:
    """Text drawn with one style. ``style`` is None for the unstyled fallback."""

    text: str
    style: Optional[ResolvedStyle] = None
    preserve_whitespace: bool = False

    kind = "text"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"kind": self.kind, "text": self.text}
        data["style"] = self.style.to_dict() if self.style is not None else None
        if self.preserve_whitespace:
            data["preserve_whitespace"] = True
        return data


@dataclass(frozen=True, slots=True)
class SpaceSegment:
    """A synthesized inter-run space."""

    text: str = " "

    kind = "space"

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "text": self.text}


@dataclass(frozen=True, slots=True)
class BreakSegment:
    """Forced break. Paragraph breaks are double breaks (a larger vertical gap)."""

    break_type: BreakType = BreakType.LINE
    source: Optional[str] = None

    kind = "break"

    @property
    def double(self) -> bool:
        return self.break_type is BreakType.PARAGRAPH

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "break_type": self.break_type.value,
            "double": self.double,
            "source": self.source,
        }


RenderSegment = Union[TextSegment, SpaceSegment, BreakSegment]


class RenderPlan:
    """
    Lazy, restartable sequence of render segments.

    Every iteration renders the runs again from the start; nothing is
    memoized between iterations.
    """

    def __init__(self, renderer: "FormattedRunRenderer", runs: Optional[List[Run]],
                 story_defaults: Optional[StoryDefaults], font_size_override: Optional[float],
                 fallback_text: Optional[str] = None):
        self._renderer = renderer
        self._runs = runs
        self._story_defaults = story_defaults
        self._font_size_override = font_size_override
        self._fallback_text = fallback_text

    @property
    def is_fallback(self) -> bool:
        return self._runs is None

    def __iter__(self) -> Iterator[RenderSegment]:
        if self._runs is None:
            if isinstance(self._fallback_text, str):
                yield TextSegment(text=self._fallback_text, style=None, preserve_whitespace=True)
            return
        yield from self._renderer.iter_segments(self._runs, self._story_defaults, self._font_size_override)

    def segments(self) -> List[RenderSegment]:
        return list(self)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [segment.to_dict() for segment in self]


def _break_groups(runs: Sequence[Run]) -> List[List[int]]:
    """Indices of consecutive break runs, only groups of two or more."""
    groups: List[List[int]] = []
    current: List[int] = []
    for index, run in enumerate(runs):
        if run.is_break:
            current.append(index)
            continue
        if len(current) > 1:
            groups.append(current)
        current = []
    if len(current) > 1:
        groups.append(current)
    return groups


class FormattedRunRenderer:
    """Renders run sequences into segments."""

    def __init__(
        self,
        background_color: str = "white",
        color_resolver: Optional[ColorResolver] = None,
        document_context: Any = None,
        min_contrast_ratio: float = 4.5,
    ):
        """
        Initialize renderer.

        Args:
            background_color: Background color used for the contrast pass
            color_resolver: Host service resolving fill color references
            document_context: Passed through to ``color_resolver``
            min_contrast_ratio: Forwarded to the contrast check
        """
        self.background_color = background_color
        self.color_resolver = color_resolver
        self.document_context = document_context
        self.min_contrast_ratio = min_contrast_ratio

    def render(
        self,
        runs: Any,
        story_defaults: Optional[StoryDefaults] = None,
        font_size_override: Optional[float] = None,
        fallback_text: Optional[str] = None,
    ) -> RenderPlan:
        """
        Plan the rendering of ``runs``.

        A missing or malformed run sequence is not an error: the plan then
        holds ``fallback_text`` as a single unstyled segment with its
        whitespace preserved.

        Args:
            runs: Ordered sequence of Run objects or run mappings
            story_defaults: Story-level fallback formatting
            font_size_override: Font size forced on every run, in px
            fallback_text: Raw story text used when ``runs`` is unusable

        Returns:
            RenderPlan over the segments
        """
        coerced = self._coerce_runs(runs)
        if coerced is None:
            logger.debug("No usable run sequence; rendering raw story text")
            return RenderPlan(self, None, story_defaults, font_size_override, fallback_text)

        break_count = sum(1 for run in coerced if run.is_break)
        groups = _break_groups(coerced)
        logger.debug(f"Rendering {len(coerced)} runs with {break_count} breaks")
        if groups:
            logger.debug(f"Found {len(groups)} groups of consecutive breaks: {groups}")

        return RenderPlan(self, coerced, story_defaults, font_size_override, fallback_text)

    def render_story(self, story: Story, font_size_override: Optional[float] = None) -> RenderPlan:
        """Render a story's runs, falling back to its raw text."""
        return self.render(story.formatted_content, story.defaults, font_size_override, story.text)

    def iter_segments(self, runs: Sequence[Run], story_defaults: Optional[StoryDefaults],
                      font_size_override: Optional[float]) -> Iterator[RenderSegment]:
        """Generate segments for ``runs`` strictly in order."""
        for index, run in enumerate(runs):
            if run.is_break:
                segment = BreakSegment(run.formatting.break_type or BreakType.LINE, run.formatting.source)
                logger.debug(f"Break {index}: source={segment.source}, type={segment.break_type.value}")
                yield segment
                continue

            style = resolve_run_style(
                run,
                story_defaults,
                font_size_override=font_size_override,
                background_color=self.background_color,
                color_resolver=self.color_resolver,
                document_context=self.document_context,
                min_contrast_ratio=self.min_contrast_ratio,
            )
            yield TextSegment(text=run.text, style=style)

            if index + 1 < len(runs):
                following = runs[index + 1]
                if needs_space_between(run.text, run.formatting, following.text, following.formatting):
                    logger.debug(f"Space inserted after run {index}: {run.text!r} | {following.text!r}")
                    yield SpaceSegment()

    @staticmethod
    def _coerce_runs(runs: Any) -> Optional[List[Run]]:
        if not isinstance(runs, (list, tuple)):
            return None
        try:
            return [Run.coerce(item) for item in runs]
        except (TypeError, ValueError) as e:
            logger.warning(f"Malformed run sequence, falling back to raw text: {e}")
            return None


def render_runs(runs: Any, story_defaults: Optional[StoryDefaults] = None,
                font_size_override: Optional[float] = None, **renderer_options: Any) -> List[RenderSegment]:
    """Render ``runs`` eagerly with a one-off renderer."""
    return FormattedRunRenderer(**renderer_options).render(runs, story_defaults, font_size_override).segments()
