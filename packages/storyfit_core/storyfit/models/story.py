"""
Data model for styled stories.

A story is the text content and default formatting of one text container.
Its content is an ordered list of runs, each a span of text sharing one
formatting record. Break runs carry no text and force a line or paragraph
boundary.

Dictionaries loaded from JSON use the source document's camelCase keys
(``fontFamily``, ``isBreak``, ...); :meth:`Run.from_dict` and
:meth:`Story.from_dict` convert them to the dataclasses below.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Union

from ..exceptions import StyleError
from ..utils.enums import BreakType, LineHeightMode

DEFAULT_LINE_HEIGHT_RATIO = 1.2

_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


@dataclass(frozen=True, slots=True)
class FontDescriptor:
    """Font parameters for one measurement call (sizes in px)."""

    family: str
    size: float
    weight: str = "400"
    style: str = "normal"
    line_height_mode: LineHeightMode = LineHeightMode.AUTO
    line_height_value: float = DEFAULT_LINE_HEIGHT_RATIO

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, (int, float)) or self.size <= 0:
            raise StyleError("Font size must be a positive number", field_name="size", value=self.size)

    @classmethod
    def with_line_height(
        cls,
        family: str,
        size: float,
        line_height: Union[str, float, None] = None,
        weight: str = "400",
        style: str = "normal",
    ) -> "FontDescriptor":
        """
        Build a descriptor from a raw line-height value.

        ``"18px"`` is an absolute height, a number is a ratio of the font size
        and anything else is parsed as a ratio, defaulting to 1.2.
        """
        if isinstance(line_height, str) and "px" in line_height:
            value = _leading_float(line_height)
            if value is not None:
                return cls(family, size, weight, style, LineHeightMode.ABSOLUTE, value)
        elif isinstance(line_height, (int, float)) and not isinstance(line_height, bool):
            return cls(family, size, weight, style, LineHeightMode.RATIO, float(line_height))
        else:
            value = _leading_float(line_height) if isinstance(line_height, str) else None
            if value:
                return cls(family, size, weight, style, LineHeightMode.RATIO, value)
        return cls(family, size, weight, style, LineHeightMode.AUTO, DEFAULT_LINE_HEIGHT_RATIO)

    @property
    def line_height_px(self) -> float:
        """Resolved line height in pixels."""
        if self.line_height_mode is LineHeightMode.ABSOLUTE:
            return float(self.line_height_value)
        if self.line_height_mode is LineHeightMode.RATIO:
            return self.line_height_value * self.size
        return (self.line_height_value or DEFAULT_LINE_HEIGHT_RATIO) * self.size


def _leading_float(value: str) -> Optional[float]:
    """Parse the numeric prefix of a string, like CSS's parseFloat."""
    match = _LEADING_NUMBER_RE.match(value)
    return float(match.group(1)) if match else None


@dataclass(slots=True)
class ContainerBox:
    """Fixed rendering region of a text frame, in px."""

    width: Any
    height: Any

    @property
    def is_valid(self) -> bool:
        """Both dimensions are real positive numbers."""
        return all(
            isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
            for value in (self.width, self.height)
        )


# camelCase source key -> dataclass attribute, shared by runs and story defaults
_FORMATTING_KEYS: Dict[str, str] = {
    "fontFamily": "font_family",
    "fontSize": "font_size",
    "fontStyle": "font_style",
    "fillColor": "fill_color",
    "fillColorRef": "fill_color",
    "alignment": "alignment",
    "tracking": "tracking",
    "leading": "leading",
    "effectiveLineHeight": "effective_line_height",
    "leftIndent": "left_indent",
    "rightIndent": "right_indent",
    "firstLineIndent": "first_line_indent",
    "spaceBefore": "space_before",
    "spaceAfter": "space_after",
    "baselineShift": "baseline_shift",
    "horizontalScale": "horizontal_scale",
    "paragraphStyle": "paragraph_style",
    "characterStyle": "character_style",
    "underline": "underline",
    "strikethrough": "strikethrough",
    "strikeThrough": "strikethrough",
    "overline": "overline",
    "isBreak": "is_break",
    "breakType": "break_type",
    "source": "source",
}

# Keys the source viewer nests under ``completeStyles``.
_COMPLETE_STYLE_KEYS = ("baselineShift", "horizontalScale")

_NUMERIC_FIELDS = frozenset({
    "font_size",
    "tracking",
    "left_indent",
    "right_indent",
    "first_line_indent",
    "space_before",
    "space_after",
    "baseline_shift",
    "horizontal_scale",
})
_TEXT_FIELDS = frozenset({
    "font_family",
    "font_style",
    "alignment",
    "paragraph_style",
    "character_style",
    "source",
})
_FLAG_FIELDS = frozenset({"underline", "strikethrough", "overline", "is_break"})
# Numbers or keyword strings such as "auto" and "18px".
_LINE_HEIGHT_FIELDS = frozenset({"leading", "effective_line_height"})


def _number(value: Any) -> Optional[float]:
    """Numeric value of ``12``, ``"12"`` or ``"12px"``; None for anything else."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip().removesuffix("px"))
        except ValueError:
            return None
    return None


def _coerce_field(attr: str, value: Any) -> Any:
    if attr in _NUMERIC_FIELDS:
        return _number(value)
    if attr in _TEXT_FIELDS:
        if isinstance(value, str):
            return value
        return str(value) if isinstance(value, (int, float)) else None
    if attr in _FLAG_FIELDS:
        return bool(value)
    if attr in _LINE_HEIGHT_FIELDS:
        if isinstance(value, bool):
            return None
        return value if isinstance(value, (int, float, str)) else None
    return value


def _convert_keys(data: Mapping, allowed: set) -> Dict[str, Any]:
    converted: Dict[str, Any] = {}
    for key, value in data.items():
        attr = _FORMATTING_KEYS.get(key, key)
        if attr in allowed and value is not None:
            value = _coerce_field(attr, value)
            if value is not None:
                converted[attr] = value

    complete = data.get("completeStyles")
    if isinstance(complete, Mapping):
        for key in _COMPLETE_STYLE_KEYS:
            attr = _FORMATTING_KEYS[key]
            if attr in allowed and attr not in converted:
                value = _coerce_field(attr, complete.get(key))
                if value is not None:
                    converted[attr] = value
    return converted


def _check_mapping(data: Any, kind: str) -> None:
    if not isinstance(data, Mapping):
        raise TypeError(f"{kind} must be a mapping, got {type(data).__name__}")


@dataclass(slots=True)
class RunFormatting:
    """Formatting of one run. Every field is optional; None means "not set"."""

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_style: Optional[str] = None
    fill_color: Optional[str] = None
    alignment: Optional[str] = None
    tracking: Optional[float] = None
    leading: Union[float, str, None] = None
    effective_line_height: Union[float, str, None] = None
    left_indent: Optional[float] = None
    right_indent: Optional[float] = None
    first_line_indent: Optional[float] = None
    space_before: Optional[float] = None
    space_after: Optional[float] = None
    baseline_shift: Optional[float] = None
    horizontal_scale: Optional[float] = None
    paragraph_style: Optional[str] = None
    character_style: Optional[str] = None
    underline: bool = False
    strikethrough: bool = False
    overline: bool = False
    is_break: bool = False
    break_type: Optional[BreakType] = None
    source: Optional[str] = None

    def __post_init__(self) -> None:
        if self.break_type is not None and not isinstance(self.break_type, BreakType):
            try:
                self.break_type = BreakType(str(self.break_type).lower())
            except ValueError:
                self.break_type = BreakType.LINE

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RunFormatting":
        if not data:
            return cls()
        _check_mapping(data, "Run formatting")
        allowed = {f.name for f in fields(cls)}
        return cls(**_convert_keys(data, allowed))


@dataclass(slots=True)
class Run:
    """A contiguous span of text sharing one formatting record."""

    text: str = ""
    formatting: RunFormatting = field(default_factory=RunFormatting)

    @property
    def is_break(self) -> bool:
        return self.formatting.is_break

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Run":
        _check_mapping(data, "Run")
        text = data.get("text") or ""
        if not isinstance(text, str):
            text = str(text)
        return cls(text=text, formatting=RunFormatting.from_dict(data.get("formatting")))

    @classmethod
    def coerce(cls, value: Union["Run", Dict[str, Any]]) -> "Run":
        if isinstance(value, Run):
            return value
        return cls.from_dict(value)


@dataclass(slots=True)
class StoryDefaults:
    """Story-level fallback formatting, consulted per field when a run omits one."""

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_style: Optional[str] = None
    fill_color: Optional[str] = None
    alignment: Optional[str] = None
    tracking: Optional[float] = None
    leading: Union[float, str, None] = None
    effective_line_height: Union[float, str, None] = None
    baseline_shift: Optional[float] = None
    horizontal_scale: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StoryDefaults":
        if not data:
            return cls()
        _check_mapping(data, "Story styling")
        allowed = {f.name for f in fields(cls)}
        return cls(**_convert_keys(data, allowed))


@dataclass(slots=True)
class Story:
    """
    Text content and default formatting owned by one text container.

    ``formatted_content`` keeps whatever the source supplied: normally a list
    of runs, but the renderer tolerates anything else by falling back to
    ``text``. ``units`` names the unit of the numeric sizes; None means they
    are already pixels.
    """

    text: str = ""
    formatted_content: Any = None
    defaults: StoryDefaults = field(default_factory=StoryDefaults)
    units: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Story":
        _check_mapping(data, "Story")
        text = data.get("text")
        units = data.get("units")
        return cls(
            text=text if isinstance(text, str) else "",
            formatted_content=data.get("formattedContent"),
            defaults=StoryDefaults.from_dict(data.get("styling")),
            units=units if isinstance(units, str) else None,
        )

    def runs(self) -> Optional[List[Run]]:
        """Runs as dataclasses, or None when ``formatted_content`` is not a run list."""
        if not isinstance(self.formatted_content, (list, tuple)):
            return None
        return [Run.coerce(item) for item in self.formatted_content]

    def plain_text(self) -> str:
        """Text for measurement: the raw text, else the concatenated run text."""
        if self.text:
            return self.text
        if not isinstance(self.formatted_content, (list, tuple)):
            return ""
        parts: List[str] = []
        for item in self.formatted_content:
            try:
                run = Run.coerce(item)
            except TypeError:
                continue
            if run.is_break:
                parts.append("\n")
            else:
                parts.append(run.text)
        return "".join(parts)
