"""Color utilities: parsing, luminance, contrast and text-color fallbacks."""

import logging
import re
from typing import Any, Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# Contrast actually enforced by ensure_contrast, whatever min_ratio says.
IN_PRACTICE_MIN_CONTRAST = 3.0

# Backgrounds that skip the contrast check entirely.
CONTRAST_EXEMPT_BACKGROUNDS = frozenset({"transparent", "white"})

TEXT_FALLBACK_COLOR = "black"

# Sentinel swatch references with a fixed meaning in page-description documents.
SENTINEL_COLOR_REFS: Dict[str, str] = {
    "Color/None": "transparent",
    "Color/Black": "rgb(0, 0, 0)",
    "Color/White": "rgb(255, 255, 255)",
    "Color/Paper": "rgb(255, 255, 255)",
}

_RGB_FUNCTION_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)

ColorResolver = Callable[[Any, Any], Optional[str]]


class ColorUtils:
    """Utility functions for color conversion and validation."""

    def __init__(self):
        """Initialize color utilities."""
        self.color_map = {
            'black': (0, 0, 0),
            'white': (255, 255, 255),
            'red': (255, 0, 0),
            'green': (0, 128, 0),
            'blue': (0, 0, 255),
            'yellow': (255, 255, 0),
            'cyan': (0, 255, 255),
            'magenta': (255, 0, 255),
            'gray': (128, 128, 128),
            'grey': (128, 128, 128),
            'silver': (192, 192, 192),
        }

    def hex_to_rgb(self, hex_color: str) -> Optional[RGB]:
        """Convert hex color to RGB."""
        if not hex_color or not isinstance(hex_color, str):
            return None

        hex_color = hex_color.strip().lstrip('#')
        if len(hex_color) == 3:
            hex_color = ''.join([c * 2 for c in hex_color])
        if len(hex_color) != 6:
            return None

        try:
            return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
        except ValueError:
            return None

    def rgb_to_hex(self, rgb_color) -> Optional[str]:
        """Convert RGB color to hex."""
        if not rgb_color or not isinstance(rgb_color, (tuple, list)) or len(rgb_color) != 3:
            return None

        try:
            r, g, b = [int(c) for c in rgb_color]
            return f"#{r:02x}{g:02x}{b:02x}"
        except (ValueError, TypeError):
            return None

    def parse_color(self, color_value) -> Optional[RGB]:
        """
        Parse a CSS-like color into an RGB triple.

        Accepts ``#rgb``/``#rrggbb``, ``rgb(r, g, b)``, named colors and
        3-element sequences. Returns None for ``transparent`` and for anything
        unparseable.
        """
        if not color_value:
            return None

        if isinstance(color_value, (tuple, list)):
            if len(color_value) != 3:
                return None
            try:
                r, g, b = [int(c) for c in color_value]
            except (ValueError, TypeError):
                return None
            if all(0 <= c <= 255 for c in (r, g, b)):
                return (r, g, b)
            return None

        if not isinstance(color_value, str):
            return None

        value = color_value.strip()
        if value.startswith('#'):
            return self.hex_to_rgb(value)

        match = _RGB_FUNCTION_RE.match(value)
        if match:
            channels = tuple(min(255, int(part)) for part in match.groups())
            return channels  # type: ignore[return-value]

        return self.color_map.get(value.lower())

    def validate_color(self, color_value) -> bool:
        """Validate color value."""
        return self.parse_color(color_value) is not None

    @staticmethod
    def relative_luminance(rgb: RGB) -> float:
        """
        Relative luminance of an sRGB color (0 = black, 1 = white).

        Channels are linearized with the standard sRGB transfer function
        before weighting.
        """
        def linearize(channel: int) -> float:
            c = channel / 255.0
            if c <= 0.03928:
                return c / 12.92
            return ((c + 0.055) / 1.055) ** 2.4

        r, g, b = (linearize(c) for c in rgb)
        return 0.2126 * r + 0.7152 * g + 0.0722 * b

    def contrast_ratio(self, first: RGB, second: RGB) -> float:
        """Contrast ratio (L_light + 0.05) / (L_dark + 0.05), in [1, 21]."""
        l1 = self.relative_luminance(first)
        l2 = self.relative_luminance(second)
        lighter, darker = max(l1, l2), min(l1, l2)
        return (lighter + 0.05) / (darker + 0.05)


_default_utils = ColorUtils()


def parse_color(color_value) -> Optional[RGB]:
    return _default_utils.parse_color(color_value)


def relative_luminance(rgb: RGB) -> float:
    return ColorUtils.relative_luminance(rgb)


def contrast_ratio(first: RGB, second: RGB) -> float:
    return _default_utils.contrast_ratio(first, second)


def ensure_contrast(text_color: str, background_color: str, min_ratio: float = 4.5) -> str:
    """
    Return a text color readable against ``background_color``.

    The check uses a contrast threshold of 3.0 regardless of ``min_ratio``;
    colors at or above it are returned untouched to stay close to the source
    document. Below it the color is replaced by pure black on light
    backgrounds (luminance > 0.5) and pure white otherwise.

    Args:
        text_color: Resolved text color
        background_color: Background the text is drawn on
        min_ratio: Nominal minimum ratio (accepted, not enforced)

    Returns:
        The original color or ``"#000000"`` / ``"#ffffff"``
    """
    if isinstance(background_color, str) and background_color.strip().lower() in CONTRAST_EXEMPT_BACKGROUNDS:
        return text_color

    text_rgb = parse_color(text_color)
    background_rgb = parse_color(background_color)
    if text_rgb is None or background_rgb is None:
        logger.debug(f"Skipping contrast check for {text_color!r} on {background_color!r}: unparseable color")
        return text_color

    ratio = contrast_ratio(text_rgb, background_rgb)
    if ratio >= IN_PRACTICE_MIN_CONTRAST:
        return text_color

    background_luminance = relative_luminance(background_rgb)
    replacement = "#000000" if background_luminance > 0.5 else "#ffffff"
    logger.debug(
        f"Low contrast {ratio:.2f} for {text_color!r} on {background_color!r} "
        f"(nominal minimum {min_ratio}); using {replacement}"
    )
    return replacement


def fallback_color_for_ref(color_ref: Any) -> str:
    """Deterministic color for a reference the resolver could not handle."""
    if isinstance(color_ref, str) and color_ref in SENTINEL_COLOR_REFS:
        return SENTINEL_COLOR_REFS[color_ref]
    return TEXT_FALLBACK_COLOR


def resolve_text_color(color_ref: Any, resolver: Optional[ColorResolver] = None,
                       document_context: Any = None) -> str:
    """
    Resolve a fill-color reference into a color string.

    ``resolver`` is the host's color-resolution service. When it is missing,
    raises, or returns nothing, sentinel references map to fixed colors and
    everything else falls back to black.
    """
    if not color_ref:
        return TEXT_FALLBACK_COLOR

    if resolver is not None:
        try:
            resolved = resolver(color_ref, document_context)
        except Exception as e:
            logger.warning(f"Color resolution failed for {color_ref!r}: {e}")
        else:
            if resolved:
                return resolved
            logger.debug(f"Color resolver returned nothing for {color_ref!r}")

    if isinstance(color_ref, str) and color_ref not in SENTINEL_COLOR_REFS and parse_color(color_ref):
        return color_ref
    return fallback_color_for_ref(color_ref)
