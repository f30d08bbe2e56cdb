"""Color parsing and formatting utilities for huekit."""

import re
from typing import NamedTuple

import numpy as np

from .colors import Color
from .errors import ColorFormatError

__all__ = [
    "ColorData",
    "parse_hex_color",
    "parse_rgb_color",
    "parse_color",
    "process_color",
    "format_color_output",
    "random_color",
]

_HEX_PATTERN = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")
_RGB_PATTERN = re.compile(
    r"rgb\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)", re.IGNORECASE
)


class ColorData(NamedTuple):
    """Outcome of processing user-entered color text."""

    hex: str
    rgb: str
    is_valid: bool
    error: str | None = None


def parse_hex_color(color_str: str) -> Color | None:
    """Parse hexadecimal color format #RRGGBB or #RGB (``#`` optional)."""
    match = _HEX_PATTERN.fullmatch(color_str.strip())
    if not match:
        return None

    hex_str = match.group(1)
    if len(hex_str) == 3:
        hex_str = "".join(c * 2 for c in hex_str)

    return Color(
        int(hex_str[0:2], 16),
        int(hex_str[2:4], 16),
        int(hex_str[4:6], 16),
    )


def parse_rgb_color(color_str: str) -> Color | None:
    """Parse RGB color format rgb(R, G, B)."""
    match = _RGB_PATTERN.fullmatch(color_str.strip())
    if not match:
        return None

    values = [int(match.group(i)) for i in range(1, 4)]
    if not all(0 <= val <= 255 for val in values):
        return None

    return Color(*values)


def parse_color(color_str: str) -> Color:
    """Parse color string in hex or rgb() format.

    Raises:
        ColorFormatError: If the text is in neither format, or an rgb()
            channel is out of range.
    """
    text = color_str.strip()

    for parser in (parse_hex_color, parse_rgb_color):
        result = parser(text)
        if result is not None:
            return result

    if _RGB_PATTERN.fullmatch(text):
        raise ColorFormatError(color_str, "RGB channels must be in [0, 255]")
    raise ColorFormatError(color_str)


def process_color(color_str: str) -> ColorData:
    """Validate and normalize color text without raising.

    Invalid input yields ``ColorData`` with ``is_valid=False`` and a message,
    so callers can show the error and keep their previous state.
    """
    try:
        color = parse_color(color_str)
    except ColorFormatError as e:
        return ColorData(hex="", rgb="", is_valid=False, error=str(e))
    return ColorData(hex=color.hex, rgb=color.rgb_string, is_valid=True)


def format_color_output(colors: list[Color], format_type: str = "hex") -> list[str]:
    """Format colors for output."""
    formatted: list[str] = []

    for color in colors:
        if format_type == "hex":
            formatted.append(color.hex)
        elif format_type == "rgb":
            formatted.append(color.rgb_string)
        elif format_type == "hsl":
            h, s, lightness = color.hsl
            formatted.append(f"hsl({h}, {s}%, {lightness}%)")
        else:
            raise ValueError(f"Unknown color output format: '{format_type}'")

    return formatted


def random_color(rng: np.random.Generator | None = None) -> Color:
    """Return a uniformly random color."""
    rng = rng or np.random.default_rng()
    r, g, b = (int(c) for c in rng.integers(0, 256, size=3))
    return Color(r, g, b)
