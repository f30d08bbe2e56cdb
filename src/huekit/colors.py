"""Color value types and color space conversion for huekit.

This module holds the central value types of the toolkit and every conversion
between the representations the rest of the package works with:

    - HEX: ``#RRGGBB`` strings, always rendered upper-case
    - RGB: three 8-bit integer channels in [0, 255]
    - HSL: hue in [0, 359] degrees, saturation and lightness in [0, 100]

RGB is the canonical representation. HSL is derived on demand and rounded to
whole numbers, so ``from_hsl(to_hsl(c))`` may differ from ``c`` by a couple of
units on saturated channels; ``to_hsl_float`` keeps the exact values.

The floating point HSL transform is delegated to colour-science; this module
only adds the integer rounding, clamping and hue wrapping around it.

Example:
    >>> from huekit.colors import Color, from_hsl
    >>> Color(255, 0, 0).hsl
    HSL(hue=0, saturation=100, lightness=50)
    >>> from_hsl(180, 100, 50).hex
    '#00FFFF'
"""

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, NamedTuple

import colour
import numpy as np

__all__ = [
    "Color",
    "HSL",
    "AnalyzedColor",
    "COLOR_NAMES",
    "to_hex",
    "to_rgb_string",
    "to_hsl",
    "to_hsl_float",
    "from_hsl",
    "distance",
    "interpolate_hue",
    "interpolate_colors",
    "nearest_color_name",
]

HSL_SNAP_DIGITS = 9

# Iteration order matters: ties in distance go to the earlier entry.
COLOR_NAMES: dict[str, tuple[int, int, int]] = {
    "Red": (255, 0, 0),
    "Green": (0, 255, 0),
    "Blue": (0, 0, 255),
    "Yellow": (255, 255, 0),
    "Magenta": (255, 0, 255),
    "Cyan": (0, 255, 255),
    "Black": (0, 0, 0),
    "White": (255, 255, 255),
    "Gray": (128, 128, 128),
    "Orange": (255, 165, 0),
    "Purple": (128, 0, 128),
    "Pink": (255, 192, 203),
    "Brown": (165, 42, 42),
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _check_channel(name: str, value: Any) -> int:
    if isinstance(value, bool) or int(value) != value:
        raise ValueError(f"{name} channel must be an integer, got {value!r}")
    value = int(value)
    if not 0 <= value <= 255:
        raise ValueError(f"{name} channel must be in [0, 255], got {value}")
    return value


class HSL(NamedTuple):
    """Whole-number HSL triple."""

    hue: int
    saturation: int
    lightness: int


@dataclass(frozen=True)
class Color:
    """An sRGB color with 8-bit channels.

    ``name`` is an advisory label (usually the nearest entry of
    ``COLOR_NAMES``) and is ignored by equality and hashing.
    """

    r: int
    g: int
    b: int
    name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", _check_channel("red", self.r))
        object.__setattr__(self, "g", _check_channel("green", self.g))
        object.__setattr__(self, "b", _check_channel("blue", self.b))

    @classmethod
    def from_hex(cls, hex_str: str) -> "Color":
        """Build a color from ``#RRGGBB``/``#RGB`` text (the ``#`` is optional)."""
        from .color_utils import parse_hex_color
        from .errors import ColorFormatError

        color = parse_hex_color(hex_str)
        if color is None:
            raise ColorFormatError(hex_str, "Expected #RGB or #RRGGBB")
        return color

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return to_hex(self)

    @property
    def rgb_string(self) -> str:
        return to_rgb_string(self)

    @cached_property
    def hsl(self) -> HSL:
        return to_hsl(self)

    def named(self) -> "Color":
        """Return a copy carrying the nearest color name."""
        return Color(self.r, self.g, self.b, name=nearest_color_name(self))

    def to_dict(self) -> dict[str, Any]:
        hsl = self.hsl
        return {
            "hex": self.hex,
            "rgb": {"r": self.r, "g": self.g, "b": self.b},
            "hsl": {"h": hsl.hue, "s": hsl.saturation, "l": hsl.lightness},
            "name": self.name,
        }

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True)
class AnalyzedColor:
    """A color found in pixel data, with the share of pixels it represents."""

    color: Color
    count: int
    percentage: float

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"count must be non-negative, got {self.count}")
        if not 0.0 <= self.percentage <= 100.0 + 1e-9:
            raise ValueError(
                f"percentage must be in [0, 100], got {self.percentage}"
            )

    @property
    def hex(self) -> str:
        return self.color.hex

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.color.rgb

    @property
    def hsl(self) -> HSL:
        return self.color.hsl

    @property
    def name(self) -> str | None:
        return self.color.name

    def to_dict(self) -> dict[str, Any]:
        data = self.color.to_dict()
        data["count"] = self.count
        data["percentage"] = self.percentage
        return data


def to_hex(color: Color) -> str:
    """Render a color as 6-digit upper-case hex with a leading ``#``."""
    return f"#{color.r:02X}{color.g:02X}{color.b:02X}"


def to_rgb_string(color: Color) -> str:
    """Render a color in the canonical ``rgb(r, g, b)`` form."""
    return f"rgb({color.r}, {color.g}, {color.b})"


def to_hsl_float(color: Color) -> tuple[float, float, float]:
    """Unrounded HSL: hue in [0, 360), saturation and lightness in [0, 100]."""
    rgb = np.array(color.rgb, dtype=float) / 255.0
    h, s, lightness = (float(v) for v in colour.RGB_to_HSL(rgb))
    return (
        (h * 360) % 360,
        min(100.0, max(0.0, s * 100)),
        min(100.0, max(0.0, lightness * 100)),
    )


def to_hsl(color: Color) -> HSL:
    """Convert a color to a whole-number HSL triple.

    Achromatic colors (``r == g == b``) get hue 0 and saturation 0. A hue that
    rounds up to 360 wraps to 0. Rounding hue to whole degrees can move a
    saturated channel by about 2 units, so use ``to_hsl_float`` when an exact
    round trip through ``from_hsl`` matters.
    """
    # Exact values have denominators below 510, so snapping drops float drift
    # without moving a true .5.
    h, s, lightness = (round(v, HSL_SNAP_DIGITS) for v in to_hsl_float(color))
    return HSL(
        _round_half_up(h) % 360,
        _round_half_up(s),
        _round_half_up(lightness),
    )


def from_hsl(hue: float, saturation: float, lightness: float) -> Color:
    """Convert HSL to a color.

    Args:
        hue: Degrees; any value is accepted and wrapped modulo 360.
        saturation: Percentage in [0, 100].
        lightness: Percentage in [0, 100].

    Returns:
        Color: Channels rounded to the nearest integer and clamped to
        [0, 255], which absorbs floating point drift at the sector
        boundaries (0, 120 and 240 degrees).

    Raises:
        ValueError: If saturation or lightness is outside [0, 100].
    """
    if not 0 <= saturation <= 100:
        raise ValueError(f"saturation must be in [0, 100], got {saturation}")
    if not 0 <= lightness <= 100:
        raise ValueError(f"lightness must be in [0, 100], got {lightness}")

    hsl = np.array([(hue % 360) / 360, saturation / 100, lightness / 100])
    rgb = colour.HSL_to_RGB(hsl)
    channels = [min(255, max(0, _round_half_up(float(c) * 255))) for c in rgb]
    return Color(*channels)


def distance(a: Color, b: Color) -> float:
    """Euclidean distance in RGB space, in [0, ~441.67]."""
    return math.sqrt((a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2)


def interpolate_hue(start: float, end: float, ratio: float) -> float:
    """Interpolate between two hues along the shorter arc of the hue circle."""
    delta = end - start
    if abs(delta) > 180:
        delta = delta - 360 if delta > 0 else delta + 360
    return (start + delta * ratio + 360) % 360


def interpolate_colors(start: Color, end: Color, steps: int) -> list[Color]:
    """Return ``steps`` colors from ``start`` to ``end`` (both included).

    Hue is interpolated on the shorter arc; saturation and lightness linearly.
    """
    if steps < 2:
        raise ValueError(f"steps must be at least 2, got {steps}")

    hsl_start = start.hsl
    hsl_end = end.hsl
    result: list[Color] = []
    for i in range(steps):
        ratio = i / (steps - 1)
        hue = interpolate_hue(hsl_start.hue, hsl_end.hue, ratio)
        saturation = hsl_start.saturation + (
            hsl_end.saturation - hsl_start.saturation
        ) * ratio
        lightness = hsl_start.lightness + (
            hsl_end.lightness - hsl_start.lightness
        ) * ratio
        result.append(from_hsl(hue, saturation, lightness))
    return result


def nearest_color_name(color: Color) -> str:
    """Name of the closest ``COLOR_NAMES`` entry; the first entry wins ties."""
    best_name = "Black"
    best_distance = math.inf
    for name, rgb in COLOR_NAMES.items():
        d = distance(color, Color(*rgb))
        if d < best_distance:
            best_distance = d
            best_name = name
    return best_name
