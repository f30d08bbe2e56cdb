"""Palette generation from color-theory relationships.

Every scheme is a pure function of one base color's HSL triple: hues are
rotated around the color wheel, saturation and lightness are shifted by fixed
deltas and clamped to [0, 100], and each result goes through ``from_hsl`` and
the nearest-name lookup. Pixel counts are never consulted.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Literal

from .colors import AnalyzedColor, Color, from_hsl

__all__ = [
    "Palette",
    "PaletteType",
    "MONOCHROMATIC_LIGHTNESS",
    "monochromatic",
    "complementary",
    "analogous",
    "triadic",
    "split_complementary",
    "dominant_palette",
    "inverted_palette",
    "generate_palettes",
]

PaletteType = Literal[
    "monochromatic",
    "analogous",
    "complementary",
    "triadic",
    "split-complementary",
    "dominant",
    "inverted",
]

MONOCHROMATIC_LIGHTNESS = (20, 40, 60, 80, 95)
COMPLEMENT_DELTA = 20
ANALOGOUS_OFFSET = 30
ANALOGOUS_TINT_DELTA = 30
SPLIT_OFFSET = 30
DOMINANT_PALETTE_SIZE = 5


@dataclass(frozen=True)
class Palette:
    id: str
    name: str
    description: str
    type: PaletteType
    colors: tuple[Color, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "colors": [c.to_dict() for c in self.colors],
        }


def _clamp(value: float) -> float:
    return max(0, min(100, value))


def _base(color: Color | AnalyzedColor) -> Color:
    if isinstance(color, AnalyzedColor):
        color = color.color
    return color if color.name else color.named()


def _derive(hue: float, saturation: float, lightness: float) -> Color:
    return from_hsl(hue % 360, _clamp(saturation), _clamp(lightness)).named()


def monochromatic(base: Color | AnalyzedColor) -> Palette:
    """Fixed lightness ladder at the base hue and saturation."""
    h, s, _ = _base(base).hsl
    colors = tuple(_derive(h, s, lightness) for lightness in MONOCHROMATIC_LIGHTNESS)
    return Palette(
        "monochromatic",
        "Monochromatic",
        "Different shades and tints of the dominant color",
        "monochromatic",
        colors,
    )


def complementary(base: Color | AnalyzedColor) -> Palette:
    """Base, its complement, and softened/deepened variations of both."""
    color = _base(base)
    h, s, lightness = color.hsl
    comp = (h + 180) % 360
    d = COMPLEMENT_DELTA
    colors = (
        color,
        _derive(comp, s, lightness),
        _derive(h, s - d, lightness + d),
        _derive(comp, s - d, lightness + d),
        _derive(h, s + d, lightness - d),
    )
    return Palette(
        "complementary",
        "Complementary",
        "Colors opposite on the color wheel",
        "complementary",
        colors,
    )


def analogous(base: Color | AnalyzedColor) -> Palette:
    """Base, its two neighbours 30 degrees away, and a lighter and darker tint."""
    color = _base(base)
    h, s, lightness = color.hsl
    colors = (
        color,
        _derive(h - ANALOGOUS_OFFSET, s, lightness),
        _derive(h + ANALOGOUS_OFFSET, s, lightness),
        _derive(h, s, lightness + ANALOGOUS_TINT_DELTA),
        _derive(h, s, lightness - ANALOGOUS_TINT_DELTA),
    )
    return Palette(
        "analogous",
        "Analogous",
        "Colors adjacent on the color wheel",
        "analogous",
        colors,
    )


def triadic(base: Color | AnalyzedColor) -> Palette:
    color = _base(base)
    h, s, lightness = color.hsl
    colors = (color, _derive(h + 120, s, lightness), _derive(h + 240, s, lightness))
    return Palette(
        "triadic",
        "Triadic",
        "Three colors evenly spaced on the color wheel",
        "triadic",
        colors,
    )


def split_complementary(base: Color | AnalyzedColor) -> Palette:
    color = _base(base)
    h, s, lightness = color.hsl
    comp = (h + 180) % 360
    colors = (
        color,
        _derive(comp - SPLIT_OFFSET, s, lightness),
        _derive(comp + SPLIT_OFFSET, s, lightness),
    )
    return Palette(
        "split-complementary",
        "Split Complementary",
        "Base color plus two colors adjacent to its complement",
        "split-complementary",
        colors,
    )


def dominant_palette(colors: Sequence[Color | AnalyzedColor]) -> Palette:
    """The most frequent colors, as ranked by the caller."""
    return Palette(
        "dominant",
        "Dominant Colors",
        "Most frequent colors found in the image",
        "dominant",
        tuple(_base(c) for c in colors[:DOMINANT_PALETTE_SIZE]),
    )


def inverted_palette(colors: Sequence[Color | AnalyzedColor]) -> Palette:
    """RGB inverse (255 - channel) of the first five colors."""
    inverted = []
    for c in colors[:DOMINANT_PALETTE_SIZE]:
        r, g, b = _base(c).rgb
        inverted.append(Color(255 - r, 255 - g, 255 - b).named())
    return Palette(
        "inverted",
        "Inverted",
        "Channel-wise inverse of the dominant colors",
        "inverted",
        tuple(inverted),
    )


def generate_palettes(dominant_colors: Sequence[Color | AnalyzedColor]) -> list[Palette]:
    """Build every palette for a ranked color list.

    The dominant palette is always present; the color-theory schemes are
    derived from the first color and only when there is one.
    """
    palettes = [dominant_palette(dominant_colors)]
    if dominant_colors:
        base = dominant_colors[0]
        palettes.extend(
            scheme(base)
            for scheme in (
                monochromatic,
                complementary,
                analogous,
                triadic,
                split_complementary,
            )
        )
    return palettes
