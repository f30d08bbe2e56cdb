"""CSS gradient synthesis for huekit.

A ``Gradient`` is a type tag, a direction descriptor and an ordered stop list.
Its two renderings are derived from those fields on every access, so a copy
made with a different direction (``Gradient.with_direction``) always has CSS
that matches its stops:

    - ``css``: explicit stop positions, for code export
      ``linear-gradient(to right, #FF0000 0%, #0000FF 100%)``
    - ``preview``: bare colors, letting the renderer space them
      ``linear-gradient(to right, #FF0000, #0000FF)``

Two entry points build gradients from a color list:

    - ``generate_gradients``: a fixed set of six gradients for a ranked color
      list (as produced by image analysis). Fewer than two colors simply
      yields no gradients.
    - ``generate_gradient_collection``: every generator strategy plus
      directional variations, truncated to a maximum count. Asking for a
      collection from fewer than two (or unparsable) colors raises
      ``GradientInputError``.
"""

import hashlib
import math
import re
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Literal, NamedTuple

from loguru import logger

from .color_utils import parse_color
from .colors import AnalyzedColor, Color, interpolate_colors
from .errors import ColorFormatError, GradientInputError

__all__ = [
    "GradientType",
    "Direction",
    "DIRECTIONS",
    "RADIAL_SHAPES",
    "GradientStop",
    "Gradient",
    "GradientCollection",
    "GradientOptions",
    "ColorValidation",
    "sort_by_hue",
    "sort_by_lightness",
    "smooth_gradient_colors",
    "basic_gradients",
    "sorted_gradients",
    "interpolated_gradients",
    "radial_gradients",
    "conic_gradients",
    "pattern_gradients",
    "directional_variations",
    "gradient_variations",
    "generate_gradients",
    "generate_gradient_collection",
    "validate_colors",
]

GradientType = Literal["linear", "radial", "conic"]


class Direction(NamedTuple):
    name: str
    value: str
    angle: str


DIRECTIONS: tuple[Direction, ...] = (
    Direction("Top to Bottom", "to bottom", "180deg"),
    Direction("Left to Right", "to right", "90deg"),
    Direction("Diagonal ↘", "to bottom right", "135deg"),
    Direction("Diagonal ↙", "to bottom left", "225deg"),
    Direction("Diagonal ↗", "to top right", "45deg"),
    Direction("Diagonal ↖", "to top left", "315deg"),
    Direction("Bottom to Top", "to top", "0deg"),
    Direction("Right to Left", "to left", "270deg"),
)

RADIAL_SHAPES: tuple[str, ...] = (
    "circle at center",
    "ellipse at center",
    "circle at top left",
    "circle at top right",
    "circle at bottom left",
    "circle at bottom right",
    "ellipse at top",
    "ellipse at bottom",
)

SMOOTH_STEPS = 5
ANALYSIS_SMOOTH_STEPS = 4
FADE_STEP = 25.0
COLLECTION_VARIATION_SOURCES = 5
COLLECTION_VARIATION_DIRECTIONS = 3
COLLECTION_VARIATION_LIMIT = 10
GRADIENT_VARIATION_LIMIT = 3

_POSITION_LIMITS: dict[str, float] = {"linear": 100.0, "radial": 100.0, "conic": 360.0}


def _format_number(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class GradientStop:
    """One color stop.

    ``position`` is a percentage for linear and radial gradients and degrees
    for conic ones. When ``opacity`` is set the rendered color carries a
    two-digit hex alpha suffix.
    """

    color: Color
    position: float
    opacity: float | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.position) or self.position < 0:
            raise ValueError(f"stop position must be a non-negative number, got {self.position}")
        if self.opacity is not None and not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"stop opacity must be in [0, 1], got {self.opacity}")

    @property
    def token(self) -> str:
        if self.opacity is None:
            return self.color.hex
        alpha = int(math.floor(self.opacity * 255 + 0.5))
        return f"{self.color.hex}{alpha:02X}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"color": self.color.hex, "position": self.position}
        if self.opacity is not None:
            data["opacity"] = self.opacity
        return data


@dataclass(frozen=True)
class Gradient:
    id: str
    name: str
    type: GradientType
    direction: str
    stops: tuple[GradientStop, ...]
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "stops", tuple(self.stops))
        object.__setattr__(self, "tags", tuple(self.tags))

        if self.type not in _POSITION_LIMITS:
            raise ValueError(f"unknown gradient type: '{self.type}'")
        if not self.direction.strip():
            raise ValueError("gradient direction must not be empty")
        if len(self.stops) < 2:
            raise ValueError(f"a gradient needs at least 2 stops, got {len(self.stops)}")

        limit = _POSITION_LIMITS[self.type]
        previous = -math.inf
        for stop in self.stops:
            out_of_range = (
                stop.position >= limit if self.type == "conic" else stop.position > limit
            )
            if out_of_range:
                raise ValueError(
                    f"stop position {stop.position} out of range for a {self.type} gradient"
                )
            if stop.position < previous:
                raise ValueError("stop positions must be non-decreasing")
            previous = stop.position

    @property
    def _unit(self) -> str:
        return "deg" if self.type == "conic" else "%"

    @property
    def css(self) -> str:
        unit = self._unit
        stops = ", ".join(
            f"{stop.token} {_format_number(stop.position)}{unit}" for stop in self.stops
        )
        return f"{self.type}-gradient({self.direction}, {stops})"

    @property
    def preview(self) -> str:
        stops = ", ".join(stop.token for stop in self.stops)
        return f"{self.type}-gradient({self.direction}, {stops})"

    @property
    def colors(self) -> list[Color]:
        return [stop.color for stop in self.stops]

    def with_direction(self, direction: str) -> "Gradient":
        """Copy of this gradient pointing another way; stops are unchanged."""
        return replace(self, direction=direction)

    def variation(self, direction: Direction) -> "Gradient":
        slug = re.sub(r"\s+", "-", direction.value)
        return replace(
            self,
            id=f"{self.id}-{slug}",
            name=f"{self.name} ({direction.name})",
            direction=direction.value,
            tags=(*self.tags, "variation"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "direction": self.direction,
            "stops": [stop.to_dict() for stop in self.stops],
            "css": self.css,
            "preview": self.preview,
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class GradientOptions:
    include_variations: bool = True
    max_gradients: int = 20
    name: str = "Generated Collection"

    def __post_init__(self) -> None:
        if self.max_gradients < 1:
            raise ValueError(f"max_gradients must be at least 1, got {self.max_gradients}")


@dataclass(frozen=True)
class GradientCollection:
    id: str
    name: str
    description: str
    gradients: tuple[Gradient, ...]
    color_count: int
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    @property
    def gradient_count(self) -> int:
        return len(self.gradients)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "gradients": [g.to_dict() for g in self.gradients],
            "metadata": {
                "created_at": self.created_at,
                "color_count": self.color_count,
                "gradient_count": self.gradient_count,
            },
        }


class ColorValidation(NamedTuple):
    is_valid: bool
    errors: list[str]


def _as_color(value: Color | AnalyzedColor | str) -> Color:
    if isinstance(value, AnalyzedColor):
        return value.color
    if isinstance(value, Color):
        return value
    return parse_color(value)


def _even_stops(colors: Sequence[Color]) -> tuple[GradientStop, ...]:
    last = len(colors) - 1
    return tuple(
        GradientStop(color, index / last * 100) for index, color in enumerate(colors)
    )


def sort_by_hue(colors: Sequence[Color]) -> list[Color]:
    """Stable sort by ascending hue."""
    return sorted(colors, key=lambda c: c.hsl.hue)


def sort_by_lightness(colors: Sequence[Color]) -> list[Color]:
    """Stable sort by ascending lightness."""
    return sorted(colors, key=lambda c: c.hsl.lightness)


def smooth_gradient_colors(
    colors: Sequence[Color], steps: int = ANALYSIS_SMOOTH_STEPS
) -> list[Color]:
    """Hue-sort ``colors`` and interpolate ``steps`` colors across each pair."""
    if len(colors) < 2:
        return list(colors)

    ordered = sort_by_hue(colors)
    result: list[Color] = []
    for start, end in zip(ordered, ordered[1:]):
        result.extend(interpolate_colors(start, end, steps))
    return result


# Collection strategies


def basic_gradients(colors: Sequence[Color]) -> list[Gradient]:
    """One two-stop gradient per adjacent pair, plus an all-colors spectrum."""
    gradients = [
        Gradient(
            id=f"basic-{i}",
            name=f"{start.hex} to {end.hex}",
            type="linear",
            direction="to right",
            stops=(GradientStop(start, 0), GradientStop(end, 100)),
            description="Simple two-color gradient",
            tags=("basic", "two-color"),
        )
        for i, (start, end) in enumerate(zip(colors, colors[1:]))
    ]

    if len(colors) >= 3:
        gradients.append(
            Gradient(
                id="multi-color",
                name="Multi-Color Spectrum",
                type="linear",
                direction="to right",
                stops=_even_stops(colors),
                description="Gradient using all provided colors",
                tags=("multi-color", "spectrum"),
            )
        )
    return gradients


def sorted_gradients(colors: Sequence[Color]) -> list[Gradient]:
    return [
        Gradient(
            id="hue-sorted",
            name="Rainbow Spectrum",
            type="linear",
            direction="45deg",
            stops=_even_stops(sort_by_hue(colors)),
            description="Colors sorted by hue for natural rainbow effect",
            tags=("rainbow", "hue-sorted", "natural"),
        ),
        Gradient(
            id="lightness-sorted",
            name="Light to Dark",
            type="linear",
            direction="to bottom",
            stops=_even_stops(sort_by_lightness(colors)),
            description="Colors sorted by lightness",
            tags=("lightness", "sorted", "depth"),
        ),
    ]


def interpolated_gradients(colors: Sequence[Color]) -> list[Gradient]:
    """Smooth HSL transition between the first and the last color."""
    interpolated = interpolate_colors(colors[0], colors[-1], SMOOTH_STEPS)
    return [
        Gradient(
            id="smooth-interpolated",
            name="Smooth Transition",
            type="linear",
            direction="135deg",
            stops=_even_stops(interpolated),
            description="Smooth interpolation between extreme colors",
            tags=("smooth", "interpolated", "transition"),
        )
    ]


def radial_gradients(colors: Sequence[Color]) -> list[Gradient]:
    stops = _even_stops(colors[:3])
    return [
        Gradient(
            id="radial-center",
            name="Radial Center",
            type="radial",
            direction="circle at center",
            stops=stops,
            description="Radial gradient from center",
            tags=("radial", "center", "circular"),
        ),
        Gradient(
            id="radial-corner",
            name="Radial Corner",
            type="radial",
            direction="circle at top left",
            stops=stops,
            description="Radial gradient from corner",
            tags=("radial", "corner", "dramatic"),
        ),
    ]


def conic_gradients(colors: Sequence[Color]) -> list[Gradient]:
    if len(colors) < 3:
        return []
    count = len(colors)
    stops = tuple(
        GradientStop(color, index / count * 360) for index, color in enumerate(colors)
    )
    return [
        Gradient(
            id="conic-wheel",
            name="Color Wheel",
            type="conic",
            direction="from 0deg at center",
            stops=stops,
            description="Conic gradient creating a color wheel effect",
            tags=("conic", "wheel", "circular"),
        )
    ]


def pattern_gradients(colors: Sequence[Color]) -> list[Gradient]:
    """Hard-edged stripes and an alternating-opacity fade."""
    count = len(colors)

    stripe_stops: list[GradientStop] = []
    for index, color in enumerate(colors):
        stripe_stops.append(GradientStop(color, index / count * 100))
        stripe_stops.append(GradientStop(color, (index + 1) / count * 100))

    # Bands are 25% wide, narrowed when more than four colors would not fit.
    step = min(FADE_STEP, 100 / count)
    fade_stops: list[GradientStop] = []
    for index, color in enumerate(colors):
        fade_stops.append(GradientStop(color, index * step, opacity=1.0))
        fade_stops.append(GradientStop(color, index * step + step / 2, opacity=0.5))

    return [
        Gradient(
            id="striped",
            name="Color Stripes",
            type="linear",
            direction="to right",
            stops=tuple(stripe_stops),
            description="Hard-edged color stripes",
            tags=("stripes", "hard-edge", "pattern"),
        ),
        Gradient(
            id="fade-pattern",
            name="Fade Pattern",
            type="linear",
            direction="to bottom",
            stops=tuple(fade_stops),
            description="Fading color pattern with opacity",
            tags=("fade", "opacity", "pattern"),
        ),
    ]


def directional_variations(
    gradients: Sequence[Gradient],
    directions: Sequence[Direction] = DIRECTIONS[:COLLECTION_VARIATION_DIRECTIONS],
    limit: int = COLLECTION_VARIATION_LIMIT,
) -> list[Gradient]:
    """Re-emit linear gradients in other directions, tagged ``variation``."""
    variations = [
        gradient.variation(direction)
        for gradient in gradients
        if gradient.type == "linear"
        for direction in directions
        if direction.value != gradient.direction
    ]
    return variations[:limit]


def gradient_variations(gradient: Gradient) -> list[Gradient]:
    """Up to three standard-direction variations of a single linear gradient."""
    return directional_variations([gradient], DIRECTIONS, GRADIENT_VARIATION_LIMIT)


def validate_colors(colors: Sequence[Color | str]) -> ColorValidation:
    """Check a color list for collection generation without raising."""
    errors: list[str] = []
    if len(colors) < 2:
        errors.append("At least 2 colors are required")

    for index, color in enumerate(colors):
        if isinstance(color, Color):
            continue
        try:
            parse_color(color)
        except ColorFormatError:
            errors.append(f"Invalid color format at index {index}: {color}")

    return ColorValidation(not errors, errors)


def _collection_id(colors: Sequence[Color], name: str) -> str:
    digest = hashlib.sha1(
        ("|".join(c.hex for c in colors) + "|" + name).encode("utf-8")
    ).hexdigest()
    return f"collection-{digest[:12]}"


def generate_gradient_collection(
    colors: Sequence[Color | str], options: GradientOptions | None = None
) -> GradientCollection:
    """Run every gradient strategy over ``colors``.

    Strategies are concatenated in a fixed order (basic, sorted, interpolated,
    radial, conic, patterns), directional variations of the first five
    gradients are appended when requested, and the list is truncated to
    ``options.max_gradients``.

    Raises:
        GradientInputError: If fewer than two colors are given or any of them
            cannot be parsed.
    """
    options = options or GradientOptions()
    validation = validate_colors(colors)
    if not validation.is_valid:
        raise GradientInputError(validation.errors)

    parsed = [_as_color(c) for c in colors]

    gradients: list[Gradient] = []
    gradients.extend(basic_gradients(parsed))
    gradients.extend(sorted_gradients(parsed))
    gradients.extend(interpolated_gradients(parsed))
    gradients.extend(radial_gradients(parsed))
    gradients.extend(conic_gradients(parsed))
    gradients.extend(pattern_gradients(parsed))

    if options.include_variations:
        gradients.extend(
            directional_variations(gradients[:COLLECTION_VARIATION_SOURCES])
        )

    final = tuple(gradients[: options.max_gradients])
    logger.debug(
        "Generated {} gradients ({} before truncation) from {} colors",
        len(final),
        len(gradients),
        len(parsed),
    )
    return GradientCollection(
        id=_collection_id(parsed, options.name),
        name=options.name,
        description=f"Generated from {len(parsed)} colors",
        gradients=final,
        color_count=len(parsed),
    )


def generate_gradients(colors: Sequence[Color | AnalyzedColor | str]) -> list[Gradient]:
    """Six gradients for a ranked color list; empty for fewer than two colors."""
    if len(colors) < 2:
        return []

    ranked = [_as_color(c) for c in colors]
    smooth = smooth_gradient_colors(ranked[:3])
    conic_colors = sort_by_hue(ranked[:4])
    conic_count = len(conic_colors)

    return [
        Gradient(
            id="dominant",
            name="Dominant Colors",
            type="linear",
            direction="to right",
            stops=_even_stops(ranked[:3]),
        ),
        Gradient(
            id="hue",
            name="Hue Spectrum",
            type="linear",
            direction="45deg",
            stops=_even_stops(sort_by_hue(ranked[:5])),
        ),
        Gradient(
            id="lightness",
            name="Light to Dark",
            type="linear",
            direction="to bottom",
            stops=_even_stops(sort_by_lightness(ranked[:4])),
        ),
        Gradient(
            id="smooth",
            name="Smooth Transition",
            type="linear",
            direction="135deg",
            stops=_even_stops(smooth),
        ),
        Gradient(
            id="radial",
            name="Radial Center",
            type="radial",
            direction="circle at center",
            stops=_even_stops(ranked[:3]),
        ),
        Gradient(
            id="conic",
            name="Conic Circular",
            type="conic",
            direction="from 0deg at center",
            stops=tuple(
                GradientStop(color, index / conic_count * 360)
                for index, color in enumerate(conic_colors)
            ),
        ),
    ]
