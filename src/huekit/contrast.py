"""WCAG contrast evaluation for huekit.

Implements the WCAG 2.x relative luminance and contrast ratio formulas, maps
a ratio onto the conformance levels used for text and UI components, and
searches a small fixed set of neutral colors for accessible alternatives.

Standards Compliance:
    - Level AAA normal text: ratio >= 7.0
    - Level AA normal text: ratio >= 4.5
    - Level AA large text and UI components: ratio >= 3.0

Example:
    >>> from huekit.contrast import contrast_ratio, classify
    >>> round(contrast_ratio("#000000", "#FFFFFF"), 2)
    21.0
    >>> classify(4.6).level
    'AA'
"""

from dataclasses import dataclass
from typing import Literal, NamedTuple

from .color_utils import parse_color
from .colors import Color

__all__ = [
    "ContrastLevel",
    "ContrastResult",
    "Suggestion",
    "relative_luminance",
    "contrast_ratio",
    "classify",
    "evaluate_contrast",
    "suggest_alternatives",
    "GRAY_STEP",
]

ContrastLevel = Literal["AAA", "AA", "AA Large", "Fail"]

AAA_RATIO = 7.0
AA_RATIO = 4.5
AA_LARGE_RATIO = 3.0

GRAY_STEP = 17
MAX_SUGGESTIONS = 5

WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


@dataclass(frozen=True)
class ContrastResult:
    """WCAG verdict for one contrast ratio."""

    ratio: float
    level: ContrastLevel
    description: str
    normal_text: bool
    large_text: bool
    ui_components: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "ratio": self.ratio,
            "level": self.level,
            "description": self.description,
            "normal_text": self.normal_text,
            "large_text": self.large_text,
            "ui_components": self.ui_components,
        }


class Suggestion(NamedTuple):
    color: Color
    ratio: float


def _as_color(value: Color | str) -> Color:
    if isinstance(value, Color):
        return value
    return parse_color(value)


def relative_luminance(color: Color | str) -> float:
    """Compute the relative luminance of a color according to WCAG 2.x.

    Each 8-bit channel is scaled to [0, 1], linearized, then weighted by the
    eye's sensitivity to it.

    Args:
        color: A ``Color`` or any text accepted by ``parse_color``.

    Returns:
        float: Luminance in [0.0, 1.0]; 0.0 for black, 1.0 for white.

    Algorithm Details:
        Linearization (gamma correction), with c = channel / 255:
        - For c <= 0.03928: linear_c = c / 12.92
        - For c > 0.03928: linear_c = ((c + 0.055) / 1.055)^2.4

        Luminance calculation:
        - L = 0.2126 * R_linear + 0.7152 * G_linear + 0.0722 * B_linear

    Examples:
        >>> relative_luminance("#000000")
        0.0
        >>> round(relative_luminance("#FFFFFF"), 4)
        1.0
        >>> round(relative_luminance("#FF0000"), 4)
        0.2126

    Raises:
        ColorFormatError: If ``color`` is text that cannot be parsed.

    References:
        - WCAG 2.0: https://www.w3.org/TR/WCAG20/#relativeluminancedef
    """
    def linearize(c: float) -> float:
        if c <= 0.03928:
            return c / 12.92
        return ((c + 0.055) / 1.055) ** 2.4

    color = _as_color(color)
    r_lin = linearize(color.r / 255)
    g_lin = linearize(color.g / 255)
    b_lin = linearize(color.b / 255)
    return 0.2126 * r_lin + 0.7152 * g_lin + 0.0722 * b_lin


def contrast_ratio(a: Color | str, b: Color | str) -> float:
    """Calculate the WCAG contrast ratio between two colors.

    The ratio is ``(L_lighter + 0.05) / (L_darker + 0.05)``. It is symmetric in
    its arguments and lies in [1.0, 21.0]: 1.0 for identical colors, 21.0 for
    black against white.

    Examples:
        >>> round(contrast_ratio("#000000", "#FFFFFF"), 2)
        21.0
        >>> contrast_ratio("#777777", "#777777")
        1.0
    """
    l1 = relative_luminance(a)
    l2 = relative_luminance(b)
    light = max(l1, l2)
    dark = min(l1, l2)
    return (light + 0.05) / (dark + 0.05)


def classify(ratio: float) -> ContrastResult:
    """Map a contrast ratio onto its WCAG level and compliance flags."""
    if ratio >= AAA_RATIO:
        return ContrastResult(
            ratio,
            "AAA",
            "Excellent contrast - meets AAA for all text sizes",
            normal_text=True,
            large_text=True,
            ui_components=True,
        )
    if ratio >= AA_RATIO:
        return ContrastResult(
            ratio,
            "AA",
            "Good contrast - meets AA for normal text and AAA for large text",
            normal_text=True,
            large_text=True,
            ui_components=True,
        )
    if ratio >= AA_LARGE_RATIO:
        return ContrastResult(
            ratio,
            "AA Large",
            "Minimum contrast - meets AA for large text and UI components only",
            normal_text=False,
            large_text=True,
            ui_components=True,
        )
    return ContrastResult(
        ratio,
        "Fail",
        "Insufficient contrast - does not meet accessibility standards",
        normal_text=False,
        large_text=False,
        ui_components=False,
    )


def evaluate_contrast(foreground: Color | str, background: Color | str) -> ContrastResult:
    """Compute and classify the contrast between two colors."""
    return classify(contrast_ratio(foreground, background))


def suggest_alternatives(
    base: Color | str, target_ratio: float = AA_RATIO
) -> list[Suggestion]:
    """Suggest neutral colors that reach ``target_ratio`` against ``base``.

    White and black are tried first, then the gray ladder 0, 17, ..., 255.
    Every candidate meeting the target is kept once, the list is sorted by
    descending ratio (stable, so earlier candidates win ties) and the first
    five are returned. The search is bounded and deterministic.
    """
    base = _as_color(base)
    suggestions: list[Suggestion] = []
    seen: set[Color] = set()

    def consider(candidate: Color) -> None:
        if candidate in seen:
            return
        ratio = contrast_ratio(base, candidate)
        if ratio >= target_ratio:
            suggestions.append(Suggestion(candidate, ratio))
            seen.add(candidate)

    consider(WHITE)
    consider(BLACK)
    for level in range(0, 256, GRAY_STEP):
        consider(Color(level, level, level))

    suggestions.sort(key=lambda s: s.ratio, reverse=True)
    return suggestions[:MAX_SUGGESTIONS]
