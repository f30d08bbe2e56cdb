"""Serializations of analysis results and gradient collections.

Every exporter is a pure rendering of data that already exists; none of them
computes new colors.
"""

import json
from typing import NamedTuple
from urllib.parse import quote

from .analysis import ColorAnalysisResult
from .gradients import Gradient, GradientCollection

__all__ = [
    "DesignExample",
    "export_analysis_json",
    "export_analysis_css",
    "export_collection_json",
    "export_collection_css",
    "export_collection_scss",
    "export_gradients_css",
    "gradient_css_snippet",
    "design_examples",
    "svg_preview",
]


class DesignExample(NamedTuple):
    element: str
    description: str
    css: str
    html_example: str
    use_cases: tuple[str, ...]


def export_analysis_json(result: ColorAnalysisResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def export_analysis_css(result: ColorAnalysisResult, prefix: str = "extracted") -> str:
    """CSS custom properties and utility classes for the dominant colors."""
    lines = [
        f"/* Color Analysis Results - Generated {result.metadata.extracted_at} */",
        "",
        ":root {",
    ]
    for index, color in enumerate(result.dominant_colors, start=1):
        lines.append(f"  --{prefix}-color-{index}: {color.hex};")
    if result.average_color is not None:
        lines.append(f"  --{prefix}-average: {result.average_color.hex};")
    lines.extend(["}", ""])

    for index, color in enumerate(result.dominant_colors, start=1):
        lines.append(f".{prefix}-bg-{index} {{ background-color: {color.hex}; }}")
        lines.append(f".{prefix}-text-{index} {{ color: {color.hex}; }}")
        lines.append(f".{prefix}-border-{index} {{ border-color: {color.hex}; }}")
        lines.append("")

    return "\n".join(lines) + "\n"


def export_collection_json(collection: GradientCollection) -> str:
    return json.dumps(collection.to_dict(), indent=2, ensure_ascii=False)


def export_collection_css(collection: GradientCollection, prefix: str = "gradient") -> str:
    lines = [
        f"/* Gradient Collection: {collection.name} */",
        f"/* Generated: {collection.created_at} */",
        f"/* Colors: {collection.color_count}, Gradients: {collection.gradient_count} */",
        "",
        ":root {",
    ]
    lines.extend(f"  --{prefix}-{g.id}: {g.css};" for g in collection.gradients)
    lines.extend(["}", ""])

    for gradient in collection.gradients:
        lines.extend(
            [
                f".{prefix}-{gradient.id} {{",
                f"  background: {gradient.css};",
                "}",
                "",
            ]
        )
    return "\n".join(lines) + "\n"


def export_collection_scss(collection: GradientCollection, prefix: str = "gradient") -> str:
    """A ``$gradients`` SCSS map plus a loop emitting one class per entry."""
    entries = ",\n".join(f'  "{g.id}": {g.css}' for g in collection.gradients)
    return (
        f"// Gradient Collection: {collection.name}\n"
        f"// Generated: {collection.created_at}\n\n"
        f"$gradients: (\n{entries}\n);\n\n"
        "@each $name, $gradient in $gradients {\n"
        f"  .{prefix}-#{{$name}} {{\n"
        "    background: $gradient;\n"
        "  }\n"
        "}\n"
    )


def export_gradients_css(gradients: list[Gradient]) -> str:
    css = "/* Automatically generated gradients */\n\n"
    for gradient in gradients:
        css += f".gradient-{gradient.id} {{\n  background: {gradient.css};\n}}\n\n"
    return css


def gradient_css_snippet(gradient: Gradient, class_name: str = "custom-gradient") -> str:
    """One class using the gradient, with a solid first-stop fallback."""
    return (
        f".{class_name} {{\n"
        f"  background: {gradient.stops[0].color.hex};\n"
        f"  background: {gradient.css};\n"
        "}"
    )


def design_examples(gradient: Gradient) -> list[DesignExample]:
    """Ready-to-use CSS showing the gradient on common page elements."""
    css = gradient.css
    return [
        DesignExample(
            "Background",
            "Full page or section background",
            f".hero-section {{\n  background: {css};\n  min-height: 100vh;\n"
            "  display: flex;\n  align-items: center;\n  justify-content: center;\n}",
            '<div class="hero-section"><h1>Welcome</h1></div>',
            ("hero sections", "landing pages", "full-screen backgrounds"),
        ),
        DesignExample(
            "Button",
            "Gradient button with hover effects",
            f".gradient-button {{\n  background: {css};\n  border: none;\n"
            "  padding: 12px 24px;\n  border-radius: 8px;\n  color: white;\n"
            "  font-weight: 600;\n  cursor: pointer;\n"
            "  transition: transform 0.2s, box-shadow 0.2s;\n}\n\n"
            ".gradient-button:hover {\n  transform: translateY(-2px);\n"
            "  box-shadow: 0 8px 25px rgba(0,0,0,0.15);\n}",
            '<button class="gradient-button">Click Me</button>',
            ("call-to-action buttons", "primary buttons", "interactive elements"),
        ),
        DesignExample(
            "Card",
            "Card with gradient background",
            f".gradient-card {{\n  background: {css};\n  border-radius: 12px;\n"
            "  padding: 24px;\n  color: white;\n"
            "  box-shadow: 0 4px 20px rgba(0,0,0,0.1);\n}",
            '<div class="gradient-card"><h3>Card Title</h3><p>Card content</p></div>',
            ("product cards", "feature highlights", "content sections"),
        ),
        DesignExample(
            "Text",
            "Gradient text effect",
            f".gradient-text {{\n  background: {css};\n"
            "  -webkit-background-clip: text;\n  background-clip: text;\n"
            "  -webkit-text-fill-color: transparent;\n  font-size: 3rem;\n"
            "  font-weight: bold;\n}",
            '<h1 class="gradient-text">Gradient Text</h1>',
            ("headings", "logos", "decorative text"),
        ),
        DesignExample(
            "Progress Bar",
            "Progress bar with gradient fill",
            ".progress-container {\n  width: 100%;\n  height: 8px;\n"
            "  background: #f0f0f0;\n  border-radius: 4px;\n  overflow: hidden;\n}\n\n"
            f".progress-bar {{\n  height: 100%;\n  background: {css};\n"
            "  border-radius: 4px;\n  transition: width 0.3s ease;\n}",
            '<div class="progress-container">'
            '<div class="progress-bar" style="width: 75%"></div></div>',
            ("loading indicators", "skill bars", "completion status"),
        ),
    ]


def svg_preview(gradient: Gradient, width: int = 200, height: int = 100) -> str:
    """A ``data:`` URI of an SVG rectangle filled with the stop list.

    The SVG always draws a horizontal linear gradient; conic positions are
    mapped from degrees to percentages.
    """
    scale = 100 / 360 if gradient.type == "conic" else 1.0
    stops = "".join(
        f'<stop offset="{stop.position * scale:g}%" '
        f'style="stop-color:{stop.color.hex};'
        f'stop-opacity:{1 if stop.opacity is None else stop.opacity:g}" />'
        for stop in gradient.stops
    )
    svg = (
        f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">'
        '<defs><linearGradient id="grad" x1="0%" y1="0%" x2="100%" y2="0%">'
        f"{stops}</linearGradient></defs>"
        '<rect width="100%" height="100%" fill="url(#grad)" /></svg>'
    )
    return f"data:image/svg+xml,{quote(svg)}"
