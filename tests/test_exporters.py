"""Tests for huekit.exporters module."""

import json
from urllib.parse import unquote

import pytest

from huekit.analysis import analyze_pixels
from huekit.colors import Color
from huekit.exporters import (
    design_examples,
    export_analysis_css,
    export_analysis_json,
    export_collection_css,
    export_collection_json,
    export_collection_scss,
    export_gradients_css,
    gradient_css_snippet,
    svg_preview,
)
from huekit.gradients import (
    Gradient,
    GradientOptions,
    GradientStop,
    generate_gradient_collection,
    generate_gradients,
)

RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)


@pytest.fixture
def collection():
    return generate_gradient_collection(
        [RED, BLUE], GradientOptions(include_variations=False, name="Sunset")
    )


class TestAnalysisExports:
    """Test exports of analysis results."""

    def test_json(self, red_blue_buffer):
        """Test that the JSON export parses back."""
        data = json.loads(export_analysis_json(analyze_pixels(red_blue_buffer)))
        assert [c["hex"] for c in data["dominant_colors"]] == ["#FF0000", "#0000FF"]

    def test_css_variables(self, red_blue_buffer):
        """Test the custom properties."""
        css = export_analysis_css(analyze_pixels(red_blue_buffer))
        assert "  --extracted-color-1: #FF0000;" in css
        assert "  --extracted-color-2: #0000FF;" in css
        assert "  --extracted-average: #800080;" in css

    def test_css_classes(self, red_blue_buffer):
        """Test the utility classes."""
        css = export_analysis_css(analyze_pixels(red_blue_buffer), prefix="img")
        assert ".img-bg-2 { background-color: #0000FF; }" in css
        assert ".img-text-1 { color: #FF0000; }" in css
        assert ".img-border-1 { border-color: #FF0000; }" in css

    def test_css_without_data(self, transparent_buffer):
        """Test that an empty analysis exports no variables."""
        css = export_analysis_css(analyze_pixels(transparent_buffer))
        assert "--extracted-" not in css
        assert ":root {" in css


class TestCollectionExports:
    """Test exports of gradient collections."""

    def test_json(self, collection):
        """Test that the JSON export parses back."""
        data = json.loads(export_collection_json(collection))
        assert data["name"] == "Sunset"
        assert data["metadata"]["gradient_count"] == collection.gradient_count
        assert data["gradients"][0]["css"] == collection.gradients[0].css

    def test_css(self, collection):
        """Test variables and classes."""
        css = export_collection_css(collection)
        assert "/* Gradient Collection: Sunset */" in css
        assert (
            "  --gradient-basic-0: linear-gradient(to right, #FF0000 0%, #0000FF 100%);"
            in css
        )
        assert ".gradient-striped {" in css

    def test_css_prefix(self, collection):
        """Test a custom class prefix."""
        assert ".bg-basic-0 {" in export_collection_css(collection, prefix="bg")

    def test_scss(self, collection):
        """Test the SCSS map and loop."""
        scss = export_collection_scss(collection)
        assert "$gradients: (" in scss
        assert '  "basic-0": linear-gradient(to right, #FF0000 0%, #0000FF 100%)' in scss
        assert ".gradient-#{$name} {" in scss

    def test_gradients_css(self):
        """Test the class list for the analysis gradient set."""
        css = export_gradients_css(generate_gradients([RED, GREEN, BLUE]))
        assert css.startswith("/* Automatically generated gradients */")
        assert ".gradient-conic {" in css
        assert css.count("background:") == 6


class TestGradientSnippets:
    """Test single-gradient renderings."""

    @pytest.fixture
    def gradient(self):
        return Gradient(
            "g", "G", "linear", "to right", (GradientStop(RED, 0), GradientStop(BLUE, 100))
        )

    def test_css_snippet_has_fallback(self, gradient):
        """Test that the solid fallback precedes the gradient."""
        lines = gradient_css_snippet(gradient).splitlines()
        assert lines == [
            ".custom-gradient {",
            "  background: #FF0000;",
            f"  background: {gradient.css};",
            "}",
        ]

    def test_design_examples(self, gradient):
        """Test the example elements."""
        examples = design_examples(gradient)
        assert [e.element for e in examples] == [
            "Background",
            "Button",
            "Card",
            "Text",
            "Progress Bar",
        ]
        assert all(gradient.css in e.css for e in examples)

    def test_svg_preview(self, gradient):
        """Test the SVG data URI."""
        uri = svg_preview(gradient)
        assert uri.startswith("data:image/svg+xml,")
        svg = unquote(uri.split(",", 1)[1])
        assert 'offset="0%"' in svg
        assert 'offset="100%"' in svg
        assert "stop-color:#0000FF" in svg

    def test_svg_preview_conic(self):
        """Test that conic degrees become percentages."""
        conic = Gradient(
            "c",
            "C",
            "conic",
            "from 0deg at center",
            (GradientStop(RED, 0), GradientStop(GREEN, 120), GradientStop(BLUE, 240)),
        )
        svg = unquote(svg_preview(conic).split(",", 1)[1])
        assert 'offset="33.3333%"' in svg
        assert 'offset="66.6667%"' in svg

    def test_svg_preview_opacity(self):
        """Test that stop opacity is carried over."""
        faded = Gradient(
            "f",
            "F",
            "linear",
            "to bottom",
            (GradientStop(RED, 0, 1.0), GradientStop(RED, 50, 0.5)),
        )
        svg = unquote(svg_preview(faded).split(",", 1)[1])
        assert "stop-opacity:0.5" in svg
