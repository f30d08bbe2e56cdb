"""Tests for huekit.palettes module."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from huekit.colors import AnalyzedColor, Color
from huekit.palettes import (
    MONOCHROMATIC_LIGHTNESS,
    analogous,
    complementary,
    dominant_palette,
    generate_palettes,
    inverted_palette,
    monochromatic,
    split_complementary,
    triadic,
)

settings.register_profile("fast", max_examples=20, deadline=5000)
settings.load_profile("fast")

color_strategy = st.builds(
    Color,
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
    st.integers(min_value=0, max_value=255),
)

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


class TestMonochromatic:
    """Test the monochromatic scheme."""

    def test_lightness_ladder(self):
        """Test that the fixed ladder is followed at the base hue."""
        palette = monochromatic(RED)
        assert palette.type == "monochromatic"
        assert len(palette.colors) == len(MONOCHROMATIC_LIGHTNESS)
        for color, lightness in zip(palette.colors, MONOCHROMATIC_LIGHTNESS):
            assert abs(color.hsl.lightness - lightness) <= 1
            assert color.hsl.hue == 0

    def test_achromatic_base(self):
        """Test that a gray base gives grays."""
        palette = monochromatic(Color(128, 128, 128))
        assert all(c.r == c.g == c.b for c in palette.colors)


class TestComplementary:
    """Test the complementary scheme."""

    def test_red(self):
        """Test the base and its complement lead the palette."""
        palette = complementary(RED)
        assert len(palette.colors) == 5
        assert palette.colors[0] == RED
        assert palette.colors[1].hex == "#00FFFF"
        assert palette.colors[2].hsl.hue == 0
        assert palette.colors[3].hsl.hue == 180

    def test_clamps_at_extremes(self):
        """Test that white and black do not push values out of range."""
        for base in (Color(255, 255, 255), Color(0, 0, 0)):
            assert len(complementary(base).colors) == 5


class TestAnalogous:
    """Test the analogous scheme."""

    def test_neighbouring_hues(self):
        """Test the two hues 30 degrees either side of the base."""
        palette = analogous(RED)
        assert palette.colors[0] == RED
        assert palette.colors[1].hsl.hue == 330
        assert palette.colors[2].hsl.hue == 30

    def test_tints(self):
        """Test the lighter and darker variants keep the base hue."""
        palette = analogous(RED)
        assert palette.colors[3].hsl.lightness == 80
        assert palette.colors[4].hsl.lightness == 20


class TestTriadicAndSplit:
    """Test the triadic and split-complementary schemes."""

    def test_triadic_blue(self):
        """Test that blue's triad is red and green."""
        palette = triadic(BLUE)
        assert [c.hex for c in palette.colors] == ["#0000FF", "#FF0000", "#00FF00"]

    def test_split_complementary_red(self):
        """Test the two hues flanking the complement."""
        palette = split_complementary(RED)
        assert palette.type == "split-complementary"
        assert [c.hsl.hue for c in palette.colors[1:]] == [150, 210]


class TestDominantAndInverted:
    """Test palettes built from a ranked color list."""

    def test_dominant_takes_first_five(self):
        """Test that only the top five colors are used."""
        colors = [Color(i * 30, 0, 0) for i in range(7)]
        palette = dominant_palette(colors)
        assert list(palette.colors) == colors[:5]

    def test_dominant_accepts_analyzed_colors(self):
        """Test that analyzed colors are unwrapped."""
        palette = dominant_palette([AnalyzedColor(RED, 5, 100.0)])
        assert palette.colors == (RED,)
        assert palette.colors[0].name == "Red"

    def test_inverted(self):
        """Test the channel-wise inverse."""
        palette = inverted_palette([RED, Color(0, 0, 0)])
        assert [c.hex for c in palette.colors] == ["#00FFFF", "#FFFFFF"]


class TestGeneratePalettes:
    """Test the generate_palettes function."""

    def test_all_schemes(self):
        """Test the palette order for a non-empty ranking."""
        palettes = generate_palettes([RED, BLUE])
        assert [p.id for p in palettes] == [
            "dominant",
            "monochromatic",
            "complementary",
            "analogous",
            "triadic",
            "split-complementary",
        ]

    def test_schemes_use_first_color(self):
        """Test that derived schemes start from the top-ranked color."""
        palettes = generate_palettes([BLUE, RED])
        assert palettes[2].colors[0] == BLUE

    def test_empty(self):
        """Test that an empty ranking gives just an empty dominant palette."""
        palettes = generate_palettes([])
        assert len(palettes) == 1
        assert palettes[0].colors == ()

    def test_to_dict(self):
        """Test the dictionary form."""
        data = generate_palettes([RED])[1].to_dict()
        assert data["type"] == "monochromatic"
        assert len(data["colors"]) == 5
        assert data["colors"][0]["hex"].startswith("#")

    @given(color_strategy)
    def test_every_color_named(self, base):
        """Test that every derived color carries a name."""
        for palette in generate_palettes([base]):
            assert palette.colors
            assert all(c.name for c in palette.colors)

    @given(color_strategy)
    def test_deterministic(self, base):
        """Test that palettes depend only on the base color."""
        assert generate_palettes([base]) == generate_palettes([base])
