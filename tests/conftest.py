"""Test configuration and fixtures for huekit tests."""

import numpy as np
import pytest
from PIL import Image

from huekit.clustering import PixelBuffer
from huekit.colors import Color


def rgba_buffer(rows: list[list[tuple[int, int, int, int]]]) -> PixelBuffer:
    """Build a PixelBuffer from rows of RGBA tuples."""
    return PixelBuffer.from_array(np.array(rows, dtype=np.uint8))


@pytest.fixture
def make_buffer():
    """Factory turning rows of RGBA tuples into a PixelBuffer."""
    return rgba_buffer


@pytest.fixture
def primary_colors() -> list[Color]:
    """Red, green and blue."""
    return [Color(255, 0, 0), Color(0, 255, 0), Color(0, 0, 255)]


@pytest.fixture
def red_blue_buffer() -> PixelBuffer:
    """2x2 image: top row red, bottom row blue, fully opaque."""
    return rgba_buffer(
        [
            [(255, 0, 0, 255), (255, 0, 0, 255)],
            [(0, 0, 255, 255), (0, 0, 255, 255)],
        ]
    )


@pytest.fixture
def transparent_buffer() -> PixelBuffer:
    """2x1 image with only transparent pixels."""
    return rgba_buffer([[(255, 0, 0, 0), (0, 255, 0, 127)]])


@pytest.fixture
def color_format_examples() -> list[tuple[str, tuple[int, int, int]]]:
    """Color strings with their expected RGB channels."""
    return [
        ("#FF0000", (255, 0, 0)),
        ("#00ff00", (0, 255, 0)),
        ("0000FF", (0, 0, 255)),
        ("#FFF", (255, 255, 255)),
        ("#000", (0, 0, 0)),
        ("f0a", (255, 0, 170)),
        ("rgb(255, 0, 0)", (255, 0, 0)),
        ("RGB( 0 , 255 , 0 )", (0, 255, 0)),
        ("rgb(128,128,128)", (128, 128, 128)),
    ]


@pytest.fixture
def invalid_color_formats() -> list[str]:
    """Color strings that must be rejected."""
    return [
        "invalid",
        "#GG0000",
        "#FF00",
        "#FF000000",
        "##FF0000",
        "rgb(256, 0, 0)",
        "rgb(-1, 0, 0)",
        "rgb(255, 0)",
        "rgb(255, 0, 0) extra",
        "hsl(180, 50%, 50%)",
        "",
        "   ",
    ]


@pytest.fixture
def image_file(tmp_path) -> str:
    """A 20x10 PNG: left half red, right half blue."""
    array = np.zeros((10, 20, 4), dtype=np.uint8)
    array[:, :10] = (255, 0, 0, 255)
    array[:, 10:] = (0, 0, 255, 255)
    path = tmp_path / "halves.png"
    Image.fromarray(array).save(path)
    return str(path)

