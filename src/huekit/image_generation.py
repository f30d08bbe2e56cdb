"""Swatch sheet rendering for huekit.

A sheet is a stack of rows, each an optional label followed by color tiles.
Rows longer than ``columns`` wrap onto further lines under the same label.
Every tile carries its hex code in black or white, whichever contrasts more
with the tile. Layout is computed in pixels and the figure is sized so the
saved PNG is exactly ``width x height`` pixels.
"""

import math
from collections.abc import Sequence

import matplotlib.patches as patches
import matplotlib.pyplot as plt
from loguru import logger

from .colors import Color
from .contrast import contrast_ratio

WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)

DPI = 100
PADDING = 16
# Approximate advance of one label character at LABEL_FONT_SIZE points.
LABEL_CHAR_WIDTH = 7
LABEL_FONT_SIZE = 9
HEX_FONT_SIZE = 7

SwatchRow = tuple[str | None, Sequence[Color]]


def _normalized(color: Color) -> tuple[float, float, float]:
    return (color.r / 255, color.g / 255, color.b / 255)


def readable_text_color(color: Color) -> Color:
    """Black or white, whichever has the higher contrast ratio against ``color``."""
    return WHITE if contrast_ratio(WHITE, color) > contrast_ratio(BLACK, color) else BLACK


def sheet_size(
    rows: Sequence[SwatchRow], columns: int, tile_size: int = 64, gap: int = 8
) -> tuple[int, int, int]:
    """Return ``(width, height, label_width)`` in pixels for a sheet layout."""
    labels = [label for label, _ in rows if label]
    label_width = LABEL_CHAR_WIDTH * max(map(len, labels)) + gap if labels else 0
    lines = sum(math.ceil(len(colors) / columns) for _, colors in rows)
    width = 2 * PADDING + label_width + columns * tile_size + (columns - 1) * gap
    height = 2 * PADDING + lines * tile_size + (lines - 1) * gap
    return width, height, label_width


def create_swatch_sheet(
    rows: Sequence[SwatchRow],
    output_file: str,
    columns: int = 8,
    tile_size: int = 64,
    gap: int = 8,
    show_hex: bool = True,
    background_color: Color = WHITE,
) -> tuple[int, int]:
    """Render labelled rows of swatches to a PNG file.

    Rows without colors are skipped. Returns the image size in pixels.

    Raises:
        ValueError: If ``columns`` is below 1 or no row has any color.
    """
    if columns < 1:
        raise ValueError("columns must be at least 1")
    rows = [(label, list(colors)) for label, colors in rows if colors]
    if not rows:
        raise ValueError("No colors provided")

    width, height, label_width = sheet_size(rows, columns, tile_size, gap)
    caption = _normalized(readable_text_color(background_color))
    step = tile_size + gap

    fig = plt.figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    try:
        ax = fig.add_axes((0, 0, 1, 1))
        ax.set_xlim(0, width)
        # Top-left origin, one data unit per pixel.
        ax.set_ylim(height, 0)
        ax.axis("off")

        line = 0
        for label, colors in rows:
            if label:
                ax.text(
                    PADDING,
                    PADDING + line * step + tile_size / 2,
                    label,
                    ha="left",
                    va="center",
                    fontsize=LABEL_FONT_SIZE,
                    color=caption,
                )
            for i, color in enumerate(colors):
                x = PADDING + label_width + (i % columns) * step
                y = PADDING + (line + i // columns) * step
                ax.add_patch(
                    patches.Rectangle(
                        (x, y), tile_size, tile_size, linewidth=0, facecolor=_normalized(color)
                    )
                )
                if show_hex:
                    ax.text(
                        x + tile_size / 2,
                        y + tile_size / 2,
                        color.hex,
                        ha="center",
                        va="center",
                        fontsize=HEX_FONT_SIZE,
                        color=_normalized(readable_text_color(color)),
                    )
            line += math.ceil(len(colors) / columns)

        fig.savefig(output_file, dpi=DPI, facecolor=_normalized(background_color))
    finally:
        plt.close(fig)

    logger.debug("Wrote {}x{} swatch sheet with {} rows to {}", width, height, len(rows), output_file)
    return width, height


def create_swatch_grid(
    colors: Sequence[Color], columns: int, output_file: str, **kwargs
) -> tuple[int, int]:
    """Render an unlabelled grid of swatches; see ``create_swatch_sheet``."""
    return create_swatch_sheet([(None, colors)], output_file, columns, **kwargs)
