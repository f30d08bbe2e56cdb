"""End-to-end color analysis: pixels in, ranked colors and palettes out.

``analyze_pixels`` is the synchronous core. ``analyze_image`` decodes a file
first; a decode failure is terminal for that request and no partial result is
produced. Every call builds its own accumulators, so concurrent analyses
never share state.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from .clustering import (
    BALANCED_MAX_SIZE,
    BALANCED_MIN_DISTANCE,
    DEFAULT_ALPHA_CUTOFF,
    DEFAULT_THRESHOLD,
    PixelBuffer,
    cluster_pixels,
)
from .colors import AnalyzedColor, Color
from .imaging import load_pixels
from .palettes import Palette, generate_palettes

__all__ = [
    "AnalysisOptions",
    "AnalysisMetadata",
    "ColorAnalysisResult",
    "analyze_pixels",
    "analyze_image",
]


@dataclass(frozen=True)
class AnalysisOptions:
    """Tunables for one analysis run."""

    max_colors: int = 10
    min_percentage: float = 1.0
    grouping_threshold: float = DEFAULT_THRESHOLD
    max_image_size: int = 300
    alpha_cutoff: int = DEFAULT_ALPHA_CUTOFF
    balanced_min_distance: float = BALANCED_MIN_DISTANCE
    balanced_max_size: int = BALANCED_MAX_SIZE

    def __post_init__(self) -> None:
        if self.max_colors < 1:
            raise ValueError(f"max_colors must be at least 1, got {self.max_colors}")
        if not 0 <= self.min_percentage <= 100:
            raise ValueError(
                f"min_percentage must be in [0, 100], got {self.min_percentage}"
            )
        if self.grouping_threshold < 0:
            raise ValueError(
                f"grouping_threshold must be non-negative, got {self.grouping_threshold}"
            )
        if self.max_image_size < 1:
            raise ValueError(
                f"max_image_size must be at least 1, got {self.max_image_size}"
            )
        if not 0 <= self.alpha_cutoff <= 256:
            raise ValueError(f"alpha_cutoff must be in [0, 256], got {self.alpha_cutoff}")
        if self.balanced_min_distance <= self.grouping_threshold:
            raise ValueError(
                "balanced_min_distance must be larger than grouping_threshold"
            )
        if self.balanced_max_size < 1:
            raise ValueError(
                f"balanced_max_size must be at least 1, got {self.balanced_max_size}"
            )


@dataclass(frozen=True)
class AnalysisMetadata:
    width: int
    height: int
    analysis_time: float
    color_count: int
    extracted_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "image_size": {"width": self.width, "height": self.height},
            "analysis_time": self.analysis_time,
            "color_count": self.color_count,
            "extracted_at": self.extracted_at,
        }


@dataclass(frozen=True)
class ColorAnalysisResult:
    """Dominant colors, palettes and metadata of one analysis.

    ``average_color`` is ``None`` when the image had no opaque pixels.
    """

    dominant_colors: tuple[AnalyzedColor, ...]
    total_pixels: int
    average_color: Color | None
    palettes: tuple[Palette, ...]
    balanced_palette: tuple[AnalyzedColor, ...]
    metadata: AnalysisMetadata

    @property
    def has_data(self) -> bool:
        return self.total_pixels > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "dominant_colors": [c.to_dict() for c in self.dominant_colors],
            "total_pixels": self.total_pixels,
            "average_color": (
                self.average_color.to_dict() if self.average_color else None
            ),
            "palettes": [p.to_dict() for p in self.palettes],
            "balanced_palette": [c.to_dict() for c in self.balanced_palette],
            "metadata": self.metadata.to_dict(),
        }


def analyze_pixels(
    pixels: PixelBuffer,
    options: AnalysisOptions | None = None,
    image_size: tuple[int, int] | None = None,
) -> ColorAnalysisResult:
    """Analyze decoded pixels.

    Args:
        pixels: RGBA pixel data.
        options: Analysis tunables; defaults when omitted.
        image_size: Dimensions to report in the metadata when the buffer was
            scaled down from a larger source image.

    Returns:
        ColorAnalysisResult: Clusters at or above ``min_percentage``, at most
        ``max_colors`` of them, ranked by pixel count; the average color;
        palettes derived from the ranking; and a balanced palette drawn from
        all clusters.
    """
    options = options or AnalysisOptions()
    start = time.perf_counter()

    clustering = cluster_pixels(
        pixels, threshold=options.grouping_threshold, alpha_cutoff=options.alpha_cutoff
    )
    dominant = tuple(
        c for c in clustering.colors if c.percentage >= options.min_percentage
    )[: options.max_colors]
    balanced = clustering.balanced(
        options.balanced_min_distance, options.balanced_max_size
    )
    palettes = generate_palettes(dominant)

    elapsed = (time.perf_counter() - start) * 1000
    width, height = image_size or (pixels.width, pixels.height)
    logger.info(
        "Analyzed {}x{} image: {} dominant colors in {:.1f} ms",
        width,
        height,
        len(dominant),
        elapsed,
    )

    return ColorAnalysisResult(
        dominant_colors=dominant,
        total_pixels=clustering.valid_pixel_count,
        average_color=clustering.average_color,
        palettes=tuple(palettes),
        balanced_palette=tuple(balanced),
        metadata=AnalysisMetadata(width, height, elapsed, len(dominant)),
    )


def analyze_image(path: str, options: AnalysisOptions | None = None) -> ColorAnalysisResult:
    """Decode ``path`` and analyze it.

    Raises:
        DecodeError: If the image cannot be decoded.
    """
    options = options or AnalysisOptions()
    decoded = load_pixels(path, options.max_image_size)
    return analyze_pixels(
        decoded.pixels,
        options,
        image_size=(decoded.original_width, decoded.original_height),
    )
