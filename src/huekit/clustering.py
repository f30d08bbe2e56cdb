"""Dominant color extraction from decoded pixel data.

The clustering here is a greedy single pass, not k-means:

    1. Pixels are scanned in row-major order. Pixels whose alpha is below the
       cutoff are discarded; every other pixel is "valid".
    2. Exact RGB values are counted, remembering the order in which each value
       was first seen.
    3. Exact colors are visited in that first-seen order. Each one joins the
       first existing cluster whose representative is closer than the merge
       threshold, or else starts a new cluster and becomes its representative.

The representative of a cluster is therefore the first color encountered for
it, not a centroid, and the result depends on scan order. That order is part
of the output definition and is kept stable so results are reproducible.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from loguru import logger

from .colors import AnalyzedColor, Color, distance

__all__ = [
    "PixelBuffer",
    "ClusteringResult",
    "cluster_pixels",
    "balanced_palette",
    "DEFAULT_THRESHOLD",
    "DEFAULT_ALPHA_CUTOFF",
]

DEFAULT_THRESHOLD = 25.0
DEFAULT_ALPHA_CUTOFF = 128
DEFAULT_DOMINANT_COUNT = 10
BALANCED_MIN_DISTANCE = 50.0
BALANCED_MAX_SIZE = 8


@dataclass(frozen=True)
class PixelBuffer:
    """A flat RGBA byte sequence with its image dimensions."""

    data: bytes
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(
                f"image dimensions must be non-negative, got {self.width}x{self.height}"
            )
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise ValueError(
                f"expected {expected} bytes for a {self.width}x{self.height} "
                f"RGBA image, got {len(self.data)}"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from an ``(height, width, 4)`` uint8 array."""
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"expected an (H, W, 4) array, got shape {array.shape}")
        height, width = array.shape[:2]
        return cls(array.astype(np.uint8).tobytes(), width, height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def rgba(self) -> np.ndarray:
        """Pixels as an ``(N, 4)`` uint8 array in row-major order."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(-1, 4)


def _as_rgba(pixels: Any) -> np.ndarray:
    if isinstance(pixels, PixelBuffer):
        return pixels.rgba()
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(bytes(pixels), dtype=np.uint8)
    else:
        flat = np.asarray(pixels)
        if flat.size and (flat.min() < 0 or flat.max() > 255):
            raise ValueError("pixel channel values must be in [0, 255]")
        flat = flat.astype(np.uint8).reshape(-1)
    if flat.size % 4:
        raise ValueError(f"RGBA data length must be a multiple of 4, got {flat.size}")
    return flat.reshape(-1, 4)


class _Cluster:
    """Running pixel count for one representative color."""

    def __init__(self, representative: Color, count: int) -> None:
        self.representative = representative
        self.count = count


@dataclass(frozen=True)
class ClusteringResult:
    """Clusters of one run, sorted by descending pixel count.

    ``average_color`` is ``None`` when there were no valid pixels; callers
    should treat that as "no data" rather than an error.
    """

    colors: tuple[AnalyzedColor, ...]
    valid_pixel_count: int
    average_color: Color | None

    @property
    def has_data(self) -> bool:
        return self.valid_pixel_count > 0

    def dominant(self, count: int = DEFAULT_DOMINANT_COUNT) -> list[AnalyzedColor]:
        """The ``count`` most frequent clusters."""
        return list(self.colors[:count])

    def balanced(
        self,
        min_distance: float = BALANCED_MIN_DISTANCE,
        max_size: int = BALANCED_MAX_SIZE,
    ) -> list[AnalyzedColor]:
        return balanced_palette(self.colors, min_distance, max_size)


def balanced_palette(
    colors: Sequence[AnalyzedColor],
    min_distance: float = BALANCED_MIN_DISTANCE,
    max_size: int = BALANCED_MAX_SIZE,
) -> list[AnalyzedColor]:
    """Pick up to ``max_size`` mutually distinct colors.

    Walks ``colors`` in order and keeps a color only if it is at least
    ``min_distance`` away from every color kept so far.
    """
    palette: list[AnalyzedColor] = []
    for candidate in colors:
        if len(palette) >= max_size:
            break
        if all(distance(candidate.color, kept.color) >= min_distance for kept in palette):
            palette.append(candidate)
    return palette


def cluster_pixels(
    pixels: Any,
    threshold: float = DEFAULT_THRESHOLD,
    alpha_cutoff: int = DEFAULT_ALPHA_CUTOFF,
) -> ClusteringResult:
    """Group the colors of an RGBA pixel sequence.

    Args:
        pixels: A ``PixelBuffer``, raw RGBA bytes, or an array-like of RGBA
            values (flat, ``(N, 4)`` or ``(H, W, 4)``) in row-major order.
        threshold: Exact colors closer than this (Euclidean RGB distance) to a
            cluster representative are merged into that cluster.
        alpha_cutoff: Pixels with alpha below this are ignored.

    Returns:
        ClusteringResult: Clusters sorted by descending count (ties keep
        first-seen order), each with its percentage of valid pixels, plus the
        per-channel mean of all valid pixels rounded half up.

    Example:
        >>> red, blue = [255, 0, 0, 255], [0, 0, 255, 255]
        >>> result = cluster_pixels([red, red, blue, blue], threshold=10)
        >>> [(c.hex, c.percentage) for c in result.colors]
        [('#FF0000', 50.0), ('#0000FF', 50.0)]
    """
    if threshold < 0:
        raise ValueError(f"threshold must be non-negative, got {threshold}")

    rgba = _as_rgba(pixels)
    valid = rgba[rgba[:, 3] >= alpha_cutoff][:, :3]
    valid_count = int(valid.shape[0])

    if valid_count == 0:
        logger.debug("No valid pixels out of {}", rgba.shape[0])
        return ClusteringResult(colors=(), valid_pixel_count=0, average_color=None)

    # Count exact colors, ordered by the position of their first occurrence.
    packed = (
        (valid[:, 0].astype(np.uint32) << 16)
        | (valid[:, 1].astype(np.uint32) << 8)
        | valid[:, 2].astype(np.uint32)
    )
    keys, first_index, counts = np.unique(packed, return_index=True, return_counts=True)
    order = np.argsort(first_index, kind="stable")
    exact = np.stack([(keys >> 16) & 0xFF, (keys >> 8) & 0xFF, keys & 0xFF], axis=1)
    exact = exact[order].astype(np.int32)
    counts = counts[order]

    # Greedy merge: first representative within the threshold wins.
    representatives = np.empty((len(exact), 3), dtype=np.int32)
    clusters: list[_Cluster] = []
    for rgb, count in zip(exact, counts):
        if clusters:
            diff = representatives[: len(clusters)] - rgb
            distances = np.sqrt((diff * diff).sum(axis=1))
            hits = np.flatnonzero(distances < threshold)
            if hits.size:
                clusters[hits[0]].count += int(count)
                continue
        representatives[len(clusters)] = rgb
        clusters.append(_Cluster(Color(*(int(c) for c in rgb)).named(), int(count)))

    clusters.sort(key=lambda c: c.count, reverse=True)
    colors = tuple(
        AnalyzedColor(c.representative, c.count, c.count / valid_count * 100)
        for c in clusters
    )

    sums = valid.sum(axis=0, dtype=np.int64)
    average = Color(*(int(np.floor(s / valid_count + 0.5)) for s in sums)).named()

    logger.debug(
        "Clustered {} valid pixels ({} exact colors) into {} clusters",
        valid_count,
        len(exact),
        len(colors),
    )
    return ClusteringResult(colors, valid_count, average)
