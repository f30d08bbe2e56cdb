"""Tests for huekit.clustering module."""

import numpy as np
import pytest

from huekit.clustering import (
    ClusteringResult,
    PixelBuffer,
    balanced_palette,
    cluster_pixels,
)
from huekit.colors import AnalyzedColor, Color

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
NEAR_RED = (250, 5, 5, 255)


class TestPixelBuffer:
    """Test the PixelBuffer type."""

    def test_length_must_match_dimensions(self):
        """Test that the byte count is checked against width and height."""
        with pytest.raises(ValueError, match="expected 16 bytes"):
            PixelBuffer(bytes(12), 2, 2)

    def test_negative_dimensions(self):
        """Test that negative dimensions are rejected."""
        with pytest.raises(ValueError):
            PixelBuffer(b"", -1, 0)

    def test_from_array(self):
        """Test building a buffer from an (H, W, 4) array."""
        buffer = PixelBuffer.from_array(np.zeros((3, 5, 4), dtype=np.uint8))
        assert (buffer.width, buffer.height) == (5, 3)
        assert buffer.pixel_count == 15
        assert buffer.rgba().shape == (15, 4)

    def test_from_array_wrong_shape(self):
        """Test that an RGB array is rejected."""
        with pytest.raises(ValueError, match="expected an"):
            PixelBuffer.from_array(np.zeros((2, 2, 3), dtype=np.uint8))

    def test_rgba_is_row_major(self, make_buffer):
        """Test that pixels come out in scan order."""
        buffer = make_buffer([[RED, BLUE], [NEAR_RED, RED]])
        assert [tuple(p) for p in buffer.rgba()] == [RED, BLUE, NEAR_RED, RED]


class TestClusterPixels:
    """Test the cluster_pixels function."""

    def test_two_color_image(self, red_blue_buffer):
        """Test a 2x2 image with two rows of pure color."""
        result = cluster_pixels(red_blue_buffer, threshold=10)

        assert [(c.hex, c.count, c.percentage) for c in result.colors] == [
            ("#FF0000", 2, 50.0),
            ("#0000FF", 2, 50.0),
        ]
        assert [c.name for c in result.colors] == ["Red", "Blue"]
        assert result.valid_pixel_count == 4
        # 127.5 rounds half up.
        assert result.average_color.hex == "#800080"
        assert result.has_data

    def test_no_valid_pixels(self, transparent_buffer):
        """Test that fully transparent input yields an empty result."""
        result = cluster_pixels(transparent_buffer)
        assert result == ClusteringResult(colors=(), valid_pixel_count=0, average_color=None)
        assert not result.has_data

    def test_empty_input(self):
        """Test that an empty pixel sequence is not an error."""
        result = cluster_pixels(b"")
        assert result.colors == ()
        assert result.average_color is None

    def test_alpha_cutoff_is_inclusive(self, make_buffer):
        """Test that alpha equal to the cutoff counts as valid."""
        buffer = make_buffer([[(10, 20, 30, 128), (0, 0, 0, 127)]])
        result = cluster_pixels(buffer)
        assert result.valid_pixel_count == 1
        assert result.colors[0].hex == "#0A141E"

    def test_custom_alpha_cutoff(self, make_buffer):
        """Test lowering the alpha cutoff."""
        buffer = make_buffer([[(10, 20, 30, 1), (0, 0, 0, 0)]])
        assert cluster_pixels(buffer, alpha_cutoff=1).valid_pixel_count == 1

    def test_representative_is_first_seen(self, make_buffer):
        """Test that the first color of a cluster represents it."""
        buffer = make_buffer([[NEAR_RED, RED, RED]])
        result = cluster_pixels(buffer, threshold=25)
        assert len(result.colors) == 1
        assert result.colors[0].hex == "#FA0505"
        assert result.colors[0].count == 3

    def test_sorted_by_count(self, make_buffer):
        """Test that larger clusters come first."""
        buffer = make_buffer([[BLUE, RED, RED]])
        result = cluster_pixels(buffer, threshold=10)
        assert [c.hex for c in result.colors] == ["#FF0000", "#0000FF"]

    def test_ties_keep_first_seen_order(self, make_buffer):
        """Test that equal counts keep scan order."""
        result = cluster_pixels(make_buffer([[BLUE, RED]]), threshold=10)
        assert [c.hex for c in result.colors] == ["#0000FF", "#FF0000"]

    def test_merge_is_strictly_below_threshold(self, make_buffer):
        """Test that a color exactly at the threshold starts a new cluster."""
        buffer = make_buffer([[(0, 0, 0, 255), (10, 0, 0, 255)]])
        assert len(cluster_pixels(buffer, threshold=10).colors) == 2
        assert len(cluster_pixels(buffer, threshold=10.01).colors) == 1

    def test_first_matching_cluster_wins(self, make_buffer):
        """Test that a color joins the earliest cluster in range, not the closest."""
        # (20, 0, 0) is within 25 of both representatives but closer to (30, 0, 0).
        buffer = make_buffer([[(0, 0, 0, 255), (30, 0, 0, 255), (20, 0, 0, 255)]])
        result = cluster_pixels(buffer, threshold=25)
        counts = {c.hex: c.count for c in result.colors}
        assert counts == {"#000000": 2, "#1E0000": 1}

    def test_zero_threshold_keeps_exact_colors(self, make_buffer):
        """Test that threshold 0 never merges."""
        buffer = make_buffer([[RED, NEAR_RED, RED]])
        assert len(cluster_pixels(buffer, threshold=0).colors) == 2

    def test_negative_threshold_raises(self, red_blue_buffer):
        """Test that a negative threshold is rejected."""
        with pytest.raises(ValueError, match="threshold"):
            cluster_pixels(red_blue_buffer, threshold=-1)

    def test_accepts_bytes_and_lists(self):
        """Test raw bytes and nested lists as input."""
        from_bytes = cluster_pixels(bytes(RED + BLUE), threshold=10)
        from_list = cluster_pixels([list(RED), list(BLUE)], threshold=10)
        assert from_bytes == from_list

    def test_bad_length_raises(self):
        """Test that data not made of whole RGBA pixels is rejected."""
        with pytest.raises(ValueError, match="multiple of 4"):
            cluster_pixels(bytes(6))

    def test_out_of_range_values_raise(self):
        """Test that channel values above 255 are rejected."""
        with pytest.raises(ValueError, match=r"\[0, 255\]"):
            cluster_pixels([[300, 0, 0, 255]])

    def test_counts_are_conserved(self):
        """Test that cluster counts add up to the valid pixel count."""
        rng = np.random.default_rng(3)
        pixels = rng.integers(0, 256, size=(500, 4), dtype=np.uint8)
        result = cluster_pixels(pixels)
        assert sum(c.count for c in result.colors) == result.valid_pixel_count
        assert sum(c.percentage for c in result.colors) == pytest.approx(100.0)

    def test_gray_ramp_threshold_monotonicity(self):
        """Test that raising the threshold never adds clusters on a gray ramp."""
        ramp = [(level, level, level, 255) for level in range(0, 256, 5)]
        counts = [
            len(cluster_pixels(ramp, threshold=t).colors) for t in (0, 5, 10, 25, 50, 100)
        ]
        assert counts == sorted(counts, reverse=True)
        assert counts[0] == len(ramp)

    def test_dominant(self, make_buffer):
        """Test taking the most frequent clusters."""
        result = cluster_pixels(make_buffer([[RED, RED, BLUE]]), threshold=10)
        assert [c.hex for c in result.dominant(1)] == ["#FF0000"]
        assert len(result.dominant()) == 2


class TestBalancedPalette:
    """Test the balanced_palette function."""

    @staticmethod
    def analyzed(*rgb):
        return AnalyzedColor(Color(*rgb), 1, 10.0)

    def test_skips_similar_colors(self):
        """Test that colors near a kept one are dropped."""
        colors = [self.analyzed(255, 0, 0), self.analyzed(230, 10, 10), self.analyzed(0, 0, 255)]
        assert [c.hex for c in balanced_palette(colors)] == ["#FF0000", "#0000FF"]

    def test_min_distance_is_inclusive(self):
        """Test that a color exactly min_distance away is kept."""
        colors = [self.analyzed(0, 0, 0), self.analyzed(50, 0, 0)]
        assert len(balanced_palette(colors, min_distance=50)) == 2

    def test_max_size(self):
        """Test that the palette is capped."""
        colors = [self.analyzed(level, level, level) for level in range(0, 256, 51)]
        assert len(balanced_palette(colors, min_distance=10, max_size=3)) == 3

    def test_result_method(self, make_buffer):
        """Test ClusteringResult.balanced on real clusters."""
        result = cluster_pixels(make_buffer([[RED, NEAR_RED, BLUE]]), threshold=0)
        assert [c.hex for c in result.balanced()] == ["#FF0000", "#0000FF"]
