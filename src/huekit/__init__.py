"""huekit - color extraction, palettes, gradients and WCAG contrast"""

__version__ = "0.1.0"

from loguru import logger

from .analysis import AnalysisOptions, ColorAnalysisResult, analyze_image, analyze_pixels
from .clustering import ClusteringResult, PixelBuffer, cluster_pixels
from .color_utils import format_color_output, parse_color, process_color
from .colors import AnalyzedColor, Color, distance, from_hsl, to_hex, to_hsl
from .contrast import (
    ContrastResult,
    classify,
    contrast_ratio,
    relative_luminance,
    suggest_alternatives,
)
from .errors import ColorFormatError, DecodeError, GradientInputError
from .gradients import (
    Gradient,
    GradientCollection,
    GradientOptions,
    GradientStop,
    generate_gradient_collection,
    generate_gradients,
)
from .palettes import Palette, generate_palettes

# The CLI enables logging; library users opt in with logger.enable("huekit").
logger.disable(__name__)

__all__ = [
    "Color",
    "AnalyzedColor",
    "parse_color",
    "process_color",
    "format_color_output",
    "to_hex",
    "to_hsl",
    "from_hsl",
    "distance",
    "PixelBuffer",
    "ClusteringResult",
    "cluster_pixels",
    "Palette",
    "generate_palettes",
    "Gradient",
    "GradientStop",
    "GradientCollection",
    "GradientOptions",
    "generate_gradients",
    "generate_gradient_collection",
    "ContrastResult",
    "relative_luminance",
    "contrast_ratio",
    "classify",
    "suggest_alternatives",
    "AnalysisOptions",
    "ColorAnalysisResult",
    "analyze_pixels",
    "analyze_image",
    "ColorFormatError",
    "GradientInputError",
    "DecodeError",
]
