"""Image file policy and decoding into RGBA pixel buffers.

Decoding is delegated to Pillow; this module only enforces the upload policy
(media type allow-list and size cap), scales large images down and hands the
RGBA bytes to the clustering engine as a ``PixelBuffer``.
"""

import mimetypes
import os
from typing import NamedTuple

from loguru import logger
from PIL import Image, UnidentifiedImageError

from .clustering import PixelBuffer
from .errors import DecodeError

__all__ = [
    "ALLOWED_MEDIA_TYPES",
    "MAX_FILE_SIZE",
    "FileValidation",
    "DecodedImage",
    "validate_image_file",
    "validate_image_path",
    "load_pixels",
]

ALLOWED_MEDIA_TYPES: tuple[str, ...] = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/bmp",
)
MAX_FILE_SIZE = 50 * 1024 * 1024


class FileValidation(NamedTuple):
    is_valid: bool
    error: str | None = None


class DecodedImage(NamedTuple):
    """Decoded pixels plus the dimensions of the source image."""

    pixels: PixelBuffer
    original_width: int
    original_height: int


def validate_image_file(
    media_type: str,
    size: int,
    allowed_types: tuple[str, ...] = ALLOWED_MEDIA_TYPES,
    max_size: int = MAX_FILE_SIZE,
) -> FileValidation:
    """Accept or reject a candidate upload by media type and byte size."""
    if media_type not in allowed_types:
        return FileValidation(
            False, "Invalid file format. Please use JPG, PNG, GIF, WebP, or BMP."
        )
    if size > max_size:
        return FileValidation(
            False, f"File too large. Maximum size is {max_size // (1024 * 1024)}MB."
        )
    return FileValidation(True)


def validate_image_path(path: str, max_size: int = MAX_FILE_SIZE) -> FileValidation:
    """``validate_image_file`` for a file on disk, guessing its media type."""
    media_type, _ = mimetypes.guess_type(path)
    try:
        size = os.path.getsize(path)
    except OSError as e:
        return FileValidation(False, f"Cannot read file: {e}")
    return validate_image_file(media_type or "application/octet-stream", size, max_size=max_size)


def load_pixels(path: str, max_size: int = 300) -> DecodedImage:
    """Decode an image file to RGBA, scaled so its longer side is at most ``max_size``.

    Images smaller than ``max_size`` are never scaled up.

    Raises:
        DecodeError: If the file is missing or Pillow cannot read it.
    """
    if max_size < 1:
        raise ValueError(f"max_size must be at least 1, got {max_size}")

    try:
        with Image.open(path) as image:
            width, height = image.size
            rgba = image.convert("RGBA")
    except (FileNotFoundError, UnidentifiedImageError, OSError) as e:
        logger.warning("Failed to decode {}: {}", path, e)
        raise DecodeError(str(path), str(e)) from e

    scale = min(max_size / width, max_size / height, 1.0)
    if scale < 1.0:
        size = (max(1, int(width * scale)), max(1, int(height * scale)))
        rgba = rgba.resize(size, Image.Resampling.BILINEAR)

    logger.debug("Decoded {} ({}x{}) to {}x{}", path, width, height, *rgba.size)
    return DecodedImage(
        PixelBuffer(rgba.tobytes(), rgba.size[0], rgba.size[1]), width, height
    )
