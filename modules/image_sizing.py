"""Derive a photo's print size from an uploaded image."""

from __future__ import annotations

from io import BytesIO
from typing import Tuple

from PIL import Image, UnidentifiedImageError

from core.exceptions import ImageReadError

CM_PER_INCH = 2.54
DEFAULT_DPI = 96


def pixels_to_cm(pixels: int, dpi: float = DEFAULT_DPI) -> float:
    return round(pixels * CM_PER_INCH / dpi, 1)


def photo_size_from_image(
    content: bytes, filename: str = "upload", dpi: float = DEFAULT_DPI
) -> Tuple[float, float]:
    """
    Width and height in centimetres, rounded to one decimal.

    The image's own DPI metadata is ignored: photos are sized as they
    would appear on screen at ``dpi``.

    Raises:
        ImageReadError: if the content is not an image Pillow can open, or
            is larger than Pillow's decompression-bomb limit
    """
    try:
        with Image.open(BytesIO(content)) as img:
            width_px, height_px = img.size
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise ImageReadError(filename, str(exc)) from exc

    return pixels_to_cm(width_px, dpi), pixels_to_cm(height_px, dpi)
