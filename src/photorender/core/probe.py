"""Image metrics probe: read pixel dimensions from image headers."""

from __future__ import annotations

import logging
import math
import warnings
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from PIL import Image

from .contracts import ImageDimensions

logger = logging.getLogger(__name__)


@contextmanager
def _header_only() -> Iterator[None]:
    """Lift Pillow's pixel limit; it guards decoding, which the probe never does."""
    limit = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", Image.DecompressionBombWarning)
            yield
    finally:
        Image.MAX_IMAGE_PIXELS = limit


def as_pixels(value: Any) -> float | None:
    """Coerce a metadata value (int, float, rational, numeric string) to pixels."""
    if value is None or isinstance(value, bool):
        return None
    try:
        pixels = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(pixels) or pixels <= 0:
        return None
    return pixels


def probe_dimensions(path: Path) -> ImageDimensions | None:
    """Return the image's pixel size, or None if it cannot be determined.

    ``Image.open`` only parses the header; pixel data is never decoded.
    Unreadable files are a data point for validation, so nothing is raised.
    """
    try:
        with _header_only(), Image.open(path) as img:
            width, height = img.size
    except (OSError, ValueError, SyntaxError) as exc:
        logger.debug(f"Cannot probe {path}: {exc}")
        return None

    w = as_pixels(width)
    h = as_pixels(height)
    if w is None or h is None:
        return None
    return ImageDimensions(width=w, height=h)
