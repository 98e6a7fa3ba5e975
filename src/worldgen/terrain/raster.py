"""Flatten color grids into RGB8 buffers and hand them to the PNG encoder."""

import io
import logging

import numpy as np
from PIL import Image

from worldgen.terrain.types import ColorGrid

logger = logging.getLogger(__name__)

BYTES_PER_PIXEL = 3


def assemble(colors: ColorGrid) -> bytes:
    """Flatten a (height, width, 3) color grid into row-major RGB bytes.

    Returns:
        Buffer of exactly ``3 * width * height`` bytes
    """
    if colors.ndim != 3 or colors.shape[2] != BYTES_PER_PIXEL:
        raise ValueError(f"color grid must have shape (height, width, 3), got {colors.shape}")
    return np.ascontiguousarray(colors, dtype=np.uint8).tobytes()


def encode_png(pixels: bytes, width: int, height: int) -> bytes:
    """Wrap an RGB8 buffer in a PNG container.

    Args:
        pixels: Row-major RGB bytes
        width, height: Raster size in pixels

    Returns:
        Encoded PNG bytes
    """
    expected = BYTES_PER_PIXEL * width * height
    if len(pixels) != expected:
        raise ValueError(
            f"pixel buffer has {len(pixels)} bytes, expected {expected} for {width}x{height} RGB"
        )

    image = Image.frombytes("RGB", (width, height), pixels)
    out = io.BytesIO()
    image.save(out, format="PNG")
    data = out.getvalue()
    logger.debug("Encoded %dx%d PNG (%d bytes)", width, height, len(data))
    return data
