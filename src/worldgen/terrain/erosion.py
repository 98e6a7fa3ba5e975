"""Gradient falloff that carves an island silhouette out of a heightfield.

Two policies share one entry point:

  square    flat plateau around the center, linear ramp toward the edges
  circular  unclamped euclidean distance from the center, scaled by height

Both subtract a per-cell term that depends only on the cell position, so
the falloff map is filled by a numba kernel running ``prange`` over rows
and then subtracted in place.
"""

from __future__ import annotations

import logging
import math
from enum import StrEnum

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

from worldgen.terrain.types import HeightGrid

logger = logging.getLogger(__name__)

# Normalized distance below which the square falloff leaves terrain untouched
SQUARE_PLATEAU = 0.5


class FalloffPolicy(StrEnum):
    """Available falloff shapes."""

    SQUARE = "square"
    CIRCULAR = "circular"

    @classmethod
    def parse(cls, name: str | FalloffPolicy) -> FalloffPolicy:
        """Look up a policy by name, case-insensitively."""
        try:
            return cls(str(name).lower())
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown falloff policy {name!r} (expected one of: {valid})") from None


@njit(parallel=True, cache=True)
def _square_falloff_rows(width, height, plateau):
    out = np.empty((height, width), dtype=np.float64)
    for y in prange(height):
        dy = abs(y * 2.0 - height) / height
        for x in range(width):
            dx = abs(x * 2.0 - width) / width
            out[y, x] = min(max(max(dx, dy) - plateau, 0.0), 1.0) * 2.0
    return out


@njit(parallel=True, cache=True)
def _circular_falloff_rows(width, height):
    out = np.empty((height, width), dtype=np.float64)
    center_x = width // 2 - 1
    center_y = height // 2 - 1
    for y in prange(height):
        for x in range(width):
            out[y, x] = math.hypot(float(x - center_x), float(y - center_y)) / height
    return out


def square_falloff(width: int, height: int) -> NDArray[np.float64]:
    """Square falloff map, zero wherever max(dx, dy) <= 0.5."""
    return _square_falloff_rows(width, height, SQUARE_PLATEAU)


def circular_falloff(width: int, height: int) -> NDArray[np.float64]:
    """Circular falloff map: distance to the center cell divided by height."""
    return _circular_falloff_rows(width, height)


_FALLOFFS = {
    FalloffPolicy.SQUARE: square_falloff,
    FalloffPolicy.CIRCULAR: circular_falloff,
}


def falloff_map(
    width: int, height: int, policy: FalloffPolicy | str = FalloffPolicy.SQUARE
) -> NDArray[np.float64]:
    """Return the term *policy* subtracts from each cell of a width x height grid."""
    return _FALLOFFS[FalloffPolicy.parse(policy)](width, height)


def apply_erosion(
    heights: HeightGrid, policy: FalloffPolicy | str = FalloffPolicy.SQUARE
) -> HeightGrid:
    """Subtract the falloff from *heights* in place.

    Args:
        heights: Row-major heightfield of shape (height, width)
        policy: Falloff shape to apply

    Returns:
        The same array, eroded
    """
    policy = FalloffPolicy.parse(policy)
    if heights.ndim != 2:
        raise ValueError(f"heightfield must be 2D, got shape {heights.shape}")

    height, width = heights.shape
    heights -= falloff_map(width, height, policy)
    logger.debug("Applied %s falloff to %dx%d heightfield", policy.value, width, height)
    return heights
