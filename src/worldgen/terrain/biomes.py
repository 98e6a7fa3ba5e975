"""Biome classification of heights via an ordered threshold ladder.

The ladder is evaluated top-down and the first matching band wins.  Bands
are plain data so the exact boundaries can be reviewed and tested:

  1. h >  0.7             snow
  2. 0.6  < h <= 0.7      high rock
  3. 0.5  < h <= 0.6      rock
  4. 0.25 < h <= 0.5      forest
  5. 0.0  < h <= 0.25     grassland
  6. -0.05 < h <= 0.0     shoreline
  7. h >= -0.15           shallow water
  8. anything else        deep water

Band 7 only has a lower bound, so it overlaps band 6; first-match order
keeps (-0.05, 0.0] on the shoreline.  Non-finite heights never match a
band and always land in deep water.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from worldgen.terrain.types import RGB, ColorGrid, HeightGrid

GRASS_GREEN: RGB = (98, 125, 75)
FOREST_GREEN: RGB = (34, 139, 34)
SAND: RGB = (194, 178, 128)
GREY: RGB = (127, 131, 134)
DARK_GREY: RGB = (169, 169, 169)
WHITE: RGB = (255, 255, 255)
NAVY_BLUE: RGB = (0, 0, 128)
LIGHT_BLUE: RGB = (173, 216, 230)


@dataclass(frozen=True)
class BiomeBand:
    """One rung of the ladder: a height interval and its color.

    Attributes:
        name: Biome label.
        color: RGB triple.
        lower: Lower bound, or None for unbounded.
        lower_inclusive: Whether ``lower`` itself matches.
        upper: Inclusive upper bound, or None for unbounded.
    """

    name: str
    color: RGB
    lower: float | None = None
    lower_inclusive: bool = False
    upper: float | None = None

    def matches(self, height: float) -> bool:
        if self.upper is not None and not height <= self.upper:
            return False
        if self.lower is None:
            return True
        if self.lower_inclusive:
            return height >= self.lower
        return height > self.lower

    def mask(self, heights: NDArray[np.float64]) -> NDArray[np.bool_]:
        """Vectorized :meth:`matches`."""
        result = np.ones(heights.shape, dtype=bool)
        if self.upper is not None:
            result &= heights <= self.upper
        if self.lower is not None:
            result &= heights >= self.lower if self.lower_inclusive else heights > self.lower
        return result


THRESHOLD_LADDER: tuple[BiomeBand, ...] = (
    BiomeBand("snow", WHITE, lower=0.7),
    BiomeBand("high_rock", DARK_GREY, lower=0.6, upper=0.7),
    BiomeBand("rock", GREY, lower=0.5, upper=0.6),
    BiomeBand("forest", FOREST_GREEN, lower=0.25, upper=0.5),
    BiomeBand("grassland", GRASS_GREEN, lower=0.0, upper=0.25),
    BiomeBand("shoreline", SAND, lower=-0.05, upper=0.0),
    BiomeBand("shallow_water", LIGHT_BLUE, lower=-0.15, lower_inclusive=True),
)

DEEP_WATER = BiomeBand("deep_water", NAVY_BLUE)

# Ladder colors followed by the fallback, indexed by band position
PALETTE: NDArray[np.uint8] = np.array(
    [band.color for band in THRESHOLD_LADDER] + [DEEP_WATER.color], dtype=np.uint8
)


def classify_band(height: float) -> BiomeBand:
    """Return the first band of the ladder that *height* satisfies."""
    if not math.isfinite(height):
        return DEEP_WATER
    for band in THRESHOLD_LADDER:
        if band.matches(height):
            return band
    return DEEP_WATER


def classify(height: float) -> RGB:
    """Map a single height to its biome color."""
    return classify_band(height).color


def classify_grid(heights: HeightGrid) -> ColorGrid:
    """Map every cell of *heights* to its biome color.

    Args:
        heights: Heightfield of any shape

    Returns:
        uint8 array of shape ``heights.shape + (3,)``
    """
    heights = np.asarray(heights, dtype=np.float64)
    finite = np.isfinite(heights)
    conditions = [band.mask(heights) & finite for band in THRESHOLD_LADDER]
    # np.select picks the first true condition, same as the scalar ladder
    index = np.select(conditions, list(range(len(THRESHOLD_LADDER))), default=len(THRESHOLD_LADDER))
    return PALETTE[index]
