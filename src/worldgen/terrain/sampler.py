"""Heightfield sampling over the configured world-space domain."""

import logging

import numpy as np
from numpy.typing import NDArray

from worldgen.terrain.grid import worker_threads
from worldgen.terrain.noise import NoiseField
from worldgen.terrain.types import GenerationConfig, HeightGrid

logger = logging.getLogger(__name__)


def world_axes(config: GenerationConfig) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """World coordinates of every column and every row.

    The step divides by the cell count rather than ``count - 1``, so the
    upper edge of the domain is never sampled.
    """
    x_min, x_max, y_min, y_max = config.domain
    x_step = (x_max - x_min) / config.width
    y_step = (y_max - y_min) / config.height
    xs = x_min + x_step * np.arange(config.width, dtype=np.float64)
    ys = y_min + y_step * np.arange(config.height, dtype=np.float64)
    return xs, ys


def sample_grid(config: GenerationConfig, workers: int | None = None) -> HeightGrid:
    """Generate the raw heightfield for *config*.

    Args:
        config: Validated generation parameters
        workers: Thread count for the parallel noise kernel

    Returns:
        Array of shape (height, width), row-major, raw noise in about [-1, 1]
    """
    noise = NoiseField.from_config(config)
    xs, ys = world_axes(config)

    with worker_threads(workers):
        heights = noise.sample_array(xs, ys)

    logger.debug(
        "Sampled %dx%d heightfield (seed=%d, octaves=%d)",
        config.width, config.height, config.seed, config.octaves,
    )
    return heights
