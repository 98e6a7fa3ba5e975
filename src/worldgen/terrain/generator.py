"""Terrain generator running the full sample/erode/classify/assemble pass."""

import logging
import time
from typing import Any

from worldgen.terrain.biomes import classify_grid
from worldgen.terrain.erosion import FalloffPolicy, apply_erosion
from worldgen.terrain.grid import worker_threads
from worldgen.terrain.raster import assemble
from worldgen.terrain.sampler import sample_grid
from worldgen.terrain.types import GenerationConfig, TerrainRaster

logger = logging.getLogger(__name__)


class TerrainGenerator:
    """Generates a biome-colored raster for one GenerationConfig."""

    def __init__(
        self,
        config: GenerationConfig,
        policy: FalloffPolicy | str = FalloffPolicy.SQUARE,
        workers: int | None = None,
    ) -> None:
        config.validate()
        self.config = config
        self.policy = FalloffPolicy.parse(policy)
        self.workers = workers

    def generate(self) -> TerrainRaster:
        """Run one generation pass.

        Returns:
            TerrainRaster with eroded heights, colors and the RGB8 buffer
        """
        cfg = self.config
        logger.info(
            "Generating %dx%d terrain (seed=%d, octaves=%d, falloff=%s)",
            cfg.width, cfg.height, cfg.seed, cfg.octaves, self.policy.value,
        )

        t0 = time.perf_counter()
        heights = sample_grid(cfg, workers=self.workers)
        t_sample = time.perf_counter()

        with worker_threads(self.workers):
            apply_erosion(heights, self.policy)
        t_erode = time.perf_counter()

        colors = classify_grid(heights)
        t_classify = time.perf_counter()

        pixels = assemble(colors)
        t_assemble = time.perf_counter()

        logger.info(
            "[Terrain] Phase timings: sample=%.1fms erode=%.1fms classify=%.1fms "
            "assemble=%.1fms total=%.1fms",
            (t_sample - t0) * 1000,
            (t_erode - t_sample) * 1000,
            (t_classify - t_erode) * 1000,
            (t_assemble - t_classify) * 1000,
            (t_assemble - t0) * 1000,
        )

        return TerrainRaster(
            width=cfg.width,
            height=cfg.height,
            heights=heights,
            colors=colors,
            pixels=pixels,
        )

    def render_png(self) -> bytes:
        """Run one pass and encode the result as PNG."""
        return self.generate().to_png()


def generate_terrain(
    config_overrides: dict[str, Any] | None = None,
    policy: FalloffPolicy | str = FalloffPolicy.SQUARE,
    workers: int | None = None,
) -> TerrainRaster:
    """Convenience function to generate terrain from default parameters.

    Args:
        config_overrides: Optional GenerationConfig field overrides
        policy: Falloff policy
        workers: Thread count for sampling

    Returns:
        TerrainRaster for the resulting config
    """
    config = GenerationConfig(**(config_overrides or {}))
    return TerrainGenerator(config, policy=policy, workers=workers).generate()
