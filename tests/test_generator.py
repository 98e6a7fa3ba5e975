"""End-to-end tests for the generation pass."""

import io

import numpy as np
import pytest
from PIL import Image

from worldgen.terrain import (
    FalloffPolicy,
    GenerationConfig,
    TerrainGenerator,
    TerrainRaster,
    classify_grid,
    falloff_map,
    generate_terrain,
    sample_grid,
)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class TestTerrainGenerator:
    """Tests for the TerrainGenerator class."""

    def test_returns_terrain_raster(self, small_config):
        raster = TerrainGenerator(small_config).generate()

        assert isinstance(raster, TerrainRaster)
        assert (raster.width, raster.height) == (16, 16)

    def test_cardinality_preserved(self, small_config):
        """Heights, colors and pixels all describe width * height cells."""
        raster = TerrainGenerator(small_config).generate()

        assert raster.heights.size == small_config.cell_count
        assert raster.colors.shape == (16, 16, 3)
        assert len(raster.pixels) == 3 * small_config.cell_count

    def test_heights_are_eroded_samples(self, small_config):
        raster = TerrainGenerator(small_config).generate()
        expected = sample_grid(small_config) - falloff_map(16, 16, FalloffPolicy.SQUARE)

        assert np.allclose(raster.heights, expected)

    def test_colors_classify_heights(self, small_config):
        raster = TerrainGenerator(small_config).generate()

        assert np.array_equal(raster.colors, classify_grid(raster.heights))
        assert raster.pixels == raster.colors.tobytes()

    def test_circular_policy(self, small_config):
        raster = TerrainGenerator(small_config, policy="circular").generate()
        expected = sample_grid(small_config) - falloff_map(16, 16, FalloffPolicy.CIRCULAR)

        assert np.allclose(raster.heights, expected)

    def test_worker_count_does_not_change_output(self, small_config):
        r1 = TerrainGenerator(small_config, workers=1).generate()
        r2 = TerrainGenerator(small_config, workers=4).generate()

        assert r1.pixels == r2.pixels

    def test_unknown_policy(self, small_config):
        with pytest.raises(ValueError):
            TerrainGenerator(small_config, policy="hexagonal")

    def test_render_png(self, small_config):
        png = TerrainGenerator(small_config).render_png()

        assert png.startswith(PNG_SIGNATURE)
        image = Image.open(io.BytesIO(png))
        assert image.size == (16, 16)

    def test_island_edges_are_water(self):
        """The square falloff pushes the top row deep below sea level."""
        config = GenerationConfig(width=24, height=24, octaves=2, seed=3)
        raster = TerrainGenerator(config).generate()

        # Raw noise is >= -1 and the top row loses 1.0, so at most ~0.0 remains
        assert raster.heights[0].max() <= 0.0


class TestDeterminism:
    """Small deterministic end-to-end case."""

    def test_four_by_four_byte_identical(self, tiny_config):
        r1 = TerrainGenerator(tiny_config).generate()
        r2 = TerrainGenerator(GenerationConfig(**vars(tiny_config))).generate()

        assert len(r1.pixels) == 48
        assert r1.pixels == r2.pixels

    def test_generate_terrain_matches_generator(self):
        overrides = {"width": 4, "height": 4, "octaves": 1, "seed": 0, "domain": (0.0, 1.0, 0.0, 1.0)}
        raster = generate_terrain(overrides)

        assert raster.pixels == TerrainGenerator(GenerationConfig(**overrides)).generate().pixels

    def test_config_overrides_applied(self):
        raster = generate_terrain({"width": 6, "height": 3, "octaves": 2})

        assert raster.heights.shape == (3, 6)
        assert len(raster.pixels) == 54
