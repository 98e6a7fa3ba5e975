"""Tests for heightfield sampling and numba thread control."""

import numba
import numpy as np
import pytest

from worldgen.terrain import GenerationConfig, NoiseField, sample_grid
from worldgen.terrain.grid import default_workers, worker_threads
from worldgen.terrain.sampler import world_axes


class TestWorkerThreads:
    """Tests for the worker_threads context manager."""

    def test_sets_and_restores_thread_count(self):
        before = numba.get_num_threads()

        with worker_threads(1) as count:
            assert count == 1
            assert numba.get_num_threads() == 1

        assert numba.get_num_threads() == before

    def test_none_keeps_current_count(self):
        before = numba.get_num_threads()

        with worker_threads(None) as count:
            assert count == before
            assert numba.get_num_threads() == before

    def test_clamps_to_launched_threads(self):
        with worker_threads(default_workers() + 16) as count:
            assert count == default_workers()

    def test_zero_clamps_to_one(self):
        with worker_threads(0) as count:
            assert count == 1

    def test_restores_after_error(self):
        before = numba.get_num_threads()

        with pytest.raises(RuntimeError, match="boom"):
            with worker_threads(1):
                raise RuntimeError("boom")

        assert numba.get_num_threads() == before


class TestWorldAxes:
    """Tests for grid-to-world coordinate mapping."""

    def test_step_uses_grid_dimension(self):
        """Upper domain edge is never sampled."""
        config = GenerationConfig(width=4, height=2, domain=(0.0, 1.0, -2.0, 2.0))
        xs, ys = world_axes(config)

        assert xs.tolist() == [0.0, 0.25, 0.5, 0.75]
        assert ys.tolist() == [-2.0, 0.0]

    def test_default_domain(self):
        config = GenerationConfig(width=3, height=3)
        xs, ys = world_axes(config)

        assert xs[0] == -5.0
        assert xs[-1] == pytest.approx(5.0)
        assert ys[1] == pytest.approx(0.0)


class TestSampleGrid:
    """Tests for sample_grid."""

    def test_grid_dimensions(self):
        """Grid should hold width * height cells, rows first."""
        config = GenerationConfig(width=6, height=4, octaves=2, seed=1)
        heights = sample_grid(config)

        assert heights.shape == (4, 6)
        assert heights.size == config.cell_count

    def test_row_major_indexing(self):
        """Flat index y * width + x holds the sample at that cell's world coordinate."""
        config = GenerationConfig(width=5, height=3, octaves=2, seed=4, domain=(-1.0, 4.0, 0.0, 3.0))
        noise = NoiseField.from_config(config)
        flat = sample_grid(config).ravel()

        for y in range(config.height):
            for x in range(config.width):
                world_x = -1.0 + x * 5.0 / 5
                world_y = 0.0 + y * 3.0 / 3
                assert flat[y * config.width + x] == pytest.approx(
                    noise.sample(world_x, world_y), abs=1e-12
                )

    def test_deterministic(self, small_config):
        """Same config should produce identical grids."""
        h1 = sample_grid(small_config)
        h2 = sample_grid(small_config)

        assert np.array_equal(h1, h2)

    def test_parallel_matches_sequential(self, small_config):
        sequential = sample_grid(small_config, workers=1)
        threaded = sample_grid(small_config, workers=5)

        assert np.array_equal(sequential, threaded)

    def test_different_seeds_different_terrain(self):
        h1 = sample_grid(GenerationConfig(width=8, height=8, octaves=2, seed=1))
        h2 = sample_grid(GenerationConfig(width=8, height=8, octaves=2, seed=2))

        assert not np.array_equal(h1, h2)

    def test_raw_range(self, small_config):
        heights = sample_grid(small_config)

        assert heights.min() >= -1.0
        assert heights.max() <= 1.0
