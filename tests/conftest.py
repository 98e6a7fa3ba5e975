"""Pytest configuration and fixtures for terrain tests."""

import pytest

from worldgen.terrain import GenerationConfig


@pytest.fixture
def small_config():
    """Small config so pure-Python noise sampling stays fast."""
    return GenerationConfig(width=16, height=16, octaves=3, seed=7)


@pytest.fixture
def tiny_config():
    """4x4 single-octave config over the unit square."""
    return GenerationConfig(width=4, height=4, octaves=1, seed=0, domain=(0.0, 1.0, 0.0, 1.0))
