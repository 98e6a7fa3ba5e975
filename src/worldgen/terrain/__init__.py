"""Terrain generation module for procedural island rasters."""

from worldgen.terrain.biomes import THRESHOLD_LADDER, BiomeBand, classify, classify_grid
from worldgen.terrain.erosion import FalloffPolicy, apply_erosion, falloff_map
from worldgen.terrain.generator import TerrainGenerator, generate_terrain
from worldgen.terrain.noise import NoiseField
from worldgen.terrain.raster import assemble, encode_png
from worldgen.terrain.sampler import sample_grid
from worldgen.terrain.types import ConfigurationError, GenerationConfig, TerrainRaster

__all__ = [
    "BiomeBand",
    "ConfigurationError",
    "FalloffPolicy",
    "GenerationConfig",
    "NoiseField",
    "TerrainGenerator",
    "TerrainRaster",
    "THRESHOLD_LADDER",
    "apply_erosion",
    "assemble",
    "classify",
    "classify_grid",
    "encode_png",
    "falloff_map",
    "generate_terrain",
    "sample_grid",
]
