"""Type definitions for terrain generation."""

import math
from dataclasses import dataclass, field, replace
from typing import Any

import numpy as np
from numpy.typing import NDArray

# Row-major grids: heights are (height, width), colors are (height, width, 3).
HeightGrid = NDArray[np.float64]
ColorGrid = NDArray[np.uint8]
RGB = tuple[int, int, int]

_U32_MAX = 2**32 - 1


class ConfigurationError(ValueError):
    """Raised when a GenerationConfig violates its invariants."""


@dataclass(frozen=True)
class GenerationConfig:
    """Parameters for one terrain generation pass.

    Defaults match the desktop preview the generator was first tuned with.
    Instances validate themselves on construction, so an invalid config
    never reaches the sampler.
    """

    # Raster size in cells
    width: int = 1024
    height: int = 1024

    # Fractal noise controls
    octaves: int = 11
    frequency: float = 0.3
    lacunarity: float = 2.5
    persistence: float = 0.6

    # Selects the OpenSimplex permutation table
    seed: int = 0

    # World-space rectangle as (x_min, x_max, y_min, y_max)
    domain: tuple[float, float, float, float] = (-5.0, 10.0, -5.0, 10.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", tuple(self.domain))
        self.validate()

    def validate(self) -> None:
        """Check invariants, raising ConfigurationError on the first violation."""
        for name in ("width", "height", "octaves"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        if isinstance(self.seed, bool) or not isinstance(self.seed, int):
            raise ConfigurationError(f"seed must be an integer, got {self.seed!r}")
        if not 0 <= self.seed <= _U32_MAX:
            raise ConfigurationError(f"seed must fit in 32 unsigned bits, got {self.seed}")

        for name in ("frequency", "lacunarity", "persistence"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be finite")

        if len(self.domain) != 4:
            raise ConfigurationError("domain must be (x_min, x_max, y_min, y_max)")
        x_min, x_max, y_min, y_max = self.domain
        if not all(math.isfinite(v) for v in self.domain):
            raise ConfigurationError("domain bounds must be finite")
        if x_max <= x_min:
            raise ConfigurationError(f"degenerate x bounds: ({x_min}, {x_max})")
        if y_max <= y_min:
            raise ConfigurationError(f"degenerate y bounds: ({y_min}, {y_max})")

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def with_overrides(self, **changes: Any) -> "GenerationConfig":
        """Return a validated copy with the given fields replaced."""
        return replace(self, **changes)


@dataclass
class TerrainRaster:
    """Result of one generation pass."""

    width: int
    height: int
    heights: HeightGrid
    colors: ColorGrid
    pixels: bytes = field(repr=False)

    def to_png(self) -> bytes:
        """Encode the assembled pixels as an 8-bit RGB PNG."""
        from worldgen.terrain.raster import encode_png

        return encode_png(self.pixels, self.width, self.height)
