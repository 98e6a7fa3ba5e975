"""Fractal noise field built on OpenSimplex."""

import numpy as np
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from worldgen.terrain.types import ConfigurationError, GenerationConfig


class NoiseField:
    """Deterministic fBm noise with fixed seed and fractal controls."""

    def __init__(
        self,
        seed: int,
        octaves: int = 6,
        frequency: float = 1.0,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
    ) -> None:
        if octaves <= 0:
            raise ConfigurationError(f"octaves must be positive, got {octaves}")
        self.seed = seed
        self.octaves = octaves
        self.frequency = frequency
        self.lacunarity = lacunarity
        self.persistence = persistence
        # Every octave samples this one table; it is not reseeded per octave
        self._simplex = OpenSimplex(seed=seed)

    @classmethod
    def from_config(cls, config: GenerationConfig) -> "NoiseField":
        """Build the noise field described by a GenerationConfig."""
        return cls(
            seed=config.seed,
            octaves=config.octaves,
            frequency=config.frequency,
            lacunarity=config.lacunarity,
            persistence=config.persistence,
        )

    def _layers(self):
        """Yield (frequency, amplitude) for each octave."""
        amplitude = 1.0
        frequency = self.frequency
        for _ in range(self.octaves):
            yield frequency, amplitude
            amplitude *= self.persistence
            frequency *= self.lacunarity

    def _amplitude_total(self) -> float:
        return sum(abs(amplitude) for _, amplitude in self._layers())

    def sample(self, x: float, y: float) -> float:
        """Sample the field at a world coordinate.

        Returns:
            Noise value approximately in [-1, 1]
        """
        total = 0.0
        for frequency, amplitude in self._layers():
            total += amplitude * self._simplex.noise2(x * frequency, y * frequency)
        return total / self._amplitude_total()

    def sample_array(
        self, xs: NDArray[np.float64], ys: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Sample the field over the outer product of two coordinate axes.

        Args:
            xs: World x coordinates (columns)
            ys: World y coordinates (rows)

        Returns:
            Array of shape (len(ys), len(xs)) matching ``sample`` element-wise
        """
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        total = np.zeros((ys.size, xs.size), dtype=np.float64)
        for frequency, amplitude in self._layers():
            total += amplitude * self._simplex.noise2array(xs * frequency, ys * frequency)
        return total / self._amplitude_total()
