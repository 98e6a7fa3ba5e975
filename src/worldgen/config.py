"""Generator configuration."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from worldgen.terrain.erosion import FalloffPolicy


class Settings(BaseSettings):
    """Settings loaded from WORLDGEN_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="worldgen_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "info"

    # Numba threads for the parallel kernels; 0 keeps numba's default
    worker_threads: int = 0

    # Falloff applied after sampling
    falloff: str = FalloffPolicy.SQUARE.value

    # Where the CLI writes the rendered PNG
    output_path: str = "terrain.png"

    # Generation overrides; unset fields keep the GenerationConfig defaults
    seed: int | None = None
    width: int | None = None
    height: int | None = None
    octaves: int | None = None
    frequency: float | None = None
    lacunarity: float | None = None
    persistence: float | None = None

    @field_validator("falloff")
    @classmethod
    def check_falloff(cls, v: str) -> str:
        """Reject unknown falloff policy names early."""
        return FalloffPolicy.parse(v).value

    @property
    def workers(self) -> int | None:
        return self.worker_threads or None

    def generation_overrides(self) -> dict[str, int | float]:
        """GenerationConfig fields explicitly set through the environment."""
        fields = {
            "seed": self.seed,
            "width": self.width,
            "height": self.height,
            "octaves": self.octaves,
            "frequency": self.frequency,
            "lacunarity": self.lacunarity,
            "persistence": self.persistence,
        }
        return {k: v for k, v in fields.items() if v is not None}


settings = Settings()
