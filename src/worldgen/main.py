"""Command-line entry point: render one terrain raster to a PNG file."""

import logging
import sys
from pathlib import Path

from worldgen.config import Settings, settings
from worldgen.terrain import GenerationConfig, TerrainGenerator


def setup_logging(level_name: str) -> None:
    """Configure logging for the generator."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def main(cfg: Settings = settings) -> Path:
    """Render a raster using *cfg* and write it to ``cfg.output_path``."""
    setup_logging(cfg.log_level)
    logger = logging.getLogger(__name__)

    config = GenerationConfig(**cfg.generation_overrides())
    generator = TerrainGenerator(config, policy=cfg.falloff, workers=cfg.workers)
    png = generator.render_png()

    output = Path(cfg.output_path)
    output.write_bytes(png)
    logger.info("Wrote %dx%d terrain to %s", config.width, config.height, output)
    return output


def run() -> None:
    """Entry point for the worldgen command."""
    main()


if __name__ == "__main__":
    run()
