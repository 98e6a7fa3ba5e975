"""Background preview renderer.

Parameter edits arrive faster than full generation passes can finish, so
requests only record the newest config and wake the render loop.  The loop
renders whole passes in an executor and publishes each finished PNG in a
single assignment; readers see either the previous frame or the new one,
never a partial raster.
"""

import asyncio
import logging
from typing import Any

from worldgen.terrain import FalloffPolicy, GenerationConfig, TerrainGenerator

logger = logging.getLogger(__name__)


class PreviewRenderer:
    """Re-renders the terrain preview whenever parameters change."""

    def __init__(
        self,
        config: GenerationConfig | None = None,
        policy: FalloffPolicy | str = FalloffPolicy.SQUARE,
        workers: int | None = None,
    ) -> None:
        self._config = config or GenerationConfig()
        self._policy = FalloffPolicy.parse(policy)
        self._workers = workers
        self._pending = asyncio.Event()
        self._shutdown = False
        self._latest: bytes | None = None
        self._generation = 0
        self.last_error: BaseException | None = None

    @property
    def config(self) -> GenerationConfig:
        return self._config

    @property
    def latest(self) -> bytes | None:
        """Most recently published PNG, or None before the first frame."""
        return self._latest

    @property
    def generation(self) -> int:
        """Number of frames published so far."""
        return self._generation

    def request(self, **overrides: Any) -> GenerationConfig:
        """Apply parameter overrides and schedule a re-render.

        Raises:
            ConfigurationError: if the overrides produce an invalid config.
                The current config is left unchanged.
        """
        self._config = self._config.with_overrides(**overrides)
        self._pending.set()
        return self._config

    def stop(self) -> None:
        """Stop the render loop after the pass in progress."""
        logger.info("Preview renderer stopping")
        self._shutdown = True
        self._pending.set()

    def _render(self, config: GenerationConfig) -> bytes:
        return TerrainGenerator(config, policy=self._policy, workers=self._workers).render_png()

    async def run(self) -> None:
        """Render loop - wait for requests and publish frames until stopped."""
        logger.info("Preview renderer starting...")
        loop = asyncio.get_running_loop()
        if self._latest is None:
            self._pending.set()

        while not self._shutdown:
            await self._pending.wait()
            self._pending.clear()
            if self._shutdown:
                break

            config = self._config
            try:
                png = await loop.run_in_executor(None, self._render, config)
            except Exception as e:
                logger.exception("Preview render failed for seed %d", config.seed)
                self.last_error = e
                continue

            self._latest = png
            self._generation += 1
            self.last_error = None
            logger.info("Published preview frame %d (%d bytes)", self._generation, len(png))

        logger.info("Preview renderer stopped")
