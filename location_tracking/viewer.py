"""Coordinating object for the live map.

:class:`LocationTrackingViewer` owns every moving part: the stage, the scene
renderer, the incident marker list shared between polls and frames, the
poller and the ticker. Hosts drive it either with ``start()`` / ``stop()``
inside an asyncio loop, or step by step with ``poll()`` and ``tick()``.

Example:

    viewer = LocationTrackingViewer(SampleDataSource())
    await viewer.run(duration=10.0)
    viewer.frame().save("map.png")
"""

import asyncio
import random
from typing import Iterator, List, Optional, Sequence

from PIL import Image

from location_tracking.animation import animate
from location_tracking.config import (
    DEFAULT_ANIMATION_CONFIG,
    DEFAULT_POLL_CONFIG,
    DEFAULT_SCENE_CONFIG,
    AnimationConfig,
    PollConfig,
    SceneConfig,
)
from location_tracking.models import Snapshot
from location_tracking.renderer.raster import RasterRenderer
from location_tracking.renderer.scene import SceneRenderer
from location_tracking.scheduling import Poller, Ticker
from location_tracking.sources.base import DataSource
from location_tracking.stage import Graphics, Stage


class IncidentMarkers:
    """Incident marker nodes of the current scene.

    Replaced wholesale on every successful poll; iterated by every frame.
    """

    def __init__(self) -> None:
        self._items: List[Graphics] = []

    def replace(self, items: Sequence[Graphics]) -> None:
        self._items = list(items)

    def __iter__(self) -> Iterator[Graphics]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


class LocationTrackingViewer:
    stage: Stage
    markers: IncidentMarkers

    def __init__(
        self,
        source: DataSource,
        scene_config: SceneConfig = DEFAULT_SCENE_CONFIG,
        animation_config: AnimationConfig = DEFAULT_ANIMATION_CONFIG,
        poll_config: PollConfig = DEFAULT_POLL_CONFIG,
        rng: Optional[random.Random] = None,
    ):
        self.source = source
        self.animation_config = animation_config
        self.poll_config = poll_config
        self.stage = Stage()
        self.markers = IncidentMarkers()
        self.scene = SceneRenderer(self.stage, config=scene_config, rng=rng)
        self.raster = RasterRenderer(config=scene_config)
        self.poller = Poller(source, self.show, interval=poll_config.interval)
        self.ticker = Ticker(self.tick, fps=poll_config.fps)

    def show(self, snapshot: Snapshot) -> None:
        """Rebuild the scene for ``snapshot`` and hand its markers to the animation."""
        self.markers.replace(self.scene.render(snapshot))

    async def poll(self) -> bool:
        return await self.poller.poll_once()

    def tick(self, delta: float = 1.0) -> None:
        # The oscillator steps once per frame regardless of frame time.
        animate(self.markers, self.animation_config)

    def frame(self) -> Image.Image:
        return self.raster.render(self.stage)

    @property
    def running(self) -> bool:
        return self.poller.running or self.ticker.running

    def start(self) -> None:
        self.ticker.start()
        self.poller.start()

    async def stop(self) -> None:
        try:
            await self.poller.stop()
        finally:
            await self.ticker.stop()

    async def run(self, duration: float) -> None:
        """Run both timelines for ``duration`` seconds, then stop them."""
        self.start()
        try:
            await asyncio.sleep(duration)
        finally:
            await self.stop()
