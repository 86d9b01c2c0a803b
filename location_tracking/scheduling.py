"""Timer-driven tasks: the data poller and the frame ticker.

Both run as cancellable ``asyncio`` tasks on the caller's event loop and never
block it. They share no state with each other; whatever the poller renders
is picked up by the next tick.

The poller fires on a fixed schedule (the first poll runs immediately, then
every ``interval`` seconds measured from the start, not from the end of the
previous poll). A slow load delays the next poll but never queues extra ones.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from location_tracking.errors import LoadError
from location_tracking.models import ApiResponse, Snapshot
from location_tracking.sources.base import DataSource

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs ``callback`` every ``interval`` seconds until stopped."""

    def __init__(
        self,
        callback: Callable[[], Awaitable[None]],
        interval: float,
        name: str,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.callback = callback
        self.interval = interval
        self.name = name
        self._task: Optional["asyncio.Task[None]"] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the task on the running loop. Starting twice is a no-op."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.info("Started %s (every %.3fs)", self.name, self.interval)

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("%s had already failed", self.name)
        logger.info("Stopped %s", self.name)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time()
        while True:
            await self.callback()
            next_at += self.interval
            now = loop.time()
            if next_at < now:
                # Overran one or more periods; skip them instead of bursting.
                missed = int((now - next_at) // self.interval) + 1
                next_at += missed * self.interval
            await asyncio.sleep(next_at - now)


def check_response(response: ApiResponse) -> Snapshot:
    """Return the snapshot carried by ``response``.

    Raises:
        LoadError: The response carries an error or no data.
    """
    if response.error is not None:
        raise LoadError(response.error.message, code=response.error.code)
    if response.data is None:
        raise LoadError("Response carries no data")
    return response.data


class Poller:
    """Loads from ``source`` and hands each snapshot to ``on_snapshot``.

    Any exception raised by the load or by ``on_snapshot`` is logged and
    swallowed, so one failed cycle never stops the schedule.
    """

    def __init__(
        self,
        source: DataSource,
        on_snapshot: Callable[[Snapshot], None],
        interval: float = 5.0,
    ):
        self.source = source
        self.on_snapshot = on_snapshot
        self.failures = 0
        self._task = PeriodicTask(self._poll, interval, name="poller")

    @property
    def running(self) -> bool:
        return self._task.running

    async def poll_once(self) -> bool:
        """Run one cycle. Returns True if a snapshot was delivered."""
        try:
            snapshot = check_response(await self.source.load())
            self.on_snapshot(snapshot)
        except Exception:
            self.failures += 1
            logger.exception("Poll failed")
            return False
        logger.debug(
            "Polled %d incidents, %d officers",
            len(snapshot.incidents),
            len(snapshot.officers),
        )
        return True

    async def _poll(self) -> None:
        await self.poll_once()

    def start(self) -> None:
        self._task.start()

    async def stop(self) -> None:
        await self._task.stop()


class Ticker:
    """Calls ``on_frame(delta)`` at ``fps`` frames per second.

    ``delta`` is the elapsed time since the previous frame measured in target
    frames (1.0 when on schedule).
    """

    def __init__(self, on_frame: Callable[[float], None], fps: float = 60.0):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.on_frame = on_frame
        self.fps = fps
        self.frames = 0
        self._last: Optional[float] = None
        self._task = PeriodicTask(self._frame, 1.0 / fps, name="ticker")

    @property
    def running(self) -> bool:
        return self._task.running

    async def _frame(self) -> None:
        now = asyncio.get_running_loop().time()
        delta = 1.0 if self._last is None else (now - self._last) * self.fps
        self._last = now
        self.frames += 1
        self.on_frame(delta)

    def start(self) -> None:
        self._task.start()

    async def stop(self) -> None:
        await self._task.stop()
        self._last = None
