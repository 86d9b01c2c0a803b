from collections import deque
import logging
from typing import Any, Deque, Mapping, Optional, Union

from location_tracking.dispatch.events import Event, parse_event
from location_tracking.dispatch.simulator import EventSimulator
from location_tracking.dispatch.state import DispatchState
from location_tracking.dispatch.step import apply_event, apply_events
from location_tracking.errors import EventError
from location_tracking.models import ApiResponse
from location_tracking.sources.base import register_data_source

logger = logging.getLogger(__name__)


class DispatchDataSource:
    """Snapshot source backed by a :class:`DispatchState`.

    Events published between two loads are queued and applied, in order, by
    the next ``load()``. Raw payloads are parsed on publish; malformed ones are
    logged and dropped so one bad message cannot stall the feed. When a
    simulator is attached, its events for the cycle are applied after the
    queued ones.
    """

    def __init__(
        self,
        state: Optional[DispatchState] = None,
        simulator: Optional[EventSimulator] = None,
    ):
        self.state = state or DispatchState()
        self.simulator = simulator
        self._queue: Deque[Event] = deque()

    def publish(self, event: Union[Event, Mapping[str, Any]]) -> bool:
        """Queue an event. Returns False if the payload was dropped."""
        if isinstance(event, Mapping):
            try:
                parsed = parse_event(event)
            except EventError:
                logger.exception("Dropping malformed dispatch event")
                return False
            if parsed is None:
                logger.debug("Ignoring dispatch event of unknown type %r", event.get("type"))
                return False
            event = parsed
        self._queue.append(event)
        return True

    def pending(self) -> int:
        return len(self._queue)

    async def load(self) -> ApiResponse:
        while self._queue:
            self.state = apply_event(self.state, self._queue.popleft())
        if self.simulator is not None:
            self.state = apply_events(self.state, self.simulator.next_events(self.state))
        return ApiResponse.ok(self.state.snapshot())


register_data_source(
    "Dispatch simulation", lambda: DispatchDataSource(simulator=EventSimulator())
)
