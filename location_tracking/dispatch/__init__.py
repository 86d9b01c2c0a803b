"""In-process dispatch book.

Keeps incidents and officers up to date from dispatch events and assigns
officers to incidents. Exposes the result as a snapshot for the map.
"""

from location_tracking.dispatch.events import Event, parse_event, parse_event_json
from location_tracking.dispatch.simulator import EventSimulator
from location_tracking.dispatch.state import DispatchState
from location_tracking.dispatch.step import apply_event, apply_events

__all__ = [
    "DispatchState",
    "Event",
    "EventSimulator",
    "apply_event",
    "apply_events",
    "parse_event",
    "parse_event_json",
]
