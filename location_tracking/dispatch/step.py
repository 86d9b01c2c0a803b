"""Dispatch reducer.

:func:`apply_event` is the only way a :class:`DispatchState` changes: it maps
``(state, event)`` to a new state using the handler registered for the
event's class. Handlers are pure and tolerate references to unknown ids by
returning the state unchanged.

Assignment rules:

* A new incident takes the nearest available officer.
* An officer coming online (or back online while free) takes the first
  unassigned incident.
* Resolving an incident or taking its officer offline frees the other side.
"""

from dataclasses import replace
import logging
from typing import Callable, Dict, Iterable, Optional, Type

from pyrsistent import pvector

from location_tracking.dispatch.events import (
    Event,
    IncidentOccurred,
    IncidentResolved,
    OfficerGoesOffline,
    OfficerGoesOnline,
    OfficerLocationUpdated,
)
from location_tracking.dispatch.state import (
    DispatchState,
    first_unassigned_incident,
    nearest_available_officer,
    replace_incident,
    replace_officer,
)
from location_tracking.models import Incident, Location, Officer

logger = logging.getLogger(__name__)

EventHandler = Callable[[DispatchState, Event], DispatchState]


def assign(state: DispatchState, incident: Incident, officer: Officer) -> DispatchState:
    logger.debug("Assigning officer %s to incident %s", officer.id, incident.id)
    return replace_incident(state, replace(incident, officer_id=officer.id))


def incident_occurred(state: DispatchState, event: IncidentOccurred) -> DispatchState:
    if state.find_incident(event.incident_id) is not None:
        logger.debug("Ignoring duplicate incident %s", event.incident_id)
        return state

    incident = Incident(id=event.incident_id, code_name=event.code_name, loc=event.loc)
    state = replace(state, incidents=state.incidents.append(incident))
    officer = nearest_available_officer(state, incident.loc)
    if officer is not None:
        state = assign(state, incident, officer)
    return state


def incident_resolved(state: DispatchState, event: IncidentResolved) -> DispatchState:
    # The officer is freed implicitly: availability is derived from incidents.
    incidents = pvector(i for i in state.incidents if i.id != event.incident_id)
    return replace(state, incidents=incidents)


def officer_goes_online(state: DispatchState, event: OfficerGoesOnline) -> DispatchState:
    officer = state.find_officer(event.officer_id)
    if officer is None:
        officer = Officer(
            id=event.officer_id, badge_name=event.badge_name, loc=Location(0, 0)
        )
        state = replace(state, officers=state.officers.append(officer))

    if not state.is_available(officer.id):
        return state

    incident = first_unassigned_incident(state)
    if incident is not None:
        state = assign(state, incident, officer)
    return state


def officer_location_updated(
    state: DispatchState, event: OfficerLocationUpdated
) -> DispatchState:
    officer = state.find_officer(event.officer_id)
    if officer is None:
        logger.debug("Location update for unknown officer %s", event.officer_id)
        return state
    return replace_officer(state, replace(officer, loc=event.loc))


def officer_goes_offline(state: DispatchState, event: OfficerGoesOffline) -> DispatchState:
    if state.find_officer(event.officer_id) is None:
        return state

    incident = state.incident_of(event.officer_id)
    if incident is not None:
        state = replace_incident(state, replace(incident, officer_id=None))
    officers = pvector(o for o in state.officers if o.id != event.officer_id)
    return replace(state, officers=officers)


EVENT_HANDLER_REGISTRY: Dict[Type[Event], EventHandler] = {  # type: ignore[dict-item]
    IncidentOccurred: incident_occurred,
    IncidentResolved: incident_resolved,
    OfficerGoesOnline: officer_goes_online,
    OfficerLocationUpdated: officer_location_updated,
    OfficerGoesOffline: officer_goes_offline,
}
"""Event class to reducer."""


def apply_event(state: DispatchState, event: Optional[Event]) -> DispatchState:
    """Return the state after ``event``. ``None`` (unknown event type) is a no-op."""
    if event is None:
        return state
    handler = EVENT_HANDLER_REGISTRY.get(type(event))
    if handler is None:
        raise TypeError(f"No handler for event {event!r}")
    return handler(state, event)


def apply_events(state: DispatchState, events: Iterable[Optional[Event]]) -> DispatchState:
    for event in events:
        state = apply_event(state, event)
    return state
