"""Dispatch event payloads.

Events arrive as JSON objects with a ``type`` discriminator::

    {"type": "IncidentOccurred", "incidentId": 7, "codeName": "IC7", "loc": {"x": 3, "y": 4}}
    {"type": "IncidentResolved", "incidentId": 7}
    {"type": "OfficerGoesOnline", "officerId": 2, "badgeName": "OF2"}
    {"type": "OfficerLocationUpdated", "officerId": 2, "loc": {"x": 9, "y": 1}}
    {"type": "OfficerGoesOffline", "officerId": 2}

:func:`parse_event` maps them to frozen dataclasses. Unknown types parse to
``None`` so newer producers do not break older consumers; known types with
missing or mistyped fields raise :class:`EventError`.
"""

from dataclasses import dataclass
import json
from typing import Any, Callable, Dict, Mapping, Optional, Union

from location_tracking.errors import EventError
from location_tracking.models import Location
from location_tracking.types import EntityID, EventType


@dataclass(frozen=True)
class IncidentOccurred:
    incident_id: EntityID
    code_name: str
    loc: Location


@dataclass(frozen=True)
class IncidentResolved:
    incident_id: EntityID


@dataclass(frozen=True)
class OfficerGoesOnline:
    officer_id: EntityID
    badge_name: str


@dataclass(frozen=True)
class OfficerLocationUpdated:
    officer_id: EntityID
    loc: Location


@dataclass(frozen=True)
class OfficerGoesOffline:
    officer_id: EntityID


Event = Union[
    IncidentOccurred,
    IncidentResolved,
    OfficerGoesOnline,
    OfficerLocationUpdated,
    OfficerGoesOffline,
]


def _id(payload: Mapping[str, Any], key: str) -> EntityID:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EventError(f"Field '{key}' must be a number, got {value!r}")
    return int(value)


def _str(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise EventError(f"Field '{key}' must be a string, got {value!r}")
    return value


def _loc(payload: Mapping[str, Any], key: str = "loc") -> Location:
    try:
        return Location.from_dict(payload.get(key))  # type: ignore[arg-type]
    except ValueError as e:
        raise EventError(f"Field '{key}' is not a location: {e}") from e


_PARSERS: Dict[EventType, Callable[[Mapping[str, Any]], Event]] = {
    EventType.INCIDENT_OCCURRED: lambda p: IncidentOccurred(
        incident_id=_id(p, "incidentId"), code_name=_str(p, "codeName"), loc=_loc(p)
    ),
    EventType.INCIDENT_RESOLVED: lambda p: IncidentResolved(
        incident_id=_id(p, "incidentId")
    ),
    EventType.OFFICER_GOES_ONLINE: lambda p: OfficerGoesOnline(
        officer_id=_id(p, "officerId"), badge_name=_str(p, "badgeName")
    ),
    EventType.OFFICER_LOCATION_UPDATED: lambda p: OfficerLocationUpdated(
        officer_id=_id(p, "officerId"), loc=_loc(p)
    ),
    EventType.OFFICER_GOES_OFFLINE: lambda p: OfficerGoesOffline(
        officer_id=_id(p, "officerId")
    ),
}


def parse_event(payload: Mapping[str, Any]) -> Optional[Event]:
    """Parse a decoded event object. Returns ``None`` for unknown types."""
    if not isinstance(payload, Mapping):
        raise EventError(f"Event must be an object, got {type(payload).__name__}")
    try:
        event_type = EventType(payload.get("type"))
    except ValueError:
        return None
    return _PARSERS[event_type](payload)


def parse_event_json(raw: Union[str, bytes]) -> Optional[Event]:
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EventError(f"Event is not valid JSON: {e}") from e
    return parse_event(payload)


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Inverse of :func:`parse_event`."""
    if isinstance(event, IncidentOccurred):
        return {
            "type": EventType.INCIDENT_OCCURRED.value,
            "incidentId": event.incident_id,
            "codeName": event.code_name,
            "loc": event.loc.to_dict(),
        }
    if isinstance(event, IncidentResolved):
        return {
            "type": EventType.INCIDENT_RESOLVED.value,
            "incidentId": event.incident_id,
        }
    if isinstance(event, OfficerGoesOnline):
        return {
            "type": EventType.OFFICER_GOES_ONLINE.value,
            "officerId": event.officer_id,
            "badgeName": event.badge_name,
        }
    if isinstance(event, OfficerLocationUpdated):
        return {
            "type": EventType.OFFICER_LOCATION_UPDATED.value,
            "officerId": event.officer_id,
            "loc": event.loc.to_dict(),
        }
    if isinstance(event, OfficerGoesOffline):
        return {
            "type": EventType.OFFICER_GOES_OFFLINE.value,
            "officerId": event.officer_id,
        }
    raise TypeError(f"Not an event: {event!r}")
