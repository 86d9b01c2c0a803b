"""Snapshot records exchanged with data sources.

All records are frozen dataclasses. Sequences inside a :class:`Snapshot` are
``pyrsistent`` vectors, so a snapshot handed to the renderer can never change
under it.

The JSON shape of the data-source contract uses camelCase keys::

    {
        "data": {
            "incidents": [{"id": 1, "codeName": "IC1", "loc": {"x": 5, "y": 10}, "officerId": 1}],
            "officers": [{"id": 1, "badgeName": "OF1", "loc": {"x": 8, "y": 12}}],
        },
        "error": None,
    }

``from_dict`` helpers raise ``ValueError`` on malformed payloads.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional

from pyrsistent import pvector
from pyrsistent.typing import PVector

from location_tracking.types import EntityID


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if not isinstance(payload, Mapping):
        raise ValueError(f"Expected an object, got {type(payload).__name__}")
    if key not in payload:
        raise ValueError(f"Missing field '{key}' in {dict(payload)}")
    return payload[key]


def _as_int(value: Any, name: str) -> int:
    # bool is an int subclass; it is never a valid coordinate or id
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Field '{name}' must be a number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Field '{name}' must be integral, got {value!r}")
    return int(value)


@dataclass(frozen=True)
class Location:
    """Grid coordinate.

    Attributes:
        x: Column index (0 at left).
        y: Row index (0 at top).
    """

    x: int
    y: int

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Location":
        return cls(
            x=_as_int(_require(payload, "x"), "x"),
            y=_as_int(_require(payload, "y"), "y"),
        )

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Incident:
    """Point of interest, optionally assigned to an officer.

    Attributes:
        id: Incident identifier.
        code_name: Display label.
        loc: Grid location.
        officer_id: Assigned officer id, ``None`` while unassigned.
    """

    id: EntityID
    code_name: str
    loc: Location
    officer_id: Optional[EntityID] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Incident":
        officer_id = None
        if isinstance(payload, Mapping):
            # The state service spells it "officerID"
            officer_id = payload.get("officerId", payload.get("officerID"))
        return cls(
            id=_as_int(_require(payload, "id"), "id"),
            code_name=str(_require(payload, "codeName")),
            loc=Location.from_dict(_require(payload, "loc")),
            officer_id=None if officer_id is None else _as_int(officer_id, "officerId"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "codeName": self.code_name,
            "loc": self.loc.to_dict(),
        }
        if self.officer_id is not None:
            out["officerId"] = self.officer_id
        return out


@dataclass(frozen=True)
class Officer:
    """Mobile unit.

    Attributes:
        id: Officer identifier.
        badge_name: Display label.
        loc: Grid location.
    """

    id: EntityID
    badge_name: str
    loc: Location

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Officer":
        return cls(
            id=_as_int(_require(payload, "id"), "id"),
            badge_name=str(_require(payload, "badgeName")),
            loc=Location.from_dict(_require(payload, "loc")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "badgeName": self.badge_name, "loc": self.loc.to_dict()}


@dataclass(frozen=True)
class ErrorInfo:
    code: str
    message: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ErrorInfo":
        return cls(
            code=str(_require(payload, "code")),
            message=str(_require(payload, "message")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True)
class Snapshot:
    """Incidents and officers as seen at one point in time."""

    incidents: PVector[Incident] = field(default_factory=pvector)
    officers: PVector[Officer] = field(default_factory=pvector)

    @classmethod
    def of(
        cls, incidents: Iterable[Incident], officers: Iterable[Officer]
    ) -> "Snapshot":
        return cls(incidents=pvector(incidents), officers=pvector(officers))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Snapshot":
        # Missing or null sequences are treated as empty, as the backend
        # serializes empty slices as null. Its untagged field names are
        # capitalized.
        if not isinstance(payload, Mapping):
            raise ValueError(f"Expected an object, got {type(payload).__name__}")
        incidents = payload.get("incidents", payload.get("Incidents")) or []
        officers = payload.get("officers", payload.get("Officers")) or []
        return cls.of(
            (Incident.from_dict(i) for i in incidents),
            (Officer.from_dict(o) for o in officers),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "incidents": [i.to_dict() for i in self.incidents],
            "officers": [o.to_dict() for o in self.officers],
        }

    def officer_by_id(self, officer_id: EntityID) -> Optional[Officer]:
        return next((o for o in self.officers if o.id == officer_id), None)


@dataclass(frozen=True)
class ApiResponse:
    """Envelope returned by every data source.

    Exactly one of ``data`` / ``error`` is expected to be set, but the envelope
    does not enforce it; the poller treats a populated ``error`` or a missing
    ``data`` as a failed load.
    """

    data: Optional[Snapshot] = None
    error: Optional[ErrorInfo] = None

    @classmethod
    def ok(cls, snapshot: Snapshot) -> "ApiResponse":
        return cls(data=snapshot, error=None)

    @classmethod
    def failed(cls, code: str, message: str) -> "ApiResponse":
        return cls(data=None, error=ErrorInfo(code=code, message=message))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ApiResponse":
        if not isinstance(payload, Mapping):
            raise ValueError(f"Expected an object, got {type(payload).__name__}")
        data = payload.get("data")
        error = payload.get("error")
        return cls(
            data=None if data is None else Snapshot.from_dict(data),
            error=None if error is None else ErrorInfo.from_dict(error),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": None if self.data is None else self.data.to_dict(),
            "error": None if self.error is None else self.error.to_dict(),
        }
