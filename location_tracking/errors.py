"""Exception hierarchy.

Every error raised on purpose by the package derives from
:class:`LocationTrackingError`. Configuration mistakes raise plain
``ValueError`` instead, the same way dataclass validation does elsewhere.
"""

from typing import Optional

from location_tracking.types import EntityID


class LocationTrackingError(Exception):
    """Base class for package errors."""


class LoadError(LocationTrackingError):
    """A data source answered with an error payload or without data."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message if code is None else f"[{code}] {message}")
        self.code = code


class MissingOfficerError(LocationTrackingError):
    """An incident references an officer absent from the same snapshot."""

    def __init__(self, incident_id: EntityID, officer_id: EntityID):
        super().__init__(
            f"Incident {incident_id} is assigned to unknown officer {officer_id}"
        )
        self.incident_id = incident_id
        self.officer_id = officer_id


class EventError(LocationTrackingError):
    """A dispatch event payload is malformed."""
