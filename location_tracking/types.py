"""Common type aliases and enumerations.

``Color`` values are accepted either as ``0xRRGGBB`` integers (the palette the
map was designed with) or as CSS color names understood by Pillow.
"""

from enum import IntEnum, StrEnum, auto
from typing import Tuple

EntityID = int

Color = int | str
RGB = Tuple[int, int, int]
Point = Tuple[float, float]


class AlphaDirection(IntEnum):
    """Direction an incident marker's opacity is moving in."""

    FALLING = -1
    RISING = 1


class GraphicsKind(StrEnum):
    """Category of a ``Graphics`` node on the stage."""

    GRID = auto()
    ASSIGN_LINES = auto()
    OFFICER = auto()
    INCIDENT = auto()


class EventType(StrEnum):
    """Dispatch event names (wire values are CamelCase)."""

    INCIDENT_OCCURRED = "IncidentOccurred"
    INCIDENT_RESOLVED = "IncidentResolved"
    OFFICER_GOES_ONLINE = "OfficerGoesOnline"
    OFFICER_LOCATION_UPDATED = "OfficerLocationUpdated"
    OFFICER_GOES_OFFLINE = "OfficerGoesOffline"
