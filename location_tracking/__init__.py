"""Live incident / officer map.

Polls a data source for incident and officer locations, draws them on a
60x60 grid (incidents pulse, lines join each incident to its officer) and
rasterizes the result with Pillow.

Entry point: :class:`location_tracking.viewer.LocationTrackingViewer`.
"""

from location_tracking.models import (
    ApiResponse,
    ErrorInfo,
    Incident,
    Location,
    Officer,
    Snapshot,
)
from location_tracking.viewer import LocationTrackingViewer

__all__ = [
    "ApiResponse",
    "ErrorInfo",
    "Incident",
    "Location",
    "LocationTrackingViewer",
    "Officer",
    "Snapshot",
]
