"""External services the map screen depends on.

- LocationManager: authorization status, location update stream
- OSRMDirectionsClient: routing via an OSRM-compatible HTTP server
"""

from pinroute.services.directions import (
    DirectionsError,
    DirectionsRequest,
    DirectionsResponse,
    DirectionsService,
    OSRMDirectionsClient,
    TransportType,
)
from pinroute.services.location_manager import LocationManager, LocationManagerListener

__all__ = [
    "LocationManager",
    "LocationManagerListener",
    "DirectionsService",
    "DirectionsRequest",
    "DirectionsResponse",
    "DirectionsError",
    "OSRMDirectionsClient",
    "TransportType",
]
