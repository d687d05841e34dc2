"""Data model classes for map state.

- Coordinate: WGS84 position (lat, lon)
- CoordinateSpan / MapRegion: camera region (center + span in degrees)
- MapRect: Web Mercator rectangle used for path bounds and padding
- PointAnnotation: user-placed pin
- Polyline / Route / RouteOverlay / PolylineStyle: route geometry and rendering
- AuthorizationStatus: location permission state
- LocationFix: one position report
"""

from pinroute.model.annotation import PointAnnotation
from pinroute.model.authorization import AuthorizationStatus, UnknownAuthorizationStatusError
from pinroute.model.coordinate import Coordinate
from pinroute.model.location_fix import LocationFix
from pinroute.model.region import CoordinateSpan, MapRect, MapRegion
from pinroute.model.route import Polyline, PolylineStyle, Route, RouteOverlay

__all__ = [
    "Coordinate",
    "CoordinateSpan",
    "MapRegion",
    "MapRect",
    "PointAnnotation",
    "Polyline",
    "Route",
    "RouteOverlay",
    "PolylineStyle",
    "AuthorizationStatus",
    "UnknownAuthorizationStatusError",
    "LocationFix",
]
