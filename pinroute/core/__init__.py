"""Core foundation: geodesic math, projection and the UI execution context.

- GeoCalculator: Geodesic calculations (distances, meter/degree spans, zoom)
- projection: Web Mercator (EPSG:3857) helpers via pyproj
- MainQueue: UI-owned callback queue with delayed execution
"""

from pinroute.core.geo_calculator import GeoCalculator
from pinroute.core.main_queue import MainQueue
from pinroute.core.projection import lonlat_to_xy, xy_to_lonlat

__all__ = [
    "GeoCalculator",
    "MainQueue",
    "lonlat_to_xy",
    "xy_to_lonlat",
]
