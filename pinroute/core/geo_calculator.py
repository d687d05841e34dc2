"""Great-circle helpers used for region framing and distance checks.

Spherical Earth, R = 6,371 km. Inputs are decimal degrees, outputs meters
unless noted.
"""

from math import atan2, cos, degrees, radians, sin, sqrt

EARTH_RADIUS_M = 6_371_000


class GeoCalculator:
    """Namespace of static great-circle functions."""

    EARTH_RADIUS_M = EARTH_RADIUS_M

    @staticmethod
    def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
        """Great-circle distance between (lat1, lon1) and (lat2, lon2) in meters."""
        dlat = radians(lat2 - lat1)
        dlon = radians(lon2 - lon1)
        a = sin(dlat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlon / 2) ** 2
        return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))

    @staticmethod
    def meters_to_latitude_delta(meters: float) -> float:
        """Degrees of latitude covered by a north-south distance."""
        return degrees(meters / EARTH_RADIUS_M)

    @staticmethod
    def meters_to_longitude_delta(meters: float, at_lat: float) -> float:
        """Degrees of longitude covered by an east-west distance at a latitude.

        Raises:
            ValueError: At the poles, where longitude spans are undefined.
        """
        cos_lat = cos(radians(at_lat))
        if cos_lat <= 1e-12:
            raise ValueError(f"Longitude span undefined at latitude {at_lat}")
        return degrees(meters / (EARTH_RADIUS_M * cos_lat))

