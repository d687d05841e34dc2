"""Coordinate - Geographic position (lat, lon) in decimal degrees."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinate:
    """WGS84 position.

    Stored in (lat, lon) order. Use lon_lat / lon_lat_list for
    GeoJSON and Pydeck, which expect longitude first.
    """

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude {self.lat} outside [-90, 90]")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude {self.lon} outside [-180, 180]")

    @property
    def lon_lat(self) -> tuple[float, float]:
        """(lon, lat) tuple - GeoJSON/OSRM order."""
        return (self.lon, self.lat)

    @property
    def lon_lat_list(self) -> list[float]:
        """[lon, lat] list for Pydeck layer data."""
        return [self.lon, self.lat]

    def __str__(self) -> str:
        return f"({self.lat:.6f}, {self.lon:.6f})"
