"""Route geometry returned by the directions service and drawn on the map.

- Polyline: ordered path coordinates
- Route: one candidate from the directions service (path + metrics)
- RouteOverlay: the polyline installed on the map with its camera region
- PolylineStyle: how the map renders an overlay
"""

from __future__ import annotations

from dataclasses import dataclass

from pinroute.model.coordinate import Coordinate
from pinroute.model.region import MapRect, MapRegion


@dataclass(frozen=True)
class Polyline:
    """Ordered sequence of coordinates."""

    coordinates: tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        if len(self.coordinates) < 2:
            raise ValueError(f"Polyline needs at least 2 coordinates, got {len(self.coordinates)}")

    @property
    def bounding_map_rect(self) -> MapRect:
        return MapRect.bounding(self.coordinates)

    @property
    def path(self) -> list[list[float]]:
        """[[lon, lat], ...] for Pydeck PathLayer."""
        return [c.lon_lat_list for c in self.coordinates]


@dataclass(frozen=True)
class Route:
    """Single candidate route."""

    polyline: Polyline
    distance_m: float
    expected_travel_time_s: float
    name: str = ""

    def padded_region(self, padding_m: float) -> MapRegion:
        """Camera region around the path, padded on each axis."""
        return self.polyline.bounding_map_rect.padded(dx=padding_m, dy=padding_m).to_region()


@dataclass(frozen=True)
class RouteOverlay:
    """Route polyline installed on the map surface."""

    id: str
    polyline: Polyline
    region: MapRegion
    distance_m: float
    expected_travel_time_s: float

    @classmethod
    def from_route(cls, overlay_id: str, route: Route, padding_m: float) -> RouteOverlay:
        return cls(
            id=overlay_id,
            polyline=route.polyline,
            region=route.padded_region(padding_m=padding_m),
            distance_m=route.distance_m,
            expected_travel_time_s=route.expected_travel_time_s,
        )


@dataclass(frozen=True)
class PolylineStyle:
    """Stroke style for an overlay."""

    line_width: float
    stroke_color: tuple[int, int, int, int]
