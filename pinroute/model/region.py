"""Map regions and rects - what the camera shows.

Two representations, mirroring how map frameworks split the concept:
- MapRegion: center coordinate plus a span in degrees (camera-facing)
- MapRect: axis-aligned rectangle in Web Mercator meters (geometry-facing)

Route framing computes a MapRect around the path, pads it in meters,
then converts back to a MapRegion for the camera.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from shapely.geometry import MultiPoint

from pinroute.constants import MapConfig
from pinroute.core.geo_calculator import GeoCalculator
from pinroute.core.projection import clamp_lat, lonlat_to_xy, xy_to_lonlat, zoom_for_resolution
from pinroute.model.coordinate import Coordinate


@dataclass(frozen=True)
class CoordinateSpan:
    """Extent of a region in degrees."""

    latitude_delta: float
    longitude_delta: float

    def __post_init__(self) -> None:
        if self.latitude_delta < 0 or self.longitude_delta < 0:
            raise ValueError(f"Span deltas must be non-negative, got {self}")


@dataclass(frozen=True)
class MapRegion:
    """Visible region: center plus span."""

    center: Coordinate
    span: CoordinateSpan

    @classmethod
    def from_center(cls, center: Coordinate, latitudinal_m: float, longitudinal_m: float) -> MapRegion:
        """Region centered on a coordinate spanning the given distances in meters."""
        return cls(
            center=center,
            span=CoordinateSpan(
                latitude_delta=GeoCalculator.meters_to_latitude_delta(latitudinal_m),
                longitude_delta=GeoCalculator.meters_to_longitude_delta(longitudinal_m, at_lat=center.lat),
            ),
        )

    @property
    def north(self) -> float:
        return clamp_lat(self.center.lat + self.span.latitude_delta / 2)

    @property
    def south(self) -> float:
        return clamp_lat(self.center.lat - self.span.latitude_delta / 2)

    @property
    def west(self) -> float:
        return self.center.lon - self.span.longitude_delta / 2

    @property
    def east(self) -> float:
        return self.center.lon + self.span.longitude_delta / 2

    def contains(self, coordinate: Coordinate) -> bool:
        """Check if a coordinate lies inside the region."""
        return self.south <= coordinate.lat <= self.north and self.west <= coordinate.lon <= self.east

    def to_map_rect(self) -> MapRect:
        """Project the region's corners into a Web Mercator rect."""
        min_x, min_y = lonlat_to_xy(self.west, self.south)
        max_x, max_y = lonlat_to_xy(self.east, self.north)
        return MapRect(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    def meters_per_pixel(self, width_px: int, height_px: int) -> float:
        """Mercator resolution at which the whole region fits a viewport."""
        rect = self.to_map_rect()
        return max(rect.width / width_px, rect.height / height_px)

    def zoom(
        self,
        width_px: int = MapConfig.VIEWPORT_WIDTH_PX,
        height_px: int = MapConfig.VIEWPORT_HEIGHT_PX,
    ) -> float:
        """Zoom level that fits this region into a viewport, clamped to the map's range."""
        resolution = self.meters_per_pixel(width_px=width_px, height_px=height_px)
        if resolution <= 0:
            return MapConfig.MAX_ZOOM
        zoom = zoom_for_resolution(resolution, tile_size_px=MapConfig.TILE_SIZE_PX)
        return max(MapConfig.MIN_ZOOM, min(MapConfig.MAX_ZOOM, zoom))


@dataclass(frozen=True)
class MapRect:
    """Axis-aligned rectangle in Web Mercator meters.

    (x, y) is the south-west corner; y grows northward.
    """

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def bounding(cls, coordinates: Iterable[Coordinate]) -> MapRect:
        """Smallest rect containing every coordinate.

        Raises:
            ValueError: If no coordinates are given.
        """
        points = [lonlat_to_xy(c.lon, c.lat) for c in coordinates]
        if not points:
            raise ValueError("Cannot bound an empty coordinate sequence")
        min_x, min_y, max_x, max_y = MultiPoint(points).bounds
        return cls(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    def padded(self, dx: float, dy: float) -> MapRect:
        """Grow the rect by dx on the left and right, dy on top and bottom."""
        return MapRect(x=self.x - dx, y=self.y - dy, width=self.width + 2 * dx, height=self.height + 2 * dy)

    def to_region(self) -> MapRegion:
        """Unproject to a MapRegion centered on the rect's Mercator midpoint."""
        west, south = xy_to_lonlat(self.x, self.y)
        east, north = xy_to_lonlat(self.max_x, self.max_y)
        center_lon, center_lat = xy_to_lonlat(self.mid_x, self.mid_y)
        return MapRegion(
            center=Coordinate(lat=center_lat, lon=center_lon),
            span=CoordinateSpan(latitude_delta=north - south, longitude_delta=east - west),
        )
