"""Web Mercator projection helpers (EPSG:4326 <-> EPSG:3857).

Map rects, camera framing and screen point conversion all work in Web
Mercator meters, the same plane deck.gl renders in.
"""

import math

import pyproj

# Web Mercator is undefined at the poles; deck.gl clips at this latitude
MAX_MERCATOR_LAT = 85.05112878

_WGS84 = pyproj.CRS("EPSG:4326")
_WEB_MERCATOR = pyproj.CRS("EPSG:3857")
_to_mercator = pyproj.Transformer.from_crs(_WGS84, _WEB_MERCATOR, always_xy=True)
_to_wgs84 = pyproj.Transformer.from_crs(_WEB_MERCATOR, _WGS84, always_xy=True)


def clamp_lat(lat: float) -> float:
    """Clamp latitude into the range Web Mercator can represent."""
    return max(-MAX_MERCATOR_LAT, min(MAX_MERCATOR_LAT, lat))


def wrap_lon(lon: float) -> float:
    """Fold a longitude from a repeated world copy back into [-180, 180)."""
    return ((lon + 180.0) % 360.0) - 180.0


def lonlat_to_xy(lon: float, lat: float) -> tuple[float, float]:
    """Project WGS84 (lon, lat) to Web Mercator (x, y) meters."""
    x, y = _to_mercator.transform(lon, clamp_lat(lat))
    return float(x), float(y)


def xy_to_lonlat(x: float, y: float) -> tuple[float, float]:
    """Unproject Web Mercator (x, y) meters to WGS84 (lon, lat)."""
    lon, lat = _to_wgs84.transform(x, y)
    return float(lon), float(lat)


# Length of the equator in Web Mercator meters (2 * pi * 6378137)
MERCATOR_WORLD_WIDTH_M = 40075016.68557849


def zoom_for_resolution(meters_per_pixel: float, tile_size_px: int = 256) -> float:
    """Web Mercator zoom level at which one pixel covers meters_per_pixel.

    Raises:
        ValueError: For non-positive resolutions.
    """
    if meters_per_pixel <= 0:
        raise ValueError(f"Resolution must be positive, got {meters_per_pixel}")
    return math.log2(MERCATOR_WORLD_WIDTH_M / (tile_size_px * meters_per_pixel))
