"""Basemap styles for the Pydeck map.

Both styles use the Mapbox GL style specification with raster sources,
the deck.gl way to draw XYZ raster tiles from Python (pydeck's TileLayer
needs a renderSubLayers callback that pydeck does not expose).

HYBRID:
    Esri World Imagery (satellite) with the Esri transportation and
    boundaries/places reference tiles drawn on top.
STANDARD:
    OpenStreetMap raster tiles.

No API key required.
"""

from pinroute.ui.map_surface import MapStyle

ESRI_ARCGIS_TILES = "https://server.arcgisonline.com/ArcGIS/rest/services/{service}/MapServer/tile/{{z}}/{{y}}/{{x}}"

ESRI_IMAGERY_TILES = ESRI_ARCGIS_TILES.format(service="World_Imagery")
ESRI_TRANSPORTATION_TILES = ESRI_ARCGIS_TILES.format(service="Reference/World_Transportation")
ESRI_PLACES_TILES = ESRI_ARCGIS_TILES.format(service="Reference/World_Boundaries_and_Places")

OSM_TILES_ABC = [
    "https://a.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "https://b.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "https://c.tile.openstreetmap.org/{z}/{x}/{y}.png",
]

ESRI_ATTRIBUTION = "Tiles © Esri, Maxar, Earthstar Geographics, and the GIS User Community"
OSM_ATTRIBUTION = '© <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'


def _raster_source(tiles: list[str], attribution: str) -> dict[str, object]:
    return {"type": "raster", "tiles": tiles, "tileSize": 256, "attribution": attribution}


def _raster_layer(layer_id: str, maxzoom: int = 19) -> dict[str, object]:
    return {"id": layer_id, "type": "raster", "source": layer_id, "minzoom": 0, "maxzoom": maxzoom}


HYBRID_STYLE: dict[str, object] = {
    "version": 8,
    "sources": {
        "imagery": _raster_source([ESRI_IMAGERY_TILES], ESRI_ATTRIBUTION),
        "transportation": _raster_source([ESRI_TRANSPORTATION_TILES], ESRI_ATTRIBUTION),
        "places": _raster_source([ESRI_PLACES_TILES], ESRI_ATTRIBUTION),
    },
    # Back to front: imagery, then road and label reference overlays
    "layers": [
        _raster_layer("imagery"),
        _raster_layer("transportation"),
        _raster_layer("places"),
    ],
}

STANDARD_STYLE: dict[str, object] = {
    "version": 8,
    "sources": {"osm": _raster_source(OSM_TILES_ABC, OSM_ATTRIBUTION)},
    "layers": [_raster_layer("osm")],
}


def style_for(map_style: MapStyle) -> dict[str, object]:
    """Mapbox GL style dict for a surface map style."""
    if map_style is MapStyle.HYBRID:
        return HYBRID_STYLE
    return STANDARD_STYLE
