"""MapRenderer - Pydeck rendering of the MapSurface.

Renders the surface on a GPU-accelerated deck.gl map:
- Hybrid (satellite + reference) raster basemap
- Route overlays as PathLayer, styled by the surface's overlay style provider
- Pins as clickable markers (ScatterplotLayer)
- User location as accuracy halo + dot

Key points:
- Uses [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
- pickable=True only on pins; route and user layers let clicks through
  to the map so a long press works anywhere
"""

import logging
from dataclasses import dataclass, field

import pydeck as pdk

from pinroute.constants import ClickConfig, MapConfig, StyleConfig
from pinroute.ui.map_style import style_for
from pinroute.ui.map_surface import MapSurface

logger = logging.getLogger(__name__)


@dataclass
class LayerCollection:
    """Manages Pydeck layers with correct z-ordering.

    Z-order (back to front): routes → user location → pins

    Pins are placed last so they draw above routes and get click priority.
    """

    routes: list[pdk.Layer] = field(default_factory=list)
    user_location: list[pdk.Layer] = field(default_factory=list)
    pins: list[pdk.Layer] = field(default_factory=list)

    def get_ordered_layers(self) -> list[pdk.Layer]:
        """Return all layers in correct z-order (back to front)."""
        return self.routes + self.user_location + self.pins


class MapRenderer:
    """Renders a MapSurface as a Pydeck map.

    Example:
        renderer = MapRenderer(surface=surface)
        deck = renderer.render()
        render_pydeck_map(deck, key="map_0")
    """

    def __init__(self, surface: MapSurface) -> None:
        self.surface = surface

    def get_view_state(self) -> pdk.ViewState:
        """Create Pydeck ViewState from the surface camera."""
        region = self.surface.region
        kwargs = {}
        if self.surface.region_change_animated:
            kwargs["transition_duration"] = MapConfig.CAMERA_ANIMATION_MS
        return pdk.ViewState(
            latitude=region.center.lat,
            longitude=region.center.lon,
            zoom=self.surface.zoom,
            min_zoom=MapConfig.MIN_ZOOM,
            max_zoom=MapConfig.MAX_ZOOM,
            pitch=0,
            bearing=self.surface.bearing_deg,
            **kwargs,
        )

    def get_view(self) -> pdk.View:
        """Map view whose controller honours the surface's rotation setting."""
        rotate = self.surface.rotate_enabled
        return pdk.View(
            type="MapView",
            controller={"dragRotate": rotate, "touchRotate": rotate, "keyboard": True},
        )

    def render(self) -> pdk.Deck:
        """Render complete map with all layers.

        Returns:
            pdk.Deck object ready for display.
        """
        layer_collection = LayerCollection()
        layer_collection.routes.extend(self._create_route_layers())
        layer_collection.user_location.extend(self._create_user_location_layers())
        layer_collection.pins.append(self._create_pin_layer())

        return pdk.Deck(
            map_style=style_for(self.surface.map_style),
            map_provider="mapbox",  # Required when map_style is a dict
            initial_view_state=self.get_view_state(),
            views=[self.get_view()],
            layers=layer_collection.get_ordered_layers(),
            tooltip=self._create_tooltip_config(),
            parameters={"pickingRadius": ClickConfig.PICKING_RADIUS_PX},
        )

    # =========================================================================
    # ROUTE LAYERS
    # =========================================================================

    def _create_route_layers(self) -> list[pdk.Layer]:
        layers = []
        for overlay in self.surface.overlays:
            style = self.surface.renderer_for(overlay)
            route_data = [
                {
                    "type": ClickConfig.TYPE_ROUTE,
                    "id": overlay.id,
                    "path": overlay.polyline.path,
                    "color": list(style.stroke_color),
                    "width": style.line_width,
                }
            ]
            layers.append(
                pdk.Layer(
                    "PathLayer",
                    route_data,
                    get_path="path",
                    get_color="color",
                    get_width="width",
                    width_units="pixels",
                    cap_rounded=True,
                    joint_rounded=True,
                    pickable=False,
                    id=f"route_{overlay.id}",
                )
            )
        return layers

    # =========================================================================
    # PIN LAYER
    # =========================================================================

    def _create_pin_layer(self) -> pdk.Layer:
        """Create clickable layer for all pins, selected pin highlighted."""
        selected = self.surface.selected_annotation
        pin_data = []
        for annotation in self.surface.annotations:
            is_selected = selected is not None and annotation.id == selected.id
            datum = annotation.to_layer_datum(selected=is_selected)
            datum["color"] = list(
                StyleConfig.PIN_SELECTED_COLOR_RGBA if is_selected else StyleConfig.PIN_COLOR_RGBA
            )
            pin_data.append(datum)

        return pdk.Layer(
            "ScatterplotLayer",
            pin_data,
            get_position="position",
            get_radius=StyleConfig.PIN_RADIUS_PX,
            radius_units="pixels",
            get_fill_color="color",
            get_line_color=[255, 255, 255, 255],
            stroked=True,
            line_width_min_pixels=2,
            pickable=True,
            auto_highlight=True,
            highlight_color=[255, 255, 0, 180],
            id="pins",
        )

    # =========================================================================
    # USER LOCATION
    # =========================================================================

    def _create_user_location_layers(self) -> list[pdk.Layer]:
        fix = self.surface.user_location
        if not self.surface.shows_user_location or fix is None:
            return []

        datum = {
            "type": ClickConfig.TYPE_USER_LOCATION,
            "position": fix.coordinate.lon_lat_list,
            "accuracy": fix.horizontal_accuracy_m,
            "label": "My Location",
        }
        return [
            pdk.Layer(
                "ScatterplotLayer",
                [datum],
                get_position="position",
                get_radius="accuracy",
                radius_units="meters",
                get_fill_color=list(StyleConfig.USER_ACCURACY_COLOR_RGBA),
                pickable=False,
                id="user_accuracy",
            ),
            pdk.Layer(
                "ScatterplotLayer",
                [datum],
                get_position="position",
                get_radius=StyleConfig.USER_LOCATION_RADIUS_PX,
                radius_units="pixels",
                get_fill_color=list(StyleConfig.USER_LOCATION_COLOR_RGBA),
                get_line_color=[255, 255, 255, 255],
                stroked=True,
                line_width_min_pixels=2,
                pickable=False,
                id="user_location",
            ),
        ]

    # =========================================================================
    # TOOLTIP CONFIGURATION
    # =========================================================================

    def _create_tooltip_config(self) -> dict[str, str | dict[str, str]]:
        """Create Pydeck tooltip configuration - pin label only."""
        return {
            "html": "<b>{label}</b>",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
