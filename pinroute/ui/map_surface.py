"""MapSurface - the map view's state and event source.

Owns everything the map shows:
- Annotation list (pins, in insertion order) and the selected annotation
- Overlay list (route polylines)
- Visible region, bearing, viewport size
- User-location display, user tracking mode, compass, rotation settings

Raises events to registered listeners (explicit registration replaces
delegate callbacks; order of registration is order of delivery):
    on_long_press_began(point)          via the installed long-press recognizer
    on_annotation_selected(annotation)  when the selection changes to a pin
    on_user_location_updated(fix)       for each accepted location fix

The surface is mutated only from the UI execution context (MainQueue).
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable
from enum import Enum
from math import cos, radians, sin
from typing import Any, Protocol

from pinroute.constants import EntityPrefixes, MapConfig
from pinroute.core.projection import lonlat_to_xy, wrap_lon, xy_to_lonlat
from pinroute.model.annotation import PointAnnotation
from pinroute.model.coordinate import Coordinate
from pinroute.model.location_fix import LocationFix
from pinroute.model.region import MapRegion
from pinroute.model.route import PolylineStyle, RouteOverlay
from pinroute.ui.long_press import GestureState, LongPressGestureRecognizer, ScreenPoint, TouchEvent

logger = logging.getLogger(__name__)


class MapStyle(Enum):
    STANDARD = "standard"
    HYBRID = "hybrid"


class UserTrackingMode(Enum):
    NONE = "none"
    FOLLOW = "follow"
    FOLLOW_WITH_HEADING = "follow_with_heading"


class MapSurfaceListener(Protocol):
    """Events raised by MapSurface. Implement any subset."""

    def on_long_press_began(self, point: ScreenPoint) -> None: ...

    def on_annotation_selected(self, annotation: PointAnnotation) -> None: ...

    def on_user_location_updated(self, fix: LocationFix) -> None: ...


OverlayStyleProvider = Callable[[RouteOverlay], PolylineStyle]


def _default_region() -> MapRegion:
    return MapRegion.from_center(
        center=Coordinate(lat=MapConfig.START_CENTER_LAT, lon=MapConfig.START_CENTER_LON),
        latitudinal_m=MapConfig.START_SPAN_M,
        longitudinal_m=MapConfig.START_SPAN_M,
    )


class MapSurface:
    """In-memory map view.

    Example:
        surface = MapSurface()
        surface.add_listener(controller)
        pin = surface.add_annotation(Coordinate(lat=52.52, lon=13.40))
        surface.select_annotation(pin.id)   # -> controller.on_annotation_selected(pin)
    """

    def __init__(
        self,
        region: MapRegion | None = None,
        viewport_width_px: int = MapConfig.VIEWPORT_WIDTH_PX,
        viewport_height_px: int = MapConfig.VIEWPORT_HEIGHT_PX,
        map_style: MapStyle = MapStyle.HYBRID,
    ) -> None:
        self.region = region or _default_region()
        self.region_change_animated = False
        self.bearing_deg = 0.0
        self.map_style = map_style
        self.rotate_enabled = MapConfig.ROTATE_ENABLED
        self.shows_compass = MapConfig.SHOWS_COMPASS
        self.user_tracking_mode = UserTrackingMode.FOLLOW_WITH_HEADING
        self.user_location: LocationFix | None = None
        self._shows_user_location = False
        self._viewport = (viewport_width_px, viewport_height_px)

        self._annotations: list[PointAnnotation] = []
        self._overlays: list[RouteOverlay] = []
        self._selected_id: str | None = None
        self._pin_ids = itertools.count(1)

        self._listeners: list[Any] = []
        self._gesture_recognizers: list[LongPressGestureRecognizer] = []
        self._overlay_style_provider: OverlayStyleProvider | None = None

    # =========================================================================
    # LISTENERS AND GESTURES
    # =========================================================================

    def add_listener(self, listener: Any) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Any) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def add_gesture_recognizer(self, recognizer: LongPressGestureRecognizer) -> None:
        if recognizer not in self._gesture_recognizers:
            self._gesture_recognizers.append(recognizer)

    def remove_gesture_recognizer(self, recognizer: LongPressGestureRecognizer) -> None:
        if recognizer in self._gesture_recognizers:
            self._gesture_recognizers.remove(recognizer)

    @property
    def gesture_recognizers(self) -> tuple[LongPressGestureRecognizer, ...]:
        return tuple(self._gesture_recognizers)

    def handle_touch(self, event: TouchEvent) -> None:
        """Route a raw touch to every installed recognizer."""
        for recognizer in list(self._gesture_recognizers):
            recognizer.handle(event)

    def tick(self, now: float) -> None:
        for recognizer in list(self._gesture_recognizers):
            recognizer.tick(now)

    def long_press_action(self, recognizer: LongPressGestureRecognizer) -> None:
        """Recognizer target: re-raise the press start as a surface event."""
        if recognizer.state is not GestureState.BEGAN or recognizer.location is None:
            return
        self.deselect_annotation()
        self._notify("on_long_press_began", point=recognizer.location)

    # =========================================================================
    # ANNOTATIONS
    # =========================================================================

    @property
    def annotations(self) -> tuple[PointAnnotation, ...]:
        return tuple(self._annotations)

    @property
    def selected_annotation(self) -> PointAnnotation | None:
        if self._selected_id is None:
            return None
        return self.annotation(self._selected_id)

    def annotation(self, annotation_id: str) -> PointAnnotation | None:
        return next((a for a in self._annotations if a.id == annotation_id), None)

    def add_annotation(self, coordinate: Coordinate, title: str | None = None) -> PointAnnotation:
        """Create a pin at a coordinate and append it to the annotation list."""
        annotation = PointAnnotation(id=f"{EntityPrefixes.PIN}{next(self._pin_ids)}", coordinate=coordinate, title=title)
        self._annotations.append(annotation)
        logger.info(f"[MAP] Added {annotation.id} at {coordinate} ({len(self._annotations)} pins)")
        return annotation

    def remove_annotations(self, annotations: Iterable[PointAnnotation]) -> None:
        ids = {a.id for a in annotations}
        self._annotations = [a for a in self._annotations if a.id not in ids]
        if self._selected_id in ids:
            self._selected_id = None

    def select_annotation(self, annotation_id: str) -> None:
        """Select a pin, raising on_annotation_selected if the selection changed.

        Raises:
            ValueError: If no annotation has this id.
        """
        annotation = self.annotation(annotation_id)
        if annotation is None:
            raise ValueError(f"Annotation {annotation_id} not found on map")
        if self._selected_id == annotation_id:
            logger.debug(f"[MAP] {annotation_id} already selected")
            return
        self._selected_id = annotation_id
        self._notify("on_annotation_selected", annotation=annotation)

    def deselect_annotation(self) -> None:
        self._selected_id = None

    # =========================================================================
    # OVERLAYS
    # =========================================================================

    @property
    def overlays(self) -> tuple[RouteOverlay, ...]:
        return tuple(self._overlays)

    def add_overlay(self, overlay: RouteOverlay) -> None:
        self._overlays.append(overlay)
        logger.info(f"[MAP] Added overlay {overlay.id} ({len(overlay.polyline.coordinates)} points)")

    def remove_overlays(self, overlays: Iterable[RouteOverlay]) -> None:
        ids = {o.id for o in overlays}
        self._overlays = [o for o in self._overlays if o.id not in ids]

    def set_overlay_style_provider(self, provider: OverlayStyleProvider) -> None:
        self._overlay_style_provider = provider

    def renderer_for(self, overlay: RouteOverlay) -> PolylineStyle:
        """Ask the registered provider how to draw an overlay.

        Raises:
            RuntimeError: If no style provider has been registered.
        """
        if self._overlay_style_provider is None:
            raise RuntimeError("No overlay style provider registered on MapSurface")
        return self._overlay_style_provider(overlay)

    # =========================================================================
    # CAMERA
    # =========================================================================

    @property
    def viewport(self) -> tuple[int, int]:
        return self._viewport

    def set_viewport(self, width_px: int, height_px: int) -> None:
        if width_px <= 0 or height_px <= 0:
            raise ValueError(f"Viewport must be positive, got {width_px}x{height_px}")
        self._viewport = (width_px, height_px)

    def set_region(self, region: MapRegion, animated: bool = False) -> None:
        self.region = region
        self.region_change_animated = animated
        logger.info(f"[MAP] Region -> center {region.center}, animated={animated}")

    @property
    def zoom(self) -> float:
        width, height = self._viewport
        return self.region.zoom(width_px=width, height_px=height)

    def _meters_per_pixel(self) -> float:
        width, height = self._viewport
        return self.region.meters_per_pixel(width_px=width, height_px=height)

    def convert_point(self, point: ScreenPoint) -> Coordinate:
        """Coordinate under a viewport pixel for the current region and bearing."""
        width, height = self._viewport
        scale = self._meters_per_pixel()
        # Screen offsets from center: right and up
        dx = (point.x - width / 2) * scale
        dy = (height / 2 - point.y) * scale
        theta = radians(self.bearing_deg)
        east = dx * cos(theta) + dy * sin(theta)
        north = -dx * sin(theta) + dy * cos(theta)
        cx, cy = lonlat_to_xy(self.region.center.lon, self.region.center.lat)
        lon, lat = xy_to_lonlat(cx + east, cy + north)
        return Coordinate(lat=lat, lon=wrap_lon(lon))

    def convert_coordinate(self, coordinate: Coordinate) -> ScreenPoint:
        """Viewport pixel of a coordinate for the current region and bearing."""
        width, height = self._viewport
        scale = self._meters_per_pixel()
        if scale <= 0:
            return ScreenPoint(x=width / 2, y=height / 2)
        cx, cy = lonlat_to_xy(self.region.center.lon, self.region.center.lat)
        x, y = lonlat_to_xy(coordinate.lon, coordinate.lat)
        east, north = x - cx, y - cy
        theta = radians(self.bearing_deg)
        dx = east * cos(theta) - north * sin(theta)
        dy = east * sin(theta) + north * cos(theta)
        return ScreenPoint(x=width / 2 + dx / scale, y=height / 2 - dy / scale)

    # =========================================================================
    # USER LOCATION
    # =========================================================================

    @property
    def shows_user_location(self) -> bool:
        return self._shows_user_location

    @shows_user_location.setter
    def shows_user_location(self, value: bool) -> None:
        self._shows_user_location = value
        if not value:
            self.user_location = None

    def attach_location_source(self, manager: Any) -> None:
        """Listen to a LocationManager for fixes shown as the user dot."""
        manager.add_listener(self)

    def on_location_updated(self, fix: LocationFix) -> None:
        """LocationManager listener: show the fix and re-raise it."""
        if not self._shows_user_location:
            return
        self.user_location = fix
        if self.user_tracking_mode is UserTrackingMode.FOLLOW_WITH_HEADING and fix.heading_deg is not None:
            self.bearing_deg = fix.heading_deg
        self._notify("on_user_location_updated", fix=fix)

    def _notify(self, event: str, **kwargs: Any) -> None:
        for listener in list(self._listeners):
            callback = getattr(listener, event, None)
            if callback is not None:
                callback(**kwargs)
