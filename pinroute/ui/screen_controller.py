"""ScreenController - wires the map screen together.

Startup sequence (start()):
1. Check location permission (PermissionCoordinator)
2. Lay out the map surface: install the long-press recognizer, register
   as surface listener, attach the location source, register the overlay
   style provider
3. Present the one-time instruction alert

Event handling:
- Long-press began -> add a pin at the pressed coordinate
- Pin selected     -> clear route overlays, request a new route
- User location    -> schedule a delayed camera recentre
- Trash button     -> clear_all(): remove every pin and overlay

All handlers run on the UI context. Only the directions call leaves it.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from pinroute.constants import GestureConfig, LocationConfig, StyleConfig
from pinroute.core.main_queue import MainQueue
from pinroute.model.annotation import PointAnnotation
from pinroute.model.coordinate import Coordinate
from pinroute.model.location_fix import LocationFix
from pinroute.model.message import InstructionMessage
from pinroute.model.region import MapRegion
from pinroute.model.route import PolylineStyle, RouteOverlay
from pinroute.services.directions import DirectionsService
from pinroute.services.location_manager import LocationManager
from pinroute.ui.long_press import LongPressGestureRecognizer, ScreenPoint
from pinroute.ui.map_surface import MapSurface
from pinroute.ui.permission_coordinator import PermissionCoordinator
from pinroute.ui.route_requester import RouteRequester
from pinroute.ui.state_machine import ScreenContext, ScreenStateMachine

logger = logging.getLogger(__name__)


class ScreenController:
    """Orchestrates permission flow, pins, routes and camera for one screen.

    Example:
        controller = ScreenController(
            surface=MapSurface(),
            location_manager=LocationManager(),
            directions=OSRMDirectionsClient(),
            main_queue=MainQueue(),
        )
        controller.start()
    """

    def __init__(
        self,
        surface: MapSurface,
        location_manager: LocationManager,
        directions: DirectionsService,
        main_queue: MainQueue,
        state_machine: ScreenStateMachine | None = None,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.surface = surface
        self.location_manager = location_manager
        self.main_queue = main_queue
        if state_machine is None:
            state_machine, _ = ScreenStateMachine.create()
        self.sm = state_machine

        self.permissions = PermissionCoordinator(
            location_manager=location_manager,
            surface=surface,
            on_authorized=self.update_current_area,
        )
        self.route_requester = RouteRequester(
            directions=directions,
            location_manager=location_manager,
            surface=surface,
            main_queue=main_queue,
            executor=executor,
        )
        self.long_press = LongPressGestureRecognizer(
            action=surface.long_press_action,
            minimum_press_duration=GestureConfig.MIN_PRESS_DURATION_S,
            number_of_taps_required=GestureConfig.NUMBER_OF_TAPS_REQUIRED,
        )
        self._started = False

    @property
    def ctx(self) -> ScreenContext:
        return self.sm.context

    # =========================================================================
    # STARTUP
    # =========================================================================

    def start(self) -> None:
        """Run the startup sequence once."""
        if self._started:
            return
        self._started = True
        self.permissions.start()
        self.setup_surface()
        self.present_instructions()

    def setup_surface(self) -> None:
        self.surface.add_gesture_recognizer(self.long_press)
        self.surface.add_listener(self)
        self.surface.attach_location_source(self.location_manager)
        self.surface.set_overlay_style_provider(self.style_for_overlay)

    def present_instructions(self) -> InstructionMessage | None:
        """Mark the instruction alert as presented (first call only)."""
        if self.ctx.alert.instructions_presented:
            return None
        self.ctx.alert.instructions_presented = True
        return InstructionMessage()

    def dismiss_instructions(self) -> None:
        self.ctx.alert.instructions_dismissed = True

    def style_for_overlay(self, overlay: RouteOverlay) -> PolylineStyle:
        return PolylineStyle(line_width=StyleConfig.ROUTE_LINE_WIDTH, stroke_color=StyleConfig.ROUTE_COLOR_RGBA)

    # =========================================================================
    # CAMERA
    # =========================================================================

    def update_current_area(self) -> None:
        """Schedule a recentre on the current location after a short delay."""
        fix = self.location_manager.location
        if fix is None:
            return
        region = MapRegion.from_center(
            center=fix.coordinate,
            latitudinal_m=LocationConfig.RECENTRE_SPAN_M,
            longitudinal_m=LocationConfig.RECENTRE_SPAN_M,
        )
        self.main_queue.post_after(
            LocationConfig.RECENTRE_DELAY_S,
            partial(self.surface.set_region, region, animated=True),
        )
        logger.debug(f"[MAP] Recentre on {fix.coordinate} scheduled in {LocationConfig.RECENTRE_DELAY_S}s")

    # =========================================================================
    # SURFACE EVENTS
    # =========================================================================

    def on_user_location_updated(self, fix: LocationFix) -> None:
        self.update_current_area()

    def on_long_press_began(self, point: ScreenPoint) -> None:
        coordinate = self.surface.convert_point(point)
        self.add_pin(coordinate)

    def on_annotation_selected(self, annotation: PointAnnotation) -> None:
        self.surface.remove_overlays(self.surface.overlays)
        self.show_route(annotation)

    # =========================================================================
    # ACTIONS
    # =========================================================================

    def add_pin(self, coordinate: Coordinate) -> PointAnnotation:
        self.sm.place_pin(coordinate=coordinate)
        pin = self.surface.add_annotation(coordinate)
        if self.sm.is_pin_placed:
            self.sm.pin_added(pin_id=pin.id)
        return pin

    def show_route(self, annotation: PointAnnotation) -> None:
        """Request a route from the current location to a pin."""
        self.sm.select_pin(pin_id=annotation.id, destination=annotation.coordinate)
        generation = self.ctx.route.generation
        future = self.route_requester.request(
            destination=annotation.coordinate,
            generation=generation,
            is_current=self.ctx.route.is_current,
            on_complete=self._route_finished,
        )
        if future is None:
            self._route_finished(generation, False)

    def _route_finished(self, generation: int, success: bool) -> None:
        self.sm.route_finished(generation=generation, success=success)

    def clear_all(self) -> None:
        """Remove every overlay and every pin."""
        self.surface.remove_overlays(self.surface.overlays)
        self.surface.remove_annotations(self.surface.annotations)
        self.sm.clear_all()
        logger.info("[MAP] Cleared all pins and overlays")

    # =========================================================================
    # UI LOOP
    # =========================================================================

    @property
    def has_pending_work(self) -> bool:
        return self.main_queue.has_pending() or self.route_requester.has_in_flight

    def process_pending(self, now: float | None = None) -> int:
        """Advance held gestures and run due MainQueue work. Call from the UI loop."""
        if now is not None:
            self.surface.tick(now)
        return self.main_queue.drain()

    def shutdown(self) -> None:
        """Stop background work and detach from the surface and location manager."""
        self.route_requester.shutdown()
        self.location_manager.remove_listener(self.permissions)
        self.location_manager.remove_listener(self.surface)
        self.surface.remove_listener(self)
        self.surface.remove_gesture_recognizer(self.long_press)
