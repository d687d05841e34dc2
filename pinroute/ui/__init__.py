"""User interface components for PinRoute.

File Structure (layout-based naming):
- left_panel.py: Sidebar device panel (permission prompt, settings, location fixes)
- center_map.py: Pydeck map with pins, route overlays, user location
- map_style.py: Hybrid/standard raster basemap styles

Core Components:
- map_surface.py: MapSurface (annotations, overlays, camera, user location)
- long_press.py: LongPressGestureRecognizer and touch types
- state_machine.py: ScreenStateMachine (3 states) + ScreenContext
- screen_controller.py: ScreenController wiring permission, pins and routes
- permission_coordinator.py: Authorization decision table
- route_requester.py: Background directions requests applied on the MainQueue
- click_detector.py / click_handlers.py: Web-map click detection and dispatch
"""

from pinroute.ui.center_map import LayerCollection, MapRenderer
from pinroute.ui.click_detector import ClickDetector
from pinroute.ui.click_handlers import dispatch_click
from pinroute.ui.left_panel import SidebarRenderer
from pinroute.ui.long_press import GestureState, LongPressGestureRecognizer, ScreenPoint, TouchEvent, TouchPhase
from pinroute.ui.map_surface import MapStyle, MapSurface, UserTrackingMode
from pinroute.ui.permission_coordinator import PermissionCoordinator
from pinroute.ui.route_requester import RouteRequester
from pinroute.ui.screen_controller import ScreenController
from pinroute.ui.state_machine import ScreenContext, ScreenStateMachine

__all__ = [
    "ClickDetector",
    "dispatch_click",
    "GestureState",
    "LayerCollection",
    "LongPressGestureRecognizer",
    "MapRenderer",
    "MapStyle",
    "MapSurface",
    "PermissionCoordinator",
    "RouteRequester",
    "ScreenContext",
    "ScreenController",
    "ScreenPoint",
    "ScreenStateMachine",
    "SidebarRenderer",
    "TouchEvent",
    "TouchPhase",
    "UserTrackingMode",
]
