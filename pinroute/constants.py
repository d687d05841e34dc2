"""Configuration constants for PinRoute Planner.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: UI application settings
    MapConfig: Default map view parameters
    LocationConfig: Location tracking and camera recentre parameters
    RouteConfig: Directions service and route framing parameters
    GestureConfig: Long-press recognizer parameters
    StyleConfig: Visual colors and styling
    ClickConfig: Pickable object types and click handling
    QueueConfig: UI loop polling
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Package root directory (where pinroute/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of pinroute/)
PROJECT_ROOT = PACKAGE_DIR.parent

# Read PINROUTE_* overrides from a local .env if present
load_dotenv(PROJECT_ROOT / ".env")


class AppConfig:
    """UI application settings."""

    TITLE = "PinRoute"
    ICON = "📍"
    LAYOUT = "wide"

    INSTRUCTIONS = "Set a pin: long press. Show route: select pin."
    INSTRUCTIONS_DISMISS_LABEL = "Ok"
    CLEAR_BUTTON_ICON = "🗑️"
    CLEAR_BUTTON_HELP = "Remove all pins and routes"


class EntityPrefixes:
    """ID prefixes for map entities."""

    PIN = "P"
    ROUTE = "R"


class MapConfig:
    """Default map view parameters."""

    # Initial center before the first location fix: Berlin Mitte
    START_CENTER_LAT = 52.5200
    START_CENTER_LON = 13.4050
    START_SPAN_M = 5000.0

    # Viewport size used for screen point <-> coordinate conversion
    VIEWPORT_WIDTH_PX = 1000
    VIEWPORT_HEIGHT_PX = 640

    # Web Mercator tile size in pixels (zoom level computation)
    TILE_SIZE_PX = 256
    MIN_ZOOM = 1.0
    MAX_ZOOM = 19.0

    # Rotation is disabled; bearing only changes through heading tracking
    ROTATE_ENABLED = False
    SHOWS_COMPASS = True

    # Camera transition when a region change is animated (milliseconds)
    CAMERA_ANIMATION_MS = 800

    # At equator, 1 degree of latitude ≈ 111,320 meters
    METERS_PER_DEGREE_EQUATOR = 111320.0


class LocationConfig:
    """Location tracking parameters."""

    # Coarse accuracy requested once authorized (meters)
    DESIRED_ACCURACY_M = 50.0

    # Region shown around the user after a fix (meters on each axis)
    RECENTRE_SPAN_M = 1000.0

    # Delay before the camera recentre is applied (seconds)
    RECENTRE_DELAY_S = 1.2

    # Simulated device position shown in the sidebar before the user edits it
    DEFAULT_FIX_LAT = 52.5163
    DEFAULT_FIX_LON = 13.3777


class RouteConfig:
    """Directions service and route framing parameters."""

    OSRM_BASE_URL = os.getenv("PINROUTE_OSRM_URL", "https://router.project-osrm.org")
    TIMEOUT_S = float(os.getenv("PINROUTE_OSRM_TIMEOUT_S", "10"))

    # Padding around the route's bounding rect (Web Mercator meters per side)
    REGION_PADDING_M = 300.0

    # Background workers for directions requests
    MAX_WORKERS = 2


class GestureConfig:
    """Long-press recognizer parameters."""

    MIN_PRESS_DURATION_S = 0.3
    NUMBER_OF_TAPS_REQUIRED = 0
    ALLOWABLE_MOVEMENT_PX = 10.0
    # Max gap between quick taps preceding a press
    TAP_INTERVAL_S = 0.35


class StyleConfig:
    """Visual colors and styling (RGBA 0-255 for deck.gl)."""

    ROUTE_LINE_WIDTH = 5
    ROUTE_COLOR_RGBA = (50, 173, 230, 255)  # cyan

    PIN_COLOR_RGBA = (255, 59, 48, 255)
    PIN_SELECTED_COLOR_RGBA = (255, 204, 0, 255)
    PIN_RADIUS_PX = 9

    USER_LOCATION_COLOR_RGBA = (0, 122, 255, 255)
    USER_ACCURACY_COLOR_RGBA = (0, 122, 255, 40)
    USER_LOCATION_RADIUS_PX = 7


class ClickConfig:
    """Pickable object types and click handling."""

    TYPE_PIN = "pin"
    TYPE_ROUTE = "route"
    TYPE_USER_LOCATION = "user_location"

    # deck.gl picking tolerance in pixels
    PICKING_RADIUS_PX = 8

    MAP_HEIGHT_PX = MapConfig.VIEWPORT_HEIGHT_PX


class QueueConfig:
    """UI loop polling while background work is pending."""

    POLL_INTERVAL_S = 0.25
