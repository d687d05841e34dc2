"""Click handlers - apply detected web-map clicks to the map surface.

The browser map reports only completed clicks, never press duration, so:
- PIN click -> select the annotation (raises on_annotation_selected)
- MAP click -> replayed as a touch held for exactly the long-press
  minimum duration, so the installed recognizer fires BEGAN and the
  screen adds a pin

Handlers never touch the state machine directly; every effect goes
through MapSurface events.
"""

import logging
import time

from pinroute.core.projection import wrap_lon
from pinroute.model.click_info import ClickInfo, MapClickType
from pinroute.model.coordinate import Coordinate
from pinroute.ui.long_press import TouchEvent, TouchPhase
from pinroute.ui.map_surface import MapSurface

logger = logging.getLogger(__name__)


def dispatch_click(surface: MapSurface, click_info: ClickInfo, now: float | None = None) -> None:
    """Dispatch a click to the handler for its type.

    Args:
        surface: Map surface receiving the click
        click_info: Detected click
        now: Click time (defaults to time.monotonic())
    """
    logger.info(f"[MAP] Click: {click_info.display_name}")
    if click_info.click_type == MapClickType.PIN:
        handle_pin_click(surface=surface, pin_id=click_info.pin_id)
    else:
        # deck.gl reports unwrapped longitudes beside the central world copy
        coordinate = Coordinate(lat=click_info.lat, lon=wrap_lon(click_info.lon))
        replay_as_long_press(surface=surface, coordinate=coordinate, now=time.monotonic() if now is None else now)


def handle_pin_click(surface: MapSurface, pin_id: str) -> None:
    if surface.annotation(pin_id) is None:
        # Pin was cleared after this frame was drawn
        logger.warning(f"[MAP] Click on stale pin {pin_id} ignored")
        return
    surface.select_annotation(pin_id)


def replay_as_long_press(surface: MapSurface, coordinate: Coordinate, now: float) -> None:
    """Feed a press-hold-release at a coordinate through the surface's recognizers."""
    point = surface.convert_coordinate(coordinate)
    surface.handle_touch(TouchEvent(phase=TouchPhase.BEGAN, point=point, timestamp=now))
    released = now + _longest_minimum_press(surface)
    surface.tick(released)
    surface.handle_touch(TouchEvent(phase=TouchPhase.ENDED, point=point, timestamp=released))


def _longest_minimum_press(surface: MapSurface) -> float:
    durations = [r.minimum_press_duration for r in surface.gesture_recognizers]
    return max(durations, default=0.0)
