"""RouteRequester - asks the directions service for a route off the UI thread.

Flow for one request:
1. request() is called on the UI context with the destination pin.
   No current location -> no-op.
2. The blocking DirectionsService.calculate() runs on a worker thread.
3. The worker's completion is posted to the MainQueue; nothing on screen
   is touched from the worker.
4. On the UI context: responses arriving after shutdown() and stale
   generations are dropped; errors, cancellations and empty
   results are logged; otherwise the first route's polyline is installed
   as the overlay and the camera animates to its padded bounds.

Clearing previous overlays is the caller's job (selection handler), not
the requester's.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from functools import partial

from pinroute.constants import EntityPrefixes, RouteConfig
from pinroute.core.main_queue import MainQueue
from pinroute.model.coordinate import Coordinate
from pinroute.model.route import RouteOverlay
from pinroute.services.directions import (
    DirectionsError,
    DirectionsRequest,
    DirectionsResponse,
    DirectionsService,
    TransportType,
)
from pinroute.services.location_manager import LocationManager
from pinroute.ui.map_surface import MapSurface

logger = logging.getLogger(__name__)

# (generation, success) -> None, always called on the MainQueue
CompletionCallback = Callable[[int, bool], None]


class RouteRequester:
    """Issues directions requests and applies their results to the map."""

    def __init__(
        self,
        directions: DirectionsService,
        location_manager: LocationManager,
        surface: MapSurface,
        main_queue: MainQueue,
        executor: ThreadPoolExecutor | None = None,
        padding_m: float = RouteConfig.REGION_PADDING_M,
        transport_type: TransportType = TransportType.AUTOMOBILE,
    ) -> None:
        self._directions = directions
        self._location_manager = location_manager
        self._surface = surface
        self._main_queue = main_queue
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=RouteConfig.MAX_WORKERS, thread_name_prefix="directions"
        )
        self._padding_m = padding_m
        self._transport_type = transport_type
        self._overlay_ids = itertools.count(1)
        self._in_flight: set[Future[DirectionsResponse]] = set()
        self._closed = False

    @property
    def has_in_flight(self) -> bool:
        """True while a request has not yet been applied on the MainQueue."""
        return bool(self._in_flight)

    def request(
        self,
        destination: Coordinate,
        generation: int,
        is_current: Callable[[int], bool],
        on_complete: CompletionCallback,
    ) -> Future[DirectionsResponse] | None:
        """Start a route request from the current location to destination.

        Args:
            destination: Selected pin coordinate
            generation: Request generation token from the screen context
            is_current: Checks on the UI context whether a generation still applies
            on_complete: Called on the UI context after a current request finishes

        Returns:
            The worker future, or None if there is no current location.
        """
        fix = self._location_manager.location
        if fix is None:
            logger.info("[ROUTE] No current location, route request skipped")
            return None

        directions_request = DirectionsRequest(
            source=fix.coordinate,
            destination=destination,
            transport_type=self._transport_type,
        )
        logger.info(f"[ROUTE] Request #{generation}: {fix.coordinate} -> {destination}")
        future = self._executor.submit(self._directions.calculate, directions_request)
        self._in_flight.add(future)
        future.add_done_callback(
            lambda done: self._main_queue.post(
                partial(self._complete, done, generation=generation, is_current=is_current, on_complete=on_complete)
            )
        )
        return future

    def _complete(
        self,
        future: Future[DirectionsResponse],
        generation: int,
        is_current: Callable[[int], bool],
        on_complete: CompletionCallback,
    ) -> None:
        """Apply a finished request. Runs on the MainQueue."""
        self._in_flight.discard(future)
        if self._closed:
            # The screen that asked is gone; the shared surface belongs to its successor
            logger.info(f"[ROUTE] Request #{generation} finished after shutdown, response dropped")
            return
        if not is_current(generation):
            logger.info(f"[ROUTE] Request #{generation} superseded, response dropped")
            return

        try:
            response = future.result()
        except CancelledError:
            logger.warning(f"[ROUTE] Request #{generation} cancelled")
            on_complete(generation, False)
            return
        except DirectionsError as e:
            logger.warning(f"[ROUTE] Request #{generation} failed: {e}")
            on_complete(generation, False)
            return

        if not response.routes:
            logger.warning(f"[ROUTE] Request #{generation} returned no routes")
            on_complete(generation, False)
            return

        route = response.routes[0]
        overlay = RouteOverlay.from_route(
            overlay_id=f"{EntityPrefixes.ROUTE}{next(self._overlay_ids)}",
            route=route,
            padding_m=self._padding_m,
        )
        self._surface.add_overlay(overlay)
        self._surface.set_region(overlay.region, animated=True)
        logger.info(
            f"[ROUTE] Request #{generation}: {route.distance_m:.0f} m, {route.expected_travel_time_s:.0f} s "
            f"({len(response.routes)} candidate(s))"
        )
        on_complete(generation, True)

    def shutdown(self) -> None:
        """Drop every later response and stop the worker pool if this requester created it.

        Requests already running cannot be cancelled; their completions still
        reach the MainQueue and are discarded there.
        """
        self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
