"""Shared pytest fixtures for pinroute tests.

Provides deterministic stand-ins for everything with time or I/O:
- ManualClock: injectable monotonic clock for MainQueue delays
- ManualExecutor: executor that runs submitted work only when told to
- FakeDirectionsService: DirectionsService returning canned routes

COORDINATES:
    Tests use central Berlin. HOME is the simulated device position,
    PIN_A/PIN_B are pin destinations a few kilometers away.
"""

from collections.abc import Callable
from concurrent.futures import Executor, Future
from typing import Any

import pytest

from pinroute.core.main_queue import MainQueue
from pinroute.model.coordinate import Coordinate
from pinroute.model.location_fix import LocationFix
from pinroute.model.route import Polyline, Route
from pinroute.services.directions import DirectionsError, DirectionsRequest, DirectionsResponse
from pinroute.services.location_manager import LocationManager
from pinroute.ui.map_surface import MapSurface
from pinroute.ui.screen_controller import ScreenController
from pinroute.ui.state_machine import ScreenStateMachine

HOME = Coordinate(lat=52.5163, lon=13.3777)
PIN_A = Coordinate(lat=52.5200, lon=13.4050)
PIN_B = Coordinate(lat=52.5000, lon=13.4500)


# =============================================================================
# TEST DOUBLES
# =============================================================================


class ManualClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualExecutor(Executor):
    """Executor holding submitted calls until run() is called.

    With auto_run=True every submission completes immediately on the
    calling thread, which makes controller flows fully synchronous.
    """

    def __init__(self, auto_run: bool = False) -> None:
        self.auto_run = auto_run
        self.pending: list[tuple[Future, Callable[..., Any], tuple, dict]] = []
        self.shutdown_called = False

    def submit(self, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Future:
        future: Future = Future()
        self.pending.append((future, fn, args, kwargs))
        if self.auto_run:
            self.run()
        return future

    def run(self, index: int = 0) -> Future:
        """Execute one pending submission (oldest by default)."""
        future, fn, args, kwargs = self.pending.pop(index)
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)
        return future

    def run_all(self) -> None:
        while self.pending:
            self.run()

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        self.shutdown_called = True


def make_route(*points: Coordinate, distance_m: float = 3200.0, travel_time_s: float = 420.0) -> Route:
    """Route through the given points (defaults to HOME -> PIN_A)."""
    coordinates = points or (HOME, PIN_A)
    return Route(
        polyline=Polyline(coordinates=tuple(coordinates)),
        distance_m=distance_m,
        expected_travel_time_s=travel_time_s,
        name="Unter den Linden",
    )


class FakeDirectionsService:
    """DirectionsService answering every request from a per-destination table.

    Unknown destinations get a straight two-point route. Set error to make
    every call raise DirectionsError.
    """

    def __init__(self) -> None:
        self.requests: list[DirectionsRequest] = []
        self.routes_by_destination: dict[Coordinate, tuple[Route, ...]] = {}
        self.error: DirectionsError | None = None

    def calculate(self, request: DirectionsRequest) -> DirectionsResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        routes = self.routes_by_destination.get(
            request.destination, (make_route(request.source, request.destination),)
        )
        return DirectionsResponse(request=request, routes=routes)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def main_queue(clock: ManualClock) -> MainQueue:
    return MainQueue(clock=clock)


@pytest.fixture
def location_manager() -> LocationManager:
    return LocationManager()


@pytest.fixture
def surface() -> MapSurface:
    return MapSurface()


@pytest.fixture
def directions() -> FakeDirectionsService:
    return FakeDirectionsService()


@pytest.fixture
def executor() -> ManualExecutor:
    return ManualExecutor(auto_run=True)


@pytest.fixture
def home_fix() -> LocationFix:
    return LocationFix(coordinate=HOME, horizontal_accuracy_m=20.0)


@pytest.fixture
def controller(
    surface: MapSurface,
    location_manager: LocationManager,
    directions: FakeDirectionsService,
    main_queue: MainQueue,
    executor: ManualExecutor,
) -> ScreenController:
    """Controller wired to test doubles, not yet started."""
    sm, _ = ScreenStateMachine.create(add_log_listener=False)
    return ScreenController(
        surface=surface,
        location_manager=location_manager,
        directions=directions,
        main_queue=main_queue,
        state_machine=sm,
        executor=executor,
    )
