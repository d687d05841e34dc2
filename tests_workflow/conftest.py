"""Shared pytest fixtures for pinroute workflow tests.

Workflow tests drive a fully wired ScreenController the way the app does:
platform answers arrive through the LocationManager, taps and presses
through MapSurface, and every result is applied by draining the MainQueue.
Test doubles (clock, executor, directions) come from tests/conftest.py.

COORDINATES:
    Central Berlin. The simulated device sits at HOME; pins go to PIN_A/PIN_B.
"""

import pytest

from pinroute.core.main_queue import MainQueue
from pinroute.model.annotation import PointAnnotation
from pinroute.model.authorization import AuthorizationStatus
from pinroute.model.coordinate import Coordinate
from pinroute.model.location_fix import LocationFix
from pinroute.services.location_manager import LocationManager
from pinroute.ui.click_handlers import replay_as_long_press
from pinroute.ui.map_surface import MapSurface
from pinroute.ui.screen_controller import ScreenController
from pinroute.ui.state_machine import ScreenContext, ScreenStateMachine

from tests.conftest import HOME, FakeDirectionsService, ManualClock, ManualExecutor

SMAndCtx = tuple[ScreenStateMachine, ScreenContext]


class Screen:
    """A wired map screen plus helpers acting as user and device.

    Attributes mirror the collaborators so tests can assert on them directly.
    """

    def __init__(self, executor: ManualExecutor, status: AuthorizationStatus) -> None:
        self.clock = ManualClock()
        self.main_queue = MainQueue(clock=self.clock)
        self.location_manager = LocationManager(status=status)
        self.surface = MapSurface()
        self.directions = FakeDirectionsService()
        self.executor = executor
        self.sm, self.ctx = ScreenStateMachine.create(add_log_listener=False)
        self.controller = ScreenController(
            surface=self.surface,
            location_manager=self.location_manager,
            directions=self.directions,
            main_queue=self.main_queue,
            state_machine=self.sm,
            executor=executor,
        )

    # Device side

    def answer_prompt(self, status: AuthorizationStatus) -> None:
        self.location_manager.set_authorization_status(status)

    def report_position(self, coordinate: Coordinate = HOME, heading_deg: float | None = None) -> bool:
        fix = LocationFix(coordinate=coordinate, horizontal_accuracy_m=20.0, heading_deg=heading_deg)
        return self.location_manager.deliver_fix(fix)

    def wait(self, seconds: float) -> int:
        """Let time pass, then run whatever became due on the MainQueue."""
        self.clock.advance(seconds)
        return self.controller.process_pending(now=self.clock())

    # User side

    def long_press(self, coordinate: Coordinate) -> PointAnnotation:
        """Press and hold on a coordinate; returns the pin it created."""
        before = len(self.surface.annotations)
        replay_as_long_press(self.surface, coordinate, now=self.clock())
        assert len(self.surface.annotations) == before + 1, "long press did not add a pin"
        return self.surface.annotations[-1]

    def select(self, pin: PointAnnotation) -> None:
        self.surface.select_annotation(pin.id)

    def tap_trash(self) -> None:
        self.controller.clear_all()

    # App side

    def recover(self) -> None:
        """Replace the controller as the app's error recovery does; pins and device stay."""
        old_controller = self.controller
        old_controller.shutdown()
        self.sm, self.ctx = ScreenStateMachine.create(add_log_listener=False)
        self.controller = ScreenController(
            surface=self.surface,
            location_manager=self.location_manager,
            directions=self.directions,
            main_queue=self.main_queue,
            state_machine=self.sm,
            executor=self.executor,
        )
        self.controller.start()
        self.ctx.alert = old_controller.ctx.alert


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def sm_and_ctx() -> SMAndCtx:
    """Fresh state machine and context, without transition logging."""
    return ScreenStateMachine.create(add_log_listener=False)


@pytest.fixture
def screen() -> Screen:
    """Screen on first launch (authorization not determined), not started."""
    return Screen(executor=ManualExecutor(auto_run=True), status=AuthorizationStatus.NOT_DETERMINED)


@pytest.fixture
def tracking_screen() -> Screen:
    """Started screen, authorized, with a first fix at HOME already applied."""
    screen = Screen(executor=ManualExecutor(auto_run=True), status=AuthorizationStatus.AUTHORIZED_WHEN_IN_USE)
    screen.controller.start()
    screen.report_position(HOME)
    screen.wait(1.2)
    return screen


@pytest.fixture
def slow_network_screen() -> Screen:
    """Like tracking_screen, but directions requests only finish on executor.run()."""
    screen = Screen(executor=ManualExecutor(auto_run=False), status=AuthorizationStatus.AUTHORIZED_WHEN_IN_USE)
    screen.controller.start()
    screen.report_position(HOME)
    screen.wait(1.2)
    return screen
