"""Long-press gesture recognition on the map surface.

A LongPressGestureRecognizer consumes raw TouchEvents (plus tick() calls
while a finger is held) and reports to its action callback:

    POSSIBLE --(held >= minimum_press_duration)--> BEGAN --(move)--> CHANGED
    BEGAN/CHANGED --(finger up)--> ENDED
    BEGAN/CHANGED --(system cancel)--> CANCELLED
    POSSIBLE --(moved too far | released early)--> FAILED   (not reported)

number_of_taps_required quick taps must precede the press. With the
default of 0 the press starts at the first touch.

The web map only reports completed clicks, so the click adapter replays
each click as a press held for exactly minimum_press_duration. The
threshold check therefore also runs at release, not only on tick().
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from math import hypot

from pinroute.constants import GestureConfig

logger = logging.getLogger(__name__)

# Float tolerance for hold-duration comparisons
_DURATION_EPSILON_S = 1e-6


@dataclass(frozen=True)
class ScreenPoint:
    """Pixel position in the map viewport (origin top-left, y down)."""

    x: float
    y: float

    def distance_to(self, other: ScreenPoint) -> float:
        return hypot(self.x - other.x, self.y - other.y)


class TouchPhase(Enum):
    BEGAN = "began"
    MOVED = "moved"
    ENDED = "ended"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class TouchEvent:
    phase: TouchPhase
    point: ScreenPoint
    timestamp: float


class GestureState(Enum):
    POSSIBLE = "possible"
    BEGAN = "began"
    CHANGED = "changed"
    ENDED = "ended"
    CANCELLED = "cancelled"
    FAILED = "failed"


class LongPressGestureRecognizer:
    """Recognizes a press held in place for a minimum duration.

    Example:
        recognizer = LongPressGestureRecognizer(action=controller.long_press_action)
        surface.add_gesture_recognizer(recognizer)
    """

    def __init__(
        self,
        action: Callable[[LongPressGestureRecognizer], None],
        minimum_press_duration: float = GestureConfig.MIN_PRESS_DURATION_S,
        number_of_taps_required: int = GestureConfig.NUMBER_OF_TAPS_REQUIRED,
        allowable_movement: float = GestureConfig.ALLOWABLE_MOVEMENT_PX,
        tap_interval: float = GestureConfig.TAP_INTERVAL_S,
    ) -> None:
        if minimum_press_duration < 0:
            raise ValueError(f"minimum_press_duration must be non-negative, got {minimum_press_duration}")
        if number_of_taps_required < 0:
            raise ValueError(f"number_of_taps_required must be non-negative, got {number_of_taps_required}")
        self._action = action
        self.minimum_press_duration = minimum_press_duration
        self.number_of_taps_required = number_of_taps_required
        self.allowable_movement = allowable_movement
        self.tap_interval = tap_interval

        self._state = GestureState.POSSIBLE
        self._location: ScreenPoint | None = None
        # "tap" while counting preceding taps, "press" while tracking the hold
        self._tracking: str | None = None
        self._touch_start: TouchEvent | None = None
        self._taps_seen = 0
        self._last_tap_end: float | None = None

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def location(self) -> ScreenPoint | None:
        """Current touch location, in map viewport pixels."""
        return self._location

    def handle(self, event: TouchEvent) -> None:
        """Feed one touch event."""
        handlers = {
            TouchPhase.BEGAN: self._touch_began,
            TouchPhase.MOVED: self._touch_moved,
            TouchPhase.ENDED: self._touch_ended,
            TouchPhase.CANCELLED: self._touch_cancelled,
        }
        handlers[event.phase](event)

    def tick(self, now: float) -> None:
        """Advance time while a finger is down; fires BEGAN once the hold is long enough."""
        if self._tracking != "press" or self._state is not GestureState.POSSIBLE or self._touch_start is None:
            return
        held = now - self._touch_start.timestamp
        if held + _DURATION_EPSILON_S >= self.minimum_press_duration:
            self._transition(GestureState.BEGAN)

    def reset(self) -> None:
        self._state = GestureState.POSSIBLE
        self._tracking = None
        self._touch_start = None
        self._location = None

    # =========================================================================
    # TOUCH PHASES
    # =========================================================================

    def _touch_began(self, event: TouchEvent) -> None:
        if self._state in (GestureState.ENDED, GestureState.CANCELLED, GestureState.FAILED):
            self.reset()

        if self._last_tap_end is not None and event.timestamp - self._last_tap_end > self.tap_interval:
            self._taps_seen = 0

        self._touch_start = event
        self._location = event.point
        self._tracking = "press" if self._taps_seen >= self.number_of_taps_required else "tap"

    def _touch_moved(self, event: TouchEvent) -> None:
        if self._tracking is None or self._touch_start is None:
            return

        if self._tracking == "press":
            self.tick(event.timestamp)

        if self._state in (GestureState.BEGAN, GestureState.CHANGED):
            self._location = event.point
            self._transition(GestureState.CHANGED)
            return

        if event.point.distance_to(self._touch_start.point) > self.allowable_movement:
            logger.debug(f"Long press failed: moved beyond {self.allowable_movement}px")
            self._fail()

    def _touch_ended(self, event: TouchEvent) -> None:
        if self._tracking is None or self._touch_start is None:
            return

        if self._tracking == "tap":
            held = event.timestamp - self._touch_start.timestamp
            if held + _DURATION_EPSILON_S < self.minimum_press_duration:
                self._taps_seen += 1
                self._last_tap_end = event.timestamp
                self._tracking = None
                self._touch_start = None
            else:
                self._fail()
            return

        self.tick(event.timestamp)
        if self._state in (GestureState.BEGAN, GestureState.CHANGED):
            self._location = event.point
            self._transition(GestureState.ENDED)
            self._finish_press()
        else:
            self._fail()

    def _touch_cancelled(self, event: TouchEvent) -> None:
        if self._state in (GestureState.BEGAN, GestureState.CHANGED):
            self._transition(GestureState.CANCELLED)
            self._finish_press()
        else:
            self._fail()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _transition(self, state: GestureState) -> None:
        self._state = state
        self._action(self)

    def _finish_press(self) -> None:
        self._tracking = None
        self._touch_start = None
        self._taps_seen = 0
        self._last_tap_end = None

    def _fail(self) -> None:
        self._state = GestureState.FAILED
        self._finish_press()
