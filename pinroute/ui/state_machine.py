"""State machine for the map screen's pin/route lifecycle.

Uses python-statemachine for explicit, event-driven transitions with
entry/exit hooks.

States:
    IDLE: Nothing in flight (initial)
    PIN_PLACED: A long-press just added a pin (single-shot, left immediately)
    ROUTE_REQUESTED: A directions request is in flight

Transitions:
    IDLE -> PIN_PLACED: place_pin (long-press began)
    PIN_PLACED -> IDLE: pin_added
    IDLE -> ROUTE_REQUESTED: select_pin
    ROUTE_REQUESTED -> IDLE: route_finished (success or failure), clear_all
    ROUTE_REQUESTED -> ROUTE_REQUESTED: place_pin, select_pin (newer request supersedes)
    IDLE -> IDLE: clear_all

There is no error state. Every failure returns to IDLE.

Request generations
-------------------
Each select_pin bumps RouteContext.generation; clear_all bumps it too.
A directions response carries the generation it was issued under and is
dropped if that is no longer current, so a slow first response can never
overwrite a newer route or resurrect a cleared one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from pinroute.model.coordinate import Coordinate

logger = logging.getLogger(__name__)


@dataclass
class RouteContext:
    """Directions request bookkeeping."""

    generation: int = 0
    destination: Coordinate | None = None
    destination_pin_id: str | None = None

    def next_generation(self) -> int:
        self.generation += 1
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def clear(self) -> None:
        self.destination = None
        self.destination_pin_id = None


@dataclass
class AlertContext:
    """One-time instruction alert."""

    instructions_presented: bool = False
    instructions_dismissed: bool = False

    @property
    def instructions_visible(self) -> bool:
        return self.instructions_presented and not self.instructions_dismissed


@dataclass
class ClickDeduplicationContext:
    """Last-seen map click, to avoid re-processing it on the next rerun."""

    last_click_id: str | None = None

    def is_new_click(self, click_id: str) -> bool:
        if click_id == self.last_click_id:
            return False
        self.last_click_id = click_id
        return True

    def clear(self) -> None:
        self.last_click_id = None


@dataclass
class ScreenContext:
    """Shared context/model for the screen state machine.

    Sub-contexts:
        route: Directions request generation and destination
        alert: Instruction alert visibility
        click_dedup: Click deduplication tracking

    Note: The 'state' field is managed by python-statemachine when this
    object is passed as the model.
    """

    state: str | None = None

    route: RouteContext = field(default_factory=RouteContext)
    alert: AlertContext = field(default_factory=AlertContext)
    click_dedup: ClickDeduplicationContext = field(default_factory=ClickDeduplicationContext)

    # Long-press count since the last clear_all
    pins_since_clear: int = 0
    last_pin_id: str | None = None

    def __repr__(self) -> str:
        return (
            f"ScreenContext(state={self.state}, "
            f"route_generation={self.route.generation}, "
            f"destination={self.route.destination_pin_id}, "
            f"pins_since_clear={self.pins_since_clear})"
        )


class TransitionLogListener:
    """Logs every transition. Attached by ScreenStateMachine.create()."""

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")


class ScreenStateMachine(StateMachine):
    """Pin/overlay lifecycle. See module docstring for the transition table."""

    # ==========================================================================
    # State Definitions
    # ==========================================================================

    idle = State("Idle", initial=True)
    pin_placed = State("PinPlaced")
    route_requested = State("RouteRequested")

    # ==========================================================================
    # Transitions
    # ==========================================================================

    place_pin = idle.to(pin_placed) | route_requested.to.itself()
    pin_added = pin_placed.to(idle)
    select_pin = idle.to(route_requested) | route_requested.to.itself()
    route_finished = route_requested.to(idle)
    clear_all = idle.to.itself() | route_requested.to(idle)

    # ==========================================================================
    # State Check Properties
    # ==========================================================================

    @property
    def is_idle(self) -> bool:
        return self.idle.is_active

    @property
    def is_pin_placed(self) -> bool:
        return self.pin_placed.is_active

    @property
    def is_route_requested(self) -> bool:
        return self.route_requested.is_active

    # ==========================================================================
    # Transition Actions (before_* hooks)
    # ==========================================================================

    def before_place_pin(self, coordinate: Coordinate) -> None:
        self.context.pins_since_clear += 1

    def before_pin_added(self, pin_id: str) -> None:
        self.context.last_pin_id = pin_id

    def before_select_pin(self, pin_id: str, destination: Coordinate) -> None:
        self.context.route.next_generation()
        self.context.route.destination = destination
        self.context.route.destination_pin_id = pin_id

    def before_route_finished(self, generation: int, success: bool) -> None:
        if not success:
            logger.info(f"[ROUTE] Request #{generation} abandoned")

    def before_clear_all(self) -> None:
        # Invalidate any in-flight directions response
        self.context.route.next_generation()
        self.context.route.clear()
        self.context.pins_since_clear = 0
        self.context.last_pin_id = None

    # ==========================================================================
    # Initialization
    # ==========================================================================

    def __init__(self, context: ScreenContext | None = None, start_value: str | None = None) -> None:
        """Initialize state machine with model pattern.

        Args:
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        model = context or ScreenContext()
        super().__init__(model=model, start_value=start_value)

    @property
    def context(self) -> ScreenContext:
        return self.model

    def get_state_name(self) -> str:
        return self.current_state.name

    def __repr__(self) -> str:
        return f"ScreenStateMachine(state={self.get_state_name()}, model={self.context!r})"

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False

    @staticmethod
    def create(add_log_listener: bool = True) -> tuple[ScreenStateMachine, ScreenContext]:
        """Factory method to create state machine with context and optional log listener."""
        context = ScreenContext()
        sm = ScreenStateMachine(context=context)
        if add_log_listener:
            sm.add_listener(TransitionLogListener())
        return sm, context
