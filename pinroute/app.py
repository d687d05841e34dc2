"""PinRoute - drop pins on a map and get driving directions to them.

Long-press (click) the map to set a pin, select a pin to see the route
from your current location. The sidebar plays the device: answer the
location permission prompt and send position fixes.

Run: streamlit run pinroute/app.py
"""

import logging
import time
import traceback

import streamlit as st

from pinroute.constants import AppConfig, ClickConfig
from pinroute.core.main_queue import MainQueue
from pinroute.model.authorization import UnknownAuthorizationStatusError
from pinroute.model.message import InstructionMessage
from pinroute.services.directions import OSRMDirectionsClient
from pinroute.services.location_manager import LocationManager
from pinroute.ui import (
    ClickDetector,
    MapRenderer,
    MapSurface,
    ScreenController,
    ScreenStateMachine,
    SidebarRenderer,
    dispatch_click,
)
from pinroute.ui.infra import bump_map_version, schedule_poll, trigger_rerun
from pinroute.ui.pydeck_click_handler import render_pydeck_map

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def _create_controller() -> None:
    """Create state machine and controller around the session's surface and devices."""
    sm, ctx = ScreenStateMachine.create()
    controller = ScreenController(
        surface=st.session_state.surface,
        location_manager=st.session_state.location_manager,
        directions=OSRMDirectionsClient(),
        main_queue=st.session_state.main_queue,
        state_machine=sm,
    )
    st.session_state.state_machine = sm
    st.session_state.context = ctx
    st.session_state.controller = controller
    controller.start()


def init_session_state() -> None:
    """Initialize session state with surface, location manager and controller."""
    if "main_queue" not in st.session_state:
        st.session_state.main_queue = MainQueue()

    if "location_manager" not in st.session_state:
        st.session_state.location_manager = LocationManager()

    if "surface" not in st.session_state:
        st.session_state.surface = MapSurface()

    if "controller" not in st.session_state:
        _create_controller()

    if "map_version" not in st.session_state:
        st.session_state.map_version = 0


def reset_ui_state() -> None:
    """Reset UI state to initial while preserving pins and the device.

    Called when an error occurs to recover gracefully. Resets:
    - Controller and state machine (fresh Idle state, in-flight routes dropped)
    - Map version (to clear any stale map state)

    Preserves:
    - Map surface (pins, camera)
    - Location manager (permission answer, last fix)
    """
    logger.info("Resetting UI state due to error recovery")

    old_controller: ScreenController | None = st.session_state.get("controller")
    if old_controller is not None:
        old_controller.shutdown()
    _create_controller()
    if old_controller is not None:
        # The instruction alert is shown once per session, not once per controller
        st.session_state.context.alert = old_controller.ctx.alert

    st.session_state.map_version = st.session_state.get("map_version", 0) + 1

    logger.info("UI state reset complete - pins preserved")


# =============================================================================
# INSTRUCTIONS
# =============================================================================


def _on_instructions_dismissed() -> None:
    """Closing the alert with X or Esc counts as dismissing it."""
    st.session_state.controller.dismiss_instructions()


@st.dialog(AppConfig.TITLE, on_dismiss=_on_instructions_dismissed)
def _instructions_dialog(controller: ScreenController) -> None:
    """One-time alert explaining the two gestures."""
    message = InstructionMessage()
    st.write(message.message)
    if st.button(message.dismiss_label, type="primary", use_container_width=True):
        controller.dismiss_instructions()
        st.rerun()


# =============================================================================
# MAP RENDERING
# =============================================================================


def _render_map(controller: ScreenController) -> None:
    """Render map and handle clicks."""
    surface = controller.surface

    # New camera region -> fresh component so the new view state applies
    if st.session_state.get("rendered_region") != surface.region:
        if "rendered_region" in st.session_state:
            bump_map_version()
        st.session_state.rendered_region = surface.region

    map_version = st.session_state.map_version
    deck = MapRenderer(surface=surface).render()
    click_result = render_pydeck_map(deck=deck, key=f"main_map_{map_version}", height=ClickConfig.MAP_HEIGHT_PX)

    detector = ClickDetector(dedup=controller.ctx.click_dedup)
    click_info = detector.detect(
        clicked_object=click_result.clicked_object,
        clicked_coordinate=click_result.clicked_coordinate,
        map_version=map_version,
    )
    if click_info:
        dispatch_click(surface=surface, click_info=click_info)
        controller.process_pending()
        trigger_rerun()


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)

    try:
        init_session_state()
        _run_app_ui()
    except UnknownAuthorizationStatusError:
        # Not recoverable: the app cannot tell whether it may track location
        logger.critical(f"[PERMISSION] Aborting\n{traceback.format_exc()}")
        raise
    except Exception as e:
        # Log full traceback for debugging
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        # Show user-friendly error message
        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")

        # Reset UI state while preserving the pins
        reset_ui_state()

        # Add a button to manually recover
        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    controller: ScreenController = st.session_state.controller
    sm: ScreenStateMachine = st.session_state.state_machine
    surface = controller.surface
    location_manager = controller.location_manager

    logger.info(f"[MAIN] Render cycle starting: state={sm.get_state_name()}, map_version={st.session_state.map_version}")

    # Work that became due since the last run (route results, recentre)
    controller.process_pending(now=time.monotonic())

    # Sidebar (device side of the location manager)
    actions = SidebarRenderer(location_manager=location_manager, surface=surface).render()
    if "authorization" in actions:
        location_manager.set_authorization_status(actions["authorization"])
    if "fix" in actions:
        location_manager.deliver_fix(actions["fix"])
    controller.process_pending()

    if controller.ctx.alert.instructions_visible:
        _instructions_dialog(controller)

    # Toolbar: trash at top-left, compass beside it
    col_trash, col_compass = st.columns([1, 12], vertical_alignment="center")
    with col_trash:
        if st.button(AppConfig.CLEAR_BUTTON_ICON, help=AppConfig.CLEAR_BUTTON_HELP, key="clear_all"):
            controller.clear_all()
    with col_compass:
        if surface.shows_compass:
            st.caption(f"🧭 {surface.bearing_deg:.0f}°")

    _render_map(controller)

    if controller.has_pending_work:
        schedule_poll(controller.main_queue.seconds_until_next())


if __name__ == "__main__":
    main()
