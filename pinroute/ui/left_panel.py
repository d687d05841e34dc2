"""Sidebar UI renderer for PinRoute.

A browser has no device location service the app can drive, so the
sidebar plays the "device" side of LocationManager:
- Permission prompt (when the app has requested authorization)
- Settings: change the authorization status at any time
- Location: send position fixes (lat, lon, accuracy, heading)
- Status summary: permission, tracking, pins, current route

Returns action flags; app.py applies them to the LocationManager.
"""

import logging
from typing import Any

import streamlit as st

from pinroute.constants import LocationConfig
from pinroute.model.authorization import AuthorizationStatus
from pinroute.model.coordinate import Coordinate
from pinroute.model.location_fix import LocationFix
from pinroute.model.message import LocationStatusMessage, PermissionPromptMessage
from pinroute.services.location_manager import LocationManager
from pinroute.ui.map_surface import MapSurface

logger = logging.getLogger(__name__)


class SidebarRenderer:
    """Renders the device panel and returns action flags.

    Action keys:
        authorization: AuthorizationStatus the user chose
        fix: LocationFix to deliver
    """

    def __init__(self, location_manager: LocationManager, surface: MapSurface) -> None:
        self.location_manager = location_manager
        self.surface = surface

    def render(self) -> dict[str, Any]:
        actions: dict[str, Any] = {}
        with st.sidebar:
            st.header("Device")
            self._render_status()
            if self.location_manager.authorization_requested:
                actions.update(self._render_permission_prompt())
            actions.update(self._render_settings())
            st.divider()
            actions.update(self._render_location_input())
        return actions

    def _render_status(self) -> None:
        overlay = self.surface.overlays[-1] if self.surface.overlays else None
        LocationStatusMessage(
            status=self.location_manager.authorization_status,
            is_updating=self.location_manager.is_updating,
            pin_count=len(self.surface.annotations),
            route_distance_m=overlay.distance_m if overlay else None,
            route_travel_time_s=overlay.expected_travel_time_s if overlay else None,
        ).display()

    def _render_permission_prompt(self) -> dict[str, Any]:
        PermissionPromptMessage().display()
        col_allow, col_deny = st.columns(2)
        with col_allow:
            if st.button("Allow While Using App", type="primary", use_container_width=True):
                return {"authorization": AuthorizationStatus.AUTHORIZED_WHEN_IN_USE}
        with col_deny:
            if st.button("Don't Allow", use_container_width=True):
                return {"authorization": AuthorizationStatus.DENIED}
        return {}

    def _render_settings(self) -> dict[str, Any]:
        statuses = list(AuthorizationStatus)
        current = self.location_manager.authorization_status
        with st.expander("Settings", expanded=False):
            chosen = st.selectbox(
                "Location access",
                options=statuses,
                index=[s.name for s in statuses].index(current.name),
                format_func=lambda s: s.display_name,
                key=f"settings_authorization_{current.name}",
            )
        # Compare by name: enum classes are recreated when Streamlit reloads modules
        if chosen.name != current.name:
            return {"authorization": AuthorizationStatus[chosen.name]}
        return {}

    def _render_location_input(self) -> dict[str, Any]:
        st.subheader("Location")
        current = self.location_manager.location
        default_lat = current.coordinate.lat if current else LocationConfig.DEFAULT_FIX_LAT
        default_lon = current.coordinate.lon if current else LocationConfig.DEFAULT_FIX_LON

        with st.form("location_fix", border=False):
            lat = st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=default_lat, format="%.5f")
            lon = st.number_input("Longitude", min_value=-180.0, max_value=180.0, value=default_lon, format="%.5f")
            accuracy = st.number_input("Accuracy (m)", min_value=0.0, value=LocationConfig.DESIRED_ACCURACY_M)
            use_heading = st.checkbox("Report heading", value=False)
            heading = st.slider("Heading (°)", min_value=0, max_value=359, value=0)
            submitted = st.form_submit_button(
                "📡 Send location",
                use_container_width=True,
                disabled=not self.location_manager.is_updating,
            )

        if not self.location_manager.is_updating:
            st.caption("Location updates are off.")

        if not submitted:
            return {}
        fix = LocationFix(
            coordinate=Coordinate(lat=lat, lon=lon),
            horizontal_accuracy_m=accuracy,
            heading_deg=float(heading) if use_heading else None,
        )
        return {"fix": fix}
