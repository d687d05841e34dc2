"""Smoke tests for module imports and configuration validation.

Quick tests that verify the system is correctly installed and configured.
"""

import pytest

from tests_workflow.conftest import SMAndCtx


# =============================================================================
# MODULE IMPORT TESTS
# =============================================================================


class TestModuleImports:
    """Parametrized smoke tests for module imports."""

    @pytest.mark.parametrize(
        "module_path,class_name",
        [
            # Core modules
            pytest.param("pinroute.core.geo_calculator", "GeoCalculator", id="core_geo"),
            pytest.param("pinroute.core.main_queue", "MainQueue", id="core_queue"),
            # Model modules
            pytest.param("pinroute.model.annotation", "PointAnnotation", id="model_annotation"),
            pytest.param("pinroute.model.region", "MapRegion", id="model_region"),
            pytest.param("pinroute.model.route", "RouteOverlay", id="model_route"),
            # Service modules
            pytest.param("pinroute.services.directions", "OSRMDirectionsClient", id="svc_directions"),
            pytest.param("pinroute.services.location_manager", "LocationManager", id="svc_location"),
            # UI modules
            pytest.param("pinroute.ui.center_map", "MapRenderer", id="ui_renderer"),
            pytest.param("pinroute.ui.click_detector", "ClickDetector", id="ui_detector"),
            pytest.param("pinroute.ui.left_panel", "SidebarRenderer", id="ui_sidebar"),
            pytest.param("pinroute.ui.screen_controller", "ScreenController", id="ui_controller"),
            pytest.param("pinroute.ui.state_machine", "ScreenStateMachine", id="ui_statemachine"),
        ],
    )
    def test_module_import(self, module_path: str, class_name: str) -> None:
        """Module can be imported without errors."""
        import importlib

        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
        assert cls is not None


# =============================================================================
# CONFIGURATION VALIDATION TESTS
# =============================================================================


class TestConfigurationValidation:
    """Tests that configuration constants are valid and consistent."""

    def test_route_style(self) -> None:
        """Routes are drawn as 5 px cyan lines."""
        from pinroute.constants import StyleConfig

        assert StyleConfig.ROUTE_LINE_WIDTH == 5
        red, green, blue, alpha = StyleConfig.ROUTE_COLOR_RGBA
        assert blue > red and green > red
        assert alpha == 255

    def test_timing_constants(self) -> None:
        from pinroute.constants import GestureConfig, LocationConfig

        assert GestureConfig.MIN_PRESS_DURATION_S == 0.3
        assert GestureConfig.NUMBER_OF_TAPS_REQUIRED == 0
        assert LocationConfig.RECENTRE_DELAY_S == 1.2

    def test_distance_constants(self) -> None:
        from pinroute.constants import LocationConfig, RouteConfig

        assert LocationConfig.DESIRED_ACCURACY_M == 50.0
        assert LocationConfig.RECENTRE_SPAN_M == 1000.0
        assert RouteConfig.REGION_PADDING_M == 300.0

    def test_entity_prefixes_are_unique(self) -> None:
        """Entity ID prefixes are unique to prevent ID collisions."""
        from pinroute.constants import EntityPrefixes

        prefixes = [EntityPrefixes.PIN, EntityPrefixes.ROUTE]
        assert len(prefixes) == len(set(prefixes))

    def test_zoom_range(self) -> None:
        from pinroute.constants import MapConfig

        assert 0 <= MapConfig.MIN_ZOOM < MapConfig.MAX_ZOOM

    def test_osrm_url_configured(self) -> None:
        from pinroute.constants import RouteConfig

        assert RouteConfig.OSRM_BASE_URL.startswith("http")
        assert RouteConfig.TIMEOUT_S > 0


# =============================================================================
# STATE MACHINE TESTS
# =============================================================================


class TestStateMachineConfiguration:
    """Tests for state machine setup."""

    @pytest.mark.parametrize("state_name", ["idle", "pin_placed", "route_requested"])
    def test_state_exists(self, sm_and_ctx: SMAndCtx, state_name: str) -> None:
        sm, _ = sm_and_ctx
        assert hasattr(sm, state_name)

    @pytest.mark.parametrize("event_name", ["place_pin", "pin_added", "select_pin", "route_finished", "clear_all"])
    def test_event_exists(self, sm_and_ctx: SMAndCtx, event_name: str) -> None:
        sm, _ = sm_and_ctx
        assert callable(getattr(sm, event_name))

    def test_repr_shows_state_and_context(self, sm_and_ctx: SMAndCtx) -> None:
        sm, _ = sm_and_ctx
        text = repr(sm)
        assert "Idle" in text
        assert "route_generation=0" in text
