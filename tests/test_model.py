"""Tests for pinroute data model.

Tests: Coordinate, LocationFix, MapRegion, MapRect, Polyline, Route,
RouteOverlay, AuthorizationStatus, messages, ClickInfo
"""

import pytest

from pinroute.constants import AppConfig, MapConfig
from pinroute.core.projection import lonlat_to_xy
from pinroute.model.annotation import PointAnnotation
from pinroute.model.authorization import AuthorizationStatus, UnknownAuthorizationStatusError
from pinroute.model.click_info import ClickInfo, MapClickType
from pinroute.model.coordinate import Coordinate
from pinroute.model.location_fix import LocationFix
from pinroute.model.message import (
    InstructionMessage,
    LocationStatusMessage,
    MessageLevel,
    PermissionPromptMessage,
)
from pinroute.model.region import CoordinateSpan, MapRect, MapRegion
from pinroute.model.route import Polyline, Route, RouteOverlay

from tests.conftest import HOME, PIN_A, make_route


class TestCoordinate:
    def test_lon_lat_order_for_pydeck(self) -> None:
        c = Coordinate(lat=52.5, lon=13.4)
        assert c.lon_lat == (13.4, 52.5)
        assert c.lon_lat_list == [13.4, 52.5]

    @pytest.mark.parametrize("lat,lon", [(90.1, 0.0), (-90.1, 0.0), (0.0, 180.1), (0.0, -180.1)])
    def test_out_of_range_rejected(self, lat: float, lon: float) -> None:
        with pytest.raises(ValueError):
            Coordinate(lat=lat, lon=lon)

    def test_equal_values_are_equal(self) -> None:
        assert Coordinate(lat=1.0, lon=2.0) == Coordinate(lat=1.0, lon=2.0)


class TestLocationFix:
    def test_negative_accuracy_rejected(self) -> None:
        with pytest.raises(ValueError):
            LocationFix(coordinate=HOME, horizontal_accuracy_m=-1.0)

    @pytest.mark.parametrize("heading", [-1.0, 360.0])
    def test_heading_out_of_range_rejected(self, heading: float) -> None:
        with pytest.raises(ValueError):
            LocationFix(coordinate=HOME, heading_deg=heading)

    def test_heading_optional(self) -> None:
        assert LocationFix(coordinate=HOME).heading_deg is None


class TestMapRegion:
    """MapRegion - camera region from center and span."""

    def test_from_center_1000m_span(self) -> None:
        """1000 m x 1000 m around Berlin: ~0.009° lat, ~0.0148° lon."""
        region = MapRegion.from_center(center=HOME, latitudinal_m=1000.0, longitudinal_m=1000.0)
        assert region.center == HOME
        assert region.span.latitude_delta == pytest.approx(0.008993, abs=1e-5)
        assert region.span.longitude_delta == pytest.approx(0.01478, abs=1e-4)

    def test_contains_center_not_far_point(self) -> None:
        region = MapRegion.from_center(center=HOME, latitudinal_m=1000.0, longitudinal_m=1000.0)
        assert region.contains(HOME)
        assert not region.contains(PIN_A)  # ~1.9 km east

    def test_negative_span_rejected(self) -> None:
        with pytest.raises(ValueError):
            CoordinateSpan(latitude_delta=-0.1, longitude_delta=0.1)

    def test_smaller_region_has_higher_zoom(self) -> None:
        small = MapRegion.from_center(center=HOME, latitudinal_m=1000.0, longitudinal_m=1000.0)
        large = MapRegion.from_center(center=HOME, latitudinal_m=5000.0, longitudinal_m=5000.0)
        assert small.zoom() > large.zoom()

    def test_zoom_clamped_to_map_range(self) -> None:
        tiny = MapRegion(center=HOME, span=CoordinateSpan(latitude_delta=0.0, longitude_delta=0.0))
        assert tiny.zoom() == MapConfig.MAX_ZOOM


class TestMapRect:
    """MapRect - Web Mercator bounds and padding."""

    def test_bounding_covers_all_points(self) -> None:
        rect = MapRect.bounding([HOME, PIN_A])
        home_x, home_y = lonlat_to_xy(HOME.lon, HOME.lat)
        pin_x, pin_y = lonlat_to_xy(PIN_A.lon, PIN_A.lat)

        assert rect.x == pytest.approx(min(home_x, pin_x))
        assert rect.y == pytest.approx(min(home_y, pin_y))
        assert rect.max_x == pytest.approx(max(home_x, pin_x))
        assert rect.max_y == pytest.approx(max(home_y, pin_y))

    def test_bounding_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            MapRect.bounding([])

    def test_padded_grows_each_side(self) -> None:
        rect = MapRect(x=100.0, y=200.0, width=50.0, height=30.0).padded(dx=300.0, dy=300.0)
        assert (rect.x, rect.y, rect.width, rect.height) == (-200.0, -100.0, 650.0, 630.0)
        assert rect.mid_x == 125.0
        assert rect.mid_y == 215.0

    def test_to_region_round_trip(self) -> None:
        region = MapRegion.from_center(center=HOME, latitudinal_m=2000.0, longitudinal_m=2000.0)
        back = region.to_map_rect().to_region()
        assert back.span.longitude_delta == pytest.approx(region.span.longitude_delta, rel=1e-6)
        assert back.span.latitude_delta == pytest.approx(region.span.latitude_delta, rel=1e-6)
        assert back.center.lon == pytest.approx(HOME.lon, abs=1e-9)
        # Mercator midpoint sits slightly north of the arithmetic midpoint
        assert back.center.lat == pytest.approx(HOME.lat, abs=1e-4)


class TestRoute:
    """Polyline/Route/RouteOverlay - geometry from the directions service."""

    def test_polyline_needs_two_points(self) -> None:
        with pytest.raises(ValueError):
            Polyline(coordinates=(HOME,))

    def test_path_is_lon_lat(self) -> None:
        polyline = Polyline(coordinates=(HOME, PIN_A))
        assert polyline.path == [[HOME.lon, HOME.lat], [PIN_A.lon, PIN_A.lat]]

    def test_padded_region_contains_whole_route(self) -> None:
        route = make_route(HOME, PIN_A)
        region = route.padded_region(padding_m=300.0)
        assert region.contains(HOME)
        assert region.contains(PIN_A)

    def test_padding_is_300m_mercator_per_side(self) -> None:
        route = make_route(HOME, PIN_A)
        bounds = route.polyline.bounding_map_rect
        padded = route.padded_region(padding_m=300.0).to_map_rect()
        assert padded.width == pytest.approx(bounds.width + 600.0, abs=1e-3)
        assert padded.height == pytest.approx(bounds.height + 600.0, abs=1e-3)

    def test_overlay_from_route_keeps_metrics(self) -> None:
        route = make_route(HOME, PIN_A, distance_m=3200.0, travel_time_s=420.0)
        overlay = RouteOverlay.from_route(overlay_id="R1", route=route, padding_m=300.0)
        assert overlay.id == "R1"
        assert overlay.polyline is route.polyline
        assert overlay.distance_m == 3200.0
        assert overlay.expected_travel_time_s == 420.0
        assert overlay.region == route.padded_region(padding_m=300.0)

    def test_route_name_defaults_empty(self) -> None:
        route = Route(polyline=Polyline(coordinates=(HOME, PIN_A)), distance_m=1.0, expected_travel_time_s=1.0)
        assert route.name == ""


class TestAuthorizationStatus:
    @pytest.mark.parametrize(
        "status,authorized",
        [
            (AuthorizationStatus.NOT_DETERMINED, False),
            (AuthorizationStatus.RESTRICTED, False),
            (AuthorizationStatus.DENIED, False),
            (AuthorizationStatus.AUTHORIZED_ALWAYS, True),
            (AuthorizationStatus.AUTHORIZED_WHEN_IN_USE, True),
        ],
    )
    def test_is_authorized(self, status: AuthorizationStatus, authorized: bool) -> None:
        assert status.is_authorized is authorized

    def test_display_name(self) -> None:
        assert AuthorizationStatus.AUTHORIZED_WHEN_IN_USE.display_name == "Authorized when in use"

    def test_unknown_status_error_keeps_status(self) -> None:
        error = UnknownAuthorizationStatusError("provisional")
        assert error.status == "provisional"
        assert "provisional" in str(error)


class TestAnnotation:
    def test_layer_datum(self) -> None:
        pin = PointAnnotation(id="P1", coordinate=PIN_A)
        datum = pin.to_layer_datum(selected=True)
        assert datum == {
            "type": "pin",
            "id": "P1",
            "position": [PIN_A.lon, PIN_A.lat],
            "selected": True,
            "label": "P1",
        }


class TestMessages:
    def test_instruction_text(self) -> None:
        message = InstructionMessage()
        assert message.message == "Set a pin: long press. Show route: select pin."
        assert message.dismiss_label == AppConfig.INSTRUCTIONS_DISMISS_LABEL
        assert message.level == MessageLevel.INFO

    def test_permission_prompt_is_warning(self) -> None:
        assert PermissionPromptMessage().level == MessageLevel.WARNING

    def test_status_message_includes_route_summary(self) -> None:
        message = LocationStatusMessage(
            status=AuthorizationStatus.AUTHORIZED_WHEN_IN_USE,
            is_updating=True,
            pin_count=2,
            route_distance_m=3200.0,
            route_travel_time_s=420.0,
        )
        assert "tracking on" in message.message
        assert "**Pins:** 2" in message.message
        assert "3.2 km" in message.message
        assert "7 min" in message.message

    def test_status_message_without_route(self) -> None:
        message = LocationStatusMessage(status=AuthorizationStatus.DENIED, is_updating=False, pin_count=0)
        assert "Route" not in message.message
        assert "tracking off" in message.message


class TestClickInfo:
    def test_map_click_requires_coordinates(self) -> None:
        with pytest.raises(ValueError):
            ClickInfo(click_type=MapClickType.MAP, lat=52.5)

    def test_pin_click_requires_id(self) -> None:
        with pytest.raises(ValueError):
            ClickInfo(click_type=MapClickType.PIN)

    def test_map_click_rejects_pin_id(self) -> None:
        with pytest.raises(ValueError):
            ClickInfo(click_type=MapClickType.MAP, lat=52.5, lon=13.4, pin_id="P1")

    def test_display_names(self) -> None:
        assert ClickInfo(click_type=MapClickType.PIN, pin_id="P3").display_name == "Pin P3"
        assert "52.50000" in ClickInfo(click_type=MapClickType.MAP, lat=52.5, lon=13.4).display_name
