"""Directions service - route requests against an OSRM-compatible server.

The map screen only depends on the DirectionsService protocol:
calculate(DirectionsRequest) -> DirectionsResponse, raising DirectionsError.

OSRMDirectionsClient encapsulates the OSRM specifics:
- coordinate formatting (lon,lat order)
- URL construction (/route/v1/{profile}/...)
- parsing GeoJSON geometries into Route objects
- mapping transport and protocol errors to DirectionsError

Calls are blocking; the RouteRequester runs them on a worker thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

import requests

from pinroute.constants import RouteConfig
from pinroute.model.coordinate import Coordinate
from pinroute.model.route import Polyline, Route

logger = logging.getLogger(__name__)


class TransportType(Enum):
    AUTOMOBILE = "automobile"
    WALKING = "walking"


@dataclass(frozen=True)
class DirectionsRequest:
    source: Coordinate
    destination: Coordinate
    transport_type: TransportType = TransportType.AUTOMOBILE
    requests_alternate_routes: bool = True


@dataclass(frozen=True)
class DirectionsResponse:
    """Candidate routes, best first. Empty when no route exists."""

    request: DirectionsRequest
    routes: tuple[Route, ...] = field(default_factory=tuple)


class DirectionsError(Exception):
    """The directions service failed to answer."""


class DirectionsService(Protocol):
    def calculate(self, request: DirectionsRequest) -> DirectionsResponse: ...


class OSRMDirectionsClient:
    """OSRM /route adapter.

    Example:
        client = OSRMDirectionsClient()
        response = client.calculate(DirectionsRequest(source=a, destination=b))
    """

    PROFILES = {
        TransportType.AUTOMOBILE: "driving",
        TransportType.WALKING: "walking",
    }

    def __init__(self, base_url: str = RouteConfig.OSRM_BASE_URL, timeout_s: float = RouteConfig.TIMEOUT_S) -> None:
        if not base_url:
            raise ValueError("OSRM base URL not set. Set PINROUTE_OSRM_URL in the environment or .env file.")
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s

    @staticmethod
    def format_coordinates(coordinates: list[Coordinate]) -> str:
        """Convert coordinates to OSRM format 'lon,lat;lon,lat'."""
        return ";".join(f"{c.lon:.6f},{c.lat:.6f}" for c in coordinates)

    def build_url(self, request: DirectionsRequest) -> str:
        profile = self.PROFILES[request.transport_type]
        coordinates = self.format_coordinates([request.source, request.destination])
        return f"{self.base_url}/route/v1/{profile}/{coordinates}"

    def calculate(self, request: DirectionsRequest) -> DirectionsResponse:
        """Request routes from source to destination.

        Raises:
            DirectionsError: On transport failure, non-JSON replies or OSRM error codes.
        """
        url = self.build_url(request)
        params = {
            "overview": "full",
            "geometries": "geojson",
            "alternatives": "true" if request.requests_alternate_routes else "false",
        }
        logger.info(f"[ROUTE] GET {url}")
        try:
            response = requests.get(url, params=params, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise DirectionsError(f"Directions request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DirectionsError(f"Directions service returned non-JSON reply (HTTP {response.status_code})") from e

        return self.parse_response(request=request, data=data)

    @staticmethod
    def parse_response(request: DirectionsRequest, data: dict[str, Any]) -> DirectionsResponse:
        """Normalize an OSRM /route JSON body.

        "NoRoute" is a valid answer with zero candidates, not an error.
        """
        if not isinstance(data, dict):
            raise DirectionsError(f"Directions reply is not a JSON object: {type(data).__name__}")
        code = data.get("code")
        if code == "NoRoute":
            return DirectionsResponse(request=request, routes=())
        if code != "Ok":
            raise DirectionsError(f"OSRM error {code}: {data.get('message', 'Unknown error')}")

        try:
            routes = tuple(OSRMDirectionsClient._parse_route(raw) for raw in data.get("routes", []))
        except (KeyError, TypeError, ValueError) as e:
            raise DirectionsError(f"Malformed OSRM route: {e}") from e
        return DirectionsResponse(request=request, routes=routes)

    @staticmethod
    def _parse_route(raw: dict[str, Any]) -> Route:
        coordinates = tuple(Coordinate(lat=float(lat), lon=float(lon)) for lon, lat in raw["geometry"]["coordinates"])
        legs = raw.get("legs") or []
        name = legs[0].get("summary", "") if legs else ""
        return Route(
            polyline=Polyline(coordinates=coordinates),
            distance_m=float(raw["distance"]),
            expected_travel_time_s=float(raw["duration"]),
            name=name,
        )
