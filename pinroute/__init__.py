"""PinRoute - drop pins on a map and route to them.

A single-screen map application featuring:
- Long-press to place pins, select a pin to route to it
- Location permission handling with camera recentring on the user
- Driving directions from an OSRM server, fetched off the UI thread
- State machine-based pin/route lifecycle

Modules:
    core: Foundation (geodesic math, Web Mercator projection, MainQueue)
    model: Data structures (Coordinate, MapRegion, PointAnnotation, Route)
    services: Location manager and directions client
    ui: Streamlit interface components (map surface, controller, renderers)

Example:
    from pinroute.core import MainQueue
    from pinroute.services import LocationManager, OSRMDirectionsClient
    from pinroute.ui import MapSurface, ScreenController
"""
