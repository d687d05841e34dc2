"""PermissionCoordinator - reacts to location authorization status.

Decision table (run at screen start and on every authorization change,
including the change caused by our own request):

    NOT_DETERMINED          -> request when-in-use authorization, then wait
    AUTHORIZED_ALWAYS /
    AUTHORIZED_WHEN_IN_USE  -> 50 m accuracy, start updates, show user dot,
                               schedule one camera recentre
    RESTRICTED              -> log only, feature silently unavailable
    DENIED                  -> stop updates, hide user dot, log
    anything else           -> UnknownAuthorizationStatusError (deliberate abort)
"""

import logging
from collections.abc import Callable

from pinroute.constants import LocationConfig
from pinroute.model.authorization import AuthorizationStatus, UnknownAuthorizationStatusError
from pinroute.services.location_manager import LocationManager
from pinroute.ui.map_surface import MapSurface

logger = logging.getLogger(__name__)


class PermissionCoordinator:
    """Gates location tracking and initial framing on the authorization status.

    Registers itself as a LocationManager listener on start().
    """

    def __init__(
        self,
        location_manager: LocationManager,
        surface: MapSurface,
        on_authorized: Callable[[], None],
    ) -> None:
        """Initialize coordinator.

        Args:
            location_manager: Source of authorization status and updates
            surface: Map surface whose user-location display is toggled
            on_authorized: Called once per transition into an authorized status
                (schedules the camera recentre)
        """
        self._location_manager = location_manager
        self._surface = surface
        self._on_authorized = on_authorized

    def start(self) -> None:
        """Subscribe to changes and evaluate the current status."""
        self._location_manager.add_listener(self)
        self.handle_status(self._location_manager.authorization_status)

    def on_authorization_changed(self, status: AuthorizationStatus) -> None:
        self.handle_status(status)

    def handle_status(self, status: AuthorizationStatus) -> None:
        """Apply the decision table for one status value.

        Raises:
            UnknownAuthorizationStatusError: For a status this app does not know.
        """
        manager = self._location_manager

        if status is AuthorizationStatus.NOT_DETERMINED:
            manager.request_when_in_use_authorization()

        elif status in (AuthorizationStatus.AUTHORIZED_ALWAYS, AuthorizationStatus.AUTHORIZED_WHEN_IN_USE):
            manager.desired_accuracy_m = LocationConfig.DESIRED_ACCURACY_M
            manager.start_updating_location()
            self._surface.shows_user_location = True
            self._on_authorized()

        elif status is AuthorizationStatus.RESTRICTED:
            logger.warning("[PERMISSION] Navigation isn't allowed (location access restricted).")

        elif status is AuthorizationStatus.DENIED:
            manager.stop_updating_location()
            self._surface.shows_user_location = False
            logger.warning("[PERMISSION] Location denied. Allow location tracking in settings.")

        else:
            # Unreachable for every status known today; abort rather than guess
            raise UnknownAuthorizationStatusError(status)
