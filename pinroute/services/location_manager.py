"""LocationManager - the location service the map screen depends on.

Models the platform location subsystem:
- Current authorization status and a request for foreground authorization
- Desired accuracy setting
- Start/stop of continuous location updates
- Change notifications to registered listeners

The "platform side" entry points (set_authorization_status, deliver_fix)
are called by whatever supplies real answers: the Streamlit sidebar
device panel in the app, or tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Protocol

from pinroute.model.authorization import AuthorizationStatus
from pinroute.model.location_fix import LocationFix

logger = logging.getLogger(__name__)


class LocationManagerListener(Protocol):
    """Callbacks raised by LocationManager. Implement any subset."""

    def on_authorization_changed(self, status: AuthorizationStatus) -> None: ...

    def on_location_updated(self, fix: LocationFix) -> None: ...


class LocationManager:
    """Authorization state, update stream and listener registry.

    Example:
        manager = LocationManager(authorization_prompt=show_prompt)
        manager.add_listener(coordinator)
        manager.request_when_in_use_authorization()
        ...
        manager.set_authorization_status(AuthorizationStatus.AUTHORIZED_WHEN_IN_USE)
    """

    def __init__(
        self,
        status: AuthorizationStatus = AuthorizationStatus.NOT_DETERMINED,
        authorization_prompt: Callable[[LocationManager], None] | None = None,
    ) -> None:
        """Initialize location manager.

        Args:
            status: Authorization status the platform starts with
            authorization_prompt: Called when the app requests authorization;
                should present the prompt and later call set_authorization_status()
        """
        self._status = status
        self._authorization_prompt = authorization_prompt
        self._listeners: list[Any] = []
        self._is_updating = False
        self._location: LocationFix | None = None
        self.desired_accuracy_m: float | None = None
        self.authorization_requested = False

    # =========================================================================
    # APP SIDE
    # =========================================================================

    @property
    def authorization_status(self) -> AuthorizationStatus:
        return self._status

    @property
    def location(self) -> LocationFix | None:
        """Most recent fix, or None before the first one."""
        return self._location

    @property
    def is_updating(self) -> bool:
        return self._is_updating

    def add_listener(self, listener: Any) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Any) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def request_when_in_use_authorization(self) -> None:
        """Ask for foreground-only authorization.

        Only meaningful from NOT_DETERMINED; otherwise ignored, as the
        platform never re-prompts once the user has answered.
        """
        if self._status is not AuthorizationStatus.NOT_DETERMINED:
            logger.debug(f"[PERMISSION] Authorization already answered ({self._status}), request ignored")
            return
        self.authorization_requested = True
        logger.info("[PERMISSION] Requesting when-in-use authorization")
        if self._authorization_prompt is not None:
            self._authorization_prompt(self)

    def start_updating_location(self) -> None:
        if not self._is_updating:
            self._is_updating = True
            logger.info(f"[LOCATION] Started updates (desired accuracy {self.desired_accuracy_m} m)")

    def stop_updating_location(self) -> None:
        if self._is_updating:
            self._is_updating = False
            logger.info("[LOCATION] Stopped updates")

    # =========================================================================
    # PLATFORM SIDE
    # =========================================================================

    def set_authorization_status(self, status: AuthorizationStatus) -> None:
        """Record the user's (or system's) answer and notify listeners."""
        if status == self._status:
            return
        logger.info(f"[PERMISSION] Authorization changed: {self._status} -> {status}")
        self._status = status
        self.authorization_requested = False
        self._notify("on_authorization_changed", status=status)

    def deliver_fix(self, fix: LocationFix) -> bool:
        """Deliver a new position report.

        Fixes are only accepted while authorized and updating.

        Returns:
            True if the fix was accepted and listeners were notified.
        """
        if not (self._is_updating and isinstance(self._status, AuthorizationStatus) and self._status.is_authorized):
            logger.debug(f"[LOCATION] Fix at {fix.coordinate} dropped (updating={self._is_updating})")
            return False
        self._location = fix
        self._notify("on_location_updated", fix=fix)
        return True

    def _notify(self, event: str, **kwargs: Any) -> None:
        for listener in list(self._listeners):
            callback = getattr(listener, event, None)
            if callback is not None:
                callback(**kwargs)
