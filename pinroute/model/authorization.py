"""Location authorization status reported by the location service."""

from enum import Enum


class AuthorizationStatus(Enum):
    """Grant level for location access.

    Owned by the location service. The app only reads it and may request
    a transition away from NOT_DETERMINED.
    """

    NOT_DETERMINED = "not_determined"
    RESTRICTED = "restricted"
    DENIED = "denied"
    AUTHORIZED_ALWAYS = "authorized_always"
    AUTHORIZED_WHEN_IN_USE = "authorized_when_in_use"

    @property
    def is_authorized(self) -> bool:
        return self in (AuthorizationStatus.AUTHORIZED_ALWAYS, AuthorizationStatus.AUTHORIZED_WHEN_IN_USE)

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").capitalize()


class UnknownAuthorizationStatusError(RuntimeError):
    """Raised for a status value this app was not written to handle.

    Deliberately fatal: guessing how to degrade for a future status could
    track location without consent.
    """

    def __init__(self, status: object) -> None:
        super().__init__(f"Unknown location authorization status: {status!r}")
        self.status = status
