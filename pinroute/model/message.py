"""Message - User-facing messages for the PinRoute UI.

Architecture:
- CENTER (dialog): the one-time instruction alert shown at launch
- LEFT (sidebar): ONE blue info message with location status and route summary
- LEFT (sidebar): ONE yellow instruction message while a permission prompt is open

Failures (denied permission, routing errors) are never shown here. They
are logged and the feature silently stays unavailable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from pinroute.constants import AppConfig
from pinroute.model.authorization import AuthorizationStatus


class MessageLevel(Enum):
    """Streamlit element a message is rendered with."""

    INFO = "info"  # st.info: status
    WARNING = "warning"  # st.warning: something to act on


@dataclass(frozen=True)
class Message(ABC):
    """A piece of UI text with a display level.

    Sidebar messages are redrawn on every run; the instruction message is
    shown in a dialog instead.
    """

    @property
    @abstractmethod
    def message(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        raise NotImplementedError

    def display(self) -> None:
        import streamlit as st

        if self.level is MessageLevel.WARNING:
            st.warning(self.message)
        else:
            st.info(self.message)


# =============================================================================
# CENTER (DIALOG) - Launch instructions
# =============================================================================


@dataclass(frozen=True)
class InstructionMessage(Message):
    """One-time alert explaining the two gestures."""

    title: str = ""
    dismiss_label: str = AppConfig.INSTRUCTIONS_DISMISS_LABEL

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        return AppConfig.INSTRUCTIONS


# =============================================================================
# LEFT PANEL (SIDEBAR) - Device status
# =============================================================================


@dataclass(frozen=True)
class PermissionPromptMessage(Message):
    """Shown while the app waits for the user to answer the location prompt."""

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.WARNING

    @property
    def message(self) -> str:
        return f'**Allow "{AppConfig.TITLE}" to use your location?** Your location is used to route to pins.'


@dataclass(frozen=True)
class LocationStatusMessage(Message):
    """Location permission, tracking state and optional route summary."""

    status: AuthorizationStatus
    is_updating: bool
    pin_count: int
    route_distance_m: float | None = None
    route_travel_time_s: float | None = None

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        tracking = "on" if self.is_updating else "off"
        lines = [
            f"**Location:** {self.status.display_name} (tracking {tracking})",
            f"**Pins:** {self.pin_count}",
        ]
        if self.route_distance_m is not None and self.route_travel_time_s is not None:
            lines.append(
                f"**Route:** {self.route_distance_m / 1000:.1f} km · {self.route_travel_time_s / 60:.0f} min"
            )
        return "  \n".join(lines)
