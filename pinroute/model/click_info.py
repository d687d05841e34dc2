"""Click detection types for the web map.

- MapClickType: what was clicked (a pin, or the map itself)
- ClickInfo: unified click information returned by ClickDetector

STRICT: All click handling flows through ClickInfo.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MapClickType(Enum):
    """Source of click on the map - EXACTLY one per interaction."""

    PIN = "pin"  # Clicked on a pin marker
    MAP = "map"  # Clicked on the map (raw coordinates)


@dataclass(frozen=True)
class ClickInfo:
    """Click information - the ONLY output from click detection.

    STRICT CONTRACT:
    - For MAP: lat/lon are REQUIRED, pin_id is None
    - For PIN: pin_id is REQUIRED, lat/lon are optional
    """

    click_type: MapClickType
    lat: Optional[float] = None
    lon: Optional[float] = None
    pin_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate invariants - STRICT: fail immediately on invalid state."""
        if self.click_type == MapClickType.MAP:
            if self.lat is None or self.lon is None:
                raise ValueError("MAP click requires lat and lon")
            if self.pin_id is not None:
                raise ValueError("MAP click must not carry a pin_id")
        elif self.pin_id is None:
            raise ValueError("PIN click requires pin_id")

    @property
    def display_name(self) -> str:
        if self.click_type == MapClickType.PIN:
            return f"Pin {self.pin_id}"
        return f"Map ({self.lat:.5f}, {self.lon:.5f})"
