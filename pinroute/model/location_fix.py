"""LocationFix - One position report from the location service."""

import time
from dataclasses import dataclass, field

from pinroute.model.coordinate import Coordinate


@dataclass(frozen=True)
class LocationFix:
    coordinate: Coordinate
    horizontal_accuracy_m: float = 5.0
    heading_deg: float | None = None
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self) -> None:
        if self.horizontal_accuracy_m < 0:
            raise ValueError(f"Accuracy must be non-negative, got {self.horizontal_accuracy_m}")
        if self.heading_deg is not None and not 0.0 <= self.heading_deg < 360.0:
            raise ValueError(f"Heading must be in [0, 360), got {self.heading_deg}")
