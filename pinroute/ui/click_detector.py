"""Click detector - turns Pydeck click events into ClickInfo.

Pin objects carry type and id fields set by the pins layer. Everything
else with a coordinate is a map click (route and user-location layers
are not pickable, so a click on a route still lands on the map).

Deduplication prevents re-processing the same click on reruns.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pinroute.constants import ClickConfig
from pinroute.model.click_info import ClickInfo, MapClickType

if TYPE_CHECKING:
    from pinroute.ui.state_machine import ClickDeduplicationContext

logger = logging.getLogger(__name__)


@dataclass
class ClickDetector:
    """Detects clicks from Pydeck picked objects.

    Attributes:
        dedup: ClickDeduplicationContext for tracking last-seen clicks
    """

    dedup: "ClickDeduplicationContext"

    def detect(
        self,
        clicked_object: dict[str, Any] | None,
        clicked_coordinate: list[float] | None,
        map_version: int = 0,
    ) -> ClickInfo | None:
        """Detect click from Pydeck event data.

        Args:
            clicked_object: The picked deck.gl object data (dict) or None
            clicked_coordinate: [lon, lat] of click location or None
            map_version: Current map component version, part of the click id

        Returns:
            ClickInfo for new clicks, None otherwise
        """
        click_id = self._get_click_id(obj=clicked_object, coord=clicked_coordinate, map_version=map_version)
        if click_id is None or not self.dedup.is_new_click(click_id):
            return None

        if clicked_object is not None and clicked_object.get("type") == ClickConfig.TYPE_PIN:
            pin_id = clicked_object.get("id")
            if not pin_id:
                logger.warning(f"Pin click missing id: {clicked_object}")
                return None
            logger.debug(f"Pin click: {pin_id}")
            return ClickInfo(click_type=MapClickType.PIN, pin_id=pin_id)

        if clicked_object is not None:
            logger.debug(f"Ignoring click on non-pin object: type={clicked_object.get('type')}")

        if clicked_coordinate is not None:
            lon, lat = clicked_coordinate[0], clicked_coordinate[1]
            logger.debug(f"Map click at ({lat:.6f}, {lon:.6f})")
            return ClickInfo(click_type=MapClickType.MAP, lat=lat, lon=lon)

        return None

    @staticmethod
    def _get_click_id(
        obj: dict[str, Any] | None,
        coord: list[float] | None,
        map_version: int,
    ) -> str | None:
        """Generate unique ID for click deduplication."""
        parts = []
        if obj and obj.get("type") and obj.get("id"):
            parts.append(f"{obj['type']}_{obj['id']}")
        if coord:
            parts.append(f"coord_{coord[0]:.6f}_{coord[1]:.6f}")
        if not parts:
            return None
        # Map version makes an identical click after a reload count again
        parts.append(f"v{map_version}")
        return "_".join(parts)
