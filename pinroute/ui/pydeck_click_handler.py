"""Deck rendering through streamlit-deckgl, returning the last click.

st.pydeck_chart only reports picks on pickable layers. Pins need those,
but placing a pin needs the coordinate of a click on the bare map, which
only the raw deck.gl onClick event carries.
"""

import logging
from dataclasses import dataclass
from typing import Any

import pydeck as pdk
from streamlit_deckgl import st_deckgl  # type: ignore[import-untyped]

from pinroute.constants import ClickConfig

logger = logging.getLogger(__name__)


@dataclass
class PydeckClickResult:
    """Result from Pydeck click detection.

    Attributes:
        clicked_object: The picked deck.gl object data (dict) or None for a map click
        clicked_coordinate: [lon, lat] of click location (always available for clicks)
    """

    clicked_object: dict[str, Any] | None
    clicked_coordinate: list[float] | None

    @property
    def is_object_click(self) -> bool:
        return self.clicked_object is not None

    @property
    def is_map_click(self) -> bool:
        return self.clicked_object is None and self.clicked_coordinate is not None

    @staticmethod
    def empty() -> "PydeckClickResult":
        """Return empty result (no click detected)."""
        return PydeckClickResult(clicked_object=None, clicked_coordinate=None)


def parse_click_event(event: Any) -> PydeckClickResult:
    """Split a st_deckgl event into picked object and coordinate.

    st_deckgl SPREADS object properties into the event dict (no "object" key):
    - Map click: {coordinate: [lon, lat], eventType: "click"}
    - Object click: {type: ..., id: ..., position: [...], coordinate: [lon, lat], eventType: "click"}
    """
    if not event or not isinstance(event, dict):
        return PydeckClickResult.empty()

    clicked_object: dict[str, Any] | None = None
    clicked_coordinate: list[float] | None = None

    coord = event.get("coordinate")
    if isinstance(coord, (list, tuple)) and len(coord) >= 2:
        clicked_coordinate = [float(coord[0]), float(coord[1])]

    # Picked objects are recognised by the "type" field our layers set
    if event.get("type") and event["type"] != "click":
        clicked_object = {k: v for k, v in event.items() if k not in ("coordinate", "eventType")}

    return PydeckClickResult(clicked_object=clicked_object, clicked_coordinate=clicked_coordinate)


def render_pydeck_map(
    deck: pdk.Deck,
    key: str,
    height: int = ClickConfig.MAP_HEIGHT_PX,
) -> PydeckClickResult:
    """Draw the deck and return whatever the component reported last.

    The component repeats its last event on every rerun; ClickDetector
    filters those repeats.
    """
    # Without events=["click"] the component reports nothing
    event = st_deckgl(deck, key=key, height=height, events=["click"])
    if event:
        logger.debug(f"st_deckgl event keys: {list(event.keys()) if isinstance(event, dict) else type(event)}")
    return parse_click_event(event)
