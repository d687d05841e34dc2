"""PointAnnotation - A user-placed pin on the map."""

from dataclasses import dataclass

from pinroute.model.coordinate import Coordinate


@dataclass(frozen=True)
class PointAnnotation:
    """Pin marker at a coordinate.

    Identity is the generated id (e.g., "P3"); two pins at the same
    coordinate are still distinct annotations.
    """

    id: str
    coordinate: Coordinate
    title: str | None = None

    def to_layer_datum(self, selected: bool) -> dict:
        """Pydeck data row for the pins layer."""
        return {
            "type": "pin",
            "id": self.id,
            "position": self.coordinate.lon_lat_list,
            "selected": selected,
            "label": self.title or self.id,
        }
