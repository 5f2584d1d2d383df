"""Data models for coordinates moving through the resolution pipeline.

- ``Coordinate``: raw latitude/longitude text supplied by the user or a
  survey import.  Values may be malformed; parsing happens later.
- ``CoordinateTask``: a coordinate plus the data layer currently being tried.
- ``ResolutionResult``: the terminal record for one input coordinate.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bathy_query.core.constants import DEPTH_FIELD
from bathy_query.models.response import AttributeValue, Feature


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair as entered, in decimal-degree text.

    Attributes:
        latitude: Latitude text (``"-2,21"`` and ``"-2.21"`` are both accepted).
        longitude: Longitude text.
    """

    latitude: str
    longitude: str

    def to_dict(self) -> dict[str, str]:
        """Serialise to a plain dict."""
        return {"latitude": self.latitude, "longitude": self.longitude}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Coordinate:
        """Deserialise from a plain dict.  Missing values become ``""``."""
        return cls(
            latitude=str(data.get("latitude", "") or ""),
            longitude=str(data.get("longitude", "") or ""),
        )


@dataclass(frozen=True, slots=True)
class CoordinateTask:
    """A coordinate queued for resolution against one data layer.

    Attributes:
        coord: The coordinate being resolved.
        layer_attempt: Index of the service data layer to query next.
    """

    coord: Coordinate
    layer_attempt: int = 0

    def next_layer(self) -> CoordinateTask:
        """Return a copy targeting the next fallback layer."""
        return CoordinateTask(coord=self.coord, layer_attempt=self.layer_attempt + 1)


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Terminal outcome for one input coordinate.

    An empty ``features`` list means no data was found after exhausting
    the layer fallbacks (or the coordinate could not be parsed).  This
    is a valid result, not an error.

    Attributes:
        coord: The input coordinate.
        features: Records returned by the service for the final attempt.
        layer_id: Last layer queried, or ``None`` when never queried.
        attempts: Number of network attempts made for this coordinate.
    """

    coord: Coordinate
    features: list[Feature] = field(default_factory=list)
    layer_id: int | None = None
    attempts: int = 0

    @property
    def found(self) -> bool:
        """Whether any feature was returned."""
        return bool(self.features)

    def depth(self, depth_field: str = DEPTH_FIELD) -> AttributeValue:
        """Return the depth attribute of the first feature, or ``None``."""
        if not self.features:
            return None
        return self.features[0].attributes.get(depth_field)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a JSON-friendly dict."""
        return {
            "coord": self.coord.to_dict(),
            "features": [f.model_dump() for f in self.features],
            "layer_id": self.layer_id,
            "attempts": self.attempts,
        }
