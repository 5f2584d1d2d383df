"""Projected bounding envelope sent to the spatial query service."""

from __future__ import annotations

from dataclasses import dataclass

from bathy_query.core.constants import WEB_MERCATOR_WKID


@dataclass(frozen=True, slots=True)
class Envelope:
    """Axis-aligned bounding box in projected (metre) coordinates.

    Derived per attempt and never cached.

    Attributes:
        xmin: Western edge.
        ymin: Southern edge.
        xmax: Eastern edge.
        ymax: Northern edge.
        wkid: Spatial reference well-known id of the coordinates.
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float
    wkid: int = WEB_MERCATOR_WKID

    @property
    def center(self) -> tuple[float, float]:
        """Centre point ``(x, y)``."""
        return ((self.xmin + self.xmax) / 2.0, (self.ymin + self.ymax) / 2.0)

    def to_dict(self) -> dict[str, object]:
        """Serialise to the ArcGIS envelope JSON shape."""
        return {
            "xmin": self.xmin,
            "ymin": self.ymin,
            "xmax": self.xmax,
            "ymax": self.ymax,
            "spatialReference": {"wkid": self.wkid},
        }
