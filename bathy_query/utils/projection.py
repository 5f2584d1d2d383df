"""Spherical Web Mercator forward projection.

The bathymetry service expects geometry in Web Mercator Auxiliary Sphere
(WKID 102100).  The spherical formulas below are intentionally
approximate; they match the service's own spatial reference, so no
ellipsoidal correction is applied.
"""

from __future__ import annotations

import math

from bathy_query.core.constants import (
    DEFAULT_ENVELOPE_HALF_WIDTH_M,
    EARTH_RADIUS_M,
    WEB_MERCATOR_WKID,
)
from bathy_query.models.envelope import Envelope


def project(latitude_deg: float, longitude_deg: float) -> tuple[float, float]:
    """Project geographic degrees to planar ``(x, y)`` metres."""
    x = EARTH_RADIUS_M * math.radians(longitude_deg)
    y = EARTH_RADIUS_M * math.log(math.tan(math.pi / 4 + math.radians(latitude_deg) / 2))
    return x, y


def to_envelope(
    latitude_deg: float,
    longitude_deg: float,
    half_width_m: float = DEFAULT_ENVELOPE_HALF_WIDTH_M,
) -> Envelope:
    """Build a square envelope of side ``2 * half_width_m`` centred on the point.

    Latitude and longitude are not range-checked; callers must reject
    unparseable values before calling.
    """
    x, y = project(latitude_deg, longitude_deg)
    return Envelope(
        xmin=x - half_width_m,
        ymin=y - half_width_m,
        xmax=x + half_width_m,
        ymax=y + half_width_m,
        wkid=WEB_MERCATOR_WKID,
    )
