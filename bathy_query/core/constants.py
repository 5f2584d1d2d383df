"""Shared constants for the bathymetry query service.

The external service is an ArcGIS MapServer ``dynamicLayer/query``
endpoint published by the Brazilian Geological Survey (SGB).  Its
spatial reference is Web Mercator Auxiliary Sphere.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# External service
# ---------------------------------------------------------------------------

DEFAULT_API_URL: str = (
    "https://geoportal.sgb.gov.br/server/rest/services/"
    "geologia_marinha/batimetria/MapServer/dynamicLayer/query"
)
"""Default ``dynamicLayer/query`` endpoint of the bathymetry MapServer."""

DEFAULT_PROVIDER: str = "sgb_geoportal"
"""Registered name of the built-in depth provider."""

DEPTH_FIELD: str = "profundida"
"""The single depth attribute requested from the service."""

# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

WEB_MERCATOR_WKID: int = 102100
"""Web Mercator Auxiliary Sphere, as the ArcGIS well-known id."""

EARTH_RADIUS_M: float = 6378137.0
"""Sphere radius used by the spherical Mercator forward projection."""

DEFAULT_ENVELOPE_HALF_WIDTH_M: float = 1000.0

# ---------------------------------------------------------------------------
# Scheduling
# ---------------------------------------------------------------------------

MAX_CONCURRENT_REQUESTS: int = 5
RATE_LIMIT_PER_MIN: int = 60
BATCH_SIZE: int = 10
MAX_LAYER_ATTEMPTS: int = 5
REQUEST_TIMEOUT_S: float = 30.0
