"""Request parameters for the ArcGIS ``dynamicLayer/query`` operation.

The ``layer`` parameter selects a numbered map layer of the service as
a dynamic layer source; higher layer ids are fallback datasets.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from bathy_query.core.constants import DEPTH_FIELD

if TYPE_CHECKING:
    from bathy_query.models.envelope import Envelope

SPATIAL_REL_INTERSECTS = "esriSpatialRelIntersects"
GEOMETRY_TYPE_ENVELOPE = "esriGeometryEnvelope"


def _compact_json(value: object) -> str:
    return json.dumps(value, separators=(",", ":"))


def build_query_params(
    envelope: Envelope,
    layer_id: int,
    *,
    out_field: str = DEPTH_FIELD,
) -> dict[str, str]:
    """Serialise *envelope* and *layer_id* into query-string parameters.

    Pure and deterministic: the same inputs always produce the same dict.
    """
    wkid = str(envelope.wkid)
    return {
        "f": "json",
        "returnGeometry": "false",
        "spatialRel": SPATIAL_REL_INTERSECTS,
        "geometry": _compact_json(envelope.to_dict()),
        "geometryType": GEOMETRY_TYPE_ENVELOPE,
        "inSR": wkid,
        "outFields": out_field,
        "outSR": wkid,
        "layer": _compact_json({"source": {"type": "mapLayer", "mapLayerId": layer_id}}),
    }
