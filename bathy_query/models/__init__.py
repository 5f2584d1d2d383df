"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- Coordinate / CoordinateTask: input coordinates and their queue entries
- Envelope: projected bounding box sent to the service
- BathymetryResponse / Feature: the external service's response contract
- ResolutionResult: per-coordinate terminal record
"""

from bathy_query.models.coordinate import Coordinate, CoordinateTask, ResolutionResult
from bathy_query.models.envelope import Envelope
from bathy_query.models.response import BathymetryResponse, Feature, FieldInfo

__all__ = [
    "BathymetryResponse",
    "Coordinate",
    "CoordinateTask",
    "Envelope",
    "Feature",
    "FieldInfo",
    "ResolutionResult",
]
