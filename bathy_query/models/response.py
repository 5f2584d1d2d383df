"""Pydantic models for the ArcGIS ``query`` response.

The JSON shape is dictated by the external MapServer and is treated as
a boundary contract::

    {
      "displayFieldName": "profundida",
      "fieldAliases": {"profundida": "Profundidade"},
      "fields": [{"name": "profundida", "type": "esriFieldTypeDouble", "alias": "..."}],
      "features": [{"attributes": {"profundida": -25.0}}]
    }

Unknown keys are ignored so that additive changes on the service side
do not break parsing.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

AttributeValue = str | int | float | None


class Feature(BaseModel):
    """One attributed, geometry-less record returned by the service."""

    model_config = ConfigDict(extra="ignore")

    attributes: dict[str, AttributeValue] = Field(default_factory=dict)


class FieldInfo(BaseModel):
    """Field descriptor from the response ``fields`` list."""

    model_config = ConfigDict(extra="ignore")

    name: str
    type: str = ""
    alias: str = ""
    length: int | None = None


class BathymetryResponse(BaseModel):
    """Top-level ``query`` response.

    Attributes:
        display_field_name: Name of the service's display field.
        features: Matching records, possibly empty.
        field_aliases: Mapping of field name to human label.
        fields: Field descriptors for the returned attributes.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    display_field_name: str = Field(default="", alias="displayFieldName")
    features: list[Feature] = Field(default_factory=list)
    field_aliases: dict[str, str] = Field(default_factory=dict, alias="fieldAliases")
    fields: list[FieldInfo] = Field(default_factory=list)
