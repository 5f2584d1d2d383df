"""Coordinate text parsing.

Two input formats are supported:

- Decimal degrees typed by a user, with either a dot or a comma as the
  decimal separator (``"-2,21"``, ``"-47.43"``).  Unparseable text is
  tolerated and reported as ``None``.
- Degrees/minutes/seconds with a hemisphere letter as exported by survey
  equipment (``23°12'30.5"S``); whitespace is only allowed after the
  degree sign.  Unparseable text is a hard failure for
  that value (``CoordinateFormatError``); callers decide whether to skip.
"""

from __future__ import annotations

import math
import re
from typing import TYPE_CHECKING

from bathy_query.core.exceptions import CoordinateFormatError

if TYPE_CHECKING:
    from bathy_query.models.coordinate import Coordinate

_DMS_PATTERN = re.compile(
    r"(\d{1,3})°\s*(\d{1,2})'?(\d{1,2}(?:\.\d+)?)?\"?([NSEW])",
    re.IGNORECASE,
)

_NEGATIVE_HEMISPHERES = frozenset({"S", "W"})

# Web Mercator is undefined at the poles.
MAX_ABS_LATITUDE = 90.0
MAX_ABS_LONGITUDE = 180.0


def parse_decimal(text: str | None) -> float | None:
    """Parse decimal-degree text, accepting a comma decimal separator.

    Returns:
        The parsed value, or ``None`` if the text is empty, non-numeric
        or not finite.
    """
    if text is None:
        return None
    normalised = str(text).strip().replace(",", ".", 1)
    if not normalised:
        return None
    try:
        value = float(normalised)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_dms(text: str) -> float:
    """Convert a degrees/minutes/seconds string to signed decimal degrees.

    South and west hemispheres are negative.  The result is rounded to
    two decimal places.

    Raises:
        CoordinateFormatError: If the text does not match the DMS pattern
            or any component (including seconds) is missing.
    """
    match = _DMS_PATTERN.search(str(text).strip())
    if match is None or any(group is None for group in match.groups()):
        raise CoordinateFormatError(str(text))

    degrees_raw, minutes_raw, seconds_raw, hemisphere = match.groups()
    decimal = int(degrees_raw) + int(minutes_raw) / 60 + float(seconds_raw) / 3600

    if hemisphere.upper() in _NEGATIVE_HEMISPHERES:
        decimal = -decimal

    return round(decimal, 2)


def parse_coordinate_pair(coord: Coordinate) -> tuple[float, float] | None:
    """Parse both components of *coord* as decimal degrees.

    A latitude outside the open interval (-90, 90) or a longitude outside
    [-180, 180] is treated like non-numeric text: it cannot be projected.

    Returns:
        ``(latitude, longitude)``, or ``None`` if either fails to parse
        or is out of range.
    """
    lat = parse_decimal(coord.latitude)
    lon = parse_decimal(coord.longitude)
    if lat is None or lon is None:
        return None
    if abs(lat) >= MAX_ABS_LATITUDE or abs(lon) > MAX_ABS_LONGITUDE:
        return None
    return lat, lon
