"""Survey report CSV import.

Survey equipment exports a semicolon-delimited report whose first line
is a header row followed by three preamble rows.  Latitude and
longitude are in columns 3 and 6 (zero-based) as DMS strings, e.g.
``23°12'30.5"S``.

Rows with a blank latitude or longitude are ignored.  Rows whose DMS
text cannot be parsed, and rows with more fields than the header, are
skipped with a warning; they never abort the import.

Blank lines are dropped before rows are counted, so warnings report a
``row`` number (1-based, counting the non-blank rows kept below the
header) rather than a physical file line.
"""

from __future__ import annotations

import csv
import logging
from typing import IO, TYPE_CHECKING

import pandas as pd

from bathy_query.core.exceptions import CoordinateFormatError, ValidationError
from bathy_query.models.coordinate import Coordinate
from bathy_query.parsing.coordinates import parse_dms

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger("bathy_query.parsing.survey_csv")

SURVEY_DELIMITER = ";"
SURVEY_PREAMBLE_ROWS = 3
LATITUDE_COLUMN = 3
LONGITUDE_COLUMN = 6


class SurveyImportError(ValidationError):
    """Raised when a survey file cannot be read as a whole.

    Attributes:
        source: Name of the file (or stream) being imported.
    """

    default_stage = "import_survey"
    default_code = "SURVEY_IMPORT_FAILED"

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"{source}: {message}")


def read_survey_csv(source: str | Path | IO[str], *, encoding: str = "utf-8") -> list[Coordinate]:
    """Import coordinates from a survey CSV report.

    Args:
        source: Path to the CSV file, or an open text stream.
        encoding: File encoding when *source* is a path.

    Returns:
        Coordinates in file order, with decimal-degree text components.

    Raises:
        SurveyImportError: If the file cannot be read or lacks the
            coordinate columns.
    """
    source_name = str(getattr(source, "name", source))
    overlong = 0

    def _skip_overlong(fields: list[str]) -> None:
        nonlocal overlong
        overlong += 1
        logger.warning(
            "Skipping survey row | file=%s | fields=%d | error=more fields than the header",
            source_name,
            len(fields),
        )
        return None

    try:
        frame = pd.read_csv(
            source,
            sep=SURVEY_DELIMITER,
            header=0,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            on_bad_lines=_skip_overlong,
            engine="python",
            quoting=csv.QUOTE_NONE,
            encoding=encoding,
        ).fillna("")
    except FileNotFoundError as exc:
        raise SurveyImportError(source_name, "file not found") from exc
    except pd.errors.EmptyDataError as exc:
        raise SurveyImportError(source_name, "file is empty") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise SurveyImportError(source_name, f"unreadable CSV: {exc}") from exc

    if frame.shape[1] <= max(LATITUDE_COLUMN, LONGITUDE_COLUMN):
        msg = (
            f"expected at least {max(LATITUDE_COLUMN, LONGITUDE_COLUMN) + 1} columns, "
            f"found {frame.shape[1]}"
        )
        raise SurveyImportError(source_name, msg)

    coordinates: list[Coordinate] = []
    skipped = overlong
    for position in range(SURVEY_PREAMBLE_ROWS, len(frame)):
        lat_text = str(frame.iat[position, LATITUDE_COLUMN]).strip()
        lon_text = str(frame.iat[position, LONGITUDE_COLUMN]).strip()
        if not lat_text or not lon_text:
            continue

        try:
            latitude = parse_dms(lat_text)
            longitude = parse_dms(lon_text)
        except CoordinateFormatError as exc:
            skipped += 1
            logger.warning(
                "Skipping survey row | file=%s | row=%d | error=%s",
                source_name,
                position + 1,
                exc.message,
            )
            continue

        coordinates.append(Coordinate(latitude=str(latitude), longitude=str(longitude)))

    logger.info(
        "Survey import completed | file=%s | coordinates=%d | skipped=%d",
        source_name,
        len(coordinates),
        skipped,
    )
    return coordinates
