"""Coordinate text parsing and survey file import."""

from bathy_query.parsing.coordinates import parse_coordinate_pair, parse_decimal, parse_dms
from bathy_query.parsing.survey_csv import SurveyImportError, read_survey_csv

__all__ = [
    "SurveyImportError",
    "parse_coordinate_pair",
    "parse_decimal",
    "parse_dms",
    "read_survey_csv",
]
