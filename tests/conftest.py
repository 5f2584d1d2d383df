"""Shared pytest fixtures for the bathymetry query test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from bathy_query.core.config import ResolverConfig
from bathy_query.models.coordinate import Coordinate

# ---------------------------------------------------------------------------
# Configuration fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fast_config() -> ResolverConfig:
    """Small batches, generous rate limit, suitable for scheduler tests."""
    return ResolverConfig(
        api_url="https://example.test/MapServer/dynamicLayer/query",
        batch_size=2,
        max_concurrent_requests=2,
        rate_limit_per_min=6000,
    )


# ---------------------------------------------------------------------------
# Coordinate fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_coordinates() -> list[Coordinate]:
    """Three coordinates off the northern Brazilian coast."""
    return [
        Coordinate(latitude="-2.21", longitude="-47.43"),
        Coordinate(latitude="-1,95", longitude="-44,10"),
        Coordinate(latitude="-3.5", longitude="-38.2"),
    ]


# ---------------------------------------------------------------------------
# Survey CSV fixtures
# ---------------------------------------------------------------------------

SURVEY_HEADER = "id;data;hora;latitude;x1;x2;longitude;prof"

SURVEY_ROWS = [
    "p0;;;;;;;",
    "p1;;;;;;;",
    "p2;;;;;;;",
    "1;2024-05-01;10:00;23°12'30.5\"S;a;b;45°30'15.2\"W;12",
    "2;2024-05-01;10:05;02°12'36\"S;a;b;47°25'48\"W;8",
    "3;2024-05-01;10:10;invalid;a;b;47°25'48\"W;8",
    "4;2024-05-01;10:15;;a;b;;8",
    "5;2024-05-01;10:20;00°30'00\"N;a;b;030°00'00\"E;3",
]


@pytest.fixture()
def survey_csv(tmp_path: Path) -> Path:
    """Survey report with a preamble, one malformed row and one blank row."""
    path = tmp_path / "survey.csv"
    path.write_text("\n".join([SURVEY_HEADER, *SURVEY_ROWS]) + "\n", encoding="utf-8")
    return path
