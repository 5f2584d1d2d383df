"""Tests for the bathy-query command line."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from bathy_query.cli import NO_DATA, build_config, build_parser, main, parse_coord_arg, render_table
from bathy_query.core.exceptions import BatchQueryError
from bathy_query.models.coordinate import Coordinate, ResolutionResult
from bathy_query.models.response import Feature

_FOUND = ResolutionResult(
    coord=Coordinate("-2.21", "-47.43"),
    features=[Feature(attributes={"profundida": -12.5})],
    layer_id=1,
    attempts=2,
)
_EMPTY = ResolutionResult(coord=Coordinate("abc", "-47.43"))


class TestParseCoordArg:
    """Coordinate argument splitting."""

    def test_comma_separated(self) -> None:
        assert parse_coord_arg("-2.21,-47.43") == Coordinate("-2.21", "-47.43")

    def test_semicolon_keeps_decimal_commas(self) -> None:
        assert parse_coord_arg("-2,21;-47,43") == Coordinate("-2,21", "-47,43")

    def test_strips_whitespace(self) -> None:
        assert parse_coord_arg(" 1.5 , 2.5 ") == Coordinate("1.5", "2.5")

    def test_ambiguous_commas_rejected(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_coord_arg("-2,21,-47,43")

    def test_missing_separator_rejected(self) -> None:
        with pytest.raises(argparse.ArgumentTypeError):
            parse_coord_arg("-2.21")


class TestBuildConfig:
    """Command-line overrides on top of the environment."""

    def test_overrides_applied(self) -> None:
        args = build_parser().parse_args(["--batch-size", "3", "--max-layers", "2"])
        config = build_config(args)
        assert config.batch_size == 3
        assert config.max_layer_attempts == 2

    def test_unset_flags_keep_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            config = build_config(build_parser().parse_args([]))
        assert config.batch_size == 10
        assert config.max_concurrent_requests == 5


class TestRenderTable:
    """Text table output."""

    def test_found_and_empty_rows(self) -> None:
        table = render_table([_FOUND, _EMPTY], "profundida")
        lines = table.splitlines()
        assert "Latitude" in lines[0]
        assert "Attempts" in lines[0]
        assert "-12.5" in lines[2]
        assert NO_DATA in lines[3]

    def test_missing_depth_attribute(self) -> None:
        result = ResolutionResult(
            coord=Coordinate("1", "2"), features=[Feature(attributes={})], layer_id=0, attempts=1
        )
        assert "N/A" in render_table([result], "profundida")


class TestMain:
    """End-to-end wiring with the resolver mocked out."""

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        resolver = AsyncMock(return_value=[_FOUND, _EMPTY])
        with patch("bathy_query.cli.resolve_depths_async", resolver):
            code = main(["--coord=-2.21,-47.43", "--coord", "abc;-47.43", "--json"])

        assert code == 0
        coords = resolver.call_args.args[0]
        assert coords == [Coordinate("-2.21", "-47.43"), Coordinate("abc", "-47.43")]
        payload = json.loads(capsys.readouterr().out)
        assert payload[0]["features"] == [{"attributes": {"profundida": -12.5}}]
        assert payload[1]["layer_id"] is None

    def test_table_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("bathy_query.cli.resolve_depths_async", AsyncMock(return_value=[_EMPTY])):
            code = main(["--coord", "abc;-47.43"])
        assert code == 0
        assert NO_DATA in capsys.readouterr().out

    def test_csv_input(self, survey_csv: Path) -> None:
        resolver = AsyncMock(return_value=[])
        with patch("bathy_query.cli.resolve_depths_async", resolver):
            code = main(["--csv", str(survey_csv)])
        assert code == 0
        coords = resolver.call_args.args[0]
        assert coords[0] == Coordinate("-23.21", "-45.5")
        assert len(coords) == 3

    def test_batch_failure_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        resolver = AsyncMock(side_effect=BatchQueryError())
        with patch("bathy_query.cli.resolve_depths_async", resolver):
            code = main(["--coord=-2.21,-47.43"])
        assert code == 1
        assert "batch query failed" in capsys.readouterr().err

    def test_batch_failure_json_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        resolver = AsyncMock(side_effect=BatchQueryError())
        with patch("bathy_query.cli.resolve_depths_async", resolver):
            code = main(["--coord=-2.21,-47.43", "--json"])
        assert code == 1
        payload = json.loads(capsys.readouterr().out)
        assert payload["error"]["code"] == "BATCH_QUERY_FAILED"
        assert payload["error"]["category"] == "permanent"

    def test_missing_csv_json_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--csv", str(tmp_path / "missing.csv"), "--json"])
        assert code == 2
        payload = json.loads(capsys.readouterr().out)
        assert payload["error"]["category"] == "validation"
        assert payload["error"]["stage"] == "import_survey"

    def test_invalid_config_exit_code(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--coord=-2.21,-47.43", "--batch-size", "0"])
        assert code == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_missing_csv_exit_code(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["--csv", str(tmp_path / "missing.csv")])
        assert code == 2
        assert "file not found" in capsys.readouterr().err

    def test_no_coordinates_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2
