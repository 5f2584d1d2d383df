"""Command-line entry point: bathymetry lookup for a list of coordinates.

Coordinates come from ``--coord`` arguments and/or survey CSV reports
(``--csv``); results are printed as a table or as JSON.  All business
logic lives in the activities and orchestrators; this module is only
the wiring between the command line and the pipeline.

Examples::

    bathy-query --coord=-2.21,-47.43 --coord="-2,30;-47,50"
    bathy-query --csv survey.csv --json
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import TYPE_CHECKING

from tabulate import tabulate

from bathy_query.activities.resolve_depths import resolve_depths_async
from bathy_query.core.config import ConfigValidationError, ResolverConfig
from bathy_query.core.exceptions import BathyError, BatchQueryError
from bathy_query.models.coordinate import Coordinate
from bathy_query.parsing.survey_csv import SurveyImportError, read_survey_csv

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bathy_query.models.coordinate import ResolutionResult

logger = logging.getLogger("bathy_query.cli")

NO_DATA = "no data found"


def parse_coord_arg(text: str) -> Coordinate:
    """Split ``"LAT,LON"`` or ``"LAT;LON"`` into a ``Coordinate``.

    Use ``;`` when the values themselves use decimal commas
    (``"-2,21;-47,43"``).  The parts are kept as text; numeric parsing
    happens in the scheduler.
    """
    if ";" in text:
        lat, lon = text.split(";", 1)
    elif text.count(",") == 1:
        lat, lon = text.split(",")
    else:
        msg = f"expected LAT,LON or LAT;LON, got {text!r}"
        raise argparse.ArgumentTypeError(msg)
    return Coordinate(latitude=lat.strip(), longitude=lon.strip())


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bathy-query",
        description="Look up seabed depth for coordinates via the SGB bathymetry service.",
    )
    p.add_argument(
        "--coord",
        action="append",
        type=parse_coord_arg,
        default=[],
        metavar="LAT,LON",
        help="Decimal-degree coordinate; repeatable. Use --coord=-2.21,-47.43 for negatives.",
    )
    p.add_argument(
        "--csv",
        action="append",
        default=[],
        metavar="PATH",
        help="Semicolon-delimited survey report with DMS coordinates; repeatable.",
    )
    p.add_argument("--encoding", default="utf-8", help="Survey CSV encoding (default: utf-8).")
    p.add_argument("--json", action="store_true", help="Print results as JSON.")
    p.add_argument("--batch-size", type=int, help="Tasks dequeued per batch.")
    p.add_argument("--max-concurrent", type=int, help="Maximum requests in flight.")
    p.add_argument("--rate-limit", type=float, help="External requests-per-minute ceiling.")
    p.add_argument("--half-width", type=float, help="Envelope half-width in metres.")
    p.add_argument("--max-layers", type=int, help="Layer attempts per coordinate.")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return p


def build_config(args: argparse.Namespace) -> ResolverConfig:
    """Environment configuration with command-line overrides applied."""
    overrides = {
        "batch_size": args.batch_size,
        "max_concurrent_requests": args.max_concurrent,
        "rate_limit_per_min": args.rate_limit,
        "envelope_half_width_m": args.half_width,
        "max_layer_attempts": args.max_layers,
    }
    config = ResolverConfig.from_env()
    config = dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})
    return config.validate()


def render_table(results: Sequence[ResolutionResult], depth_field: str) -> str:
    """Format results as a text table, one row per coordinate."""
    rows = []
    for result in results:
        if result.found:
            depths = [f.attributes.get(depth_field) for f in result.features]
            depth = ", ".join("N/A" if d is None else str(d) for d in depths)
        else:
            depth = NO_DATA
        rows.append(
            [
                result.coord.latitude,
                result.coord.longitude,
                depth,
                "-" if result.layer_id is None else result.layer_id,
                result.attempts,
            ]
        )
    return tabulate(rows, headers=["Latitude", "Longitude", "Depth", "Layer", "Attempts"])


def report_error(summary: str, exc: BaseException, *, as_json: bool) -> None:
    """Print *summary* to stderr; with ``--json`` also emit the structured error."""
    print(summary, file=sys.stderr)
    if as_json and isinstance(exc, BathyError):
        print(json.dumps({"error": exc.to_error_dict()}, ensure_ascii=False, indent=2))


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    try:
        config = build_config(args)
    except (ConfigValidationError, ValueError) as exc:
        report_error(f"Configuration error: {exc}", exc, as_json=args.json)
        return 2

    coordinates: list[Coordinate] = list(args.coord)
    for path in args.csv:
        try:
            coordinates.extend(read_survey_csv(path, encoding=args.encoding))
        except SurveyImportError as exc:
            report_error(f"Import error: {exc.message}", exc, as_json=args.json)
            return 2

    if not coordinates:
        parser.error("no coordinates given (use --coord or --csv)")

    try:
        results = asyncio.run(resolve_depths_async(coordinates, config))
    except BatchQueryError as exc:
        report_error("Error: batch query failed.", exc, as_json=args.json)
        return 1

    if args.json:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
    else:
        print(render_table(results, config.depth_field))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
