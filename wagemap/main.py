"""Command-line entry point for the wage map."""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, List, Optional, Tuple

from dotenv import load_dotenv

from wagemap.config.environment import EnvironmentConfig
from wagemap.config.exceptions import ConfigurationError
from wagemap.config.loader import load_config
from wagemap.config.models import AppConfig
from wagemap.geography.states import state_fips
from wagemap.logging import get_logger
from wagemap.logging.config import configure_logging
from wagemap.logging.context import log_context
from wagemap.lookup.exceptions import WageLookupError
from wagemap.lookup.factory import get_wage_lookup
from wagemap.presentation.report import WageReport
from wagemap.presentation.templates import ReportRenderer, ReportTemplateError
from wagemap.reference.exceptions import ReferenceDataError
from wagemap.reference.ingest import build_reference_data
from wagemap.reference.search import search_job_categories, search_locations
from wagemap.reference.store import ReferenceData, load_reference_data, load_rendered_features
from wagemap.rendering.models import RenderedFeature
from wagemap.rendering.recording import RecordingRenderer
from wagemap.session.controller import MapSession
from wagemap.session.models import LoadState

logger = get_logger(__name__, component="cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_DATA = 2


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """Load configuration and settle the log level: CLI > environment > config file."""
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level or "INFO"

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wagemap",
        description="Prevailing wage map - look up wage tiers by job category and county",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build-data", help="Build JSON artifacts from the published CSVs")
    build.add_argument("--source-dir", type=Path, required=True, help="Directory holding the CSV files")
    build.add_argument("--output-dir", type=Path, default=None, help="Defaults to data.data_dir")

    search = subparsers.add_parser("search", help="Search job categories and locations")
    search.add_argument("query")
    search.add_argument("--limit", type=int, default=8)

    lookup = subparsers.add_parser("lookup", help="Wage report for one county")
    lookup.add_argument("--soc", required=True, help="Job category (SOC) code, e.g. 15-1252")
    lookup.add_argument("--county", required=True, help="County name, e.g. 'Orange County'")
    lookup.add_argument("--state", required=True, help="State abbreviation or FIPS code")
    lookup.add_argument("--salary", type=float, default=None, help="Offered annual salary")
    lookup.add_argument("--json", action="store_true", help="Print JSON instead of the text report")

    paint = subparsers.add_parser("paint-rule", help="Compile the county fill-color expression")
    paint.add_argument("--soc", required=True, help="Job category (SOC) code")
    paint.add_argument("--salary", type=float, default=None, help="Offered annual salary")
    paint.add_argument("--output", type=Path, default=None, help="Write the expression to a file")

    focus = subparsers.add_parser("focus", help="Bounds that frame a location search hit")
    focus.add_argument("query", help="Area name or 'County, ST'")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        0 on success, 1 on configuration or lookup errors, 2 when there is no data
    """
    load_dotenv()
    start_time = time.time()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )
        logger.debug(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "command": args.command,
                "data_dir": str(app_config.data.data_dir),
                "wage_service_mode": app_config.wage_service.mode,
            },
        )

        with log_context(command=args.command):
            handler = COMMANDS[args.command]
            exit_code = handler(args, app_config, env_config)

        logger.debug(
            "Command finished",
            extra={
                "event": "cli.command.finished",
                "exit_code": exit_code,
                "duration_seconds": round(time.time() - start_time, 3),
            },
        )
        return exit_code

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (ReferenceDataError, WageLookupError, ReportTemplateError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(
            f"Command failed: {e}",
            extra={"event": "cli.command.failed", "error_type": type(e).__name__},
        )
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return EXIT_ERROR


def cmd_build_data(args: argparse.Namespace, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    output_dir = args.output_dir or app_config.data.data_dir
    result = build_reference_data(args.source_dir, output_dir)
    _print_json(
        {
            "output_dir": str(output_dir),
            "areas": result.area_count,
            "soc_codes": result.soc_count,
            "wage_rows": result.wage_row_count,
            "job_categories": result.job_category_count,
            "skipped_wage_rows": result.skipped_wage_rows,
            "skipped_geography_rows": result.skipped_geography_rows,
            "non_monotonic_rows": result.non_monotonic_rows,
        }
    )
    return EXIT_OK


def cmd_search(args: argparse.Namespace, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    reference = _load_reference(app_config)
    jobs = search_job_categories(reference.job_categories, args.query, limit=args.limit)
    locations = search_locations(reference.directory, args.query, limit=args.limit)

    _print_json(
        {
            "job_categories": [job.model_dump() for job in jobs],
            "locations": [
                {
                    "label": match.label,
                    "area_code": match.area_code,
                    "counties": [list(county) for county in match.counties],
                }
                for match in locations
            ],
        }
    )
    return EXIT_OK if jobs or locations else EXIT_NO_DATA


def cmd_lookup(args: argparse.Namespace, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    if state_fips(args.state) is None:
        print(f"Error: unknown state '{args.state}'", file=sys.stderr)
        return EXIT_ERROR

    session = _open_session(app_config, env_config, args.salary)
    _require_wages(session, args.soc)

    feature = RenderedFeature(feature_id=None, county_name=args.county, state_code=args.state)
    selection = session.click(feature)
    if not selection.has_data:
        print(
            f"No wage data for {args.county}, {args.state.upper()} under SOC code {args.soc}",
            file=sys.stderr,
        )
        return EXIT_NO_DATA

    report = WageReport.build(selection, session.salary, app_config.palette)
    if args.json:
        classification = report.classification
        _print_json(
            {
                "soc_code": args.soc,
                "county": report.county,
                "state": report.state,
                "area_code": selection.wage.area_code,
                "area_name": report.area_name,
                "salary": report.salary,
                "tier": classification.tier,
                "color": classification.color,
                "label": classification.label,
                "lottery_picks": classification.lottery_picks,
                "below_prevailing": classification.below_prevailing,
                "next_tier_gap": classification.next_tier_gap,
                "annual_thresholds": list(classification.annual_thresholds),
            }
        )
    else:
        print(ReportRenderer().render(report))
    return EXIT_OK


def cmd_paint_rule(args: argparse.Namespace, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    session = _open_session(app_config, env_config, args.salary)
    _require_wages(session, args.soc)

    rule = session.paint_rule
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(rule.expression, f)
        logger.info(
            "Paint rule written",
            extra={"event": "cli.paint_rule.written", "path": str(args.output)},
        )
    else:
        _print_json(rule.expression)
    return EXIT_OK if rule.colored_areas else EXIT_NO_DATA


def cmd_focus(args: argparse.Namespace, app_config: AppConfig, env_config: EnvironmentConfig) -> int:
    geojson_path = app_config.data.counties_geojson_path
    if geojson_path is None:
        raise ConfigurationError(
            "data.counties_geojson is not configured",
            suggestions=["Point data.counties_geojson at a county GeoJSON file inside data.data_dir"],
        )

    reference = _load_reference(app_config)
    matches = search_locations(reference.directory, args.query, limit=1)
    if not matches:
        print(f"No location matches '{args.query}'", file=sys.stderr)
        return EXIT_NO_DATA

    features = load_rendered_features(
        geojson_path, app_config.map.name_property, app_config.map.state_property
    )
    session = MapSession(
        reference.directory,
        get_wage_lookup(app_config.wage_service, app_config.data),
        RecordingRenderer(),
        map_config=app_config.map,
        palette=app_config.palette,
        salary=app_config.salary.default_salary,
    )
    request = session.focus_locations(matches[0].counties, features)
    if request is None:
        print(f"No county shapes found for '{matches[0].label}'", file=sys.stderr)
        return EXIT_NO_DATA

    _print_json({"label": matches[0].label, "bounds": request.bounds.as_list(), **request.to_options()})
    return EXIT_OK


COMMANDS = {
    "build-data": cmd_build_data,
    "search": cmd_search,
    "lookup": cmd_lookup,
    "paint-rule": cmd_paint_rule,
    "focus": cmd_focus,
}


def _load_reference(app_config: AppConfig) -> ReferenceData:
    return load_reference_data(
        app_config.data.data_dir,
        county_mapping_file=app_config.data.county_mapping_file,
        job_categories_file=app_config.data.job_categories_file,
    )


def _open_session(app_config: AppConfig, env_config: EnvironmentConfig, salary: Optional[float]) -> MapSession:
    reference = _load_reference(app_config)
    lookup = get_wage_lookup(app_config.wage_service, app_config.data)
    offered = app_config.salary.default_salary if salary is None else app_config.salary.clamp(salary)
    return MapSession(
        reference.directory,
        lookup,
        RecordingRenderer(),
        map_config=app_config.map,
        palette=app_config.palette,
        salary=offered,
    )


def _require_wages(session: MapSession, soc_code: str) -> None:
    """Load the job category; a failed load re-raises the lookup error."""
    session.select_job_category(soc_code)
    if session.load_state == LoadState.ERROR and session.loader.last_error is not None:
        raise session.loader.last_error


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    sys.exit(main())
