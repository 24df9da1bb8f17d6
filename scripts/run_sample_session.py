#!/usr/bin/env python3
"""Sample map session for manual end-to-end checks.

Plays a short scripted session against the configured reference data without
a map engine: selects a job category, walks every rendered county, sweeps the
salary slider and prints what the renderer was asked to do.

Usage:
    # Fixture data shipped with the tests
    python scripts/run_sample_session.py --config config.example.yaml --soc 15-1252

    # Custom salaries
    python scripts/run_sample_session.py --soc 29-1141 --salary 90000 --salary 140000
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from wagemap.config.loader import load_config
from wagemap.logging.config import configure_logging
from wagemap.lookup.factory import get_wage_lookup
from wagemap.presentation.report import WageReport
from wagemap.presentation.templates import ReportRenderer
from wagemap.reference.store import load_reference_data, load_rendered_features
from wagemap.rendering.recording import RecordingRenderer
from wagemap.session.controller import MapSession
from wagemap.session.models import LoadState


def print_header(title: str):
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_county_table(rows):
    """Print county, state, area and tier columns."""
    widths = [max(len(str(row[i])) for row in rows) for i in range(len(rows[0]))]
    for row in rows:
        print("  ".join(f"{str(cell):<{widths[i]}}" for i, cell in enumerate(row)))


def main():
    parser = argparse.ArgumentParser(
        description="Run a scripted wage map session",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument("--soc", default="15-1252", help="Job category (default: 15-1252)")
    parser.add_argument(
        "--salary",
        type=float,
        action="append",
        default=None,
        help="Salary to paint; repeat for a sweep (default: 100000, 120000, 150000)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: WARNING)",
    )
    args = parser.parse_args()

    load_dotenv()
    salaries = args.salary or [100000, 120000, 150000]

    try:
        app_config, env_config = load_config(args.config)
        configure_logging(
            level=args.log_level,
            format_type=app_config.logging.format,
            environment="sample",
        )

        geojson_path = app_config.data.counties_geojson_path
        if geojson_path is None:
            print("Error: data.counties_geojson must be configured for a sample session")
            return 1

        reference = load_reference_data(
            app_config.data.data_dir,
            county_mapping_file=app_config.data.county_mapping_file,
            job_categories_file=app_config.data.job_categories_file,
        )
        features = load_rendered_features(
            geojson_path, app_config.map.name_property, app_config.map.state_property
        )
        renderer = RecordingRenderer()
        session = MapSession(
            reference.directory,
            get_wage_lookup(app_config.wage_service, app_config.data),
            renderer,
            map_config=app_config.map,
            palette=app_config.palette,
            salary=app_config.salary.clamp(salaries[0]),
        )

        print_header("Wage Map - Sample Session")
        print(f"Data directory: {app_config.data.data_dir}")
        print(f"Areas: {len(reference.directory)}")
        print(f"Rendered counties: {len(features)}")

        session.select_job_category(args.soc)
        if session.load_state == LoadState.ERROR:
            print(f"\nError: {session.loader.last_error}")
            return 1
        print(f"Job category: {args.soc} ({len(session.snapshot.by_area)} wage areas)")

        first_with_data = None
        for salary in salaries:
            session.set_salary(app_config.salary.clamp(salary))
            print_header(f"Counties at {session.salary:,.0f}")

            rows = [("County", "State", "Area", "Tier")]
            for feature in features:
                selection = session.hover(feature)
                if selection is None or not selection.has_data:
                    rows.append((feature.county_name or "?", feature.state_code or "?", "-", "-"))
                    continue
                report = WageReport.build(selection, session.salary, session.palette)
                rows.append((report.county, report.state, report.area_name, report.classification.tier))
                first_with_data = first_with_data or feature
            session.leave()
            print_county_table(rows)

        if first_with_data is not None:
            selection = session.click(first_with_data)
            print_header("Selected County Report")
            print(ReportRenderer().render(WageReport.build(selection, session.salary, session.palette)))

        print_header("Renderer Calls")
        print(f"Paint updates: {len(renderer.paint_calls)}")
        print(f"Feature state updates: {len(renderer.feature_state_calls)}")
        return 0

    except Exception as e:
        print(f"\nFatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
