"""Reference data build: published wage CSVs -> static JSON artifacts.

Inputs (from the prevailing wage data release):
- Geography.csv: Area, AreaName, StateAb, State, CountyTownName
- ALC_Export.csv: Area, SocCode, Level1..Level4, Label (optional)
- oes_soc_occs.csv: soccode, Title, Description

Outputs:
- county-mapping.json: {area: {name, counties: [{county, state, stateAb}]}}
- wages.json: {soc: [{area, areaName, level1..level4}]}
- soc-codes.json: [{code, title, description}]
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import pandas as pd
from pydantic import ValidationError

from wagemap.domain.models import HOURS_PER_YEAR, GeographyEntry, JobCategory, WageArea
from wagemap.geography.directory import AreaDirectory
from wagemap.logging import get_logger
from wagemap.logging.context import log_context

from .exceptions import ReferenceDataError

logger = get_logger(__name__, component="reference")

GEOGRAPHY_FILE = "Geography.csv"
WAGES_FILE = "ALC_Export.csv"
JOB_CATEGORIES_FILE = "oes_soc_occs.csv"

GEOGRAPHY_COLUMNS = ("Area", "AreaName", "StateAb", "State", "CountyTownName")
WAGE_COLUMNS = ("Area", "SocCode", "Level1", "Level2", "Level3", "Level4")
JOB_CATEGORY_COLUMNS = ("soccode", "Title", "Description")
LEVEL_COLUMNS = ["Level1", "Level2", "Level3", "Level4"]

COUNTY_MAPPING_ARTIFACT = "county-mapping.json"
WAGES_ARTIFACT = "wages.json"
JOB_CATEGORIES_ARTIFACT = "soc-codes.json"


@dataclass
class BuildResult:
    """Counts from one reference build."""

    area_count: int = 0
    soc_count: int = 0
    wage_row_count: int = 0
    job_category_count: int = 0
    skipped_geography_rows: int = 0
    skipped_wage_rows: int = 0
    skipped_job_categories: int = 0
    non_monotonic_rows: int = 0
    outputs: Dict[str, Path] = field(default_factory=dict)


def read_csv(path: Path, required_columns: Sequence[str]) -> pd.DataFrame:
    """Read a CSV as strings, blanks kept as empty strings.

    Raises:
        ReferenceDataError: File missing, unreadable, or lacking a required column
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except FileNotFoundError as e:
        raise ReferenceDataError(f"Reference input not found: {path}", path=path) from e
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise ReferenceDataError(f"Failed to read {path}: {e}", path=path) from e

    df.columns = [str(col).strip() for col in df.columns]
    missing = [col for col in required_columns if col not in df.columns]
    if missing:
        raise ReferenceDataError(
            f"{path.name} is missing required columns: {', '.join(missing)}", path=path
        )

    logger.info(
        "Reference CSV loaded",
        extra={"event": "reference.csv.loaded", "path": str(path), "row_count": len(df)},
    )
    return df


def build_directory(geography: pd.DataFrame) -> Tuple[AreaDirectory, int]:
    """Build the Area Directory from Geography.csv rows.

    Returns:
        (directory, number of skipped rows)
    """
    entries: List[GeographyEntry] = []
    skipped = 0

    for row in geography.to_dict("records"):
        try:
            entries.append(
                GeographyEntry(
                    area_code=int(str(row["Area"]).strip()),
                    area_name=str(row["AreaName"]).strip(),
                    county_name=row["CountyTownName"],
                    state=str(row["State"]).strip(),
                    state_abbrev=row["StateAb"],
                )
            )
        except (ValueError, ValidationError):
            skipped += 1
            logger.warning(
                "Skipping malformed geography row",
                extra={
                    "event": "reference.geography.skipped",
                    "area_code": row.get("Area"),
                    "county": row.get("CountyTownName"),
                },
            )

    return AreaDirectory.from_entries(entries), skipped


def normalize_wage_frame(wages: pd.DataFrame) -> pd.DataFrame:
    """Clean ALC rows: drop rows without area or SOC code, make levels hourly floats.

    Non-numeric levels become 0.0. Rows whose Label mentions "Annual" carry
    yearly amounts and are divided by HOURS_PER_YEAR.
    """
    df = wages.copy()
    df["SocCode"] = df["SocCode"].astype(str).str.strip()
    df["area_code"] = pd.to_numeric(df["Area"].astype(str).str.strip(), errors="coerce")
    df = df[(df["SocCode"] != "") & df["area_code"].notna()].copy()
    df["area_code"] = df["area_code"].astype(int)

    for col in LEVEL_COLUMNS:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0).astype(float)

    if "Label" in df.columns:
        annual_mask = df["Label"].str.contains("Annual", case=False, na=False)
        if annual_mask.any():
            df.loc[annual_mask, LEVEL_COLUMNS] = df.loc[annual_mask, LEVEL_COLUMNS] / HOURS_PER_YEAR
            logger.info(
                "Converted annual wage rows to hourly",
                extra={"event": "reference.wages.annualized", "row_count": int(annual_mask.sum())},
            )
    return df


def build_wages(
    wages: pd.DataFrame, directory: AreaDirectory
) -> Tuple[Dict[str, List[Dict[str, Any]]], BuildResult]:
    """Group cleaned wage rows by SOC code in file order."""
    result = BuildResult()
    cleaned = normalize_wage_frame(wages)
    result.skipped_wage_rows = len(wages) - len(cleaned)

    output: Dict[str, List[Dict[str, Any]]] = {}
    for row in cleaned.to_dict("records"):
        area = directory.get(row["area_code"])
        try:
            wage = WageArea(
                area_code=row["area_code"],
                area_name=area.name if area else "Unknown Area",
                tier1=row["Level1"],
                tier2=row["Level2"],
                tier3=row["Level3"],
                tier4=row["Level4"],
            )
        except ValidationError:
            result.skipped_wage_rows += 1
            logger.warning(
                "Skipping wage row with invalid levels",
                extra={
                    "event": "reference.wages.skipped",
                    "soc_code": row["SocCode"],
                    "area_code": row["area_code"],
                },
            )
            continue

        if not wage.is_monotonic:
            result.non_monotonic_rows += 1
        output.setdefault(row["SocCode"], []).append(wage.model_dump(by_alias=True))
        result.wage_row_count += 1

    if result.non_monotonic_rows:
        logger.warning(
            "Wage rows with decreasing tiers kept as published",
            extra={"event": "reference.wages.non_monotonic", "row_count": result.non_monotonic_rows},
        )

    result.soc_count = len(output)
    return output, result


def build_job_categories(frame: pd.DataFrame) -> Tuple[List[JobCategory], int]:
    categories: List[JobCategory] = []
    skipped = 0
    for row in frame.to_dict("records"):
        try:
            categories.append(
                JobCategory(code=row["soccode"], title=row["Title"], description=row["Description"].strip())
            )
        except ValidationError:
            skipped += 1
            logger.warning(
                "Skipping malformed job category row",
                extra={"event": "reference.job_category.skipped", "soc_code": row.get("soccode")},
            )
    return categories, skipped


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, separators=(",", ":"))


def build_reference_data(source_dir: Path, output_dir: Path) -> BuildResult:
    """Run the full build and write the three JSON artifacts.

    Raises:
        ReferenceDataError: If an input file is missing or malformed
    """
    source_dir = Path(source_dir)
    output_dir = Path(output_dir)

    with log_context(source_dir=str(source_dir)):
        geography = read_csv(source_dir / GEOGRAPHY_FILE, GEOGRAPHY_COLUMNS)
        wage_rows = read_csv(source_dir / WAGES_FILE, WAGE_COLUMNS)
        job_rows = read_csv(source_dir / JOB_CATEGORIES_FILE, JOB_CATEGORY_COLUMNS)

        directory, skipped_geography = build_directory(geography)
        wages, result = build_wages(wage_rows, directory)
        categories, skipped_categories = build_job_categories(job_rows)

        result.area_count = len(directory)
        result.job_category_count = len(categories)
        result.skipped_geography_rows = skipped_geography
        result.skipped_job_categories = skipped_categories

        outputs = {
            COUNTY_MAPPING_ARTIFACT: directory.to_mapping(),
            WAGES_ARTIFACT: wages,
            JOB_CATEGORIES_ARTIFACT: [category.model_dump() for category in categories],
        }
        for name, payload in outputs.items():
            path = output_dir / name
            try:
                write_json(path, payload)
            except OSError as e:
                raise ReferenceDataError(f"Failed to write {path}: {e}", path=path) from e
            result.outputs[name] = path

        logger.info(
            "Reference data built",
            extra={
                "event": "reference.build.completed",
                "output_dir": str(output_dir),
                "area_count": result.area_count,
                "soc_count": result.soc_count,
                "job_category_count": result.job_category_count,
                "skipped_wage_rows": result.skipped_wage_rows,
            },
        )
    return result
