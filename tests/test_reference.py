"""Tests for the reference data build and artifact loading."""

import json
import logging

import pytest

from wagemap.reference.exceptions import ReferenceDataError
from wagemap.reference.ingest import (
    GEOGRAPHY_COLUMNS,
    WAGE_COLUMNS,
    build_directory,
    build_reference_data,
    build_wages,
    normalize_wage_frame,
    read_csv,
)
from wagemap.reference.store import (
    load_job_categories,
    load_reference_data,
    load_rendered_features,
    read_json,
)


@pytest.fixture
def geography(raw_dir):
    return read_csv(raw_dir / "Geography.csv", GEOGRAPHY_COLUMNS)


@pytest.fixture
def wage_frame(raw_dir):
    return read_csv(raw_dir / "ALC_Export.csv", WAGE_COLUMNS)


class TestReadCsv:
    """Tests for CSV ingestion."""

    def test_reads_as_strings(self, geography):
        assert len(geography) == 5
        assert geography.iloc[0]["Area"] == "12345"
        assert geography.iloc[4]["Area"] == ""

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReferenceDataError, match="not found") as exc_info:
            read_csv(tmp_path / "Geography.csv", GEOGRAPHY_COLUMNS)

        assert exc_info.value.path == tmp_path / "Geography.csv"

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "Geography.csv"
        path.write_text("Area,AreaName\n1,Somewhere\n", encoding="utf-8")

        with pytest.raises(ReferenceDataError, match="StateAb, State, CountyTownName"):
            read_csv(path, GEOGRAPHY_COLUMNS)

    def test_header_whitespace_ignored(self, tmp_path):
        path = tmp_path / "oes.csv"
        path.write_text(" soccode , Title ,Description\n1,A,B\n", encoding="utf-8")

        frame = read_csv(path, ("soccode", "Title", "Description"))

        assert list(frame.columns) == ["soccode", "Title", "Description"]


class TestBuildDirectory:
    """Tests for geography grouping."""

    def test_groups_counties_by_area(self, geography):
        directory, skipped = build_directory(geography)

        assert skipped == 1
        assert len(directory) == 3
        record = directory.get(12345)
        assert record.name == "Metro Alpha, CA"
        assert [(c.county, c.state, c.state_abbrev) for c in record.counties] == [
            ("Orange County", "California", "CA"),
            ("Los Angeles County", "California", "CA"),
        ]


class TestBuildWages:
    """Tests for wage row cleaning and grouping."""

    def test_normalize_drops_rows_without_keys(self, wage_frame):
        cleaned = normalize_wage_frame(wage_frame)

        assert len(cleaned) == 6
        assert cleaned["area_code"].tolist() == [12345, 20000, 30000, 12345, 99999, 20000]

    def test_annual_rows_converted_to_hourly(self, wage_frame, caplog):
        with caplog.at_level(logging.INFO):
            cleaned = normalize_wage_frame(wage_frame)

        row = cleaned[cleaned["area_code"] == 30000].iloc[0]
        assert [row["Level1"], row["Level2"], row["Level3"], row["Level4"]] == [45.0, 55.0, 65.0, 75.0]
        assert any(getattr(r, "event", None) == "reference.wages.annualized" for r in caplog.records)

    def test_non_numeric_level_becomes_zero(self, wage_frame):
        cleaned = normalize_wage_frame(wage_frame)

        nurse_row = cleaned[(cleaned["area_code"] == 12345) & (cleaned["SocCode"] == "29-1141")].iloc[0]
        assert nurse_row["Level1"] == 0.0

    def test_groups_by_soc_in_file_order(self, geography, wage_frame):
        directory, _ = build_directory(geography)

        wages, result = build_wages(wage_frame, directory)

        assert list(wages) == ["15-1252", "29-1141"]
        assert [row["area"] for row in wages["15-1252"]] == [12345, 20000, 30000]
        assert wages["15-1252"][0] == {
            "area": 12345,
            "areaName": "Metro Alpha, CA",
            "level1": 40.0,
            "level2": 50.0,
            "level3": 60.0,
            "level4": 70.0,
        }
        assert wages["29-1141"][1]["areaName"] == "Unknown Area"
        assert result.soc_count == 2
        assert result.wage_row_count == 6
        assert result.skipped_wage_rows == 2

    def test_non_monotonic_rows_kept_and_counted(self, geography, wage_frame, caplog):
        directory, _ = build_directory(geography)

        with caplog.at_level(logging.WARNING):
            wages, result = build_wages(wage_frame, directory)

        assert result.non_monotonic_rows == 1
        assert wages["29-1141"][2]["level1"] == 40.0
        assert wages["29-1141"][2]["level2"] == 30.0
        assert any(getattr(r, "event", None) == "reference.wages.non_monotonic" for r in caplog.records)


class TestBuildReferenceData:
    """Tests for the full build."""

    def test_writes_artifacts(self, raw_dir, tmp_path):
        result = build_reference_data(raw_dir, tmp_path / "out")

        assert result.area_count == 3
        assert result.soc_count == 2
        assert result.wage_row_count == 6
        assert result.job_category_count == 2
        assert result.skipped_geography_rows == 1
        assert result.skipped_wage_rows == 2
        assert result.non_monotonic_rows == 1
        assert set(result.outputs) == {"county-mapping.json", "wages.json", "soc-codes.json"}

        mapping = json.loads((tmp_path / "out" / "county-mapping.json").read_text(encoding="utf-8"))
        assert mapping["30000"] == {
            "name": "Louisville/Jefferson County, KY-IN",
            "counties": [{"county": "Jefferson County", "state": "Kentucky", "stateAb": "KY"}],
        }

        categories = json.loads((tmp_path / "out" / "soc-codes.json").read_text(encoding="utf-8"))
        assert categories[0] == {
            "code": "15-1252",
            "title": "Software Developers",
            "description": "Research, design, and develop computer and network software.",
        }

    def test_build_output_loads(self, raw_dir, tmp_path):
        build_reference_data(raw_dir, tmp_path)

        reference = load_reference_data(tmp_path)

        assert len(reference.directory) == 3
        assert [c.code for c in reference.job_categories] == ["15-1252", "29-1141"]

    def test_missing_input(self, tmp_path):
        with pytest.raises(ReferenceDataError, match="Geography.csv"):
            build_reference_data(tmp_path, tmp_path / "out")

        assert not (tmp_path / "out").exists()


class TestStore:
    """Tests for artifact loading."""

    def test_load_reference_data(self, data_dir):
        reference = load_reference_data(data_dir)

        assert len(reference.directory) == 9
        assert len(reference.job_categories) == 5
        assert reference.job_categories[2].title == "Software Developers"

    def test_missing_artifact_suggests_build(self, tmp_path):
        with pytest.raises(ReferenceDataError, match="build-data"):
            load_reference_data(tmp_path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[1,", encoding="utf-8")

        with pytest.raises(ReferenceDataError, match="Failed to read"):
            read_json(path)

    def test_wrong_shapes(self, tmp_path):
        (tmp_path / "county-mapping.json").write_text("[]", encoding="utf-8")
        (tmp_path / "soc-codes.json").write_text("{}", encoding="utf-8")

        with pytest.raises(ReferenceDataError, match="Expected JSON object"):
            load_reference_data(tmp_path)
        with pytest.raises(ReferenceDataError, match="Expected JSON array"):
            load_job_categories(tmp_path / "soc-codes.json")

    def test_malformed_job_categories_skipped(self, tmp_path):
        path = tmp_path / "soc-codes.json"
        path.write_text(
            json.dumps([{"code": "15-1252", "title": "Software Developers"}, {"code": "", "title": "x"}]),
            encoding="utf-8",
        )

        assert [c.code for c in load_job_categories(path)] == ["15-1252"]

    def test_load_rendered_features(self, data_dir):
        features = load_rendered_features(data_dir / "counties.geojson")

        assert len(features) == 8
        first = features[0]
        assert first.feature_id == "06059"
        assert first.county_name == "Orange"
        assert first.state_code == "06"
        assert first.geometry["type"] == "Polygon"

    def test_feature_without_id_uses_position(self, tmp_path):
        path = tmp_path / "counties.geojson"
        path.write_text(
            json.dumps(
                {
                    "type": "FeatureCollection",
                    "features": [
                        {"type": "Feature", "properties": {"county": "Kent", "fips": 10}, "geometry": None}
                    ],
                }
            ),
            encoding="utf-8",
        )

        features = load_rendered_features(path, name_property="county", state_property="fips")

        assert features[0].feature_id == 0
        assert features[0].state_code == "10"

    def test_not_a_feature_collection(self, tmp_path):
        path = tmp_path / "counties.geojson"
        path.write_text(json.dumps({"type": "Feature"}), encoding="utf-8")

        with pytest.raises(ReferenceDataError, match="FeatureCollection"):
            load_rendered_features(path)
