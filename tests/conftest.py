"""Shared pytest fixtures."""

import json
from pathlib import Path

import pytest

from wagemap.domain.models import WageArea
from wagemap.geography.directory import AreaDirectory
from wagemap.geography.resolver import build_reverse_index
from wagemap.logging.context import clear_log_context
from wagemap.lookup.static import StaticWageLookup
from wagemap.rendering.recording import RecordingRenderer

FIXTURES_DIR = Path(__file__).parent / "fixtures"
DATA_DIR = FIXTURES_DIR / "data"
RAW_DIR = FIXTURES_DIR / "raw"

ENV_VARS = ("WAGEMAP_DATA_DIR", "WAGE_SERVICE_URL", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every environment variable the configuration reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture
def raw_dir() -> Path:
    return RAW_DIR


@pytest.fixture
def county_mapping():
    with open(DATA_DIR / "county-mapping.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def directory(county_mapping) -> AreaDirectory:
    return AreaDirectory.from_mapping(county_mapping)


@pytest.fixture
def reverse_index(directory):
    return build_reverse_index(directory.entries())


@pytest.fixture
def static_lookup() -> StaticWageLookup:
    return StaticWageLookup(DATA_DIR / "wages.json")


@pytest.fixture
def developer_wages(static_lookup):
    """Wage areas for SOC 15-1252 (Software Developers)."""
    return static_lookup.fetch_wages("15-1252")


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def example_wage() -> WageArea:
    """Area 12345 with hourly tiers 40/50/60/70."""
    return WageArea(
        area_code=12345,
        area_name="Metro Alpha, CA",
        tier1=40.0,
        tier2=50.0,
        tier3=60.0,
        tier4=70.0,
    )
