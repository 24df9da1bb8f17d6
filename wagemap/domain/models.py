"""Core domain models for wage areas, geography and job categories.

This module defines the records every other layer passes around:
- WageArea: prevailing wage tiers for one (job category, area) pair
- GeographyEntry: one county row of the reference geography
- AreaRecord: an Area Directory entry (area name plus its counties)
- JobCategory: a searchable SOC occupation

Field aliases match the static JSON artifacts (``area``, ``areaName``,
``level1``...), so records can be validated straight from those files and
dumped back with ``model_dump(by_alias=True)``.
"""

from typing import Dict, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Full-time year used for every hourly -> annual conversion (40 h x 52 weeks).
HOURS_PER_YEAR = 2080


def annualize(hourly: float) -> float:
    """Convert an hourly rate to an annual amount."""
    return hourly * HOURS_PER_YEAR


class WageArea(BaseModel):
    """Prevailing wage tiers for one wage area and job category.

    Tiers are hourly USD rates. They are non-decreasing in the published data
    but that is not enforced here; see ``is_monotonic``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    area_code: int = Field(..., alias="area", description="Wage area code")
    area_name: str = Field("Unknown Area", alias="areaName", description="Wage area name")
    tier1: float = Field(..., ge=0, alias="level1", description="Level I hourly rate")
    tier2: float = Field(..., ge=0, alias="level2", description="Level II hourly rate")
    tier3: float = Field(..., ge=0, alias="level3", description="Level III hourly rate")
    tier4: float = Field(..., ge=0, alias="level4", description="Level IV hourly rate")

    @field_validator("area_name")
    @classmethod
    def strip_area_name(cls, v: str) -> str:
        stripped = v.strip()
        return stripped or "Unknown Area"

    @property
    def tiers(self) -> Tuple[float, float, float, float]:
        """Hourly rates ordered tier 1 through tier 4."""
        return (self.tier1, self.tier2, self.tier3, self.tier4)

    @property
    def annual_thresholds(self) -> Tuple[float, float, float, float]:
        """Annualized tier rates, tier 1 through tier 4."""
        return tuple(annualize(rate) for rate in self.tiers)

    @property
    def is_monotonic(self) -> bool:
        """True when tier1 <= tier2 <= tier3 <= tier4."""
        tiers = self.tiers
        return all(low <= high for low, high in zip(tiers, tiers[1:]))


class GeographyEntry(BaseModel):
    """One county (or town) row of the reference geography."""

    model_config = ConfigDict(frozen=True)

    area_code: int = Field(..., description="Wage area the county belongs to")
    area_name: str = Field("", description="Wage area name")
    county_name: str = Field(..., description="County name as published, e.g. 'Orange County'")
    state: str = Field("", description="State name")
    state_abbrev: str = Field(..., description="Two-letter state abbreviation")

    @field_validator("county_name", "state_abbrev")
    @classmethod
    def require_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("state_abbrev")
    @classmethod
    def upper_abbrev(cls, v: str) -> str:
        return v.upper()


class CountyRef(BaseModel):
    """A (county, state) pair listed under an Area Directory entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    county: str
    state: str = ""
    state_abbrev: str = Field(..., alias="stateAb")

    @field_validator("county", "state_abbrev")
    @classmethod
    def require_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


class AreaRecord(BaseModel):
    """Area Directory entry: wage area name and the counties it covers."""

    model_config = ConfigDict(frozen=True)

    area_code: int
    name: str
    counties: Tuple[CountyRef, ...] = ()


class JobCategory(BaseModel):
    """Searchable SOC occupation."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., min_length=1, description="SOC code, e.g. 15-1252")
    title: str = Field(..., description="Occupation title")
    description: str = Field("", description="Occupation description")

    @field_validator("code", "title")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


def wages_by_area(wages: Sequence[WageArea]) -> Dict[int, WageArea]:
    """Index wage records by area code; the first record for a code wins."""
    indexed: Dict[int, WageArea] = {}
    for wage in wages:
        indexed.setdefault(wage.area_code, wage)
    return indexed
