"""Domain models for the wage map."""

from .models import (
    HOURS_PER_YEAR,
    AreaRecord,
    CountyRef,
    GeographyEntry,
    JobCategory,
    WageArea,
    annualize,
    wages_by_area,
)

__all__ = [
    "HOURS_PER_YEAR",
    "annualize",
    "wages_by_area",
    "WageArea",
    "GeographyEntry",
    "CountyRef",
    "AreaRecord",
    "JobCategory",
]
