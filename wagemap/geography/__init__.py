"""Geography layer: state codes, county normalization, Area Directory and
County Resolver.
"""

from .directory import AreaDirectory
from .normalize import (
    COUNTY_SUFFIXES,
    CountyKey,
    county_key,
    display_county_name,
    normalize_county_name,
)
from .resolver import ReverseIndex, build_reverse_index, resolve, resolve_wage
from .states import FIPS_STATE, STATE_FIPS, state_abbrev, state_fips

__all__ = [
    "AreaDirectory",
    "ReverseIndex",
    "build_reverse_index",
    "resolve",
    "resolve_wage",
    "CountyKey",
    "COUNTY_SUFFIXES",
    "county_key",
    "normalize_county_name",
    "display_county_name",
    "STATE_FIPS",
    "FIPS_STATE",
    "state_fips",
    "state_abbrev",
]
