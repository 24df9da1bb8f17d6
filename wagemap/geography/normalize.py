"""County name normalization shared by index construction and resolution.

Both sides of a lookup MUST go through ``normalize_county_name``; a county
that was normalized one way when the index was built and another way when a
map feature is resolved silently falls through to "no data".
"""

import re
from typing import NamedTuple, Optional, Union

from .states import state_fips

# Administrative-unit words dropped from county names (whole words only).
COUNTY_SUFFIXES = ("census area", "county", "parish", "municipio", "borough")

_SUFFIX_PATTERN = re.compile(
    r"\b(?:" + "|".join(re.escape(s).replace(r"\ ", r"\s+") for s in COUNTY_SUFFIXES) + r")\b",
    re.IGNORECASE,
)
_WHITESPACE = re.compile(r"\s+")


class CountyKey(NamedTuple):
    """Reverse-index key: normalized county name plus 2-digit state FIPS."""

    name: str
    state_fips: str

    def __str__(self) -> str:
        return f"{self.name}::{self.state_fips}"


def normalize_county_name(name: Optional[str]) -> str:
    """Lowercase, strip administrative suffixes and collapse whitespace.

    Example:
        >>> normalize_county_name("Orange County")
        'orange'
        >>> normalize_county_name("Valdez-Cordova Census Area")
        'valdez-cordova'
    """
    if not name:
        return ""
    stripped = _SUFFIX_PATTERN.sub(" ", name.lower())
    return _WHITESPACE.sub(" ", stripped).strip()


def county_key(name: Optional[str], state: Union[str, int, None]) -> Optional[CountyKey]:
    """Build the reverse-index key, or None if either part is unusable."""
    normalized = normalize_county_name(name)
    fips = state_fips(state)
    if not normalized or fips is None:
        return None
    return CountyKey(normalized, fips)


def display_county_name(normalized: str) -> str:
    """Guess the renderer's label for a normalized county name.

    Title-cases each space- or hyphen-separated token without touching
    characters after an apostrophe ("prince george's" -> "Prince George's")
    and capitalizes the letter after a leading "mc" or "o'" ("mclean" ->
    "McLean", "o'brien" -> "O'Brien").
    This reverses a lossy normalization and will not reproduce every
    published spelling (e.g. "DeKalb"); configure overrides for those.
    """
    return " ".join(
        "-".join(_title_token(part) for part in token.split("-"))
        for token in normalized.split()
    )


def _title_token(token: str) -> str:
    if not token:
        return token
    if token.startswith("mc") and len(token) > 2:
        return "Mc" + token[2].upper() + token[3:]
    if token.startswith("o'") and len(token) > 2:
        return "O'" + token[2].upper() + token[3:]
    return token[0].upper() + token[1:]
