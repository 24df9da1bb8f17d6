"""State abbreviation <-> FIPS code table.

Covers the 50 states, the District of Columbia and the inhabited territories
that appear in the published wage geography.
"""

from typing import Dict, Optional, Union

_STATE_ROWS = (
    ("AL", "01"), ("AK", "02"), ("AZ", "04"), ("AR", "05"), ("CA", "06"),
    ("CO", "08"), ("CT", "09"), ("DE", "10"), ("DC", "11"), ("FL", "12"),
    ("GA", "13"), ("HI", "15"), ("ID", "16"), ("IL", "17"), ("IN", "18"),
    ("IA", "19"), ("KS", "20"), ("KY", "21"), ("LA", "22"), ("ME", "23"),
    ("MD", "24"), ("MA", "25"), ("MI", "26"), ("MN", "27"), ("MS", "28"),
    ("MO", "29"), ("MT", "30"), ("NE", "31"), ("NV", "32"), ("NH", "33"),
    ("NJ", "34"), ("NM", "35"), ("NY", "36"), ("NC", "37"), ("ND", "38"),
    ("OH", "39"), ("OK", "40"), ("OR", "41"), ("PA", "42"), ("RI", "44"),
    ("SC", "45"), ("SD", "46"), ("TN", "47"), ("TX", "48"), ("UT", "49"),
    ("VT", "50"), ("VA", "51"), ("WA", "53"), ("WV", "54"), ("WI", "55"),
    ("WY", "56"),
    # Territories
    ("AS", "60"), ("GU", "66"), ("MP", "69"), ("PR", "72"), ("VI", "78"),
)

STATE_FIPS: Dict[str, str] = dict(_STATE_ROWS)
FIPS_STATE: Dict[str, str] = {fips: abbrev for abbrev, fips in _STATE_ROWS}


def state_fips(value: Union[str, int, None]) -> Optional[str]:
    """Resolve a state abbreviation or FIPS code to a 2-digit FIPS string.

    Accepts "CA", "ca", "06", "6" or 6. Returns None for anything unknown.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if text.isdigit():
        padded = text.zfill(2)
        return padded if padded in FIPS_STATE else None
    return STATE_FIPS.get(text.upper())


def state_abbrev(value: Union[str, int, None]) -> Optional[str]:
    """Resolve a state abbreviation or FIPS code to a 2-letter abbreviation."""
    fips = state_fips(value)
    return FIPS_STATE.get(fips) if fips else None
