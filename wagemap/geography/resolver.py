"""County Resolver: reverse index from (county name, state) to wage areas.

The index is built once per session from the Area Directory and never
mutated. Resolution is a dictionary lookup, cheap enough to run on every
pointer-move event.
"""

from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from wagemap.domain.models import GeographyEntry, WageArea
from wagemap.logging import get_logger

from .normalize import CountyKey, county_key, normalize_county_name
from .states import state_fips

logger = get_logger(__name__, component="resolver")

StateRef = Union[str, int, None]


class ReverseIndex:
    """Read-only mapping of ``CountyKey`` to area codes.

    Area codes per key keep Area Directory insertion order with duplicates
    removed; callers take the first code that has data. A secondary view
    groups keys by normalized name, used for the state-less fallback and by
    the paint-rule compiler.
    """

    def __init__(self, entries: Mapping[CountyKey, Tuple[int, ...]]):
        frozen = {key: tuple(codes) for key, codes in entries.items()}
        by_name: Dict[str, List[CountyKey]] = {}
        for key in frozen:
            by_name.setdefault(key.name, []).append(key)

        self._entries: Mapping[CountyKey, Tuple[int, ...]] = MappingProxyType(frozen)
        self._by_name: Mapping[str, Tuple[CountyKey, ...]] = MappingProxyType(
            {name: tuple(keys) for name, keys in by_name.items()}
        )

    def get(self, key: CountyKey) -> Tuple[int, ...]:
        return self._entries.get(key, ())

    def keys_for_name(self, normalized_name: str) -> Tuple[CountyKey, ...]:
        """All keys sharing a normalized county name, in index order."""
        return self._by_name.get(normalized_name, ())

    def names(self) -> Iterator[str]:
        """Distinct normalized county names, in index order."""
        return iter(self._by_name)

    def items(self) -> Iterator[Tuple[CountyKey, Tuple[int, ...]]]:
        return iter(self._entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def build_reverse_index(entries: Iterable[GeographyEntry]) -> ReverseIndex:
    """Build the reverse index from geography rows.

    Rows whose county name normalizes to nothing or whose state has no FIPS
    code are skipped with a warning; the rest of the load continues.

    Args:
        entries: Geography rows in Area Directory order

    Returns:
        ReverseIndex keyed by normalized (county, state FIPS)
    """
    index: Dict[CountyKey, List[int]] = {}
    skipped = 0
    rows = 0

    for entry in entries:
        rows += 1
        key = county_key(entry.county_name, entry.state_abbrev)
        if key is None:
            skipped += 1
            logger.warning(
                "Skipping geography row that cannot be keyed",
                extra={
                    "event": "resolver.entry.skipped",
                    "area_code": entry.area_code,
                    "county": entry.county_name,
                    "state": entry.state_abbrev,
                },
            )
            continue

        codes = index.setdefault(key, [])
        if entry.area_code not in codes:
            codes.append(entry.area_code)

    reverse_index = ReverseIndex({key: tuple(codes) for key, codes in index.items()})

    logger.info(
        "Reverse county index built",
        extra={
            "event": "resolver.index.built",
            "row_count": rows,
            "key_count": len(reverse_index),
            "skipped_count": skipped,
            "multi_area_keys": sum(1 for codes in index.values() if len(codes) > 1),
        },
    )
    return reverse_index


def resolve(index: ReverseIndex, county_name: Optional[str], state: StateRef = None) -> List[int]:
    """Resolve a county to its wage-area codes.

    Args:
        index: Reverse index from ``build_reverse_index``
        county_name: County name in any casing, with or without suffix
        state: State FIPS code or abbreviation. When missing or unknown the
            lookup falls back to every state carrying that county name, which
            is unreliable for names like "Jefferson" or "Orange".

    Returns:
        Area codes in index order; empty when the county is unknown.
    """
    name = normalize_county_name(county_name)
    if not name:
        return []

    fips = state_fips(state)
    if fips is not None:
        return list(index.get(CountyKey(name, fips)))

    codes: List[int] = []
    for key in index.keys_for_name(name):
        for code in index.get(key):
            if code not in codes:
                codes.append(code)

    logger.debug(
        "Resolved county without state context",
        extra={
            "event": "resolver.resolve.stateless",
            "county": county_name,
            "state": state,
            "candidate_count": len(codes),
        },
    )
    return codes


def resolve_wage(
    index: ReverseIndex,
    wages_by_area: Mapping[int, WageArea],
    county_name: Optional[str],
    state: StateRef = None,
) -> Optional[WageArea]:
    """Return the wage record for a county, or None when there is no data.

    Picks the first resolved area code present in the current wage set, which
    tolerates geography codes that have no wage row for this job category.
    """
    for code in resolve(index, county_name, state):
        wage = wages_by_area.get(code)
        if wage is not None:
            return wage
    return None
