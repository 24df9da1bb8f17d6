"""Job-category and location search for the sidebar."""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from wagemap.domain.models import JobCategory
from wagemap.geography.directory import AreaDirectory

DEFAULT_LIMIT = 8


@dataclass(frozen=True)
class LocationMatch:
    """A search hit that can be focused on the map.

    ``counties`` holds (county name, state abbreviation) pairs; an area hit
    lists every county in the area, a county hit lists just that county.
    """

    label: str
    area_code: int
    counties: Tuple[Tuple[str, str], ...]


def search_job_categories(
    categories: Iterable[JobCategory], query: str, limit: int = DEFAULT_LIMIT
) -> List[JobCategory]:
    """Case-insensitive title match, or SOC code substring match."""
    text = (query or "").strip()
    if not text or limit <= 0:
        return []
    lowered = text.lower()

    results = []
    for category in categories:
        if lowered in category.title.lower() or text in category.code:
            results.append(category)
            if len(results) >= limit:
                break
    return results


def search_locations(directory: AreaDirectory, query: str, limit: int = DEFAULT_LIMIT) -> List[LocationMatch]:
    """Match wage-area names first, then "County, ST" labels."""
    lowered = (query or "").strip().lower()
    if not lowered or limit <= 0:
        return []

    area_hits: List[LocationMatch] = []
    county_hits: List[LocationMatch] = []
    seen_labels = set()

    for record in directory:
        if lowered in record.name.lower():
            area_hits.append(
                LocationMatch(
                    label=record.name,
                    area_code=record.area_code,
                    counties=tuple((ref.county, ref.state_abbrev) for ref in record.counties),
                )
            )
        for ref in record.counties:
            label = f"{ref.county}, {ref.state_abbrev}"
            if lowered in label.lower() and label not in seen_labels:
                seen_labels.add(label)
                county_hits.append(
                    LocationMatch(
                        label=label,
                        area_code=record.area_code,
                        counties=((ref.county, ref.state_abbrev),),
                    )
                )

    return (area_hits + county_hits)[:limit]
