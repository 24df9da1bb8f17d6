"""Area Directory: wage-area code -> area name and member counties.

Built once from the reference geography and read-only afterwards. Iteration
order is insertion order, which the reverse index relies on for its
first-match-wins rule.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from pydantic import ValidationError

from wagemap.domain.models import AreaRecord, CountyRef, GeographyEntry
from wagemap.logging import get_logger

logger = get_logger(__name__, component="directory")


class AreaDirectory:
    """Immutable mapping of area code to ``AreaRecord``."""

    def __init__(self, areas: Mapping[int, AreaRecord]):
        self._areas: Mapping[int, AreaRecord] = MappingProxyType(dict(areas))

    @classmethod
    def from_entries(cls, entries: Iterable[GeographyEntry]) -> "AreaDirectory":
        """Group geography rows by area code.

        The first row seen for an area fixes its name; later rows only add
        counties.
        """
        names: Dict[int, str] = {}
        counties: Dict[int, List[CountyRef]] = {}

        for entry in entries:
            if entry.area_code not in names:
                names[entry.area_code] = entry.area_name
                counties[entry.area_code] = []
            counties[entry.area_code].append(
                CountyRef(county=entry.county_name, state=entry.state, state_abbrev=entry.state_abbrev)
            )

        return cls(
            {
                code: AreaRecord(area_code=code, name=names[code], counties=tuple(counties[code]))
                for code in names
            }
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AreaDirectory":
        """Load the ``county-mapping.json`` artifact.

        Expected shape: ``{"<area>": {"name": str, "counties": [{"county",
        "state", "stateAb"}]}}``. Malformed areas or counties are skipped
        with a warning.
        """
        areas: Dict[int, AreaRecord] = {}
        skipped = 0

        for raw_code, info in data.items():
            try:
                code = int(str(raw_code).strip())
            except ValueError:
                skipped += 1
                logger.warning(
                    "Skipping area with non-numeric code",
                    extra={"event": "directory.area.skipped", "area_code": raw_code},
                )
                continue

            info = info if isinstance(info, Mapping) else {}
            refs = []
            for raw_county in info.get("counties") or []:
                try:
                    refs.append(CountyRef.model_validate(raw_county))
                except ValidationError as e:
                    skipped += 1
                    logger.warning(
                        "Skipping malformed county row",
                        extra={
                            "event": "directory.county.skipped",
                            "area_code": code,
                            "error": str(e.errors()[0]["msg"]) if e.errors() else str(e),
                        },
                    )

            areas[code] = AreaRecord(
                area_code=code, name=str(info.get("name") or "Unknown Area"), counties=tuple(refs)
            )

        logger.info(
            "Area directory loaded",
            extra={
                "event": "directory.loaded",
                "area_count": len(areas),
                "skipped_count": skipped,
            },
        )
        return cls(areas)

    def get(self, area_code: int) -> Optional[AreaRecord]:
        return self._areas.get(area_code)

    def entries(self) -> Iterator[GeographyEntry]:
        """Flatten back into geography rows, in directory order."""
        for record in self._areas.values():
            for ref in record.counties:
                yield GeographyEntry(
                    area_code=record.area_code,
                    area_name=record.name,
                    county_name=ref.county,
                    state=ref.state,
                    state_abbrev=ref.state_abbrev,
                )

    def to_mapping(self) -> Dict[str, Any]:
        """Serialize to the ``county-mapping.json`` shape."""
        return {
            str(code): {
                "name": record.name,
                "counties": [ref.model_dump(by_alias=True) for ref in record.counties],
            }
            for code, record in self._areas.items()
        }

    def __iter__(self) -> Iterator[AreaRecord]:
        return iter(self._areas.values())

    def __len__(self) -> int:
        return len(self._areas)

    def __contains__(self, area_code: object) -> bool:
        return area_code in self._areas
