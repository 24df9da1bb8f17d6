"""Data models for wage-set loading and session state."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from wagemap.domain.models import WageArea, wages_by_area


class LoadState(str, Enum):
    """Wage-set loading state shown by the UI."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class FetchTicket:
    """Handed out when a job category is selected; returned with its response.

    A response is applied only when its ticket's generation is still the
    loader's current one.
    """

    generation: int
    soc_code: str


@dataclass(frozen=True)
class WageSnapshot:
    """Immutable wage set for one job-category selection.

    Replaced as a whole on every new selection, so readers in the middle of
    a hover burst never observe a partially updated set.
    """

    generation: int = 0
    soc_code: Optional[str] = None
    wages: Tuple[WageArea, ...] = ()
    by_area: Mapping[int, WageArea] = field(default_factory=lambda: MappingProxyType({}))
    loaded_at: Optional[datetime] = None

    @classmethod
    def build(cls, generation: int, soc_code: Optional[str], wages: Sequence[WageArea]) -> "WageSnapshot":
        wages = tuple(wages)
        return cls(
            generation=generation,
            soc_code=soc_code,
            wages=wages,
            by_area=MappingProxyType(wages_by_area(wages)),
            loaded_at=datetime.now(timezone.utc),
        )

    @property
    def has_data(self) -> bool:
        return bool(self.wages)


EMPTY_SNAPSHOT = WageSnapshot()
