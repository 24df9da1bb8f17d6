"""Selection state produced by pointer events."""

from dataclasses import dataclass
from typing import Optional

from wagemap.domain.models import WageArea


@dataclass(frozen=True)
class Selection:
    """A county under the pointer or clicked, with its wage area when known.

    ``state`` is the 2-letter abbreviation when the state code maps to one,
    otherwise the raw code reported by the renderer.
    """

    wage: Optional[WageArea] = None
    county: Optional[str] = None
    state: Optional[str] = None

    @property
    def has_data(self) -> bool:
        return self.wage is not None

    @property
    def is_empty(self) -> bool:
        return self.wage is None and self.county is None


EMPTY_SELECTION = Selection()
