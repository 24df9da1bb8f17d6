"""Base class for wage lookup services."""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List

from pydantic import ValidationError

from wagemap.domain.models import WageArea
from wagemap.logging import get_logger

from .exceptions import MissingJobCategoryError, UnknownAreaError

logger = get_logger(__name__, component="lookup")


class BaseWageLookup(ABC):
    """Job-category code -> wage areas.

    Subclasses implement ``fetch_wages``; ``fetch_area_wage`` filters its
    result unless a subclass has a cheaper path.
    """

    SERVICE_NAME = "base"

    @abstractmethod
    def fetch_wages(self, soc_code: str) -> List[WageArea]:
        """Return every wage area for a job category.

        Raises:
            MissingJobCategoryError: soc_code is blank
            UnknownJobCategoryError: no wage data for soc_code
            WageLookupError: any other lookup failure
        """

    def fetch_area_wage(self, soc_code: str, area_code: int) -> WageArea:
        """Return one area's wages for a job category.

        Raises:
            UnknownAreaError: the job category has no row for area_code
        """
        for wage in self.fetch_wages(soc_code):
            if wage.area_code == area_code:
                return wage
        raise UnknownAreaError(soc_code, area_code)

    @staticmethod
    def _require_soc_code(soc_code: str) -> str:
        code = (soc_code or "").strip()
        if not code:
            raise MissingJobCategoryError("SOC code is required")
        return code

    def _parse_wages(self, rows: Iterable[Any], soc_code: str) -> List[WageArea]:
        """Validate raw wage rows, skipping malformed ones with a warning."""
        wages = []
        for row in rows:
            try:
                wages.append(WageArea.model_validate(row))
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed wage row",
                    extra={
                        "event": "lookup.row.skipped",
                        "lookup_service": self.SERVICE_NAME,
                        "soc_code": soc_code,
                        "error_count": e.error_count(),
                    },
                )
        return wages
