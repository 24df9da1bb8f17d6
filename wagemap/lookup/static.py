"""Wage lookup backed by the precomputed ``wages.json`` artifact."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from wagemap.domain.models import WageArea
from wagemap.logging import get_logger

from .base import BaseWageLookup
from .exceptions import UnknownAreaError, UnknownJobCategoryError, WageDataUnavailableError

logger = get_logger(__name__, component="lookup")


class StaticWageLookup(BaseWageLookup):
    """Serves wage areas from a JSON file keyed by SOC code.

    The file is read on first use and kept in memory; parsed records are
    cached per SOC code.

    Artifact shape: ``{"15-1252": [{"area": 12345, "areaName": ...,
    "level1": 40.0, ...}, ...], ...}``
    """

    SERVICE_NAME = "static"

    def __init__(self, wages_path: Path, preloaded: Optional[Dict[str, Any]] = None) -> None:
        self.wages_path = Path(wages_path)
        self._raw: Optional[Dict[str, Any]] = preloaded
        self._parsed: Dict[str, List[WageArea]] = {}

    def fetch_wages(self, soc_code: str) -> List[WageArea]:
        code = self._require_soc_code(soc_code)

        cached = self._parsed.get(code)
        if cached is not None:
            return list(cached)

        rows = self._load().get(code)
        if rows is None:
            raise UnknownJobCategoryError(code)

        wages = self._parse_wages(rows, code)
        self._parsed[code] = wages

        logger.debug(
            "Wage areas served from artifact",
            extra={"event": "lookup.static.served", "soc_code": code, "count": len(wages)},
        )
        return list(wages)

    def fetch_area_wage(self, soc_code: str, area_code: int) -> WageArea:
        for wage in self.fetch_wages(soc_code):
            if wage.area_code == area_code:
                return wage
        raise UnknownAreaError(soc_code.strip(), area_code)

    def job_category_codes(self) -> List[str]:
        """SOC codes that have wage data."""
        return list(self._load())

    def _load(self) -> Dict[str, Any]:
        if self._raw is not None:
            return self._raw

        try:
            with open(self.wages_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise WageDataUnavailableError(f"Wage data file not found: {self.wages_path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise WageDataUnavailableError(f"Failed to read wage data from {self.wages_path}: {e}") from e

        if not isinstance(data, dict):
            raise WageDataUnavailableError(
                f"Expected JSON object in {self.wages_path}, got {type(data).__name__}"
            )

        logger.info(
            "Wage artifact loaded",
            extra={
                "event": "lookup.static.loaded",
                "path": str(self.wages_path),
                "soc_count": len(data),
            },
        )
        self._raw = data
        return data
