"""Client for a remote wage lookup endpoint.

Endpoint contract:
    GET {base_url}?soc=<code>[&area=<code>]
    200 -> list of wage rows, or a single row when ``area`` is given
    400 -> SOC code missing
    404 -> unknown SOC code, or unknown area for that SOC code
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from wagemap.domain.models import WageArea
from wagemap.logging import get_logger

from .base import BaseWageLookup
from .exceptions import (
    MissingJobCategoryError,
    UnknownAreaError,
    UnknownJobCategoryError,
    WageServiceHTTPError,
    WageServiceResponseError,
    WageServiceTimeoutError,
)

logger = get_logger(__name__, component="lookup")


class HttpWageLookup(BaseWageLookup):
    """Fetches wage areas over HTTP with a shared ``requests.Session``.

    Attributes:
        base_url: Full URL of the wages endpoint
        timeout: Request timeout in seconds
        user_agent: User-Agent header sent with each request
    """

    SERVICE_NAME = "http"

    def __init__(
        self,
        base_url: str,
        timeout: int = 15,
        user_agent: str = "WageMap/0.1",
        session: Optional[requests.Session] = None,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("base_url cannot be empty")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got: {timeout}")

        self.base_url = base_url.strip()
        self.timeout = timeout
        self.user_agent = user_agent
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": user_agent})

    def fetch_wages(self, soc_code: str) -> List[WageArea]:
        code = self._require_soc_code(soc_code)
        data = self._get({"soc": code}, soc_code=code)

        if not isinstance(data, list):
            raise WageServiceResponseError(
                f"Expected JSON array of wage rows, got {type(data).__name__}"
            )

        wages = self._parse_wages(data, code)
        logger.info(
            "Fetched wage areas",
            extra={"event": "lookup.http.fetched", "soc_code": code, "count": len(wages)},
        )
        return wages

    def fetch_area_wage(self, soc_code: str, area_code: int) -> WageArea:
        code = self._require_soc_code(soc_code)
        data = self._get({"soc": code, "area": str(area_code)}, soc_code=code, area_code=area_code)

        if not isinstance(data, dict):
            raise WageServiceResponseError(
                f"Expected JSON object for a single area, got {type(data).__name__}"
            )
        wages = self._parse_wages([data], code)
        if not wages:
            raise WageServiceResponseError(f"Malformed wage row for area {area_code}")
        return wages[0]

    def _get(self, params: Dict[str, str], soc_code: str, area_code: Optional[int] = None) -> Any:
        """Issue the GET and translate failures into lookup exceptions."""
        url = self.base_url
        logger.debug(
            "Wage service request",
            extra={"event": "lookup.http.request", "url": url, "params": params, "timeout": self.timeout},
        )

        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Wage service timed out after {self.timeout} seconds",
                extra={"event": "lookup.http.timeout", "url": url},
            )
            raise WageServiceTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Wage service request failed: {e}",
                extra={"event": "lookup.http.error", "url": url, "error_type": type(e).__name__},
            )
            raise WageServiceHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if response.status_code >= 400:
            self._raise_for_status(response, url, soc_code, area_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(
                "Wage service returned invalid JSON",
                extra={"event": "lookup.http.error", "url": url, "error_type": "JSONDecodeError"},
            )
            raise WageServiceResponseError(f"Failed to parse JSON response from {url}: {e}") from e

    def _raise_for_status(
        self, response: requests.Response, url: str, soc_code: str, area_code: Optional[int]
    ) -> None:
        status = response.status_code
        level = logging.WARNING if status < 500 else logging.ERROR
        logger.log(
            level,
            f"Wage service answered HTTP {status}",
            extra={"event": "lookup.http.status", "url": url, "status_code": status},
        )

        if status == 400:
            raise MissingJobCategoryError(self._error_message(response) or "SOC code is required")
        if status == 404:
            if area_code is not None:
                raise UnknownAreaError(soc_code, area_code)
            raise UnknownJobCategoryError(soc_code)
        raise WageServiceHTTPError(
            f"HTTP {status}: {self._error_message(response) or response.reason}",
            status_code=status,
            url=url,
        )

    @staticmethod
    def _error_message(response: requests.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return None
