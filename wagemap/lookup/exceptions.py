"""Exceptions raised by wage lookup services."""

from typing import Optional


class WageLookupError(Exception):
    """Base exception for all wage lookup failures.

    ``status_code`` mirrors the HTTP status the wage service answers with for
    the same condition (0 when there is no HTTP equivalent).
    """

    status_code: int = 0

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class MissingJobCategoryError(WageLookupError):
    """No job-category (SOC) code was supplied."""

    status_code = 400


class UnknownJobCategoryError(WageLookupError):
    """The job-category code has no wage data."""

    status_code = 404

    def __init__(self, soc_code: str) -> None:
        super().__init__(f"No wage data for SOC code {soc_code}")
        self.soc_code = soc_code


class UnknownAreaError(WageLookupError):
    """The job category exists but has no wage row for the requested area."""

    status_code = 404

    def __init__(self, soc_code: str, area_code: int) -> None:
        super().__init__(f"No wage data for area {area_code} under SOC code {soc_code}")
        self.soc_code = soc_code
        self.area_code = area_code


class WageDataUnavailableError(WageLookupError):
    """The wage artifact could not be read."""

    status_code = 500


class WageServiceHTTPError(WageLookupError):
    """The remote wage service answered with an unexpected error status."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message, status_code=status_code)
        self.url = url


class WageServiceTimeoutError(WageLookupError):
    """The remote wage service did not answer in time."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class WageServiceResponseError(WageLookupError):
    """The remote wage service answered with a body that could not be parsed."""


class LookupConfigurationError(WageLookupError):
    """The lookup service could not be built from configuration."""
