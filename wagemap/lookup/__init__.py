"""Wage lookup services: job-category code -> per-area wage tiers."""

from .base import BaseWageLookup
from .exceptions import (
    LookupConfigurationError,
    MissingJobCategoryError,
    UnknownAreaError,
    UnknownJobCategoryError,
    WageDataUnavailableError,
    WageLookupError,
    WageServiceHTTPError,
    WageServiceResponseError,
    WageServiceTimeoutError,
)
from .factory import get_wage_lookup
from .http import HttpWageLookup
from .static import StaticWageLookup

__all__ = [
    "BaseWageLookup",
    "StaticWageLookup",
    "HttpWageLookup",
    "get_wage_lookup",
    "WageLookupError",
    "MissingJobCategoryError",
    "UnknownJobCategoryError",
    "UnknownAreaError",
    "WageDataUnavailableError",
    "WageServiceHTTPError",
    "WageServiceTimeoutError",
    "WageServiceResponseError",
    "LookupConfigurationError",
]
