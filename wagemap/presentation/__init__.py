"""Wage report presentation."""

from .formatting import format_currency, format_hourly, format_percent, tier_name
from .report import TierRow, WageReport
from .templates import ReportRenderer, ReportTemplateError

__all__ = [
    "format_currency",
    "format_hourly",
    "format_percent",
    "tier_name",
    "TierRow",
    "WageReport",
    "ReportRenderer",
    "ReportTemplateError",
]
