"""Factory function for instantiating wage lookup services."""

from wagemap.config.models import DataConfig, ServiceMode, WageServiceConfig
from wagemap.logging import get_logger

from .base import BaseWageLookup
from .exceptions import LookupConfigurationError
from .http import HttpWageLookup
from .static import StaticWageLookup

logger = get_logger(__name__, component="lookup")


def get_wage_lookup(service_config: WageServiceConfig, data_config: DataConfig) -> BaseWageLookup:
    """Create the lookup service selected by ``wage_service.mode``.

    Raises:
        LookupConfigurationError: If the mode is unknown or the service cannot be built

    Example:
        >>> lookup = get_wage_lookup(WageServiceConfig(), DataConfig(data_dir="data"))
        >>> wages = lookup.fetch_wages("15-1252")
    """
    mode = str(getattr(service_config.mode, "value", service_config.mode)).lower()

    logger.debug(
        "Creating wage lookup",
        extra={"event": "lookup.factory.create", "mode": mode},
    )

    if mode == ServiceMode.STATIC.value:
        return StaticWageLookup(data_config.wages_path)

    if mode == ServiceMode.HTTP.value:
        try:
            return HttpWageLookup(
                base_url=service_config.base_url or "",
                timeout=service_config.request_timeout,
                user_agent=service_config.user_agent,
            )
        except ValueError as e:
            raise LookupConfigurationError(f"Failed to create http wage lookup: {e}") from e

    supported = ", ".join(m.value for m in ServiceMode)
    raise LookupConfigurationError(f"Unknown wage service mode: {mode}. Supported modes: {supported}")
