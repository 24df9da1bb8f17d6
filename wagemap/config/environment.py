"""Environment variable loading and validation."""

import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment overrides applied on top of the YAML configuration."""

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        wage_service_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.data_dir = data_dir
        self.wage_service_url = wage_service_url
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """Read and validate the optional environment overrides.

    Optional environment variables:
    - WAGEMAP_DATA_DIR: directory holding the JSON artifacts
    - WAGE_SERVICE_URL: wages endpoint; switches lookups to http mode
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    - ENVIRONMENT: label stamped on log records (default "local")

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    data_dir = os.getenv("WAGEMAP_DATA_DIR")
    wage_service_url = os.getenv("WAGE_SERVICE_URL")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if data_dir is not None and not data_dir.strip():
        errors.append("WAGEMAP_DATA_DIR is set but empty")

    if wage_service_url and not wage_service_url.strip().startswith(("http://", "https://")):
        errors.append(
            f"Invalid WAGE_SERVICE_URL: '{wage_service_url}'. Must start with http:// or https://"
        )

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Check the values in your .env file",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        data_dir=Path(data_dir.strip()) if data_dir else None,
        wage_service_url=wage_service_url.strip() if wage_service_url else None,
        log_level=log_level.upper() if log_level else None,
        environment=environment,
    )
