"""Configuration management for the wage map."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment, load_config, parse_config, validate_config_file
from .models import (
    AppConfig,
    DataConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    MapConfig,
    SalaryConfig,
    ServiceMode,
    WageServiceConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "parse_config",
    "apply_environment",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "DataConfig",
    "WageServiceConfig",
    "MapConfig",
    "SalaryConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "ServiceMode",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
