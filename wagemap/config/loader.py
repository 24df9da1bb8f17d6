"""Configuration loader for the wage map."""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .models import AppConfig, ServiceMode
from .validators import check_for_warnings, emit_warnings

DEFAULT_CANDIDATES = (
    Path("config.yaml"),
    Path("config") / "config.yaml",
)


def load_config(config_path: Optional[Path] = None) -> tuple[AppConfig, EnvironmentConfig]:
    """
    Load and validate configuration from a YAML file and environment variables.

    Config file lookup:
    1. Use config_path if given
    2. Try config.yaml in the current directory
    3. Try ./config/config.yaml
    4. Fail with a helpful error message

    Environment overrides (WAGEMAP_DATA_DIR, WAGE_SERVICE_URL, LOG_LEVEL) are
    applied to the returned AppConfig.

    Raises:
        ConfigurationError: If configuration is invalid or no file is found
    """
    config_file = _find_config_file(config_path)
    config_dict = _read_yaml(config_file)

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=[
                "Copy config.example.yaml to config.yaml",
                "Add configuration settings to your config file",
            ],
        )
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Configuration root must be a mapping, got {type(config_dict).__name__}",
            suggestions=["Review config.example.yaml for correct format"],
        )

    warnings = check_for_warnings(config_dict)
    if warnings:
        emit_warnings(warnings)

    app_config = parse_config(config_dict)
    env_config = load_environment_config()
    return apply_environment(app_config, env_config), env_config


def parse_config(config_dict: Dict[str, Any]) -> AppConfig:
    """Validate a raw configuration mapping into an AppConfig.

    Raises:
        ConfigurationError: With one readable line per validation error
    """
    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=_format_validation_errors(e),
            suggestions=[
                "Review config.example.yaml for correct format",
                "Verify field types match the expected schema",
            ],
        ) from e


def apply_environment(app_config: AppConfig, env_config: EnvironmentConfig) -> AppConfig:
    """Return a copy of app_config with environment overrides applied."""
    updates = {}
    if env_config.data_dir is not None:
        updates["data"] = app_config.data.model_copy(update={"data_dir": env_config.data_dir})
    if env_config.wage_service_url:
        updates["wage_service"] = app_config.wage_service.model_copy(
            update={"mode": ServiceMode.HTTP.value, "base_url": env_config.wage_service_url}
        )
    if env_config.log_level:
        updates["logging"] = app_config.logging.model_copy(update={"level": env_config.log_level})

    if not updates:
        return app_config
    return app_config.model_copy(update=updates)


def _format_validation_errors(error: ValidationError) -> List[str]:
    errors = []
    for item in error.errors():
        field_path = " -> ".join(str(loc) for loc in item["loc"]) or "(root)"
        error_msg = item["msg"]
        error_type = item["type"]

        if error_type == "missing":
            errors.append(f"Missing required field: {field_path}")
        elif error_type in ["string_type", "int_type", "float_type", "bool_type", "dict_type"]:
            expected_type = error_type.replace("_type", "")
            errors.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {item.get('input')}"
            )
        elif "enum" in error_type:
            errors.append(f"Invalid value for '{field_path}': {error_msg}")
        else:
            errors.append(f"{field_path}: {error_msg}")
    return errors


def _read_yaml(config_file: Path) -> Any:
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Configuration file not found: {config_file}",
            suggestions=[
                "Copy config.example.yaml to config.yaml",
                f"Ensure {config_file} exists and is readable",
            ],
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        ) from e
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[f"Ensure {config_file} is readable", "Check file permissions"],
        ) from e


def _find_config_file(config_path: Optional[Path] = None) -> Path:
    """Find the configuration file using the fallback order in load_config."""
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(
                f"Specified configuration file not found: {config_path}",
                suggestions=[f"Ensure {config_path} exists", "Check the path and try again"],
            )
        return config_path

    for candidate in DEFAULT_CANDIDATES:
        if candidate.exists():
            return candidate

    raise ConfigurationError(
        "Configuration file not found",
        errors=[f"Tried: {candidate}" for candidate in DEFAULT_CANDIDATES],
        suggestions=[
            "Copy config.example.yaml to config.yaml",
            "Use --config flag to specify a custom location",
        ],
    )


def validate_config_file(config_path: Path) -> List[str]:
    """
    Validate a configuration file without reading environment variables.

    Returns:
        Error lines; empty when the file is valid
    """
    try:
        config_dict = _read_yaml(config_path)
        if not isinstance(config_dict, dict) or not config_dict:
            return ["Configuration file is empty or not a mapping"]
        parse_config(config_dict)
    except ConfigurationError as e:
        return e.errors or [e.message]
    return []
