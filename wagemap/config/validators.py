"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """Return warnings for settings that are valid but probably unintended."""
    warning_messages = []

    wage_service = config_dict.get("wage_service", {})
    if isinstance(wage_service, dict):
        mode = str(wage_service.get("mode", "static")).lower()
        if mode == "static" and wage_service.get("base_url"):
            warning_messages.append(
                "wage_service.base_url is ignored while wage_service.mode is 'static'"
            )
        timeout = wage_service.get("request_timeout")
        if isinstance(timeout, int) and timeout > 60:
            warning_messages.append(
                f"Long wage_service.request_timeout ({timeout}s) will stall the map on a slow service"
            )

    map_config = config_dict.get("map", {})
    if isinstance(map_config, dict):
        overrides = map_config.get("display_name_overrides", {})
        if isinstance(overrides, dict):
            lowered = [str(name).strip().lower() for name in overrides]
            if len(lowered) != len(set(lowered)):
                duplicates = sorted({name for name in lowered if lowered.count(name) > 1})
                warning_messages.append(
                    f"Duplicate display_name_overrides, last one wins: {', '.join(duplicates)}"
                )

    palette = config_dict.get("palette", {})
    if isinstance(palette, dict):
        no_data = palette.get("no_data")
        tiers = [palette.get(f"tier{n}") for n in range(1, 5)]
        if no_data and isinstance(no_data, str) and no_data.lower() in [
            str(t).lower() for t in tiers if t
        ]:
            warning_messages.append(
                "palette.no_data matches a tier color; counties without data will look classified"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """Emit warning messages using Python's warnings module."""
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
