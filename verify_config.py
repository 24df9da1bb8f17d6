#!/usr/bin/env python3
"""Validate config.example.yaml (or a given file) against the configuration schema."""

import sys
from pathlib import Path

from wagemap.config.loader import validate_config_file


def verify_config(config_file: Path) -> bool:
    """Print a summary for a valid file, or every validation error."""
    if not config_file.exists():
        print(f"✗ {config_file} not found")
        return False

    errors = validate_config_file(config_file)
    if errors:
        print(f"✗ {config_file} validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    print(f"✓ {config_file} is valid")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.example.yaml")
    sys.exit(0 if verify_config(path) else 1)
