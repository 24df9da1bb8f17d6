"""Exceptions raised while building or loading reference data."""

from pathlib import Path
from typing import Optional


class ReferenceDataError(Exception):
    """A reference input or artifact is missing or unusable."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path
