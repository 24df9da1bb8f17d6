"""Pointer and location-focus event handling."""

from .coordinator import InteractionCoordinator
from .models import EMPTY_SELECTION, Selection

__all__ = ["InteractionCoordinator", "Selection", "EMPTY_SELECTION"]
