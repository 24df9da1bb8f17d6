"""Renderer boundary.

The map engine itself lives outside this package. Anything that can apply a
paint expression, toggle per-feature state and fit its view implements
``MapRenderer``.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from .models import FitBoundsRequest


class MapRenderer(ABC):
    """Operations the core issues to the map engine."""

    @abstractmethod
    def set_paint_property(self, layer_id: str, name: str, value: Any) -> None:
        """Apply one paint-property update to a whole layer."""

    @abstractmethod
    def set_feature_state(self, feature_id: Any, state: Mapping[str, bool]) -> None:
        """Merge highlight flags (``hover``, ``selected``) into a feature's state."""

    @abstractmethod
    def fit_bounds(self, request: FitBoundsRequest) -> None:
        """Move the camera so the requested bounds are visible."""
