"""Headless renderer that records what a map engine would be asked to do.

Used by the CLI, which has no map to draw on, and by tests.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import FitBoundsRequest
from .renderer import MapRenderer


class RecordingRenderer(MapRenderer):
    """Keeps every call plus the resulting paint and feature state."""

    def __init__(self) -> None:
        self.paint_calls: List[Tuple[str, str, Any]] = []
        self.feature_state_calls: List[Tuple[Any, Dict[str, bool]]] = []
        self.fit_requests: List[FitBoundsRequest] = []
        self.paint: Dict[Tuple[str, str], Any] = {}
        self.feature_states: Dict[Any, Dict[str, bool]] = {}

    def set_paint_property(self, layer_id: str, name: str, value: Any) -> None:
        self.paint_calls.append((layer_id, name, value))
        self.paint[(layer_id, name)] = value

    def set_feature_state(self, feature_id: Any, state: Mapping[str, bool]) -> None:
        self.feature_state_calls.append((feature_id, dict(state)))
        self.feature_states.setdefault(feature_id, {}).update(state)

    def fit_bounds(self, request: FitBoundsRequest) -> None:
        self.fit_requests.append(request)

    def paint_value(self, layer_id: str, name: str) -> Optional[Any]:
        return self.paint.get((layer_id, name))

    def highlighted(self, flag: str) -> List[Any]:
        """Feature ids whose ``flag`` state is currently on."""
        return [fid for fid, state in self.feature_states.items() if state.get(flag)]
