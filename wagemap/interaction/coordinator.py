"""Interaction Coordinator: pointer events -> resolved selections.

Each event costs one reverse-index lookup against the wage snapshot passed
in by the caller. The coordinator keeps only its own hover/selection state
and the feature ids it highlighted.
"""

from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional, Sequence, Tuple

from wagemap.geography.normalize import normalize_county_name
from wagemap.geography.resolver import ReverseIndex, resolve_wage
from wagemap.geography.states import state_abbrev, state_fips
from wagemap.logging import get_logger
from wagemap.rendering.models import FitBoundsRequest, FitPadding, RenderedFeature, collect_bounds
from wagemap.rendering.renderer import MapRenderer

from .models import EMPTY_SELECTION, Selection

if TYPE_CHECKING:
    from wagemap.session.models import WageSnapshot

logger = get_logger(__name__, component="interaction")

SelectionListener = Callable[[Selection], None]


class InteractionCoordinator:
    """Routes hover, leave, click and location-focus events.

    Attributes:
        coarse_pointer: Touch devices have no hover; hover events are ignored
        padding: Fit-to-bounds padding
        max_zoom: Fit-to-bounds zoom ceiling
    """

    def __init__(
        self,
        reverse_index: ReverseIndex,
        renderer: MapRenderer,
        coarse_pointer: bool = False,
        padding: Optional[FitPadding] = None,
        max_zoom: float = 9.0,
    ):
        self.reverse_index = reverse_index
        self.renderer = renderer
        self.coarse_pointer = coarse_pointer
        self.padding = padding or FitPadding()
        self.max_zoom = max_zoom

        self._hovered = EMPTY_SELECTION
        self._selected = EMPTY_SELECTION
        self._hover_feature_id: Any = None
        self._selected_feature_id: Any = None
        self._hover_feature: Optional[RenderedFeature] = None
        self._selected_feature: Optional[RenderedFeature] = None
        self._hover_listeners: List[SelectionListener] = []
        self._click_listeners: List[SelectionListener] = []

    @property
    def hovered(self) -> Selection:
        return self._hovered

    @property
    def selected(self) -> Selection:
        return self._selected

    @property
    def effective_selection(self) -> Selection:
        """Hovered county when it has data, otherwise the clicked one."""
        if self._hovered.has_data:
            return self._hovered
        return self._selected

    def on_hover(self, listener: SelectionListener) -> Callable[[], None]:
        return _register(self._hover_listeners, listener)

    def on_click(self, listener: SelectionListener) -> Callable[[], None]:
        return _register(self._click_listeners, listener)

    def hover(self, feature: RenderedFeature, snapshot: "WageSnapshot") -> Optional[Selection]:
        """Resolve the feature under the pointer.

        Returns:
            The new hover selection, or None when hover is suppressed
        """
        if self.coarse_pointer:
            return None

        if feature.feature_id != self._hover_feature_id:
            self._set_highlight(self._hover_feature_id, "hover", False)
            self._set_highlight(feature.feature_id, "hover", True)
            self._hover_feature_id = feature.feature_id
        self._hover_feature = feature

        self._hovered = self._resolve(feature, snapshot)
        self._emit(self._hover_listeners, self._hovered)
        return self._hovered

    def leave(self) -> None:
        """Pointer left the county layer."""
        self._set_highlight(self._hover_feature_id, "hover", False)
        self._hover_feature_id = None
        self._hover_feature = None
        self._hovered = EMPTY_SELECTION
        self._emit(self._hover_listeners, EMPTY_SELECTION)

    def click(self, feature: RenderedFeature, snapshot: "WageSnapshot") -> Selection:
        """Persist the clicked county; a county without data clears the selection."""
        resolved = self._resolve(feature, snapshot)

        self._set_highlight(self._selected_feature_id, "selected", False)
        if resolved.has_data:
            self._selected = resolved
            self._selected_feature_id = feature.feature_id
            self._selected_feature = feature
            self._set_highlight(feature.feature_id, "selected", True)
        else:
            self._selected = EMPTY_SELECTION
            self._selected_feature_id = None
            self._selected_feature = None

        logger.debug(
            "County clicked",
            extra={
                "event": "interaction.click",
                "county": feature.county_name,
                "state_code": feature.state_code,
                "has_data": resolved.has_data,
            },
        )
        self._emit(self._click_listeners, self._selected)
        return self._selected

    def clear_selection(self) -> None:
        self._set_highlight(self._selected_feature_id, "selected", False)
        self._selected_feature_id = None
        self._selected_feature = None
        self._selected = EMPTY_SELECTION
        self._emit(self._click_listeners, EMPTY_SELECTION)

    def refresh(self, snapshot: "WageSnapshot") -> None:
        """Re-resolve the hovered and clicked counties against a new wage set.

        A clicked county with no data in the new set loses its selection.
        """
        if self._hover_feature is not None:
            self._hovered = self._resolve(self._hover_feature, snapshot)
            self._emit(self._hover_listeners, self._hovered)

        if self._selected_feature is None:
            return
        resolved = self._resolve(self._selected_feature, snapshot)
        if not resolved.has_data:
            self.clear_selection()
            return
        self._selected = resolved
        self._emit(self._click_listeners, self._selected)

    def focus_locations(
        self,
        targets: Iterable[Tuple[str, str]],
        features: Sequence[RenderedFeature],
    ) -> Optional[FitBoundsRequest]:
        """Fit the view to every rendered feature matching the targets.

        Args:
            targets: (county name, state abbreviation or FIPS) pairs
            features: Features currently known to the renderer

        Returns:
            The fit request issued, or None when no feature matched
        """
        wanted = set()
        for county, state in targets:
            name = normalize_county_name(county)
            fips = state_fips(state)
            if name and fips:
                wanted.add((name, fips))

        matched = [
            feature
            for feature in features
            if (normalize_county_name(feature.county_name), state_fips(feature.state_code)) in wanted
        ]
        bounds = collect_bounds(matched)

        if not matched or bounds.is_empty:
            logger.debug(
                "No rendered features matched the location",
                extra={"event": "interaction.focus.unmatched", "target_count": len(wanted)},
            )
            return None

        request = FitBoundsRequest(bounds=bounds, padding=self.padding, max_zoom=self.max_zoom)
        self.renderer.fit_bounds(request)
        logger.debug(
            "Fitting view to location",
            extra={"event": "interaction.focus.fitted", "matched_features": len(matched)},
        )
        return request

    def _resolve(self, feature: RenderedFeature, snapshot: "WageSnapshot") -> Selection:
        wage = resolve_wage(
            self.reverse_index, snapshot.by_area, feature.county_name, feature.state_code
        )
        return Selection(
            wage=wage,
            county=feature.county_name,
            state=state_abbrev(feature.state_code) or feature.state_code,
        )

    def _set_highlight(self, feature_id: Any, flag: str, value: bool) -> None:
        if feature_id is None:
            return
        self.renderer.set_feature_state(feature_id, {flag: value})

    @staticmethod
    def _emit(listeners: List[SelectionListener], selection: Selection) -> None:
        for listener in list(listeners):
            listener(selection)


def _register(listeners: List[SelectionListener], listener: SelectionListener) -> Callable[[], None]:
    listeners.append(listener)

    def remove() -> None:
        if listener in listeners:
            listeners.remove(listener)

    return remove
