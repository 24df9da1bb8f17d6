"""Map session: wires geography, wage loading, coloring and interaction.

The session owns the immutable reverse index for its lifetime. Salary and
job-category changes each end in exactly one paint-property update; pointer
events never touch the paint rule.
"""

from typing import Optional, Sequence, Tuple

from wagemap.classification.models import DEFAULT_PALETTE, ColorPalette
from wagemap.config.models import MapConfig
from wagemap.geography.directory import AreaDirectory
from wagemap.geography.resolver import ReverseIndex, build_reverse_index
from wagemap.interaction.coordinator import InteractionCoordinator
from wagemap.interaction.models import Selection
from wagemap.logging import get_logger
from wagemap.lookup.base import BaseWageLookup
from wagemap.rendering.compiler import PaintRuleCache
from wagemap.rendering.models import FitBoundsRequest, PaintRule, RenderedFeature
from wagemap.rendering.renderer import MapRenderer

from .loader import WageDataLoader
from .models import LoadState, WageSnapshot

logger = get_logger(__name__, component="session")


class MapSession:
    """One user's view of the wage map."""

    def __init__(
        self,
        directory: AreaDirectory,
        lookup: BaseWageLookup,
        renderer: MapRenderer,
        map_config: Optional[MapConfig] = None,
        palette: ColorPalette = DEFAULT_PALETTE,
        salary: float = 120000,
        coarse_pointer: bool = False,
        reverse_index: Optional[ReverseIndex] = None,
    ):
        self.directory = directory
        self.renderer = renderer
        self.map_config = map_config or MapConfig()
        self.palette = palette
        self._salary = float(salary)

        self.reverse_index = reverse_index or build_reverse_index(directory.entries())
        self.loader = WageDataLoader(lookup)
        self.rules = PaintRuleCache(
            self.reverse_index,
            palette=palette,
            name_property=self.map_config.name_property,
            state_property=self.map_config.state_property,
            display_name_overrides=self.map_config.display_name_overrides,
            strict_state_matching=self.map_config.strict_state_matching,
        )
        self.interaction = InteractionCoordinator(
            self.reverse_index,
            renderer,
            coarse_pointer=coarse_pointer,
            padding=self.map_config.fit_padding,
            max_zoom=self.map_config.max_zoom,
        )
        self._applied_rule: Optional[PaintRule] = None
        self.loader.add_listener(self._on_wages_changed)

    @property
    def salary(self) -> float:
        return self._salary

    @property
    def snapshot(self) -> WageSnapshot:
        return self.loader.snapshot

    @property
    def load_state(self) -> LoadState:
        return self.loader.state

    @property
    def paint_rule(self) -> Optional[PaintRule]:
        """Last rule pushed to the renderer."""
        return self._applied_rule

    def set_salary(self, salary: float) -> PaintRule:
        """Recolor the map for a new offered salary."""
        if salary < 0:
            raise ValueError(f"salary must be non-negative, got: {salary}")
        self._salary = float(salary)
        return self.repaint()

    def select_job_category(self, soc_code: Optional[str]) -> WageSnapshot:
        """Load the wage set for a job category; None or blank deselects."""
        if not soc_code or not soc_code.strip():
            self.loader.clear()
        else:
            self.loader.load(soc_code.strip())
        return self.loader.snapshot

    def repaint(self) -> PaintRule:
        """Push the rule for the current salary and snapshot to the renderer.

        The renderer is only called when the compiled rule changed.
        """
        snapshot = self.loader.snapshot
        rule = self.rules.rule_for(snapshot.generation, snapshot.wages, self._salary)
        if rule is not self._applied_rule:
            self.renderer.set_paint_property(
                self.map_config.layer_id, self.map_config.fill_property, rule.expression
            )
            self._applied_rule = rule
            logger.debug(
                "Paint rule applied",
                extra={
                    "event": "session.paint.applied",
                    "generation": snapshot.generation,
                    "salary": self._salary,
                    "colored_areas": rule.colored_areas,
                },
            )
        return rule

    def hover(self, feature: RenderedFeature) -> Optional[Selection]:
        return self.interaction.hover(feature, self.loader.snapshot)

    def leave(self) -> None:
        self.interaction.leave()

    def click(self, feature: RenderedFeature) -> Selection:
        return self.interaction.click(feature, self.loader.snapshot)

    def clear_selection(self) -> None:
        self.interaction.clear_selection()

    @property
    def effective_selection(self) -> Selection:
        return self.interaction.effective_selection

    def focus_locations(
        self, targets: Sequence[Tuple[str, str]], features: Sequence[RenderedFeature]
    ) -> Optional[FitBoundsRequest]:
        return self.interaction.focus_locations(targets, features)

    def _on_wages_changed(self, snapshot: WageSnapshot, state: LoadState) -> None:
        # Loading keeps the previous colors and selection until the new set lands.
        if state != LoadState.LOADING:
            self.repaint()
            self.interaction.refresh(snapshot)
