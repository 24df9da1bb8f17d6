"""Wage report shown for the hovered or selected county."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from wagemap.classification.engine import classify
from wagemap.classification.models import DEFAULT_PALETTE, ColorPalette, TierClassification
from wagemap.geography.states import state_abbrev
from wagemap.interaction.models import Selection

from .formatting import format_currency, format_hourly, format_percent, tier_name


@dataclass(frozen=True)
class TierRow:
    """One prevailing-wage level as displayed, highest level first."""

    tier: int
    hourly: float
    annual: float
    is_current: bool
    salary_diff: float
    salary_diff_percent: Optional[float]

    @property
    def name(self) -> str:
        return tier_name(self.tier)

    @property
    def entries_label(self) -> str:
        return f"{self.tier}x Entry"


@dataclass(frozen=True)
class WageReport:
    """Everything the wage panel renders for one county and salary."""

    county: Optional[str]
    state: Optional[str]
    area_name: str
    salary: float
    classification: TierClassification
    rows: Tuple[TierRow, ...]
    preview: bool = False

    @classmethod
    def build(
        cls,
        selection: Selection,
        salary: float,
        palette: ColorPalette = DEFAULT_PALETTE,
        preview: bool = False,
    ) -> "WageReport":
        """Build the report for a selection with wage data.

        Raises:
            ValueError: If the selection has no wage data
        """
        if selection.wage is None:
            raise ValueError("Cannot build a wage report for a county without wage data")

        wage = selection.wage
        classification = classify(salary, wage, palette)
        rows = []
        for tier in (4, 3, 2, 1):
            annual = wage.annual_thresholds[tier - 1]
            diff = salary - annual
            rows.append(
                TierRow(
                    tier=tier,
                    hourly=wage.tiers[tier - 1],
                    annual=annual,
                    # Below the Level I wage no row is current.
                    is_current=tier == classification.tier and salary >= annual,
                    salary_diff=diff,
                    salary_diff_percent=(diff / annual * 100) if annual else None,
                )
            )

        return cls(
            county=selection.county,
            state=state_abbrev(selection.state) or selection.state,
            area_name=wage.area_name,
            salary=salary,
            classification=classification,
            rows=tuple(rows),
            preview=preview,
        )

    @property
    def location_label(self) -> str:
        if self.county and self.state:
            return f"{self.county}, {self.state}"
        return self.county or self.area_name

    @property
    def goal_message(self) -> Optional[str]:
        """Raise needed to reach the next level; None at Level IV or with no salary."""
        gap = self.classification.next_tier_gap
        if gap is None or self.salary <= 0:
            return None
        return (
            f"Raise offer by {format_currency(gap)} to reach Level {self.classification.tier + 1}."
        )

    def to_context(self) -> Dict[str, Any]:
        """Template context with display strings already formatted."""
        return {
            "location": self.location_label,
            "area_name": self.area_name,
            "preview": self.preview,
            "salary": format_currency(self.salary),
            "tier": self.classification.tier,
            "tier_name": tier_name(self.classification.tier),
            "odds_label": self.classification.label,
            "lottery_picks": self.classification.lottery_picks,
            "below_prevailing": self.classification.below_prevailing,
            "goal_message": self.goal_message,
            "rows": [
                {
                    "name": row.name,
                    "hourly": format_hourly(row.hourly),
                    "annual": format_currency(row.annual),
                    "is_current": row.is_current,
                    "entries": row.entries_label,
                    "diff_percent": (
                        format_percent(row.salary_diff_percent)
                        if row.salary_diff_percent is not None
                        else "n/a"
                    ),
                }
                for row in self.rows
            ],
        }
