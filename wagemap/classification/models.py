"""Data models for the classification engine."""

from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEX_COLOR_LENGTHS = (4, 7, 9)


class ColorPalette(BaseModel):
    """Color tokens for the four wage tiers plus the "no data" fill.

    Tier 1 is the highest-risk classification and tier 4 the safest.
    """

    model_config = ConfigDict(frozen=True)

    tier1: str = Field("#ef4444", description="Level I (highest risk)")
    tier2: str = Field("#f59e0b", description="Level II")
    tier3: str = Field("#3b82f6", description="Level III")
    tier4: str = Field("#10b981", description="Level IV (safest)")
    no_data: str = Field("#e2e8f0", description="Counties without wage data")

    @field_validator("tier1", "tier2", "tier3", "tier4", "no_data")
    @classmethod
    def validate_hex(cls, v: str) -> str:
        """Accept #rgb, #rrggbb or #rrggbbaa, lower-cased."""
        color = v.strip().lower()
        if (
            not color.startswith("#")
            or len(color) not in _HEX_COLOR_LENGTHS
            or any(ch not in "0123456789abcdef" for ch in color[1:])
        ):
            raise ValueError(f"Invalid hex color: {v!r}")
        return color

    def color_for(self, tier: int) -> str:
        """Color token for tier 1-4."""
        if tier not in (1, 2, 3, 4):
            raise ValueError(f"Tier must be 1-4, got: {tier}")
        return getattr(self, f"tier{tier}")


DEFAULT_PALETTE = ColorPalette()


@dataclass(frozen=True)
class TierClassification:
    """Result of classifying an annual salary against one wage area.

    Attributes:
        tier: 1-4; salaries under the Level I wage still report tier 1
        color: Palette token for the tier
        label: Selection odds label shown next to the tier
        below_prevailing: Salary is under the annualized Level I wage. A
            display state only, not a fifth tier.
        annual_thresholds: Annualized Level I-IV wages
        next_tier_gap: Annual raise needed to reach the next tier, None at tier 4
    """

    tier: int
    color: str
    label: str
    below_prevailing: bool
    annual_thresholds: Tuple[float, float, float, float]
    next_tier_gap: Optional[float]

    @property
    def lottery_picks(self) -> int:
        """Weighted-selection entries for this tier (one per level)."""
        return self.tier
