"""Classification engine mapping an offered salary to a wage tier and color."""

from .engine import TIER_LABELS, classify, tier_for_salary
from .models import DEFAULT_PALETTE, ColorPalette, TierClassification

__all__ = [
    "classify",
    "tier_for_salary",
    "TIER_LABELS",
    "ColorPalette",
    "DEFAULT_PALETTE",
    "TierClassification",
]
