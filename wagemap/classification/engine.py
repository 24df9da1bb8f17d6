"""Classification engine: which prevailing-wage tier an offered salary reaches.

``classify`` runs for every hover event and every paint-rule compilation, so
it is a pure function with no I/O and no logging.
"""

from wagemap.domain.models import WageArea

from .models import DEFAULT_PALETTE, ColorPalette, TierClassification

TIER_LABELS = {
    1: "Standard Odds",
    2: "Moderate Odds",
    3: "Good Odds",
    4: "Excellent Odds",
}


def tier_for_salary(salary_annual: float, wage: WageArea) -> int:
    """Highest tier k in 4..1 with salary >= annualized tier k, floored at 1."""
    thresholds = wage.annual_thresholds
    for tier in (4, 3, 2):
        if salary_annual >= thresholds[tier - 1]:
            return tier
    return 1


def classify(
    salary_annual: float,
    wage: WageArea,
    palette: ColorPalette = DEFAULT_PALETTE,
) -> TierClassification:
    """Classify an annual salary against a wage area's four tiers.

    Args:
        salary_annual: Offered salary in USD per year
        wage: Wage area record (hourly tiers)
        palette: Tier color tokens

    Returns:
        TierClassification with tier, color and display fields

    Example:
        >>> wage = WageArea(area_code=1, tier1=40, tier2=50, tier3=60, tier4=70)
        >>> classify(120000, wage).tier
        2
    """
    thresholds = wage.annual_thresholds
    tier = tier_for_salary(salary_annual, wage)
    gap = None if tier == 4 else max(thresholds[tier] - salary_annual, 0.0)

    return TierClassification(
        tier=tier,
        color=palette.color_for(tier),
        label=TIER_LABELS[tier],
        below_prevailing=salary_annual < thresholds[0],
        annual_thresholds=thresholds,
        next_tier_gap=gap,
    )
