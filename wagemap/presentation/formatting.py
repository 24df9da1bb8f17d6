"""Display formatting for wage amounts."""

TIER_NUMERALS = {1: "I", 2: "II", 3: "III", 4: "IV"}


def format_currency(amount: float, cents: bool = False) -> str:
    """Format a USD amount: ``124800 -> "$124,800"``.

    Amounts are rounded half away from zero to whole dollars unless
    ``cents`` is set. Negative amounts keep the sign in front of the symbol.
    """
    sign = "-" if amount < 0 else ""
    value = abs(amount)
    if cents:
        return f"{sign}${value:,.2f}"
    return f"{sign}${int(value + 0.5):,}"


def format_hourly(rate: float) -> str:
    return f"{format_currency(rate, cents=True)}/hr"


def format_percent(value: float) -> str:
    """Signed whole percent: ``12.4 -> "+12%"``."""
    rounded = int(abs(value) + 0.5)
    if rounded == 0:
        return "0%"
    return f"{'-' if value < 0 else '+'}{rounded}%"


def tier_name(tier: int) -> str:
    return f"Level {TIER_NUMERALS[tier]}"
