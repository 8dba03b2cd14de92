"""Display formatting for counts and percentages.

Ties round away from zero (1.125 -> "1.13"), not to the even digit.
"""

from decimal import ROUND_HALF_UP, Decimal


def to_fixed(num: float, digits: int) -> str:
    """Fixed-point text with ``digits`` decimals, rounding ties up."""
    exponent = Decimal(1).scaleb(-digits)
    return str(Decimal(repr(float(num))).quantize(exponent, rounding=ROUND_HALF_UP))


def round_fixed(num: float, digits: int) -> float:
    return float(to_fixed(num, digits))


def format_number(num: float) -> str:
    """Compact count: 1.2M, 340K, or a comma-separated integer below 1,000."""
    if num >= 1_000_000:
        return f"{to_fixed(num / 1_000_000, 1)}M"
    if num >= 1000:
        return f"{to_fixed(num / 1000, 0)}K"
    return f"{num:,.0f}"


def format_percent(num: float) -> str:
    return f"{to_fixed(num, 1)}%"
