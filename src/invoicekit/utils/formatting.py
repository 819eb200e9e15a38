"""Display formatting for money, percentages, quantities and dates."""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP


def format_money(amount: Decimal) -> str:
    """Format an amount with two decimals and thousands separators.

    Examples:
        Decimal("1234.5") -> "1,234.50"
        Decimal("5.625") -> "5.63"
    """
    return f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,.2f}"


def format_percent(rate: Decimal) -> str:
    """Format a percentage with at most one decimal.

    Whole percentages drop the decimal: 10 -> "10%", 12.5 -> "12.5%".
    """
    rounded = rate.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    if rounded == rounded.to_integral_value():
        return f"{int(rounded)}%"
    return f"{rounded}%"


def format_quantity(quantity: Decimal) -> str:
    """Format a quantity without trailing zeros or exponent notation."""
    normalized = quantity.normalize()
    if normalized == normalized.to_integral_value():
        return str(int(normalized))
    return format(normalized, "f")


def format_date(value: datetime) -> str:
    """Format a date as '05 Mar 2025'."""
    return value.strftime("%d %b %Y")
