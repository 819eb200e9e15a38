"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(value) -> Decimal:
    """Parse a numeric value into a Decimal.

    Accepts ints, Decimals and strings. Strings may carry a currency symbol
    and thousands separators:
    - "123.45"
    - "$123.45"
    - "₹1,234.56"
    - "2"

    Floats are converted through their shortest ``repr`` so that ``0.1``
    becomes ``Decimal("0.1")`` rather than its binary expansion.

    Args:
        value: Amount as int, float, Decimal or string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the value cannot be parsed or is not finite
    """
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, str):
        if not value.strip():
            raise ValueError("Empty amount string")

        # Remove currency symbols and thousands separators
        amount_str = re.sub(r"[$€£¥₹]", "", value.strip())
        amount_str = amount_str.replace(",", "").strip()

        try:
            amount = Decimal(amount_str)
        except InvalidOperation:
            raise ValueError(f"Could not parse amount '{value}'")
    else:
        raise ValueError(f"Could not parse amount '{value}'")

    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got '{value}'")
    return amount
