"""Invoice totals calculation.

All arithmetic is done on full-precision Decimals; figures are rounded to two
places (half away from zero) only when the result is returned.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from invoicekit.domain.entities import LineItem, Totals
from invoicekit.domain.errors import ValidationError
from invoicekit.utils.amount_parser import parse_amount

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

# Scale of the stored quantity, unit price and rate columns
MAX_DECIMAL_PLACES = 4


@dataclass(frozen=True)
class ValidatedInvoice:
    """Parsed invoice input together with its computed totals."""

    items: tuple[LineItem, ...]
    tax_rate: Decimal
    discount_rate: Decimal
    totals: Totals


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(item: LineItem) -> Decimal:
    """Unrounded total of a single line item."""
    return item.quantity * item.unit_price


def discount_amount(subtotal: Decimal, discount_rate: Decimal) -> Decimal:
    """Unrounded discount taken off ``subtotal``."""
    return subtotal * discount_rate / HUNDRED


def compute_totals(
    items: Sequence[LineItem], tax_rate: Decimal, discount_rate: Decimal
) -> Totals:
    """Compute subtotal, discount, tax and grand total for line items.

    The discount is applied to the subtotal first and tax is charged on the
    discounted amount.

    Args:
        items: Line items, at least one
        tax_rate: Tax percentage in [0, 100]
        discount_rate: Discount percentage in [0, 100]

    Returns:
        Totals rounded to two decimal places

    Raises:
        ValidationError: If any input is out of range, naming the field
    """
    if not items:
        raise ValidationError("At least one line item is required", field="items")

    checked = []
    for index, item in enumerate(items):
        prefix = f"items[{index}]"
        quantity = _require_number(item.quantity, f"{prefix}.quantity")
        unit_price = _require_number(item.unit_price, f"{prefix}.unit_price")
        problem = _item_problem(item.description, quantity, unit_price)
        if problem is not None:
            name, reason = problem
            raise ValidationError(reason, field=f"{prefix}.{name}")
        checked.append(LineItem(item.description, quantity, unit_price))

    tax_rate = _require_rate(tax_rate, "tax_rate")
    discount_rate = _require_rate(discount_rate, "discount_rate")

    subtotal = sum((line_total(item) for item in checked), Decimal("0"))
    discount = discount_amount(subtotal, discount_rate)
    taxable = subtotal - discount
    tax = taxable * tax_rate / HUNDRED
    total = taxable + tax

    return Totals(
        subtotal=round_money(subtotal),
        discount_amount=round_money(discount),
        tax_amount=round_money(tax),
        total=round_money(total),
    )


def validate_and_compute(
    raw_items: Any, tax_rate: Any = None, discount_rate: Any = None
) -> ValidatedInvoice:
    """Validate untrusted invoice input and compute its totals.

    Every problem is collected before failing so callers can show one message
    per field.

    Args:
        raw_items: Sequence of mappings with ``description``, ``quantity`` and
            ``unit_price`` keys
        tax_rate: Tax percentage; None means 0
        discount_rate: Discount percentage; None means 0

    Returns:
        ValidatedInvoice with parsed items, rates and totals

    Raises:
        ValidationError: With ``errors`` keyed by field name
    """
    errors: dict[str, str] = {}
    items: list[LineItem] = []

    if isinstance(raw_items, (str, bytes)) or not isinstance(raw_items, Sequence):
        errors["items"] = "Line items must be a list"
    elif len(raw_items) == 0:
        errors["items"] = "At least one line item is required"
    else:
        for index, raw in enumerate(raw_items):
            item = _parse_item(raw, f"items[{index}]", errors)
            if item is not None:
                items.append(item)

    rates = {}
    for name, raw_rate in (("tax_rate", tax_rate), ("discount_rate", discount_rate)):
        rate = _parse_rate(raw_rate, name, errors)
        if rate is not None:
            rates[name] = rate

    if errors:
        first_field = next(iter(errors))
        raise ValidationError(
            f"Invalid invoice input: {errors[first_field]}",
            field=first_field,
            errors=errors,
        )

    totals = compute_totals(items, rates["tax_rate"], rates["discount_rate"])
    return ValidatedInvoice(
        items=tuple(items),
        tax_rate=rates["tax_rate"],
        discount_rate=rates["discount_rate"],
        totals=totals,
    )


def _item_problem(description, quantity, unit_price) -> Optional[tuple[str, str]]:
    if not isinstance(description, str) or not description.strip():
        return "description", "Description is required"
    if quantity <= 0:
        return "quantity", "Quantity must be greater than 0"
    if unit_price < 0:
        return "unit_price", "Unit price cannot be negative"
    return None


def _require_number(value, name: str) -> Decimal:
    try:
        number = parse_amount(value)
    except ValueError as e:
        raise ValidationError(str(e), field=name)
    if number.normalize().as_tuple().exponent < -MAX_DECIMAL_PLACES:
        label = _label(name.rsplit(".", 1)[-1])
        raise ValidationError(
            f"{label} can have at most {MAX_DECIMAL_PLACES} decimal places", field=name
        )
    return number


def _require_rate(rate, name: str) -> Decimal:
    rate = _require_number(rate, name)
    if rate < 0 or rate > HUNDRED:
        raise ValidationError(f"{_label(name)} must be between 0 and 100", field=name)
    return rate


def _parse_rate(raw_rate: Any, name: str, errors: dict[str, str]) -> Optional[Decimal]:
    if raw_rate is None or raw_rate == "":
        return Decimal("0")
    try:
        return _require_rate(raw_rate, name)
    except ValidationError as e:
        errors[name] = str(e)
        return None


def _parse_item(raw: Any, prefix: str, errors: dict[str, str]) -> Optional[LineItem]:
    if not isinstance(raw, Mapping):
        errors[prefix] = "Line item must be an object"
        return None

    failed = False
    description = raw.get("description")
    if not isinstance(description, str) or not description.strip():
        errors[f"{prefix}.description"] = "Description is required"
        failed = True

    parsed = {}
    for name in ("quantity", "unit_price"):
        value = raw.get(name)
        if value is None or value == "":
            errors[f"{prefix}.{name}"] = f"{_label(name)} is required"
            failed = True
            continue
        try:
            parsed[name] = _require_number(value, f"{prefix}.{name}")
        except ValidationError as e:
            errors[f"{prefix}.{name}"] = str(e)
            failed = True

    if "quantity" in parsed and parsed["quantity"] <= 0:
        errors[f"{prefix}.quantity"] = "Quantity must be greater than 0"
        failed = True
    if "unit_price" in parsed and parsed["unit_price"] < 0:
        errors[f"{prefix}.unit_price"] = "Unit price cannot be negative"
        failed = True

    if failed:
        return None
    return LineItem(
        description=description.strip(),
        quantity=parsed["quantity"],
        unit_price=parsed["unit_price"],
    )


def _label(name: str) -> str:
    return name.replace("_", " ").capitalize()
