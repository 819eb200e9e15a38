"""Parsing of line items given on the command line."""


def parse_item_spec(spec: str) -> dict[str, str]:
    """Split a "DESCRIPTION:QUANTITY:UNIT_PRICE" string into raw item fields.

    The description may itself contain colons; quantity and unit price are
    taken from the right. Values are returned unparsed so that
    ``validate_and_compute`` reports every problem by field name.

    Examples:
        "Web design:2:50" -> {"description": "Web design", "quantity": "2",
                              "unit_price": "50"}

    Raises:
        ValueError: If the string does not have three parts
    """
    parts = spec.rsplit(":", 2)
    if len(parts) != 3:
        raise ValueError(
            f"Invalid item '{spec}'. Expected DESCRIPTION:QUANTITY:UNIT_PRICE"
        )
    description, quantity, unit_price = (part.strip() for part in parts)
    return {"description": description, "quantity": quantity, "unit_price": unit_price}
