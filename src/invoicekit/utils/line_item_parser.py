"""Line item parsing for command line input."""

from invoicekit.domain.entities import LineItem
from invoicekit.utils.amount_parser import parse_amount


def parse_line_item(item_str: str) -> LineItem:
    """Parse "DESCRIPTION:QUANTITY:RATE" into a LineItem.

    The description may itself contain colons; quantity and rate are taken
    from the last two fields.

    Examples:
        >>> parse_line_item("Design work:2:50")
        LineItem(description='Design work', quantity=2, rate=Decimal('50'), amount=None)

    Raises:
        ValueError: If the string does not have three fields or the
            quantity/rate cannot be parsed
    """
    parts = item_str.rsplit(":", 2)
    if len(parts) != 3:
        raise ValueError(
            f"Invalid line item '{item_str}'. Expected DESCRIPTION:QUANTITY:RATE"
        )
    description, quantity_str, rate_str = (part.strip() for part in parts)

    try:
        quantity = int(quantity_str)
    except ValueError:
        raise ValueError(f"Invalid quantity '{quantity_str}' in line item '{item_str}'")

    return LineItem(description=description, quantity=quantity, rate=parse_amount(rate_str))
