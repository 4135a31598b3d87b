"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

CURRENCY_MARKERS = re.compile(r"(?i)[$¥₹]|\bAED\b|\bUSD\b|\bJPY\b|\bINR\b")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "¥1,000"
    - "AED 250"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and codes
    amount_str = CURRENCY_MARKERS.sub("", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def parse_percent(percent_str: str) -> Decimal:
    """Parse a percentage such as "10", "10%" or "7.5 %" into a Decimal.

    Raises:
        ValueError: If percent string cannot be parsed
    """
    if not percent_str or not percent_str.strip():
        raise ValueError("Empty percent string")
    return parse_amount(percent_str.strip().rstrip("%"))
