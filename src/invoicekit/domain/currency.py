"""Currency normalization and display formatting."""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Mapping, Optional

from invoicekit.domain.entities import CurrencyCode

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = CurrencyCode.USD

CURRENCY_SYMBOLS = {
    CurrencyCode.USD: "$",
    CurrencyCode.JPY: "¥",
    CurrencyCode.AED: "AED ",
    CurrencyCode.INR: "₹",
}

ZERO_DECIMAL_CURRENCIES = {CurrencyCode.JPY}


def normalize_currency(code: Optional[str | CurrencyCode]) -> CurrencyCode:
    """Coerce a currency code into the supported set.

    Unknown, empty or missing codes map to USD rather than failing.

    Args:
        code: Currency code from a caller

    Returns:
        Supported currency code
    """
    if isinstance(code, CurrencyCode):
        return code
    if code is None:
        return DEFAULT_CURRENCY

    candidate = str(code).strip().upper()
    try:
        return CurrencyCode(candidate)
    except ValueError:
        logger.warning("Unsupported currency %r, using %s", code, DEFAULT_CURRENCY.value)
        return DEFAULT_CURRENCY


def fraction_digits(currency: str | CurrencyCode) -> int:
    """Return the number of minor-unit digits shown for a currency."""
    return 0 if normalize_currency(currency) in ZERO_DECIMAL_CURRENCIES else 2


def quantize_for_display(amount: Decimal, currency: str | CurrencyCode) -> Decimal:
    """Round an amount to the currency's display precision."""
    exponent = Decimal(1).scaleb(-fraction_digits(currency))
    return Decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal | int, currency: str | CurrencyCode = DEFAULT_CURRENCY) -> str:
    """Format an amount with its currency symbol.

    Examples:
        >>> format_currency(Decimal("1234.5"), "USD")
        '$1,234.50'
        >>> format_currency(Decimal("1000"), "JPY")
        '¥1,000'
    """
    code = normalize_currency(currency)
    rounded = quantize_for_display(Decimal(amount), code)
    digits = fraction_digits(code)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{CURRENCY_SYMBOLS[code]}{abs(rounded):,.{digits}f}"


def format_amounts_by_currency(
    amounts_by_currency: Mapping[str, Decimal],
    fallback_amount: Optional[Decimal] = None,
    fallback_currency: Optional[str] = None,
) -> str:
    """Format several per-currency amounts for display.

    Only positive amounts are shown, joined with " · ". When none are
    positive, the fallback amount is shown if positive, otherwise zero USD.
    """
    entries = [
        (currency, amount)
        for currency, amount in (amounts_by_currency or {}).items()
        if amount > 0
    ]
    if not entries:
        if fallback_amount is not None and fallback_amount > 0:
            return format_currency(fallback_amount, fallback_currency or DEFAULT_CURRENCY)
        return format_currency(Decimal("0"))
    return " · ".join(format_currency(amount, currency) for currency, amount in entries)
