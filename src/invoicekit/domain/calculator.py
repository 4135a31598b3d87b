"""Invoice total calculation.

All arithmetic is done on Decimals without rounding, so recomputing totals
from the same inputs always yields identical values. Rounding to a
currency's minor unit belongs to :mod:`invoicekit.domain.currency`.
"""

import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from invoicekit.domain.currency import normalize_currency
from invoicekit.domain.entities import (
    CurrencyCode,
    Discount,
    DiscountType,
    Invoice,
    InvoiceTotals,
    LineItem,
)
from invoicekit.domain.errors import InvalidInvoiceError, no_valid_line_items

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
ZERO = Decimal("0")


def to_decimal(value: Decimal | int | float | str | None, field_name: str) -> Decimal:
    """Convert a numeric input to Decimal.

    Floats go through ``str`` so that 0.1 stays 0.1.

    Raises:
        InvalidInvoiceError: If the value is not a finite number
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInvoiceError(f"Invalid {field_name}: {value!r}")
    if not result.is_finite():
        raise InvalidInvoiceError(f"Invalid {field_name}: {value!r}")
    return result


def is_valid_line_item(item: LineItem) -> bool:
    """Return True if the item counts towards invoice totals.

    An item needs a non-blank description, a whole quantity of at least
    one and a positive rate.
    """
    if not item.description or not item.description.strip():
        return False
    try:
        quantity = to_decimal(item.quantity, "quantity")
        rate = to_decimal(item.rate, "rate")
    except InvalidInvoiceError:
        return False
    if quantity != quantity.to_integral_value():
        return False
    return quantity >= 1 and rate > 0


def price_line_item(item: LineItem) -> LineItem:
    """Return a copy of the item with ``amount = quantity * rate``.

    Any amount supplied by the caller is ignored.
    """
    quantity = to_decimal(item.quantity, "quantity")
    rate = to_decimal(item.rate, "rate")
    return replace(
        item,
        description=item.description.strip(),
        quantity=int(quantity),
        rate=rate,
        amount=quantity * rate,
    )


def normalize_tax_percent(tax_percent: Decimal | int | float | str | None) -> Decimal:
    """Validate a tax percentage and clamp it to at most 100.

    Raises:
        InvalidInvoiceError: If the percentage is negative
    """
    value = to_decimal(tax_percent, "tax percent")
    if value < 0:
        raise InvalidInvoiceError(f"Tax percent cannot be negative: {value}")
    return min(value, HUNDRED)


def normalize_discount(discount: Optional[Discount]) -> Discount:
    """Validate a discount specification.

    Raises:
        InvalidInvoiceError: If the amount is negative or the type is unknown
    """
    if discount is None:
        return Discount()

    amount = to_decimal(discount.amount, "discount")
    if amount < 0:
        raise InvalidInvoiceError(f"Discount cannot be negative: {amount}")

    try:
        discount_type = DiscountType(discount.type)
    except ValueError:
        raise InvalidInvoiceError(
            f"Invalid discount type '{discount.type}'. Allowed values: percent, fixed"
        )
    return Discount(amount=amount, type=discount_type)


def compute_totals(
    items: Iterable[LineItem],
    tax_percent: Decimal | int | float | str | None = ZERO,
    discount: Optional[Discount] = None,
    currency: str | CurrencyCode | None = CurrencyCode.USD,
) -> InvoiceTotals:
    """Compute subtotal, tax, discount and total for a set of line items.

    Items that fail validation are dropped; at least one must remain.

    Args:
        items: Candidate line items
        tax_percent: Tax as a percentage of the subtotal, clamped to [0, 100]
        discount: Optional discount, either a percentage of the subtotal or
            a fixed amount
        currency: Invoice currency, coerced to a supported code

    Returns:
        InvoiceTotals with priced items and unrounded amounts

    Raises:
        InvalidInvoiceError: If no item is valid, the discount is negative or
            the tax percent is negative
    """
    candidates = list(items)
    valid_items = tuple(
        price_line_item(item) for item in candidates if is_valid_line_item(item)
    )
    if not valid_items:
        raise InvalidInvoiceError(no_valid_line_items(len(candidates)))

    tax = normalize_tax_percent(tax_percent)
    discount = normalize_discount(discount)

    subtotal = sum((item.amount for item in valid_items), ZERO)
    tax_amount = subtotal * tax / HUNDRED
    if discount.type == DiscountType.PERCENT:
        discount_amount = subtotal * discount.amount / HUNDRED
    else:
        discount_amount = discount.amount
    total = subtotal + tax_amount - discount_amount

    logger.debug(
        "Computed totals for %d item(s): subtotal=%s tax=%s discount=%s total=%s",
        len(valid_items),
        subtotal,
        tax_amount,
        discount_amount,
        total,
    )

    return InvoiceTotals(
        items=valid_items,
        subtotal=subtotal,
        tax_amount=tax_amount,
        discount_amount=discount_amount,
        total=total,
        currency=normalize_currency(currency),
    )


def compute_invoice_totals(invoice: Invoice) -> InvoiceTotals:
    """Recompute totals for a stored invoice from its items and rules."""
    return compute_totals(
        invoice.items,
        tax_percent=invoice.tax_percent,
        discount=invoice.discount,
        currency=invoice.currency,
    )
