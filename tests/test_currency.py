"""Tests for currency normalization and formatting."""

from decimal import Decimal

import pytest

from invoicekit.domain.currency import (
    format_amounts_by_currency,
    format_currency,
    fraction_digits,
    normalize_currency,
    quantize_for_display,
)
from invoicekit.domain.entities import CurrencyCode


@pytest.mark.parametrize(
    "code,expected",
    [
        ("USD", CurrencyCode.USD),
        ("jpy", CurrencyCode.JPY),
        (" inr ", CurrencyCode.INR),
        (CurrencyCode.AED, CurrencyCode.AED),
        ("EUR", CurrencyCode.USD),
        ("", CurrencyCode.USD),
        (None, CurrencyCode.USD),
    ],
)
def test_normalize_currency(code, expected):
    """Test that unsupported codes are coerced to USD rather than rejected."""
    assert normalize_currency(code) == expected


def test_fraction_digits():
    """Test that JPY has no minor unit and the others have two."""
    assert fraction_digits("JPY") == 0
    assert fraction_digits("USD") == 2
    assert fraction_digits("AED") == 2
    assert fraction_digits("INR") == 2


def test_quantize_for_display_rounds_half_up():
    """Test rounding to the currency's minor unit."""
    assert quantize_for_display(Decimal("10.005"), "USD") == Decimal("10.01")
    assert quantize_for_display(Decimal("999.5"), "JPY") == Decimal("1000")


def test_format_currency():
    """Test display formatting per currency."""
    assert format_currency(Decimal("1234.5"), "USD") == "$1,234.50"
    assert format_currency(Decimal("1000"), "JPY") == "¥1,000"
    assert format_currency(Decimal("1234.5"), "AED") == "AED 1,234.50"
    assert format_currency(Decimal("50000"), "INR") == "₹50,000.00"


def test_format_currency_negative_and_default():
    """Test negative amounts and the USD default."""
    assert format_currency(Decimal("-20")) == "-$20.00"
    assert format_currency(Decimal("3"), "XYZ") == "$3.00"


def test_format_amounts_by_currency_joins_positive_amounts():
    """Test that only positive amounts are listed."""
    result = format_amounts_by_currency(
        {"USD": Decimal("1000"), "INR": Decimal("50000"), "JPY": Decimal("0")}
    )

    assert result == "$1,000.00 · ₹50,000.00"


def test_format_amounts_by_currency_fallbacks():
    """Test fallback amount and the zero default."""
    assert format_amounts_by_currency({}, Decimal("12"), "JPY") == "¥12"
    assert format_amounts_by_currency({}) == "$0.00"
    assert format_amounts_by_currency({}, Decimal("0"), "JPY") == "$0.00"
