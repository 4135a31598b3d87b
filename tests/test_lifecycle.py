"""Tests for invoice status lifecycle and classification."""

import random
import re
from dataclasses import replace
from datetime import date, datetime, timedelta, timezone

import pytest

from invoicekit.domain.entities import InvoiceBucket, InvoiceStatus
from invoicekit.domain.errors import InvalidStatusError
from invoicekit.domain.lifecycle import (
    classify,
    effective_status,
    generate_invoice_number,
    is_overdue,
    parse_status,
    set_status,
)

NOW = datetime(2024, 6, 15, 9, 30)


@pytest.mark.parametrize("value", ["draft", "sent", "paid", "overdue", "PAID", " Sent "])
def test_parse_status_accepts_closed_set(value):
    """Test that the four statuses parse regardless of case."""
    assert parse_status(value) == InvoiceStatus(value.strip().lower())


@pytest.mark.parametrize("value", ["", "cancelled", "void", None, 3])
def test_parse_status_rejects_unknown(value):
    """Test that values outside the closed set fail."""
    with pytest.raises(InvalidStatusError):
        parse_status(value)


def test_set_status_allows_any_transition(make_invoice):
    """Test that any status can be set directly, including out of paid."""
    invoice = make_invoice(status=InvoiceStatus.DRAFT)

    paid = set_status(invoice, "paid")
    assert paid.status == InvoiceStatus.PAID
    assert set_status(paid, InvoiceStatus.DRAFT).status == InvoiceStatus.DRAFT
    assert set_status(invoice, "overdue").status == InvoiceStatus.OVERDUE
    # Original is unchanged
    assert invoice.status == InvoiceStatus.DRAFT


def test_set_status_rejects_unknown(make_invoice):
    """Test that set_status fails for unknown values."""
    with pytest.raises(InvalidStatusError):
        set_status(make_invoice(), "archived")


def test_due_yesterday_is_overdue(make_invoice):
    """Test that a sent invoice due yesterday is overdue."""
    invoice = make_invoice(status=InvoiceStatus.SENT, due_date=date(2024, 6, 14))

    assert is_overdue(invoice, NOW)
    assert classify(invoice, NOW) == InvoiceBucket.OVERDUE
    assert effective_status(invoice, NOW) == InvoiceStatus.OVERDUE


def test_due_today_is_overdue_once_the_day_starts(make_invoice):
    """Test that an invoice due today is overdue after midnight UTC."""
    invoice = make_invoice(due_date=date(2024, 6, 15))

    assert is_overdue(invoice, NOW)
    assert classify(invoice, NOW) == InvoiceBucket.OVERDUE
    assert effective_status(invoice, NOW) == InvoiceStatus.OVERDUE

    # Exactly midnight is not yet past due
    assert not is_overdue(invoice, datetime(2024, 6, 15, 0, 0))
    assert not is_overdue(invoice, date(2024, 6, 15))
    assert classify(invoice, date(2024, 6, 15)) == InvoiceBucket.DUE_SOON


def test_due_tomorrow_is_not_overdue(make_invoice):
    """Test that an invoice due tomorrow is still upcoming."""
    invoice = make_invoice(due_date=date(2024, 6, 16))

    assert not is_overdue(invoice, NOW)
    assert classify(invoice, NOW) == InvoiceBucket.DUE_SOON


def test_paid_is_never_overdue(make_invoice):
    """Test that paid invoices are never classified as overdue."""
    invoice = make_invoice(status=InvoiceStatus.PAID, due_date=date(2020, 1, 1))

    assert not is_overdue(invoice, NOW)
    assert classify(invoice, NOW) == InvoiceBucket.PAID
    assert effective_status(invoice, NOW) == InvoiceStatus.PAID


def test_draft_past_due_is_overdue(make_invoice):
    """Test that overdue detection applies to every non-paid invoice."""
    invoice = make_invoice(status=InvoiceStatus.DRAFT, due_date=date(2024, 1, 1))

    assert is_overdue(invoice, NOW)


def test_stored_overdue_with_future_due_date(make_invoice):
    """Test that the due date, not the stored status, decides overdue."""
    invoice = make_invoice(status=InvoiceStatus.OVERDUE, due_date=date(2024, 7, 1))

    assert not is_overdue(invoice, NOW)
    assert effective_status(invoice, NOW) == InvoiceStatus.SENT
    assert classify(invoice, NOW) == InvoiceBucket.CURRENT


def test_classify_due_soon_window(make_invoice):
    """Test the due-soon window boundaries."""
    within = make_invoice(due_date=date(2024, 6, 22))
    beyond = make_invoice(due_date=date(2024, 6, 23))

    assert classify(within, NOW) == InvoiceBucket.DUE_SOON
    assert classify(beyond, NOW) == InvoiceBucket.CURRENT
    assert classify(beyond, NOW, due_soon_window=timedelta(days=30)) == InvoiceBucket.DUE_SOON


def test_classify_accepts_date_and_aware_datetime(make_invoice):
    """Test that now may be a date or a timezone-aware datetime."""
    invoice = make_invoice(due_date=date(2024, 6, 15))

    assert classify(invoice, date(2024, 6, 16)) == InvoiceBucket.OVERDUE
    aware = datetime(2024, 6, 15, 1, 0, tzinfo=timezone(timedelta(hours=5)))
    # 2024-06-14 20:00 UTC
    assert classify(invoice, aware) == InvoiceBucket.DUE_SOON


def test_generate_invoice_number_format():
    """Test the INV-YYYYMM-XXXXXX format."""
    number = generate_invoice_number(datetime(2024, 3, 9))

    assert re.fullmatch(r"INV-202403-[0-9A-Z]{6}", number)


def test_generate_invoice_number_reproducible_with_rng():
    """Test that a seeded generator gives reproducible numbers."""
    first = generate_invoice_number(datetime(2024, 3, 9), rng=random.Random(42))
    second = generate_invoice_number(datetime(2024, 3, 9), rng=random.Random(42))

    assert first == second


def test_generate_invoice_number_suffix_length():
    """Test custom suffix lengths and rejection of empty suffixes."""
    number = generate_invoice_number(datetime(2024, 12, 1), suffix_length=10)
    assert re.fullmatch(r"INV-202412-[0-9A-Z]{10}", number)

    with pytest.raises(ValueError):
        generate_invoice_number(suffix_length=0)


def test_generate_invoice_number_defaults_to_now():
    """Test that the current month is used by default."""
    now = datetime.now(timezone.utc)
    number = generate_invoice_number()

    assert number.startswith(f"INV-{now.year:04d}{now.month:02d}-")


def test_generated_numbers_are_distinct():
    """Test that the high-entropy suffix avoids collisions in practice."""
    numbers = {generate_invoice_number(datetime(2024, 1, 1)) for _ in range(500)}

    assert len(numbers) == 500


def test_replace_keeps_classification_pure(make_invoice):
    """Test that classification does not mutate the invoice."""
    invoice = make_invoice(due_date=date(2024, 1, 1))
    before = replace(invoice)

    classify(invoice, NOW)

    assert invoice == before
