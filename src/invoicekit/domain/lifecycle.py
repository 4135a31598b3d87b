"""Invoice status lifecycle and time-relative classification.

The stored status is what the owner last set. Whether an invoice is overdue
is always derived from its due date, so reporting never depends on a
stored ``overdue`` value being current.
"""

import secrets
import string
from dataclasses import replace
from datetime import date, datetime, time, timedelta, timezone
from random import Random
from typing import Optional

from invoicekit.domain.entities import Invoice, InvoiceBucket, InvoiceStatus
from invoicekit.domain.errors import InvalidStatusError, invalid_status

DEFAULT_DUE_SOON_WINDOW = timedelta(days=7)
INVOICE_NUMBER_PREFIX = "INV"
INVOICE_NUMBER_ALPHABET = string.digits + string.ascii_uppercase
DEFAULT_SUFFIX_LENGTH = 6


def parse_status(value: str | InvoiceStatus) -> InvoiceStatus:
    """Parse a status value into the closed set of statuses.

    Raises:
        InvalidStatusError: If the value is not a known status
    """
    if isinstance(value, InvoiceStatus):
        return value
    allowed = [status.value for status in InvoiceStatus]
    if not isinstance(value, str):
        raise InvalidStatusError(invalid_status(value, allowed))
    try:
        return InvoiceStatus(value.strip().lower())
    except ValueError:
        raise InvalidStatusError(invalid_status(value, allowed))


def set_status(invoice: Invoice, new_status: str | InvoiceStatus) -> Invoice:
    """Return a copy of the invoice with a new stored status.

    Any status may be set from any other; there is no forward-only rule.
    """
    return replace(invoice, status=parse_status(new_status))


def is_unpaid(invoice: Invoice) -> bool:
    """Return True for invoices that are issued but not yet paid."""
    return invoice.status in (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


def to_naive_utc(moment: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def _as_date(moment: date | datetime) -> date:
    if isinstance(moment, datetime):
        return to_naive_utc(moment).date()
    return moment


def _as_moment(moment: date | datetime) -> datetime:
    if isinstance(moment, datetime):
        return to_naive_utc(moment)
    return datetime.combine(moment, time.min)


def _is_past_due(due_date: date, now: date | datetime) -> bool:
    # Due dates start at midnight UTC
    return datetime.combine(due_date, time.min) < _as_moment(now)


def is_overdue(invoice: Invoice, now: date | datetime) -> bool:
    """Return True if the invoice is not paid and its due date has passed.

    The due date counts from midnight UTC, so an invoice due today is
    overdue as soon as that day has started.
    """
    if invoice.status == InvoiceStatus.PAID:
        return False
    return _is_past_due(invoice.due_date, now)


def effective_status(invoice: Invoice, now: date | datetime) -> InvoiceStatus:
    """Return the status to display, with overdue derived from the due date."""
    if invoice.status == InvoiceStatus.PAID:
        return InvoiceStatus.PAID
    if is_overdue(invoice, now):
        return InvoiceStatus.OVERDUE
    if invoice.status == InvoiceStatus.OVERDUE:
        return InvoiceStatus.SENT
    return invoice.status


def classify(
    invoice: Invoice,
    now: date | datetime,
    due_soon_window: timedelta = DEFAULT_DUE_SOON_WINDOW,
) -> InvoiceBucket:
    """Classify an invoice relative to ``now``.

    Args:
        invoice: Invoice to classify
        now: Evaluation time
        due_soon_window: How far ahead a due date counts as due soon

    Returns:
        PAID for paid invoices, OVERDUE when the due date has passed,
        DUE_SOON when it falls within the window, otherwise CURRENT
    """
    if invoice.status == InvoiceStatus.PAID:
        return InvoiceBucket.PAID
    if _is_past_due(invoice.due_date, now):
        return InvoiceBucket.OVERDUE
    if invoice.due_date <= _as_date(now) + due_soon_window:
        return InvoiceBucket.DUE_SOON
    return InvoiceBucket.CURRENT


def generate_invoice_number(
    now: Optional[datetime] = None,
    rng: Optional[Random] = None,
    suffix_length: int = DEFAULT_SUFFIX_LENGTH,
) -> str:
    """Generate an invoice number of the form ``INV-YYYYMM-XXXXXX``.

    The suffix is drawn from base36 characters, which gives about two
    billion values per month at the default length. Uniqueness is still
    enforced by the persistence layer.

    Args:
        now: Generation time, defaults to the current UTC time
        rng: Optional random generator for reproducible numbers
        suffix_length: Number of suffix characters

    Returns:
        Invoice number string
    """
    if suffix_length < 1:
        raise ValueError("Invoice number suffix length must be at least 1")
    if now is None:
        now = datetime.now(timezone.utc)
    choose = rng.choice if rng is not None else secrets.choice
    suffix = "".join(choose(INVOICE_NUMBER_ALPHABET) for _ in range(suffix_length))
    return f"{INVOICE_NUMBER_PREFIX}-{now.year:04d}{now.month:02d}-{suffix}"
