"""Domain model entities for invoicekit.

These are pure data classes representing business concepts, independent of
database schema. Monetary values are Decimals at full precision; rounding
only happens when formatting for display.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class CurrencyCode(str, Enum):
    """Supported invoice currencies."""

    USD = "USD"
    JPY = "JPY"
    AED = "AED"
    INR = "INR"


class InvoiceStatus(str, Enum):
    """Stored invoice status."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class DiscountType(str, Enum):
    """How a discount amount is interpreted."""

    PERCENT = "percent"
    FIXED = "fixed"


class InvoiceBucket(str, Enum):
    """Time-relative classification of an invoice for reporting."""

    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    CURRENT = "current"
    PAID = "paid"


@dataclass(frozen=True)
class Client:
    """Client domain entity, owned by exactly one user."""

    id: int
    user_id: str
    name: str
    email: Optional[str]
    company: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class LineItem:
    """One billable row on an invoice.

    ``amount`` is derived; only the calculator sets it.
    """

    description: str
    quantity: int
    rate: Decimal
    amount: Optional[Decimal] = None


@dataclass(frozen=True)
class Discount:
    """Discount specification."""

    amount: Decimal = Decimal("0")
    type: DiscountType = DiscountType.FIXED


@dataclass(frozen=True)
class InvoiceTotals:
    """Result of pricing a set of line items."""

    items: tuple[LineItem, ...]
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total: Decimal
    currency: CurrencyCode


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    invoice_number: str
    user_id: str
    client_id: int
    items: tuple[LineItem, ...]
    subtotal: Decimal
    tax_percent: Decimal
    tax_amount: Decimal
    discount: Discount
    discount_amount: Decimal
    total: Decimal
    currency: CurrencyCode
    status: InvoiceStatus
    issue_date: date
    due_date: date
    created_at: datetime
    notes: Optional[str] = None
    logo: Optional[str] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class InvoiceSummary:
    """Invoice annotated with client display fields."""

    invoice: Invoice
    client_name: Optional[str] = None
    client_company: Optional[str] = None


@dataclass(frozen=True)
class MonthlyEarnings:
    """Paid totals for one calendar month, summed across currencies."""

    year: int
    month: int
    total: Decimal


@dataclass(frozen=True)
class InvoiceCounts:
    """Invoice counters shown on the dashboard."""

    total_invoices: int = 0
    paid_invoices: int = 0
    unpaid_invoices: int = 0
    overdue_count: int = 0


@dataclass(frozen=True)
class DashboardStats:
    """Aggregated dashboard statistics for one user."""

    total_earnings: Decimal = Decimal("0")
    unpaid_amount: Decimal = Decimal("0")
    earnings_by_currency: dict[str, Decimal] = field(default_factory=dict)
    unpaid_by_currency: dict[str, Decimal] = field(default_factory=dict)
    paid_count_by_currency: dict[str, int] = field(default_factory=dict)
    unpaid_count_by_currency: dict[str, int] = field(default_factory=dict)
    total_clients: int = 0
    recent_invoices: tuple[InvoiceSummary, ...] = ()
    overdue_invoices: tuple[InvoiceSummary, ...] = ()
    upcoming_invoices: tuple[InvoiceSummary, ...] = ()
    monthly_earnings: tuple[MonthlyEarnings, ...] = ()
    stats: InvoiceCounts = field(default_factory=InvoiceCounts)
