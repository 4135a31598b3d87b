"""Dashboard aggregation over a user's invoices."""

import logging
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Mapping, Optional, Sequence

from invoicekit.database.base import Database
from invoicekit.domain.currency import normalize_currency
from invoicekit.domain.entities import (
    Client,
    DashboardStats,
    Invoice,
    InvoiceCounts,
    InvoiceStatus,
    InvoiceSummary,
    MonthlyEarnings,
)
from invoicekit.domain.lifecycle import is_overdue, is_unpaid, to_naive_utc

logger = logging.getLogger(__name__)

RECENT_INVOICE_LIMIT = 5
TREND_WINDOW_DAYS = 30


def sum_by_currency(invoices: Sequence[Invoice]) -> tuple[dict[str, Decimal], dict[str, int]]:
    """Sum totals and count invoices per currency.

    Each currency accumulates separately; amounts in different currencies
    are never added together.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    counts: dict[str, int] = defaultdict(int)
    for invoice in invoices:
        currency = normalize_currency(invoice.currency).value
        totals[currency] += invoice.total
        counts[currency] += 1
    return dict(totals), dict(counts)


def group_earnings_by_month(
    paid_invoices: Sequence[Invoice],
    now: datetime,
    trend_days: int = TREND_WINDOW_DAYS,
) -> tuple[MonthlyEarnings, ...]:
    """Group recently created paid invoices by calendar month.

    Totals are summed across currencies, which makes the series a display
    simplification rather than an accounting figure.
    """
    window_start = to_naive_utc(now) - timedelta(days=trend_days)
    by_month: dict[tuple[int, int], Decimal] = defaultdict(Decimal)
    for invoice in paid_invoices:
        created_at = to_naive_utc(invoice.created_at)
        if created_at < window_start:
            continue
        by_month[(created_at.year, created_at.month)] += invoice.total

    return tuple(
        MonthlyEarnings(year=year, month=month, total=total)
        for (year, month), total in sorted(by_month.items())
    )


def annotate_invoice(
    invoice: Invoice, clients: Optional[Mapping[int, Client]]
) -> InvoiceSummary:
    """Attach client name and company to an invoice for display."""
    client = (clients or {}).get(invoice.client_id)
    if client is None:
        return InvoiceSummary(invoice=invoice)
    return InvoiceSummary(
        invoice=invoice, client_name=client.name, client_company=client.company
    )


def compute_dashboard(
    invoices: Sequence[Invoice],
    clients_count: int,
    now: datetime,
    clients: Optional[Mapping[int, Client]] = None,
    upcoming_window: Optional[timedelta] = None,
    recent_limit: int = RECENT_INVOICE_LIMIT,
    trend_days: int = TREND_WINDOW_DAYS,
) -> DashboardStats:
    """Fold a user's invoices into dashboard statistics.

    Args:
        invoices: All invoices owned by the user
        clients_count: Number of clients owned by the user
        now: Evaluation time for overdue detection and the trend window
        clients: Optional client lookup used to annotate invoice lists
        upcoming_window: If given, upcoming invoices are limited to those due
            within this window; otherwise every non-paid invoice that is not
            overdue is upcoming
        recent_limit: Number of most recently created invoices to include
        trend_days: Length of the monthly earnings window in days

    Returns:
        DashboardStats; empty input yields zero totals and empty lists
    """
    paid = [inv for inv in invoices if inv.status == InvoiceStatus.PAID]
    unpaid = [inv for inv in invoices if is_unpaid(inv)]

    earnings_by_currency, paid_count_by_currency = sum_by_currency(paid)
    unpaid_by_currency, unpaid_count_by_currency = sum_by_currency(unpaid)

    outstanding = [inv for inv in invoices if inv.status != InvoiceStatus.PAID]
    overdue = [inv for inv in outstanding if is_overdue(inv, now)]
    upcoming = [inv for inv in outstanding if not is_overdue(inv, now)]
    if upcoming_window is not None:
        horizon = (to_naive_utc(now) + upcoming_window).date()
        upcoming = [inv for inv in upcoming if inv.due_date <= horizon]

    recent = sorted(
        invoices, key=lambda inv: to_naive_utc(inv.created_at), reverse=True
    )[:recent_limit]

    logger.debug(
        "Dashboard over %d invoice(s): %d paid, %d unpaid, %d overdue",
        len(invoices),
        len(paid),
        len(unpaid),
        len(overdue),
    )

    return DashboardStats(
        total_earnings=sum((inv.total for inv in paid), Decimal("0")),
        unpaid_amount=sum((inv.total for inv in unpaid), Decimal("0")),
        earnings_by_currency=earnings_by_currency,
        unpaid_by_currency=unpaid_by_currency,
        paid_count_by_currency=paid_count_by_currency,
        unpaid_count_by_currency=unpaid_count_by_currency,
        total_clients=clients_count,
        recent_invoices=tuple(annotate_invoice(inv, clients) for inv in recent),
        overdue_invoices=tuple(annotate_invoice(inv, clients) for inv in overdue),
        upcoming_invoices=tuple(annotate_invoice(inv, clients) for inv in upcoming),
        monthly_earnings=group_earnings_by_month(paid, now, trend_days),
        stats=InvoiceCounts(
            total_invoices=len(invoices),
            paid_invoices=len(paid),
            unpaid_invoices=len(unpaid),
            overdue_count=len(overdue),
        ),
    )


class DashboardService:
    """Service for building a user's dashboard from stored invoices."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_dashboard(
        self,
        user_id: str,
        now: Optional[datetime] = None,
        upcoming_window: Optional[timedelta] = None,
    ) -> DashboardStats:
        """Load a user's invoices and clients and aggregate them.

        Args:
            user_id: Owning user ID
            now: Evaluation time, defaults to the current UTC time
            upcoming_window: Optional forward bound for upcoming invoices

        Returns:
            DashboardStats for the user
        """
        if now is None:
            now = datetime.now(timezone.utc)

        invoices = self.db.list_invoices(user_id)
        clients = {client.id: client for client in self.db.list_clients(user_id)}

        return compute_dashboard(
            invoices,
            clients_count=len(clients),
            now=now,
            clients=clients,
            upcoming_window=upcoming_window,
        )
