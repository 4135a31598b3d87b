"""Tests for dashboard service over stored invoices."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from invoicekit.domain.entities import LineItem


def _invoice(invoice_service, user_id, client_id, rate, currency="USD", due_date=date(2024, 7, 1)):
    return invoice_service.create_invoice(
        user_id=user_id,
        client_id=client_id,
        items=[LineItem(description="Work", quantity=1, rate=Decimal(rate))],
        due_date=due_date,
        currency=currency,
    )


def test_dashboard_for_user(dashboard_service, invoice_service, user_id, sample_client):
    """Test end-to-end aggregation over stored invoices."""
    usd = _invoice(invoice_service, user_id, sample_client.id, "100")
    jpy = _invoice(invoice_service, user_id, sample_client.id, "1000", currency="JPY")
    late = _invoice(invoice_service, user_id, sample_client.id, "40", due_date=date(2024, 6, 1))
    _invoice(invoice_service, user_id, sample_client.id, "5")
    invoice_service.set_status(usd, user_id, "paid")
    invoice_service.set_status(jpy, user_id, "paid")
    invoice_service.set_status(late, user_id, "sent")

    stats = dashboard_service.get_dashboard(user_id, now=datetime(2024, 6, 15, tzinfo=timezone.utc))

    assert stats.earnings_by_currency == {"USD": Decimal("100"), "JPY": Decimal("1000")}
    assert stats.total_earnings == Decimal("1100")
    assert stats.unpaid_by_currency == {"USD": Decimal("40")}
    assert stats.total_clients == 1
    assert [s.invoice.id for s in stats.overdue_invoices] == [late]
    assert stats.overdue_invoices[0].client_company == "Acme Ltd"
    assert stats.stats.total_invoices == 4
    assert stats.stats.paid_invoices == 2
    assert stats.stats.unpaid_invoices == 1
    assert stats.stats.overdue_count == 1
    assert len(stats.recent_invoices) == 4


def test_dashboard_empty_user(dashboard_service, user_id):
    """Test that a user without invoices gets empty statistics."""
    stats = dashboard_service.get_dashboard(user_id)

    assert stats.total_earnings == 0
    assert stats.stats.total_invoices == 0
    assert stats.total_clients == 0


def test_dashboard_scoped_to_user(dashboard_service, invoice_service, user_id, sample_client):
    """Test that other users' invoices are not aggregated."""
    _invoice(invoice_service, user_id, sample_client.id, "100")

    stats = dashboard_service.get_dashboard("user-2")

    assert stats.stats.total_invoices == 0


def test_dashboard_monthly_earnings_uses_creation_time(
    dashboard_service, invoice_service, user_id, sample_client
):
    """Test that freshly paid invoices show up in the monthly series."""
    invoice_id = _invoice(invoice_service, user_id, sample_client.id, "250")
    invoice_service.set_status(invoice_id, user_id, "paid")
    now = datetime.now(timezone.utc)

    stats = dashboard_service.get_dashboard(user_id, now=now, upcoming_window=timedelta(days=7))

    assert len(stats.monthly_earnings) == 1
    assert stats.monthly_earnings[0].total == Decimal("250")
    assert (stats.monthly_earnings[0].year, stats.monthly_earnings[0].month) == (now.year, now.month)
