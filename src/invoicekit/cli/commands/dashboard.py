"""Dashboard command."""

import calendar
from datetime import timedelta

import click
from invoicekit.domain.currency import format_amounts_by_currency, format_currency
from invoicekit.domain.dashboard import DashboardService


def _display_invoice_list(title: str, summaries) -> None:
    click.echo(f"\n{title} ({len(summaries)}):")
    if not summaries:
        click.echo("  None")
        return
    for summary in summaries:
        inv = summary.invoice
        client = summary.client_name or "Unknown client"
        if summary.client_company:
            client = f"{client} ({summary.client_company})"
        click.echo(
            f"  {inv.invoice_number:<18} {client[:34]:<34} due {inv.due_date}  "
            f"{format_currency(inv.total, inv.currency):>16}"
        )


@click.command("dashboard")
@click.option(
    "--upcoming-days",
    type=click.IntRange(min=0),
    help="Only list upcoming invoices due within this many days",
)
@click.pass_context
def show_dashboard(ctx, upcoming_days: int | None):
    """Show earnings, unpaid balances and invoices that need attention."""
    service = DashboardService(ctx.obj["db"])
    window = timedelta(days=upcoming_days) if upcoming_days is not None else None
    stats = service.get_dashboard(ctx.obj["user_id"], upcoming_window=window)

    counts = stats.stats
    click.echo("Dashboard")
    click.echo("=" * 80)
    click.echo(f"Earnings:  {format_amounts_by_currency(stats.earnings_by_currency)}")
    click.echo(f"Unpaid:    {format_amounts_by_currency(stats.unpaid_by_currency)}")
    click.echo(
        f"Invoices:  {counts.total_invoices} total, {counts.paid_invoices} paid, "
        f"{counts.unpaid_invoices} unpaid, {counts.overdue_count} overdue"
    )
    click.echo(f"Clients:   {stats.total_clients}")

    _display_invoice_list("Overdue", stats.overdue_invoices)
    _display_invoice_list("Upcoming", stats.upcoming_invoices)
    _display_invoice_list("Recent", stats.recent_invoices)

    if stats.monthly_earnings:
        # Summed across currencies
        click.echo("\nMonthly earnings (last 30 days, all currencies):")
        for month in stats.monthly_earnings:
            click.echo(
                f"  {calendar.month_abbr[month.month]} {month.year}: {month.total.normalize():,f}"
            )


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(show_dashboard)
