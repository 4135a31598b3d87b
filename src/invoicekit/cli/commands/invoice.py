"""Invoice management commands."""

from datetime import datetime, timezone

import click
from invoicekit.cli.client_resolution import resolve_client_or_exit
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.domain.client import ClientService
from invoicekit.domain.currency import format_currency
from invoicekit.domain.entities import Discount, DiscountType, InvoiceStatus
from invoicekit.domain.invoice import InvoiceService
from invoicekit.domain.lifecycle import effective_status
from invoicekit.utils.amount_parser import parse_percent
from invoicekit.utils.date_parser import parse_date
from invoicekit.utils.line_item_parser import parse_line_item

STATUS_CHOICES = [status.value for status in InvoiceStatus]
DISCOUNT_TYPE_CHOICES = [discount_type.value for discount_type in DiscountType]


def _parse_items_or_exit(ctx, items: tuple[str, ...]):
    try:
        return [parse_line_item(item) for item in items]
    except ValueError as e:
        handle_domain_error(ctx, e)


def _parse_or_exit(ctx, parser, value: str, label: str):
    try:
        return parser(value)
    except ValueError as e:
        handle_domain_error(ctx, e, f"Invalid {label}")


@click.group()
def invoice_group():
    """Manage invoices."""
    pass


@invoice_group.command("create")
@click.option("--client", required=True, help="Client name, company or ID")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Line item as DESCRIPTION:QUANTITY:RATE (repeatable)",
)
@click.option(
    "--due",
    required=True,
    help="Due date (YYYY-MM-DD or relative like 'in 30 days', 'end of month')",
)
@click.option("--tax", default="0", help="Tax as a percentage of the subtotal (e.g., 10 or 7.5%)")
@click.option("--discount", default="0", help="Discount amount or percentage")
@click.option(
    "--discount-type",
    type=click.Choice(DISCOUNT_TYPE_CHOICES),
    default=DiscountType.FIXED.value,
    help="Whether --discount is a fixed amount or a percentage",
)
@click.option("--currency", default="USD", help="Currency code (USD, JPY, AED, INR)")
@click.option("--issue-date", help="Issue date (defaults to today)")
@click.option("--notes", help="Notes printed on the invoice")
@click.option("--logo", help="Logo image path or data URL")
@click.pass_context
def create_invoice(
    ctx,
    client: str,
    items: tuple[str, ...],
    due: str,
    tax: str,
    discount: str,
    discount_type: str,
    currency: str,
    issue_date: str | None,
    notes: str | None,
    logo: str | None,
):
    """Create a draft invoice.

    Examples:
        invoicekit invoice create --client "Acme Ltd" --item "Design:2:50" --due "in 30 days"
        invoicekit invoice create --client 1 --item "Hosting:12:9.99" --tax 10 --currency INR --due 2024-02-01
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = InvoiceService(db)

    client_id = resolve_client_or_exit(ctx, ClientService(db), client)
    line_items = _parse_items_or_exit(ctx, items)
    due_date = _parse_or_exit(ctx, parse_date, due, "due date")
    issue = _parse_or_exit(ctx, parse_date, issue_date, "issue date") if issue_date else None
    tax_percent = _parse_or_exit(ctx, parse_percent, tax, "tax")
    discount_amount = _parse_or_exit(ctx, parse_percent, discount, "discount")

    try:
        invoice_id = service.create_invoice(
            user_id=user_id,
            client_id=client_id,
            items=line_items,
            due_date=due_date,
            tax_percent=tax_percent,
            discount=Discount(amount=discount_amount, type=DiscountType(discount_type)),
            currency=currency,
            issue_date=issue,
            notes=notes,
            logo=logo,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    invoice = service.require_invoice(invoice_id, user_id)
    click.echo(f"Created invoice {invoice.invoice_number} (ID: {invoice_id})")
    click.echo(f"  Total: {format_currency(invoice.total, invoice.currency)}")
    click.echo(f"  Due: {invoice.due_date}")


@invoice_group.command("list")
@click.option(
    "--status",
    type=click.Choice(["all"] + STATUS_CHOICES),
    default="all",
    help="Filter by stored status",
)
@click.option("--search", help="Match invoice number, client name or company")
@click.option(
    "--sort-by",
    type=click.Choice(["created_at", "issue_date", "due_date", "total", "invoice_number", "status"]),
    default="created_at",
    help="Sort field",
)
@click.option("--order", type=click.Choice(["asc", "desc"]), default="desc", help="Sort order")
@click.pass_context
def list_invoices(ctx, status: str, search: str | None, sort_by: str, order: str):
    """List invoices."""
    service = InvoiceService(ctx.obj["db"])
    now = datetime.now(timezone.utc)

    try:
        summaries = service.list_invoices(
            ctx.obj["user_id"], status=status, search=search, sort_by=sort_by, order=order
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not summaries:
        click.echo("No invoices found.")
        return

    click.echo(f"\nFound {len(summaries)} invoice(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Number':<18} {'Client':<24} {'Due':<12} {'Status':<9} {'Total':>18}"
    )
    click.echo("-" * 100)
    for summary in summaries:
        inv = summary.invoice
        client_name = (summary.client_name or "Unknown client")[:24]
        total_str = format_currency(inv.total, inv.currency)
        click.echo(
            f"{inv.id:<6} {inv.invoice_number:<18} {client_name:<24} {str(inv.due_date):<12} "
            f"{effective_status(inv, now).value:<9} {total_str:>18}"
        )


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show an invoice with its line items and totals."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = InvoiceService(db)

    try:
        invoice, totals = service.get_invoice_with_totals(invoice_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    client = ClientService(db).get_client(invoice.client_id, user_id)
    status = effective_status(invoice, datetime.now(timezone.utc))

    click.echo(f"Invoice {invoice.invoice_number} (ID: {invoice.id})")
    click.echo(f"  Client: {client.name if client else 'Unknown client'}")
    click.echo(f"  Status: {status.value}")
    click.echo(f"  Issued: {invoice.issue_date}  Due: {invoice.due_date}")
    click.echo("-" * 80)
    for item in totals.items:
        click.echo(
            f"  {item.description[:40]:<40} {item.quantity:>5} x "
            f"{format_currency(item.rate, totals.currency):>12} "
            f"{format_currency(item.amount, totals.currency):>14}"
        )
    click.echo("-" * 80)
    click.echo(f"  {'Subtotal:':<62}{format_currency(totals.subtotal, totals.currency):>16}")
    click.echo(
        f"  {f'Tax ({invoice.tax_percent.normalize():f}%):':<62}"
        f"{format_currency(totals.tax_amount, totals.currency):>16}"
    )
    if totals.discount_amount:
        click.echo(
            f"  {'Discount:':<62}{format_currency(-totals.discount_amount, totals.currency):>16}"
        )
    click.echo(f"  {'Total:':<62}{format_currency(totals.total, totals.currency):>16}")
    if invoice.notes:
        click.echo(f"\n  Notes: {invoice.notes}")


@invoice_group.command("update")
@click.argument("invoice_id", type=int)
@click.option("--client", help="New client name, company or ID")
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Replacement line items as DESCRIPTION:QUANTITY:RATE (repeatable)",
)
@click.option("--due", help="New due date")
@click.option("--tax", help="New tax percentage")
@click.option("--discount", help="New discount amount or percentage")
@click.option("--discount-type", type=click.Choice(DISCOUNT_TYPE_CHOICES), help="New discount type")
@click.option("--status", type=click.Choice(STATUS_CHOICES), help="New stored status")
@click.option("--notes", help="New notes")
@click.pass_context
def update_invoice(
    ctx,
    invoice_id: int,
    client: str | None,
    items: tuple[str, ...],
    due: str | None,
    tax: str | None,
    discount: str | None,
    discount_type: str | None,
    status: str | None,
    notes: str | None,
) -> None:
    """Update an invoice. Totals are always recomputed.

    Options that are not given keep their current value.

    Examples:
        invoicekit invoice update 4 --item "Design:3:50" --tax 5
        invoicekit invoice update 4 --due 2024-03-01 --status sent
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = InvoiceService(db)

    try:
        current = service.require_invoice(invoice_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    client_id = (
        resolve_client_or_exit(ctx, ClientService(db), client)
        if client is not None
        else current.client_id
    )
    line_items = _parse_items_or_exit(ctx, items) if items else list(current.items)
    due_date = _parse_or_exit(ctx, parse_date, due, "due date") if due else current.due_date
    tax_percent = (
        _parse_or_exit(ctx, parse_percent, tax, "tax") if tax is not None else current.tax_percent
    )
    new_discount = Discount(
        amount=(
            _parse_or_exit(ctx, parse_percent, discount, "discount")
            if discount is not None
            else current.discount.amount
        ),
        type=DiscountType(discount_type) if discount_type else current.discount.type,
    )

    try:
        service.update_invoice(
            invoice_id=invoice_id,
            user_id=user_id,
            client_id=client_id,
            items=line_items,
            due_date=due_date,
            tax_percent=tax_percent,
            discount=new_discount,
            notes=notes if notes is not None else current.notes,
            status=status,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    updated = service.require_invoice(invoice_id, user_id)
    click.echo(f"Updated invoice {updated.invoice_number}")
    click.echo(f"  Total: {format_currency(updated.total, updated.currency)}")


@invoice_group.command("status")
@click.argument("invoice_id", type=int)
@click.argument("status")
@click.pass_context
def set_status(ctx, invoice_id: int, status: str) -> None:
    """Set an invoice's status (draft, sent, paid or overdue)."""
    service = InvoiceService(ctx.obj["db"])

    try:
        invoice = service.set_status(invoice_id, ctx.obj["user_id"], status)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Invoice {invoice.invoice_number} is now {invoice.status.value}")


@invoice_group.command("delete")
@click.argument("invoice_id", type=int)
@click.pass_context
def delete_invoice(ctx, invoice_id: int) -> None:
    """Delete an invoice."""
    service = InvoiceService(ctx.obj["db"])
    user_id = ctx.obj["user_id"]

    try:
        invoice = service.require_invoice(invoice_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    # Confirm deletion
    if not click.confirm(
        f"Are you sure you want to delete invoice {invoice.invoice_number} (ID: {invoice_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_invoice(invoice_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted invoice {invoice.invoice_number}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
