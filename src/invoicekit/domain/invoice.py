"""Invoice domain service."""

import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Callable, Iterable, Optional

from invoicekit.database.base import Database
from invoicekit.domain.calculator import (
    compute_invoice_totals,
    compute_totals,
    normalize_discount,
    normalize_tax_percent,
)
from invoicekit.domain.currency import normalize_currency
from invoicekit.domain.dashboard import annotate_invoice
from invoicekit.domain.entities import (
    CurrencyCode,
    Discount,
    Invoice as InvoiceEntity,
    InvoiceStatus,
    InvoiceSummary,
    InvoiceTotals,
    LineItem,
)
from invoicekit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    client_not_found,
    invoice_not_found,
)
from invoicekit.domain.lifecycle import generate_invoice_number, parse_status

logger = logging.getLogger(__name__)

MAX_NUMBER_ATTEMPTS = 5


class InvoiceService:
    """Service for managing invoices."""

    def __init__(
        self,
        db: Database,
        number_generator: Optional[Callable[[datetime], str]] = None,
    ):
        """Initialize invoice service.

        Args:
            db: Database instance
            number_generator: Optional callable producing an invoice number
                for a timestamp; defaults to generate_invoice_number
        """
        self.db = db
        self.number_generator = number_generator or generate_invoice_number

    def _require_client(self, client_id: int, user_id: str) -> None:
        if self.db.get_client(client_id, user_id) is None:
            raise NotFoundError(client_not_found(client_id))

    def _insert_with_unique_number(self, now: datetime, **fields) -> int:
        """Insert an invoice, drawing a new number on each collision."""
        for attempt in range(1, MAX_NUMBER_ATTEMPTS + 1):
            invoice_number = self.number_generator(now)
            if self.db.invoice_number_exists(invoice_number):
                logger.warning(
                    "Invoice number %s already taken (attempt %d)", invoice_number, attempt
                )
                continue
            try:
                return self.db.create_invoice(invoice_number=invoice_number, **fields)
            except ConflictError:
                logger.warning(
                    "Invoice number %s taken concurrently (attempt %d)",
                    invoice_number,
                    attempt,
                )
        raise ConflictError(
            f"Could not generate a unique invoice number after {MAX_NUMBER_ATTEMPTS} attempts"
        )

    def create_invoice(
        self,
        user_id: str,
        client_id: int,
        items: Iterable[LineItem],
        due_date: date,
        tax_percent: Decimal | int | str = Decimal("0"),
        discount: Optional[Discount] = None,
        currency: Optional[str | CurrencyCode] = CurrencyCode.USD,
        issue_date: Optional[date] = None,
        notes: Optional[str] = None,
        logo: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Create a draft invoice.

        Args:
            user_id: Owning user ID
            client_id: Client the invoice is addressed to
            items: Candidate line items; invalid rows are dropped
            due_date: Payment due date
            tax_percent: Tax as a percentage of the subtotal
            discount: Optional discount specification
            currency: Currency code; unsupported codes become USD
            issue_date: Issue date, defaults to today
            notes: Optional free-text notes
            logo: Optional logo image reference
            now: Creation time used for the invoice number

        Returns:
            Invoice ID

        Raises:
            NotFoundError: If the client does not exist for this user
            InvalidInvoiceError: If the items, tax or discount are invalid
            ValidationError: If the due date is missing
            ConflictError: If no unique invoice number could be generated
        """
        if due_date is None:
            raise ValidationError("Due date is required")
        self._require_client(client_id, user_id)

        totals = compute_totals(items, tax_percent, discount, currency)
        applied_discount = normalize_discount(discount)
        if now is None:
            now = datetime.now(timezone.utc)

        invoice_id = self._insert_with_unique_number(
            now,
            user_id=user_id,
            client_id=client_id,
            items=totals.items,
            subtotal=totals.subtotal,
            tax_percent=normalize_tax_percent(tax_percent),
            tax_amount=totals.tax_amount,
            discount_value=applied_discount.amount,
            discount_type=applied_discount.type,
            discount_amount=totals.discount_amount,
            total=totals.total,
            currency=totals.currency,
            status=InvoiceStatus.DRAFT,
            issue_date=issue_date or now.date(),
            due_date=due_date,
            notes=notes,
            logo=logo,
        )
        logger.info(
            "Created invoice %s for user %s (total %s %s)",
            invoice_id,
            user_id,
            totals.total,
            totals.currency.value,
        )
        return invoice_id

    def get_invoice(self, invoice_id: int, user_id: str) -> Optional[InvoiceEntity]:
        """Get invoice by ID.

        Returns:
            Invoice entity or None if not found or not owned by the user
        """
        return self.db.get_invoice(invoice_id, user_id)

    def require_invoice(self, invoice_id: int, user_id: str) -> InvoiceEntity:
        """Get invoice by ID or raise NotFoundError."""
        invoice = self.db.get_invoice(invoice_id, user_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def get_invoice_with_totals(
        self, invoice_id: int, user_id: str
    ) -> tuple[InvoiceEntity, InvoiceTotals]:
        """Get an invoice together with freshly recomputed totals."""
        invoice = self.require_invoice(invoice_id, user_id)
        return invoice, compute_invoice_totals(invoice)

    def list_invoices(
        self,
        user_id: str,
        status: Optional[str | InvoiceStatus] = None,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        order: str = "desc",
    ) -> list[InvoiceSummary]:
        """List invoices with client display fields.

        Args:
            user_id: Owning user ID
            status: Stored status filter; None or "all" lists everything
            search: Case-insensitive text matched against the invoice number,
                client name and client company
            sort_by: Field to sort by
            order: "asc" or "desc"

        Returns:
            List of invoice summaries

        Raises:
            InvalidStatusError: If the status filter is not a known status
            ValidationError: If the sort field or order is not supported
        """
        if order not in ("asc", "desc"):
            raise ValidationError(f"Invalid sort order '{order}'. Allowed values: asc, desc")

        status_filter = None
        if status is not None and status != "all":
            status_filter = parse_status(status)

        invoices = self.db.list_invoices(
            user_id,
            status=status_filter,
            sort_by=sort_by,
            descending=order == "desc",
        )
        clients = {client.id: client for client in self.db.list_clients(user_id)}
        summaries = [annotate_invoice(invoice, clients) for invoice in invoices]

        if search:
            term = search.strip().lower()
            summaries = [summary for summary in summaries if _matches(summary, term)]

        return summaries

    def update_invoice(
        self,
        invoice_id: int,
        user_id: str,
        client_id: int,
        items: Iterable[LineItem],
        due_date: date,
        tax_percent: Decimal | int | str = Decimal("0"),
        discount: Optional[Discount] = None,
        notes: Optional[str] = None,
        logo: Optional[str] = None,
        status: Optional[str | InvoiceStatus] = None,
        currency: Optional[str | CurrencyCode] = None,
        update_logo: bool = False,
    ) -> None:
        """Replace an invoice's items and rules, re-deriving every amount.

        The currency is fixed at creation; passing a different one fails.

        Raises:
            NotFoundError: If the invoice or client does not exist for this user
            InvalidInvoiceError: If the items, tax or discount are invalid
            InvalidStatusError: If the status is not a known status
            ValidationError: If the due date is missing or the currency differs
        """
        if due_date is None:
            raise ValidationError("Due date is required")
        new_status = parse_status(status) if status is not None else None

        invoice = self.require_invoice(invoice_id, user_id)
        if currency is not None and normalize_currency(currency) != invoice.currency:
            requested = currency.value if isinstance(currency, CurrencyCode) else currency
            raise ValidationError(
                f"Currency of invoice {invoice.invoice_number} cannot be changed "
                f"from {invoice.currency.value} to '{requested}'"
            )
        self._require_client(client_id, user_id)

        totals = compute_totals(items, tax_percent, discount, invoice.currency)
        applied_discount = normalize_discount(discount)
        self.db.update_invoice(
            invoice_id=invoice_id,
            user_id=user_id,
            client_id=client_id,
            items=totals.items,
            subtotal=totals.subtotal,
            tax_percent=normalize_tax_percent(tax_percent),
            tax_amount=totals.tax_amount,
            discount_value=applied_discount.amount,
            discount_type=applied_discount.type,
            discount_amount=totals.discount_amount,
            total=totals.total,
            due_date=due_date,
            notes=notes,
            logo=logo,
            status=new_status,
            update_logo=update_logo,
        )
        logger.info("Updated invoice %s for user %s", invoice_id, user_id)

    def set_status(
        self, invoice_id: int, user_id: str, status: str | InvoiceStatus
    ) -> InvoiceEntity:
        """Set an invoice's stored status.

        Any of the four statuses may be set regardless of the current one.

        Returns:
            The updated invoice

        Raises:
            InvalidStatusError: If the status is not a known status
            NotFoundError: If the invoice does not exist for this user
        """
        new_status = parse_status(status)
        invoice = self.require_invoice(invoice_id, user_id)
        self.db.update_invoice_status(invoice_id, user_id, new_status)
        logger.info(
            "Invoice %s status %s -> %s",
            invoice.invoice_number,
            invoice.status.value,
            new_status.value,
        )
        return self.require_invoice(invoice_id, user_id)

    def delete_invoice(self, invoice_id: int, user_id: str) -> None:
        """Delete an invoice.

        Raises:
            NotFoundError: If the invoice does not exist for this user
        """
        invoice = self.require_invoice(invoice_id, user_id)
        self.db.delete_invoice(invoice_id, user_id)
        logger.info("Deleted invoice %s for user %s", invoice.invoice_number, user_id)


def _matches(summary: InvoiceSummary, term: str) -> bool:
    fields = (
        summary.invoice.invoice_number,
        summary.client_name,
        summary.client_company,
    )
    return any(field and term in field.lower() for field in fields)
