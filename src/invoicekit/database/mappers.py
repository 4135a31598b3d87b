"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic from the schema, so stored
strings become enums and line item rows become ordered LineItem tuples.
"""

from decimal import Decimal

from invoicekit.domain import entities as domain
from invoicekit.domain.currency import normalize_currency
from invoicekit.database.models import (
    Client as ORMClient,
    Invoice as ORMInvoice,
    InvoiceItem as ORMInvoiceItem,
)


def decimal_to_db(value: Decimal | int | str) -> str:
    """Render a Decimal as a plain, exact string for storage."""
    return format(Decimal(value), "f")


def decimal_from_db(value: Decimal | str) -> Decimal:
    """Read a stored decimal string back as a Decimal."""
    return Decimal(str(value))


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        user_id=orm_client.user_id,
        name=orm_client.name,
        email=orm_client.email,
        company=orm_client.company,
        phone=orm_client.phone,
        address=orm_client.address,
        created_at=orm_client.created_at,
        updated_at=orm_client.updated_at,
    )


def line_item_to_domain(orm_item: ORMInvoiceItem) -> domain.LineItem:
    """Convert SQLAlchemy InvoiceItem model to domain LineItem entity."""
    return domain.LineItem(
        description=orm_item.description,
        quantity=orm_item.quantity,
        rate=decimal_from_db(orm_item.rate),
        amount=decimal_from_db(orm_item.amount),
    )


def line_item_to_orm(item: domain.LineItem, position: int) -> ORMInvoiceItem:
    """Convert a priced domain LineItem to a SQLAlchemy InvoiceItem."""
    return ORMInvoiceItem(
        position=position,
        description=item.description,
        quantity=item.quantity,
        rate=decimal_to_db(item.rate),
        amount=decimal_to_db(item.amount),
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        invoice_number=orm_invoice.invoice_number,
        user_id=orm_invoice.user_id,
        client_id=orm_invoice.client_id,
        items=tuple(line_item_to_domain(item) for item in orm_invoice.items),
        subtotal=decimal_from_db(orm_invoice.subtotal),
        tax_percent=decimal_from_db(orm_invoice.tax_percent),
        tax_amount=decimal_from_db(orm_invoice.tax_amount),
        discount=domain.Discount(
            amount=decimal_from_db(orm_invoice.discount_value),
            type=domain.DiscountType(orm_invoice.discount_type),
        ),
        discount_amount=decimal_from_db(orm_invoice.discount_amount),
        total=decimal_from_db(orm_invoice.total),
        currency=normalize_currency(orm_invoice.currency),
        status=domain.InvoiceStatus(orm_invoice.status),
        issue_date=orm_invoice.issue_date,
        due_date=orm_invoice.due_date,
        created_at=orm_invoice.created_at,
        notes=orm_invoice.notes,
        logo=orm_invoice.logo,
        updated_at=orm_invoice.updated_at,
    )
