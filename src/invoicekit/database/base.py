"""Abstract database interface.

Every client and invoice operation takes the owning user ID and only ever
sees rows belonging to that user.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from invoicekit.domain.entities import (
    Client,
    CurrencyCode,
    DiscountType,
    Invoice,
    InvoiceStatus,
    LineItem,
)


class Database(ABC):
    """Abstract database interface for invoicekit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        user_id: str,
        name: str,
        email: Optional[str] = None,
        company: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int, user_id: str) -> Optional[Client]:
        """Get a client by ID if owned by the user."""
        pass

    @abstractmethod
    def list_clients(self, user_id: str) -> list[Client]:
        """List a user's clients, newest first."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        user_id: str,
        name: str,
        email: Optional[str] = None,
        company: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        """Replace a client's contact fields."""
        pass

    @abstractmethod
    def delete_client(self, client_id: int, user_id: str) -> None:
        """Delete a client. Invoices referencing it are kept."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        user_id: str,
        invoice_number: str,
        client_id: int,
        items: tuple[LineItem, ...],
        subtotal: Decimal,
        tax_percent: Decimal,
        tax_amount: Decimal,
        discount_value: Decimal,
        discount_type: DiscountType,
        discount_amount: Decimal,
        total: Decimal,
        currency: CurrencyCode,
        status: InvoiceStatus,
        issue_date: date,
        due_date: date,
        notes: Optional[str] = None,
        logo: Optional[str] = None,
    ) -> int:
        """Create an invoice with its line items. Returns invoice ID.

        Raises:
            ConflictError: If the invoice number is already taken
        """
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int, user_id: str) -> Optional[Invoice]:
        """Get an invoice by ID if owned by the user."""
        pass

    @abstractmethod
    def invoice_number_exists(self, invoice_number: str) -> bool:
        """Check whether an invoice number is taken by any user."""
        pass

    @abstractmethod
    def list_invoices(
        self,
        user_id: str,
        status: Optional[InvoiceStatus] = None,
        sort_by: str = "created_at",
        descending: bool = True,
    ) -> list[Invoice]:
        """List a user's invoices, optionally filtered by stored status."""
        pass

    @abstractmethod
    def update_invoice(
        self,
        invoice_id: int,
        user_id: str,
        client_id: int,
        items: tuple[LineItem, ...],
        subtotal: Decimal,
        tax_percent: Decimal,
        tax_amount: Decimal,
        discount_value: Decimal,
        discount_type: DiscountType,
        discount_amount: Decimal,
        total: Decimal,
        due_date: date,
        notes: Optional[str] = None,
        logo: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        update_logo: bool = False,
    ) -> None:
        """Replace an invoice's items and derived amounts.

        Currency and invoice number are never changed. The status is only
        updated when given, the logo only when ``update_logo`` is set.
        """
        pass

    @abstractmethod
    def update_invoice_status(
        self, invoice_id: int, user_id: str, status: InvoiceStatus
    ) -> None:
        """Update an invoice's stored status."""
        pass

    @abstractmethod
    def delete_invoice(self, invoice_id: int, user_id: str) -> None:
        """Delete an invoice and its line items."""
        pass
