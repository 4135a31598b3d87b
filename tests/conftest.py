"""Shared pytest fixtures for invoicekit tests."""

import tempfile
import os
from datetime import date, datetime
from decimal import Decimal

import pytest

from invoicekit.database.factories import create_sqlite_database
from invoicekit.domain.client import ClientService
from invoicekit.domain.dashboard import DashboardService
from invoicekit.domain.entities import (
    CurrencyCode,
    Discount,
    Invoice,
    InvoiceStatus,
    LineItem,
)
from invoicekit.domain.invoice import InvoiceService

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_id():
    """Return the ID of the user owning test data."""
    return USER_ID


@pytest.fixture
def client_service(temp_db):
    """Create a ClientService with a temporary database."""
    return ClientService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def dashboard_service(temp_db):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client for testing."""
    client_id = client_service.create_client(
        user_id=USER_ID,
        name="Jane Doe",
        email="jane@acme.example",
        company="Acme Ltd",
    )
    return client_service.get_client(client_id, USER_ID)


@pytest.fixture
def design_items():
    """Return a single valid line item worth 100."""
    return [LineItem(description="Design", quantity=2, rate=Decimal("50"))]


@pytest.fixture
def make_invoice():
    """Return a factory for in-memory Invoice entities."""
    counter = {"next_id": 1}

    def factory(
        total="100",
        currency=CurrencyCode.USD,
        status=InvoiceStatus.SENT,
        due_date=date(2024, 6, 15),
        created_at=datetime(2024, 6, 1, 12, 0),
        client_id=1,
    ) -> Invoice:
        invoice_id = counter["next_id"]
        counter["next_id"] += 1
        amount = Decimal(total)
        return Invoice(
            id=invoice_id,
            invoice_number=f"INV-202406-{invoice_id:06d}",
            user_id=USER_ID,
            client_id=client_id,
            items=(LineItem(description="Work", quantity=1, rate=amount, amount=amount),),
            subtotal=amount,
            tax_percent=Decimal("0"),
            tax_amount=Decimal("0"),
            discount=Discount(),
            discount_amount=Decimal("0"),
            total=amount,
            currency=currency,
            status=status,
            issue_date=created_at.date(),
            due_date=due_date,
            created_at=created_at,
        )

    return factory


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
