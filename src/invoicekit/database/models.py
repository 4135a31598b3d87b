"""SQLAlchemy models for invoicekit database."""

from datetime import datetime, date, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    user_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    company = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=lambda: datetime.now(UTC))


class Invoice(Base):
    """Invoice model.

    Money and percentage columns hold exact decimal strings so stored
    amounts match recomputed ones digit for digit.
    """

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    invoice_number = Column(String, unique=True, nullable=False)
    user_id = Column(String, nullable=False, index=True)
    # No foreign key: deleting a client leaves its invoices in place
    client_id = Column(Integer, nullable=False)
    subtotal = Column(String, nullable=False)
    tax_percent = Column(String, nullable=False, default="0")
    tax_amount = Column(String, nullable=False, default="0")
    discount_value = Column(String, nullable=False, default="0")
    discount_type = Column(String, nullable=False, default="fixed")
    discount_amount = Column(String, nullable=False, default="0")
    total = Column(String, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    status = Column(String, nullable=False, default="draft")
    issue_date = Column(Date, default=lambda: datetime.now(UTC).date(), nullable=False)
    due_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    logo = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime, nullable=True, onupdate=lambda: datetime.now(UTC))

    # Relationships
    items = relationship(
        "InvoiceItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceItem.position",
    )


class InvoiceItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    description = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    rate = Column(String, nullable=False)
    amount = Column(String, nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="items")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
