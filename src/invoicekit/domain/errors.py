"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist or is not owned by the caller."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InvalidInvoiceError(ValidationError):
    """Line items, tax or discount cannot produce a valid invoice total."""


class InvalidStatusError(ValidationError):
    """Status value outside the closed set of invoice statuses."""


def client_not_found(client_id: int) -> str:
    """Return message for missing client."""
    return f"Client {client_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def duplicate_invoice_number(invoice_number: str) -> str:
    """Return message for duplicate invoice number."""
    return f"Invoice number '{invoice_number}' already exists"


def invalid_status(value: object, allowed: list[str]) -> str:
    """Return message for a status outside the allowed set."""
    return f"Invalid status '{value}'. Allowed values: {', '.join(allowed)}"


def no_valid_line_items(item_count: int) -> str:
    """Return message when no line item passes validation."""
    if item_count == 0:
        return "At least one line item is required"
    return (
        f"None of the {item_count} line item{'s' if item_count != 1 else ''} is valid. "
        "Each item needs a description, a quantity above zero and a rate above zero."
    )
