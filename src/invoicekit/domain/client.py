"""Client domain service."""

import logging
import re
from typing import Optional

from invoicekit.database.base import Database
from invoicekit.domain.entities import Client as ClientEntity
from invoicekit.domain.errors import NotFoundError, ValidationError, client_not_found

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ClientService:
    """Service for managing clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db

    def _validate(self, name: str, email: Optional[str]) -> tuple[str, Optional[str]]:
        name = _clean(name)
        if name is None:
            raise ValidationError("Client name is required")
        email = _clean(email)
        if email is not None and not EMAIL_PATTERN.match(email):
            raise ValidationError(f"Invalid email address '{email}'")
        return name, email

    def create_client(
        self,
        user_id: str,
        name: str,
        email: Optional[str] = None,
        company: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a new client.

        Args:
            user_id: Owning user ID
            name: Client display name
            email: Optional contact email
            company: Optional company name
            phone: Optional phone number
            address: Optional postal address

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is blank or the email is malformed
        """
        name, email = self._validate(name, email)
        client_id = self.db.create_client(
            user_id=user_id,
            name=name,
            email=email,
            company=_clean(company),
            phone=_clean(phone),
            address=_clean(address),
        )
        logger.info("Created client %s for user %s", client_id, user_id)
        return client_id

    def get_client(self, client_id: int, user_id: str) -> Optional[ClientEntity]:
        """Get client by ID.

        Returns:
            Client entity or None if not found or not owned by the user
        """
        return self.db.get_client(client_id, user_id)

    def require_client(self, client_id: int, user_id: str) -> ClientEntity:
        """Get client by ID or raise NotFoundError."""
        client = self.db.get_client(client_id, user_id)
        if client is None:
            raise NotFoundError(client_not_found(client_id))
        return client

    def list_clients(self, user_id: str) -> list[ClientEntity]:
        """List a user's clients, newest first."""
        return self.db.list_clients(user_id)

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
        """Replace a client's contact fields.

        Raises:
            NotFoundError: If the client does not exist for this user
            ValidationError: If the name is blank or the email is malformed
        """
        self.require_client(client_id, user_id)
        name, email = self._validate(name, email)
        self.db.update_client(
            client_id=client_id,
            user_id=user_id,
            name=name,
            email=email,
            company=_clean(company),
            phone=_clean(phone),
            address=_clean(address),
        )
        logger.info("Updated client %s for user %s", client_id, user_id)

    def delete_client(self, client_id: int, user_id: str) -> None:
        """Delete a client.

        Invoices that reference the client are left untouched.

        Raises:
            NotFoundError: If the client does not exist for this user
        """
        self.require_client(client_id, user_id)
        self.db.delete_client(client_id, user_id)
        logger.info("Deleted client %s for user %s", client_id, user_id)
