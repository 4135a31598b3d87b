"""Utility for resolving client names to IDs."""

from invoicekit.domain.client import ClientService
from invoicekit.domain.errors import NotFoundError, ValidationError


def resolve_client(client_service: ClientService, user_id: str, client: str | int) -> int:
    """Resolve client name or ID to client ID.

    Args:
        client_service: ClientService instance
        user_id: Owning user ID
        client: Client name (str) or ID (int or string representation of int)

    Returns:
        Client ID

    Raises:
        NotFoundError: If client is not found
        ValidationError: If the name matches more than one client
    """
    # Try to parse as integer (handles string IDs like "1")
    try:
        client_id = int(client)
    except (ValueError, TypeError):
        client_id = None

    if client_id is not None:
        if client_service.get_client(client_id, user_id) is None:
            raise NotFoundError(f"Client ID {client_id} not found")
        return client_id

    # Try to find by name or company
    matches = [
        c
        for c in client_service.list_clients(user_id)
        if c.name == client or (c.company is not None and c.company == client)
    ]
    if len(matches) > 1:
        ids = ", ".join(str(c.id) for c in matches)
        raise ValidationError(f"Client '{client}' is ambiguous (IDs: {ids}); use the ID")
    if matches:
        return matches[0].id

    raise NotFoundError(f"Client '{client}' not found")
