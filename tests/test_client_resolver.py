"""Tests for resolving clients by name, company or ID."""

import pytest

from invoicekit.domain.errors import NotFoundError, ValidationError
from invoicekit.utils.client_resolver import resolve_client


def test_resolve_by_id(client_service, sample_client, user_id):
    """Test resolving by numeric ID and its string form."""
    assert resolve_client(client_service, user_id, sample_client.id) == sample_client.id
    assert resolve_client(client_service, user_id, str(sample_client.id)) == sample_client.id


def test_resolve_by_name_and_company(client_service, sample_client, user_id):
    """Test resolving by client name or company."""
    assert resolve_client(client_service, user_id, "Jane Doe") == sample_client.id
    assert resolve_client(client_service, user_id, "Acme Ltd") == sample_client.id


def test_resolve_not_found(client_service, sample_client, user_id):
    """Test unknown names and IDs."""
    with pytest.raises(NotFoundError, match="Client 'Nobody' not found"):
        resolve_client(client_service, user_id, "Nobody")

    with pytest.raises(NotFoundError, match="Client ID 999 not found"):
        resolve_client(client_service, user_id, 999)


def test_resolve_other_users_client(client_service, sample_client):
    """Test that another user's client does not resolve."""
    with pytest.raises(NotFoundError):
        resolve_client(client_service, "user-2", sample_client.id)

    with pytest.raises(NotFoundError):
        resolve_client(client_service, "user-2", "Jane Doe")


def test_resolve_ambiguous_name(client_service, sample_client, user_id):
    """Test that a name shared by two clients is rejected."""
    client_service.create_client(user_id=user_id, name="Acme Ltd")

    with pytest.raises(ValidationError, match="ambiguous"):
        resolve_client(client_service, user_id, "Acme Ltd")
