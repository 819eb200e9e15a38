"""Client domain service."""

import logging
import re
from typing import Optional

from invoicekit.database.base import Database
from invoicekit.domain import errors
from invoicekit.domain.entities import Client as ClientEntity
from invoicekit.domain.errors import DependencyError, NotFoundError, ValidationError
from invoicekit.domain.ownership import OwnershipGuard

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip()


def _validate_email(email: Optional[str]) -> None:
    if email and not EMAIL_PATTERN.match(email):
        raise ValidationError(f"Invalid email address '{email}'", field="email")


class ClientService:
    """Service for managing a business's clients."""

    def __init__(self, db: Database):
        """Initialize client service.

        Args:
            db: Database instance
        """
        self.db = db
        self.guard = OwnershipGuard(db)

    def create_client(
        self,
        caller_business_id: int,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a client owned by the caller.

        Args:
            caller_business_id: Authenticated business ID
            name: Client name
            email: Optional email address
            phone: Optional phone number
            address: Optional postal address

        Returns:
            Client ID

        Raises:
            NotFoundError: If the caller's business does not exist
            ValidationError: If name is empty or email is malformed
        """
        if self.db.get_business(caller_business_id) is None:
            raise NotFoundError(errors.business_not_found(caller_business_id))

        name = _clean(name)
        if not name:
            raise ValidationError("Client name is required", field="name")
        email = _clean(email)
        _validate_email(email)

        client_id = self.db.create_client(
            business_id=caller_business_id,
            name=name,
            email=email or None,
            phone=_clean(phone) or None,
            address=_clean(address) or None,
        )
        logger.info("Created client %s for business %s", client_id, caller_business_id)
        return client_id

    def get_client(self, client_id: int, caller_business_id: int) -> ClientEntity:
        """Get a client owned by the caller.

        Raises:
            NotFoundError: If absent or owned by another business
        """
        return self.guard.assert_client_owned(client_id, caller_business_id)

    def list_clients(self, caller_business_id: int) -> list[ClientEntity]:
        """List the caller's clients."""
        return self.db.list_clients(caller_business_id)

    def update_client(
        self,
        client_id: int,
        caller_business_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> ClientEntity:
        """Update a client owned by the caller. Ownership never changes.

        Fields left as None are unchanged; an empty email, phone or address
        clears it, matching create_client.

        Returns:
            Updated client entity

        Raises:
            NotFoundError: If absent or owned by another business
            ValidationError: If a new value is malformed
        """
        self.guard.assert_client_owned(client_id, caller_business_id)

        name = _clean(name)
        if name is not None and not name:
            raise ValidationError("Client name is required", field="name")
        email = _clean(email)
        _validate_email(email)

        self.db.update_client(
            client_id=client_id,
            name=name,
            email=email,
            phone=_clean(phone),
            address=_clean(address),
        )
        logger.info("Updated client %s", client_id)
        return self.db.get_client(client_id)

    def delete_client(self, client_id: int, caller_business_id: int) -> None:
        """Delete a client owned by the caller.

        Raises:
            NotFoundError: If absent or owned by another business
            DependencyError: If invoices still reference the client
        """
        self.guard.assert_client_owned(client_id, caller_business_id)

        invoice_count = self.db.count_client_invoices(client_id)
        if invoice_count > 0:
            raise DependencyError(errors.client_delete_blocked(client_id, invoice_count))

        self.db.delete_client(client_id)
        logger.info("Deleted client %s", client_id)
