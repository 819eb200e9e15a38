"""Tenant ownership checks.

Every client or invoice id that arrives from outside must pass through
``OwnershipGuard`` together with the caller's business id before it is read,
changed or rendered. Records that exist but belong to another business are
reported exactly like records that do not exist.
"""

import logging
from enum import Enum
from typing import Union

from invoicekit.database.base import Database
from invoicekit.domain import errors
from invoicekit.domain.entities import Client, Invoice
from invoicekit.domain.errors import NotFoundError

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    """Kinds of tenant-owned records."""

    CLIENT = "client"
    INVOICE = "invoice"


OwnedEntity = Union[Client, Invoice]


class OwnershipGuard:
    """Verifies that records belong to the calling business."""

    def __init__(self, db: Database):
        """Initialize ownership guard.

        Args:
            db: Database instance
        """
        self.db = db

    def assert_owned(
        self, entity_kind: EntityKind, entity_id: int, caller_business_id: int
    ) -> OwnedEntity:
        """Load an entity and verify the caller owns it.

        Args:
            entity_kind: Kind of record to load
            entity_id: Untrusted record ID
            caller_business_id: Authenticated business ID of the caller

        Returns:
            The loaded entity

        Raises:
            NotFoundError: If the entity is absent or owned by another business
        """
        kind = EntityKind(entity_kind)
        if kind is EntityKind.CLIENT:
            entity = self.db.get_client(entity_id)
            message = errors.client_not_found(entity_id)
        else:
            entity = self.db.get_invoice(entity_id)
            message = errors.invoice_not_found(entity_id)

        if entity is None or entity.business_id != caller_business_id:
            logger.debug("Ownership check refused %s %s", kind.value, entity_id)
            raise NotFoundError(message)
        return entity

    def assert_client_owned(self, client_id: int, caller_business_id: int) -> Client:
        """Load a client owned by the caller."""
        return self.assert_owned(EntityKind.CLIENT, client_id, caller_business_id)

    def assert_invoice_owned(self, invoice_id: int, caller_business_id: int) -> Invoice:
        """Load an invoice owned by the caller."""
        return self.assert_owned(EntityKind.INVOICE, invoice_id, caller_business_id)
