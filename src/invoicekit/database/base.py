"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from invoicekit.domain.entities import (
    Business,
    Client,
    Invoice,
    InvoiceStatus,
    LineItem,
)


class Database(ABC):
    """Abstract database interface for invoicekit.

    Implementations return domain entities and never enforce tenant scoping
    themselves; callers go through the ownership guard before trusting an id.
    """

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

    # Business operations
    @abstractmethod
    def create_business(
        self, name: str, tax_number: str, address: str, logo_url: Optional[str] = None
    ) -> int:
        """Create a business. Returns business ID."""
        pass

    @abstractmethod
    def get_business(self, business_id: int) -> Optional[Business]:
        """Get business by ID."""
        pass

    @abstractmethod
    def get_business_by_tax_number(self, tax_number: str) -> Optional[Business]:
        """Get business by tax registration number."""
        pass

    @abstractmethod
    def update_business(
        self,
        business_id: int,
        name: Optional[str] = None,
        address: Optional[str] = None,
        logo_url: Optional[str] = None,
    ) -> None:
        """Update business profile fields that are not None."""
        pass

    # Client operations
    @abstractmethod
    def create_client(
        self,
        business_id: int,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        """Get client by ID."""
        pass

    @abstractmethod
    def list_clients(self, business_id: int) -> list[Client]:
        """List clients owned by a business."""
        pass

    @abstractmethod
    def update_client(
        self,
        client_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        """Update client fields that are not None. The owner never changes.

        An empty email, phone or address clears the stored value.
        """
        pass

    @abstractmethod
    def delete_client(self, client_id: int) -> None:
        """Delete a client."""
        pass

    @abstractmethod
    def count_client_invoices(self, client_id: int) -> int:
        """Count invoices that reference a client."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(
        self,
        business_id: int,
        client_id: int,
        invoice_number: str,
        items: Sequence[LineItem],
        tax_rate: Decimal,
        discount_rate: Decimal,
        subtotal: Decimal,
        tax_amount: Decimal,
        total: Decimal,
    ) -> Invoice:
        """Create an invoice with status Unpaid. Returns the stored invoice."""
        pass

    @abstractmethod
    def get_invoice(self, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID, with line items in insertion order."""
        pass

    @abstractmethod
    def invoice_number_exists(self, invoice_number: str) -> bool:
        """Check if an invoice number has ever been issued."""
        pass

    @abstractmethod
    def update_invoice_status(
        self,
        invoice_id: int,
        status: InvoiceStatus,
        expected_status: Optional[InvoiceStatus] = None,
    ) -> Optional[Invoice]:
        """Set invoice status.

        Args:
            invoice_id: Invoice ID
            status: New status
            expected_status: If given, only update when the stored status
                still equals it

        Returns:
            The updated invoice, or None if ``expected_status`` did not match
        """
        pass

    @abstractmethod
    def list_invoices(
        self,
        business_id: int,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> list[Invoice]:
        """List invoices of a business with optional filters.

        Args:
            business_id: Owning business ID
            status: Optional status filter
            client_id: Optional client filter
            created_from: Optional inclusive lower bound on creation time
            created_to: Optional exclusive upper bound on creation time
        """
        pass
