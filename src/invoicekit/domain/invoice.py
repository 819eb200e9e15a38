"""Invoice domain service: creation, lifecycle and rendering."""

import logging
import secrets
from datetime import datetime, UTC
from typing import Any, Callable, Optional, Union

from invoicekit.database.base import Database
from invoicekit.domain import errors
from invoicekit.domain.entities import Invoice as InvoiceEntity, InvoiceStatus, Totals
from invoicekit.domain.errors import ConflictError, RenderError, ValidationError
from invoicekit.domain.ownership import OwnershipGuard
from invoicekit.domain.totals import compute_totals, validate_and_compute
from invoicekit.rendering.pdf import PdfDocument, build_pdf
from invoicekit.rendering.renderer import RenderedDocument, render

logger = logging.getLogger(__name__)

INVOICE_NUMBER_ATTEMPTS = 5


def generate_invoice_number(now: Optional[datetime] = None) -> str:
    """Generate a candidate invoice number such as 'INV-2503-9F1C0A'."""
    now = now or datetime.now(UTC)
    return f"INV-{now:%y%m}-{secrets.token_hex(3).upper()}"


def parse_status(status: Union[InvoiceStatus, str]) -> InvoiceStatus:
    """Convert a status value to InvoiceStatus.

    Raises:
        ValidationError: If the value is not one of the known statuses
    """
    if isinstance(status, InvoiceStatus):
        return status
    try:
        return InvoiceStatus(status)
    except ValueError:
        raise ValidationError(
            errors.invalid_status(status, InvoiceStatus.values()), field="status"
        )


class InvoiceService:
    """Service for creating, tracking and rendering invoices."""

    def __init__(
        self,
        db: Database,
        number_generator: Callable[[], str] = generate_invoice_number,
    ):
        """Initialize invoice service.

        Args:
            db: Database instance
            number_generator: Produces candidate invoice numbers
        """
        self.db = db
        self.guard = OwnershipGuard(db)
        self.number_generator = number_generator

    def create_invoice(
        self,
        caller_business_id: int,
        client_id: int,
        raw_items: Any,
        tax_rate: Any = None,
        discount_rate: Any = None,
    ) -> InvoiceEntity:
        """Create an invoice for one of the caller's clients.

        Args:
            caller_business_id: Authenticated business ID
            client_id: Untrusted client ID
            raw_items: Sequence of mappings with description, quantity and
                unit_price
            tax_rate: Tax percentage (0-100), None for 0
            discount_rate: Discount percentage (0-100), None for 0

        Returns:
            The stored invoice with status Unpaid

        Raises:
            NotFoundError: If the client is absent or owned by another business
            ValidationError: If items or rates are invalid
            ConflictError: If no unused invoice number could be generated
        """
        # Nothing is written unless the client belongs to the caller
        client = self.guard.assert_client_owned(client_id, caller_business_id)
        validated = validate_and_compute(raw_items, tax_rate, discount_rate)
        invoice_number = self._next_invoice_number()

        invoice = self.db.create_invoice(
            business_id=caller_business_id,
            client_id=client.id,
            invoice_number=invoice_number,
            items=validated.items,
            tax_rate=validated.tax_rate,
            discount_rate=validated.discount_rate,
            subtotal=validated.totals.subtotal,
            tax_amount=validated.totals.tax_amount,
            total=validated.totals.total,
        )
        logger.info(
            "Created invoice %s (%s) for business %s",
            invoice.invoice_number,
            invoice.id,
            caller_business_id,
        )
        return invoice

    def get_invoice(self, invoice_id: int, caller_business_id: int) -> InvoiceEntity:
        """Get an invoice owned by the caller.

        Raises:
            NotFoundError: If absent or owned by another business
        """
        return self.guard.assert_invoice_owned(invoice_id, caller_business_id)

    def list_invoices(
        self,
        caller_business_id: int,
        status: Optional[Union[InvoiceStatus, str]] = None,
        client_id: Optional[int] = None,
        created_from: Optional[datetime] = None,
        created_to: Optional[datetime] = None,
    ) -> list[InvoiceEntity]:
        """List the caller's invoices, newest first.

        Args:
            caller_business_id: Authenticated business ID
            status: Optional status filter
            client_id: Optional client filter, must be one of the caller's clients
            created_from: Optional inclusive lower bound on creation time
            created_to: Optional exclusive upper bound on creation time

        Raises:
            ValidationError: If status is unknown
            NotFoundError: If client_id is absent or owned by another business
        """
        if status is not None:
            status = parse_status(status)
        if client_id is not None:
            self.guard.assert_client_owned(client_id, caller_business_id)

        return self.db.list_invoices(
            business_id=caller_business_id,
            status=status,
            client_id=client_id,
            created_from=created_from,
            created_to=created_to,
        )

    def set_status(
        self,
        invoice_id: int,
        new_status: Union[InvoiceStatus, str],
        caller_business_id: int,
        expected_status: Optional[Union[InvoiceStatus, str]] = None,
    ) -> InvoiceEntity:
        """Change an invoice's payment status.

        Any status may move to any other. Totals and the creation timestamp
        are left untouched.

        Args:
            invoice_id: Untrusted invoice ID
            new_status: Unpaid, Paid or Overdue
            caller_business_id: Authenticated business ID
            expected_status: If given, only apply the change when the stored
                status still equals this value

        Returns:
            The updated invoice

        Raises:
            NotFoundError: If absent or owned by another business
            ValidationError: If a status value is unknown
            ConflictError: If the stored status no longer matches expected_status
        """
        current = self.guard.assert_invoice_owned(invoice_id, caller_business_id)
        status = parse_status(new_status)
        if expected_status is not None:
            expected_status = parse_status(expected_status)

        updated = self.db.update_invoice_status(
            invoice_id, status, expected_status=expected_status
        )
        if updated is None:
            actual = self.db.get_invoice(invoice_id)
            raise ConflictError(
                errors.stale_status(
                    invoice_id,
                    expected_status.value,
                    (actual or current).status.value,
                )
            )

        logger.info(
            "Invoice %s status %s -> %s",
            current.invoice_number,
            current.status.value,
            updated.status.value,
        )
        return updated

    def render_invoice(self, invoice_id: int, caller_business_id: int) -> RenderedDocument:
        """Lay out one of the caller's invoices as printable pages.

        Raises:
            NotFoundError: If absent or owned by another business
            RenderError: If stored data violates an invoice invariant
        """
        invoice = self.guard.assert_invoice_owned(invoice_id, caller_business_id)
        client = self.db.get_client(invoice.client_id)
        business = self.db.get_business(invoice.business_id)
        totals = self._stored_totals(invoice)
        return render(invoice, client, totals, business)

    def export_pdf(self, invoice_id: int, caller_business_id: int) -> PdfDocument:
        """Render one of the caller's invoices to PDF bytes."""
        return build_pdf(self.render_invoice(invoice_id, caller_business_id))

    def _stored_totals(self, invoice: InvoiceEntity) -> Totals:
        if not invoice.items:
            raise RenderError(f"Invoice {invoice.invoice_number} has no line items")
        totals = compute_totals(invoice.items, invoice.tax_rate, invoice.discount_rate)
        stored = (invoice.subtotal, invoice.tax_amount, invoice.total)
        if stored != (totals.subtotal, totals.tax_amount, totals.total):
            raise RenderError(
                f"Stored totals of invoice {invoice.invoice_number} do not match its line items"
            )
        return totals

    def _next_invoice_number(self) -> str:
        for _ in range(INVOICE_NUMBER_ATTEMPTS):
            candidate = self.number_generator()
            if not self.db.invoice_number_exists(candidate):
                return candidate
            logger.debug("Invoice number %s already issued, retrying", candidate)
        raise ConflictError(
            f"Could not generate an unused invoice number after {INVOICE_NUMBER_ATTEMPTS} attempts"
        )
