"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic.

    Attributes:
        field: Name of the first offending field, if known
        errors: Mapping of every offending field name to its reason
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        errors: Optional[dict[str, str]] = None,
    ):
        super().__init__(message)
        self.field = field
        if errors is None:
            errors = {field: message} if field is not None else {}
        self.errors = dict(errors)


class NotFoundError(DomainError):
    """Requested entity does not exist or is not owned by the caller."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or stale writes."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class RenderError(DomainError):
    """Invoice data violated a rendering invariant."""


def business_not_found(business_id: int) -> str:
    """Return message for missing business."""
    return f"Business {business_id} not found"


def client_not_found(client_id: int) -> str:
    """Return message for missing or foreign client."""
    return f"Client {client_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing or foreign invoice."""
    return f"Invoice {invoice_id} not found"


def duplicate_tax_number(tax_number: str) -> str:
    """Return message for an already registered tax number."""
    return f"Tax registration number '{tax_number}' is already registered"


def invalid_status(status: object, allowed: list[str]) -> str:
    """Return message for an unknown invoice status."""
    return f"Invalid status '{status}'. Must be one of: {', '.join(allowed)}"


def stale_status(invoice_id: int, expected: str, actual: str) -> str:
    """Return message when a compare-and-set status update lost a race."""
    return (
        f"Invoice {invoice_id} status is '{actual}', expected '{expected}'. "
        "Reload the invoice and try again."
    )


def client_delete_blocked(client_id: int, invoice_count: int) -> str:
    """Return message when a client still has invoices."""
    return (
        f"Cannot delete client {client_id}: it has {invoice_count} "
        f"invoice{'s' if invoice_count != 1 else ''}."
    )
