"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the domain never sees ORM
objects or lazy relationships.
"""

from invoicekit.domain import entities as domain
from invoicekit.database.models import (
    Business as ORMBusiness,
    Client as ORMClient,
    Invoice as ORMInvoice,
    InvoiceItem as ORMInvoiceItem,
)


def business_to_domain(orm_business: ORMBusiness) -> domain.Business:
    """Convert SQLAlchemy Business model to domain Business entity."""
    return domain.Business(
        id=orm_business.id,
        name=orm_business.name,
        tax_number=orm_business.tax_number,
        address=orm_business.address,
        logo_url=orm_business.logo_url,
        created_at=orm_business.created_at,
    )


def client_to_domain(orm_client: ORMClient) -> domain.Client:
    """Convert SQLAlchemy Client model to domain Client entity."""
    return domain.Client(
        id=orm_client.id,
        business_id=orm_client.business_id,
        name=orm_client.name,
        email=orm_client.email,
        phone=orm_client.phone,
        address=orm_client.address,
        created_at=orm_client.created_at,
    )


def line_item_to_domain(orm_item: ORMInvoiceItem) -> domain.LineItem:
    """Convert SQLAlchemy InvoiceItem model to domain LineItem."""
    return domain.LineItem(
        description=orm_item.description,
        quantity=orm_item.quantity,
        unit_price=orm_item.unit_price,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        business_id=orm_invoice.business_id,
        client_id=orm_invoice.client_id,
        invoice_number=orm_invoice.invoice_number,
        items=tuple(line_item_to_domain(item) for item in orm_invoice.items),
        tax_rate=orm_invoice.tax_rate,
        discount_rate=orm_invoice.discount_rate,
        subtotal=orm_invoice.subtotal,
        tax_amount=orm_invoice.tax_amount,
        total=orm_invoice.total,
        status=domain.InvoiceStatus(orm_invoice.status),
        created_at=orm_invoice.created_at,
    )
