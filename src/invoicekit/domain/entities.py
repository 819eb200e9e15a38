"""Domain model entities for invoicekit.

These are pure data classes representing business concepts, independent of
database schema. Ownership is carried as explicit ``business_id`` fields so
that tenant checks never depend on ORM relationship loading.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class InvoiceStatus(str, Enum):
    """Payment status of an invoice."""

    UNPAID = "Unpaid"
    PAID = "Paid"
    OVERDUE = "Overdue"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


@dataclass(frozen=True)
class Business:
    """Issuing business (tenant) domain entity."""

    id: int
    name: str
    tax_number: str
    address: str
    created_at: datetime
    logo_url: Optional[str] = None


@dataclass(frozen=True)
class Client:
    """Client domain entity, owned by exactly one business."""

    id: int
    business_id: int
    name: str
    email: Optional[str]
    phone: Optional[str]
    address: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class LineItem:
    """Single billed line embedded in an invoice."""

    description: str
    quantity: Decimal
    unit_price: Decimal


@dataclass(frozen=True)
class Totals:
    """Computed invoice figures, each rounded to two decimal places."""

    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity.

    Totals are derived once at creation and are never mutated afterwards;
    only ``status`` changes over the invoice's lifetime.
    """

    id: int
    business_id: int
    client_id: int
    invoice_number: str
    items: tuple[LineItem, ...]
    discount_rate: Decimal
    tax_rate: Decimal
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal
    status: InvoiceStatus
    created_at: datetime


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregated invoice figures for one business."""

    total_invoices: int
    status_counts: dict[InvoiceStatus, int] = field(default_factory=dict)
    revenue: Decimal = Decimal("0.00")
    outstanding: Decimal = Decimal("0.00")
    recent_invoices: int = 0
    recent_days: int = 30
