"""Dashboard analytics domain service."""

from datetime import datetime, timedelta, UTC
from decimal import Decimal
from typing import Optional

from invoicekit.database.base import Database
from invoicekit.domain.entities import DashboardSummary, InvoiceStatus
from invoicekit.domain.totals import round_money


class DashboardService:
    """Service for aggregating a business's invoices."""

    def __init__(self, db: Database):
        """Initialize dashboard service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_summary(
        self,
        caller_business_id: int,
        recent_days: int = 30,
        now: Optional[datetime] = None,
    ) -> DashboardSummary:
        """Summarize the caller's invoices.

        Revenue is the sum of Paid invoice totals; outstanding is the sum of
        every other invoice's total.

        Args:
            caller_business_id: Authenticated business ID
            recent_days: Window for counting recently created invoices
            now: Reference time (defaults to current UTC time)

        Returns:
            DashboardSummary for the business
        """
        invoices = self.db.list_invoices(business_id=caller_business_id)

        status_counts = {status: 0 for status in InvoiceStatus}
        revenue = Decimal("0")
        outstanding = Decimal("0")
        for invoice in invoices:
            status_counts[invoice.status] += 1
            if invoice.status == InvoiceStatus.PAID:
                revenue += invoice.total
            else:
                outstanding += invoice.total

        now = now or datetime.now(UTC)
        recent = self.db.list_invoices(
            business_id=caller_business_id,
            created_from=now - timedelta(days=recent_days),
        )

        return DashboardSummary(
            total_invoices=len(invoices),
            status_counts=status_counts,
            revenue=round_money(revenue),
            outstanding=round_money(outstanding),
            recent_invoices=len(recent),
            recent_days=recent_days,
        )
