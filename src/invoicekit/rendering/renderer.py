"""Invoice document layout and pagination.

``render`` validates its input eagerly and returns a ``RenderedDocument``.
Iterating the document lays the pages out on demand; every iteration starts
from scratch, so the same input always yields the same pages.
"""

import logging
from collections.abc import Iterator
from typing import Optional

from invoicekit.domain.entities import Business, Client, Invoice, Totals
from invoicekit.domain.errors import RenderError
from invoicekit.domain.totals import line_total
from invoicekit.rendering.layout import (
    BAND_GAP,
    LINE_HEIGHT,
    MARGIN_TOP,
    MAX_CONTENT_OFFSET,
    ROW_HEIGHT,
    SUMMARY_LINE_HEIGHT,
    TABLE_COLUMNS,
    TABLE_HEADER_HEIGHT,
    TITLE_HEIGHT,
    TOTAL_LINE_HEIGHT,
    Band,
    Block,
    BlockKind,
    PageLayout,
)
from invoicekit.utils.formatting import (
    format_date,
    format_money,
    format_percent,
    format_quantity,
)

logger = logging.getLogger(__name__)

DOCUMENT_TITLE = "INVOICE"
MISSING = "N/A"


class _PageBuilder:
    """Tracks the vertical cursor of the page being filled."""

    def __init__(self):
        self.number = 1
        self.blocks: list[Block] = []
        self.cursor = MARGIN_TOP

    def fits(self, height: float) -> bool:
        return self.cursor + height <= MAX_CONTENT_OFFSET

    def place(self, band: Band, kind: BlockKind, height: float, cells, **kwargs) -> None:
        self.blocks.append(
            Block(band=band, kind=kind, y=self.cursor, height=height, cells=tuple(cells), **kwargs)
        )
        self.cursor += height

    def gap(self) -> None:
        self.cursor += BAND_GAP

    def finish(self) -> PageLayout:
        page = PageLayout(number=self.number, blocks=tuple(self.blocks))
        self.number += 1
        self.blocks = []
        self.cursor = MARGIN_TOP
        return page


class RenderedDocument:
    """Lazy, re-iterable sequence of page layouts for one invoice."""

    def __init__(
        self,
        invoice: Invoice,
        client: Client,
        totals: Totals,
        business: Optional[Business] = None,
    ):
        self.invoice = invoice
        self.client = client
        self.totals = totals
        self.business = business

    def __iter__(self) -> Iterator[PageLayout]:
        return _layout_pages(self.invoice, self.client, self.totals, self.business)

    def pages(self) -> list[PageLayout]:
        """Lay out and return every page."""
        pages = list(self)
        logger.debug("Rendered invoice %s on %d page(s)", self.invoice.invoice_number, len(pages))
        return pages

    @property
    def filename(self) -> str:
        """Suggested file name stem for output adapters."""
        return self.invoice.invoice_number


def render(
    invoice: Invoice,
    client: Optional[Client],
    totals: Totals,
    business: Optional[Business] = None,
) -> RenderedDocument:
    """Prepare an invoice for page layout.

    Args:
        invoice: Invoice to render
        client: Client the invoice is billed to
        totals: Totals computed for the invoice
        business: Issuing business, shown in the header when given

    Returns:
        RenderedDocument yielding PageLayout objects

    Raises:
        RenderError: If the invoice has no items or the client does not match
    """
    if not invoice.items:
        raise RenderError(f"Invoice {invoice.invoice_number} has no line items")
    if client is None or client.id != invoice.client_id:
        raise RenderError(
            f"Client {invoice.client_id} for invoice {invoice.invoice_number} is missing"
        )
    if client.business_id != invoice.business_id:
        raise RenderError(
            f"Client {client.id} does not belong to the business of invoice "
            f"{invoice.invoice_number}"
        )
    return RenderedDocument(invoice, client, totals, business)


def _layout_pages(
    invoice: Invoice,
    client: Client,
    totals: Totals,
    business: Optional[Business],
) -> Iterator[PageLayout]:
    page = _PageBuilder()

    # Header band
    page.place(Band.HEADER, BlockKind.TITLE, TITLE_HEIGHT, (DOCUMENT_TITLE,), emphasized=True)
    if business is not None:
        page.place(Band.HEADER, BlockKind.TEXT, LINE_HEIGHT, (business.name,), emphasized=True)
    for label, value in (
        ("Invoice Number:", invoice.invoice_number),
        ("Invoice Date:", format_date(invoice.created_at)),
        ("Status:", invoice.status.value),
    ):
        page.place(Band.HEADER, BlockKind.TEXT, LINE_HEIGHT, (label, value))
    page.gap()

    # Billing party band
    page.place(Band.BILLING, BlockKind.TEXT, LINE_HEIGHT, ("Bill To",), emphasized=True)
    for label, value in (
        ("Name:", client.name),
        ("Address:", client.address),
        ("Email:", client.email),
        ("Phone:", client.phone),
    ):
        page.place(Band.BILLING, BlockKind.TEXT, LINE_HEIGHT, (label, value or MISSING))
    page.gap()

    # Line-item table; the column header is not repeated on later pages
    page.place(
        Band.ITEMS,
        BlockKind.TABLE_HEADER,
        TABLE_HEADER_HEIGHT,
        (column.title for column in TABLE_COLUMNS),
    )
    for index, item in enumerate(invoice.items):
        if not page.fits(ROW_HEIGHT):
            yield page.finish()
        page.place(
            Band.ITEMS,
            BlockKind.ITEM_ROW,
            ROW_HEIGHT,
            (
                item.description,
                format_quantity(item.quantity),
                format_money(item.unit_price),
                format_money(line_total(item)),
            ),
            item_index=index,
        )

    # Summary band stays together after the last row
    lines = _summary_lines(invoice, totals)
    summary_height = sum(height for _, _, height in lines)
    if page.fits(BAND_GAP + summary_height):
        page.gap()
    else:
        yield page.finish()

    for kind, cells, height in lines:
        page.place(
            Band.SUMMARY,
            kind,
            height,
            cells,
            emphasized=kind == BlockKind.GRAND_TOTAL,
        )
    yield page.finish()


def _summary_lines(invoice: Invoice, totals: Totals) -> list[tuple[BlockKind, tuple[str, str], int]]:
    lines = [(BlockKind.SUMMARY_LINE, ("Subtotal:", format_money(totals.subtotal)), SUMMARY_LINE_HEIGHT)]
    if invoice.discount_rate > 0:
        lines.append(
            (
                BlockKind.SUMMARY_LINE,
                (
                    f"Discount ({format_percent(invoice.discount_rate)}):",
                    f"-{format_money(totals.discount_amount)}",
                ),
                SUMMARY_LINE_HEIGHT,
            )
        )
    if invoice.tax_rate > 0:
        lines.append(
            (
                BlockKind.SUMMARY_LINE,
                (f"Tax ({format_percent(invoice.tax_rate)}):", format_money(totals.tax_amount)),
                SUMMARY_LINE_HEIGHT,
            )
        )
    lines.append((BlockKind.GRAND_TOTAL, ("Total:", format_money(totals.total)), TOTAL_LINE_HEIGHT))
    return lines
