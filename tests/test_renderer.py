"""Tests for invoice page layout and pagination."""

from datetime import datetime, UTC
from decimal import Decimal

import pytest

from invoicekit.domain.entities import Business, LineItem
from invoicekit.domain.errors import RenderError
from invoicekit.domain.totals import compute_totals
from invoicekit.rendering import Band, BlockKind, render
from invoicekit.rendering.layout import MARGIN_TOP, MAX_CONTENT_OFFSET


@pytest.fixture
def business():
    return Business(
        id=1,
        name="Acme Traders",
        tax_number="27AAPFU0939F1ZV",
        address="12 MG Road, Pune",
        created_at=datetime(2025, 1, 1, tzinfo=UTC),
    )


def _render(invoice, client, business=None):
    totals = compute_totals(invoice.items, invoice.tax_rate, invoice.discount_rate)
    return render(invoice, client, totals, business)


def _texts(blocks):
    return [cell for block in blocks for cell in block.cells]


class TestSinglePage:
    """Layout of an invoice that fits on one page."""

    def test_bands_in_order(self, make_invoice, render_client, business):
        pages = _render(make_invoice(), render_client, business).pages()

        assert len(pages) == 1
        assert pages[0].bands == (Band.HEADER, Band.BILLING, Band.ITEMS, Band.SUMMARY)

    def test_header_band(self, make_invoice, render_client, business):
        page = _render(make_invoice(), render_client, business).pages()[0]
        header = _texts(page.blocks_in(Band.HEADER))

        assert header[0] == "INVOICE"
        assert "Acme Traders" in header
        assert "INV-2503-ABC123" in header
        assert "05 Mar 2025" in header
        assert "Unpaid" in header

    def test_billing_band_marks_missing_values(self, make_invoice, render_client, business):
        page = _render(make_invoice(), render_client, business).pages()[0]
        billing = [block.cells for block in page.blocks_in(Band.BILLING)]

        assert ("Name:", "Initech") in billing
        assert ("Email:", "billing@initech.example") in billing
        assert ("Phone:", "N/A") in billing

    def test_item_rows_show_recomputed_line_totals(self, make_invoice, render_client):
        items = (
            LineItem(description="Consulting", quantity=Decimal("3"), unit_price=Decimal("19.99")),
            LineItem(description="Travel", quantity=Decimal("1.5"), unit_price=Decimal("1200")),
        )
        page = _render(make_invoice(items=items), render_client).pages()[0]

        table_header = page.blocks_in(Band.ITEMS)[0]
        assert table_header.kind == BlockKind.TABLE_HEADER
        assert table_header.cells == ("Description", "Qty", "Unit Price", "Amount")
        assert [row.cells for row in page.item_rows] == [
            ("Consulting", "3", "19.99", "59.97"),
            ("Travel", "1.5", "1,200.00", "1,800.00"),
        ]

    def test_summary_with_discount_and_tax(self, make_invoice, render_client):
        invoice = make_invoice(tax_rate="5", discount_rate="12.5")
        page = _render(invoice, render_client).pages()[0]
        summary = page.blocks_in(Band.SUMMARY)

        # 2 x 10.00 = 20.00; discount 2.50; tax 5% of 17.50 = 0.875
        assert [block.cells for block in summary] == [
            ("Subtotal:", "20.00"),
            ("Discount (12.5%):", "-2.50"),
            ("Tax (5%):", "0.88"),
            ("Total:", "18.38"),
        ]
        assert summary[-1].kind == BlockKind.GRAND_TOTAL
        assert summary[-1].emphasized

    def test_summary_without_discount_and_tax(self, make_invoice, render_client):
        page = _render(make_invoice(tax_rate="0", discount_rate="0"), render_client).pages()[0]

        assert [block.cells[0] for block in page.blocks_in(Band.SUMMARY)] == [
            "Subtotal:",
            "Total:",
        ]

    def test_business_is_optional(self, make_invoice, render_client):
        page = _render(make_invoice(), render_client).pages()[0]

        assert "Acme Traders" not in _texts(page.blocks)
        assert page.blocks[0].y == MARGIN_TOP


class TestPagination:
    """Pagination of long item lists."""

    def test_rows_are_packed_by_height(self, make_invoice, render_client, business):
        pages = _render(make_invoice(item_count=100), render_client, business).pages()

        assert [len(page.item_rows) for page in pages] == [30, 42, 28]

    def test_header_and_billing_only_on_first_page(self, make_invoice, render_client, business):
        pages = _render(make_invoice(item_count=100), render_client, business).pages()

        assert Band.HEADER in pages[0].bands
        assert Band.BILLING in pages[0].bands
        for page in pages[1:]:
            assert Band.HEADER not in page.bands
            assert Band.BILLING not in page.bands
            assert all(block.kind != BlockKind.TABLE_HEADER for block in page.blocks)
            assert page.blocks[0].y == MARGIN_TOP

    def test_rows_across_pages_reproduce_items(self, make_invoice, render_client, business):
        invoice = make_invoice(item_count=100)
        pages = _render(invoice, render_client, business).pages()

        rows = [row for page in pages for row in page.item_rows]
        assert [row.item_index for row in rows] == list(range(100))
        assert [row.cells[0] for row in rows] == [item.description for item in invoice.items]

    def test_summary_follows_last_row(self, make_invoice, render_client, business):
        pages = _render(make_invoice(item_count=100), render_client, business).pages()
        last = pages[-1]

        assert last.bands == (Band.ITEMS, Band.SUMMARY)
        assert last.blocks_in(Band.SUMMARY)[0].y > last.item_rows[-1].bottom
        assert all(Band.SUMMARY not in page.bands for page in pages[:-1])

    def test_summary_moves_to_new_page_when_it_does_not_fit(
        self, make_invoice, render_client, business
    ):
        invoice = make_invoice(item_count=30, tax_rate="0", discount_rate="0")
        pages = _render(invoice, render_client, business).pages()

        assert len(pages) == 2
        assert len(pages[0].item_rows) == 30
        assert pages[1].bands == (Band.SUMMARY,)
        assert pages[1].blocks[0].y == MARGIN_TOP

    def test_summary_fills_page_exactly(self, make_invoice, render_client, business):
        invoice = make_invoice(item_count=27, tax_rate="0", discount_rate="0")
        pages = _render(invoice, render_client, business).pages()

        assert len(pages) == 1
        assert pages[0].blocks[-1].bottom == MAX_CONTENT_OFFSET

    def test_nothing_extends_past_content_area(self, make_invoice, render_client, business):
        for count in (1, 29, 30, 31, 72, 73, 150):
            pages = _render(make_invoice(item_count=count), render_client, business).pages()
            for page in pages:
                assert all(block.bottom <= MAX_CONTENT_OFFSET for block in page.blocks)
                assert all(block.y >= MARGIN_TOP for block in page.blocks)

    def test_page_numbers(self, make_invoice, render_client, business):
        pages = _render(make_invoice(item_count=100), render_client, business).pages()

        assert [page.number for page in pages] == [1, 2, 3]


class TestRenderedDocument:
    """Restartability and failure modes."""

    def test_iteration_is_restartable(self, make_invoice, render_client, business):
        document = _render(make_invoice(item_count=80), render_client, business)

        assert list(document) == list(document)

    def test_same_input_renders_identically(self, make_invoice, render_client, business):
        invoice = make_invoice(item_count=45)

        first = _render(invoice, render_client, business).pages()
        second = _render(invoice, render_client, business).pages()

        assert first == second

    def test_lazy_iteration(self, make_invoice, render_client, business):
        document = _render(make_invoice(item_count=100), render_client, business)

        first_page = next(iter(document))
        assert first_page.number == 1

    def test_no_items(self, make_invoice, render_client):
        invoice = make_invoice(item_count=0)
        totals = compute_totals(make_invoice().items, 0, 0)

        with pytest.raises(RenderError, match="no line items"):
            render(invoice, render_client, totals)

    def test_missing_client(self, make_invoice):
        invoice = make_invoice()
        totals = compute_totals(invoice.items, 0, 0)

        with pytest.raises(RenderError):
            render(invoice, None, totals)

    def test_client_of_another_invoice(self, make_invoice, render_client):
        invoice = make_invoice(client_id=2)
        totals = compute_totals(invoice.items, 0, 0)

        with pytest.raises(RenderError):
            render(invoice, render_client, totals)
