"""Tests for the PDF output adapter."""

import io
import re

from invoicekit.domain.totals import compute_totals
from invoicekit.rendering import render
from invoicekit.rendering.pdf import PDF_CONTENT_TYPE, build_pdf, write_pdf


def _document(make_invoice, render_client, item_count):
    invoice = make_invoice(item_count=item_count)
    totals = compute_totals(invoice.items, invoice.tax_rate, invoice.discount_rate)
    return render(invoice, render_client, totals)


def _page_count(pdf_bytes: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page[^s]", pdf_bytes))


def test_build_pdf_metadata(make_invoice, render_client):
    document = build_pdf(_document(make_invoice, render_client, 2))

    assert document.filename == "INV-2503-ABC123.pdf"
    assert document.content_type == PDF_CONTENT_TYPE
    assert document.content.startswith(b"%PDF")


def test_one_pdf_page_per_layout_page(make_invoice, render_client):
    layout = _document(make_invoice, render_client, 100)
    stream = io.BytesIO()

    written = write_pdf(layout, stream)

    assert written == len(layout.pages())
    assert _page_count(stream.getvalue()) == written


def test_long_descriptions_do_not_fail(make_invoice, render_client):
    from decimal import Decimal
    from invoicekit.domain.entities import LineItem

    items = (LineItem(description="x" * 500, quantity=Decimal("1"), unit_price=Decimal("1")),)
    invoice = make_invoice(items=items)
    totals = compute_totals(invoice.items, 0, 0)

    document = build_pdf(render(invoice, render_client, totals))

    assert document.content.startswith(b"%PDF")
