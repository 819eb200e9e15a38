"""PDF output adapter.

Draws the page layouts produced by ``invoicekit.rendering.renderer`` onto a
ReportLab canvas. No pagination decisions are made here.
"""

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO

from reportlab.lib import colors
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from invoicekit.rendering.layout import (
    MARGIN_BOTTOM,
    MARGIN_LEFT,
    PAGE_HEIGHT,
    PAGE_WIDTH,
    TABLE_COLUMNS,
    Block,
    BlockKind,
    PageLayout,
)
from invoicekit.rendering.renderer import RenderedDocument

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
HEADER_FILL = colors.HexColor("#2d3748")
RULE_COLOR = colors.HexColor("#cbd5e0")
LABEL_WIDTH = 95
CELL_PADDING = 4


@dataclass(frozen=True)
class PdfDocument:
    """Serialized invoice with transport metadata."""

    filename: str
    content: bytes
    content_type: str = PDF_CONTENT_TYPE


def build_pdf(document: RenderedDocument) -> PdfDocument:
    """Serialize a rendered invoice into PDF bytes."""
    buffer = io.BytesIO()
    write_pdf(document, buffer)
    return PdfDocument(filename=f"{document.filename}.pdf", content=buffer.getvalue())


def write_pdf(document: RenderedDocument, stream: BinaryIO) -> int:
    """Write a rendered invoice as PDF to a binary stream.

    Returns:
        Number of pages written
    """
    pages = document.pages()
    pdf = canvas.Canvas(stream, pagesize=(PAGE_WIDTH, PAGE_HEIGHT))
    pdf.setTitle(f"Invoice {document.filename}")

    for page in pages:
        _draw_page(pdf, page, len(pages))
        pdf.showPage()
    pdf.save()

    logger.debug("Wrote %d PDF page(s) for invoice %s", len(pages), document.filename)
    return len(pages)


def _baseline(page: PageLayout, block: Block, font_size: float) -> float:
    # Convert a top-origin block into a bottom-origin text baseline
    return page.height - block.bottom + (block.height - font_size) / 2 + 1


def _fit_text(text: str, font: str, size: float, width: float) -> str:
    if stringWidth(text, font, size) <= width:
        return text
    while text and stringWidth(text + "...", font, size) > width:
        text = text[:-1]
    return text + "..."


def _draw_cell(pdf, text: str, x: float, width: float, align: str, y: float, font: str, size: float):
    text = _fit_text(text, font, size, width - 2 * CELL_PADDING)
    pdf.setFont(font, size)
    if align == "right":
        pdf.drawRightString(x + width - CELL_PADDING, y, text)
    else:
        pdf.drawString(x + CELL_PADDING, y, text)


def _draw_page(pdf, page: PageLayout, page_count: int) -> None:
    for block in page.blocks:
        if block.kind == BlockKind.TITLE:
            size = 20
            pdf.setFont(FONT_BOLD, size)
            pdf.drawCentredString(page.width / 2, _baseline(page, block, size), block.cells[0])

        elif block.kind == BlockKind.TEXT:
            size = 10
            y = _baseline(page, block, size)
            font = FONT_BOLD if block.emphasized else FONT
            if len(block.cells) == 1:
                pdf.setFont(font, size)
                pdf.drawString(block.x, y, block.cells[0])
            else:
                label, value = block.cells
                pdf.setFont(FONT_BOLD, size)
                pdf.drawString(block.x, y, label)
                pdf.setFont(FONT, size)
                pdf.drawString(
                    block.x + LABEL_WIDTH,
                    y,
                    _fit_text(value, FONT, size, block.width - LABEL_WIDTH),
                )

        elif block.kind == BlockKind.TABLE_HEADER:
            size = 9
            pdf.setFillColor(HEADER_FILL)
            pdf.rect(block.x, page.height - block.bottom, block.width, block.height, fill=1, stroke=0)
            pdf.setFillColor(colors.white)
            y = _baseline(page, block, size)
            for column, title in zip(TABLE_COLUMNS, block.cells):
                _draw_cell(pdf, title, column.x, column.width, column.align, y, FONT_BOLD, size)
            pdf.setFillColor(colors.black)

        elif block.kind == BlockKind.ITEM_ROW:
            size = 9
            y = _baseline(page, block, size)
            for column, text in zip(TABLE_COLUMNS, block.cells):
                _draw_cell(pdf, text, column.x, column.width, column.align, y, FONT, size)
            pdf.setStrokeColor(RULE_COLOR)
            pdf.setLineWidth(0.5)
            bottom = page.height - block.bottom
            pdf.line(block.x, bottom, block.x + block.width, bottom)
            pdf.setStrokeColor(colors.black)

        elif block.kind in (BlockKind.SUMMARY_LINE, BlockKind.GRAND_TOTAL):
            size = 13 if block.kind == BlockKind.GRAND_TOTAL else 10
            font = FONT_BOLD if block.emphasized else FONT
            y = _baseline(page, block, size)
            label_column, value_column = TABLE_COLUMNS[-2], TABLE_COLUMNS[-1]
            if block.kind == BlockKind.GRAND_TOTAL:
                top = page.height - block.y
                pdf.setLineWidth(1)
                pdf.line(label_column.x, top, value_column.x + value_column.width, top)
            pdf.setFont(font, size)
            pdf.drawRightString(label_column.x + label_column.width - CELL_PADDING, y, block.cells[0])
            pdf.drawRightString(value_column.x + value_column.width - CELL_PADDING, y, block.cells[1])

    pdf.setFont(FONT, 8)
    pdf.setFillColor(colors.grey)
    pdf.drawString(MARGIN_LEFT, MARGIN_BOTTOM / 2, f"Page {page.number} of {page_count}")
    pdf.setFillColor(colors.black)
