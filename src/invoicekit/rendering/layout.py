"""Declarative page layout model for invoice documents.

Positions are in points measured from the top-left corner of an A4 page.
Output adapters translate blocks into their own coordinate systems.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PAGE_WIDTH = 595
PAGE_HEIGHT = 842
MARGIN_TOP = 40
MARGIN_BOTTOM = 40
MARGIN_LEFT = 40
MARGIN_RIGHT = 40
CONTENT_WIDTH = PAGE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT
# Nothing may extend below this offset from the top of the page
MAX_CONTENT_OFFSET = PAGE_HEIGHT - MARGIN_BOTTOM

TITLE_HEIGHT = 28
LINE_HEIGHT = 16
BAND_GAP = 14
TABLE_HEADER_HEIGHT = 20
ROW_HEIGHT = 18
SUMMARY_LINE_HEIGHT = 18
TOTAL_LINE_HEIGHT = 24


class Band(str, Enum):
    """Vertical bands of an invoice document, in page order."""

    HEADER = "header"
    BILLING = "billing"
    ITEMS = "items"
    SUMMARY = "summary"


class BlockKind(str, Enum):
    """Kinds of positioned blocks."""

    TITLE = "title"
    TEXT = "text"
    TABLE_HEADER = "table_header"
    ITEM_ROW = "item_row"
    SUMMARY_LINE = "summary_line"
    GRAND_TOTAL = "grand_total"


@dataclass(frozen=True)
class Column:
    """Line-item table column."""

    title: str
    x: float
    width: float
    align: str = "left"


TABLE_COLUMNS = (
    Column("Description", MARGIN_LEFT, 275),
    Column("Qty", 315, 60, "right"),
    Column("Unit Price", 375, 90, "right"),
    Column("Amount", 465, 90, "right"),
)


@dataclass(frozen=True)
class Block:
    """A positioned piece of content.

    ``cells`` holds the text of the block: a single entry for titles, a
    label/value pair for text and summary lines, one entry per table column
    for table rows.
    """

    band: Band
    kind: BlockKind
    y: float
    height: float
    cells: tuple[str, ...]
    x: float = MARGIN_LEFT
    width: float = CONTENT_WIDTH
    emphasized: bool = False
    item_index: Optional[int] = None

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class PageLayout:
    """All blocks placed on one page."""

    number: int
    blocks: tuple[Block, ...]
    width: float = PAGE_WIDTH
    height: float = PAGE_HEIGHT

    def blocks_in(self, band: Band) -> tuple[Block, ...]:
        return tuple(block for block in self.blocks if block.band == band)

    @property
    def item_rows(self) -> tuple[Block, ...]:
        return tuple(block for block in self.blocks if block.kind == BlockKind.ITEM_ROW)

    @property
    def bands(self) -> tuple[Band, ...]:
        """Bands present on the page, in order of first appearance."""
        seen: list[Band] = []
        for block in self.blocks:
            if block.band not in seen:
                seen.append(block.band)
        return tuple(seen)
