"""Invoice document rendering."""

from invoicekit.rendering.layout import Band, Block, BlockKind, PageLayout
from invoicekit.rendering.renderer import RenderedDocument, render

__all__ = ["Band", "Block", "BlockKind", "PageLayout", "RenderedDocument", "render"]
