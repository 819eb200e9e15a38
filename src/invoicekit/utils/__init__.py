"""Utility functions for invoicekit."""

from invoicekit.utils.date_parser import parse_date
from invoicekit.utils.amount_parser import parse_amount
from invoicekit.utils.item_parser import parse_item_spec

__all__ = ["parse_date", "parse_amount", "parse_item_spec"]
