"""Utility functions for invoicekit."""

from invoicekit.utils.date_parser import parse_date
from invoicekit.utils.amount_parser import parse_amount, parse_percent
from invoicekit.utils.line_item_parser import parse_line_item
from invoicekit.utils.client_resolver import resolve_client

__all__ = ["parse_date", "parse_amount", "parse_percent", "parse_line_item", "resolve_client"]
