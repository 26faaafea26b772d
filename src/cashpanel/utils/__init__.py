"""Utility functions for cashpanel."""

from cashpanel.utils.date_parser import parse_date, parse_br_date, month_bounds
from cashpanel.utils.amount_parser import parse_amount, parse_brl_amount, format_brl

__all__ = [
    "parse_date",
    "parse_br_date",
    "month_bounds",
    "parse_amount",
    "parse_brl_amount",
    "format_brl",
]
