"""Utility functions for chequetrack."""

from chequetrack.utils.date_parser import parse_date, parse_month
from chequetrack.utils.amount_parser import parse_amount
from chequetrack.utils.account_resolver import resolve_account
from chequetrack.utils.clock import today_in_timezone
from chequetrack.utils.date_ranges import buffered_range, month_range, quick_range

__all__ = [
    "parse_date",
    "parse_month",
    "parse_amount",
    "resolve_account",
    "today_in_timezone",
    "buffered_range",
    "month_range",
    "quick_range",
]
