"""Utility functions for spendsense."""

from spendsense.utils.date_parser import parse_date
from spendsense.utils.amount_parser import parse_amount
from spendsense.utils.ids import new_id

__all__ = ["parse_date", "parse_amount", "new_id"]
