"""Utility functions for ledgerit."""

from ledgerit.utils.date_parser import get_date_range, parse_date, parse_iso_date
from ledgerit.utils.amount_parser import parse_amount, parse_positive_amount

__all__ = ["get_date_range", "parse_date", "parse_iso_date", "parse_amount", "parse_positive_amount"]
