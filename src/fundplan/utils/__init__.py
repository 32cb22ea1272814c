"""Utility functions for fundplan."""

from fundplan.utils.date_parser import parse_date, to_calendar_date
from fundplan.utils.amount_parser import parse_amount, parse_percentage, coerce_amount
from fundplan.utils.entity_resolver import resolve_entity
from fundplan.utils.formatting import format_money, format_number

__all__ = [
    "parse_date",
    "to_calendar_date",
    "parse_amount",
    "parse_percentage",
    "coerce_amount",
    "resolve_entity",
    "format_money",
    "format_number",
]
