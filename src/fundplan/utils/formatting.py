"""Display formatting for amounts and percentages."""

from decimal import Decimal
from typing import Optional


def format_money(amount: Optional[Decimal], currency: str) -> str:
    """Format an amount with thousands separators and its currency code.

    None renders as "-".
    """
    if amount is None:
        return "-"
    return f"{amount:,.2f} {currency}"


def format_number(value: Decimal) -> str:
    """Format a decimal without trailing zeros ("50.0000" -> "50", "12.50" -> "12.5")."""
    text = f"{Decimal(value).normalize():f}"
    return "0" if text in ("-0", "0") else text
