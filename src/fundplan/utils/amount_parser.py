"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "฿1,234.56"
    - "-123.45"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥฿]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def parse_percentage(value: str) -> Decimal:
    """Parse a percentage such as "25", "25%" or "12.5 %".

    Raises:
        ValueError: If the value is not a number between 0 and 100
    """
    text = str(value).strip().rstrip("%").strip()
    try:
        percentage = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse percentage '{value}'")
    if not percentage.is_finite() or percentage < 0 or percentage > 100:
        raise ValueError(f"Percentage must be between 0 and 100, got '{value}'")
    return percentage


def coerce_amount(value) -> Decimal:
    """Coerce a loosely typed amount to a non-negative Decimal.

    None, non-numeric, non-finite and negative values all become 0.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal("0")
    if not amount.is_finite() or amount < 0:
        return Decimal("0")
    return amount
