"""Conversion between the base currency and account currencies."""

from decimal import Decimal, InvalidOperation

from fundplan.domain.constants import BASE_CURRENCY
from fundplan.domain.errors import InvalidExchangeRateError


def validate_exchange_rate(rate) -> Decimal:
    """Return rate as a positive Decimal.

    Raises:
        InvalidExchangeRateError: If rate is missing, non-numeric or not positive
    """
    try:
        value = Decimal(str(rate))
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidExchangeRateError(f"Exchange rate '{rate}' is not a number")
    if not value.is_finite() or value <= 0:
        raise InvalidExchangeRateError(f"Exchange rate must be positive, got {rate}")
    return value


class CurrencyConverter:
    """Converts amounts using a single base-per-foreign rate."""

    def __init__(self, rate, base: str = BASE_CURRENCY):
        """Initialize converter.

        Args:
            rate: Base-currency units per one foreign unit (e.g. THB per USD)
            base: Base currency code
        """
        self.rate = validate_exchange_rate(rate)
        self.base = base

    def to_base(self, amount: Decimal, currency: str) -> Decimal:
        """Convert an amount held in currency to the base currency."""
        if currency == self.base:
            return amount
        return amount * self.rate

    def from_base(self, amount: Decimal, currency: str) -> Decimal:
        """Convert a base-currency amount to currency."""
        if currency == self.base:
            return amount
        return amount / self.rate
