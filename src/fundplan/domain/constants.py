"""Plan-wide defaults and numeric policy."""

from decimal import Decimal

BASE_CURRENCY = "THB"
FOREIGN_CURRENCY = "USD"
SUPPORTED_CURRENCIES = (BASE_CURRENCY, FOREIGN_CURRENCY)

# THB per 1 USD
DEFAULT_EXCHANGE_RATE = Decimal("32")

# Absolute tolerance in base-currency units for all comparisons against zero
ALLOCATION_TOLERANCE = Decimal("0.01")

# Runaway-recurrence limit for schedule generation
MAX_SCHEDULE_ITERATIONS = 500

DEFAULT_GROUP_PERCENTAGE = Decimal("100")
DEFAULT_GROUP_COLOR = "#4f46e5"
