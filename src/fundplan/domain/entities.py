"""Domain model entities for fundplan.

These are pure data classes representing planning concepts, independent of
database schema. Everything the allocation engine reads is frozen and held in
tuples, so one recomputation pass always sees a consistent snapshot.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from fundplan.domain.constants import (
    BASE_CURRENCY,
    DEFAULT_EXCHANGE_RATE,
    DEFAULT_GROUP_COLOR,
    DEFAULT_GROUP_PERCENTAGE,
)


class RecurrenceType(str, Enum):
    """How often an investment receives a periodic contribution."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"


class RecurrenceUnit(str, Enum):
    """Unit of a custom recurrence interval."""

    DAYS = "days"
    MONTHS = "months"
    YEARS = "years"


@dataclass(frozen=True)
class Recurrence:
    """DCA configuration of an investment.

    custom_value and custom_unit are only consulted for RecurrenceType.CUSTOM.
    """

    type: RecurrenceType = RecurrenceType.MONTHLY
    custom_value: Optional[int] = None
    custom_unit: Optional[RecurrenceUnit] = None


@dataclass(frozen=True)
class Account:
    """Pool of funds held in a single currency."""

    id: int
    name: str
    currency: str = BASE_CURRENCY
    balance: Decimal = Decimal("0")
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Group:
    """Budget group scoping a percentage of its parent's allocation."""

    id: int
    name: str
    percentage: Decimal = DEFAULT_GROUP_PERCENTAGE
    parent_id: Optional[int] = None
    color: str = DEFAULT_GROUP_COLOR
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CompletionEntry:
    """Marks a scheduled contribution date as executed (or not)."""

    date: date
    completed: bool = True


@dataclass(frozen=True)
class Investment:
    """Funding target drawing a percentage of its scope from prioritized accounts."""

    id: int
    name: str
    percentage: Decimal = Decimal("0")
    account_priority: tuple[int, ...] = ()
    group_id: Optional[int] = None
    recurrence: Recurrence = field(default_factory=Recurrence)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    history: tuple[CompletionEntry, ...] = ()
    position: int = 0
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PlanSnapshot:
    """Immutable input to one recomputation pass."""

    exchange_rate: Decimal = DEFAULT_EXCHANGE_RATE
    accounts: tuple[Account, ...] = ()
    groups: tuple[Group, ...] = ()
    investments: tuple[Investment, ...] = ()

    def account_index(self) -> dict[int, Account]:
        return {acc.id: acc for acc in self.accounts}

    def get_investment(self, investment_id: int) -> Optional[Investment]:
        for inv in self.investments:
            if inv.id == investment_id:
                return inv
        return None


@dataclass(frozen=True)
class CostLine:
    """One account's contribution to an investment, in the account's currency."""

    account_id: int
    account_name: str
    currency: str
    amount: Decimal


@dataclass(frozen=True)
class ScheduleEntry:
    """A generated contribution date and whether it has been executed."""

    date: date
    completed: bool


@dataclass(frozen=True)
class CompletionCount:
    """Progress of an investment's contribution schedule."""

    completed: int
    total: int


@dataclass(frozen=True)
class PlanModel:
    """Derived allocation table produced by a recomputation pass.

    costs maps investment id to {account id: amount in account currency}.
    """

    total_funds: Decimal = Decimal("0")
    costs: dict[int, dict[int, Decimal]] = field(default_factory=dict)
    fully_allocated: dict[int, bool] = field(default_factory=dict)
    remaining_balances: dict[int, Decimal] = field(default_factory=dict)

    def is_overspent(self, investment_id: int) -> bool:
        """Return True when the investment could not be fully sourced."""
        return self.fully_allocated.get(investment_id) is False

    def cost_breakdown(
        self, investment_id: int, accounts: dict[int, Account]
    ) -> list[CostLine]:
        """List per-account costs of an investment for display."""
        lines = []
        for account_id, amount in self.costs.get(investment_id, {}).items():
            account = accounts.get(account_id)
            lines.append(
                CostLine(
                    account_id=account_id,
                    account_name=account.name if account else "Unknown",
                    currency=account.currency if account else BASE_CURRENCY,
                    amount=amount,
                )
            )
        return lines
