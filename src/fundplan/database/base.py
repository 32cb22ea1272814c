"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import ContextManager, Optional, Sequence

# Import entities directly to avoid pulling services through domain/__init__.py
from fundplan.domain.entities import (
    Account,
    CompletionEntry,
    Group,
    Investment,
    Recurrence,
)


class Database(ABC):
    """Abstract database interface for fundplan."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def transaction(self) -> ContextManager[None]:
        """Group writes into one unit that is rolled back if the block raises."""
        pass

    # Settings
    @abstractmethod
    def get_exchange_rate(self) -> Decimal:
        """Get the plan exchange rate (base units per foreign unit)."""
        pass

    @abstractmethod
    def set_exchange_rate(self, rate: Decimal) -> None:
        """Store the plan exchange rate."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, currency: str, balance: Decimal) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts in creation order."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        currency: Optional[str] = None,
        balance: Optional[Decimal] = None,
    ) -> None:
        """Update account fields; None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    # Group operations
    @abstractmethod
    def create_group(
        self, name: str, percentage: Decimal, color: str, parent_id: Optional[int] = None
    ) -> int:
        """Create a group. Returns group ID."""
        pass

    @abstractmethod
    def get_group(self, group_id: int) -> Optional[Group]:
        """Get group by ID."""
        pass

    @abstractmethod
    def list_groups(self) -> list[Group]:
        """List all groups."""
        pass

    @abstractmethod
    def update_group(
        self,
        group_id: int,
        name: Optional[str] = None,
        percentage: Optional[Decimal] = None,
        color: Optional[str] = None,
        parent_id: Optional[int] = None,
        update_parent: bool = False,
    ) -> None:
        """Update group fields.

        Args:
            update_parent: If True, update parent_id even if it's None (to make a root)
        """
        pass

    @abstractmethod
    def delete_group(self, group_id: int) -> None:
        """Delete a group."""
        pass

    # Investment operations
    @abstractmethod
    def create_investment(
        self,
        name: str,
        percentage: Decimal,
        account_priority: Sequence[int],
        recurrence: Recurrence,
        start_date: date,
        end_date: Optional[date] = None,
        group_id: Optional[int] = None,
    ) -> int:
        """Create an investment at the end of the list. Returns investment ID."""
        pass

    @abstractmethod
    def get_investment(self, investment_id: int) -> Optional[Investment]:
        """Get investment by ID, including priority list and history."""
        pass

    @abstractmethod
    def list_investments(self) -> list[Investment]:
        """List investments in allocation order."""
        pass

    @abstractmethod
    def update_investment(
        self,
        investment_id: int,
        name: Optional[str] = None,
        percentage: Optional[Decimal] = None,
        account_priority: Optional[Sequence[int]] = None,
        recurrence: Optional[Recurrence] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        group_id: Optional[int] = None,
        update_end_date: bool = False,
        update_group: bool = False,
    ) -> None:
        """Update investment fields.

        Args:
            update_end_date: If True, update end_date even if it's None (to clear it)
            update_group: If True, update group_id even if it's None (to ungroup)
        """
        pass

    @abstractmethod
    def move_investment(self, investment_id: int, index: int) -> None:
        """Move an investment to a zero-based index in allocation order."""
        pass

    @abstractmethod
    def delete_investment(self, investment_id: int) -> None:
        """Delete an investment with its priority list and history."""
        pass

    @abstractmethod
    def set_completion_history(
        self, investment_id: int, history: Sequence[CompletionEntry]
    ) -> None:
        """Replace an investment's completion history."""
        pass

    # Reference queries
    @abstractmethod
    def list_investments_using_account(self, account_id: int) -> list[Investment]:
        """List investments whose priority list names an account."""
        pass

    @abstractmethod
    def get_group_dependency_counts(self, group_id: int) -> tuple[int, int]:
        """Return (child group count, investment count) for a group."""
        pass
