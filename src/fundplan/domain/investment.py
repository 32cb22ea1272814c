"""Investment domain service."""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence, Union

from fundplan.database.base import Database
from fundplan.domain.entities import (
    CompletionCount,
    Investment as InvestmentEntity,
    Recurrence,
    RecurrenceType,
    RecurrenceUnit,
    ScheduleEntry,
)
from fundplan.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    group_not_found,
    investment_not_found,
)
from fundplan.domain.group import validate_percentage
from fundplan.domain.ledger import completion_count, is_date_completed, toggle_completion
from fundplan.domain.schedule import generate_schedule
from fundplan.utils.date_parser import to_calendar_date

logger = logging.getLogger(__name__)


def validate_recurrence(recurrence: Recurrence) -> Recurrence:
    """Ensure a recurrence is well formed.

    Raises:
        ValidationError: If the type is unknown or a custom recurrence
            lacks a positive count or a unit
    """
    try:
        rtype = RecurrenceType(recurrence.type)
    except ValueError:
        raise ValidationError(f"Unknown recurrence type '{recurrence.type}'")

    if rtype != RecurrenceType.CUSTOM:
        return Recurrence(type=rtype)

    try:
        count = int(recurrence.custom_value)
    except (TypeError, ValueError):
        count = 0
    if count <= 0:
        raise ValidationError("Custom recurrence needs a positive interval count")
    try:
        unit = RecurrenceUnit(recurrence.custom_unit)
    except ValueError:
        raise ValidationError(f"Unknown recurrence unit '{recurrence.custom_unit}'")
    return Recurrence(type=rtype, custom_value=count, custom_unit=unit)


class InvestmentService:
    """Service for managing investments and their contribution schedules."""

    def __init__(self, db: Database):
        """Initialize investment service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require(self, investment_id: int) -> InvestmentEntity:
        investment = self.db.get_investment(investment_id)
        if investment is None:
            raise NotFoundError(investment_not_found(investment_id))
        return investment

    def _check_name(self, name: str, exclude_id: Optional[int] = None) -> str:
        name = name.strip()
        if not name:
            raise ValidationError("Investment name cannot be empty")
        for inv in self.db.list_investments():
            if inv.id != exclude_id and inv.name == name:
                raise ConflictError(f"Investment with name '{name}' already exists")
        return name

    def _check_priority(self, account_priority: Sequence[int]) -> tuple[int, ...]:
        priority = tuple(account_priority)
        if not priority:
            raise ValidationError("Investment needs at least one account in its priority list")
        if len(set(priority)) != len(priority):
            raise ValidationError("Account priority list contains duplicates")
        for account_id in priority:
            if self.db.get_account(account_id) is None:
                raise NotFoundError(account_not_found(account_id))
        return priority

    def _check_group(self, group_id: Optional[int]) -> None:
        if group_id is not None and self.db.get_group(group_id) is None:
            raise NotFoundError(group_not_found(group_id))

    @staticmethod
    def _check_dates(start_date: date, end_date: Optional[date]) -> None:
        if end_date is not None and end_date < start_date:
            raise ValidationError(
                f"End date {end_date.isoformat()} is before start date {start_date.isoformat()}"
            )

    def create_investment(
        self,
        name: str,
        percentage: Decimal,
        account_priority: Sequence[int],
        start_date: date,
        recurrence: Optional[Recurrence] = None,
        end_date: Optional[date] = None,
        group_id: Optional[int] = None,
    ) -> int:
        """Create an investment at the end of the allocation order.

        Args:
            name: Investment name
            percentage: Share of the enclosing group's scope (0-100)
            account_priority: Account IDs to draw from, first drained first
            start_date: First contribution date
            recurrence: Contribution recurrence (monthly if None)
            end_date: Optional last possible contribution date
            group_id: Optional enclosing group ID

        Returns:
            Investment ID

        Raises:
            ValidationError: If any field is invalid
            ConflictError: If investment name already exists
            NotFoundError: If a referenced account or group doesn't exist
        """
        name = self._check_name(name)
        priority = self._check_priority(account_priority)
        self._check_group(group_id)
        self._check_dates(start_date, end_date)

        investment_id = self.db.create_investment(
            name=name,
            percentage=validate_percentage(percentage),
            account_priority=priority,
            recurrence=validate_recurrence(recurrence or Recurrence()),
            start_date=start_date,
            end_date=end_date,
            group_id=group_id,
        )
        logger.info("Created investment %s (%s)", investment_id, name)
        return investment_id

    def get_investment(self, investment_id: int) -> Optional[InvestmentEntity]:
        """Get investment by ID."""
        return self.db.get_investment(investment_id)

    def list_investments(self) -> list[InvestmentEntity]:
        """List investments in allocation order."""
        return self.db.list_investments()

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
        """Update an investment.

        Args:
            update_end_date: If True, update end_date even if it's None (unbounded schedule)
            update_group: If True, update group_id even if it's None (ungrouped)

        Raises:
            NotFoundError: If investment or a referenced account/group not found
            ValidationError: If any field is invalid
        """
        current = self._require(investment_id)

        new_start = start_date if start_date is not None else current.start_date
        new_end = end_date if (update_end_date or end_date is not None) else current.end_date
        self._check_dates(new_start, new_end)
        if update_group or group_id is not None:
            self._check_group(group_id)

        self.db.update_investment(
            investment_id=investment_id,
            name=self._check_name(name, exclude_id=investment_id) if name is not None else None,
            percentage=validate_percentage(percentage) if percentage is not None else None,
            account_priority=(
                self._check_priority(account_priority) if account_priority is not None else None
            ),
            recurrence=validate_recurrence(recurrence) if recurrence is not None else None,
            start_date=start_date,
            end_date=end_date,
            group_id=group_id,
            update_end_date=update_end_date,
            update_group=update_group,
        )
        logger.info("Updated investment %s", investment_id)

    def move_investment(self, investment_id: int, index: int) -> None:
        """Move an investment to a zero-based position in allocation order.

        Earlier investments are funded first when they share accounts.
        """
        self._require(investment_id)
        self.db.move_investment(investment_id, index)
        logger.info("Moved investment %s to position %s", investment_id, index)

    def delete_investment(self, investment_id: int) -> None:
        """Delete an investment.

        Raises:
            NotFoundError: If investment not found
        """
        self._require(investment_id)
        self.db.delete_investment(investment_id)
        logger.info("Deleted investment %s", investment_id)

    def get_schedule(self, investment_id: int) -> list[ScheduleEntry]:
        """Generate the contribution schedule of an investment."""
        return generate_schedule(self._require(investment_id))

    def get_completion_count(self, investment_id: int) -> CompletionCount:
        """Count completed versus scheduled contributions.

        Returns a zero count for unknown investments.
        """
        investment = self.db.get_investment(investment_id)
        if investment is None:
            return CompletionCount(completed=0, total=0)
        return completion_count(investment)

    def toggle_completion(
        self, investment_id: int, when: Union[date, datetime, str]
    ) -> bool:
        """Toggle the completed flag for a contribution date.

        Returns:
            The new completed state of that date
        """
        investment = self._require(investment_id)
        history = toggle_completion(investment.history, when)
        self.db.set_completion_history(investment_id, history)

        day = to_calendar_date(when)
        completed = is_date_completed(history, day)
        logger.info(
            "Marked %s of investment %s as %s",
            day.isoformat(),
            investment_id,
            "completed" if completed else "pending",
        )
        return completed
