"""Recurring contribution (DCA) schedule generation.

Two modes:
- Bounded (end date set): every scheduled date from start through end.
- Unbounded (no end date): completed dates followed by the single next
  outstanding date.

Both modes stop after MAX_SCHEDULE_ITERATIONS entries. Schedules are never
cached; each call rebuilds the list from the investment's configuration and
completion history.
"""

import logging
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from fundplan.domain.constants import MAX_SCHEDULE_ITERATIONS
from fundplan.domain.entities import (
    Investment,
    Recurrence,
    RecurrenceType,
    RecurrenceUnit,
    ScheduleEntry,
)
from fundplan.domain.ledger import is_date_completed

logger = logging.getLogger(__name__)

FIXED_INTERVALS = {
    RecurrenceType.DAILY: relativedelta(days=1),
    RecurrenceType.WEEKLY: relativedelta(days=7),
    RecurrenceType.MONTHLY: relativedelta(months=1),
    RecurrenceType.QUARTERLY: relativedelta(months=3),
    RecurrenceType.YEARLY: relativedelta(years=1),
}


def _custom_count(value) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 1
    return count if count > 0 else 1


def resolve_interval(recurrence: Recurrence) -> relativedelta:
    """Translate a recurrence configuration into a calendar step.

    Unknown types fall back to monthly. Custom recurrences with a missing
    or non-positive count use 1, and an unknown unit means months.
    """
    try:
        rtype = RecurrenceType(recurrence.type)
    except ValueError:
        return FIXED_INTERVALS[RecurrenceType.MONTHLY]

    if rtype != RecurrenceType.CUSTOM:
        return FIXED_INTERVALS[rtype]

    count = _custom_count(recurrence.custom_value)
    try:
        unit = RecurrenceUnit(recurrence.custom_unit)
    except ValueError:
        unit = RecurrenceUnit.MONTHS

    if unit == RecurrenceUnit.DAYS:
        return relativedelta(days=count)
    if unit == RecurrenceUnit.YEARS:
        return relativedelta(years=count)
    return relativedelta(months=count)


def advance_date(current: date, interval: relativedelta) -> date:
    """Step a date forward by interval.

    Month and year steps keep the day number and let days past the end of
    the target month roll into the next one (2024-01-31 + 1 month is
    2024-03-02, 2024-02-29 + 1 year is 2025-03-01).
    """
    if not (interval.years or interval.months):
        return current + interval
    first_of_month = current.replace(day=1) + relativedelta(
        years=interval.years, months=interval.months
    )
    return first_of_month + timedelta(days=current.day - 1 + interval.days)


def generate_schedule(investment: Investment) -> list[ScheduleEntry]:
    """Expand an investment's recurrence into dated entries.

    Returns:
        Ordered list of ScheduleEntry; empty when the start date is unset
    """
    if investment.start_date is None:
        return []

    interval = resolve_interval(investment.recurrence)
    history = investment.history
    schedule: list[ScheduleEntry] = []
    current = investment.start_date

    if investment.end_date is not None:
        while len(schedule) < MAX_SCHEDULE_ITERATIONS and current <= investment.end_date:
            schedule.append(ScheduleEntry(date=current, completed=is_date_completed(history, current)))
            current = advance_date(current, interval)
        truncated = current <= investment.end_date
    else:
        truncated = True
        while len(schedule) < MAX_SCHEDULE_ITERATIONS:
            completed = is_date_completed(history, current)
            schedule.append(ScheduleEntry(date=current, completed=completed))
            if not completed:
                truncated = False
                break
            current = advance_date(current, interval)

    if truncated:
        logger.warning(
            "Schedule for investment %s truncated at %d entries",
            investment.id,
            MAX_SCHEDULE_ITERATIONS,
        )
    return schedule
