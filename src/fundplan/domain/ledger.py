"""Completion ledger for scheduled contributions.

Entries are keyed by calendar date; the time of day of any input is dropped.
"""

from datetime import date, datetime
from typing import Iterable, Union

from fundplan.domain.entities import CompletionCount, CompletionEntry, Investment
from fundplan.utils.date_parser import to_calendar_date


def is_date_completed(history: Iterable[CompletionEntry], when: date) -> bool:
    """Return True if history marks the calendar date of when as executed."""
    day = to_calendar_date(when)
    return any(entry.completed and entry.date == day for entry in history)


def toggle_completion(
    history: Iterable[CompletionEntry], when: Union[date, datetime, str]
) -> tuple[CompletionEntry, ...]:
    """Flip the completion flag for a date.

    If history has an entry for the same calendar date its flag is inverted,
    otherwise a new completed entry is appended.

    Returns:
        New history tuple; the input is left untouched
    """
    day = to_calendar_date(when)
    entries = list(history)
    for index, entry in enumerate(entries):
        if entry.date == day:
            entries[index] = CompletionEntry(date=entry.date, completed=not entry.completed)
            return tuple(entries)
    entries.append(CompletionEntry(date=day, completed=True))
    return tuple(entries)


def completion_count(investment: Investment) -> CompletionCount:
    """Count completed entries of the investment's generated schedule."""
    from fundplan.domain.schedule import generate_schedule

    schedule = generate_schedule(investment)
    return CompletionCount(
        completed=sum(1 for entry in schedule if entry.completed),
        total=len(schedule),
    )
