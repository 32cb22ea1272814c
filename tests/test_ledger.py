"""Tests for the completion ledger."""

from datetime import date, datetime

from fundplan.domain.entities import CompletionEntry, Investment
from fundplan.domain.ledger import completion_count, is_date_completed, toggle_completion


def test_toggle_new_date_appends_completed_entry():
    history = toggle_completion((), date(2024, 1, 1))
    assert history == (CompletionEntry(date(2024, 1, 1), True),)


def test_toggle_existing_date_flips_flag():
    history = (CompletionEntry(date(2024, 1, 1), True),)
    assert toggle_completion(history, date(2024, 1, 1)) == (CompletionEntry(date(2024, 1, 1), False),)


def test_toggle_twice_restores_completion_state():
    once = toggle_completion((), date(2024, 1, 1))
    twice = toggle_completion(once, date(2024, 1, 1))

    assert not is_date_completed(twice, date(2024, 1, 1))
    assert len(twice) == 1


def test_toggle_leaves_input_untouched():
    history = (CompletionEntry(date(2024, 1, 1), True),)
    toggle_completion(history, date(2024, 2, 1))
    assert history == (CompletionEntry(date(2024, 1, 1), True),)


def test_time_of_day_is_ignored():
    history = toggle_completion((), datetime(2024, 1, 1, 17, 30))
    assert is_date_completed(history, date(2024, 1, 1))

    history = toggle_completion(history, "2024-01-01T23:59:00")
    assert not is_date_completed(history, date(2024, 1, 1))


def test_completion_count():
    investment = Investment(
        id=1,
        name="DCA",
        start_date=date(2024, 1, 1),
        end_date=date(2024, 4, 1),
        history=(
            CompletionEntry(date(2024, 1, 1)),
            CompletionEntry(date(2024, 3, 1)),
            CompletionEntry(date(2024, 2, 15)),
        ),
    )
    count = completion_count(investment)
    assert count.completed == 2
    assert count.total == 4


def test_completion_count_without_start_date():
    count = completion_count(Investment(id=1, name="Idle"))
    assert (count.completed, count.total) == (0, 0)
