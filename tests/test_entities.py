"""Tests for domain entities."""

import pytest
from datetime import datetime, date, UTC
from decimal import Decimal

from fundplan.domain.entities import (
    Account,
    CompletionEntry,
    Investment,
    PlanModel,
    PlanSnapshot,
    Recurrence,
    RecurrenceType,
)


class TestAccount:
    """Tests for Account entity."""

    def test_create_account(self):
        """Test creating an Account entity."""
        account = Account(
            id=1,
            name="Savings",
            currency="USD",
            balance=Decimal("10.50"),
            created_at=datetime.now(UTC),
        )
        assert account.id == 1
        assert account.currency == "USD"
        assert account.balance == Decimal("10.50")
        assert isinstance(account.created_at, datetime)

    def test_account_defaults(self):
        account = Account(id=1, name="Savings")
        assert account.currency == "THB"
        assert account.balance == Decimal("0")

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(id=1, name="Savings")
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            account.name = "New Name"


class TestInvestment:
    """Tests for Investment entity."""

    def test_investment_defaults(self):
        investment = Investment(id=1, name="Fund")
        assert investment.recurrence == Recurrence(RecurrenceType.MONTHLY)
        assert investment.account_priority == ()
        assert investment.history == ()
        assert investment.start_date is None

    def test_investment_equality(self):
        history = (CompletionEntry(date(2024, 1, 1)),)
        first = Investment(id=1, name="Fund", account_priority=(1, 2), history=history)
        second = Investment(id=1, name="Fund", account_priority=(1, 2), history=history)
        assert first == second
        assert first != Investment(id=1, name="Fund", account_priority=(2, 1), history=history)


class TestPlanSnapshot:
    """Tests for PlanSnapshot lookups."""

    def test_lookups(self):
        snapshot = PlanSnapshot(
            accounts=(Account(id=3, name="Savings"),),
            investments=(Investment(id=7, name="Fund"),),
        )
        assert snapshot.exchange_rate == Decimal("32")
        assert snapshot.account_index() == {3: Account(id=3, name="Savings")}
        assert snapshot.get_investment(7).name == "Fund"
        assert snapshot.get_investment(8) is None


class TestPlanModel:
    """Tests for PlanModel helpers."""

    def test_is_overspent(self):
        model = PlanModel(fully_allocated={1: True, 2: False})
        assert not model.is_overspent(1)
        assert model.is_overspent(2)
        assert not model.is_overspent(3)

    def test_cost_breakdown(self):
        model = PlanModel(costs={1: {10: Decimal("5"), 99: Decimal("2")}})
        accounts = {10: Account(id=10, name="Brokerage", currency="USD")}

        lines = model.cost_breakdown(1, accounts)

        assert [(line.account_name, line.currency, line.amount) for line in lines] == [
            ("Brokerage", "USD", Decimal("5")),
            ("Unknown", "THB", Decimal("2")),
        ]
        assert model.cost_breakdown(2, accounts) == []
