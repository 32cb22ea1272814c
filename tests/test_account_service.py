"""Tests for the account service."""

from datetime import date
from decimal import Decimal

import pytest

from fundplan.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)


def test_create_account(account_service):
    account_id = account_service.create_account(name="  Savings ", balance=Decimal("1500.25"))
    account = account_service.get_account(account_id)

    assert account.name == "Savings"
    assert account.currency == "THB"
    assert account.balance == Decimal("1500.25")
    assert account.created_at is not None


def test_currency_is_normalized(account_service):
    account_id = account_service.create_account(name="US", currency="usd")
    assert account_service.get_account(account_id).currency == "USD"


def test_unsupported_currency(account_service):
    with pytest.raises(ValidationError, match="Unsupported currency"):
        account_service.create_account(name="Euro", currency="EUR")


def test_negative_balance(account_service):
    with pytest.raises(ValidationError):
        account_service.create_account(name="Debt", balance=Decimal("-1"))


def test_empty_name(account_service):
    with pytest.raises(ValidationError):
        account_service.create_account(name="   ")


def test_duplicate_name(account_service):
    account_service.create_account(name="Savings")
    with pytest.raises(ConflictError):
        account_service.create_account(name="Savings")


def test_list_accounts(account_service, sample_accounts):
    names = [acc.name for acc in account_service.list_accounts()]
    assert names == ["Savings", "Brokerage"]


def test_update_account(account_service, sample_accounts):
    savings = sample_accounts["savings"]
    account_service.update_account(savings.id, name="Rainy Day", balance=Decimal("20000"))

    updated = account_service.get_account(savings.id)
    assert updated.name == "Rainy Day"
    assert updated.balance == Decimal("20000")
    assert updated.currency == "THB"


def test_update_account_name_conflict(account_service, sample_accounts):
    with pytest.raises(ConflictError):
        account_service.update_account(sample_accounts["savings"].id, name="Brokerage")


def test_update_missing_account(account_service):
    with pytest.raises(NotFoundError):
        account_service.update_account(999, name="Ghost")


def test_delete_account(account_service, sample_accounts):
    account_service.delete_account(sample_accounts["brokerage"].id)
    assert account_service.get_account(sample_accounts["brokerage"].id) is None


def test_delete_account_used_by_investment(account_service, investment_service, sample_accounts):
    investment_service.create_investment(
        name="Index Fund",
        percentage=Decimal("10"),
        account_priority=[sample_accounts["savings"].id],
        start_date=date(2024, 1, 1),
    )

    with pytest.raises(DependencyError, match="Index Fund"):
        account_service.delete_account(sample_accounts["savings"].id)
