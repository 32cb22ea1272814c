"""Tests for the group service."""

from datetime import date
from decimal import Decimal

import pytest

from fundplan.domain.errors import (
    ConflictError,
    DependencyError,
    GroupCycleError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def nested_groups(group_service):
    long_term = group_service.create_group(name="Long Term", percentage=Decimal("70"))
    equity = group_service.create_group(name="Equity", percentage=Decimal("50"), parent_id=long_term)
    return {"long_term": long_term, "equity": equity}


def test_create_group_defaults(group_service):
    group_id = group_service.create_group(name="Everything")
    group = group_service.get_group(group_id)

    assert group.percentage == Decimal("100")
    assert group.parent_id is None
    assert group.color == "#4f46e5"


def test_create_child_group(group_service, nested_groups):
    equity = group_service.get_group(nested_groups["equity"])
    assert equity.parent_id == nested_groups["long_term"]
    assert group_service.format_group_path(equity.id) == "Long Term > Equity"


def test_create_group_with_missing_parent(group_service):
    with pytest.raises(NotFoundError):
        group_service.create_group(name="Orphan", parent_id=42)


@pytest.mark.parametrize("percentage", ["-1", "100.01"])
def test_percentage_out_of_range(group_service, percentage):
    with pytest.raises(ValidationError):
        group_service.create_group(name="Bad", percentage=Decimal(percentage))


def test_duplicate_group_name(group_service, nested_groups):
    with pytest.raises(ConflictError):
        group_service.create_group(name="Equity")


def test_get_group_by_path(group_service, nested_groups):
    assert group_service.get_group_by_path("Long Term > Equity").id == nested_groups["equity"]
    assert group_service.get_group_by_path("Equity").id == nested_groups["equity"]
    assert group_service.get_group_by_path("Bonds") is None


def test_hierarchy_fraction(group_service, nested_groups):
    hierarchy = group_service.hierarchy()
    assert hierarchy.scoped_fraction(nested_groups["equity"]) == Decimal("0.35")


def test_update_group(group_service, nested_groups):
    group_service.update_group(nested_groups["equity"], name="Stocks", percentage=Decimal("60"))
    group = group_service.get_group(nested_groups["equity"])
    assert group.name == "Stocks"
    assert group.percentage == Decimal("60")
    assert group.parent_id == nested_groups["long_term"]


def test_move_group_to_root(group_service, nested_groups):
    group_service.update_group(nested_groups["equity"], update_parent=True)
    assert group_service.get_group(nested_groups["equity"]).parent_id is None


def test_update_group_rejects_cycle(group_service, nested_groups):
    with pytest.raises(GroupCycleError):
        group_service.update_group(nested_groups["long_term"], parent_id=nested_groups["equity"])


def test_update_group_rejects_self_parent(group_service, nested_groups):
    with pytest.raises(GroupCycleError):
        group_service.update_group(nested_groups["equity"], parent_id=nested_groups["equity"])


def test_delete_leaf_group(group_service, nested_groups):
    group_service.delete_group(nested_groups["equity"])
    assert group_service.get_group(nested_groups["equity"]) is None


def test_delete_group_with_children(group_service, nested_groups):
    with pytest.raises(DependencyError, match="1 child group"):
        group_service.delete_group(nested_groups["long_term"])


def test_delete_group_with_investments(
    group_service, investment_service, sample_accounts, nested_groups
):
    investment_service.create_investment(
        name="World Index",
        percentage=Decimal("50"),
        account_priority=[sample_accounts["savings"].id],
        start_date=date(2024, 1, 1),
        group_id=nested_groups["equity"],
    )

    with pytest.raises(DependencyError, match="1 investment"):
        group_service.delete_group(nested_groups["equity"])


def test_delete_missing_group(group_service):
    with pytest.raises(NotFoundError):
        group_service.delete_group(999)
