"""Tests for group hierarchy resolution."""

from decimal import Decimal

import pytest

from fundplan.domain.entities import Group
from fundplan.domain.errors import GroupCycleError
from fundplan.domain.groups import GroupHierarchy


def _group(group_id, name, percentage, parent_id=None):
    return Group(id=group_id, name=name, percentage=Decimal(percentage), parent_id=parent_id)


@pytest.fixture
def hierarchy():
    return GroupHierarchy(
        [
            _group(1, "Long Term", "50"),
            _group(2, "Equity", "50", parent_id=1),
            _group(3, "Bonds", "50", parent_id=1),
            _group(4, "Cash", "20"),
        ]
    )


def test_ungrouped_fraction_is_one(hierarchy):
    assert hierarchy.scoped_fraction(None) == Decimal("1")


def test_root_fraction(hierarchy):
    assert hierarchy.scoped_fraction(1) == Decimal("0.5")
    assert hierarchy.scoped_fraction(4) == Decimal("0.2")


def test_nested_fractions_multiply(hierarchy):
    assert hierarchy.scoped_fraction(2) == Decimal("0.25")


def test_fund_amount(hierarchy):
    assert hierarchy.fund_amount(2, Decimal("10000")) == Decimal("2500")


def test_unknown_group_resolves_to_full_scope(hierarchy):
    assert hierarchy.scoped_fraction(99) == Decimal("1")


def test_dangling_parent_truncates_chain():
    hierarchy = GroupHierarchy([_group(1, "Orphan", "40", parent_id=42)])
    assert hierarchy.scoped_fraction(1) == Decimal("0.4")
    assert hierarchy.path(1) == "Orphan"
    assert [g.id for g in hierarchy.children(None)] == [1]


def test_negative_percentage_counts_as_zero():
    hierarchy = GroupHierarchy([_group(1, "Broken", "-10")])
    assert hierarchy.scoped_fraction(1) == Decimal("0")


def test_path(hierarchy):
    assert hierarchy.path(2) == "Long Term > Equity"
    assert hierarchy.path(None) == ""


def test_children_sorted_by_name(hierarchy):
    assert [g.name for g in hierarchy.children(1)] == ["Bonds", "Equity"]
    assert [g.name for g in hierarchy.children(None)] == ["Cash", "Long Term"]


def test_cycle_raises():
    hierarchy = GroupHierarchy([_group(1, "A", "50", parent_id=2), _group(2, "B", "50", parent_id=1)])
    with pytest.raises(GroupCycleError):
        hierarchy.scoped_fraction(1)


def test_self_parent_raises():
    hierarchy = GroupHierarchy([_group(1, "A", "50", parent_id=1)])
    with pytest.raises(GroupCycleError):
        hierarchy.path(1)


def test_would_create_cycle(hierarchy):
    assert hierarchy.would_create_cycle(1, 2)
    assert hierarchy.would_create_cycle(1, 1)
    assert not hierarchy.would_create_cycle(2, 4)
    assert not hierarchy.would_create_cycle(2, None)
