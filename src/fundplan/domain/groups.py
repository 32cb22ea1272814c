"""Group hierarchy resolution.

Group percentages compose multiplicatively from root to leaf: a 50% group
inside a 50% group governs 25% of total funds.
"""

from decimal import Decimal
from typing import Iterable, Optional

from fundplan.domain.entities import Group
from fundplan.domain.errors import GroupCycleError, group_cycle
from fundplan.utils.amount_parser import coerce_amount

HUNDRED = Decimal("100")


class GroupHierarchy:
    """Resolves scoped fractions and paths over a forest of groups."""

    def __init__(self, groups: Iterable[Group]):
        self.groups: dict[int, Group] = {g.id: g for g in groups}

    def get(self, group_id: Optional[int]) -> Optional[Group]:
        if group_id is None:
            return None
        return self.groups.get(group_id)

    def ancestors(self, group_id: Optional[int]) -> list[Group]:
        """Return the group followed by its ancestors, nearest first.

        The walk stops silently at a dangling parent reference.

        Raises:
            GroupCycleError: If the parent chain loops
        """
        chain: list[Group] = []
        visited: set[int] = set()
        current = self.get(group_id)
        while current is not None:
            if current.id in visited:
                raise GroupCycleError(group_cycle(current.id))
            visited.add(current.id)
            chain.append(current)
            current = self.get(current.parent_id)
        return chain

    def scoped_fraction(self, group_id: Optional[int]) -> Decimal:
        """Cumulative fraction of total funds governed by a group.

        Returns 1 for ungrouped (None) and for unknown group ids.
        """
        fraction = Decimal("1")
        for group in self.ancestors(group_id):
            fraction *= coerce_amount(group.percentage) / HUNDRED
        return fraction

    def fund_amount(self, group_id: Optional[int], total_funds: Decimal) -> Decimal:
        """Base-currency amount a group governs."""
        return self.scoped_fraction(group_id) * total_funds

    def path(self, group_id: Optional[int]) -> str:
        """Full group path, e.g. "Long Term > Equity"."""
        return " > ".join(g.name for g in reversed(self.ancestors(group_id)))

    def children(self, parent_id: Optional[int]) -> list[Group]:
        """Direct children of a group (roots when parent_id is None).

        Groups whose parent is dangling are treated as roots.
        """
        result = []
        for group in self.groups.values():
            parent = group.parent_id if group.parent_id in self.groups else None
            if parent == parent_id:
                result.append(group)
        return sorted(result, key=lambda g: (g.name, g.id))

    def would_create_cycle(self, group_id: int, parent_id: Optional[int]) -> bool:
        """Check whether re-parenting group_id under parent_id closes a loop."""
        current = parent_id
        visited: set[int] = set()
        while current is not None and current not in visited:
            if current == group_id:
                return True
            visited.add(current)
            parent = self.groups.get(current)
            current = parent.parent_id if parent is not None else None
        return current is not None
