"""Group domain service."""

import logging
from decimal import Decimal
from typing import Optional

from fundplan.database.base import Database
from fundplan.domain.constants import DEFAULT_GROUP_COLOR, DEFAULT_GROUP_PERCENTAGE
from fundplan.domain.entities import Group as GroupEntity
from fundplan.domain.errors import (
    ConflictError,
    DependencyError,
    GroupCycleError,
    NotFoundError,
    ValidationError,
    group_delete_blocked,
    group_not_found,
)
from fundplan.domain.groups import GroupHierarchy

logger = logging.getLogger(__name__)


def validate_percentage(percentage: Decimal) -> Decimal:
    """Ensure a percentage lies within 0..100."""
    if not percentage.is_finite() or percentage < 0 or percentage > 100:
        raise ValidationError(f"Percentage must be between 0 and 100, got {percentage}")
    return percentage


class GroupService:
    """Service for managing budget groups."""

    def __init__(self, db: Database):
        """Initialize group service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_name(self, name: str, exclude_id: Optional[int] = None) -> str:
        name = name.strip()
        if not name:
            raise ValidationError("Group name cannot be empty")
        for grp in self.db.list_groups():
            if grp.id != exclude_id and grp.name == name:
                raise ConflictError(f"Group with name '{name}' already exists")
        return name

    def _check_parent(self, parent_id: Optional[int]) -> None:
        if parent_id is not None and self.db.get_group(parent_id) is None:
            raise NotFoundError(f"Parent group {parent_id} not found")

    def create_group(
        self,
        name: str,
        percentage: Decimal = DEFAULT_GROUP_PERCENTAGE,
        parent_id: Optional[int] = None,
        color: str = DEFAULT_GROUP_COLOR,
    ) -> int:
        """Create a group.

        Args:
            name: Group name
            percentage: Share of the parent's scope (0-100)
            parent_id: Optional parent group ID (None for a root group)
            color: Display color

        Returns:
            Group ID

        Raises:
            ValidationError: If name or percentage is invalid
            ConflictError: If group name already exists
            NotFoundError: If the parent group doesn't exist
        """
        name = self._check_name(name)
        self._check_parent(parent_id)
        group_id = self.db.create_group(
            name=name,
            percentage=validate_percentage(percentage),
            color=color,
            parent_id=parent_id,
        )
        logger.info("Created group %s (%s)", group_id, name)
        return group_id

    def get_group(self, group_id: int) -> Optional[GroupEntity]:
        """Get group by ID."""
        return self.db.get_group(group_id)

    def get_group_by_path(self, path: str) -> Optional[GroupEntity]:
        """Get group by path (e.g., "Long Term > Equity") or plain name."""
        hierarchy = self.hierarchy()
        for group in hierarchy.groups.values():
            if hierarchy.path(group.id) == path.strip() or group.name == path.strip():
                return group
        return None

    def list_groups(self) -> list[GroupEntity]:
        """List all groups."""
        return self.db.list_groups()

    def hierarchy(self) -> GroupHierarchy:
        """Build a hierarchy resolver over all groups."""
        return GroupHierarchy(self.db.list_groups())

    def format_group_path(self, group_id: Optional[int]) -> str:
        """Get full path for a group, or "" when ungrouped."""
        return self.hierarchy().path(group_id)

    def update_group(
        self,
        group_id: int,
        name: Optional[str] = None,
        percentage: Optional[Decimal] = None,
        color: Optional[str] = None,
        parent_id: Optional[int] = None,
        update_parent: bool = False,
    ) -> None:
        """Update a group.

        Args:
            update_parent: If True, update parent_id even if it's None (to make a root)

        Raises:
            NotFoundError: If group or new parent not found
            GroupCycleError: If the new parent would create a cycle
        """
        if self.db.get_group(group_id) is None:
            raise NotFoundError(group_not_found(group_id))

        if update_parent or parent_id is not None:
            self._check_parent(parent_id)
            if self.hierarchy().would_create_cycle(group_id, parent_id):
                raise GroupCycleError(
                    f"Cannot move group {group_id} under group {parent_id}: it would create a cycle"
                )

        self.db.update_group(
            group_id=group_id,
            name=self._check_name(name, exclude_id=group_id) if name is not None else None,
            percentage=validate_percentage(percentage) if percentage is not None else None,
            color=color,
            parent_id=parent_id,
            update_parent=update_parent,
        )
        logger.info("Updated group %s", group_id)

    def delete_group(self, group_id: int) -> None:
        """Delete a group.

        Raises:
            NotFoundError: If group not found
            DependencyError: If the group still has child groups or investments
        """
        if self.db.get_group(group_id) is None:
            raise NotFoundError(group_not_found(group_id))

        child_count, investment_count = self.db.get_group_dependency_counts(group_id)
        if child_count > 0 or investment_count > 0:
            raise DependencyError(group_delete_blocked(group_id, child_count, investment_count))

        self.db.delete_group(group_id)
        logger.info("Deleted group %s", group_id)
