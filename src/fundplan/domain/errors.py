"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class GroupCycleError(ValidationError):
    """A group's parent chain loops back onto itself."""


class InvalidExchangeRateError(ValidationError):
    """Exchange rate is missing, non-numeric or not positive."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def group_not_found(group_id: int) -> str:
    """Return message for missing group."""
    return f"Group {group_id} not found"


def investment_not_found(investment_id: int) -> str:
    """Return message for missing investment."""
    return f"Investment {investment_id} not found"


def group_cycle(group_id: int) -> str:
    """Return message for a cyclic group parent chain."""
    return f"Group {group_id} is part of a parent cycle"


def account_delete_blocked(account_id: int, investment_names: list[str]) -> str:
    """Return message when account is still listed in investment priorities."""
    count = len(investment_names)
    return (
        f"Cannot delete account {account_id}: it is used by "
        f"{count} investment{'s' if count != 1 else ''} ({', '.join(investment_names)}). "
        "Please remove it from their account priority first."
    )


def group_delete_blocked(group_id: int, child_count: int, investment_count: int) -> str:
    """Return message when group still has child groups or investments."""
    parts = []
    if child_count > 0:
        parts.append(f"{child_count} child group{'s' if child_count != 1 else ''}")
    if investment_count > 0:
        parts.append(f"{investment_count} investment{'s' if investment_count != 1 else ''}")
    return (
        f"Cannot delete group {group_id}: it has {', '.join(parts)}. "
        "Please move or delete them first."
    )
