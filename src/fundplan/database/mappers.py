"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, keeping the frozen domain entities
independent of the table layout.
"""

from decimal import Decimal

from fundplan.domain import entities as domain
from fundplan.database.models import (
    Account as ORMAccount,
    Group as ORMGroup,
    Investment as ORMInvestment,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        currency=orm_account.currency,
        balance=Decimal(orm_account.balance),
        created_at=orm_account.created_at,
    )


def group_to_domain(orm_group: ORMGroup) -> domain.Group:
    """Convert SQLAlchemy Group model to domain Group entity."""
    return domain.Group(
        id=orm_group.id,
        name=orm_group.name,
        percentage=Decimal(orm_group.percentage),
        parent_id=orm_group.parent_id,
        color=orm_group.color,
        created_at=orm_group.created_at,
    )


def recurrence_to_domain(orm_investment: ORMInvestment) -> domain.Recurrence:
    """Build the domain Recurrence from an investment row."""
    unit = orm_investment.custom_unit
    return domain.Recurrence(
        type=domain.RecurrenceType(orm_investment.recurrence_type),
        custom_value=orm_investment.custom_value,
        custom_unit=domain.RecurrenceUnit(unit) if unit is not None else None,
    )


def investment_to_domain(orm_investment: ORMInvestment) -> domain.Investment:
    """Convert SQLAlchemy Investment model to domain Investment entity."""
    return domain.Investment(
        id=orm_investment.id,
        name=orm_investment.name,
        percentage=Decimal(orm_investment.percentage),
        account_priority=tuple(
            entry.account_id for entry in orm_investment.priority_entries
        ),
        group_id=orm_investment.group_id,
        recurrence=recurrence_to_domain(orm_investment),
        start_date=orm_investment.start_date,
        end_date=orm_investment.end_date,
        history=tuple(
            domain.CompletionEntry(date=entry.date, completed=entry.completed)
            for entry in orm_investment.completion_entries
        ),
        position=orm_investment.position,
        created_at=orm_investment.created_at,
    )
