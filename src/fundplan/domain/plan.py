"""Plan domain service.

Ties the store to the pure engine: every call reads a fresh snapshot and
recomputes the allocation table from scratch.
"""

import logging
from decimal import Decimal

from fundplan.database.base import Database
from fundplan.domain.account import AccountService
from fundplan.domain.allocation import recompute, validate_investment
from fundplan.domain.currency import validate_exchange_rate
from fundplan.domain.entities import CompletionEntry, Investment, PlanModel, PlanSnapshot
from fundplan.domain.export import render_csv, render_text
from fundplan.domain.group import GroupService
from fundplan.domain.groups import GroupHierarchy
from fundplan.domain.investment import InvestmentService

logger = logging.getLogger(__name__)


class PlanService:
    """Service for plan-wide settings, recomputation and export."""

    def __init__(self, db: Database):
        """Initialize plan service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_exchange_rate(self) -> Decimal:
        """Get the base-per-foreign exchange rate."""
        return self.db.get_exchange_rate()

    def set_exchange_rate(self, rate) -> Decimal:
        """Set the exchange rate.

        Raises:
            InvalidExchangeRateError: If rate is not a positive number
        """
        value = validate_exchange_rate(rate)
        self.db.set_exchange_rate(value)
        logger.info("Exchange rate set to %s", value)
        return value

    def load_snapshot(self) -> PlanSnapshot:
        """Read the current plan as an immutable snapshot."""
        return PlanSnapshot(
            exchange_rate=self.db.get_exchange_rate(),
            accounts=tuple(self.db.list_accounts()),
            groups=tuple(self.db.list_groups()),
            investments=tuple(self.db.list_investments()),
        )

    def compute(self) -> tuple[PlanSnapshot, PlanModel]:
        """Load a snapshot and recompute its allocation table."""
        snapshot = self.load_snapshot()
        return snapshot, recompute(snapshot)

    def can_fund(self, investment: Investment, is_update: bool = False) -> bool:
        """Check whether a candidate investment would receive any funds."""
        snapshot, model = self.compute()
        return validate_investment(snapshot, investment, model=model, is_update=is_update)

    def export(self, fmt: str = "text") -> str:
        """Render the computed plan as "text" or "csv"."""
        snapshot, model = self.compute()
        if fmt == "csv":
            return render_csv(snapshot, model)
        if fmt == "text":
            return render_text(snapshot, model)
        raise ValueError(f"Unknown export format '{fmt}'. Supported formats: text, csv")

    def import_snapshot(self, snapshot: PlanSnapshot) -> dict[str, int]:
        """Add every entity of a snapshot to the store.

        Entities go through the regular services, so the same validation
        applies. The import runs in one transaction: an invalid entity raises
        a DomainError and leaves the store as it was before the call.
        Entity ids are reassigned by the store and references between the
        imported entities are remapped. Priority entries naming accounts
        that are not part of the snapshot are dropped; investments left
        without a start date or without any account are skipped.

        Returns:
            Counts of created accounts, groups and investments
        """
        accounts = AccountService(self.db)
        groups = GroupService(self.db)
        investments = InvestmentService(self.db)

        with self.db.transaction():
            self.set_exchange_rate(snapshot.exchange_rate)

            account_ids: dict[int, int] = {}
            for acc in snapshot.accounts:
                account_ids[acc.id] = accounts.create_account(
                    name=acc.name, currency=acc.currency, balance=acc.balance
                )

            # Parents first, so child groups can reference their new parent id
            hierarchy = GroupHierarchy(snapshot.groups)
            group_ids: dict[int, int] = {}
            pending = hierarchy.children(None)
            while pending:
                group = pending.pop(0)
                group_ids[group.id] = groups.create_group(
                    name=group.name,
                    percentage=group.percentage,
                    parent_id=group_ids.get(group.parent_id),
                    color=group.color,
                )
                pending.extend(hierarchy.children(group.id))

            imported = 0
            for inv in snapshot.investments:
                if inv.start_date is None:
                    logger.warning("Skipping investment %r without a start date", inv.name)
                    continue
                priority: list[int] = []
                for account_id in inv.account_priority:
                    mapped = account_ids.get(account_id)
                    if mapped is not None and mapped not in priority:
                        priority.append(mapped)
                if not priority:
                    logger.warning("Skipping investment %r without any imported account", inv.name)
                    continue
                investment_id = investments.create_investment(
                    name=inv.name,
                    percentage=inv.percentage,
                    account_priority=priority,
                    start_date=inv.start_date,
                    recurrence=inv.recurrence,
                    end_date=inv.end_date,
                    group_id=group_ids.get(inv.group_id),
                )
                if inv.history:
                    completed_by_date: dict = {}
                    for entry in inv.history:
                        completed_by_date[entry.date] = completed_by_date.get(entry.date, False) or entry.completed
                    self.db.set_completion_history(
                        investment_id,
                        [CompletionEntry(date=day, completed=done) for day, done in completed_by_date.items()],
                    )
                imported += 1

        logger.info(
            "Imported %d accounts, %d groups, %d investments",
            len(account_ids),
            len(group_ids),
            imported,
        )
        return {"accounts": len(account_ids), "groups": len(group_ids), "investments": imported}
