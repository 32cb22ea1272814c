"""Waterfall allocation of account balances to investments.

Each investment claims a percentage of its group's scoped share of total
funds and drains its prioritized accounts in order until the claim is met.
Investments are processed in stored list order and share one pool of
remaining balances, so earlier investments are served first.

The whole table is recomputed from scratch on every change; there is no
incremental update path.
"""

import logging
from decimal import Decimal
from typing import Optional

from fundplan.domain.constants import ALLOCATION_TOLERANCE
from fundplan.domain.currency import CurrencyConverter
from fundplan.domain.entities import Account, Investment, PlanModel, PlanSnapshot
from fundplan.domain.groups import GroupHierarchy
from fundplan.utils.amount_parser import coerce_amount

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def total_funds(accounts, converter: CurrencyConverter) -> Decimal:
    """Sum of all account balances in the base currency."""
    total = Decimal("0")
    for account in accounts:
        total += converter.to_base(coerce_amount(account.balance), account.currency)
    return total


def allocate_investment(
    investment: Investment,
    remaining: dict[int, Decimal],
    funds: Decimal,
    accounts: dict[int, Account],
    hierarchy: GroupHierarchy,
    converter: CurrencyConverter,
) -> tuple[dict[int, Decimal], bool]:
    """Allocate one investment against the remaining balances.

    remaining is updated in place.

    Returns:
        Tuple of (costs by account id in account currency, fully allocated)
    """
    percentage = coerce_amount(investment.percentage)
    if percentage <= 0:
        return {}, True

    scope_base = hierarchy.scoped_fraction(investment.group_id) * funds
    if scope_base <= 0:
        return {}, percentage == 0

    needed = percentage / HUNDRED * scope_base
    costs: dict[int, Decimal] = {}

    for account_id in investment.account_priority:
        if needed < ALLOCATION_TOLERANCE:
            break

        account = accounts.get(account_id)
        if account is None:
            logger.debug(
                "Investment %s lists unknown account %s, skipping", investment.id, account_id
            )
            continue

        available = remaining.get(account_id, Decimal("0"))
        if available <= 0:
            continue

        available_base = converter.to_base(available, account.currency)
        allocate_base = min(needed, available_base)
        allocate = converter.from_base(allocate_base, account.currency)

        if allocate > 0:
            costs[account_id] = costs.get(account_id, Decimal("0")) + allocate
            remaining[account_id] = available - allocate
            needed -= allocate_base

    fully_allocated = needed < ALLOCATION_TOLERANCE
    if not fully_allocated:
        logger.debug(
            "Investment %s short by %s base units after exhausting its accounts",
            investment.id,
            needed,
        )
    return costs, fully_allocated


def recompute(snapshot: PlanSnapshot) -> PlanModel:
    """Recompute the full allocation table for a snapshot.

    Raises:
        InvalidExchangeRateError: If the snapshot's exchange rate is not positive
        GroupCycleError: If an investment's group chain loops
    """
    converter = CurrencyConverter(snapshot.exchange_rate)
    hierarchy = GroupHierarchy(snapshot.groups)
    accounts = snapshot.account_index()

    funds = total_funds(snapshot.accounts, converter)
    remaining = {acc.id: coerce_amount(acc.balance) for acc in snapshot.accounts}

    costs: dict[int, dict[int, Decimal]] = {}
    fully_allocated: dict[int, bool] = {}
    for investment in snapshot.investments:
        inv_costs, complete = allocate_investment(
            investment, remaining, funds, accounts, hierarchy, converter
        )
        costs[investment.id] = inv_costs
        fully_allocated[investment.id] = complete

    logger.debug(
        "Recomputed %d investments over %d accounts (total funds %s)",
        len(snapshot.investments),
        len(snapshot.accounts),
        funds,
    )
    return PlanModel(
        total_funds=funds,
        costs=costs,
        fully_allocated=fully_allocated,
        remaining_balances=remaining,
    )


def investment_total_cost(
    model: PlanModel, investment_id: int, snapshot: PlanSnapshot
) -> Decimal:
    """Total cost of an investment across its accounts, in the base currency."""
    converter = CurrencyConverter(snapshot.exchange_rate)
    accounts = snapshot.account_index()
    total = Decimal("0")
    for account_id, amount in model.costs.get(investment_id, {}).items():
        account = accounts.get(account_id)
        currency = account.currency if account else converter.base
        total += converter.to_base(amount, currency)
    return total


def validate_investment(
    snapshot: PlanSnapshot,
    investment: Investment,
    model: Optional[PlanModel] = None,
    is_update: bool = False,
) -> bool:
    """Check whether a candidate investment would receive any funds.

    Balances are reduced by the costs of every other investment in the
    current model before the candidate is allocated.

    Args:
        snapshot: Current plan snapshot
        investment: Candidate investment (new, or an edited existing one)
        model: Previously computed model for snapshot (recomputed if None)
        is_update: If True, the existing investment with the same id is ignored
    """
    if model is None:
        model = recompute(snapshot)

    converter = CurrencyConverter(snapshot.exchange_rate)
    hierarchy = GroupHierarchy(snapshot.groups)
    accounts = snapshot.account_index()

    balances = {acc.id: coerce_amount(acc.balance) for acc in snapshot.accounts}
    for inv in snapshot.investments:
        if is_update and inv.id == investment.id:
            continue
        for account_id, amount in model.costs.get(inv.id, {}).items():
            balances[account_id] = balances.get(account_id, Decimal("0")) - amount

    costs, _ = allocate_investment(
        investment, balances, model.total_funds, accounts, hierarchy, converter
    )
    return sum(costs.values(), Decimal("0")) > 0
