"""Read-only text and CSV projections of a computed plan."""

import csv
import io
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from fundplan.domain.allocation import investment_total_cost
from fundplan.domain.currency import CurrencyConverter
from fundplan.domain.entities import Group, Investment, PlanModel, PlanSnapshot
from fundplan.domain.groups import GroupHierarchy
from fundplan.domain.ledger import completion_count
from fundplan.utils.formatting import format_money, format_number

INDENT_SIZE = 4
LINE_WIDTH = 80


@dataclass(frozen=True)
class InvestmentLine:
    """Export row for one investment."""

    investment: Investment
    group_path: str
    total_cost: Decimal
    per_period: Optional[Decimal]
    completed: int
    total: int
    overspent: bool


def build_investment_line(
    investment: Investment,
    snapshot: PlanSnapshot,
    model: PlanModel,
    hierarchy: GroupHierarchy,
) -> InvestmentLine:
    cost = investment_total_cost(model, investment.id, snapshot)
    progress = completion_count(investment)
    per_period = cost / progress.total if progress.total > 0 else None
    return InvestmentLine(
        investment=investment,
        group_path=hierarchy.path(investment.group_id),
        total_cost=cost,
        per_period=per_period,
        completed=progress.completed,
        total=progress.total,
        overspent=model.is_overspent(investment.id),
    )


def _group_investments(snapshot: PlanSnapshot, hierarchy: GroupHierarchy) -> dict[Optional[int], list[Investment]]:
    """Bucket investments by group; unknown groups count as ungrouped."""
    buckets: dict[Optional[int], list[Investment]] = {}
    for inv in snapshot.investments:
        key = inv.group_id if hierarchy.get(inv.group_id) is not None else None
        buckets.setdefault(key, []).append(inv)
    return buckets


def _render_group(
    lines: list[str],
    group: Group,
    indent: int,
    hierarchy: GroupHierarchy,
    buckets: dict[Optional[int], list[Investment]],
    rows: dict[int, InvestmentLine],
    base: str,
) -> None:
    indent_str = " " * (INDENT_SIZE * indent)
    lines.append(f"{indent_str}{group.name} ({format_number(group.percentage)}%)")
    for inv in buckets.get(group.id, []):
        lines.append(_render_investment(rows[inv.id], indent + 1, base))
    for child in hierarchy.children(group.id):
        _render_group(lines, child, indent + 1, hierarchy, buckets, rows, base)


def _render_investment(row: InvestmentLine, indent: int, base: str) -> str:
    indent_str = " " * (INDENT_SIZE * indent)
    name_width = max(10, 30 - INDENT_SIZE * indent)
    flag = "  OVERSPENT" if row.overspent else ""
    return (
        f"{indent_str}{row.investment.name:<{name_width}} "
        f"{format_number(row.investment.percentage):>6}% "
        f"{format_money(row.total_cost, base):>18} "
        f"{format_money(row.per_period, base):>16}/period "
        f"[{row.completed}/{row.total}]{flag}"
    )


def render_text(snapshot: PlanSnapshot, model: PlanModel) -> str:
    """Render the plan as an indented text report."""
    converter = CurrencyConverter(snapshot.exchange_rate)
    hierarchy = GroupHierarchy(snapshot.groups)
    base = converter.base
    rows = {
        inv.id: build_investment_line(inv, snapshot, model, hierarchy)
        for inv in snapshot.investments
    }

    lines = [
        "Investment Plan",
        "=" * LINE_WIDTH,
        f"Exchange rate: {snapshot.exchange_rate:,.2f} {base} per foreign unit",
        f"Total funds:   {format_money(model.total_funds, base)}",
        "",
        "Accounts",
        "-" * LINE_WIDTH,
        f"{'Name':<24} {'Balance':>18} {'In ' + base:>18} {'Remaining':>18}",
        "-" * LINE_WIDTH,
    ]
    for acc in snapshot.accounts:
        remaining = model.remaining_balances.get(acc.id, acc.balance)
        lines.append(
            f"{acc.name:<24} "
            f"{format_money(acc.balance, acc.currency):>18} "
            f"{format_money(converter.to_base(acc.balance, acc.currency), base):>18} "
            f"{format_money(remaining, acc.currency):>18}"
        )

    lines.extend(["", "Investments", "-" * LINE_WIDTH])
    buckets = _group_investments(snapshot, hierarchy)
    for root in hierarchy.children(None):
        _render_group(lines, root, 0, hierarchy, buckets, rows, base)
    ungrouped = buckets.get(None, [])
    if ungrouped:
        lines.append("Ungrouped")
        for inv in ungrouped:
            lines.append(_render_investment(rows[inv.id], 1, base))
    if not snapshot.investments:
        lines.append("No investments.")

    return "\n".join(lines) + "\n"


def render_csv(snapshot: PlanSnapshot, model: PlanModel) -> str:
    """Render the plan as CSV with an accounts table and an investments table."""
    converter = CurrencyConverter(snapshot.exchange_rate)
    hierarchy = GroupHierarchy(snapshot.groups)
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["exchange_rate", format_number(snapshot.exchange_rate)])
    writer.writerow([])
    writer.writerow(["account", "currency", "balance", f"balance_{converter.base.lower()}", "remaining"])
    for acc in snapshot.accounts:
        remaining = model.remaining_balances.get(acc.id, acc.balance)
        writer.writerow([
            acc.name,
            acc.currency,
            f"{acc.balance:.2f}",
            f"{converter.to_base(acc.balance, acc.currency):.2f}",
            f"{remaining:.2f}",
        ])

    writer.writerow([])
    writer.writerow([
        "group",
        "investment",
        "percentage",
        f"total_cost_{converter.base.lower()}",
        "per_period",
        "completed",
        "scheduled",
        "overspent",
    ])
    for inv in snapshot.investments:
        row = build_investment_line(inv, snapshot, model, hierarchy)
        writer.writerow([
            row.group_path,
            inv.name,
            format_number(inv.percentage),
            f"{row.total_cost:.2f}",
            f"{row.per_period:.2f}" if row.per_period is not None else "",
            row.completed,
            row.total,
            "yes" if row.overspent else "no",
        ])

    return output.getvalue()
