"""Allocation table command."""

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.domain.allocation import investment_total_cost
from fundplan.domain.constants import BASE_CURRENCY
from fundplan.domain.errors import DomainError
from fundplan.domain.groups import GroupHierarchy
from fundplan.domain.plan import PlanService
from fundplan.utils.formatting import format_money, format_number


def _display_plan(snapshot, model):
    hierarchy = GroupHierarchy(snapshot.groups)
    accounts = snapshot.account_index()

    click.echo(f"\nTotal funds: {format_money(model.total_funds, BASE_CURRENCY)}")
    click.echo(f"Exchange rate: {format_number(snapshot.exchange_rate)}")
    click.echo("=" * 80)

    for inv in snapshot.investments:
        total = investment_total_cost(model, inv.id, snapshot)
        path = hierarchy.path(inv.group_id)
        label = f"{path} > {inv.name}" if path else inv.name
        status = "  OVERSPENT" if model.is_overspent(inv.id) else ""
        click.echo(f"{label:40s} {format_number(inv.percentage):>6}% {format_money(total, BASE_CURRENCY):>20}{status}")
        for line in model.cost_breakdown(inv.id, accounts):
            click.echo(f"    from {line.account_name:30s} {format_money(line.amount, line.currency):>20}")

    click.echo("-" * 80)
    click.echo("Remaining balances:")
    for acc in snapshot.accounts:
        remaining = model.remaining_balances.get(acc.id, acc.balance)
        click.echo(f"    {acc.name:35s} {format_money(remaining, acc.currency):>20}")


@click.command("plan")
@click.pass_context
def plan(ctx):
    """Show how account funds are allocated to investments.

    Investments are funded in list order; a flagged OVERSPENT investment
    could not be fully covered by its accounts.
    """
    service = PlanService(ctx.obj["db"])
    try:
        snapshot, model = service.compute()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not snapshot.investments:
        click.echo("No investments found.")
        return

    _display_plan(snapshot, model)


def register_commands(cli):
    """Register plan command with main CLI."""
    cli.add_command(plan)
