"""Investment management commands."""

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.cli.resolution import parse_date_or_exit, parse_percentage_or_exit, resolve_or_exit
from fundplan.domain.account import AccountService
from fundplan.domain.allocation import investment_total_cost
from fundplan.domain.entities import Recurrence, RecurrenceType, RecurrenceUnit
from fundplan.domain.errors import DomainError
from fundplan.domain.group import GroupService
from fundplan.domain.investment import InvestmentService
from fundplan.domain.plan import PlanService
from fundplan.utils.formatting import format_money, format_number

RECURRENCE_CHOICE = click.Choice([t.value for t in RecurrenceType])
UNIT_CHOICE = click.Choice([u.value for u in RecurrenceUnit])


def describe_recurrence(recurrence: Recurrence) -> str:
    """Human readable recurrence, e.g. "monthly" or "every 2 weeks"."""
    rtype = RecurrenceType(recurrence.type)
    if rtype == RecurrenceType.CUSTOM:
        unit = RecurrenceUnit(recurrence.custom_unit).value if recurrence.custom_unit else "months"
        return f"every {recurrence.custom_value} {unit}"
    return rtype.value


def _build_recurrence(ctx, every, custom_value, custom_unit):
    if every is None:
        if custom_value is not None or custom_unit is not None:
            every = RecurrenceType.CUSTOM.value
        else:
            return None
    if every != RecurrenceType.CUSTOM.value and (custom_value is not None or custom_unit is not None):
        click.echo("Error: --custom-value/--custom-unit require --every custom.", err=True)
        ctx.exit(1)
    return Recurrence(
        type=RecurrenceType(every),
        custom_value=custom_value,
        custom_unit=RecurrenceUnit(custom_unit) if custom_unit else None,
    )


def _resolve_accounts(ctx, db, references) -> list[int]:
    accounts = AccountService(db).list_accounts()
    return [resolve_or_exit(ctx, accounts, ref, "Account") for ref in references]


def _resolve_group(ctx, db, reference) -> int:
    service = GroupService(db)
    group = service.get_group_by_path(reference)
    if group is not None:
        return group.id
    return resolve_or_exit(ctx, service.list_groups(), reference, "Group")


@click.group()
def investment_group():
    """Manage investments."""
    pass


@investment_group.command("create")
@click.argument("name", metavar="INVESTMENT_NAME")
@click.option("--percentage", required=True, help="Share of the group (or total) funds, 0-100")
@click.option(
    "--account",
    "accounts",
    multiple=True,
    required=True,
    help="Account to draw from; repeat in priority order",
)
@click.option("--group", help="Enclosing group name, path or ID")
@click.option("--every", type=RECURRENCE_CHOICE, default="monthly", show_default=True)
@click.option("--custom-value", type=int, help="Interval count for --every custom")
@click.option("--custom-unit", type=UNIT_CHOICE, help="Interval unit for --every custom")
@click.option("--start", "start_date", required=True, help="First contribution date")
@click.option("--end", "end_date", help="Last possible contribution date (omit for no end)")
@click.pass_context
def create_investment(
    ctx, name, percentage, accounts, group, every, custom_value, custom_unit, start_date, end_date
):
    """Create an investment.

    Investments are funded in list order; the first investment listed gets
    first claim on shared accounts.

    Examples:
        fundplan investment create "S&P 500" --percentage 40 --account Brokerage --account Savings --start 2024-01-01
        fundplan investment create "Gold" --percentage 10 --every custom --custom-value 2 --custom-unit months --account Savings --start today
    """
    db = ctx.obj["db"]
    service = InvestmentService(db)

    value = parse_percentage_or_exit(ctx, percentage)
    priority = _resolve_accounts(ctx, db, accounts)
    group_id = _resolve_group(ctx, db, group) if group else None
    recurrence = _build_recurrence(ctx, every, custom_value, custom_unit)
    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    try:
        investment_id = service.create_investment(
            name=name,
            percentage=value,
            account_priority=priority,
            start_date=start,
            recurrence=recurrence,
            end_date=end,
            group_id=group_id,
        )
        click.echo(f"Created investment '{name.strip()}' (ID: {investment_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)

    if PlanService(db).compute()[1].is_overspent(investment_id):
        click.echo("Warning: accounts cannot fully fund this investment.", err=True)


@investment_group.command("list")
@click.pass_context
def list_investments(ctx):
    """List investments in allocation order."""
    db = ctx.obj["db"]
    service = InvestmentService(db)
    groups = GroupService(db)

    investments = service.list_investments()
    if not investments:
        click.echo("No investments found.")
        return

    click.echo("\nInvestments:")
    click.echo("-" * 80)
    for index, inv in enumerate(investments, start=1):
        group_path = groups.format_group_path(inv.group_id) or "-"
        click.echo(
            f"{index:2d}. ID: {inv.id:3d} | {inv.name:20s} | {format_number(inv.percentage):>6}% "
            f"| {describe_recurrence(inv.recurrence):14s} | Group: {group_path}"
        )


@investment_group.command("show")
@click.argument("investment", metavar="INVESTMENT")
@click.pass_context
def show_investment(ctx, investment: str):
    """Show an investment's funding breakdown and schedule progress.

    INVESTMENT can be an investment name or ID.
    """
    db = ctx.obj["db"]
    service = InvestmentService(db)
    investment_id = resolve_or_exit(ctx, service.list_investments(), investment, "Investment")

    try:
        snapshot, model = PlanService(db).compute()
    except DomainError as e:
        handle_domain_error(ctx, e)

    inv = snapshot.get_investment(investment_id)
    accounts = snapshot.account_index()
    progress = service.get_completion_count(investment_id)
    total = investment_total_cost(model, investment_id, snapshot)

    click.echo(f"\n{inv.name} (ID: {inv.id})")
    click.echo("-" * 60)
    click.echo(f"Percentage:  {format_number(inv.percentage)}%")
    click.echo(f"Group:       {GroupService(db).format_group_path(inv.group_id) or '-'}")
    click.echo(f"Recurrence:  {describe_recurrence(inv.recurrence)}")
    click.echo(f"Start:       {inv.start_date.isoformat()}")
    click.echo(f"End:         {inv.end_date.isoformat() if inv.end_date else 'no end date'}")
    click.echo(f"Progress:    {progress.completed}/{progress.total}")
    click.echo(f"Total cost:  {format_money(total, 'THB')}")
    if model.is_overspent(investment_id):
        click.echo("Status:      OVERSPENT (accounts cannot fully fund this investment)")

    click.echo("\nAccount priority:")
    breakdown = {line.account_id: line for line in model.cost_breakdown(investment_id, accounts)}
    for rank, account_id in enumerate(inv.account_priority, start=1):
        account = accounts.get(account_id)
        name = account.name if account else f"Unknown ({account_id})"
        line = breakdown.get(account_id)
        drawn = format_money(line.amount, line.currency) if line else "-"
        click.echo(f"  {rank}. {name:20s} {drawn:>20}")


@investment_group.command("update")
@click.argument("investment", metavar="INVESTMENT")
@click.option("--name", help="New name")
@click.option("--percentage", help="New percentage, 0-100")
@click.option("--account", "accounts", multiple=True, help="Replace account priority (repeat in order)")
@click.option("--group", help="Move into a group (name, path or ID)")
@click.option("--ungroup", is_flag=True, help="Remove from its group")
@click.option("--every", type=RECURRENCE_CHOICE, help="New recurrence")
@click.option("--custom-value", type=int, help="Interval count for --every custom")
@click.option("--custom-unit", type=UNIT_CHOICE, help="Interval unit for --every custom")
@click.option("--start", "start_date", help="New first contribution date")
@click.option("--end", "end_date", help="New last contribution date")
@click.option("--no-end", is_flag=True, help="Remove the end date")
@click.pass_context
def update_investment(
    ctx, investment, name, percentage, accounts, group, ungroup, every,
    custom_value, custom_unit, start_date, end_date, no_end,
):
    """Update an investment.

    INVESTMENT can be an investment name or ID.
    """
    db = ctx.obj["db"]
    service = InvestmentService(db)

    if group and ungroup:
        click.echo("Error: --group cannot be combined with --ungroup.", err=True)
        ctx.exit(1)
    if end_date and no_end:
        click.echo("Error: --end cannot be combined with --no-end.", err=True)
        ctx.exit(1)

    investment_id = resolve_or_exit(ctx, service.list_investments(), investment, "Investment")

    try:
        service.update_investment(
            investment_id,
            name=name,
            percentage=parse_percentage_or_exit(ctx, percentage) if percentage is not None else None,
            account_priority=_resolve_accounts(ctx, db, accounts) if accounts else None,
            recurrence=_build_recurrence(ctx, every, custom_value, custom_unit),
            start_date=parse_date_or_exit(ctx, start_date, "start date") if start_date else None,
            end_date=parse_date_or_exit(ctx, end_date, "end date") if end_date else None,
            group_id=_resolve_group(ctx, db, group) if group else None,
            update_end_date=no_end,
            update_group=ungroup,
        )
        click.echo(f"Updated investment {investment_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@investment_group.command("move")
@click.argument("investment", metavar="INVESTMENT")
@click.argument("position", type=click.IntRange(min=1))
@click.pass_context
def move_investment(ctx, investment: str, position: int):
    """Move an investment to a 1-based POSITION in allocation order.

    Investments earlier in the list are funded first from shared accounts.
    """
    db = ctx.obj["db"]
    service = InvestmentService(db)
    investment_id = resolve_or_exit(ctx, service.list_investments(), investment, "Investment")

    try:
        service.move_investment(investment_id, position - 1)
        click.echo(f"Moved investment {investment_id} to position {position}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@investment_group.command("delete")
@click.argument("investment", metavar="INVESTMENT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_investment(ctx, investment: str, yes: bool):
    """Delete an investment and its completion history."""
    db = ctx.obj["db"]
    service = InvestmentService(db)
    investment_id = resolve_or_exit(ctx, service.list_investments(), investment, "Investment")

    if not yes and not click.confirm(f"Are you sure you want to delete investment {investment_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_investment(investment_id)
        click.echo(f"Deleted investment {investment_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register investment commands with main CLI."""
    cli.add_command(investment_group, name="investment")
