"""Exchange rate commands."""

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.domain.constants import BASE_CURRENCY, FOREIGN_CURRENCY
from fundplan.domain.errors import DomainError
from fundplan.domain.plan import PlanService
from fundplan.utils.formatting import format_number


@click.group()
def rate_group():
    """Show or set the exchange rate."""
    pass


@rate_group.command("show")
@click.pass_context
def show_rate(ctx):
    """Show the current exchange rate."""
    service = PlanService(ctx.obj["db"])
    click.echo(f"1 {FOREIGN_CURRENCY} = {format_number(service.get_exchange_rate())} {BASE_CURRENCY}")


@rate_group.command("set")
@click.argument("rate")
@click.pass_context
def set_rate(ctx, rate: str):
    """Set the exchange rate as base currency units per foreign unit.

    Example:
        fundplan rate set 35.5
    """
    service = PlanService(ctx.obj["db"])
    try:
        value = service.set_exchange_rate(rate)
        click.echo(f"Exchange rate set: 1 {FOREIGN_CURRENCY} = {format_number(value)} {BASE_CURRENCY}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register rate commands with main CLI."""
    cli.add_command(rate_group, name="rate")
