"""Contribution schedule commands."""

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.cli.resolution import parse_date_or_exit, resolve_or_exit
from fundplan.domain.errors import DomainError
from fundplan.domain.investment import InvestmentService


@click.group()
def schedule_group():
    """View and track contribution schedules."""
    pass


@schedule_group.command("show")
@click.argument("investment", metavar="INVESTMENT")
@click.pass_context
def show_schedule(ctx, investment: str):
    """Show the contribution dates of an investment.

    Without an end date the schedule runs up to and including the first
    date that has not been completed yet.
    """
    service = InvestmentService(ctx.obj["db"])
    investment_id = resolve_or_exit(ctx, service.list_investments(), investment, "Investment")

    entries = service.get_schedule(investment_id)
    if not entries:
        click.echo("No scheduled dates.")
        return

    done = sum(1 for entry in entries if entry.completed)
    click.echo(f"\nSchedule ({done}/{len(entries)} completed):")
    click.echo("-" * 30)
    for entry in entries:
        mark = "[x]" if entry.completed else "[ ]"
        click.echo(f"{mark} {entry.date.isoformat()}")


@schedule_group.command("toggle")
@click.argument("investment", metavar="INVESTMENT")
@click.argument("when", metavar="DATE")
@click.pass_context
def toggle_schedule(ctx, investment: str, when: str):
    """Mark a contribution DATE as done, or undo it.

    Example:
        fundplan schedule toggle "S&P 500" 2024-02-01
    """
    service = InvestmentService(ctx.obj["db"])
    investment_id = resolve_or_exit(ctx, service.list_investments(), investment, "Investment")
    day = parse_date_or_exit(ctx, when, "date")

    try:
        completed = service.toggle_completion(investment_id, day)
    except DomainError as e:
        handle_domain_error(ctx, e)

    state = "completed" if completed else "not completed"
    click.echo(f"Marked {day.isoformat()} as {state}")


def register_commands(cli):
    """Register schedule commands with main CLI."""
    cli.add_command(schedule_group, name="schedule")
