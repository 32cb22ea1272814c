"""Plan document import command."""

import json

import click

from fundplan.domain.errors import DomainError
from fundplan.domain.plan import PlanService
from fundplan.domain.snapshot import snapshot_from_dict


@click.command("import")
@click.argument("json_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_plan(ctx, json_file: str):
    """Import accounts, groups and investments from a JSON plan document.

    The document uses the keys exchangeRate, accounts, groups and
    investments. Imported entities are added to the existing plan and the
    exchange rate is replaced.
    """
    service = PlanService(ctx.obj["db"])

    try:
        with open(json_file, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Plan document must be a JSON object")
        result = service.import_snapshot(snapshot_from_dict(data))
        click.echo("\nImport complete:")
        click.echo(f"  Accounts: {result['accounts']}")
        click.echo(f"  Groups: {result['groups']}")
        click.echo(f"  Investments: {result['investments']}")
    except (DomainError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_plan)
