"""Plan export command."""

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.domain.errors import DomainError
from fundplan.domain.plan import PlanService


@click.command("export")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "csv"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.option("--output", type=click.Path(dir_okay=False, writable=True), help="Write to FILE instead of stdout")
@click.pass_context
def export_plan(ctx, fmt: str, output: str | None):
    """Export the computed plan as a text report or CSV.

    Examples:
        fundplan export
        fundplan export --format csv --output plan.csv
    """
    service = PlanService(ctx.obj["db"])
    try:
        content = service.export(fmt)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if output is None:
        click.echo(content, nl=False)
        return

    with open(output, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    click.echo(f"Exported plan to {output}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_plan)
