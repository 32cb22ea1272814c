"""Budget group commands."""

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.cli.resolution import parse_percentage_or_exit, resolve_or_exit
from fundplan.domain.constants import DEFAULT_GROUP_COLOR
from fundplan.domain.errors import DomainError
from fundplan.domain.group import GroupService
from fundplan.utils.formatting import format_number


@click.group()
def group_group():
    """Manage budget groups."""
    pass


def _resolve_group(ctx, service: GroupService, reference: str) -> int:
    group = service.get_group_by_path(reference)
    if group is not None:
        return group.id
    return resolve_or_exit(ctx, service.list_groups(), reference, "Group")


@group_group.command("create")
@click.argument("name", metavar="GROUP_NAME")
@click.option("--percentage", default="100", show_default=True, help="Share of the parent scope")
@click.option("--parent", help="Parent group name, path or ID")
@click.option("--color", default=DEFAULT_GROUP_COLOR, show_default=True, help="Display color")
@click.pass_context
def create_group(ctx, name: str, percentage: str, parent: str | None, color: str):
    """Create a budget group.

    A group's percentage applies to its parent's share, so a 50% group
    inside a 50% group governs 25% of total funds.

    Examples:
        fundplan group create "Long Term" --percentage 70
        fundplan group create "Equity" --parent "Long Term" --percentage 50
    """
    db = ctx.obj["db"]
    service = GroupService(db)
    value = parse_percentage_or_exit(ctx, percentage)
    parent_id = _resolve_group(ctx, service, parent) if parent else None

    try:
        group_id = service.create_group(name=name, percentage=value, parent_id=parent_id, color=color)
        click.echo(f"Created group '{name.strip()}' (ID: {group_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@group_group.command("list")
@click.pass_context
def list_groups(ctx):
    """List groups as a tree with their effective share of total funds."""
    db = ctx.obj["db"]
    service = GroupService(db)
    hierarchy = service.hierarchy()

    if not hierarchy.groups:
        click.echo("No groups found.")
        return

    def display(parent_id, indent):
        for group in hierarchy.children(parent_id):
            try:
                share = f"{hierarchy.scoped_fraction(group.id) * 100:.2f}% of total"
            except DomainError as e:
                share = str(e)
            prefix = "    " * indent
            click.echo(f"{prefix}{group.name} (ID: {group.id}) {format_number(group.percentage)}% -> {share}")
            display(group.id, indent + 1)

    click.echo("\nGroups:")
    click.echo("-" * 60)
    display(None, 0)


@group_group.command("update")
@click.argument("group", metavar="GROUP")
@click.option("--name", help="New group name")
@click.option("--percentage", help="New share of the parent scope")
@click.option("--parent", help="New parent group name, path or ID")
@click.option("--root", is_flag=True, help="Detach the group from its parent")
@click.option("--color", help="New display color")
@click.pass_context
def update_group(ctx, group: str, name, percentage, parent, root: bool, color):
    """Update a group.

    GROUP can be a group name, path or ID.
    """
    db = ctx.obj["db"]
    service = GroupService(db)

    if parent and root:
        click.echo("Error: --parent cannot be combined with --root.", err=True)
        ctx.exit(1)

    group_id = _resolve_group(ctx, service, group)
    value = parse_percentage_or_exit(ctx, percentage) if percentage is not None else None
    parent_id = _resolve_group(ctx, service, parent) if parent else None

    try:
        service.update_group(
            group_id,
            name=name,
            percentage=value,
            color=color,
            parent_id=parent_id,
            update_parent=root,
        )
        click.echo(f"Updated group {group_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@group_group.command("delete")
@click.argument("group", metavar="GROUP")
@click.pass_context
def delete_group(ctx, group: str):
    """Delete a group with no child groups and no investments."""
    db = ctx.obj["db"]
    service = GroupService(db)
    group_id = _resolve_group(ctx, service, group)

    try:
        service.delete_group(group_id)
        click.echo(f"Deleted group {group_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register group commands with main CLI."""
    cli.add_command(group_group, name="group")
