"""Main CLI entry point."""

import logging

import click
from fundplan.database.factories import create_sqlite_database

# Import and register all commands at module level
from fundplan.cli.commands import (
    account,
    group,
    investment,
    rate,
    plan,
    schedule,
    export,
    import_cmd,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FUNDPLAN_DB_PATH environment variable)",
    envvar="FUNDPLAN_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Fundplan - Investment allocation planner.

    Split account balances across budget groups and investments, and track
    recurring contributions.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
group.register_commands(cli)
investment.register_commands(cli)
rate.register_commands(cli)
plan.register_commands(cli)
schedule.register_commands(cli)
export.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
