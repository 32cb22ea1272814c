"""CLI helpers for resolving entity references and parsing inputs."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.utils.amount_parser import parse_amount, parse_percentage
from fundplan.utils.date_parser import parse_date
from fundplan.utils.entity_resolver import resolve_entity


def resolve_or_exit(ctx: click.Context, entities, reference: str | int, kind: str) -> int:
    """Resolve an entity name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_entity(entities, reference, kind)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def parse_date_or_exit(ctx: click.Context, value: str, label: str) -> date:
    """Parse a CLI date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str, label: str) -> Decimal:
    """Parse a CLI amount option, or exit with a CLI error."""
    try:
        return parse_amount(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid {label}: {exc}", err=True)
        ctx.exit(1)


def parse_percentage_or_exit(ctx: click.Context, value: str) -> Decimal:
    """Parse a CLI percentage option, or exit with a CLI error."""
    try:
        return parse_percentage(value)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
