"""Account management commands."""

import click

from fundplan.cli.error_handling import handle_domain_error
from fundplan.cli.resolution import parse_amount_or_exit, resolve_or_exit
from fundplan.domain.account import AccountService
from fundplan.domain.constants import BASE_CURRENCY, SUPPORTED_CURRENCIES
from fundplan.domain.errors import DomainError
from fundplan.utils.formatting import format_money

CURRENCY_CHOICE = click.Choice(SUPPORTED_CURRENCIES, case_sensitive=False)


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--currency", type=CURRENCY_CHOICE, default=BASE_CURRENCY, show_default=True)
@click.option("--balance", default="0", help="Current balance in the account currency")
@click.pass_context
def create_account(ctx, name: str, currency: str, balance: str):
    """Create a new account.

    Examples:
        fundplan account create "Savings"
        fundplan account create "Brokerage" --currency USD --balance 2500
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    amount = parse_amount_or_exit(ctx, balance, "balance")

    try:
        account_id = service.create_account(name=name, currency=currency, balance=amount)
        click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        balance = format_money(acc.balance, acc.currency)
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | {balance:>20}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--currency", type=CURRENCY_CHOICE, help="New currency")
@click.option("--balance", help="New balance in the account currency")
@click.pass_context
def update_account(ctx, account: str, name: str | None, currency: str | None, balance: str | None):
    """Update an account.

    ACCOUNT can be an account name or ID.

    Examples:
        fundplan account update "Savings" --balance 120000
        fundplan account update 2 --name "US Brokerage"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_or_exit(ctx, service.list_accounts(), account, "Account")
    amount = parse_amount_or_exit(ctx, balance, "balance") if balance is not None else None

    try:
        service.update_account(account_id, name=name, currency=currency, balance=amount)
        click.echo(f"Updated account {account_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no investment lists it in its
    account priority.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_or_exit(ctx, service.list_accounts(), account, "Account")
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
