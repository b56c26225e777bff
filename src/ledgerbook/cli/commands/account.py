"""Chart of accounts commands."""

import click
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import AccountType
from ledgerbook.cli.error_handling import handle_domain_error


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    required=True,
    help="Account classification",
)
@click.pass_context
def create_account(ctx, code: str, name: str, account_type: str):
    """Create a new account.

    Examples:
        ledgerbook account create 1101 "Cash on Hand" --type asset
        ledgerbook account create 4101 "Sales Revenue" --type revenue
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(code=code, name=name, account_type=account_type.lower())
        click.echo(f"Created account {code} '{name}' (ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found. Run 'init-accounts' to create the default chart of accounts.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.code:<6s} | {acc.name:30s} | {acc.type.value}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
