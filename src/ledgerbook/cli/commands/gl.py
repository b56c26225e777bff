"""General ledger commands: transfer, view and history."""

import json

import click
from ledgerbook.api.responses import (
    description_response,
    history_response,
    ledger_view_response,
    transfer_response,
    validation_response,
)
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.ledger_view import LedgerViewService
from ledgerbook.domain.transfer import TransferService
from ledgerbook.domain.transfer_history import TransferHistoryService
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.date_filters import PERIOD_OPTIONS, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.utils.amount_parser import format_amount
from ledgerbook.utils.date_parser import get_date_range


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, indent=2))


def _account_label(account) -> str:
    return f"{account.code} {account.name}" if account is not None else "?"


@click.group()
def gl_group():
    """Transfer entries to and read the general ledger."""
    pass


@gl_group.command("validate")
@click.argument("entry_ids", nargs=-1, type=int, required=True)
@click.option("--json", "as_json", is_flag=True, help="Print the validation payload as JSON")
@click.pass_context
def validate(ctx, entry_ids: tuple[int, ...], as_json: bool):
    """Check which entries can be transferred to the general ledger."""
    service = TransferService(ctx.obj["db"])

    try:
        validation = service.validate_transfer(entry_ids, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if as_json:
        _echo_json(validation_response(validation))
        return

    if validation.eligible_ids:
        click.echo(f"Eligible: {', '.join(str(entry_id) for entry_id in validation.eligible_ids)}")
    for item in validation.ineligible:
        click.echo(f"Ineligible: {item.id} ({item.reason})")
    for error in validation.errors:
        click.echo(f"Error: {error}", err=True)
    click.echo("Ready to transfer." if validation.is_valid else "Nothing to transfer.")


@gl_group.command("transfer")
@click.argument("entry_ids", nargs=-1, type=int, required=True)
@click.option("--month", "target_month", required=True, help="Posting month (YYYY-MM)")
@click.option("--description", required=True, help="Description for the general ledger postings")
@click.option("--json", "as_json", is_flag=True, help="Print the transfer payload as JSON")
@click.pass_context
def transfer(ctx, entry_ids: tuple[int, ...], target_month: str, description: str, as_json: bool):
    """Transfer recorded entries to the general ledger.

    Entries sharing a debit and credit account are folded into one posting
    for the month. Ineligible entries are skipped.

    Examples:
        ledgerbook gl transfer 1 2 3 --month 2024-03 --description "March sales"
    """
    db = ctx.obj["db"]
    service = TransferService(db)
    account_service = AccountService(db)

    try:
        result = service.transfer(entry_ids, target_month, description, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if as_json:
        _echo_json(transfer_response(result))
        return

    accounts = account_service.get_accounts_map(
        account_id
        for parent in result.parent_entries
        for account_id in (parent.debit_account_id, parent.credit_account_id)
    )
    click.echo(
        f"Transferred {result.total_entries} entries in {result.total_groups} "
        f"posting{'s' if result.total_groups != 1 else ''} to {result.summary.target_month}"
    )
    for parent in result.parent_entries:
        click.echo(
            f"  GL {parent.id}: Dr {_account_label(accounts.get(parent.debit_account_id))} / "
            f"Cr {_account_label(accounts.get(parent.credit_account_id))} {format_amount(parent.amount):>14}"
        )
    click.echo(f"Total: {format_amount(result.summary.total_amount)}")


@gl_group.command("view")
@click.option("--account", required=True, help="Account code or ID")
@click.option("--date-from", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--date-to", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="View this month")
@click.option("--this-year", is_flag=True, help="View this year")
@click.option("--last-month", is_flag=True, help="View last month")
@click.option("--last-year", is_flag=True, help="View last year")
@click.option("--json", "as_json", is_flag=True, help="Print the ledger payload as JSON")
@click.pass_context
def view(
    ctx,
    account: str,
    date_from: str | None,
    date_to: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
    as_json: bool,
):
    """Show the general ledger of an account, month by month.

    Defaults to the current year when no dates or period are given.
    """
    db = ctx.obj["db"]
    service = LedgerViewService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    flags = dict(zip(PERIOD_OPTIONS, (this_month, this_year, last_month, last_year)))
    default_start, default_end = get_date_range("this-year")
    start, end = resolve_cli_date_range(
        ctx,
        date_from=date_from,
        date_to=date_to,
        period_flags=flags,
        default_range=(default_start, default_end),
    )
    start = start or default_start
    end = end or default_end

    try:
        ledger = service.view(account_id, start, end, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if as_json:
        _echo_json(ledger_view_response(ledger))
        return

    click.echo(f"\nGeneral ledger: {_account_label(ledger.account)}")
    click.echo(f"Period: {ledger.date_from} to {ledger.date_to}")
    click.echo(f"Opening balance: {format_amount(ledger.opening_balance)}")
    for month in ledger.months:
        closing = month.period_closing
        click.echo(f"\n{month.month}")
        click.echo("-" * 100)
        for row in month.rows:
            debit = format_amount(row.debit_amount) if row.debit_amount is not None else ""
            credit = format_amount(row.credit_amount) if row.credit_amount is not None else ""
            click.echo(
                f"{str(row.date):<12} {row.description[:30]:<30} {_account_label(row.counterpart_account)[:24]:<24} "
                f"{debit:>14} {credit:>14}"
            )
        click.echo(
            f"{'Period closing':<68}{format_amount(closing.total_debits):>14} {format_amount(closing.total_credits):>14}"
        )
        click.echo(f"{'Balance':<68}{format_amount(closing.display_balance):>14} {closing.balance_type.value}")

    total = ledger.grand_total
    click.echo("\n" + "=" * 100)
    click.echo(f"{'Grand total':<68}{format_amount(total.total_debits):>14} {format_amount(total.total_credits):>14}")
    click.echo(f"{'Final balance':<68}{format_amount(total.display_balance):>14} {total.balance_type.value}")


@gl_group.command("history")
@click.option("--group", "transfer_group_id", type=int, help="Only this general ledger entry and its sources")
@click.option("--json", "as_json", is_flag=True, help="Print the history payload as JSON")
@click.pass_context
def history(ctx, transfer_group_id: int | None, as_json: bool):
    """List general ledger postings with the entries folded into them."""
    service = TransferHistoryService(ctx.obj["db"])

    try:
        groups = service.get_transfer_history(ctx.obj["user_id"], transfer_group_id)
    except ValueError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if as_json:
        _echo_json(history_response(groups))
        return

    if not groups:
        click.echo("No transfers found.")
        return

    for group in groups:
        parent = group.parent
        click.echo(
            f"\nGL {parent.id} [{parent.gl_posting_month}] {parent.description}: "
            f"Dr {_account_label(group.accounts.get(parent.debit_account_id))} / "
            f"Cr {_account_label(group.accounts.get(parent.credit_account_id))} {format_amount(parent.amount)}"
        )
        for child in group.children:
            category = group.categories.get(child.category_id)
            category_name = category.name if category is not None else ""
            click.echo(
                f"  {child.id:<6} {str(child.transaction_date):<12} {format_amount(child.amount):>14}  "
                f"{child.description[:30]:<30} {category_name}"
            )


@gl_group.command("describe")
@click.argument("entry_id", type=int)
@click.argument("description")
@click.option("--json", "as_json", is_flag=True, help="Print the updated entry as JSON")
@click.pass_context
def describe(ctx, entry_id: int, description: str, as_json: bool):
    """Change the description of a general ledger posting."""
    service = TransferHistoryService(ctx.obj["db"])

    try:
        entry = service.update_parent_description(entry_id, description, ctx.obj["user_id"])
    except ValueError as e:
        handle_domain_error(ctx, e, as_json=as_json)

    if as_json:
        _echo_json(description_response(entry))
        return
    click.echo(f"Updated description of GL {entry.id}: {entry.description}")


def register_commands(cli):
    """Register general ledger commands with main CLI."""
    cli.add_command(gl_group, name="gl")
