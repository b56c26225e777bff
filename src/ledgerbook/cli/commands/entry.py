"""Subsidiary-book entry commands."""

import click
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import BookType, ResultStatus
from ledgerbook.domain.entry import EntryService, RECORD_STATES
from ledgerbook.domain.vat import VatType
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.date_filters import PERIOD_OPTIONS, resolve_cli_date_range
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.utils.amount_parser import format_amount, parse_amount
from ledgerbook.utils.date_parser import parse_date

VAT_CHOICES = [vat.value for vat in VatType]


@click.group()
def entry_group():
    """Record entries in the subsidiary books."""
    pass


@entry_group.command("add")
@click.option("--category", "category_id", type=int, required=True, help="Category ID; decides the book")
@click.option(
    "--date",
    "entry_date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--amount", required=True, help="Amount (e.g., 1500.00 or 1,500.00)")
@click.option("--description", required=True, help="Entry description")
@click.option("--debit", "debit_account", help="Debit account code or ID (defaults to the category's)")
@click.option("--credit", "credit_account", help="Credit account code or ID (defaults to the category's)")
@click.option("--reference", help="Reference number")
@click.option("--vat", "vat_type", type=click.Choice(VAT_CHOICES), default=VatType.VAT_EXEMPT.value, show_default=True)
@click.option("--record", "record_now", is_flag=True, help="Record the entry immediately")
@click.pass_context
def add_entry(
    ctx,
    category_id: int,
    entry_date: str,
    amount: str,
    description: str,
    debit_account: str | None,
    credit_account: str | None,
    reference: str | None,
    vat_type: str,
    record_now: bool,
):
    """Add a draft entry.

    Examples:
        ledgerbook entry add --category 1 --date 2024-03-05 --amount 100.00 --description "Cash sale"
        ledgerbook entry add --category 6 --date today --amount 250 --description "Rent" --debit 5301 --credit 1102 --record
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = EntryService(db)
    account_service = AccountService(db)
    category_service = CategoryService(db)

    try:
        category = category_service.require_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if debit_account:
        debit_id = resolve_account_or_exit(ctx, account_service, debit_account)
    else:
        debit_id = category.default_debit_account_id
    if credit_account:
        credit_id = resolve_account_or_exit(ctx, account_service, credit_account)
    else:
        credit_id = category.default_credit_account_id
    if debit_id is None or credit_id is None:
        click.echo("Error: Category has no default accounts; pass --debit and --credit", err=True)
        ctx.exit(1)

    try:
        txn_date = parse_date(entry_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        minor_units = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        entry_id = service.create_entry(
            user_id=user_id,
            category_id=category_id,
            amount=minor_units,
            description=description,
            transaction_date=txn_date,
            debit_account_id=debit_id,
            credit_account_id=credit_id,
            reference_number=reference,
            vat_type=vat_type,
        )
        if record_now:
            service.record_entry(entry_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    entry = service.get_entry(entry_id, user_id)
    click.echo(f"Created entry {entry_id} ({entry.status.value})")
    click.echo(f"  Book: {entry.book_type.value}")
    click.echo(f"  Date: {entry.transaction_date}")
    click.echo(f"  Amount: {format_amount(entry.amount)}")
    if entry.vat_amount:
        click.echo(f"  VAT: {format_amount(entry.vat_amount)}")


@entry_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--category", "category_id", type=int, help="Category ID")
@click.option("--date", "entry_date", help="Transaction date")
@click.option("--amount", help="Amount")
@click.option("--description", help="Entry description")
@click.option("--debit", "debit_account", help="Debit account code or ID")
@click.option("--credit", "credit_account", help="Credit account code or ID")
@click.option("--reference", help="Reference number")
@click.option("--vat", "vat_type", type=click.Choice(VAT_CHOICES))
@click.pass_context
def update_entry(
    ctx,
    entry_id: int,
    category_id: int | None,
    entry_date: str | None,
    amount: str | None,
    description: str | None,
    debit_account: str | None,
    credit_account: str | None,
    reference: str | None,
    vat_type: str | None,
) -> None:
    """Update an entry that has not been transferred.

    Updates only the fields that are provided.

    Examples:
        ledgerbook entry update 3 --amount 120.00
        ledgerbook entry update 3 --debit 1102 --description "Deposit"
    """
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = EntryService(db)
    account_service = AccountService(db)

    try:
        current = service.require_entry(entry_id, user_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    debit_id = current.debit_account_id
    if debit_account is not None:
        debit_id = resolve_account_or_exit(ctx, account_service, debit_account)
    credit_id = current.credit_account_id
    if credit_account is not None:
        credit_id = resolve_account_or_exit(ctx, account_service, credit_account)

    txn_date = current.transaction_date
    if entry_date is not None:
        try:
            txn_date = parse_date(entry_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    minor_units = current.amount
    if amount is not None:
        try:
            minor_units = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_entry(
            entry_id=entry_id,
            user_id=user_id,
            category_id=category_id if category_id is not None else current.category_id,
            amount=minor_units,
            description=description if description is not None else current.description,
            transaction_date=txn_date,
            debit_account_id=debit_id,
            credit_account_id=credit_id,
            reference_number=reference if reference is not None else current.reference_number,
            vat_type=vat_type if vat_type is not None else current.vat_type,
        )
        click.echo(f"Updated entry {entry_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@entry_group.command("list")
@click.option(
    "--book",
    "book_type",
    type=click.Choice([book.value for book in BookType if book != BookType.GENERAL_LEDGER]),
    help="Only entries in this book",
)
@click.option("--state", "record_state", type=click.Choice(RECORD_STATES), help="Only entries in this state")
@click.option("--date-from", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--date-to", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="Entries from this month")
@click.option("--this-year", is_flag=True, help="Entries from this year")
@click.option("--last-month", is_flag=True, help="Entries from last month")
@click.option("--last-year", is_flag=True, help="Entries from last year")
@click.pass_context
def list_entries(
    ctx,
    book_type: str | None,
    record_state: str | None,
    date_from: str | None,
    date_to: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
):
    """List entries with optional filters."""
    db = ctx.obj["db"]
    user_id = ctx.obj["user_id"]
    service = EntryService(db)
    account_service = AccountService(db)

    flags = dict(zip(PERIOD_OPTIONS, (this_month, this_year, last_month, last_year)))
    start, end = resolve_cli_date_range(ctx, date_from=date_from, date_to=date_to, period_flags=flags)

    try:
        entries = service.list_entries(
            user_id=user_id,
            book_type=book_type,
            record_state=record_state,
            date_from=start,
            date_to=end,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No entries found.")
        return

    accounts = {acc.id: acc.code for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Amount':>14} {'Dr':<6} {'Cr':<6} {'Status':<12} {'Description':<40}"
    )
    click.echo("-" * 100)
    for entry in entries:
        click.echo(
            f"{entry.id:<6} {str(entry.transaction_date):<12} {format_amount(entry.amount):>14} "
            f"{accounts.get(entry.debit_account_id, '?'):<6} {accounts.get(entry.credit_account_id, '?'):<6} "
            f"{entry.status.value:<12} {entry.description[:40]:<40}"
        )


def _echo_bulk_result(ctx, result) -> None:
    for outcome in result.outcomes:
        if outcome.status == ResultStatus.SUCCESS:
            click.echo(f"  {outcome.message}")
        else:
            click.echo(f"  Entry {outcome.entry_id}: {outcome.message}", err=True)
    click.echo(result.message)
    if result.status == ResultStatus.ERROR:
        ctx.exit(1)


@entry_group.command("record")
@click.argument("entry_ids", nargs=-1, type=int, required=True)
@click.pass_context
def record_entries(ctx, entry_ids: tuple[int, ...]):
    """Mark draft entries as recorded."""
    service = EntryService(ctx.obj["db"])
    _echo_bulk_result(ctx, service.bulk_record_entries(entry_ids, ctx.obj["user_id"]))


@entry_group.command("undo-record")
@click.argument("entry_ids", nargs=-1, type=int, required=True)
@click.pass_context
def undo_record_entries(ctx, entry_ids: tuple[int, ...]):
    """Return recorded entries to draft, unless already transferred."""
    service = EntryService(ctx.obj["db"])
    _echo_bulk_result(ctx, service.bulk_undo_record_entries(entry_ids, ctx.obj["user_id"]))


@entry_group.command("summary")
@click.pass_context
def summary(ctx):
    """Show income, expenses and accounts in use."""
    service = EntryService(ctx.obj["db"])
    totals = service.summary(ctx.obj["user_id"])

    click.echo(f"Total income:    {format_amount(totals.total_income):>14}")
    click.echo(f"Total expenses:  {format_amount(totals.total_expenses):>14}")
    click.echo(f"Net income:      {format_amount(totals.net_income):>14}")
    click.echo(f"Accounts in use: {totals.total_chart_of_accounts:>14}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
