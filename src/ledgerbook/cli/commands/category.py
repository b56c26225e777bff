"""Category management commands."""

import click
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import BookType
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.error_handling import handle_domain_error

SUBSIDIARY_BOOKS = [book.value for book in BookType if book != BookType.GENERAL_LEDGER]


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories grouped by book."""
    db = ctx.obj["db"]
    service = CategoryService(db)
    account_service = AccountService(db)

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found. Run 'init-accounts' to create default categories.")
        return

    accounts = {acc.id: acc.code for acc in account_service.list_accounts()}

    for book in SUBSIDIARY_BOOKS:
        in_book = [cat for cat in categories if cat.book_type.value == book]
        if not in_book:
            continue
        click.echo(f"\n{book}:")
        for cat in in_book:
            debit = accounts.get(cat.default_debit_account_id, "-")
            credit = accounts.get(cat.default_credit_account_id, "-")
            click.echo(f"  {cat.name} (ID: {cat.id}) Dr {debit} / Cr {credit}")


@category_group.command("create")
@click.argument("name")
@click.option(
    "--book",
    "book_type",
    type=click.Choice(SUBSIDIARY_BOOKS, case_sensitive=False),
    required=True,
    help="Book entries in this category are written to",
)
@click.option("--debit", "debit_account", help="Default debit account code or ID")
@click.option("--credit", "credit_account", help="Default credit account code or ID")
@click.pass_context
def create_category(ctx, name: str, book_type: str, debit_account: str | None, credit_account: str | None):
    """Create a new category."""
    db = ctx.obj["db"]
    service = CategoryService(db)
    account_service = AccountService(db)

    debit_id = resolve_account_or_exit(ctx, account_service, debit_account) if debit_account else None
    credit_id = resolve_account_or_exit(ctx, account_service, credit_account) if credit_account else None

    try:
        category_id = service.create_category(
            name=name,
            book_type=book_type.lower(),
            default_debit_account_id=debit_id,
            default_credit_account_id=credit_id,
        )
        click.echo(f"Created category '{name}' in {book_type.lower()} (ID: {category_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
