"""Initialize the default chart of accounts and categories."""

import click
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService


# Small business chart of accounts: (code, name, type)
INITIAL_ACCOUNTS = [
    # Assets
    ("1101", "Cash on Hand", "asset"),
    ("1102", "Cash in Bank", "asset"),
    ("1103", "Petty Cash Fund", "asset"),
    ("1201", "Accounts Receivable", "asset"),
    ("1301", "Office Supplies", "asset"),
    ("1302", "Office Equipment", "asset"),
    ("1401", "Prepaid Rent", "asset"),
    # Liabilities
    ("2101", "Accounts Payable", "liability"),
    ("2102", "Accrued Expenses", "liability"),
    ("2103", "Taxes Payable", "liability"),
    ("2104", "VAT Payable", "liability"),
    ("2201", "Notes Payable", "liability"),
    # Equity
    ("3101", "Owner's Capital", "equity"),
    ("3102", "Owner's Drawings", "equity"),
    ("3201", "Retained Earnings", "equity"),
    # Revenue
    ("4101", "Sales Revenue", "revenue"),
    ("4102", "Service Revenue", "revenue"),
    ("4103", "Consulting Fees", "revenue"),
    ("4107", "Interest Income", "revenue"),
    # Expenses
    ("5101", "Cost of Goods Sold", "expense"),
    ("5201", "Salaries & Wages", "expense"),
    ("5301", "Office Rent", "expense"),
    ("5302", "Utilities Expense", "expense"),
    ("5304", "Office Supplies Expense", "expense"),
    ("5502", "Bank Service Charges", "expense"),
    ("5601", "Depreciation Expense", "expense"),
]

# (name, book, default debit code, default credit code)
INITIAL_CATEGORIES = [
    ("Sales Income - Cash", "cash_receipt_journal", "1101", "4101"),
    ("Service Income - Cash", "cash_receipt_journal", "1101", "4102"),
    ("Consulting Fees - Cash", "cash_receipt_journal", "1101", "4103"),
    ("Collection from Receivables", "cash_receipt_journal", "1101", "1201"),
    ("Owner's Capital Contribution", "cash_receipt_journal", "1101", "3101"),
    ("Office Rent Payment", "cash_disbursement_journal", "5301", "1101"),
    ("Salaries & Wages Payment", "cash_disbursement_journal", "5201", "1101"),
    ("Utilities Payment", "cash_disbursement_journal", "5302", "1101"),
    ("Office Supplies Purchase", "cash_disbursement_journal", "5304", "1101"),
    ("Payment to Suppliers", "cash_disbursement_journal", "2101", "1101"),
    ("VAT Payment", "cash_disbursement_journal", "2104", "1101"),
    ("Bank Deposits", "cash_disbursement_journal", "1102", "1101"),
    ("Depreciation Expense", "general_journal", "5601", "1302"),
    ("Accrued Expenses", "general_journal", "5201", "2102"),
    ("Prepaid Expenses", "general_journal", "1401", "1101"),
]


@click.command("init-accounts")
@click.pass_context
def init_accounts(ctx):
    """Initialize database with the default chart of accounts and categories.

    Accounts whose code already exists are left untouched, so running this
    twice is harmless.
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    category_service = CategoryService(db)

    click.echo("Creating chart of accounts...")

    created = 0
    errors = 0
    for code, name, account_type in INITIAL_ACCOUNTS:
        if account_service.get_account_by_code(code) is not None:
            continue
        try:
            account_service.create_account(code=code, name=name, account_type=account_type)
            created += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create account '{code}': {e}", err=True)
            errors += 1

    accounts_by_code = {acc.code: acc.id for acc in account_service.list_accounts()}
    existing_categories = {cat.name for cat in category_service.list_categories()}

    created_categories = 0
    for name, book_type, debit_code, credit_code in INITIAL_CATEGORIES:
        if name in existing_categories:
            continue
        try:
            category_service.create_category(
                name=name,
                book_type=book_type,
                default_debit_account_id=accounts_by_code.get(debit_code),
                default_credit_account_id=accounts_by_code.get(credit_code),
            )
            created_categories += 1
        except ValueError as e:
            click.echo(f"Warning: Could not create category '{name}': {e}", err=True)
            errors += 1

    if errors == 0:
        click.echo(f"Successfully created {created} accounts and {created_categories} categories.")
    else:
        click.echo(f"Created {created} accounts and {created_categories} categories with {errors} errors.")


def register_commands(cli):
    """Register init-accounts command with main CLI."""
    cli.add_command(init_accounts)
