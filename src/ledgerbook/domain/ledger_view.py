"""General ledger view domain service."""

from datetime import date
from typing import Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import (
    Account,
    BalanceType,
    Entry,
    GeneralLedgerView,
    GrandTotal,
    LedgerMonth,
    LedgerRow,
    PeriodClosing,
)
from ledgerbook.domain.errors import ValidationError
from ledgerbook.utils.date_parser import months_in_range


def to_ledger_row(entry: Entry, account_id: int, accounts: dict[int, Account]) -> LedgerRow:
    """Render a parent posting from the point of view of ``account_id``."""
    is_debit = entry.debit_account_id == account_id
    counterpart_id = entry.credit_account_id if is_debit else entry.debit_account_id
    return LedgerRow(
        entry_id=entry.id,
        date=entry.transaction_date,
        description=entry.description,
        reference_number=entry.reference_number,
        debit_amount=entry.amount if is_debit else None,
        credit_amount=None if is_debit else entry.amount,
        counterpart_account=accounts.get(counterpart_id),
        posting_month=entry.gl_posting_month,
        posted_at=entry.created_at,
    )


def calculate_period_closing(rows: Sequence[LedgerRow], opening_balance: int) -> PeriodClosing:
    """Month totals and the balance carried forward."""
    total_debits = sum(row.debit_amount for row in rows if row.debit_amount is not None)
    total_credits = sum(row.credit_amount for row in rows if row.credit_amount is not None)
    net_amount = total_debits - total_credits
    running_balance = opening_balance + net_amount
    return PeriodClosing(
        total_debits=total_debits,
        total_credits=total_credits,
        net_amount=net_amount,
        running_balance=running_balance,
        balance_type=BalanceType.for_balance(running_balance),
    )


def calculate_grand_total(months: Sequence[LedgerMonth], opening_balance: int) -> GrandTotal:
    """Totals across months; the final balance is the last month's running balance."""
    total_debits = sum(month.period_closing.total_debits for month in months)
    total_credits = sum(month.period_closing.total_credits for month in months)
    final_balance = months[-1].period_closing.running_balance if months else opening_balance
    return GrandTotal(
        total_debits=total_debits,
        total_credits=total_credits,
        net_amount=total_debits - total_credits,
        final_balance=final_balance,
        balance_type=BalanceType.for_balance(final_balance),
    )


class LedgerViewService:
    """Builds month-bucketed general ledger statements for one account."""

    def __init__(self, db: Database):
        """Initialize ledger view service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = AccountService(db)

    def view(self, account_id: int, date_from: date, date_to: date, user_id: int) -> GeneralLedgerView:
        """Build the general ledger of an account between two dates.

        The opening balance is taken as of ``date_from``; the statement then
        covers every calendar month from ``date_from``'s month through
        ``date_to``'s. Rows are parent GL postings only; leaf entries folded
        into a parent are represented by it.

        Args:
            account_id: Account to report on
            date_from: Start of the range
            date_to: End of the range
            user_id: Owner of the entries

        Returns:
            GeneralLedgerView

        Raises:
            NotFoundError: If the account doesn't exist
            ValidationError: If ``date_from`` is after ``date_to``
        """
        account = self.account_service.require_account(account_id)
        if date_from > date_to:
            raise ValidationError("Start date must not be after end date")

        opening_balance = self.get_opening_balance(account_id, date_from, user_id)

        months = []
        running_balance = opening_balance
        for month in months_in_range(date_from, date_to):
            rows = self.get_month_rows(account_id, month, user_id)
            period_closing = calculate_period_closing(rows, running_balance)
            months.append(
                LedgerMonth(
                    month=month,
                    opening_balance=running_balance,
                    rows=tuple(rows),
                    period_closing=period_closing,
                )
            )
            running_balance = period_closing.running_balance

        return GeneralLedgerView(
            account=account,
            date_from=date_from,
            date_to=date_to,
            opening_balance=opening_balance,
            months=tuple(months),
            grand_total=calculate_grand_total(months, opening_balance),
        )

    def get_opening_balance(self, account_id: int, as_of: date, user_id: int) -> int:
        """Net debit balance of an account before ``as_of``."""
        total_debits, total_credits = self.db.get_balance_totals_before(account_id, user_id, as_of)
        return total_debits - total_credits

    def get_month_rows(self, account_id: int, month: str, user_id: int) -> list[LedgerRow]:
        """Ledger rows for the parent postings of one month."""
        postings = self.db.list_month_postings(account_id, user_id, month)
        counterpart_ids = {
            entry.credit_account_id if entry.debit_account_id == account_id else entry.debit_account_id
            for entry in postings
        }
        accounts = self.account_service.get_accounts_map(counterpart_ids)
        return [to_ledger_row(entry, account_id, accounts) for entry in postings]
