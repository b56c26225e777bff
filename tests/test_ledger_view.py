"""Tests for the general ledger view."""

import pytest
from datetime import date

from ledgerbook.domain.entities import BalanceType, LedgerRow
from ledgerbook.domain.errors import NotFoundError, ValidationError
from ledgerbook.domain.ledger_view import calculate_grand_total, calculate_period_closing

USER_ID = 1
OTHER_USER_ID = 2


@pytest.fixture
def march_sales(transfer_service, make_entry):
    """Transfer two cash sales (10000 + 5000) to March 2024."""
    ids = [make_entry(10000), make_entry(5000)]
    return transfer_service.transfer(ids, "2024-03", "March sales", USER_ID).parent_entries[0]


def test_first_quarter_view_of_cash(ledger_view_service, march_sales, accounts):
    view = ledger_view_service.view(accounts["1101"].id, date(2024, 1, 1), date(2024, 3, 31), USER_ID)

    assert view.account == accounts["1101"]
    assert view.opening_balance == 0
    assert [month.month for month in view.months] == ["2024-01", "2024-02", "2024-03"]

    january, february, march = view.months
    for empty in (january, february):
        assert empty.rows == ()
        assert empty.period_closing.total_debits == 0
        assert empty.period_closing.total_credits == 0
        assert empty.period_closing.running_balance == 0

    [row] = march.rows
    assert row.entry_id == march_sales.id
    assert row.debit_amount == 15000
    assert row.credit_amount is None
    assert row.counterpart_account == accounts["4101"]
    assert row.date == date(2024, 3, 31)
    assert row.posting_month == "2024-03"
    assert march.opening_balance == 0
    assert march.period_closing.running_balance == 15000
    assert march.period_closing.balance_type == BalanceType.DEBIT

    assert view.grand_total.total_debits == 15000
    assert view.grand_total.final_balance == 15000
    assert view.grand_total.balance_type == BalanceType.DEBIT


def test_credit_side_view(ledger_view_service, march_sales, accounts):
    view = ledger_view_service.view(accounts["4101"].id, date(2024, 3, 1), date(2024, 3, 31), USER_ID)

    [row] = view.months[0].rows
    assert row.credit_amount == 15000
    assert row.debit_amount is None
    assert row.counterpart_account == accounts["1101"]
    assert view.grand_total.final_balance == -15000
    assert view.grand_total.balance_type == BalanceType.CREDIT
    assert view.grand_total.display_balance == 15000


def test_month_granularity(ledger_view_service, march_sales, accounts):
    # Mid-month bounds still cover whole months
    view = ledger_view_service.view(accounts["1101"].id, date(2024, 3, 20), date(2024, 3, 21), USER_ID)

    assert [month.month for month in view.months] == ["2024-03"]
    assert len(view.months[0].rows) == 1


def test_view_is_idempotent(ledger_view_service, march_sales, accounts):
    args = (accounts["1101"].id, date(2024, 1, 1), date(2024, 6, 30), USER_ID)
    assert ledger_view_service.view(*args) == ledger_view_service.view(*args)


def test_running_balance_carries_across_months(transfer_service, ledger_view_service, make_entry, accounts):
    transfer_service.transfer([make_entry(10000)], "2024-01", "January sales", USER_ID)
    transfer_service.transfer(
        [make_entry(4000, debit="5301", credit="1101", category="rent")], "2024-02", "February rent", USER_ID
    )
    transfer_service.transfer([make_entry(1000)], "2024-02", "February sales", USER_ID)

    view = ledger_view_service.view(accounts["1101"].id, date(2024, 1, 1), date(2024, 3, 31), USER_ID)

    january, february, march = view.months
    assert january.period_closing.running_balance == 10000
    assert february.opening_balance == 10000
    assert [(row.debit_amount, row.credit_amount) for row in february.rows] == [(None, 4000), (1000, None)]
    assert february.period_closing.net_amount == -3000
    assert february.period_closing.running_balance == 7000
    assert march.period_closing.running_balance == 7000
    assert view.grand_total.total_debits == 11000
    assert view.grand_total.total_credits == 4000
    assert view.grand_total.final_balance == 7000


def test_opening_balance_counts_recorded_leaves_before_start(ledger_view_service, make_entry, accounts):
    make_entry(2000, transaction_date=date(2024, 2, 10))
    make_entry(9999, transaction_date=date(2024, 2, 11), record=False)
    make_entry(500, transaction_date=date(2024, 3, 1))

    view = ledger_view_service.view(accounts["1101"].id, date(2024, 3, 1), date(2024, 3, 31), USER_ID)

    assert view.opening_balance == 2000
    # Leaves never appear as rows
    assert view.months[0].rows == ()
    assert view.grand_total.final_balance == 2000


def test_opening_balance_counts_parents_created_before_start(ledger_view_service, march_sales, accounts):
    # The transfer was posted on 2024-04-02
    may = ledger_view_service.view(accounts["1101"].id, date(2024, 5, 1), date(2024, 5, 31), USER_ID)

    assert may.opening_balance == 15000
    assert may.grand_total.final_balance == 15000


def test_opening_balance_before_transfer_was_posted(ledger_view_service, march_sales, accounts):
    # April starts after the March entries but before the 2024-04-02 transfer
    april = ledger_view_service.view(accounts["1101"].id, date(2024, 4, 1), date(2024, 4, 30), USER_ID)
    full = ledger_view_service.view(accounts["1101"].id, date(2024, 1, 1), date(2024, 4, 30), USER_ID)

    assert april.opening_balance == 15000
    assert april.months[0].rows == ()
    assert april.grand_total.final_balance == full.grand_total.final_balance == 15000


def test_entries_posted_inside_the_view_are_not_in_the_opening_balance(
    transfer_service, ledger_view_service, make_entry, accounts
):
    # Dated in February, posted to March on 2024-04-02
    transfer_service.transfer([make_entry(10000, transaction_date=date(2024, 2, 28))], "2024-03", "Sales", USER_ID)

    view = ledger_view_service.view(accounts["1101"].id, date(2024, 3, 1), date(2024, 3, 31), USER_ID)

    assert view.opening_balance == 0
    assert view.months[0].rows[0].debit_amount == 10000
    assert view.grand_total.final_balance == 10000


def test_transferred_leaves_are_not_counted_twice(ledger_view_service, march_sales, accounts):
    view = ledger_view_service.view(accounts["1101"].id, date(2024, 6, 1), date(2024, 6, 30), USER_ID)
    assert view.opening_balance == 15000


def test_view_only_shows_own_postings(transfer_service, ledger_view_service, make_entry, march_sales, accounts):
    foreign = make_entry(7000, user_id=OTHER_USER_ID)
    transfer_service.transfer([foreign], "2024-03", "Their sales", OTHER_USER_ID)

    view = ledger_view_service.view(accounts["1101"].id, date(2024, 3, 1), date(2024, 3, 31), USER_ID)

    assert [row.entry_id for row in view.months[0].rows] == [march_sales.id]


def test_view_unknown_account(ledger_view_service):
    with pytest.raises(NotFoundError, match="Account 999 not found"):
        ledger_view_service.view(999, date(2024, 1, 1), date(2024, 3, 31), USER_ID)


def test_view_rejects_reversed_range(ledger_view_service, accounts):
    with pytest.raises(ValidationError):
        ledger_view_service.view(accounts["1101"].id, date(2024, 3, 31), date(2024, 1, 1), USER_ID)


def test_grand_total_without_months_uses_opening_balance():
    total = calculate_grand_total([], -250)
    assert total.final_balance == -250
    assert total.balance_type == BalanceType.CREDIT


def test_period_closing_sums_rows():
    rows = [
        LedgerRow(1, date(2024, 3, 31), "a", None, 700, None, None, "2024-03", None),
        LedgerRow(2, date(2024, 3, 31), "b", None, None, 1000, None, "2024-03", None),
    ]
    closing = calculate_period_closing(rows, 100)
    assert (closing.total_debits, closing.total_credits, closing.net_amount) == (700, 1000, -300)
    assert closing.running_balance == -200
    assert closing.balance_type == BalanceType.CREDIT
    assert closing.display_balance == 200
