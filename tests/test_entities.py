"""Tests for domain entities."""

import pytest
from datetime import datetime, date, UTC

from ledgerbook.domain.entities import (
    Account,
    AccountType,
    BalanceType,
    BookType,
    BulkRecordResult,
    Entry,
    EntryStatus,
    PeriodClosing,
    RecordOutcome,
    ResultStatus,
    TransferValidation,
)
from ledgerbook.domain.vat import VatType


def _entry(**overrides) -> Entry:
    values = dict(
        id=1,
        user_id=1,
        amount=10000,
        description="Cash sale",
        transaction_date=date(2024, 3, 5),
        book_type=BookType.CASH_RECEIPT_JOURNAL,
        debit_account_id=101,
        credit_account_id=401,
        created_at=datetime.now(UTC),
    )
    values.update(overrides)
    return Entry(**values)


class TestAccount:
    """Tests for Account entity."""

    def test_account_immutability(self):
        """Test that Account entities are immutable."""
        account = Account(
            id=1,
            code="1101",
            name="Cash on Hand",
            type=AccountType.ASSET,
            created_at=datetime.now(UTC),
        )
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            account.name = "New Name"

    def test_account_equality(self):
        created_at = datetime.now(UTC)
        account1 = Account(id=1, code="1101", name="Cash", type=AccountType.ASSET, created_at=created_at)
        account2 = Account(id=1, code="1101", name="Cash", type=AccountType.ASSET, created_at=created_at)
        account3 = Account(id=2, code="1102", name="Cash", type=AccountType.ASSET, created_at=created_at)

        assert account1 == account2
        assert account1 != account3


class TestEntry:
    """Tests for Entry entity."""

    def test_new_entry_is_draft(self):
        entry = _entry()
        assert entry.status == EntryStatus.DRAFT
        assert not entry.is_recorded
        assert not entry.is_transferred
        assert not entry.is_parent_gl
        assert not entry.is_child_transaction

    def test_recorded_entry(self):
        entry = _entry(recorded_at=datetime.now(UTC))
        assert entry.status == EntryStatus.RECORDED

    def test_transferred_entry_is_child(self):
        now = datetime.now(UTC)
        entry = _entry(recorded_at=now, transferred_to_gl_at=now, gl_parent_id=9, gl_posting_month="2024-03")
        assert entry.status == EntryStatus.TRANSFERRED
        assert entry.is_child_transaction
        assert not entry.is_parent_gl

    def test_parent_entry_is_posted(self):
        now = datetime.now(UTC)
        entry = _entry(
            book_type=BookType.GENERAL_LEDGER,
            category_id=None,
            recorded_at=now,
            gl_posting_month="2024-03",
        )
        assert entry.is_parent_gl
        assert entry.status == EntryStatus.POSTED

    def test_account_pair_keeps_sides_apart(self):
        assert _entry().account_pair == (101, 401)
        assert _entry(debit_account_id=401, credit_account_id=101).account_pair == (401, 101)

    def test_vat_amount_is_derived(self):
        assert _entry(amount=11200, vat_type=VatType.VAT_INCLUSIVE).vat_amount == 1200
        assert _entry(amount=10000, vat_type=VatType.VAT_EXCLUSIVE).vat_amount == 1200
        assert _entry(amount=10000).vat_amount == 0


class TestBalances:
    """Tests for balance helpers."""

    def test_balance_type_for_balance(self):
        assert BalanceType.for_balance(0) == BalanceType.DEBIT
        assert BalanceType.for_balance(15000) == BalanceType.DEBIT
        assert BalanceType.for_balance(-1) == BalanceType.CREDIT

    def test_display_balance_strips_sign(self):
        closing = PeriodClosing(
            total_debits=0,
            total_credits=5000,
            net_amount=-5000,
            running_balance=-5000,
            balance_type=BalanceType.CREDIT,
        )
        assert closing.display_balance == 5000


class TestResults:
    """Tests for validation and bulk result entities."""

    def test_validation_requires_eligible_ids(self):
        assert not TransferValidation().is_valid
        assert TransferValidation(eligible_ids=(1,)).is_valid

    def test_validation_with_errors_is_invalid(self):
        validation = TransferValidation(eligible_ids=(1,), errors=("Entries not found: 3",))
        assert not validation.is_valid

    def test_bulk_result_counts(self):
        result = BulkRecordResult(
            status=ResultStatus.PARTIAL,
            message="Recorded 1 entries, 1 failed",
            outcomes=(
                RecordOutcome(1, ResultStatus.SUCCESS, "Recorded entry 1"),
                RecordOutcome(2, ResultStatus.ERROR, "Entry 2 not found"),
            ),
        )
        assert result.total == 2
        assert result.successful == 1
        assert result.failed == 1
