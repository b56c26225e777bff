"""Tests for database mappers."""

from datetime import datetime, date, UTC

from ledgerbook.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Entry as ORMEntry,
)
from ledgerbook.database.mappers import (
    account_to_domain,
    category_to_domain,
    entry_to_domain,
)
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    BookType,
    Category,
    Entry,
    EntryStatus,
)
from ledgerbook.domain.vat import VatType


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        orm_account = ORMAccount(
            id=1,
            code="1101",
            name="Cash on Hand",
            type="asset",
            created_at=datetime.now(UTC),
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.code == "1101"
        assert domain_account.type == AccountType.ASSET
        assert domain_account.created_at == orm_account.created_at


class TestCategoryMapper:
    """Tests for Category mapper."""

    def test_category_to_domain(self):
        orm_category = ORMCategory(
            id=3,
            name="Office Rent Payment",
            book_type="cash_disbursement_journal",
            default_debit_account_id=7,
            default_credit_account_id=1,
            created_at=datetime.now(UTC),
        )
        domain_category = category_to_domain(orm_category)

        assert isinstance(domain_category, Category)
        assert domain_category.book_type == BookType.CASH_DISBURSEMENT_JOURNAL
        assert domain_category.default_debit_account_id == 7


class TestEntryMapper:
    """Tests for Entry mapper."""

    def test_child_entry_to_domain(self):
        now = datetime.now(UTC)
        orm_entry = ORMEntry(
            id=5,
            user_id=1,
            category_id=2,
            amount=10000,
            description="Cash sale",
            transaction_date=date(2024, 3, 5),
            debit_account_id=1,
            credit_account_id=4,
            book_type="cash_receipt_journal",
            reference_number="OR-1",
            vat_type="vat_inclusive",
            created_at=now,
            recorded_at=now,
            transferred_to_gl_at=now,
            gl_parent_id=9,
            gl_posting_month="2024-03",
        )
        entry = entry_to_domain(orm_entry)

        assert isinstance(entry, Entry)
        assert entry.book_type == BookType.CASH_RECEIPT_JOURNAL
        assert entry.vat_type == VatType.VAT_INCLUSIVE
        assert entry.gl_parent_id == 9
        assert entry.status == EntryStatus.TRANSFERRED
        assert entry.account_pair == (1, 4)
