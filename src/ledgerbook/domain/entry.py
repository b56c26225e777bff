"""Subsidiary-book entry domain service."""

import logging
from datetime import date, datetime, UTC
from typing import Callable, Iterable, Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    BookSummary,
    BookType,
    BulkRecordResult,
    Entry as EntryEntity,
    RecordOutcome,
    ResultStatus,
)
from ledgerbook.domain.errors import (
    DomainError,
    IneligibleEntryError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    entry_not_found,
    same_debit_and_credit,
)
from ledgerbook.domain.vat import VatType

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 500
MAX_REFERENCE_LENGTH = 50
RECORD_STATES = ("draft", "recorded", "transferred")


class EntryService:
    """Service for recording double-entry transactions in subsidiary books."""

    def __init__(self, db: Database):
        """Initialize entry service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entry(
        self,
        user_id: int,
        category_id: int,
        amount: int,
        description: str,
        transaction_date: date,
        debit_account_id: int,
        credit_account_id: int,
        reference_number: Optional[str] = None,
        vat_type: Optional[VatType | str] = None,
    ) -> int:
        """Create a draft entry in the book of its category.

        Args:
            user_id: Owner of the entry
            category_id: Category ID; decides the book type
            amount: Amount in minor units, must be positive
            description: Entry description
            transaction_date: Transaction date
            debit_account_id: Account debited
            credit_account_id: Account credited, must differ from the debit account
            reference_number: Optional reference number
            vat_type: Optional VAT treatment, defaults to VAT exempt

        Returns:
            Entry ID

        Raises:
            ValidationError: If any field is invalid
            NotFoundError: If the category or an account doesn't exist
        """
        book_type, vat = self._check_entry_fields(
            category_id=category_id,
            amount=amount,
            description=description,
            debit_account_id=debit_account_id,
            credit_account_id=credit_account_id,
            reference_number=reference_number,
            vat_type=vat_type,
        )

        entry_id = self.db.create_entry(
            user_id=user_id,
            amount=amount,
            description=description.strip(),
            transaction_date=transaction_date,
            book_type=book_type,
            debit_account_id=debit_account_id,
            credit_account_id=credit_account_id,
            category_id=category_id,
            reference_number=reference_number,
            vat_type=vat,
        )
        logger.debug("Created %s entry %d for user %d", book_type.value, entry_id, user_id)
        return entry_id

    def get_entry(self, entry_id: int, user_id: Optional[int] = None) -> Optional[EntryEntity]:
        """Get entry by ID, optionally only when owned by ``user_id``."""
        entry = self.db.get_entry(entry_id)
        if entry is None or (user_id is not None and entry.user_id != user_id):
            return None
        return entry

    def require_entry(self, entry_id: int, user_id: int) -> EntryEntity:
        """Get an entry owned by ``user_id`` or raise NotFoundError."""
        entry = self.get_entry(entry_id, user_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        user_id: int,
        book_type: Optional[BookType | str] = None,
        record_state: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[EntryEntity]:
        """List a user's entries, newest first.

        Raises:
            ValidationError: If the book type or record state is unknown
        """
        if book_type is not None:
            try:
                book_type = BookType(book_type)
            except ValueError:
                raise ValidationError(f"Unknown book type '{book_type}'")
        if record_state is not None and record_state not in RECORD_STATES:
            raise ValidationError(
                f"Unknown record state '{record_state}'. Expected one of: {', '.join(RECORD_STATES)}"
            )

        return self.db.list_entries(
            user_id=user_id,
            book_type=book_type,
            record_state=record_state,
            date_from=date_from,
            date_to=date_to,
        )

    def update_entry(
        self,
        entry_id: int,
        user_id: int,
        category_id: int,
        amount: int,
        description: str,
        transaction_date: date,
        debit_account_id: int,
        credit_account_id: int,
        reference_number: Optional[str] = None,
        vat_type: Optional[VatType | str] = None,
    ) -> EntryEntity:
        """Overwrite a leaf entry that has not been transferred yet.

        Raises:
            NotFoundError: If the entry, category or an account doesn't exist
            ValidationError: If any field is invalid
            IneligibleEntryError: If the entry was transferred or is a GL posting
        """
        entry = self.require_entry(entry_id, user_id)
        self._ensure_mutable(entry)

        book_type, vat = self._check_entry_fields(
            category_id=category_id,
            amount=amount,
            description=description,
            debit_account_id=debit_account_id,
            credit_account_id=credit_account_id,
            reference_number=reference_number,
            vat_type=vat_type,
        )

        updated = self.db.update_entry(
            entry_id=entry_id,
            amount=amount,
            description=description.strip(),
            transaction_date=transaction_date,
            book_type=book_type,
            debit_account_id=debit_account_id,
            credit_account_id=credit_account_id,
            category_id=category_id,
            reference_number=reference_number,
            vat_type=vat,
        )
        if not updated:
            raise IneligibleEntryError(f"Entry {entry_id} has already been transferred to the general ledger")
        return self.require_entry(entry_id, user_id)

    def record_entry(self, entry_id: int, user_id: int) -> EntryEntity:
        """Mark a draft entry as recorded.

        Recording an already recorded entry keeps its original timestamp.

        Raises:
            NotFoundError: If the entry doesn't exist for this user
            IneligibleEntryError: If the entry was transferred or is a GL posting
        """
        entry = self.require_entry(entry_id, user_id)
        self._ensure_mutable(entry)
        if entry.is_recorded:
            return entry

        if not self.db.set_entry_recorded_at(entry_id, datetime.now(UTC)):
            raise IneligibleEntryError(f"Entry {entry_id} has already been transferred to the general ledger")
        logger.debug("Recorded entry %d", entry_id)
        return self.require_entry(entry_id, user_id)

    def undo_record_entry(self, entry_id: int, user_id: int) -> EntryEntity:
        """Return a recorded entry to draft, as long as it was not transferred.

        Raises:
            NotFoundError: If the entry doesn't exist for this user
            IneligibleEntryError: If the entry was transferred or is a GL posting
        """
        entry = self.require_entry(entry_id, user_id)
        self._ensure_mutable(entry)
        if not entry.is_recorded:
            return entry

        if not self.db.set_entry_recorded_at(entry_id, None):
            raise IneligibleEntryError(f"Entry {entry_id} has already been transferred to the general ledger")
        logger.debug("Reverted entry %d to draft", entry_id)
        return self.require_entry(entry_id, user_id)

    def bulk_record_entries(self, entry_ids: Iterable[int], user_id: int) -> BulkRecordResult:
        """Record several entries; failures are reported per entry."""
        return self._bulk(entry_ids, user_id, self.record_entry, "Recorded")

    def bulk_undo_record_entries(self, entry_ids: Iterable[int], user_id: int) -> BulkRecordResult:
        """Revert several entries to draft; failures are reported per entry."""
        return self._bulk(entry_ids, user_id, self.undo_record_entry, "Reverted")

    def summary(self, user_id: int) -> BookSummary:
        """Headline totals: cash receipts, cash disbursements and accounts in use."""
        totals = self.db.sum_amounts_by_book_type(user_id)
        total_income = totals.get(BookType.CASH_RECEIPT_JOURNAL, 0)
        total_expenses = totals.get(BookType.CASH_DISBURSEMENT_JOURNAL, 0)
        return BookSummary(
            total_income=total_income,
            total_expenses=total_expenses,
            net_income=total_income - total_expenses,
            total_chart_of_accounts=self.db.count_used_accounts(user_id),
        )

    def _bulk(
        self,
        entry_ids: Iterable[int],
        user_id: int,
        action: Callable[[int, int], EntryEntity],
        verb: str,
    ) -> BulkRecordResult:
        outcomes = []
        for entry_id in dict.fromkeys(entry_ids):
            try:
                action(entry_id, user_id)
                outcomes.append(RecordOutcome(entry_id, ResultStatus.SUCCESS, f"{verb} entry {entry_id}"))
            except DomainError as e:
                outcomes.append(RecordOutcome(entry_id, ResultStatus.ERROR, str(e)))

        successful = sum(1 for outcome in outcomes if outcome.status == ResultStatus.SUCCESS)
        failed = len(outcomes) - successful
        if failed == 0:
            status = ResultStatus.SUCCESS
        elif successful == 0:
            status = ResultStatus.ERROR
        else:
            status = ResultStatus.PARTIAL

        message = f"{verb} {successful} entries"
        if failed:
            message += f", {failed} failed"
        return BulkRecordResult(status=status, message=message, outcomes=tuple(outcomes))

    def _ensure_mutable(self, entry: EntryEntity) -> None:
        if entry.book_type == BookType.GENERAL_LEDGER:
            raise IneligibleEntryError(f"Entry {entry.id} is a general ledger posting")
        if entry.is_transferred or entry.is_child_transaction:
            raise IneligibleEntryError(f"Entry {entry.id} has already been transferred to the general ledger")

    def _check_entry_fields(
        self,
        category_id: int,
        amount: int,
        description: str,
        debit_account_id: int,
        credit_account_id: int,
        reference_number: Optional[str],
        vat_type: Optional[VatType | str],
    ) -> tuple[BookType, VatType]:
        """Validate entry fields and return the category's book type and the VAT type."""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError("Amount must be a positive number of minor units")
        if description is None or not description.strip():
            raise ValidationError("Description is required")
        if len(description.strip()) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters")
        if reference_number is not None and len(reference_number) > MAX_REFERENCE_LENGTH:
            raise ValidationError(f"Reference number must be at most {MAX_REFERENCE_LENGTH} characters")
        if debit_account_id == credit_account_id:
            raise ValidationError(same_debit_and_credit())

        try:
            vat = VatType(vat_type) if vat_type is not None else VatType.VAT_EXEMPT
        except ValueError:
            raise ValidationError(f"Unknown VAT type '{vat_type}'")

        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        for account_id in (debit_account_id, credit_account_id):
            if self.db.get_account(account_id) is None:
                raise NotFoundError(account_not_found(account_id))

        return category.book_type, vat
