"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Sequence
from datetime import date, datetime

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerbook.domain.entities import (
    Account,
    AccountType,
    BookType,
    Category,
    Entry,
    PostingGroup,
)
from ledgerbook.domain.vat import VatType


class Database(ABC):
    """Abstract entry store for ledgerbook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, code: str, name: str, account_type: AccountType) -> int:
        """Create a chart of accounts entry. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by chart of accounts code."""
        pass

    @abstractmethod
    def list_accounts(self, account_ids: Optional[Iterable[int]] = None) -> list[Account]:
        """List accounts ordered by code, optionally restricted to the given IDs."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        book_type: BookType,
        default_debit_account_id: Optional[int] = None,
        default_credit_account_id: Optional[int] = None,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self, category_ids: Optional[Iterable[int]] = None) -> list[Category]:
        """List categories ordered by name, optionally restricted to the given IDs."""
        pass

    # Entry operations
    @abstractmethod
    def create_entry(
        self,
        user_id: int,
        amount: int,
        description: str,
        transaction_date: date,
        book_type: BookType,
        debit_account_id: int,
        credit_account_id: int,
        category_id: Optional[int] = None,
        reference_number: Optional[str] = None,
        vat_type: VatType = VatType.VAT_EXEMPT,
    ) -> int:
        """Create a draft leaf entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[Entry]:
        """Get entry by ID."""
        pass

    @abstractmethod
    def get_entries(self, entry_ids: Iterable[int], user_id: int) -> list[Entry]:
        """Get the entries among ``entry_ids`` owned by ``user_id``, ordered by ID."""
        pass

    @abstractmethod
    def list_entries(
        self,
        user_id: int,
        book_type: Optional[BookType] = None,
        record_state: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> list[Entry]:
        """List leaf entries with optional filters.

        Args:
            user_id: Owner of the entries
            book_type: Optional book filter; parents are only listed when
                this is ``BookType.GENERAL_LEDGER``
            record_state: Optional "draft", "recorded" or "transferred"
            date_from: Optional inclusive start of transaction date
            date_to: Optional inclusive end of transaction date
        """
        pass

    @abstractmethod
    def update_entry(
        self,
        entry_id: int,
        amount: int,
        description: str,
        transaction_date: date,
        book_type: BookType,
        debit_account_id: int,
        credit_account_id: int,
        category_id: int,
        reference_number: Optional[str] = None,
        vat_type: VatType = VatType.VAT_EXEMPT,
    ) -> bool:
        """Overwrite a leaf entry that has not been transferred.

        Returns False when the entry was transferred or is a parent by the
        time the update runs.
        """
        pass

    @abstractmethod
    def set_entry_recorded_at(self, entry_id: int, recorded_at: Optional[datetime]) -> bool:
        """Record (timestamp) or un-record (None) a leaf entry that is not transferred.

        Returns False when the entry was transferred or is a parent.
        """
        pass

    @abstractmethod
    def update_entry_description(self, entry_id: int, user_id: int, description: str) -> bool:
        """Replace the description of a parent GL entry owned by ``user_id``.

        Returns False, changing nothing, when ``entry_id`` is not such a parent.
        """
        pass

    # General ledger operations
    @abstractmethod
    def create_transfer(
        self,
        groups: Sequence[PostingGroup],
        target_month: str,
        description: str,
        user_id: int,
        transaction_date: date,
        posted_at: datetime,
    ) -> list[Entry]:
        """Create one parent per group and re-parent its entries, all-or-nothing.

        Each group's entries are re-parented only if they are still recorded,
        untransferred leaves owned by ``user_id``.

        Returns:
            Created parent entries, in group order

        Raises:
            ConcurrencyConflictError: If any group's entries stopped being eligible
            PersistenceError: If the store fails
        """
        pass

    @abstractmethod
    def get_balance_totals_before(self, account_id: int, user_id: int, as_of: date) -> tuple[int, int]:
        """Return (debits, credits) for an account before ``as_of``.

        Counts recorded, untransferred leaf entries dated before ``as_of``,
        parent entries created before ``as_of``, and transferred leaf entries
        posted to a month before ``as_of``'s by a parent created on or after
        ``as_of``. Every amount is counted exactly once.
        """
        pass

    @abstractmethod
    def list_month_postings(self, account_id: int, user_id: int, month: str) -> list[Entry]:
        """List parent entries posted to ``month`` that touch the account."""
        pass

    @abstractmethod
    def list_parent_entries(self, user_id: int) -> list[Entry]:
        """List every parent GL entry of a user, newest first."""
        pass

    @abstractmethod
    def get_children(self, parent_ids: Iterable[int]) -> dict[int, list[Entry]]:
        """Map each parent ID to its child entries, ordered by ID."""
        pass

    # Reporting
    @abstractmethod
    def sum_amounts_by_book_type(self, user_id: int) -> dict[BookType, int]:
        """Total recorded and draft leaf amounts per book."""
        pass

    @abstractmethod
    def count_used_accounts(self, user_id: int) -> int:
        """Count distinct accounts referenced by a user's entries."""
        pass
