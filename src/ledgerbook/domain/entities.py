"""Domain model entities for ledgerbook.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. Leaf entries and parent general ledger postings share one
``Entry`` type; the ``gl_parent_id`` back-reference and ``book_type`` tell
them apart, mirroring the single polymorphic ``entries`` table.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional

from ledgerbook.domain.vat import VatType, compute_vat_amount


class AccountType(str, Enum):
    """Chart of accounts classification."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class BookType(str, Enum):
    """Book an entry belongs to."""

    CASH_RECEIPT_JOURNAL = "cash_receipt_journal"
    CASH_DISBURSEMENT_JOURNAL = "cash_disbursement_journal"
    GENERAL_JOURNAL = "general_journal"
    GENERAL_LEDGER = "general_ledger"


class BalanceType(str, Enum):
    """Side a balance sits on."""

    DEBIT = "debit"
    CREDIT = "credit"

    @classmethod
    def for_balance(cls, balance: int) -> "BalanceType":
        return cls.DEBIT if balance >= 0 else cls.CREDIT


class ResultStatus(str, Enum):
    """Outcome discriminator for batch operations."""

    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


class EntryStatus(str, Enum):
    """Lifecycle state of an entry."""

    DRAFT = "draft"
    RECORDED = "recorded"
    TRANSFERRED = "transferred"
    POSTED = "posted"


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    code: str
    name: str
    type: AccountType
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Transaction category; decides the book an entry is written to."""

    id: int
    name: str
    book_type: BookType
    default_debit_account_id: Optional[int]
    default_credit_account_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class Entry:
    """Ledger entry, either a subsidiary-book leaf or a parent GL posting.

    Amounts are integer minor currency units.
    """

    id: int
    user_id: int
    amount: int
    description: str
    transaction_date: date
    book_type: BookType
    debit_account_id: int
    credit_account_id: int
    created_at: datetime
    reference_number: Optional[str] = None
    vat_type: VatType = VatType.VAT_EXEMPT
    category_id: Optional[int] = None
    recorded_at: Optional[datetime] = None
    transferred_to_gl_at: Optional[datetime] = None
    gl_parent_id: Optional[int] = None
    gl_posting_month: Optional[str] = None

    @property
    def is_parent_gl(self) -> bool:
        return self.book_type == BookType.GENERAL_LEDGER and self.gl_parent_id is None

    @property
    def is_child_transaction(self) -> bool:
        return self.gl_parent_id is not None

    @property
    def is_recorded(self) -> bool:
        return self.recorded_at is not None

    @property
    def is_transferred(self) -> bool:
        return self.transferred_to_gl_at is not None

    @property
    def status(self) -> EntryStatus:
        if self.is_parent_gl:
            return EntryStatus.POSTED
        if self.is_transferred:
            return EntryStatus.TRANSFERRED
        if self.is_recorded:
            return EntryStatus.RECORDED
        return EntryStatus.DRAFT

    @property
    def vat_amount(self) -> int:
        return compute_vat_amount(self.amount, self.vat_type)

    @property
    def account_pair(self) -> tuple[int, int]:
        return (self.debit_account_id, self.credit_account_id)


@dataclass(frozen=True)
class IneligibleEntry:
    """An entry that cannot be transferred, with the reason why."""

    id: int
    reason: str


@dataclass(frozen=True)
class TransferValidation:
    """Eligibility report for a batch of candidate entry ids."""

    eligible_ids: tuple[int, ...] = ()
    ineligible: tuple[IneligibleEntry, ...] = ()
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return len(self.eligible_ids) > 0 and not self.errors


@dataclass(frozen=True)
class PostingGroup:
    """Entries sharing one account pair, to be folded into one parent."""

    debit_account_id: int
    credit_account_id: int
    entry_ids: tuple[int, ...]
    amount: int


@dataclass(frozen=True)
class AccountActivity:
    """How one account is touched by a transfer."""

    account_id: int
    debit_count: int = 0
    credit_count: int = 0
    total_debit_amount: int = 0
    total_credit_amount: int = 0


@dataclass(frozen=True)
class TransferSummary:
    """Aggregate view of a completed transfer."""

    target_month: str
    total_amount: int
    accounts_affected: tuple[AccountActivity, ...]


@dataclass(frozen=True)
class TransferResult:
    """Outcome of a successful transfer."""

    parent_entries: tuple[Entry, ...]
    total_entries: int
    total_groups: int
    summary: TransferSummary
    status: ResultStatus = ResultStatus.SUCCESS


@dataclass(frozen=True)
class TransferGroup:
    """A parent GL entry together with the leaf entries folded into it."""

    parent: Entry
    children: tuple[Entry, ...]
    accounts: dict[int, Account] = field(default_factory=dict)
    categories: dict[int, Category] = field(default_factory=dict)


@dataclass(frozen=True)
class LedgerRow:
    """One posting line in an account's general ledger."""

    entry_id: int
    date: date
    description: str
    reference_number: Optional[str]
    debit_amount: Optional[int]
    credit_amount: Optional[int]
    counterpart_account: Optional[Account]
    posting_month: Optional[str]
    posted_at: datetime


@dataclass(frozen=True)
class PeriodClosing:
    """Month-end totals and running balance."""

    total_debits: int
    total_credits: int
    net_amount: int
    running_balance: int
    balance_type: BalanceType

    @property
    def display_balance(self) -> int:
        return abs(self.running_balance)


@dataclass(frozen=True)
class LedgerMonth:
    """One month bucket of a general ledger view."""

    month: str
    opening_balance: int
    rows: tuple[LedgerRow, ...]
    period_closing: PeriodClosing


@dataclass(frozen=True)
class GrandTotal:
    """Totals across every month of a general ledger view."""

    total_debits: int
    total_credits: int
    net_amount: int
    final_balance: int
    balance_type: BalanceType

    @property
    def display_balance(self) -> int:
        return abs(self.final_balance)


@dataclass(frozen=True)
class GeneralLedgerView:
    """Month-bucketed statement for one account."""

    account: Account
    date_from: date
    date_to: date
    opening_balance: int
    months: tuple[LedgerMonth, ...]
    grand_total: GrandTotal


@dataclass(frozen=True)
class RecordOutcome:
    """Result of recording or un-recording a single entry in a bulk call."""

    entry_id: int
    status: ResultStatus
    message: str


@dataclass(frozen=True)
class BulkRecordResult:
    """Result of a bulk record or undo-record call."""

    status: ResultStatus
    message: str
    outcomes: tuple[RecordOutcome, ...]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def successful(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == ResultStatus.SUCCESS)

    @property
    def failed(self) -> int:
        return self.total - self.successful


@dataclass(frozen=True)
class BookSummary:
    """Headline totals across a user's books."""

    total_income: int
    total_expenses: int
    net_income: int
    total_chart_of_accounts: int
