"""General ledger transfer domain service.

Validates candidate entries and folds the eligible ones into one parent
posting per (debit account, credit account) pair for a posting month.
"""

import logging
from datetime import datetime, UTC
from typing import Callable, Iterable, Optional, Sequence

from ledgerbook.database.base import Database
from ledgerbook.domain.entities import (
    AccountActivity,
    BookType,
    Entry,
    IneligibleEntry,
    PostingGroup,
    TransferResult,
    TransferSummary,
    TransferValidation,
)
from ledgerbook.domain.errors import (
    MAX_GL_DESCRIPTION_LENGTH,
    NoEligibleEntriesError,
    NotFoundError,
    ValidationError,
    entries_not_found,
    no_eligible_entries,
)
from ledgerbook.utils.date_parser import last_day_of_month, parse_month

logger = logging.getLogger(__name__)

REASON_NOT_RECORDED = "not recorded"
REASON_ALREADY_TRANSFERRED = "already transferred"
REASON_GL_POSTING = "general ledger posting"


def clean_gl_description(description: Optional[str]) -> str:
    """Strip a general ledger description and check its length.

    Raises:
        ValidationError: If the description is empty or longer than 255 characters
    """
    cleaned = (description or "").strip()
    if not cleaned:
        raise ValidationError("General ledger description is required")
    if len(cleaned) > MAX_GL_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"General ledger description must be at most {MAX_GL_DESCRIPTION_LENGTH} characters"
        )
    return cleaned


def ineligibility_reason(entry: Entry) -> Optional[str]:
    """Return why an entry cannot be transferred, or None if it can."""
    if entry.book_type == BookType.GENERAL_LEDGER:
        return REASON_GL_POSTING
    if entry.is_transferred or entry.is_child_transaction:
        return REASON_ALREADY_TRANSFERRED
    if not entry.is_recorded:
        return REASON_NOT_RECORDED
    return None


def group_by_account_pair(entries: Iterable[Entry]) -> list[PostingGroup]:
    """Group entries by (debit, credit) account pair, in first-seen order.

    The key keeps debit and credit apart: (101, 401) and (401, 101) are
    different groups. Categories are not part of the key.
    """
    grouped: dict[tuple[int, int], list[Entry]] = {}
    for entry in entries:
        grouped.setdefault(entry.account_pair, []).append(entry)

    return [
        PostingGroup(
            debit_account_id=debit_account_id,
            credit_account_id=credit_account_id,
            entry_ids=tuple(entry.id for entry in members),
            amount=sum(entry.amount for entry in members),
        )
        for (debit_account_id, credit_account_id), members in grouped.items()
    ]


def build_transfer_summary(target_month: str, groups: Sequence[PostingGroup]) -> TransferSummary:
    """Summarise how each account is affected by a set of posting groups."""
    activity: dict[int, dict[str, int]] = {}

    def _bucket(account_id: int) -> dict[str, int]:
        return activity.setdefault(
            account_id,
            {"debit_count": 0, "credit_count": 0, "total_debit_amount": 0, "total_credit_amount": 0},
        )

    for group in groups:
        debit = _bucket(group.debit_account_id)
        debit["debit_count"] += len(group.entry_ids)
        debit["total_debit_amount"] += group.amount

        credit = _bucket(group.credit_account_id)
        credit["credit_count"] += len(group.entry_ids)
        credit["total_credit_amount"] += group.amount

    return TransferSummary(
        target_month=target_month,
        total_amount=sum(group.amount for group in groups),
        accounts_affected=tuple(
            AccountActivity(account_id=account_id, **totals) for account_id, totals in activity.items()
        ),
    )


class TransferService:
    """Service for transferring recorded entries to the general ledger."""

    def __init__(self, db: Database, clock: Optional[Callable[[], datetime]] = None):
        """Initialize transfer service.

        Args:
            db: Database instance
            clock: Optional source of the transfer timestamp, defaults to UTC now
        """
        self.db = db
        self.clock = clock or (lambda: datetime.now(UTC))

    def validate_transfer(self, entry_ids: Iterable[int], user_id: int) -> TransferValidation:
        """Classify candidate entries as eligible or ineligible for transfer.

        Ids that do not exist for ``user_id`` are reported in ``errors``
        rather than per id. This never modifies the store.

        Args:
            entry_ids: Candidate entry IDs
            user_id: Owner of the entries

        Returns:
            TransferValidation report
        """
        validation, _ = self._classify(list(dict.fromkeys(entry_ids)), user_id)
        return validation

    def transfer(
        self,
        entry_ids: Iterable[int],
        target_month: str,
        description: str,
        user_id: int,
    ) -> TransferResult:
        """Fold eligible entries into parent GL postings for ``target_month``.

        One parent is created per (debit, credit) account pair, carrying the
        summed amount and ``description``; every source entry becomes its
        child. The whole call is one database transaction.

        Args:
            entry_ids: Entry IDs to transfer
            target_month: Posting month as "YYYY-MM"
            description: Description for every created parent
            user_id: Owner of the entries

        Returns:
            TransferResult with created parents and counts

        Raises:
            ValidationError: If the month, description or id list is invalid
            NotFoundError: If any id does not exist for this user
            NoEligibleEntriesError: If no requested entry can be transferred
            ConcurrencyConflictError: If entries changed between validation and commit
            PersistenceError: If the store fails
        """
        description = clean_gl_description(description)
        try:
            parse_month(target_month)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        target_month = target_month.strip()

        requested = list(dict.fromkeys(entry_ids))
        if not requested:
            raise ValidationError("At least one entry is required")

        validation, eligible_entries = self._classify(requested, user_id)
        if validation.errors:
            raise NotFoundError("; ".join(validation.errors))
        if not eligible_entries:
            raise NoEligibleEntriesError(no_eligible_entries())
        if validation.ineligible:
            logger.info(
                "Skipping %d ineligible entries: %s",
                len(validation.ineligible),
                ", ".join(f"{item.id} ({item.reason})" for item in validation.ineligible),
            )

        groups = group_by_account_pair(eligible_entries)
        parents = self.db.create_transfer(
            groups=groups,
            target_month=target_month,
            description=description,
            user_id=user_id,
            transaction_date=last_day_of_month(target_month),
            posted_at=self.clock(),
        )

        total_entries = sum(len(group.entry_ids) for group in groups)
        logger.info(
            "Transferred %d entries in %d groups to the general ledger for %s (user %d)",
            total_entries,
            len(groups),
            target_month,
            user_id,
        )
        return TransferResult(
            parent_entries=tuple(parents),
            total_entries=total_entries,
            total_groups=len(groups),
            summary=build_transfer_summary(target_month, groups),
        )

    def _classify(self, requested: list[int], user_id: int) -> tuple[TransferValidation, list[Entry]]:
        found = {entry.id: entry for entry in self.db.get_entries(requested, user_id)}

        eligible: list[Entry] = []
        ineligible: list[IneligibleEntry] = []
        for entry_id in requested:
            entry = found.get(entry_id)
            if entry is None:
                continue
            reason = ineligibility_reason(entry)
            if reason is None:
                eligible.append(entry)
            else:
                ineligible.append(IneligibleEntry(id=entry_id, reason=reason))

        missing = [entry_id for entry_id in requested if entry_id not in found]
        errors = (entries_not_found(missing),) if missing else ()

        validation = TransferValidation(
            eligible_ids=tuple(entry.id for entry in eligible),
            ineligible=tuple(ineligible),
            errors=errors,
        )
        return validation, eligible
