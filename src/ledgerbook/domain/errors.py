"""Shared domain error messages and error types."""

from typing import Iterable


MAX_GL_DESCRIPTION_LENGTH = 255


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested account, category or entry does not exist."""


class IneligibleEntryError(DomainError):
    """Entry is in a lifecycle state that does not allow the operation."""


class NoEligibleEntriesError(DomainError):
    """A transfer request contained no entry that can be transferred."""


class ConcurrencyConflictError(DomainError):
    """Entries stopped being eligible between validation and commit.

    Callers should re-validate and retry.
    """


class PersistenceError(DomainError):
    """The entry store failed; the underlying cause is chained, not exposed."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category."""
    return f"Category {category_id} not found"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing entry."""
    return f"Entry {entry_id} not found"


def entries_not_found(entry_ids: Iterable[int]) -> str:
    """Return message for a batch of missing entries."""
    return f"Entries not found: {', '.join(str(entry_id) for entry_id in entry_ids)}"


def gl_entry_not_found(entry_id: int) -> str:
    """Return message for a missing parent general ledger entry."""
    return f"General ledger entry {entry_id} not found"


def same_debit_and_credit() -> str:
    return "Debit and credit accounts must be different"


def no_eligible_entries() -> str:
    return "No eligible transactions to transfer"


def transfer_conflict(debit_account_id: int, credit_account_id: int) -> str:
    """Return message when a group lost the eligibility race at commit time."""
    return (
        f"Entries for account pair {debit_account_id}/{credit_account_id} changed "
        "during transfer. Please validate and retry."
    )


def persistence_failure() -> str:
    return "The ledger could not be updated. No changes were saved."
