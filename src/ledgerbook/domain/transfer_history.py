"""Transfer history domain service."""

import logging
from typing import Optional

from ledgerbook.database.base import Database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entities import Entry, TransferGroup
from ledgerbook.domain.errors import NotFoundError, gl_entry_not_found
from ledgerbook.domain.transfer import clean_gl_description

logger = logging.getLogger(__name__)


class TransferHistoryService:
    """Read access to executed transfers, plus parent description edits."""

    def __init__(self, db: Database):
        """Initialize transfer history service.

        Args:
            db: Database instance
        """
        self.db = db
        self.account_service = AccountService(db)
        self.category_service = CategoryService(db)

    def get_transfer_history(self, user_id: int, transfer_group_id: Optional[int] = None) -> list[TransferGroup]:
        """Get one transfer group or the catalog of all of them.

        Args:
            user_id: Owner of the entries
            transfer_group_id: Optional parent entry ID. When given, only that
                group is returned (an empty list if it is not a parent owned
                by the user).

        Returns:
            Transfer groups, newest first, with accounts and categories preloaded
        """
        if transfer_group_id is not None:
            parent = self.get_parent_entry(transfer_group_id, user_id)
            parents = [parent] if parent is not None else []
        else:
            parents = self.db.list_parent_entries(user_id)

        if not parents:
            return []

        children_by_parent = self.db.get_children(parent.id for parent in parents)
        all_entries = list(parents)
        for children in children_by_parent.values():
            all_entries.extend(children)

        accounts = self.account_service.get_accounts_map(
            account_id
            for entry in all_entries
            for account_id in (entry.debit_account_id, entry.credit_account_id)
        )
        categories = self.category_service.get_categories_map(entry.category_id for entry in all_entries)

        return [
            TransferGroup(
                parent=parent,
                children=tuple(children_by_parent.get(parent.id, [])),
                accounts=accounts,
                categories=categories,
            )
            for parent in parents
        ]

    def get_parent_entry(self, entry_id: int, user_id: int) -> Optional[Entry]:
        """Get a parent GL entry owned by ``user_id``; None for anything else."""
        entry = self.db.get_entry(entry_id)
        if entry is None or entry.user_id != user_id or not entry.is_parent_gl:
            return None
        return entry

    def update_parent_description(self, entry_id: int, description: str, user_id: int) -> Entry:
        """Replace the description of a parent GL entry.

        Amount, accounts, posting month and children are never touched.

        Raises:
            NotFoundError: If ``entry_id`` is not a parent GL entry owned by the user
            ValidationError: If the description is empty or longer than 255 characters
        """
        description = clean_gl_description(description)
        if not self.db.update_entry_description(entry_id, user_id, description):
            raise NotFoundError(gl_entry_not_found(entry_id))
        logger.info("Updated description of general ledger entry %d", entry_id)
        return self.get_parent_entry(entry_id, user_id)
