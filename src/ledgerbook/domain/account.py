"""Account directory domain service."""

from typing import Iterable, Optional
from ledgerbook.database.base import Database
from ledgerbook.domain.entities import Account as AccountEntity, AccountType
from ledgerbook.domain.errors import NotFoundError, ValidationError, account_not_found


class AccountService:
    """Read-mostly lookup over the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, code: str, name: str, account_type: AccountType | str) -> int:
        """Create a chart of accounts entry.

        Args:
            code: Account code (e.g., "1101")
            name: Account name
            account_type: Asset, liability, equity, revenue or expense

        Returns:
            Account ID

        Raises:
            ValidationError: If code or name is empty, the type is unknown,
                or the code is already used
        """
        code = code.strip()
        name = name.strip()
        if not code or not name:
            raise ValidationError("Account code and name are required")
        try:
            account_type = AccountType(account_type)
        except ValueError:
            raise ValidationError(f"Unknown account type '{account_type}'")

        if self.db.get_account_by_code(code) is not None:
            raise ValidationError(f"Account with code '{code}' already exists")

        return self.db.create_account(code=code, name=name, account_type=account_type)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account_by_code(self, code: str) -> Optional[AccountEntity]:
        return self.db.get_account_by_code(code)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts ordered by code."""
        return self.db.list_accounts()

    def get_accounts_map(self, account_ids: Iterable[int]) -> dict[int, AccountEntity]:
        """Load several accounts at once, keyed by ID."""
        ids = set(account_ids)
        if not ids:
            return {}
        return {account.id: account for account in self.db.list_accounts(ids)}
