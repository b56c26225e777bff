"""Category domain service."""

from typing import Iterable, Optional
from ledgerbook.database.base import Database
from ledgerbook.domain.entities import BookType, Category as CategoryEntity
from ledgerbook.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
)


class CategoryService:
    """Service for managing transaction categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        book_type: BookType | str,
        default_debit_account_id: Optional[int] = None,
        default_credit_account_id: Optional[int] = None,
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            book_type: Subsidiary book entries in this category belong to
            default_debit_account_id: Optional suggested debit account
            default_credit_account_id: Optional suggested credit account

        Returns:
            Category ID

        Raises:
            ValidationError: If the name is empty or the book is unknown or
                the general ledger
            NotFoundError: If a default account doesn't exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Category name is required")
        try:
            book_type = BookType(book_type)
        except ValueError:
            raise ValidationError(f"Unknown book type '{book_type}'")
        if book_type == BookType.GENERAL_LEDGER:
            raise ValidationError("Categories cannot write directly to the general ledger")

        for account_id in (default_debit_account_id, default_credit_account_id):
            if account_id is not None and self.db.get_account(account_id) is None:
                raise NotFoundError(account_not_found(account_id))

        return self.db.create_category(
            name=name,
            book_type=book_type,
            default_debit_account_id=default_debit_account_id,
            default_credit_account_id=default_credit_account_id,
        )

    def get_category(self, category_id: int) -> Optional[CategoryEntity]:
        return self.db.get_category(category_id)

    def require_category(self, category_id: int) -> CategoryEntity:
        """Get category by ID or raise NotFoundError."""
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def list_categories(self) -> list[CategoryEntity]:
        return self.db.list_categories()

    def get_categories_map(self, category_ids: Iterable[int]) -> dict[int, CategoryEntity]:
        """Load several categories at once, keyed by ID."""
        ids = {category_id for category_id in category_ids if category_id is not None}
        if not ids:
            return {}
        return {category.id: category for category in self.db.list_categories(ids)}
