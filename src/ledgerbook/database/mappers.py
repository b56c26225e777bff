"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the string columns used for
enumerations in the schema never leak into the domain.
"""

from ledgerbook.domain import entities as domain
from ledgerbook.domain.vat import VatType
from ledgerbook.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Entry as ORMEntry,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        book_type=domain.BookType(orm_category.book_type),
        default_debit_account_id=orm_category.default_debit_account_id,
        default_credit_account_id=orm_category.default_credit_account_id,
        created_at=orm_category.created_at,
    )


def entry_to_domain(orm_entry: ORMEntry) -> domain.Entry:
    """Convert SQLAlchemy Entry model to domain Entry entity."""
    return domain.Entry(
        id=orm_entry.id,
        user_id=orm_entry.user_id,
        amount=orm_entry.amount,
        description=orm_entry.description,
        transaction_date=orm_entry.transaction_date,
        book_type=domain.BookType(orm_entry.book_type),
        debit_account_id=orm_entry.debit_account_id,
        credit_account_id=orm_entry.credit_account_id,
        created_at=orm_entry.created_at,
        reference_number=orm_entry.reference_number,
        vat_type=VatType(orm_entry.vat_type),
        category_id=orm_entry.category_id,
        recorded_at=orm_entry.recorded_at,
        transferred_to_gl_at=orm_entry.transferred_to_gl_at,
        gl_parent_id=orm_entry.gl_parent_id,
        gl_posting_month=orm_entry.gl_posting_month,
    )
