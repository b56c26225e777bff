"""SQLAlchemy models for ledgerbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, scoped_session, sessionmaker

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    code = Column(String(20), unique=True, nullable=False)
    name = Column(String, nullable=False)
    type = Column(String(20), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Category(Base):
    """Transaction category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    book_type = Column(String(50), nullable=False)
    default_debit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    default_credit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Entry(Base):
    """Ledger entry model.

    Holds both subsidiary-book leaf entries and parent general ledger postings.
    A non-null ``gl_parent_id`` marks a child; ``book_type='general_ledger'``
    with a null ``gl_parent_id`` marks a parent.
    """

    __tablename__ = "entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    amount = Column(BigInteger, nullable=False)
    description = Column(String(500), nullable=False)
    transaction_date = Column(Date, nullable=False)
    debit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    credit_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    book_type = Column(String(50), nullable=False)
    reference_number = Column(String(50), nullable=True)
    vat_type = Column(String(50), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    recorded_at = Column(DateTime, nullable=True)
    transferred_to_gl_at = Column(DateTime, nullable=True)
    gl_parent_id = Column(Integer, ForeignKey("entries.id"), nullable=True)
    gl_posting_month = Column(String(7), nullable=True)

    __table_args__ = (
        Index("ix_entries_gl_parent_id", "gl_parent_id"),
        Index("ix_entries_book_type_gl_parent", "book_type", "gl_parent_id"),
        Index("ix_entries_user_posting_month", "user_id", "gl_posting_month"),
    )

    # Relationships
    category = relationship("Category")
    debit_account = relationship("Account", foreign_keys=[debit_account_id])
    credit_account = relationship("Account", foreign_keys=[credit_account_id])
    parent = relationship("Entry", remote_side=[id], back_populates="children")
    children = relationship("Entry", back_populates="parent", order_by="Entry.id")


def create_session_factory(database_url: str) -> scoped_session:
    """Create a thread-local SQLAlchemy session registry."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return scoped_session(sessionmaker(bind=engine))
