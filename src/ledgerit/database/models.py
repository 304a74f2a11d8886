"""SQLAlchemy models for ledgerit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    account_type = Column(String(20), nullable=False)
    balance = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("name", "account_type", name="uq_account_name_type"),)

    # Relationships
    transactions = relationship("Transaction", back_populates="account")
    recurring_transactions = relationship("RecurringTransaction", back_populates="account")


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    description = Column(String(60), nullable=False, unique=True)
    archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")


class CreditCard(Base):
    """Credit card model."""

    __tablename__ = "credit_cards"

    id = Column(Integer, primary_key=True)
    name = Column(String(60), nullable=False, unique=True)
    closing_day = Column(Integer, nullable=False)
    due_day = Column(Integer, nullable=False)
    archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="credit_card")


class RecurringTransaction(Base):
    """Recurring transaction template model."""

    __tablename__ = "recurring_transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    credit_card_id = Column(Integer, ForeignKey("credit_cards.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    transaction_type = Column(String(10), nullable=False)
    day = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    description = Column(String(500), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="recurring_transactions")
    credit_card = relationship("CreditCard")
    category = relationship("Category")
    transactions = relationship("Transaction", back_populates="recurring_transaction")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    credit_card_id = Column(Integer, ForeignKey("credit_cards.id"), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    recurring_transaction_id = Column(
        Integer, ForeignKey("recurring_transactions.id"), nullable=True
    )
    transaction_type = Column(String(10), nullable=False)
    date = Column(Date, nullable=False)
    effectuated_date = Column(Date, nullable=True)
    description = Column(String(500), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    fulfilled = Column(Boolean, default=False, nullable=False)
    archived = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (
        Index("ix_transactions_date", "date"),
        Index("ix_transactions_recurring", "recurring_transaction_id"),
    )

    # Relationships
    account = relationship("Account", back_populates="transactions")
    credit_card = relationship("CreditCard", back_populates="transactions")
    category = relationship("Category", back_populates="transactions")
    recurring_transaction = relationship("RecurringTransaction", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
