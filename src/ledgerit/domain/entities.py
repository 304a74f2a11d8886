"""Domain model entities for ledgerit.

These are pure data classes representing business concepts, independent of
database schema. Amounts are always positive magnitudes; the direction of a
transaction is carried by its ``TransactionType``.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Direction of a transaction."""

    CREDIT = "credit"
    DEBIT = "debit"


class AccountType(str, Enum):
    """Kind of account."""

    PERSONAL = "personal"
    BUSINESS = "business"


class ShortMonthPolicy(str, Enum):
    """What a recurring day-of-month does in months that are too short."""

    CLAMP = "clamp"
    SKIP = "skip"


def signed_amount(amount: Decimal, transaction_type: TransactionType) -> Decimal:
    """Return the amount with the sign implied by the transaction type.

    Credits count positive, debits negative. Every balance or net figure is
    computed through this helper.
    """
    if TransactionType(transaction_type) == TransactionType.CREDIT:
        return amount
    return -amount


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    name: str
    account_type: AccountType
    balance: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    description: str
    archived: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CreditCard:
    """Credit card domain entity.

    ``closing_day`` and ``due_day`` define the billing cycle.
    """

    id: int
    name: str
    closing_day: int
    due_day: int
    archived: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class RecurringTransaction:
    """Template that generates one occurrence per month on ``day``.

    Occurrences start in the month of ``start_date``, the date of the first
    occurrence of the series.
    """

    id: int
    account_id: int
    credit_card_id: Optional[int]
    category_id: int
    transaction_type: TransactionType
    day: int
    start_date: date
    description: str
    amount: Decimal
    archived: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Ledger entry domain entity."""

    id: int
    account_id: int
    credit_card_id: Optional[int]
    category_id: int
    recurring_transaction_id: Optional[int]
    transaction_type: TransactionType
    date: date
    effectuated_date: Optional[date]
    description: str
    amount: Decimal
    fulfilled: bool
    archived: bool
    created_at: datetime
    updated_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        return signed_amount(self.amount, self.transaction_type)


@dataclass(frozen=True)
class TransactionView:
    """Read-only reporting projection of a transaction.

    Virtual rows are occurrences of a recurring template that have not been
    materialized yet; they have no ``id``.
    """

    id: Optional[int]
    account_id: int
    account_name: str
    credit_card_id: Optional[int]
    credit_card_name: Optional[str]
    category_id: int
    category: str
    recurring_transaction_id: Optional[int]
    transaction_type: TransactionType
    date: date
    effectuated_date: Optional[date]
    description: str
    amount: Decimal
    fulfilled: bool
    virtual: bool = False


@dataclass(frozen=True)
class CategoryTotal:
    """Summed debit amount for one category description."""

    name: str
    total: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregated figures for a date window."""

    start_date: date
    end_date: date
    transactions: tuple[TransactionView, ...]
    total_credit: Decimal
    total_credit_upcoming: Decimal
    total_debit: Decimal
    total_debit_unpaid: Decimal
    total_credit_card: Decimal
    total_credit_card_upcoming: Decimal
    category_totals: tuple[CategoryTotal, ...]
    balance: Decimal
    accounts: tuple[Account, ...] = field(default_factory=tuple)
