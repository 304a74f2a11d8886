"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly, the domain services import this module
from ledgerit.domain.entities import (
    Account,
    AccountType,
    Category,
    CreditCard,
    RecurringTransaction,
    ShortMonthPolicy,
    Transaction,
    TransactionType,
    TransactionView,
)


class Database(ABC):
    """Abstract database interface for ledgerit."""

    # How recurring templates expand in months missing their day
    short_month_policy: ShortMonthPolicy = ShortMonthPolicy.CLAMP

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Return a context manager grouping writes into one transaction.

        Writes issued inside the block are committed together when it exits
        normally and rolled back if it raises. Blocks may be nested; only the
        outermost one commits.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, account_type: AccountType) -> int:
        """Create a new account with a zero balance. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Count transactions (archived included) referencing an account."""
        pass

    @abstractmethod
    def get_account_recurring_count(self, account_id: int) -> int:
        """Count recurring templates referencing an account."""
        pass

    @abstractmethod
    def update_account_balance(
        self, account_id: int, amount: Decimal, transaction_type: TransactionType
    ) -> Decimal:
        """Apply a transaction amount to an account balance. Returns new balance.

        Credits increase the balance and debits decrease it. The read and the
        write happen under a row lock in one database transaction.
        """
        pass

    # Category operations
    @abstractmethod
    def create_category(self, description: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_description(self, description: str) -> Optional[Category]:
        """Get category by description, compared case-insensitively."""
        pass

    @abstractmethod
    def list_categories(self, include_archived: bool = False) -> list[Category]:
        """List categories."""
        pass

    @abstractmethod
    def archive_category(self, category_id: int) -> None:
        """Archive a category."""
        pass

    # Credit card operations
    @abstractmethod
    def create_credit_card(self, name: str, closing_day: int, due_day: int) -> int:
        """Create a credit card. Returns credit card ID."""
        pass

    @abstractmethod
    def get_credit_card(self, credit_card_id: int) -> Optional[CreditCard]:
        """Get credit card by ID."""
        pass

    @abstractmethod
    def get_credit_card_by_name(self, name: str) -> Optional[CreditCard]:
        """Get credit card by name."""
        pass

    @abstractmethod
    def list_credit_cards(self, include_archived: bool = False) -> list[CreditCard]:
        """List credit cards."""
        pass

    @abstractmethod
    def archive_credit_card(self, credit_card_id: int) -> None:
        """Archive a credit card."""
        pass

    # Recurring transaction operations
    @abstractmethod
    def create_recurring_transaction(
        self,
        account_id: int,
        category_id: int,
        transaction_type: TransactionType,
        day: int,
        start_date: date,
        description: str,
        amount: Decimal,
        credit_card_id: Optional[int] = None,
    ) -> int:
        """Create a recurring transaction template. Returns its ID."""
        pass

    @abstractmethod
    def get_recurring_transaction(
        self, recurring_transaction_id: int
    ) -> Optional[RecurringTransaction]:
        """Get recurring transaction by ID."""
        pass

    @abstractmethod
    def update_recurring_transaction(
        self,
        recurring_transaction_id: int,
        account_id: Optional[int] = None,
        credit_card_id: Optional[int] = None,
        category_id: Optional[int] = None,
        day: Optional[int] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        clear_credit_card: bool = False,
    ) -> None:
        """Update recurring transaction fields that are not None."""
        pass

    @abstractmethod
    def archive_recurring_transaction(self, recurring_transaction_id: int) -> None:
        """Archive a recurring transaction so it stops generating occurrences."""
        pass

    @abstractmethod
    def list_recurring_transactions(
        self, include_archived: bool = False
    ) -> list[RecurringTransaction]:
        """List recurring transaction templates."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        category_id: int,
        transaction_type: TransactionType,
        date: date,
        description: str,
        amount: Decimal,
        credit_card_id: Optional[int] = None,
        recurring_transaction_id: Optional[int] = None,
        fulfilled: bool = False,
        effectuated_date: Optional[date] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID, archived rows included."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        account_id: Optional[int] = None,
        credit_card_id: Optional[int] = None,
        category_id: Optional[int] = None,
        date: Optional[date] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        clear_credit_card: bool = False,
    ) -> None:
        """Update transaction fields that are not None.

        Args:
            clear_credit_card: If True, unlink the credit card
        """
        pass

    @abstractmethod
    def fulfill_transaction(
        self,
        transaction_id: int,
        effectuated_date: date,
        amount: Optional[Decimal] = None,
    ) -> Transaction:
        """Mark a transaction fulfilled, stamping the effectuated date.

        The row is re-read under a lock; an already fulfilled transaction
        raises ConflictError. Returns the fulfilled transaction.
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Soft-delete a transaction (archived = true)."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List non-archived transactions by scheduled date, newest first."""
        pass

    @abstractmethod
    def list_recurring_occurrences(self, recurring_transaction_id: int) -> list[Transaction]:
        """List non-archived transactions linked to a recurring template."""
        pass

    @abstractmethod
    def get_transactions_with_recurring_by_date(
        self, start_date: date, end_date: date
    ) -> list[TransactionView]:
        """Get the merged view of real and virtual transactions in a window.

        Real rows are non-archived transactions scheduled in the window.
        Virtual rows are occurrences of active recurring templates that no
        real transaction covers. Sorted by date descending.
        """
        pass
