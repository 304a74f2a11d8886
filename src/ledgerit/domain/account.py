"""Account domain service."""

from typing import Optional
from ledgerit.database.base import Database
from ledgerit.domain.entities import Account as AccountEntity, AccountType
from ledgerit.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
)
from ledgerit.logging_setup import get_logger

logger = get_logger(__name__)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, account_type: AccountType | str) -> int:
        """Create a new account with a zero balance.

        Args:
            name: Account name
            account_type: "personal" or "business"

        Returns:
            Account ID

        Raises:
            ValidationError: If name is empty or the type is unknown
            ConflictError: If an account with the same name and type exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")
        try:
            account_type = AccountType(account_type)
        except ValueError:
            raise ValidationError(
                f"Unknown account type '{account_type}'. Supported: personal, business"
            )

        for acc in self.db.list_accounts():
            if acc.name == name and acc.account_type == account_type:
                raise ConflictError(
                    f"Account with name '{name}' and type '{account_type.value}' already exists"
                )

        account_id = self.db.create_account(name=name, account_type=account_type)
        logger.info("created account %s (%s)", account_id, name)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Accounts referenced by transactions or recurring templates are kept,
        archived transactions included.

        Raises:
            NotFoundError: If account not found
            DependencyError: If the account is still referenced
        """
        self.require_account(account_id)

        transaction_count = self.db.get_account_transaction_count(account_id)
        recurring_count = self.db.get_account_recurring_count(account_id)
        if transaction_count > 0 or recurring_count > 0:
            raise DependencyError(
                account_delete_blocked(account_id, transaction_count, recurring_count)
            )

        self.db.delete_account(account_id)
        logger.info("deleted account %s", account_id)
