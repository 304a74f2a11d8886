"""Credit card domain service."""

from typing import Optional
from ledgerit.database.base import Database
from ledgerit.domain.calendar_math import validate_day_of_month
from ledgerit.domain.entities import CreditCard as CreditCardEntity
from ledgerit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    credit_card_name_not_found,
    credit_card_not_found,
)


class CreditCardService:
    """Service for managing credit cards."""

    def __init__(self, db: Database):
        """Initialize credit card service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_credit_card(self, name: str, closing_day: int, due_day: int) -> int:
        """Create a credit card.

        Args:
            name: Unique card name
            closing_day: Day of month the statement closes (1-31)
            due_day: Day of month the statement is due (1-31)

        Returns:
            Credit card ID

        Raises:
            ValidationError: If name is empty or a day is out of range
            ConflictError: If the name is already used
        """
        name = name.strip()
        if not name:
            raise ValidationError("Credit card name is required")
        validate_day_of_month(closing_day, "closing day")
        validate_day_of_month(due_day, "due day")

        if self.db.get_credit_card_by_name(name) is not None:
            raise ConflictError(f"Credit card '{name}' already exists")

        return self.db.create_credit_card(name=name, closing_day=closing_day, due_day=due_day)

    def get_credit_card(self, credit_card_id: int) -> Optional[CreditCardEntity]:
        """Get credit card by ID."""
        return self.db.get_credit_card(credit_card_id)

    def require_credit_card(self, credit_card_id: int) -> CreditCardEntity:
        """Get credit card by ID or raise NotFoundError."""
        card = self.db.get_credit_card(credit_card_id)
        if card is None:
            raise NotFoundError(credit_card_not_found(credit_card_id))
        return card

    def get_credit_card_by_name(self, name: str) -> Optional[CreditCardEntity]:
        """Get credit card by name."""
        return self.db.get_credit_card_by_name(name)

    def require_credit_card_by_name(self, name: str) -> CreditCardEntity:
        """Get credit card by name or raise NotFoundError."""
        card = self.db.get_credit_card_by_name(name)
        if card is None:
            raise NotFoundError(credit_card_name_not_found(name))
        return card

    def list_credit_cards(self, include_archived: bool = False) -> list[CreditCardEntity]:
        """List credit cards."""
        return self.db.list_credit_cards(include_archived=include_archived)

    def archive_credit_card(self, credit_card_id: int) -> None:
        """Archive a credit card so it can no longer take new purchases."""
        self.require_credit_card(credit_card_id)
        self.db.archive_credit_card(credit_card_id)
