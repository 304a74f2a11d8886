"""Resolve names or IDs given on the command line to entity IDs."""

from typing import Callable, Optional, TypeVar

from ledgerit.domain.account import AccountService
from ledgerit.domain.category import CategoryService
from ledgerit.domain.credit_card import CreditCardService
from ledgerit.domain.errors import (
    NotFoundError,
    account_not_found,
    category_not_found,
    credit_card_not_found,
)

T = TypeVar("T")


def _as_id(value: str | int) -> Optional[int]:
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _resolve(
    value: str | int,
    by_id: Callable[[int], Optional[T]],
    by_name: Callable[[str], Optional[T]],
    id_message: Callable[[int], str],
    name_message: str,
) -> int:
    entity_id = _as_id(value)
    if entity_id is not None:
        if by_id(entity_id) is None:
            raise NotFoundError(id_message(entity_id))
        return entity_id

    entity = by_name(str(value))
    if entity is None:
        raise NotFoundError(name_message)
    return entity.id


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account name or ID to an account ID.

    Names are matched exactly; a name shared by a personal and a business
    account resolves to the first one in name order.

    Raises:
        NotFoundError: If the account is not found
    """

    def by_name(name: str):
        for acc in account_service.list_accounts():
            if acc.name == name:
                return acc
        return None

    return _resolve(
        account,
        account_service.get_account,
        by_name,
        account_not_found,
        f"Account '{account}' not found",
    )


def resolve_category(category_service: CategoryService, category: str | int) -> int:
    """Resolve a category description (case-insensitive) or ID to a category ID."""
    return _resolve(
        category,
        category_service.get_category,
        category_service.get_category_by_description,
        category_not_found,
        f"Category '{category}' not found",
    )


def resolve_credit_card(card_service: CreditCardService, card: str | int) -> int:
    """Resolve a credit card name or ID to a credit card ID."""
    return _resolve(
        card,
        card_service.get_credit_card,
        card_service.get_credit_card_by_name,
        credit_card_not_found,
        f"Credit card '{card}' not found",
    )
