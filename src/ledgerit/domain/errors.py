"""Shared domain error messages and error types."""

from datetime import date


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist (or is archived)."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or re-fulfilling."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class InternalError(DomainError):
    """Storage or balance-update failure."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def category_description_not_found(description: str) -> str:
    """Return message for missing category by description."""
    return f"Category '{description}' not found"


def credit_card_not_found(credit_card_id: int) -> str:
    """Return message for missing credit card by ID."""
    return f"Credit card {credit_card_id} not found"


def credit_card_name_not_found(name: str) -> str:
    """Return message for missing credit card by name."""
    return f"Credit card '{name}' not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def recurring_transaction_not_found(recurring_transaction_id: int) -> str:
    """Return message for missing recurring transaction."""
    return f"Recurring transaction {recurring_transaction_id} not found"


def transaction_already_fulfilled(transaction_id: int) -> str:
    """Return message when effectuating a fulfilled transaction."""
    return f"Transaction {transaction_id} already fulfilled"


def occurrence_already_materialized(
    recurring_transaction_id: int, occurrence_date: date, transaction_id: int
) -> str:
    """Return message when a recurring occurrence already has a real row."""
    return (
        f"Occurrence of recurring transaction {recurring_transaction_id} on "
        f"{occurrence_date.isoformat()} already exists as transaction {transaction_id}"
    )


def installments_and_fixed() -> str:
    """Return message for the mutually exclusive purchase flags."""
    return "installments and fixed cannot be used together"


def account_delete_blocked(
    account_id: int, transaction_count: int, recurring_count: int
) -> str:
    """Return message when account has dependent transactions or templates."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if recurring_count > 0:
        parts.append(
            f"{recurring_count} recurring transaction{'s' if recurring_count != 1 else ''}"
        )
    return (
        f"Cannot delete account {account_id}: it has {', '.join(parts)}. "
        "Archive or move them first."
    )
