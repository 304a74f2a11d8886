"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the table layout changes.
"""

from decimal import Decimal
from typing import Optional

from ledgerit.domain import entities as domain
from ledgerit.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    CreditCard as ORMCreditCard,
    RecurringTransaction as ORMRecurringTransaction,
    Transaction as ORMTransaction,
)


def _decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value if value is not None else 0))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        balance=_decimal(orm_account.balance),
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        description=orm_category.description,
        archived=bool(orm_category.archived),
        created_at=orm_category.created_at,
        updated_at=orm_category.updated_at,
    )


def credit_card_to_domain(orm_card: ORMCreditCard) -> domain.CreditCard:
    """Convert SQLAlchemy CreditCard model to domain CreditCard entity."""
    return domain.CreditCard(
        id=orm_card.id,
        name=orm_card.name,
        closing_day=orm_card.closing_day,
        due_day=orm_card.due_day,
        archived=bool(orm_card.archived),
        created_at=orm_card.created_at,
        updated_at=orm_card.updated_at,
    )


def recurring_transaction_to_domain(
    orm_recurring: ORMRecurringTransaction,
) -> domain.RecurringTransaction:
    """Convert SQLAlchemy RecurringTransaction model to domain entity."""
    return domain.RecurringTransaction(
        id=orm_recurring.id,
        account_id=orm_recurring.account_id,
        credit_card_id=orm_recurring.credit_card_id,
        category_id=orm_recurring.category_id,
        transaction_type=domain.TransactionType(orm_recurring.transaction_type),
        day=orm_recurring.day,
        start_date=orm_recurring.start_date,
        description=orm_recurring.description,
        amount=_decimal(orm_recurring.amount),
        archived=bool(orm_recurring.archived),
        created_at=orm_recurring.created_at,
        updated_at=orm_recurring.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        credit_card_id=orm_transaction.credit_card_id,
        category_id=orm_transaction.category_id,
        recurring_transaction_id=orm_transaction.recurring_transaction_id,
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        date=orm_transaction.date,
        effectuated_date=orm_transaction.effectuated_date,
        description=orm_transaction.description,
        amount=_decimal(orm_transaction.amount),
        fulfilled=bool(orm_transaction.fulfilled),
        archived=bool(orm_transaction.archived),
        created_at=orm_transaction.created_at,
        updated_at=orm_transaction.updated_at,
    )


def transaction_to_view(
    transaction: domain.Transaction,
    account_names: dict[int, str],
    category_names: dict[int, str],
    card_names: dict[int, str],
) -> domain.TransactionView:
    """Project a domain transaction into a reporting view."""
    return domain.TransactionView(
        id=transaction.id,
        account_id=transaction.account_id,
        account_name=account_names.get(transaction.account_id, "Unknown"),
        credit_card_id=transaction.credit_card_id,
        credit_card_name=_card_name(transaction.credit_card_id, card_names),
        category_id=transaction.category_id,
        category=category_names.get(transaction.category_id, "Unknown"),
        recurring_transaction_id=transaction.recurring_transaction_id,
        transaction_type=transaction.transaction_type,
        date=transaction.date,
        effectuated_date=transaction.effectuated_date,
        description=transaction.description,
        amount=transaction.amount,
        fulfilled=transaction.fulfilled,
        virtual=False,
    )


def occurrence_to_view(
    template: domain.RecurringTransaction,
    occurrence_date,
    account_names: dict[int, str],
    category_names: dict[int, str],
    card_names: dict[int, str],
) -> domain.TransactionView:
    """Project a virtual occurrence of a template into a reporting view."""
    return domain.TransactionView(
        id=None,
        account_id=template.account_id,
        account_name=account_names.get(template.account_id, "Unknown"),
        credit_card_id=template.credit_card_id,
        credit_card_name=_card_name(template.credit_card_id, card_names),
        category_id=template.category_id,
        category=category_names.get(template.category_id, "Unknown"),
        recurring_transaction_id=template.id,
        transaction_type=template.transaction_type,
        date=occurrence_date,
        effectuated_date=None,
        description=template.description,
        amount=template.amount,
        fulfilled=False,
        virtual=True,
    )


def _card_name(credit_card_id: Optional[int], card_names: dict[int, str]) -> Optional[str]:
    if credit_card_id is None:
        return None
    return card_names.get(credit_card_id, "Unknown")
