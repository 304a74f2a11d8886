"""Tests for ORM to domain mappers."""

from datetime import date, datetime
from decimal import Decimal

from ledgerit.database import models
from ledgerit.database.mappers import (
    account_to_domain,
    occurrence_to_view,
    recurring_transaction_to_domain,
    transaction_to_domain,
    transaction_to_view,
)
from ledgerit.domain.entities import AccountType, TransactionType

NOW = datetime(2025, 1, 1, 9, 30)


def orm_transaction(**overrides):
    values = dict(
        id=3,
        account_id=1,
        credit_card_id=None,
        category_id=2,
        recurring_transaction_id=None,
        transaction_type="debit",
        date=date(2025, 1, 5),
        effectuated_date=None,
        description="Market",
        amount=Decimal("45.90"),
        fulfilled=False,
        archived=False,
        created_at=NOW,
        updated_at=NOW,
    )
    values.update(overrides)
    return models.Transaction(**values)


def test_account_to_domain_converts_types():
    orm = models.Account(
        id=1, name="Checking", account_type="business", balance=12.5, created_at=NOW, updated_at=NOW
    )
    account = account_to_domain(orm)
    assert account.account_type == AccountType.BUSINESS
    assert account.balance == Decimal("12.5")


def test_transaction_to_domain():
    txn = transaction_to_domain(orm_transaction(fulfilled=1, effectuated_date=date(2025, 1, 6)))
    assert txn.transaction_type == TransactionType.DEBIT
    assert txn.fulfilled is True
    assert txn.signed_amount == Decimal("-45.90")


def test_transaction_to_view_uses_names():
    txn = transaction_to_domain(orm_transaction(credit_card_id=4))
    view = transaction_to_view(txn, {1: "Checking"}, {2: "Food"}, {4: "Visa"})

    assert view.id == 3
    assert view.account_name == "Checking"
    assert view.category == "Food"
    assert view.credit_card_name == "Visa"
    assert view.virtual is False


def test_transaction_to_view_unknown_names():
    view = transaction_to_view(transaction_to_domain(orm_transaction()), {}, {}, {})
    assert view.account_name == "Unknown"
    assert view.credit_card_name is None


def test_occurrence_to_view():
    template = recurring_transaction_to_domain(
        models.RecurringTransaction(
            id=8,
            account_id=1,
            credit_card_id=None,
            category_id=2,
            transaction_type="credit",
            day=5,
            start_date=date(2025, 1, 5),
            description="Salary",
            amount=Decimal("5000"),
            archived=False,
            created_at=NOW,
            updated_at=NOW,
        )
    )
    view = occurrence_to_view(template, date(2025, 2, 5), {1: "Checking"}, {2: "Salary"}, {})

    assert view.id is None
    assert view.virtual is True
    assert view.fulfilled is False
    assert view.recurring_transaction_id == 8
    assert view.date == date(2025, 2, 5)
    assert view.transaction_type == TransactionType.CREDIT
