"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date, datetime
from decimal import Decimal

from ledgerit.domain.entities import (
    Account,
    AccountType,
    ShortMonthPolicy,
    Transaction,
    TransactionType,
    signed_amount,
)


def test_signed_amount():
    assert signed_amount(Decimal("10"), TransactionType.CREDIT) == Decimal("10")
    assert signed_amount(Decimal("10"), TransactionType.DEBIT) == Decimal("-10")
    assert signed_amount(Decimal("10"), "debit") == Decimal("-10")


def test_enums_are_strings():
    assert TransactionType("credit") is TransactionType.CREDIT
    assert AccountType.PERSONAL == "personal"
    assert ShortMonthPolicy("skip") is ShortMonthPolicy.SKIP


def test_account_is_frozen():
    account = Account(
        id=1,
        name="Checking",
        account_type=AccountType.PERSONAL,
        balance=Decimal("0"),
        created_at=datetime(2025, 1, 1),
        updated_at=datetime(2025, 1, 1),
    )
    with pytest.raises(FrozenInstanceError):
        account.balance = Decimal("10")


def test_transaction_signed_amount_property():
    txn = Transaction(
        id=1,
        account_id=1,
        credit_card_id=None,
        category_id=1,
        recurring_transaction_id=None,
        transaction_type=TransactionType.CREDIT,
        date=date(2025, 1, 1),
        effectuated_date=None,
        description="Salary",
        amount=Decimal("100"),
        fulfilled=False,
        archived=False,
        created_at=datetime(2025, 1, 1),
        updated_at=datetime(2025, 1, 1),
    )
    assert txn.signed_amount == Decimal("100")
