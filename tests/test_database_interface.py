"""Tests for the SQLAlchemy database implementation."""

import pytest
from datetime import date
from decimal import Decimal

from ledgerit.database.base import Database
from ledgerit.database.factories import (
    create_database,
    create_sqlite_database,
    resolve_short_month_policy,
)
from ledgerit.domain.entities import AccountType, ShortMonthPolicy, TransactionType
from ledgerit.domain.errors import ConflictError, NotFoundError, ValidationError


@pytest.fixture
def seeded(temp_db):
    """An account and a category for storage-level tests."""
    account_id = temp_db.create_account("Checking", AccountType.PERSONAL)
    category_id = temp_db.create_category("Food")
    return temp_db, account_id, category_id


def test_implements_database(temp_db):
    assert isinstance(temp_db, Database)


def test_account_round_trip(temp_db):
    account_id = temp_db.create_account("Checking", AccountType.BUSINESS)
    account = temp_db.get_account(account_id)

    assert account.account_type == AccountType.BUSINESS
    assert account.balance == Decimal("0")
    assert temp_db.get_account(999) is None


def test_duplicate_account_is_conflict(temp_db):
    temp_db.create_account("Checking", AccountType.PERSONAL)
    with pytest.raises(ConflictError):
        temp_db.create_account("Checking", AccountType.PERSONAL)
    # Session is usable after the failed write
    assert len(temp_db.list_accounts()) == 1


def test_update_account_balance(seeded):
    db, account_id, _ = seeded
    assert db.update_account_balance(account_id, Decimal("100"), TransactionType.CREDIT) == Decimal("100")
    assert db.update_account_balance(account_id, Decimal("30.50"), TransactionType.DEBIT) == Decimal("69.50")
    assert db.get_account(account_id).balance == Decimal("69.50")


def test_update_balance_missing_account(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.update_account_balance(5, Decimal("1"), TransactionType.CREDIT)


def test_atomic_commits_once(seeded):
    db, account_id, category_id = seeded
    with db.atomic():
        db.create_transaction(
            account_id=account_id,
            category_id=category_id,
            transaction_type=TransactionType.DEBIT,
            date=date(2025, 1, 1),
            description="a",
            amount=Decimal("1"),
        )
        with db.atomic():
            db.update_account_balance(account_id, Decimal("1"), TransactionType.DEBIT)
    assert len(db.list_transactions()) == 1
    assert db.get_account(account_id).balance == Decimal("-1")


def test_atomic_rolls_back(seeded):
    db, account_id, category_id = seeded
    with pytest.raises(RuntimeError):
        with db.atomic():
            db.create_transaction(
                account_id=account_id,
                category_id=category_id,
                transaction_type=TransactionType.DEBIT,
                date=date(2025, 1, 1),
                description="a",
                amount=Decimal("1"),
            )
            db.update_account_balance(account_id, Decimal("1"), TransactionType.DEBIT)
            raise RuntimeError("boom")

    assert db.list_transactions() == []
    assert db.get_account(account_id).balance == Decimal("0")


def test_soft_delete(seeded):
    db, account_id, category_id = seeded
    txn_id = db.create_transaction(
        account_id=account_id,
        category_id=category_id,
        transaction_type=TransactionType.CREDIT,
        date=date(2025, 1, 1),
        description="a",
        amount=Decimal("1"),
    )
    db.delete_transaction(txn_id)

    assert db.get_transaction(txn_id).archived is True
    assert db.list_transactions() == []
    assert db.get_account_transaction_count(account_id) == 1


def test_fulfill_transaction_once(seeded):
    db, account_id, category_id = seeded
    txn_id = db.create_transaction(
        account_id=account_id,
        category_id=category_id,
        transaction_type=TransactionType.DEBIT,
        date=date(2025, 1, 1),
        description="Coffee",
        amount=Decimal("20"),
    )
    fulfilled = db.fulfill_transaction(txn_id, date(2025, 1, 2), amount=Decimal("21"))

    assert fulfilled.fulfilled is True
    assert fulfilled.effectuated_date == date(2025, 1, 2)
    assert fulfilled.amount == Decimal("21")
    with pytest.raises(ConflictError, match="already fulfilled"):
        db.fulfill_transaction(txn_id, date(2025, 1, 3))
    with pytest.raises(NotFoundError):
        db.fulfill_transaction(999, date(2025, 1, 3))


def test_list_transactions_filters_and_order(seeded):
    db, account_id, category_id = seeded
    for day in (3, 15, 28):
        db.create_transaction(
            account_id=account_id,
            category_id=category_id,
            transaction_type=TransactionType.DEBIT,
            date=date(2025, 2, day),
            description=f"d{day}",
            amount=Decimal("1"),
        )
    rows = db.list_transactions(start_date=date(2025, 2, 10), end_date=date(2025, 2, 28))
    assert [r.date.day for r in rows] == [28, 15]


def test_merged_view_names(seeded):
    db, account_id, category_id = seeded
    card_id = db.create_credit_card("Visa", 10, 16)
    db.create_recurring_transaction(
        account_id=account_id,
        category_id=category_id,
        transaction_type=TransactionType.DEBIT,
        day=16,
        start_date=date(2025, 1, 16),
        description="Streaming",
        amount=Decimal("9.90"),
        credit_card_id=card_id,
    )
    views = db.get_transactions_with_recurring_by_date(date(2025, 1, 1), date(2025, 1, 31))

    assert len(views) == 1
    assert views[0].virtual is True
    assert views[0].id is None
    assert views[0].account_name == "Checking"
    assert views[0].category == "Food"
    assert views[0].credit_card_name == "Visa"


def test_merged_view_skip_policy(temp_db):
    db = create_sqlite_database(temp_db.database_path, short_month_policy="skip")
    account_id = db.create_account("Checking", AccountType.PERSONAL)
    category_id = db.create_category("Food")
    db.create_recurring_transaction(
        account_id=account_id,
        category_id=category_id,
        transaction_type=TransactionType.DEBIT,
        day=30,
        start_date=date(2025, 1, 30),
        description="Rent",
        amount=Decimal("900"),
    )
    views = db.get_transactions_with_recurring_by_date(date(2025, 2, 1), date(2025, 3, 31))
    db.disconnect()
    assert [v.date for v in views] == [date(2025, 3, 30)]


def test_category_lookup_case_insensitive(temp_db):
    category_id = temp_db.create_category("Transport")
    assert temp_db.get_category_by_description("TRANSPORT").id == category_id


def test_archive_missing_card(temp_db):
    with pytest.raises(NotFoundError):
        temp_db.archive_credit_card(3)


def test_resolve_short_month_policy(monkeypatch):
    monkeypatch.delenv("LEDGERIT_SHORT_MONTH_POLICY", raising=False)
    assert resolve_short_month_policy() == ShortMonthPolicy.CLAMP
    assert resolve_short_month_policy("SKIP") == ShortMonthPolicy.SKIP
    monkeypatch.setenv("LEDGERIT_SHORT_MONTH_POLICY", "skip")
    assert resolve_short_month_policy() == ShortMonthPolicy.SKIP
    with pytest.raises(ValidationError):
        resolve_short_month_policy("round")


def test_create_database_from_url():
    db = create_database("sqlite:///:memory:")
    assert db.short_month_policy == ShortMonthPolicy.CLAMP
    assert db.list_accounts() == []
    db.disconnect()


def test_sqlite_path_from_env(monkeypatch, tmp_path):
    path = tmp_path / "env.db"
    monkeypatch.setenv("LEDGERIT_DB_PATH", str(path))
    db = create_sqlite_database()
    db.create_category("Food")
    db.disconnect()
    assert path.exists()
