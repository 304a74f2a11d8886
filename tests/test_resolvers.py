"""Tests for name-or-ID resolution."""

import pytest

from ledgerit.domain.errors import NotFoundError
from ledgerit.utils.resolvers import resolve_account, resolve_category, resolve_credit_card


def test_resolve_account_by_name_and_id(account_service, sample_account):
    assert resolve_account(account_service, "Checking") == sample_account.id
    assert resolve_account(account_service, str(sample_account.id)) == sample_account.id
    assert resolve_account(account_service, sample_account.id) == sample_account.id


def test_resolve_account_missing(account_service):
    with pytest.raises(NotFoundError, match="Account 'Savings' not found"):
        resolve_account(account_service, "Savings")
    with pytest.raises(NotFoundError):
        resolve_account(account_service, 12)


def test_resolve_category_case_insensitive(category_service, sample_category):
    assert resolve_category(category_service, "groceries") == sample_category.id


def test_resolve_card(card_service, sample_card):
    assert resolve_credit_card(card_service, "Visa") == sample_card.id
    with pytest.raises(NotFoundError):
        resolve_credit_card(card_service, "Amex")
