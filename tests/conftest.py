"""Shared pytest fixtures for ledgerit tests."""

import logging
import tempfile
import os
import pytest

from ledgerit import logging_setup
from ledgerit.database.factories import create_sqlite_database
from ledgerit.domain.account import AccountService
from ledgerit.domain.category import CategoryService
from ledgerit.domain.credit_card import CreditCardService
from ledgerit.domain.dashboard import DashboardAggregator
from ledgerit.domain.ledger import TransactionLedger


def _reset_package_logger():
    logger = logging.getLogger("ledgerit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging_setup._CONFIGURED = False
    return logger


@pytest.fixture(autouse=True)
def reset_logging():
    """Start and finish every test with an unconfigured package logger."""
    yield _reset_package_logger()
    _reset_package_logger()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def fresh_db(temp_db):
    """Open a second connection to the temp database, e.g. after CLI writes."""
    def _open():
        db = create_sqlite_database(database_path=temp_db.database_path)
        db.connect()
        return db

    return _open


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def card_service(temp_db):
    """Create a CreditCardService with a temporary database."""
    return CreditCardService(temp_db)


@pytest.fixture
def ledger(temp_db):
    """Create a TransactionLedger with a temporary database."""
    return TransactionLedger(temp_db)


@pytest.fixture
def dashboard(temp_db):
    """Create a DashboardAggregator with a temporary database."""
    return DashboardAggregator(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(name="Checking", account_type="personal")
    return account_service.get_account(account_id)


@pytest.fixture
def sample_category(category_service):
    """Create a sample category for testing."""
    category_id = category_service.create_category("Groceries")
    return category_service.get_category(category_id)


@pytest.fixture
def sample_card(card_service):
    """Create a card closing on the 10th and due on the 16th."""
    card_id = card_service.create_credit_card(name="Visa", closing_day=10, due_day=16)
    return card_service.get_credit_card(card_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
