"""Tests for the command line interface."""

import json
from datetime import date
from decimal import Decimal

import pytest
from ledgerit.cli.main import cli


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""
    def _invoke(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return _invoke


@pytest.fixture
def seeded(sample_account, sample_category, sample_card):
    """Account 'Checking', category 'Groceries' and card 'Visa' (closes 10, due 16)."""
    return sample_account, sample_category, sample_card


class TestAccountCommands:
    """Tests for account commands."""

    def test_create_and_list(self, invoke):
        result = invoke("account", "create", "Company", "--type", "business")
        assert result.exit_code == 0
        assert "Created account 'Company' (ID: 1)" in result.output

        result = invoke("account", "list")
        assert result.exit_code == 0
        assert "Company" in result.output
        assert "business" in result.output

    def test_duplicate(self, invoke, sample_account):
        result = invoke("account", "create", "Checking")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_show(self, invoke, sample_account):
        result = invoke("account", "show", "Checking")
        assert result.exit_code == 0
        assert "Balance: $0.00" in result.output

    def test_show_missing(self, invoke):
        result = invoke("account", "show", "Nope")
        assert result.exit_code == 1
        assert "Account 'Nope' not found" in result.output

    def test_delete(self, invoke, sample_account, fresh_db):
        result = invoke("account", "delete", "Checking", "--yes")
        assert result.exit_code == 0
        assert fresh_db().list_accounts() == []

    def test_delete_cancelled(self, invoke, sample_account):
        result = invoke("account", "delete", "Checking", input="n\n")
        assert result.exit_code == 0
        assert "Deletion cancelled." in result.output


class TestCategoryAndCardCommands:
    """Tests for category and card commands."""

    def test_category_lifecycle(self, invoke):
        assert invoke("category", "create", "Housing").exit_code == 0
        assert invoke("category", "archive", "housing").exit_code == 0

        result = invoke("category", "list")
        assert "No categories found" in result.output
        result = invoke("category", "list", "--all")
        assert "Housing (ID: 1) [archived]" in result.output

    def test_card_create_validates_days(self, invoke):
        result = invoke("card", "create", "Visa", "--closing-day", "0", "--due-day", "16")
        assert result.exit_code == 1
        assert "closing day must be between 1 and 31" in result.output

    def test_card_show(self, invoke, sample_card):
        result = invoke("card", "show", "Visa")
        assert result.exit_code == 0
        assert "Closing day: 10" in result.output
        assert "Due day: 16" in result.output


class TestTransactionCommands:
    """Tests for recording and settling transactions."""

    def test_debit(self, invoke, seeded):
        result = invoke(
            "debit",
            "--amount", "$45.90",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-03",
            "--description", "Market",
        )
        assert result.exit_code == 0
        assert "Created transaction 1" in result.output
        assert "Amount: -$45.90" in result.output
        assert "Status: pending" in result.output

    def test_paid_credit_updates_balance(self, invoke, seeded, fresh_db):
        result = invoke(
            "credit",
            "--amount", "5000",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-01",
            "--description", "Salary",
            "--received",
        )
        assert result.exit_code == 0
        db = fresh_db()
        assert db.list_accounts()[0].balance == Decimal("5000")

    def test_invalid_amount(self, invoke, seeded):
        result = invoke(
            "debit",
            "--amount", "-3",
            "--account", "Checking",
            "--category", "Groceries",
            "--description", "Refund?",
        )
        assert result.exit_code == 1
        assert "Invalid amount" in result.output

    def test_fixed_debit_on_day(self, invoke, seeded, fresh_db):
        result = invoke(
            "debit",
            "--amount", "1200",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-19",
            "--description", "Rent",
            "--fixed",
            "--day", "5",
        )
        assert result.exit_code == 0
        assert "Date: 2025-03-05" in result.output

        template = fresh_db().get_recurring_transaction(1)
        assert template.day == 5
        assert template.start_date == date(2025, 3, 5)

    def test_day_requires_fixed(self, invoke, seeded):
        result = invoke(
            "credit",
            "--amount", "100",
            "--account", "Checking",
            "--category", "Groceries",
            "--description", "Allowance",
            "--day", "5",
        )
        assert result.exit_code == 1
        assert "day of month applies only to fixed transactions" in result.output

    def test_storage_failure_is_logged(self, invoke, seeded, monkeypatch):
        from ledgerit.cli import error_handling
        from ledgerit.domain.errors import InternalError
        from ledgerit.domain.ledger import TransactionLedger

        def fail(self, **kwargs):
            raise InternalError("Database error: disk full")

        logged = []
        monkeypatch.setattr(TransactionLedger, "create_debit", fail)
        monkeypatch.setattr(
            error_handling.logger, "error", lambda msg, *args, **kw: logged.append(msg % args)
        )
        result = invoke(
            "debit",
            "--amount", "10",
            "--account", "Checking",
            "--category", "Groceries",
            "--description", "Coffee",
        )
        assert result.exit_code == 1
        assert "Error: Database error: disk full" in result.output
        assert logged == ["command failed: Database error: disk full"]

    def test_card_purchase_installments(self, invoke, seeded, fresh_db):
        result = invoke(
            "card-purchase",
            "--card", "Visa",
            "--amount", "300",
            "--installments", "3",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-05",
            "--description", "Headphones",
        )
        assert result.exit_code == 0
        assert "Date: 2025-03-16" in result.output
        assert "Headphones (1/3)" in result.output

        rows = fresh_db().list_transactions()
        assert sorted(r.date for r in rows) == [date(2025, 3, 16), date(2025, 4, 16), date(2025, 5, 16)]

    def test_card_purchase_installments_and_fixed(self, invoke, seeded):
        result = invoke(
            "card-purchase",
            "--card", "Visa",
            "--amount", "30",
            "--installments", "3",
            "--fixed",
            "--account", "Checking",
            "--category", "Groceries",
            "--description", "Streaming",
        )
        assert result.exit_code == 1
        assert "installments and fixed cannot be used together" in result.output

    def test_effectuate_twice(self, invoke, seeded):
        invoke(
            "debit",
            "--amount", "20",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-03",
            "--description", "Coffee",
        )
        result = invoke("transaction", "effectuate", "1", "--date", "2025-03-04")
        assert result.exit_code == 0
        assert "Status: paid 2025-03-04" in result.output

        result = invoke("transaction", "effectuate", "1")
        assert result.exit_code == 1
        assert "already fulfilled" in result.output

    def test_effectuate_requires_one_id(self, invoke, seeded):
        result = invoke("transaction", "effectuate")
        assert result.exit_code == 1
        assert "exactly one" in result.output

    def test_list_shows_virtual_occurrences(self, invoke, seeded):
        invoke(
            "debit",
            "--amount", "1200",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-05",
            "--description", "Rent",
            "--fixed",
        )
        result = invoke(
            "transaction", "list", "--start-date", "2025-03-01", "--end-date", "2025-04-30"
        )
        assert result.exit_code == 0
        assert "Found 2 transaction(s)" in result.output
        assert "r1" in result.output
        assert "2025-04-05" in result.output

    def test_list_rejects_mixed_period_and_dates(self, invoke, seeded):
        result = invoke("transaction", "list", "--this-month", "--start-date", "2025-01-01")
        assert result.exit_code == 1
        assert "cannot be combined" in result.output

    def test_update_and_delete(self, invoke, seeded, fresh_db):
        invoke(
            "debit",
            "--amount", "20",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-03",
            "--description", "Coffee",
            "--paid",
        )
        result = invoke("transaction", "update", "1", "--amount", "25")
        assert result.exit_code == 0
        assert fresh_db().list_accounts()[0].balance == Decimal("-25")

        result = invoke("transaction", "delete", "1", "--yes")
        assert result.exit_code == 0
        assert fresh_db().list_accounts()[0].balance == Decimal("0")

        result = invoke("transaction", "show", "1")
        assert result.exit_code == 1

    def test_recurring_show_and_archive(self, invoke, seeded):
        invoke(
            "credit",
            "--amount", "5000",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-05",
            "--description", "Salary",
            "--fixed",
        )
        result = invoke("recurring", "show", "1")
        assert result.exit_code == 0
        assert "Day of month: 5" in result.output
        assert "Starts: 2025-03-05" in result.output

        assert invoke("recurring", "archive", "1").exit_code == 0
        result = invoke("transaction", "effectuate", "--recurring", "1", "--date", "2025-04-05")
        assert result.exit_code == 1
        assert "archived" in result.output


class TestDashboardCommand:
    """Tests for the dashboard command."""

    def test_json_output(self, invoke, seeded):
        invoke(
            "credit",
            "--amount", "5000",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-01",
            "--description", "Salary",
            "--received",
        )
        invoke(
            "card-purchase",
            "--card", "Visa",
            "--amount", "80",
            "--account", "Checking",
            "--category", "Groceries",
            "--date", "2025-03-05",
            "--description", "Books",
        )
        result = invoke(
            "dashboard", "--start-date", "2025-03-01", "--end-date", "2025-03-31", "--json"
        )
        assert result.exit_code == 0
        data = json.loads(result.output)

        assert Decimal(data["total_credit"]) == Decimal("5000")
        assert Decimal(data["total_debit_unpaid"]) == Decimal("80")
        assert Decimal(data["total_credit_card"]) == Decimal("80")
        assert Decimal(data["balance"]) == Decimal("4920")
        assert data["category_totals"][0]["name"] == "Groceries"
        assert len(data["transactions"]) == 2

    def test_text_output(self, invoke, seeded):
        result = invoke("dashboard", "--this-month")
        assert result.exit_code == 0
        assert "Balance" in result.output

    def test_start_after_end(self, invoke, seeded):
        result = invoke("dashboard", "--start-date", "2025-05-01", "--end-date", "2025-04-01")
        assert result.exit_code == 1
        assert "Error:" in result.output


def test_help_does_not_touch_database(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, ["--db-path", str(tmp_path / "x.db"), "--help"])
    assert result.exit_code == 0
    assert "dashboard" in result.output
    assert not (tmp_path / "x.db").exists()
