"""Dashboard aggregation domain service."""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from ledgerit.database.base import Database
from ledgerit.domain.entities import (
    Account,
    CategoryTotal,
    DashboardSummary,
    TransactionType,
    TransactionView,
    signed_amount,
)
from ledgerit.domain.errors import ValidationError

ZERO = Decimal("0")


def sort_category_totals(totals: dict[str, Decimal]) -> tuple[CategoryTotal, ...]:
    """Order category totals by total descending, then by name."""
    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return tuple(CategoryTotal(name=name, total=total) for name, total in ordered)


class DashboardAggregator:
    """Service for building dashboard rollups over a date window."""

    def __init__(self, db: Database):
        """Initialize dashboard aggregator.

        Args:
            db: Database instance
        """
        self.db = db

    def build_dashboard(self, start_date: date, end_date: date) -> DashboardSummary:
        """Build the dashboard for a window.

        Reads the merged view of stored transactions and virtual recurring
        occurrences, plus the current account balances.

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date > end_date:
            raise ValidationError("start date must not be after end date")
        transactions = self.db.get_transactions_with_recurring_by_date(start_date, end_date)
        accounts = self.db.list_accounts()
        return self.aggregate(transactions, start_date, end_date, accounts=accounts)

    @staticmethod
    def aggregate(
        transactions: Sequence[TransactionView],
        start_date: date,
        end_date: date,
        accounts: Iterable[Account] = (),
    ) -> DashboardSummary:
        """Sum a list of transactions into dashboard figures.

        Credits are split into received (fulfilled) and upcoming. Debits are
        split into paid and unpaid, and every debit counts toward its
        category. Transactions on a credit card also feed the card figures:
        debits raise the card total, fulfilled credits (payments, refunds)
        lower it and pending credits are reported as upcoming.

        Args:
            transactions: Merged view rows for the window
            start_date: Window start
            end_date: Window end
            accounts: Accounts to report alongside the totals

        Returns:
            DashboardSummary for the window
        """
        total_credit = ZERO
        total_credit_upcoming = ZERO
        total_debit = ZERO
        total_debit_unpaid = ZERO
        total_credit_card = ZERO
        total_credit_card_upcoming = ZERO
        balance = ZERO
        by_category: dict[str, Decimal] = defaultdict(lambda: ZERO)

        for txn in transactions:
            balance += signed_amount(txn.amount, txn.transaction_type)
            on_card = txn.credit_card_id is not None

            if txn.transaction_type == TransactionType.CREDIT:
                if txn.fulfilled:
                    total_credit += txn.amount
                else:
                    total_credit_upcoming += txn.amount
                if on_card:
                    if txn.fulfilled:
                        total_credit_card -= txn.amount
                    else:
                        total_credit_card_upcoming += txn.amount
            else:
                if txn.fulfilled:
                    total_debit += txn.amount
                else:
                    total_debit_unpaid += txn.amount
                by_category[txn.category] += txn.amount
                if on_card:
                    total_credit_card += txn.amount

        return DashboardSummary(
            start_date=start_date,
            end_date=end_date,
            transactions=tuple(transactions),
            total_credit=total_credit,
            total_credit_upcoming=total_credit_upcoming,
            total_debit=total_debit,
            total_debit_unpaid=total_debit_unpaid,
            total_credit_card=total_credit_card,
            total_credit_card_upcoming=total_credit_card_upcoming,
            category_totals=sort_category_totals(by_category),
            balance=balance,
            accounts=tuple(accounts),
        )
