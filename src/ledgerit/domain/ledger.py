"""Transaction ledger domain service.

The ledger is the only write path for transactions. It creates one-off,
fixed (recurring) and credit card transactions, moves transactions from
pending to fulfilled, and keeps account balances in step with fulfilled
transactions. Multi-row writes run inside ``Database.atomic()``.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from ledgerit.database.base import Database
from ledgerit.domain.calendar_math import (
    first_occurrence,
    occurrence_date as month_occurrence,
    resolve_billing_date,
    validate_day_of_month,
)
from ledgerit.domain.entities import (
    Account,
    Category,
    CreditCard,
    RecurringTransaction,
    ShortMonthPolicy,
    Transaction,
    TransactionType,
    TransactionView,
)
from ledgerit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    credit_card_not_found,
    installments_and_fixed,
    occurrence_already_materialized,
    recurring_transaction_not_found,
    transaction_already_fulfilled,
    transaction_not_found,
)
from ledgerit.domain.installments import split_installments
from ledgerit.domain.recurrence import before_series_start, find_covering
from ledgerit.logging_setup import get_logger

logger = get_logger(__name__)


def _opposite(transaction_type: TransactionType) -> TransactionType:
    if transaction_type == TransactionType.CREDIT:
        return TransactionType.DEBIT
    return TransactionType.CREDIT


class TransactionLedger:
    """Service for creating and settling transactions."""

    def __init__(
        self,
        db: Database,
        short_month_policy: Optional[ShortMonthPolicy] = None,
    ):
        """Initialize the ledger.

        Args:
            db: Database instance
            short_month_policy: Policy used to date recurring occurrences
                (default: the database's policy)
        """
        self.db = db
        if short_month_policy is None:
            short_month_policy = db.short_month_policy
        self.short_month_policy = ShortMonthPolicy(short_month_policy)

    # Validation helpers
    @staticmethod
    def _validate_amount(amount) -> Decimal:
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid amount '{amount}'")
        if not value.is_finite() or value <= 0:
            raise ValidationError("amount must be greater than zero")
        return value

    @staticmethod
    def _validate_type(transaction_type) -> TransactionType:
        try:
            return TransactionType(transaction_type)
        except ValueError:
            raise ValidationError(
                f"Unknown transaction type '{transaction_type}'. Supported: credit, debit"
            )

    @staticmethod
    def _validate_description(description: Optional[str]) -> str:
        if description is None or not description.strip():
            raise ValidationError("description is required")
        return description.strip()

    def _require_account(self, account_id: int) -> Account:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def _require_category(self, category_id: int, allow_archived: bool = False) -> Category:
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.archived and not allow_archived:
            raise ValidationError(f"Category '{category.description}' is archived")
        return category

    def _require_credit_card(
        self, credit_card_id: int, allow_archived: bool = False
    ) -> CreditCard:
        card = self.db.get_credit_card(credit_card_id)
        if card is None:
            raise NotFoundError(credit_card_not_found(credit_card_id))
        if card.archived and not allow_archived:
            raise ValidationError(f"Credit card '{card.name}' is archived")
        return card

    def require_transaction(self, transaction_id: int) -> Transaction:
        """Get a non-archived transaction or raise NotFoundError."""
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None or transaction.archived:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def require_recurring_transaction(self, recurring_transaction_id: int) -> RecurringTransaction:
        """Get a recurring template or raise NotFoundError."""
        recurring = self.db.get_recurring_transaction(recurring_transaction_id)
        if recurring is None:
            raise NotFoundError(recurring_transaction_not_found(recurring_transaction_id))
        return recurring

    def _apply_to_balance(
        self,
        account_id: int,
        amount: Decimal,
        transaction_type: TransactionType,
        reverse: bool = False,
    ) -> Decimal:
        if reverse:
            transaction_type = _opposite(transaction_type)
        return self.db.update_account_balance(account_id, amount, transaction_type)

    # Creation
    def create_one_off(
        self,
        transaction_type: TransactionType | str,
        account_id: int,
        category_id: int,
        amount: Decimal,
        date: date,
        description: str,
        fulfilled: bool = False,
        credit_card_id: Optional[int] = None,
    ) -> Transaction:
        """Create a single transaction.

        A transaction created as fulfilled is stamped as effectuated on its
        date and moves the account balance right away.

        Returns:
            The created transaction

        Raises:
            ValidationError: On invalid amount, type or description
            NotFoundError: If account, category or card doesn't exist
        """
        transaction_type = self._validate_type(transaction_type)
        amount = self._validate_amount(amount)
        description = self._validate_description(description)
        self._require_account(account_id)
        self._require_category(category_id)
        if credit_card_id is not None:
            self._require_credit_card(credit_card_id)

        with self.db.atomic():
            transaction_id = self.db.create_transaction(
                account_id=account_id,
                category_id=category_id,
                transaction_type=transaction_type,
                date=date,
                description=description,
                amount=amount,
                credit_card_id=credit_card_id,
                fulfilled=fulfilled,
                effectuated_date=date if fulfilled else None,
            )
            if fulfilled:
                self._apply_to_balance(account_id, amount, transaction_type)

        logger.info(
            "created %s transaction %s of %s on %s",
            transaction_type.value,
            transaction_id,
            amount,
            date,
        )
        return self.require_transaction(transaction_id)

    def create_fixed(
        self,
        transaction_type: TransactionType | str,
        account_id: int,
        category_id: int,
        amount: Decimal,
        date: date,
        description: str,
        day_of_month: Optional[int] = None,
        fulfilled: bool = False,
        credit_card_id: Optional[int] = None,
    ) -> Transaction:
        """Create a recurring template and its first concrete occurrence.

        The template repeats monthly on ``day_of_month`` (default: the day of
        ``date``). The first occurrence is a real transaction linked to the
        template, dated on the template day in the month of ``date``. Under
        the skip policy a month too short for the day moves it to the next
        month that has the day. The series starts on that date.

        Returns:
            The first occurrence
        """
        transaction_type = self._validate_type(transaction_type)
        amount = self._validate_amount(amount)
        description = self._validate_description(description)
        day = day_of_month if day_of_month is not None else date.day
        validate_day_of_month(day, "day of month")
        self._require_account(account_id)
        self._require_category(category_id)
        if credit_card_id is not None:
            self._require_credit_card(credit_card_id)
        first_on = first_occurrence(date, day, self.short_month_policy)

        with self.db.atomic():
            recurring_id = self.db.create_recurring_transaction(
                account_id=account_id,
                category_id=category_id,
                transaction_type=transaction_type,
                day=day,
                start_date=first_on,
                description=description,
                amount=amount,
                credit_card_id=credit_card_id,
            )
            transaction_id = self.db.create_transaction(
                account_id=account_id,
                category_id=category_id,
                transaction_type=transaction_type,
                date=first_on,
                description=description,
                amount=amount,
                credit_card_id=credit_card_id,
                recurring_transaction_id=recurring_id,
                fulfilled=fulfilled,
                effectuated_date=date if fulfilled else None,
            )
            if fulfilled:
                self._apply_to_balance(account_id, amount, transaction_type)

        logger.info(
            "created recurring %s %s (day %s) with first transaction %s",
            transaction_type.value,
            recurring_id,
            day,
            transaction_id,
        )
        return self.require_transaction(transaction_id)

    def create_credit_card_purchase(
        self,
        credit_card_id: int,
        account_id: int,
        category_id: int,
        amount: Decimal,
        date: date,
        description: str,
        installments: int = 0,
        fixed: bool = False,
    ) -> Transaction:
        """Record a credit card purchase on its billing date.

        The purchase date is moved to the card's due date (see
        ``resolve_billing_date``). The purchase then becomes a single debit,
        an installment plan (installments > 1) or a fixed monthly debit.

        Returns:
            The created transaction, or the first installment

        Raises:
            ValidationError: If installments and fixed are both requested
        """
        if installments and installments > 0 and fixed:
            raise ValidationError(installments_and_fixed())
        if installments < 0:
            raise ValidationError("installments cannot be negative")

        card = self._require_credit_card(credit_card_id)
        billing_date = resolve_billing_date(date, card.closing_day, card.due_day)
        logger.debug(
            "purchase on %s with card %s bills on %s", date, card.id, billing_date
        )

        if fixed:
            return self.create_fixed(
                TransactionType.DEBIT,
                account_id=account_id,
                category_id=category_id,
                amount=amount,
                date=billing_date,
                description=description,
                credit_card_id=card.id,
            )

        if installments > 1:
            return self._create_installments(
                card, account_id, category_id, amount, billing_date, description, installments
            )

        return self.create_one_off(
            TransactionType.DEBIT,
            account_id=account_id,
            category_id=category_id,
            amount=amount,
            date=billing_date,
            description=description,
            credit_card_id=card.id,
        )

    def _create_installments(
        self,
        card: CreditCard,
        account_id: int,
        category_id: int,
        amount: Decimal,
        anchor_date: date,
        description: str,
        installments: int,
    ) -> Transaction:
        amount = self._validate_amount(amount)
        description = self._validate_description(description)
        self._require_account(account_id)
        self._require_category(category_id)

        plan = split_installments(amount, installments, anchor_date, description)
        created_ids = []
        with self.db.atomic():
            for part in plan:
                created_ids.append(
                    self.db.create_transaction(
                        account_id=account_id,
                        category_id=category_id,
                        transaction_type=TransactionType.DEBIT,
                        date=part.date,
                        description=part.description,
                        amount=part.amount,
                        credit_card_id=card.id,
                    )
                )

        logger.info(
            "created %s installments of %s on card %s (transactions %s)",
            installments,
            plan[0].amount,
            card.id,
            created_ids,
        )
        return self.require_transaction(created_ids[0])

    def create_debit(
        self,
        account_id: int,
        category_id: int,
        amount: Decimal,
        date: date,
        description: str,
        fulfilled: bool = False,
        fixed: bool = False,
        credit_card_id: Optional[int] = None,
        installments: int = 0,
        day_of_month: Optional[int] = None,
    ) -> Transaction:
        """Create an expense.

        Expenses on a credit card go through ``create_credit_card_purchase``
        and are always created pending. ``day_of_month`` sets the day of a
        fixed expense.
        """
        if day_of_month is not None and not fixed:
            raise ValidationError("day of month applies only to fixed transactions")
        if credit_card_id is not None:
            if fulfilled:
                raise ValidationError(
                    "credit card purchases are created pending; effectuate them when paid"
                )
            if day_of_month is not None:
                raise ValidationError(
                    "fixed credit card purchases repeat on the card due day"
                )
            return self.create_credit_card_purchase(
                credit_card_id=credit_card_id,
                account_id=account_id,
                category_id=category_id,
                amount=amount,
                date=date,
                description=description,
                installments=installments,
                fixed=fixed,
            )
        if installments:
            raise ValidationError("installments require a credit card")

        if fixed:
            return self.create_fixed(
                TransactionType.DEBIT,
                account_id=account_id,
                category_id=category_id,
                amount=amount,
                date=date,
                description=description,
                day_of_month=day_of_month,
                fulfilled=fulfilled,
            )
        return self.create_one_off(
            TransactionType.DEBIT,
            account_id=account_id,
            category_id=category_id,
            amount=amount,
            date=date,
            description=description,
            fulfilled=fulfilled,
        )

    def create_credit(
        self,
        account_id: int,
        category_id: int,
        amount: Decimal,
        date: date,
        description: str,
        fulfilled: bool = False,
        fixed: bool = False,
        day_of_month: Optional[int] = None,
    ) -> Transaction:
        """Create an income, optionally as a fixed monthly income."""
        if day_of_month is not None and not fixed:
            raise ValidationError("day of month applies only to fixed transactions")
        if fixed:
            return self.create_fixed(
                TransactionType.CREDIT,
                account_id=account_id,
                category_id=category_id,
                amount=amount,
                date=date,
                description=description,
                day_of_month=day_of_month,
                fulfilled=fulfilled,
            )
        return self.create_one_off(
            TransactionType.CREDIT,
            account_id=account_id,
            category_id=category_id,
            amount=amount,
            date=date,
            description=description,
            fulfilled=fulfilled,
        )

    # Settlement
    def effectuate(
        self,
        transaction_id: Optional[int] = None,
        recurring_transaction_id: Optional[int] = None,
        amount: Optional[Decimal] = None,
        effectuated_date: Optional[date] = None,
        occurrence_date: Optional[date] = None,
    ) -> Transaction:
        """Mark a transaction, or a virtual recurring occurrence, as paid.

        With ``transaction_id`` the stored transaction becomes fulfilled.
        With ``recurring_transaction_id`` the occurrence of that template in
        the month of ``occurrence_date`` (default: the template day in the
        month of ``effectuated_date``) is materialized as a fulfilled
        transaction. Either way the account balance moves by the amount.

        Args:
            transaction_id: Stored transaction to settle
            recurring_transaction_id: Template whose occurrence is settled
            amount: Amount actually paid, overriding the scheduled amount
            effectuated_date: Payment date (default: today)
            occurrence_date: Scheduled date of the recurring occurrence

        Returns:
            The fulfilled transaction

        Raises:
            ValidationError: If not exactly one ID is given, or the template is archived
            NotFoundError: If the transaction or template doesn't exist
            ConflictError: If the transaction is already fulfilled, or the
                occurrence is already materialized
        """
        if (transaction_id is None) == (recurring_transaction_id is None):
            raise ValidationError(
                "exactly one of transaction id or recurring transaction id is required"
            )
        if amount is not None:
            amount = self._validate_amount(amount)
        if effectuated_date is None:
            effectuated_date = date.today()

        if transaction_id is not None:
            return self._effectuate_transaction(transaction_id, amount, effectuated_date)
        return self._effectuate_occurrence(
            recurring_transaction_id, amount, effectuated_date, occurrence_date
        )

    def _effectuate_transaction(
        self, transaction_id: int, amount: Optional[Decimal], effectuated_date: date
    ) -> Transaction:
        transaction = self.require_transaction(transaction_id)
        if transaction.fulfilled:
            raise ConflictError(transaction_already_fulfilled(transaction_id))

        with self.db.atomic():
            # fulfill_transaction re-checks the flag under a row lock
            fulfilled = self.db.fulfill_transaction(transaction_id, effectuated_date, amount=amount)
            self._apply_to_balance(
                fulfilled.account_id, fulfilled.amount, fulfilled.transaction_type
            )

        logger.info("effectuated transaction %s on %s", transaction_id, effectuated_date)
        return self.require_transaction(transaction_id)

    def _effectuate_occurrence(
        self,
        recurring_transaction_id: int,
        amount: Optional[Decimal],
        effectuated_date: date,
        occurrence_on: Optional[date],
    ) -> Transaction:
        template = self.require_recurring_transaction(recurring_transaction_id)
        if template.archived:
            raise ValidationError(
                f"Recurring transaction {recurring_transaction_id} is archived"
            )

        if occurrence_on is None:
            occurrence_on = month_occurrence(
                effectuated_date.year,
                effectuated_date.month,
                template.day,
                self.short_month_policy,
            )
            if occurrence_on is None:
                raise ValidationError(
                    f"Recurring transaction {recurring_transaction_id} has no occurrence in "
                    f"{effectuated_date:%Y-%m}"
                )
        if before_series_start(template, occurrence_on):
            raise ValidationError(
                f"Recurring transaction {recurring_transaction_id} starts in "
                f"{template.start_date:%Y-%m}; no occurrence on {occurrence_on.isoformat()}"
            )

        existing = find_covering(
            template.id,
            occurrence_on,
            self.db.list_recurring_occurrences(template.id),
        )
        if existing is not None:
            raise ConflictError(
                occurrence_already_materialized(template.id, occurrence_on, existing.id)
            )

        paid = amount if amount is not None else template.amount
        with self.db.atomic():
            transaction_id = self.db.create_transaction(
                account_id=template.account_id,
                category_id=template.category_id,
                transaction_type=template.transaction_type,
                date=occurrence_on,
                description=template.description,
                amount=paid,
                credit_card_id=template.credit_card_id,
                recurring_transaction_id=template.id,
                fulfilled=True,
                effectuated_date=effectuated_date,
            )
            self._apply_to_balance(template.account_id, paid, template.transaction_type)

        logger.info(
            "materialized occurrence %s of recurring %s as transaction %s",
            occurrence_on,
            template.id,
            transaction_id,
        )
        return self.require_transaction(transaction_id)

    # Edits
    def update(
        self,
        transaction_id: int,
        account_id: Optional[int] = None,
        credit_card_id: Optional[int] = None,
        category_id: Optional[int] = None,
        date: Optional[date] = None,
        description: Optional[str] = None,
        amount: Optional[Decimal] = None,
        clear_credit_card: bool = False,
        propagate_to_recurring: bool = False,
    ) -> Transaction:
        """Update the provided fields of a transaction.

        Fields left as None are untouched. The fulfilled flag is not editable
        here. When a fulfilled transaction changes account or amount, its
        effect on the balance is moved accordingly. With
        ``propagate_to_recurring`` the same changes are copied to the
        recurring template (a new date sets the template day), so future
        occurrences inherit them.

        Returns:
            The updated transaction
        """
        transaction = self.require_transaction(transaction_id)

        if clear_credit_card and credit_card_id is not None:
            raise ValidationError("Cannot set both credit_card_id and clear_credit_card")
        if account_id is not None:
            self._require_account(account_id)
        if category_id is not None:
            self._require_category(category_id)
        if credit_card_id is not None:
            self._require_credit_card(credit_card_id)
        if amount is not None:
            amount = self._validate_amount(amount)
        if description is not None:
            description = self._validate_description(description)

        new_account_id = account_id if account_id is not None else transaction.account_id
        new_amount = amount if amount is not None else transaction.amount
        moves_balance = transaction.fulfilled and (
            new_account_id != transaction.account_id or new_amount != transaction.amount
        )

        with self.db.atomic():
            self.db.update_transaction(
                transaction_id=transaction_id,
                account_id=account_id,
                credit_card_id=credit_card_id,
                category_id=category_id,
                date=date,
                description=description,
                amount=amount,
                clear_credit_card=clear_credit_card,
            )
            if moves_balance:
                self._apply_to_balance(
                    transaction.account_id,
                    transaction.amount,
                    transaction.transaction_type,
                    reverse=True,
                )
                self._apply_to_balance(new_account_id, new_amount, transaction.transaction_type)

            if propagate_to_recurring and transaction.recurring_transaction_id is not None:
                self.db.update_recurring_transaction(
                    transaction.recurring_transaction_id,
                    account_id=account_id,
                    credit_card_id=credit_card_id,
                    category_id=category_id,
                    day=date.day if date is not None else None,
                    description=description,
                    amount=amount,
                    clear_credit_card=clear_credit_card,
                )
            elif propagate_to_recurring:
                logger.debug(
                    "transaction %s has no recurring template, nothing to propagate",
                    transaction_id,
                )

        logger.info("updated transaction %s", transaction_id)
        return self.require_transaction(transaction_id)

    def delete(self, transaction_id: int) -> None:
        """Archive a transaction.

        A fulfilled transaction's effect on the balance is reversed.

        Raises:
            NotFoundError: If the transaction doesn't exist or is archived
        """
        transaction = self.require_transaction(transaction_id)
        with self.db.atomic():
            self.db.delete_transaction(transaction_id)
            if transaction.fulfilled:
                self._apply_to_balance(
                    transaction.account_id,
                    transaction.amount,
                    transaction.transaction_type,
                    reverse=True,
                )
        logger.info("archived transaction %s", transaction_id)

    def archive_recurring(self, recurring_transaction_id: int) -> None:
        """Stop a recurring template from generating occurrences."""
        self.require_recurring_transaction(recurring_transaction_id)
        self.db.archive_recurring_transaction(recurring_transaction_id)
        logger.info("archived recurring transaction %s", recurring_transaction_id)

    # Reads
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get a non-archived transaction by ID."""
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None or transaction.archived:
            return None
        return transaction

    def get_recurring_transaction(
        self, recurring_transaction_id: int
    ) -> Optional[RecurringTransaction]:
        """Get a recurring template by ID."""
        return self.db.get_recurring_transaction(recurring_transaction_id)

    def list_transactions(self, start_date: date, end_date: date) -> list[TransactionView]:
        """List real and virtual transactions in a window, newest first."""
        if start_date > end_date:
            raise ValidationError("start date must not be after end date")
        return self.db.get_transactions_with_recurring_by_date(start_date, end_date)
