"""Calendar helpers for billing cycles and monthly recurrence."""

import calendar
from datetime import date
from typing import Iterator, Optional

from dateutil.relativedelta import relativedelta

from ledgerit.domain.entities import ShortMonthPolicy
from ledgerit.domain.errors import ValidationError


def add_months(value: date, months: int) -> date:
    """Add calendar months to a date.

    The day is clamped to the last day of the target month, so
    ``add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)``.
    """
    return value + relativedelta(months=months)


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month."""
    return calendar.monthrange(year, month)[1]


def validate_day_of_month(day: int, label: str = "day") -> None:
    """Raise ValidationError unless ``day`` is within 1..31."""
    if not 1 <= day <= 31:
        raise ValidationError(f"{label} must be between 1 and 31, got {day}")


def clamp_to_month(year: int, month: int, day: int) -> date:
    """Return ``day`` in the given month, clamped to the month's length."""
    return date(year, month, min(day, days_in_month(year, month)))


def resolve_billing_date(purchase_date: date, closing_day: int, due_day: int) -> date:
    """Resolve the due date of a credit card purchase.

    A purchase made before the card closes is due on this month's due day;
    a purchase made on or after the closing day is due on next month's due
    day. When the due day falls before the purchase on the same-month branch
    (due day earlier in the month than the closing day), the bill is due the
    following month instead. The result is never before the purchase date.

    Args:
        purchase_date: Date of the purchase
        closing_day: Day of month the card statement closes (1-31)
        due_day: Day of month the statement is due (1-31)

    Returns:
        The effective charge date

    Raises:
        ValidationError: If either day is out of range
    """
    validate_day_of_month(closing_day, "closing day")
    validate_day_of_month(due_day, "due day")

    if purchase_date.day < closing_day:
        anchor = purchase_date
    else:
        anchor = add_months(purchase_date.replace(day=1), 1)

    resolved = clamp_to_month(anchor.year, anchor.month, due_day)
    if resolved < purchase_date:
        nxt = add_months(anchor.replace(day=1), 1)
        resolved = clamp_to_month(nxt.year, nxt.month, due_day)
    return resolved


def occurrence_date(
    year: int,
    month: int,
    day: int,
    policy: ShortMonthPolicy = ShortMonthPolicy.CLAMP,
) -> Optional[date]:
    """Return the occurrence date for ``day`` in a month.

    Returns None when the month is too short and the policy is SKIP.
    """
    if day > days_in_month(year, month):
        if ShortMonthPolicy(policy) == ShortMonthPolicy.SKIP:
            return None
    return clamp_to_month(year, month, day)


def iter_months(start_date: date, end_date: date) -> Iterator[tuple[int, int]]:
    """Yield (year, month) pairs for every month touched by the window."""
    current = start_date.replace(day=1)
    while current <= end_date:
        yield current.year, current.month
        current = add_months(current, 1)


def same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


def first_occurrence(
    anchor: date,
    day: int,
    policy: ShortMonthPolicy = ShortMonthPolicy.CLAMP,
) -> date:
    """Return the first occurrence of ``day`` starting in the month of ``anchor``.

    Under SKIP a month too short for ``day`` is passed over, so the result
    can land in a later month.
    """
    current = anchor.replace(day=1)
    while True:
        when = occurrence_date(current.year, current.month, day, policy)
        if when is not None:
            return when
        current = add_months(current, 1)