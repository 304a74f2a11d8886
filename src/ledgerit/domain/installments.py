"""Installment plan splitting."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from ledgerit.domain.calendar_math import add_months
from ledgerit.domain.errors import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Installment:
    """One dated part of an installment plan."""

    number: int
    count: int
    date: date
    amount: Decimal
    description: str


def installment_description(description: str, number: int, count: int) -> str:
    """Return the description suffixed with the installment label."""
    return f"{description} ({number}/{count})"


def split_installments(
    amount: Decimal, installments: int, anchor_date: date, description: str
) -> list[Installment]:
    """Split a purchase into equal monthly installments.

    Each installment is ``amount / installments`` rounded to cents. Rounding
    remainders are not redistributed, so the parts may differ from the total
    by up to one cent per installment.

    Args:
        amount: Total purchase amount (> 0)
        installments: Number of installments (> 1)
        anchor_date: Date of the first installment
        description: Purchase description

    Returns:
        List of installments, the i-th dated ``anchor_date + i months``

    Raises:
        ValidationError: If amount is not positive or installments < 2
    """
    if amount <= 0:
        raise ValidationError("amount must be greater than zero")
    if installments < 2:
        raise ValidationError(
            f"installments must be at least 2, got {installments}"
        )

    part = (amount / installments).quantize(CENT, rounding=ROUND_HALF_UP)
    return [
        Installment(
            number=i + 1,
            count=installments,
            date=add_months(anchor_date, i),
            amount=part,
            description=installment_description(description, i + 1, installments),
        )
        for i in range(installments)
    ]
