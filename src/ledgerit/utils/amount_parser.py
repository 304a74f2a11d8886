"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

CURRENCY_SYMBOLS = re.compile(r"[$€£¥]|R\$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles "123.45", "$1,234.56", "-123.45" and "(123.45)" (negative in
    parentheses).

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]
    text = CURRENCY_SYMBOLS.sub("", text).replace(",", "").replace(" ", "")

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if negative else amount


def parse_positive_amount(amount_str: str) -> Decimal:
    """Parse an amount that must be greater than zero.

    Transaction amounts are magnitudes; direction comes from the type.

    Raises:
        ValueError: If the amount is unparseable, zero or negative
    """
    amount = parse_amount(amount_str)
    if amount <= 0:
        raise ValueError(f"Amount must be greater than zero, got '{amount_str}'")
    return amount
