"""
Monetary amount parsing.

Amounts arrive as decimal strings and are held as Decimal
with exactly 4 fractional digits, matching the Numeric(19, 4)
columns. Floats never touch money: a binary float cannot
represent 0.1 exactly, and the balancing invariant has to
hold to the last digit.
"""

import re
from decimal import Decimal, InvalidOperation

from double_entry_bank.exceptions import InvalidAmount

SCALE = Decimal("0.0001")
ZERO = Decimal("0.0000")

# Numeric(19, 4) leaves 15 integer digits
MAX_AMOUNT = Decimal(10) ** 15

# Plain ASCII decimal: optional sign, digits, optional fraction
_AMOUNT_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


def parse_amount(amount_str: str) -> Decimal:
    """
    Parse a positive amount string into a scale-4 Decimal.

    Rejects, all with InvalidAmount: non-strings, empty or
    sign-only input, anything other than plain ASCII digits
    with an optional sign and decimal point (so no "1_000",
    exponents or non-Latin digits),
    zero and negative values, values with more than 4
    fractional digits, and values too large for the column.
    """
    if not isinstance(amount_str, str):
        raise InvalidAmount(amount_str)

    raw = amount_str.strip()
    if not _AMOUNT_RE.fullmatch(raw):
        raise InvalidAmount(amount_str)

    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise InvalidAmount(amount_str) from None

    if not value.is_finite() or value <= 0 or value >= MAX_AMOUNT:
        raise InvalidAmount(amount_str)

    fixed = value.quantize(SCALE)
    if fixed != value:
        # More precision than the ledger stores; refuse to round money
        raise InvalidAmount(amount_str)

    return fixed


def to_fixed(value) -> Decimal:
    """Quantize a stored or computed numeric value to scale 4."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(SCALE)


def format_amount(value) -> str:
    """Render an amount the way the ledger stores it, e.g. '100.0000'."""
    return f"{to_fixed(value):f}"
