"""
Token amount parsing and exact arithmetic.

Amounts travel as decimal strings. Token transfers, burns, withdrawals
and allowance payments require whole units; allowance caps accept any
non-negative plain decimal. Arithmetic uses ``decimal.Decimal`` so a
cap top-up of "5000" + "2000" is exactly "7000".
"""

from __future__ import annotations

import re
from decimal import Decimal, Inexact, InvalidOperation, localcontext

from xapay.errors import InvalidInput

_INTEGER_RE = re.compile(r"[0-9]+")
_DECIMAL_RE = re.compile(r"[0-9]+(\.[0-9]+)?")


def _require_str(value: object, name: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise InvalidInput(f"{name} must be a string or int, got: {value!r}")
    return str(value)


def parse_token_amount(value: str | int, name: str = "amount") -> str:
    """Validate a whole-unit token amount.

    Returns:
        Canonical decimal string without leading zeros ("007" -> "7").

    Raises:
        InvalidInput: On fractions ("100.5"), signs, exponents, or
            non-numeric input. Never truncates.
    """
    text = _require_str(value, name)
    if not _INTEGER_RE.fullmatch(text):
        raise InvalidInput(f"{name} must be a whole number, got: {value!r}")
    return text.lstrip("0") or "0"


def parse_cap_amount(value: str | int, name: str = "cap_amount") -> Decimal:
    """Validate a non-negative plain decimal amount and return it exactly."""
    text = _require_str(value, name)
    if not _DECIMAL_RE.fullmatch(text):
        raise InvalidInput(
            f"{name} must be a non-negative decimal, got: {value!r}"
        )
    try:
        return Decimal(text)
    except InvalidOperation:
        raise InvalidInput(f"{name} is not a decimal: {value!r}") from None


def format_amount(value: Decimal) -> str:
    """Render a Decimal without exponent or trailing fractional zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def add_amounts(current: str | int, top_up: str | int) -> str:
    """Exact decimal sum of two amounts, as a string.

    >>> add_amounts("5000", "2000")
    '7000'
    """
    left = parse_cap_amount(current, "current")
    right = parse_cap_amount(top_up, "top_up")
    # Digits from the highest place (plus a carry) down to the lowest.
    top = max(left.adjusted(), right.adjusted()) + 1
    bottom = min(left.as_tuple().exponent, right.as_tuple().exponent)
    with localcontext() as ctx:
        ctx.prec = top - int(bottom) + 1
        ctx.traps[Inexact] = True
        try:
            total = left + right
        except Inexact:
            raise InvalidInput(
                f"sum of {current!r} and {top_up!r} is not exact"
            ) from None
    return format_amount(total)
